"""Unified LanguagePack: single source of truth for node classification.

Every language that CodeGauge supports has exactly ONE LanguagePack that
consolidates the grammar-specific knowledge the engine needs:
- Named node kinds → Category flags (scopes, control flow, statements, ABC)
- Anonymous token kinds → Category flags (logical operators, delimiters)
- Composite operand kinds (string literals counted as one Halstead operand)
- Parameter list conventions for NARGS
- Declared-name lookup and member visibility rules

Nothing outside this module knows a grammar's node kinds. The PACKS
registry is the canonical lookup: ``PACKS[Language.PYTHON]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from codegauge.core.categories import Category as C
from codegauge.core.languages import Language

# =========================================================================
# Dataclasses
# =========================================================================


@dataclass(frozen=True)
class VisibilityRule:
    """How a language marks members public or private.

    Styles:
        none: every member is public
        modifiers: public/private keywords among the declaration's modifier children
        access_specifier: ``public:`` / ``private:`` sections inside the class body
        underscore: a leading ``_`` (not a dunder) marks a private name
        hash: a ``#name`` marks a private name
        capitalized: an upper-case initial marks an exported name
    """

    style: str = "none"
    modifier_kinds: frozenset[str] = frozenset()
    public_keywords: frozenset[str] = frozenset({"public", "pub"})
    private_keywords: frozenset[str] = frozenset({"private", "protected"})
    default_public: bool = True
    public_containers: frozenset[str] = frozenset()
    private_name_kinds: frozenset[str] = frozenset({"private_property_identifier"})


@dataclass(frozen=True)
class LanguagePack:
    """Complete classification data for a single language."""

    language: Language
    kinds: dict[str, C]
    tokens: dict[str, C]
    composite_operands: frozenset[str] = frozenset()

    # -- NARGS --
    non_parameters: frozenset[str] = frozenset()
    multi_name_parameters: frozenset[str] = frozenset()

    # -- Scope naming --
    name_fields: dict[str, str] = field(default_factory=dict)
    requires_body: frozenset[str] = frozenset()

    # -- Conditional flags --
    comparison_parents: frozenset[str] = frozenset({"binary_expression"})
    valued_assignments: frozenset[str] = frozenset()
    valued_exits: frozenset[str] = frozenset()
    default_labels: frozenset[str] = frozenset()
    wildcard_arms: frozenset[str] = frozenset()
    default_parents: frozenset[str] = frozenset()
    method_declarators: frozenset[str] = frozenset()
    else_containers: frozenset[str] = frozenset({"else_clause"})

    visibility: VisibilityRule = field(default_factory=VisibilityRule)


# =========================================================================
# Shared building blocks
# =========================================================================

_IF = C.BRANCH | C.DECISION | C.NESTING | C.STATEMENT
_LOOP = C.LOOP | C.DECISION | C.NESTING | C.STATEMENT
_SWITCH = C.NESTING | C.STATEMENT
_CATCH = C.DECISION | C.NESTING
_TERNARY = C.DECISION | C.NESTING
_EXIT = C.EXIT | C.STATEMENT
_LOGICAL = C.LOGICAL | C.DECISION

_COMPARISONS: dict[str, C] = {
    "==": C.CONDITION,
    "!=": C.CONDITION,
    "<": C.CONDITION,
    ">": C.CONDITION,
    "<=": C.CONDITION,
    ">=": C.CONDITION,
}

COMPARISON_TOKENS = frozenset(
    {"==", "!=", "<", ">", "<=", ">=", "===", "!==", "<=>", "<>", "is", "in", "not in", "is not"}
)

_DELIMITERS: dict[str, C] = {
    ")": C.DELIMITER,
    "]": C.DELIMITER,
    "}": C.DELIMITER,
    ",": C.DELIMITER,
    ";": C.TERMINATOR,
}

_C_TOKENS: dict[str, C] = {
    **_DELIMITERS,
    **_COMPARISONS,
    "&&": _LOGICAL,
    "||": _LOGICAL,
    "else": C.ELSE | C.CONDITION,
    "case": C.CONDITION,
    "default": C.CONDITION,
    "try": C.CONDITION,
    "catch": C.CONDITION,
}


def _flags(*groups: tuple[C, tuple[str, ...]]) -> dict[str, C]:
    """Merge (flags, kinds) groups into one kind → flags mapping."""
    table: dict[str, C] = {}
    for flags, kinds in groups:
        for kind in kinds:
            table[kind] = table.get(kind, C.UNKNOWN) | flags
    return table


# =========================================================================
# Python
# =========================================================================

_PYTHON = LanguagePack(
    language=Language.PYTHON,
    kinds=_flags(
        (C.FUNCTION, ("function_definition",)),
        (C.CLOSURE, ("lambda",)),
        (C.CLASS, ("class_definition",)),
        (_IF, ("if_statement",)),
        (C.BRANCH | C.DECISION | C.ELSE, ("elif_clause",)),
        (_LOOP, ("for_statement", "while_statement")),
        (C.LOOP | C.DECISION, ("for_in_clause",)),
        (C.DECISION, ("if_clause", "case_clause")),
        (_CATCH, ("except_clause", "except_group_clause")),
        (_TERNARY, ("conditional_expression",)),
        (_SWITCH, ("match_statement",)),
        (_EXIT, ("return_statement", "raise_statement")),
        (
            C.STATEMENT,
            (
                "expression_statement",
                "pass_statement",
                "break_statement",
                "continue_statement",
                "assert_statement",
                "import_statement",
                "import_from_statement",
                "future_import_statement",
                "global_statement",
                "nonlocal_statement",
                "delete_statement",
                "print_statement",
                "exec_statement",
                "type_alias_statement",
                "try_statement",
                "with_statement",
            ),
        ),
        (C.ASSIGNMENT | C.ATTRIBUTE, ("assignment",)),
        (C.ASSIGNMENT, ("augmented_assignment",)),
        (C.CALL, ("call",)),
        (C.COMMENT, ("comment",)),
        (C.PARAMETER, ("parameters", "lambda_parameters")),
    ),
    tokens={
        **_DELIMITERS,
        **_COMPARISONS,
        ":": C.DELIMITER,
        "and": _LOGICAL,
        "or": _LOGICAL,
        "else": C.ELSE | C.CONDITION,
        "case": C.CONDITION,
        "try": C.CONDITION,
        "except": C.CONDITION,
        "in": C.CONDITION,
        "is": C.CONDITION,
        "not in": C.CONDITION,
        "is not": C.CONDITION,
    },
    composite_operands=frozenset({"string"}),
    non_parameters=frozenset({"keyword_separator", "positional_separator", "comment"}),
    comparison_parents=frozenset({"comparison_operator"}),
    valued_assignments=frozenset({"assignment"}),
    wildcard_arms=frozenset({"case_clause"}),
    visibility=VisibilityRule(style="underscore"),
)

# =========================================================================
# JavaScript / TypeScript / TSX
# =========================================================================

_JS_KINDS = _flags(
    (C.FUNCTION, ("function_declaration", "generator_function_declaration", "method_definition")),
    (C.CLOSURE, ("function_expression", "function", "generator_function", "arrow_function")),
    (C.CLASS, ("class_declaration", "class")),
    (_IF, ("if_statement",)),
    (_LOOP, ("for_statement", "for_in_statement", "while_statement", "do_statement")),
    (_SWITCH, ("switch_statement",)),
    (C.DECISION, ("switch_case",)),
    (_CATCH, ("catch_clause",)),
    (_TERNARY, ("ternary_expression",)),
    (_EXIT, ("return_statement", "throw_statement")),
    (
        C.STATEMENT,
        (
            "expression_statement",
            "variable_declaration",
            "lexical_declaration",
            "break_statement",
            "continue_statement",
            "try_statement",
            "labeled_statement",
            "debugger_statement",
            "import_statement",
            "with_statement",
        ),
    ),
    (
        C.ASSIGNMENT,
        (
            "assignment_expression",
            "augmented_assignment_expression",
            "update_expression",
            "variable_declarator",
        ),
    ),
    (C.CALL, ("call_expression", "new_expression")),
    (C.ATTRIBUTE, ("field_definition",)),
    (C.COMMENT, ("comment", "html_comment")),
    (C.PARAMETER, ("formal_parameters",)),
)

_JS_TOKENS: dict[str, C] = {
    **_C_TOKENS,
    "===": C.CONDITION,
    "!==": C.CONDITION,
    "??": _LOGICAL,
}

_JAVASCRIPT = LanguagePack(
    language=Language.JAVASCRIPT,
    kinds=_JS_KINDS,
    tokens=_JS_TOKENS,
    composite_operands=frozenset({"string", "template_string", "regex"}),
    non_parameters=frozenset({"comment"}),
    valued_assignments=frozenset({"variable_declarator"}),
    default_parents=frozenset({"switch_default"}),
    visibility=VisibilityRule(style="hash"),
)

_TS_KINDS = {
    **_JS_KINDS,
    **_flags(
        (C.CLASS, ("abstract_class_declaration", "interface_declaration")),
        (C.MODULE, ("internal_module", "module")),
        (C.STATEMENT, ("type_alias_declaration", "enum_declaration")),
        (C.ATTRIBUTE, ("public_field_definition", "property_signature")),
    ),
}

_TS_VISIBILITY = VisibilityRule(
    style="modifiers",
    modifier_kinds=frozenset({"accessibility_modifier"}),
    default_public=True,
)

_TYPESCRIPT = LanguagePack(
    language=Language.TYPESCRIPT,
    kinds=_TS_KINDS,
    tokens=_JS_TOKENS,
    composite_operands=frozenset({"string", "template_string", "regex"}),
    non_parameters=frozenset({"comment"}),
    valued_assignments=frozenset({"variable_declarator"}),
    default_parents=frozenset({"switch_default"}),
    visibility=_TS_VISIBILITY,
)

_TSX = LanguagePack(
    language=Language.TSX,
    kinds=_TS_KINDS,
    tokens=_JS_TOKENS,
    composite_operands=frozenset({"string", "template_string", "regex"}),
    non_parameters=frozenset({"comment"}),
    valued_assignments=frozenset({"variable_declarator"}),
    default_parents=frozenset({"switch_default"}),
    visibility=_TS_VISIBILITY,
)

# =========================================================================
# Java
# =========================================================================

_JAVA = LanguagePack(
    language=Language.JAVA,
    kinds=_flags(
        (
            C.CLASS,
            (
                "class_declaration",
                "interface_declaration",
                "enum_declaration",
                "record_declaration",
                "annotation_type_declaration",
            ),
        ),
        (
            C.FUNCTION,
            ("method_declaration", "constructor_declaration", "compact_constructor_declaration"),
        ),
        (C.CLOSURE, ("lambda_expression",)),
        (_IF, ("if_statement",)),
        (_LOOP, ("for_statement", "enhanced_for_statement", "while_statement", "do_statement")),
        (_SWITCH, ("switch_expression", "switch_statement")),
        (C.DECISION, ("switch_label",)),
        (_CATCH, ("catch_clause",)),
        (_TERNARY, ("ternary_expression",)),
        (_EXIT, ("return_statement", "throw_statement")),
        (
            C.STATEMENT,
            (
                "local_variable_declaration",
                "expression_statement",
                "break_statement",
                "continue_statement",
                "try_statement",
                "try_with_resources_statement",
                "yield_statement",
                "assert_statement",
                "synchronized_statement",
                "labeled_statement",
                "import_declaration",
                "package_declaration",
            ),
        ),
        (C.STATEMENT | C.ATTRIBUTE, ("field_declaration", "constant_declaration")),
        (C.ASSIGNMENT, ("assignment_expression", "update_expression", "variable_declarator")),
        (C.CALL, ("method_invocation", "object_creation_expression")),
        (C.COMMENT, ("line_comment", "block_comment", "comment")),
        (C.PARAMETER, ("formal_parameters", "inferred_parameters")),
    ),
    tokens=_C_TOKENS,
    composite_operands=frozenset({"string_literal", "character_literal", "text_block"}),
    non_parameters=frozenset({"line_comment", "block_comment"}),
    valued_assignments=frozenset({"variable_declarator"}),
    default_labels=frozenset({"switch_label"}),
    default_parents=frozenset({"switch_label"}),
    visibility=VisibilityRule(
        style="modifiers",
        modifier_kinds=frozenset({"modifiers"}),
        default_public=False,
        public_containers=frozenset({"interface_declaration", "annotation_type_declaration"}),
    ),
)

# =========================================================================
# Rust
# =========================================================================

_RUST = LanguagePack(
    language=Language.RUST,
    kinds=_flags(
        (C.FUNCTION, ("function_item",)),
        (C.CLOSURE, ("closure_expression",)),
        (C.CLASS, ("impl_item", "trait_item")),
        (C.MODULE, ("mod_item",)),
        (C.BRANCH | C.DECISION | C.NESTING, ("if_expression",)),
        (
            C.LOOP | C.DECISION | C.NESTING,
            ("while_expression", "loop_expression", "for_expression"),
        ),
        (C.NESTING, ("match_expression",)),
        (C.DECISION | C.CONDITION, ("match_arm",)),
        (C.EXIT, ("return_expression", "try_expression", "break_expression")),
        (
            C.STATEMENT,
            (
                "expression_statement",
                "let_declaration",
                "use_declaration",
                "const_item",
                "static_item",
            ),
        ),
        (
            C.ASSIGNMENT,
            ("assignment_expression", "compound_assignment_expr", "let_declaration"),
        ),
        (C.CALL, ("call_expression", "macro_invocation")),
        (C.COMMENT, ("line_comment", "block_comment")),
        (C.PARAMETER, ("parameters", "closure_parameters")),
    ),
    tokens=_C_TOKENS,
    composite_operands=frozenset({"string_literal", "raw_string_literal", "char_literal"}),
    non_parameters=frozenset({"attribute_item", "line_comment", "block_comment"}),
    name_fields={"impl_item": "type"},
    requires_body=frozenset({"mod_item"}),
    valued_assignments=frozenset({"let_declaration"}),
    valued_exits=frozenset({"break_expression"}),
    wildcard_arms=frozenset({"match_arm"}),
    visibility=VisibilityRule(
        style="modifiers",
        modifier_kinds=frozenset({"visibility_modifier"}),
        default_public=False,
        public_containers=frozenset({"trait_item"}),
    ),
)

# =========================================================================
# C / C++
# =========================================================================

_CPP = LanguagePack(
    language=Language.CPP,
    kinds=_flags(
        (C.FUNCTION, ("function_definition",)),
        (C.CLOSURE, ("lambda_expression",)),
        (C.CLASS, ("class_specifier", "struct_specifier", "union_specifier")),
        (C.MODULE, ("namespace_definition",)),
        (_IF, ("if_statement",)),
        (_LOOP, ("for_statement", "for_range_loop", "while_statement", "do_statement")),
        (_SWITCH, ("switch_statement",)),
        (C.DECISION, ("case_statement",)),
        (_CATCH, ("catch_clause",)),
        (_TERNARY, ("conditional_expression",)),
        (_EXIT, ("return_statement", "throw_statement", "co_return_statement")),
        (C.EXIT, ("throw_expression",)),
        (
            C.STATEMENT,
            (
                "expression_statement",
                "declaration",
                "break_statement",
                "continue_statement",
                "goto_statement",
                "try_statement",
                "labeled_statement",
            ),
        ),
        (C.STATEMENT | C.ATTRIBUTE, ("field_declaration",)),
        (C.ASSIGNMENT, ("assignment_expression", "update_expression", "init_declarator")),
        (C.CALL, ("call_expression", "new_expression")),
        (C.COMMENT, ("comment",)),
        (C.PARAMETER, ("parameter_list",)),
    ),
    tokens={**_C_TOKENS, "and": _LOGICAL, "or": _LOGICAL},
    composite_operands=frozenset(
        {"string_literal", "raw_string_literal", "char_literal", "concatenated_string"}
    ),
    non_parameters=frozenset({"comment"}),
    requires_body=frozenset({"class_specifier", "struct_specifier", "union_specifier"}),
    default_labels=frozenset({"case_statement"}),
    default_parents=frozenset({"case_statement"}),
    method_declarators=frozenset({"function_declarator"}),
    visibility=VisibilityRule(
        style="access_specifier",
        default_public=False,
        public_containers=frozenset({"struct_specifier", "union_specifier"}),
    ),
)

# =========================================================================
# C#
# =========================================================================

_CSHARP = LanguagePack(
    language=Language.CSHARP,
    kinds=_flags(
        (
            C.CLASS,
            (
                "class_declaration",
                "struct_declaration",
                "interface_declaration",
                "record_declaration",
                "record_struct_declaration",
            ),
        ),
        (C.MODULE, ("namespace_declaration", "file_scoped_namespace_declaration")),
        (
            C.FUNCTION,
            (
                "method_declaration",
                "constructor_declaration",
                "destructor_declaration",
                "operator_declaration",
                "conversion_operator_declaration",
                "local_function_statement",
            ),
        ),
        (C.CLOSURE, ("lambda_expression", "anonymous_method_expression")),
        (_IF, ("if_statement",)),
        (
            _LOOP,
            ("for_statement", "foreach_statement", "while_statement", "do_statement"),
        ),
        (_SWITCH, ("switch_statement",)),
        (C.NESTING, ("switch_expression",)),
        (C.DECISION, ("switch_section",)),
        (C.DECISION | C.CONDITION, ("switch_expression_arm",)),
        (_CATCH, ("catch_clause",)),
        (_TERNARY, ("conditional_expression",)),
        (_EXIT, ("return_statement", "throw_statement")),
        (C.EXIT, ("throw_expression",)),
        (
            C.STATEMENT,
            (
                "expression_statement",
                "local_declaration_statement",
                "break_statement",
                "continue_statement",
                "try_statement",
                "yield_statement",
                "using_statement",
                "lock_statement",
                "goto_statement",
                "using_directive",
            ),
        ),
        (
            C.STATEMENT | C.ATTRIBUTE,
            ("field_declaration", "property_declaration", "event_field_declaration"),
        ),
        (
            C.ASSIGNMENT,
            (
                "assignment_expression",
                "variable_declarator",
                "prefix_unary_expression",
                "postfix_unary_expression",
            ),
        ),
        (C.CALL, ("invocation_expression", "object_creation_expression")),
        (C.COMMENT, ("comment",)),
        (C.PARAMETER, ("parameter_list", "bracketed_parameter_list")),
    ),
    tokens={**_C_TOKENS, "??": _LOGICAL},
    composite_operands=frozenset(
        {
            "string_literal",
            "verbatim_string_literal",
            "raw_string_literal",
            "interpolated_string_expression",
            "character_literal",
        }
    ),
    non_parameters=frozenset({"comment"}),
    valued_assignments=frozenset({"variable_declarator"}),
    default_labels=frozenset({"switch_section"}),
    wildcard_arms=frozenset({"switch_expression_arm"}),
    default_parents=frozenset({"switch_section", "default_switch_label"}),
    visibility=VisibilityRule(
        style="modifiers",
        modifier_kinds=frozenset({"modifier"}),
        default_public=False,
        public_containers=frozenset({"interface_declaration"}),
    ),
)

# =========================================================================
# Go
# =========================================================================

_GO = LanguagePack(
    language=Language.GO,
    kinds=_flags(
        (C.FUNCTION, ("function_declaration", "method_declaration")),
        (C.CLOSURE, ("func_literal",)),
        (_IF, ("if_statement",)),
        (_LOOP, ("for_statement",)),
        (
            _SWITCH,
            ("expression_switch_statement", "type_switch_statement", "select_statement"),
        ),
        (C.DECISION, ("expression_case", "type_case", "communication_case")),
        (_EXIT, ("return_statement",)),
        (
            C.STATEMENT,
            (
                "expression_statement",
                "var_declaration",
                "const_declaration",
                "go_statement",
                "defer_statement",
                "break_statement",
                "continue_statement",
                "goto_statement",
                "send_statement",
                "import_declaration",
                "package_clause",
                "labeled_statement",
                "fallthrough_statement",
            ),
        ),
        (
            C.STATEMENT | C.ASSIGNMENT,
            ("short_var_declaration", "assignment_statement", "inc_statement", "dec_statement"),
        ),
        (C.ASSIGNMENT, ("var_spec",)),
        (C.CALL, ("call_expression",)),
        (C.COMMENT, ("comment",)),
        (C.PARAMETER, ("parameter_list",)),
    ),
    tokens=_C_TOKENS,
    composite_operands=frozenset(
        {"interpreted_string_literal", "raw_string_literal", "rune_literal"}
    ),
    non_parameters=frozenset({"comment"}),
    multi_name_parameters=frozenset({"parameter_declaration"}),
    valued_assignments=frozenset({"var_spec"}),
    default_parents=frozenset({"default_case"}),
    visibility=VisibilityRule(style="capitalized"),
)

# =========================================================================
# CSS / HTML (no scope openers: unit space only)
# =========================================================================

_CSS = LanguagePack(
    language=Language.CSS,
    kinds=_flags(
        (
            C.STATEMENT,
            (
                "declaration",
                "import_statement",
                "charset_statement",
                "namespace_statement",
                "media_statement",
                "keyframes_statement",
                "supports_statement",
                "at_rule",
            ),
        ),
        (C.COMMENT, ("comment", "js_comment")),
    ),
    tokens={**_DELIMITERS, ":": C.DELIMITER},
    composite_operands=frozenset({"string_value"}),
)

_HTML = LanguagePack(
    language=Language.HTML,
    kinds=_flags(
        (C.STATEMENT, ("element", "script_element", "style_element", "doctype")),
        (C.COMMENT, ("comment",)),
    ),
    tokens={"</": C.DELIMITER, ">": C.DELIMITER, "/>": C.DELIMITER, '"': C.DELIMITER},
    composite_operands=frozenset({"quoted_attribute_value", "raw_text"}),
)

# =========================================================================
# Registry of packs
# =========================================================================

PACKS: dict[Language, LanguagePack] = {
    pack.language: pack
    for pack in (
        _CPP,
        _CSHARP,
        _CSS,
        _GO,
        _HTML,
        _JAVA,
        _JAVASCRIPT,
        _PYTHON,
        _RUST,
        _TYPESCRIPT,
        _TSX,
    )
}


def get_pack(language: Language) -> LanguagePack | None:
    """Get the pack for a language, or None if no pack is defined."""
    return PACKS.get(language)
