"""Language Registry: one classification table per language, built once.

Tables are immutable after construction and shared by every analysis.
First use of a language builds its table under a lock (double-checked),
so concurrent first lookups observe exactly one table.
"""

from __future__ import annotations

import threading

import structlog

from codegauge.analysis._internal.nodes import NodeView
from codegauge.analysis._internal.parsing.packs import (
    COMPARISON_TOKENS,
    LanguagePack,
    get_pack,
)
from codegauge.core.categories import NOT_HALSTEAD, SCOPE, Category
from codegauge.core.errors import UnsupportedLanguageError
from codegauge.core.languages import Language

log = structlog.get_logger(__name__)

ANONYMOUS = "<anonymous>"

_NAME_FIELDS = ("name", "property", "left")


class ClassificationTable:
    """Maps one grammar's nodes onto ``Category`` flags.

    Pack data gives the base flags; the table then applies the generic
    Halstead rule and the few context-dependent adjustments (else-if
    chains, comparisons outside comparison expressions, declarators
    without a value, and so on) that need a node's neighbours.
    """

    def __init__(self, pack: LanguagePack) -> None:
        self._pack = pack
        self._kinds = dict(pack.kinds)
        self._tokens = dict(pack.tokens)

    @property
    def language(self) -> Language:
        return self._pack.language

    @property
    def pack(self) -> LanguagePack:
        return self._pack

    def flags(self, node: NodeView) -> Category:
        """Base flags from the table data alone."""
        if node.is_named:
            return self._kinds.get(node.kind, Category.UNKNOWN)
        return self._tokens.get(node.kind, Category.UNKNOWN)

    def is_composite_operand(self, node: NodeView) -> bool:
        return node.is_named and node.kind in self._pack.composite_operands

    # -- classification -------------------------------------------------

    def classify(self, node: NodeView, macros: frozenset[str] = frozenset()) -> Category:
        """Full category of a node, including Halstead and context rules."""
        if node.is_error:
            return Category.UNKNOWN

        category = self.flags(node)
        if category & Category.COMMENT:
            return Category.COMMENT

        category = self._halstead(node, category, macros)

        if category & SCOPE and node.kind in self._pack.requires_body:
            if node.field("body") is None:
                category &= ~SCOPE
        if category & Category.BRANCH and category & Category.NESTING and self._is_else_if(node):
            category = (category & ~Category.NESTING) | Category.ELSE
        if category & Category.ELSE and not node.is_named and not self._else_counts(node):
            category &= ~Category.ELSE
        if category & Category.CONDITION and node.kind in COMPARISON_TOKENS:
            parent = node.parent
            if parent is None or parent.kind not in self._pack.comparison_parents:
                category &= ~Category.CONDITION
        if category & Category.CONDITION and node.kind == "default" and not node.is_named:
            parent = node.parent
            if parent is None or parent.kind not in self._pack.default_parents:
                category &= ~Category.CONDITION
        if category & Category.DECISION and node.kind in self._pack.default_labels:
            if self._is_default_label(node):
                category &= ~Category.DECISION
        if category & Category.DECISION and node.kind in self._pack.wildcard_arms:
            if self._is_wildcard_arm(node):
                category &= ~Category.DECISION
        if category & Category.ASSIGNMENT and node.kind in self._pack.valued_assignments:
            if not self._has_value(node):
                category &= ~Category.ASSIGNMENT
        if category & Category.EXIT and node.kind in self._pack.valued_exits:
            if not any(child.kind != "label" for child in node.named_children):
                category &= ~Category.EXIT
        if category & Category.ATTRIBUTE and self._pack.method_declarators:
            declarator = node.field("declarator")
            if declarator is not None and declarator.kind in self._pack.method_declarators:
                category &= ~Category.ATTRIBUTE
        return category

    def _halstead(self, node: NodeView, category: Category, macros: frozenset[str]) -> Category:
        if self.is_composite_operand(node):
            return category | Category.OPERAND
        if not node.is_leaf:
            return category
        if node.is_named:
            if macros and self.language is Language.CPP and node.text in macros:
                return category | Category.OPERATOR
            return category | Category.OPERAND
        if category & NOT_HALSTEAD or node.start_byte == node.end_byte:
            return category
        return category | Category.OPERATOR

    def _is_if(self, node: NodeView | None) -> bool:
        return node is not None and node.is_named and bool(self.flags(node) & Category.BRANCH)

    def _is_else_if(self, node: NodeView) -> bool:
        parent = node.parent
        if parent is not None and parent.kind in self._pack.else_containers:
            return True
        prev = node.prev_sibling
        return prev is not None and not prev.is_named and prev.kind == "else"

    def _else_counts(self, token: NodeView) -> bool:
        """An ``else`` counts when it governs an if and does not open an else-if."""
        parent = token.parent
        if parent is None:
            return False
        governor = parent
        if parent.kind in self._pack.else_containers:
            governor = parent.parent
        if not self._is_if(governor):
            return False
        following = token.next_sibling
        while following is not None and self.flags(following) & Category.COMMENT:
            following = following.next_sibling
        return not self._is_if(following)

    @staticmethod
    def _is_default_label(node: NodeView) -> bool:
        children = node.children
        return bool(children) and children[0].kind in ("default", "default_switch_label")

    @staticmethod
    def _is_wildcard_arm(node: NodeView) -> bool:
        """A match arm whose pattern is exactly `_`, with no guard inside it."""
        pattern = node.field("pattern")
        if pattern is None:
            named = node.named_children
            pattern = named[0] if named else None
        return pattern is not None and pattern.text.strip() == "_"

    @staticmethod
    def _has_value(node: NodeView) -> bool:
        return any(
            (not child.is_named and child.kind == "=") or child.kind == "equals_value_clause"
            for child in node.children
        )

    # -- cognitive helpers ------------------------------------------------

    def starts_sequence(self, token: NodeView) -> bool:
        """Whether a logical operator token opens a new operator sequence.

        ``a && b && c`` is one sequence; ``a && b || c`` is two.
        """
        parent = token.parent
        if parent is None:
            return True
        left = parent.field("left")
        if left is None:
            named = parent.named_children
            left = named[0] if named else None
        if left is None or left.kind != parent.kind:
            return True
        return not any(
            not child.is_named and child.kind == token.kind for child in left.children
        )

    # -- declarations -----------------------------------------------------

    def space_name(self, node: NodeView, category: Category) -> str:
        """Declared name of a scope opener, or ``<anonymous>``."""
        if category & Category.CLOSURE:
            target = node.field("name")
        else:
            target = node.field(self._pack.name_fields.get(node.kind, "name"))
            if target is None:
                target = self._declarator_name(node)
        if target is None:
            return ANONYMOUS
        name = " ".join(target.text.split())
        return name or ANONYMOUS

    @staticmethod
    def _declarator_name(node: NodeView) -> NodeView | None:
        current = node.field("declarator")
        while current is not None:
            inner = current.field("declarator")
            if inner is None and current.kind == "reference_declarator":
                named = current.named_children
                inner = named[-1] if named else None
            if inner is None:
                return current
            current = inner
        return None

    def arity(self, node: NodeView) -> int:
        """Number of declared parameters of a function or closure."""
        params = node.field("parameters") or node.field("parameter")
        declarator = node.field("declarator")
        while params is None and declarator is not None:
            params = declarator.field("parameters")
            declarator = declarator.field("declarator")
        if params is None:
            return 0
        if not self.flags(params) & Category.PARAMETER:
            # Bare single parameter: `x => x`, `x -> x`
            return 1
        count = 0
        for child in params.named_children:
            if child.kind in self._pack.non_parameters:
                continue
            if child.kind in self._pack.multi_name_parameters:
                count += max(1, len(child.fields("name")))
                continue
            # C `f(void)` declares no parameters
            if child.text.strip() == "void":
                continue
            count += 1
        return count

    # -- visibility -------------------------------------------------------

    def default_access(self, container: NodeView) -> bool:
        """Initial public state of a class body for ``access_specifier`` rules."""
        rule = self._pack.visibility
        return rule.default_public or container.kind in rule.public_containers

    def access_change(self, node: NodeView) -> bool | None:
        """New public state if the node is an access section label."""
        if self._pack.visibility.style != "access_specifier" or node.kind != "access_specifier":
            return None
        return node.text.strip() == "public"

    def is_public(self, node: NodeView, container: NodeView, access: bool | None = None) -> bool:
        """Visibility of a member declared directly in ``container``."""
        rule = self._pack.visibility
        style = rule.style
        if style == "none":
            return True
        if style == "access_specifier":
            return self.default_access(container) if access is None else access

        name = self._member_name(node)
        if style == "underscore":
            text = name.text if name is not None else ""
            dunder = text.startswith("__") and text.endswith("__")
            return not (text.startswith("_") and not dunder)
        if style == "capitalized":
            text = name.text if name is not None else ""
            return text[:1].isupper()
        if name is not None and name.kind in rule.private_name_kinds:
            return False
        if style == "hash":
            return True

        words: set[str] = set()
        for child in node.children:
            if child.kind in rule.modifier_kinds:
                words.add(child.text.strip())
                words.update(grandchild.text.strip() for grandchild in child.children)
        if any(word.startswith(keyword) for word in words for keyword in rule.public_keywords):
            return True
        if words & rule.private_keywords:
            return False
        return rule.default_public or container.kind in rule.public_containers

    @staticmethod
    def _member_name(node: NodeView) -> NodeView | None:
        for field_name in _NAME_FIELDS:
            found = node.field(field_name)
            if found is not None:
                return found
        # Java/C# fields keep the name inside a variable declarator
        for child in node.named_children:
            if child.kind in ("variable_declarator", "variable_declaration"):
                return ClassificationTable._member_name(child)
        return None


class LanguageRegistry:
    """Lazily built, process-wide map of language → classification table."""

    def __init__(self) -> None:
        self._tables: dict[Language, ClassificationTable] = {}
        self._lock = threading.Lock()

    def table(self, language: Language | str) -> ClassificationTable:
        """Classification table for a language (built on first use).

        Raises:
            UnsupportedLanguageError: If the language has no table.
        """
        if not isinstance(language, Language):
            language = Language.from_name(language)
        table = self._tables.get(language)
        if table is not None:
            return table
        with self._lock:
            table = self._tables.get(language)
            if table is None:
                pack = get_pack(language)
                if pack is None:
                    raise UnsupportedLanguageError.for_name(language.value)
                table = ClassificationTable(pack)
                self._tables[language] = table
                log.debug(
                    "registry.table_built",
                    language=language.value,
                    kinds=len(pack.kinds),
                    tokens=len(pack.tokens),
                )
        return table

    def loaded(self) -> list[Language]:
        """Languages whose tables have been built so far."""
        return sorted(self._tables, key=lambda lang: lang.value)


_registry = LanguageRegistry()


def get_registry() -> LanguageRegistry:
    """The process-wide default registry."""
    return _registry
