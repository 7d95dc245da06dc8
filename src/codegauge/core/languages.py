"""Canonical language definitions.

This module defines the authoritative mapping of:
- Language identifiers (the closed set of supported grammars)
- File extensions → language
- Name aliases → language
- Tree-sitter grammar distribution for each language

Design decisions:
1. The set is closed: an unknown name or extension is an error, never a guess.
2. `.h` maps to cpp; the cpp grammar parses C headers well enough for metrics.
3. mozjs (SpiderMonkey-flavoured JavaScript) is an alias of javascript.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from codegauge.core.errors import UnsupportedLanguageError


class Language(str, Enum):
    """Supported language identifiers (registry lookup keys)."""

    CPP = "cpp"
    CSHARP = "csharp"
    CSS = "css"
    GO = "go"
    HTML = "html"
    JAVA = "java"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    RUST = "rust"
    TYPESCRIPT = "typescript"
    TSX = "tsx"

    @property
    def definition(self) -> LanguageDefinition:
        return DEFINITIONS[self]

    @classmethod
    def from_name(cls, name: str) -> Language:
        """Resolve a language name or alias (case-insensitive).

        Raises:
            UnsupportedLanguageError: If the name is not a known language.
        """
        key = name.strip().lower()
        try:
            return cls(key)
        except ValueError:
            pass
        resolved = ALIASES.get(key)
        if resolved is None:
            raise UnsupportedLanguageError.for_name(name)
        return resolved

    @classmethod
    def from_path(cls, path: str | Path) -> Language:
        """Detect the language of a file from its extension.

        Raises:
            UnsupportedLanguageError: If no language claims the extension.
        """
        language = detect_language(path)
        if language is None:
            raise UnsupportedLanguageError.for_path(str(path))
        return language


@dataclass(frozen=True, slots=True)
class LanguageDefinition:
    """Canonical definition for a language.

    Attributes:
        language: Language identifier
        extensions: File extensions including dot (lowercase)
        grammar_package: PyPI distribution providing the grammar
        grammar_module: Importable module of the grammar
        language_func: Function in the grammar module returning the language
            pointer (``language`` for most grammars)
    """

    language: Language
    extensions: frozenset[str]
    grammar_package: str
    grammar_module: str
    language_func: str = "language"
    aliases: tuple[str, ...] = field(default_factory=tuple)


ALL_LANGUAGES: tuple[LanguageDefinition, ...] = (
    LanguageDefinition(
        language=Language.CPP,
        extensions=frozenset(
            {".c", ".h", ".cc", ".cpp", ".cxx", ".hh", ".hpp", ".hxx", ".inl", ".mm"}
        ),
        grammar_package="tree-sitter-cpp",
        grammar_module="tree_sitter_cpp",
        aliases=("c", "c++", "cc", "mozcpp"),
    ),
    LanguageDefinition(
        language=Language.CSHARP,
        extensions=frozenset({".cs"}),
        grammar_package="tree-sitter-c-sharp",
        grammar_module="tree_sitter_c_sharp",
        aliases=("c#", "cs", "c_sharp"),
    ),
    LanguageDefinition(
        language=Language.CSS,
        extensions=frozenset({".css"}),
        grammar_package="tree-sitter-css",
        grammar_module="tree_sitter_css",
    ),
    LanguageDefinition(
        language=Language.GO,
        extensions=frozenset({".go"}),
        grammar_package="tree-sitter-go",
        grammar_module="tree_sitter_go",
        aliases=("golang",),
    ),
    LanguageDefinition(
        language=Language.HTML,
        extensions=frozenset({".html", ".htm"}),
        grammar_package="tree-sitter-html",
        grammar_module="tree_sitter_html",
    ),
    LanguageDefinition(
        language=Language.JAVA,
        extensions=frozenset({".java"}),
        grammar_package="tree-sitter-java",
        grammar_module="tree_sitter_java",
    ),
    LanguageDefinition(
        language=Language.JAVASCRIPT,
        extensions=frozenset({".js", ".mjs", ".cjs", ".jsx", ".jsm"}),
        grammar_package="tree-sitter-javascript",
        grammar_module="tree_sitter_javascript",
        aliases=("js", "jsx", "mozjs", "ecmascript"),
    ),
    LanguageDefinition(
        language=Language.PYTHON,
        extensions=frozenset({".py", ".pyw", ".pyi"}),
        grammar_package="tree-sitter-python",
        grammar_module="tree_sitter_python",
        aliases=("py", "python3"),
    ),
    LanguageDefinition(
        language=Language.RUST,
        extensions=frozenset({".rs"}),
        grammar_package="tree-sitter-rust",
        grammar_module="tree_sitter_rust",
        aliases=("rs",),
    ),
    LanguageDefinition(
        language=Language.TYPESCRIPT,
        extensions=frozenset({".ts", ".mts", ".cts"}),
        grammar_package="tree-sitter-typescript",
        grammar_module="tree_sitter_typescript",
        language_func="language_typescript",
        aliases=("ts",),
    ),
    LanguageDefinition(
        language=Language.TSX,
        extensions=frozenset({".tsx"}),
        grammar_package="tree-sitter-typescript",
        grammar_module="tree_sitter_typescript",
        language_func="language_tsx",
    ),
)

DEFINITIONS: dict[Language, LanguageDefinition] = {d.language: d for d in ALL_LANGUAGES}

EXTENSION_TO_LANGUAGE: dict[str, Language] = {
    ext: d.language for d in ALL_LANGUAGES for ext in d.extensions
}

ALIASES: dict[str, Language] = {alias: d.language for d in ALL_LANGUAGES for alias in d.aliases}


def detect_language(path: str | Path) -> Language | None:
    """Return the language for a file path, or None if unsupported."""
    return EXTENSION_TO_LANGUAGE.get(Path(path).suffix.lower())


def supported_languages() -> list[Language]:
    """All supported languages, sorted by identifier."""
    return sorted(Language, key=lambda lang: lang.value)
