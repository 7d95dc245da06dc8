"""Tree-sitter parsing boundary.

The only module that talks to the external parsing library. Grammar
objects are loaded through ``importlib`` from each language's grammar
distribution and cached process-wide; parsers are cheap and created per
call, so concurrent analyses never share one.
"""

from __future__ import annotations

import importlib
import threading
from dataclasses import dataclass
from typing import Any

import structlog
import tree_sitter

from codegauge.core.errors import GrammarUnavailableError
from codegauge.core.languages import Language

log = structlog.get_logger(__name__)


@dataclass
class ParseResult:
    """Result of parsing one source buffer."""

    tree: Any
    language: Language
    error_count: int
    total_nodes: int
    root_node: Any


class TreeSitterParser:
    """Parses source buffers with cached tree-sitter grammars."""

    def __init__(self) -> None:
        self._languages: dict[Language, Any] = {}
        self._lock = threading.Lock()

    def _get_language(self, language: Language) -> Any:
        """Get or load a tree-sitter language.

        Raises:
            GrammarUnavailableError: If the grammar distribution is not installed.
        """
        cached = self._languages.get(language)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._languages.get(language)
            if cached is not None:
                return cached
            definition = language.definition
            try:
                mod = importlib.import_module(definition.grammar_module)
                lang_fn = getattr(mod, definition.language_func)
                ts_lang = tree_sitter.Language(lang_fn())
            except (ImportError, AttributeError) as err:
                raise GrammarUnavailableError.missing_package(
                    language.value, definition.grammar_package
                ) from err
            self._languages[language] = ts_lang
            log.debug(
                "parser.grammar_loaded",
                language=language.value,
                module=definition.grammar_module,
            )
            return ts_lang

    def parse(self, content: bytes, language: Language) -> ParseResult:
        """Parse a source buffer.

        Args:
            content: Source bytes (UTF-8)
            language: Language of the buffer

        Returns:
            ParseResult with the tree and error/node counts.
        """
        parser = tree_sitter.Parser(self._get_language(language))
        tree = parser.parse(content)

        # Count errors and total nodes
        error_count = 0
        total_nodes = 0
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            total_nodes += 1
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            stack.extend(node.children)

        return ParseResult(
            tree=tree,
            language=language,
            error_count=error_count,
            total_nodes=total_nodes,
            root_node=tree.root_node,
        )


_parser = TreeSitterParser()


def get_parser() -> TreeSitterParser:
    """The process-wide parser (grammar cache holder)."""
    return _parser
