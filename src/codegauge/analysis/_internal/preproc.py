"""C/C++ preprocessing results.

Macro names declared with ``#define`` are function-like in use (``MAX(a, b)``,
``LOG(...)``), so identifiers naming a known macro count as Halstead
operators instead of operands. Include paths are collected for callers
that resolve macros across headers and pass the merged result back in.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from codegauge.analysis._internal.parsing.treesitter import get_parser
from codegauge.core.languages import Language

_DEFINES = ("preproc_def", "preproc_function_def")


@dataclass(frozen=True, slots=True)
class PreprocResults:
    macros: frozenset[str] = frozenset()
    includes: tuple[str, ...] = ()

    def merge(self, other: PreprocResults) -> PreprocResults:
        includes = self.includes + tuple(i for i in other.includes if i not in self.includes)
        return PreprocResults(macros=self.macros | other.macros, includes=includes)

    @classmethod
    def merge_all(cls, results: Iterable[PreprocResults]) -> PreprocResults:
        merged = cls()
        for result in results:
            merged = merged.merge(result)
        return merged


def collect_preproc(source: str | bytes) -> PreprocResults:
    """Collect ``#define`` names and ``#include`` paths from a C/C++ source."""
    content = source.encode("utf-8") if isinstance(source, str) else source
    parsed = get_parser().parse(content, Language.CPP)

    macros: set[str] = set()
    includes: list[str] = []
    stack = [parsed.root_node]
    while stack:
        node = stack.pop()
        if node.type in _DEFINES:
            name = node.child_by_field_name("name")
            if name is not None:
                macros.add(content[name.start_byte : name.end_byte].decode("utf-8", "replace"))
        elif node.type == "preproc_include":
            path = node.child_by_field_name("path")
            if path is not None:
                text = content[path.start_byte : path.end_byte].decode("utf-8", "replace")
                includes.append(text.strip().strip('"<>'))
            continue
        stack.extend(reversed(node.children))
    return PreprocResults(macros=frozenset(macros), includes=tuple(includes))
