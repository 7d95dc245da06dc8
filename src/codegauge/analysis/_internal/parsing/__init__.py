"""Parser boundary and per-language classification tables."""

from codegauge.analysis._internal.parsing.packs import PACKS, LanguagePack, get_pack
from codegauge.analysis._internal.parsing.registry import (
    ClassificationTable,
    LanguageRegistry,
    get_registry,
)
from codegauge.analysis._internal.parsing.treesitter import (
    ParseResult,
    TreeSitterParser,
    get_parser,
)

__all__ = [
    "PACKS",
    "ClassificationTable",
    "LanguagePack",
    "LanguageRegistry",
    "ParseResult",
    "TreeSitterParser",
    "get_pack",
    "get_parser",
    "get_registry",
]
