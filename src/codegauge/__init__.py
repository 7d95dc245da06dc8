"""CodeGauge: language-agnostic code metrics over tree-sitter grammars.

Quick start::

    from codegauge import analyze_file

    result = analyze_file("app.py")
    result.root.metrics.cyclomatic.sum
"""

from codegauge.analysis import (
    AnalysisResult,
    MetricsBundle,
    PreprocResults,
    Space,
    SpaceKind,
    analyze_file,
    analyze_paths,
    analyze_source,
    collect_preproc,
    get_registry,
)
from codegauge.core.errors import (
    CodeGaugeError,
    GrammarUnavailableError,
    UnsupportedLanguageError,
)
from codegauge.core.languages import Language, supported_languages
from codegauge.enrichment import SpaceConsumer, iter_spaces, publish, space_to_dict

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "CodeGaugeError",
    "GrammarUnavailableError",
    "Language",
    "MetricsBundle",
    "PreprocResults",
    "Space",
    "SpaceConsumer",
    "SpaceKind",
    "UnsupportedLanguageError",
    "analyze_file",
    "analyze_paths",
    "analyze_source",
    "collect_preproc",
    "get_registry",
    "iter_spaces",
    "publish",
    "space_to_dict",
    "supported_languages",
]
