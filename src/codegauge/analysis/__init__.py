"""Metric extraction engine: space trees annotated with metrics."""

from codegauge.analysis._internal.parsing.registry import (
    ClassificationTable,
    LanguageRegistry,
    get_registry,
)
from codegauge.analysis._internal.preproc import PreprocResults, collect_preproc
from codegauge.analysis.models import AnalysisResult, MetricsBundle, Space, SpaceKind
from codegauge.analysis.ops import (
    analyze_file,
    analyze_paths,
    analyze_source,
    iter_source_files,
)

__all__ = [
    "AnalysisResult",
    "ClassificationTable",
    "LanguageRegistry",
    "MetricsBundle",
    "PreprocResults",
    "Space",
    "SpaceKind",
    "analyze_file",
    "analyze_paths",
    "analyze_source",
    "collect_preproc",
    "get_registry",
    "iter_source_files",
]
