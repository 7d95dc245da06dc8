"""High-level analysis operations.

Each call analyzes one source unit independently: it owns its node
views, frames and collectors, and shares only the process-wide
classification tables and grammar cache. Many units may therefore be
analyzed on parallel threads (``analyze_paths``).

Pipeline: bytes → parser → node view → space builder → aggregator.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import structlog

from codegauge.analysis._internal.aggregate import build_spaces
from codegauge.analysis._internal.builder import SpaceBuilder
from codegauge.analysis._internal.parsing.registry import get_registry
from codegauge.analysis._internal.parsing.treesitter import get_parser
from codegauge.analysis._internal.preproc import PreprocResults
from codegauge.analysis.models import AnalysisResult
from codegauge.config.models import AnalysisConfig
from codegauge.core.errors import SourceReadError
from codegauge.core.languages import Language, detect_language
from codegauge.core.logging import in_current_context, unit_context

log = structlog.get_logger(__name__)


def analyze_source(
    source: str | bytes,
    language: Language | str,
    *,
    path: str | None = None,
    preproc: PreprocResults | None = None,
) -> AnalysisResult:
    """Analyze one source unit.

    Args:
        source: Source text or UTF-8 bytes
        language: Language identifier or alias
        path: Used only for diagnostics and as the root space name
        preproc: Macro/include results for C/C++ (ignored by other languages)

    Returns:
        AnalysisResult whose ``root`` is None when the source is empty or
        whitespace-only.

    Raises:
        UnsupportedLanguageError: If the language is unknown.
        GrammarUnavailableError: If the grammar distribution is not installed.
    """
    if not isinstance(language, Language):
        language = Language.from_name(language)
    content = source.encode("utf-8") if isinstance(source, str) else source

    with unit_context(path, language.value):
        table = get_registry().table(language)
        if not content.strip():
            return AnalysisResult(language=language, root=None, path=path)

        parsed = get_parser().parse(content, language)
        builder = SpaceBuilder(table, content, name=path, preproc=preproc)
        root = build_spaces(builder.build(parsed.root_node))

        if parsed.error_count:
            log.warning(
                "analysis.error_nodes",
                error_nodes=parsed.error_count,
                skipped_subtrees=builder.skipped_errors,
                total_nodes=parsed.total_nodes,
            )

    return AnalysisResult(
        language=language,
        root=root,
        path=path,
        error_count=parsed.error_count,
        total_nodes=parsed.total_nodes,
    )


def analyze_file(
    path: str | Path,
    *,
    language: Language | str | None = None,
    preproc: PreprocResults | None = None,
) -> AnalysisResult:
    """Analyze a file, detecting its language from the extension when omitted.

    Raises:
        UnsupportedLanguageError: If the language cannot be determined.
        SourceReadError: If the file cannot be read.
    """
    file_path = Path(path)
    if language is None:
        language = Language.from_path(file_path)
    try:
        content = file_path.read_bytes()
    except OSError as err:
        raise SourceReadError.from_os_error(str(file_path), err) from err
    return analyze_source(content, language, path=str(file_path), preproc=preproc)


def iter_source_files(
    paths: Iterable[str | Path],
    config: AnalysisConfig | None = None,
    *,
    language: Language | None = None,
) -> Iterator[tuple[Path, Language]]:
    """Expand files and directories into analyzable (path, language) pairs.

    A forced ``language`` applies to explicitly named files whatever their
    extension, and narrows directory searches to that language.
    Unsupported, filtered-out and oversized files are skipped with a debug log.
    """
    config = config or AnalysisConfig()
    if language is not None:
        allowed: set[Language] | None = {language}
    else:
        allowed = set(config.languages) if config.languages else None
    max_bytes = config.max_file_size_mb * 1024 * 1024

    for entry in paths:
        root = Path(entry)
        explicit = not root.is_dir()
        candidates = [root] if explicit else sorted(p for p in root.rglob("*") if p.is_file())
        for candidate in candidates:
            detected = language if explicit and language is not None else detect_language(candidate)
            if detected is None:
                log.debug("analysis.skipped", path=str(candidate), reason="unsupported")
                continue
            if allowed is not None and detected not in allowed:
                log.debug("analysis.skipped", path=str(candidate), reason="language_filtered")
                continue
            try:
                size = candidate.stat().st_size
            except OSError as err:
                raise SourceReadError.from_os_error(str(candidate), err) from err
            if size > max_bytes:
                log.debug("analysis.skipped", path=str(candidate), reason="too_large", size=size)
                continue
            yield candidate, detected


def analyze_paths(
    paths: Iterable[str | Path],
    *,
    max_workers: int | None = None,
    config: AnalysisConfig | None = None,
    language: Language | None = None,
) -> list[AnalysisResult]:
    """Analyze files and directory trees on a thread pool.

    Results keep the order in which files were discovered. ``language``
    is forwarded to ``iter_source_files``.
    """
    config = config or AnalysisConfig()
    workers = max_workers or config.max_workers
    units = list(iter_source_files(paths, config, language=language))
    if not units:
        return []

    task = in_current_context(analyze_file)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="codegauge-analysis") as pool:
        futures = [
            pool.submit(task, unit_path, language=unit_language)
            for unit_path, unit_language in units
        ]
        results = [future.result() for future in futures]

    log.debug("analysis.completed", units=len(results), workers=workers)
    return results


__all__ = [
    "analyze_file",
    "analyze_paths",
    "analyze_source",
    "iter_source_files",
]
