"""Tests for file and path level analysis operations."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import structlog

from codegauge.analysis import analyze_file, analyze_paths, iter_source_files
from codegauge.config.models import AnalysisConfig, LoggingConfig, LogOutputConfig
from codegauge.core.errors import SourceReadError, UnsupportedLanguageError
from codegauge.core.languages import Language
from codegauge.core.logging import clear_request_id, configure_logging, set_request_id


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Small mixed-language tree."""
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "app.py").write_text("def run(x):\n    return x\n")
    (tmp_path / "pkg" / "util.js").write_text("function helper(a, b) { return a || b; }\n")
    (tmp_path / "pkg" / "empty.rs").write_text("")
    (tmp_path / "README.txt").write_text("not code\n")
    return tmp_path


class TestAnalyzeFile:
    def test_given_python_file_when_analyzed_then_language_detected(self, project: Path) -> None:
        # When
        result = analyze_file(project / "pkg" / "app.py")

        # Then
        assert result.language is Language.PYTHON
        assert result.path == str(project / "pkg" / "app.py")
        assert result.root is not None
        assert result.root.spaces[0].name == "run"

    def test_given_explicit_language_when_analyzed_then_extension_ignored(
        self, project: Path
    ) -> None:
        result = analyze_file(project / "README.txt", language="python")
        assert result.language is Language.PYTHON
        assert result.root is not None

    def test_given_unknown_extension_when_analyzed_then_unsupported(self, project: Path) -> None:
        with pytest.raises(UnsupportedLanguageError):
            analyze_file(project / "README.txt")

    def test_given_missing_file_when_analyzed_then_source_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError) as exc_info:
            analyze_file(tmp_path / "gone.py")
        assert exc_info.value.retryable is True

    def test_given_empty_file_when_analyzed_then_absent(self, project: Path) -> None:
        result = analyze_file(project / "pkg" / "empty.rs")
        assert result.is_absent


class TestIterSourceFiles:
    def test_given_directory_when_expanded_then_sorted_supported_files(
        self, project: Path
    ) -> None:
        # When
        units = list(iter_source_files([project]))

        # Then
        assert [(path.name, language) for path, language in units] == [
            ("app.py", Language.PYTHON),
            ("empty.rs", Language.RUST),
            ("util.js", Language.JAVASCRIPT),
        ]

    def test_given_language_filter_when_expanded_then_only_allowed(self, project: Path) -> None:
        # Given
        config = AnalysisConfig(languages=[Language.JAVASCRIPT])

        # When
        units = list(iter_source_files([project], config))

        # Then
        assert [path.name for path, _ in units] == ["util.js"]

    def test_given_forced_language_when_expanded_then_files_take_it_and_dirs_narrow(
        self, project: Path
    ) -> None:
        # When
        units = list(
            iter_source_files([project / "README.txt", project], language=Language.JAVASCRIPT)
        )

        # Then
        assert [(path.name, language) for path, language in units] == [
            ("README.txt", Language.JAVASCRIPT),
            ("util.js", Language.JAVASCRIPT),
        ]

    def test_given_forced_language_when_file_too_large_then_skipped(self, tmp_path: Path) -> None:
        # Given
        big = tmp_path / "generated.dat"
        big.write_bytes(b"x = 1\n" * 200_000)
        config = AnalysisConfig(max_file_size_mb=1)

        # When
        units = list(iter_source_files([big], config, language=Language.PYTHON))

        # Then
        assert units == []


class TestAnalyzePaths:
    def test_given_tree_when_analyzed_in_parallel_then_discovery_order(
        self, project: Path
    ) -> None:
        # When
        results = analyze_paths([project], max_workers=3)

        # Then
        assert [Path(result.path).name for result in results] == [
            "app.py",
            "empty.rs",
            "util.js",
        ]
        assert results[1].is_absent
        unit = results[2].root
        assert unit is not None
        assert unit.metrics.cyclomatic.sum == 2

    def test_given_no_supported_files_when_analyzed_then_empty(self, tmp_path: Path) -> None:
        (tmp_path / "notes.md").write_text("# notes\n")
        assert analyze_paths([tmp_path]) == []


class TestAnalyzePathsLogging:
    def setup_method(self) -> None:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_request_id()

    def teardown_method(self) -> None:
        logging.getLogger().handlers.clear()
        structlog.reset_defaults()
        clear_request_id()

    def test_given_batch_id_when_worker_logs_then_line_has_batch_and_unit(
        self, tmp_path: Path
    ) -> None:
        # Given
        source_dir = tmp_path / "src"
        source_dir.mkdir()
        (source_dir / "bad.py").write_text("def f(:\n    return\n")
        log_file = tmp_path / "logs" / "run.jsonl"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_request_id("batch-1")

        # When
        results = analyze_paths([source_dir], max_workers=2)
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Then
        assert results[0].error_count > 0
        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        (warning,) = [r for r in records if r["event"] == "analysis.error_nodes"]
        assert warning["request_id"] == "batch-1"
        assert warning["unit"].endswith("bad.py")
        assert warning["language"] == "python"
