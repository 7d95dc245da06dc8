"""Tests for structured logging."""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
import structlog

from codegauge.config.models import LoggingConfig, LogOutputConfig
from codegauge.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    in_current_context,
    set_request_id,
    unit_context,
)


class TestRequestIdCorrelation:
    """Request ID context variable tests."""

    def setup_method(self) -> None:
        """Clear request ID before each test."""
        clear_request_id()

    def test_given_request_id_when_set_then_can_retrieve(self) -> None:
        # Given
        request_id = "batch-123"

        # When
        result = set_request_id(request_id)

        # Then
        assert result == request_id
        assert get_request_id() == request_id

    def test_given_no_id_when_set_then_generates_uuid(self) -> None:
        # When
        rid = set_request_id()

        # Then
        assert len(rid) == 12  # uuid4().hex[:12]

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        # Given
        set_request_id("to-clear")

        # When
        clear_request_id()

        # Then
        assert get_request_id() is None

    def test_given_batch_id_when_task_runs_on_worker_thread_then_id_visible(self) -> None:
        # Given
        set_request_id("batch-7")
        task = in_current_context(get_request_id)

        # When
        with ThreadPoolExecutor(max_workers=2) as pool:
            wrapped = [pool.submit(task).result() for _ in range(3)]

        # Then
        assert wrapped == ["batch-7"] * 3


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_request_id()

    def test_given_simple_params_when_configured_then_single_console_handler(self) -> None:
        # When
        configure_logging(level="DEBUG")

        # Then
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_given_json_file_output_when_logging_then_writes_json_lines(
        self, tmp_path: Path
    ) -> None:
        # Given
        log_file = tmp_path / "logs" / "codegauge.jsonl"
        config = LoggingConfig(
            level="INFO",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )
        configure_logging(config=config)
        set_request_id("req-42")

        # When
        get_logger("codegauge.test").info("analysis.completed", units=3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Then
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "analysis.completed"
        assert record["units"] == 3
        assert record["request_id"] == "req-42"

    def test_given_per_output_levels_when_configured_then_handlers_filter(
        self, tmp_path: Path
    ) -> None:
        # Given
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(destination="stderr", level="WARNING"),
                LogOutputConfig(format="json", destination=str(tmp_path / "debug.jsonl")),
            ],
        )

        # When
        configure_logging(config=config)

        # Then
        levels = sorted(handler.level for handler in logging.getLogger().handlers)
        assert levels == [logging.DEBUG, logging.WARNING]

    def test_given_relative_file_destination_when_validated_then_rejected(self) -> None:
        with pytest.raises(ValueError, match="absolute"):
            LogOutputConfig(destination="logs/out.jsonl")

    def test_given_unit_context_when_logging_then_lines_tagged_with_unit(
        self, tmp_path: Path
    ) -> None:
        # Given
        log_file = tmp_path / "units.jsonl"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        # When
        with unit_context("src/app.py", "python"):
            get_logger("codegauge.test").debug("registry.table_built")
        get_logger("codegauge.test").debug("analysis.completed")
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Then
        inside, outside = (json.loads(line) for line in log_file.read_text().splitlines())
        assert (inside["unit"], inside["language"]) == ("src/app.py", "python")
        assert "unit" not in outside

    def test_given_verbose_when_configured_then_every_output_debug(self, tmp_path: Path) -> None:
        # Given
        config = LoggingConfig(
            level="WARNING",
            outputs=[
                LogOutputConfig(destination="stderr", level="ERROR"),
                LogOutputConfig(format="json", destination=str(tmp_path / "out.jsonl")),
            ],
        )

        # When
        configure_logging(config=config, verbose=True)

        # Then
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert [handler.level for handler in root.handlers] == [logging.DEBUG, logging.DEBUG]
