"""Structured logging with batch and unit correlation.

Supports:
- Separate console vs file log levels
- A request id per analysis batch, bound through structlog contextvars
- Per-unit context (``unit``, ``language``) on every line logged while
  one source unit is analyzed, including lines from registry and parser
- Carrying that context into analysis worker threads
"""

from __future__ import annotations

import contextvars
import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from codegauge.config.models import LoggingConfig

T = TypeVar("T")

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_request_id() -> str | None:
    value = structlog.contextvars.get_contextvars().get("request_id")
    return str(value) if value is not None else None


def set_request_id(request_id: str | None = None) -> str:
    """Bind a batch correlation id (generated when omitted)."""
    rid = request_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(request_id=rid)
    return rid


def clear_request_id() -> None:
    structlog.contextvars.unbind_contextvars("request_id")


@contextmanager
def unit_context(path: str | None, language: str) -> Iterator[None]:
    """Tag every log line emitted inside the block with the analyzed unit."""
    with structlog.contextvars.bound_contextvars(unit=path or "<source>", language=language):
        yield


def in_current_context(fn: Callable[..., T]) -> Callable[..., T]:
    """Wrap ``fn`` to run in a copy of the caller's context.

    Thread pool workers start with an empty context; tasks submitted
    through this wrapper keep the request id of the batch that queued them.
    Each call gets its own copy, so one wrapper may run on many threads.
    """
    context = contextvars.copy_context()

    def run(*args: Any, **kwargs: Any) -> T:
        return context.copy().run(fn, *args, **kwargs)

    return run


def _resolve_level(name: str | None, fallback: int) -> int:
    if name is None:
        return fallback
    return _LEVEL_MAP.get(name.upper(), fallback)


def _formatter(
    output_format: str, shared: list[structlog.types.Processor], colors: bool
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
    verbose: bool = False,
) -> None:
    """Configure structlog over stdlib handlers.

    Args:
        config: Logging configuration with outputs
        json_format: Use JSON format when no config is given
        level: Default log level when no config is given
        verbose: Lower every output to DEBUG (``codegauge -v``)
    """
    from codegauge.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    default_level = logging.DEBUG if verbose else _resolve_level(config.level, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Not cached, so a later configure_logging call takes effect
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(default_level)

    for output in config.outputs:
        if verbose:
            output_level = logging.DEBUG
        else:
            output_level = _resolve_level(output.level, default_level)
        is_console = output.destination in ("stderr", "stdout")
        handler = _create_handler(output.destination)
        handler.setLevel(output_level)
        handler.setFormatter(
            _formatter(output.format, shared_processors, is_console and sys.stderr.isatty())
        )
        root_logger.addHandler(handler)


def _create_handler(destination: str) -> logging.Handler:
    """Create handler for stderr, stdout, or file path."""
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
