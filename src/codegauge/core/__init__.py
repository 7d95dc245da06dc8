"""Core module exports."""

from codegauge.core.errors import (
    AnalysisError,
    CodeGaugeError,
    ConfigError,
    ErrorCode,
    GrammarUnavailableError,
    InternalError,
    SourceReadError,
    UnsupportedLanguageError,
)
from codegauge.core.languages import Language, detect_language, supported_languages
from codegauge.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    in_current_context,
    set_request_id,
    unit_context,
)

__all__ = [
    # Errors
    "AnalysisError",
    "CodeGaugeError",
    "ConfigError",
    "ErrorCode",
    "GrammarUnavailableError",
    "InternalError",
    "SourceReadError",
    "UnsupportedLanguageError",
    # Languages
    "Language",
    "detect_language",
    "supported_languages",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "in_current_context",
    "set_request_id",
    "unit_context",
]
