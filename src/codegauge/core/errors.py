"""CodeGauge error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Analysis
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Analysis (3xxx)
    UNSUPPORTED_LANGUAGE = 3001
    GRAMMAR_UNAVAILABLE = 3002
    SOURCE_READ_ERROR = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CodeGaugeError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'UNSUPPORTED_LANGUAGE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CodeGaugeError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class AnalysisError(CodeGaugeError):
    """Errors surfaced to the caller of an analysis request."""


class UnsupportedLanguageError(AnalysisError):
    """The requested language (or file extension) has no classification table."""

    @classmethod
    def for_name(cls, name: str) -> "UnsupportedLanguageError":
        return cls(
            code=ErrorCode.UNSUPPORTED_LANGUAGE,
            message=f"Language '{name}' is not supported",
            details={"language": name},
        )

    @classmethod
    def for_path(cls, path: str) -> "UnsupportedLanguageError":
        return cls(
            code=ErrorCode.UNSUPPORTED_LANGUAGE,
            message=f"No supported language for file: {path}",
            details={"path": path},
        )


class GrammarUnavailableError(AnalysisError):
    """The tree-sitter grammar package for a supported language is not importable."""

    @classmethod
    def missing_package(cls, language: str, package: str) -> "GrammarUnavailableError":
        return cls(
            code=ErrorCode.GRAMMAR_UNAVAILABLE,
            message=f"Grammar for '{language}' is not installed (pip install {package})",
            details={"language": language, "package": package},
        )


class SourceReadError(AnalysisError):
    """The source file could not be read."""

    @classmethod
    def from_os_error(cls, path: str, err: OSError) -> "SourceReadError":
        return cls(
            code=ErrorCode.SOURCE_READ_ERROR,
            message=f"Failed to read {path}: {err.strerror or err}",
            retryable=True,
            details={"path": path},
        )


class InternalError(CodeGaugeError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
