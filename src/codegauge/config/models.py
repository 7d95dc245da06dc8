"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CODEGAUGE__SECTION__KEY)
3. Project YAML (.codegauge.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    CODEGAUGE__<SECTION>__<KEY>=<VALUE>

Examples:
    CODEGAUGE__LOGGING__LEVEL=DEBUG
    CODEGAUGE__ANALYSIS__MAX_WORKERS=8
    CODEGAUGE__OUTPUT__FORMAT=json
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from codegauge.core.languages import Language

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CODEGAUGE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every skipped file and grammar load.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class AnalysisConfig(BaseModel):
    """Analysis configuration.

    Env vars:
        CODEGAUGE__ANALYSIS__MAX_FILE_SIZE_MB: Skip files larger than this
        CODEGAUGE__ANALYSIS__MAX_WORKERS: Threads used by analyze_paths
    """

    max_file_size_mb: int = Field(
        default=10,
        description="Skip files larger than this (MB). Bounds traversal time per unit.",
    )
    max_workers: int = Field(
        default=4,
        description="Parallel analysis threads. Each unit is analyzed independently.",
    )
    languages: list[Language] | None = Field(
        default=None,
        description="Allow-list of languages. None analyzes every supported language.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_file_size_mb must be >= 1, got {v}")
        return v


class OutputConfig(BaseModel):
    """Output configuration for the command line front end."""

    format: Literal["json", "table"] = "table"
    max_depth: int | None = Field(
        default=None,
        description="Deepest space level printed. None prints the whole tree.",
    )
    indent: int = 2


class CodeGaugeConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
