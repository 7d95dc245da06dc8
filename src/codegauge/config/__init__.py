"""Config module exports."""

from codegauge.config.loader import load_config
from codegauge.config.models import (
    AnalysisConfig,
    CodeGaugeConfig,
    LoggingConfig,
    LogOutputConfig,
    OutputConfig,
)

__all__ = [
    "load_config",
    "CodeGaugeConfig",
    "AnalysisConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "OutputConfig",
]
