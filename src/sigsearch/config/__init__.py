"""Config module exports."""

from sigsearch.config.loader import load_config
from sigsearch.config.models import (
    LoggingConfig,
    LogOutputConfig,
    MatchConfig,
    SearchConfig,
    SigSearchConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "MatchConfig",
    "SearchConfig",
    "SigSearchConfig",
]
