"""Core module exports."""

from sigsearch.core.errors import (
    ConfigError,
    ErrorCode,
    ItemFormatError,
    QueryFormatError,
    SigSearchError,
    UnresolvedSelfTypeError,
)
from sigsearch.core.logging import (
    clear_search_id,
    configure_logging,
    get_logger,
    get_search_id,
    search_scope,
    set_search_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ItemFormatError",
    "QueryFormatError",
    "SigSearchError",
    "UnresolvedSelfTypeError",
    # Logging
    "clear_search_id",
    "configure_logging",
    "get_logger",
    "get_search_id",
    "search_scope",
    "set_search_id",
]
