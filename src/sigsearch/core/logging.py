"""Structured logging for match and ranking runs.

Everything goes through structlog, rendered by stdlib handlers so that one
configuration can feed several outputs (console, JSON file, ...) at
different levels. Each ``rank`` call runs inside a search scope whose
correlation id is stamped on every record it emits.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from sigsearch.config.models import LoggingConfig, LogOutputConfig

_search_id: ContextVar[str | None] = ContextVar("search_id", default=None)

_STREAMS = ("stderr", "stdout")


def get_search_id() -> str | None:
    return _search_id.get()


def set_search_id(search_id: str | None = None) -> str:
    """Set the correlation ID for the current search, generating one if needed."""
    sid = search_id or uuid4().hex[:12]
    _search_id.set(sid)
    return sid


def clear_search_id() -> None:
    _search_id.set(None)


@contextmanager
def search_scope(search_id: str | None = None) -> Iterator[str]:
    """Run a block under a fresh search ID, restoring the previous one on exit."""
    sid = search_id or uuid4().hex[:12]
    token = _search_id.set(sid)
    try:
        yield sid
    finally:
        _search_id.reset(token)


def _add_search_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if sid := get_search_id():
        event_dict["search_id"] = sid
    return event_dict


def _level(name: str | None, default: int = logging.INFO) -> int:
    if not name:
        return default
    level = logging.getLevelNamesMapping().get(name.upper())
    return default if level is None else level


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_search_id,  # type: ignore[list-item]
    ]


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=output.destination in _STREAMS and getattr(sys, output.destination).isatty(),
        pad_event_to=0,
        pad_level=False,
    )


def _open_handler(destination: str) -> logging.Handler:
    """Stream handler for stderr/stdout, appending file handler otherwise."""
    if destination in _STREAMS:
        return logging.StreamHandler(getattr(sys, destination))
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Configure structlog and the root stdlib logger.

    Args:
        config: Full logging configuration. When given, ``json_format`` and
            ``level`` are ignored.
        json_format: Single stderr output rendered as JSON instead of console text.
        level: Level for the single stderr output.
    """
    from sigsearch.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level(config.level)
    processors = _shared_processors()

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must take effect on loggers created earlier
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    root.setLevel(root_level)

    for output in config.outputs:
        handler = _open_handler(output.destination)
        handler.setLevel(_level(output.level, root_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output),
                foreign_pre_chain=processors,
            )
        )
        root.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
