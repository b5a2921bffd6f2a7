"""Structured logging for Weighted Graph.

Graph mutations log at DEBUG, rejected mutations and negative-cycle
findings at WARNING, and file saves and loads at INFO. Events carry the
ids involved as key-value pairs; path-finding runs also bind
``algorithm`` and ``source_id`` through ``LogContext``.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from weighted_graph.config import get_settings


def _renderers(env: str) -> list[Processor]:
    """Get the final processors for an environment.

    Development renders colored lines for a terminal; staging and
    production render one JSON object per event.
    """
    if env == "development":
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging() -> None:
    """Route library events through structlog.

    Reads ``APP_ENV`` and ``APP_LOG_LEVEL`` from the settings. Output
    goes to stderr so that command output on stdout stays parseable.
    Calling this is optional for library users; without it structlog
    falls back to its own defaults.

    Raises:
        ConfigurationError: If the settings cannot be loaded.
    """
    settings = get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderers(settings.app.env),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.app.log_level),
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, usually named after the calling module.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Added edge", edge_id=3, from_id=1, to_id=2)
    """
    return structlog.get_logger(name)


class LogContext:
    """Bind context variables for the duration of a block.

    On exit the previous values are restored, so an inner context that
    rebinds a key does not drop the outer binding.

    Example:
        >>> with LogContext(algorithm="bellman-ford", source_id=1):
        ...     logger.warning("Negative cycle detected", edge_ids=[4])
    """

    def __init__(self, **context: Any) -> None:
        self.context = context
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
