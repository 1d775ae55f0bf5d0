"""Structured logging for azredis.

Every event is one JSON object on stderr carrying ``ts`` (ISO, UTC),
``log_level`` and ``component``.  stdout belongs to the CLI so that
``--json`` output stays parseable.  The resource being reconciled is bound
through contextvars with :func:`bind_resource` and appears on every event
emitted until the next call.
"""

from __future__ import annotations

import logging
import sys
from typing import cast

import structlog
from structlog.typing import FilteringBoundLogger

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(level: str = "info") -> None:
    """Configure structlog for JSON output to stderr.

    Unknown levels fall back to ``info``.  Safe to call repeatedly; loggers
    obtained earlier pick up the new level and stream.
    """
    log_level = _LEVELS.get(level.lower(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Module-level loggers must follow a reconfigured level
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> FilteringBoundLogger:
    """Get a logger bound with a component name."""
    return cast(FilteringBoundLogger, structlog.get_logger(component=component))


def bind_resource(name: str) -> None:
    """Tag subsequent log events with the resource *name*, replacing any previous one."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(resource=name)
