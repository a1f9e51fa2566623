"""structlog setup for show-acct.

The report owns stdout, so every log event is rendered to stderr. The
default level is WARNING: a clean run prints nothing but the report, and
``-D`` turns on the per-record stream events.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(level: str = "WARNING", log_format: str = "console") -> None:
    """Route structlog and stdlib logging to the current stderr.

    Safe to call more than once; each call rebinds to whatever
    ``sys.stderr`` is at that moment.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
        log_format: 'console' for humans, 'json' for log shippers.
    """
    numeric_level = getattr(logging, level.upper())

    # stdlib loggers (OpenTelemetry exporters) share the stream and level
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        _renderer(log_format),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Logger for a module, optionally bound to e.g. the accounting file path."""
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
