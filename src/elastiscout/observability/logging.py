"""Structured logging configuration using structlog.

ElastiScout modules log through ``logging.getLogger(__name__)``; this module
renders those records as JSON or console lines. The HTTP transports log every
request at INFO, so their loggers are raised to WARNING unless the configured
level is DEBUG.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from elastiscout.config.settings import ObservabilitySettings

TRANSPORT_LOGGERS = ("httpx", "httpcore", "opensearch")


def setup_logging(settings: ObservabilitySettings | None = None, stream: TextIO | None = None) -> None:
    """Configure structured logging for ElastiScout.

    Args:
        settings: Observability settings. Uses defaults if None.
        stream: Output stream; stdout if None.
    """
    level = getattr(logging, (settings.log_level if settings else "info").upper(), logging.INFO)
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings and settings.log_format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=stream or sys.stdout, level=level)
    logging.getLogger("elastiscout").setLevel(level)

    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
