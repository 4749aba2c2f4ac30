"""
structlog setup for applications built on railtrack.

The library never configures logging by itself; call configure_logging()
once from your composition root.
"""

from __future__ import annotations

import structlog

from railtrack.config import RailtrackSettings, get_settings


def configure_logging(settings: RailtrackSettings | None = None) -> None:
    """
    Configure structlog for structured logging.

    console: colored, human-readable output (development).
    json:    JSON lines to stdout (machine-readable).
    """
    settings = settings or get_settings()
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(settings.level_number()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

