"""Structured logging setup.

Library modules get their loggers from get_logger(): structlog loggers that
hand rendered events to the stdlib logger of the same name. The host's
logging configuration therefore decides what reaches a stream, and an
unconfigured process prints nothing below WARNING. Applications call
configure_logging() once at startup if they want the default rendering.
"""

import logging
from typing import Optional

import structlog

from fluentval.config import Settings, get_settings


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger backed by logging.getLogger(name)."""
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog with console output in debug mode and JSON otherwise."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("fluentval").setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
