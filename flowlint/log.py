"""Structured logging setup."""

import logging
from typing import Optional

import structlog

from flowlint.config import settings


def configure_logging(level: Optional[str] = None, quiet: bool = False) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Log level name, defaults to settings.log_level
        quiet: Drop every log event
    """
    if quiet:
        structlog.configure(processors=[_drop_event])
        return

    logging.basicConfig(
        format="%(message)s",
        level=(level or settings.log_level).upper(),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
            if settings.log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _drop_event(logger, method_name, event_dict):
    raise structlog.DropEvent
