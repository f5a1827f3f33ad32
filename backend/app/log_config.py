"""Structured logging setup shared by the API and the CLI."""

import logging
from typing import Optional

import structlog

from app.config import get_settings


def configure_logging(debug: Optional[bool] = None, level: Optional[str] = None) -> None:
    """Configure structlog processors and the minimum log level."""
    settings = get_settings()
    debug = settings.DEBUG if debug is None else debug
    level_name = (level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name) if level_name in logging.getLevelNamesMapping() else logging.INFO
        ),
        cache_logger_on_first_use=False,
    )
