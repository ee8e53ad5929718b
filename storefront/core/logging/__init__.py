"""
Logging configuration module for structured logging.

This module configures the client's logging system using structlog.
It provides structured logging with JSON formatting for production
and human-readable console output for development.

The logging configuration includes:
- Timestamp formatting
- Log level inclusion and filtering
- JSON/Console output based on settings
- Logger caching
"""

import logging

import structlog

from storefront.core.config.settings import settings


def configure_logging(log_level: str = None, json_logs: bool = None) -> None:
    """
    Configures the client's logging system.

    Sets up structlog with ISO timestamps, the log level, and either a JSON
    renderer or a console renderer. Arguments left as ``None`` fall back to
    ``LOG_LEVEL`` and ``LOG_JSON`` from the settings.
    """
    level_name = (log_level or settings.LOG_LEVEL).upper()
    use_json = settings.LOG_JSON if json_logs is None else json_logs

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer(),
    ]

    logging.basicConfig(format="%(message)s", level=getattr(logging, level_name, logging.INFO))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def mask_token(token: str | None) -> str:
    """Return a token prefix safe to put in log lines."""
    if not token:
        return ""
    return token[:4] + "*" * max(len(token) - 4, 0)


logger = structlog.get_logger()
