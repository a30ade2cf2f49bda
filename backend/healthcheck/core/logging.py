"""
Structured logging via structlog.

Every event carries `logger_name`, `level` and an ISO `timestamp`.
Development renders to the console; any other environment emits one JSON
object per line.

Usage:
    from healthcheck.core.logging import get_logger
    log = get_logger(__name__)
    log.info("db_health_check", pool="app@localhost:5432/app")
"""

import logging
import sys

import structlog
from healthcheck.core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Call once, before the server starts."""
    settings = settings or get_settings()
    is_dev = settings.environment == "development"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if is_dev else logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__):
    # `logger` is taken by wrap_logger's own signature
    return structlog.get_logger(logger_name=name)
