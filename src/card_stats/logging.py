"""Structured logging for card_stats.

Stats computations log through structlog. Output is pretty console
rendering by default and JSON lines when ``json_output`` is set.
"""

import logging
import sys
from typing import Any

import structlog

from card_stats.config import LoggingSettings

__all__ = [
    "configure_logging",
    "get_logger",
]


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog for card_stats.

    Args:
        settings: Logging settings (default: loaded from environment)
    """
    settings = settings or LoggingSettings()
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if settings.json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Logger name (usually __name__ of the calling module)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)


_configured = False


def _ensure_configured() -> None:
    """Ensure logging is configured with defaults."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True


_ensure_configured()
