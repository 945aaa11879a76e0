"""Structlog configuration for the membership API and its reactor worker."""

import logging
import os
import sys

import structlog

from infrastructure.settings import LoggingSettings, get_logging_settings


def _renders_to_console(settings: LoggingSettings) -> bool:
    if settings.format != "auto":
        return settings.format == "console"
    # FORCE_COLOR=1 keeps colors in non-TTY environments such as Docker
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog from MEMBERSHIP_LOG_* settings.

    Console output is colored; JSON output renders exceptions inline so
    that a dead-lettered reactor entry logs its traceback on one line.
    """
    settings = settings or get_logging_settings()

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if _renders_to_console(settings):
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[settings.level]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
