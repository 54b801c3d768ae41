"""structlog configuration for hosts embedding the engine."""

import logging

import structlog

from speaking_placement.config import get_settings


def configure_logging(json_logs: bool | None = None, level: str | None = None) -> None:
    """Configure structlog rendering.

    Args:
        json_logs: Render JSON lines (production) instead of console output.
            Defaults to ``log_format`` from settings.
        level: Minimum log level name. Defaults to ``log_level`` from settings.
    """
    if json_logs is None or level is None:
        settings = get_settings()
        json_logs = settings.json_logs if json_logs is None else json_logs
        level = settings.log_level if level is None else level

    if json_logs:
        # Production: JSON format for machine parsing
        renderer = structlog.processors.JSONRenderer()
    else:
        # Development: console format for human readability
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
