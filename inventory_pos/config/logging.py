"""
Structured logging configuration using structlog.

Development gets colored console output, other environments get JSON. Every
event carries the app context; request middleware adds ``request_id`` and
``tenant`` through structlog's context variables.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from inventory_pos.config.settings import get_settings

# Event keys holding money or cost values
MONEY_FIELDS = frozenset(
    {
        "amount",
        "average_cost",
        "base_cost",
        "converted_cost",
        "cost",
        "total",
    }
)

QUIET_LOGGERS = ("aiosqlite", "uvicorn.access")


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add application context to log events."""
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["environment"] = settings.environment
    return event_dict


def round_money_fields(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Round float money values to the configured number of decimals."""
    places = get_settings().inventory.money_decimals
    for key in MONEY_FIELDS.intersection(event_dict):
        value = event_dict[key]
        if isinstance(value, float):
            event_dict[key] = round(value, places)
    return event_dict


def configure_logging() -> None:
    """Configure structlog and the stdlib root logger."""
    settings = get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        round_money_fields,
    ]

    if settings.environment == "development":
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=True)
        processors = shared_processors + [renderer]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

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
        level=getattr(logging, settings.log_level),
    )

    level = logging.DEBUG if settings.api.debug else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
