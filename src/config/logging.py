"""Structured logging configuration using structlog."""
import logging
import sys
from typing import Any, Optional

import structlog
from pythonjsonlogger import jsonlogger

from src.config.settings import settings

# Third-party loggers kept at WARNING
QUIET_LOGGERS = ("httpcore", "httpx", "asyncio")


def add_property_prefix(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Prefix the event with [PROPERTY] for single-property reports.

    Events bound to every property ("all") or to no property are left as is.
    """
    property_filter = event_dict.get("property_filter")
    if property_filter and property_filter != "all":
        event_dict["event"] = f"[{property_filter}] {event_dict.get('event', '')}"
    return event_dict


def resolve_log_level(level: Optional[str] = None) -> int:
    """Explicit level, else DEBUG when ``settings.debug`` is on, else LOG_LEVEL."""
    if level is None:
        level = "DEBUG" if settings.debug else settings.logging.level
    return getattr(logging, level.upper())


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure stdlib logging and structlog for the report engine.

    Records go to stderr; stdout is reserved for report output.

    Args:
        level: Override for LOG_LEVEL
        log_format: Override for LOG_FORMAT ("json" or "console")
    """
    log_level = resolve_log_level(level)
    log_format = log_format or settings.logging.format

    handler = logging.StreamHandler(sys.stderr)
    if log_format == "json":
        handler.setFormatter(jsonlogger.JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            add_property_prefix,
            structlog.processors.JSONRenderer()
            if log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)
