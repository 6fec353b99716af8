"""
structlog setup for the library and the exposure-tokens command

Events go to stderr; the command writes its hashed export to stdout.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor

from exposure_tokens.config import Settings


def resolve_log_level(settings: Settings) -> int:
    """Numeric level to log at; debug mode always means DEBUG"""
    if settings.debug:
        return logging.DEBUG
    return getattr(logging, settings.log_level.upper())


def setup_logging(
    service_name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> structlog.BoundLogger:
    """
    Route structlog through stdlib logging on stderr

    Calling it again replaces the previous configuration, so a command can
    reconfigure after applying its own overrides.

    Args:
        service_name: Value of the ``service`` key on every event (defaults
            to ``settings.service_name``)
        settings: Settings to read level, format and environment from

    Returns:
        Logger bound to the service name
    """
    if settings is None:
        settings = Settings()
    service_name = service_name or settings.service_name

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=resolve_log_level(settings),
        force=True,
    )

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    def tag_origin(logger, method_name, event_dict: EventDict) -> EventDict:
        event_dict["service"] = service_name
        event_dict["environment"] = settings.environment
        return event_dict

    processors.append(tag_origin)

    # One JSON object per line for batch runs, readable lines when debugging
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(service_name)


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Logger for a module of this package, e.g. ``get_logger(__name__)``"""
    return structlog.get_logger(name)
