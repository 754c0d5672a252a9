"""
structlog setup for profile-service.

Every visibility decision logs through a module logger obtained from
get_logger(). Records carry the request id, the requester and the current
site taken from core.context, so a denied photo or a redacted search hit can
be traced back to the request that asked for it.
"""

import logging
import sys
from typing import Any, cast

import structlog
from structlog.types import EventDict, Processor

from profile_service.config import settings
from profile_service.core.context import request_id_ctx, site_id_ctx, user_id_ctx

# Libraries whose INFO output drowns the decision log
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "aiomysql")


def add_context_info(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp the record with the request id, requester and site, when set."""
    for key, var in (
        ("request_id", request_id_ctx),
        ("requester", user_id_ctx),
        ("site_id", site_id_ctx),
    ):
        value = var.get(None)
        if value:
            event_dict[key] = value
    return event_dict


def _use_console_renderer() -> bool:
    return settings.ENVIRONMENT == "development" and settings.LOG_FORMAT != "json"


def configure_logging() -> None:
    """
    Route structlog through the stdlib root logger at LOG_LEVEL.

    Development gets a colored console; every other environment, or an
    explicit LOG_FORMAT=json, gets one JSON object per line.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_context_info,
        structlog.processors.StackInfoRenderer(),
    ]
    if _use_console_renderer():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Module logger, e.g. ``get_logger(__name__).info("profile_saved", user_id="alice")``."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
