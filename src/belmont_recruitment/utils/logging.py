"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, Dict, List, Optional

import structlog
from rich.logging import RichHandler

from belmont_recruitment.config import Settings

# Third-party loggers capped at WARNING: heartbeats, and access lines
# already covered by the request logging middleware
QUIET_LOGGERS = ("discord.gateway", "discord.client", "uvicorn.access")


def _renderer(settings: Settings):
    if settings.debug:
        return structlog.dev.ConsoleRenderer(colors=False)
    # Keep Portuguese replies readable in the JSON lines
    return structlog.processors.JSONRenderer(ensure_ascii=False)


def _processors(settings: Settings) -> List[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _renderer(settings),
    ]


def configure_logging(settings: Settings) -> None:
    """Send structlog events, uvicorn and discord.py through one rich handler."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=settings.debug,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, handlers=[handler], force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_interaction_context(
    user_id: Optional[int],
    custom_id: Optional[str],
    kind: Any,
) -> Dict[str, Any]:
    """Create a log context for an interaction event."""
    return {
        "interaction_user": user_id,
        "custom_id": custom_id,
        "interaction_kind": getattr(kind, "value", kind),
    }
