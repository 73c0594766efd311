"""
Structured logging.

Application code logs dotted event names with key/value context
(``log.info("record.create", record_id=7)``). Request-scoped values such as
``request_id`` are carried in contextvars and merged into every event.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import structlog

# Chatty at INFO; their request lines duplicate our own llm.* events
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def _renderers(log_format: str) -> List[Any]:
    if log_format == "console":
        return [structlog.dev.ConsoleRenderer()]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(sort_keys=True),
    ]


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name such as "INFO"; unknown names fall back to INFO.
        log_format: "json" (one object per line) or "console".
    """
    level = logging.getLevelName((log_level or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format="%(message)s")
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderers((log_format or "json").lower()),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs) -> None:
    """Attach key/values (request_id, record_id) to every later event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
