from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from crew_dashboard.config import get_settings


_CONFIGURED = False

# Loggers that install their own handlers and would otherwise print plain text.
CAPTURED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = get_settings().log_level
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _json_handler(processors: list[Any]) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=processors,
        )
    )
    return handler


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, *, propagate: bool) -> None:
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = propagate


def configure_logging(level: int | str | None = None, *, force: bool = False) -> int:
    """Send structlog events and stdlib records to stdout as JSON lines.

    ``level`` accepts a number or a name such as ``"debug"``; when omitted it
    comes from ``LOG_LEVEL``. Repeated calls are ignored unless ``force`` is
    set. Returns the numeric level in effect.
    """

    global _CONFIGURED
    if _CONFIGURED and not force:
        return logging.getLogger().level

    numeric_level = _resolve_level(level)
    processors = _shared_processors()

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = _json_handler(processors)
    _attach(logging.getLogger(), handler, numeric_level, propagate=True)
    for name in CAPTURED_LOGGERS:
        _attach(logging.getLogger(name), handler, numeric_level, propagate=False)

    _CONFIGURED = True
    return numeric_level
