"""
Structured logging for the service and the server it runs in.

structlog loggers and stdlib loggers (uvicorn, httpx) share one handler whose
structlog ProcessorFormatter renders every record the same way: one JSON
object per line with event_type, level, logger, timestamp and the request
scoped fields bound by the middleware (request_id).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import structlog

# Loggers that uvicorn configures with its own handlers unless told otherwise
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_handler: logging.Handler | None = None


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """event -> event_type; stdlib records keep their text as both event_type and message."""
    event = event_dict.pop("event", None)
    if event is not None:
        event_dict.setdefault("event_type", event)
        event_dict.setdefault("message", str(event))
    return event_dict


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
    ]


def configure_logging(
    level: str | None = None,
    fmt: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Install the shared handler on the root logger and point structlog at stdlib.

    Args:
        level: LOG_LEVEL name (default from env, INFO).
        fmt: "json" (default, LOG_FORMAT env) or anything else for console output.
        stream: destination; stdout by default.

    Safe to call again; the previously installed handler is replaced.
    """
    global _handler

    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    fmt = (fmt or os.getenv("LOG_FORMAT", "json")).strip().lower()

    if fmt == "json":
        final: list[Any] = [_event_type, structlog.processors.JSONRenderer()]
    else:
        final = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            *final,
        ],
    )
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
    _handler = handler

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("releases_fetched", owner="apache", repo="airflow", kept=42)
    """
    return structlog.stdlib.get_logger(name)


def bind_request(request_id: str, **fields: Any) -> None:
    """Bind request_id (and any extra fields) to every log line of the current request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **fields)


def clear_request() -> None:
    structlog.contextvars.clear_contextvars()
