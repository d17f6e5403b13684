"""Structured logging utilities.

Every log line emitted while a request is being served carries the
request id, method and path bound by ``bind_request_context``.
"""

import logging
import sys
import uuid
from typing import Optional

import structlog

REQUEST_ID_HEADER = "X-Request-ID"


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging for the application."""

    log_level = logging.DEBUG if debug else logging.INFO

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
        exception_processors = [structlog.dev.set_exc_info]
    else:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
        # JSON lines need the traceback as a string
        exception_processors = [
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
        ]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            *exception_processors,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Uvicorn and library loggers go through the stdlib
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    for noisy in ("aiosqlite", "sqlalchemy.engine", "python_multipart"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def bind_request_context(method: str, path: str, request_id: Optional[str] = None) -> str:
    """Start a fresh log context for one request and return its id."""
    request_id = (request_id or "").strip() or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=method,
        path=path,
    )
    return request_id


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance for the given name."""
    return structlog.get_logger(name)
