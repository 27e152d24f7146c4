"""Logging for the storefront.

Stdlib handlers do the writing (stdout plus a rotating file); structlog
shapes the records. Every line logged while a request is in flight carries
the shopper's ``session_id`` through structlog's context variables.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

from storefront.utils import settings

LOG_FILE = "storefront.log"

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Libraries that are chatty at DEBUG/INFO
_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "uvicorn.access")


def log_level() -> str:
    return os.getenv("LOG_LEVEL", _LEVELS.get(settings.ENV, "INFO")).upper()


def _handlers(log_dir: Path) -> list[logging.Handler]:
    log_dir.mkdir(parents=True, exist_ok=True)
    console = logging.StreamHandler(sys.stdout)
    rotating = logging.handlers.RotatingFileHandler(
        filename=log_dir / LOG_FILE,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    return [console, rotating]


def _renderers() -> list:
    if settings.ENV in ("production", "staging"):
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
        )
    ]


def configure_logging(log_dir: str | None = None) -> None:
    """Route stdlib logging to stdout and a rotating file, formatted by structlog."""
    level = log_level()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _handlers(Path(log_dir or settings.LOG_DIR))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderers(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_session(session_id: str) -> None:
    """Attach the shopper's session id to every subsequent log line."""
    structlog.contextvars.bind_contextvars(session_id=session_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
