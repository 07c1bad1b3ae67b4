"""Logging for the marketplace.

structlog renders through the standard library: stdout plus one rotating
file. Production and staging emit JSON lines; other environments get the
console renderer.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_JSON_ENVIRONMENTS = {"production", "staging"}


def _environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """LOG_LEVEL wins; otherwise the level follows the environment."""
    return os.getenv("LOG_LEVEL", _LEVELS.get(_environment(), "INFO"))


def _handlers(log_dir: str, log_file_prefix: str) -> list[logging.Handler]:
    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True)

    return [
        logging.StreamHandler(sys.stdout),
        logging.handlers.RotatingFileHandler(
            filename=log_path / f"{log_file_prefix}.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        ),
    ]


def configure_logging(log_dir: str = "logs", log_file_prefix: str = "craftmarket") -> None:
    """Route stdlib and structlog output through the same handlers."""
    level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = _handlers(log_dir, log_file_prefix)
    # Protean logs every unit of work at INFO
    logging.getLogger("protean").setLevel(logging.WARNING)

    renderer = (
        structlog.processors.JSONRenderer()
        if _environment() in _JSON_ENVIRONMENTS
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind request-scoped values (auth user, profile id) onto every later log line."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
