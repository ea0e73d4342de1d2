"""Logging setup for the badge server.

Console output is always on. When a log directory is configured, JSON records
are also written to ``badge.log`` there, rotated at 10MB with 5 backups.
Every record passes through the redaction filter first, so tokens that end up
in exception messages or upstream URLs never reach a handler.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

from now_playing_badge.middleware.logging_middleware import redact_sensitive_data

LOG_FILE_NAME = "badge.log"

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s %(event_type)s"


class RedactionFilter(logging.Filter):
    """Redact credentials from the message and any string context fields."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_sensitive_data(record.getMessage())
        record.args = None
        for field in ("error", "url"):
            value = getattr(record, field, None)
            if isinstance(value, str):
                setattr(record, field, redact_sensitive_data(value))
        return True


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Configure the root logger for the badge server.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the JSON log file; None logs to the console only

    Returns:
        Configured root logger instance
    """
    level = logging.getLevelName(log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    redaction = RedactionFilter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    console_handler.addFilter(redaction)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT, timestamp=True))
        file_handler.addFilter(redaction)
        root_logger.addHandler(file_handler)

    # Upstream calls are already logged by the client event hooks
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **extra_fields: Any) -> None:
    """Log ``message`` at ``level`` with structured fields attached to the record."""
    getattr(logger, level.lower())(message, extra=extra_fields)
