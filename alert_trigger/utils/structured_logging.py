"""
Structured Logging

Key/value (logfmt-like) or JSON output on stderr, with per-call fields.

Usage:
    setup_logging("INFO", "text")
    logger = StructuredLogger(__name__)
    logger.error("Error running command", {"error": "connection refused"})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "alert_trigger"

# Attribute on LogRecord carrying the structured fields
FIELDS_ATTR = "fields"


class LogFormat(str, Enum):
    """Supported output formats."""
    TEXT = "text"
    JSON = "json"


def _record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return dict(getattr(record, FIELDS_ATTR, None) or {})


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


def _quote(value: Any) -> str:
    text = str(value)
    if text == "" or any(c in text for c in ' ="\n\t'):
        return json.dumps(text, ensure_ascii=False)
    return text


class KeyValueFormatter(logging.Formatter):
    """Renders records as ``time=... level=... msg=... key=value``."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"time={_timestamp(record)}",
            f"level={record.levelname}",
            f"msg={_quote(record.getMessage())}",
        ]
        for key, value in _record_fields(record).items():
            parts.append(f"{key}={_quote(value)}")
        if record.exc_info:
            parts.append(f"exc={_quote(self.formatException(record.exc_info))}")
        return " ".join(parts)


class JsonFormatter(logging.Formatter):
    """Renders records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = _record_fields(record)
        if fields:
            log_entry["extra"] = fields
        if record.exc_info:
            log_entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    Handlers installed by an earlier call are replaced, so calling this
    more than once does not duplicate output.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if LogFormat(log_format) is LogFormat.JSON:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(KeyValueFormatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level.upper()))
    return logger


class StructuredLogger:
    """Logger wrapper that attaches a dict of fields to each record."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.log(level, message, extra={FIELDS_ATTR: extra or {}}, exc_info=exc_info)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log at ERROR level.

        Args:
            message: Message
            extra: Structured fields
            exc_info: Attach the active exception traceback
        """
        self._log(logging.ERROR, message, extra, exc_info=exc_info)
