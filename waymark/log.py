"""
Logging for Waymark.

Every record carries optional context fields (session_id, project_id, ...)
passed through `log_with_context`. Output is one line per record, either
logfmt-style key=value pairs or a JSON object, chosen by
WAYMARK_LOG_FORMAT.
"""

import json
import logging
import sys
from typing import Any


class StructuredFormatter(logging.Formatter):
    """One-line formatter: key=value text, or JSON when json_format is set."""

    def __init__(self, json_format: bool = False):
        super().__init__()
        self.json_format = json_format

    def fields(self, record: logging.LogRecord) -> dict[str, Any]:
        data: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        data.update(getattr(record, "context", {}))
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return data

    def format(self, record: logging.LogRecord) -> str:
        data = self.fields(record)
        if self.json_format:
            return json.dumps(data, default=str)
        return " ".join(f"{key}={_text_value(value)}" for key, value in data.items())


def _text_value(value: Any) -> str:
    text = str(value)
    if not text or any(c in text for c in ' "=\n'):
        return json.dumps(text)
    return text


def _level_from_settings(settings) -> int:
    level = getattr(logging, settings.LOG_LEVEL.upper(), None) if settings.LOG_LEVEL else None
    if isinstance(level, int):
        return level
    return logging.DEBUG if settings.ENV == "dev" else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger writing structured lines to stdout.

    Level and format come from settings; loggers that already have
    handlers are returned untouched.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        from .config import get_settings

        settings = get_settings()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter(json_format=settings.LOG_FORMAT == "json"))
        logger.addHandler(handler)
        logger.setLevel(_level_from_settings(settings))

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **context: Any) -> None:
    """Log `msg` with context fields appended to the line."""
    logger.log(level, msg, extra={"context": context})
