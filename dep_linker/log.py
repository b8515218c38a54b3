"""Logging setup for the command line entry point."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(level: str = "info", structured: bool = False) -> logging.Logger:
    """Configure the ``dep_linker`` logger.

    Args:
        level: Level name (``debug``, ``info``, ``warning``, ``error``).
        structured: Emit one JSON object per record instead of plain text.

    Returns:
        The configured package logger.
    """
    numeric = _LEVELS.get(level.lower(), logging.INFO)
    logger = logging.getLogger("dep_linker")
    logger.setLevel(numeric)

    # Remove handlers from an earlier call
    logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
    logger.addHandler(handler)
    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data)
