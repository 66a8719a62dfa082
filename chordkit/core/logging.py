"""Structured logging setup for chordkit."""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

from .config import get_settings


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """Configure the root logger from explicit arguments or settings."""
    s = get_settings()
    log_level = (level or s.CHORDKIT_LOG_LEVEL).upper()
    use_json = s.CHORDKIT_LOG_JSON if json_output is None else json_output

    # stderr keeps stdout clean for --json output
    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["setup_logging", "get_logger", "JsonFormatter"]
