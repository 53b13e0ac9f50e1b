"""Logging setup: JSON lines in production, coloured console output otherwise.

Session and persistence code attach context through ``extra=``; the keys in
``CONTEXT_FIELDS`` are copied into every JSON record that carries them.
"""
import copy
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from quizzle.config import settings

CONTEXT_FIELDS = ("activity_id", "session_kind", "store_key")

_HANDLER_NAME = "quizzle"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Other handlers share the record; colour a copy.
        record = copy.copy(record)
        color = self.LEVEL_COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(log_level: Optional[str] = None) -> None:
    """Install the application handler on the root logger.

    Calling this again replaces the handler instead of stacking another one.

    Args:
        log_level: Level name. Defaults to INFO in production, DEBUG elsewhere.
    """
    if not log_level:
        log_level = "INFO" if settings.is_production else "DEBUG"
    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    if settings.is_production:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ColoredFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={log_level.upper()}, environment={settings.ENVIRONMENT}"
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
