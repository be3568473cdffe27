"""Logging setup for the shift_payroll package."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER = "shift_payroll"

_handler: Optional[logging.Handler] = None


class StructuredFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str | int = "INFO", *, json_format: bool = False) -> logging.Logger:
    """Install a single stream handler on the package logger (idempotent)."""
    global _handler

    logger = logging.getLogger(ROOT_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    if json_format:
        _handler.setFormatter(StructuredFormatter())
    else:
        _handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))

    logger.addHandler(_handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    return logger
