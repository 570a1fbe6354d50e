"""Structured JSON logging for the FitZone backend.

All application loggers live under the ``fitzone`` namespace. Structured
fields are passed as ``extra={"extra_data": {...}}`` and merged into the JSON
record; credential fields among them are masked.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

ROOT_LOGGER = "fitzone"

# Never written to the log, whatever the caller passes
REDACTED_FIELDS = frozenset({"password", "confirmPassword", "token", "idToken", "refreshToken"})
REDACTED = "***"


def redact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: REDACTED if key in REDACTED_FIELDS else value for key, value in data.items()}


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict):
            log_data.update(redact(extra_data))

        return json.dumps(log_data, default=str)


def configure_logging(debug: bool = False) -> logging.Logger:
    """
    Route the ``fitzone`` logger tree to stdout as JSON.

    Safe to call more than once (each app instance does); handlers are
    replaced, not stacked.

    Args:
        debug: Log at DEBUG instead of INFO.

    Returns:
        The ``fitzone`` root logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. ``get_logger(__name__)`` -> ``fitzone.app.main``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
