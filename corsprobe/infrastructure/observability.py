"""Structured Logging: JSON formatter and setup for the probe server.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, path, status_code, duration_ms, error_code) surfaced when present
    - JSON format by default, human-readable with LOG_FORMAT=text
    - Calling setup_logging twice replaces the handler instead of stacking a second one

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - uvicorn access log disabled in favour of RequestLoggingMiddleware, so HTTP
      logs share this format and only appear at DEBUG
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("method", "path", "status_code", "duration_ms", "error_code")

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def resolve_level(level: str | None) -> int:
    """Map a level name to a logging constant; unknown or missing names mean INFO."""
    if not level:
        return logging.INFO
    value = getattr(logging, level.strip().upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str | None = None, fmt: str = "json") -> None:
    """Configure root logging for the application."""
    global _handler
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    if _handler is not None:
        logging.root.removeHandler(_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(resolve_level(level))
    _handler = handler
