"""Structured Logging — one root handler emitting JSON lines or plain text.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Request-scoped extras (path, method, status_code, error_code, resource_id,
      user_id, count) are copied onto the line only when set on the record
    - setup_logging installs at most one Tinta Fresca handler on the root logger,
      however many times the lifespan runs

Design Decisions:
    - httpx request lines held at WARNING: they repeat every identity-provider call
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "path", "method", "status_code", "error_code",
    "resource_id", "user_id", "count",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_QUIET_LOGGERS = ("httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, getattr(record, key)) for key in _EXTRA_KEYS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        # UUIDs and datetimes in extras
        return json.dumps(line, ensure_ascii=False, default=str)


class _AppHandler(logging.StreamHandler):
    """Marks the handler setup_logging owns, so a rerun replaces it."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _AppHandler)]:
        root.removeHandler(existing)
        existing.close()

    handler = _AppHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
