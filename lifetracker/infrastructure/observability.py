"""Structured Logging — JSON rendering of core log records for the application shell.

Invariants:
    - Every JSON line carries timestamp (record creation time, UTC), level, logger, message
    - Domain fields passed via extra= (task_id, category_id, duration_seconds,
      error_code, operation) are surfaced when present, others are dropped
    - Values json cannot encode (UUID, timedelta, datetime) are rendered, never raised on
    - configure_logging() is idempotent: re-running it replaces its own handler only

Design Decisions:
    - Core modules only call logging.getLogger(__name__); handlers are attached here
    - Settings.log_level / Settings.log_format drive the setup, so the shell calls
      configure_logging(get_settings()) once on startup
"""

import json
import logging
from datetime import date, datetime, timedelta, timezone
from uuid import UUID

from lifetracker.config import Settings

DOMAIN_FIELDS: tuple[str, ...] = (
    "task_id", "category_id", "duration_seconds", "error_code", "operation",
)
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_HANDLER_NAME = "lifetracker"


def _to_json(value: object) -> object:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return repr(value)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the domain extras lifted to top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key])
            for key in DOMAIN_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=_to_json)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the lifetracker handler on the root logger. Returns it."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def configure_logging(settings: Settings) -> logging.Handler:
    return setup_logging(settings.log_level, settings.log_format)
