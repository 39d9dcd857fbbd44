"""
Structured logging.

Every log line is one JSON object. Context is passed with
``extra=`` (request_id, actor_id, action, ...) and lands as
top-level keys next to the timestamp, level, logger and message,
so log aggregators can filter on it without parsing text.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any


# Attributes every LogRecord carries; anything else came from extra=
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # default=str covers dates, Decimals and enums in extra fields
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO") -> None:
    """
    Send all logging to stderr as JSON.

    Called once from the application lifespan. Replaces any
    handlers already on the root logger, so uvicorn's own
    loggers propagate into the same format.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
