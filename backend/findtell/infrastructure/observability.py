"""Log Output — one JSON object per line for the defaults and license endpoints.

Invariants:
    - Each line carries timestamp (UTC), level, logger and message
    - Request context passed via `extra=` (chart type, webhook event, provider
      status, store operation, error code, path) is copied onto the line
    - License keys are never a structured field; callers log shortened keys only
    - setup_logging replaces the handler it installed earlier instead of stacking a second one

Design Decisions:
    - "text" format for local runs, "json" for deployed ones (LOG_FORMAT)
    - httpx request logging held at WARNING: its INFO lines repeat the provider URL
      on every license call
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "error_code", "path", "chart_type", "event_name",
    "provider_status", "operation",
)

NOISY_LOGGERS = ("httpx", "httpcore")

_installed_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (field, record.__dict__[field])
            for field in EXTRA_FIELDS
            if record.__dict__.get(field) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    global _installed_handler

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))

    root = logging.getLogger()
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed_handler = handler

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
