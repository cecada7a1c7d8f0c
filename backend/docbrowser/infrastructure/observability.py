"""Structured Logging: browse-context log records for JSON or terminal output.

Invariants:
    - Browse context (operation, collection, database, error_code, path, phase)
      is rendered in both formats whenever a record carries it
    - setup_logging() owns exactly one root handler; calling it again replaces it
    - The pymongo logger stays at WARNING unless the app itself logs at DEBUG
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_KEYS = (
    "operation", "collection", "database", "error_code", "path", "phase",
)

_HANDLER_NAME = "docbrowser"


def _context_of(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_KEYS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context_of(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextFormatter(logging.Formatter):
    """Human-readable line with browse context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context_of(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the root handler for the given format and level."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextFormatter())
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    logging.getLogger("pymongo").setLevel(
        logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING,
    )
    return handler
