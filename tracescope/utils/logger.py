"""
Centralised logging helper for tracescope.

This module configures a single root logger that can emit either human-readable
console logs (default) or structured JSON logs suitable for Cloud Logging and
other log aggregators. Every record is stamped with the trace id of the request
being processed in the calling context. Format and log-level come from
`tracescope.config.Settings`, so behaviour can be switched with environment
variables without code changes.

Usage
-----
from tracescope.utils.logger import get_logger
logger = get_logger(__name__)
logger.info("Something happened")
"""

from __future__ import annotations

import atexit
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from tracescope.config import get_settings
from tracescope.utils.request_context import get_current_trace_id

CLOUD_TRACE_FIELD = "logging.googleapis.com/trace"

_configured: bool = False


class TraceContextFilter(logging.Filter):
    """Inject the current trace id into every LogRecord."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.trace_id = get_current_trace_id()
        return True


class JsonFormatter(logging.Formatter):
    """Format log records as JSON for machine consumption."""

    def __init__(self, project_id: Optional[str] = None) -> None:
        super().__init__()
        self.project_id = project_id

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "severity": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        trace_id = getattr(record, "trace_id", None)
        if trace_id is None:
            trace_id = get_current_trace_id()
        if trace_id:
            payload["trace_id"] = trace_id
            if self.project_id:
                payload[CLOUD_TRACE_FIELD] = f"projects/{self.project_id}/traces/{trace_id}"
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"))


def _configure_root_logger() -> None:
    """Initialise the root logger exactly once."""

    global _configured
    if _configured:
        return

    settings = get_settings()

    handler: logging.Handler = logging.StreamHandler(sys.stdout)
    trace_filter = TraceContextFilter()

    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter(project_id=settings.google_cloud_project))
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | %(name)s | %(trace_id)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    # Handler-level so records propagated from child loggers are stamped too
    handler.addFilter(trace_filter)

    # Reset default handlers to avoid duplicate logs when re-configured (e.g. in tests).
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(settings.log_level.upper())
    root.addHandler(handler)

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.setLevel(settings.uvicorn_log_level.upper())

    _configured = True

    # Ensure handlers flush on interpreter exit
    atexit.register(logging.shutdown)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger with the given *name*, ensuring global config is applied."""

    _configure_root_logger()
    return logging.getLogger(name or __name__)


# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


def reset_logging_for_tests() -> None:
    """Clear handlers/filters so tests can reconfigure logging cleanly."""

    global _configured
    logging.shutdown()
    root = logging.getLogger()
    root.handlers.clear()
    root.filters.clear()
    _configured = False
