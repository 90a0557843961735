"""Structured JSON logging for test runs, task calls and scenario steps."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging

from receiptcheck.correlation import get_correlation_id

# Record attributes passed with ``extra=`` that are copied into the payload.
CONTEXT_FIELDS = ("step", "task_name", "pdf_path", "parser", "page_count", "chars")


class JsonFormatter(logging.Formatter):
    """JSON formatter carrying the test node id and task/step context."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": get_correlation_id(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value if isinstance(value, (int, float, bool)) else str(value)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send every record through ``JsonFormatter`` on the root logger.

    Celery and pdfminer log heavily at DEBUG, so they are held at WARNING
    unless the requested level is stricter.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)

    quiet_level = max(root.level, logging.WARNING)
    for name in ("celery", "pdfminer"):
        logging.getLogger(name).setLevel(quiet_level)
