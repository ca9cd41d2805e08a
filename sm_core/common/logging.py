# sm_core/common/logging.py
from __future__ import annotations

import logging
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

from sm_core.common.context import get_context

CONTEXT_FIELDS = ("request_id", "user_id", "tenant_id")
PLACEHOLDER = "-"

_installed = False


def _stamp(record: logging.LogRecord) -> None:
    ctx = get_context()
    for field in CONTEXT_FIELDS:
        if getattr(record, field, None) is not None:
            continue
        value = getattr(ctx, field, None) if ctx is not None else None
        setattr(record, field, value if value is not None else PLACEHOLDER)


def install_record_factory() -> None:
    """
    Wrap the LogRecord factory so every record carries the request context
    that was bound when it was created. Idempotent.
    """
    global _installed
    if _installed:
        return

    previous = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = previous(*args, **kwargs)
        _stamp(record)
        return record

    logging.setLogRecordFactory(record_factory)
    _installed = True


class ContextJsonFormatter(jsonlogger.JsonFormatter):
    """JSON lines: timestamp, level, logger, message, request context, extras."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        _stamp(record)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname.lower()
        log_record["logger"] = log_record.pop("name", record.name)
        for field in CONTEXT_FIELDS:
            log_record[field] = getattr(record, field)


class ContextConsoleFormatter(logging.Formatter):
    """Human-readable development format; tolerates records made before setup."""

    def format(self, record: logging.LogRecord) -> str:
        _stamp(record)
        return super().format(record)
