"""Structured logging helpers for the shirt search engine."""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import uuid
from typing import Any, Dict, Iterator

from models.search import SearchOptions
from models.shirt import Shirt
from models.taxonomy import AttributeValue

CORRELATION_ID = contextvars.ContextVar("correlation_id", default=None)
ACTIVE_OPERATION = contextvars.ContextVar("active_operation", default=None)
_DEFAULT_EXCLUDE_KEYS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
}
# Whole catalog payloads are reduced to their size.
_SUMMARISED_KEYS = {"shirts", "matched_shirts", "catalog"}
_MAX_LIST_PREVIEW = 10


class JsonFormatter(logging.Formatter):
    """Emit structured JSON logs with correlation metadata."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        record_message = super().format(record)
        correlation_id = getattr(record, "correlation_id", None) or CORRELATION_ID.get()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record_message,
            "event": getattr(record, "event", record_message),
            "correlation_id": correlation_id,
        }

        for key, value in record.__dict__.items():
            if key in _DEFAULT_EXCLUDE_KEYS or key in payload:
                continue
            payload[key] = redact_for_log(value)
        return json.dumps(payload)


def configure_logging(level: int | str | None = None) -> None:
    """Configure root logging with JSON output."""

    desired_level = level or os.getenv("LOG_LEVEL", "INFO")
    logging.root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=desired_level, handlers=[handler])


def _summarise_sequence(values: list) -> list:
    if len(values) <= _MAX_LIST_PREVIEW:
        return [redact_for_log(value) for value in values]
    preview = [redact_for_log(value) for value in values[:_MAX_LIST_PREVIEW]]
    preview.append(f"... (+{len(values) - _MAX_LIST_PREVIEW} more)")
    return preview


def redact_for_log(payload: Any) -> Any:
    """Reduce a log payload to JSON friendly values without dumping the catalog."""

    if payload is None:
        return None
    if isinstance(payload, (str, int, float, bool)):
        return payload
    if isinstance(payload, AttributeValue):
        return payload.name
    if isinstance(payload, SearchOptions):
        return {"sizes": redact_for_log(payload.sizes), "colors": redact_for_log(payload.colors)}
    if isinstance(payload, Shirt):
        return str(payload.id)
    if isinstance(payload, (set, frozenset)):
        return _summarise_sequence(sorted(payload, key=str))
    if isinstance(payload, (list, tuple)):
        return _summarise_sequence(list(payload))
    if isinstance(payload, dict):
        scrubbed: Dict[str, Any] = {}
        for key, value in payload.items():
            if key in _SUMMARISED_KEYS and hasattr(value, "__len__"):
                scrubbed[key] = f"[{len(value)} items]"
            else:
                scrubbed[str(key)] = redact_for_log(value)
        return scrubbed
    return str(payload)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger ensuring configuration is applied."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Context manager to temporarily set a correlation id."""

    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit a structured log entry with correlation metadata.

    Outside an operation scope the entry gets a one-off id; the context is
    left untouched so later operations do not inherit it.
    """

    correlation_id = fields.pop("correlation_id", None) or CORRELATION_ID.get() or uuid.uuid4().hex
    exc_info = fields.pop("exc_info", None)
    safe_fields = redact_for_log(fields)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **safe_fields},
    )


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id around a named operation.

    A top-level operation gets a fresh id; operations nested inside another
    one share the outer id. The previous id is restored on exit.
    """

    inherited = CORRELATION_ID.get() if ACTIVE_OPERATION.get() else None
    operation_token = ACTIVE_OPERATION.set(name)
    try:
        with correlation_context(correlation_id or inherited) as scoped_id:
            log_event(logging.getLogger(__name__), logging.DEBUG, "operation_scope_entered", operation=name)
            yield scoped_id
    finally:
        ACTIVE_OPERATION.reset(operation_token)


__all__ = [
    "configure_logging",
    "correlation_context",
    "get_logger",
    "log_event",
    "redact_for_log",
    "operation_context",
]
