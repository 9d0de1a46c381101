"""Structured logging and instrumentation tests."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from uuid import uuid4

import pytest
from pydantic import BaseModel

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models import taxonomy
from models.search import SearchOptions
from models.shirt import Shirt
from search_app.logging_config import (
    CORRELATION_ID,
    JsonFormatter,
    correlation_context,
    operation_context,
    redact_for_log,
)
from tools.observability import instrument_operation


def test_redact_summarises_catalog_payloads() -> None:
    shirts = [Shirt(uuid4(), "Red - Small", taxonomy.SMALL, taxonomy.RED) for _ in range(3)]
    scrubbed = redact_for_log({"shirts": shirts, "size": taxonomy.SMALL, "colors": {taxonomy.RED}})

    assert scrubbed == {"shirts": "[3 items]", "size": "Small", "colors": ["Red"]}


def test_redact_truncates_long_sequences() -> None:
    scrubbed = redact_for_log(list(range(25)))
    assert scrubbed[:10] == list(range(10))
    assert scrubbed[-1] == "... (+15 more)"


def test_json_formatter_includes_correlation_and_extras() -> None:
    record = logging.LogRecord("search", logging.INFO, __file__, 1, "search_matched", None, None)
    record.event = "search_matched"
    record.correlation_id = "abc123"
    record.matched_count = 4

    payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "search_matched"
    assert payload["correlation_id"] == "abc123"
    assert payload["matched_count"] == 4
    assert payload["level"] == "INFO"


def test_correlation_context_restores_previous_id() -> None:
    with correlation_context("outer"):
        with correlation_context("inner") as scoped:
            assert scoped == "inner"
            assert CORRELATION_ID.get() == "inner"
        assert CORRELATION_ID.get() == "outer"


def test_operation_context_nests_under_outer_operation() -> None:
    with operation_context("outer") as outer_id:
        with operation_context("inner") as inner_id:
            assert inner_id == outer_id
    with operation_context("outer") as next_id:
        assert next_id != outer_id
    assert CORRELATION_ID.get() is None


def test_redact_reduces_search_options_to_names() -> None:
    options = SearchOptions(sizes=[taxonomy.SMALL], colors=[taxonomy.RED, taxonomy.BLUE])
    assert redact_for_log(options) == {"sizes": ["Small"], "colors": ["Blue", "Red"]}


class _CountInput(BaseModel):
    limit: int


def test_instrument_operation_validates_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    @instrument_operation("count", input_model=_CountInput)
    def count(limit: int) -> int:
        return limit * 2

    assert count(limit="3") == 6
    events = [getattr(record, "event", None) for record in caplog.records]
    assert events.count("operation_started") == 1
    assert events.count("operation_completed") == 1


def test_instrument_operation_reports_validation_errors() -> None:
    @instrument_operation("count", input_model=_CountInput, on_validation_error=lambda exc: -1)
    def count(limit: int) -> int:
        return limit

    assert count(limit="many") == -1


def test_instrument_operation_logs_and_reraises_failures(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    @instrument_operation("explode")
    def explode() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        explode()
    failed = [record for record in caplog.records if getattr(record, "event", None) == "operation_failed"]
    assert failed and failed[0].operation == "explode"


def test_instrumented_calls_get_distinct_correlation_ids(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    @instrument_operation("count")
    def count(limit: int) -> int:
        return limit

    count(1)
    count(2)

    started = [record for record in caplog.records if getattr(record, "event", None) == "operation_started"]
    assert [record.call_args for record in started] == [[1], [2]]
    assert started[0].correlation_id != started[1].correlation_id
