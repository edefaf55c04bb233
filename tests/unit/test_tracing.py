"""Tests for :mod:`webmarkup.tracing`."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

import pytest

from webmarkup.markup import new_element
from webmarkup.tracing import log_event, safe_json, trace


@dataclass
class _Options:
    item_el: str
    show: dict


def test_safe_json_summarises_nodes_and_callables() -> None:
    """Given nodes, callables and dataclasses When safe_json is used Then they become serialisable."""

    def visible(definition, key, context):
        return True

    payload = safe_json({"node": new_element("li"), "rule": visible, "opts": _Options("li", {1: None})})

    assert payload["node"] == "<li>"
    assert payload["rule"].endswith("visible")
    assert payload["opts"] == {"item_el": "li", "show": {"1": None}}
    json.dumps(payload)


def test_log_event_emits_json(caplog: pytest.LogCaptureFixture) -> None:
    """Given structured fields When log_event is called Then a JSON encoded message is logged."""

    logger = logging.getLogger("test")
    with caplog.at_level(logging.INFO):
        log_event(logger, logging.INFO, "test.event", answer=42, skipped=None)

    assert caplog.records
    payload = json.loads(caplog.records[0].getMessage())
    assert payload == {"answer": 42, "event": "test.event"}


def test_trace_context_records_duration(caplog: pytest.LogCaptureFixture) -> None:
    """Given a trace context When exiting Then start and end events are logged with duration."""

    logger = logging.getLogger("trace-test")
    with caplog.at_level(logging.INFO):
        with trace("unit", logger=logger, level=logging.INFO) as span:
            span.note(step="inner")

    messages = [record.getMessage() for record in caplog.records]
    assert any("render.start" in message for message in messages)
    assert any("render.end" in message and "duration_ms" in message for message in messages)
    assert not any("render.note" in message for message in messages)


def test_trace_logs_and_reraises_errors(caplog: pytest.LogCaptureFixture) -> None:
    """Given a failing render When traced Then an error event is logged and the exception propagates."""

    logger = logging.getLogger("trace-test")
    with caplog.at_level(logging.DEBUG):
        with pytest.raises(ValueError):
            with trace("unit", logger=logger):
                raise ValueError("boom")

    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert errors
    assert "render.error" in errors[0].getMessage()
