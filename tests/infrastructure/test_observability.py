"""Structured Logging: JSON formatter fields and level resolution."""

import json
import logging

import pytest

from corsprobe.infrastructure import observability
from corsprobe.infrastructure.observability import (
    JSONFormatter, resolve_level, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "corsprobe.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "corsprobe.test"
    assert payload["message"] == "hello world"
    assert "timestamp" in payload


def test_json_formatter_surfaces_request_fields():
    payload = json.loads(JSONFormatter().format(
        _record(method="GET", path="/200", status_code=200, duration_ms=1.5),
    ))
    assert payload["method"] == "GET"
    assert payload["path"] == "/200"
    assert payload["status_code"] == 200
    assert payload["duration_ms"] == 1.5
    assert "error_code" not in payload


@pytest.mark.parametrize("name, expected", [
    (None, logging.INFO),
    ("", logging.INFO),
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    ("nonsense", logging.INFO),
    ("basic_format", logging.INFO),
])
def test_resolve_level(name, expected):
    assert resolve_level(name) == expected


def test_setup_logging_replaces_its_handler():
    original_level = logging.root.level
    try:
        setup_logging("DEBUG", "text")
        first = observability._handler
        setup_logging("INFO", "json")
        second = observability._handler
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert isinstance(second.formatter, JSONFormatter)
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(observability._handler)
        observability._handler = None
        logging.root.setLevel(original_level)
