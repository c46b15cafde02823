"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from catalog_api.core.logger import JSONFormatter, configure_logging, ensure_request_id


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("catalog", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("WARNING")


def test_configure_logging_installs_json_handler() -> None:
    configure_logging("WARNING")

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JSONFormatter)


def test_json_formatter_renders_message_and_extras() -> None:
    payload = json.loads(
        JSONFormatter().format(_record(request_id="rid-1", product_id=7, count=3))
    )

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "rid-1"
    assert payload["product_id"] == 7
    assert payload["count"] == 3
    assert "user_id" not in payload


def test_request_id_taken_from_header(app) -> None:
    with app.app_context(), app.test_request_context(headers={"X-Request-ID": "abc-123"}):
        assert ensure_request_id() == "abc-123"
        assert ensure_request_id() == "abc-123"


def test_request_id_generated_without_header(app) -> None:
    with app.app_context(), app.test_request_context():
        first = ensure_request_id()
        assert first
        assert ensure_request_id() == first
