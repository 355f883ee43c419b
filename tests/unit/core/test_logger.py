"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from makeshort.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("WARNING")


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord("makeshort.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    record.op = "urls.create"
    record.alias = "abc"
    record.request_id = "rid-1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello x"
    assert payload["level"] == "INFO"
    assert payload["op"] == "urls.create"
    assert payload["alias"] == "abc"
    assert payload["request_id"] == "rid-1"
    assert "user_id" not in payload
