"""Tests for the JSON log formatter."""

import json
import logging

from bookserver.logging_conf import JsonFormatter


def _record(msg, **extra) -> logging.LogRecord:
    record = logging.LogRecord("bookserver.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_core_fields_and_extras() -> None:
    line = JsonFormatter().format(_record("request.end", event="request_end", status_code=404))
    payload = json.loads(line)

    assert payload["level"] == "INFO"
    assert payload["logger"] == "bookserver.test"
    assert payload["message"] == "request.end"
    assert payload["event"] == "request_end"
    assert payload["status_code"] == 404
    assert "lineno" not in payload


def test_extras_do_not_clobber_core_keys() -> None:
    payload = json.loads(JsonFormatter().format(_record("hi", level="nope")))

    assert payload["level"] == "INFO"


def test_dict_message_is_merged() -> None:
    payload = json.loads(JsonFormatter().format(_record({"event": "summary", "passed": 3})))

    assert payload["event"] == "summary"
    assert payload["passed"] == 3
