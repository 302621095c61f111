import json
import logging

import pytest

from src.observability.logging import JsonFormatter, RequestContextFilter


@pytest.mark.unit
def test_json_formatter_outside_request():
    record = logging.LogRecord("src.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    RequestContextFilter().filter(record)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["request_id"] is None
    assert payload["path"] is None


@pytest.mark.unit
def test_request_context_is_attached(app):
    with app.test_request_context("/api/search-by-bpm", method="POST", headers={"X-Forwarded-For": "10.0.0.1"}):
        from flask import g
        g.request_id = "req-1"
        record = logging.LogRecord("src.test", logging.WARNING, __file__, 1, "msg", (), None)
        RequestContextFilter().filter(record)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["request_id"] == "req-1"
    assert payload["path"] == "/api/search-by-bpm"
    assert payload["method"] == "POST"
    assert payload["remote_addr"] == "10.0.0.1"
