from __future__ import annotations

import json
import logging
import sys

from openbalti.app.core.logging import JsonFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("openbalti.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_basic_fields():
    payload = json.loads(JsonFormatter().format(_record()))
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "openbalti.test"
    assert "http" not in payload


def test_json_formatter_includes_http_and_user_context():
    payload = json.loads(
        JsonFormatter().format(_record(user_id="u1", http_method="GET", path="/api/words", status_code=500))
    )
    assert payload["user_id"] == "u1"
    assert payload["http"] == {"method": "GET", "path": "/api/words", "status": 500}


def test_json_formatter_truncates_stack(monkeypatch):
    monkeypatch.setenv("LOG_STACK_LIMIT", "20")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()
    payload = json.loads(JsonFormatter().format(record))
    assert payload["error"]["type"] == "RuntimeError"
    assert payload["error"]["message"] == "boom"
    assert payload["error"]["stack"].endswith("...(truncated)")


def test_setup_logging_respects_level():
    setup_logging(level="warning", fmt="plain")
    assert logging.getLogger().level == logging.WARNING
    setup_logging(level="INFO", fmt="json")
    assert logging.getLogger().level == logging.INFO
