"""
Name: Structured Logger Unit Tests

Responsibilities:
  - Verify JSON output shape
  - Verify request context enrichment and credential redaction
"""

import json
import logging

import pytest

from marketplace.context import bind_request_context, clear_context
from marketplace.logger import JSONFormatter


pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="marketplace",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="User registered",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_json_with_extra_fields():
    output = json.loads(JSONFormatter().format(_record(user_id="42")))

    assert output["message"] == "User registered"
    assert output["level"] == "INFO"
    assert output["user_id"] == "42"


def test_redacts_credentials():
    output = json.loads(
        JSONFormatter().format(_record(password="passw0rd!", Authorization="Bearer x"))
    )

    assert output["password"] == "***REDACTED***"
    assert output["Authorization"] == "***REDACTED***"


def test_includes_request_context():
    bind_request_context("req-123", "POST", "/api/publish")
    try:
        output = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()

    assert output["request_id"] == "req-123"
    assert output["method"] == "POST"
    assert output["path"] == "/api/publish"


def test_no_context_outside_requests():
    clear_context()

    output = json.loads(JSONFormatter().format(_record()))

    assert "request_id" not in output
