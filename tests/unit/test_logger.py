"""
Name: Structured Logger Unit Tests

Responsibilities:
  - Verify JSON output fields and context enrichment
  - Verify secrets passed as extras are redacted
"""

import json
import logging
import sys

import pytest

from raglit.context import clear_context, request_id_var, tool_name_var
from raglit.logger import JSONFormatter, logger, set_log_level


def _record(msg="hello", exc_info=None, **extra):
    record = logging.getLogger("raglit.test").makeRecord(
        "raglit.test", logging.INFO, __file__, 10, msg, (), exc_info, extra=extra
    )
    return json.loads(JSONFormatter().format(record))


@pytest.fixture
def restore_level():
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.mark.unit
class TestJSONFormatter:
    def test_basic_fields(self):
        out = _record("hello world")

        assert out["level"] == "INFO"
        assert out["message"] == "hello world"
        assert out["logger"] == "raglit.test"
        assert out["line"] == 10
        assert "timestamp" in out

    def test_extras_are_included(self):
        out = _record(document_id="doc-1", chunks=3)

        assert out["document_id"] == "doc-1"
        assert out["chunks"] == 3

    def test_sensitive_extras_redacted(self):
        out = _record(api_key="sk-secret", Authorization="Bearer x")

        assert out["api_key"] == "[REDACTED]"
        assert out["Authorization"] == "[REDACTED]"

    def test_context_included(self):
        request_id_var.set("req-1")
        tool_name_var.set("search_chunks")
        try:
            out = _record()
        finally:
            clear_context()

        assert out["request_id"] == "req-1"
        assert out["tool"] == "search_chunks"

    def test_no_context_outside_tool_call(self):
        out = _record()

        assert "request_id" not in out
        assert "tool" not in out

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            out = _record(exc_info=sys.exc_info())

        assert out["exception"]["type"] == "RuntimeError"
        assert out["exception"]["message"] == "boom"
        assert out["exception"]["stacktrace"]


@pytest.mark.unit
class TestLoggerSetup:
    def test_single_json_handler_without_propagation(self):
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_set_log_level_by_name(self, restore_level):
        set_log_level("debug")

        assert logger.level == logging.DEBUG

    def test_set_log_level_rejects_unknown(self, restore_level):
        with pytest.raises(ValueError):
            set_log_level("LOUD")
