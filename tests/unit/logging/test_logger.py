# tests/unit/logging/test_logger.py — v3
"""Tests for logging/logger.py — formatters and setup_logging."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from embedlrmi.logging.context import ContextFilter, set_action_context, set_lookup_context
from embedlrmi.logging.logger import JsonFormatter, TextFormatter, setup_logging


def _record(msg: str = "Hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="embedlrmi.test", level=logging.WARNING, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_basic_fields(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "WARNING"
        assert parsed["logger"] == "embedlrmi.test"
        assert parsed["msg"] == "Hello"
        assert "ts" in parsed
        assert "page_url" not in parsed

    def test_context_is_top_level(self):
        set_lookup_context("https://example.org/wiki/Foo", "embedlrmi:abc")
        set_action_context("lrmi")
        record = _record("lookup")
        ContextFilter().filter(record)
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["page_url"] == "https://example.org/wiki/Foo"
        assert parsed["cache_key"] == "embedlrmi:abc"
        assert parsed["action"] == "lrmi"

    def test_unfiltered_record_uses_live_context(self):
        set_action_context("purge")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["action"] == "purge"

    def test_explicit_extra_wins(self):
        set_action_context("view")
        record = _record(action="save")
        ContextFilter().filter(record)
        assert json.loads(JsonFormatter().format(record))["action"] == "save"

    def test_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        parsed = json.loads(JsonFormatter().format(record))
        assert "ValueError: boom" in parsed["exc"]

    def test_non_ascii_kept(self):
        assert "Leçon" in JsonFormatter().format(_record("Leçon"))


class TestTextFormatter:
    def test_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "WARNING" in output
        assert "embedlrmi.test: Hello text" in output

    def test_appends_action_and_page(self):
        set_lookup_context("https://example.org/wiki/Foo")
        set_action_context("save")
        output = TextFormatter().format(_record())
        assert output.endswith("Hello [save] (https://example.org/wiki/Foo)")


class TestSetupLogging:
    def test_json_to_stderr(self, capsys):
        setup_logging(level="debug", log_format="json")
        root = logging.getLogger("embedlrmi")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

        set_action_context("view")
        logging.getLogger("embedlrmi.gateway").warning("cache down")
        captured = capsys.readouterr()
        assert captured.out == ""
        line = json.loads(captured.err.strip().splitlines()[-1])
        assert line["msg"] == "cache down"
        assert line["action"] == "view"

    def test_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("embedlrmi")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reconfigure_does_not_duplicate(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("embedlrmi").handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "embedlrmi.log"
        setup_logging(log_file=log_file)
        logging.getLogger("embedlrmi.cache").warning("written")
        for handler in logging.getLogger("embedlrmi").handlers:
            handler.flush()
        assert json.loads(log_file.read_text(encoding="utf-8"))["msg"] == "written"

    def test_quiets_httpx(self):
        setup_logging()
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            setup_logging(level="LOUD")
