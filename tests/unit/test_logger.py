"""Unit tests for logging infrastructure."""

import json
import logging
import sys

import pytest

from recipe_generator.utils.logger import JSONFormatter, RichTextFormatter, get_logger, logger


def make_record(msg="Test message", level=logging.INFO, name="test_logger", exc_info=None, **extra):
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def fresh_logger_name():
    """Yield a logger name with no handlers attached, cleaning up afterwards."""
    names = []

    def _make(name):
        logging.getLogger(name).handlers.clear()
        names.append(name)
        return name

    yield _make
    for name in names:
        logging.getLogger(name).handlers.clear()


class TestJSONFormatter:
    """Test JSONFormatter produces valid JSON output."""

    def test_json_formatter_outputs_valid_json(self):
        output = JSONFormatter().format(make_record())
        parsed = json.loads(output)

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test_logger"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_json_formatter_includes_generation_context(self):
        """Test that generation_mode and fallback_reason extras are emitted."""
        record = make_record(generation_mode="multiple", fallback_reason="configuration")

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["generation_mode"] == "multiple"
        assert parsed["fallback_reason"] == "configuration"

    def test_json_formatter_omits_absent_context(self):
        parsed = json.loads(JSONFormatter().format(make_record()))
        assert "generation_mode" not in parsed
        assert "fallback_reason" not in parsed

    def test_json_formatter_includes_exception_traceback(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record("Error occurred", level=logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JSONFormatter().format(record))
        assert "ValueError" in parsed["exception"]


class TestRichTextFormatter:
    """Test RichTextFormatter produces colored text output."""

    def test_includes_level_logger_and_message(self):
        output = RichTextFormatter().format(make_record("Custom message", name="my_logger"))

        assert "INFO" in output
        assert "my_logger" in output
        assert "Custom message" in output

    def test_includes_icon_per_level(self):
        formatter = RichTextFormatter()
        for level, icon in RichTextFormatter.ICONS.items():
            output = formatter.format(make_record(level=getattr(logging, level)))
            assert icon in output

    def test_appends_generation_context(self):
        output = RichTextFormatter().format(make_record("Using fallback", fallback_reason="transport"))
        assert "Using fallback [fallback_reason=transport]" in output

    def test_includes_exception_traceback(self):
        try:
            raise RuntimeError("Test error")
        except RuntimeError:
            record = make_record("Error occurred", level=logging.ERROR, exc_info=sys.exc_info())

        output = RichTextFormatter().format(record)
        assert "RuntimeError" in output
        assert "Test error" in output


class TestGetLogger:
    """Test get_logger function."""

    def test_returns_same_logger_without_duplicate_handlers(self, fresh_logger_name):
        name = fresh_logger_name("test_singleton_logger")
        first = get_logger(name)
        second = get_logger(name)

        assert first is second
        assert len(second.handlers) == 1

    def test_respects_log_level_env(self, monkeypatch, fresh_logger_name):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        test_logger = get_logger(fresh_logger_name("test_level_logger"))
        assert test_logger.level == logging.WARNING

    def test_invalid_log_level_defaults_to_info(self, monkeypatch, fresh_logger_name):
        monkeypatch.setenv("LOG_LEVEL", "INVALID")
        test_logger = get_logger(fresh_logger_name("test_invalid_level"))
        assert test_logger.level == logging.INFO

    def test_log_type_json(self, monkeypatch, fresh_logger_name):
        monkeypatch.setenv("LOG_TYPE", "json")
        test_logger = get_logger(fresh_logger_name("test_json_logger"))
        assert isinstance(test_logger.handlers[0].formatter, JSONFormatter)

    def test_log_type_defaults_to_text(self, monkeypatch, fresh_logger_name):
        monkeypatch.delenv("LOG_TYPE", raising=False)
        test_logger = get_logger(fresh_logger_name("test_default_type"))
        assert isinstance(test_logger.handlers[0].formatter, RichTextFormatter)


class TestModuleLevelLogger:
    """Test module-level logger instance."""

    def test_logger_name_and_handlers(self):
        assert logger.name == "recipe_generator"
        assert len(logger.handlers) > 0

    def test_gemini_sdk_logs_are_quieted(self):
        assert logging.getLogger("google.genai").level == logging.WARNING
