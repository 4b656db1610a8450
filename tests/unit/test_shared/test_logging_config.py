"""
Unit tests for chatroom.shared.logging_config module.
"""

import json
import logging
import logging.handlers
import sys

from chatroom.shared.logging_config import (
    ColoredFormatter,
    JsonFormatter,
    LogLevel,
    configure_from_env,
    get_logger,
    setup_logging,
)


def make_record(level=logging.INFO, msg="hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("chatroom.test", level, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestColoredFormatter:
    """Test ColoredFormatter class."""

    def test_colored_formatter_colors(self):
        """Test that ColoredFormatter has expected colors."""
        formatter = ColoredFormatter()

        for level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'RESET'):
            assert level in formatter.COLORS

    def test_format_adds_color(self):
        """Test that the level name is wrapped in color codes."""
        formatter = ColoredFormatter("%(levelname)s %(message)s")

        output = formatter.format(make_record(level=logging.ERROR))

        assert output.startswith(ColoredFormatter.COLORS['ERROR'])
        assert "hello world" in output

    def test_record_not_mutated(self):
        """Test that other handlers still see the plain level name."""
        record = make_record()

        ColoredFormatter("%(levelname)s").format(record)

        assert record.levelname == "INFO"


class TestJsonFormatter:
    """Test JsonFormatter class."""

    def test_json_output(self):
        """Test that records become JSON objects."""
        output = json.loads(JsonFormatter().format(make_record()))

        assert output['level'] == "INFO"
        assert output['logger'] == "chatroom.test"
        assert output['message'] == "hello world"

    def test_extra_fields(self):
        """Test that extra attributes are included."""
        output = json.loads(JsonFormatter().format(make_record(address="localhost:80")))

        assert output['address'] == "localhost:80"
        assert 'msg' not in output

    def test_exception_info(self):
        """Test that exceptions are rendered."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("chatroom.test", logging.ERROR, __file__, 1,
                                       "failed", (), sys.exc_info())

        output = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in output['exception']


class TestSetupLogging:
    """Test setup_logging function."""

    def test_setup_logging_console_only(self):
        """Test setting up logging with console handler only."""
        logger = setup_logging(level="DEBUG")

        assert logger is logging.getLogger()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_invalid_level_defaults_to_info(self):
        """Test that unknown level names fall back to INFO."""
        assert setup_logging(level="chatty").level == logging.INFO

    def test_setup_logging_with_file(self, tmp_path):
        """Test setting up logging with a rotating file handler."""
        log_file = tmp_path / "logs" / "chat.log"

        logger = setup_logging(level="INFO", log_file=str(log_file))
        logging.getLogger("chatroom.test").info("written to file")
        for handler in logger.handlers:
            handler.flush()

        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_json_format(self):
        """Test that JSON format applies to the console handler."""
        logger = setup_logging(json_format=True)

        assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_repeated_setup_replaces_handlers(self):
        """Test that calling setup twice does not duplicate output."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1


class TestEnvironmentConfiguration:
    """Test configure_from_env and helpers."""

    def test_configure_from_env(self, monkeypatch, tmp_path):
        """Test configuring logging from environment variables."""
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("CHAT_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("CHAT_LOG_FILE", str(log_file))
        monkeypatch.setenv("CHAT_LOG_JSON", "true")

        logger = configure_from_env()

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2
        assert all(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)

    def test_get_logger(self):
        """Test getting named loggers."""
        assert get_logger("chatroom.client").name == "chatroom.client"
        assert get_logger() is logging.getLogger()

    def test_log_levels(self):
        """Test LogLevel values."""
        assert LogLevel.DEBUG.value == "DEBUG"
        assert LogLevel.CRITICAL.value == "CRITICAL"
