"""Tests for termstore.utils.logging module."""

import logging

from termstore.config import StoreConfig
from termstore.reporting import cancel_all, format_error, log_reporter
from termstore.types import Confirmation
from termstore.utils.logging import get_logger, setup_logging, setup_logging_from_dict


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_with_defaults(self):
        """Should setup logging with sensible defaults."""
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_setup_with_config(self):
        """Should setup logging from StoreConfig."""
        setup_logging(StoreConfig(log_level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        """Unknown level names should not break setup."""
        setup_logging(StoreConfig(log_level="CHATTY"))
        assert logging.getLogger().level == logging.INFO

    def test_setup_with_file(self, tmp_path):
        """Should create file handler when log_file is specified."""
        log_file = tmp_path / "termstore.log"
        setup_logging(StoreConfig(log_file=str(log_file)))

        logging.getLogger("test").info("Test message")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "Test message" in log_file.read_text()

    def test_setup_with_custom_format(self):
        """Should use custom log format."""
        setup_logging(StoreConfig(log_format="[%(levelname)s] %(message)s"))
        root = logging.getLogger()
        assert root.handlers[0].formatter._fmt == "[%(levelname)s] %(message)s"

    def test_repeated_setup_does_not_stack_handlers(self):
        """Calling setup twice should replace handlers."""
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1


class TestSetupLoggingFromDict:
    """Tests for setup_logging_from_dict function."""

    def test_setup_from_dict(self):
        """Should setup logging from dictionary."""
        setup_logging_from_dict({"level": "WARNING"})
        assert logging.getLogger().level == logging.WARNING

    def test_setup_from_dict_with_file(self, tmp_path):
        """Should create file handler from dict config."""
        log_file = tmp_path / "dict.log"
        setup_logging_from_dict({
            "level": "INFO",
            "file": str(log_file),
            "format": "%(message)s",
        })

        logging.getLogger("test_dict").info("Dict test message")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "Dict test message" in log_file.read_text()


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self):
        """Should return a logger instance."""
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"


class TestReporting:
    """Tests for the default error reporter and confirmation callback."""

    def test_format_error(self):
        assert format_error("Unable to save settings", "/tmp/x") == "Error: Unable to save settings\n/tmp/x"
        assert format_error("Unable to save settings") == "Error: Unable to save settings"

    def test_log_reporter(self, caplog):
        with caplog.at_level(logging.ERROR, logger="termstore.reporting"):
            log_reporter("Unable to delete settings.", "/tmp/s")
        assert "Error: Unable to delete settings.\n/tmp/s" in caplog.text

    def test_cancel_all(self):
        assert cancel_all("Move the key?") == Confirmation.CANCEL
