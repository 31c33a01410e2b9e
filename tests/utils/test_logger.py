"""
Tests for logger module.

Tests cover logger setup, handler management, log levels
and file logging.
"""

import logging
import logging.handlers

import pytest

from zdoc.utils.logger import (
    VALID_LOG_LEVELS,
    add_console_handler,
    add_file_handler,
    get_logger,
    setup_logger,
)


@pytest.fixture
def log_file_path(tmp_path):
    """Create path to temporary log file."""
    return tmp_path / "logs" / "test.log"


@pytest.fixture(autouse=True)
def clean_loggers():
    """Remove handlers from the loggers used in this module."""
    names = ["test_app", "test_logger", "isolated", "isolated.child"]
    yield
    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


class TestLoggerSetup:
    """Test logger creation and configuration."""

    def test_setup_logger_creates_logger(self):
        """Test that setup_logger creates a logger instance."""
        logger = setup_logger("test_app")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test_app"

    def test_setup_logger_default_level(self):
        """Test that default log level is INFO."""
        assert setup_logger("test_app").level == logging.INFO

    def test_setup_logger_invalid_level(self):
        """Test that invalid log level raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logger("test_app", level="INVALID")

    def test_setup_logger_with_file(self, log_file_path):
        """Test that a log file adds a file handler and creates its directory."""
        logger = setup_logger("test_app", log_file=log_file_path)
        assert len(logger.handlers) == 2
        assert log_file_path.parent.is_dir()

    def test_setup_logger_twice_updates_level(self):
        """Test that a second call updates the level without stacking handlers."""
        setup_logger("test_app")
        logger = setup_logger("test_app", level="DEBUG")

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].level == logging.DEBUG


class TestGetLogger:
    """Test retrieval of module loggers."""

    def test_child_logger_has_no_handlers(self):
        """Test that handlers go to the namespace logger, not the module logger."""
        logger = get_logger("isolated.child")

        assert logger.name == "isolated.child"
        assert logger.handlers == []
        assert len(logging.getLogger("isolated").handlers) == 1

    def test_child_messages_propagate(self, caplog):
        get_logger("isolated.child")
        with caplog.at_level(logging.INFO, logger="isolated"):
            get_logger("isolated.child").info("annotating")
        assert "annotating" in caplog.text


class TestHandlers:
    """Test handler helpers."""

    def test_add_file_handler_writes(self, log_file_path):
        """Test that file logs use the detailed format."""
        logger = logging.getLogger("test_logger")
        logger.setLevel(logging.DEBUG)
        add_file_handler(logger, log_file_path)
        logger.debug("written to file")
        for handler in logger.handlers:
            handler.flush()

        content = log_file_path.read_text(encoding="utf-8")
        assert "written to file" in content
        assert "test_logger - DEBUG" in content
        assert isinstance(logger.handlers[0], logging.handlers.RotatingFileHandler)

    def test_add_console_handler(self):
        logger = logging.getLogger("test_logger")
        add_console_handler(logger, "WARNING")
        assert logger.handlers[0].level == logging.WARNING

    def test_valid_levels(self):
        assert VALID_LOG_LEVELS == ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
