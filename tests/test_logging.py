"""
Tests for logging configuration.
"""
import logging
import pytest
from logging.handlers import RotatingFileHandler

from punctrestore.LoggingSetup import (
    LOG_FILENAME,
    PACKAGE_LOGGER,
    THIRD_PARTY_LOGGERS,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Keep setup_logging() from leaking handlers into other tests."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    named_levels = {name: logging.getLogger(name).level for name in (PACKAGE_LOGGER,) + THIRD_PARTY_LOGGERS}
    yield
    for name, named_level in named_levels.items():
        logging.getLogger(name).setLevel(named_level)
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestLoggingConfiguration:
    """Test suite for setup_logging()."""

    def test_creates_log_directory_and_file(self, tmp_path):
        logs_dir = tmp_path / "logs"
        setup_logging(logs_dir, verbose=False, is_frozen=True)

        logging.getLogger("punctrestore.test").info("Test log message")

        log_file = logs_dir / LOG_FILENAME
        assert log_file.exists()
        assert "Test log message" in log_file.read_text(encoding='utf-8')

    def test_verbose_sets_debug_level(self, tmp_path):
        setup_logging(tmp_path, verbose=True, is_frozen=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_default_level_is_info(self, tmp_path):
        setup_logging(tmp_path, verbose=False, is_frozen=True)
        assert logging.getLogger().level == logging.INFO

    def test_frozen_mode_has_only_file_handler(self, tmp_path):
        setup_logging(tmp_path, is_frozen=True)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        assert handlers[0].maxBytes == 10 * 1024 * 1024
        assert handlers[0].backupCount == 5

    def test_terminal_mode_adds_console_handler(self, tmp_path):
        setup_logging(tmp_path, is_frozen=False)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 2
        assert any(type(h) is logging.StreamHandler for h in handlers)

    def test_formatter(self, tmp_path):
        setup_logging(tmp_path, is_frozen=True)
        logging.getLogger("punctrestore.test").warning("formatted")
        line = (tmp_path / LOG_FILENAME).read_text(encoding='utf-8').strip().splitlines()[-1]
        assert line.startswith("[") and "] [WARNING] punctrestore.test: formatted" in line

    def test_returns_package_logger(self, tmp_path):
        logger = setup_logging(tmp_path, verbose=True, is_frozen=True)
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG

    @pytest.mark.parametrize("verbose", [True, False])
    def test_third_party_loggers_stay_quiet(self, tmp_path, verbose):
        setup_logging(tmp_path, verbose=verbose, is_frozen=True)
        for name in THIRD_PARTY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_startup_line_names_log_file(self, tmp_path):
        setup_logging(tmp_path, is_frozen=True)
        content = (tmp_path / LOG_FILENAME).read_text(encoding='utf-8')
        assert "Logging initialized: level=INFO" in content
        assert LOG_FILENAME in content
