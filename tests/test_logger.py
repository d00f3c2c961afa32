"""Tests for logging configuration."""
import logging

from chiptracker.utils.logger import ROOT_LOGGER, get_logger


class TestGetLogger:
    """Test package logger setup."""

    def test_module_logger_is_child_of_package(self):
        """Test module loggers nest under the package logger."""
        logger = get_logger("chiptracker.state.session_store")

        assert logger.name == "chiptracker.state.session_store"
        assert logger.parent is logging.getLogger(ROOT_LOGGER)

    def test_foreign_name_is_prefixed(self):
        """Test names outside the package are placed under it."""
        assert get_logger("scripts.seed").name == "chiptracker.scripts.seed"

    def test_default_is_package_logger(self):
        """Test no name gives the package logger."""
        assert get_logger() is logging.getLogger(ROOT_LOGGER)

    def test_single_handler(self):
        """Test handlers live only on the package logger and are not duplicated."""
        for name in ("chiptracker.main", "chiptracker.cli", "chiptracker.main"):
            child = get_logger(name)
            assert child.handlers == []
            assert child.propagate

        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1
