"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from ootcheck.core.observability.logging_config import parse_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    def test_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("ERROR") == logging.ERROR

    def test_fallback(self):
        assert parse_level(None) == logging.WARNING
        assert parse_level("chatty") == logging.WARNING


class TestSetupLogging:
    def test_single_console_handler(self):
        setup_logging("INFO")
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_file_handler_lower_level(self, tmp_path: Path):
        log_file = tmp_path / "ootcheck.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("ootcheck.test").debug("candidate checked")
        for handler in root.handlers:
            handler.flush()
        assert "candidate checked" in log_file.read_text()

    def test_console_format_follows_level(self):
        setup_logging("WARNING")
        plain = logging.getLogger().handlers[0].formatter
        setup_logging("DEBUG")
        detailed = logging.getLogger().handlers[0].formatter
        assert plain._fmt == "ootcheck: %(message)s"
        assert "%(lineno)d" in detailed._fmt
