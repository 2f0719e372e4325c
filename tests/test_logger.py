"""Tests for logging setup."""

import logging

import pytest

from random_sample.utils.logger import setup_logging


# ============== Fixtures ==============

@pytest.fixture
def restore_logging():
    """Drop the handlers setup_logging installed and restore levels."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    quiet = {name: logging.getLogger(name).level for name in ("urllib3", "uvicorn.access", "chatty")}
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name, saved in quiet.items():
        logging.getLogger(name).setLevel(saved)


# ============== Tests ==============

class TestSetupLogging:

    def test_console_only(self, restore_logging):
        assert setup_logging("WARNING", log_dir=None) is None

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)

    def test_file_records_debug(self, tmp_path, restore_logging):
        log_file = setup_logging("INFO", log_dir=str(tmp_path / "logs"))

        logging.getLogger("random_sample.test").debug("host call details")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.startswith(str(tmp_path / "logs"))
        assert "host call details" in open(log_file, encoding="utf-8").read()

    def test_unknown_level_means_info(self, restore_logging):
        setup_logging("chatter", log_dir=None)

        assert logging.getLogger().level == logging.INFO

    def test_noisy_loggers_are_quieted(self, restore_logging):
        setup_logging("INFO", log_dir=None, quiet_loggers=("chatty",))

        assert logging.getLogger("chatty").level == logging.WARNING

    def test_noisy_loggers_left_alone_at_debug(self, restore_logging):
        logging.getLogger("chatty").setLevel(logging.NOTSET)

        setup_logging("DEBUG", log_dir=None, quiet_loggers=("chatty",))

        assert logging.getLogger("chatty").level == logging.NOTSET
