"""Tests for logging setup and ContextualLogger."""

import logging

import pytest

from mathblocks.log_config.logger import ContextualLogger, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    def test_console_and_file(self, tmp_path, restore_root_logger):
        setup_logging("DEBUG", str(tmp_path / "logs"))
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert (tmp_path / "logs" / "mathblocks.log").exists()

    def test_idempotent(self, tmp_path, restore_root_logger):
        setup_logging("INFO", str(tmp_path))
        setup_logging("INFO", str(tmp_path))
        assert len(restore_root_logger.handlers) == 2

    def test_console_only(self, restore_root_logger):
        setup_logging("WARNING", None)
        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.WARNING

    def test_unknown_level_defaults_to_info(self, restore_root_logger):
        setup_logging("LOUD", None)
        assert restore_root_logger.level == logging.INFO


class TestContextualLogger:
    def test_prefix(self, caplog):
        log = ContextualLogger(get_logger("mathblocks.test"), session="ab12", op="division")
        with caplog.at_level(logging.INFO, logger="mathblocks.test"):
            log.info("Round %d", 3)
        assert caplog.messages == ["[session=ab12] [op=division] Round 3"]

    def test_bind_replaces_context(self, caplog):
        log = ContextualLogger(get_logger("mathblocks.test"), op="addition")
        log.bind(op="subtraction", max=10)
        with caplog.at_level(logging.INFO, logger="mathblocks.test"):
            log.warning("changed")
        assert caplog.messages == ["[op=subtraction] [max=10] changed"]

    def test_percent_in_context(self, caplog):
        log = ContextualLogger(get_logger("mathblocks.test"), op="50%")
        with caplog.at_level(logging.INFO, logger="mathblocks.test"):
            log.info("value %s", "x")
            log.info("plain")
        assert caplog.messages == ["[op=50%] value x", "[op=50%] plain"]

    def test_no_context(self, caplog):
        log = ContextualLogger(get_logger("mathblocks.test"))
        with caplog.at_level(logging.INFO, logger="mathblocks.test"):
            log.info("bare")
        assert caplog.messages == ["bare"]
