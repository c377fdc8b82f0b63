"""Tests for centralized logging setup."""

import logging

import pytest

from stablesocket import logging_config


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_console_only_without_service_name(restore_root_logger):
    logging_config.setup_logging(level="DEBUG")

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0], logging.FileHandler)
    assert root.level == logging.DEBUG
    assert logging.getLogger("websockets").level == logging.WARNING


def test_service_name_adds_file_handler(restore_root_logger, tmp_path):
    logging_config.setup_logging("client", log_dir=tmp_path)
    logging.getLogger("stablesocket.test").info("hello file")

    assert (tmp_path / "client.log").exists()
    assert any(isinstance(handler, logging.FileHandler) for handler in restore_root_logger.handlers)


def test_repeated_setup_does_not_duplicate_handlers(restore_root_logger):
    logging_config.setup_logging()
    logging_config.setup_logging()

    assert len(restore_root_logger.handlers) == 1


def test_unknown_level_name_is_rejected(restore_root_logger):
    with pytest.raises(ValueError):
        logging_config.setup_logging(level="CHATTY")
