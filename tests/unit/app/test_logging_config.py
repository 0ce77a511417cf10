import logging

import pytest

from app.logging_config import ROOT_LOGGER, get_logger, setup_logging
from app.settings import StoreSettings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger(ROOT_LOGGER)
    level, propagate = root.level, root.propagate
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    root.propagate = propagate


def test_get_logger_is_namespaced():
    assert get_logger("infra.db.session").name == f"{ROOT_LOGGER}.infra.db.session"


def test_setup_console_only(restore_root_logger):
    root = setup_logging(StoreSettings(log_level="WARNING", _env_file=None))
    assert root is restore_root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert root.propagate is False


def test_setup_with_file_and_repeated_calls(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "store.log"
    settings = StoreSettings(log_level="DEBUG", log_file=log_file, _env_file=None)
    setup_logging(settings)
    root = setup_logging(settings)

    assert len(root.handlers) == 2
    get_logger("test").info("hello from the store")
    for handler in root.handlers:
        handler.flush()
    assert "hello from the store" in log_file.read_text()
