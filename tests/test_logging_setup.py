import logging

import pytest
from rich.logging import RichHandler

from rulekit.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_installs_single_rich_handler():
    setup_logging("debug")
    setup_logging("debug")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], RichHandler)
    assert root.level == logging.DEBUG


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("RULEKIT_LOG_LEVEL", "warning")
    setup_logging()
    assert logging.getLogger().level == logging.WARNING


def test_defaults_to_info(monkeypatch):
    monkeypatch.delenv("RULEKIT_LOG_LEVEL", raising=False)
    setup_logging()
    assert logging.getLogger().handlers[0].level == logging.INFO
