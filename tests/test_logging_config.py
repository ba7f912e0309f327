import logging

import pytest

from wordle_cz import logging_config
from wordle_cz.logging_config import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("wordle_cz").setLevel(logging.NOTSET)
    logging_config._configured = False


def test_level_names_and_numbers():
    assert configure_logging("debug", force=True) == logging.DEBUG
    assert logging.getLogger("wordle_cz").level == logging.DEBUG
    assert configure_logging(logging.WARNING, force=True) == logging.WARNING


def test_unknown_level_falls_back_to_info():
    assert configure_logging("chatty", force=True) == logging.INFO


def test_env_level_used_when_no_argument(monkeypatch):
    monkeypatch.setitem(logging_config.CONFIG, "log_level", "ERROR")
    assert configure_logging(force=True) == logging.ERROR


def test_second_call_does_not_reconfigure():
    configure_logging("WARNING", force=True)
    configure_logging("DEBUG")
    assert logging.getLogger("wordle_cz").level == logging.WARNING
