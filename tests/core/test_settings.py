import logging

import pytest
from pydantic import ValidationError
from underbar.core.config import Settings
from underbar.logger.logger import setup_logger


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("UNDERBAR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("UNDERBAR_TIMER_DAEMON", raising=False)

    settings = Settings.load()

    assert settings.LOG_LEVEL == "INFO"
    assert settings.TIMER_DAEMON is True


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("UNDERBAR_LOG_LEVEL", "debug")
    monkeypatch.setenv("UNDERBAR_TIMER_DAEMON", "0")

    settings = Settings.load()

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.TIMER_DAEMON is False


def test_settings_reject_unknown_level():
    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="chatty")


def test_setup_logger_configures_once():
    logger = setup_logger("underbar.test", level="WARNING")
    again = setup_logger("underbar.test", level="DEBUG")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert logger.propagate is False
