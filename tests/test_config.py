"""
Tests for settings and logging setup
"""

import logging
import os

from telco_churn.utils.config import Settings, settings
from telco_churn.utils.logger import setup_logger


def test_settings_paths():
    assert settings.RAW_DATA_PATH.startswith(settings.DATA_DIR)
    assert settings.RAW_DATA_PATH.endswith(".csv")
    assert os.path.isabs(settings.MODEL_DIR)


def test_settings_env_override(monkeypatch):
    monkeypatch.setenv("N_JOBS", "2")
    monkeypatch.setenv("MODEL_DIR", "/tmp/churn-models")
    fresh = Settings()
    assert fresh.N_JOBS == 2
    assert fresh.MODEL_DIR == "/tmp/churn-models"


def test_setup_logger_attaches_one_handler():
    first = setup_logger("Test_Logger")
    second = setup_logger("Test_Logger")
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.getLevelName(settings.LOG_LEVEL)
