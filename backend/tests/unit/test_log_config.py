"""Unit tests for per-category logging levels."""

import logging

import pytest

from opsdesk.config import Settings
from opsdesk.infrastructure.logging import log_config

_TOUCHED = ["", "sqlalchemy.engine", "EntityStore", "WritePipeline"]


@pytest.fixture(autouse=True)
def restore_levels():
    saved = {name: logging.getLogger(name).level for name in _TOUCHED}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_setup_logging_applies_category_levels(monkeypatch):
    settings = Settings(log_level="WARNING", log_level_sql="ERROR", log_level_store="DEBUG")
    monkeypatch.setattr(log_config, "get_settings", lambda: settings)

    log_config.setup_logging()

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("EntityStore").level == logging.DEBUG
    assert logging.getLogger("WritePipeline").level == logging.INFO


def test_unknown_level_names_fall_back_to_info():
    assert log_config._parse_level("verbose") == logging.INFO
    assert log_config._parse_level("debug") == logging.DEBUG
