"""Tests for settings and logging configuration."""

import logging

from oiml_ir.config.logging import get_logger, intent_logger, setup_logging
from oiml_ir.config.settings import Settings
from oiml_ir.transform.types import TransformOptions


def test_settings_defaults():
    settings = Settings()
    assert settings.default_oiml_version == "0.1.0"
    assert settings.auto_index is True
    assert settings.table_naming_convention == "snake_case"


def test_settings_from_environment(monkeypatch):
    """OIML_ prefixed variables override defaults."""
    monkeypatch.setenv("OIML_AUTO_INDEX", "false")
    monkeypatch.setenv("OIML_TABLE_NAMING_CONVENTION", "PascalCase")
    monkeypatch.setenv("OIML_DEFAULT_PROJECT_ID", "acme")
    settings = Settings()
    assert settings.auto_index is False
    assert settings.table_naming_convention == "PascalCase"
    assert settings.default_project_id == "acme"


def test_options_follow_settings(monkeypatch):
    """Transform options take their defaults from the global settings."""
    custom = Settings(auto_index=False)
    monkeypatch.setattr("oiml_ir.transform.types.get_settings", lambda: custom)
    assert TransformOptions().auto_index is False


def test_get_logger_namespacing():
    assert get_logger("oiml_ir.transform").name == "oiml_ir.transform"
    assert get_logger("scratch").name == "oiml_ir.scratch"
    assert logging.getLogger("oiml_ir").propagate is False


def test_quiet_logging_keeps_warnings():
    """Quiet mode raises the console threshold but not the logger level."""
    setup_logging(level="INFO", quiet=True)
    try:
        logger = logging.getLogger("oiml_ir")
        assert logger.level == logging.INFO
        assert logger.handlers[0].level == logging.WARNING
    finally:
        setup_logging()
    assert logging.getLogger("oiml_ir").handlers[0].level == logging.INFO


def test_debug_logging_adds_source_location():
    setup_logging(level="DEBUG")
    try:
        fmt = logging.getLogger("oiml_ir").handlers[0].formatter._fmt
        assert "%(lineno)d" in fmt
    finally:
        setup_logging()
    assert "%(lineno)d" not in logging.getLogger("oiml_ir").handlers[0].formatter._fmt


def test_intent_logger_prefixes_messages():
    """Lines logged for a document carry its intent id."""
    adapter = intent_logger(get_logger("transform.dispatch"), "sha256:abc")
    message, kwargs = adapter.process("Transformed 2 intent(s)", {})
    assert message == "[sha256:abc] Transformed 2 intent(s)"
    assert kwargs == {}
