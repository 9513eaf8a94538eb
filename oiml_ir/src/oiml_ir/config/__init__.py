"""Configuration module for OIML IR."""

from .settings import Settings, get_settings
from .logging import setup_logging, get_logger, intent_logger

__all__ = ["Settings", "get_settings", "setup_logging", "get_logger", "intent_logger"]
