"""Logging configuration for OIML IR."""

import logging
import sys
from pathlib import Path
from typing import Optional
from .settings import get_settings

ROOT_LOGGER = "oiml_ir"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Source locations are only worth the noise when debugging a transformer
DEBUG_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    quiet: Optional[bool] = None,
) -> None:
    """
    Configure the ``oiml_ir`` logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for file logging
        format_string: Optional custom format string
        quiet: Only show warnings and errors on the console. The log file,
            if any, still receives everything at ``level``.
    """
    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper())
    log_file_path = log_file or settings.log_file
    if quiet is None:
        quiet = settings.log_quiet

    if format_string is None:
        format_string = DEBUG_LOG_FORMAT if log_level <= logging.DEBUG else LOG_FORMAT
    formatter = logging.Formatter(format_string)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(max(log_level, logging.WARNING) if quiet else log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Library users configure their own root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance under the ``oiml_ir`` namespace
    """
    if not logging.getLogger(ROOT_LOGGER).handlers:
        setup_logging()

    if name.startswith(ROOT_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class IntentLogAdapter(logging.LoggerAdapter):
    """Prefixes every message with the intent id being transformed."""

    def process(self, msg, kwargs):
        return f"[{self.extra['intent_id']}] {msg}", kwargs


def intent_logger(logger: logging.Logger, intent_id: str) -> IntentLogAdapter:
    """Wrap ``logger`` so that lines of one document can be told apart."""
    return IntentLogAdapter(logger, {"intent_id": intent_id})
