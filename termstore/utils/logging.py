"""
Logging configuration utilities for termstore.

Provides configurable logging with file rotation support.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from ..config import StoreConfig

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _configure_root(level: int, log_format: str, log_file: Optional[str],
                    max_bytes: int, backup_count: int) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    # Diagnostics go to stderr so command output stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def setup_logging(config: Optional[StoreConfig] = None) -> None:
    """
    Configure logging based on StoreConfig settings.

    Args:
        config: StoreConfig instance. If None, uses sensible defaults.

    Example:
        config = StoreConfig.load("termstore.yaml")
        setup_logging(config)
    """
    if config is None:
        _configure_root(logging.INFO, DEFAULT_FORMAT, None, 10485760, 3)
        return

    _configure_root(
        getattr(logging, config.log_level.upper(), logging.INFO),
        config.log_format,
        config.log_file or None,
        config.log_max_bytes,
        config.log_backup_count,
    )


def setup_logging_from_dict(config_dict: dict) -> None:
    """
    Configure logging from a dictionary.

    Args:
        config_dict: Dictionary with logging configuration.
            - level: Log level (DEBUG, INFO, WARNING, ERROR)
            - file: Optional log file path
            - format: Log format string
            - max_bytes: Max file size before rotation
            - backup_count: Number of backup files to keep
    """
    level_str = config_dict.get("level", "INFO").upper()
    _configure_root(
        getattr(logging, level_str, logging.INFO),
        config_dict.get("format", DEFAULT_FORMAT),
        config_dict.get("file"),
        config_dict.get("max_bytes", 10485760),
        config_dict.get("backup_count", 3),
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
