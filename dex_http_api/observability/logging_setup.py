"""
============================================================================
Lisk DEX HTTP API v1.0.0
Logging Setup - Console and File Sinks
============================================================================

Reliability Level: STANDARD
Input Constraints: Level names from config.LOG_LEVELS
Side Effects: Replaces the handlers of the "dex_http_api" logger

Console and file sinks carry independent levels. A level of "none"
disables that sink entirely.

============================================================================
"""

import logging
import os
from typing import Optional

from dex_http_api.config import GatewayConfig

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "dex_http_api"

_LEVEL_MAP = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


def resolve_level(name: str) -> Optional[int]:
    """Map a configured level name to a logging level (None = disabled)."""
    return _LEVEL_MAP.get(name.strip().lower())


def configure_logging(config: GatewayConfig) -> logging.Logger:
    """
    Install console and file handlers on the package logger.

    Safe to call more than once; earlier handlers are closed and replaced.
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    enabled_levels = []

    console_level = resolve_level(config.console_log_level)
    if console_level is not None:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)
        enabled_levels.append(console_level)

    file_level = resolve_level(config.file_log_level)
    if file_level is not None and config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
        enabled_levels.append(file_level)

    if enabled_levels:
        package_logger.setLevel(min(enabled_levels))
        package_logger.propagate = False
    else:
        package_logger.addHandler(logging.NullHandler())

    return package_logger


__all__ = ["LOG_FORMAT", "LOG_DATE_FORMAT", "configure_logging", "resolve_level"]
