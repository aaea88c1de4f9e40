"""Logging configuration for erdfix.

Every module logs under the ``erdfix`` logger. Diagnostics go to stderr so
that CLI output on stdout (findings, corrected ERD text) stays clean.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from .settings import get_settings

LOGGER_NAME = "erdfix"

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(message)s"
)


def resolve_level(level: str) -> int:
    """
    Turn a level name such as ``"info"`` into its ``logging`` constant.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    verbose: bool = False,
) -> None:
    """
    Configure the ``erdfix`` logger.

    Args:
        level: Level name; defaults to ``Settings.log_level``
        log_file: Optional file that receives the detailed format;
            defaults to ``Settings.log_file``
        verbose: Log at DEBUG regardless of ``level``
    """
    settings = get_settings()
    log_level = logging.DEBUG if verbose else resolve_level(level or settings.log_level)
    log_file_path = log_file or settings.log_file

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``erdfix`` namespace, configuring logging on first use."""
    if not logging.getLogger(LOGGER_NAME).handlers:
        setup_logging()

    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
