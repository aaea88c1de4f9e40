"""Configuration module for erdfix."""

from .settings import Settings, get_settings, reset_settings
from .logging import get_logger, resolve_level, setup_logging

__all__ = ["Settings", "get_settings", "reset_settings", "setup_logging", "get_logger", "resolve_level"]
