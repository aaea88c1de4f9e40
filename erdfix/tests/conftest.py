"""Shared pytest fixtures."""

import pytest
from erdfix.config.settings import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings from the environment for every test."""
    reset_settings()
    yield
    reset_settings()
