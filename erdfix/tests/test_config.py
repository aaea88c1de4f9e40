"""Tests for settings, logging and the CDM registry."""

import logging
import pytest
from erdfix.cdm.registry import CDM_ENTITIES, NullCdmRegistry, StaticCdmRegistry, mark_cdm_candidates
from erdfix.config.logging import get_logger, resolve_level, setup_logging
from erdfix.config.settings import Settings, get_settings, reset_settings
from erdfix.ir.erd import Entity


def test_settings_defaults():
    """Test default settings values."""
    settings = Settings()
    assert settings.max_input_chars == 1_000_000
    assert settings.detect_cdm is True
    assert settings.suppress_known_warnings is True


def test_settings_from_environment(monkeypatch):
    """Test environment variables override defaults, case-insensitively."""
    monkeypatch.setenv("MAX_INPUT_CHARS", "500")
    monkeypatch.setenv("detect_cdm", "false")
    reset_settings()
    settings = get_settings()
    assert settings.max_input_chars == 500
    assert settings.detect_cdm is False
    assert get_settings() is settings


def test_static_registry_lookup():
    """Test case-insensitive lookups and descriptions."""
    registry = StaticCdmRegistry()
    assert registry.is_cdm_entity("contact")
    assert registry.canonical_name("PHONECALL") == "PhoneCall"
    assert registry.describe("Lead") == CDM_ENTITIES["Lead"]
    assert not registry.is_cdm_entity("Customer")
    assert not registry.is_cdm_entity("")


def test_static_registry_aliases():
    """Test aliases must point at known entities."""
    registry = StaticCdmRegistry(aliases={"Client": "Account"})
    assert registry.canonical_name("client") == "Account"
    with pytest.raises(ValueError):
        StaticCdmRegistry(aliases={"Client": "Nope"})


def test_mark_cdm_candidates():
    """Test marking returns copies and leaves inputs untouched."""
    entities = [Entity(name="Account"), Entity(name="Widget")]
    marked = mark_cdm_candidates(entities, StaticCdmRegistry())
    assert [e.is_cdm_candidate for e in marked] == [True, False]
    assert not entities[0].is_cdm_candidate
    assert not any(e.is_cdm_candidate for e in mark_cdm_candidates(entities, NullCdmRegistry()))


def test_resolve_level():
    """Test level names are case-insensitive and typos are rejected."""
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Warning ") == logging.WARNING
    with pytest.raises(ValueError):
        resolve_level("loud")


def test_logger_namespace():
    """Test module loggers live under the erdfix logger."""
    assert get_logger("tests").name == "erdfix.tests"
    assert get_logger("erdfix.parsing").name == "erdfix.parsing"
    assert get_logger("erdfixes").name == "erdfix.erdfixes"


def test_setup_logging_file_and_verbose(tmp_path):
    """Test the file handler gets the detailed format and verbose forces DEBUG."""
    log_file = tmp_path / "erdfix.log"
    try:
        setup_logging(level="ERROR", log_file=log_file, verbose=True)
        root = logging.getLogger("erdfix")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        get_logger("tests").debug("tokenized 3 entities")
        for handler in root.handlers:
            handler.flush()
        line = log_file.read_text(encoding="utf-8")
        assert "erdfix.tests - DEBUG - [test_config.py:" in line
        assert line.rstrip().endswith("tokenized 3 entities")
    finally:
        setup_logging()
    assert len(logging.getLogger("erdfix").handlers) == 1
