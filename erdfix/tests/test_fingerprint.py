"""Tests for warning fingerprints and suppression."""

import pytest
from erdfix.config.settings import get_settings
from erdfix.validation import fingerprint
from erdfix.validation.fingerprint import (
    SUPPRESSED_WARNING_IDS,
    create_warning,
    fingerprint_key,
    generate_warning_id,
    is_suppressed,
    string_hash,
)


def test_string_hash_known_values():
    """Test the polynomial hash against hand-computed values."""
    assert string_hash("") == 0
    assert string_hash("a") == 97
    assert string_hash("ab") == 3105


def test_string_hash_wraps_to_signed_int32():
    """Test overflow wraps into the signed 32-bit range."""
    assert string_hash("polygenelubricants") == -2147483648
    assert f"warning_{abs(string_hash('polygenelubricants'))}" == "warning_2147483648"


def test_string_hash_uses_utf16_code_units():
    """Test characters outside the BMP hash as two surrogates."""
    assert string_hash("\U0001F600") == 0xD83D * 31 + 0xDE00


def test_fingerprint_key_template():
    """Test missing parts become empty strings."""
    assert fingerprint_key("choice", "Ticket", None, None, "msg") == "choice|Ticket|||msg"


def test_generate_warning_id_is_deterministic():
    """Test the id depends only on the semantic fields."""
    first = generate_warning_id("duplicate-column", "Customer", "name", None, "dup")
    second = generate_warning_id("duplicate-column", "Customer", "name", None, "dup")
    other = generate_warning_id("duplicate-column", "Customer", "email", None, "dup")
    key = "duplicate-column|Customer|name||dup"
    assert first == second == f"warning_{abs(string_hash(key))}"
    assert first != other


def test_known_suppressed_ids():
    """Test both historical fingerprints are in the table."""
    assert SUPPRESSED_WARNING_IDS == {"warning_1304205498", "warning_1571953518"}
    assert is_suppressed("warning_1304205498")
    assert not is_suppressed("warning_1")


def test_create_warning_sets_id():
    """Test warnings are built with their fingerprint."""
    warning = create_warning(type="status", entity="Ticket", message="m", severity="info")
    assert warning.id == generate_warning_id("status", "Ticket", None, None, "m")
    assert warning.severity == "info"
    assert not warning.auto_fixable


def test_create_warning_drops_suppressed(monkeypatch):
    """Test a warning whose id is in the table is dropped."""
    warning_id = generate_warning_id("status", "Ticket", None, None, "m")
    monkeypatch.setattr(fingerprint, "SUPPRESSED_WARNING_IDS", frozenset({warning_id}))
    assert create_warning(type="status", entity="Ticket", message="m") is None


def test_suppression_can_be_disabled(monkeypatch):
    """Test SUPPRESS_KNOWN_WARNINGS=false keeps every warning."""
    warning_id = generate_warning_id("status", "Ticket", None, None, "m")
    monkeypatch.setattr(fingerprint, "SUPPRESSED_WARNING_IDS", frozenset({warning_id}))
    monkeypatch.setenv("SUPPRESS_KNOWN_WARNINGS", "false")
    assert get_settings().suppress_known_warnings is False
    assert create_warning(type="status", entity="Ticket", message="m") is not None


def test_create_warning_requires_type_and_message():
    """Test programmer errors raise ValueError."""
    with pytest.raises(ValueError):
        create_warning(type="status")
