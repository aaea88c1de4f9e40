"""Deterministic warning fingerprints and the known-noise suppression table."""

from typing import Any, FrozenSet, Optional
import struct
from erdfix.ir.warning import ErdWarning
from erdfix.config.settings import get_settings
from erdfix.config.logging import get_logger

logger = get_logger(__name__)

# Fingerprints of two historically noisy findings. They are dropped from every
# validation run without any user-facing notice; set
# SUPPRESS_KNOWN_WARNINGS=false to see them. The values depend on the exact
# hash below and on the exact key template, so neither may change.
SUPPRESSED_WARNING_IDS: FrozenSet[str] = frozenset(
    {
        "warning_1304205498",
        "warning_1571953518",
    }
)

_UINT32 = 0xFFFFFFFF


def string_hash(value: str) -> int:
    """
    Classic 32-bit polynomial string hash (``h = h*31 + unit``).

    Iterates UTF-16 code units, so characters outside the BMP contribute
    their two surrogates, and wraps to a signed 32-bit integer.

    Examples:
        >>> string_hash("ab")
        3105
        >>> string_hash("polygenelubricants")
        -2147483648
    """
    h = 0
    for (unit,) in struct.iter_unpack("<H", value.encode("utf-16-le")):
        h = (h * 31 + unit) & _UINT32
    if h > 0x7FFFFFFF:
        h -= 0x100000000
    return h


def fingerprint_key(
    warning_type: str,
    entity: Optional[str] = None,
    attribute: Optional[str] = None,
    relationship: Optional[str] = None,
    message: Optional[str] = None,
) -> str:
    """Pipe-joined fingerprint input; missing parts become empty strings."""
    return "|".join(
        [warning_type, entity or "", attribute or "", relationship or "", message or ""]
    )


def generate_warning_id(
    warning_type: str,
    entity: Optional[str] = None,
    attribute: Optional[str] = None,
    relationship: Optional[str] = None,
    message: Optional[str] = None,
) -> str:
    """Compute ``warning_<abs(hash)>`` for a warning's semantic content."""
    key = fingerprint_key(warning_type, entity, attribute, relationship, message)
    return f"warning_{abs(string_hash(key))}"


def is_suppressed(warning_id: str) -> bool:
    """True if ``warning_id`` is in the suppression table and suppression is on."""
    return get_settings().suppress_known_warnings and warning_id in SUPPRESSED_WARNING_IDS


def create_warning(**fields: Any) -> Optional[ErdWarning]:
    """
    Build an ErdWarning with its fingerprint id.

    Args:
        **fields: ErdWarning fields except ``id`` (``type`` and ``message`` required)

    Returns:
        The warning, or None when its id is in the suppression table
    """
    if "type" not in fields or "message" not in fields:
        raise ValueError("create_warning requires 'type' and 'message'")

    warning_id = generate_warning_id(
        fields["type"],
        fields.get("entity"),
        fields.get("attribute"),
        fields.get("relationship"),
        fields.get("message"),
    )
    if is_suppressed(warning_id):
        logger.debug(f"Suppressed known non-actionable warning {warning_id} ({fields['type']})")
        return None
    return ErdWarning(id=warning_id, **fields)
