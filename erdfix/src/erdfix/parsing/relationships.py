"""Relationship line extraction from Mermaid ERD text."""

from typing import List, Optional
import re
from erdfix.ir.erd import Relationship, RelationshipKind
from erdfix.config.logging import get_logger
from .patterns import RELATIONSHIP_LINE

logger = get_logger(__name__)

_LABEL_QUOTES = re.compile(r"^[\"']|[\"']$")


def cardinality_kind(cardinality: str) -> RelationshipKind:
    """
    Classify a crow's-foot cardinality token.

    ``}`` on the left marker or ``{`` on the right marker means "many" on that
    side; anything else is "one" (zero-or-one included).

    Examples:
        >>> cardinality_kind("||--o{")
        'one-to-many'
        >>> cardinality_kind("}o--o{")
        'many-to-many'
    """
    if len(cardinality) < 6:
        return "unknown"
    left, right = cardinality[:2], cardinality[-2:]
    left_many = "}" in left
    right_many = "{" in right
    if left_many and right_many:
        return "many-to-many"
    if right_many:
        return "one-to-many"
    if left_many:
        return "many-to-one"
    return "one-to-one"


def clean_label(raw: Optional[str]) -> str:
    """Strip whitespace and one pair of surrounding quotes from a label."""
    if not raw:
        return ""
    return _LABEL_QUOTES.sub("", raw.strip())


def extract_relationships(text: Optional[str]) -> List[Relationship]:
    """
    Extract every relationship line from ERD text.

    Duplicates (same or mirrored endpoints) are kept: detecting and removing
    them is the job of the validators and fixers.

    Args:
        text: Raw Mermaid ERD source

    Returns:
        Relationships in source order; ``span`` covers the whole line
        (indentation included, newline excluded)
    """
    if not text:
        return []

    relationships: List[Relationship] = []
    for match in RELATIONSHIP_LINE.finditer(text):
        cardinality = match.group("cardinality")
        relationships.append(
            Relationship(
                source=match.group("source"),
                target=match.group("target"),
                cardinality=cardinality,
                kind=cardinality_kind(cardinality),
                label=clean_label(match.group("label")),
                span=match.span(),
            )
        )

    logger.debug(f"Extracted {len(relationships)} relationships")
    return relationships
