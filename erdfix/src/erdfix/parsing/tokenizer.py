"""Entity and attribute extraction from Mermaid ERD text."""

from typing import List, Optional
import re
from erdfix.ir.erd import Attribute, Entity
from erdfix.config.logging import get_logger
from .patterns import (
    ATTRIBUTE_DECL,
    COMMENT_PREFIXES,
    CONSTRAINT_TOKEN,
    ENTITY_BLOCK,
    entity_block_pattern,
)

logger = get_logger(__name__)


def _constraints_from_keys(keys: str) -> List[str]:
    constraints: List[str] = []
    for token in CONSTRAINT_TOKEN.findall(keys or ""):
        if token not in constraints:
            constraints.append(token)
    return constraints


def _attribute_from_match(match: "re.Match[str]", offset: int) -> Attribute:
    start, end = match.span()
    name_start, name_end = match.span("name")
    return Attribute(
        name=match.group("name"),
        type=match.group("type"),
        constraints=_constraints_from_keys(match.group("keys")),
        description=match.group("description"),
        span=(offset + start, offset + end),
        name_span=(offset + name_start, offset + name_end),
    )


def scan_attributes(text: str, start: int, end: int) -> List[Attribute]:
    """
    Tokenize the attribute declarations in ``text[start:end]``.

    Several declarations may share one physical line. Comment lines and
    anything that does not look like ``<type> <name> [keys] ["description"]``
    are skipped.

    Args:
        text: Full ERD source
        start: Offset of the first body character
        end: Offset one past the last body character

    Returns:
        Attributes in source order, with absolute spans into ``text``
    """
    attributes: List[Attribute] = []
    pos = start
    for line in text[start:end].splitlines(keepends=True):
        line_start = pos
        pos += len(line)
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIXES):
            continue
        for match in ATTRIBUTE_DECL.finditer(line):
            attributes.append(_attribute_from_match(match, line_start))
    return attributes


def _entity_from_match(text: str, match: "re.Match[str]") -> Entity:
    body_start, body_end = match.span("body")
    return Entity(
        name=match.group("name"),
        attributes=scan_attributes(text, body_start, body_end),
        span=match.span(),
        body_span=(body_start, body_end),
    )


def tokenize_entities(text: Optional[str]) -> List[Entity]:
    """
    Extract every ``Name { ... }`` block from ERD text.

    Never raises on malformed input: unparseable fragments are skipped and an
    empty list is returned when nothing parses.

    Args:
        text: Raw Mermaid ERD source

    Returns:
        Entities in source order
    """
    if not text:
        return []

    entities = [_entity_from_match(text, match) for match in ENTITY_BLOCK.finditer(text)]
    logger.debug(
        f"Tokenized {len(entities)} entities "
        f"({sum(len(e.attributes) for e in entities)} attributes)"
    )
    return entities


def find_entity_block(text: str, entity_name: str) -> Optional[Entity]:
    """
    Locate the first block for ``entity_name`` (exact, case-sensitive).

    Returns:
        The tokenized entity, or None if no such block exists
    """
    if not text or not entity_name:
        return None
    match = entity_block_pattern(entity_name).search(text)
    if match is None:
        return None
    return _entity_from_match(text, match)
