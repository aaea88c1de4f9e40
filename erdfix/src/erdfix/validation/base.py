"""Shared types and helpers for rule validators."""

from typing import Callable, Iterable, List, Optional
from erdfix.ir.erd import Entity, Relationship
from erdfix.ir.warning import ErdWarning

# A validator is a pure function over the tokenized ERD and its raw text
Validator = Callable[[List[Entity], List[Relationship], str], List[ErdWarning]]


def require_inputs(
    entities: Optional[List[Entity]],
    relationships: Optional[List[Relationship]],
    raw_text: Optional[str],
) -> None:
    """Raise ValueError when a validator is called without its inputs."""
    missing = [
        name
        for name, value in (
            ("entities", entities),
            ("relationships", relationships),
            ("raw_text", raw_text),
        )
        if value is None
    ]
    if missing:
        raise ValueError(f"Missing required parameters: {', '.join(missing)}")


def collect(warnings: Iterable[Optional[ErdWarning]]) -> List[ErdWarning]:
    """Drop the None entries left by suppressed warnings."""
    return [w for w in warnings if w is not None]


def custom_entities(entities: List[Entity]) -> List[Entity]:
    """Entities that are not CDM candidates."""
    return [e for e in entities if not e.is_cdm_candidate]
