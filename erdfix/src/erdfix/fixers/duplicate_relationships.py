"""Remove repeated relationship lines between the same pair of entities."""

from typing import Optional, Tuple
from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from erdfix.parsing.relationships import extract_relationships
from erdfix.validation.duplicates import matches_endpoints
from .base import remove_spans, require_fix_inputs


def _endpoints(warning: ErdWarning) -> Optional[Tuple[str, str]]:
    fix_data = warning.fix_data or {}
    source, target = fix_data.get("source"), fix_data.get("target")
    if source and target:
        return source, target
    if warning.relationship and " → " in warning.relationship:
        source, target = warning.relationship.split(" → ", 1)
        return source.strip(), target.strip()
    return None


def fix_duplicate_relationships(raw_text: str, warning: ErdWarning) -> FixResult:
    """
    Keep the first relationship line between two entities and delete the rest.

    Direction is ignored. Later lines are removed whole, newline included,
    and nothing else in the text changes.
    """
    require_fix_inputs(raw_text, warning)
    endpoints = _endpoints(warning)
    if endpoints is None:
        return FixResult.fail("Warning does not identify the relationship endpoints")

    source, target = endpoints
    matching = [r for r in extract_relationships(raw_text) if matches_endpoints(r, source, target)]
    if len(matching) < 2:
        return FixResult.fail("No duplicate relationships found to remove")

    text = remove_spans(raw_text, [rel.span for rel in matching[1:]])
    return FixResult.ok(
        text,
        f"Removed {len(matching) - 1} duplicate relationship(s) between '{source}' and '{target}'",
    )
