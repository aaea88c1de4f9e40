"""Rename columns that collide with Dataverse-generated columns."""

from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from .base import locate_entity, require_fix_inputs


def fix_column_rename(raw_text: str, warning: ErdWarning) -> FixResult:
    """
    Rename one column declaration in place.

    Used for ``naming`` and ``system-column`` warnings. Only the name token is
    replaced; type, keys and description are untouched. A primary-key copy
    is never the one renamed when a non-key copy exists.
    """
    require_fix_inputs(raw_text, warning)
    fix_data = warning.fix_data or {}
    column = fix_data.get("column") or warning.attribute
    new_name = fix_data.get("new_name")
    if not column or not new_name:
        return FixResult.fail("Warning does not specify the column to rename")

    name, entity = locate_entity(raw_text, warning)
    if entity is None:
        return FixResult.fail(f"Entity {name} not found")

    matches = [a for a in entity.attributes if a.name == column]
    if not matches:
        return FixResult.fail(f"Column '{column}' not found in entity '{name}'")
    if any(a.name.lower() == new_name.lower() for a in entity.attributes):
        return FixResult.fail(f"Column '{new_name}' already exists in entity '{name}'")

    target = next((a for a in matches if not a.is_primary_key), matches[0])
    start, end = target.name_span
    text = raw_text[:start] + new_name + raw_text[end:]
    return FixResult.ok(text, f"Renamed column '{column}' to '{new_name}' in entity '{name}'")
