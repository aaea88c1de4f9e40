"""Add missing foreign key columns."""

from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from .base import (
    block_indent,
    format_declaration,
    insert_before_closing_brace,
    locate_entity,
    require_fix_inputs,
)


def fix_missing_foreign_key(raw_text: str, warning: ErdWarning) -> FixResult:
    """Append ``string <referenced>_id FK`` to the entity holding the relationship key."""
    require_fix_inputs(raw_text, warning)
    fix_data = warning.fix_data or {}
    referenced = fix_data.get("references")
    key = fix_data.get("foreign_key") or (f"{referenced.lower()}_id" if referenced else None)
    if not key:
        return FixResult.fail("Warning does not specify the foreign key to add")

    name, entity = locate_entity(raw_text, warning)
    if entity is None:
        return FixResult.fail(f"Entity {name} not found")
    if key in entity.attribute_names():
        return FixResult.fail(f"Column '{key}' already exists in entity '{name}'")

    description = f"Foreign key to {referenced}" if referenced else None
    declaration = format_declaration("string", key, ["FK"], description)
    text = insert_before_closing_brace(raw_text, entity, [declaration], block_indent(raw_text, entity))
    return FixResult.ok(text, f"Added foreign key '{key}' to entity '{name}'")
