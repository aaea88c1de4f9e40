"""Add a primary key to entities that have none."""

from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from .base import (
    block_indent,
    format_declaration,
    insert_after_opening_brace,
    locate_entity,
    require_fix_inputs,
)


def fix_primary_key(raw_text: str, warning: ErdWarning) -> FixResult:
    """
    Give an entity a ``<entity>_id`` primary key.

    An unconstrained column that already has that name is promoted with a
    ``PK`` marker; otherwise a new ``string`` declaration is inserted as the
    first line of the block.
    """
    require_fix_inputs(raw_text, warning)
    name, entity = locate_entity(raw_text, warning)
    if entity is None:
        return FixResult.fail(f"Entity {name} not found")
    if entity.primary_keys:
        return FixResult.fail(f"Entity '{name}' already has a primary key")

    fix_data = warning.fix_data or {}
    key = fix_data.get("primary_key") or f"{name.lower()}_id"
    existing = [a for a in entity.attributes if a.name == key]
    if len(existing) > 1:
        return FixResult.fail(f"Column '{key}' is declared more than once in entity '{name}'")

    if existing:
        attr = existing[0]
        if attr.constraints:
            return FixResult.fail(f"Column '{key}' in entity '{name}' already has constraints")
        end = attr.name_span[1]
        text = raw_text[:end] + " PK" + raw_text[end:]
        return FixResult.ok(text, f"Marked column '{key}' as primary key of entity '{name}'")

    declaration = format_declaration("string", key, ["PK"], f"Unique identifier for {name}")
    text = insert_after_opening_brace(raw_text, entity, [declaration], block_indent(raw_text, entity))
    return FixResult.ok(text, f"Added primary key '{key}' to entity '{name}'")
