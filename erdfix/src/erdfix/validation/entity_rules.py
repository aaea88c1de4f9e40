"""Entity structure validators: duplicates, primary keys and empty blocks."""

from typing import Any, Dict, List
from erdfix.ir.erd import Attribute, Entity, Relationship
from erdfix.ir.warning import ErdWarning
from .base import collect, custom_entities, require_inputs
from .duplicates import choose_best_instance, find_duplicate_attribute_groups
from .fingerprint import create_warning


def _instance_data(attr: Attribute, raw_text: str) -> Dict[str, Any]:
    start, end = attr.span
    return {
        "type": attr.type,
        "name": attr.name,
        "constraints": list(attr.constraints),
        "description": attr.description,
        "text": raw_text[start:end],
        "span": [start, end],
    }


def check_duplicate_entities(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """Flag entity names declared by more than one block."""
    require_inputs(entities, relationships, raw_text)
    counts: Dict[str, int] = {}
    for entity in entities:
        counts[entity.name] = counts.get(entity.name, 0) + 1

    return collect(
        create_warning(
            type="duplicate-entity",
            category="structure",
            severity="error",
            entity=name,
            message=f"Duplicate entity name: '{name}' is defined {count} times.",
            suggestion="Merge the definitions into a single block or rename one of them.",
        )
        for name, count in counts.items()
        if count > 1
    )


def check_duplicate_columns(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """
    Flag entities that declare the same column name more than once.

    One warning per entity, whatever the number of duplicated names. The
    ``fix_data`` records every instance and the instance the fixer will keep.
    """
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for entity in entities:
        groups = find_duplicate_attribute_groups(entity.attributes)
        if not groups:
            continue

        names = list(groups)
        joined = ", ".join(names)
        warnings.append(
            create_warning(
                type="duplicate-column",
                category="structure",
                severity="error",
                entity=entity.name,
                attribute=joined,
                message=f"Entity '{entity.name}' has duplicate column names: {joined}",
                suggestion=(
                    "Each column name must be unique within an entity. "
                    "Keep one definition of each duplicated column."
                ),
                auto_fixable=True,
                fix_data={
                    "action": "remove_duplicates",
                    "entity": entity.name,
                    "attributes": names,
                    "instances": {
                        name: [_instance_data(a, raw_text) for a in items]
                        for name, items in groups.items()
                    },
                    "keep": {
                        name: _instance_data(choose_best_instance(items), raw_text)
                        for name, items in groups.items()
                    },
                },
            )
        )
    return collect(warnings)


def check_primary_keys(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """
    Flag custom entities with no primary key or with several.

    CDM candidates are skipped: their keys already exist in the platform.
    Empty entities are left to ``check_empty_entities``.
    """
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for entity in custom_entities(entities):
        if not entity.attributes:
            continue

        primary_keys = entity.primary_keys
        if not primary_keys:
            suggested = f"{entity.name.lower()}_id"
            existing = [a for a in entity.attributes if a.name == suggested]
            fixable = not existing or (len(existing) == 1 and not existing[0].constraints)
            warnings.append(
                create_warning(
                    type="primary-key",
                    category="structure",
                    severity="warning",
                    entity=entity.name,
                    message=f"Entity '{entity.name}' does not have a primary key defined.",
                    suggestion=(
                        f"Add a primary key attribute such as '{suggested}' "
                        "to uniquely identify records."
                    ),
                    auto_fixable=fixable,
                    fix_data={
                        "action": "add_primary_key",
                        "entity": entity.name,
                        "primary_key": suggested,
                        "promote_existing": bool(existing),
                    },
                )
            )
        elif len(primary_keys) > 1:
            warnings.append(
                create_warning(
                    type="multiple-primary-keys",
                    category="structure",
                    severity="error",
                    entity=entity.name,
                    attribute=", ".join(pk.name for pk in primary_keys),
                    message=(
                        f"Entity '{entity.name}' has {len(primary_keys)} primary keys. "
                        "Only one primary key is allowed per entity."
                    ),
                    suggestion="Remove the PK constraint from all but one attribute.",
                    context={"columns": [pk.name for pk in primary_keys]},
                )
            )
    return collect(warnings)


def check_empty_entities(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """Flag blocks without a single parseable attribute."""
    require_inputs(entities, relationships, raw_text)
    return collect(
        create_warning(
            type="empty-entity",
            category="structure",
            severity="warning",
            entity=entity.name,
            message=f"Entity '{entity.name}' has no attributes defined.",
            suggestion="Add at least one attribute with a primary key (PK) to make this entity useful.",
        )
        for entity in entities
        if not entity.attributes
    )
