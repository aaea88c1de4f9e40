"""Naming, system column, status, choice and CDM collision validators."""

from typing import List, Optional
import re
from erdfix.cdm.registry import CdmRegistry, get_default_registry
from erdfix.ir.erd import Attribute, Entity, Relationship
from erdfix.ir.warning import ErdWarning
from .base import collect, custom_entities, require_inputs
from .fingerprint import create_warning

PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")

RESERVED_ENTITY_NAMES = frozenset({"User", "Role", "Group", "System", "Admin"})

# Columns Dataverse creates on every table
SYSTEM_COLUMNS = frozenset({"statecode", "statuscode", "ownerid", "owninguser", "owningteam"})

CHOICE_TYPES = frozenset({"choice", "picklist", "category", "optionset"})


def to_pascal_case(name: str) -> str:
    """
    Convert a snake/kebab/space separated name to PascalCase.

    Examples:
        >>> to_pascal_case("order_line")
        'OrderLine'
    """
    return "".join(
        word[:1].upper() + word[1:].lower() for word in re.split(r"[\s_-]+", name) if word
    )


def is_choice_column(attr: Attribute) -> bool:
    attr_type = attr.type.lower()
    return attr_type in CHOICE_TYPES or attr_type.startswith("choice(")


def _name_is_free(entity: Entity, new_name: str) -> bool:
    return all(a.name.lower() != new_name.lower() for a in entity.attributes)


def check_naming_convention(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """Flag entity names that are not PascalCase or that shadow system tables."""
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for entity in entities:
        name = entity.name
        if not PASCAL_CASE.match(name):
            warnings.append(
                create_warning(
                    type="naming-convention",
                    category="naming",
                    severity="info",
                    entity=name,
                    message=f"Entity '{name}' should use PascalCase naming convention.",
                    suggestion=f"Consider renaming to: {to_pascal_case(name)}",
                )
            )
        if name in RESERVED_ENTITY_NAMES:
            warnings.append(
                create_warning(
                    type="reserved-keyword",
                    category="naming",
                    severity="warning",
                    entity=name,
                    message=f"Entity name '{name}' might conflict with system entities.",
                    suggestion=f"Consider using a more specific name like 'Custom{name}' or '{name}Entity'.",
                )
            )
    return collect(warnings)


def check_name_conflicts(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """
    Flag custom entities with a non-primary column called ``name``.

    Dataverse generates a primary name column for every custom table, so a
    second ``name`` column collides with it. The rename fix is only offered
    when there is exactly one such column and the new name is free.
    """
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for entity in custom_entities(entities):
        named = [a for a in entity.attributes if a.name.lower() == "name"]
        conflicts = [a for a in named if not a.is_primary_key]
        if not conflicts:
            continue

        column = conflicts[0].name
        new_name = f"{entity.name.lower()}_name"
        warnings.append(
            create_warning(
                type="naming",
                category="naming",
                severity="warning",
                entity=entity.name,
                attribute=column,
                message=(
                    f"Entity '{entity.name}' has a non-primary column called '{column}'. "
                    "This will conflict with the auto-generated primary name column in Dataverse."
                ),
                suggestion=f"Consider renaming the column to '{new_name}', 'display_name', or 'title'.",
                auto_fixable=len(named) == 1 and _name_is_free(entity, new_name),
                fix_data={
                    "action": "rename_column",
                    "entity": entity.name,
                    "column": column,
                    "new_name": new_name,
                },
            )
        )
    return collect(warnings)


def check_system_columns(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """Flag custom columns that reuse a Dataverse system column name."""
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for entity in custom_entities(entities):
        for attr in entity.attributes:
            if attr.name.lower() not in SYSTEM_COLUMNS:
                continue
            new_name = f"{entity.name.lower()}_{attr.name.lower()}"
            same_name = [a for a in entity.attributes if a.name == attr.name]
            warnings.append(
                create_warning(
                    type="system-column",
                    category="naming",
                    severity="error",
                    entity=entity.name,
                    attribute=attr.name,
                    message=(
                        f"Column '{attr.name}' conflicts with a system attribute "
                        "that already exists in Dataverse."
                    ),
                    suggestion=(
                        f"Rename '{attr.name}' to '{new_name}' "
                        "(recommended pattern: tablename_columnname)."
                    ),
                    auto_fixable=len(same_name) == 1 and _name_is_free(entity, new_name),
                    fix_data={
                        "action": "rename_column",
                        "entity": entity.name,
                        "column": attr.name,
                        "new_name": new_name,
                    },
                )
            )
    return collect(warnings)


def check_status_columns(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """Report custom ``status`` columns; Dataverse manages status itself."""
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for entity in custom_entities(entities):
        columns = [
            a.name for a in entity.attributes if a.name.lower() == "status" or a.type.lower() == "status"
        ]
        if not columns:
            continue
        warnings.append(
            create_warning(
                type="status",
                category="system",
                severity="info",
                entity=entity.name,
                attribute=", ".join(columns),
                message=(
                    f"Entity '{entity.name}' contains 'status' columns which will be ignored. "
                    "Dataverse provides built-in status functionality via statecode/statuscode."
                ),
                suggestion=(
                    "If you need custom status options, create a choice column in Dataverse "
                    "after deployment and sync a global choice set to it."
                ),
                context={"columns": columns},
            )
        )
    return collect(warnings)


def check_choice_columns(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """Flag choice/picklist columns, which are created outside the ERD."""
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for entity in entities:
        columns = [a.name for a in entity.attributes if is_choice_column(a)]
        if not columns:
            continue
        joined = ", ".join(columns)
        warnings.append(
            create_warning(
                type="choice",
                category="structure",
                severity="warning",
                entity=entity.name,
                attribute=joined,
                message=(
                    f"Entity '{entity.name}' has {len(columns)} choice column(s) ({joined}) "
                    "that should be created manually in Dataverse."
                ),
                suggestion=(
                    "Remove the choice columns from the ERD and add them as choice columns "
                    "backed by global choices after deployment."
                ),
                auto_fixable=True,
                fix_data={
                    "action": "remove_choice_columns",
                    "entity": entity.name,
                    "columns": columns,
                },
            )
        )
    return collect(warnings)


def check_cdm_collisions(
    entities: List[Entity],
    relationships: List[Relationship],
    raw_text: str,
    registry: Optional[CdmRegistry] = None,
) -> List[ErdWarning]:
    """
    Report entities whose name matches a Common Data Model table.

    Bind ``registry`` with functools.partial to use a custom catalogue.
    """
    require_inputs(entities, relationships, raw_text)
    registry = registry or get_default_registry()
    warnings = []
    for entity in entities:
        canonical = registry.canonical_name(entity.name)
        if canonical is None:
            continue
        description = registry.describe(entity.name)
        suggestion = f"Consider using the existing CDM {canonical} entity instead of creating a custom one."
        if description:
            suggestion = f"{suggestion} ({canonical}: {description})"
        warnings.append(
            create_warning(
                type="cdm-collision",
                category="cdm",
                severity="info",
                entity=entity.name,
                message=f"Entity '{entity.name}' matches CDM entity '{canonical}'.",
                suggestion=suggestion,
                context={"cdm_entity": canonical},
            )
        )
    return collect(warnings)
