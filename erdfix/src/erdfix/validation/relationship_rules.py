"""Relationship validators: endpoints, cardinality, cycles, foreign keys, duplicates."""

from typing import Dict, List, Optional, Tuple
from erdfix.ir.erd import Entity, Relationship
from erdfix.ir.warning import ErdWarning
from .base import collect, require_inputs
from .duplicates import find_duplicate_relationship_groups
from .fingerprint import create_warning


def _entity_map(entities: List[Entity]) -> Dict[str, Entity]:
    entity_map: Dict[str, Entity] = {}
    for entity in entities:
        entity_map.setdefault(entity.name, entity)
    return entity_map


def foreign_key_side(rel: Relationship) -> Tuple[str, str]:
    """
    Decide which endpoint of ``rel`` should carry the foreign key.

    The "many" side holds the key. For one-to-one relationships the target
    holds it.

    Returns:
        ``(holder, referenced)`` entity names
    """
    if rel.kind == "many-to-one":
        return rel.source, rel.target
    return rel.target, rel.source


def expected_foreign_key(referenced: str) -> str:
    return f"{referenced.lower()}_id"


def junction_name(source: str, target: str) -> str:
    return f"{source}{target}"


def check_orphaned_relationships(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """Flag relationship endpoints that name no defined entity."""
    require_inputs(entities, relationships, raw_text)
    entity_map = _entity_map(entities)
    warnings = []
    for rel in relationships:
        for name in (rel.source, rel.target):
            if name in entity_map:
                continue
            warnings.append(
                create_warning(
                    type="orphaned-relationship",
                    category="relationships",
                    severity="error",
                    entity=name,
                    relationship=rel.display,
                    message=f"Relationship references non-existent entity: '{name}'.",
                    suggestion=f"Either create the '{name}' entity or remove this relationship.",
                )
            )
            if rel.source == rel.target:
                break
    return collect(warnings)


def check_self_references(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    require_inputs(entities, relationships, raw_text)
    return collect(
        create_warning(
            type="self-reference",
            category="relationships",
            severity="warning",
            entity=rel.source,
            relationship=rel.display,
            message=f"Entity '{rel.source}' has a relationship to itself.",
            suggestion=(
                "Self-referential relationships need a separate lookup column "
                f"(for example 'parent_{rel.source.lower()}_id') in Dataverse."
            ),
        )
        for rel in relationships
        if rel.source == rel.target
    )


def check_many_to_many(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """
    Flag many-to-many relationships.

    Dataverse needs an explicit junction table; the fix is offered when both
    endpoints exist and the junction name ``<Source><Target>`` is free.
    """
    require_inputs(entities, relationships, raw_text)
    entity_map = _entity_map(entities)
    warnings = []
    for rel in relationships:
        if rel.kind != "many-to-many":
            continue
        junction = junction_name(rel.source, rel.target)
        fixable = (
            rel.source in entity_map
            and rel.target in entity_map
            and rel.source != rel.target
            and junction not in entity_map
        )
        warnings.append(
            create_warning(
                type="many-to-many",
                category="relationships",
                severity="error",
                relationship=rel.display,
                message=f"Many-to-many relationship between '{rel.source}' and '{rel.target}' detected.",
                suggestion=(
                    f"Replace it with a junction entity '{junction}' and two "
                    "one-to-many relationships."
                ),
                auto_fixable=fixable,
                fix_data={
                    "action": "convert_to_junction_table",
                    "source": rel.source,
                    "target": rel.target,
                    "junction": junction,
                },
            )
        )
    return collect(warnings)


def find_cycles(relationships: List[Relationship]) -> List[List[str]]:
    """
    Find directed cycles (source -> target) by depth-first search.

    Self-loops are ignored. Each back edge found yields one cycle, written
    as a closed path (first node repeated at the end).
    """
    graph: Dict[str, List[str]] = {}
    for rel in relationships:
        if rel.source == rel.target:
            continue
        neighbours = graph.setdefault(rel.source, [])
        if rel.target not in neighbours:
            neighbours.append(rel.target)

    cycles: List[List[str]] = []
    visited = set()
    for root in graph:
        if root in visited:
            continue
        path = [root]
        on_path = {root}
        stack = [iter(graph.get(root, []))]
        visited.add(root)
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if node in on_path:
                cycles.append(path[path.index(node):] + [node])
            elif node not in visited:
                visited.add(node)
                path.append(node)
                on_path.add(node)
                stack.append(iter(graph.get(node, [])))
    return cycles


def check_circular_dependencies(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for cycle in find_cycles(relationships):
        path = " → ".join(cycle)
        warnings.append(
            create_warning(
                type="circular-dependency",
                category="relationships",
                severity="warning",
                message=f"Circular dependency detected: {path}.",
                suggestion="Consider breaking the cycle by removing one relationship or using junction tables.",
                context={"cycle": cycle, "cycle_path": path},
            )
        )
    return collect(warnings)


def check_foreign_keys(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """
    Check that each relationship has a foreign key on its "many" side.

    Skipped for self-references, many-to-many relationships (handled by the
    junction fix), undefined endpoints and CDM entities. An FK column that
    mentions the referenced entity under another name gets a naming hint
    instead of a missing-key warning.
    """
    require_inputs(entities, relationships, raw_text)
    entity_map = _entity_map(entities)
    warnings: List[Optional[ErdWarning]] = []
    for rel in relationships:
        if rel.source == rel.target or rel.kind == "many-to-many":
            continue
        holder_name, referenced_name = foreign_key_side(rel)
        holder = entity_map.get(holder_name)
        referenced = entity_map.get(referenced_name)
        if holder is None or referenced is None:
            continue
        if holder.is_cdm_candidate or referenced.is_cdm_candidate:
            continue

        expected = expected_foreign_key(referenced_name)
        if expected in holder.attribute_names():
            continue

        similar = [
            a.name
            for a in holder.attributes
            if a.is_foreign_key and referenced_name.lower() in a.name.lower()
        ]
        if similar:
            warnings.append(
                create_warning(
                    type="foreign-key-naming",
                    category="relationships",
                    severity="info",
                    entity=holder_name,
                    attribute=similar[0],
                    relationship=rel.display,
                    message=(
                        f"Foreign key '{similar[0]}' in '{holder_name}' does not follow "
                        f"the '{expected}' naming pattern."
                    ),
                    suggestion=f"Consider renaming '{similar[0]}' to '{expected}'.",
                )
            )
            continue

        warnings.append(
            create_warning(
                type="missing-foreign-key",
                category="relationships",
                severity="warning",
                entity=holder_name,
                relationship=rel.display,
                message=f"Missing foreign key for relationship between '{rel.source}' and '{rel.target}'.",
                suggestion=f"Add foreign key attribute '{expected}' to '{holder_name}' entity.",
                auto_fixable=True,
                fix_data={
                    "action": "add_foreign_key",
                    "entity": holder_name,
                    "references": referenced_name,
                    "foreign_key": expected,
                },
            )
        )
    return collect(warnings)


def check_duplicate_relationships(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """
    Flag entity pairs connected by more than one relationship line.

    Direction is ignored, so ``A ||--o{ B`` and ``B }o--|| A`` are duplicates.
    One warning per pair, described by its first occurrence.
    """
    require_inputs(entities, relationships, raw_text)
    warnings = []
    for occurrences in find_duplicate_relationship_groups(relationships).values():
        first = occurrences[0]
        warnings.append(
            create_warning(
                type="duplicate-relationship",
                category="relationships",
                severity="warning",
                relationship=first.display,
                message=f"Duplicate relationship found between '{first.source}' and '{first.target}'.",
                suggestion="Remove duplicate relationship definitions to avoid conflicts.",
                auto_fixable=True,
                fix_data={
                    "action": "remove_duplicate",
                    "source": first.source,
                    "target": first.target,
                    "occurrences": [
                        {
                            "span": [rel.span[0], rel.span[1]],
                            "text": raw_text[rel.span[0]:rel.span[1]],
                            "cardinality": rel.cardinality,
                        }
                        for rel in occurrences
                    ],
                },
            )
        )
    return collect(warnings)
