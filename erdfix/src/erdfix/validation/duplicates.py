"""Duplicate grouping shared by the duplicate validators and fixers.

The validator and the fixer must agree on which copy of a duplicated column
survives, so both go through ``choose_best_instance``.
"""

from typing import Dict, List, Tuple
from erdfix.ir.erd import Attribute, Relationship


def find_duplicate_attribute_groups(attributes: List[Attribute]) -> Dict[str, List[Attribute]]:
    """
    Group attributes by exact (case-sensitive) name.

    Returns:
        Mapping of duplicated name to all its instances in source order; only
        names occurring at least twice, ordered by first occurrence
    """
    groups: Dict[str, List[Attribute]] = {}
    for attr in attributes:
        groups.setdefault(attr.name, []).append(attr)
    return {name: items for name, items in groups.items() if len(items) > 1}


def choose_best_instance(instances: List[Attribute]) -> Attribute:
    """
    Pick the copy of a duplicated column to keep.

    Priority: has a constraint (PK/FK/UK), then has a non-empty description,
    then the first occurrence.
    """
    best = instances[0]
    for current in instances[1:]:
        if current.constraints and not best.constraints:
            best = current
            continue
        if best.constraints and not current.constraints:
            continue
        if current.description and not best.description:
            best = current
    return best


def find_duplicate_relationship_groups(
    relationships: List[Relationship],
) -> Dict[Tuple[str, str], List[Relationship]]:
    """
    Group relationships by undirected endpoint pair.

    ``A ||--o{ B`` and ``B ||--o{ A`` land in the same group.

    Returns:
        Mapping of sorted endpoint pair to its occurrences in source order;
        only pairs with at least two occurrences, ordered by first occurrence
    """
    groups: Dict[Tuple[str, str], List[Relationship]] = {}
    for rel in relationships:
        groups.setdefault(rel.endpoints, []).append(rel)
    return {key: items for key, items in groups.items() if len(items) > 1}


def matches_endpoints(rel: Relationship, source: str, target: str) -> bool:
    """True if ``rel`` connects ``source`` and ``target`` in either direction."""
    return (rel.source == source and rel.target == target) or (
        rel.source == target and rel.target == source
    )
