"""Tests for relationship validators."""

from erdfix.cdm.registry import get_default_registry, mark_cdm_candidates
from erdfix.ir.erd import Relationship
from erdfix.parsing.relationships import extract_relationships
from erdfix.parsing.tokenizer import tokenize_entities
from erdfix.validation.relationship_rules import (
    check_circular_dependencies,
    check_duplicate_relationships,
    check_foreign_keys,
    check_many_to_many,
    check_orphaned_relationships,
    check_self_references,
    find_cycles,
)

ENTITIES = """erDiagram
    Customer {
        string customer_id PK
    }
    Purchase {
        string purchase_id PK
    }
"""

IDENTICAL_RELATIONSHIPS = """erDiagram
    Employee {
        string employee_id PK
    }
    Department {
        string department_id PK
    }
    Employee ||--o{ Department : works
    Employee ||--o{ Department : works
"""


def _run(check, text):
    entities = mark_cdm_candidates(tokenize_entities(text), get_default_registry())
    return check(entities, extract_relationships(text), text)


def _rel(source, target):
    return Relationship(source=source, target=target, cardinality="||--o{", kind="one-to-many")


def test_orphaned_relationship():
    """Test references to undefined entities are errors."""
    text = ENTITIES + "    Customer ||--o{ Ghost : haunts\n"
    warnings = _run(check_orphaned_relationships, text)
    assert [(w.type, w.entity, w.severity) for w in warnings] == [
        ("orphaned-relationship", "Ghost", "error")
    ]


def test_self_reference():
    """Test relationships from an entity to itself."""
    text = ENTITIES + "    Customer ||--o{ Customer : refers\n"
    warnings = _run(check_self_references, text)
    assert [(w.type, w.relationship) for w in warnings] == [("self-reference", "Customer → Customer")]


def test_many_to_many():
    """Test many-to-many relationships are fixable errors."""
    text = ENTITIES + "    Customer }o--o{ Purchase : shares\n"
    warnings = _run(check_many_to_many, text)
    assert len(warnings) == 1
    assert warnings[0].severity == "error"
    assert warnings[0].auto_fixable
    assert warnings[0].fix_data["junction"] == "CustomerPurchase"


def test_many_to_many_not_fixable_when_junction_exists():
    """Test an existing junction name blocks the fix."""
    text = (
        ENTITIES
        + "    CustomerPurchase {\n        string id PK\n    }\n"
        + "    Customer }o--o{ Purchase : shares\n"
    )
    assert not _run(check_many_to_many, text)[0].auto_fixable


def test_find_cycles():
    """Test directed cycles are found and self-loops ignored."""
    rels = [_rel("A", "B"), _rel("B", "C"), _rel("C", "A"), _rel("D", "D")]
    assert find_cycles(rels) == [["A", "B", "C", "A"]]
    assert find_cycles([_rel("A", "B"), _rel("B", "C")]) == []


def test_circular_dependency_warning():
    """Test a cycle produces a warning with its path."""
    text = ENTITIES + "    Customer ||--o{ Purchase : makes\n    Purchase ||--o{ Customer : refers\n"
    warnings = _run(check_circular_dependencies, text)
    assert len(warnings) == 1
    assert warnings[0].context["cycle"] == ["Customer", "Purchase", "Customer"]


def test_missing_foreign_key():
    """Test the many side must hold a key to the one side."""
    text = ENTITIES + "    Customer ||--o{ Purchase : makes\n"
    warnings = _run(check_foreign_keys, text)
    assert len(warnings) == 1
    warning = warnings[0]
    assert warning.type == "missing-foreign-key"
    assert warning.entity == "Purchase"
    assert warning.auto_fixable
    assert warning.fix_data["foreign_key"] == "customer_id"
    assert warning.fix_data["references"] == "Customer"


def test_many_to_one_uses_source_as_holder():
    """Test direction is taken from the cardinality markers."""
    text = ENTITIES + "    Purchase }o--|| Customer : made_by\n"
    warnings = _run(check_foreign_keys, text)
    assert [w.entity for w in warnings] == ["Purchase"]


def test_foreign_key_present():
    """Test no warning when the expected key exists."""
    text = ENTITIES.replace(
        "string purchase_id PK\n", "string purchase_id PK\n        string customer_id FK\n"
    ) + "    Customer ||--o{ Purchase : makes\n"
    assert _run(check_foreign_keys, text) == []


def test_foreign_key_naming():
    """Test an FK under another name gets a naming hint."""
    text = ENTITIES.replace(
        "string purchase_id PK\n", "string purchase_id PK\n        string buyer_customer FK\n"
    ) + "    Customer ||--o{ Purchase : makes\n"
    warnings = _run(check_foreign_keys, text)
    assert [(w.type, w.attribute, w.severity) for w in warnings] == [
        ("foreign-key-naming", "buyer_customer", "info")
    ]


def test_foreign_keys_skip_cdm_entities():
    """Test CDM endpoints are exempt from FK checks."""
    text = (
        "erDiagram\n    Account {\n        string account_id PK\n    }\n"
        "    Purchase {\n        string purchase_id PK\n    }\n"
        "    Account ||--o{ Purchase : makes\n"
    )
    assert _run(check_foreign_keys, text) == []


def test_duplicate_relationship():
    """Test two identical lines give one warning for the pair."""
    warnings = _run(check_duplicate_relationships, IDENTICAL_RELATIONSHIPS)
    assert len(warnings) == 1
    warning = warnings[0]
    assert warning.relationship == "Employee → Department"
    assert warning.auto_fixable
    occurrences = warning.fix_data["occurrences"]
    assert len(occurrences) == 2
    assert all(o["text"] == "    Employee ||--o{ Department : works" for o in occurrences)


def test_mirrored_duplicate_relationship():
    """Test opposite directions are the same undirected edge."""
    text = ENTITIES + "    Customer ||--o{ Purchase : x\n    Purchase ||--o{ Customer : y\n"
    warnings = _run(check_duplicate_relationships, text)
    assert len(warnings) == 1
    assert warnings[0].relationship == "Customer → Purchase"
