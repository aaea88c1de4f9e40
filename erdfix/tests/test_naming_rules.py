"""Tests for naming, system column, status, choice and CDM validators."""

from erdfix.cdm.registry import NullCdmRegistry, StaticCdmRegistry, get_default_registry, mark_cdm_candidates
from erdfix.parsing.tokenizer import tokenize_entities
from erdfix.validation.naming_rules import (
    check_cdm_collisions,
    check_choice_columns,
    check_name_conflicts,
    check_naming_convention,
    check_status_columns,
    check_system_columns,
    to_pascal_case,
)


def _run(check, text, **kwargs):
    entities = mark_cdm_candidates(tokenize_entities(text), get_default_registry())
    return check(entities, [], text, **kwargs)


def test_to_pascal_case():
    """Test snake and kebab names convert to PascalCase."""
    assert to_pascal_case("order_line") == "OrderLine"
    assert to_pascal_case("customer") == "Customer"
    assert to_pascal_case("sales-order item") == "SalesOrderItem"


def test_naming_convention():
    """Test non-PascalCase entity names are reported as info."""
    text = "erDiagram\n    order_line {\n        string id PK\n    }\n"
    warnings = _run(check_naming_convention, text)
    assert [(w.type, w.severity) for w in warnings] == [("naming-convention", "info")]
    assert "OrderLine" in warnings[0].suggestion


def test_reserved_entity_names():
    """Test names that shadow system tables."""
    text = "erDiagram\n    Role {\n        string role_id PK\n    }\n"
    warnings = _run(check_naming_convention, text)
    assert [(w.type, w.entity) for w in warnings] == [("reserved-keyword", "Role")]


def test_name_conflict_fixable():
    """Test a plain 'name' column gets a rename suggestion."""
    text = 'erDiagram\n    Customer {\n        string customer_id PK\n        string name "Full name"\n    }\n'
    warnings = _run(check_name_conflicts, text)
    assert len(warnings) == 1
    warning = warnings[0]
    assert warning.type == "naming"
    assert warning.attribute == "name"
    assert warning.auto_fixable
    assert warning.fix_data == {
        "action": "rename_column",
        "entity": "Customer",
        "column": "name",
        "new_name": "customer_name",
    }


def test_name_conflict_not_fixable_when_target_exists():
    """Test the rename is not offered if customer_name is taken."""
    text = (
        "erDiagram\n    Customer {\n        string customer_id PK\n"
        "        string name\n        string customer_name\n    }\n"
    )
    warnings = _run(check_name_conflicts, text)
    assert len(warnings) == 1
    assert not warnings[0].auto_fixable


def test_name_conflict_ignores_primary_key_and_cdm():
    """Test PK name columns and CDM entities are not reported."""
    text = (
        "erDiagram\n    Tag {\n        string name PK\n    }\n"
        "    Contact {\n        string contact_id PK\n        string name\n    }\n"
    )
    assert _run(check_name_conflicts, text) == []


def test_system_columns():
    """Test Dataverse system column names are errors with a rename fix."""
    text = "erDiagram\n    Project {\n        string project_id PK\n        string statecode\n        string OwnerId\n    }\n"
    warnings = _run(check_system_columns, text)
    assert [w.attribute for w in warnings] == ["statecode", "OwnerId"]
    assert all(w.severity == "error" and w.auto_fixable for w in warnings)
    assert warnings[1].fix_data["new_name"] == "project_ownerid"


def test_status_columns():
    """Test status columns are reported once per entity, not fixable."""
    text = "erDiagram\n    Ticket {\n        string ticket_id PK\n        string status\n        status state\n    }\n"
    warnings = _run(check_status_columns, text)
    assert len(warnings) == 1
    assert warnings[0].severity == "info"
    assert not warnings[0].auto_fixable
    assert warnings[0].context["columns"] == ["status", "state"]


def test_choice_columns():
    """Test choice-typed columns are grouped in one fixable warning."""
    text = (
        "erDiagram\n    Ticket {\n        string ticket_id PK\n        choice priority\n"
        "        picklist severity\n        choice(Low,High) impact\n        string title\n    }\n"
    )
    warnings = _run(check_choice_columns, text)
    assert len(warnings) == 1
    assert warnings[0].type == "choice"
    assert warnings[0].auto_fixable
    assert warnings[0].fix_data["columns"] == ["priority", "severity", "impact"]


def test_cdm_collisions_default_registry():
    """Test CDM names are reported case-insensitively."""
    text = "erDiagram\n    account {\n        string account_id PK\n    }\n    Widget {\n        string widget_id PK\n    }\n"
    warnings = _run(check_cdm_collisions, text)
    assert [(w.type, w.entity, w.severity) for w in warnings] == [("cdm-collision", "account", "info")]
    assert warnings[0].context["cdm_entity"] == "Account"


def test_cdm_collisions_custom_registry():
    """Test an injected registry with aliases."""
    text = "erDiagram\n    Customer {\n        string customer_id PK\n    }\n"
    registry = StaticCdmRegistry(aliases={"Customer": "Account"})
    warnings = _run(check_cdm_collisions, text, registry=registry)
    assert len(warnings) == 1
    assert "Account" in warnings[0].message
    assert _run(check_cdm_collisions, text, registry=NullCdmRegistry()) == []
