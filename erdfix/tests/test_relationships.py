"""Tests for relationship extraction."""

import time
from erdfix.parsing.relationships import cardinality_kind, clean_label, extract_relationships

RELATIONSHIPS = """erDiagram
    Customer ||--o{ Order : places
    Order }o--|| Customer : "placed by"
    Product }o--o{ Order : contains
    Passport |o..|| Person
"""


def test_extract_relationships_in_order():
    """Test every line is extracted, duplicates included."""
    rels = extract_relationships(RELATIONSHIPS)
    assert [(r.source, r.target) for r in rels] == [
        ("Customer", "Order"),
        ("Order", "Customer"),
        ("Product", "Order"),
        ("Passport", "Person"),
    ]


def test_relationship_kinds():
    """Test cardinality tokens are classified."""
    kinds = [r.kind for r in extract_relationships(RELATIONSHIPS)]
    assert kinds == ["one-to-many", "many-to-one", "many-to-many", "one-to-one"]
    assert cardinality_kind("??") == "unknown"


def test_labels_are_unquoted():
    """Test labels lose surrounding quotes but the span keeps them."""
    rels = extract_relationships(RELATIONSHIPS)
    assert [r.label for r in rels] == ["places", "placed by", "contains", ""]
    start, end = rels[1].span
    assert RELATIONSHIPS[start:end] == '    Order }o--|| Customer : "placed by"'
    assert clean_label("  'x' ") == "x"


def test_relationship_helpers():
    """Test undirected endpoints and display text."""
    first, second = extract_relationships(RELATIONSHIPS)[:2]
    assert first.endpoints == second.endpoints == ("Customer", "Order")
    assert first.display == "Customer → Order"


def test_empty_input():
    """Test empty input yields no relationships."""
    assert extract_relationships("") == []
    assert extract_relationships("erDiagram\n") == []


def test_trailing_blanks_and_carriage_returns_are_stripped():
    """Test blanks and CR after the label stay out of it."""
    rels = extract_relationships("erDiagram\n    A ||--o{ B : owns   \r\n    B ||--|| C \r\n")
    assert [(r.source, r.target, r.label) for r in rels] == [("A", "B", "owns"), ("B", "C", "")]


def test_long_label_line_parses_in_linear_time():
    """Test a megabyte label of blanks does not backtrack."""
    text = "erDiagram\n    A ||--o{ B : a" + " " * 1_000_000 + "b\n"
    started = time.perf_counter()
    rels = extract_relationships(text)
    elapsed = time.perf_counter() - started
    assert len(rels) == 1
    assert rels[0].label == "a" + " " * 1_000_000 + "b"
    assert rels[0].span == (10, len(text) - 1)
    assert elapsed < 2.0
