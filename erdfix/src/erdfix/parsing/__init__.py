"""Regex-based tokenizing of Mermaid ERD sources."""

from .tokenizer import tokenize_entities, scan_attributes, find_entity_block
from .relationships import extract_relationships, cardinality_kind, clean_label

__all__ = [
    "tokenize_entities",
    "scan_attributes",
    "find_entity_block",
    "extract_relationships",
    "cardinality_kind",
    "clean_label",
]
