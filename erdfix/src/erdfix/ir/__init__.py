"""Intermediate representation of ERD sources and validation results."""

from .erd import Attribute, Entity, Relationship, Constraint, RelationshipKind, Span
from .warning import ErdWarning, WarningType, Severity, WarningCategory
from .results import FixResult, AppliedFix, ValidationSummary, ValidationResult

__all__ = [
    "Attribute",
    "Entity",
    "Relationship",
    "Constraint",
    "RelationshipKind",
    "Span",
    "ErdWarning",
    "WarningType",
    "Severity",
    "WarningCategory",
    "FixResult",
    "AppliedFix",
    "ValidationSummary",
    "ValidationResult",
]
