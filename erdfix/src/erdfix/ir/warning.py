"""Warning model produced by the ERD validators."""

from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

WarningType = Literal[
    "syntax",
    "duplicate-entity",
    "duplicate-column",
    "primary-key",
    "multiple-primary-keys",
    "empty-entity",
    "naming-convention",
    "reserved-keyword",
    "naming",
    "system-column",
    "status",
    "choice",
    "cdm-collision",
    "orphaned-relationship",
    "self-reference",
    "many-to-many",
    "circular-dependency",
    "missing-foreign-key",
    "foreign-key-naming",
    "duplicate-relationship",
]

Severity = Literal["error", "warning", "info"]

WarningCategory = Literal[
    "syntax",
    "structure",
    "naming",
    "system",
    "cdm",
    "relationships",
    "general",
]


class ErdWarning(BaseModel):
    """
    A single validation finding.

    Entities and relationships are referenced by name only. ``id`` is the
    content fingerprint computed by ``erdfix.validation.fingerprint``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    type: WarningType
    category: WarningCategory = "general"
    severity: Severity = "warning"
    entity: Optional[str] = None
    attribute: Optional[str] = None
    relationship: Optional[str] = None
    message: str
    suggestion: Optional[str] = None
    auto_fixable: bool = False
    fix_data: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None
