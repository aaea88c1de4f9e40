"""Syntax-level validators run before any structural rule."""

from typing import List
import re
from erdfix.ir.erd import Entity, Relationship
from erdfix.ir.warning import ErdWarning
from erdfix.parsing.patterns import DIAGRAM_HEADER, RELATIONSHIP_LINE
from .base import collect, require_inputs
from .fingerprint import create_warning

_QUOTED = re.compile(r"\"[^\"\n]*\"")


def _brace_balance(raw_text: str) -> int:
    # Cardinality markers and descriptions may contain braces
    text = RELATIONSHIP_LINE.sub("", raw_text)
    text = _QUOTED.sub("", text)
    return text.count("{") - text.count("}")


def check_syntax(
    entities: List[Entity], relationships: List[Relationship], raw_text: str
) -> List[ErdWarning]:
    """
    Flag a missing ``erDiagram`` header, a diagram without entity blocks and
    unbalanced braces.
    """
    require_inputs(entities, relationships, raw_text)
    warnings = []

    if not DIAGRAM_HEADER.search(raw_text):
        warnings.append(
            create_warning(
                type="syntax",
                category="syntax",
                severity="error",
                message="ERD must start with 'erDiagram'.",
                suggestion="Add 'erDiagram' as the first line of the diagram.",
            )
        )

    if not entities:
        warnings.append(
            create_warning(
                type="syntax",
                category="syntax",
                severity="error",
                message="No entity definitions found in the ERD.",
                suggestion="Define entities as 'EntityName { type column_name PK }'.",
            )
        )

    balance = _brace_balance(raw_text)
    if balance:
        kind = "opening" if balance > 0 else "closing"
        warnings.append(
            create_warning(
                type="syntax",
                category="syntax",
                severity="error",
                message=f"Unbalanced braces: {abs(balance)} unmatched {kind} brace(s).",
                suggestion="Make sure every entity block is closed with '}'.",
                context={"balance": balance},
            )
        )

    return collect(warnings)
