"""Fixer lookup by warning type and the order of the auto-fix pass."""

from typing import Dict, List
from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from erdfix.config.logging import get_logger
from .base import Fixer, require_fix_inputs
from .choice_columns import fix_choice_columns
from .duplicate_columns import fix_duplicate_columns
from .duplicate_relationships import fix_duplicate_relationships
from .foreign_keys import fix_missing_foreign_key
from .junction import fix_many_to_many
from .naming_conflicts import fix_column_rename
from .primary_keys import fix_primary_key

logger = get_logger(__name__)

FIXERS: Dict[str, Fixer] = {
    "duplicate-column": fix_duplicate_columns,
    "duplicate-relationship": fix_duplicate_relationships,
    "choice": fix_choice_columns,
    "naming": fix_column_rename,
    "system-column": fix_column_rename,
    "primary-key": fix_primary_key,
    "many-to-many": fix_many_to_many,
    "missing-foreign-key": fix_missing_foreign_key,
}

# Removals run before renames and additions
FIX_ORDER: List[str] = [
    "duplicate-column",
    "duplicate-relationship",
    "choice",
    "naming",
    "system-column",
    "primary-key",
    "many-to-many",
    "missing-foreign-key",
]


def fix_order_key(warning: ErdWarning) -> int:
    """Sort key placing a warning's type in ``FIX_ORDER``; unknown types go last."""
    try:
        return FIX_ORDER.index(warning.type)
    except ValueError:
        return len(FIX_ORDER)


def apply_fix(raw_text: str, warning: ErdWarning) -> FixResult:
    """
    Run the fixer registered for ``warning.type``.

    Returns:
        The fixer's result; a failure if no fixer handles the type
    """
    require_fix_inputs(raw_text, warning)
    fixer = FIXERS.get(warning.type)
    if fixer is None:
        return FixResult.fail(f"No fixer available for warning type '{warning.type}'")

    result = fixer(raw_text, warning)
    if not result.success:
        logger.warning(f"Fix for {warning.id} ({warning.type}) failed: {result.error}")
    return result
