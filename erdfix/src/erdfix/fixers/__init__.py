"""Text-level fixers for ERD validation warnings."""

from .base import Fixer, cleanup_whitespace
from .choice_columns import fix_choice_columns
from .duplicate_columns import fix_duplicate_columns
from .duplicate_relationships import fix_duplicate_relationships
from .foreign_keys import fix_missing_foreign_key
from .junction import fix_many_to_many
from .naming_conflicts import fix_column_rename
from .primary_keys import fix_primary_key
from .registry import FIX_ORDER, FIXERS, apply_fix, fix_order_key

__all__ = [
    "Fixer",
    "cleanup_whitespace",
    "fix_choice_columns",
    "fix_duplicate_columns",
    "fix_duplicate_relationships",
    "fix_missing_foreign_key",
    "fix_many_to_many",
    "fix_column_rename",
    "fix_primary_key",
    "FIX_ORDER",
    "FIXERS",
    "apply_fix",
    "fix_order_key",
]
