"""ERD validators, warning fingerprints and the validation orchestrator."""

from .base import Validator, require_inputs
from .fingerprint import (
    SUPPRESSED_WARNING_IDS,
    string_hash,
    generate_warning_id,
    create_warning,
)
from .entity_rules import (
    check_duplicate_entities,
    check_duplicate_columns,
    check_primary_keys,
    check_empty_entities,
)
from .naming_rules import (
    check_naming_convention,
    check_name_conflicts,
    check_system_columns,
    check_status_columns,
    check_choice_columns,
    check_cdm_collisions,
)
from .relationship_rules import (
    check_orphaned_relationships,
    check_self_references,
    check_many_to_many,
    check_circular_dependencies,
    check_foreign_keys,
    check_duplicate_relationships,
)
from .syntax_rules import check_syntax

__all__ = [
    "Validator",
    "require_inputs",
    "SUPPRESSED_WARNING_IDS",
    "string_hash",
    "generate_warning_id",
    "create_warning",
    "check_duplicate_entities",
    "check_duplicate_columns",
    "check_primary_keys",
    "check_empty_entities",
    "check_naming_convention",
    "check_name_conflicts",
    "check_system_columns",
    "check_status_columns",
    "check_choice_columns",
    "check_cdm_collisions",
    "check_orphaned_relationships",
    "check_self_references",
    "check_many_to_many",
    "check_circular_dependencies",
    "check_foreign_keys",
    "check_duplicate_relationships",
    "check_syntax",
]
