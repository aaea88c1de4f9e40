"""Common Data Model entity catalogue."""

from .registry import (
    CDM_ENTITIES,
    CdmRegistry,
    StaticCdmRegistry,
    NullCdmRegistry,
    mark_cdm_candidates,
    get_default_registry,
)

__all__ = [
    "CDM_ENTITIES",
    "CdmRegistry",
    "StaticCdmRegistry",
    "NullCdmRegistry",
    "mark_cdm_candidates",
    "get_default_registry",
]
