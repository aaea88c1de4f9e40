"""Common Data Model entity registry used for CDM collision checks."""

from typing import Dict, Iterable, List, Optional, Protocol
from erdfix.ir.erd import Entity

# Standard Dataverse/CDM tables and a short description of each
CDM_ENTITIES: Dict[str, str] = {
    "Account": "Business accounts and organizations",
    "Contact": "Individual contacts and people",
    "Lead": "Potential customers and prospects",
    "Opportunity": "Sales opportunities and deals",
    "Case": "Customer service cases",
    "Incident": "Service incidents and issues",
    "Activity": "General activities and interactions",
    "Email": "Email communications",
    "PhoneCall": "Phone call activities",
    "Task": "Tasks and to-do items",
    "Appointment": "Scheduled appointments",
    "User": "System users",
    "Team": "User teams and groups",
    "BusinessUnit": "Organizational business units",
    "SystemUser": "System user accounts",
    "Product": "Products and services",
    "PriceLevel": "Pricing levels and tiers",
    "Quote": "Sales quotes and estimates",
    "Order": "Sales orders",
    "Invoice": "Customer invoices",
    "Campaign": "Marketing campaigns",
    "MarketingList": "Marketing contact lists",
    "Competitor": "Competitor information",
}


class CdmRegistry(Protocol):
    """Capability the validators need from a CDM catalogue."""

    def is_cdm_entity(self, name: str) -> bool:
        ...

    def canonical_name(self, name: str) -> Optional[str]:
        ...

    def describe(self, name: str) -> Optional[str]:
        ...


class StaticCdmRegistry:
    """
    In-memory CDM catalogue with case-insensitive lookup.

    Args:
        entities: Mapping of canonical CDM name to description
        aliases: Optional mapping of alternative name to canonical CDM name
            (e.g. ``{"Customer": "Account"}``)
    """

    def __init__(
        self,
        entities: Optional[Dict[str, str]] = None,
        aliases: Optional[Dict[str, str]] = None,
    ):
        self._entities = dict(CDM_ENTITIES if entities is None else entities)
        self._lookup: Dict[str, str] = {name.lower(): name for name in self._entities}
        for alias, canonical in (aliases or {}).items():
            if canonical not in self._entities:
                raise ValueError(f"Alias '{alias}' points to unknown CDM entity '{canonical}'")
            self._lookup.setdefault(alias.lower(), canonical)

    def is_cdm_entity(self, name: str) -> bool:
        return self.canonical_name(name) is not None

    def canonical_name(self, name: str) -> Optional[str]:
        if not name:
            return None
        return self._lookup.get(name.lower())

    def describe(self, name: str) -> Optional[str]:
        canonical = self.canonical_name(name)
        return self._entities.get(canonical) if canonical else None

    def names(self) -> List[str]:
        return list(self._entities)


class NullCdmRegistry:
    """Registry that knows no CDM entities; used when CDM detection is disabled."""

    def is_cdm_entity(self, name: str) -> bool:
        return False

    def canonical_name(self, name: str) -> Optional[str]:
        return None

    def describe(self, name: str) -> Optional[str]:
        return None


def mark_cdm_candidates(entities: Iterable[Entity], registry: CdmRegistry) -> List[Entity]:
    """Return copies of ``entities`` with ``is_cdm_candidate`` set from the registry."""
    return [
        entity.model_copy(update={"is_cdm_candidate": registry.is_cdm_entity(entity.name)})
        for entity in entities
    ]


_default_registry: Optional[StaticCdmRegistry] = None


def get_default_registry() -> StaticCdmRegistry:
    """Get or create the shared default registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = StaticCdmRegistry()
    return _default_registry
