"""erdfix: validation and automatic repair of Mermaid ERD diagrams."""

from erdfix.validation.orchestrator import ValidationOrchestrator

__version__ = "0.1.0"

__all__ = ["ValidationOrchestrator", "__version__"]
