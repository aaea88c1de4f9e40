"""Orchestrator running the validators and the auto-fix pass over ERD text."""

from functools import partial
from typing import Dict, List, Optional, Tuple
from erdfix.cdm.registry import CdmRegistry, NullCdmRegistry, get_default_registry, mark_cdm_candidates
from erdfix.config.settings import Settings, get_settings
from erdfix.config.logging import get_logger
from erdfix.fixers.registry import apply_fix, fix_order_key
from erdfix.ir.erd import Entity, Relationship
from erdfix.ir.results import AppliedFix, FixResult, ValidationResult, ValidationSummary
from erdfix.ir.warning import ErdWarning
from erdfix.parsing.relationships import extract_relationships
from erdfix.parsing.tokenizer import tokenize_entities
from .base import Validator
from .entity_rules import (
    check_duplicate_columns,
    check_duplicate_entities,
    check_empty_entities,
    check_primary_keys,
)
from .naming_rules import (
    check_cdm_collisions,
    check_choice_columns,
    check_name_conflicts,
    check_naming_convention,
    check_status_columns,
    check_system_columns,
)
from .relationship_rules import (
    check_circular_dependencies,
    check_duplicate_relationships,
    check_foreign_keys,
    check_many_to_many,
    check_orphaned_relationships,
    check_self_references,
)
from .syntax_rules import check_syntax

logger = get_logger(__name__)


def default_validators(registry: CdmRegistry) -> List[Validator]:
    """The built-in validators, in the order their warnings are reported."""
    return [
        check_syntax,
        check_duplicate_entities,
        check_duplicate_columns,
        check_primary_keys,
        check_empty_entities,
        check_naming_convention,
        check_name_conflicts,
        check_system_columns,
        check_status_columns,
        check_choice_columns,
        partial(check_cdm_collisions, registry=registry),
        check_orphaned_relationships,
        check_self_references,
        check_many_to_many,
        check_circular_dependencies,
        check_foreign_keys,
        check_duplicate_relationships,
    ]


def _validator_name(validator: Validator) -> str:
    func = getattr(validator, "func", validator)
    return getattr(func, "__name__", repr(validator))


def dedupe_warnings(warnings: List[ErdWarning]) -> List[ErdWarning]:
    """Drop warnings whose id was already seen, keeping the first."""
    seen = set()
    unique = []
    for warning in warnings:
        if warning.id in seen:
            continue
        seen.add(warning.id)
        unique.append(warning)
    return unique


def build_summary(
    warnings: List[ErdWarning],
    entities: List[Entity],
    relationships: List[Relationship],
    fixes_applied: int = 0,
) -> ValidationSummary:
    """Count warnings by severity and derive the overall status."""
    counts: Dict[str, int] = {"error": 0, "warning": 0, "info": 0}
    for warning in warnings:
        counts[warning.severity] += 1

    if counts["error"]:
        status = "error"
    elif counts["warning"]:
        status = "warning"
    else:
        status = "success"

    return ValidationSummary(
        status=status,
        is_valid=counts["error"] == 0,
        total_issues=len(warnings),
        error_count=counts["error"],
        warning_count=counts["warning"],
        info_count=counts["info"],
        auto_fixable_count=sum(1 for w in warnings if w.auto_fixable),
        entity_count=len(entities),
        relationship_count=len(relationships),
        cdm_entity_count=sum(1 for e in entities if e.is_cdm_candidate),
        fixes_applied=fixes_applied,
    )


class ValidationOrchestrator:
    """
    Validate Mermaid ERD text and optionally auto-fix it.

    Stateless between calls: every ``validate`` tokenizes afresh, so one
    instance can be shared across threads.
    """

    def __init__(
        self,
        registry: Optional[CdmRegistry] = None,
        validators: Optional[List[Validator]] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            registry: CDM catalogue; defaults to the standard CDM entities, or
                to an empty catalogue when ``settings.detect_cdm`` is off
            validators: Validator list replacing ``default_validators``
            settings: Settings instance (default: global settings)
        """
        self.settings = settings or get_settings()
        if registry is None:
            registry = get_default_registry() if self.settings.detect_cdm else NullCdmRegistry()
        self.registry = registry
        self.validators = validators if validators is not None else default_validators(registry)

    def validate(self, raw_text: str, auto_fix: bool = False) -> ValidationResult:
        """
        Validate an ERD and, with ``auto_fix``, apply every available fix.

        Args:
            raw_text: Mermaid erDiagram source
            auto_fix: Whether to run the fixers over auto-fixable warnings

        Returns:
            ValidationResult; ``corrected_erd`` is set only if a fix succeeded

        Raises:
            ValueError: If ``raw_text`` is None
        """
        if raw_text is None:
            raise ValueError("raw_text is required")

        if len(raw_text) > self.settings.max_input_chars:
            message = (
                f"ERD input is {len(raw_text)} characters, "
                f"above the limit of {self.settings.max_input_chars}"
            )
            logger.warning(message)
            return ValidationResult(
                success=False,
                summary=ValidationSummary(status="error", is_valid=False),
                errors=[message],
            )

        entities = mark_cdm_candidates(tokenize_entities(raw_text), self.registry)
        relationships = extract_relationships(raw_text)
        warnings = self._run_validators(entities, relationships, raw_text)

        corrected: Optional[str] = None
        fixes: List[AppliedFix] = []
        if auto_fix:
            corrected, fixes = self._auto_fix(raw_text, warnings)

        fixes_applied = sum(1 for fix in fixes if fix.success)
        return ValidationResult(
            success=True,
            entities=entities,
            relationships=relationships,
            warnings=warnings,
            corrected_erd=corrected,
            summary=build_summary(warnings, entities, relationships, fixes_applied),
            fixes=fixes,
        )

    def _collect_warnings(
        self, entities: List[Entity], relationships: List[Relationship], raw_text: str
    ) -> List[ErdWarning]:
        warnings: List[ErdWarning] = []
        for validator in self.validators:
            try:
                warnings.extend(validator(entities, relationships, raw_text))
            except Exception:
                logger.exception(f"Validator {_validator_name(validator)} failed")
                raise
        return dedupe_warnings(warnings)

    def _run_validators(
        self, entities: List[Entity], relationships: List[Relationship], raw_text: str
    ) -> List[ErdWarning]:
        warnings = self._collect_warnings(entities, relationships, raw_text)
        if warnings:
            errors = sum(1 for w in warnings if w.severity == "error")
            logger.info(f"ERD validation found {len(warnings)} issues ({errors} errors)")
        else:
            logger.debug("ERD validation found no issues")
        return warnings

    def _revalidate(self, raw_text: str) -> Dict[str, ErdWarning]:
        entities = mark_cdm_candidates(tokenize_entities(raw_text), self.registry)
        relationships = extract_relationships(raw_text)
        return {w.id: w for w in self._collect_warnings(entities, relationships, raw_text)}

    def _auto_fix(
        self, raw_text: str, warnings: List[ErdWarning]
    ) -> Tuple[Optional[str], List[AppliedFix]]:
        """
        Apply fixes in ``FIX_ORDER``.

        After every successful fix the text is validated again. A later fix
        runs only if its warning id is still reported, and it uses the fresh
        warning so its offsets match the current text.
        """
        fixable = sorted((w for w in warnings if w.auto_fixable), key=fix_order_key)
        text = raw_text
        current = {w.id: w for w in warnings}
        fixes: List[AppliedFix] = []
        for warning in fixable:
            live = current.get(warning.id)
            if live is None or not live.auto_fixable:
                logger.debug(f"Skipping {warning.type} fix for {warning.id}: resolved by an earlier fix")
                continue
            result = apply_fix(text, live)
            if result.success:
                text = result.data
                current = self._revalidate(text)
            fixes.append(
                AppliedFix(
                    warning_id=warning.id,
                    type=warning.type,
                    success=result.success,
                    message=result.message,
                    error=result.error,
                )
            )

        applied = sum(1 for fix in fixes if fix.success)
        if fixable:
            logger.info(f"Applied {applied}/{len(fixable)} automatic fixes")
        return (text if applied else None), fixes

    def fix_warning(self, raw_text: str, warning: ErdWarning) -> FixResult:
        """
        Apply the fix for a single warning.

        Raises:
            ValueError: If ``raw_text`` or ``warning`` is None
        """
        if raw_text is None or warning is None:
            raise ValueError("Both raw_text and warning are required to apply a fix")
        if not warning.auto_fixable:
            return FixResult.fail(f"Warning {warning.id} ({warning.type}) is not auto-fixable")
        return apply_fix(raw_text, warning)

    def fix_by_id(self, raw_text: str, warning_id: str) -> FixResult:
        """Validate ``raw_text`` and fix the warning with id ``warning_id``."""
        if not warning_id:
            raise ValueError("warning_id is required")
        result = self.validate(raw_text)
        if not result.success:
            return FixResult.fail("; ".join(result.errors))
        warning = result.find_warning(warning_id)
        if warning is None:
            return FixResult.fail(f"Warning {warning_id} not found")
        return self.fix_warning(raw_text, warning)
