"""Result models returned by fixers and by the validation orchestrator."""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from .erd import Entity, Relationship
from .warning import ErdWarning


class ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FixResult(ResultModel):
    """
    Outcome of a single fixer call.

    On success ``data`` holds the complete rewritten ERD text. On failure the
    caller keeps its original text; ``error`` explains what was missing.
    """

    success: bool
    data: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: str, message: str) -> "FixResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str) -> "FixResult":
        return cls(success=False, error=error)


class AppliedFix(ResultModel):
    """Record of one fixer run during an auto-fix pass."""

    warning_id: str
    type: str
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


class ValidationSummary(ResultModel):
    """Counts over the warnings of one validation run."""

    status: Literal["success", "warning", "error"] = "success"
    is_valid: bool = True
    total_issues: int = 0
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0
    auto_fixable_count: int = 0
    entity_count: int = 0
    relationship_count: int = 0
    cdm_entity_count: int = 0
    fixes_applied: int = 0


class ValidationResult(ResultModel):
    """Consolidated output of ``ValidationOrchestrator.validate``."""

    success: bool = True
    entities: List[Entity] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)
    warnings: List[ErdWarning] = Field(default_factory=list)
    corrected_erd: Optional[str] = Field(default=None, alias="correctedERD")
    summary: ValidationSummary = Field(default_factory=ValidationSummary)
    fixes: List[AppliedFix] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    def warnings_of_type(self, warning_type: str) -> List[ErdWarning]:
        return [w for w in self.warnings if w.type == warning_type]

    def find_warning(self, warning_id: str) -> Optional[ErdWarning]:
        for warning in self.warnings:
            if warning.id == warning_id:
                return warning
        return None
