"""Models for template migration.

Defines TemplateDefinition, CompatibilityReport, MigrationResult and the
orchestrator state snapshot.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from templateshift.migration.exceptions import AnalysisError

# Open, per-section-kind key/value bag
SectionContent = dict[str, Any]

# One entry per authored section, keyed by section id
PortfolioContent = dict[str, SectionContent]


# =============================================================================
# Enums
# =============================================================================


class OrchestratorState(str, Enum):
    """Lifecycle state of a MigrationOrchestrator."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"
    MIGRATING = "migrating"
    DONE = "done"
    FAILED = "failed"


# =============================================================================
# Template Definition
# =============================================================================


class SectionDescriptor(BaseModel):
    """One section declared by a template schema."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., min_length=1, description="Section id")
    required: bool = Field(
        default=False, description="Destination needs source content for this section"
    )


class TemplateSchema(BaseModel):
    """Declared section layout of a template."""

    model_config = ConfigDict(frozen=True)

    sections: list[SectionDescriptor] | None = Field(
        default=None, description="Ordered section descriptors"
    )

    @field_validator("sections", mode="before")
    @classmethod
    def _accept_bare_ids(cls, value: Any) -> Any:
        """Treat a bare string entry as a descriptor with that id."""
        if isinstance(value, list):
            return [{"id": item} if isinstance(item, str) else item for item in value]
        return value


class TemplateDefinition(BaseModel):
    """A visual template as supplied by the template registry.

    The set of section ids comes from `schema.sections` when present and
    from the keys of `defaultContent` otherwise. Every consumer resolves it
    through `section_ids()` so the two representations stay equivalent.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Template id")
    name: str | None = Field(default=None, description="Display name")
    description: str | None = Field(default=None, description="Catalogue description")
    category: str | None = Field(default=None, description="Catalogue category")
    template_schema: TemplateSchema | None = Field(
        default=None, alias="schema", description="Declared section layout"
    )
    default_content: dict[str, SectionContent] | None = Field(
        default=None, alias="defaultContent", description="Default content per section"
    )

    def _declared_sections(self) -> list[SectionDescriptor] | None:
        if self.template_schema is None:
            return None
        return self.template_schema.sections

    def section_ids(self) -> list[str]:
        """Resolve the template's section ids.

        Raises:
            AnalysisError: If the template has neither schema sections nor
                default content
        """
        declared = self._declared_sections()
        if declared is not None:
            return [section.id for section in declared]
        if self.default_content is None:
            raise AnalysisError(
                f"Template {self.id} defines neither schema sections nor default content",
                template_id=self.id,
            )
        return list(self.default_content)

    def required_section_ids(self) -> list[str]:
        """Ids of schema sections flagged as required."""
        return [section.id for section in self._declared_sections() or [] if section.required]


# =============================================================================
# Compatibility Report
# =============================================================================


class ReportSummary(BaseModel):
    """Section tallies for a compatibility report."""

    model_config = ConfigDict(frozen=True)

    total_sections: int = Field(..., ge=0, description="Sections in the current template")
    mappable_sections: int = Field(..., ge=0, description="Sections carried over by id")
    unmappable_sections: int = Field(..., ge=0, description="Sections dropped")
    new_required_sections: int = Field(
        ..., ge=0, description="Required destination sections with no source"
    )
    partially_mappable_sections: int = Field(
        default=0, ge=0, description="Sections carried over with a shape mismatch"
    )


class CompatibilityReport(BaseModel):
    """What survives a template switch, what is lost, and what is unmet."""

    model_config = ConfigDict(frozen=True)

    from_template_id: str = Field(..., description="Current template")
    to_template_id: str = Field(..., description="Destination template")
    compatible: bool = Field(..., description="True when there are no blocking issues")
    issues: list[str] = Field(default_factory=list, description="Blocking issues")
    warnings: list[str] = Field(default_factory=list, description="Non-blocking warnings")
    mappable: list[str] = Field(default_factory=list, description="Sections carried over")
    unmappable: list[str] = Field(default_factory=list, description="Sections dropped")
    partially_mappable: list[str] = Field(
        default_factory=list, description="Sections carried over with a shape mismatch"
    )
    aliased: dict[str, str] = Field(
        default_factory=dict, description="Dropped source id -> destination id it is aliased into"
    )
    summary: ReportSummary

    @model_validator(mode="after")
    def _check_invariants(self) -> "CompatibilityReport":
        if self.compatible != (len(self.issues) == 0):
            raise ValueError("compatible must be true exactly when there are no issues")

        mappable = set(self.mappable)
        unmappable = set(self.unmappable)
        partial = set(self.partially_mappable)
        if mappable & unmappable or mappable & partial or unmappable & partial:
            raise ValueError("section classifications must be disjoint")
        return self


# =============================================================================
# Migration Result
# =============================================================================


class MigrationSuccess(BaseModel):
    """New content ready for the caller to commit."""

    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True
    content: PortfolioContent = Field(..., description="Migrated portfolio content")
    analysis: CompatibilityReport = Field(..., description="Report the migration ran under")
    message: str = Field(..., description="Human-readable outcome")


class MigrationFailure(BaseModel):
    """A template change that produced nothing; existing content stays as is."""

    model_config = ConfigDict(frozen=True)

    success: Literal[False] = False
    error: str = Field(..., description="Reason the change failed")


MigrationResult = MigrationSuccess | MigrationFailure


# =============================================================================
# Orchestrator Snapshot
# =============================================================================


class OrchestratorSnapshot(BaseModel):
    """Immutable view of a MigrationOrchestrator for the caller."""

    model_config = ConfigDict(frozen=True)

    state: OrchestratorState = Field(default=OrchestratorState.IDLE)
    report: CompatibilityReport | None = Field(
        default=None, description="Most recent current analysis"
    )
    request_id: int = Field(default=0, ge=0, description="Generation of the latest request")
    error: str | None = Field(default=None, description="Error of the last failed request")

    @property
    def is_analyzing(self) -> bool:
        return self.state == OrchestratorState.ANALYZING
