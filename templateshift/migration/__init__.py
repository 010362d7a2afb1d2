"""Template migration and compatibility engine.

Lets a portfolio switch visual templates without losing authored content:
analysis reports what survives a switch, migration builds the new content.
"""

from templateshift.migration.aliases import ALIAS_RULES, AliasRule, select_alias_rules
from templateshift.migration.analyzer import analyze
from templateshift.migration.exceptions import (
    AnalysisError,
    MigrationError,
    RequestCancelledError,
    RequestSupersededError,
    TemplateNotFoundError,
    TemplateShiftError,
)
from templateshift.migration.migrator import migrate
from templateshift.migration.models import (
    CompatibilityReport,
    MigrationFailure,
    MigrationResult,
    MigrationSuccess,
    OrchestratorSnapshot,
    OrchestratorState,
    PortfolioContent,
    ReportSummary,
    SectionContent,
    SectionDescriptor,
    TemplateDefinition,
    TemplateSchema,
)
from templateshift.migration.orchestrator import (
    AnalyzerBackend,
    CancellationToken,
    LocalAnalyzerBackend,
    MigrationOrchestrator,
)

__all__ = [
    # Operations
    "analyze",
    "migrate",
    "MigrationOrchestrator",
    "AnalyzerBackend",
    "LocalAnalyzerBackend",
    "CancellationToken",
    # Alias rules
    "ALIAS_RULES",
    "AliasRule",
    "select_alias_rules",
    # Models
    "TemplateDefinition",
    "TemplateSchema",
    "SectionDescriptor",
    "SectionContent",
    "PortfolioContent",
    "CompatibilityReport",
    "ReportSummary",
    "MigrationResult",
    "MigrationSuccess",
    "MigrationFailure",
    "OrchestratorSnapshot",
    "OrchestratorState",
    # Errors
    "TemplateShiftError",
    "AnalysisError",
    "MigrationError",
    "TemplateNotFoundError",
    "RequestSupersededError",
    "RequestCancelledError",
]
