"""Migration orchestrator for template changes.

Sequences analysis and migration for a caller, owns the transient
in-flight and report state, and is the only place where exceptions are
turned into results. Requests are last-request-wins: a result produced
for a request that has since been superseded or cancelled is discarded.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from templateshift.config.models.migration import TemplateMigrationConfig
from templateshift.migration.aliases import select_alias_rules
from templateshift.migration.analyzer import analyze
from templateshift.migration.exceptions import (
    AnalysisError,
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
    TemplateDefinition,
)
from templateshift.observability.logging import get_logger
from templateshift.observability.metrics import (
    ALIAS_APPLIED,
    ANALYSIS_COUNT,
    MIGRATION_COUNT,
    MIGRATION_LATENCY,
    SECTIONS_DROPPED,
)

if TYPE_CHECKING:
    from templateshift.registry import TemplateRegistry

logger = get_logger(__name__)

SUPERSEDED_MESSAGE = "Template change superseded by a newer request"
CANCELLED_MESSAGE = "Template change cancelled"


class CancellationToken:
    """Lets a caller abandon an in-flight request."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise RequestCancelledError(CANCELLED_MESSAGE)


class AnalyzerBackend(ABC):
    """Source of compatibility reports.

    Asynchronous so that a server-backed analyzer can replace the local one
    without changing the orchestrator.
    """

    @abstractmethod
    async def analyze(
        self,
        from_template: TemplateDefinition,
        to_template: TemplateDefinition,
        content: Mapping[str, Any],
    ) -> CompatibilityReport:
        """Analyze a template switch."""
        pass


class LocalAnalyzerBackend(AnalyzerBackend):
    """Runs the in-process analyzer."""

    def __init__(self, config: TemplateMigrationConfig | None = None) -> None:
        """Initialize backend.

        Args:
            config: Migration configuration (alias rules, shape detection,
                simulated latency)
        """
        self._config = config or TemplateMigrationConfig()
        self._alias_rules = select_alias_rules(self._config.enabled_alias_rules)

    async def analyze(
        self,
        from_template: TemplateDefinition,
        to_template: TemplateDefinition,
        content: Mapping[str, Any],
    ) -> CompatibilityReport:
        if self._config.analysis_delay_ms:
            await asyncio.sleep(self._config.analysis_delay_ms / 1000)
        return analyze(
            from_template,
            to_template,
            content,
            alias_rules=self._alias_rules,
            detect_shape_mismatches=self._config.detect_shape_mismatches,
        )


class MigrationOrchestrator:
    """Stateful front for analyzing and executing template changes.

    State machine:
        IDLE -> ANALYZING -> ANALYZED          (analyze_change)
        IDLE/ANALYZED -> ANALYZING -> MIGRATING -> DONE | FAILED
                                                (change_template)
        any -> IDLE                            (reset_analysis)
    """

    def __init__(
        self,
        backend: AnalyzerBackend | None = None,
        registry: "TemplateRegistry | None" = None,
        config: TemplateMigrationConfig | None = None,
        metrics_enabled: bool = True,
    ) -> None:
        """Initialize orchestrator.

        Args:
            backend: Analyzer backend (default: local analyzer)
            registry: Template registry for id-based operations
            config: Migration configuration
            metrics_enabled: Record Prometheus metrics
        """
        self._config = config or TemplateMigrationConfig()
        self._backend = backend or LocalAnalyzerBackend(self._config)
        self._registry = registry
        self._metrics_enabled = metrics_enabled
        self._alias_rules = select_alias_rules(self._config.enabled_alias_rules)

        self._state = OrchestratorState.IDLE
        self._report: CompatibilityReport | None = None
        self._error: str | None = None
        self._request_id = 0
        self._token: CancellationToken | None = None

    # Snapshot and lifecycle

    def snapshot(self) -> OrchestratorSnapshot:
        """Immutable view of the current state."""
        return OrchestratorSnapshot(
            state=self._state,
            report=self._report,
            request_id=self._request_id,
            error=self._error,
        )

    @property
    def is_in_flight(self) -> bool:
        return self._state in (OrchestratorState.ANALYZING, OrchestratorState.MIGRATING)

    def reset_analysis(self) -> None:
        """Discard the cached report and any in-flight request."""
        if self._token is not None:
            self._token.cancel()
        self._request_id += 1
        self._token = None
        self._report = None
        self._error = None
        self._state = OrchestratorState.IDLE

    def cancel(self) -> bool:
        """Cancel the in-flight request, if any.

        The cached report is kept; the state returns to ANALYZED when a
        report is cached and IDLE otherwise.

        Returns:
            True if a request was cancelled
        """
        if not self.is_in_flight or self._token is None:
            return False
        self._token.cancel()
        self._settle()
        logger.info("template_request_cancelled", request_id=self._request_id)
        return True

    def _settle(self) -> None:
        self._state = (
            OrchestratorState.ANALYZED if self._report is not None else OrchestratorState.IDLE
        )

    def _begin(self, token: CancellationToken | None) -> tuple[int, CancellationToken]:
        self._request_id += 1
        self._token = token or CancellationToken()
        self._error = None
        self._state = OrchestratorState.ANALYZING
        return self._request_id, self._token

    def _ensure_current(self, request_id: int, token: CancellationToken) -> None:
        if request_id != self._request_id:
            raise RequestSupersededError(SUPERSEDED_MESSAGE)
        token.raise_if_cancelled()

    def _fail(self, request_id: int, message: str) -> None:
        # A cached report may describe a different template pair
        if request_id == self._request_id:
            self._state = OrchestratorState.FAILED
            self._report = None
            self._error = message

    # Analysis

    async def _analyze(
        self,
        request_id: int,
        token: CancellationToken,
        from_template: TemplateDefinition,
        to_template: TemplateDefinition,
        content: Mapping[str, Any],
    ) -> CompatibilityReport:
        token.raise_if_cancelled()
        report = await self._backend.analyze(from_template, to_template, content)
        self._ensure_current(request_id, token)

        self._report = report
        self._state = OrchestratorState.ANALYZED
        if self._metrics_enabled:
            ANALYSIS_COUNT.labels(
                outcome="compatible" if report.compatible else "incompatible"
            ).inc()

        logger.info(
            "template_compatibility_analyzed",
            request_id=request_id,
            from_template_id=from_template.id,
            to_template_id=to_template.id,
            compatible=report.compatible,
            mappable=len(report.mappable),
            unmappable=len(report.unmappable),
            issues=len(report.issues),
        )
        return report

    async def analyze_change(
        self,
        from_template: TemplateDefinition,
        to_template: TemplateDefinition,
        content: Mapping[str, Any],
        token: CancellationToken | None = None,
    ) -> CompatibilityReport | None:
        """Analyze a template change and cache the report.

        Args:
            from_template: Current template
            to_template: Destination template
            content: Portfolio content snapshot
            token: Cancellation token for this request

        Returns:
            The report, or None if analysis failed or the request was
            superseded or cancelled
        """
        request_id, token = self._begin(token)
        try:
            return await self._analyze(request_id, token, from_template, to_template, content)
        except (RequestSupersededError, RequestCancelledError) as exc:
            if request_id == self._request_id:
                self._settle()
            logger.info(
                "template_analysis_superseded",
                request_id=request_id,
                reason=exc.message,
            )
            return None
        except Exception as exc:
            self._fail(request_id, str(exc))
            if self._metrics_enabled:
                ANALYSIS_COUNT.labels(outcome="error").inc()
            logger.error(
                "template_analysis_failed",
                request_id=request_id,
                from_template_id=from_template.id,
                to_template_id=to_template.id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return None

    # Migration

    async def change_template(
        self,
        from_template: TemplateDefinition,
        to_template: TemplateDefinition,
        content: Mapping[str, Any],
        token: CancellationToken | None = None,
    ) -> MigrationResult:
        """Re-analyze and migrate content to a destination template.

        The caller's content is never modified; on failure nothing has been
        applied and the caller keeps its existing content. An incompatible
        report does not block the migration; that decision is the caller's.

        Args:
            from_template: Current template
            to_template: Destination template
            content: Portfolio content snapshot
            token: Cancellation token for this request

        Returns:
            MigrationSuccess with the new content, or MigrationFailure
        """
        request_id, token = self._begin(token)
        started = time.perf_counter()

        logger.info(
            "template_change_started",
            request_id=request_id,
            from_template_id=from_template.id,
            to_template_id=to_template.id,
        )

        try:
            try:
                report = await self._analyze(
                    request_id, token, from_template, to_template, content
                )
            except AnalysisError as exc:
                raise AnalysisError(
                    f"Failed to analyze template compatibility: {exc.message}",
                    template_id=exc.template_id,
                ) from exc

            self._state = OrchestratorState.MIGRATING
            migrated = migrate(
                from_template,
                to_template,
                content,
                alias_rules=self._alias_rules,
                logging_config=self._config.logging,
            )
            self._ensure_current(request_id, token)
        except RequestSupersededError:
            logger.info("template_change_superseded", request_id=request_id)
            return MigrationFailure(error=SUPERSEDED_MESSAGE)
        except RequestCancelledError:
            if request_id == self._request_id:
                self._settle()
            logger.info("template_change_cancelled", request_id=request_id)
            return MigrationFailure(error=CANCELLED_MESSAGE)
        except Exception as exc:
            self._fail(request_id, str(exc))
            if self._metrics_enabled:
                MIGRATION_COUNT.labels(outcome="failed").inc()
            logger.error(
                "template_change_failed",
                request_id=request_id,
                from_template_id=from_template.id,
                to_template_id=to_template.id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return MigrationFailure(error=str(exc))

        self._state = OrchestratorState.DONE
        if self._metrics_enabled:
            MIGRATION_COUNT.labels(outcome="success").inc()
            MIGRATION_LATENCY.observe(time.perf_counter() - started)
            dropped = [s for s in report.unmappable if s not in report.aliased]
            if dropped:
                SECTIONS_DROPPED.inc(len(dropped))
            for source_id, target_id in report.aliased.items():
                ALIAS_APPLIED.labels(rule=f"{source_id}_to_{target_id}").inc()

        logger.info(
            "template_migration_completed",
            request_id=request_id,
            from_template_id=from_template.id,
            to_template_id=to_template.id,
            mappable_sections=report.summary.mappable_sections,
            compatible=report.compatible,
        )

        return MigrationSuccess(
            content=migrated,
            analysis=report,
            message=f"Successfully migrated {report.summary.mappable_sections} sections",
        )

    # Registry-backed operations

    async def _resolve(
        self, from_template_id: str, to_template_id: str
    ) -> tuple[TemplateDefinition, TemplateDefinition]:
        if self._registry is None:
            raise TemplateShiftError("No template registry configured")

        from_template = await self._registry.get_template(from_template_id)
        if from_template is None:
            raise TemplateNotFoundError(from_template_id)
        to_template = await self._registry.get_template(to_template_id)
        if to_template is None:
            raise TemplateNotFoundError(to_template_id)
        return from_template, to_template

    async def analyze_change_by_id(
        self,
        from_template_id: str,
        to_template_id: str,
        content: Mapping[str, Any],
        token: CancellationToken | None = None,
    ) -> CompatibilityReport | None:
        """Resolve both templates from the registry, then analyze.

        Raises:
            TemplateNotFoundError: If either id is unknown
            TemplateShiftError: If no registry is configured
        """
        from_template, to_template = await self._resolve(from_template_id, to_template_id)
        return await self.analyze_change(from_template, to_template, content, token)

    async def change_template_by_id(
        self,
        from_template_id: str,
        to_template_id: str,
        content: Mapping[str, Any],
        token: CancellationToken | None = None,
    ) -> MigrationResult:
        """Resolve both templates from the registry, then change template."""
        try:
            from_template, to_template = await self._resolve(from_template_id, to_template_id)
        except TemplateShiftError as exc:
            logger.error(
                "template_change_failed",
                from_template_id=from_template_id,
                to_template_id=to_template_id,
                error=exc.message,
            )
            return MigrationFailure(error=exc.message)
        return await self.change_template(from_template, to_template, content, token)
