"""Bootstrap module for easy Templateshift setup.

Builds a ready-to-use orchestrator from configuration. Handles:
- Loading configuration from TOML files and environment
- Configuring structured logging
- Creating an in-memory template registry seeded with definitions

Example usage:

    from templateshift.bootstrap import bootstrap

    orchestrator, registry = bootstrap(templates=[echelon, serene])

    report = await orchestrator.analyze_change_by_id("echelon", "serene", content)
    result = await orchestrator.change_template_by_id("echelon", "serene", content)
"""

from templateshift.config import Settings, get_settings
from templateshift.migration.models import TemplateDefinition
from templateshift.migration.orchestrator import MigrationOrchestrator
from templateshift.observability.logging import get_logger, setup_logging
from templateshift.registry.inmemory import InMemoryTemplateRegistry

logger = get_logger(__name__)


def bootstrap(
    templates: list[TemplateDefinition] | None = None,
    settings: Settings | None = None,
) -> tuple[MigrationOrchestrator, InMemoryTemplateRegistry]:
    """Bootstrap an orchestrator backed by an in-memory registry.

    Args:
        templates: Template definitions to seed the registry with
        settings: Settings to use (default: loaded from config)

    Returns:
        Tuple of (orchestrator, registry)
    """
    settings = settings or get_settings()
    observability = settings.observability

    setup_logging(
        level=observability.logging.level,
        format=observability.logging.format,
        redact_pii=observability.logging.redact_pii,
    )

    registry = InMemoryTemplateRegistry(templates)
    orchestrator = MigrationOrchestrator(
        registry=registry,
        config=settings.migration,
        metrics_enabled=observability.metrics.enabled,
    )

    logger.info(
        "templateshift_bootstrapped",
        templates=len(templates or []),
        alias_rules=settings.migration.enabled_alias_rules,
        detect_shape_mismatches=settings.migration.detect_shape_mismatches,
    )
    return orchestrator, registry
