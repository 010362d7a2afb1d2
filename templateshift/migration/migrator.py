"""Content migration between templates.

Builds a new PortfolioContent for the destination template:
1. Baseline: a deep copy of the destination defaults, one entry per
   destination section
2. Direct pass: same-id sections are merged over their defaults
3. Alias pass: differently named sections are carried over by the alias
   rule table

Merges are shallow at the section level; nested values are replaced
wholesale by whichever side wins.
"""

import copy
from collections.abc import Mapping
from typing import Any

from templateshift.config.models.migration import MigrationLoggingConfig
from templateshift.migration.aliases import AliasRule, resolve_aliases, select_alias_rules
from templateshift.migration.exceptions import AnalysisError, MigrationError
from templateshift.migration.models import PortfolioContent, TemplateDefinition
from templateshift.observability.logging import get_logger

logger = get_logger(__name__)


def build_baseline(to_template: TemplateDefinition) -> PortfolioContent:
    """Deep copy of destination defaults covering every destination section.

    Sections without defaults start as an empty bag. Default entries for
    ids outside the destination's sections are not carried.

    Raises:
        MigrationError: If the destination template is malformed
    """
    try:
        to_ids = to_template.section_ids()
    except AnalysisError as exc:
        raise MigrationError(exc.message) from exc

    defaults = to_template.default_content or {}
    return {section_id: copy.deepcopy(defaults.get(section_id, {})) for section_id in to_ids}


def migrate(
    from_template: TemplateDefinition,
    to_template: TemplateDefinition,
    content: Mapping[str, Any],
    *,
    alias_rules: list[AliasRule] | None = None,
    logging_config: MigrationLoggingConfig | None = None,
) -> PortfolioContent:
    """Migrate portfolio content to a destination template.

    Args:
        from_template: Current template
        to_template: Destination template
        content: Portfolio content snapshot (never modified)
        alias_rules: Alias rules to apply (default: all)
        logging_config: Per-section logging flags

    Returns:
        Freshly built content keyed by destination section ids

    Raises:
        MigrationError: If either template or the content is malformed
    """
    log_config = logging_config or MigrationLoggingConfig()
    rules = select_alias_rules() if alias_rules is None else alias_rules

    if not isinstance(content, Mapping):
        raise MigrationError(
            f"Portfolio content must be a mapping of sections, got {type(content).__name__}"
        )

    result = build_baseline(to_template)
    to_ids = set(result)
    try:
        section_ids = to_ids | set(from_template.section_ids())
    except AnalysisError as exc:
        raise MigrationError(exc.message) from exc
    snapshot = copy.deepcopy(dict(content))

    for section_id, section in snapshot.items():
        # Keys outside both templates are not sections
        if section is None or section_id not in section_ids:
            continue
        if not isinstance(section, Mapping):
            raise MigrationError(
                f'Section "{section_id}" must be a key/value mapping, '
                f"got {type(section).__name__}",
                section_id=section_id,
            )

        if section_id in to_ids:
            result[section_id] = {**result[section_id], **section}
            if log_config.log_mapped_sections:
                logger.debug("section_mapped", section_id=section_id)
        elif log_config.log_skipped_sections:
            logger.info(
                "section_skipped",
                section_id=section_id,
                from_template_id=from_template.id,
                to_template_id=to_template.id,
            )

    for rule, source_id in resolve_aliases(snapshot, to_ids, rules):
        result[rule.target_id] = rule.merge(
            result[rule.target_id], rule.extract(snapshot[source_id])
        )
        if log_config.log_alias_applications:
            logger.info(
                "section_aliased",
                rule=rule.name,
                source_id=source_id,
                target_id=rule.target_id,
            )

    return result
