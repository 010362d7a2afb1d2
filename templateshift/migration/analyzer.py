"""Compatibility analysis between two templates.

Compares the section layout of the current and destination templates
against a content snapshot and reports which authored sections survive a
template switch, which are lost, and which destination requirements are
unmet. Analysis is pure: inputs are only read.
"""

from collections.abc import Collection, Mapping
from typing import Any

from templateshift.migration.aliases import AliasRule, resolve_aliases, select_alias_rules
from templateshift.migration.exceptions import AnalysisError
from templateshift.migration.models import (
    CompatibilityReport,
    ReportSummary,
    TemplateDefinition,
)
from templateshift.migration.sections import (
    expected_shape,
    find_shape_mismatches,
    has_content,
    shape_of,
)


def validate_content(content: Any, section_ids: Collection[str] | None = None) -> None:
    """Check that a content snapshot is a mapping of section bags.

    None is accepted for a section and means "not present". Keys outside
    section_ids are not template sections and are left unchecked.

    Args:
        content: Portfolio content snapshot
        section_ids: Section ids to check (default: every key)

    Raises:
        AnalysisError: If the snapshot or one of its sections is not a mapping
    """
    if not isinstance(content, Mapping):
        raise AnalysisError(
            f"Portfolio content must be a mapping of sections, got {type(content).__name__}"
        )
    for section_id, section in content.items():
        if section_ids is not None and section_id not in section_ids:
            continue
        if section is not None and not isinstance(section, Mapping):
            raise AnalysisError(
                f'Section "{section_id}" must be a key/value mapping, '
                f"got {type(section).__name__}"
            )


def unmappable_warning(section_id: str) -> str:
    return f'Section "{section_id}" exists in current template but not in new template'


def required_section_issue(section_id: str) -> str:
    return (
        f'New template requires "{section_id}" section '
        "which doesn't exist in current template"
    )


def _alias_shape_warnings(
    fired: list[tuple[AliasRule, str]],
    content: Mapping[str, Any],
    to_defaults: Mapping[str, Any],
) -> list[str]:
    warnings = []
    for rule, source_id in fired:
        extracted = rule.extract(content[source_id])
        target_defaults = to_defaults.get(rule.target_id)

        if rule.target_field is None:
            details = [
                m.describe()
                for m in find_shape_mismatches(rule.target_id, extracted, target_defaults)
            ]
        else:
            found = shape_of(extracted)
            expected = expected_shape(rule.target_id, rule.target_field, target_defaults)
            details = []
            if found is not None and expected is not None and found != expected:
                details.append(f"{rule.target_field}: {found.value} vs {expected.value}")

        if details:
            warnings.append(
                f'Section "{source_id}" maps to "{rule.target_id}" with mismatched shape '
                f"({'; '.join(details)})"
            )
    return warnings


def analyze(
    from_template: TemplateDefinition,
    to_template: TemplateDefinition,
    content: Mapping[str, Any],
    *,
    alias_rules: list[AliasRule] | None = None,
    detect_shape_mismatches: bool = False,
) -> CompatibilityReport:
    """Analyze what a switch from one template to another does to content.

    Every section of the current template that has authored content is
    classified as mappable (the destination has a section with the same id)
    or unmappable (it will be dropped, with a warning). Required destination
    sections that the current template lacks are blocking issues.

    With shape detection enabled, same-id sections whose field shapes
    disagree with the destination are reported as partially mappable
    instead of mappable.

    Args:
        from_template: Current template
        to_template: Destination template
        content: Portfolio content snapshot
        alias_rules: Alias rules the migration will use (default: all)
        detect_shape_mismatches: Downgrade sections with mismatched shapes

    Returns:
        CompatibilityReport for the switch

    Raises:
        AnalysisError: If a template or the content is malformed
    """
    from_ids = list(dict.fromkeys(from_template.section_ids()))
    to_ids = set(to_template.section_ids())
    validate_content(content, to_ids.union(from_ids))
    to_defaults = to_template.default_content or {}
    rules = select_alias_rules() if alias_rules is None else alias_rules

    issues: list[str] = []
    warnings: list[str] = []
    mappable: list[str] = []
    unmappable: list[str] = []
    partially_mappable: list[str] = []

    for section_id in from_ids:
        section = content.get(section_id)
        if not has_content(section):
            continue

        if section_id not in to_ids:
            unmappable.append(section_id)
            warnings.append(unmappable_warning(section_id))
            continue

        if detect_shape_mismatches:
            mismatches = find_shape_mismatches(section_id, section, to_defaults.get(section_id))
            if mismatches:
                partially_mappable.append(section_id)
                warnings.append(
                    f'Section "{section_id}" content shape does not match new template '
                    f"({'; '.join(m.describe() for m in mismatches)})"
                )
                continue

        mappable.append(section_id)

    from_id_set = set(from_ids)
    for section_id in to_template.required_section_ids():
        if section_id not in from_id_set:
            issues.append(required_section_issue(section_id))

    fired = resolve_aliases(content, to_ids, rules)
    if detect_shape_mismatches:
        warnings.extend(_alias_shape_warnings(fired, content, to_defaults))

    return CompatibilityReport(
        from_template_id=from_template.id,
        to_template_id=to_template.id,
        compatible=len(issues) == 0,
        issues=issues,
        warnings=warnings,
        mappable=mappable,
        unmappable=unmappable,
        partially_mappable=partially_mappable,
        aliased={source_id: rule.target_id for rule, source_id in fired},
        summary=ReportSummary(
            total_sections=len(from_ids),
            mappable_sections=len(mappable),
            unmappable_sections=len(unmappable),
            new_required_sections=len(issues),
            partially_mappable_sections=len(partially_mappable),
        ),
    )
