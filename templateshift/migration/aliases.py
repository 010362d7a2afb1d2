"""Alias rule table for sections named differently across template families.

A rule carries an authored source section into a differently named
destination section. Rules are evaluated once per migration, in table
order, after the direct id-to-id pass, and only for sources that have no
same-id home in the destination.
"""

from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass
from typing import Any

from templateshift.migration.models import SectionContent
from templateshift.migration.sections import has_content


@dataclass(frozen=True)
class AliasRule:
    """One semantic synonym between section ids.

    Attributes:
        name: Stable rule name, referenced from configuration
        source_ids: Candidate source sections, canonical id first
        target_id: Destination section the content lands in
        extract: Pulls the value to carry over out of the source bag
        merge: Combines the destination defaults with the extracted value
        target_field: Field of the destination bag the value lands in, or
            None when the whole bag is carried over
    """

    name: str
    source_ids: tuple[str, ...]
    target_id: str
    extract: Callable[[Mapping[str, Any]], Any]
    merge: Callable[[SectionContent, Any], SectionContent]
    target_field: str | None = None

    def find_source(
        self,
        content: Mapping[str, Any],
        to_section_ids: Collection[str],
    ) -> str | None:
        """First source id with authored content and no home of its own."""
        for source_id in self.source_ids:
            if source_id in to_section_ids:
                continue
            if has_content(content.get(source_id)):
                return source_id
        return None


def _whole_bag(section: Mapping[str, Any]) -> SectionContent:
    return dict(section)


def _is_blank(value: Any) -> bool:
    # Empty lists and bags are still values
    if isinstance(value, (list, dict)):
        return False
    return not value


def _project_list(section: Mapping[str, Any]) -> Any:
    # A bag without a usable nested value is carried over as is
    nested = section.get("projects")
    return dict(section) if _is_blank(nested) else nested


def _merge_bag(defaults: SectionContent, extracted: Any) -> SectionContent:
    return {**defaults, **extracted}


def _merge_projects(defaults: SectionContent, extracted: Any) -> SectionContent:
    return {**defaults, "projects": extracted}


ALIAS_RULES: tuple[AliasRule, ...] = (
    AliasRule(
        name="hero_to_header",
        source_ids=("hero",),
        target_id="header",
        extract=_whole_bag,
        merge=_merge_bag,
    ),
    AliasRule(
        name="header_to_hero",
        source_ids=("header",),
        target_id="hero",
        extract=_whole_bag,
        merge=_merge_bag,
    ),
    AliasRule(
        name="projects_to_work",
        source_ids=("projects",),
        target_id="work",
        extract=_project_list,
        merge=_merge_projects,
        target_field="projects",
    ),
    AliasRule(
        name="work_to_projects",
        source_ids=("work",),
        target_id="projects",
        extract=_project_list,
        merge=_merge_projects,
        target_field="projects",
    ),
)


def select_alias_rules(names: list[str] | None = None) -> list[AliasRule]:
    """Rules enabled by name, in table order.

    Args:
        names: Enabled rule names; None enables the whole table

    Raises:
        ValueError: If a name does not match any rule
    """
    if names is None:
        return list(ALIAS_RULES)

    known = {rule.name for rule in ALIAS_RULES}
    unknown = [name for name in names if name not in known]
    if unknown:
        raise ValueError(f"Unknown alias rules: {', '.join(unknown)}")

    enabled = set(names)
    return [rule for rule in ALIAS_RULES if rule.name in enabled]


def resolve_aliases(
    content: Mapping[str, Any],
    to_section_ids: Collection[str],
    rules: list[AliasRule],
) -> list[tuple[AliasRule, str]]:
    """Work out which rules fire for a migration.

    A rule fires when its target is a destination section and one of its
    sources has authored content but no destination section of its own.
    The source is merged over whatever the direct pass left in the target,
    so its keys win on conflict. Each target is claimed by at most one rule.

    Returns:
        (rule, source_id) pairs in table order
    """
    fired: list[tuple[AliasRule, str]] = []
    claimed: set[str] = set()

    for rule in rules:
        if rule.target_id not in to_section_ids or rule.target_id in claimed:
            continue
        source_id = rule.find_source(content, to_section_ids)
        if source_id is None:
            continue
        fired.append((rule, source_id))
        claimed.add(rule.target_id)

    return fired
