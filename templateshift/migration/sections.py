"""Section kinds and container-shape checks.

Section content is an open key/value bag. Known section kinds declare the
container shape of their well-known fields; any other section id is a
custom section, carried through opaquely and never shape-checked.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SectionKind(str, Enum):
    """Kinds of section seen across template families."""

    HERO = "hero"
    HEADER = "header"
    ABOUT = "about"
    PROJECTS = "projects"
    WORK = "work"
    GALLERY = "gallery"
    SERVICES = "services"
    TESTIMONIALS = "testimonials"
    SKILLS = "skills"
    CONTACT = "contact"
    CUSTOM = "custom"


class FieldShape(str, Enum):
    """Container shape of a section field value."""

    OBJECT = "object"
    ARRAY = "array"
    SCALAR = "scalar"


_S = FieldShape.SCALAR
_A = FieldShape.ARRAY
_O = FieldShape.OBJECT

_HEADLINE_FIELDS = {
    "name": _S,
    "title": _S,
    "subtitle": _S,
    "description": _S,
    "image": _S,
    "cta": _O,
}

DECLARED_SHAPES: dict[SectionKind, dict[str, FieldShape]] = {
    SectionKind.HERO: _HEADLINE_FIELDS,
    SectionKind.HEADER: _HEADLINE_FIELDS,
    SectionKind.ABOUT: {"name": _S, "bio": _S, "image": _S, "role": _S, "skills": _A},
    SectionKind.PROJECTS: {"heading": _S, "projects": _A},
    SectionKind.WORK: {"heading": _S, "projects": _A},
    SectionKind.GALLERY: {"heading": _S, "images": _A, "categories": _A},
    SectionKind.SERVICES: {"heading": _S, "subheading": _S, "services": _A},
    SectionKind.TESTIMONIALS: {"heading": _S, "subheading": _S, "testimonials": _A},
    SectionKind.SKILLS: {"heading": _S, "skills": _A},
    SectionKind.CONTACT: {"heading": _S, "text": _S, "button": _S, "email": _S, "social": _O},
}


class ShapeMismatch(BaseModel):
    """A field whose value shape differs from what the destination expects."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Field name within the section")
    found: FieldShape
    expected: FieldShape

    def describe(self) -> str:
        return f"{self.field}: {self.found.value} vs {self.expected.value}"


def section_kind(section_id: str) -> SectionKind:
    """Classify a section id; unknown ids are custom sections."""
    try:
        return SectionKind(section_id)
    except ValueError:
        return SectionKind.CUSTOM


def shape_of(value: Any) -> FieldShape | None:
    """Container shape of a value, or None for null."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        return FieldShape.OBJECT
    if isinstance(value, (list, tuple)):
        return FieldShape.ARRAY
    return FieldShape.SCALAR


def has_content(section: Any) -> bool:
    """True when a section bag has at least one key.

    Absent sections and empty bags both count as "no content".
    """
    return isinstance(section, Mapping) and len(section) > 0


def expected_shape(
    section_id: str,
    field: str,
    defaults: Mapping[str, Any] | None,
) -> FieldShape | None:
    """Shape the destination expects for a field.

    The declared shape of a known kind wins; otherwise the shape of the
    destination's default value is used.
    """
    declared = DECLARED_SHAPES.get(section_kind(section_id), {})
    if field in declared:
        return declared[field]
    if defaults is not None and field in defaults:
        return shape_of(defaults[field])
    return None


def find_shape_mismatches(
    section_id: str,
    content: Mapping[str, Any],
    defaults: Mapping[str, Any] | None,
) -> list[ShapeMismatch]:
    """Compare each field of a content bag against the destination section.

    Custom sections are opaque and never compared. Fields the destination
    knows nothing about, and null values, are skipped.
    """
    if section_kind(section_id) == SectionKind.CUSTOM:
        return []

    mismatches = []
    for field, value in content.items():
        found = shape_of(value)
        expected = expected_shape(section_id, field, defaults)
        if found is None or expected is None or found == expected:
            continue
        mismatches.append(ShapeMismatch(field=field, found=found, expected=expected))
    return mismatches
