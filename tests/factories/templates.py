"""Test factories for template migration models."""

from typing import Any

from templateshift.migration.models import TemplateDefinition


class TemplateFactory:
    """Factory for creating TemplateDefinition instances for testing."""

    @staticmethod
    def create(
        *,
        id: str = "template",
        name: str | None = None,
        sections: list[str | dict[str, Any]] | None = None,
        default_content: dict[str, dict[str, Any]] | None = None,
        category: str | None = None,
    ) -> TemplateDefinition:
        """Create a TemplateDefinition from registry-shaped data.

        Args:
            id: Template id
            name: Display name (defaults to the title-cased id)
            sections: Schema sections as bare ids or descriptor dicts; when
                None the template has no schema
            default_content: Default content per section
            category: Catalogue category
        """
        data: dict[str, Any] = {"id": id, "name": name or id.title()}
        if sections is not None:
            data["schema"] = {"sections": sections}
        if default_content is not None:
            data["defaultContent"] = default_content
        if category is not None:
            data["category"] = category
        return TemplateDefinition.model_validate(data)

    @staticmethod
    def echelon() -> TemplateDefinition:
        """Swiss-style template without a schema; sections come from defaults."""
        return TemplateFactory.create(
            id="echelon",
            category="swiss",
            default_content={
                "hero": {
                    "title": "DESIGNING WITH PRECISION",
                    "subtitle": "Case studies in clarity and form",
                },
                "about": {"name": "DESIGNER NAME", "image": "", "bio": "I am a designer."},
                "work": {
                    "heading": "SELECTED WORK",
                    "projects": [{"id": 1, "title": "PROJECT TITLE", "image": ""}],
                },
                "gallery": {
                    "heading": "VISUAL STUDIES",
                    "images": [{"src": "", "caption": "Visual exploration 01"}],
                },
                "contact": {
                    "heading": "GET IN TOUCH",
                    "text": "Available for new projects.",
                    "button": "CONTACT",
                },
            },
        )

    @staticmethod
    def serene() -> TemplateDefinition:
        """Botanical template with a header section instead of hero."""
        return TemplateFactory.create(
            id="serene",
            category="elegant",
            sections=[
                {"id": "header", "required": True},
                "about",
                "services",
                "projects",
                "testimonials",
                "contact",
            ],
            default_content={
                "header": {"title": "Isabella Rose", "subtitle": "Botanical Designer"},
                "about": {"name": "Isabella Rose", "role": "Designer", "bio": ""},
                "services": {"heading": "Services", "services": []},
                "projects": {"heading": "Portfolio", "projects": []},
                "testimonials": {"heading": "Kind Words", "testimonials": []},
                "contact": {"heading": "Say hello", "text": ""},
            },
        )


class ContentFactory:
    """Factory for portfolio content snapshots."""

    @staticmethod
    def create(**sections: dict[str, Any]) -> dict[str, dict[str, Any]]:
        return dict(sections)

    @staticmethod
    def authored() -> dict[str, dict[str, Any]]:
        """Content authored under the echelon template."""
        return {
            "hero": {"title": "Jane Doe", "subtitle": "Product designer"},
            "about": {"name": "Jane Doe", "bio": "Ten years of product design."},
            "work": {
                "heading": "Work",
                "projects": [
                    {"id": 1, "title": "Atlas", "image": "atlas.png"},
                    {"id": 2, "title": "Beacon", "image": "beacon.png"},
                ],
            },
            "gallery": {"heading": "Studies", "images": [{"src": "a.png"}]},
            "contact": {"heading": "Contact", "text": "Write to me."},
        }
