"""In-memory implementation of TemplateRegistry."""

from templateshift.migration.models import TemplateDefinition
from templateshift.registry.store import TemplateRegistry


class InMemoryTemplateRegistry(TemplateRegistry):
    """In-memory implementation of TemplateRegistry for testing and embedding.

    Uses simple dict storage keyed by template id.
    """

    def __init__(self, templates: list[TemplateDefinition] | None = None) -> None:
        """Initialize storage, optionally seeded with templates."""
        self._templates: dict[str, TemplateDefinition] = {
            template.id: template for template in templates or []
        }

    async def get_template(self, template_id: str) -> TemplateDefinition | None:
        return self._templates.get(template_id)

    async def list_templates(self) -> list[TemplateDefinition]:
        return [self._templates[key] for key in sorted(self._templates)]

    async def save_template(self, template: TemplateDefinition) -> str:
        self._templates[template.id] = template
        return template.id

    async def delete_template(self, template_id: str) -> bool:
        return self._templates.pop(template_id, None) is not None
