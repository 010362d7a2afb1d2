"""TemplateRegistry abstract interface."""

from abc import ABC, abstractmethod

from templateshift.migration.models import TemplateDefinition


class TemplateRegistry(ABC):
    """Abstract interface for template definition storage.

    Definitions are treated as immutable once loaded.
    """

    @abstractmethod
    async def get_template(self, template_id: str) -> TemplateDefinition | None:
        """Get a template by ID."""
        pass

    @abstractmethod
    async def list_templates(self) -> list[TemplateDefinition]:
        """List all templates, ordered by ID."""
        pass

    @abstractmethod
    async def save_template(self, template: TemplateDefinition) -> str:
        """Save a template, returning its ID."""
        pass

    @abstractmethod
    async def delete_template(self, template_id: str) -> bool:
        """Delete a template; returns False if it did not exist."""
        pass
