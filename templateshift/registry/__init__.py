"""Template registry: supplies template definitions by id."""

from templateshift.registry.inmemory import InMemoryTemplateRegistry
from templateshift.registry.store import TemplateRegistry

__all__ = ["TemplateRegistry", "InMemoryTemplateRegistry"]
