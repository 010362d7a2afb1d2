"""Test factories for creating test data."""

from tests.factories.templates import ContentFactory, TemplateFactory

__all__ = [
    "ContentFactory",
    "TemplateFactory",
]
