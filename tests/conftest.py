"""Shared test fixtures for the Templateshift test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from templateshift.migration.models import TemplateDefinition
from tests.factories.templates import TemplateFactory


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"TEMPLATESHIFT_DEBUG": "true"}):
                ...
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    return _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from templateshift.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# Templates shared by the scenario tests


@pytest.fixture
def portfolio_template() -> TemplateDefinition:
    """Current template with hero, about and projects sections."""
    return TemplateFactory.create(
        id="classic",
        sections=["hero", "about", "projects"],
        default_content={
            "hero": {"name": "Your Name", "title": "Designer"},
            "about": {"bio": "About me"},
            "projects": {"heading": "Projects", "projects": []},
        },
    )


@pytest.fixture
def studio_template() -> TemplateDefinition:
    """Destination template with work and a required contact section."""
    return TemplateFactory.create(
        id="studio",
        sections=["hero", "about", {"id": "work"}, {"id": "contact", "required": True}],
        default_content={
            "hero": {"name": "Designer Name", "title": "Title", "image": ""},
            "about": {"bio": "Bio", "image": ""},
            "work": {"heading": "Selected Work", "projects": [{"id": 1, "title": "Project"}]},
            "contact": {"heading": "Get in touch", "email": "hello@designer.com"},
        },
    )


@pytest.fixture
def scenario_content() -> dict[str, Any]:
    return {
        "hero": {"name": "A"},
        "about": {},
        "projects": {"items": [1, 2]},
    }
