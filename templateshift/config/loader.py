"""Layered TOML configuration for Templateshift.

Configuration is read from up to two files in the config directory and
deep-merged in order, later layers winning:

    default.toml            shared base, optional
    {TEMPLATESHIFT_ENV}.toml  environment overrides, optional

Missing layers are skipped, so a bare checkout runs on model defaults.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "TEMPLATESHIFT_CONFIG_DIR"
ENVIRONMENT_ENV = "TEMPLATESHIFT_ENV"
DEFAULT_ENVIRONMENT = "development"

# How many directories above the working directory are searched for config/
SEARCH_DEPTH = 5


def get_config_dir() -> Path:
    """Locate the config directory.

    TEMPLATESHIFT_CONFIG_DIR wins when set and must exist. Otherwise the
    first 'config/' found walking up from the working directory is used.

    Raises:
        FileNotFoundError: If TEMPLATESHIFT_CONFIG_DIR names a missing directory
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        path = Path(override)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path

    cwd = Path.cwd()
    for directory in [cwd, *cwd.parents][:SEARCH_DEPTH]:
        candidate = directory / "config"
        if candidate.is_dir():
            return candidate
    return Path("config")


def get_environment() -> str:
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def config_layers(config_dir: Path, environment: str) -> list[Path]:
    """TOML files to merge, lowest precedence first."""
    return [config_dir / "default.toml", config_dir / f"{environment}.toml"]


def load_toml(file_path: Path) -> dict[str, Any]:
    """Read one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")
    return tomllib.loads(file_path.read_text(encoding="utf-8"))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base.

    Tables merge key by key; arrays and scalars in override replace the
    base value outright. Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_dir: Path | None = None,
    environment: str | None = None,
) -> dict[str, Any]:
    """Merge every present configuration layer.

    Args:
        config_dir: Directory holding the TOML files (default: get_config_dir())
        environment: Environment name (default: get_environment())

    Returns:
        The merged configuration, empty when no layer exists
    """
    layers = config_layers(
        config_dir or get_config_dir(),
        environment or get_environment(),
    )

    config: dict[str, Any] = {}
    for path in layers:
        if path.exists():
            config = deep_merge(config, load_toml(path))
    return config
