"""Unit tests for layered TOML configuration loading."""

import tomllib
from pathlib import Path

import pytest

from templateshift.config.loader import (
    config_layers,
    deep_merge,
    get_config_dir,
    get_environment,
    load_config,
    load_toml,
)


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_tables_merge_key_by_key(self) -> None:
        base = {"migration": {"analysis_delay_ms": 0, "detect_shape_mismatches": False}}
        override = {"migration": {"analysis_delay_ms": 250}}

        assert deep_merge(base, override) == {
            "migration": {"analysis_delay_ms": 250, "detect_shape_mismatches": False}
        }

    def test_nested_tables_merge(self) -> None:
        base = {"migration": {"logging": {"log_mapped_sections": False, "log_skipped_sections": True}}}
        override = {"migration": {"logging": {"log_mapped_sections": True}}}

        merged = deep_merge(base, override)

        assert merged["migration"]["logging"] == {
            "log_mapped_sections": True,
            "log_skipped_sections": True,
        }

    def test_arrays_are_replaced(self) -> None:
        base = {"migration": {"enabled_alias_rules": ["hero_to_header", "header_to_hero"]}}
        override = {"migration": {"enabled_alias_rules": ["work_to_projects"]}}

        merged = deep_merge(base, override)

        assert merged["migration"]["enabled_alias_rules"] == ["work_to_projects"]

    @pytest.mark.parametrize(
        ("base", "override", "expected"),
        [
            ({"debug": False}, {"debug": True}, {"debug": True}),
            ({"observability": {"logging": {}}}, {"observability": "off"}, {"observability": "off"}),
            ({"app_name": "templateshift"}, {}, {"app_name": "templateshift"}),
            ({}, {"app_name": "editor"}, {"app_name": "editor"}),
        ],
    )
    def test_override_wins(self, base, override, expected) -> None:
        assert deep_merge(base, override) == expected

    def test_inputs_unmodified(self) -> None:
        base = {"migration": {"analysis_delay_ms": 0}}
        override = {"migration": {"analysis_delay_ms": 10}}

        deep_merge(base, override)

        assert base == {"migration": {"analysis_delay_ms": 0}}
        assert override == {"migration": {"analysis_delay_ms": 10}}


class TestLoadToml:
    """Tests for load_toml function."""

    def test_reads_tables(self, test_config_dir: Path) -> None:
        path = test_config_dir / "default.toml"
        path.write_text("[observability.metrics]\nenabled = false\n")

        assert load_toml(path) == {"observability": {"metrics": {"enabled": False}}}

    def test_missing_file(self, test_config_dir: Path) -> None:
        with pytest.raises(FileNotFoundError, match="staging.toml"):
            load_toml(test_config_dir / "staging.toml")

    def test_invalid_syntax(self, test_config_dir: Path) -> None:
        path = test_config_dir / "default.toml"
        path.write_text("enabled_alias_rules = [\"hero_to_header\"")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml(path)


class TestEnvironmentLookup:
    """Tests for get_environment and get_config_dir."""

    def test_environment_from_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEMPLATESHIFT_ENV", "production")
        assert get_environment() == "production"

    def test_environment_defaults_to_development(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("TEMPLATESHIFT_ENV", raising=False)
        assert get_environment() == "development"

    def test_config_dir_from_env_var(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEMPLATESHIFT_CONFIG_DIR", str(test_config_dir))
        assert get_config_dir() == test_config_dir

    def test_missing_config_dir_from_env_var(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEMPLATESHIFT_CONFIG_DIR", str(tmp_path / "missing"))

        with pytest.raises(FileNotFoundError, match="missing"):
            get_config_dir()

    def test_config_dir_found_above_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "config").mkdir()
        workdir = tmp_path / "portfolio" / "editor"
        workdir.mkdir(parents=True)
        monkeypatch.delenv("TEMPLATESHIFT_CONFIG_DIR", raising=False)
        monkeypatch.chdir(workdir)

        assert get_config_dir() == tmp_path / "config"


class TestLoadConfig:
    """Tests for config_layers and load_config."""

    def test_layer_order(self, test_config_dir: Path) -> None:
        assert config_layers(test_config_dir, "staging") == [
            test_config_dir / "default.toml",
            test_config_dir / "staging.toml",
        ]

    def test_environment_layer_overrides_default(
        self, test_config_dir: Path, mock_toml_files
    ) -> None:
        mock_toml_files({
            "default.toml": "[migration]\nanalysis_delay_ms = 0\ndetect_shape_mismatches = false",
            "staging.toml": "[migration]\ndetect_shape_mismatches = true",
        })

        assert load_config(test_config_dir, "staging") == {
            "migration": {"analysis_delay_ms": 0, "detect_shape_mismatches": True}
        }

    def test_environment_layer_alone(self, test_config_dir: Path, mock_toml_files) -> None:
        mock_toml_files({"production.toml": "[observability.logging]\nformat = 'json'"})

        assert load_config(test_config_dir, "production") == {
            "observability": {"logging": {"format": "json"}}
        }

    def test_no_layers_yield_empty_config(self, test_config_dir: Path) -> None:
        assert load_config(test_config_dir, "development") == {}

    def test_defaults_come_from_environment(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_toml_files({"default.toml": "app_name = 'editor'", "qa.toml": "debug = true"})
        monkeypatch.setenv("TEMPLATESHIFT_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("TEMPLATESHIFT_ENV", "qa")

        assert load_config() == {"app_name": "editor", "debug": True}
