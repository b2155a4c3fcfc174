"""Tests for toolpick configuration loading.

Covers YAML loading, ${VAR} substitution, TOOLPICK_* environment overrides
and conversion of validation failures into ConfigError.
"""

import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from toolpick.config.loader import (
    _get_env_overrides,
    _parse_env_value,
    find_config_file,
    load_config,
    substitute_env_vars,
)
from toolpick.lib.errors import ConfigError
from toolpick.models.config import ProviderEnum


def _write_config(path: Path, content: dict[str, Any]) -> Path:
    path.write_text(yaml.dump(content))
    return path


class TestSubstituteEnvVars:
    """Tests for ${VAR} substitution."""

    def test_substitutes_variables(self) -> None:
        """Test that references are replaced with values."""
        text = "api_key: ${OPENAI_API_KEY}\nmodel: ${MODEL}"
        result = substitute_env_vars(text, {"OPENAI_API_KEY": "sk-1", "MODEL": "m"})
        assert result == "api_key: sk-1\nmodel: m"

    def test_missing_variable(self) -> None:
        """Test that an unset variable is a configuration error."""
        with pytest.raises(ConfigError) as exc_info:
            substitute_env_vars("key: ${MISSING_VAR}", {})
        assert exc_info.value.field == "MISSING_VAR"

    def test_plain_dollar_untouched(self) -> None:
        """Test that text without references is unchanged."""
        assert substitute_env_vars("cost: $5", {}) == "cost: $5"


class TestParseEnvValue:
    """Tests for environment value parsing."""

    def test_int_field(self) -> None:
        """Test integer fields."""
        assert _parse_env_value("max_tools", "7") == 7

    def test_float_field(self) -> None:
        """Test float fields."""
        assert _parse_env_value("quality_weight", "0.35") == 0.35

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("true", True), ("1", True), ("YES", True), ("on", True), ("false", False), ("0", False)],
    )
    def test_bool_field(self, value: str, expected: bool) -> None:
        """Test boolean fields."""
        assert _parse_env_value("enable_cache", value) is expected

    def test_string_field(self) -> None:
        """Test string fields are passed through."""
        assert _parse_env_value("strategy", "semantic") == "semantic"

    def test_invalid_int(self) -> None:
        """Test that bad integers raise ValueError."""
        with pytest.raises(ValueError):
            _parse_env_value("max_tools", "many")


class TestEnvOverrides:
    """Tests for TOOLPICK_* environment overrides."""

    def test_collects_known_variables(self) -> None:
        """Test that mapped variables become overrides."""
        overrides = _get_env_overrides(
            {
                "TOOLPICK_STRATEGY": "semantic",
                "TOOLPICK_MAX_TOOLS": "5",
                "TOOLPICK_CACHE_DIR": "/tmp/tp",
                "UNRELATED": "x",
            }
        )
        assert overrides == {"strategy": "semantic", "max_tools": 5, "cache_dir": "/tmp/tp"}

    def test_invalid_value_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that unparsable values are logged and ignored."""
        with caplog.at_level(logging.WARNING, logger="toolpick"):
            overrides = _get_env_overrides({"TOOLPICK_MAX_TOOLS": "lots"})

        assert overrides == {}
        assert "TOOLPICK_MAX_TOOLS" in caplog.text


class TestFindConfigFile:
    """Tests for config file discovery."""

    def test_no_file(self, temp_dir: Path) -> None:
        """Test that a directory without config yields None."""
        assert find_config_file(temp_dir) is None

    def test_yaml_preferred_over_yml(self, temp_dir: Path) -> None:
        """Test the search order."""
        (temp_dir / "toolpick.yml").write_text("max_tools: 1")
        (temp_dir / "toolpick.yaml").write_text("max_tools: 2")
        assert find_config_file(temp_dir) == temp_dir / "toolpick.yaml"

    def test_yml(self, temp_dir: Path) -> None:
        """Test finding a .yml file."""
        (temp_dir / "toolpick.yml").write_text("max_tools: 1")
        assert find_config_file(temp_dir) == temp_dir / "toolpick.yml"


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, temp_dir: Path, monkeypatch: Any) -> None:
        """Test that defaults are used when no file exists."""
        monkeypatch.chdir(temp_dir)
        config = load_config(env={})
        assert config.strategy == "hybrid"
        assert config.max_tools == 20

    def test_discovers_file_in_cwd(self, temp_dir: Path, monkeypatch: Any) -> None:
        """Test that toolpick.yaml in the working directory is used."""
        _write_config(temp_dir / "toolpick.yaml", {"max_tools": 9})
        monkeypatch.chdir(temp_dir)

        assert load_config(env={}).max_tools == 9

    def test_loads_yaml(self, temp_dir: Path) -> None:
        """Test loading every kind of setting from YAML."""
        path = _write_config(
            temp_dir / "config.yaml",
            {
                "strategy": "llm_filter",
                "max_tools": 8,
                "quality_weight": 0.4,
                "always_include": ["file_read"],
                "llm": {"provider": "openai", "model": "gpt-4o"},
            },
        )

        config = load_config(path, env={})

        assert config.strategy == "llm_filter"
        assert config.max_tools == 8
        assert config.quality_weight == 0.4
        assert config.always_include == ["file_read"]
        assert config.llm is not None
        assert config.llm.provider == ProviderEnum.OPENAI

    def test_nested_under_toolpick_key(self, temp_dir: Path) -> None:
        """Test that settings may live under a top-level toolpick key."""
        path = _write_config(temp_dir / "agent.yaml", {"toolpick": {"max_tools": 3}})
        assert load_config(path, env={}).max_tools == 3

    def test_env_substitution(self, temp_dir: Path) -> None:
        """Test that ${VAR} references are resolved from env."""
        path = temp_dir / "config.yaml"
        path.write_text(
            "embedding:\n"
            "  provider: openai\n"
            "  model: text-embedding-3-small\n"
            "  api_key: ${OPENAI_API_KEY}\n"
        )

        config = load_config(path, env={"OPENAI_API_KEY": "sk-secret"})

        assert config.embedding is not None
        assert config.embedding.api_key == "sk-secret"

    def test_env_overrides_file(self, temp_dir: Path) -> None:
        """Test that TOOLPICK_* variables take precedence over the file."""
        path = _write_config(temp_dir / "config.yaml", {"max_tools": 8, "strategy": "hybrid"})

        config = load_config(
            path,
            env={"TOOLPICK_MAX_TOOLS": "4", "TOOLPICK_ENABLE_QUALITY": "false"},
        )

        assert config.max_tools == 4
        assert config.enable_quality is False
        assert config.strategy == "hybrid"

    def test_empty_file(self, temp_dir: Path) -> None:
        """Test that an empty file yields defaults."""
        path = temp_dir / "config.yaml"
        path.write_text("")
        assert load_config(path, env={}).max_tools == 20

    def test_missing_explicit_file(self, temp_dir: Path) -> None:
        """Test that an explicit missing path is an error."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(temp_dir / "nope.yaml", env={})
        assert exc_info.value.field == "config_file"

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """Test that malformed YAML is a configuration error."""
        path = temp_dir / "config.yaml"
        path.write_text("max_tools: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path, env={})
        assert exc_info.value.field == "yaml_parse"

    def test_non_mapping(self, temp_dir: Path) -> None:
        """Test that a YAML list is rejected."""
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(path, env={})

    def test_validation_error_is_flattened(self, temp_dir: Path) -> None:
        """Test that pydantic errors become one ConfigError."""
        path = _write_config(
            temp_dir / "config.yaml", {"max_tools": 0, "quality_weight": 3}
        )

        with pytest.raises(ConfigError) as exc_info:
            load_config(path, env={})

        assert exc_info.value.field == "toolpick"
        assert "max_tools" in exc_info.value.message
        assert "quality_weight" in exc_info.value.message

    def test_unknown_option(self, temp_dir: Path) -> None:
        """Test that unknown options are rejected."""
        path = _write_config(temp_dir / "config.yaml", {"max_toolz": 3})

        with pytest.raises(ConfigError, match="max_toolz"):
            load_config(path, env={})
