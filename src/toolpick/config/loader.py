"""Configuration loader for toolpick.

Resolution order (highest priority first):
1. ``TOOLPICK_*`` environment variables
2. The YAML config file (``${VAR}`` references substituted from the env)
3. ToolPickConfig field defaults
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from toolpick.config.defaults import (
    BOOL_FIELDS,
    CONFIG_FILENAMES,
    ENV_VAR_MAP,
    FLOAT_FIELDS,
    INT_FIELDS,
)
from toolpick.config.validator import flatten_pydantic_errors
from toolpick.lib.errors import ConfigError
from toolpick.lib.logging_config import get_logger
from toolpick.models.config import ToolPickConfig

logger = get_logger(__name__)

_ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def substitute_env_vars(text: str, env: Mapping[str, str]) -> str:
    """Replace ``${VAR}`` references with environment values.

    Args:
        text: Raw configuration text.
        env: Environment variables mapping.

    Returns:
        Text with every reference substituted.

    Raises:
        ConfigError: If a referenced variable is not set.
    """

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in env:
            raise ConfigError(name, f"Environment variable '{name}' is not set")
        return env[name]

    return _ENV_PATTERN.sub(replace, text)


def _parse_env_value(field_name: str, value: str) -> Any:
    """Parse environment variable value to appropriate type.

    Args:
        field_name: Name of the field (used to determine type)
        value: String value from environment variable

    Returns:
        Parsed value in correct type (int, float, bool, or str)

    Raises:
        ValueError: If value cannot be parsed
    """
    if field_name in INT_FIELDS:
        return int(value)
    elif field_name in FLOAT_FIELDS:
        return float(value)
    elif field_name in BOOL_FIELDS:
        return value.lower() in ("true", "1", "yes", "on")
    else:
        return value


def _get_env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect config overrides from environment variables.

    Invalid values are logged and skipped.
    """
    overrides: dict[str, Any] = {}
    for field_name, env_var_name in ENV_VAR_MAP.items():
        if env_var_name not in env:
            continue
        try:
            overrides[field_name] = _parse_env_value(field_name, env[env_var_name])
        except ValueError:
            logger.warning(
                f"Ignoring invalid value for {env_var_name}: {env[env_var_name]!r}"
            )
    return overrides


def _read_yaml_with_env_substitution(
    path: Path, env: Mapping[str, str]
) -> dict[str, Any]:
    """Read a YAML config file with environment variable substitution.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError("config_file", f"Cannot read {path}: {e}") from e

    try:
        content = yaml.safe_load(substitute_env_vars(raw_text, env))
    except yaml.YAMLError as e:
        raise ConfigError("yaml_parse", f"Invalid YAML in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError("config_file", f"{path} must contain a mapping")
    # Allow the settings to be nested under a top-level 'toolpick' key
    nested = content.get("toolpick")
    if isinstance(nested, dict):
        return nested
    return content


def find_config_file(directory: Path) -> Path | None:
    """Return the first toolpick config file found in a directory."""
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.exists():
            return candidate
    return None


def load_config(
    path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> ToolPickConfig:
    """Load and validate toolpick configuration.

    Args:
        path: YAML config file. When omitted, ``toolpick.yaml`` or
            ``toolpick.yml`` in the working directory is used if present.
        env: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If the file is invalid or validation fails.
    """
    env = os.environ if env is None else env

    config_path = Path(path) if path is not None else find_config_file(Path.cwd())
    data: dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError("config_file", f"File not found: {config_path}")
        data = _read_yaml_with_env_substitution(config_path, env)
        logger.debug(f"Loaded configuration from {config_path}")

    data.update(_get_env_overrides(env))

    try:
        return ToolPickConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError("toolpick", "; ".join(flatten_pydantic_errors(e))) from e
