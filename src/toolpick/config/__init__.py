"""Configuration loading for toolpick."""

from toolpick.config.loader import find_config_file, load_config, substitute_env_vars
from toolpick.config.validator import flatten_pydantic_errors

__all__ = [
    "find_config_file",
    "flatten_pydantic_errors",
    "load_config",
    "substitute_env_vars",
]
