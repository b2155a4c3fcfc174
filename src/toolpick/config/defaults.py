"""Default configuration values for toolpick."""

# Config file names searched in the working directory, in order
CONFIG_FILENAMES = ("toolpick.yaml", "toolpick.yml")

# Environment variable to field name mapping
ENV_VAR_MAP = {
    "strategy": "TOOLPICK_STRATEGY",
    "max_tools": "TOOLPICK_MAX_TOOLS",
    "llm_threshold": "TOOLPICK_LLM_THRESHOLD",
    "enable_quality": "TOOLPICK_ENABLE_QUALITY",
    "quality_weight": "TOOLPICK_QUALITY_WEIGHT",
    "enable_cache": "TOOLPICK_ENABLE_CACHE",
    "cache_dir": "TOOLPICK_CACHE_DIR",
    "cache_ttl": "TOOLPICK_CACHE_TTL",
    "llm_model": "TOOLPICK_LLM_MODEL",
}

INT_FIELDS = ("max_tools", "llm_threshold")
FLOAT_FIELDS = ("quality_weight", "cache_ttl")
BOOL_FIELDS = ("enable_quality", "enable_cache")
