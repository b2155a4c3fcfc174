"""Configuration models for toolpick.

ToolPickConfig holds every option recognized by the selection service.
ProviderConfig describes an optional model provider used to build the
embedding and text-completion services through Semantic Kernel connectors.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

StrategyName = Literal["semantic", "llm_filter", "hybrid"]


class ProviderEnum(str, Enum):
    """Supported model providers."""

    OPENAI = "openai"
    AZURE_OPENAI = "azure_openai"
    OLLAMA = "ollama"


class ProviderConfig(BaseModel):
    """Connection settings for an embedding or chat completion provider.

    Attributes:
        provider: Provider type.
        model: Model or deployment name.
        api_key: API key, usually substituted from the environment.
        endpoint: Endpoint URL (required for Azure OpenAI).
    """

    model_config = ConfigDict(extra="forbid")

    provider: ProviderEnum = Field(..., description="Model provider")
    model: str = Field(..., description="Model or deployment name")
    api_key: str | None = Field(default=None, description="Provider API key")
    endpoint: str | None = Field(default=None, description="Provider endpoint URL")

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        """Validate model is not empty."""
        if not v or not v.strip():
            raise ValueError("model must be a non-empty string")
        return v


class ToolPickConfig(BaseModel):
    """Configuration for adaptive tool selection.

    Attributes:
        strategy: Selection strategy (semantic, llm_filter or hybrid).
        max_tools: Default maximum number of tools per selection.
        llm_threshold: Tool count above which hybrid uses LLM pre-filtering.
        enable_quality: Track execution quality and re-rank with it.
        quality_weight: Weight of the quality score in the final ranking.
        enable_cache: Cache selections and persist embeddings to disk.
        cache_dir: Directory holding the embedding and quality files.
        cache_ttl: Selection cache time-to-live in seconds.
        llm_model: Model name passed to the text-completion service.
        always_include: Tool names always treated as utility tools.
        selection_timeout: Optional timeout in seconds for a selection.
        embedding: Optional embedding provider settings.
        llm: Optional chat completion provider settings.
    """

    model_config = ConfigDict(extra="forbid")

    strategy: StrategyName = Field(default="hybrid", description="Selection strategy")
    max_tools: int = Field(
        default=20, ge=1, le=200, description="Maximum tools per selection (1-200)"
    )
    llm_threshold: int = Field(
        default=50, ge=0, description="Tool count above which LLM pre-filtering runs"
    )
    enable_quality: bool = Field(default=True, description="Enable quality tracking")
    quality_weight: float = Field(
        default=0.2, ge=0.0, le=1.0, description="Quality weight (0.0-1.0)"
    )
    enable_cache: bool = Field(default=True, description="Enable caching")
    cache_dir: str = Field(default=".toolpick/cache", description="Cache directory")
    cache_ttl: float = Field(
        default=86400, gt=0, description="Selection cache TTL in seconds"
    )
    llm_model: str = Field(default="gpt-4o-mini", description="LLM model name")
    always_include: list[str] = Field(
        default_factory=list, description="Tool names always included"
    )
    selection_timeout: float | None = Field(
        default=None, gt=0, description="Selection timeout in seconds"
    )
    embedding: ProviderConfig | None = Field(
        default=None, description="Embedding provider settings"
    )
    llm: ProviderConfig | None = Field(
        default=None, description="Chat completion provider settings"
    )

    @field_validator("always_include")
    @classmethod
    def validate_always_include(cls, v: list[str]) -> list[str]:
        """Validate always_include entries are non-empty strings."""
        for tool_name in v:
            if not tool_name or not tool_name.strip():
                raise ValueError("always_include entries must be non-empty strings")
        return v
