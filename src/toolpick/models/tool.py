"""Tool models shared by the catalog, selectors and orchestrator.

Key models:
- ToolSchema: Descriptor of a callable tool exposed by a catalog
- ToolResponse: Result of invoking a tool
- ScoredTool: A tool with its relevance score for a single selection
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_GROUP = "default"


def tool_group(name: str) -> str:
    """Return the group of a tool name.

    The group is the prefix before the first underscore, so ``weather_get``
    belongs to ``weather``. Names without an underscore belong to the
    ``default`` group.
    """
    prefix, sep, _ = name.partition("_")
    if sep and prefix:
        return prefix
    return DEFAULT_GROUP


class ToolSchema(BaseModel):
    """Descriptor of a tool as exposed by a tool catalog.

    Attributes:
        name: Unique, stable tool identifier (e.g., "weather_get").
        description: Free-text description used for matching.
        parameters: JSON schema of the tool arguments.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(default="", description="Human-readable description")
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="JSON schema for tool arguments"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name is not empty."""
        if not v or not v.strip():
            raise ValueError("name must be a non-empty string")
        return v

    @property
    def group(self) -> str:
        """Group derived from the tool name prefix."""
        return tool_group(self.name)

    def searchable_text(self) -> str:
        """Text embedded for semantic matching."""
        return f"{self.name}: {self.description}"


class ToolResponse(BaseModel):
    """Result returned by a tool invocation.

    Attributes:
        content: Tool output payload.
        error: Error message reported by the tool, if any.
    """

    model_config = ConfigDict(extra="forbid")

    content: Any = Field(default=None, description="Tool output")
    error: str | None = Field(default=None, description="Tool-reported error")

    @property
    def is_error(self) -> bool:
        """Whether the tool reported an error."""
        return bool(self.error)


class ScoredTool(BaseModel):
    """A tool with its relevance score for one selection call.

    Instances are immutable; ranking adjustments create new instances.

    Attributes:
        tool: The scored tool schema.
        score: Relevance score in [0, 1].
        reason: Human-readable explanation of the score.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tool: ToolSchema
    score: float = Field(..., ge=0.0, le=1.0, description="Relevance score")
    reason: str = Field(default="", description="Why the tool was selected")

    @property
    def name(self) -> str:
        """Name of the scored tool."""
        return self.tool.name
