"""Selection result models.

Key models:
- SelectionCacheEntry: Serializable form of a selection kept in the cache
- SelectionResult: Result returned to callers of ``select_tools``
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from toolpick.models.tool import ToolSchema


class SelectionCacheEntry(BaseModel):
    """Cached outcome of a selection for one task.

    Attributes:
        tool_names: Selected tool names in ranked order.
        scores: Final score per selected tool.
        reasoning: Human-readable reasoning text.
        strategy: Name of the strategy that produced the selection.
        timestamp: UTC time the selection was computed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tool_names: list[str] = Field(default_factory=list)
    scores: dict[str, float] = Field(default_factory=dict)
    reasoning: str = ""
    strategy: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SelectionResult(BaseModel):
    """Result of a tool selection request.

    Attributes:
        tools: Selected tool schemas, best first.
        scores: Final score per selected tool name.
        reasoning: Human-readable explanation of the selection.
        strategy: Strategy that produced the selection.
        elapsed_seconds: Wall time spent serving the request.
        group_breakdown: Number of selected tools per tool group.
        from_cache: Whether the result was served from the selection cache.
    """

    model_config = ConfigDict(extra="forbid")

    tools: list[ToolSchema] = Field(default_factory=list)
    scores: dict[str, float] = Field(default_factory=dict)
    reasoning: str = ""
    strategy: str = ""
    elapsed_seconds: float = Field(default=0.0, ge=0.0)
    group_breakdown: dict[str, int] = Field(default_factory=dict)
    from_cache: bool = False

    @property
    def tool_names(self) -> list[str]:
        """Names of the selected tools in ranked order."""
        return [tool.name for tool in self.tools]
