"""Pydantic models for toolpick."""

from toolpick.models.config import ProviderConfig, ProviderEnum, ToolPickConfig
from toolpick.models.quality import QualityRecord
from toolpick.models.selection import SelectionCacheEntry, SelectionResult
from toolpick.models.tool import ScoredTool, ToolResponse, ToolSchema, tool_group

__all__ = [
    "ProviderConfig",
    "ProviderEnum",
    "QualityRecord",
    "ScoredTool",
    "SelectionCacheEntry",
    "SelectionResult",
    "ToolPickConfig",
    "ToolResponse",
    "ToolSchema",
    "tool_group",
]
