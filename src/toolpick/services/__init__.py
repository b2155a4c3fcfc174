"""Services built on the selection library."""

from toolpick.services.tool_selection import ToolSelectionService

__all__ = ["ToolSelectionService"]
