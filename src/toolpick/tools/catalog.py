"""Tool catalog contract consumed by the selection service."""

from typing import Any, Protocol, runtime_checkable

from toolpick.models.tool import ToolResponse, ToolSchema


@runtime_checkable
class ToolCatalog(Protocol):
    """Source of tool schemas and the entry point for executing tools."""

    def list_tool_schemas(self) -> list[ToolSchema]:
        """Return every available tool schema in catalog order."""
        ...

    async def invoke(self, name: str, args: dict[str, Any]) -> ToolResponse:
        """Execute a tool by name.

        Raises:
            Exception: If the tool cannot be executed.
        """
        ...
