"""Tool catalog contract and handler registry."""

from toolpick.tools.catalog import ToolCatalog
from toolpick.tools.registry import ToolHandler, ToolRegistry, load_catalog_file

__all__ = ["ToolCatalog", "ToolHandler", "ToolRegistry", "load_catalog_file"]
