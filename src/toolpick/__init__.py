"""toolpick - Adaptive tool selection for LLM agents.

toolpick narrows a large tool catalog down to the handful of tools most
relevant to a task before they are offered to a model.

Main features:
- Semantic, LLM-filter and hybrid selection strategies
- Quality-aware ranking from recorded tool executions
- Persistent embedding cache and TTL selection cache
- OpenAI, Azure OpenAI and Ollama providers via Semantic Kernel
"""

from toolpick.config.loader import load_config
from toolpick.lib.errors import ConfigError, SelectorError, ToolPickError
from toolpick.models.config import ToolPickConfig
from toolpick.models.selection import SelectionResult
from toolpick.models.tool import ScoredTool, ToolResponse, ToolSchema
from toolpick.services.tool_selection import ToolSelectionService
from toolpick.tools.registry import ToolRegistry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "ScoredTool",
    "SelectionResult",
    "SelectorError",
    "ToolPickConfig",
    "ToolPickError",
    "ToolRegistry",
    "ToolResponse",
    "ToolSchema",
    "ToolSelectionService",
    "load_config",
]
