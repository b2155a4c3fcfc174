"""Tool selection strategies.

- SemanticSelector: embedding similarity ranking
- LLMFilterSelector: coarse utility/domain classification with an LLM
- HybridSelector: LLM pre-filter for large catalogs, then semantic ranking
"""

from toolpick.lib.selectors.base import (
    ToolSelector,
    build_group_breakdown,
    rank_scored_tools,
)
from toolpick.lib.selectors.factory import create_selector
from toolpick.lib.selectors.hybrid import HybridSelector
from toolpick.lib.selectors.llm_filter import LLMFilterSelector, ToolClassification
from toolpick.lib.selectors.semantic import SemanticSelector

__all__ = [
    "HybridSelector",
    "LLMFilterSelector",
    "SemanticSelector",
    "ToolClassification",
    "ToolSelector",
    "build_group_breakdown",
    "create_selector",
    "rank_scored_tools",
]
