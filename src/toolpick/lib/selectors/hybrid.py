"""Hybrid selection: LLM pre-filter for large catalogs, then semantic ranking.

Below the threshold the semantic selector ranks the full catalog on its own;
above it, one LLM classification call first shrinks the candidate set to the
utility tools plus the relevant domain tools.
"""

from collections.abc import Sequence

from toolpick.lib.logging_config import get_logger
from toolpick.lib.selectors.base import ToolSelector
from toolpick.lib.selectors.llm_filter import LLMFilterSelector
from toolpick.lib.selectors.semantic import SemanticSelector
from toolpick.models.tool import ScoredTool, ToolSchema

logger = get_logger(__name__)


class HybridSelector(ToolSelector):
    """Composes LLM filtering and semantic ranking by delegation.

    Attributes:
        semantic: Semantic selector used for the final ranking.
        llm_filter: LLM selector used for pre-filtering.
        llm_threshold: Tool count above which pre-filtering runs.
    """

    def __init__(
        self,
        semantic: SemanticSelector,
        llm_filter: LLMFilterSelector,
        llm_threshold: int,
    ) -> None:
        """Initialize the selector.

        Args:
            semantic: Semantic selector.
            llm_filter: LLM filter selector.
            llm_threshold: Tool count above which the LLM pre-filter runs.
        """
        self.semantic = semantic
        self.llm_filter = llm_filter
        self.llm_threshold = llm_threshold

    @property
    def name(self) -> str:
        return "hybrid"

    async def select(
        self, task: str, tools: Sequence[ToolSchema], max_results: int
    ) -> list[ScoredTool]:
        """Select tools, pre-filtering with the LLM for large catalogs."""
        if not tools or max_results <= 0:
            return []

        if len(tools) <= self.llm_threshold:
            logger.debug(
                f"Hybrid: {len(tools)} tools <= threshold {self.llm_threshold}, "
                "semantic only"
            )
            return await self.semantic.select(task, tools, max_results)

        classification = await self.llm_filter.classify(task, tools)
        candidates = classification.candidates
        if not candidates:
            logger.warning(
                f"Hybrid: LLM pre-filter kept none of {len(tools)} tools "
                f"(classification parsed: {classification.parsed}), "
                "returning an empty selection"
            )
            return []

        logger.debug(
            f"Hybrid: LLM pre-filter kept {len(candidates)}/{len(tools)} tools "
            f"({len(classification.utility)} utility)"
        )
        return await self.semantic.select(task, candidates, max_results)
