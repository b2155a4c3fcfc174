"""Selector contract shared by all selection strategies."""

from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable, Sequence

from toolpick.models.tool import ScoredTool, ToolSchema


class ToolSelector(ABC):
    """Scores and ranks tools against a task description.

    Implementations return tools sorted by descending score; ties keep the
    catalog order of the input.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name reported in selection results."""

    @abstractmethod
    async def select(
        self, task: str, tools: Sequence[ToolSchema], max_results: int
    ) -> list[ScoredTool]:
        """Select the most relevant tools for a task.

        Args:
            task: Natural-language task description.
            tools: Candidate tools in catalog order.
            max_results: Maximum number of tools to return.

        Returns:
            Scored tools, best first.
        """


def rank_scored_tools(
    scored_tools: Iterable[ScoredTool], max_results: int
) -> list[ScoredTool]:
    """Sort by descending score (stable) and keep the top ``max_results``."""
    ranked = sorted(scored_tools, key=lambda st: st.score, reverse=True)
    return ranked[: max(0, max_results)]


def build_group_breakdown(tools: Iterable[ToolSchema]) -> dict[str, int]:
    """Count tools per group."""
    return dict(Counter(tool.group for tool in tools))
