"""LLM-based coarse tool filtering.

A single completion call partitions the catalog into always-relevant utility
tools and task-specific domain tools, and names the domain tools (or tool
groups) relevant to the task. Designed for precision when the catalog is
large. Unparsable model output degrades to utility-only results instead of
failing the selection.
"""

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from toolpick.lib.completion import TextCompletion
from toolpick.lib.errors import CompletionError
from toolpick.lib.logging_config import get_logger
from toolpick.lib.selectors.base import ToolSelector
from toolpick.models.tool import ScoredTool, ToolSchema

logger = get_logger(__name__)

UTILITY_SCORE = 1.0
DOMAIN_SCORE = 0.9
MAX_DESCRIPTION_CHARS = 80

SYSTEM_PROMPT = """You are an expert tool selection assistant.

Split the available tools into two kinds:
- utility tools: general-purpose tools useful for almost any task
- domain tools: tools for a specific domain, relevant only to some tasks

Tools are grouped by name prefix (e.g., "weather_" tools are in the "weather" \
group). Then decide which domain tools or groups are relevant to the task.

Return ONLY a JSON object:
{
  "utility_tools": ["tool_name"],
  "relevant_groups": ["group"],
  "relevant_tools": ["tool_name"]
}

Be inclusive - it's better to include a relevant group than miss it."""


class _ClassificationResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    utility_tools: list[str] = Field(default_factory=list)
    relevant_groups: list[str] = Field(default_factory=list)
    relevant_tools: list[str] = Field(default_factory=list)


@dataclass
class ToolClassification:
    """Outcome of an LLM classification call.

    Attributes:
        utility: Always-relevant tools, in catalog order.
        domain: Task-relevant domain tools, in catalog order.
        parsed: Whether the model response could be parsed.
    """

    utility: list[ToolSchema] = field(default_factory=list)
    domain: list[ToolSchema] = field(default_factory=list)
    parsed: bool = True

    @property
    def candidates(self) -> list[ToolSchema]:
        """Utility tools followed by relevant domain tools."""
        return [*self.utility, *self.domain]


def _extract_json(response: str) -> str:
    """Extract a JSON object from a model response.

    Handles fenced code blocks and leading/trailing prose.
    """
    text = response.strip()
    if "```" in text:
        _, _, fenced = text.partition("```")
        fenced, _, _ = fenced.partition("```")
        text = fenced.strip()
        if text.startswith("json"):
            text = text[4:]

    start = text.find("{")
    end = text.rfind("}")
    if start >= 0 and end > start:
        text = text[start : end + 1]
    return text.strip()


def parse_classification(response: str) -> _ClassificationResponse:
    """Parse a classification response.

    Raises:
        ValueError: If the response is not a valid classification object.
    """
    try:
        raw = json.loads(_extract_json(response))
        return _ClassificationResponse.model_validate(raw)
    except (json.JSONDecodeError, PydanticValidationError) as exc:
        raise ValueError(f"unparsable classification response: {exc}") from exc


class LLMFilterSelector(ToolSelector):
    """Selects utility tools plus task-relevant domain tools via an LLM.

    Attributes:
        completion: Text-completion service.
        model: Model name passed to the completion service.
        always_include: Tool names always treated as utility tools.
    """

    def __init__(
        self,
        completion: TextCompletion,
        model: str,
        always_include: Iterable[str] = (),
    ) -> None:
        """Initialize the selector.

        Args:
            completion: Text-completion service.
            model: Model name.
            always_include: Tool names always kept as utility tools.
        """
        self.completion = completion
        self.model = model
        self.always_include = list(always_include)

    @property
    def name(self) -> str:
        return "llm_filter"

    def build_prompt(self, task: str, tools: Sequence[ToolSchema]) -> str:
        """Build the classification prompt listing tools by group."""
        groups: dict[str, list[ToolSchema]] = {}
        for tool in tools:
            groups.setdefault(tool.group, []).append(tool)

        lines = [f"Task: {task}", "", "Available tool groups:"]
        for group, group_tools in groups.items():
            lines.append(f"\n### {group} ({len(group_tools)} tools)")
            for tool in group_tools:
                desc = tool.description
                if len(desc) > MAX_DESCRIPTION_CHARS:
                    desc = desc[: MAX_DESCRIPTION_CHARS - 3] + "..."
                lines.append(f"  - {tool.name}: {desc}")

        lines.append("")
        lines.append("Classify the tools and select the relevant ones for this task.")
        return "\n".join(lines)

    async def classify(
        self, task: str, tools: Sequence[ToolSchema]
    ) -> ToolClassification:
        """Partition tools into utility and relevant domain tools.

        Issues exactly one completion call for a non-empty tool list.

        Raises:
            CompletionError: If the completion service fails.
        """
        if not tools:
            return ToolClassification()

        prompt = self.build_prompt(task, tools)
        try:
            response = await self.completion.complete(
                prompt, self.model, system_prompt=SYSTEM_PROMPT
            )
        except CompletionError:
            raise
        except Exception as exc:
            raise CompletionError(f"{self.model} completion failed: {exc}") from exc

        pinned = set(self.always_include)
        try:
            parsed = parse_classification(response)
        except ValueError as exc:
            logger.warning(f"LLM tool classification degraded to utility-only: {exc}")
            utility = [tool for tool in tools if tool.name in pinned]
            return ToolClassification(utility=utility, parsed=False)

        utility_names = pinned | set(parsed.utility_tools)
        relevant_groups = set(parsed.relevant_groups)
        relevant_names = set(parsed.relevant_tools)

        classification = ToolClassification()
        for tool in tools:
            if tool.name in utility_names:
                classification.utility.append(tool)
            elif tool.name in relevant_names or tool.group in relevant_groups:
                classification.domain.append(tool)

        known = {tool.name for tool in tools}
        unknown = (set(parsed.utility_tools) | relevant_names) - known
        if unknown:
            logger.debug(f"Ignoring unknown tools from LLM response: {sorted(unknown)}")

        logger.debug(
            f"LLM classification: {len(classification.utility)} utility, "
            f"{len(classification.domain)} relevant domain of {len(tools)} tools"
        )
        return classification

    async def select(
        self, task: str, tools: Sequence[ToolSchema], max_results: int
    ) -> list[ScoredTool]:
        """Return utility tools followed by relevant domain tools."""
        if not tools or max_results <= 0:
            return []

        classification = await self.classify(task, tools)
        scored = [
            ScoredTool(tool=tool, score=UTILITY_SCORE, reason="Utility tool")
            for tool in classification.utility
        ]
        scored.extend(
            ScoredTool(
                tool=tool,
                score=DOMAIN_SCORE,
                reason=f"Selected by LLM (group: {tool.group})",
            )
            for tool in classification.domain
        )
        return scored[:max_results]
