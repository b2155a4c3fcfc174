"""Tool selection service.

ToolSelectionService wraps a tool catalog and adds adaptive selection:

- ``select_tools`` runs the configured strategy, blends in quality scores,
  caches the result and narrows ``list_tool_schemas`` to the selection
- ``invoke`` passes calls through to the catalog and records outcomes
- ``save`` persists the embedding cache and quality data

Every collaborator can be injected, so tests can run entirely in memory.
The selector always runs outside the state lock so slow selections never
block tool invocations or schema listings.
"""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from toolpick.lib.cache.embedding_cache import EMBEDDING_CACHE_FILENAME, EmbeddingCache
from toolpick.lib.cache.keys import selection_key
from toolpick.lib.cache.selection_cache import SelectionCache
from toolpick.lib.completion import TextCompletion
from toolpick.lib.embeddings.base import Embedder
from toolpick.lib.embeddings.hashing import HashingEmbedder
from toolpick.lib.errors import SelectionTimeoutError
from toolpick.lib.logging_config import get_logger
from toolpick.lib.ranking.quality import QUALITY_FILENAME, QualityManager
from toolpick.lib.selectors.base import ToolSelector, build_group_breakdown
from toolpick.lib.selectors.factory import create_selector
from toolpick.models.config import ToolPickConfig
from toolpick.models.quality import QualityRecord
from toolpick.models.selection import SelectionCacheEntry, SelectionResult
from toolpick.models.tool import ScoredTool, ToolResponse, ToolSchema
from toolpick.tools.catalog import ToolCatalog

logger = get_logger(__name__)

REASONING_TOP_N = 5


class ToolSelectionService:
    """Adaptive tool selection over an external tool catalog.

    Attributes:
        catalog: Wrapped tool catalog.
        config: Selection configuration.
        selector: Active selection strategy.
        embedding_cache: Tool embedding cache.
        selection_cache: Selection result cache.
        quality: Execution quality tracker.
    """

    def __init__(
        self,
        catalog: ToolCatalog,
        config: ToolPickConfig | None = None,
        *,
        selector: ToolSelector | None = None,
        embedder: Embedder | None = None,
        completion: TextCompletion | None = None,
        embedding_cache: EmbeddingCache | None = None,
        selection_cache: SelectionCache | None = None,
        quality: QualityManager | None = None,
    ) -> None:
        """Initialize the service.

        Stores that are not injected are created from ``config`` and, when
        persistence is enabled, loaded from ``config.cache_dir``.

        Args:
            catalog: Tool catalog to wrap.
            config: Selection configuration; defaults are used if omitted.
            selector: Strategy override; otherwise built from config.
            embedder: Embedding provider; defaults to HashingEmbedder.
            completion: Text-completion service for LLM strategies.
            embedding_cache: Embedding cache override.
            selection_cache: Selection cache override.
            quality: Quality manager override.

        Raises:
            ConfigError: If the configured strategy cannot be built.
        """
        self.catalog = catalog
        self.config = config or ToolPickConfig()
        cache_dir = Path(self.config.cache_dir)

        if embedding_cache is None:
            embeddings_path = cache_dir / EMBEDDING_CACHE_FILENAME
            embedding_cache = EmbeddingCache(
                embeddings_path if self.config.enable_cache else None
            )
            embedding_cache.load()
        self.embedding_cache = embedding_cache

        if quality is None:
            path = cache_dir / QUALITY_FILENAME if self.config.enable_quality else None
            quality = QualityManager(path)
            quality.load()
        self.quality = quality

        self.selection_cache = selection_cache or SelectionCache(self.config.cache_ttl)

        self.selector = selector or create_selector(
            self.config,
            embedder or HashingEmbedder(),
            self.embedding_cache,
            completion,
        )

        self._lock = threading.Lock()
        self._current_task = ""
        self._selected_tools: list[ToolSchema] = []

        logger.debug(
            f"ToolSelectionService created: strategy={self.selector.name}, "
            f"max_tools={self.config.max_tools}, "
            f"quality={self.config.enable_quality}, cache={self.config.enable_cache}"
        )

    @property
    def current_task(self) -> str:
        """Task of the current selection, or an empty string."""
        with self._lock:
            return self._current_task

    def list_tool_schemas(self) -> list[ToolSchema]:
        """Return the current selection, or the full catalog if none."""
        with self._lock:
            if self._current_task and self._selected_tools:
                return list(self._selected_tools)
        return self.catalog.list_tool_schemas()

    def clear_selection(self) -> None:
        """Forget the current selection so listings return the full catalog."""
        with self._lock:
            self._current_task = ""
            self._selected_tools = []

    async def select_tools(self, task: str, max_tools: int = 0) -> SelectionResult:
        """Select the most relevant tools for a task.

        Args:
            task: Natural-language task description.
            max_tools: Maximum number of tools; <= 0 uses the configured
                default.

        Returns:
            Selection result.

        Raises:
            SelectorError: If the strategy fails or times out.
        """
        start = time.perf_counter()
        limit = max_tools if max_tools > 0 else self.config.max_tools
        key = selection_key(task, limit)

        all_tools = self.catalog.list_tool_schemas()
        if not all_tools:
            logger.warning("Tool catalog is empty, nothing to select")
            return SelectionResult(
                reasoning="No tools available",
                strategy=self.selector.name,
                elapsed_seconds=time.perf_counter() - start,
            )

        if self.config.enable_cache:
            cached = self.selection_cache.get(key)
            if cached is not None:
                result = self._result_from_cache(cached, all_tools, start)
                self._set_current(task, result.tools)
                logger.debug(f"Selection cache hit for task: {task[:50]}")
                return result

        scored = await self._run_selector(task, all_tools, limit)

        if self.config.enable_quality:
            scored = self.quality.adjust_ranking(
                scored,
                self.config.quality_weight,
                catalog_order=[tool.name for tool in all_tools],
            )

        tools = [st.tool for st in scored]
        scores = {st.name: st.score for st in scored}
        reasoning = self._build_reasoning(task, scored, len(all_tools))

        if self.config.enable_cache:
            self.selection_cache.set(
                key,
                SelectionCacheEntry(
                    tool_names=[tool.name for tool in tools],
                    scores=scores,
                    reasoning=reasoning,
                    strategy=self.selector.name,
                ),
            )
        self._set_current(task, tools)

        elapsed = time.perf_counter() - start
        logger.info(
            f"Selected {len(tools)}/{len(all_tools)} tools using "
            f"{self.selector.name} in {elapsed * 1000:.1f}ms"
        )
        return SelectionResult(
            tools=tools,
            scores=scores,
            reasoning=reasoning,
            strategy=self.selector.name,
            elapsed_seconds=elapsed,
            group_breakdown=build_group_breakdown(tools),
        )

    async def _run_selector(
        self, task: str, tools: list[ToolSchema], limit: int
    ) -> list[ScoredTool]:
        timeout = self.config.selection_timeout
        if timeout is None:
            return await self.selector.select(task, tools, limit)
        try:
            return await asyncio.wait_for(
                self.selector.select(task, tools, limit), timeout=timeout
            )
        except asyncio.TimeoutError as e:
            raise SelectionTimeoutError(self.selector.name, timeout) from e

    def _result_from_cache(
        self,
        entry: SelectionCacheEntry,
        all_tools: Sequence[ToolSchema],
        start: float,
    ) -> SelectionResult:
        """Rebuild a result from a cache entry against the current catalog."""
        by_name = {tool.name: tool for tool in all_tools}
        tools = [by_name[name] for name in entry.tool_names if name in by_name]
        scores = {
            tool.name: entry.scores[tool.name]
            for tool in tools
            if tool.name in entry.scores
        }
        return SelectionResult(
            tools=tools,
            scores=scores,
            reasoning=entry.reasoning,
            strategy=entry.strategy,
            elapsed_seconds=time.perf_counter() - start,
            group_breakdown=build_group_breakdown(tools),
            from_cache=True,
        )

    def _set_current(self, task: str, tools: Sequence[ToolSchema]) -> None:
        with self._lock:
            self._current_task = task
            self._selected_tools = list(tools)

    def _build_reasoning(
        self, task: str, scored: Sequence[ScoredTool], total_tools: int
    ) -> str:
        lines = [
            f"Selected {len(scored)}/{total_tools} tools using "
            f"{self.selector.name} strategy for task: {task}",
            "",
            "Top tools:",
        ]
        for st in scored[:REASONING_TOP_N]:
            lines.append(f"  - {st.name} ({st.score:.3f}): {st.reason}")
        if len(scored) > REASONING_TOP_N:
            lines.append(f"  ... and {len(scored) - REASONING_TOP_N} more")
        return "\n".join(lines)

    async def invoke(self, name: str, args: dict[str, Any]) -> ToolResponse:
        """Invoke a tool through the catalog and record the outcome.

        Success means no exception and no ``error`` on the response.
        Exceptions are recorded as failures and re-raised.
        """
        start = time.perf_counter()
        try:
            response = await self.catalog.invoke(name, args)
        except Exception:
            if self.config.enable_quality:
                self.quality.record_execution(
                    name, success=False, duration=time.perf_counter() - start
                )
            raise

        if self.config.enable_quality:
            self.quality.record_execution(
                name,
                success=not response.is_error,
                duration=time.perf_counter() - start,
            )
        return response

    def update_description_quality(self, name: str, quality: float) -> None:
        """Set the description quality score of a tool."""
        self.quality.update_description_quality(name, quality)

    def quality_report(self) -> dict[str, QualityRecord]:
        """Return copies of all quality records."""
        return self.quality.report()

    def get_selection_stats(self) -> dict[str, Any]:
        """Get statistics about the selection service.

        Returns:
            Dictionary with configuration and cache statistics.
        """
        return {
            "strategy": self.selector.name,
            "max_tools": self.config.max_tools,
            "llm_threshold": self.config.llm_threshold,
            "enable_quality": self.config.enable_quality,
            "quality_weight": self.config.quality_weight,
            "enable_cache": self.config.enable_cache,
            "cached_selections": len(self.selection_cache),
            "cached_embeddings": len(self.embedding_cache),
            "tracked_tools": len(self.quality),
            "current_task": self.current_task,
        }

    def clear_caches(self) -> None:
        """Drop cached selections and embeddings."""
        self.selection_cache.clear()
        self.embedding_cache.clear()

    def save(self) -> None:
        """Persist the embedding cache and quality data.

        Raises:
            PersistenceError: If either store cannot be written.
        """
        self.embedding_cache.save()
        if self.config.enable_quality:
            self.quality.save()
