"""Unit tests for the semantic selector."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from toolpick.lib.cache.embedding_cache import EmbeddingCache
from toolpick.lib.cache.keys import content_hash
from toolpick.lib.errors import EmbeddingError
from toolpick.lib.selectors.semantic import SemanticSelector
from toolpick.models.tool import ToolSchema

WEATHER_TASK = "What's the weather in Tokyo?"


def _mock_embedder(
    vectors: list[list[float]] | None = None, error: Exception | None = None
) -> MagicMock:
    embedder = MagicMock()
    embedder.model_id = "mock-model"
    embedder.embed = AsyncMock(return_value=vectors, side_effect=error)
    return embedder


class TestSemanticSelection:
    """Tests for ranking by embedding similarity."""

    @pytest.mark.asyncio
    async def test_weather_task_ranks_weather_tool_first(
        self, embedder, sample_tools: list[ToolSchema]
    ) -> None:
        """Test the weather_get end-to-end ranking with max_results=1."""
        selector = SemanticSelector(embedder, EmbeddingCache())

        ranked = await selector.select(WEATHER_TASK, sample_tools, 3)

        assert ranked[0].name == "weather_get"
        assert ranked[0].score > ranked[1].score
        assert ranked[0].score > ranked[2].score

        top = await selector.select(WEATHER_TASK, sample_tools, 1)
        assert [st.name for st in top] == ["weather_get"]

    @pytest.mark.asyncio
    async def test_reason_reports_similarity(
        self, embedder, sample_tools: list[ToolSchema]
    ) -> None:
        """Test that the reason carries the similarity value."""
        selector = SemanticSelector(embedder, EmbeddingCache())

        ranked = await selector.select(WEATHER_TASK, sample_tools, 1)

        assert ranked[0].reason.startswith("Semantic similarity: ")
        assert ranked[0].reason == f"Semantic similarity: {ranked[0].score:.3f}"

    def test_name_is_semantic(self, embedder) -> None:
        """Test the strategy name."""
        assert SemanticSelector(embedder, EmbeddingCache()).name == "semantic"

    @pytest.mark.asyncio
    async def test_empty_tools(self, embedder) -> None:
        """Test that no tools means no embedding call."""
        selector = SemanticSelector(embedder, EmbeddingCache())

        assert await selector.select("task", [], 5) == []
        assert embedder.calls == []

    @pytest.mark.asyncio
    async def test_non_positive_max_results(
        self, embedder, sample_tools: list[ToolSchema]
    ) -> None:
        """Test that max_results <= 0 selects nothing."""
        selector = SemanticSelector(embedder, EmbeddingCache())
        assert await selector.select("task", sample_tools, 0) == []

    @pytest.mark.asyncio
    async def test_ties_keep_catalog_order(
        self, embedder, sample_tools: list[ToolSchema]
    ) -> None:
        """Test that equal scores keep the input order."""
        selector = SemanticSelector(embedder, EmbeddingCache())

        # No vocabulary words in the task, so every similarity is 0
        ranked = await selector.select("hello there", sample_tools, 3)

        assert [st.name for st in ranked] == ["weather_get", "calc_add", "file_read"]
        assert all(st.score == 0.0 for st in ranked)

    @pytest.mark.asyncio
    async def test_negative_similarity_clamped(self) -> None:
        """Test that opposite vectors score 0 rather than a negative value."""
        embedder = _mock_embedder([[1.0, 0.0], [-1.0, 0.0]])
        selector = SemanticSelector(embedder, EmbeddingCache())
        tool = ToolSchema(name="calc_add", description="Add two numbers")

        ranked = await selector.select("task", [tool], 1)

        assert ranked[0].score == 0.0
        assert ranked[0].reason == "Semantic similarity: -1.000"


class TestSemanticEmbeddingCache:
    """Tests for tool embedding caching."""

    @pytest.mark.asyncio
    async def test_tool_embeddings_are_cached(
        self, embedder, sample_tools: list[ToolSchema]
    ) -> None:
        """Test that a second selection only embeds the new task."""
        cache = EmbeddingCache()
        selector = SemanticSelector(embedder, cache)

        await selector.select(WEATHER_TASK, sample_tools, 3)
        await selector.select("add two numbers", sample_tools, 3)

        assert len(embedder.calls) == 2
        assert embedder.calls[0][0] == WEATHER_TASK
        assert len(embedder.calls[0]) == 4
        assert embedder.calls[1] == ["add two numbers"]
        assert len(cache) == 3

    @pytest.mark.asyncio
    async def test_cache_keyed_by_tool_text_hash(
        self, embedder, sample_tools: list[ToolSchema]
    ) -> None:
        """Test that cache keys are content hashes of the tool text."""
        cache = EmbeddingCache()
        selector = SemanticSelector(embedder, cache)

        await selector.select(WEATHER_TASK, sample_tools, 1)

        for tool in sample_tools:
            key = content_hash(tool.searchable_text())
            assert cache.get(key, model="vocab-test") == embedder.embed_text(
                tool.searchable_text()
            )

    @pytest.mark.asyncio
    async def test_vectors_from_other_model_are_recomputed(
        self, embedder, sample_tools: list[ToolSchema]
    ) -> None:
        """Test that cached vectors of a different model are not reused."""
        cache = EmbeddingCache()
        for tool in sample_tools:
            cache.put(content_hash(tool.searchable_text()), [9.0] * 12, model="other")
        selector = SemanticSelector(embedder, cache)

        await selector.select(WEATHER_TASK, sample_tools, 3)

        assert len(embedder.calls[0]) == 4

    @pytest.mark.asyncio
    async def test_failure_leaves_cache_untouched(
        self, sample_tools: list[ToolSchema]
    ) -> None:
        """Test that a failed batch writes nothing to the cache."""
        cache = EmbeddingCache()
        embedder = _mock_embedder(error=RuntimeError("service unavailable"))
        selector = SemanticSelector(embedder, cache)

        with pytest.raises(EmbeddingError, match="service unavailable"):
            await selector.select("task", sample_tools, 3)

        assert len(cache) == 0
        assert not cache.dirty

    @pytest.mark.asyncio
    async def test_embedding_error_propagates_unchanged(
        self, sample_tools: list[ToolSchema]
    ) -> None:
        """Test that EmbeddingError from the embedder is not re-wrapped."""
        error = EmbeddingError("quota exceeded")
        selector = SemanticSelector(_mock_embedder(error=error), EmbeddingCache())

        with pytest.raises(EmbeddingError) as exc_info:
            await selector.select("task", sample_tools, 3)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_wrong_vector_count(self, sample_tools: list[ToolSchema]) -> None:
        """Test that a short embedding response is an error."""
        selector = SemanticSelector(_mock_embedder([[1.0]]), EmbeddingCache())

        with pytest.raises(EmbeddingError, match="returned 1 vectors"):
            await selector.select("task", sample_tools, 3)
