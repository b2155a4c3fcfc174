"""Embedding-similarity tool selection.

Each tool is represented by ``"{name}: {description}"``. Tool embeddings are
cached by the content hash of that text, so repeated selections amortize the
embedding cost across different tasks. Only cache misses are sent to the
embedder, in a single batch together with the task.
"""

from collections.abc import Sequence

from toolpick.lib.cache.embedding_cache import EmbeddingCache
from toolpick.lib.cache.keys import content_hash
from toolpick.lib.embeddings.base import Embedder, cosine_similarity
from toolpick.lib.errors import EmbeddingError
from toolpick.lib.logging_config import get_logger
from toolpick.lib.selectors.base import ToolSelector, rank_scored_tools
from toolpick.models.tool import ScoredTool, ToolSchema

logger = get_logger(__name__)


class SemanticSelector(ToolSelector):
    """Ranks tools by cosine similarity between task and tool embeddings.

    Attributes:
        embedder: Embedding provider.
        embedding_cache: Cache of tool embeddings keyed by content hash.
    """

    def __init__(self, embedder: Embedder, embedding_cache: EmbeddingCache) -> None:
        """Initialize the selector.

        Args:
            embedder: Embedding provider.
            embedding_cache: Tool embedding cache.
        """
        self.embedder = embedder
        self.embedding_cache = embedding_cache

    @property
    def name(self) -> str:
        return "semantic"

    async def _embed(self, texts: list[str]) -> list[list[float]]:
        try:
            vectors = await self.embedder.embed(texts)
        except EmbeddingError:
            raise
        except Exception as exc:
            raise EmbeddingError(f"embedding request failed: {exc}") from exc

        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"embedder returned {len(vectors)} vectors for {len(texts)} texts"
            )
        return vectors

    async def select(
        self, task: str, tools: Sequence[ToolSchema], max_results: int
    ) -> list[ScoredTool]:
        """Rank tools by semantic similarity to the task.

        Raises:
            EmbeddingError: If the embedder fails.
        """
        if not tools or max_results <= 0:
            return []

        model_id = self.embedder.model_id
        keys = [content_hash(tool.searchable_text()) for tool in tools]

        tool_vectors: dict[str, list[float]] = {}
        missing: dict[str, str] = {}
        for tool, key in zip(tools, keys, strict=True):
            cached = self.embedding_cache.get(key, model=model_id)
            if cached is not None:
                tool_vectors[key] = cached
            else:
                missing.setdefault(key, tool.searchable_text())

        # Task first, then every uncached tool text
        batch = [task, *missing.values()]
        vectors = await self._embed(batch)
        task_vector = vectors[0]
        new_vectors = dict(zip(missing.keys(), vectors[1:], strict=True))
        tool_vectors.update(new_vectors)

        # Commit only after the whole batch succeeded
        self.embedding_cache.put_many(new_vectors, model=model_id)

        logger.debug(
            f"Semantic selection over {len(tools)} tools "
            f"({len(tools) - len(missing)} cached, {len(missing)} embedded)"
        )

        scored: list[ScoredTool] = []
        for tool, key in zip(tools, keys, strict=True):
            similarity = cosine_similarity(task_vector, tool_vectors[key])
            score = max(0.0, min(1.0, similarity))
            scored.append(
                ScoredTool(
                    tool=tool,
                    score=score,
                    reason=f"Semantic similarity: {similarity:.3f}",
                )
            )

        return rank_scored_tools(scored, max_results)
