"""Semantic Kernel embedding adapter.

Wraps any Semantic Kernel ``EmbeddingGeneratorBase`` (OpenAITextEmbedding,
AzureTextEmbedding, OllamaTextEmbedding, ...) behind the ``Embedder``
contract used by the semantic selector.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from toolpick.lib.errors import EmbeddingError
from toolpick.lib.logging_config import get_logger

if TYPE_CHECKING:
    from semantic_kernel.connectors.ai.embedding_generator_base import (
        EmbeddingGeneratorBase,
    )

logger = get_logger(__name__)


class KernelEmbedder:
    """Embedder backed by a Semantic Kernel embedding service.

    Attributes:
        model_id: Identifier recorded with cached vectors.
    """

    def __init__(
        self, service: EmbeddingGeneratorBase, model_id: str | None = None
    ) -> None:
        """Initialize the adapter.

        Args:
            service: Semantic Kernel embedding service.
            model_id: Cache identifier; defaults to the service's ai_model_id.
        """
        self._service = service
        self.model_id = model_id or str(
            getattr(service, "ai_model_id", None) or type(service).__name__
        )

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed a batch of texts through the Semantic Kernel service.

        Raises:
            EmbeddingError: If the service fails or returns the wrong count.
        """
        if not texts:
            return []

        try:
            embeddings = await self._service.generate_embeddings(list(texts))
        except Exception as exc:
            raise EmbeddingError(
                f"{self.model_id} failed to embed {len(texts)} texts: {exc}"
            ) from exc

        vectors = [[float(v) for v in embedding] for embedding in embeddings]
        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"{self.model_id} returned {len(vectors)} embeddings "
                f"for {len(texts)} texts"
            )

        logger.debug(f"Generated {len(vectors)} embeddings with {self.model_id}")
        return vectors
