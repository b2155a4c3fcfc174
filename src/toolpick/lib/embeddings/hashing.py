"""Offline word-frequency embedder.

Tokens are hashed into a fixed number of buckets and counted, then the vector
is L2-normalized. It needs no model or network access, which makes it the
default when no embedding provider is configured. Quality is well below a
real embedding model; configure one for production use.
"""

import hashlib
import math
import re
from collections import Counter
from collections.abc import Sequence

DEFAULT_DIMENSIONS = 256


def _tokenize(text: str) -> list[str]:
    """Split text into lowercase alphanumeric tokens.

    Underscores separate tokens, so ``weather_get`` yields
    ``["weather", "get"]``.
    """
    return re.findall(r"[a-z0-9]+", text.lower())


def _bucket(token: str, dimensions: int) -> int:
    # Stable across processes, unlike hash()
    digest = hashlib.blake2b(token.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big") % dimensions


class HashingEmbedder:
    """Deterministic hashed bag-of-words embedder."""

    def __init__(self, dimensions: int = DEFAULT_DIMENSIONS) -> None:
        """Initialize the embedder.

        Args:
            dimensions: Size of the produced vectors.
        """
        if dimensions <= 0:
            raise ValueError("dimensions must be positive")
        self.dimensions = dimensions
        self.model_id = f"hashing-bow-{dimensions}"

    def embed_text(self, text: str) -> list[float]:
        """Embed a single text synchronously."""
        vector = [0.0] * self.dimensions
        for token, count in Counter(_tokenize(text)).items():
            vector[_bucket(token, self.dimensions)] += float(count)

        norm = math.sqrt(sum(v * v for v in vector))
        if norm > 0:
            vector = [v / norm for v in vector]
        return vector

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed a batch of texts."""
        return [self.embed_text(text) for text in texts]
