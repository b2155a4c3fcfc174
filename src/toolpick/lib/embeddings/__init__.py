"""Embedding providers for semantic tool selection."""

from toolpick.lib.embeddings.base import Embedder, cosine_similarity
from toolpick.lib.embeddings.hashing import HashingEmbedder
from toolpick.lib.embeddings.kernel import KernelEmbedder

__all__ = ["Embedder", "HashingEmbedder", "KernelEmbedder", "cosine_similarity"]
