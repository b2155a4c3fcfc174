"""Caching layer for tool selection.

- EmbeddingCache: persistent, content-addressed embedding vectors
- SelectionCache: in-memory selection results with a TTL
"""

from toolpick.lib.cache.embedding_cache import (
    EMBEDDING_CACHE_FILENAME,
    EmbeddingCache,
    EmbeddingCacheEntry,
)
from toolpick.lib.cache.keys import content_hash, selection_key
from toolpick.lib.cache.selection_cache import SelectionCache

__all__ = [
    "EMBEDDING_CACHE_FILENAME",
    "EmbeddingCache",
    "EmbeddingCacheEntry",
    "SelectionCache",
    "content_hash",
    "selection_key",
]
