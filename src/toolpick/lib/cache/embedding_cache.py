"""Persistent embedding cache keyed by content hash.

Embeddings for fixed text never change for a fixed model, so the cache is
purely additive: entries are only dropped by an explicit ``clear``. Each
entry remembers the embedder model id so a lookup made with a different
model is treated as a miss.

File format::

    {
      "version": "1.0",
      "entries": {"<sha256>": {"model": "text-embedding-3-small", "vector": [...]}}
    }
"""

from __future__ import annotations

import threading
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from toolpick.lib.errors import PersistenceError
from toolpick.lib.logging_config import get_logger
from toolpick.lib.persistence import atomic_write_json, read_json_file

logger = get_logger(__name__)

CACHE_VERSION = "1.0"
EMBEDDING_CACHE_FILENAME = "embeddings.json"


class EmbeddingCacheEntry(BaseModel):
    """A cached embedding vector and the model that produced it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    vector: tuple[float, ...]
    model: str = ""


class _EmbeddingCacheFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: str = CACHE_VERSION
    entries: dict[str, EmbeddingCacheEntry] = Field(default_factory=dict)


class EmbeddingCache:
    """Thread-safe map from content hash to embedding vector.

    Attributes:
        path: JSON file used by ``save``/``load``; None keeps the cache
            in memory only.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize an empty cache.

        Args:
            path: Optional file for persistence.
        """
        self.path = path
        self._entries: dict[str, EmbeddingCacheEntry] = {}
        self._lock = threading.Lock()
        self._dirty = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    @property
    def dirty(self) -> bool:
        """Whether the cache has unsaved changes."""
        return self._dirty

    def get(self, key: str, model: str | None = None) -> list[float] | None:
        """Look up an embedding.

        Args:
            key: Content hash of the embedded text.
            model: If given, only return entries produced by this model.

        Returns:
            A copy of the vector, or None on a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if model is not None and entry.model != model:
            return None
        return list(entry.vector)

    def put(self, key: str, vector: list[float], model: str = "") -> None:
        """Store an embedding under a content hash.

        Args:
            key: Content hash of the embedded text.
            vector: Embedding vector.
            model: Identifier of the model that produced the vector.
        """
        entry = EmbeddingCacheEntry(vector=tuple(float(v) for v in vector), model=model)
        with self._lock:
            self._entries[key] = entry
            self._dirty = True

    def put_many(self, entries: dict[str, list[float]], model: str = "") -> None:
        """Store several embeddings at once under a single lock acquisition."""
        converted = {
            key: EmbeddingCacheEntry(
                vector=tuple(float(v) for v in vector), model=model
            )
            for key, vector in entries.items()
        }
        if not converted:
            return
        with self._lock:
            self._entries.update(converted)
            self._dirty = True

    def clear(self) -> None:
        """Remove every cached embedding."""
        with self._lock:
            self._entries.clear()
            self._dirty = True

    def save(self) -> bool:
        """Persist the cache if it changed since the last save.

        Returns:
            True if a file was written, False if there was nothing to do.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        if self.path is None:
            return False

        with self._lock:
            if not self._dirty:
                return False
            payload = _EmbeddingCacheFile(entries=dict(self._entries)).model_dump(
                mode="json"
            )
            self._dirty = False

        try:
            atomic_write_json(self.path, payload)
        except (OSError, TypeError) as exc:
            with self._lock:
                self._dirty = True
            raise PersistenceError("embeddings", str(self.path), str(exc)) from exc

        logger.debug(f"Saved {len(payload['entries'])} embeddings to {self.path}")
        return True

    def load(self) -> bool:
        """Load entries from disk, merging them into the cache.

        A missing, unreadable or invalid file is treated as "no prior data".

        Returns:
            True if entries were loaded.
        """
        if self.path is None:
            return False

        try:
            raw = read_json_file(self.path)
            if raw is None:
                return False
            data = _EmbeddingCacheFile.model_validate(raw)
        except (OSError, ValueError, PydanticValidationError) as exc:
            logger.warning(f"Ignoring unreadable embedding cache {self.path}: {exc}")
            return False

        with self._lock:
            for key, entry in data.entries.items():
                self._entries.setdefault(key, entry)

        logger.debug(f"Loaded {len(data.entries)} embeddings from {self.path}")
        return True
