"""Time-bounded cache of selection results.

Entries expire lazily: ``get`` treats an entry older than the TTL as absent
without deleting it. Expired entries are compacted when the cache grows past
``max_entries`` or when ``purge_expired`` is called. If the cache is still
over ``max_entries`` after compaction, the least recently stored entries are
evicted, so the map never holds more than ``max_entries`` entries.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from toolpick.lib.logging_config import get_logger
from toolpick.models.selection import SelectionCacheEntry

logger = get_logger(__name__)

DEFAULT_MAX_ENTRIES = 1000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SelectionCache:
    """Thread-safe TTL cache from task hash to selection entry.

    Attributes:
        ttl_seconds: Maximum entry age before it is considered stale.
        max_entries: Size above which entries are compacted and evicted.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Entry time-to-live in seconds.
            max_entries: Maximum number of entries kept.
            clock: Returns the current UTC time; injectable for tests.
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, SelectionCacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _is_expired(self, entry: SelectionCacheEntry, now: datetime) -> bool:
        return now - entry.timestamp > timedelta(seconds=self.ttl_seconds)

    def get(self, key: str) -> SelectionCacheEntry | None:
        """Return the entry for a key if present and not expired."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, self._clock()):
            logger.debug(f"Selection cache entry {key[:12]} expired")
            return None
        return entry

    def set(self, key: str, entry: SelectionCacheEntry) -> None:
        """Store an entry; its own timestamp governs expiry."""
        with self._lock:
            # Re-insert so dict order tracks store order
            self._entries.pop(key, None)
            self._entries[key] = entry
            if len(self._entries) > self.max_entries:
                self._purge_locked(self._clock())
                self._evict_locked()

    def purge_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            return self._purge_locked(self._clock())

    def _purge_locked(self, now: datetime) -> int:
        expired_keys = [
            key
            for key, entry in self._entries.items()
            if self._is_expired(entry, now)
        ]
        for key in expired_keys:
            del self._entries[key]
        if expired_keys:
            logger.debug(f"Purged {len(expired_keys)} expired selection entries")
        return len(expired_keys)

    def _evict_locked(self) -> None:
        evicted = 0
        while len(self._entries) > self.max_entries:
            del self._entries[next(iter(self._entries))]
            evicted += 1
        if evicted:
            logger.debug(f"Evicted {evicted} selection entries over max_entries")

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
