"""Content hashing for cache keys."""

import hashlib


def content_hash(text: str) -> str:
    """Return the SHA-256 hex digest of the full text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def selection_key(task: str, max_tools: int) -> str:
    """Return the selection cache key for a task and result limit.

    The whole task string is hashed, so tasks that only share a prefix,
    suffix or length never collide.
    """
    return content_hash(f"{max_tools}\x00{task}")
