"""Unit tests for cache key hashing."""

import hashlib

from toolpick.lib.cache.keys import content_hash, selection_key


class TestContentHash:
    """Tests for content_hash."""

    def test_sha256_hex(self) -> None:
        """Test that the hash is the SHA-256 hex digest."""
        assert content_hash("hello") == hashlib.sha256(b"hello").hexdigest()
        assert len(content_hash("hello")) == 64

    def test_deterministic(self) -> None:
        """Test that equal text hashes equally."""
        assert content_hash("weather_get: x") == content_hash("weather_get: x")


class TestSelectionKey:
    """Tests for selection_key."""

    def test_same_task_same_key(self) -> None:
        """Test that identical requests share a key."""
        assert selection_key("find weather", 5) == selection_key("find weather", 5)

    def test_max_tools_changes_key(self) -> None:
        """Test that the result limit is part of the key."""
        assert selection_key("find weather", 5) != selection_key("find weather", 10)

    def test_shared_prefix_suffix_and_length(self) -> None:
        """Test that tasks differing only in the middle do not collide."""
        task_a = "get the weather in Tokyo today please"
        task_b = task_a[:10] + "X" * (len(task_a) - 20) + task_a[-10:]

        assert len(task_a) == len(task_b)
        assert selection_key(task_a, 5) != selection_key(task_b, 5)
