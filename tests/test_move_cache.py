"""Unit tests for MoveCache."""

import pytest

from gomoku_ai.ai.move_cache import DEFAULT_MAX_ENTRIES, MoveCache, max_entries_from_env
from gomoku_ai.errors import ConfigurationError


class TestBasicOperations:
    """Tests for basic get/put operations."""

    def test_put_and_get(self) -> None:
        """Should store and retrieve values."""
        cache = MoveCache(max_entries=100)
        cache.put("key1", 1.5)
        assert cache.get("key1") == 1.5

    def test_get_nonexistent_key_returns_none(self) -> None:
        """Should return None for keys not in cache."""
        cache = MoveCache(max_entries=100)
        assert cache.get("nonexistent") is None

    def test_put_updates_existing_key(self) -> None:
        cache = MoveCache(max_entries=100)
        cache.put("key1", 1)
        cache.put("key1", 2)
        assert cache.get("key1") == 2
        assert len(cache) == 1

    def test_contains_and_len(self) -> None:
        cache = MoveCache(max_entries=100)
        cache.put((123, (7, 7)), 10.0)
        assert (123, (7, 7)) in cache
        assert (123, (7, 8)) not in cache
        assert len(cache) == 1

    def test_clear(self) -> None:
        """Should clear all entries and reset stats."""
        cache = MoveCache(max_entries=100)
        cache.put("key1", 1)
        cache.get("key1")
        cache.get("missing")
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0
        assert cache.misses == 0
        assert cache.evictions == 0

    def test_get_or_compute(self) -> None:
        """The compute callable only runs on a miss."""
        cache = MoveCache(max_entries=10)
        calls = []

        def compute():
            calls.append(1)
            return 42

        assert cache.get_or_compute("k", compute) == 42
        assert cache.get_or_compute("k", compute) == 42
        assert len(calls) == 1


class TestLRUEviction:
    """Tests for least-recently-used eviction."""

    def test_evicts_oldest_entry(self) -> None:
        cache = MoveCache(max_entries=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("c", 3)
        assert "a" not in cache
        assert cache.evictions == 1

    def test_get_refreshes_recency(self) -> None:
        """Reading an entry protects it from the next eviction."""
        cache = MoveCache(max_entries=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert "a" in cache
        assert "b" not in cache


class TestStats:
    def test_hit_rate(self) -> None:
        cache = MoveCache(max_entries=10)
        cache.put("a", 1)
        cache.get("a")
        cache.get("b")
        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5
        assert stats["max_entries"] == 10

    def test_empty_hit_rate(self) -> None:
        assert MoveCache(max_entries=10).stats()["hit_rate"] == 0.0


class TestMaxEntriesFromEnv:
    """Tests for GOMOKU_AI_EVAL_CACHE_ENTRIES parsing."""

    def test_default(self) -> None:
        assert max_entries_from_env() == DEFAULT_MAX_ENTRIES

    def test_override(self, monkeypatch) -> None:
        monkeypatch.setenv("GOMOKU_AI_EVAL_CACHE_ENTRIES", "5000")
        assert max_entries_from_env() == 5000

    @pytest.mark.parametrize("raw", ["lots", "0", "-3"])
    def test_invalid_values_raise(self, monkeypatch, raw) -> None:
        monkeypatch.setenv("GOMOKU_AI_EVAL_CACHE_ENTRIES", raw)
        with pytest.raises(ConfigurationError):
            max_entries_from_env()
