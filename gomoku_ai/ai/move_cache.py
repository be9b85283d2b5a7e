"""Bounded LRU cache for candidate scores and move orderings.

Search revisits the same positions through different move orders, so
single-ply scores and the ordered candidate lists of interior nodes are
memoised per decision, keyed on the board's Zobrist key.
"""

from __future__ import annotations

import os
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any

from ..errors import ConfigurationError

DEFAULT_MAX_ENTRIES = 200_000


def max_entries_from_env(default: int = DEFAULT_MAX_ENTRIES) -> int:
    """Read GOMOKU_AI_EVAL_CACHE_ENTRIES, falling back to ``default``.

    Raises:
        ConfigurationError: If the variable is set but not a positive int.
    """
    raw = os.getenv("GOMOKU_AI_EVAL_CACHE_ENTRIES", "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            "GOMOKU_AI_EVAL_CACHE_ENTRIES must be an integer",
            context={"value": raw},
        ) from e
    if value <= 0:
        raise ConfigurationError(
            "GOMOKU_AI_EVAL_CACHE_ENTRIES must be positive",
            context={"value": raw},
        )
    return value


class MoveCache:
    """LRU-evicting cache with hit/miss accounting."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self._table: OrderedDict[Hashable, Any] = OrderedDict()
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: Hashable) -> Any | None:
        """Value for ``key`` (refreshing its recency), or None."""
        if key in self._table:
            self._table.move_to_end(key)
            self.hits += 1
            return self._table[key]
        self.misses += 1
        return None

    def put(self, key: Hashable, value: Any) -> None:
        """Store ``value``, evicting the least recently used entry when full."""
        if key in self._table:
            self._table.move_to_end(key)
        elif len(self._table) >= self.max_entries:
            self._table.popitem(last=False)
            self.evictions += 1
        self._table[key] = value

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        value = self.get(key)
        if value is None:
            value = compute()
            self.put(key, value)
        return value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def clear(self) -> None:
        """Drop all entries and reset statistics."""
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def stats(self) -> dict:
        total_lookups = self.hits + self.misses
        return {
            "entries": len(self._table),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hits / total_lookups if total_lookups > 0 else 0.0,
        }
