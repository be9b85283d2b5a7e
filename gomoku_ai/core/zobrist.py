"""Zobrist hashing for 15x15 Gomoku positions.

A single process-wide table maps every (row, col, stone) triple to a random
64-bit key. A position's hash is the XOR of the keys of its stones, so placing
or overwriting a stone updates the hash in O(1).
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from ..models import BOARD_SIZE, CellState

ZOBRIST_SEED = 0x5EED_601C


class ZobristHash:
    """Process-wide Zobrist key table (singleton)."""

    _instance: ZobristHash | None = None

    def __new__(cls) -> ZobristHash:
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialize(ZOBRIST_SEED)
            cls._instance = instance
        return cls._instance

    def _initialize(self, seed: int) -> None:
        rng = random.Random(seed)
        # Index by [row][col][cell]; the EMPTY slot is 0 so clearing a cell
        # only needs the old stone's key.
        self._table: list[list[tuple[int, int, int]]] = [
            [
                (0, rng.getrandbits(64), rng.getrandbits(64))
                for _ in range(BOARD_SIZE)
            ]
            for _ in range(BOARD_SIZE)
        ]

    def get_stone_hash(self, row: int, col: int, cell: int) -> int:
        return self._table[row][col][cell]

    def update(self, key: int, row: int, col: int, old: int, new: int) -> int:
        """Return ``key`` after the cell at (row, col) changes from old to new."""
        cell_keys = self._table[row][col]
        return key ^ cell_keys[old] ^ cell_keys[new]

    def compute_initial_hash(
        self, grid: Sequence[Sequence[int]] | Iterable[Sequence[int]]
    ) -> int:
        key = 0
        for row, cells in enumerate(grid):
            row_keys = self._table[row]
            for col, cell in enumerate(cells):
                if cell != CellState.EMPTY:
                    key ^= row_keys[col][cell]
        return key
