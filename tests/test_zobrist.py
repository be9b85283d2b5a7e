"""Unit tests for ZobristHash."""

from gomoku_ai.core.zobrist import ZobristHash
from gomoku_ai.models import BOARD_SIZE, CellState


class TestZobristHash:
    """Tests for the process-wide Zobrist key table."""

    def test_singleton(self) -> None:
        assert ZobristHash() is ZobristHash()

    def test_empty_grid_hashes_to_zero(self) -> None:
        grid = [[CellState.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        assert ZobristHash().compute_initial_hash(grid) == 0

    def test_update_is_reversible(self) -> None:
        """Placing then clearing a stone restores the original key."""
        zobrist = ZobristHash()
        key = zobrist.update(0, 4, 5, CellState.EMPTY, CellState.BLACK)
        assert key != 0
        assert zobrist.update(key, 4, 5, CellState.BLACK, CellState.EMPTY) == 0

    def test_update_matches_full_computation(self) -> None:
        zobrist = ZobristHash()
        grid = [[CellState.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        grid[1][2] = CellState.WHITE
        grid[3][4] = CellState.BLACK
        key = zobrist.update(0, 1, 2, CellState.EMPTY, CellState.WHITE)
        key = zobrist.update(key, 3, 4, CellState.EMPTY, CellState.BLACK)
        assert key == zobrist.compute_initial_hash(grid)

    def test_colors_hash_differently(self) -> None:
        zobrist = ZobristHash()
        assert zobrist.get_stone_hash(7, 7, CellState.BLACK) != zobrist.get_stone_hash(
            7, 7, CellState.WHITE
        )
        assert zobrist.get_stone_hash(7, 7, CellState.EMPTY) == 0
