"""Opening policy: a deterministic near-center book plus randomized first moves.

Books are lists of offsets from the board center walked in priority order;
the first empty cell wins. The book only applies while the move history is
shorter than the tier's opening limit.
"""

from __future__ import annotations

import logging
import random

from ..board import CENTER, Board, is_empty, nearby_positions
from ..models import CellState, Position

logger = logging.getLogger(__name__)

# Center, then diagonals, then orthogonal neighbours.
COMPACT_OPENING_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 0),
    (-1, -1), (-1, 1), (1, -1), (1, 1),
    (0, -1), (0, 1), (-1, 0), (1, 0),
)

# Center, the inner ring, then the knight's-move ring.
STRATEGIC_OFFSETS: tuple[tuple[int, int], ...] = tuple(dict.fromkeys((
    (0, 0), (0, 1), (1, 0), (1, 1),
    (-1, -1), (-1, 0), (-1, 1), (0, -1), (1, -1),
    (-2, -1), (-2, 0), (-2, 1), (-1, -2), (0, -2), (1, -2),
    (2, -1), (2, 0), (2, 1), (-1, 2), (0, 2), (1, 2),
)))

_STRATEGIC_SET = frozenset(STRATEGIC_OFFSETS)

OPENING_BOOKS: dict[str, tuple[tuple[int, int], ...]] = {
    "compact": COMPACT_OPENING_OFFSETS,
    "strategic": STRATEGIC_OFFSETS,
}


def get_opening_book(book_id: str) -> tuple[tuple[int, int], ...]:
    """Return the offsets for ``book_id``; empty for unknown ids."""
    return OPENING_BOOKS.get(book_id, ())


def book_move(
    board: Board,
    move_count: int,
    book_id: str | None,
    move_limit: int,
) -> Position | None:
    """First empty book cell while ``move_count`` is below ``move_limit``."""
    if book_id is None or move_count >= move_limit:
        return None
    for d_row, d_col in get_opening_book(book_id):
        row, col = CENTER + d_row, CENTER + d_col
        if board.get(row, col) == CellState.EMPTY:
            logger.debug(f"Opening book '{book_id}' move ({row}, {col})")
            return Position(row, col)
    return None


def random_first_move(
    board: Board, rng: random.Random, window: int = 2
) -> Position | None:
    """Random cell within ``window`` of the center, only on an empty board."""
    if not is_empty(board):
        return None
    cells = nearby_positions(board, (CENTER, CENTER), window)
    if not cells:
        return None
    return rng.choice(cells)


def is_strategic_point(row: int, col: int) -> bool:
    return (row - CENTER, col - CENTER) in _STRATEGIC_SET
