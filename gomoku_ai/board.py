"""
Board model for 15x15 Gomoku.

A Board is an immutable grid of CellState values. Placing a stone returns a
new Board that shares the untouched rows with its parent, so hypothetical
branches built during evaluation and search never alias mutable state.
Every board also carries an incrementally maintained Zobrist key used by the
search caches.

Hot-path helpers (run counting, openness) read the underlying tuples
directly; the numpy view is only built for window/mask computations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from numbers import Integral
from typing import Any, NamedTuple

import numpy as np

from .core.zobrist import ZobristHash
from .errors import InvalidBoardError
from .models import (
    BOARD_SIZE,
    DIRECTIONS,
    WIN_LENGTH,
    CellState,
    GameStatus,
    Position,
    StoneColor,
    WinningLine,
)

logger = logging.getLogger(__name__)

CENTER = BOARD_SIZE // 2

_EMPTY_ROW: tuple[CellState, ...] = (CellState.EMPTY,) * BOARD_SIZE
_EMPTY_GRID: tuple[tuple[CellState, ...], ...] = (_EMPTY_ROW,) * BOARD_SIZE


class Board:
    """Immutable 15x15 grid of cell states."""

    __slots__ = ("_grid", "_hash", "_stone_count", "_array")

    def __init__(
        self,
        grid: tuple[tuple[CellState, ...], ...] = _EMPTY_GRID,
        zobrist_hash: int | None = None,
        stone_count: int | None = None,
    ) -> None:
        self._grid = grid
        if zobrist_hash is None:
            zobrist_hash = ZobristHash().compute_initial_hash(grid)
        if stone_count is None:
            stone_count = sum(
                1 for cells in grid for cell in cells if cell != CellState.EMPTY
            )
        self._hash = zobrist_hash
        self._stone_count = stone_count
        self._array: np.ndarray | None = None

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]]) -> Board:
        """Build a board from nested rows of cell states, ints or labels.

        Raises:
            InvalidBoardError: If the data is not 15x15 or holds unknown cells.
        """
        grid = []
        for row_index, row in enumerate(rows):
            if len(row) != BOARD_SIZE:
                raise InvalidBoardError(
                    f"Row {row_index} has {len(row)} cells, expected {BOARD_SIZE}",
                    context={"row": row_index},
                )
            try:
                grid.append(tuple(CellState.parse(cell) for cell in row))
            except ValueError as e:
                raise InvalidBoardError(
                    f"Row {row_index} holds an unknown cell state: {e}",
                    context={"row": row_index},
                ) from e
        if len(grid) != BOARD_SIZE:
            raise InvalidBoardError(
                f"Board has {len(grid)} rows, expected {BOARD_SIZE}",
                context={"rows": len(grid)},
            )
        return cls(tuple(grid))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def grid(self) -> tuple[tuple[CellState, ...], ...]:
        return self._grid

    @property
    def zobrist_key(self) -> int:
        return self._hash

    @property
    def stone_count(self) -> int:
        return self._stone_count

    def get(self, row: int, col: int) -> CellState:
        return self._grid[row][col]

    def __getitem__(self, row: int) -> tuple[CellState, ...]:
        return self._grid[row]

    def __iter__(self) -> Iterator[tuple[CellState, ...]]:
        return iter(self._grid)

    def __len__(self) -> int:
        return BOARD_SIZE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._hash == other._hash and self._grid == other._grid

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"Board(stones={self._stone_count}, key={self._hash:#018x})"

    def to_rows(self) -> list[list[CellState]]:
        """Mutable copy of the grid for callers that want to edit freely."""
        return [list(cells) for cells in self._grid]

    def to_array(self) -> np.ndarray:
        """Read-only int8 numpy view (0 empty, 1 black, 2 white)."""
        if self._array is None:
            array = np.array(self._grid, dtype=np.int8)
            array.setflags(write=False)
            self._array = array
        return self._array

    def render(self) -> str:
        symbols = {CellState.EMPTY: ".", CellState.BLACK: "X", CellState.WHITE: "O"}
        return "\n".join(
            "".join(symbols[cell] for cell in cells) for cells in self._grid
        )

    # ------------------------------------------------------------------
    # Copy-on-write placement
    # ------------------------------------------------------------------

    def with_stone(self, row: int, col: int, cell: CellState) -> Board:
        """Return a new board with (row, col) overwritten by ``cell``."""
        old = self._grid[row][col]
        if old == cell:
            return Board(self._grid, self._hash, self._stone_count)
        cells = self._grid[row]
        new_row = cells[:col] + (cell,) + cells[col + 1:]
        grid = self._grid[:row] + (new_row,) + self._grid[row + 1:]
        key = ZobristHash().update(self._hash, row, col, old, cell)
        count = self._stone_count
        if old == CellState.EMPTY:
            count += 1
        elif cell == CellState.EMPTY:
            count -= 1
        return Board(grid, key, count)


class GameOutcome(NamedTuple):
    """Status of a position after a move"""
    status: GameStatus
    winner: StoneColor | None = None
    line: WinningLine | None = None


# ----------------------------------------------------------------------
# Construction and placement
# ----------------------------------------------------------------------


def create_empty() -> Board:
    """Create an empty 15x15 board."""
    return Board()


def is_valid_position(row: Any, col: Any) -> bool:
    """True iff both coordinates are integers in [0, 14]."""
    for value in (row, col):
        if isinstance(value, bool) or not isinstance(value, Integral):
            return False
        if not 0 <= value < BOARD_SIZE:
            return False
    return True


def place(board: Board, row: int, col: int, color: StoneColor | CellState) -> Board:
    """Overwrite a cell and return the new board.

    No occupancy check is made; see ``try_place`` for the legality gate.
    Out-of-range coordinates return ``board`` unchanged.
    """
    if not is_valid_position(row, col):
        logger.debug(f"Ignoring placement outside the board: ({row}, {col})")
        return board
    return board.with_stone(int(row), int(col), CellState.parse(color))


def get_stone(board: Board, row: int, col: int) -> CellState:
    """Cell state at (row, col); EMPTY for coordinates off the board."""
    if not is_valid_position(row, col):
        return CellState.EMPTY
    return board.get(row, col)


def can_place(board: Board, row: int, col: int) -> bool:
    """True if a stone may legally be placed at (row, col)."""
    return is_valid_position(row, col) and board.get(row, col) == CellState.EMPTY


def try_place(
    board: Board, row: int, col: int, color: StoneColor | CellState
) -> Board | None:
    """Legality-gated placement: None when the cell is off-board or taken."""
    if not can_place(board, row, col):
        return None
    return place(board, row, col, color)


# ----------------------------------------------------------------------
# Run analysis
# ----------------------------------------------------------------------


def count_run(
    board: Board, row: int, col: int, d_row: int, d_col: int, color: CellState
) -> int:
    """Count consecutive ``color`` cells starting at (row, col) along (d_row, d_col)."""
    grid = board.grid
    count = 0
    while 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE and grid[row][col] == color:
        count += 1
        row += d_row
        col += d_col
    return count


def count_bidirectional(
    board: Board, row: int, col: int, d_row: int, d_col: int, color: CellState
) -> int:
    """Run length through (row, col), counting the anchor cell as ``color``."""
    forward = count_run(board, row + d_row, col + d_col, d_row, d_col, color)
    backward = count_run(board, row - d_row, col - d_col, -d_row, -d_col, color)
    return forward + backward + 1


def is_open(
    board: Board,
    row: int,
    col: int,
    d_row: int,
    d_col: int,
    color: CellState | None = None,
) -> bool:
    """True iff the cells just past both ends of the run are on-board and empty.

    ``color`` defaults to the stone at (row, col); pass it explicitly to test
    a hypothetical placement.
    """
    if color is None:
        color = board.get(row, col)
    if color == CellState.EMPTY:
        return False
    forward = count_run(board, row + d_row, col + d_col, d_row, d_col, color)
    backward = count_run(board, row - d_row, col - d_col, -d_row, -d_col, color)
    end_row, end_col = row + (forward + 1) * d_row, col + (forward + 1) * d_col
    start_row, start_col = row - (backward + 1) * d_row, col - (backward + 1) * d_col
    return _empty_at(board, end_row, end_col) and _empty_at(board, start_row, start_col)


def _empty_at(board: Board, row: int, col: int) -> bool:
    return (
        0 <= row < BOARD_SIZE
        and 0 <= col < BOARD_SIZE
        and board.get(row, col) == CellState.EMPTY
    )


def find_winning_line(board: Board, position: Sequence[int]) -> WinningLine | None:
    """Return the five collinear cells through ``position`` if they win.

    When the run is longer than five, the window is chosen so that it still
    contains ``position``.
    """
    row, col = position
    if not is_valid_position(row, col):
        return None
    color = board.get(row, col)
    if color == CellState.EMPTY:
        return None
    for d_row, d_col in DIRECTIONS:
        forward = count_run(board, row + d_row, col + d_col, d_row, d_col, color)
        backward = count_run(board, row - d_row, col - d_col, -d_row, -d_col, color)
        if forward + backward + 1 < WIN_LENGTH:
            continue
        offset = min(backward, WIN_LENGTH - 1)
        start_row, start_col = row - offset * d_row, col - offset * d_col
        return tuple(
            Position(start_row + i * d_row, start_col + i * d_col)
            for i in range(WIN_LENGTH)
        )
    return None


# ----------------------------------------------------------------------
# Position queries
# ----------------------------------------------------------------------


def empty_positions(board: Board) -> list[Position]:
    """All empty cells in row-major order."""
    return [
        Position(row, col)
        for row, cells in enumerate(board.grid)
        for col, cell in enumerate(cells)
        if cell == CellState.EMPTY
    ]


def stone_positions(
    board: Board, color: StoneColor | CellState | None = None
) -> list[Position]:
    """Occupied cells in row-major order, optionally filtered by color."""
    target = None if color is None else CellState.parse(color)
    return [
        Position(row, col)
        for row, cells in enumerate(board.grid)
        for col, cell in enumerate(cells)
        if cell != CellState.EMPTY and (target is None or cell == target)
    ]


def is_empty(board: Board) -> bool:
    return board.stone_count == 0


def is_full(board: Board) -> bool:
    return board.stone_count == BOARD_SIZE * BOARD_SIZE


def center_position() -> Position:
    return Position(CENTER, CENTER)


def nearby_positions(
    board: Board, center: Sequence[int], radius: int
) -> list[Position]:
    """Empty cells in the square window around ``center``, nearest first.

    Ordering is by Manhattan distance, ties broken row-major.
    """
    center_row, center_col = center
    found = []
    for row in range(max(0, center_row - radius), min(BOARD_SIZE, center_row + radius + 1)):
        for col in range(max(0, center_col - radius), min(BOARD_SIZE, center_col + radius + 1)):
            if board.get(row, col) == CellState.EMPTY:
                found.append(Position(row, col))
    found.sort(key=lambda p: (abs(p.row - center_row) + abs(p.col - center_col), p))
    return found


def candidate_positions(board: Board, radius: int = 2) -> list[Position]:
    """Empty cells within a square ``radius`` of any stone, row-major.

    Falls back to every empty cell when the board holds no stones.
    """
    if board.stone_count == 0:
        return empty_positions(board)
    occupied = board.to_array() != CellState.EMPTY
    padded = np.pad(occupied, radius)
    near = np.zeros_like(occupied)
    for d_row in range(-radius, radius + 1):
        for d_col in range(-radius, radius + 1):
            near |= padded[
                radius + d_row:radius + d_row + BOARD_SIZE,
                radius + d_col:radius + d_col + BOARD_SIZE,
            ]
    rows, cols = np.nonzero(near & ~occupied)
    return [Position(int(r), int(c)) for r, c in zip(rows, cols)]


def check_outcome(board: Board, last_move: Sequence[int] | None = None) -> GameOutcome:
    """Classify the position as won, drawn or still playing.

    With ``last_move`` only lines through that cell are checked, which is
    all a host needs after each placement.
    """
    candidates = [tuple(last_move)] if last_move is not None else stone_positions(board)
    for position in candidates:
        line = find_winning_line(board, position)
        if line is not None:
            winner = StoneColor.parse(board.get(*position))
            return GameOutcome(GameStatus.WON, winner, line)
    if is_full(board):
        return GameOutcome(GameStatus.DRAW)
    return GameOutcome(GameStatus.PLAYING)
