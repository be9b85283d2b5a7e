"""Line-pattern analysis for candidate placements.

Every function here treats the candidate cell as if ``color`` had just been
placed on it (a virtual stone), so callers can evaluate hundreds of
candidates without copying the board. The anchor is counted regardless of
what the board currently holds there.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from ..board import Board
from ..models import BOARD_SIZE, DIRECTIONS, WIN_LENGTH, CellState


class PatternType(str, Enum):
    """Classification of a run by length"""
    FIVE = "five"
    FOUR = "four"
    THREE = "three"
    TWO = "two"
    NONE = "none"


def classify_run(length: int) -> PatternType:
    if length >= WIN_LENGTH:
        return PatternType.FIVE
    if length == 4:
        return PatternType.FOUR
    if length == 3:
        return PatternType.THREE
    if length == 2:
        return PatternType.TWO
    return PatternType.NONE


class LinePattern(NamedTuple):
    """Run through the candidate along one direction"""
    direction: tuple[int, int]
    length: int
    open_ends: int

    @property
    def kind(self) -> PatternType:
        return classify_run(self.length)

    @property
    def is_open(self) -> bool:
        return self.open_ends == 2

    @property
    def is_live(self) -> bool:
        return self.open_ends > 0


class GappedThreat(NamedTuple):
    """Stones separated from the run by one or two empty cells"""
    direction: tuple[int, int]
    stones: int
    gap: int
    span: int

    @property
    def is_four(self) -> bool:
        return self.stones >= 4


class ThreatSummary(NamedTuple):
    threats: int
    open_threats: int


def _walk(
    grid: tuple[tuple[CellState, ...], ...],
    row: int,
    col: int,
    d_row: int,
    d_col: int,
    cell: CellState,
) -> tuple[int, bool]:
    """Count ``cell`` stones from (row, col) on; report whether the end is empty."""
    count = 0
    while 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE:
        value = grid[row][col]
        if value != cell:
            return count, value == CellState.EMPTY
        count += 1
        row += d_row
        col += d_col
    return count, False


def scan_line(
    board: Board, row: int, col: int, d_row: int, d_col: int, cell: CellState
) -> LinePattern:
    grid = board.grid
    forward, forward_open = _walk(grid, row + d_row, col + d_col, d_row, d_col, cell)
    backward, backward_open = _walk(
        grid, row - d_row, col - d_col, -d_row, -d_col, cell
    )
    return LinePattern(
        (d_row, d_col), forward + backward + 1, int(forward_open) + int(backward_open)
    )


def analyze_lines(
    board: Board, row: int, col: int, cell: CellState
) -> tuple[LinePattern, ...]:
    """One LinePattern per direction for a virtual stone at (row, col)."""
    return tuple(
        scan_line(board, row, col, d_row, d_col, cell) for d_row, d_col in DIRECTIONS
    )


def makes_five(board: Board, row: int, col: int, cell: CellState) -> bool:
    """True if a stone of ``cell`` at (row, col) completes five or more."""
    grid = board.grid
    for d_row, d_col in DIRECTIONS:
        forward, _ = _walk(grid, row + d_row, col + d_col, d_row, d_col, cell)
        if forward >= WIN_LENGTH - 1:
            return True
        backward, _ = _walk(grid, row - d_row, col - d_col, -d_row, -d_col, cell)
        if forward + backward + 1 >= WIN_LENGTH:
            return True
    return False


def count_threats(patterns: tuple[LinePattern, ...], min_length: int = 3) -> int:
    """Number of directions whose run reaches ``min_length``."""
    return sum(1 for pattern in patterns if pattern.length >= min_length)


def is_fork(patterns: tuple[LinePattern, ...], min_length: int = 3) -> bool:
    """A fork is two or more directions with a run of three or longer."""
    return count_threats(patterns, min_length) >= 2


def find_gapped_threats(
    board: Board, row: int, col: int, cell: CellState, max_gap: int = 2
) -> list[GappedThreat]:
    """Runs that would join further stones once one or two gap cells are filled.

    Only combinations that fit inside a five-cell span are reported, since
    anything wider can never complete five.
    """
    grid = board.grid
    found: list[GappedThreat] = []
    for direction in DIRECTIONS:
        line = scan_line(board, row, col, direction[0], direction[1], cell)
        if line.length >= WIN_LENGTH:
            continue
        for sign in (1, -1):
            d_row, d_col = direction[0] * sign, direction[1] * sign
            run_ahead, _ = _walk(grid, row + d_row, col + d_col, d_row, d_col, cell)
            r = row + (run_ahead + 1) * d_row
            c = col + (run_ahead + 1) * d_col
            gap = 0
            while (
                gap < max_gap
                and 0 <= r < BOARD_SIZE
                and 0 <= c < BOARD_SIZE
                and grid[r][c] == CellState.EMPTY
            ):
                gap += 1
                r += d_row
                c += d_col
                beyond, _ = _walk(grid, r, c, d_row, d_col, cell)
                if beyond:
                    stones = line.length + beyond
                    span = line.length + gap + beyond
                    if stones >= 3 and span <= WIN_LENGTH:
                        found.append(GappedThreat(direction, stones, gap, span))
                    break
    return found


def summarize_threats(
    patterns: tuple[LinePattern, ...],
    gapped: list[GappedThreat] | None = None,
) -> ThreatSummary:
    """Count threatening directions, contiguous or gapped, and the open ones."""
    directions = {p.direction for p in patterns if p.length >= 3}
    if gapped:
        directions.update(g.direction for g in gapped)
    open_threats = sum(1 for p in patterns if p.length >= 3 and p.is_open)
    return ThreatSummary(len(directions), open_threats)
