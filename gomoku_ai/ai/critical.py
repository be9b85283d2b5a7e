"""Critical-move detection: a strict priority chain of tactical checks.

Each rule scans every empty cell in row-major order and the first rule with a
match decides the move. No scoring happens here, only pattern presence.

    own win -> block win -> own four -> block four -> block open three

How far down the chain a player looks is set by its tier's CriticalLevel.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import NamedTuple

from ..board import Board, empty_positions
from ..models import CellState, CriticalLevel, Position, StoneColor
from .patterns import analyze_lines, makes_five

logger = logging.getLogger(__name__)


class CriticalReason(str, Enum):
    WIN = "win"
    BLOCK_WIN = "block_win"
    FOUR = "four"
    BLOCK_FOUR = "block_four"
    BLOCK_OPEN_THREE = "block_open_three"


class CriticalMove(NamedTuple):
    position: Position
    reason: CriticalReason


def _makes_live_four(board: Board, row: int, col: int, cell: CellState) -> bool:
    return any(
        line.length == 4 and line.is_live for line in analyze_lines(board, row, col, cell)
    )


def _makes_four(board: Board, row: int, col: int, cell: CellState) -> bool:
    return any(line.length == 4 for line in analyze_lines(board, row, col, cell))


def _makes_open_three(board: Board, row: int, col: int, cell: CellState) -> bool:
    return any(
        line.length == 3 and line.is_open for line in analyze_lines(board, row, col, cell)
    )


# (reason, minimum level, check, whether the check runs for the opponent)
_RULES: tuple[
    tuple[CriticalReason, CriticalLevel, Callable[[Board, int, int, CellState], bool], bool],
    ...,
] = (
    (CriticalReason.WIN, CriticalLevel.OWN_WIN, makes_five, False),
    (CriticalReason.BLOCK_WIN, CriticalLevel.WIN_BLOCK, makes_five, True),
    (CriticalReason.FOUR, CriticalLevel.FOURS, _makes_live_four, False),
    (CriticalReason.BLOCK_FOUR, CriticalLevel.FOURS, _makes_four, True),
    (CriticalReason.BLOCK_OPEN_THREE, CriticalLevel.OPEN_THREES, _makes_open_three, True),
)


def find_critical_move(
    board: Board,
    color: StoneColor,
    level: CriticalLevel,
    candidates: list[Position] | None = None,
) -> CriticalMove | None:
    """Return the first cell matched by the priority chain, or None.

    Args:
        board: Position to scan (not modified)
        color: Color the engine plays
        level: Deepest rule to apply
        candidates: Cells to scan; defaults to every empty cell
    """
    if level <= CriticalLevel.NONE:
        return None
    cells = empty_positions(board) if candidates is None else candidates
    own, opponent = color.cell, color.opponent.cell
    for reason, min_level, check, for_opponent in _RULES:
        if level < min_level:
            break
        cell = opponent if for_opponent else own
        for position in cells:
            if check(board, position.row, position.col, cell):
                logger.debug(f"Critical move {reason.value} at {position} for {color.value}")
                return CriticalMove(position, reason)
    return None
