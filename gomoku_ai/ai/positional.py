"""Positional heuristics: center, territory, opponent proximity, endgame.

Each function returns unweighted units; HeuristicAI multiplies them by the
tier's weights. Window and distance computations run on the board's numpy
view.
"""

from __future__ import annotations

from functools import lru_cache
from typing import NamedTuple

import numpy as np

from ..board import CENTER, Board, count_bidirectional
from ..models import BOARD_SIZE, DIRECTIONS, WIN_LENGTH, CellState, GamePhase
from .patterns import LinePattern

ENDGAME_OCCUPANCY_THRESHOLD = 0.8


class ProximityInfo(NamedTuple):
    """Relationship between a candidate and nearby stones"""
    distance: int | None
    own_nearby: bool
    threatening_stones: int


def classify_phase(move_count: int, early_limit: int, mid_limit: int) -> GamePhase:
    if move_count < early_limit:
        return GamePhase.EARLY
    if move_count < mid_limit:
        return GamePhase.MID
    return GamePhase.LATE


def occupancy(board: Board) -> float:
    return board.stone_count / (BOARD_SIZE * BOARD_SIZE)


def center_bonus(row: int, col: int, radius: int) -> int:
    """Linear decay with Manhattan distance from the center, zero past radius."""
    distance = abs(row - CENTER) + abs(col - CENTER)
    if distance > radius:
        return 0
    return radius - distance + 1


@lru_cache(maxsize=8)
def _inverse_distance_kernel(radius: int) -> np.ndarray:
    offsets = np.arange(-radius, radius + 1)
    chebyshev = np.maximum(np.abs(offsets)[:, None], np.abs(offsets)[None, :])
    kernel = 1.0 / (chebyshev + 1.0)
    kernel.setflags(write=False)
    return kernel


def territory_score(
    board: Board,
    row: int,
    col: int,
    cell: CellState,
    radius: int,
    inverse_distance: bool = False,
) -> float:
    """Stones of ``cell`` in the square window around (row, col).

    With ``inverse_distance`` each stone counts 1 / (d + 1), d being its
    Chebyshev distance from the candidate.
    """
    if radius <= 0:
        return 0.0
    r0, r1 = max(0, row - radius), min(BOARD_SIZE, row + radius + 1)
    c0, c1 = max(0, col - radius), min(BOARD_SIZE, col + radius + 1)
    mask = board.to_array()[r0:r1, c0:c1] == cell
    if not inverse_distance:
        return float(np.count_nonzero(mask))
    kernel = _inverse_distance_kernel(radius)
    k_r0, k_c0 = r0 - (row - radius), c0 - (col - radius)
    window = kernel[k_r0:k_r0 + (r1 - r0), k_c0:k_c0 + (c1 - c0)]
    return float(window[mask].sum())


def proximity_info(
    board: Board,
    row: int,
    col: int,
    own: CellState,
    opponent: CellState,
    radius: int,
) -> ProximityInfo:
    """Manhattan distance to the nearest opponent stone and contact details."""
    array = board.to_array()
    opponent_stones = np.argwhere(array == opponent)
    if len(opponent_stones) == 0:
        return ProximityInfo(None, False, 0)
    distances = np.abs(opponent_stones[:, 0] - row) + np.abs(opponent_stones[:, 1] - col)
    nearest = int(distances.min())
    if nearest > radius:
        return ProximityInfo(nearest, False, 0)

    own_stones = np.argwhere(array == own)
    own_nearby = bool(
        len(own_stones)
        and (np.abs(own_stones[:, 0] - row) + np.abs(own_stones[:, 1] - col)).min()
        <= radius
    )

    threatening = 0
    for stone_row, stone_col in opponent_stones[distances <= radius]:
        r, c = int(stone_row), int(stone_col)
        if any(
            count_bidirectional(board, r, c, d_row, d_col, opponent) >= 3
            for d_row, d_col in DIRECTIONS
        ):
            threatening += 1
    return ProximityInfo(nearest, own_nearby, threatening)


def proximity_units(distance: int | None, radius: int) -> float:
    """Fraction in [0, 1] of the proximity bonus earned at ``distance``.

    Adjacent cells score 1 - 1/radius, cells at the radius edge score 0.
    """
    if distance is None or distance > radius or radius <= 0:
        return 0.0
    return (radius - distance) / radius


def endgame_units(patterns: tuple[LinePattern, ...], board: Board) -> float:
    """Sum of 1 / (moves still needed) over runs of three or four.

    Zero until the board is at least 80% occupied.
    """
    if occupancy(board) < ENDGAME_OCCUPANCY_THRESHOLD:
        return 0.0
    return sum(
        1.0 / (WIN_LENGTH - pattern.length)
        for pattern in patterns
        if 3 <= pattern.length < WIN_LENGTH
    )
