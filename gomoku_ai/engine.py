"""
Move-decision entry points for the Gomoku engine.

``decide`` is the call a turn sequencer makes after each human move: it
builds a fresh player for the requested tier, runs its priority chain
(critical move, opening, search or heuristic, random fallback) and returns
the chosen cell. Nothing is carried between calls, so concurrent decisions
on different boards never share state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

from .ai.factory import AIFactory, resolve_tier
from .board import Board
from .models import MoveDecision, Position, Tier

logger = logging.getLogger(__name__)


def decide_with_details(
    board: Board,
    history: Sequence[Sequence[int]],
    color: Any,
    tier: Tier | str | int,
    *,
    time_limit_ms: int | None = None,
    rng_seed: int | None = None,
) -> MoveDecision:
    """Choose a move and report how it was chosen.

    Args:
        board: Current position (never modified)
        history: Moves played so far, oldest first
        color: Color the engine plays (``StoneColor``, ``CellState`` or label)
        tier: Tier enum, name, alias or level 1-5
        time_limit_ms: Search budget override; 0 disables the deadline
        rng_seed: Seed for the tiers that randomize

    Returns:
        MoveDecision with ``position`` None when the board has no empty cell

    Raises:
        InvalidColorError: If ``color`` is the empty state. Normal, Hard and
            Expert check on construction; Beginner and Easy only once a
            decision needs the color.
        ConfigurationError: For unknown tiers or malformed environment values
    """
    resolved = resolve_tier(tier)
    moves = [Position(int(move[0]), int(move[1])) for move in history]
    start = time.perf_counter()

    ai = AIFactory.create_from_tier(
        resolved,
        color,
        think_time_override=time_limit_ms,
        rng_seed=rng_seed,
    )
    position = ai.select_move(board, moves)
    elapsed_ms = (time.perf_counter() - start) * 1000

    logger.debug(
        f"{ai!r} chose {position} via {ai.last_stage.value} "
        f"in {elapsed_ms:.1f}ms"
    )
    return MoveDecision(
        position=position,
        tier=resolved,
        stage=ai.last_stage,
        score=ai.last_score,
        elapsed_ms=elapsed_ms,
        nodes_visited=ai.nodes_visited,
        timed_out=ai.search_timed_out,
    )


def decide(
    board: Board,
    history: Sequence[Sequence[int]],
    color: Any,
    tier: Tier | str | int,
    *,
    time_limit_ms: int | None = None,
    rng_seed: int | None = None,
) -> Position | None:
    """Return the engine's next move, or None when the board is full."""
    return decide_with_details(
        board,
        history,
        color,
        tier,
        time_limit_ms=time_limit_ms,
        rng_seed=rng_seed,
    ).position
