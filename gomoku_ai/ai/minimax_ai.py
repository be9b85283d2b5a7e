"""Minimax AI implementation for Gomoku.

This agent refines the single-ply ranking of :class:`HeuristicAI` with a
depth-limited minimax search using alpha-beta pruning. Only the top-K root
candidates whose heuristic score clears the tier's search threshold are
searched; everything else is taken at face value. The chosen move maximises
``score + future * future_weight``.

Inside the search, each node keeps only the best few candidates for the side
to move (``TierProfile.breadth_at``). Depth-exhausted leaves are worth 0; a
move that completes five ends the line immediately with a win utility.

``config.think_time`` (or the tier default, or
``GOMOKU_AI_SEARCH_TIME_LIMIT_MS``) bounds wall-clock search time per
decision. When the deadline passes the search unwinds via
:class:`AITimeoutError` and the remaining candidates keep their heuristic
scores.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any

from ..board import Board
from ..errors import AITimeoutError, ConfigurationError
from ..models import AIConfig, DecisionStage, Position, StoneColor, TierProfile
from .heuristic_ai import HeuristicAI
from .move_cache import MoveCache, max_entries_from_env
from .patterns import makes_five

# Log search statistics at INFO instead of DEBUG.
SEARCH_DEBUG = os.getenv(
    'GOMOKU_AI_SEARCH_DEBUG', 'false'
).lower() in ('true', '1', 'yes')

# Terminal positions are worth this many times the tier's five weight, so a
# forced win or loss outweighs any heuristic difference after future_weight.
SEARCH_WIN_MULTIPLIER = 10.0

logger = logging.getLogger(__name__)


def search_time_limit_from_env() -> int | None:
    """Read GOMOKU_AI_SEARCH_TIME_LIMIT_MS; None when unset.

    Raises:
        ConfigurationError: If the value is not a non-negative integer.
    """
    raw = os.getenv("GOMOKU_AI_SEARCH_TIME_LIMIT_MS", "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            "GOMOKU_AI_SEARCH_TIME_LIMIT_MS must be an integer",
            context={"value": raw},
        ) from e
    if value < 0:
        raise ConfigurationError(
            "GOMOKU_AI_SEARCH_TIME_LIMIT_MS must not be negative",
            context={"value": raw},
        )
    return value


class MinimaxAI(HeuristicAI):
    """AI that uses gated minimax with alpha-beta pruning.

    Depth, breadth, threshold and future weight all come from the tier's
    :class:`TierProfile`:

    - Normal: depth 1, breadth 10
    - Hard:   depth 3, breadth 15
    - Expert: depth 4, breadth 12 at the root, ``max(12 - 3d, 3)`` inside
    """

    def __init__(
        self,
        color: Any,
        config: AIConfig,
        profile: TierProfile | None = None,
    ) -> None:
        super().__init__(color, config, profile)
        self.ordering_cache = MoveCache(max_entries=max_entries_from_env() // 4 or 1)
        # Wall-clock search bookkeeping, reset at the start of each decision.
        self.start_time: float = 0.0
        self.time_limit: float = 0.0
        self.nodes_visited: int = 0
        self.win_utility: float = self.WEIGHT_FIVE * SEARCH_WIN_MULTIPLIER

    def _get_time_limit_ms(self) -> int:
        """Explicit think_time, then the environment override, then the tier default."""
        if self.config.think_time is not None:
            return self.config.think_time
        env_limit = search_time_limit_from_env()
        if env_limit is not None:
            return env_limit
        return self.profile.think_time_ms

    def _choose_from_ranking(
        self, board: Board, ranked: list[tuple[Position, float]]
    ) -> Position | None:
        """Pick among the top-K ranked candidates using gated lookahead."""
        profile = self.profile
        self.start_time = time.perf_counter()
        self.time_limit = self._get_time_limit_ms() / 1000.0
        self.nodes_visited = 0

        depth = profile.search_depth
        searching = depth > 0
        candidates = ranked[:profile.candidate_breadth] if profile.candidate_breadth else ranked

        best_position: Position | None = None
        best_total = float('-inf')
        searched = 0
        for position, score in candidates:
            total = score
            if searching and score > profile.search_threshold:
                child = board.with_stone(position.row, position.col, self.color.cell)
                try:
                    future = self._minimax(
                        child, depth, False, float('-inf'), float('inf')
                    )
                except AITimeoutError as e:
                    logger.warning(
                        f"{self!r} stopped searching after {self.nodes_visited} nodes: {e}"
                    )
                    self.search_timed_out = True
                    searching = False
                    future = 0.0
                else:
                    searched += 1
                total = score + future * profile.future_weight
            if total > best_total:
                best_total = total
                best_position = position

        log = logger.info if SEARCH_DEBUG else logger.debug
        log(
            f"{self!r} searched {searched}/{len(candidates)} candidates, "
            f"{self.nodes_visited} nodes in "
            f"{(time.perf_counter() - self.start_time) * 1000:.1f}ms, "
            f"best {best_position} ({best_total:.1f})"
        )
        stage = DecisionStage.SEARCH if depth > 0 else DecisionStage.HEURISTIC
        return self._record(best_position, stage, best_total)

    def _minimax(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float,
    ) -> float:
        """Alpha-beta value of ``board`` from this AI's point of view.

        Args:
            board: Hypothetical position (a fresh copy per branch)
            depth: Remaining plies
            maximizing: True when it is this AI's turn
        """
        self.nodes_visited += 1
        if depth == 0:
            return 0.0
        # Interior nodes rank every nearby cell, so the clock is checked at each one.
        self._check_deadline()

        color = self.color if maximizing else self.color.opponent
        moves = self._ordered_moves(board, color, depth)
        if not moves:
            return 0.0

        # Completing five ends the game on the spot for the side to move;
        # sooner wins (more remaining depth) are worth more.
        cell = color.cell
        for position in moves:
            if makes_five(board, position.row, position.col, cell):
                utility = self.win_utility + depth
                return utility if maximizing else -utility

        if maximizing:
            value = float('-inf')
            for position in moves:
                child = board.with_stone(position.row, position.col, cell)
                value = max(value, self._minimax(child, depth - 1, False, alpha, beta))
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = float('inf')
        for position in moves:
            child = board.with_stone(position.row, position.col, cell)
            value = min(value, self._minimax(child, depth - 1, True, alpha, beta))
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value

    def _ordered_moves(
        self, board: Board, color: StoneColor, depth: int
    ) -> list[Position]:
        """Top candidates for ``color`` at a node with ``depth`` plies left."""
        breadth = self.profile.breadth_at(depth)
        key = (board.zobrist_key, color, breadth, self.phase)
        return self.ordering_cache.get_or_compute(
            key,
            lambda: [
                position for position, _ in self.rank_candidates(board, color, limit=breadth)
            ],
        )

    def _check_deadline(self) -> None:
        if self.time_limit <= 0:
            return
        elapsed = time.perf_counter() - self.start_time
        if elapsed > self.time_limit:
            raise AITimeoutError(
                "Search deadline exceeded",
                time_limit_ms=int(self.time_limit * 1000),
                actual_time_ms=int(elapsed * 1000),
            )

    def get_search_stats(self) -> dict[str, Any]:
        return {
            "nodes_visited": self.nodes_visited,
            "timed_out": self.search_timed_out,
            "score_cache": self.score_cache.stats(),
            "ordering_cache": self.ordering_cache.stats(),
        }
