"""Random AI implementation for the Beginner tier.

This agent plays uniformly random empty cells using the per-instance RNG on
:class:`BaseAI`. The only exceptions are an immediate win, which it always
takes, and the very first stone of the game, which lands in a small window
around the center.

The acting color is not validated at construction; an empty color only
surfaces as :class:`~gomoku_ai.errors.InvalidColorError` once a decision
needs it.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..board import Board
from ..models import DecisionStage, Position
from .base import BaseAI
from .critical import find_critical_move
from .opening import random_first_move


class RandomAI(BaseAI):
    """AI that selects random empty cells."""

    def select_move(
        self, board: Board, history: Sequence[Position]
    ) -> Position | None:
        """Select a random empty cell, taking an immediate win if one exists.

        Args:
            board: Current board.
            history: Moves so far (unused).

        Returns:
            A random empty :class:`Position` or ``None`` if the board is full.
        """
        self.reset_diagnostics()
        valid_moves = self.get_valid_moves(board)
        if not valid_moves:
            return self._record(None, DecisionStage.NONE)

        if self.profile.randomized_first_move:
            opening = random_first_move(board, self.rng, self.profile.first_move_window)
            if opening is not None:
                return self._record(opening, DecisionStage.OPENING)

        critical = find_critical_move(
            board, self.acting_color, self.profile.critical_level, valid_moves
        )
        if critical is not None:
            return self._record(critical.position, DecisionStage.CRITICAL)

        return self._record(self.get_random_element(valid_moves), DecisionStage.RANDOM)

    def evaluate_position(self, board: Board, position: Position) -> float:
        """Return a small random evaluation.

        RandomAI does not evaluate positions meaningfully; the value only
        adds variance for diagnostic tooling.
        """
        _ = board, position
        return self.rng.uniform(-0.1, 0.1)

    def get_evaluation_breakdown(
        self, board: Board, position: Position
    ) -> dict[str, float]:
        _ = board, position
        return {
            "total": 0.0,
            "random_variance": self.rng.uniform(-0.1, 0.1),
        }
