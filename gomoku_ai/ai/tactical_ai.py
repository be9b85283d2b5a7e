"""Tactical AI implementation for the Easy tier.

Plays immediate wins and blocks immediate losses, otherwise stays in contact
with the opponent by picking a random empty cell near one of their stones.
There is no scoring and no lookahead.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..board import Board, nearby_positions, stone_positions
from ..models import DecisionStage, Position
from .base import BaseAI
from .critical import find_critical_move
from .opening import random_first_move

logger = logging.getLogger(__name__)


class TacticalAI(BaseAI):
    """AI that reacts to immediate threats and otherwise plays near the opponent."""

    def select_move(
        self, board: Board, history: Sequence[Position]
    ) -> Position | None:
        self.reset_diagnostics()
        valid_moves = self.get_valid_moves(board)
        if not valid_moves:
            return self._record(None, DecisionStage.NONE)

        if self.profile.randomized_first_move:
            opening = random_first_move(board, self.rng, self.profile.first_move_window)
            if opening is not None:
                return self._record(opening, DecisionStage.OPENING)

        color = self.acting_color
        critical = find_critical_move(
            board, color, self.profile.critical_level, valid_moves
        )
        if critical is not None:
            return self._record(critical.position, DecisionStage.CRITICAL)

        contact = self.get_contact_moves(board)
        if contact:
            return self._record(self.get_random_element(contact), DecisionStage.HEURISTIC)

        logger.debug("No cells near the opponent; falling back to a random move")
        return self._record(self.get_random_element(valid_moves), DecisionStage.RANDOM)

    def get_contact_moves(self, board: Board) -> list[Position]:
        """Empty cells within the proximity radius of any opponent stone."""
        radius = self.profile.proximity_radius
        if radius <= 0:
            return []
        seen: dict[Position, None] = {}
        for stone in stone_positions(board, self.acting_color.opponent):
            for position in nearby_positions(board, stone, radius):
                seen.setdefault(position, None)
        return sorted(seen)

    def evaluate_position(self, board: Board, position: Position) -> float:
        """1.0 for cells in contact with the opponent, 0.0 elsewhere."""
        return 1.0 if position in set(self.get_contact_moves(board)) else 0.0
