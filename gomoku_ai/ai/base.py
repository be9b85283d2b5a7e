"""
Base AI Player class for Gomoku
Abstract base class that all tier implementations inherit from
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
import random

from ..board import Board, empty_positions
from ..models import (
    AIConfig,
    DecisionStage,
    Position,
    StoneColor,
    TierProfile,
)
from .factory import get_tier_profile


class BaseAI(ABC):
    """Abstract base class for all AI implementations"""

    def __init__(
        self,
        color: Any,
        config: AIConfig,
        profile: Optional[TierProfile] = None,
    ):
        """
        Initialize AI player

        Args:
            color: The color this AI plays. Kept as given; subclasses that
                validate eagerly call ``StoneColor.parse`` in their own
                constructor.
            config: AI configuration settings
            profile: Tier configuration record (defaults to the canonical
                profile for ``config.tier``)
        """
        self.color = color
        self.config = config
        self.profile: TierProfile = profile or get_tier_profile(config.tier)
        self.move_count = 0

        # Per-instance RNG for every stochastic choice. An explicit rng_seed
        # makes decisions reproducible; without one each instance draws
        # fresh entropy.
        self.rng_seed: Optional[int] = config.rng_seed
        self.rng: random.Random = random.Random(config.rng_seed)

        # Diagnostics for the most recent select_move call
        self.last_stage: DecisionStage = DecisionStage.NONE
        self.last_score: Optional[float] = None
        self.nodes_visited = 0
        self.search_timed_out = False

    @property
    def acting_color(self) -> StoneColor:
        """The validated acting color.

        Raises:
            InvalidColorError: If this AI was created for the empty state.
        """
        return StoneColor.parse(self.color)

    @abstractmethod
    def select_move(
        self, board: Board, history: Sequence[Position]
    ) -> Optional[Position]:
        """
        Select the next move for the given position

        Args:
            board: Current board (never modified)
            history: Moves played so far, oldest first

        Returns:
            Selected position or None if the board is full
        """
        pass

    @abstractmethod
    def evaluate_position(self, board: Board, position: Position) -> float:
        """
        Score placing this AI's stone at ``position``

        Args:
            board: Current board
            position: Empty candidate cell

        Returns:
            Evaluation score (higher = better for this AI)
        """
        pass

    def get_evaluation_breakdown(
        self, board: Board, position: Position
    ) -> Dict[str, float]:
        """
        Get detailed breakdown of a candidate's evaluation

        Returns:
            Dictionary with evaluation components and a "total" entry
        """
        return {
            "total": self.evaluate_position(board, position)
        }

    def get_valid_moves(self, board: Board) -> List[Position]:
        """Every empty cell, row-major."""
        return empty_positions(board)

    def get_random_element(self, items: List[Any]) -> Optional[Any]:
        """
        Get random element from list using the per-instance RNG.

        Returns:
            Random item or None if list is empty
        """
        if not items:
            return None
        return self.rng.choice(items)

    def reset_diagnostics(self) -> None:
        self.last_stage = DecisionStage.NONE
        self.last_score = None
        self.nodes_visited = 0
        self.search_timed_out = False

    def _record(
        self,
        position: Optional[Position],
        stage: DecisionStage,
        score: Optional[float] = None,
    ) -> Optional[Position]:
        """Store diagnostics for the chosen move and pass it through."""
        self.last_stage = stage if position is not None else DecisionStage.NONE
        self.last_score = score
        if position is not None:
            self.move_count += 1
        return position

    def __repr__(self) -> str:
        """String representation of AI"""
        color = self.color.value if isinstance(self.color, StoneColor) else self.color
        return (
            f"{self.__class__.__name__}"
            f"(color={color}, "
            f"tier={self.profile.tier.value})"
        )
