"""Heuristic AI implementation for Gomoku.

This agent runs the tactical priority chain and the opening book, then
ranks candidate cells by a single-ply evaluation built from independent
components:

* offense / defense - line patterns the stone creates or denies
* fork / block_fork - multi-threat creation and denial
* gapped           - one/two-gap threats (complex-pattern tiers)
* center / strategic / territory / proximity / endgame - positional terms

Each component is a weighted sum of the unweighted units returned by
:mod:`.patterns` and :mod:`.positional`. Weights come from
:mod:`.heuristic_weights` and are applied per instance in
:meth:`HeuristicAI._apply_weight_profile`; which components are active is a
property of the tier's :class:`TierProfile`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..board import Board, candidate_positions
from ..models import (
    AIConfig,
    CellState,
    DecisionStage,
    GamePhase,
    Position,
    StoneColor,
    TierProfile,
)
from .base import BaseAI
from .critical import find_critical_move
from .heuristic_weights import get_weights
from .move_cache import MoveCache, max_entries_from_env
from .opening import book_move, is_strategic_point
from .patterns import (
    LinePattern,
    PatternType,
    ThreatSummary,
    analyze_lines,
    find_gapped_threats,
    is_fork,
    summarize_threats,
)
from .positional import (
    center_bonus,
    classify_phase,
    endgame_units,
    proximity_info,
    proximity_units,
    territory_score,
)

logger = logging.getLogger(__name__)


class HeuristicAI(BaseAI):
    """AI that picks the best single-ply heuristic move."""

    # Defaults match the Normal profile; tier profiles override per instance.
    WEIGHT_FIVE = 10000.0
    WEIGHT_FOUR = 1000.0
    WEIGHT_THREE_OPEN = 150.0
    WEIGHT_THREE = 100.0
    WEIGHT_TWO_OPEN = 15.0
    WEIGHT_TWO = 10.0
    WEIGHT_BLOCK_WIN = 5000.0
    WEIGHT_BLOCK_FOUR = 800.0
    WEIGHT_BLOCK_THREE = 50.0
    WEIGHT_FORK = 0.0
    WEIGHT_BLOCK_FORK = 0.0
    WEIGHT_COMPLEX_FORK = 0.0
    WEIGHT_GAPPED_FOUR = 0.0
    WEIGHT_GAPPED_THREE = 0.0
    WEIGHT_CENTER = 5.0
    WEIGHT_STRATEGIC_POSITION = 0.0
    WEIGHT_TERRITORY = 0.0
    WEIGHT_TERRITORY_OPPONENT = 0.0
    WEIGHT_PROXIMITY_BASE = 20.0
    WEIGHT_PROXIMITY_MAX = 60.0
    WEIGHT_PROXIMITY_OWN_MULTIPLIER = 1.0
    WEIGHT_THREAT_CONTACT = 0.0
    WEIGHT_ENDGAME_EFFICIENCY = 0.0

    def __init__(
        self,
        color: Any,
        config: AIConfig,
        profile: TierProfile | None = None,
    ) -> None:
        super().__init__(color, config, profile)
        # Scored tiers reject the empty state up front.
        self.color: StoneColor = StoneColor.parse(color)
        self._apply_weight_profile()
        self.score_cache = MoveCache(max_entries_from_env())
        self.phase = GamePhase.EARLY

    def _apply_weight_profile(self) -> None:
        """Override evaluation weights for this instance from the tier profile.

        Sets attributes like ``WEIGHT_FOUR`` on the instance, shadowing the
        class-level constants without changing them globally. Unknown or
        missing profile ids keep the class defaults.
        """
        profile_id = self.profile.weight_profile_id
        if not profile_id:
            return
        weights = get_weights(profile_id)
        if not weights:
            logger.warning(f"Unknown heuristic weight profile '{profile_id}'; using defaults")
            return
        for name, value in weights.items():
            setattr(self, name, value)

    # ------------------------------------------------------------------
    # Move selection
    # ------------------------------------------------------------------

    def select_move(
        self, board: Board, history: Sequence[Position]
    ) -> Position | None:
        """Select a move: critical chain, then opening book, then ranking.

        Args:
            board: Current board (never modified).
            history: Moves played so far; its length sets the game phase and
                gates the opening book.

        Returns:
            The chosen :class:`Position`, or ``None`` when the board is full.
        """
        self.reset_diagnostics()
        valid_moves = self.get_valid_moves(board)
        if not valid_moves:
            return self._record(None, DecisionStage.NONE)

        self.set_move_count(len(history))

        critical = find_critical_move(
            board, self.color, self.profile.critical_level, valid_moves
        )
        if critical is not None:
            return self._record(critical.position, DecisionStage.CRITICAL)

        opening = book_move(
            board,
            len(history),
            self.profile.opening_book,
            self.profile.opening_move_limit,
        )
        if opening is not None:
            return self._record(opening, DecisionStage.OPENING)

        ranked = self.rank_candidates(board, self.color)
        if not ranked:
            return self._record(self.get_random_element(valid_moves), DecisionStage.RANDOM)
        return self._choose_from_ranking(board, ranked)

    def _choose_from_ranking(
        self, board: Board, ranked: list[tuple[Position, float]]
    ) -> Position | None:
        position, score = ranked[0]
        return self._record(position, DecisionStage.HEURISTIC, score)

    def set_move_count(self, move_count: int) -> None:
        """Update the game phase used by phase-adaptive weights."""
        phase = classify_phase(
            move_count, self.profile.phase_early_limit, self.profile.phase_mid_limit
        )
        if phase != self.phase:
            logger.debug(f"{self!r} entering {phase.value} phase at move {move_count}")
        self.phase = phase

    def rank_candidates(
        self,
        board: Board,
        color: StoneColor,
        limit: int | None = None,
    ) -> list[tuple[Position, float]]:
        """Candidates near existing stones, best first.

        The sort is stable, so equal scores keep row-major order.
        """
        cells = candidate_positions(board, self.profile.candidate_radius)
        scored = [(position, self.score_move(board, position, color)) for position in cells]
        scored.sort(key=lambda item: item[1], reverse=True)
        if limit is not None:
            return scored[:limit]
        return scored

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def score_move(self, board: Board, position: Position, color: StoneColor) -> float:
        """Single-ply score of ``color`` playing ``position`` (memoised)."""
        key = (board.zobrist_key, position, color, self.phase)
        return self.score_cache.get_or_compute(
            key,
            lambda: sum(self._compute_component_scores(board, position, color).values()),
        )

    def evaluate_position(self, board: Board, position: Position) -> float:
        return self.score_move(board, position, self.color)

    def get_evaluation_breakdown(
        self, board: Board, position: Position
    ) -> dict[str, float]:
        components = self._compute_component_scores(board, position, self.color)
        components["total"] = sum(components.values())
        return components

    def _compute_component_scores(
        self, board: Board, position: Position, color: StoneColor
    ) -> dict[str, float]:
        row, col = position
        own, opponent = color.cell, color.opponent.cell
        profile = self.profile
        multipliers = profile.phase_multipliers
        offense_multiplier = multipliers.get("offense", self.phase)

        own_lines = analyze_lines(board, row, col, own)
        opponent_lines = analyze_lines(board, row, col, opponent)

        scores = {
            "offense": self._offense_score(own_lines) * offense_multiplier,
            "defense": self._defense_score(opponent_lines),
            "fork": 0.0,
            "block_fork": 0.0,
            "gapped": 0.0,
            "center": self.WEIGHT_CENTER * center_bonus(row, col, profile.center_radius),
            "strategic": 0.0,
            "territory": 0.0,
            "proximity": 0.0,
            "endgame": 0.0,
        }

        if profile.complex_patterns:
            own_gapped = find_gapped_threats(board, row, col, own)
            scores["gapped"] = sum(
                self.WEIGHT_GAPPED_FOUR if threat.is_four else self.WEIGHT_GAPPED_THREE
                for threat in own_gapped
            ) * offense_multiplier
            scores["fork"] = self._multi_threat_score(
                summarize_threats(own_lines, own_gapped)
            )
            opponent_summary = summarize_threats(
                opponent_lines, find_gapped_threats(board, row, col, opponent)
            )
            if self._multi_threat_score(opponent_summary) > 0:
                scores["block_fork"] = self.WEIGHT_BLOCK_FORK
        elif profile.fork_detection:
            if is_fork(own_lines):
                scores["fork"] = self.WEIGHT_FORK
            if is_fork(opponent_lines):
                scores["block_fork"] = self.WEIGHT_BLOCK_FORK

        if self.WEIGHT_STRATEGIC_POSITION and is_strategic_point(row, col):
            scores["strategic"] = self.WEIGHT_STRATEGIC_POSITION * offense_multiplier

        if profile.territory_radius > 0:
            inverse = profile.inverse_distance_territory
            territory = self.WEIGHT_TERRITORY * territory_score(
                board, row, col, own, profile.territory_radius, inverse
            )
            if self.WEIGHT_TERRITORY_OPPONENT:
                territory += self.WEIGHT_TERRITORY_OPPONENT * territory_score(
                    board, row, col, opponent, profile.territory_radius, inverse
                )
            scores["territory"] = territory * offense_multiplier

        if profile.proximity_heuristic:
            scores["proximity"] = self._proximity_score(board, row, col, own, opponent)

        if profile.endgame_optimization:
            scores["endgame"] = self.WEIGHT_ENDGAME_EFFICIENCY * endgame_units(own_lines, board)

        return scores

    def _offense_score(self, lines: tuple[LinePattern, ...]) -> float:
        multipliers = self.profile.phase_multipliers
        three_multiplier = multipliers.get("three", self.phase)
        two_multiplier = multipliers.get("two", self.phase)
        total = 0.0
        for line in lines:
            kind = line.kind
            if kind is PatternType.FIVE:
                total += self.WEIGHT_FIVE
            elif kind is PatternType.FOUR:
                total += self.WEIGHT_FOUR
            elif kind is PatternType.THREE:
                weight = self.WEIGHT_THREE_OPEN if line.is_open else self.WEIGHT_THREE
                total += weight * three_multiplier
            elif kind is PatternType.TWO:
                weight = self.WEIGHT_TWO_OPEN if line.is_open else self.WEIGHT_TWO
                total += weight * two_multiplier
        return total

    def _defense_score(self, lines: tuple[LinePattern, ...]) -> float:
        defense_multiplier = self.profile.phase_multipliers.get("defense", self.phase)
        total = 0.0
        for line in lines:
            kind = line.kind
            if kind is PatternType.FIVE:
                total += self.WEIGHT_BLOCK_WIN
            elif kind is PatternType.FOUR:
                total += self.WEIGHT_BLOCK_FOUR
            elif kind is PatternType.THREE:
                total += self.WEIGHT_BLOCK_THREE * defense_multiplier
        return total

    def _multi_threat_score(self, summary: ThreatSummary) -> float:
        if summary.threats < 2:
            return 0.0
        if summary.open_threats >= 2:
            return self.WEIGHT_COMPLEX_FORK
        if summary.threats >= 3:
            return self.WEIGHT_FORK * 1.5
        return self.WEIGHT_FORK

    def _proximity_score(
        self, board: Board, row: int, col: int, own: CellState, opponent: CellState
    ) -> float:
        radius = self.profile.proximity_radius
        info = proximity_info(board, row, col, own, opponent, radius)
        if info.distance is None or info.distance > radius:
            return 0.0
        score = self.WEIGHT_PROXIMITY_BASE + (
            self.WEIGHT_PROXIMITY_MAX - self.WEIGHT_PROXIMITY_BASE
        ) * proximity_units(info.distance, radius)
        if info.own_nearby:
            score *= self.WEIGHT_PROXIMITY_OWN_MULTIPLIER
        return score + self.WEIGHT_THREAT_CONTACT * info.threatening_stones
