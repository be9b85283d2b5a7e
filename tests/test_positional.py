"""Tests for positional heuristics: phase, center, territory, proximity, endgame."""

import pytest

from gomoku_ai.ai.patterns import LinePattern
from gomoku_ai.ai.positional import (
    ProximityInfo,
    center_bonus,
    classify_phase,
    endgame_units,
    occupancy,
    proximity_info,
    proximity_units,
    territory_score,
)
from gomoku_ai.models import CellState, GamePhase

BLACK = CellState.BLACK
WHITE = CellState.WHITE


class TestClassifyPhase:
    @pytest.mark.parametrize(
        "move_count,expected",
        [(0, GamePhase.EARLY), (7, GamePhase.EARLY), (8, GamePhase.MID),
         (49, GamePhase.MID), (50, GamePhase.LATE), (200, GamePhase.LATE)],
    )
    def test_thresholds(self, move_count, expected) -> None:
        assert classify_phase(move_count, 8, 50) is expected


class TestCenterBonus:
    """Center bonus decays linearly with Manhattan distance."""

    def test_center_is_maximal(self) -> None:
        assert center_bonus(7, 7, 4) == 5

    def test_linear_decay(self) -> None:
        assert center_bonus(7, 9, 4) == 3
        assert center_bonus(5, 5, 4) == 1

    def test_outside_radius(self) -> None:
        assert center_bonus(7, 12, 4) == 0
        assert center_bonus(0, 0, 6) == 0

    def test_larger_radius_reaches_further(self) -> None:
        assert center_bonus(7, 12, 6) == 2


class TestTerritory:
    """Tests for the square-window territory count."""

    def test_count(self, make_board) -> None:
        board = make_board(black=[(7, 8), (8, 8), (7, 10)], white=[(6, 6)])
        assert territory_score(board, 7, 7, BLACK, 2) == 2.0
        assert territory_score(board, 7, 7, WHITE, 2) == 1.0

    def test_inverse_distance(self, make_board) -> None:
        """Each stone counts 1 / (chebyshev distance + 1)."""
        board = make_board(black=[(7, 8), (9, 9)])
        assert territory_score(board, 7, 7, BLACK, 2, inverse_distance=True) == pytest.approx(
            0.5 + 1 / 3
        )

    def test_inverse_distance_at_edge(self, make_board) -> None:
        board = make_board(black=[(1, 1)])
        assert territory_score(board, 0, 0, BLACK, 2) == 1.0
        assert territory_score(board, 0, 0, BLACK, 2, inverse_distance=True) == 0.5

    def test_zero_radius(self, make_board) -> None:
        assert territory_score(make_board(black=[(7, 8)]), 7, 7, BLACK, 0) == 0.0


class TestProximity:
    """Tests for opponent-proximity information."""

    def test_no_opponent_stones(self, make_board) -> None:
        board = make_board(black=[(7, 7)])
        assert proximity_info(board, 7, 8, BLACK, WHITE, 2) == ProximityInfo(None, False, 0)

    def test_nearest_opponent_and_own_support(self, make_board) -> None:
        board = make_board(black=[(8, 7)], white=[(7, 9), (0, 0)])
        info = proximity_info(board, 7, 7, BLACK, WHITE, 2)
        assert info.distance == 2
        assert info.own_nearby is True
        assert info.threatening_stones == 0

    def test_out_of_radius(self, make_board) -> None:
        board = make_board(black=[(8, 7)], white=[(7, 12)])
        info = proximity_info(board, 7, 7, BLACK, WHITE, 2)
        assert info.distance == 5
        assert info.own_nearby is False

    def test_threatening_stones(self, make_board) -> None:
        """Nearby opponent stones that sit in a run of three count as threats."""
        board = make_board(white=[(7, 9), (7, 10), (7, 11)])
        info = proximity_info(board, 7, 7, BLACK, WHITE, 3)
        assert info.distance == 2
        assert info.threatening_stones == 2

    @pytest.mark.parametrize(
        "distance,radius,expected",
        [(1, 2, 0.5), (2, 2, 0.0), (1, 3, 2 / 3), (None, 2, 0.0), (4, 3, 0.0)],
    )
    def test_proximity_units(self, distance, radius, expected) -> None:
        assert proximity_units(distance, radius) == pytest.approx(expected)


class TestEndgame:
    """Tests for occupancy and endgame efficiency."""

    def test_occupancy(self, make_board, full_board) -> None:
        assert occupancy(make_board(black=[(0, 0)])) == pytest.approx(1 / 225)
        assert occupancy(full_board()) == 1.0

    def test_inactive_before_threshold(self, make_board) -> None:
        patterns = (LinePattern((0, 1), 4, 1),)
        assert endgame_units(patterns, make_board(black=[(0, 0)])) == 0.0

    def test_rewards_short_completions(self, full_board) -> None:
        """Runs needing one more stone count 1, runs needing two count 1/2."""
        patterns = (
            LinePattern((0, 1), 4, 1),
            LinePattern((1, 0), 3, 2),
            LinePattern((1, 1), 2, 2),
            LinePattern((1, -1), 1, 0),
        )
        assert endgame_units(patterns, full_board(hole=(14, 14))) == pytest.approx(1.5)
