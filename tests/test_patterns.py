"""Tests for line-pattern analysis around a virtual stone."""

import pytest

from gomoku_ai.ai.patterns import (
    GappedThreat,
    LinePattern,
    PatternType,
    analyze_lines,
    classify_run,
    count_threats,
    find_gapped_threats,
    is_fork,
    makes_five,
    scan_line,
    summarize_threats,
)
from gomoku_ai.models import CellState

BLACK = CellState.BLACK
WHITE = CellState.WHITE


class TestClassifyRun:
    @pytest.mark.parametrize(
        "length,expected",
        [
            (1, PatternType.NONE),
            (2, PatternType.TWO),
            (3, PatternType.THREE),
            (4, PatternType.FOUR),
            (5, PatternType.FIVE),
            (7, PatternType.FIVE),
        ],
    )
    def test_lengths(self, length, expected) -> None:
        assert classify_run(length) is expected


class TestAnalyzeLines:
    """Tests for per-direction run analysis."""

    def test_lone_stone(self, empty_board) -> None:
        """A virtual stone on an empty board is an open run of one in every direction."""
        lines = analyze_lines(empty_board, 7, 7, BLACK)
        assert len(lines) == 4
        assert all(line.length == 1 and line.open_ends == 2 for line in lines)

    def test_open_three(self, make_board) -> None:
        board = make_board(black=[(7, 5), (7, 6)])
        horizontal = scan_line(board, 7, 7, 0, 1, BLACK)
        assert horizontal == LinePattern((0, 1), 3, 2)
        assert horizontal.kind is PatternType.THREE
        assert horizontal.is_open

    def test_one_end_blocked(self, make_board) -> None:
        board = make_board(black=[(7, 5), (7, 6)], white=[(7, 4)])
        horizontal = scan_line(board, 7, 7, 0, 1, BLACK)
        assert horizontal.open_ends == 1
        assert horizontal.is_live and not horizontal.is_open

    def test_board_edge_is_closed(self, make_board) -> None:
        board = make_board(black=[(0, 1)])
        horizontal = scan_line(board, 0, 0, 0, 1, BLACK)
        assert horizontal.length == 2
        assert horizontal.open_ends == 1

    def test_anchor_counts_even_if_occupied(self, make_board) -> None:
        """The candidate cell is treated as the analysed color."""
        board = make_board(black=[(7, 6), (7, 8)], white=[(7, 7)])
        assert scan_line(board, 7, 7, 0, 1, BLACK).length == 3


class TestMakesFive:
    """Tests for immediate-win detection."""

    def test_completes_four(self, make_board) -> None:
        board = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)])
        assert makes_five(board, 7, 7, BLACK)
        assert makes_five(board, 7, 2, BLACK)
        assert not makes_five(board, 7, 8, BLACK)
        assert not makes_five(board, 7, 7, WHITE)

    def test_fills_gap(self, make_board) -> None:
        board = make_board(white=[(2, 2), (3, 3), (5, 5), (6, 6)])
        assert makes_five(board, 4, 4, WHITE)

    def test_overline_counts(self, make_board) -> None:
        board = make_board(black=[(7, 1), (7, 2), (7, 3), (7, 5), (7, 6)])
        assert makes_five(board, 7, 4, BLACK)


class TestForks:
    """Tests for threat counting and fork detection."""

    def test_two_threes_is_fork(self, make_board) -> None:
        board = make_board(black=[(7, 5), (7, 6), (5, 7), (6, 7)])
        lines = analyze_lines(board, 7, 7, BLACK)
        assert count_threats(lines) == 2
        assert is_fork(lines)

    def test_single_three_is_not_fork(self, make_board) -> None:
        board = make_board(black=[(7, 5), (7, 6), (6, 7)])
        lines = analyze_lines(board, 7, 7, BLACK)
        assert count_threats(lines) == 1
        assert not is_fork(lines)


class TestGappedThreats:
    """Tests for one/two-gap pattern detection."""

    def test_gapped_four(self, make_board) -> None:
        """X_.XX with the anchor at _ is a gapped four inside a five-cell span."""
        board = make_board(black=[(7, 3), (7, 6), (7, 7)])
        threats = find_gapped_threats(board, 7, 4, BLACK)
        assert threats == [GappedThreat((0, 1), 4, 1, 5)]
        assert threats[0].is_four

    def test_gapped_three(self, make_board) -> None:
        board = make_board(white=[(3, 3), (5, 5)])
        threats = find_gapped_threats(board, 2, 2, WHITE)
        assert threats == [GappedThreat((1, 1), 3, 1, 4)]
        assert not threats[0].is_four

    def test_span_wider_than_five_ignored(self, make_board) -> None:
        board = make_board(black=[(7, 5), (7, 9), (7, 10)])
        assert find_gapped_threats(board, 7, 6, BLACK) == []

    def test_gap_blocked_by_opponent(self, make_board) -> None:
        board = make_board(black=[(7, 7), (7, 8)], white=[(7, 6)])
        assert find_gapped_threats(board, 7, 5, BLACK) == []

    def test_summarize_threats_merges_directions(self, make_board) -> None:
        board = make_board(black=[(7, 3), (7, 6), (7, 7), (5, 4), (6, 4)])
        lines = analyze_lines(board, 7, 4, BLACK)
        gapped = find_gapped_threats(board, 7, 4, BLACK)
        summary = summarize_threats(lines, gapped)
        assert summary.threats == 2
        assert summary.open_threats == 1
