"""Tests for the critical-move priority chain."""

from gomoku_ai.ai.critical import CriticalReason, find_critical_move
from gomoku_ai.models import CriticalLevel, StoneColor

BLACK = StoneColor.BLACK
WHITE = StoneColor.WHITE


class TestOwnWin:
    """The acting color's immediate win is always first."""

    def test_takes_win(self, make_board) -> None:
        board = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)], white=[(7, 2)])
        move = find_critical_move(board, BLACK, CriticalLevel.OWN_WIN)
        assert move.position == (7, 7)
        assert move.reason is CriticalReason.WIN

    def test_win_beats_block(self, make_board) -> None:
        """With both a win and a loss on the board, the win is chosen."""
        board = make_board(
            black=[(2, 2), (2, 3), (2, 4), (2, 5)],
            white=[(10, 3), (10, 4), (10, 5), (10, 6)],
        )
        move = find_critical_move(board, WHITE, CriticalLevel.OPEN_THREES)
        assert move.reason is CriticalReason.WIN
        assert move.position in {(10, 2), (10, 7)}

    def test_own_win_level_ignores_blocks(self, make_board) -> None:
        board = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)])
        assert find_critical_move(board, WHITE, CriticalLevel.OWN_WIN) is None

    def test_none_level(self, make_board) -> None:
        board = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)])
        assert find_critical_move(board, BLACK, CriticalLevel.NONE) is None


class TestBlocks:
    """Tests for the blocking rules."""

    def test_blocks_four(self, make_board) -> None:
        board = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)], white=[(0, 0)])
        move = find_critical_move(board, WHITE, CriticalLevel.WIN_BLOCK)
        assert move.position == (7, 2)
        assert move.reason is CriticalReason.BLOCK_WIN

    def test_blocks_broken_four(self, make_board) -> None:
        board = make_board(black=[(3, 3), (4, 4), (6, 6), (7, 7)])
        move = find_critical_move(board, WHITE, CriticalLevel.WIN_BLOCK)
        assert move.position == (5, 5)

    def test_blocks_open_three_before_it_becomes_open_four(self, make_board) -> None:
        """At the FOURS level the opponent's open-four point is denied."""
        board = make_board(black=[(7, 5), (7, 6), (7, 7)], white=[(0, 0)])
        move = find_critical_move(board, WHITE, CriticalLevel.FOURS)
        assert move.reason is CriticalReason.BLOCK_FOUR
        assert move.position == (7, 4)

    def test_blocks_capped_three_before_it_becomes_four(self, make_board) -> None:
        """A four with one end already capped is still denied."""
        board = make_board(black=[(7, 4), (7, 5), (7, 6)], white=[(7, 3), (0, 0)])
        move = find_critical_move(board, WHITE, CriticalLevel.FOURS)
        assert move.reason is CriticalReason.BLOCK_FOUR
        assert move.position == (7, 7)

    def test_capped_three_ignored_at_win_block_level(self, make_board) -> None:
        board = make_board(black=[(7, 4), (7, 5), (7, 6)], white=[(7, 3)])
        assert find_critical_move(board, WHITE, CriticalLevel.WIN_BLOCK) is None

    def test_blocks_open_three_creation(self, make_board) -> None:
        board = make_board(black=[(7, 6), (7, 7)], white=[(0, 0)])
        move = find_critical_move(board, WHITE, CriticalLevel.OPEN_THREES)
        assert move.reason is CriticalReason.BLOCK_OPEN_THREE
        assert move.position == (7, 5)

    def test_open_three_ignored_below_level(self, make_board) -> None:
        board = make_board(black=[(7, 6), (7, 7)], white=[(0, 0)])
        assert find_critical_move(board, WHITE, CriticalLevel.FOURS) is None


class TestOwnFour:
    def test_extends_three_to_four(self, make_board) -> None:
        """Own four creation ranks above blocking the opponent's open-four point."""
        board = make_board(white=[(5, 5), (5, 6), (5, 7)], black=[(12, 5), (12, 6), (12, 7)])
        move = find_critical_move(board, WHITE, CriticalLevel.FOURS)
        assert move.reason is CriticalReason.FOUR
        assert move.position == (5, 4)

    def test_dead_four_is_not_critical(self, make_board) -> None:
        """A four closed at both ends cannot become five."""
        board = make_board(white=[(5, 1), (5, 2), (5, 3)], black=[(5, 0), (5, 5)])
        move = find_critical_move(board, WHITE, CriticalLevel.FOURS)
        assert move is None


class TestCandidates:
    def test_restricted_candidates(self, make_board) -> None:
        board = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)])
        move = find_critical_move(board, WHITE, CriticalLevel.WIN_BLOCK, candidates=[(7, 7)])
        assert move.position == (7, 7)

