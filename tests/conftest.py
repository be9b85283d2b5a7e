"""
Shared pytest fixtures for gomoku_ai tests.

Board builders are function-scoped factories so every test works on its own
positions. Engine environment variables are cleared for every test so a
developer's shell settings never leak into results.
"""

from typing import Callable, Iterable, Optional, Tuple

import pytest

from gomoku_ai.ai.factory import AIFactory
from gomoku_ai.board import Board, create_empty, place
from gomoku_ai.models import BOARD_SIZE, AIConfig, CellState, StoneColor, Tier

Coord = Tuple[int, int]

ENGINE_ENV_VARS = (
    "GOMOKU_AI_SEARCH_TIME_LIMIT_MS",
    "GOMOKU_AI_EVAL_CACHE_ENTRIES",
    "GOMOKU_AI_SEARCH_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove engine environment overrides for the duration of a test."""
    for name in ENGINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def empty_board() -> Board:
    return create_empty()


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory: build a board from black and white stone coordinates."""

    def _make(black: Iterable[Coord] = (), white: Iterable[Coord] = ()) -> Board:
        board = create_empty()
        for row, col in black:
            board = place(board, row, col, StoneColor.BLACK)
        for row, col in white:
            board = place(board, row, col, StoneColor.WHITE)
        return board

    return _make


def _pattern_cell(row: int, col: int) -> CellState:
    # Pairs of equal stones per row, shifted every row: no run longer than two.
    return CellState.BLACK if ((col // 2) + row) % 2 == 0 else CellState.WHITE


@pytest.fixture
def full_board() -> Callable[..., Board]:
    """Factory: a board with every cell filled and no five anywhere.

    ``hole`` leaves one cell empty.
    """

    def _make(hole: Optional[Coord] = None) -> Board:
        rows = [
            [_pattern_cell(row, col) for col in range(BOARD_SIZE)]
            for row in range(BOARD_SIZE)
        ]
        if hole is not None:
            rows[hole[0]][hole[1]] = CellState.EMPTY
        return Board.from_rows(rows)

    return _make


@pytest.fixture
def seeded_config() -> Callable[..., AIConfig]:
    """Factory: AIConfig for a tier with a fixed seed and no search deadline."""

    def _make(tier: Tier = Tier.NORMAL, seed: int = 42, think_time: int = 0) -> AIConfig:
        return AIConfig(tier=tier, think_time=think_time, rng_seed=seed)

    return _make


@pytest.fixture
def custom_registry():
    """Snapshot and restore the AIFactory custom registry."""
    saved = dict(AIFactory._custom_registry)
    yield AIFactory._custom_registry
    AIFactory._custom_registry.clear()
    AIFactory._custom_registry.update(saved)
