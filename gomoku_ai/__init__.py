"""
Gomoku AI: a five-tier move-decision engine for 15x15 five-in-a-row.

Public surface:
    create_empty, is_valid_position, place, find_winning_line  (board model)
    decide, decide_with_details                                 (engine)
"""

from .board import (
    Board,
    GameOutcome,
    can_place,
    check_outcome,
    create_empty,
    find_winning_line,
    get_stone,
    is_valid_position,
    place,
    try_place,
)
from .engine import decide, decide_with_details
from .errors import (
    AITimeoutError,
    ConfigurationError,
    GomokuError,
    InvalidBoardError,
    InvalidColorError,
)
from .models import (
    BOARD_SIZE,
    WIN_LENGTH,
    AIConfig,
    CellState,
    GameStatus,
    MoveDecision,
    Position,
    StoneColor,
    Tier,
    TierProfile,
)

__version__ = "0.1.0"

__all__ = [
    "AIConfig",
    "AITimeoutError",
    "BOARD_SIZE",
    "Board",
    "CellState",
    "ConfigurationError",
    "GameOutcome",
    "GameStatus",
    "GomokuError",
    "InvalidBoardError",
    "InvalidColorError",
    "MoveDecision",
    "Position",
    "StoneColor",
    "Tier",
    "TierProfile",
    "WIN_LENGTH",
    "can_place",
    "check_outcome",
    "create_empty",
    "decide",
    "decide_with_details",
    "find_winning_line",
    "get_stone",
    "is_valid_position",
    "place",
    "try_place",
]
