"""
Data models for the Gomoku AI engine
Board cell states, actor colors, positions and tier configuration records
"""

from enum import Enum, IntEnum
from typing import Any, Dict, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field

from .errors import InvalidColorError


BOARD_SIZE = 15
WIN_LENGTH = 5

# Direction vectors: horizontal, vertical, diagonal down-right, diagonal
# down-left. The backward sense of each is the negated vector.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


class CellState(IntEnum):
    """State of a single board cell"""
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @classmethod
    def parse(cls, value: Any) -> "CellState":
        """Coerce ints, labels ("none"/"black"/"white") or colors to a cell."""
        if isinstance(value, StoneColor):
            return value.cell
        if isinstance(value, str):
            label = value.strip().lower()
            if label in _EMPTY_LABELS:
                return cls.EMPTY
            if label in ("black", "white"):
                return cls[label.upper()]
            raise ValueError(f"Unknown cell state label: {value!r}")
        return cls(value)


class StoneColor(str, Enum):
    """Color a player acts as (no empty member)"""
    BLACK = "black"
    WHITE = "white"

    @property
    def cell(self) -> CellState:
        return CellState.BLACK if self is StoneColor.BLACK else CellState.WHITE

    @property
    def opponent(self) -> "StoneColor":
        return StoneColor.WHITE if self is StoneColor.BLACK else StoneColor.BLACK

    @classmethod
    def from_cell(cls, cell: CellState) -> "StoneColor":
        return cls.parse(cell)

    @classmethod
    def parse(cls, value: Any) -> "StoneColor":
        """Resolve an acting color, rejecting the empty cell state.

        Raises:
            InvalidColorError: If ``value`` is the empty state or unknown.
        """
        if isinstance(value, StoneColor):
            return value
        if isinstance(value, CellState) or (
            isinstance(value, int) and not isinstance(value, bool)
        ):
            if value == CellState.BLACK:
                return cls.BLACK
            if value == CellState.WHITE:
                return cls.WHITE
        elif isinstance(value, str):
            label = value.strip().lower()
            if label in ("black", "white"):
                return cls(label)
        raise InvalidColorError(
            "AI player color cannot be empty",
            color=value,
        )


_EMPTY_LABELS = ("none", "empty", "")


class Position(NamedTuple):
    """Board coordinate. Plain tuple underneath, so (7, 7) == Position(7, 7)."""
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


WinningLine = Tuple[Position, ...]


class Tier(str, Enum):
    """Engine strength tiers, weakest first"""
    BEGINNER = "beginner"
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def level(self) -> int:
        return list(Tier).index(self) + 1

    @classmethod
    def from_level(cls, level: int) -> "Tier":
        """Map a 1-based difficulty level onto the ladder, clamping."""
        members = list(cls)
        index = max(1, min(len(members), int(level))) - 1
        return members[index]


class GamePhase(str, Enum):
    """Game phase derived from move count"""
    EARLY = "early"
    MID = "mid"
    LATE = "late"


class GameStatus(str, Enum):
    """Outcome of a position after the last move"""
    PLAYING = "playing"
    WON = "won"
    DRAW = "draw"


class AIType(str, Enum):
    """Player implementations the factory knows how to build"""
    RANDOM = "random"
    TACTICAL = "tactical"
    HEURISTIC = "heuristic"
    MINIMAX = "minimax"


class CriticalLevel(IntEnum):
    """How far down the tactical priority chain a tier scans"""
    NONE = 0
    OWN_WIN = 1
    WIN_BLOCK = 2
    FOURS = 3
    OPEN_THREES = 4


class DecisionStage(str, Enum):
    """Pipeline stage that produced a move"""
    CRITICAL = "critical"
    OPENING = "opening"
    SEARCH = "search"
    HEURISTIC = "heuristic"
    RANDOM = "random"
    NONE = "none"


class AIConfig(BaseModel):
    """AI configuration"""
    tier: Tier = Tier.NORMAL
    think_time: Optional[int] = Field(None, alias="thinkTime", ge=0)
    rng_seed: Optional[int] = Field(None, alias="rngSeed")

    class Config:
        populate_by_name = True


class PhaseMultipliers(BaseModel):
    """Per-phase weight multipliers used by the phase-adaptive tier"""
    offense: Dict[GamePhase, float] = Field(default_factory=dict)
    defense: Dict[GamePhase, float] = Field(default_factory=dict)
    three: Dict[GamePhase, float] = Field(default_factory=dict)
    two: Dict[GamePhase, float] = Field(default_factory=dict)

    class Config:
        frozen = True

    def get(self, kind: str, phase: GamePhase) -> float:
        return getattr(self, kind).get(phase, 1.0)


class TierProfile(BaseModel):
    """Immutable configuration record for one tier"""
    tier: Tier
    ai_type: AIType
    think_time_ms: int = 0
    search_depth: int = Field(0, ge=0, le=4)
    candidate_breadth: int = 0
    breadth_decay: int = 0
    min_breadth: int = 1
    search_threshold: float = 0.0
    future_weight: float = 0.0
    center_radius: int = 0
    territory_radius: int = 0
    inverse_distance_territory: bool = False
    proximity_radius: int = 0
    candidate_radius: int = 2
    opening_book: Optional[str] = None
    opening_move_limit: int = 0
    randomized_first_move: bool = False
    first_move_window: int = 2
    critical_level: CriticalLevel = CriticalLevel.NONE
    fork_detection: bool = False
    complex_patterns: bool = False
    proximity_heuristic: bool = False
    endgame_optimization: bool = False
    weight_profile_id: Optional[str] = None
    phase_early_limit: int = 8
    phase_mid_limit: int = 50
    phase_multipliers: PhaseMultipliers = Field(default_factory=PhaseMultipliers)

    class Config:
        frozen = True

    def breadth_at(self, remaining_depth: int) -> int:
        """Candidate breadth for a search node with ``remaining_depth`` plies."""
        return max(
            self.candidate_breadth - self.breadth_decay * remaining_depth,
            self.min_breadth,
        )


class MoveDecision(BaseModel):
    """Result of a single decide call, with diagnostics"""
    position: Optional[Position] = None
    tier: Tier
    stage: DecisionStage = DecisionStage.NONE
    score: Optional[float] = None
    elapsed_ms: float = 0.0
    nodes_visited: int = 0
    timed_out: bool = False
