"""
Gomoku AI Error Hierarchy

Every exception the engine raises inherits from GomokuError so hosts can
catch engine failures in one place.

Usage:
    from gomoku_ai.errors import InvalidColorError

    try:
        ai = AIFactory.create_from_tier(Tier.HARD, color)
    except InvalidColorError as e:
        logger.warning(f"Rejected AI color: {e.message}")
"""

from typing import Any

__all__ = [
    # AI errors
    "AIError",
    "AITimeoutError",
    "ConfigurationError",
    # Base error
    "GomokuError",
    # Board / color errors
    "InvalidBoardError",
    "InvalidColorError",
    # Validation errors
    "ValidationError",
]


class GomokuError(Exception):
    """Base exception for all engine errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "GOMOKU_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Board / Color Errors
# =============================================================================


class InvalidColorError(GomokuError):
    """The engine was asked to act as the empty cell state.

    Attributes:
        color: The rejected value, as passed by the caller
    """
    code: str = "INVALID_COLOR"

    def __init__(
        self,
        message: str,
        color: Any = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.color = color
        self.context["color"] = repr(color)


class InvalidBoardError(GomokuError):
    """Board data that cannot be turned into a 15x15 grid."""
    code: str = "INVALID_BOARD"


# =============================================================================
# AI Errors
# =============================================================================


class AIError(GomokuError):
    """Base class for AI-related errors."""
    code: str = "AI_ERROR"


class AITimeoutError(AIError):
    """AI search exceeded its time limit.

    Raised inside the recursive search when the per-decision deadline
    passes. The search root catches it and keeps the best move found so far.
    """
    code: str = "AI_TIMEOUT"

    def __init__(
        self,
        message: str,
        time_limit_ms: int | None = None,
        actual_time_ms: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.time_limit_ms = time_limit_ms
        self.actual_time_ms = actual_time_ms
        if time_limit_ms is not None:
            self.context["time_limit_ms"] = time_limit_ms
        if actual_time_ms is not None:
            self.context["actual_time_ms"] = actual_time_ms


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(GomokuError):
    """Input failed validation."""
    code: str = "VALIDATION_ERROR"


class ConfigurationError(ValidationError):
    """Unknown tier, bad profile or malformed environment setting."""
    code: str = "CONFIGURATION_ERROR"
