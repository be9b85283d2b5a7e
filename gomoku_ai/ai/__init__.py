"""Tier players, pattern analysis and search for the Gomoku engine."""

from .base import BaseAI
from .factory import (
    CANONICAL_TIER_PROFILES,
    TIER_ALIASES,
    AIFactory,
    get_tier_profile,
    resolve_tier,
)

__all__ = [
    "AIFactory",
    "BaseAI",
    "CANONICAL_TIER_PROFILES",
    "TIER_ALIASES",
    "get_tier_profile",
    "resolve_tier",
]
