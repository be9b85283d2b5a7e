"""Tier policy table and AI factory for Gomoku.

This module is the single source of truth for what each of the five tiers
does: search depth and breadth, radii, opening behaviour, how far down the
critical-move chain it looks and which optional heuristics are switched on.
All AI creation should go through :class:`AIFactory` so players are built
from these records consistently.

Usage:
    from gomoku_ai.ai.factory import AIFactory, get_tier_profile

    # Create AI from a tier
    ai = AIFactory.create_from_tier(Tier.HARD, StoneColor.WHITE)

    # Create AI with explicit type and config
    ai = AIFactory.create(
        ai_type=AIType.MINIMAX,
        color=StoneColor.BLACK,
        config=AIConfig(tier=Tier.EXPERT, think_time=1500),
    )

    # Inspect a tier's configuration record
    profile = get_tier_profile("hard")

    # Register custom AI implementation
    AIFactory.register("custom_ai", CustomAIClass)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ..errors import ConfigurationError
from ..models import (
    AIConfig,
    AIType,
    CriticalLevel,
    GamePhase,
    PhaseMultipliers,
    Tier,
    TierProfile,
)

if TYPE_CHECKING:
    from .base import BaseAI

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Canonical tier profiles
# -----------------------------------------------------------------------------

# NOTE: think_time_ms is the wall-clock search budget per decision for the
# search tiers. It is never used to delay a move after it has been chosen.
_PROFILES: dict[Tier, TierProfile] = {
    Tier.BEGINNER: TierProfile(
        # Random play, but never misses a win on the board
        tier=Tier.BEGINNER,
        ai_type=AIType.RANDOM,
        randomized_first_move=True,
        first_move_window=2,
        critical_level=CriticalLevel.OWN_WIN,
    ),
    Tier.EASY: TierProfile(
        # Wins/blocks, otherwise random contact play
        tier=Tier.EASY,
        ai_type=AIType.TACTICAL,
        randomized_first_move=True,
        first_move_window=2,
        critical_level=CriticalLevel.WIN_BLOCK,
        proximity_radius=3,
    ),
    Tier.NORMAL: TierProfile(
        # Full heuristic scoring with a one-ply gated lookahead
        tier=Tier.NORMAL,
        ai_type=AIType.MINIMAX,
        think_time_ms=1000,
        search_depth=1,
        candidate_breadth=10,
        search_threshold=50.0,
        future_weight=0.1,
        center_radius=4,
        proximity_radius=3,
        opening_book="compact",
        opening_move_limit=6,
        critical_level=CriticalLevel.FOURS,
        proximity_heuristic=True,
        weight_profile_id="gomoku_normal_v1",
        phase_early_limit=10,
        phase_mid_limit=60,
    ),
    Tier.HARD: TierProfile(
        # Forks, territory and open-three blocking; three-ply lookahead
        tier=Tier.HARD,
        ai_type=AIType.MINIMAX,
        think_time_ms=2000,
        search_depth=3,
        candidate_breadth=15,
        search_threshold=100.0,
        future_weight=0.2,
        center_radius=5,
        territory_radius=2,
        proximity_radius=2,
        opening_book="strategic",
        opening_move_limit=6,
        critical_level=CriticalLevel.OPEN_THREES,
        fork_detection=True,
        proximity_heuristic=True,
        weight_profile_id="gomoku_hard_v1",
        phase_early_limit=8,
        phase_mid_limit=55,
    ),
    Tier.EXPERT: TierProfile(
        # Gapped/complex patterns, phase-adaptive weights, endgame efficiency
        tier=Tier.EXPERT,
        ai_type=AIType.MINIMAX,
        think_time_ms=3000,
        search_depth=4,
        candidate_breadth=12,
        breadth_decay=3,
        min_breadth=3,
        search_threshold=500.0,
        future_weight=0.3,
        center_radius=6,
        territory_radius=3,
        inverse_distance_territory=True,
        proximity_radius=2,
        opening_book="strategic",
        opening_move_limit=8,
        critical_level=CriticalLevel.OPEN_THREES,
        fork_detection=True,
        complex_patterns=True,
        proximity_heuristic=True,
        endgame_optimization=True,
        weight_profile_id="gomoku_expert_v1",
        phase_early_limit=8,
        phase_mid_limit=50,
        phase_multipliers=PhaseMultipliers(
            offense={GamePhase.EARLY: 1.0, GamePhase.MID: 1.3, GamePhase.LATE: 1.8},
            defense={GamePhase.EARLY: 0.8, GamePhase.MID: 1.2, GamePhase.LATE: 2.0},
            three={GamePhase.EARLY: 1.2, GamePhase.MID: 1.5, GamePhase.LATE: 2.0},
            two={GamePhase.EARLY: 1.5, GamePhase.MID: 1.0, GamePhase.LATE: 0.5},
        ),
    ),
}

CANONICAL_TIER_PROFILES: Mapping[Tier, TierProfile] = MappingProxyType(_PROFILES)

# Labels used by other front ends for the same tiers
TIER_ALIASES: Mapping[str, Tier] = MappingProxyType({
    "medium": Tier.NORMAL,
    "novice": Tier.BEGINNER,
    "master": Tier.EXPERT,
})


def resolve_tier(tier: Tier | str | int) -> Tier:
    """Resolve a tier enum, name, alias or 1-based level.

    Levels are clamped into the ladder; unknown names raise.

    Raises:
        ConfigurationError: If ``tier`` names no known tier.
    """
    if isinstance(tier, Tier):
        return tier
    if isinstance(tier, int) and not isinstance(tier, bool):
        return Tier.from_level(tier)
    if isinstance(tier, str):
        label = tier.strip().lower()
        if label in TIER_ALIASES:
            return TIER_ALIASES[label]
        try:
            return Tier(label)
        except ValueError:
            pass
    raise ConfigurationError(
        f"Unknown tier: {tier!r}",
        context={"available": ", ".join(t.value for t in Tier)},
    )


def get_tier_profile(tier: Tier | str | int) -> TierProfile:
    """Return the canonical configuration record for ``tier``."""
    return CANONICAL_TIER_PROFILES[resolve_tier(tier)]


def get_all_tiers() -> dict[Tier, TierProfile]:
    return dict(CANONICAL_TIER_PROFILES)


def get_tier_description(tier: Tier | str | int) -> str:
    profile = get_tier_profile(tier)
    if profile.search_depth:
        return (
            f"{profile.tier.value}: {profile.ai_type.value}, depth {profile.search_depth}, "
            f"breadth {profile.candidate_breadth}"
        )
    return f"{profile.tier.value}: {profile.ai_type.value}"


class AIFactory:
    """Centralized factory for creating AI instances.

    This factory supports:
    - Creating AIs from tiers
    - Creating AIs with explicit type and configuration
    - Registering custom AI implementations
    - Lazy loading to avoid circular imports
    """

    # Maps string identifiers to callables that create AI instances
    _custom_registry: dict[str, Callable[..., BaseAI]] = {}

    # Cache for imported AI classes (lazy loading)
    _class_cache: dict[AIType, type[BaseAI]] = {}

    @classmethod
    def register(
        cls,
        identifier: str,
        constructor: Callable[..., BaseAI],
    ) -> None:
        """Register a custom AI implementation.

        Args:
            identifier: Unique string identifier for the AI type
            constructor: Callable that creates AI instances.
                         Should accept (color, config) arguments.
        """
        if identifier in cls._custom_registry:
            logger.warning(f"Overwriting existing custom AI: {identifier}")
        cls._custom_registry[identifier] = constructor
        logger.debug(f"Registered custom AI: {identifier}")

    @classmethod
    def unregister(cls, identifier: str) -> bool:
        """Unregister a custom AI implementation.

        Returns:
            True if the identifier was found and removed, False otherwise
        """
        if identifier in cls._custom_registry:
            del cls._custom_registry[identifier]
            logger.debug(f"Unregistered custom AI: {identifier}")
            return True
        return False

    @classmethod
    def list_registered(cls) -> dict[str, str]:
        """List all registered AI types.

        Returns:
            Dict mapping identifiers to descriptions
        """
        result = {}
        for ai_type in AIType:
            result[ai_type.value] = f"Built-in: {ai_type.name}"
        for identifier, constructor in cls._custom_registry.items():
            doc = getattr(constructor, "__doc__", None) or "Custom AI"
            result[identifier] = f"Custom: {doc.splitlines()[0]}"
        return result

    @classmethod
    def _get_ai_class(cls, ai_type: AIType) -> type[BaseAI]:
        """Get the AI class for a given type, with lazy loading.

        Raises:
            ConfigurationError: If the AI type is not supported
        """
        if ai_type in cls._class_cache:
            return cls._class_cache[ai_type]

        # Lazy imports to avoid circular dependencies
        if ai_type == AIType.RANDOM:
            from .random_ai import RandomAI
            ai_class = RandomAI
        elif ai_type == AIType.TACTICAL:
            from .tactical_ai import TacticalAI
            ai_class = TacticalAI
        elif ai_type == AIType.HEURISTIC:
            from .heuristic_ai import HeuristicAI
            ai_class = HeuristicAI
        elif ai_type == AIType.MINIMAX:
            from .minimax_ai import MinimaxAI
            ai_class = MinimaxAI
        else:
            raise ConfigurationError(f"Unsupported AI type: {ai_type}")

        cls._class_cache[ai_type] = ai_class
        return ai_class

    @classmethod
    def create(
        cls,
        ai_type: AIType,
        color: Any,
        config: AIConfig,
        profile: TierProfile | None = None,
    ) -> BaseAI:
        """Create an AI instance with explicit type and configuration.

        Args:
            ai_type: The type of AI to create
            color: Color the AI plays
            config: AI configuration
            profile: Tier record override (defaults to ``config.tier``'s)

        Returns:
            Configured AI instance

        Raises:
            ConfigurationError: If the AI type is not supported
            InvalidColorError: For scored tiers asked to play the empty state
        """
        ai_class = cls._get_ai_class(ai_type)
        return ai_class(color, config, profile)

    @classmethod
    def create_from_tier(
        cls,
        tier: Tier | str | int,
        color: Any,
        *,
        think_time_override: int | None = None,
        rng_seed: int | None = None,
    ) -> BaseAI:
        """Create an AI instance from a tier.

        This is the recommended way to create AIs for normal gameplay, as it
        uses the canonical tier profiles.

        Args:
            tier: Tier enum, name, alias ("medium") or level 1-5
            color: Color the AI plays
            think_time_override: Search budget in ms (0 disables the deadline)
            rng_seed: Optional RNG seed for reproducibility
        """
        profile = get_tier_profile(tier)
        config = AIConfig(
            tier=profile.tier,
            think_time=think_time_override,
            rng_seed=rng_seed,
        )
        logger.debug(f"Creating {profile.ai_type.value} AI for tier {profile.tier.value}")
        return cls.create(profile.ai_type, color, config, profile)

    @classmethod
    def create_custom(cls, identifier: str, color: Any, config: AIConfig, **kwargs: Any) -> BaseAI:
        """Create an AI from the custom registry.

        Raises:
            ConfigurationError: If ``identifier`` was never registered
        """
        if identifier not in cls._custom_registry:
            raise ConfigurationError(
                f"Unknown custom AI: {identifier}",
                context={"available": ", ".join(cls._custom_registry) or "none"},
            )
        constructor = cls._custom_registry[identifier]
        return constructor(color, config, **kwargs)

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the class cache. Useful for testing."""
        cls._class_cache.clear()
