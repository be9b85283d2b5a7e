"""Heuristic weight profiles for the Gomoku tiers.

All scalar weights used by :class:`HeuristicAI` live here as named,
versioned profiles. Each tier's profile is referenced from its
``TierProfile.weight_profile_id``.

The keys mirror the attribute names on :class:`HeuristicAI`
(``WEIGHT_FIVE``, ``WEIGHT_BLOCK_FOUR``, ...) so an instance can simply
``setattr(self, name, value)`` when applying a profile. Weights are fixed
constants; nothing in the engine tunes them at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

HeuristicWeights = dict[str, float]


HEURISTIC_WEIGHT_KEYS: list[str] = [
    # Offense: runs the candidate creates for the acting color
    "WEIGHT_FIVE",
    "WEIGHT_FOUR",
    "WEIGHT_THREE_OPEN",
    "WEIGHT_THREE",
    "WEIGHT_TWO_OPEN",
    "WEIGHT_TWO",
    # Defense: runs the candidate denies the opponent
    "WEIGHT_BLOCK_WIN",
    "WEIGHT_BLOCK_FOUR",
    "WEIGHT_BLOCK_THREE",
    # Multi-threat patterns
    "WEIGHT_FORK",
    "WEIGHT_BLOCK_FORK",
    "WEIGHT_COMPLEX_FORK",
    "WEIGHT_GAPPED_FOUR",
    "WEIGHT_GAPPED_THREE",
    # Positional
    "WEIGHT_CENTER",
    "WEIGHT_STRATEGIC_POSITION",
    "WEIGHT_TERRITORY",
    "WEIGHT_TERRITORY_OPPONENT",
    "WEIGHT_PROXIMITY_BASE",
    "WEIGHT_PROXIMITY_MAX",
    "WEIGHT_PROXIMITY_OWN_MULTIPLIER",
    "WEIGHT_THREAT_CONTACT",
    "WEIGHT_ENDGAME_EFFICIENCY",
]


# --- Normal -----------------------------------------------------------------
#
# Plain line scoring with a small center pull and contact bonus. No fork or
# territory terms.

BASE_NORMAL_V1_WEIGHTS: HeuristicWeights = {
    "WEIGHT_FIVE": 10000.0,
    "WEIGHT_FOUR": 1000.0,
    "WEIGHT_THREE_OPEN": 150.0,
    "WEIGHT_THREE": 100.0,
    "WEIGHT_TWO_OPEN": 15.0,
    "WEIGHT_TWO": 10.0,
    "WEIGHT_BLOCK_WIN": 5000.0,
    "WEIGHT_BLOCK_FOUR": 800.0,
    "WEIGHT_BLOCK_THREE": 50.0,
    "WEIGHT_FORK": 0.0,
    "WEIGHT_BLOCK_FORK": 0.0,
    "WEIGHT_COMPLEX_FORK": 0.0,
    "WEIGHT_GAPPED_FOUR": 0.0,
    "WEIGHT_GAPPED_THREE": 0.0,
    "WEIGHT_CENTER": 5.0,
    "WEIGHT_STRATEGIC_POSITION": 0.0,
    "WEIGHT_TERRITORY": 0.0,
    "WEIGHT_TERRITORY_OPPONENT": 0.0,
    "WEIGHT_PROXIMITY_BASE": 20.0,
    "WEIGHT_PROXIMITY_MAX": 60.0,
    "WEIGHT_PROXIMITY_OWN_MULTIPLIER": 1.0,
    "WEIGHT_THREAT_CONTACT": 0.0,
    "WEIGHT_ENDGAME_EFFICIENCY": 0.0,
}


# --- Hard -------------------------------------------------------------------
#
# An order of magnitude above Normal, with open/closed splits that matter,
# fork creation/denial and own-stone territory.

BASE_HARD_V1_WEIGHTS: HeuristicWeights = {
    "WEIGHT_FIVE": 100000.0,
    "WEIGHT_FOUR": 10000.0,
    "WEIGHT_THREE_OPEN": 5000.0,
    "WEIGHT_THREE": 1000.0,
    "WEIGHT_TWO_OPEN": 200.0,
    "WEIGHT_TWO": 50.0,
    "WEIGHT_BLOCK_WIN": 50000.0,
    "WEIGHT_BLOCK_FOUR": 8000.0,
    "WEIGHT_BLOCK_THREE": 500.0,
    "WEIGHT_FORK": 15000.0,
    "WEIGHT_BLOCK_FORK": 12000.0,
    "WEIGHT_COMPLEX_FORK": 0.0,
    "WEIGHT_GAPPED_FOUR": 0.0,
    "WEIGHT_GAPPED_THREE": 0.0,
    "WEIGHT_CENTER": 10.0,
    "WEIGHT_STRATEGIC_POSITION": 0.0,
    "WEIGHT_TERRITORY": 5.0,
    "WEIGHT_TERRITORY_OPPONENT": 0.0,
    "WEIGHT_PROXIMITY_BASE": 200.0,
    "WEIGHT_PROXIMITY_MAX": 600.0,
    "WEIGHT_PROXIMITY_OWN_MULTIPLIER": 1.5,
    "WEIGHT_THREAT_CONTACT": 250.0,
    "WEIGHT_ENDGAME_EFFICIENCY": 0.0,
}


# --- Expert -----------------------------------------------------------------
#
# Adds gapped threats, complex forks, strategic points, opponent-aware
# territory and endgame efficiency. Three/two and offense/defense terms are
# further scaled per game phase by the tier's PhaseMultipliers.

BASE_EXPERT_V1_WEIGHTS: HeuristicWeights = {
    "WEIGHT_FIVE": 1000000.0,
    "WEIGHT_FOUR": 100000.0,
    "WEIGHT_THREE_OPEN": 50000.0,
    "WEIGHT_THREE": 10000.0,
    "WEIGHT_TWO_OPEN": 2000.0,
    "WEIGHT_TWO": 500.0,
    "WEIGHT_BLOCK_WIN": 500000.0,
    "WEIGHT_BLOCK_FOUR": 80000.0,
    "WEIGHT_BLOCK_THREE": 5000.0,
    "WEIGHT_FORK": 150000.0,
    "WEIGHT_BLOCK_FORK": 120000.0,
    "WEIGHT_COMPLEX_FORK": 200000.0,
    "WEIGHT_GAPPED_FOUR": 90000.0,
    "WEIGHT_GAPPED_THREE": 3000.0,
    "WEIGHT_CENTER": 20.0,
    "WEIGHT_STRATEGIC_POSITION": 100.0,
    "WEIGHT_TERRITORY": 10.0,
    "WEIGHT_TERRITORY_OPPONENT": 300.0,
    "WEIGHT_PROXIMITY_BASE": 400.0,
    "WEIGHT_PROXIMITY_MAX": 1500.0,
    "WEIGHT_PROXIMITY_OWN_MULTIPLIER": 1.5,
    "WEIGHT_THREAT_CONTACT": 500.0,
    "WEIGHT_ENDGAME_EFFICIENCY": 1000.0,
}


# Read-only views over private copies of the BASE_* dicts.
HEURISTIC_WEIGHT_PROFILES: Mapping[str, Mapping[str, float]] = MappingProxyType({
    profile_id: MappingProxyType(dict(weights))
    for profile_id, weights in (
        ("gomoku_normal_v1", BASE_NORMAL_V1_WEIGHTS),
        ("gomoku_hard_v1", BASE_HARD_V1_WEIGHTS),
        ("gomoku_expert_v1", BASE_EXPERT_V1_WEIGHTS),
    )
})


def get_weights(profile_id: str) -> HeuristicWeights:
    """Return a mutable copy of the weight profile for ``profile_id``.

    A missing id means "no override": callers keep the defaults baked into
    :class:`HeuristicAI`. This helper does not raise for unknown ids.
    """

    return dict(HEURISTIC_WEIGHT_PROFILES.get(profile_id, {}))
