"""Opponent behavior archetypes.

Ten fixed profiles describing how a player type enters pots and plays
after the flop. Frequencies for VPIP/PFR are percentages; the others are
fractions in [0, 1]. The table is static data, never mutated at runtime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger("poker_equity.strategy.behavior")


class BehaviorType(StrEnum):
    TIGHT_AGGRESSIVE = "tight-aggressive"
    LOOSE_AGGRESSIVE = "loose-aggressive"
    TIGHT_PASSIVE = "tight-passive"
    LOOSE_PASSIVE = "loose-passive"
    MANIAC = "maniac"
    NIT = "nit"
    CALLING_STATION = "calling-station"
    ROCK = "rock"
    SLOW_ROLLER = "slow-roller"
    CHATTY_DISTRACTED = "chatty-distracted"


@dataclass(frozen=True)
class BehaviorProfile:
    """Statistical profile of an opponent archetype."""

    vpip: float  # % of hands voluntarily played
    pfr: float  # % of hands raised preflop
    aggression: float  # (bets + raises) / calls
    bluff_freq: float
    cbet: float
    fold_to_cbet: float
    three_bet: float
    fold_to_three_bet: float
    hand_range_multiplier: float  # widens (>1) or narrows (<1) the range
    position_awareness: float
    stack_sensitivity: float


_PROFILES: dict[BehaviorType, BehaviorProfile] = {
    BehaviorType.TIGHT_AGGRESSIVE: BehaviorProfile(
        vpip=20, pfr=16, aggression=3.5, bluff_freq=0.1,
        cbet=0.75, fold_to_cbet=0.45, three_bet=0.08, fold_to_three_bet=0.65,
        hand_range_multiplier=0.8, position_awareness=0.9, stack_sensitivity=0.8,
    ),
    BehaviorType.LOOSE_AGGRESSIVE: BehaviorProfile(
        vpip=35, pfr=25, aggression=4.0, bluff_freq=0.2,
        cbet=0.85, fold_to_cbet=0.35, three_bet=0.15, fold_to_three_bet=0.45,
        hand_range_multiplier=1.4, position_awareness=0.7, stack_sensitivity=0.6,
    ),
    BehaviorType.TIGHT_PASSIVE: BehaviorProfile(
        vpip=15, pfr=8, aggression=1.5, bluff_freq=0.05,
        cbet=0.45, fold_to_cbet=0.65, three_bet=0.03, fold_to_three_bet=0.85,
        hand_range_multiplier=0.6, position_awareness=0.5, stack_sensitivity=0.9,
    ),
    BehaviorType.LOOSE_PASSIVE: BehaviorProfile(
        vpip=45, pfr=12, aggression=1.2, bluff_freq=0.08,
        cbet=0.35, fold_to_cbet=0.25, three_bet=0.04, fold_to_three_bet=0.75,
        hand_range_multiplier=1.8, position_awareness=0.3, stack_sensitivity=0.4,
    ),
    BehaviorType.MANIAC: BehaviorProfile(
        vpip=60, pfr=45, aggression=6.0, bluff_freq=0.35,
        cbet=0.95, fold_to_cbet=0.15, three_bet=0.25, fold_to_three_bet=0.25,
        hand_range_multiplier=2.5, position_awareness=0.4, stack_sensitivity=0.3,
    ),
    BehaviorType.NIT: BehaviorProfile(
        vpip=12, pfr=10, aggression=2.0, bluff_freq=0.03,
        cbet=0.55, fold_to_cbet=0.75, three_bet=0.02, fold_to_three_bet=0.95,
        hand_range_multiplier=0.4, position_awareness=0.6, stack_sensitivity=0.95,
    ),
    BehaviorType.CALLING_STATION: BehaviorProfile(
        vpip=50, pfr=5, aggression=0.8, bluff_freq=0.02,
        cbet=0.25, fold_to_cbet=0.15, three_bet=0.01, fold_to_three_bet=0.55,
        hand_range_multiplier=2.0, position_awareness=0.2, stack_sensitivity=0.2,
    ),
    BehaviorType.ROCK: BehaviorProfile(
        vpip=8, pfr=6, aggression=2.5, bluff_freq=0.01,
        cbet=0.65, fold_to_cbet=0.85, three_bet=0.015, fold_to_three_bet=0.98,
        hand_range_multiplier=0.3, position_awareness=0.7, stack_sensitivity=0.98,
    ),
    BehaviorType.SLOW_ROLLER: BehaviorProfile(
        vpip=25, pfr=18, aggression=2.8, bluff_freq=0.12,
        cbet=0.65, fold_to_cbet=0.55, three_bet=0.06, fold_to_three_bet=0.7,
        hand_range_multiplier=1.0, position_awareness=0.8, stack_sensitivity=0.75,
    ),
    BehaviorType.CHATTY_DISTRACTED: BehaviorProfile(
        vpip=30, pfr=15, aggression=2.2, bluff_freq=0.15,
        cbet=0.5, fold_to_cbet=0.4, three_bet=0.05, fold_to_three_bet=0.6,
        hand_range_multiplier=1.2, position_awareness=0.4, stack_sensitivity=0.5,
    ),
}

BEHAVIOR_PROFILES: Mapping[BehaviorType, BehaviorProfile] = MappingProxyType(_PROFILES)


def get_profile(name: str | BehaviorType) -> BehaviorProfile | None:
    """Look up an archetype by name, or None if it is not recognized."""
    try:
        return BEHAVIOR_PROFILES[BehaviorType(name)]
    except ValueError:
        logger.debug("Unrecognized behavior: %r", name)
        return None
