"""Behavior-weighted opponent hand sampling.

Narrows an archetype's starting hands to the strongest fraction of the
live two-card combinations, ranked by the preflop table, then draws one
uniformly from that prefix. This models overall entry frequency only,
not hand-specific strategic deviations.
"""

from __future__ import annotations

import heapq
import logging
from itertools import combinations

from poker_equity.strategy.behavior_profiles import BehaviorProfile, get_profile
from poker_equity.strategy.preflop_table import preflop_score
from poker_equity.utils.card import Card
from poker_equity.utils.constants import Position
from poker_equity.utils.random_source import RandomSource

logger = logging.getLogger("poker_equity.strategy.range")

POSITION_MULTIPLIERS: dict[Position, float] = {
    Position.EARLY: 0.8,
    Position.MIDDLE: 0.9,
    Position.LATE: 1.1,
    Position.BLINDS: 0.85,
}

# Stacks at or below this depth (in big blinds) play tighter
SHALLOW_STACK_BB = 50
SHALLOW_STACK_MULTIPLIER = 0.8


class OpponentRangeModel:
    """Samples hole cards for an opponent from its archetype's range."""

    @staticmethod
    def adjusted_fraction(
        profile: BehaviorProfile,
        position: Position,
        stack_depth: float,
    ) -> float:
        """Effective fraction of combinations the opponent plays.

        May exceed 1.0 for very loose archetypes, in which case every
        combination is playable.
        """
        position_mult = POSITION_MULTIPLIERS.get(position, 1.0)
        stack_mult = 1.0 if stack_depth > SHALLOW_STACK_BB else SHALLOW_STACK_MULTIPLIER
        return (
            profile.vpip
            * profile.hand_range_multiplier
            * position_mult
            * stack_mult
            / 100
        )

    @staticmethod
    def playable_range(
        deck: list[Card],
        fraction: float,
    ) -> list[tuple[Card, Card]]:
        """Strongest ``fraction`` of the deck's two-card combinations.

        Ties keep deck order, so on a shuffled deck the boundary of the
        range is cut at random.
        """
        combos = list(combinations(deck, 2))
        size = min(len(combos), int(fraction * len(combos)))
        if size <= 0:
            return []
        return heapq.nlargest(size, combos, key=lambda c: preflop_score(c[0], c[1]))

    @staticmethod
    def sample_hand(
        deck: list[Card],
        behavior: str,
        position: Position,
        stack_depth: float,
        rng: RandomSource,
    ) -> tuple[Card, Card]:
        """Pick two hole cards from ``deck`` for an opponent.

        Unknown archetypes and empty ranges fall back to the next two
        undealt cards (the tail of the deck). The deck is not modified;
        the caller removes the returned cards.
        """
        profile = get_profile(behavior)
        if profile is not None:
            fraction = OpponentRangeModel.adjusted_fraction(
                profile, position, stack_depth,
            )
            playable = OpponentRangeModel.playable_range(deck, fraction)
            if playable:
                return playable[rng.randbelow(len(playable))]
            logger.debug(
                "Empty range for %s (fraction=%.4f, deck=%d), dealing from deck",
                behavior, fraction, len(deck),
            )
        return deck[-1], deck[-2]
