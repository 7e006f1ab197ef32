"""Draw detection and outs estimation for incomplete boards."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import StrEnum

from poker_equity.utils.card import Card

_ACE = 12
_LOW_ACE = -1
_MAX_OUTS = 47

FLUSH_DRAW_OUTS = 9
OPEN_ENDED_OUTS = 8
GUTSHOT_OUTS = 4
OUTS_PER_OVERCARD = 3


class StraightDraw(StrEnum):
    NONE = "none"
    GUTSHOT = "gutshot"
    OPEN_ENDED = "open_ended"


@dataclass(frozen=True)
class DrawAnalysis:
    """Draws available to the player on an incomplete board."""

    flush_draw: bool = False
    straight_draw: StraightDraw = StraightDraw.NONE
    backdoor_flush: bool = False
    backdoor_straight: bool = False
    overcards: int = 0
    outs: int = 0

    @property
    def has_draw(self) -> bool:
        return self.flush_draw or self.straight_draw != StraightDraw.NONE


def _with_low_ace(ranks: set[int]) -> set[int]:
    return ranks | {_LOW_ACE} if _ACE in ranks else ranks


def _has_straight(ranks: set[int]) -> bool:
    ext = _with_low_ace(ranks)
    return any(
        all(r in ext for r in range(low, low + 5))
        for low in range(_LOW_ACE, 9)
    )


def _straight_draw(ranks: set[int]) -> StraightDraw:
    if _has_straight(ranks):
        return StraightDraw.NONE
    completing = [r for r in range(13) if r not in ranks and _has_straight(ranks | {r})]
    if len(completing) >= 2:
        return StraightDraw.OPEN_ENDED
    if len(completing) == 1:
        return StraightDraw.GUTSHOT
    return StraightDraw.NONE


def _backdoor_straight(ranks: set[int], hole_ranks: set[int]) -> bool:
    ext = _with_low_ace(ranks)
    hole_ext = _with_low_ace(hole_ranks)
    for low in range(_LOW_ACE, 9):
        window = set(range(low, low + 5))
        if len(window & ext) == 3 and window & hole_ext:
            return True
    return False


def count_outs(
    flush_draw: bool,
    straight_draw: StraightDraw,
    overcards: int,
) -> int:
    """Rough count of cards that improve the hand."""
    outs = 0
    if flush_draw:
        outs += FLUSH_DRAW_OUTS
    if straight_draw == StraightDraw.OPEN_ENDED:
        outs += OPEN_ENDED_OUTS
    elif straight_draw == StraightDraw.GUTSHOT:
        outs += GUTSHOT_OUTS
    outs += overcards * OUTS_PER_OVERCARD
    if flush_draw and straight_draw != StraightDraw.NONE:
        outs -= 1  # straight-flush card counted twice
    return min(outs, _MAX_OUTS)


def analyze_draws(player_hand: list[Card], community: list[Card]) -> DrawAnalysis:
    """Detect flush/straight draws, backdoors and overcards.

    Args:
        player_hand: The player's two hole cards.
        community: Known community cards (0-4).

    Returns:
        DrawAnalysis with an estimated outs count.
    """
    cards = list(player_hand) + list(community)
    hole_suits = {c.suit for c in player_hand}
    suit_counts = Counter(c.suit for c in cards)
    made_flush = any(n >= 5 for n in suit_counts.values())

    flush_draw = not made_flush and any(
        n == 4 and suit in hole_suits for suit, n in suit_counts.items()
    )

    ranks = {c.ordinal for c in cards}
    hole_ranks = {c.ordinal for c in player_hand}
    straight_draw = _straight_draw(ranks)

    on_flop = len(community) == 3
    backdoor_flush = on_flop and not flush_draw and not made_flush and any(
        n == 3 and suit in hole_suits for suit, n in suit_counts.items()
    )
    backdoor_straight = (
        on_flop
        and straight_draw == StraightDraw.NONE
        and not _has_straight(ranks)
        and _backdoor_straight(ranks, hole_ranks)
    )

    overcards = 0
    if community:
        top = max(c.ordinal for c in community)
        overcards = sum(1 for c in player_hand if c.ordinal > top)

    return DrawAnalysis(
        flush_draw=flush_draw,
        straight_draw=straight_draw,
        backdoor_flush=backdoor_flush,
        backdoor_straight=backdoor_straight,
        overcards=overcards,
        outs=count_outs(flush_draw, straight_draw, overcards),
    )
