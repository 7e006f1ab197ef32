"""Texas Hold'em hand evaluation engine.

Hands are classified into one of ten categories with an ordinal kicker
sequence (most significant first). Two results with equal category and
equal kickers are an exact tie.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from functools import total_ordering
from itertools import combinations, zip_longest

from poker_equity.utils.card import Card
from poker_equity.utils.constants import HAND_DESCRIPTIONS, HandRanking

# 5-of-n index tuples, built once. Only n = 5..7 occur in play.
_COMBO_INDICES: dict[int, tuple[tuple[int, ...], ...]] = {
    n: tuple(combinations(range(n), 5)) for n in (5, 6, 7)
}

_WHEEL = [12, 3, 2, 1, 0]
_ACE = 12

INCOMPLETE_DESCRIPTION = "Incomplete Hand"


@total_ordering
@dataclass(frozen=True)
class HandResult:
    """Result of evaluating a poker hand."""

    ranking: HandRanking
    kickers: tuple[int, ...]
    description: str
    best_cards: tuple[Card, ...] = field(default=(), compare=False)

    @property
    def is_complete(self) -> bool:
        """False for the sentinel returned when fewer than 5 cards are known."""
        return self.description != INCOMPLETE_DESCRIPTION

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HandResult):
            return NotImplemented
        return compare_hands(self, other) < 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandResult):
            return NotImplemented
        return compare_hands(self, other) == 0

    def __hash__(self) -> int:
        return hash((self.ranking, self.kickers))


INCOMPLETE_HAND = HandResult(
    ranking=HandRanking.HIGH_CARD,
    kickers=(),
    description=INCOMPLETE_DESCRIPTION,
)


def compare_hands(a: HandResult, b: HandResult) -> int:
    """Total order over evaluated hands.

    Returns 1 if ``a`` wins, -1 if ``b`` wins and 0 on an exact tie. A
    missing kicker counts as -1, below the lowest real ordinal.
    """
    if a.ranking != b.ranking:
        return 1 if a.ranking > b.ranking else -1
    for ka, kb in zip_longest(a.kickers, b.kickers, fillvalue=-1):
        if ka != kb:
            return 1 if ka > kb else -1
    return 0


class HandEvaluator:
    """Evaluates poker hands and determines the best 5-card combination."""

    @staticmethod
    def evaluate_hand(cards: list[Card]) -> HandResult:
        """Evaluate a hand.

        Exactly 5 cards are classified directly, more than 5 go through
        the best-of-n search. Fewer than 5 cards yield the
        ``INCOMPLETE_HAND`` sentinel rather than an error, since partial
        boards are normal mid-hand.
        """
        if len(cards) < 5:
            return INCOMPLETE_HAND
        if len(cards) > 5:
            return HandEvaluator.evaluate_best_hand(cards)
        return HandEvaluator._evaluate_five(cards)

    @staticmethod
    def evaluate_best_hand(cards: list[Card]) -> HandResult:
        """Evaluate every 5-card subset and return the strongest.

        Exhaustive: C(7,5) = 21 evaluations for a full board.
        """
        n = len(cards)
        if n < 5:
            return INCOMPLETE_HAND
        indices = _COMBO_INDICES.get(n) or tuple(combinations(range(n), 5))

        best: HandResult | None = None
        for idx in indices:
            result = HandEvaluator._evaluate_five([cards[i] for i in idx])
            if best is None or compare_hands(result, best) > 0:
                best = result
        assert best is not None
        return best

    @staticmethod
    def _evaluate_five(cards: list[Card]) -> HandResult:
        """Evaluate exactly 5 cards."""
        sorted_cards = sorted(cards, key=lambda c: c.ordinal, reverse=True)
        ords = [c.ordinal for c in sorted_cards]
        is_flush = len({c.suit for c in sorted_cards}) == 1
        straight_high = HandEvaluator._straight_high(ords)

        rank_counts = Counter(ords)
        counts = sorted(rank_counts.values(), reverse=True)
        pair_count = sum(1 for c in rank_counts.values() if c == 2)
        # Defining ranks first (bigger groups, then higher rank)
        grouped = [
            r for r, _ in sorted(
                rank_counts.items(), key=lambda rc: (rc[1], rc[0]), reverse=True,
            )
        ]

        def result(ranking: HandRanking, kickers: list[int]) -> HandResult:
            return HandResult(
                ranking=ranking,
                kickers=tuple(kickers),
                description=HAND_DESCRIPTIONS[ranking],
                best_cards=tuple(sorted_cards),
            )

        if is_flush and straight_high is not None:
            if straight_high == _ACE:
                return result(HandRanking.ROYAL_FLUSH, [])
            return result(HandRanking.STRAIGHT_FLUSH, [straight_high])

        if counts[0] == 4:
            return result(HandRanking.FOUR_OF_A_KIND, grouped[:2])

        if counts[0] == 3 and counts[1] == 2:
            return result(HandRanking.FULL_HOUSE, grouped[:2])

        if is_flush:
            return result(HandRanking.FLUSH, ords[:5])

        if straight_high is not None:
            return result(HandRanking.STRAIGHT, [straight_high])

        if counts[0] == 3:
            return result(HandRanking.THREE_OF_A_KIND, grouped[:3])

        if pair_count == 2:
            return result(HandRanking.TWO_PAIR, grouped[:3])

        if pair_count == 1:
            return result(HandRanking.ONE_PAIR, grouped[:4])

        return result(HandRanking.HIGH_CARD, ords[:5])

    @staticmethod
    def _straight_high(ords: list[int]) -> int | None:
        """Return the high ordinal of a straight, or None.

        The wheel (A-2-3-4-5) reports 3, its five.
        """
        values = sorted(set(ords), reverse=True)
        if len(values) != 5:
            return None
        if values[0] - values[4] == 4:
            return values[0]
        if values == _WHEEL:
            return 3
        return None


def hand_strength_score(result: HandResult, card_count: int) -> float:
    """Scalar strength used for variance tracking.

    category * 10 plus decimally weighted kickers, scaled by 1.1 when
    the hand was taken from a full 7-card set.
    """
    strength = float(result.ranking * 10)
    for i, kicker in enumerate(result.kickers):
        strength += kicker / 10 ** (i + 2)
    if card_count == 7:
        strength *= 1.1
    return strength


def evaluate_best_hand(cards: list[Card]) -> HandResult:
    """Module-level shortcut for ``HandEvaluator.evaluate_best_hand``."""
    return HandEvaluator.evaluate_best_hand(cards)
