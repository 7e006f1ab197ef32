"""Preflop starting-hand strength table (enhanced Chen formula).

Built once at import for all 169 starting-hand shapes and read-only
afterwards. Keys put the higher rank first followed by "s" (suited) or
"o" (offsuit); pairs carry no marker, e.g. "AA", "AKs", "72o".
"""

from __future__ import annotations

from poker_equity.utils.card import Card
from poker_equity.utils.constants import RANK_ORDINALS, Rank

_RANKS: list[Rank] = list(Rank)

# Gap penalties keyed by the number of ranks between the two cards
_GAP_ADJUSTMENT: dict[int, int] = {0: 0, 1: 1, 2: -1, 3: -2, 4: -4}
_MAX_GAP_PENALTY = -5

_PREMIUM_ORDINAL = 10

# (minimum score, label), checked in order
_BANDS: list[tuple[int, str]] = [
    (12, "Premium Hand"),
    (8, "Strong Hand"),
    (6, "Playable Hand"),
    (4, "Marginal Hand"),
]
_WEAK_LABEL = "Weak Hand"


def hand_key(rank1: Rank, rank2: Rank, suited: bool) -> str:
    """Canonical table key, symmetric in card order."""
    high, low = sorted((rank1, rank2), key=lambda r: RANK_ORDINALS[r], reverse=True)
    if high == low:
        return f"{high.value}{low.value}"
    return f"{high.value}{low.value}{'s' if suited else 'o'}"


def chen_score(high: int, low: int, suited: bool) -> int:
    """Enhanced Chen score for two rank ordinals (order-independent)."""
    high, low = max(high, low), min(high, low)
    score = high + 1

    if high == low:
        score = max(5, score * 2)
        if high >= _PREMIUM_ORDINAL:
            score += 5
        return score

    if suited:
        score += 2
    gap = high - low - 1
    score += _GAP_ADJUSTMENT.get(gap, _MAX_GAP_PENALTY)
    if high >= _PREMIUM_ORDINAL:
        score += 1
    return max(0, score)


def _build_table() -> dict[str, int]:
    table: dict[str, int] = {}
    for i, r1 in enumerate(_RANKS):
        for j in range(i + 1):
            r2 = _RANKS[j]
            for suited in (True, False):
                table[hand_key(r1, r2, suited)] = chen_score(i, j, suited)
    return table


PREFLOP_TABLE: dict[str, int] = _build_table()

# Same scores indexed by [high][low][suited] for the sampling hot path
_SCORE_GRID: list[list[tuple[int, int]]] = [
    [(chen_score(i, j, False), chen_score(i, j, True)) for j in range(13)]
    for i in range(13)
]


def preflop_score(card1: Card, card2: Card) -> int:
    """Numeric starting-hand score for two hole cards."""
    return _SCORE_GRID[card1.ordinal][card2.ordinal][card1.suit == card2.suit]


def preflop_label(card1: Card, card2: Card) -> str:
    """Human-readable band for a starting hand."""
    score = preflop_score(card1, card2)
    for minimum, label in _BANDS:
        if score >= minimum:
            return label
    return _WEAK_LABEL
