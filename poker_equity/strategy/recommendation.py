"""Qualitative action recommendation from a win percentage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

_BASE_THRESHOLDS = (75.0, 55.0, 35.0, 25.0)
_MIN_OPPONENT_MULTIPLIER = 0.7
_PER_OPPONENT_DISCOUNT = 0.05

_STRENGTH_LABELS: list[tuple[float, str]] = [
    (85, "Monster Hand"),
    (70, "Very Strong"),
    (55, "Strong Hand"),
    (40, "Decent Hand"),
    (25, "Marginal"),
]


class RecommendedAction(StrEnum):
    RAISE_CALL = "RAISE/CALL"
    CALL = "CALL"
    CAUTIOUS = "CAUTIOUS"
    CONSIDER_FOLD = "CONSIDER FOLD"
    FOLD = "FOLD"


@dataclass(frozen=True)
class Recommendation:
    """Suggested action with a short explanation."""

    action: RecommendedAction
    description: str
    confidence: str  # "high", "medium-high", "medium", "medium-low"

    def __str__(self) -> str:
        return f"{self.action.value}: {self.description}"


_LADDER: list[tuple[RecommendedAction, str, str]] = [
    (RecommendedAction.RAISE_CALL, "Strong hand - be aggressive", "high"),
    (RecommendedAction.CALL, "Good hand - call or small raise", "medium-high"),
    (RecommendedAction.CAUTIOUS, "Marginal - position dependent", "medium"),
    (RecommendedAction.CONSIDER_FOLD, "Weak hand - likely fold", "medium-low"),
]
_FOLD = (RecommendedAction.FOLD, "Very weak - almost always fold", "high")


def recommend_action(win_pct: float, num_opponents: int) -> Recommendation:
    """Map a win percentage to an action.

    More opponents lower every threshold, since the equal-share baseline
    drops as the table fills up.
    """
    multiplier = max(
        _MIN_OPPONENT_MULTIPLIER, 1 - num_opponents * _PER_OPPONENT_DISCOUNT,
    )
    action, description, confidence = _FOLD
    for threshold, step in zip(_BASE_THRESHOLDS, _LADDER):
        if win_pct >= threshold * multiplier:
            action, description, confidence = step
            break

    if num_opponents > 3:
        description += f" (vs {num_opponents} opponents)"
    if win_pct > 80:
        description += " - Consider value betting"
    elif win_pct < 20:
        description += " - Save your chips"

    return Recommendation(action=action, description=description, confidence=confidence)


def win_strength_label(win_pct: float) -> str:
    """Coarse label for a win percentage."""
    for minimum, label in _STRENGTH_LABELS:
        if win_pct >= minimum:
            return label
    return "Weak Hand"
