"""Statistics and adjustment layer.

Turns raw trial tallies into variance, a confidence interval on the win
rate and a behavior-adjusted win percentage. All adjustments are in
percentage points and additive.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from poker_equity.core.data_structures import (
    AdjustedResult,
    AdjustmentBreakdown,
    ConfidenceInterval,
    Opponent,
    SimulationResult,
)
from poker_equity.core.errors import DegenerateResultError, InvalidInputError
from poker_equity.utils.constants import BOARD_SIZES, Position, Street

logger = logging.getLogger("poker_equity.statistics")

Z_SCORES: dict[float, float] = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}

POSITION_ADJUSTMENTS: dict[Position, float] = {
    Position.EARLY: -2.0,
    Position.MIDDLE: 0.0,
    Position.LATE: 2.5,
    Position.BLINDS: -1.5,
}

SHORT_STACK_BB = 20
DEEP_STACK_BB = 100
SHORT_STACK_ADJUSTMENT = -3.0
DEEP_STACK_ADJUSTMENT = 1.0

# Earlier streets carry more uncertainty, so the pull toward the
# equal-share baseline is stronger there. Keyed by community-card count.
STAGE_MULTIPLIERS: dict[int, float] = {0: 1.0, 3: 0.8, 4: 0.6, 5: 0.4}

BASE_CONFIDENCE = 0.8
MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 1.0


def z_score(confidence_level: float) -> float:
    """Two-sided z value for a supported confidence level."""
    try:
        return Z_SCORES[confidence_level]
    except KeyError:
        raise InvalidInputError(
            f"Unsupported confidence level {confidence_level}; "
            f"expected one of {sorted(Z_SCORES)}"
        ) from None


def calculate_variance(values: Sequence[float]) -> float:
    """Population variance (no Bessel correction)."""
    if not len(values):
        return 0.0
    return float(np.var(np.asarray(values, dtype=float)))


def calculate_confidence_interval(
    win_rate: float,
    sample_size: int,
    confidence_level: float = 0.95,
) -> ConfidenceInterval:
    """Normal-approximation interval on a proportion, clamped to [0, 1]."""
    z = z_score(confidence_level)
    if sample_size <= 0:
        return ConfidenceInterval(0.0, 1.0, 1.0, confidence_level)
    margin = z * math.sqrt(win_rate * (1 - win_rate) / sample_size)
    return ConfidenceInterval(
        lower=max(0.0, win_rate - margin),
        upper=min(1.0, win_rate + margin),
        margin_of_error=margin,
        level=confidence_level,
    )


def behavioral_adjustment(opponents: Sequence[Opponent]) -> float:
    """Sum of per-opponent modifiers; unknown archetypes contribute nothing."""
    total = 0.0
    for opponent in opponents:
        profile = opponent.profile
        if profile is None:
            continue
        total += (profile.aggression - 2.5) * -0.5
        total += (profile.vpip - 25) * -0.02
        total += profile.bluff_freq * 2
        total -= profile.position_awareness * 1.5
    return total


def positional_adjustment(position: Position) -> float:
    return POSITION_ADJUSTMENTS.get(position, 0.0)


def stack_depth_adjustment(stack_depth: float) -> float:
    if stack_depth < SHORT_STACK_BB:
        return SHORT_STACK_ADJUSTMENT
    if stack_depth > DEEP_STACK_BB:
        return DEEP_STACK_ADJUSTMENT
    return 0.0


def game_theory_adjustment(
    win_percentage: float,
    num_opponents: int,
    board_size: int,
) -> float:
    """Deviation from the equal-share baseline, scaled by street."""
    equal_share = 1 / (num_opponents + 1)
    deviation = win_percentage / 100 - equal_share
    return deviation * 10 * STAGE_MULTIPLIERS.get(board_size, 1.0)


def confidence_rating(
    iterations: int,
    standard_deviation: float,
    adjustments: AdjustmentBreakdown,
) -> float:
    """How much to trust the estimate, in [0.1, 1.0]."""
    confidence = BASE_CONFIDENCE
    if iterations >= 10_000:
        confidence += 0.1
    elif iterations < 1_000:
        confidence -= 0.2

    if standard_deviation < 10:
        confidence += 0.1

    magnitude = abs(adjustments.situational)
    if magnitude < 5:
        confidence += 0.1
    elif magnitude > 15:
        confidence -= 0.1

    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))


def _check_base(base: float) -> None:
    if not math.isfinite(base) or not 0.0 <= base <= 100.0:
        raise DegenerateResultError(f"Base win percentage out of range: {base}", base)


def compute_adjustments(
    base_win_percentage: float,
    opponents: Sequence[Opponent],
    board_size: int,
    position: Position = Position.MIDDLE,
    stack_depth: float = 100.0,
) -> tuple[AdjustmentBreakdown, float]:
    """Build the adjustment breakdown and the clamped adjusted percentage.

    Raises:
        DegenerateResultError: If the base is not a finite value in
            [0, 100] or the adjustments do not sum to a finite value.
            A finite adjusted value outside [0, 100] is clamped.
    """
    _check_base(base_win_percentage)
    adjustments = AdjustmentBreakdown(
        base_win_rate=base_win_percentage,
        behavioral=behavioral_adjustment(opponents),
        positional=positional_adjustment(position),
        stack_depth=stack_depth_adjustment(stack_depth),
        game_theory=game_theory_adjustment(
            base_win_percentage, len(opponents), board_size,
        ),
    )
    raw = base_win_percentage + adjustments.total
    if not math.isfinite(raw):
        raise DegenerateResultError(f"Adjusted win percentage is not finite: {raw}", raw)

    adjusted = max(0.0, min(100.0, raw))
    if adjusted != raw:
        logger.debug("Adjusted equity clamped: %.2f -> %.2f", raw, adjusted)
    return adjustments, adjusted


def apply_adjustments(
    simulation: SimulationResult,
    opponents: Sequence[Opponent],
    board_size: int,
    position: Position = Position.MIDDLE,
    stack_depth: float = 100.0,
    hand_description: str = "",
) -> AdjustedResult:
    """Apply behavioral, positional, stack and GTO corrections to a simulation."""
    adjustments, adjusted = compute_adjustments(
        simulation.win_percentage, opponents, board_size, position, stack_depth,
    )
    return AdjustedResult(
        simulation=simulation,
        adjustments=adjustments,
        adjusted_win_percentage=adjusted,
        confidence=confidence_rating(
            simulation.iterations, simulation.standard_deviation, adjustments,
        ),
        num_opponents=len(opponents),
        hand_description=hand_description,
    )


def unadjusted_result(
    simulation: SimulationResult,
    num_opponents: int,
    hand_description: str = "",
) -> AdjustedResult:
    """Wrap a simulation without any corrections (basic calculation)."""
    base = simulation.win_percentage
    _check_base(base)
    adjustments = AdjustmentBreakdown(base_win_rate=base)
    return AdjustedResult(
        simulation=simulation,
        adjustments=adjustments,
        adjusted_win_percentage=base,
        confidence=confidence_rating(
            simulation.iterations, simulation.standard_deviation, adjustments,
        ),
        num_opponents=num_opponents,
        hand_description=hand_description,
        is_basic=True,
    )


def adjust_win_percentage(
    base_win_percentage: float,
    opponents: Sequence[Opponent],
    street: Street = Street.PREFLOP,
) -> float:
    """Adjust an externally computed equity without running a simulation.

    Assumes middle position and 100bb stacks.
    """
    _, adjusted = compute_adjustments(
        base_win_percentage, opponents, BOARD_SIZES[street],
    )
    return adjusted
