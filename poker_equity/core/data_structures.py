"""Core data structures for the equity engine.

Opponent: A seat at the table, described by its behavior archetype.
SimulationOptions: Per-request knobs for the Monte Carlo run.
SimulationResult: Raw trial tallies plus derived statistics.
AdjustmentBreakdown: The four additive corrections to the raw equity.
AdjustedResult: Final answer handed back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from poker_equity.core.draw_analysis import DrawAnalysis
from poker_equity.strategy.behavior_profiles import BehaviorProfile, get_profile
from poker_equity.strategy.recommendation import (
    Recommendation,
    recommend_action,
    win_strength_label,
)
from poker_equity.utils.card import Card
from poker_equity.utils.constants import Position


@dataclass(frozen=True)
class Opponent:
    """An opponent seat.

    Attributes:
        behavior: Archetype name, e.g. "tight-aggressive". Unknown names
                  are dealt unbiased random cards.
        hole_cards: Known hole cards, if any. When set they are used in
                    every trial instead of sampling from the range.
    """

    behavior: str
    hole_cards: tuple[Card, Card] | None = None

    @property
    def profile(self) -> BehaviorProfile | None:
        return get_profile(self.behavior)


@dataclass(frozen=True)
class SimulationOptions:
    """Options for a single equity request."""

    iterations: int | None = None  # None = scale with table size
    position: Position = Position.MIDDLE
    stack_depth: float = 100.0  # big blinds
    include_draws: bool = True
    calculate_variance: bool = True
    confidence_interval: bool = True
    confidence_level: float = 0.95
    timeout_seconds: float | None = None
    workers: int = 1


@dataclass(frozen=True)
class ConfidenceInterval:
    """Normal-approximation interval on the win rate, in [0, 1]."""

    lower: float
    upper: float
    margin_of_error: float
    level: float = 0.95

    def contains(self, rate: float) -> bool:
        return self.lower <= rate <= self.upper


@dataclass
class SimulationResult:
    """Aggregated outcome of the Monte Carlo trials."""

    win_count: int
    tie_count: int
    loss_count: int
    iterations: int
    hand_strengths: list[float] = field(default_factory=list, repr=False)
    variance: float = 0.0
    standard_deviation: float = 0.0
    confidence_interval: ConfidenceInterval | None = None
    draw_analysis: DrawAnalysis | None = None
    timed_out: bool = False

    @property
    def win_rate(self) -> float:
        """Ties count as half a win. Range [0, 1]."""
        if not self.iterations:
            return 0.0
        return (self.win_count + self.tie_count * 0.5) / self.iterations

    @property
    def win_percentage(self) -> float:
        return self.win_rate * 100

    @property
    def tie_percentage(self) -> float:
        return (self.tie_count / self.iterations) * 100 if self.iterations else 0.0

    def __str__(self) -> str:
        return (
            f"Equity: {self.win_percentage:.1f}% "
            f"(W: {self.win_count}, T: {self.tie_count}, L: {self.loss_count}, "
            f"sims: {self.iterations})"
        )


@dataclass(frozen=True)
class AdjustmentBreakdown:
    """Additive corrections, in percentage points."""

    base_win_rate: float
    behavioral: float = 0.0
    positional: float = 0.0
    stack_depth: float = 0.0
    game_theory: float = 0.0

    @property
    def situational(self) -> float:
        """Opponent, seat and stack corrections (excludes the GTO term)."""
        return self.behavioral + self.positional + self.stack_depth

    @property
    def total(self) -> float:
        return self.situational + self.game_theory


@dataclass
class AdjustedResult:
    """Final, behavior-adjusted equity estimate.

    Attributes:
        simulation: The raw simulation the estimate is built on.
        adjustments: Breakdown of the corrections applied.
        adjusted_win_percentage: Clamped to [0, 100].
        confidence: Rating of the estimate, clamped to [0.1, 1.0].
        num_opponents: Table size used for the recommendation.
        hand_description: Current made hand, or preflop band before the flop.
        is_basic: True when produced by the reduced-fidelity fallback.
    """

    simulation: SimulationResult
    adjustments: AdjustmentBreakdown
    adjusted_win_percentage: float
    confidence: float
    num_opponents: int = 1
    hand_description: str = ""
    is_basic: bool = False

    @property
    def win_percentage(self) -> float:
        """Unadjusted simulation equity."""
        return self.simulation.win_percentage

    @property
    def iterations(self) -> int:
        return self.simulation.iterations

    @property
    def variance(self) -> float:
        return self.simulation.variance

    @property
    def standard_deviation(self) -> float:
        return self.simulation.standard_deviation

    @property
    def confidence_interval(self) -> ConfidenceInterval | None:
        return self.simulation.confidence_interval

    @property
    def draw_analysis(self) -> DrawAnalysis | None:
        return self.simulation.draw_analysis

    @property
    def recommendation(self) -> Recommendation:
        return recommend_action(self.adjusted_win_percentage, self.num_opponents)

    @property
    def strength_label(self) -> str:
        return win_strength_label(self.adjusted_win_percentage)

    def __str__(self) -> str:
        return (
            f"Adjusted equity: {self.adjusted_win_percentage:.1f}% "
            f"(base {self.win_percentage:.1f}%, "
            f"confidence {self.confidence:.0%}, sims: {self.iterations})"
        )
