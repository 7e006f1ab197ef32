"""Tests for the statistics and adjustment layer."""

import math

import pytest

from poker_equity.core import statistics
from poker_equity.core.data_structures import (
    AdjustmentBreakdown,
    Opponent,
    SimulationResult,
)
from poker_equity.core.errors import DegenerateResultError, InvalidInputError
from poker_equity.core.statistics import (
    adjust_win_percentage,
    apply_adjustments,
    behavioral_adjustment,
    calculate_confidence_interval,
    calculate_variance,
    compute_adjustments,
    confidence_rating,
    game_theory_adjustment,
    positional_adjustment,
    stack_depth_adjustment,
    unadjusted_result,
    z_score,
)
from poker_equity.strategy.behavior_profiles import BehaviorType
from poker_equity.utils.constants import Position, Street

TAG = Opponent("tight-aggressive")


def _simulation(wins: int, ties: int, losses: int) -> SimulationResult:
    return SimulationResult(
        win_count=wins, tie_count=ties, loss_count=losses,
        iterations=wins + ties + losses,
    )


class TestVarianceAndInterval:
    def test_population_variance(self) -> None:
        assert calculate_variance([1.0, 2.0, 3.0, 4.0]) == pytest.approx(1.25)

    def test_variance_of_empty(self) -> None:
        assert calculate_variance([]) == 0.0

    def test_z_scores(self) -> None:
        assert z_score(0.90) == 1.645
        assert z_score(0.95) == 1.96
        assert z_score(0.99) == 2.576

    def test_unsupported_level(self) -> None:
        with pytest.raises(InvalidInputError):
            z_score(0.8)

    def test_interval_contains_rate(self) -> None:
        ci = calculate_confidence_interval(0.5, 100)
        assert ci.margin_of_error == pytest.approx(1.96 * math.sqrt(0.25 / 100))
        assert ci.contains(0.5)
        assert ci.lower == pytest.approx(0.5 - ci.margin_of_error)

    def test_interval_narrows_with_samples(self) -> None:
        small = calculate_confidence_interval(0.4, 100)
        large = calculate_confidence_interval(0.4, 400)
        assert large.margin_of_error == pytest.approx(small.margin_of_error / 2)

    def test_wider_level_wider_interval(self) -> None:
        assert (
            calculate_confidence_interval(0.3, 500, 0.99).margin_of_error
            > calculate_confidence_interval(0.3, 500, 0.90).margin_of_error
        )

    def test_interval_clamped(self) -> None:
        ci = calculate_confidence_interval(0.99, 10)
        assert ci.upper == 1.0
        assert 0.0 <= ci.lower < 0.99

    def test_degenerate_rate_has_zero_margin(self) -> None:
        ci = calculate_confidence_interval(0.0, 1000)
        assert ci.margin_of_error == 0.0
        assert ci.lower == ci.upper == 0.0


class TestAdjustments:
    def test_behavioral_tight_aggressive(self) -> None:
        # aggression -0.5, vpip +0.1, bluff +0.2, awareness -1.35
        assert behavioral_adjustment([TAG]) == pytest.approx(-1.55)

    def test_behavioral_sums_opponents(self) -> None:
        two = behavioral_adjustment([TAG, TAG])
        assert two == pytest.approx(2 * behavioral_adjustment([TAG]))

    def test_unknown_behavior_contributes_nothing(self) -> None:
        assert behavioral_adjustment([Opponent("shark")]) == 0.0
        assert behavioral_adjustment([TAG, Opponent("shark")]) == behavioral_adjustment([TAG])

    @pytest.mark.parametrize("position,expected", [
        (Position.EARLY, -2.0),
        (Position.MIDDLE, 0.0),
        (Position.LATE, 2.5),
        (Position.BLINDS, -1.5),
    ])
    def test_positional(self, position: Position, expected: float) -> None:
        assert positional_adjustment(position) == expected

    @pytest.mark.parametrize("stack,expected", [
        (5, -3.0), (19.9, -3.0), (20, 0.0), (100, 0.0), (100.5, 1.0), (300, 1.0),
    ])
    def test_stack_depth(self, stack: float, expected: float) -> None:
        assert stack_depth_adjustment(stack) == expected

    def test_game_theory_equal_share_is_neutral(self) -> None:
        assert game_theory_adjustment(50.0, 1, 0) == 0.0
        assert game_theory_adjustment(25.0, 3, 5) == pytest.approx(0.0)

    def test_game_theory_damped_on_later_streets(self) -> None:
        assert game_theory_adjustment(80.0, 1, 0) == pytest.approx(3.0)
        assert game_theory_adjustment(80.0, 1, 3) == pytest.approx(2.4)
        assert game_theory_adjustment(80.0, 1, 4) == pytest.approx(1.8)
        assert game_theory_adjustment(80.0, 1, 5) == pytest.approx(1.2)

    def test_breakdown_total(self) -> None:
        breakdown = AdjustmentBreakdown(
            base_win_rate=50, behavioral=-1, positional=2, stack_depth=-3, game_theory=4,
        )
        assert breakdown.situational == -2
        assert breakdown.total == 2


class TestConfidenceRating:
    def test_maximum(self) -> None:
        rating = confidence_rating(10_000, 5.0, AdjustmentBreakdown(base_win_rate=50))
        assert rating == 1.0

    def test_penalties(self) -> None:
        adjustments = AdjustmentBreakdown(base_win_rate=50, behavioral=-20)
        assert confidence_rating(500, 20.0, adjustments) == pytest.approx(0.5)

    def test_game_theory_term_ignored(self) -> None:
        small = AdjustmentBreakdown(base_win_rate=50, game_theory=0.0)
        large = AdjustmentBreakdown(base_win_rate=50, game_theory=30.0)
        assert confidence_rating(2_000, 12.0, small) == confidence_rating(2_000, 12.0, large)


class TestApplyAdjustments:
    def test_example(self) -> None:
        result = apply_adjustments(_simulation(60, 0, 40), [TAG], board_size=0)
        assert result.win_percentage == pytest.approx(60.0)
        assert result.adjustments.behavioral == pytest.approx(-1.55)
        assert result.adjustments.game_theory == pytest.approx(1.0)
        assert result.adjusted_win_percentage == pytest.approx(59.45)
        assert result.confidence == pytest.approx(0.8)
        assert result.num_opponents == 1
        assert not result.is_basic

    def test_ties_count_half(self) -> None:
        result = apply_adjustments(_simulation(0, 100, 0), [TAG], board_size=5)
        assert result.win_percentage == pytest.approx(50.0)

    def test_clamped_to_percentage_range(self) -> None:
        for behavior in BehaviorType:
            for count in (1, 3, 9):
                opponents = [Opponent(behavior.value)] * count
                for position in Position:
                    for stack in (10, 60, 150):
                        for wins in (0, 50, 100):
                            result = apply_adjustments(
                                _simulation(wins, 0, 100 - wins), opponents,
                                board_size=0, position=position, stack_depth=stack,
                            )
                            assert 0.0 <= result.adjusted_win_percentage <= 100.0
                            assert 0.1 <= result.confidence <= 1.0

    def test_unadjusted_result(self) -> None:
        result = unadjusted_result(_simulation(30, 10, 60), 2, "One Pair")
        assert result.is_basic
        assert result.adjusted_win_percentage == pytest.approx(35.0)
        assert result.adjustments.total == 0.0
        assert result.hand_description == "One Pair"


class TestDegenerateResults:
    def test_base_out_of_range(self) -> None:
        with pytest.raises(DegenerateResultError) as exc_info:
            compute_adjustments(120.0, [TAG], 0)
        assert exc_info.value.value == 120.0

    def test_base_not_finite(self) -> None:
        with pytest.raises(DegenerateResultError):
            compute_adjustments(float("nan"), [TAG], 0)

    def test_adjustment_not_finite(self, monkeypatch) -> None:
        monkeypatch.setattr(statistics, "behavioral_adjustment", lambda opponents: float("inf"))
        with pytest.raises(DegenerateResultError):
            compute_adjustments(50.0, [TAG], 0)

    def test_large_finite_adjustment_is_clamped(self, monkeypatch) -> None:
        monkeypatch.setattr(statistics, "behavioral_adjustment", lambda opponents: -500.0)
        _, adjusted = compute_adjustments(50.0, [TAG], 0)
        assert adjusted == 0.0


class TestAdjustWinPercentage:
    def test_preflop(self) -> None:
        assert adjust_win_percentage(50.0, [TAG]) == pytest.approx(48.45)

    def test_river(self) -> None:
        assert adjust_win_percentage(80.0, [TAG], Street.RIVER) == pytest.approx(79.65)

    def test_rejects_bad_base(self) -> None:
        with pytest.raises(DegenerateResultError):
            adjust_win_percentage(-1.0, [TAG])
