"""Tests for the top-level equity engine."""

import logging
from unittest.mock import patch

import pytest

from poker_equity.calculator import (
    DegenerateResultError,
    EngineConfig,
    EquityEngine,
    InvalidInputError,
    Opponent,
    SimulationOptions,
    compare_hands,
    evaluate_best_hand,
    parse_cards,
    preflop_strength,
)
from poker_equity.calculator.engine import DEFAULT_OPPONENT, describe_hand
from poker_equity.strategy.recommendation import RecommendedAction
from poker_equity.utils.constants import Position
from poker_equity.utils.random_source import PseudoRandomSource


def _engine(seed: int = 42, **config) -> EquityEngine:
    return EquityEngine(
        config=EngineConfig(base_iterations=200, basic_iterations=100, **config),
        rng=PseudoRandomSource(seed),
    )


class TestCalculate:
    def test_full_pipeline(self) -> None:
        result = _engine().calculate(
            parse_cards("Ah Kh"),
            parse_cards("Qh Jh 2c"),
            [Opponent("tight-aggressive"), Opponent("maniac")],
        )
        assert 0.0 <= result.win_percentage <= 100.0
        assert 0.0 <= result.adjusted_win_percentage <= 100.0
        assert 0.1 <= result.confidence <= 1.0
        assert result.num_opponents == 2
        assert result.hand_description == "High Card"
        assert result.draw_analysis.flush_draw
        assert result.confidence_interval is not None
        assert not result.is_basic

    def test_iterations_scale_with_config(self) -> None:
        result = _engine().calculate(
            parse_cards("Ah Kh"), [], [Opponent("nit")] * 5,
        )
        assert result.iterations == 400

    def test_explicit_iterations(self) -> None:
        result = _engine().calculate(
            parse_cards("Ah Kh"), [], [Opponent("nit")],
            SimulationOptions(iterations=50),
        )
        assert result.iterations == 50

    def test_deterministic(self) -> None:
        args = (parse_cards("Ts Td"), parse_cards("9c 5h 2s"), ["loose-passive"])
        assert _engine(seed=5).calculate(*args) == _engine(seed=5).calculate(*args)

    def test_config_seed_reproducible(self) -> None:
        engine = EquityEngine(config=EngineConfig(base_iterations=150, seed=9))
        a = engine.calculate(parse_cards("7s 7d"), [], ["rock"])
        b = engine.calculate(parse_cards("7s 7d"), [], ["rock"])
        assert a.win_percentage == b.win_percentage

    def test_string_opponents(self) -> None:
        result = _engine().calculate(parse_cards("Ah As"), [], ["nit", "rock"])
        assert result.num_opponents == 2

    def test_defaults_to_one_tight_aggressive(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="poker_equity.engine"):
            result = _engine().calculate(parse_cards("Ah As"))
        assert result.num_opponents == 1
        assert DEFAULT_OPPONENT.behavior in caplog.text
        assert result.adjustments.behavioral == pytest.approx(-1.55)

    def test_unknown_behavior_warns(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="poker_equity.engine"):
            result = _engine().calculate(parse_cards("Ah As"), [], ["shark"])
        assert "'shark'" in caplog.text
        assert result.adjustments.behavioral == 0.0

    def test_logs_summary(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="poker_equity.engine"):
            _engine().calculate(parse_cards("Ah As"), [], ["nit"])
        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert "adjusted" in record.getMessage()

    def test_position_and_stack_from_options(self) -> None:
        options = SimulationOptions(iterations=100, position=Position.LATE, stack_depth=10)
        result = _engine().calculate(parse_cards("Ah As"), [], ["nit"], options)
        assert result.adjustments.positional == 2.5
        assert result.adjustments.stack_depth == -3.0

    def test_default_position_from_config(self) -> None:
        engine = _engine(default_position=Position.EARLY, default_stack_depth=150.0)
        result = engine.calculate(parse_cards("Ah As"), [], ["nit"])
        assert result.adjustments.positional == -2.0
        assert result.adjustments.stack_depth == 1.0

    def test_recommendation(self) -> None:
        result = _engine().calculate(parse_cards("Ah As"), parse_cards("Ad Ac Kh"), ["nit"])
        assert result.recommendation.action == RecommendedAction.RAISE_CALL
        assert result.strength_label == "Monster Hand"
        assert result.hand_description == "Four of a Kind"


class TestInvalidInput:
    def test_duplicate_cards(self) -> None:
        with pytest.raises(InvalidInputError):
            _engine().calculate(parse_cards("Ah Kh"), parse_cards("Ah 2c 3d"), ["nit"])

    def test_bad_board_size(self) -> None:
        with pytest.raises(InvalidInputError):
            _engine().calculate(parse_cards("Ah Kh"), parse_cards("2c"), ["nit"])

    def test_not_retried_by_fallback(self) -> None:
        engine = _engine()
        with patch.object(engine, "calculate_basic") as basic:
            with pytest.raises(InvalidInputError):
                engine.calculate_with_fallback(parse_cards("Ah"), [], ["nit"])
        basic.assert_not_called()


class TestBasicAndFallback:
    def test_calculate_basic(self) -> None:
        result = _engine().calculate_basic(parse_cards("Ah Kh"), [], ["maniac"])
        assert result.is_basic
        assert result.iterations == 100
        assert result.adjusted_win_percentage == result.win_percentage
        assert result.adjustments.total == 0.0
        assert result.confidence_interval is None
        assert result.draw_analysis is None

    def test_calculate_basic_iterations(self) -> None:
        result = _engine().calculate_basic(parse_cards("Ah Kh"), [], ["nit"], iterations=30)
        assert result.iterations == 30

    def test_fallback_on_degenerate_result(self, caplog) -> None:
        engine = _engine()
        with patch(
            "poker_equity.calculator.engine.apply_adjustments",
            side_effect=DegenerateResultError("boom", float("nan")),
        ):
            with caplog.at_level(logging.WARNING, logger="poker_equity.engine"):
                result = engine.calculate_with_fallback(parse_cards("Ah Kh"), [], ["nit"])
        assert result.is_basic
        assert "basic path" in caplog.text

    def test_fallback_passes_through_good_result(self) -> None:
        result = _engine().calculate_with_fallback(parse_cards("Ah Kh"), [], ["nit"])
        assert not result.is_basic


class TestHelpers:
    def test_describe_hand_preflop(self) -> None:
        assert describe_hand(parse_cards("Ah As"), []) == "Premium Hand"

    def test_describe_hand_postflop(self) -> None:
        assert describe_hand(parse_cards("Ah As"), parse_cards("Ad 7c 2s")) == "Three of a Kind"

    def test_public_shortcuts(self) -> None:
        c1, c2 = parse_cards("Ah As")
        assert preflop_strength(c1, c2) == 31
        flush = evaluate_best_hand(parse_cards("Ah 9h 7h 4h 2h Ks Kd"))
        pair = evaluate_best_hand(parse_cards("Ac 9d 7s 4c 2d Ks Kd"))
        assert compare_hands(flush, pair) == 1

    def test_default_options_follow_config(self) -> None:
        engine = _engine(confidence_level=0.99, workers=3, timeout_seconds=4.0)
        options = engine.default_options()
        assert options.confidence_level == 0.99
        assert options.workers == 3
        assert options.timeout_seconds == 4.0
        assert options.iterations is None
