"""EquityEngine: top-level entry point for equity requests.

Validates input, runs the Monte Carlo simulator, applies the statistics
and adjustment layer, and logs one line per request. A reduced-fidelity
path (fewer trials, no adjustments) is exposed for callers that need to
recover from a DegenerateResultError.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Sequence

from poker_equity.calculator.config import EngineConfig
from poker_equity.core.data_structures import (
    AdjustedResult,
    Opponent,
    SimulationOptions,
)
from poker_equity.core.equity_calculator import EquityCalculator
from poker_equity.core.errors import DegenerateResultError
from poker_equity.core.hand_evaluator import HandEvaluator
from poker_equity.core.statistics import apply_adjustments, unadjusted_result
from poker_equity.core.validation import validate_cards, validate_options
from poker_equity.strategy.behavior_profiles import BehaviorType
from poker_equity.strategy.preflop_table import preflop_label
from poker_equity.utils.card import Card
from poker_equity.utils.constants import Position
from poker_equity.utils.random_source import RandomSource

logger = logging.getLogger("poker_equity.engine")

# Seat assumed when the caller supplies no opponents
DEFAULT_OPPONENT = Opponent(behavior=BehaviorType.TIGHT_AGGRESSIVE.value)


def _normalize_opponents(opponents: Sequence[Opponent | str] | None) -> list[Opponent]:
    if not opponents:
        logger.info("No opponents given, assuming one %s", DEFAULT_OPPONENT.behavior)
        return [DEFAULT_OPPONENT]
    return [o if isinstance(o, Opponent) else Opponent(behavior=o) for o in opponents]


def describe_hand(player_hand: list[Card], community: list[Card]) -> str:
    """Made-hand description from the flop on, preflop band before it."""
    if len(community) >= 3:
        return HandEvaluator.evaluate_best_hand(player_hand + community).description
    return preflop_label(player_hand[0], player_hand[1])


class EquityEngine:
    """Behavior-adjusted equity calculator.

    Usage:
        engine = EquityEngine()
        result = engine.calculate(
            parse_cards("Ah Kh"),
            parse_cards("Qh Jh 2c"),
            [Opponent("tight-aggressive"), Opponent("maniac")],
        )
        print(result.adjusted_win_percentage, result.recommendation)
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._rng = rng

    @property
    def config(self) -> EngineConfig:
        return self._config

    def default_options(self) -> SimulationOptions:
        """Options built from the engine configuration."""
        return SimulationOptions(
            position=self._config.default_position,
            stack_depth=self._config.default_stack_depth,
            confidence_level=self._config.confidence_level,
            timeout_seconds=self._config.timeout_seconds,
            workers=self._config.workers,
        )

    def calculate(
        self,
        player_hand: Sequence[Card],
        community_cards: Sequence[Card] | None = None,
        opponents: Sequence[Opponent | str] | None = None,
        options: SimulationOptions | None = None,
    ) -> AdjustedResult:
        """Full pipeline: simulate, then apply all adjustments.

        Raises:
            InvalidInputError: If the cards or options are invalid.
            DegenerateResultError: If the final percentage is unusable.
        """
        player_hand = list(player_hand)
        community = list(community_cards or [])
        seats = _normalize_opponents(opponents)
        options = self._resolve_options(options, len(seats))
        validate_cards(player_hand, community, seats)
        validate_options(options)

        unknown = [o.behavior for o in seats if o.profile is None]
        if unknown:
            logger.warning(
                "Unrecognized behavior(s) %s, dealing those seats unbiased cards",
                ", ".join(repr(b) for b in unknown),
            )

        t_start = time.perf_counter()
        simulation = EquityCalculator.simulate(
            player_hand, community, seats, options,
            rng=self._rng, seed=self._config.seed,
        )
        result = apply_adjustments(
            simulation,
            seats,
            board_size=len(community),
            position=Position(options.position),
            stack_depth=options.stack_depth,
            hand_description=describe_hand(player_hand, community),
        )
        elapsed_ms = (time.perf_counter() - t_start) * 1000

        logger.info(
            "%s vs %d opponent(s) → base %.1f%%, adjusted %.1f%% "
            "(confidence=%.0f%%, sims=%d, %.1fms)",
            " ".join(str(c) for c in player_hand + community),
            len(seats),
            result.win_percentage,
            result.adjusted_win_percentage,
            result.confidence * 100,
            result.iterations,
            elapsed_ms,
        )
        return result

    def calculate_basic(
        self,
        player_hand: Sequence[Card],
        community_cards: Sequence[Card] | None = None,
        opponents: Sequence[Opponent | str] | None = None,
        iterations: int | None = None,
    ) -> AdjustedResult:
        """Reduced-fidelity calculation: fewer trials, no adjustments.

        The documented recovery path after a DegenerateResultError.
        """
        player_hand = list(player_hand)
        community = list(community_cards or [])
        seats = _normalize_opponents(opponents)
        base = self.default_options()
        options = replace(
            base,
            iterations=iterations or self._config.basic_iterations,
            include_draws=False,
            calculate_variance=False,
            confidence_interval=False,
        )
        simulation = EquityCalculator.simulate(
            player_hand, community, seats, options,
            rng=self._rng, seed=self._config.seed,
        )
        result = unadjusted_result(
            simulation, len(seats), describe_hand(player_hand, community),
        )
        logger.info(
            "Basic calculation: %.1f%% (sims=%d)",
            result.win_percentage, result.iterations,
        )
        return result

    def calculate_with_fallback(
        self,
        player_hand: Sequence[Card],
        community_cards: Sequence[Card] | None = None,
        opponents: Sequence[Opponent | str] | None = None,
        options: SimulationOptions | None = None,
    ) -> AdjustedResult:
        """Run the full pipeline, dropping to the basic path if it degenerates.

        Invalid input is not retried; it propagates to the caller.
        """
        try:
            return self.calculate(player_hand, community_cards, opponents, options)
        except DegenerateResultError as e:
            logger.warning("Full calculation degenerated (%s), using basic path", e)
            return self.calculate_basic(player_hand, community_cards, opponents)

    def _resolve_options(
        self,
        options: SimulationOptions | None,
        num_opponents: int,
    ) -> SimulationOptions:
        options = options or self.default_options()
        if options.iterations is None:
            options = replace(
                options,
                iterations=EquityCalculator.default_iterations(
                    num_opponents,
                    base=self._config.base_iterations,
                    maximum=self._config.max_iterations,
                ),
            )
        return options
