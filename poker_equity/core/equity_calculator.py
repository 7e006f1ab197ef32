"""Monte Carlo equity calculator for Texas Hold'em.

Each trial completes the board from a freshly shuffled deck, deals every
opponent a hand sampled from its behavior range, and compares best-of-7
hands. Trials share no state, so they can be split across worker
processes and merged by summing counts and concatenating strengths.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Sequence

import numpy as np

from poker_equity.core.data_structures import (
    Opponent,
    SimulationOptions,
    SimulationResult,
)
from poker_equity.core.draw_analysis import analyze_draws
from poker_equity.core.hand_evaluator import (
    HandEvaluator,
    compare_hands,
    hand_strength_score,
)
from poker_equity.core.statistics import (
    calculate_confidence_interval,
    calculate_variance,
)
from poker_equity.core.validation import validate_cards, validate_options
from poker_equity.strategy.opponent_range import OpponentRangeModel
from poker_equity.utils.card import Card, generate_deck, remove_used_cards
from poker_equity.utils.constants import Position
from poker_equity.utils.random_source import RandomSource, default_random_source

logger = logging.getLogger("poker_equity.simulator")

BASE_ITERATIONS = 5_000
MAX_ITERATIONS = 50_000
# Below this many trials process start-up costs more than it saves
MIN_PARALLEL_ITERATIONS = 500


class Outcome(StrEnum):
    WIN = "win"
    TIE = "tie"
    LOSS = "loss"


@dataclass
class _Tally:
    """Partial counts from one chunk of trials."""

    wins: int = 0
    ties: int = 0
    losses: int = 0
    strengths: list[float] = field(default_factory=list)
    timed_out: bool = False

    @property
    def trials(self) -> int:
        return self.wins + self.ties + self.losses

    def record(self, outcome: Outcome, strength: float) -> None:
        if outcome == Outcome.WIN:
            self.wins += 1
        elif outcome == Outcome.TIE:
            self.ties += 1
        else:
            self.losses += 1
        self.strengths.append(strength)

    def merge(self, other: _Tally) -> None:
        self.wins += other.wins
        self.ties += other.ties
        self.losses += other.losses
        self.strengths.extend(other.strengths)
        self.timed_out = self.timed_out or other.timed_out


def _run_chunk(
    player_hand: list[Card],
    community: list[Card],
    opponents: list[Opponent],
    position: Position,
    stack_depth: float,
    iterations: int,
    rng: RandomSource,
    timeout_seconds: float | None,
) -> _Tally:
    """Run up to ``iterations`` trials, stopping early at the deadline."""
    tally = _Tally()
    deadline = (
        time.perf_counter() + timeout_seconds if timeout_seconds is not None else None
    )
    for i in range(iterations):
        # Always complete at least one trial so the result is usable
        if deadline is not None and i > 0 and time.perf_counter() >= deadline:
            tally.timed_out = True
            break
        outcome, strength = EquityCalculator.run_trial(
            player_hand, community, opponents, position, stack_depth, rng,
        )
        tally.record(outcome, strength)
    return tally


def _simulate_chunk_worker(
    player_hand: list[Card],
    community: list[Card],
    opponents: list[Opponent],
    position: Position,
    stack_depth: float,
    iterations: int,
    seed: int | None,
    timeout_seconds: float | None,
) -> _Tally:
    """Worker entry point for process-parallel Monte Carlo.

    Each worker builds its own random source so no generator is shared
    across processes.
    """
    rng = default_random_source(seed)
    return _run_chunk(
        player_hand, community, opponents, position, stack_depth,
        iterations, rng, timeout_seconds,
    )


class EquityCalculator:
    """Monte Carlo equity simulator."""

    @staticmethod
    def default_iterations(
        num_opponents: int,
        base: int = BASE_ITERATIONS,
        maximum: int = MAX_ITERATIONS,
    ) -> int:
        """Trial count that grows with table size, capped at ``maximum``."""
        return int(min(base * (1 + 0.2 * num_opponents), maximum))

    @staticmethod
    def run_trial(
        player_hand: list[Card],
        community: list[Card],
        opponents: Sequence[Opponent],
        position: Position,
        stack_depth: float,
        rng: RandomSource,
    ) -> tuple[Outcome, float]:
        """Play out one random runout.

        Returns:
            (outcome for the player, player's hand-strength score).
        """
        used = list(player_hand) + list(community)
        for opponent in opponents:
            if opponent.hole_cards is not None:
                used.extend(opponent.hole_cards)
        deck = remove_used_cards(generate_deck(rng), used)

        # The deck is already shuffled, so the tail is a uniform draw
        board = list(community)
        while len(board) < 5:
            board.append(deck.pop())

        opponent_hands: list[list[Card]] = []
        for opponent in opponents:
            if opponent.hole_cards is not None:
                opponent_hands.append(list(opponent.hole_cards))
                continue
            hand = OpponentRangeModel.sample_hand(
                deck, opponent.behavior, position, stack_depth, rng,
            )
            deck = remove_used_cards(deck, hand)
            opponent_hands.append(list(hand))

        player_cards = list(player_hand) + board
        player_best = HandEvaluator.evaluate_best_hand(player_cards)

        outcome = Outcome.WIN
        for hand in opponent_hands:
            cmp = compare_hands(player_best, HandEvaluator.evaluate_best_hand(hand + board))
            if cmp < 0:
                outcome = Outcome.LOSS
                break
            if cmp == 0:
                outcome = Outcome.TIE

        return outcome, hand_strength_score(player_best, len(player_cards))

    @staticmethod
    def simulate(
        player_hand: list[Card],
        community: list[Card],
        opponents: Sequence[Opponent],
        options: SimulationOptions | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ) -> SimulationResult:
        """Estimate the player's equity against ``opponents``.

        Args:
            player_hand: The player's two hole cards.
            community: Known community cards (0, 3, 4 or 5).
            opponents: Opponent seats, in order.
            options: Simulation options (defaults if omitted).
            rng: Random source for in-process runs. Overrides ``seed``.
            seed: Seed for reproducible runs; parallel workers use
                  ``seed + worker_index``.

        Returns:
            SimulationResult with counts and the requested statistics.

        Raises:
            InvalidInputError: If the cards or options are invalid.
        """
        options = options or SimulationOptions()
        player_hand = list(player_hand)
        community = list(community)
        opponents = list(opponents)
        validate_cards(player_hand, community, opponents)
        validate_options(options)

        position = Position(options.position)
        iterations = options.iterations or EquityCalculator.default_iterations(
            len(opponents),
        )

        t_start = time.perf_counter()
        if options.workers > 1 and iterations >= MIN_PARALLEL_ITERATIONS:
            tally = EquityCalculator._simulate_parallel(
                player_hand, community, opponents, position,
                options.stack_depth, iterations, options.workers,
                seed, options.timeout_seconds,
            )
        else:
            tally = _run_chunk(
                player_hand, community, opponents, position,
                options.stack_depth, iterations,
                rng or default_random_source(seed), options.timeout_seconds,
            )
        elapsed_ms = (time.perf_counter() - t_start) * 1000

        if tally.timed_out:
            logger.warning(
                "Timed out after %.1fms: %d of %d trials completed",
                elapsed_ms, tally.trials, iterations,
            )
        logger.debug(
            "Simulated %d trials vs %d opponents in %.1fms",
            tally.trials, len(opponents), elapsed_ms,
        )

        result = SimulationResult(
            win_count=tally.wins,
            tie_count=tally.ties,
            loss_count=tally.losses,
            iterations=tally.trials,
            hand_strengths=tally.strengths,
            timed_out=tally.timed_out,
        )

        if options.calculate_variance:
            result.variance = calculate_variance(result.hand_strengths)
            result.standard_deviation = float(np.sqrt(result.variance))

        if options.confidence_interval:
            result.confidence_interval = calculate_confidence_interval(
                result.win_rate, result.iterations, options.confidence_level,
            )

        if options.include_draws and len(community) < 5:
            result.draw_analysis = analyze_draws(player_hand, community)

        return result

    @staticmethod
    def _simulate_parallel(
        player_hand: list[Card],
        community: list[Card],
        opponents: list[Opponent],
        position: Position,
        stack_depth: float,
        iterations: int,
        workers: int,
        seed: int | None,
        timeout_seconds: float | None,
    ) -> _Tally:
        """Split trials across worker processes and merge the tallies."""
        chunk_size = iterations // workers
        remainder = iterations % workers
        chunks = [chunk_size + (1 if i < remainder else 0) for i in range(workers)]

        tally = _Tally()
        try:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(
                        _simulate_chunk_worker,
                        player_hand, community, opponents, position, stack_depth,
                        chunk, None if seed is None else seed + i, timeout_seconds,
                    )
                    for i, chunk in enumerate(chunks)
                    if chunk > 0
                ]
                for future in futures:
                    tally.merge(future.result())
        except Exception:
            logger.exception("Parallel simulation failed with %d workers", workers)
            raise
        return tally
