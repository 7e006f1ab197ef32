"""Poker equity calculator.

Estimates a player's chance of winning against opponents described by
behavior archetypes, using Monte Carlo simulation plus behavioral,
positional, stack-depth and game-theory corrections.

Key public API:
    EquityEngine       -- Full pipeline with validation and fallback
    Opponent           -- An opponent seat (archetype name, optional cards)
    SimulationOptions  -- Per-request options
    AdjustedResult     -- Final result with breakdown and recommendation
    evaluate_best_hand -- Direct hand-strength query
    compare_hands      -- Total order over evaluated hands (-1, 0, 1)
    preflop_strength   -- Instant starting-hand score
"""

from poker_equity.calculator.config import EngineConfig, load_engine_config
from poker_equity.calculator.engine import EquityEngine
from poker_equity.core.data_structures import (
    AdjustedResult,
    Opponent,
    SimulationOptions,
    SimulationResult,
)
from poker_equity.core.errors import (
    DegenerateResultError,
    EquityError,
    InvalidInputError,
)
from poker_equity.core.hand_evaluator import HandResult, compare_hands, evaluate_best_hand
from poker_equity.strategy.preflop_table import preflop_score as preflop_strength
from poker_equity.utils.card import Card, create_card, parse_cards

__all__ = [
    "AdjustedResult",
    "Card",
    "DegenerateResultError",
    "EngineConfig",
    "EquityEngine",
    "EquityError",
    "HandResult",
    "InvalidInputError",
    "Opponent",
    "SimulationOptions",
    "SimulationResult",
    "compare_hands",
    "create_card",
    "evaluate_best_hand",
    "load_engine_config",
    "parse_cards",
    "preflop_strength",
]
