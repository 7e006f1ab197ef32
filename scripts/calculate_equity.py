#!/usr/bin/env python3
"""Calculate behavior-adjusted equity from the command line.

Usage:
    # AK suited on a two-heart flop against two opponents
    python scripts/calculate_equity.py --hand "Ah Kh" --board "Qh Jh 2c" \\
        --opponent tight-aggressive --opponent maniac

    # Reproducible run in late position with a 40bb stack
    python scripts/calculate_equity.py --hand "9s 9d" --opponent nit \\
        --position late --stack 40 --seed 7

    # Reduced-fidelity run (no adjustments)
    python scripts/calculate_equity.py --hand "7c 2d" --basic

Archetypes:
    tight-aggressive, loose-aggressive, tight-passive, loose-passive,
    maniac, nit, calling-station, rock, slow-roller, chatty-distracted
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path so we can import poker_equity
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from poker_equity.calculator import (
    AdjustedResult,
    EquityEngine,
    EquityError,
    Opponent,
    load_engine_config,
    parse_cards,
)
from poker_equity.utils.constants import Position


def print_result(result: AdjustedResult) -> None:
    """Print a human-readable report."""
    sim = result.simulation
    print(f"Hand:            {result.hand_description} ({result.strength_label})")
    print(f"Base equity:     {result.win_percentage:.1f}% "
          f"(W {sim.win_count} / T {sim.tie_count} / L {sim.loss_count})")
    print(f"Adjusted equity: {result.adjusted_win_percentage:.1f}%")
    print(f"Confidence:      {result.confidence:.0%}")
    print(f"Simulations:     {result.iterations:,}"
          + (" (timed out)" if sim.timed_out else ""))

    ci = result.confidence_interval
    if ci is not None:
        print(f"{ci.level:.0%} CI:          {ci.lower * 100:.1f}% - {ci.upper * 100:.1f}%")
    if result.standard_deviation:
        print(f"Std deviation:   {result.standard_deviation:.2f}")

    if not result.is_basic:
        adj = result.adjustments
        print("\nAdjustments:")
        print(f"  {'Behavioral':<14} {adj.behavioral:+.2f}")
        print(f"  {'Positional':<14} {adj.positional:+.2f}")
        print(f"  {'Stack depth':<14} {adj.stack_depth:+.2f}")
        print(f"  {'Game theory':<14} {adj.game_theory:+.2f}")

    draws = result.draw_analysis
    if draws is not None and (draws.has_draw or draws.overcards):
        print("\nDraws:")
        print(f"  Flush draw:     {'yes' if draws.flush_draw else 'no'}")
        print(f"  Straight draw:  {draws.straight_draw.value}")
        print(f"  Overcards:      {draws.overcards}")
        print(f"  Outs:           {draws.outs}")

    print(f"\nRecommendation:  {result.recommendation}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Monte Carlo poker equity with opponent behavior modeling.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--hand", required=True, help="Two hole cards, e.g. 'Ah Kd'")
    parser.add_argument("--board", default="", help="0, 3, 4 or 5 community cards")
    parser.add_argument(
        "--opponent", action="append", default=[], metavar="ARCHETYPE",
        help="Opponent archetype (repeat for more opponents)",
    )
    parser.add_argument("--iterations", type=int, default=None)
    parser.add_argument(
        "--position", choices=[p.value for p in Position], default=None,
    )
    parser.add_argument("--stack", type=float, default=None, help="Stack in big blinds")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="Engine config JSON")
    parser.add_argument(
        "--basic", action="store_true",
        help="Reduced-fidelity run without adjustments",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_engine_config(args.config)
    overrides = {
        k: v for k, v in (
            ("seed", args.seed),
            ("workers", args.workers),
            ("default_position", Position(args.position) if args.position else None),
            ("default_stack_depth", args.stack),
        ) if v is not None
    }
    engine = EquityEngine(config=replace(config, **overrides))
    opponents = [Opponent(behavior=name) for name in args.opponent]

    try:
        hand = parse_cards(args.hand)
        board = parse_cards(args.board)
        if args.basic:
            result = engine.calculate_basic(hand, board, opponents, args.iterations)
        else:
            options = replace(engine.default_options(), iterations=args.iterations)
            result = engine.calculate_with_fallback(hand, board, opponents, options)
    except EquityError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print_result(result)


if __name__ == "__main__":
    main()
