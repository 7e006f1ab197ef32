"""Up-front validation of equity requests.

Everything here raises InvalidInputError synchronously, before any trial
runs, so a caller never receives a partial result for bad input.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

from poker_equity.core.data_structures import Opponent, SimulationOptions
from poker_equity.core.errors import InvalidInputError
from poker_equity.core.statistics import Z_SCORES
from poker_equity.utils.card import Card
from poker_equity.utils.constants import Position

VALID_BOARD_SIZES = frozenset({0, 3, 4, 5})


def _check_cards(cards: Sequence[Card], what: str) -> None:
    for card in cards:
        if not isinstance(card, Card):
            raise InvalidInputError(f"{what} contains a non-card value: {card!r}")


def validate_cards(
    player_hand: Sequence[Card],
    community: Sequence[Card],
    opponents: Sequence[Opponent],
) -> None:
    """Check hand sizes, card types, duplicates and deck capacity."""
    if len(player_hand) != 2:
        raise InvalidInputError(
            f"Player hand must have exactly 2 cards, got {len(player_hand)}"
        )
    _check_cards(player_hand, "Player hand")

    if len(community) not in VALID_BOARD_SIZES:
        raise InvalidInputError(
            f"Community cards must number 0, 3, 4 or 5, got {len(community)}"
        )
    _check_cards(community, "Community cards")

    if not opponents:
        raise InvalidInputError("At least one opponent is required")

    used: list[Card] = list(player_hand) + list(community)
    unknown_hands = 0
    for i, opponent in enumerate(opponents):
        if opponent.hole_cards is None:
            unknown_hands += 1
            continue
        if len(opponent.hole_cards) != 2:
            raise InvalidInputError(
                f"Opponent {i} must have exactly 2 known cards, "
                f"got {len(opponent.hole_cards)}"
            )
        _check_cards(opponent.hole_cards, f"Opponent {i} hand")
        used.extend(opponent.hole_cards)

    if len(set(used)) != len(used):
        dupes = sorted(str(c) for c, n in Counter(used).items() if n > 1)
        raise InvalidInputError(f"Duplicate cards: {', '.join(dupes)}")

    needed = (5 - len(community)) + 2 * unknown_hands
    if needed > 52 - len(used):
        raise InvalidInputError(
            f"Not enough cards to deal {len(opponents)} opponents "
            f"({needed} needed, {52 - len(used)} left)"
        )


def validate_options(options: SimulationOptions) -> None:
    """Check iteration count, seat, stack and statistics settings."""
    iterations = options.iterations
    if iterations is not None and (
        isinstance(iterations, bool) or not isinstance(iterations, int) or iterations <= 0
    ):
        raise InvalidInputError(
            f"Iterations must be a positive integer, got {iterations!r}"
        )

    try:
        Position(options.position)
    except ValueError:
        raise InvalidInputError(f"Invalid position: {options.position!r}") from None

    stack = options.stack_depth
    if not isinstance(stack, (int, float)) or not math.isfinite(stack) or stack <= 0:
        raise InvalidInputError(f"Stack depth must be a positive number, got {stack!r}")

    if options.confidence_interval and options.confidence_level not in Z_SCORES:
        raise InvalidInputError(
            f"Unsupported confidence level {options.confidence_level}; "
            f"expected one of {sorted(Z_SCORES)}"
        )

    if options.workers < 1:
        raise InvalidInputError(f"Workers must be at least 1, got {options.workers}")

    if options.timeout_seconds is not None and options.timeout_seconds <= 0:
        raise InvalidInputError(
            f"Timeout must be positive, got {options.timeout_seconds}"
        )
