"""Card value type and deck helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable

from poker_equity.core.errors import InvalidInputError
from poker_equity.utils.constants import RANK_ORDINALS, RED_SUITS, Rank, Suit
from poker_equity.utils.random_source import RandomSource, default_random_source


@total_ordering
@dataclass(frozen=True)
class Card:
    """Represents a single playing card."""

    rank: Rank
    suit: Suit

    @classmethod
    def from_str(cls, s: str) -> Card:
        """Create a Card from a string like 'Ah', 'Td' or '10d'.

        Args:
            s: Rank character(s) followed by a suit character.

        Returns:
            A new Card instance.

        Raises:
            InvalidInputError: If the string is malformed or contains
                an invalid rank/suit character.
        """
        s = s.strip()
        if s[:2] == "10":
            s = "T" + s[2:]
        if len(s) != 2:
            raise InvalidInputError(f"Card string must be 2 characters, got '{s}'")
        return create_card(s[0].upper(), s[1].lower())

    @property
    def ordinal(self) -> int:
        """Rank ordinal, 0 (deuce) to 12 (ace)."""
        return RANK_ORDINALS[self.rank]

    @property
    def color(self) -> str:
        return "red" if self.suit in RED_SUITS else "black"

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __repr__(self) -> str:
        return f"Card('{self}')"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))


def create_card(rank: Rank | str, suit: Suit | str) -> Card:
    """Build a card, validating rank and suit against the enumerations."""
    try:
        rank = Rank(rank)
    except ValueError:
        raise InvalidInputError(f"Invalid rank: '{rank}'") from None
    try:
        suit = Suit(suit)
    except ValueError:
        raise InvalidInputError(f"Invalid suit: '{suit}'") from None
    return Card(rank=rank, suit=suit)


def parse_cards(s: str) -> list[Card]:
    """Parse space- or comma-separated cards like 'Ah Kh' or 'Qs,Jd,2c'."""
    return [Card.from_str(tok) for tok in s.replace(",", " ").split()]


def full_deck() -> list[Card]:
    """All 52 cards in suit-major order, unshuffled."""
    return [Card(rank=r, suit=s) for s in Suit for r in Rank]


def shuffle_cards(cards: list[Card], rng: RandomSource) -> list[Card]:
    """Return a Fisher-Yates shuffled copy of ``cards``."""
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randbelow(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def generate_deck(rng: RandomSource | None = None) -> list[Card]:
    """Return a freshly shuffled 52-card deck."""
    return shuffle_cards(full_deck(), rng or default_random_source())


def remove_used_cards(deck: list[Card], used: Iterable[Card]) -> list[Card]:
    """Return a new deck without any card present in ``used``."""
    used_set = set(used)
    return [c for c in deck if c not in used_set]
