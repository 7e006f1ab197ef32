"""Constants for the equity engine."""

from enum import IntEnum, StrEnum


class Suit(StrEnum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"


class Rank(StrEnum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


# Ordinals run 0 (deuce) .. 12 (ace)
RANK_ORDINALS: dict[Rank, int] = {rank: i for i, rank in enumerate(Rank)}

RED_SUITS: frozenset[Suit] = frozenset({Suit.HEARTS, Suit.DIAMONDS})


class HandRanking(IntEnum):
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


HAND_DESCRIPTIONS: dict[HandRanking, str] = {
    HandRanking.HIGH_CARD: "High Card",
    HandRanking.ONE_PAIR: "One Pair",
    HandRanking.TWO_PAIR: "Two Pair",
    HandRanking.THREE_OF_A_KIND: "Three of a Kind",
    HandRanking.STRAIGHT: "Straight",
    HandRanking.FLUSH: "Flush",
    HandRanking.FULL_HOUSE: "Full House",
    HandRanking.FOUR_OF_A_KIND: "Four of a Kind",
    HandRanking.STRAIGHT_FLUSH: "Straight Flush",
    HandRanking.ROYAL_FLUSH: "Royal Flush",
}


class Position(StrEnum):
    EARLY = "early"
    MIDDLE = "middle"
    LATE = "late"
    BLINDS = "blinds"


class Street(StrEnum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"

    @classmethod
    def from_board_size(cls, n: int) -> "Street":
        """Street implied by the number of community cards revealed."""
        if n >= 5:
            return cls.RIVER
        if n == 4:
            return cls.TURN
        if n == 3:
            return cls.FLOP
        return cls.PREFLOP


BOARD_SIZES: dict[Street, int] = {
    Street.PREFLOP: 0,
    Street.FLOP: 3,
    Street.TURN: 4,
    Street.RIVER: 5,
}
