"""Exception hierarchy for the equity engine.

Only structurally invalid input and an unusable final number reach the
caller. Everything that can go wrong inside a simulation trial (empty
sampling range, unknown opponent archetype) is handled where it happens.
"""

from __future__ import annotations


class EquityError(Exception):
    """Base class for all equity engine errors."""


class InvalidInputError(EquityError, ValueError):
    """Raised for malformed cards, duplicate cards or bad options.

    Subclasses ValueError so existing ``except ValueError`` call sites
    keep working.
    """


class DegenerateResultError(EquityError):
    """The computed win percentage is not a usable number.

    Callers are expected to retry with the basic (unadjusted) path,
    see ``EquityEngine.calculate_with_fallback``.
    """

    def __init__(self, message: str, value: float | None = None) -> None:
        super().__init__(message)
        self.value = value
