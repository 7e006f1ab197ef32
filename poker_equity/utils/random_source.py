"""Randomness providers for shuffling and range sampling.

The simulator depends only on the ``RandomSource`` protocol. Two
implementations ship:

  - SecureRandomSource: OS entropy via ``secrets``. Default.
  - PseudoRandomSource: seedable numpy Generator. Not cryptographically
    secure; used for reproducible runs and as the fallback when the OS
    cannot provide entropy.
"""

from __future__ import annotations

import logging
import os
import secrets
from typing import Protocol

import numpy as np

logger = logging.getLogger("poker_equity.random")


class RandomSource(Protocol):
    """Uniform integer source."""

    def randbelow(self, n: int) -> int:
        """Return a uniformly distributed integer in [0, n)."""
        ...


class SecureRandomSource:
    """Cryptographically strong source backed by the OS entropy pool."""

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)

    def __repr__(self) -> str:
        return "SecureRandomSource()"


class PseudoRandomSource:
    """Seedable pseudo-random source (numpy PCG64).

    Must not be treated as cryptographically secure.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def randbelow(self, n: int) -> int:
        return int(self._rng.integers(0, n))

    def __repr__(self) -> str:
        return f"PseudoRandomSource(seed={self.seed})"


def default_random_source(seed: int | None = None) -> RandomSource:
    """Pick a random source.

    A seed always selects the deterministic pseudo-random source. Without
    a seed the secure source is used when the OS provides entropy.
    """
    if seed is not None:
        return PseudoRandomSource(seed)
    try:
        os.urandom(1)
    except NotImplementedError:
        logger.warning(
            "No OS entropy source available, falling back to pseudo-random"
        )
        return PseudoRandomSource()
    return SecureRandomSource()
