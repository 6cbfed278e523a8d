"""Deterministic seeded random numbers for the garden.

Everything generative in the garden (flower genomes, stars, grass, grain,
leaves) draws from ``SeededRandom``. The generator is a splitmix64
stream: the seed is pre-mixed with the golden-ratio increment and every
draw advances the state by that increment before the avalanche step.
Same seed, same sequence, on every platform, with no hidden entropy.

The global ``random`` module is not used anywhere in the
``garden`` package (see ``tests/test_rng_policy.py``).
"""

from __future__ import annotations

import logging
import math
import time
from typing import Optional

from garden.exceptions import InvalidRangeError

logger = logging.getLogger(__name__)

UINT64_MASK = 0xFFFFFFFFFFFFFFFF
UINT64_MAX = UINT64_MASK

_GOLDEN_GAMMA = 0x9E3779B97F4A7C15
_MIX_1 = 0xBF58476D1CE4E5B9
_MIX_2 = 0x94D049BB133111EB


class SeededRandom:
    """Splitmix64 pseudo-random generator.

    Range helpers follow a fixed mapping so sequences stay reproducible:

    - floats: ``lo + (next_uint64() / UINT64_MAX) * (hi - lo)``
    - ints: ``lo + next_uint64() % (hi - lo + 1)`` (slight modulo bias is
      acceptable for visual randomness)

    Example:
        rng = SeededRandom(42)
        petals = rng.next_int(5, 12)
        radius = rng.next_double(20.0, 40.0)
    """

    __slots__ = ("_state", "_strict", "_seed")

    def __init__(self, seed: int, *, strict: bool = True) -> None:
        """Initialize the generator.

        Args:
            seed: Any integer; reduced modulo 2**64.
            strict: Raise ``InvalidRangeError`` for ``lo > hi`` ranges. When
                False the range collapses to ``lo`` and a warning is logged.
        """
        self._seed = int(seed) & UINT64_MASK
        self._state = (self._seed * _GOLDEN_GAMMA) & UINT64_MASK
        self._strict = strict

    @classmethod
    def from_time(cls, *, strict: bool = True) -> "SeededRandom":
        """Create a generator seeded from the wall clock (milliseconds)."""
        return cls(time.time_ns() // 1_000_000, strict=strict)

    @property
    def seed(self) -> int:
        """The seed this generator was constructed with."""
        return self._seed

    def next_uint64(self) -> int:
        """Advance the state and return the next raw 64-bit value."""
        self._state = (self._state + _GOLDEN_GAMMA) & UINT64_MASK
        z = self._state
        z = ((z ^ (z >> 30)) * _MIX_1) & UINT64_MASK
        z = ((z ^ (z >> 27)) * _MIX_2) & UINT64_MASK
        return z ^ (z >> 31)

    def next_unit(self) -> float:
        """Return a float in [0, 1]."""
        return self.next_uint64() / UINT64_MAX

    def next_double(self, lo: float, hi: float) -> float:
        """Return a float in the closed range [lo, hi]."""
        lo, hi = self._check_range(lo, hi)
        value = lo + self.next_unit() * (hi - lo)
        # Rounding can push lo + 1.0 * (hi - lo) past hi
        if value > hi:
            return hi
        if value < lo:
            return lo
        return value

    def next_float(self, lo: float, hi: float) -> float:
        """Alias of ``next_double``; Python floats are already doubles."""
        return self.next_double(lo, hi)

    def next_int(self, lo: int, hi: int) -> int:
        """Return an integer in the closed range [lo, hi]."""
        lo, hi = self._check_range(int(lo), int(hi))
        return lo + self.next_uint64() % (hi - lo + 1)

    def next_angle(self) -> float:
        """Return an angle in [0, 2π)."""
        return self.next_double(0.0, math.tau) % math.tau

    def _check_range(self, lo, hi):
        if lo <= hi:
            return lo, hi
        if self._strict:
            raise InvalidRangeError(f"Invalid range: lo={lo} is greater than hi={hi}")
        logger.warning("Clamping invalid range lo=%s hi=%s to lo", lo, hi)
        return lo, lo


def derive_seed(rng: Optional[SeededRandom], *, strict: bool = True) -> int:
    """Draw a child seed from *rng*, or from the clock when no parent exists.

    Args:
        rng: Parent generator (typically the garden's master generator).
        strict: Strictness for the fallback clock-seeded generator.

    Returns:
        A 64-bit seed for a fresh ``SeededRandom``.
    """
    if rng is None:
        rng = SeededRandom.from_time(strict=strict)
    return rng.next_uint64()
