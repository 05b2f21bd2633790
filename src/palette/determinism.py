"""Deterministic pseudo-random helpers.

The palette engine occasionally has several equally valid answers (two hex
candidates at the same distance from a lightness target, two infeasible
foreground intervals of equal width). Those ties are broken with a seeded
generator so identical inputs always produce byte-identical palettes.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

__all__ = ["hash_to_seed", "SeededRandom"]

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
# Numerical Recipes LCG parameters (modulus 2**32)
_LCG_A = 1664525
_LCG_C = 1013904223
_LCG_M = 2**32


def hash_to_seed(text: str) -> int:
    """Stable, order-sensitive 32-bit hash of a string (h = h * 31 + ch)."""
    h = 0
    for ch in text:
        h = ((h << 5) - h + ord(ch)) & _MASK32
    return h


class SeededRandom:
    """Linear congruential generator with a reproducible sequence."""

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & _MASK32

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Next float in [0, 1)."""
        self._state = (_LCG_A * self._state + _LCG_C) % _LCG_M
        return self._state / _LCG_M

    def next_in_range(self, lo: float, hi: float) -> float:
        return lo + self.next() * (hi - lo)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[int(self.next() * len(items))]
