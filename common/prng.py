"""
Deterministic linear-congruential generator held as an explicit value.

Each draw returns the drawn value together with the successor generator,
so task generators thread the state through their calls and can report
the final state as ``next_seed``:

    rng = Lcg.from_seed(42)
    a, rng = rng.randint(1, 6)
    b, rng = rng.randint(1, 6)
    next_seed = rng.state
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")

LCG_A = 1664525
LCG_C = 1013904223
LCG_M = 2**32
SEED_SPACE = 2**31


@dataclass(frozen=True, slots=True)
class Lcg:
    """32-bit LCG state: ``state' = (A * state + C) mod 2^32``."""

    state: int

    @classmethod
    def from_seed(cls, seed: int) -> "Lcg":
        return cls(int(seed) % LCG_M)

    def advance(self) -> "Lcg":
        return Lcg((LCG_A * self.state + LCG_C) % LCG_M)

    def uniform(self) -> Tuple[float, "Lcg"]:
        """Fraction in [0, 1) taken from the advanced state."""
        nxt = self.advance()
        return nxt.state / LCG_M, nxt

    def randint(self, lo: int, hi: int) -> Tuple[int, "Lcg"]:
        """Integer in the closed range [lo, hi]."""
        r, nxt = self.uniform()
        return int(r * (hi - lo + 1)) + lo, nxt

    def choice(self, seq: Sequence[T]) -> Tuple[T, "Lcg"]:
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        idx, nxt = self.randint(0, len(seq) - 1)
        return seq[idx], nxt

    def coin(self) -> Tuple[bool, "Lcg"]:
        """Fair boolean, equivalent to ``choice([True, False])``."""
        flag, nxt = self.choice((True, False))
        return flag, nxt

    def shuffle(self, seq: Sequence[T]) -> Tuple[List[T], "Lcg"]:
        """Fisher-Yates shuffle of a copy of ``seq``."""
        items = list(seq)
        rng = self
        for i in range(len(items) - 1, 0, -1):
            j, rng = rng.randint(0, i)
            items[i], items[j] = items[j], items[i]
        return items, rng


def random_seed() -> int:
    """Fresh seed for callers that did not supply one."""
    return random.randrange(SEED_SPACE)


__all__ = ["Lcg", "LCG_A", "LCG_C", "LCG_M", "SEED_SPACE", "random_seed"]
