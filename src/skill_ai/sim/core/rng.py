"""Seeded random number generator for reproducible enemy decisions.

Wraps Python's random.Random so that skill and target draws can be
replayed from a seed.  Sub-systems (action selection, target selection)
may *fork* their own stream so that drawing in one does not shift the
other.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class GameRNG:
    """Deterministic RNG that can be forked into independent sub-streams.

    Parameters
    ----------
    seed:
        Integer seed for the underlying Mersenne Twister.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    # -- draws ---------------------------------------------------------------

    def random_float(self) -> float:
        """Return a float in ``[0.0, 1.0)``."""
        return self._rng.random()

    def random_below(self, total: float) -> float:
        """Return a float in ``[0.0, total)`` -- one weighted-selection draw."""
        return self.random_float() * total

    def random_choice(self, seq: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence."""
        return self._rng.choice(seq)

    # -- forking -------------------------------------------------------------

    def fork(self, name: str) -> GameRNG:
        """Derive a child RNG from this seed and *name*.

        Forking with the same *name* always yields the same child seed,
        e.g. ``rng.fork("targets")`` for target draws.
        """
        digest = hashlib.sha256(f"{self._seed}:{name}".encode()).digest()
        return GameRNG(int.from_bytes(digest[:8], "big"))

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed})"
