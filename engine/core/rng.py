"""
Injectable random source.

Systems never call the ``random`` module directly; they receive a
RandomSource so battles can be replayed deterministically.

Usage:
    rng = RandomSource(seed=42)
    if rng.chance(0.25):
        ...

    # Replay exact rolls in tests
    rng = ScriptedRandom([0.1, 0.9])
"""

from __future__ import annotations

from random import Random
from typing import Iterable, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """Wrapper around random.Random exposing the draws the game needs."""

    def __init__(self, seed: Optional[int] = None):
        self._random = Random(seed)

    def random(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        """Return a float N such that a <= N <= b."""
        return a + (b - a) * self.random()

    def randint(self, a: int, b: int) -> int:
        """Return an integer N such that a <= N <= b."""
        return a + int(self.random() * (b - a + 1))

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.randint(0, len(seq) - 1)]

    def shuffle(self, seq: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(seq) - 1, 0, -1):
            j = self.randint(0, i)
            seq[i], seq[j] = seq[j], seq[i]


class ScriptedRandom(RandomSource):
    """
    Random source that replays a fixed list of rolls.

    Every derived draw (uniform, randint, chance, ...) consumes one roll,
    so tests can script exact outcomes. Once the script is exhausted the
    last roll repeats.
    """

    def __init__(self, rolls: Iterable[float]):
        super().__init__(seed=0)
        self._rolls = list(rolls)
        if not self._rolls:
            raise ValueError("ScriptedRandom needs at least one roll.")
        for roll in self._rolls:
            if not 0.0 <= roll < 1.0:
                raise ValueError(f"Roll out of range [0, 1): {roll}")
        self._index = 0

    def random(self) -> float:
        roll = self._rolls[min(self._index, len(self._rolls) - 1)]
        self._index += 1
        return roll

    @property
    def consumed(self) -> int:
        """Number of rolls drawn so far."""
        return self._index


# Shared default for callers that do not inject their own source
default_rng = RandomSource()
