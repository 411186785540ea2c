"""Injectable random source.

Every stochastic decision in the engine draws from a ``RandomSource`` handed
in at construction, so a seeded source reproduces a run tick for tick.
"""

import random
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Interface the engine draws from."""

    def random(self) -> float:
        ...

    def uniform(self, a: float, b: float) -> float:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


class SeededRandom:
    """``RandomSource`` backed by a private ``random.Random`` instance."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random(self) -> float:
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        return self._random.uniform(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        return self._random.choice(seq)
