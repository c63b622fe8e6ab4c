"""Enumerations of candidate directions and a shared random source."""

from __future__ import annotations

import random
import time
from collections.abc import Iterator, Sequence
from itertools import combinations
from typing import TypeVar

import numpy as np

T = TypeVar("T")


def demand_vectors(num_goods: int) -> Iterator[np.ndarray]:
    """Yield every vector ``±(e_a - e_b)`` and ``±e_b`` over ``num_goods`` goods.

    Pairs of indices are taken in lexicographic order over a vector with one
    extra leading slot; each pair is yielded first with ``+1`` on the lower
    index and ``-1`` on the higher, then negated.
    """
    if num_goods < 1:
        raise ValueError("num_goods must be at least 1")
    for low, high in combinations(range(num_goods + 1), 2):
        vector = np.zeros(num_goods + 1)
        vector[low] = 1.0
        vector[high] = -1.0
        yield vector[1:].copy()
        yield -vector[1:]


def signatures(num_goods: int) -> Iterator[list[float]]:
    """Yield all ``2**num_goods`` sign vectors, bit ``i`` of a counter selecting ``+1``."""
    if num_goods < 0:
        raise ValueError("num_goods must not be negative")
    for mask in range(1 << num_goods):
        yield [1.0 if (mask >> i) & 1 else -1.0 for i in range(num_goods)]


def subsets(items: Sequence[T]) -> Iterator[list[T]]:
    """Yield every subset of ``items``, keeping their order, counting up a bit mask."""
    items = list(items)
    for mask in range(1 << len(items)):
        yield [item for i, item in enumerate(items) if (mask >> i) & 1]


def random_signature(num_goods: int, rng: random.Random | None = None) -> list[float]:
    """Return a sign vector of ``num_goods`` entries, each ``+1`` or ``-1`` at random."""
    source = rng if rng is not None else RandomEngine.instance().engine
    return [2.0 * source.randrange(2) - 1.0 for _ in range(num_goods)]


class RandomEngine:
    """A seeded Mersenne Twister source with a process-wide shared instance."""

    _shared: RandomEngine | None = None

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time.perf_counter_ns() & 0xFFFFFFFF
        self.seed = seed
        self.engine = random.Random(seed)

    @classmethod
    def instance(cls) -> RandomEngine:
        """Return the shared engine, creating it on first use."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    def random_int(self, lb: int, ub: int) -> int:
        """Return an integer in ``[lb, ub]``."""
        if ub < lb:
            raise ValueError("upper bound must not be below lower bound")
        return lb + self.engine.getrandbits(32) % (ub - lb + 1)

    def reseed(self, seed: int) -> None:
        """Restart the engine from ``seed``."""
        self.seed = seed
        self.engine.seed(seed)