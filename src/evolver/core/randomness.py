"""
Random number helpers shared by selectors and alterers.

Every operator receives its random source explicitly. ``None`` means the
module-level functions of :mod:`random`, which expose the same interface as a
:class:`random.Random` instance.
"""

import random
from typing import Iterator, List, Optional


def resolve(rng: Optional[random.Random] = None):
    """Return ``rng`` or the process-wide :mod:`random` module."""
    return rng if rng is not None else random


def spawn(rng: Optional[random.Random], count: int) -> List[random.Random]:
    """
    Derive ``count`` independent generators from ``rng``.

    The child seeds are drawn from the parent, so a seeded parent yields the
    same children on every run.
    """
    parent = resolve(rng)
    return [random.Random(parent.getrandbits(64)) for _ in range(count)]


def indexes(n: int, p: float, rng: Optional[random.Random] = None) -> Iterator[int]:
    """
    Yield the indices ``0..n-1``, each one with probability ``p``.

    Indices are produced in increasing order; ``p == 0`` yields nothing and
    ``p == 1`` yields every index.
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Probability must be in [0, 1], but was {p}.")

    rng = resolve(rng)
    if p == 0.0:
        return
    for i in range(n):
        if p == 1.0 or rng.random() < p:
            yield i


def check_probability(p: float, name: str = "Probability") -> float:
    """Validate that ``p`` lies in [0, 1] and return it as float."""
    if p is None:
        raise TypeError(f"{name} must not be None.")
    p = float(p)
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], but was {p}.")
    return p
