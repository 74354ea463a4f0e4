"""
Fitness proportional selectors.

All selectors here compute the probability vector for maximization; the
inversion for minimization is done by :class:`ProbabilitySelector`.
"""

import math

import numpy as np

from src.evolver.core.population import Population
from src.evolver.selection.base import ProbabilitySelector, ulp_eq


def _uniform(size: int) -> np.ndarray:
    return np.full(size, 1.0 / size)


class RouletteWheelSelector(ProbabilitySelector):
    """
    Selects phenotypes with a probability proportional to their fitness,
    shifted so that the worst phenotype has probability zero. Falls back to
    uniform selection if all fitness values are (almost) equal.
    """

    def probabilities(self, population: Population, count: int) -> np.ndarray:
        fitness = population.fitness_values()
        shifted = fitness - fitness.min()
        total = float(shifted.sum())

        if ulp_eq(total, 0.0):
            return _uniform(len(population))
        return shifted / total


class BoltzmannSelector(ProbabilitySelector):
    """
    Boltzmann selection, ``p(i) ~ exp(b * f(i) / max|f|)``.

    ``b == 0`` gives uniform selection; positive values favor phenotypes
    with high fitness, negative values those with low fitness.
    """

    def __init__(self, b: float = 4.0):
        if b is None or not math.isfinite(b):
            raise ValueError(f"Boltzmann parameter must be finite: {b}")
        self.b = float(b)

    def probabilities(self, population: Population, count: int) -> np.ndarray:
        fitness = population.fitness_values()
        scale = float(np.max(np.abs(fitness)))
        if scale == 0.0:
            return _uniform(len(population))

        exponents = self.b * (fitness / scale)
        weights = np.exp(exponents - exponents.max())
        return weights / weights.sum()

    def __repr__(self) -> str:
        return f"BoltzmannSelector(b={self.b})"


class LinearRankSelector(ProbabilitySelector):
    """
    Linear ranking selection.

    The population is sorted best first; the best phenotype gets the
    probability ``n_plus / N``, the worst ``n_minus / N`` with
    ``n_plus = 2 - n_minus``.
    """

    sorted = True

    def __init__(self, n_minus: float = 0.5):
        if n_minus is None or not 0.0 <= n_minus <= 2.0:
            raise ValueError(f"n_minus must be in [0, 2]: {n_minus}")
        self.n_minus = float(n_minus)
        self.n_plus = 2.0 - self.n_minus

    def probabilities(self, population: Population, count: int) -> np.ndarray:
        size = len(population)
        if size == 1:
            return np.ones(1)

        rank = np.arange(size - 1, -1, -1, dtype=float)
        return (self.n_minus + (self.n_plus - self.n_minus) * rank / (size - 1)) / size

    def __repr__(self) -> str:
        return f"LinearRankSelector(n_minus={self.n_minus})"


class ExponentialRankSelector(ProbabilitySelector):
    """
    Exponential ranking selection, ``p(k) = (c - 1) * c**k / (c**N - 1)``
    for position ``k`` of the best-first sorted population.

    Smaller values of ``c`` select the best phenotypes more aggressively.
    """

    sorted = True

    def __init__(self, c: float = 0.975):
        if c is None or not 0.0 <= c < 1.0:
            raise ValueError(f"Value must be in [0, 1): {c}")
        self.c = float(c)

    def probabilities(self, population: Population, count: int) -> np.ndarray:
        size = len(population)
        positions = np.arange(size, dtype=float)
        return (self.c - 1.0) * np.power(self.c, positions) / (self.c ** size - 1.0)

    def __repr__(self) -> str:
        return f"ExponentialRankSelector(c={self.c})"


class StochasticUniversalSelector(RouletteWheelSelector):
    """
    Stochastic universal sampling.

    Uses the roulette wheel probabilities but a single random offset with
    ``count`` equally spaced pointers, so each phenotype is selected at most
    one time more or less than its expected count.
    """

    sorted = True

    def _draw(self, population, cumulative, count, rng, selection) -> None:
        step = 1.0 / count
        pointer = rng.random() * step
        last = len(population) - 1

        index = 0
        for _ in range(count):
            while index < last and cumulative[index] <= pointer:
                index += 1
            selection.append(population[index])
            pointer += step
