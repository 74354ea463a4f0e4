"""
Base classes for selection in the evolver engine.

A selector picks ``count`` phenotypes from a population. Proportional
selectors derive a probability vector from the population and draw from it
by cumulative-probability search.
"""

from abc import ABC, abstractmethod
from typing import Optional
import random

import numpy as np

from src.evolver.core.optimize import Optimize
from src.evolver.core.population import Population
from src.evolver.core.randomness import resolve

MAX_ULP_DISTANCE = 10 ** 10


def _ordinal(value: float) -> int:
    """Map a double onto a signed integer line ordered like the doubles."""
    bits = int(np.array([value], dtype=np.float64).view(np.int64)[0])
    return bits if bits >= 0 else -(bits & 0x7FFFFFFFFFFFFFFF)


def ulp_distance(a: float, b: float) -> int:
    """Number of representable doubles between ``a`` and ``b``."""
    return _ordinal(a) - _ordinal(b)


def ulp_eq(a: float, b: float) -> bool:
    """True if ``a`` and ``b`` are at most ``MAX_ULP_DISTANCE`` ulps apart."""
    return abs(ulp_distance(a, b)) < MAX_ULP_DISTANCE


def sum_to_one(probabilities: np.ndarray) -> bool:
    total = float(np.sum(probabilities)) if len(probabilities) > 0 else 1.0
    return ulp_eq(total, 1.0)


def check_and_correct(probabilities: np.ndarray) -> np.ndarray:
    """Replace a vector with non-finite entries by the uniform distribution."""
    if not np.all(np.isfinite(probabilities)):
        probabilities = np.full(len(probabilities), 1.0 / len(probabilities))
    return probabilities


def check_count(count: int) -> None:
    if count < 0:
        raise ValueError(
            f"Selection count must be greater or equal then zero, but was {count}."
        )


class Selector(ABC):
    """
    Abstract base class for selectors.

    Selectors carry no state besides their configuration; every call to
    :meth:`select` is independent given the population and the random source.
    """

    @abstractmethod
    def select(
        self,
        population: Population,
        count: int,
        optimize: Optimize = Optimize.MAXIMUM,
        rng: Optional[random.Random] = None
    ) -> Population:
        """
        Select phenotypes from the population.

        Args:
            population: Population to select from; it is not modified
            count: Number of phenotypes to select
            optimize: Optimization direction
            rng: Random source, the :mod:`random` module if omitted

        Returns:
            New population with exactly ``count`` phenotypes
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ProbabilitySelector(Selector):
    """
    Base class for fitness proportional selectors.

    Subclasses compute probabilities assuming maximization. For minimization
    the vector is inverted: unsorted selectors map ``p`` to ``1 - p`` and
    renormalize, sorted selectors reverse the vector over the fitness-sorted
    population.
    """

    sorted = False

    @abstractmethod
    def probabilities(self, population: Population, count: int) -> np.ndarray:
        """
        Probability vector for ``population`` under maximization.

        Returns:
            Array with one probability per phenotype, summing to one
        """
        pass

    def oriented_probabilities(
        self,
        population: Population,
        count: int,
        optimize: Optimize = Optimize.MAXIMUM
    ) -> np.ndarray:
        """Probabilities for ``population`` under the given direction."""
        if optimize is None:
            raise TypeError("Optimization must not be None.")

        probabilities = np.asarray(self.probabilities(population, count), dtype=float)
        if optimize is Optimize.MAXIMUM:
            return probabilities
        if self.sorted:
            return probabilities[::-1].copy()
        return self._invert(probabilities)

    @staticmethod
    def _invert(probabilities: np.ndarray) -> np.ndarray:
        if len(probabilities) <= 1:
            return np.ones(len(probabilities))
        inverted = 1.0 - probabilities
        total = inverted.sum()
        if total <= 0.0:
            return np.full(len(probabilities), 1.0 / len(probabilities))
        return inverted / total

    def prepare(self, population: Population, optimize: Optimize) -> Population:
        """Population the probabilities refer to; sorted selectors sort a copy."""
        if self.sorted:
            return population.copy().sort(Optimize.MAXIMUM)
        return population

    def select(
        self,
        population: Population,
        count: int,
        optimize: Optimize = Optimize.MAXIMUM,
        rng: Optional[random.Random] = None
    ) -> Population:
        if population is None:
            raise TypeError("Population must not be None.")
        if optimize is None:
            raise TypeError("Optimization must not be None.")
        check_count(count)

        selection = Population()
        if count == 0 or len(population) == 0:
            return selection

        pop = self.prepare(population, optimize)
        probabilities = self.oriented_probabilities(pop, count, optimize)
        assert len(pop) == len(probabilities), \
            "Population size and probability length are not equal."

        probabilities = check_and_correct(probabilities)
        assert sum_to_one(probabilities), "Probabilities doesn't sum to one."

        self._draw(pop, np.cumsum(probabilities), count, resolve(rng), selection)
        return selection

    def _draw(
        self,
        population: Population,
        cumulative: np.ndarray,
        count: int,
        rng,
        selection: Population
    ) -> None:
        last = len(population) - 1
        for _ in range(count):
            index = int(np.searchsorted(cumulative, rng.random(), side="right"))
            selection.append(population[min(index, last)])
