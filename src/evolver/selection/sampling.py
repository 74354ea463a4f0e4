"""
Selectors that sample the population directly instead of drawing from a
probability vector.
"""

from typing import Optional
import random

from src.evolver.core.optimize import Optimize
from src.evolver.core.population import Population
from src.evolver.core.randomness import resolve
from src.evolver.selection.base import Selector, check_count


class TournamentSelector(Selector):
    """
    Tournament selection.

    For every selected phenotype, ``sample_size + 1`` candidates are drawn
    uniformly with replacement and the best one under the optimization
    direction wins.
    """

    def __init__(self, sample_size: int = 3):
        if sample_size < 2:
            raise ValueError(f"Sample size must be greater than one, but was {sample_size}")
        self.sample_size = sample_size

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
        if self.sample_size > len(population):
            raise ValueError(
                f"Tournament size is greater than the population size! "
                f"{self.sample_size} > {len(population)}"
            )

        rng = resolve(rng)
        size = len(population)
        for _ in range(count):
            winner = population[rng.randrange(size)]
            for _ in range(self.sample_size):
                winner = optimize.best(winner, population[rng.randrange(size)])
            selection.append(winner)

        return selection

    def __repr__(self) -> str:
        return f"TournamentSelector(sample_size={self.sample_size})"


class TruncationSelector(Selector):
    """Selects the ``count`` best phenotypes, best first."""

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
        if count > len(population):
            raise ValueError(
                f"Selected population must be greater or equal to the population size "
                f"{count}, but was {len(population)}."
            )

        return Population(optimize.descending(population)[:count])


class MonteCarloSelector(Selector):
    """Selects phenotypes uniformly at random, ignoring their fitness."""

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

        rng = resolve(rng)
        size = len(population)
        for _ in range(count):
            selection.append(population[rng.randrange(size)])
        return selection
