"""
Termination predicates for ``GeneticAlgorithm.evolve(predicate)``.

Each predicate receives the latest :class:`Statistics` and returns True as
long as the evolution should go on.
"""

from typing import Any, Callable, Optional

from src.evolver.core.statistics import Statistics


def generation_limit(generations: int) -> Callable[[Statistics], bool]:
    """Continue until the given generation has been reached."""
    if generations < 1:
        raise ValueError(f"Generation limit must be positive: {generations}")

    def predicate(statistics: Statistics) -> bool:
        return statistics.generation < generations

    return predicate


def fitness_threshold(threshold: Any) -> Callable[[Statistics], bool]:
    """Continue while the best fitness has not reached ``threshold``."""

    def predicate(statistics: Statistics) -> bool:
        best = statistics.best_fitness
        if best is None:
            return True
        return statistics.optimize.compare(best, threshold) < 0

    return predicate


class SteadyFitness:
    """
    Continue until the best fitness did not improve for ``generations``
    consecutive generations.
    """

    def __init__(self, generations: int):
        if generations < 1:
            raise ValueError(f"Number of steady generations must be positive: {generations}")
        self.generations = generations
        self._best: Optional[Any] = None
        self._stable = 0

    def __call__(self, statistics: Statistics) -> bool:
        fitness = statistics.best_fitness
        if fitness is None:
            return True

        if self._best is None or statistics.optimize.compare(fitness, self._best) > 0:
            self._best = fitness
            self._stable = 0
        else:
            self._stable += 1

        return self._stable < self.generations

    def __repr__(self) -> str:
        return f"SteadyFitness({self.generations})"
