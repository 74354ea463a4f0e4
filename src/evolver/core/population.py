"""
Population Management for the evolver engine.

This module manages the ordered collection of phenotypes the engine evolves,
including bulk filling, fitness ordering and simple fitness queries.
"""

from collections.abc import MutableSequence
from typing import Any, Callable, Iterable, List, Optional
import numpy as np

from src.evolver.core.optimize import Optimize
from src.evolver.core.phenotype import Phenotype


class Population(MutableSequence):
    """
    Ordered, mutable collection of phenotypes.

    Behaves like a list: index addressable, insertion order is kept unless
    the population is sorted explicitly.
    """

    def __init__(self, phenotypes: Optional[Iterable[Phenotype]] = None):
        """Initialize population with optional phenotypes."""
        self.phenotypes: List[Phenotype] = list(phenotypes) if phenotypes is not None else []

    def __len__(self) -> int:
        return len(self.phenotypes)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Population(self.phenotypes[index])
        return self.phenotypes[index]

    def __setitem__(self, index, phenotype) -> None:
        self.phenotypes[index] = phenotype

    def __delitem__(self, index) -> None:
        del self.phenotypes[index]

    def insert(self, index: int, phenotype: Phenotype) -> None:
        self.phenotypes.insert(index, phenotype)

    def fill(self, factory: Callable[[], Phenotype], count: int) -> "Population":
        """Append ``count`` phenotypes created by ``factory``."""
        for _ in range(count):
            self.phenotypes.append(factory())
        return self

    def copy(self) -> "Population":
        """Shallow copy; phenotypes are immutable and shared."""
        return Population(self.phenotypes)

    def sort(self, optimize: Optimize = Optimize.MAXIMUM) -> "Population":
        """Sort in place so that the best phenotype comes first."""
        self.phenotypes = optimize.descending(self.phenotypes)
        return self

    def evaluate(self) -> "Population":
        """Evaluate the fitness of every phenotype."""
        for phenotype in self.phenotypes:
            phenotype.evaluate()
        return self

    def fitness_values(self) -> np.ndarray:
        """Scaled fitness values as a float array, in population order."""
        return np.array([float(pt.fitness) for pt in self.phenotypes], dtype=float)

    def best(self, optimize: Optimize = Optimize.MAXIMUM) -> Optional[Phenotype]:
        """Return the best phenotype, or None if the population is empty."""
        best = None
        for phenotype in self.phenotypes:
            best = phenotype if best is None else optimize.best(best, phenotype)
        return best

    def worst(self, optimize: Optimize = Optimize.MAXIMUM) -> Optional[Phenotype]:
        """Return the worst phenotype, or None if the population is empty."""
        worst = None
        for phenotype in self.phenotypes:
            worst = phenotype if worst is None else optimize.worst(worst, phenotype)
        return worst

    def genotypes(self) -> List[Any]:
        return [pt.genotype for pt in self.phenotypes]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Population):
            return self.phenotypes == other.phenotypes
        return NotImplemented

    def __repr__(self) -> str:
        return f"Population(size={len(self.phenotypes)})"

    def __str__(self) -> str:
        return "\n".join(str(pt) for pt in self.phenotypes)
