"""
Base classes for fitness evaluation in the evolver engine.

This module provides the abstract fitness function contract and an adapter
that turns plain callables into fitness functions.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from src.evolver.core.genotype import Genotype


class FitnessFunction(ABC):
    """
    Abstract base class for fitness functions.

    Fitness functions map a genotype to a totally ordered value. They must
    be deterministic and free of shared mutable state, since the engine may
    call them from several threads at once.
    """

    @abstractmethod
    def evaluate(self, genotype: Genotype) -> Any:
        """
        Evaluate a genotype and return its fitness.

        Args:
            genotype: The genotype to evaluate

        Returns:
            Comparable fitness value
        """
        pass

    def __call__(self, genotype: Genotype) -> Any:
        return self.evaluate(genotype)


class CallableFitness(FitnessFunction):
    """Fitness function delegating to a plain callable."""

    def __init__(self, function: Callable[[Genotype], Any], name: Optional[str] = None):
        if function is None:
            raise TypeError("Fitness function must not be None.")
        self.function = function
        self.name = name or getattr(function, "__name__", type(function).__name__)

    def evaluate(self, genotype: Genotype) -> Any:
        return self.function(genotype)

    def __repr__(self) -> str:
        return f"CallableFitness({self.name})"


def as_fitness_function(function: Any) -> Callable[[Genotype], Any]:
    """
    Return ``function`` in a form the phenotype can call directly.

    Accepts fitness functions, plain callables and objects that only expose
    an ``evaluate`` method.
    """
    if function is None:
        raise TypeError("FitnessFunction must not be None.")
    if callable(function):
        return function
    if hasattr(function, "evaluate"):
        return CallableFitness(function.evaluate, type(function).__name__)
    raise TypeError(f"Not a fitness function: {function!r}")
