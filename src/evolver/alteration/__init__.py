"""
Alteration operators (mutation and recombination) for the evolver engine.
"""

from src.evolver.alteration.base import Alterer, AbstractAlterer, CompositeAlterer, NullAlterer
from src.evolver.alteration.mutation import Mutator, SwapMutator, GaussianMutator
from src.evolver.alteration.recombination import (
    Recombination,
    Crossover,
    SinglePointCrossover,
    MultiPointCrossover,
    PartiallyMatchedCrossover,
    MeanAlterer,
)

__all__ = [
    "Alterer",
    "AbstractAlterer",
    "CompositeAlterer",
    "NullAlterer",
    "Mutator",
    "SwapMutator",
    "GaussianMutator",
    "Recombination",
    "Crossover",
    "SinglePointCrossover",
    "MultiPointCrossover",
    "PartiallyMatchedCrossover",
    "MeanAlterer",
]
