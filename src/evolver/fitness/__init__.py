"""
Fitness functions and fitness scalers for the evolver engine.
"""

from src.evolver.fitness.base import (
    FitnessFunction,
    CallableFitness,
    as_fitness_function
)

from src.evolver.fitness.scalers import (
    FitnessScaler,
    IdentityScaler,
    PowerScaler,
    ExponentialScaler,
    IDENTITY
)

__all__ = [
    # Base classes
    "FitnessFunction",
    "CallableFitness",
    "as_fitness_function",

    # Scalers
    "FitnessScaler",
    "IdentityScaler",
    "PowerScaler",
    "ExponentialScaler",
    "IDENTITY"
]
