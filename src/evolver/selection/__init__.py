"""
Selection operators for the evolver engine.
"""

from src.evolver.selection.base import Selector, ProbabilitySelector
from src.evolver.selection.probability import (
    RouletteWheelSelector,
    BoltzmannSelector,
    LinearRankSelector,
    ExponentialRankSelector,
    StochasticUniversalSelector,
)
from src.evolver.selection.sampling import (
    TournamentSelector,
    TruncationSelector,
    MonteCarloSelector,
)

__all__ = [
    "Selector",
    "ProbabilitySelector",
    "RouletteWheelSelector",
    "BoltzmannSelector",
    "LinearRankSelector",
    "ExponentialRankSelector",
    "StochasticUniversalSelector",
    "TournamentSelector",
    "TruncationSelector",
    "MonteCarloSelector",
]
