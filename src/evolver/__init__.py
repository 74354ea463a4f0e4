"""
Evolver - Generic Evolutionary Algorithm Framework.

This package evolves populations of candidate solutions toward better
fitness. It provides the genetic data model, fitness proportional and
sampling selectors, mutation and recombination alterers, per-generation
statistics and the generational engine coordinating them.
"""

from src.evolver.core import (
    EvolverConfig,
    EvolutionParameters,
    LoggingConfig,
    ParallelizationConfig,
    create_default_config,
    create_test_config,
    create_parallel_config,
    Optimize,
    Gene,
    BitGene,
    CharacterGene,
    DoubleGene,
    IntegerGene,
    EnumGene,
    Chromosome,
    BitChromosome,
    CharacterChromosome,
    DoubleChromosome,
    IntegerChromosome,
    PermutationChromosome,
    Genotype,
    Phenotype,
    Population,
    Statistics,
    NumberStatistics,
    Calculator,
    NumberStatisticsCalculator,
    GeneticAlgorithm,
    EvolutionStateError,
    generation_limit,
    fitness_threshold,
    SteadyFitness
)
from src.evolver.selection import (
    Selector,
    ProbabilitySelector,
    RouletteWheelSelector,
    BoltzmannSelector,
    LinearRankSelector,
    ExponentialRankSelector,
    StochasticUniversalSelector,
    TournamentSelector,
    TruncationSelector,
    MonteCarloSelector
)
from src.evolver.alteration import (
    Alterer,
    CompositeAlterer,
    NullAlterer,
    Mutator,
    SwapMutator,
    GaussianMutator,
    SinglePointCrossover,
    MultiPointCrossover,
    PartiallyMatchedCrossover,
    MeanAlterer
)
from src.evolver.fitness import FitnessFunction, FitnessScaler

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "EvolverConfig",
    "EvolutionParameters",
    "LoggingConfig",
    "ParallelizationConfig",
    "create_default_config",
    "create_test_config",
    "create_parallel_config",
    # Data model
    "Optimize",
    "Gene",
    "BitGene",
    "CharacterGene",
    "DoubleGene",
    "IntegerGene",
    "EnumGene",
    "Chromosome",
    "BitChromosome",
    "CharacterChromosome",
    "DoubleChromosome",
    "IntegerChromosome",
    "PermutationChromosome",
    "Genotype",
    "Phenotype",
    "Population",
    # Statistics
    "Statistics",
    "NumberStatistics",
    "Calculator",
    "NumberStatisticsCalculator",
    # Engine
    "GeneticAlgorithm",
    "EvolutionStateError",
    "generation_limit",
    "fitness_threshold",
    "SteadyFitness",
    # Selectors
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
    # Alterers
    "Alterer",
    "CompositeAlterer",
    "NullAlterer",
    "Mutator",
    "SwapMutator",
    "GaussianMutator",
    "SinglePointCrossover",
    "MultiPointCrossover",
    "PartiallyMatchedCrossover",
    "MeanAlterer",
    # Fitness
    "FitnessFunction",
    "FitnessScaler"
]
