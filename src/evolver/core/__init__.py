"""
Evolver Core Module - Genetic Algorithm Components.

This module contains the data model of the evolver framework (genes,
chromosomes, genotypes, phenotypes and populations), the statistics and
termination helpers and the main evolution engine.
"""

from src.evolver.core.config import (
    EvolverConfig,
    EvolutionParameters,
    LoggingConfig,
    ParallelizationConfig,
    create_default_config,
    create_test_config,
    create_parallel_config
)

from src.evolver.core.optimize import Optimize

from src.evolver.core.gene import (
    Gene,
    BitGene,
    CharacterGene,
    NumberGene,
    DoubleGene,
    IntegerGene,
    EnumGene
)

from src.evolver.core.chromosome import (
    Chromosome,
    BitChromosome,
    CharacterChromosome,
    NumberChromosome,
    DoubleChromosome,
    IntegerChromosome,
    PermutationChromosome
)

from src.evolver.core.genotype import Genotype

from src.evolver.core.phenotype import Phenotype

from src.evolver.core.population import Population

from src.evolver.core.statistics import (
    Statistics,
    NumberStatistics,
    StatisticsBuilder,
    NumberStatisticsBuilder,
    Calculator,
    NumberStatisticsCalculator,
    Time
)

from src.evolver.core.termination import (
    generation_limit,
    fitness_threshold,
    SteadyFitness
)

from src.evolver.core.engine import (
    GeneticAlgorithm,
    EvolutionStateError
)

__all__ = [
    # Configuration
    "EvolverConfig",
    "EvolutionParameters",
    "LoggingConfig",
    "ParallelizationConfig",
    "create_default_config",
    "create_test_config",
    "create_parallel_config",
    "Optimize",

    # Genetic representation
    "Gene",
    "BitGene",
    "CharacterGene",
    "NumberGene",
    "DoubleGene",
    "IntegerGene",
    "EnumGene",
    "Chromosome",
    "BitChromosome",
    "CharacterChromosome",
    "NumberChromosome",
    "DoubleChromosome",
    "IntegerChromosome",
    "PermutationChromosome",
    "Genotype",
    "Phenotype",

    # Population management
    "Population",

    # Statistics
    "Statistics",
    "NumberStatistics",
    "StatisticsBuilder",
    "NumberStatisticsBuilder",
    "Calculator",
    "NumberStatisticsCalculator",
    "Time",

    # Termination
    "generation_limit",
    "fitness_threshold",
    "SteadyFitness",

    # Engine
    "GeneticAlgorithm",
    "EvolutionStateError"
]
