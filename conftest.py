"""
PyTest configuration and fixtures for the evolver framework.

This module provides shared fixtures: seeded random sources, genotype
prototypes, fitness functions and a quiet Logfire configuration.
"""

import os
import sys
import random

import pytest
import logfire

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.core.config import settings
from src.evolver.core.chromosome import (
    BitChromosome,
    DoubleChromosome,
    PermutationChromosome
)
from src.evolver.core.config import create_test_config
from src.evolver.core.genotype import Genotype
from src.evolver.core.phenotype import Phenotype
from src.evolver.core.population import Population


# Override settings for testing
settings.environment = "testing"
settings.logfire_environment = "testing"

logfire.configure(send_to_logfire=False, console=False)


class CountingFitness:
    """Fitness function recording how often it was called."""

    def __init__(self, function=None):
        self.function = function or (lambda gt: gt.gene().allele)
        self.calls = 0

    def __call__(self, genotype):
        self.calls += 1
        return self.function(genotype)


def double_value(genotype):
    """Fitness of a single double gene genotype: the allele itself."""
    return genotype.gene().allele


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def double_genotype(rng):
    """Genotype with one double chromosome of length 1 in [0, 1)."""
    return Genotype.of(DoubleChromosome.of(0.0, 1.0, rng=rng))


@pytest.fixture
def multi_double_genotype(rng):
    """Genotype with two double chromosomes of length 5 in [0, 10)."""
    return Genotype.of(
        DoubleChromosome.of(0.0, 10.0, length=5, rng=rng),
        DoubleChromosome.of(0.0, 10.0, length=5, rng=rng)
    )


@pytest.fixture
def bit_genotype(rng):
    """Genotype with one bit chromosome of length 20."""
    return Genotype.of(BitChromosome.of(20, rng=rng))


@pytest.fixture
def permutation_genotype(rng):
    """Genotype with one permutation chromosome of ten integers."""
    return Genotype.of(PermutationChromosome.of_integers(10, rng))


@pytest.fixture
def counting_fitness():
    """Fitness function counting its invocations."""
    return CountingFitness()


@pytest.fixture
def test_config():
    """Small, sequential and seeded engine configuration."""
    return create_test_config()


@pytest.fixture
def make_population():
    """Factory creating a population with the given fitness values."""

    def _make(values, generation=1):
        return Population(
            Phenotype.of(
                Genotype.of(DoubleChromosome.of(value, value, rng=random.Random(i))),
                double_value,
                generation=generation
            )
            for i, value in enumerate(values)
        )

    return _make
