"""
Unit tests for the mutation operators.

Tests cover:
- Alteration counts at the probability extremes
- Birth generation of mutated and untouched phenotypes
- Permutation safety of the swap mutator
- Range safety of the Gaussian mutator
"""

import random

import pytest

from src.evolver.alteration import GaussianMutator, Mutator, SwapMutator
from src.evolver.core.chromosome import (
    BitChromosome,
    DoubleChromosome,
    PermutationChromosome
)
from src.evolver.core.genotype import Genotype
from src.evolver.core.phenotype import Phenotype
from src.evolver.core.population import Population


def _population(genotype, size, rng, generation=0):
    return Population(
        Phenotype.of(genotype.new_instance(rng=rng), lambda gt: 0.0, generation=generation)
        for _ in range(size)
    )


class TestMutator:
    """Test suite for the gene replacing mutator."""

    def test_zero_probability(self, multi_double_genotype, rng):
        """Test that p = 0 leaves the population untouched."""
        population = _population(multi_double_genotype, 10, rng)
        before = list(population)

        alterations = Mutator(0.0).alter(population, 1, rng)

        assert alterations == 0
        assert all(a is b for a, b in zip(population, before))

    def test_full_probability(self, multi_double_genotype, rng):
        """Test that p = 1 mutates every gene of every phenotype."""
        population = _population(multi_double_genotype, 10, rng)
        before = list(population)

        alterations = Mutator(1.0).alter(population, 3, rng)

        assert alterations == multi_double_genotype.gene_count * 10
        assert len(population) == 10
        for old, new in zip(before, population):
            assert new is not old
            assert new.generation == 3
            assert new.genotype.is_valid()

    def test_fitness_function_kept(self, double_genotype, rng):
        """Test that mutated phenotypes keep fitness function and scaler."""
        function = lambda gt: 1.0
        population = Population([Phenotype.of(double_genotype, function, generation=0)])

        Mutator(1.0).alter(population, 1, rng)

        assert population[0].fitness_function is function

    def test_unchanged_phenotypes_keep_generation(self, bit_genotype):
        """Test that only mutated phenotypes get the new generation."""
        population = _population(bit_genotype, 50, random.Random(1), generation=2)

        alterations = Mutator(0.001).alter(population, 9, random.Random(7))

        changed = [pt for pt in population if pt.generation == 9]
        unchanged = [pt for pt in population if pt.generation == 2]
        assert len(changed) + len(unchanged) == 50
        assert len(changed) <= alterations

    def test_mutation_rate(self, rng):
        """Test that roughly probability * gene count genes are mutated."""
        genotype = Genotype.of(BitChromosome.of(100, rng=rng))
        population = _population(genotype, 100, rng)

        alterations = Mutator(0.1).alter(population, 1, random.Random(13))

        # 10000 genes, p = 0.1
        assert 400 <= alterations <= 1600

    @pytest.mark.parametrize("probability", [-0.1, 1.1])
    def test_invalid_probability(self, probability):
        """Test that probabilities outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            Mutator(probability)

    def test_equality(self):
        """Test value equality of mutators."""
        assert Mutator(0.2) == Mutator(0.2)
        assert Mutator(0.2) != Mutator(0.3)
        assert Mutator(0.2) != SwapMutator(0.2)
        assert hash(Mutator(0.2)) == hash(Mutator(0.2))


class TestSwapMutator:
    """Test suite for the swap mutator."""

    def test_zero_probability(self, permutation_genotype, rng):
        """Test that nothing is swapped with probability zero."""
        population = _population(permutation_genotype, 10, rng)
        before = list(population)

        alterations = SwapMutator(0.0).alter(population, 1, rng)

        assert alterations == 0
        assert all(pt is old for pt, old in zip(population, before))

    def test_permutations_stay_valid(self, permutation_genotype, rng):
        """Test that swapping keeps permutation chromosomes valid."""
        population = _population(permutation_genotype, 20, rng)

        alterations = SwapMutator(1.0).alter(population, 1, rng)

        assert alterations == 20 * 10
        assert all(pt.genotype.is_valid() for pt in population)

    def test_single_gene_chromosome(self, double_genotype, rng):
        """Test that chromosomes with one gene are not swapped."""
        population = _population(double_genotype, 5, rng)

        assert SwapMutator(1.0).alter(population, 1, rng) == 0

    def test_swap_keeps_alleles(self, rng):
        """Test that swapping only reorders the alleles."""
        genotype = Genotype.of(PermutationChromosome.of("abcdef", rng))
        population = Population([Phenotype.of(genotype, lambda gt: 0.0)])

        SwapMutator(1.0).alter(population, 1, rng)

        alleles = [g.allele for g in population[0].genotype.chromosome()]
        assert sorted(alleles) == list("abcdef")


class TestGaussianMutator:
    """Test suite for the Gaussian mutator."""

    def test_values_stay_in_range(self, rng):
        """Test that perturbed values are clamped into the gene range."""
        genotype = Genotype.of(DoubleChromosome.of(-1.0, 1.0, length=10, rng=rng))
        population = _population(genotype, 20, rng)

        alterations = GaussianMutator(1.0).alter(population, 1, rng)

        assert alterations == 200
        for phenotype in population:
            assert all(-1.0 <= v <= 1.0 for v in phenotype.genotype.chromosome().values())

    def test_non_numeric_genes_rejected(self, bit_genotype, rng):
        """Test that the Gaussian mutator requires numeric genes."""
        population = _population(bit_genotype, 2, rng)

        with pytest.raises(TypeError):
            GaussianMutator(1.0).alter(population, 1, rng)
