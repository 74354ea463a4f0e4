"""
Unit tests for the fitness proportional selectors.

Tests verify that probability vectors are valid distributions, that rank
based vectors are monotone and that selection follows the optimization
direction.
"""

import random
from collections import Counter

import numpy as np
import pytest

from src.evolver.core.optimize import Optimize
from src.evolver.core.population import Population
from src.evolver.selection import (
    RouletteWheelSelector,
    BoltzmannSelector,
    LinearRankSelector,
    ExponentialRankSelector,
    StochasticUniversalSelector
)
from src.evolver.selection.base import check_and_correct, sum_to_one, ulp_eq


SELECTORS = [
    RouletteWheelSelector(),
    BoltzmannSelector(2.0),
    BoltzmannSelector(-2.0),
    LinearRankSelector(0.5),
    ExponentialRankSelector(0.9),
    StochasticUniversalSelector(),
]

FITNESS_SETS = [
    [1.0, 2.0, 3.0, 4.0, 5.0],
    [-3.0, 0.5, 10.0, 2.0, -7.5, 4.0],
    [2.0, 2.0, 2.0],
    [0.0, 0.0],
    [42.0],
]


class TestProbabilityVectors:
    """Test the probability vectors of all proportional selectors."""

    @pytest.mark.parametrize("selector", SELECTORS, ids=repr)
    @pytest.mark.parametrize("values", FITNESS_SETS)
    @pytest.mark.parametrize("optimize", [Optimize.MAXIMUM, Optimize.MINIMUM])
    def test_probabilities_form_distribution(self, selector, values, optimize, make_population):
        """Test that probabilities are non-negative and sum to one."""
        population = selector.prepare(make_population(values), optimize)

        probabilities = selector.oriented_probabilities(population, 10, optimize)

        assert len(probabilities) == len(values)
        assert np.all(probabilities >= 0.0)
        assert abs(probabilities.sum() - 1.0) < 1e-6

    @pytest.mark.parametrize("selector", [
        LinearRankSelector(0.0),
        LinearRankSelector(0.5),
        ExponentialRankSelector(0.0),
        ExponentialRankSelector(0.5),
        ExponentialRankSelector(0.975),
    ], ids=repr)
    def test_rank_probabilities_non_increasing(self, selector, make_population):
        """Test that rank based probabilities decrease with the rank."""
        population = make_population([5.0, 1.0, 8.0, 3.0, 7.0, 2.0]).sort(Optimize.MAXIMUM)

        probabilities = selector.probabilities(population, 6)

        assert np.all(np.diff(probabilities) <= 1e-15)

    def test_linear_rank_extremes(self, make_population):
        """Test the probabilities of the best and the worst phenotype."""
        population = make_population([1.0, 2.0, 3.0, 4.0]).sort(Optimize.MAXIMUM)

        probabilities = LinearRankSelector(0.5).probabilities(population, 4)

        assert probabilities[0] == pytest.approx(1.5 / 4)
        assert probabilities[-1] == pytest.approx(0.5 / 4)

    def test_roulette_wheel_proportional(self, make_population):
        """Test roulette wheel probabilities relative to the minimum fitness."""
        population = make_population([1.0, 2.0, 4.0])

        probabilities = RouletteWheelSelector().probabilities(population, 3)

        np.testing.assert_allclose(probabilities, [0.0, 0.25, 0.75])

    def test_roulette_wheel_uniform_fallback(self, make_population):
        """Test that equal fitness values give uniform probabilities."""
        probabilities = RouletteWheelSelector().probabilities(make_population([3.0] * 4), 4)

        np.testing.assert_allclose(probabilities, [0.25] * 4)

    def test_boltzmann_zero_is_uniform(self, make_population):
        """Test that b = 0 gives uniform probabilities."""
        probabilities = BoltzmannSelector(0.0).probabilities(make_population([1.0, 5.0, 9.0]), 3)

        np.testing.assert_allclose(probabilities, [1 / 3] * 3)

    def test_boltzmann_direction(self, make_population):
        """Test that the sign of b decides which phenotypes are favored."""
        population = make_population([1.0, 5.0, 9.0])

        positive = BoltzmannSelector(3.0).probabilities(population, 3)
        negative = BoltzmannSelector(-3.0).probabilities(population, 3)

        assert positive[2] > positive[1] > positive[0]
        assert negative[0] > negative[1] > negative[2]

    def test_minimum_favors_low_fitness(self, make_population):
        """Test that the inverted vector favors low fitness values."""
        selector = RouletteWheelSelector()
        population = make_population([1.0, 2.0, 4.0])

        probabilities = selector.oriented_probabilities(population, 3, Optimize.MINIMUM)

        assert probabilities[0] > probabilities[1] > probabilities[2]

    def test_sorted_minimum_reverses(self, make_population):
        """Test that sorted selectors reverse the vector for minimization."""
        selector = LinearRankSelector(0.5)
        population = selector.prepare(make_population([1.0, 2.0, 3.0]), Optimize.MINIMUM)

        maximum = selector.oriented_probabilities(population, 3, Optimize.MAXIMUM)
        minimum = selector.oriented_probabilities(population, 3, Optimize.MINIMUM)

        np.testing.assert_allclose(minimum, maximum[::-1])

    @pytest.mark.parametrize("c", [-0.1, 1.0, 1.5])
    def test_exponential_rank_parameter(self, c):
        """Test the range check of c."""
        with pytest.raises(ValueError):
            ExponentialRankSelector(c)

    @pytest.mark.parametrize("n_minus", [-0.5, 2.5])
    def test_linear_rank_parameter(self, n_minus):
        """Test the range check of n_minus."""
        with pytest.raises(ValueError):
            LinearRankSelector(n_minus)


class TestProbabilityHelpers:
    """Test the probability vector helpers."""

    def test_non_finite_corrected_to_uniform(self):
        """Test that vectors with NaN or infinity become uniform."""
        corrected = check_and_correct(np.array([np.nan, 0.5, np.inf, 0.1]))

        np.testing.assert_allclose(corrected, [0.25] * 4)

    def test_sum_to_one(self):
        """Test the ulp based sum check."""
        assert sum_to_one(np.array([0.1] * 10))
        assert not sum_to_one(np.array([0.5, 0.4]))
        assert sum_to_one(np.array([]))

    def test_ulp_eq(self):
        """Test ulp equality around zero and one."""
        assert ulp_eq(1.0, 1.0 + 1e-12)
        assert ulp_eq(0.0, -0.0)
        assert not ulp_eq(1.0, 1.1)


class TestProbabilitySelection:
    """Test selection from probability vectors."""

    @pytest.mark.parametrize("selector", SELECTORS, ids=repr)
    def test_selection_size(self, selector, make_population):
        """Test that exactly count phenotypes are selected."""
        population = make_population([1.0, 2.0, 3.0, 4.0, 5.0])

        selection = selector.select(population, 12, Optimize.MAXIMUM, random.Random(3))

        assert isinstance(selection, Population)
        assert len(selection) == 12
        assert all(pt in population.phenotypes for pt in selection)

    def test_zero_count_and_empty_population(self, make_population):
        """Test the trivial selections."""
        selector = RouletteWheelSelector()

        assert len(selector.select(make_population([1.0, 2.0]), 0)) == 0
        assert len(selector.select(Population(), 5)) == 0

    def test_negative_count(self, make_population):
        """Test that negative counts are rejected."""
        with pytest.raises(ValueError):
            RouletteWheelSelector().select(make_population([1.0]), -1)

    def test_population_not_modified(self, make_population):
        """Test that sorted selectors do not reorder the input population."""
        population = make_population([3.0, 1.0, 2.0])

        LinearRankSelector().select(population, 5, Optimize.MAXIMUM, random.Random(1))

        assert list(population.fitness_values()) == [3.0, 1.0, 2.0]

    def test_zero_probability_never_selected(self, make_population):
        """Test that the worst phenotype is never drawn by the roulette wheel."""
        population = make_population([1.0, 2.0, 3.0])

        selection = RouletteWheelSelector().select(
            population, 500, Optimize.MAXIMUM, random.Random(11)
        )

        assert 1.0 not in [pt.fitness for pt in selection]

    def test_selection_frequencies(self, make_population):
        """Test that selection frequencies follow the probabilities."""
        population = make_population([1.0, 2.0, 4.0])

        selection = RouletteWheelSelector().select(
            population, 4000, Optimize.MAXIMUM, random.Random(5)
        )
        counts = Counter(pt.fitness for pt in selection)

        assert counts[4.0] / 4000 == pytest.approx(0.75, abs=0.05)
        assert counts[2.0] / 4000 == pytest.approx(0.25, abs=0.05)

    def test_stochastic_universal_spread(self, make_population):
        """Test that SUS selects each phenotype close to its expected count."""
        population = make_population([1.0, 2.0, 3.0, 5.0])
        probabilities = np.array([0.0, 1.0, 2.0, 4.0]) / 7.0

        selection = StochasticUniversalSelector().select(
            population, 70, Optimize.MAXIMUM, random.Random(2)
        )
        counts = Counter(pt.fitness for pt in selection)

        for value, p in zip([1.0, 2.0, 3.0, 5.0], probabilities):
            assert abs(counts[value] - 70 * p) <= 1.0

    def test_reproducible_with_seed(self, make_population):
        """Test that equal seeds give equal selections."""
        population = make_population([1.0, 2.0, 3.0, 4.0])
        selector = ExponentialRankSelector(0.8)

        first = selector.select(population, 10, Optimize.MAXIMUM, random.Random(9))
        second = selector.select(population, 10, Optimize.MAXIMUM, random.Random(9))

        assert [pt.fitness for pt in first] == [pt.fitness for pt in second]
