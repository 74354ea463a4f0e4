"""
Unit tests for the composite and null alterers.
"""

import random

import pytest

from src.evolver.alteration import (
    Alterer,
    CompositeAlterer,
    GaussianMutator,
    Mutator,
    NullAlterer,
    SinglePointCrossover,
    SwapMutator
)
from src.evolver.core.population import Population


class FixedAlterer(Alterer):
    """Alterer reporting a fixed number of alterations and recording its calls."""

    def __init__(self, count, calls=None):
        self.count = count
        self.calls = calls if calls is not None else []

    def alter(self, population, generation, rng=None):
        self.calls.append((self, generation))
        return self.count


class TestCompositeAlterer:
    """Test suite for composite alterers."""

    def test_nested_composites_are_flattened(self):
        """Test that nested composites become one flat alterer list."""
        mutator = Mutator(0.1)
        gaussian = GaussianMutator(0.2)
        swap = SwapMutator(0.3)

        composite = CompositeAlterer.join(
            CompositeAlterer(mutator, gaussian),
            CompositeAlterer(swap)
        )

        assert len(composite) == 3
        assert composite.alterers == (mutator, gaussian, swap)
        assert not any(isinstance(a, CompositeAlterer) for a in composite)

    def test_deep_nesting(self):
        """Test flattening over several levels."""
        inner = CompositeAlterer(Mutator(0.1), CompositeAlterer(SwapMutator(0.1)))
        outer = CompositeAlterer(inner, CompositeAlterer(CompositeAlterer(Mutator(0.5))))

        assert [type(a) for a in outer] == [Mutator, SwapMutator, Mutator]

    def test_probability_is_one(self):
        """Test that the composite itself always applies."""
        assert CompositeAlterer(Mutator(0.1)).probability == 1.0

    def test_alterations_are_summed(self):
        """Test that the alteration counts of all children are added up."""
        composite = CompositeAlterer(FixedAlterer(2), FixedAlterer(5), FixedAlterer(0))

        assert composite.alter(Population(), 3) == 7

    def test_children_applied_in_order(self):
        """Test that children are applied in their list order."""
        calls = []
        first, second = FixedAlterer(1, calls), FixedAlterer(1, calls)

        CompositeAlterer(first, second).alter(Population(), 4, random.Random(1))

        assert calls == [(first, 4), (second, 4)]

    def test_append(self):
        """Test that appending returns a new, longer composite."""
        composite = CompositeAlterer(Mutator(0.1))

        appended = composite.append(CompositeAlterer(SwapMutator(0.2), Mutator(0.3)))

        assert len(composite) == 1
        assert len(appended) == 3

    def test_none_rejected(self):
        """Test that None children are rejected."""
        with pytest.raises(TypeError):
            CompositeAlterer(Mutator(0.1), None)

    def test_equality(self):
        """Test value equality of composites."""
        assert CompositeAlterer(Mutator(0.1), SinglePointCrossover(0.2)) == \
            CompositeAlterer(Mutator(0.1), SinglePointCrossover(0.2))
        assert CompositeAlterer(Mutator(0.1)) != CompositeAlterer(Mutator(0.2))

    def test_empty_composite(self):
        """Test that an empty composite performs no alterations."""
        assert CompositeAlterer().alter(Population(), 1) == 0


class TestNullAlterer:
    """Test suite for the null alterer."""

    def test_no_alterations(self, make_population):
        """Test that the null alterer leaves the population unchanged."""
        population = make_population([1.0, 2.0])
        before = list(population)

        assert NullAlterer().alter(population, 1) == 0
        assert list(population) == before

    def test_equality(self):
        """Test that all null alterers are equal."""
        assert NullAlterer() == NullAlterer()
        assert hash(NullAlterer()) == hash(NullAlterer())
