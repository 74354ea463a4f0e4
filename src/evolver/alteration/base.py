"""
Base classes for alterers (mutation and recombination operators).

An alterer changes the offspring population in place and reports how many
changes it made.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Tuple
import random

from src.evolver.core.population import Population
from src.evolver.core.randomness import check_probability


class Alterer(ABC):
    """Interface of all alterers."""

    @abstractmethod
    def alter(
        self,
        population: Population,
        generation: int,
        rng: Optional[random.Random] = None
    ) -> int:
        """
        Alter the population in place.

        Args:
            population: Population to alter; its size is never changed
            generation: Current generation, stamped on new phenotypes
            rng: Random source, the :mod:`random` module if omitted

        Returns:
            Number of alterations performed
        """
        pass


class AbstractAlterer(Alterer):
    """Alterer with an alteration probability in [0, 1]."""

    def __init__(self, probability: float):
        self.probability = check_probability(probability, "Alter probability")

    def __eq__(self, other) -> bool:
        return type(other) is type(self) and vars(other) == vars(self)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.probability))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(probability={self.probability})"


class NullAlterer(Alterer):
    """Leaves the population unchanged."""

    probability = 0.0

    def alter(
        self,
        population: Population,
        generation: int,
        rng: Optional[random.Random] = None
    ) -> int:
        return 0

    def __eq__(self, other) -> bool:
        return isinstance(other, NullAlterer)

    def __hash__(self) -> int:
        return hash(NullAlterer)

    def __repr__(self) -> str:
        return "NullAlterer()"


class CompositeAlterer(AbstractAlterer):
    """
    Applies a sequence of alterers one after the other.

    Nested composites are flattened at construction, so the alterer list is
    always one level deep.
    """

    def __init__(self, *alterers: Alterer):
        super().__init__(1.0)
        self._alterers: Tuple[Alterer, ...] = tuple(self.normalize(alterers))

    @staticmethod
    def normalize(alterers: Iterable[Alterer]):
        """Yield the alterers with every nested composite unpacked."""
        for alterer in alterers:
            if alterer is None:
                raise TypeError("Alterer must not be None.")
            if isinstance(alterer, CompositeAlterer):
                yield from CompositeAlterer.normalize(alterer.alterers)
            else:
                yield alterer

    @property
    def alterers(self) -> Tuple[Alterer, ...]:
        return self._alterers

    def alter(
        self,
        population: Population,
        generation: int,
        rng: Optional[random.Random] = None
    ) -> int:
        return sum(
            alterer.alter(population, generation, rng)
            for alterer in self._alterers
        )

    def append(self, alterer: Alterer) -> "CompositeAlterer":
        """Return a new composite with ``alterer`` added at the end."""
        return CompositeAlterer(*self._alterers, alterer)

    @staticmethod
    def join(first: Alterer, second: Alterer) -> "CompositeAlterer":
        """Combine two alterers into one composite."""
        return CompositeAlterer(first, second)

    def __len__(self) -> int:
        return len(self._alterers)

    def __iter__(self):
        return iter(self._alterers)

    def __eq__(self, other) -> bool:
        return isinstance(other, CompositeAlterer) and self._alterers == other._alterers

    def __hash__(self) -> int:
        return hash(self._alterers)

    def __repr__(self) -> str:
        return f"CompositeAlterer{self._alterers!r}"
