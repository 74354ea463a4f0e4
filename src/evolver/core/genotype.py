"""
Genotype: the complete encoded candidate solution.
"""

from typing import Any, Callable, Iterable, Iterator, Optional, Sequence, Tuple, Union
import random

from src.evolver.core.chromosome import Chromosome


class Genotype:
    """
    Immutable, non-empty sequence of chromosomes.

    A genotype doubles as the prototype used to seed populations:
    ``new_instance()`` creates an independent random genotype with the same
    structure.
    """

    def __init__(self, chromosomes: Iterable[Chromosome]):
        chromosomes = tuple(chromosomes)
        if not chromosomes:
            raise ValueError("Genotype must contain at least one chromosome.")
        self._chromosomes: Tuple[Chromosome, ...] = chromosomes

    @classmethod
    def of(cls, *chromosomes: Chromosome) -> "Genotype":
        """Create a genotype from the given chromosomes."""
        return cls(chromosomes)

    @property
    def length(self) -> int:
        """Number of chromosomes."""
        return len(self._chromosomes)

    @property
    def gene_count(self) -> int:
        """Total number of genes over all chromosomes."""
        return sum(chromosome.length for chromosome in self._chromosomes)

    @property
    def chromosomes(self) -> Tuple[Chromosome, ...]:
        return self._chromosomes

    def chromosome(self, index: int = 0) -> Chromosome:
        return self._chromosomes[index]

    def gene(self):
        """The first gene of the first chromosome."""
        return self._chromosomes[0].gene()

    def is_valid(self) -> bool:
        """A genotype is valid if all its chromosomes are valid."""
        return all(chromosome.is_valid() for chromosome in self._chromosomes)

    def new_instance(
        self,
        chromosomes: Optional[Sequence[Chromosome]] = None,
        rng: Optional[random.Random] = None
    ) -> "Genotype":
        """
        Create a new genotype.

        Args:
            chromosomes: Chromosomes of the new genotype; random chromosomes
                with the same constraints are created when omitted
            rng: Random source for the random variant
        """
        if chromosomes is None:
            chromosomes = [c.new_instance(rng=rng) for c in self._chromosomes]
        return Genotype(chromosomes)

    def __len__(self) -> int:
        return len(self._chromosomes)

    def __iter__(self) -> Iterator[Chromosome]:
        return iter(self._chromosomes)

    def __getitem__(self, index):
        return self._chromosomes[index]

    def __eq__(self, other: Any) -> bool:
        if other is self:
            return True
        if not isinstance(other, Genotype):
            return NotImplemented
        return self._chromosomes == other._chromosomes

    def __hash__(self) -> int:
        return hash(self._chromosomes)

    def __repr__(self) -> str:
        return f"Genotype({list(self._chromosomes)!r})"

    def __str__(self) -> str:
        return "[" + ",".join(str(c) for c in self._chromosomes) + "]"


GenotypeFactory = Union[Genotype, Callable[[], Genotype]]


def as_factory(factory: GenotypeFactory) -> Callable[[Optional[random.Random]], Genotype]:
    """
    Normalise a genotype factory into a callable taking a random source.

    Genotype prototypes receive the random source; plain zero-argument
    callables are called as they are.
    """
    if factory is None:
        raise TypeError("GenotypeFactory must not be None.")
    if isinstance(factory, Genotype) or hasattr(factory, "new_instance"):
        return lambda rng=None: factory.new_instance(rng=rng)
    if callable(factory):
        return lambda rng=None: factory()
    raise TypeError(f"Not a genotype factory: {factory!r}")
