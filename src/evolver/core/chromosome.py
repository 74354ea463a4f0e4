"""
Chromosome Representation for the evolver engine.

A chromosome is an immutable, non-empty sequence of genes of one kind. This
module provides the common base class and the bit, character, numeric and
permutation representations.
"""

from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple
import random

from src.evolver.core.gene import (
    BitGene,
    CharacterGene,
    DoubleGene,
    EnumGene,
    Gene,
    IntegerGene,
    DEFAULT_CHARACTERS
)
from src.evolver.core.randomness import resolve


class Chromosome:
    """
    Ordered, immutable sequence of genes.

    Subclasses only add representation specific factories and validity
    rules; copying, indexing and equality are shared.
    """

    def __init__(self, genes: Iterable[Gene]):
        genes = tuple(genes)
        if not genes:
            raise ValueError("Chromosome length must be greater than zero.")
        self._genes: Tuple[Gene, ...] = genes

    @property
    def length(self) -> int:
        """Number of genes in this chromosome."""
        return len(self._genes)

    def gene(self, index: int = 0) -> Gene:
        """Return the gene at ``index``."""
        return self._genes[index]

    def to_seq(self) -> List[Gene]:
        """Return the genes as a new, independently mutable list."""
        return list(self._genes)

    def is_valid(self) -> bool:
        """A chromosome is valid if all its genes are valid."""
        return all(gene.is_valid() for gene in self._genes)

    def new_instance(
        self,
        genes: Optional[Sequence[Gene]] = None,
        rng: Optional[random.Random] = None
    ) -> "Chromosome":
        """
        Create a new chromosome of the same kind.

        Args:
            genes: Genes of the new chromosome; a random chromosome with the
                same constraints is created when omitted
            rng: Random source for the random variant

        Returns:
            New chromosome instance
        """
        if genes is None:
            genes = [gene.new_instance(rng) for gene in self._genes]
        return self._with_genes(genes)

    def _with_genes(self, genes: Sequence[Gene]) -> "Chromosome":
        return type(self)(genes)

    def __len__(self) -> int:
        return len(self._genes)

    def __iter__(self) -> Iterator[Gene]:
        return iter(self._genes)

    def __getitem__(self, index):
        return self._genes[index]

    def __eq__(self, other: Any) -> bool:
        if other is self:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self._genes == other._genes

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._genes))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._genes)!r})"

    def __str__(self) -> str:
        return "[" + "|".join(str(gene) for gene in self._genes) + "]"


class BitChromosome(Chromosome):
    """Chromosome of bit genes."""

    @classmethod
    def of(
        cls,
        length: int,
        p: float = 0.5,
        rng: Optional[random.Random] = None
    ) -> "BitChromosome":
        """Create a random bit chromosome where each bit is set with probability ``p``."""
        rng = resolve(rng)
        return cls(BitGene(rng.random() < p) for _ in range(length))

    @classmethod
    def from_string(cls, bits: str) -> "BitChromosome":
        """Create a bit chromosome from a string of '0' and '1' characters."""
        if set(bits) - {"0", "1"}:
            raise ValueError(f"Invalid bit string: {bits!r}")
        return cls(BitGene(bit == "1") for bit in bits)

    def bit_count(self) -> int:
        """Number of set bits."""
        return sum(1 for gene in self if gene.allele)

    def __str__(self) -> str:
        return "".join(str(gene) for gene in self)


class CharacterChromosome(Chromosome):
    """Chromosome of character genes."""

    @classmethod
    def of(
        cls,
        length: int,
        valid_characters: str = DEFAULT_CHARACTERS,
        rng: Optional[random.Random] = None
    ) -> "CharacterChromosome":
        """Create a random character chromosome."""
        return cls(CharacterGene.of(valid_characters, rng) for _ in range(length))

    def __str__(self) -> str:
        return "".join(str(gene) for gene in self)


class NumberChromosome(Chromosome):
    """Chromosome of numeric genes sharing one value range."""

    @property
    def min(self) -> Any:
        return self.gene().min

    @property
    def max(self) -> Any:
        return self.gene().max

    def values(self) -> List[Any]:
        """Return the alleles of all genes."""
        return [gene.allele for gene in self]


class DoubleChromosome(NumberChromosome):
    """Chromosome of double genes."""

    @classmethod
    def of(
        cls,
        min_value: float,
        max_value: float,
        length: int = 1,
        rng: Optional[random.Random] = None
    ) -> "DoubleChromosome":
        """Create a random double chromosome with values in ``[min_value, max_value)``."""
        return cls(DoubleGene.of(min_value, max_value, rng) for _ in range(length))


class IntegerChromosome(NumberChromosome):
    """Chromosome of integer genes."""

    @classmethod
    def of(
        cls,
        min_value: int,
        max_value: int,
        length: int = 1,
        rng: Optional[random.Random] = None
    ) -> "IntegerChromosome":
        """Create a random integer chromosome with values in ``[min_value, max_value]``."""
        return cls(IntegerGene.of(min_value, max_value, rng) for _ in range(length))


class PermutationChromosome(Chromosome):
    """
    Chromosome encoding a permutation of a fixed set of alleles.

    All genes share the same ``valid_alleles`` tuple; the chromosome is only
    valid if every allele index occurs exactly once.
    """

    @classmethod
    def of(
        cls,
        valid_alleles: Iterable[Any],
        rng: Optional[random.Random] = None
    ) -> "PermutationChromosome":
        """Create a random permutation of ``valid_alleles``."""
        valid_alleles = tuple(valid_alleles)
        indexes = list(range(len(valid_alleles)))
        resolve(rng).shuffle(indexes)
        return cls(EnumGene(i, valid_alleles) for i in indexes)

    @classmethod
    def of_integers(
        cls,
        length: int,
        rng: Optional[random.Random] = None
    ) -> "PermutationChromosome":
        """Create a random permutation of ``0..length-1``."""
        return cls.of(range(length), rng)

    @property
    def valid_alleles(self) -> Tuple[Any, ...]:
        return self.gene().valid_alleles

    def is_valid(self) -> bool:
        indexes = [gene.allele_index for gene in self]
        return (
            super().is_valid() and
            all(gene.valid_alleles == self.valid_alleles for gene in self) and
            sorted(indexes) == list(range(len(self.valid_alleles)))
        )

    def new_instance(
        self,
        genes: Optional[Sequence[Gene]] = None,
        rng: Optional[random.Random] = None
    ) -> "PermutationChromosome":
        if genes is None:
            return PermutationChromosome.of(self.valid_alleles, rng)
        return PermutationChromosome(genes)

    def __str__(self) -> str:
        return "|".join(str(gene) for gene in self)
