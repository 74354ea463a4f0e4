"""
Gene Representation for the evolver engine.

This module defines the gene types a chromosome is built from. Genes are
immutable values; "changing" a gene always produces a new instance.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple
import random
import string

from src.evolver.core.randomness import resolve


class Gene(ABC):
    """
    Base class for a gene.

    A gene carries one allele and knows how to create a new random gene
    under the same constraints.
    """

    @property
    @abstractmethod
    def allele(self) -> Any:
        """The value carried by this gene."""

    @abstractmethod
    def is_valid(self) -> bool:
        """Check whether the allele satisfies the gene's constraints."""

    @abstractmethod
    def new_instance(self, rng: Optional[random.Random] = None) -> "Gene":
        """Create an independent random gene with the same constraints."""

    def copy(self) -> "Gene":
        """Genes are immutable, the copy is the gene itself."""
        return self


@dataclass(frozen=True)
class BitGene(Gene):
    """A gene holding a single bit."""

    value: bool = False

    @property
    def allele(self) -> bool:
        return self.value

    def is_valid(self) -> bool:
        return True

    def new_instance(self, rng: Optional[random.Random] = None) -> "BitGene":
        return BitGene(resolve(rng).random() < 0.5)

    def __str__(self) -> str:
        return "1" if self.value else "0"


DEFAULT_CHARACTERS = string.ascii_letters + string.digits + string.punctuation + " "


@dataclass(frozen=True)
class CharacterGene(Gene):
    """A gene holding one character out of a set of valid characters."""

    value: str
    valid_characters: str = DEFAULT_CHARACTERS

    @classmethod
    def of(
        cls,
        valid_characters: str = DEFAULT_CHARACTERS,
        rng: Optional[random.Random] = None
    ) -> "CharacterGene":
        """Create a random character gene."""
        if not valid_characters:
            raise ValueError("Valid characters must not be empty.")
        return cls(resolve(rng).choice(valid_characters), valid_characters)

    @property
    def allele(self) -> str:
        return self.value

    def is_valid(self) -> bool:
        return len(self.value) == 1 and self.value in self.valid_characters

    def new_instance(self, rng: Optional[random.Random] = None) -> "CharacterGene":
        return CharacterGene.of(self.valid_characters, rng)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberGene(Gene):
    """
    Base class for numeric genes with a value range.

    Numeric genes support the arithmetic mean, used by the mean alterer, and
    the creation of a clamped copy carrying a new value, used by the
    Gaussian mutator.
    """

    value: Any
    min: Any
    max: Any

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(
                f"Minimum ({self.min}) must not exceed maximum ({self.max})."
            )

    @property
    def allele(self) -> Any:
        return self.value

    def is_valid(self) -> bool:
        return self.min <= self.value <= self.max

    def clamp(self, value: Any) -> Any:
        """Clamp ``value`` into the gene's range."""
        return max(self.min, min(self.max, value))

    @abstractmethod
    def new_value(self, value: Any) -> "NumberGene":
        """Create a gene with the given (clamped) value and the same range."""

    def mean(self, other: "NumberGene") -> "NumberGene":
        """Create a gene carrying the arithmetic midpoint of both alleles."""
        return self.new_value((self.value + other.value) / 2)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DoubleGene(NumberGene):
    """A floating point gene with values in ``[min, max)``."""

    @classmethod
    def of(
        cls,
        min_value: float,
        max_value: float,
        rng: Optional[random.Random] = None
    ) -> "DoubleGene":
        """Create a random double gene."""
        value = resolve(rng).uniform(min_value, max_value)
        return cls(float(value), float(min_value), float(max_value))

    def new_value(self, value: float) -> "DoubleGene":
        return DoubleGene(float(self.clamp(value)), self.min, self.max)

    def new_instance(self, rng: Optional[random.Random] = None) -> "DoubleGene":
        return DoubleGene.of(self.min, self.max, rng)


@dataclass(frozen=True)
class IntegerGene(NumberGene):
    """An integer gene with values in ``[min, max]``."""

    @classmethod
    def of(
        cls,
        min_value: int,
        max_value: int,
        rng: Optional[random.Random] = None
    ) -> "IntegerGene":
        """Create a random integer gene."""
        return cls(resolve(rng).randint(min_value, max_value), int(min_value), int(max_value))

    def new_value(self, value: float) -> "IntegerGene":
        return IntegerGene(int(round(self.clamp(value))), self.min, self.max)

    def new_instance(self, rng: Optional[random.Random] = None) -> "IntegerGene":
        return IntegerGene.of(self.min, self.max, rng)


@dataclass(frozen=True)
class EnumGene(Gene):
    """A gene selecting one of a fixed tuple of alleles by index."""

    allele_index: int
    valid_alleles: Tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def of(
        cls,
        valid_alleles: Tuple[Any, ...],
        rng: Optional[random.Random] = None
    ) -> "EnumGene":
        """Create a random enum gene."""
        valid_alleles = tuple(valid_alleles)
        if not valid_alleles:
            raise ValueError("Valid alleles must not be empty.")
        return cls(resolve(rng).randrange(len(valid_alleles)), valid_alleles)

    @property
    def allele(self) -> Any:
        return self.valid_alleles[self.allele_index]

    def is_valid(self) -> bool:
        return 0 <= self.allele_index < len(self.valid_alleles)

    def new_instance(self, rng: Optional[random.Random] = None) -> "EnumGene":
        return EnumGene.of(self.valid_alleles, rng)

    def __str__(self) -> str:
        return str(self.allele)
