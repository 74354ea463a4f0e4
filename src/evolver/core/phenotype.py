"""
Phenotype: a genotype bound to its (lazily evaluated) fitness.
"""

from typing import Any, Callable, Optional
import threading

from src.evolver.core.genotype import Genotype
from src.evolver.fitness.base import as_fitness_function
from src.evolver.fitness.scalers import IDENTITY

_UNSET = object()


class Phenotype:
    """
    A genotype together with its fitness function, fitness scaler and the
    generation it was created in.

    The raw and the scaled fitness are computed on first access and cached;
    the fitness function is called at most once per phenotype. Phenotypes
    are ordered by their scaled fitness.
    """

    __slots__ = (
        "_genotype",
        "_fitness_function",
        "_fitness_scaler",
        "_generation",
        "_raw_fitness",
        "_fitness",
        "_lock",
    )

    def __init__(
        self,
        genotype: Genotype,
        fitness_function: Callable[[Genotype], Any],
        fitness_scaler: Optional[Callable[[Any], Any]] = None,
        generation: int = 0
    ):
        if genotype is None:
            raise TypeError("Genotype must not be None.")
        if generation < 0:
            raise ValueError(f"Generation must not be negative: {generation}")

        self._genotype = genotype
        self._fitness_function = as_fitness_function(fitness_function)
        self._fitness_scaler = fitness_scaler if fitness_scaler is not None else IDENTITY
        self._generation = generation
        self._raw_fitness = _UNSET
        self._fitness = _UNSET
        self._lock = threading.Lock()

    @classmethod
    def of(
        cls,
        genotype: Genotype,
        fitness_function: Callable[[Genotype], Any],
        fitness_scaler: Optional[Callable[[Any], Any]] = None,
        generation: int = 0
    ) -> "Phenotype":
        """Create a new, not yet evaluated phenotype."""
        return cls(genotype, fitness_function, fitness_scaler, generation)

    @property
    def genotype(self) -> Genotype:
        return self._genotype

    @property
    def fitness_function(self) -> Callable[[Genotype], Any]:
        return self._fitness_function

    @property
    def fitness_scaler(self) -> Callable[[Any], Any]:
        return self._fitness_scaler

    @property
    def generation(self) -> int:
        """The generation this phenotype was created in."""
        return self._generation

    @property
    def is_evaluated(self) -> bool:
        return self._fitness is not _UNSET

    def evaluate(self) -> "Phenotype":
        """Evaluate the fitness, if not already done, and return ``self``."""
        if self._fitness is _UNSET:
            with self._lock:
                if self._fitness is _UNSET:
                    raw = self._fitness_function(self._genotype)
                    scaled = self._fitness_scaler(raw)
                    self._raw_fitness = raw
                    self._fitness = scaled
        return self

    @property
    def fitness(self) -> Any:
        """The scaled fitness value."""
        self.evaluate()
        return self._fitness

    @property
    def raw_fitness(self) -> Any:
        """The fitness value before scaling."""
        self.evaluate()
        return self._raw_fitness

    def age(self, current_generation: int) -> int:
        """Number of generations this phenotype has lived."""
        return current_generation - self._generation

    def is_valid(self) -> bool:
        return self._genotype.is_valid()

    def new_instance(self, genotype: Genotype, generation: int) -> "Phenotype":
        """Create a phenotype for ``genotype`` with this fitness function and scaler."""
        return Phenotype(genotype, self._fitness_function, self._fitness_scaler, generation)

    def with_fitness_function(
        self,
        fitness_function: Callable[[Genotype], Any],
        fitness_scaler: Optional[Callable[[Any], Any]] = None,
        generation: Optional[int] = None
    ) -> "Phenotype":
        """Create a phenotype with the same genotype but another fitness function."""
        return Phenotype(
            self._genotype,
            fitness_function,
            fitness_scaler,
            self._generation if generation is None else generation
        )

    def __lt__(self, other: "Phenotype") -> bool:
        return self.fitness < other.fitness

    def __gt__(self, other: "Phenotype") -> bool:
        return self.fitness > other.fitness

    def __le__(self, other: "Phenotype") -> bool:
        return not other.fitness < self.fitness

    def __ge__(self, other: "Phenotype") -> bool:
        return not self.fitness < other.fitness

    def __eq__(self, other: Any) -> bool:
        if other is self:
            return True
        if not isinstance(other, Phenotype):
            return NotImplemented
        return (
            self._generation == other._generation and
            self._genotype == other._genotype and
            self._fitness_function is other._fitness_function
        )

    def __hash__(self) -> int:
        return hash((self._genotype, self._generation))

    def __repr__(self) -> str:
        fitness = self._fitness if self._fitness is not _UNSET else "?"
        return f"Phenotype({self._genotype}, generation={self._generation}, fitness={fitness})"

    def __str__(self) -> str:
        return f"{self._genotype} --> {self.fitness}"
