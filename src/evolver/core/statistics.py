"""
Population statistics for the evolver engine.

A :class:`Statistics` object is an immutable snapshot of one generation. It is
assembled by a builder which a :class:`Calculator` fills from a population;
the engine adds the numbers only it knows (killed, invalid, alterations).
"""

from dataclasses import dataclass, field, fields
from datetime import timedelta
from typing import Any, Generic, Iterable, Optional, TypeVar
import math
import time

import numpy as np

from src.evolver.core.optimize import Optimize
from src.evolver.core.phenotype import Phenotype

T = TypeVar("T")

ZERO = timedelta(0)


class WriteOnce(Generic[T]):
    """A reference whose value can be set exactly once."""

    __slots__ = ("_value", "_is_set")

    def __init__(self, initial: T):
        self._value = initial
        self._is_set = False

    def set(self, value: T) -> None:
        if self._is_set:
            raise RuntimeError("Value has already been set.")
        self._value = value
        self._is_set = True

    def get(self) -> T:
        return self._value

    @property
    def is_set(self) -> bool:
        return self._is_set

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, WriteOnce):
            return self._value == other._value
        return NotImplemented

    def __repr__(self) -> str:
        return f"WriteOnce({self._value!r})"


class Time:
    """Durations of the phases of one evolution step, each settable once."""

    PHASES = ("execution", "selection", "alter", "combine", "evaluation", "statistics")

    def __init__(self):
        self.execution: WriteOnce[timedelta] = WriteOnce(ZERO)
        self.selection: WriteOnce[timedelta] = WriteOnce(ZERO)
        self.alter: WriteOnce[timedelta] = WriteOnce(ZERO)
        self.combine: WriteOnce[timedelta] = WriteOnce(ZERO)
        self.evaluation: WriteOnce[timedelta] = WriteOnce(ZERO)
        self.statistics: WriteOnce[timedelta] = WriteOnce(ZERO)

    def to_dict(self):
        return {phase: getattr(self, phase).get().total_seconds() for phase in self.PHASES}

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Time):
            return self.to_dict() == other.to_dict()
        return NotImplemented

    def __str__(self) -> str:
        pattern = "| {:>28}: {:<26.11f}|\n"
        out = "+---------------------------------------------------------+\n"
        out += "|  Time Statistics                                        |\n"
        out += "+---------------------------------------------------------+\n"
        out += pattern.format("Select time", self.selection.get().total_seconds())
        out += pattern.format("Alter time", self.alter.get().total_seconds())
        out += pattern.format("Combine time", self.combine.get().total_seconds())
        out += pattern.format("Fitness calculation time", self.evaluation.get().total_seconds())
        out += pattern.format("Statistics calculation time", self.statistics.get().total_seconds())
        out += pattern.format("Overall execution time", self.execution.get().total_seconds())
        out += "+---------------------------------------------------------+"
        return out


class Timer:
    """Accumulating stop watch for one evolution phase."""

    def __init__(self, label: str):
        self.label = label
        self._total = 0.0
        self._interim = 0.0
        self._start: Optional[float] = None

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        if self._start is None:
            raise RuntimeError(f"Timer '{self.label}' was not started.")
        self._interim = time.perf_counter() - self._start
        self._total += self._interim
        self._start = None

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    @property
    def interim_time(self) -> timedelta:
        """Duration of the last start/stop interval."""
        return timedelta(seconds=self._interim)

    @property
    def time(self) -> timedelta:
        """Sum of all start/stop intervals."""
        return timedelta(seconds=self._total)

    def __repr__(self) -> str:
        return f"Timer({self.label!r}, {self._total:.6f}s)"


@dataclass(frozen=True)
class Statistics:
    """Immutable statistics of one generation."""

    optimize: Optimize = Optimize.MAXIMUM
    generation: int = 0
    best_phenotype: Optional[Phenotype] = None
    worst_phenotype: Optional[Phenotype] = None
    samples: int = 0
    age_mean: float = math.nan
    age_variance: float = math.nan
    killed: int = 0
    invalid: int = 0
    alterations: int = 0
    time: Time = field(default_factory=Time, compare=False, repr=False)

    @property
    def best_fitness(self) -> Any:
        return self.best_phenotype.fitness if self.best_phenotype is not None else None

    @property
    def worst_fitness(self) -> Any:
        return self.worst_phenotype.fitness if self.worst_phenotype is not None else None

    def __str__(self) -> str:
        spattern = "| {:>28}: {:<26}|\n"
        fpattern = "| {:>28}: {:<26.11f}|\n"
        out = "+---------------------------------------------------------+\n"
        out += "|  Population Statistics                                  |\n"
        out += "+---------------------------------------------------------+\n"
        out += fpattern.format("Age mean", self.age_mean)
        out += fpattern.format("Age variance", self.age_variance)
        out += spattern.format("Samples", self.samples)
        out += spattern.format("Best fitness", str(self.best_fitness))
        out += spattern.format("Worst fitness", str(self.worst_fitness))
        out += "+---------------------------------------------------------+"
        return out


@dataclass(frozen=True)
class NumberStatistics(Statistics):
    """Statistics with fitness moments for numeric fitness values."""

    fitness_mean: float = math.nan
    fitness_variance: float = math.nan
    standard_error: float = math.nan

    def __str__(self) -> str:
        fpattern = "| {:>28}: {:<26.11f}|\n"
        out = super().__str__() + "\n"
        out += "+---------------------------------------------------------+\n"
        out += "|  Fitness Statistics                                     |\n"
        out += "+---------------------------------------------------------+\n"
        out += fpattern.format("Fitness mean", self.fitness_mean)
        out += fpattern.format("Fitness variance", self.fitness_variance)
        out += fpattern.format("Fitness error of mean", self.standard_error)
        out += "+---------------------------------------------------------+"
        return out


class StatisticsBuilder:
    """Fluent builder for :class:`Statistics`."""

    result_type = Statistics

    def __init__(self):
        self._values = {}

    def statistics(self, statistics: Optional[Statistics]) -> "StatisticsBuilder":
        """Copy all values of an existing statistics object."""
        if statistics is not None:
            for f in fields(statistics):
                if f.name != "time" and f.name in self._field_names():
                    self._values[f.name] = getattr(statistics, f.name)
        return self

    def _field_names(self):
        return {f.name for f in fields(self.result_type)}

    def _set(self, name: str, value: Any) -> "StatisticsBuilder":
        self._values[name] = value
        return self

    def optimize(self, optimize: Optimize) -> "StatisticsBuilder":
        if optimize is None:
            raise TypeError("Optimize strategy must not be None.")
        return self._set("optimize", optimize)

    def generation(self, generation: int) -> "StatisticsBuilder":
        return self._set("generation", generation)

    def best_phenotype(self, best: Optional[Phenotype]) -> "StatisticsBuilder":
        return self._set("best_phenotype", best)

    def worst_phenotype(self, worst: Optional[Phenotype]) -> "StatisticsBuilder":
        return self._set("worst_phenotype", worst)

    def samples(self, samples: int) -> "StatisticsBuilder":
        return self._set("samples", samples)

    def age_mean(self, age_mean: float) -> "StatisticsBuilder":
        return self._set("age_mean", age_mean)

    def age_variance(self, age_variance: float) -> "StatisticsBuilder":
        return self._set("age_variance", age_variance)

    def killed(self, killed: int) -> "StatisticsBuilder":
        return self._set("killed", killed)

    def invalid(self, invalid: int) -> "StatisticsBuilder":
        return self._set("invalid", invalid)

    def alterations(self, alterations: int) -> "StatisticsBuilder":
        return self._set("alterations", alterations)

    def build(self) -> Statistics:
        return self.result_type(**self._values)


class NumberStatisticsBuilder(StatisticsBuilder):
    """Builder for :class:`NumberStatistics`."""

    result_type = NumberStatistics

    def fitness_mean(self, fitness_mean: float) -> "NumberStatisticsBuilder":
        return self._set("fitness_mean", fitness_mean)

    def fitness_variance(self, fitness_variance: float) -> "NumberStatisticsBuilder":
        return self._set("fitness_variance", fitness_variance)

    def standard_error(self, standard_error: float) -> "NumberStatisticsBuilder":
        return self._set("standard_error", standard_error)


def _moments(values: np.ndarray):
    """Mean and sample variance; variance is 0 for one sample, NaN for none."""
    if values.size == 0:
        return math.nan, math.nan
    mean = float(np.mean(values))
    variance = float(np.var(values, ddof=1)) if values.size > 1 else 0.0
    return mean, variance


class Calculator:
    """Accumulates the statistics of a population in a single pass."""

    builder_type = StatisticsBuilder

    def evaluate(
        self,
        population: Iterable[Phenotype],
        generation: int,
        optimize: Optimize = Optimize.MAXIMUM
    ) -> StatisticsBuilder:
        """
        Compute the generation statistics of ``population``.

        Args:
            population: Phenotypes to summarise
            generation: Current generation, used for the phenotype ages
            optimize: Optimization direction deciding best and worst

        Returns:
            Builder pre-filled with the calculated values
        """
        builder = self.builder_type()
        builder.generation(generation)
        builder.optimize(optimize)

        phenotypes = list(population)
        minimum = maximum = None
        for phenotype in phenotypes:
            if minimum is None or phenotype < minimum:
                minimum = phenotype
            if maximum is None or phenotype > maximum:
                maximum = phenotype

        ages = np.array([pt.age(generation) for pt in phenotypes], dtype=float)
        age_mean, age_variance = _moments(ages)

        if optimize is Optimize.MAXIMUM:
            builder.best_phenotype(maximum).worst_phenotype(minimum)
        else:
            builder.best_phenotype(minimum).worst_phenotype(maximum)
        builder.samples(len(phenotypes))
        builder.age_mean(age_mean)
        builder.age_variance(age_variance)

        self._accumulate(builder, phenotypes)
        return builder

    def _accumulate(self, builder: StatisticsBuilder, phenotypes) -> None:
        """Hook for subclasses adding further values."""
        pass


class NumberStatisticsCalculator(Calculator):
    """Calculator adding fitness mean, variance and standard error."""

    builder_type = NumberStatisticsBuilder

    def _accumulate(self, builder: NumberStatisticsBuilder, phenotypes) -> None:
        fitness = np.array([float(pt.fitness) for pt in phenotypes], dtype=float)
        mean, variance = _moments(fitness)
        error = math.sqrt(variance / fitness.size) if fitness.size > 0 else math.nan

        builder.fitness_mean(mean)
        builder.fitness_variance(variance)
        builder.standard_error(error)
