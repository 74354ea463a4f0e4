"""
Genetic Algorithm Engine for the evolver framework.

This module implements the generational loop: select survivors and
offspring, alter the offspring, combine both into the next population,
evaluate the fitness and record the statistics.
"""

import logging
import multiprocessing
import random
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

import logfire
import numpy as np

from src.evolver.alteration.base import Alterer, CompositeAlterer
from src.evolver.alteration.mutation import Mutator
from src.evolver.alteration.recombination import SinglePointCrossover
from src.evolver.core.config import EvolverConfig, create_default_config
from src.evolver.core.genotype import Genotype, GenotypeFactory, as_factory
from src.evolver.core.optimize import Optimize
from src.evolver.core.phenotype import Phenotype
from src.evolver.core.population import Population
from src.evolver.core.randomness import spawn
from src.evolver.core.statistics import Calculator, Statistics, Time, Timer
from src.evolver.fitness.base import as_fitness_function
from src.evolver.fitness.scalers import IDENTITY
from src.evolver.selection.base import Selector
from src.evolver.selection.sampling import TournamentSelector


class EvolutionStateError(RuntimeError):
    """Raised when ``setup()`` and ``evolve()`` are called in the wrong order."""


def _require(value: Any, name: str) -> Any:
    if value is None:
        raise TypeError(f"{name} must not be None.")
    return value


class GeneticAlgorithm:
    """
    Main engine for running a genetic algorithm.

    The engine owns the population and the evolution parameters. ``setup()``
    creates and evaluates the initial population, every ``evolve()`` call
    advances one generation. All state changes, including the parameter
    setters, are serialized by one reentrant lock.
    """

    def __init__(
        self,
        genotype_factory: GenotypeFactory,
        fitness_function: Callable[[Genotype], Any],
        fitness_scaler: Optional[Callable[[Any], Any]] = None,
        optimize: Optimize = Optimize.MAXIMUM,
        *,
        config: Optional[EvolverConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the genetic algorithm engine.

        Args:
            genotype_factory: Genotype prototype or zero-argument callable
                creating random genotypes
            fitness_function: Function mapping a genotype to its fitness
            fitness_scaler: Optional scaler applied to the raw fitness
            optimize: Whether to maximize or minimize the fitness
            config: Evolver configuration, the default configuration if omitted
            logger: Optional logger instance
        """
        self._genotype_factory = as_factory(genotype_factory)
        self._fitness_function = as_fitness_function(fitness_function)
        self._fitness_scaler = fitness_scaler if fitness_scaler is not None else IDENTITY
        self._optimize = _require(optimize, "Optimization")

        self.config = config if config is not None else create_default_config()
        self._parameters = self.config.evolution.model_copy()
        self.logger = logger or self._setup_logger()

        # Set random seed if specified
        if self.config.random_seed is not None:
            random.seed(self.config.random_seed)
            np.random.seed(self.config.random_seed)
        self._random = random.Random(self.config.random_seed)

        self._lock = threading.RLock()

        self._survivor_selector: Selector = TournamentSelector(3)
        self._offspring_selector: Selector = TournamentSelector(3)
        self._alterer: Alterer = CompositeAlterer(
            SinglePointCrossover(0.1),
            Mutator(0.05)
        )
        self._calculator = Calculator()

        self._population = Population()
        self._generation = 0
        self._statistics: Optional[Statistics] = None
        self._best_statistics: Optional[Statistics] = None
        self._killed = 0
        self._invalid = 0

        self._execution_timer = Timer("Execution time")
        self._select_timer = Timer("Select time")
        self._alter_timer = Timer("Alter time")
        self._combine_timer = Timer("Combine survivors and offspring time")
        self._evaluate_timer = Timer("Evaluate time")
        self._statistics_timer = Timer("Statistics time")

        # Setup parallel execution if enabled
        self.executor: Optional[ThreadPoolExecutor] = None
        if self.config.parallelization.enable_parallel:
            num_workers = self.config.parallelization.num_workers or multiprocessing.cpu_count()
            self.executor = ThreadPoolExecutor(max_workers=num_workers)

    def _setup_logger(self) -> logging.Logger:
        """Setup default logger."""
        logger = logging.getLogger("evolver.engine")
        logger.setLevel(getattr(logging, self.config.logging.log_level))

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def setup(self, genotypes: Optional[Iterable[Genotype]] = None) -> None:
        """
        Create and evaluate the initial population.

        Args:
            genotypes: Optional initial genotypes; the population size is set
                to their number. The population is filled with random
                genotypes if omitted.

        Raises:
            EvolutionStateError: If the engine has already been set up
        """
        with self._lock:
            if self._generation > 0:
                raise EvolutionStateError(
                    "The method GeneticAlgorithm.setup() must be called only once."
                )

            with logfire.span("GA setup", population_size=self._parameters.population_size):
                self._generation = 1
                self._execution_timer.start()

                if genotypes is not None:
                    self.set_genotypes(genotypes)
                else:
                    self._population.fill(
                        lambda: self._new_phenotype(self._generation),
                        self._parameters.population_size - len(self._population)
                    )

                self._evaluate(self._population)

                with self._statistics_timer:
                    self._statistics = self._calculator.evaluate(
                        self._population, self._generation, self._optimize
                    ).build()
                    self._best_statistics = self._statistics
                self._execution_timer.stop()
                self._set_times(self._statistics)

            self.logger.info(
                f"Initialized population with {len(self._population)} phenotypes"
            )

    def evolve(self, until: Union[None, int, Callable[[Statistics], bool]] = None) -> None:
        """
        Advance the evolution.

        Args:
            until: ``None`` evolves one generation, an int evolves that many
                generations and a predicate over the latest statistics
                evolves as long as it returns True

        Raises:
            EvolutionStateError: If ``setup()`` was not called before
        """
        if until is None:
            self._evolve()
        elif isinstance(until, int) and not isinstance(until, bool):
            if until < 0:
                raise ValueError(f"Number of generations must not be negative: {until}")
            for _ in range(until):
                self._evolve()
        elif callable(until):
            self._check_initialized()
            while until(self.statistics):
                self._evolve()
        else:
            raise TypeError(f"Termination condition not supported: {until!r}")

    def _check_initialized(self) -> None:
        if self._generation == 0:
            raise EvolutionStateError(
                "Call the GeneticAlgorithm.setup() method before "
                "calling GeneticAlgorithm.evolve()."
            )

    def _evolve(self) -> None:
        with self._lock:
            self._check_initialized()
            generation = self._generation + 1

            with logfire.span("Generation", generation=generation):
                self._execution_timer.start()

                with logfire.span("Select"), self._select_timer:
                    survivors, offspring = self._select()

                with logfire.span("Alter", offspring=len(offspring)), self._alter_timer:
                    alterations = self._alterer.alter(offspring, generation, self._random)

                with logfire.span("Combine"), self._combine_timer:
                    population, killed, invalid = self._combine(survivors, offspring, generation)

                self._evaluate(population)

                # Commit the new generation.
                self._population = population
                self._generation = generation
                self._killed += killed
                self._invalid += invalid

                with logfire.span("Statistics"), self._statistics_timer:
                    builder = self._calculator.evaluate(
                        self._population, self._generation, self._optimize
                    )
                    builder.killed(killed).invalid(invalid).alterations(alterations)
                    self._statistics = builder.build()

                    best = self._statistics.best_phenotype
                    if self._optimize.compare(best, self._best_statistics.best_phenotype) > 0:
                        self._best_statistics = self._statistics

                self._execution_timer.stop()
                self._set_times(self._statistics)

            if (self.config.logging.enable_logging and
                    self._generation % self.config.logging.log_interval == 0):
                self._log_progress(self._statistics)

    def _select(self) -> Tuple[Population, Population]:
        """Select survivors and offspring from the current population."""
        survivor_count = self._parameters.number_of_survivors
        offspring_count = self._parameters.number_of_offspring
        assert survivor_count + offspring_count == self._parameters.population_size

        survivor_rng, offspring_rng = spawn(self._random, 2)
        if self.executor is not None:
            future = self.executor.submit(
                self._survivor_selector.select,
                self._population, survivor_count, self._optimize, survivor_rng
            )
            offspring = self._offspring_selector.select(
                self._population, offspring_count, self._optimize, offspring_rng
            )
            survivors = future.result()
        else:
            survivors = self._survivor_selector.select(
                self._population, survivor_count, self._optimize, survivor_rng
            )
            offspring = self._offspring_selector.select(
                self._population, offspring_count, self._optimize, offspring_rng
            )

        assert len(survivors) == survivor_count, "Wrong number of survivors selected."
        assert len(offspring) == offspring_count, "Wrong number of offspring selected."
        return survivors, offspring

    def _combine(
        self,
        survivors: Population,
        offspring: Population,
        generation: int
    ) -> Tuple[Population, int, int]:
        """
        Replace too old and invalid survivors and merge them with the offspring.

        Returns:
            The next population, the number of killed and of invalid survivors
        """
        assert len(survivors) + len(offspring) == self._parameters.population_size

        killed = 0
        invalid = 0
        max_age = self._parameters.maximal_phenotype_age
        for i, survivor in enumerate(survivors):
            too_old = survivor.age(generation) > max_age
            if too_old or not survivor.is_valid():
                survivors[i] = self._new_phenotype(generation)
                if too_old:
                    killed += 1
                else:
                    invalid += 1

        population = Population(survivors)
        population.extend(offspring)
        return population, killed, invalid

    def _evaluate(self, population: Population) -> None:
        """Evaluate the fitness of all phenotypes, in parallel if enabled."""
        with logfire.span("Evaluate", size=len(population)), self._evaluate_timer:
            pending = [pt for pt in population if not pt.is_evaluated]
            if not pending:
                return

            if self.executor is not None:
                chunk_size = self.config.parallelization.chunk_size
                chunks = [pending[i:i + chunk_size] for i in range(0, len(pending), chunk_size)]
                futures = [self.executor.submit(self._evaluate_chunk, chunk) for chunk in chunks]
                for future in as_completed(futures):
                    future.result()
            else:
                self._evaluate_chunk(pending)

    @staticmethod
    def _evaluate_chunk(phenotypes: List[Phenotype]) -> None:
        for phenotype in phenotypes:
            phenotype.evaluate()

    def _new_phenotype(self, generation: int) -> Phenotype:
        return Phenotype.of(
            self._genotype_factory(self._random),
            self._fitness_function,
            self._fitness_scaler,
            generation
        )

    def _set_times(self, statistics: Statistics) -> None:
        statistics.time.execution.set(self._execution_timer.interim_time)
        statistics.time.selection.set(self._select_timer.interim_time)
        statistics.time.alter.set(self._alter_timer.interim_time)
        statistics.time.combine.set(self._combine_timer.interim_time)
        statistics.time.evaluation.set(self._evaluate_timer.interim_time)
        statistics.time.statistics.set(self._statistics_timer.interim_time)

    def _log_progress(self, statistics: Statistics) -> None:
        """Log evolution progress."""
        self.logger.info(
            f"Generation {statistics.generation}: "
            f"Best: {statistics.best_fitness}, "
            f"Killed: {statistics.killed}, "
            f"Invalid: {statistics.invalid}, "
            f"Alterations: {statistics.alterations}"
        )

        if self.config.logging.metrics_export:
            logfire.info(
                "Evolution progress",
                evolution_generation=statistics.generation,
                best_fitness=statistics.best_fitness,
                killed=statistics.killed,
                invalid=statistics.invalid,
                alterations=statistics.alterations
            )

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Shut down the executor, if the engine owns one."""
        if self.executor is not None:
            self.executor.shutdown(wait=True)
            self.executor = None

    def __enter__(self) -> "GeneticAlgorithm":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def optimize(self) -> Optimize:
        return self._optimize

    @property
    def genotype_factory(self) -> Callable[..., Genotype]:
        return self._genotype_factory

    @property
    def fitness_function(self) -> Callable[[Genotype], Any]:
        return self._fitness_function

    @property
    def fitness_scaler(self) -> Callable[[Any], Any]:
        return self._fitness_scaler

    @fitness_scaler.setter
    def fitness_scaler(self, scaler: Callable[[Any], Any]) -> None:
        with self._lock:
            self._fitness_scaler = _require(scaler, "FitnessScaler")

    @property
    def population_size(self) -> int:
        return self._parameters.population_size

    @population_size.setter
    def population_size(self, size: int) -> None:
        with self._lock:
            self._parameters.population_size = size

    @property
    def offspring_fraction(self) -> float:
        return self._parameters.offspring_fraction

    @offspring_fraction.setter
    def offspring_fraction(self, fraction: float) -> None:
        with self._lock:
            self._parameters.offspring_fraction = fraction

    @property
    def maximal_phenotype_age(self) -> int:
        return self._parameters.maximal_phenotype_age

    @maximal_phenotype_age.setter
    def maximal_phenotype_age(self, age: int) -> None:
        with self._lock:
            self._parameters.maximal_phenotype_age = age

    @property
    def number_of_offspring(self) -> int:
        return self._parameters.number_of_offspring

    @property
    def number_of_survivors(self) -> int:
        return self._parameters.number_of_survivors

    @property
    def survivor_selector(self) -> Selector:
        return self._survivor_selector

    @survivor_selector.setter
    def survivor_selector(self, selector: Selector) -> None:
        with self._lock:
            self._survivor_selector = _require(selector, "Survivor selector")

    @property
    def offspring_selector(self) -> Selector:
        return self._offspring_selector

    @offspring_selector.setter
    def offspring_selector(self, selector: Selector) -> None:
        with self._lock:
            self._offspring_selector = _require(selector, "Offspring selector")

    def set_selectors(self, selector: Selector) -> None:
        """Use ``selector`` for both survivors and offspring."""
        with self._lock:
            self.survivor_selector = selector
            self.offspring_selector = selector

    @property
    def alterer(self) -> Alterer:
        return self._alterer

    @alterer.setter
    def alterer(self, alterer: Alterer) -> None:
        with self._lock:
            self._alterer = _require(alterer, "Alterer")

    def set_alterers(self, *alterers: Alterer) -> None:
        """Apply the given alterers one after the other."""
        if not alterers:
            raise ValueError("At least one alterer must be given.")
        with self._lock:
            self._alterer = CompositeAlterer(*alterers)

    def add_alterer(self, alterer: Alterer) -> None:
        """Append ``alterer`` to the alterers already in use."""
        with self._lock:
            self._alterer = CompositeAlterer.join(self._alterer, _require(alterer, "Alterer"))

    @property
    def statistics_calculator(self) -> Calculator:
        return self._calculator

    @statistics_calculator.setter
    def statistics_calculator(self, calculator: Calculator) -> None:
        with self._lock:
            self._calculator = _require(calculator, "Statistics calculator")

    def set_population(self, phenotypes: Iterable[Phenotype]) -> None:
        """
        Replace the population; the population size becomes its length.

        Every phenotype is rebound to the fitness function, the fitness
        scaler and the current generation of this engine.
        """
        with self._lock:
            phenotypes = list(_require(phenotypes, "Population"))
            if not phenotypes:
                raise ValueError("Population must not be empty.")
            population = Population(
                _require(pt, "Phenotype").with_fitness_function(
                    self._fitness_function, self._fitness_scaler, self._generation
                )
                for pt in phenotypes
            )

            self._parameters.population_size = len(population)
            self._population = population

    def set_genotypes(self, genotypes: Iterable[Genotype]) -> None:
        """Replace the population by phenotypes of the given genotypes."""
        with self._lock:
            genotypes = list(_require(genotypes, "Genotypes"))
            if not genotypes:
                raise ValueError("Genotypes must not be empty.")

            self.set_population(
                Phenotype.of(
                    _require(genotype, "Genotype"),
                    self._fitness_function,
                    self._fitness_scaler,
                    self._generation
                )
                for genotype in genotypes
            )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        with self._lock:
            return self._generation > 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> Population:
        """Copy of the current population."""
        with self._lock:
            return self._population.copy()

    @property
    def statistics(self) -> Optional[Statistics]:
        return self._statistics

    @property
    def best_statistics(self) -> Optional[Statistics]:
        return self._best_statistics

    @property
    def best_phenotype(self) -> Optional[Phenotype]:
        best = self._best_statistics
        return best.best_phenotype if best is not None else None

    @property
    def killed_count(self) -> int:
        return self._killed

    @property
    def invalid_count(self) -> int:
        return self._invalid

    def time_statistics(self) -> Time:
        """Durations of all phases, summed over all generations."""
        with self._lock:
            time = Time()
            time.execution.set(self._execution_timer.time)
            time.selection.set(self._select_timer.time)
            time.alter.set(self._alter_timer.time)
            time.combine.set(self._combine_timer.time)
            time.evaluation.set(self._evaluate_timer.time)
            time.statistics.set(self._statistics_timer.time)
            return time

    def __str__(self) -> str:
        return "%4d: (best) %s" % (self._generation, self.best_phenotype)
