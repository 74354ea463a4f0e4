"""
Recombination operators.

A recombination picks pairs of phenotypes from the population and lets a
template method combine them. Crossovers exchange genes of one randomly
chosen chromosome between both parents.
"""

from abc import abstractmethod
from concurrent.futures import Executor
from typing import List, Optional, Sequence, Tuple
import random

from src.evolver.alteration.base import AbstractAlterer
from src.evolver.core.gene import Gene, NumberGene
from src.evolver.core.population import Population
from src.evolver.core.randomness import indexes, resolve, spawn


class Recombination(AbstractAlterer):
    """
    Base class of recombination alterers.

    Two index streams are drawn from the population, each index with the
    alteration probability; the second stream is shuffled and zipped with
    the first to form the parent pairs. With an executor, pairs that share
    no phenotype are recombined concurrently.
    """

    order = 2

    def __init__(self, probability: float, executor: Optional[Executor] = None):
        super().__init__(probability)
        self.executor = executor

    def pairs(self, size: int, rng) -> List[Tuple[int, int]]:
        """Parent index pairs for a population of ``size`` phenotypes."""
        first = list(indexes(size, self.probability, rng))
        second = list(indexes(size, self.probability, rng))
        rng.shuffle(second)
        return list(zip(first, second))

    def alter(
        self,
        population: Population,
        generation: int,
        rng: Optional[random.Random] = None
    ) -> int:
        rng = resolve(rng)
        if len(population) < 2:
            return 0

        pairs = self.pairs(len(population), rng)
        if self.executor is None:
            return sum(
                self.recombine(population, i, j, generation, rng)
                for i, j in pairs
            )

        alterations = 0
        for batch in self._disjoint_batches(pairs):
            rngs = spawn(rng, len(batch))
            futures = [
                self.executor.submit(self.recombine, population, i, j, generation, task_rng)
                for (i, j), task_rng in zip(batch, rngs)
            ]
            alterations += sum(future.result() for future in futures)
        return alterations

    @staticmethod
    def _disjoint_batches(pairs: Sequence[Tuple[int, int]]) -> List[List[Tuple[int, int]]]:
        """Group pairs, in order, so that no two pairs of a batch share an index."""
        batches: List[List[Tuple[int, int]]] = []
        used: List[set] = []
        for pair in pairs:
            for batch, indices in zip(batches, used):
                if pair[0] not in indices and pair[1] not in indices:
                    break
            else:
                batch, indices = [], set()
                batches.append(batch)
                used.append(indices)
            batch.append(pair)
            indices.update(pair)
        return batches

    @abstractmethod
    def recombine(
        self,
        population: Population,
        first: int,
        second: int,
        generation: int,
        rng
    ) -> int:
        """
        Recombine the phenotypes at ``first`` and ``second`` in place.

        Returns:
            Number of altered phenotypes
        """
        pass


class Crossover(Recombination):
    """
    Recombination exchanging genes of one chromosome between two parents.

    Subclasses implement :meth:`crossover` on mutable copies of the gene
    lists; both parents are then replaced by new phenotypes.
    """

    def recombine(self, population, first, second, generation, rng) -> int:
        pt1, pt2 = population[first], population[second]
        gt1, gt2 = pt1.genotype, pt2.genotype

        index = rng.randrange(min(len(gt1), len(gt2)))
        genes1 = gt1[index].to_seq()
        genes2 = gt2[index].to_seq()
        changed = self.crossover(genes1, genes2, rng)

        chromosomes1 = list(gt1)
        chromosomes2 = list(gt2)
        chromosomes1[index] = gt1[index].new_instance(genes1)
        chromosomes2[index] = gt2[index].new_instance(genes2)

        population[first] = pt1.new_instance(gt1.new_instance(chromosomes1), generation)
        population[second] = pt2.new_instance(gt2.new_instance(chromosomes2), generation)
        return changed

    @abstractmethod
    def crossover(self, genes1: List[Gene], genes2: List[Gene], rng) -> int:
        """
        Cross the two gene lists in place.

        Returns:
            Number of changed gene lists
        """
        pass


def _swap(genes1: List[Gene], genes2: List[Gene], start: int, end: int) -> None:
    for k in range(start, end):
        genes1[k], genes2[k] = genes2[k], genes1[k]


class SinglePointCrossover(Crossover):
    """
    Exchanges the genes from a random cut point to the end of the chromosome.

    A cut at 0 swaps the whole sequences.
    """

    def __init__(self, probability: float = 0.05, executor: Optional[Executor] = None):
        super().__init__(probability, executor)

    def crossover(self, genes1: List[Gene], genes2: List[Gene], rng) -> int:
        length = min(len(genes1), len(genes2))
        return self.crossover_at(genes1, genes2, rng.randrange(length))

    @staticmethod
    def crossover_at(genes1: List[Gene], genes2: List[Gene], index: int) -> int:
        """Swap the genes at positions ``index`` and above."""
        length = min(len(genes1), len(genes2))
        if not 0 <= index <= length:
            raise IndexError(f"Cut index {index} out of range [0, {length}]")
        _swap(genes1, genes2, index, length)
        return 2


class MultiPointCrossover(Crossover):
    """
    Exchanges every second segment between ``points`` random cut points.
    """

    def __init__(
        self,
        probability: float = 0.05,
        points: int = 2,
        executor: Optional[Executor] = None
    ):
        super().__init__(probability, executor)
        if points < 1:
            raise ValueError(f"Number of crossover points must be positive: {points}")
        self.points = points

    def crossover(self, genes1: List[Gene], genes2: List[Gene], rng) -> int:
        length = min(len(genes1), len(genes2))
        cuts = sorted(rng.sample(range(length), min(self.points, length)))
        return self.crossover_at(genes1, genes2, cuts)

    @staticmethod
    def crossover_at(genes1: List[Gene], genes2: List[Gene], cuts: Sequence[int]) -> int:
        """Swap the segments ``[cuts[0], cuts[1])``, ``[cuts[2], cuts[3])`` and so on."""
        length = min(len(genes1), len(genes2))
        cuts = list(cuts)
        if len(cuts) % 2 == 1:
            cuts.append(length)
        for start, end in zip(cuts[0::2], cuts[1::2]):
            _swap(genes1, genes2, start, end)
        return 2

    def __repr__(self) -> str:
        return f"MultiPointCrossover(probability={self.probability}, points={self.points})"


class PartiallyMatchedCrossover(Crossover):
    """
    Partially matched crossover (PMX) for permutation chromosomes.

    A random segment is exchanged and the duplicates outside the segment are
    resolved through the mapping the exchange defines, so both children
    remain permutations.
    """

    def __init__(self, probability: float = 0.05, executor: Optional[Executor] = None):
        super().__init__(probability, executor)

    def crossover(self, genes1: List[Gene], genes2: List[Gene], rng) -> int:
        length = min(len(genes1), len(genes2))
        if length < 2:
            return 0
        start, end = sorted(rng.sample(range(length + 1), 2))
        return self.crossover_at(genes1, genes2, start, end)

    @classmethod
    def crossover_at(cls, genes1: List[Gene], genes2: List[Gene], start: int, end: int) -> int:
        """Exchange ``[start, end)`` and repair both lists."""
        _swap(genes1, genes2, start, end)
        cls._repair(genes1, genes2, start, end)
        cls._repair(genes2, genes1, start, end)
        return 2

    @staticmethod
    def _repair(child: List[Gene], other: List[Gene], start: int, end: int) -> None:
        segment = {child[k]: k for k in range(start, end)}
        for k in list(range(0, start)) + list(range(end, len(child))):
            index = segment.get(child[k])
            while index is not None:
                child[k] = other[index]
                index = segment.get(child[k])


class MeanAlterer(Recombination):
    """
    Replaces the genes of one chromosome of the first parent by the mean of
    both parents' genes. The second parent is left unchanged.
    """

    def __init__(self, probability: float = 0.05, executor: Optional[Executor] = None):
        super().__init__(probability, executor)

    def recombine(self, population, first, second, generation, rng) -> int:
        pt1, pt2 = population[first], population[second]
        gt1, gt2 = pt1.genotype, pt2.genotype

        index = rng.randrange(min(len(gt1), len(gt2)))
        genes1 = gt1[index].to_seq()
        genes2 = gt2[index].to_seq()
        for k in range(min(len(genes1), len(genes2))):
            if not isinstance(genes1[k], NumberGene):
                raise TypeError(f"Mean alteration requires numeric genes: {genes1[k]!r}")
            genes1[k] = genes1[k].mean(genes2[k])

        chromosomes = list(gt1)
        chromosomes[index] = gt1[index].new_instance(genes1)
        population[first] = pt1.new_instance(gt1.new_instance(chromosomes), generation)
        return 1
