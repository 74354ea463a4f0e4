"""
Mutation operators.
"""

from typing import List, Optional
import random

from src.evolver.alteration.base import AbstractAlterer
from src.evolver.core.gene import Gene, NumberGene
from src.evolver.core.population import Population
from src.evolver.core.randomness import indexes, resolve


class Mutator(AbstractAlterer):
    """
    Replaces randomly chosen genes with new random genes.

    Phenotypes, chromosomes and genes are each picked with probability
    ``probability ** (1/3)``, so a single gene is mutated with roughly the
    configured probability. Subclasses change what happens to a picked gene
    by overriding :meth:`mutate`.
    """

    def __init__(self, probability: float = 0.01):
        super().__init__(probability)

    def alter(
        self,
        population: Population,
        generation: int,
        rng: Optional[random.Random] = None
    ) -> int:
        rng = resolve(rng)
        p = self.probability ** (1.0 / 3.0)
        alterations = 0

        for i in indexes(len(population), p, rng):
            phenotype = population[i]
            genotype = phenotype.genotype
            chromosomes = list(genotype)

            mutations = 0
            for j in indexes(len(chromosomes), p, rng):
                genes = chromosomes[j].to_seq()
                mutations += self.mutate(genes, p, rng)
                chromosomes[j] = chromosomes[j].new_instance(genes)

            # Unchanged phenotypes keep their birth generation.
            if mutations > 0:
                population[i] = phenotype.new_instance(
                    genotype.new_instance(chromosomes), generation
                )
            alterations += mutations

        return alterations

    def mutate(self, genes: List[Gene], p: float, rng) -> int:
        """
        Mutate the gene list in place.

        Args:
            genes: Mutable copy of a chromosome's genes
            p: Per-gene selection probability
            rng: Random source

        Returns:
            Number of mutated genes
        """
        mutations = 0
        for k in indexes(len(genes), p, rng):
            genes[k] = genes[k].new_instance(rng)
            mutations += 1
        return mutations


class SwapMutator(Mutator):
    """
    Swaps picked genes with a random gene of the same chromosome.

    Keeps permutations valid. A gene swapped with itself still counts as a
    mutation.
    """

    def mutate(self, genes: List[Gene], p: float, rng) -> int:
        mutations = 0
        if len(genes) > 1:
            for k in indexes(len(genes), p, rng):
                other = rng.randrange(len(genes))
                genes[k], genes[other] = genes[other], genes[k]
                mutations += 1
        return mutations


class GaussianMutator(Mutator):
    """
    Perturbs picked numeric genes with Gaussian noise.

    The new value is drawn around the current one with a standard deviation
    of a quarter of the gene's range and clamped back into the range.
    """

    def mutate(self, genes: List[Gene], p: float, rng) -> int:
        mutations = 0
        for k in indexes(len(genes), p, rng):
            gene = genes[k]
            if not isinstance(gene, NumberGene):
                raise TypeError(f"Gaussian mutation requires numeric genes: {gene!r}")

            std = (gene.max - gene.min) * 0.25
            genes[k] = gene.new_value(rng.gauss(gene.value, std))
            mutations += 1
        return mutations
