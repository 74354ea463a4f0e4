"""
Evolver Configuration Module.

This module defines configuration classes for the evolver engine, including
evolution parameters, logging and parallel execution settings.
"""

from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, Field, ConfigDict
import os


class EvolutionParameters(BaseModel):
    """Parameters controlling the generational loop of the engine."""

    model_config = ConfigDict(validate_assignment=True)

    population_size: int = Field(
        default=50,
        ge=1,
        description="Number of phenotypes in the population"
    )
    offspring_fraction: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Fraction of the next generation created by selection and alteration"
    )
    maximal_phenotype_age: int = Field(
        default=70,
        ge=1,
        description="Generations a survivor may live before it is replaced"
    )

    @property
    def number_of_offspring(self) -> int:
        """Number of offspring selected per generation."""
        # Round half up, round() would round half to even.
        return int(self.offspring_fraction * self.population_size + 0.5)

    @property
    def number_of_survivors(self) -> int:
        """Number of survivors selected per generation."""
        return self.population_size - self.number_of_offspring


class LoggingConfig(BaseModel):
    """Configuration for logging and monitoring."""

    enable_logging: bool = Field(
        default=True,
        description="Enable evolution progress logging"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_interval: int = Field(
        default=10,
        ge=1,
        description="Generations between progress logs"
    )
    metrics_export: bool = Field(
        default=False,
        description="Export progress metrics to Logfire"
    )


class ParallelizationConfig(BaseModel):
    """Configuration for parallel processing."""

    enable_parallel: bool = Field(
        default=False,
        description="Enable parallel selection, combination and fitness evaluation"
    )
    num_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Number of parallel workers (None for auto)"
    )
    chunk_size: int = Field(
        default=10,
        ge=1,
        description="Phenotypes per parallel evaluation chunk"
    )


class EvolverConfig(BaseModel):
    """Main configuration class for the evolver engine."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid'
    )

    evolution: EvolutionParameters = Field(
        default_factory=EvolutionParameters,
        description="Evolution parameters"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging and monitoring configuration"
    )
    parallelization: ParallelizationConfig = Field(
        default_factory=ParallelizationConfig,
        description="Parallel processing configuration"
    )

    random_seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducibility"
    )

    @classmethod
    def from_env(cls) -> "EvolverConfig":
        """Create configuration from environment variables."""
        config_dict = {}

        if pop_size := os.getenv("EVOLVER_POPULATION_SIZE"):
            config_dict.setdefault("evolution", {})["population_size"] = int(pop_size)
        if fraction := os.getenv("EVOLVER_OFFSPRING_FRACTION"):
            config_dict.setdefault("evolution", {})["offspring_fraction"] = float(fraction)
        if max_age := os.getenv("EVOLVER_MAXIMAL_PHENOTYPE_AGE"):
            config_dict.setdefault("evolution", {})["maximal_phenotype_age"] = int(max_age)

        if num_workers := os.getenv("EVOLVER_NUM_WORKERS"):
            config_dict.setdefault("parallelization", {})["num_workers"] = int(num_workers)
            config_dict["parallelization"]["enable_parallel"] = True

        if random_seed := os.getenv("EVOLVER_RANDOM_SEED"):
            config_dict["random_seed"] = int(random_seed)

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        import json
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load(cls, filepath: str) -> "EvolverConfig":
        """Load configuration from JSON file."""
        import json
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls(**data)


# Convenience functions
def create_default_config() -> EvolverConfig:
    """Create a default configuration suitable for most use cases."""
    return EvolverConfig()


def create_test_config() -> EvolverConfig:
    """Create a configuration suitable for testing (small, sequential, seeded)."""
    return EvolverConfig(
        evolution=EvolutionParameters(
            population_size=20,
            offspring_fraction=0.6,
            maximal_phenotype_age=10
        ),
        logging=LoggingConfig(
            log_level="WARNING",
            log_interval=1
        ),
        parallelization=ParallelizationConfig(
            enable_parallel=False  # Disable for deterministic tests
        ),
        random_seed=42
    )


def create_parallel_config(num_workers: Optional[int] = None) -> EvolverConfig:
    """Create a configuration that evaluates and selects on a thread pool."""
    return EvolverConfig(
        evolution=EvolutionParameters(
            population_size=200
        ),
        parallelization=ParallelizationConfig(
            enable_parallel=True,
            num_workers=num_workers,
            chunk_size=25
        ),
        logging=LoggingConfig(
            log_interval=10,
            metrics_export=True
        )
    )
