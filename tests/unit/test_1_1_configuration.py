"""
Unit tests for the evolver configuration.

Tests cover:
- Evolution parameter defaults and validation
- Offspring and survivor counts
- Environment loading, JSON persistence and convenience factories
- Process settings
"""

import pytest
from pydantic import ValidationError

from src.core.config import Settings
from src.evolver.core.config import (
    EvolverConfig,
    EvolutionParameters,
    LoggingConfig,
    ParallelizationConfig,
    create_default_config,
    create_test_config,
    create_parallel_config
)


class TestEvolutionParameters:
    """Test suite for evolution parameters."""

    def test_defaults(self):
        """Test the default evolution parameters."""
        params = EvolutionParameters()

        assert params.population_size == 50
        assert params.offspring_fraction == 0.6
        assert params.maximal_phenotype_age == 70

    def test_offspring_and_survivor_counts(self):
        """Test that offspring and survivors add up to the population size."""
        params = EvolutionParameters(population_size=50, offspring_fraction=0.6)

        assert params.number_of_offspring == 30
        assert params.number_of_survivors == 20

    def test_offspring_count_rounds_half_up(self):
        """Test rounding of the offspring count."""
        params = EvolutionParameters(population_size=5, offspring_fraction=0.5)

        assert params.number_of_offspring == 3
        assert params.number_of_survivors == 2

    @pytest.mark.parametrize("field,value", [
        ("population_size", 0),
        ("offspring_fraction", 1.5),
        ("offspring_fraction", -0.1),
        ("maximal_phenotype_age", 0),
    ])
    def test_invalid_values_rejected(self, field, value):
        """Test that out-of-range parameters are rejected at construction."""
        with pytest.raises(ValidationError):
            EvolutionParameters(**{field: value})

    def test_assignment_is_validated(self):
        """Test that assignments are validated as well."""
        params = EvolutionParameters()

        with pytest.raises(ValueError):
            params.offspring_fraction = 2.0

        assert params.offspring_fraction == 0.6


class TestEvolverConfig:
    """Test suite for the main configuration."""

    def test_default_config(self):
        """Test creating the default configuration."""
        config = create_default_config()

        assert isinstance(config, EvolverConfig)
        assert config.logging.log_level == "INFO"
        assert config.parallelization.enable_parallel is False
        assert config.random_seed is None

    def test_extra_fields_forbidden(self):
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            EvolverConfig(unknown_field=1)

    def test_from_env(self, monkeypatch):
        """Test loading configuration from environment variables."""
        monkeypatch.setenv("EVOLVER_POPULATION_SIZE", "120")
        monkeypatch.setenv("EVOLVER_OFFSPRING_FRACTION", "0.4")
        monkeypatch.setenv("EVOLVER_MAXIMAL_PHENOTYPE_AGE", "15")
        monkeypatch.setenv("EVOLVER_NUM_WORKERS", "3")
        monkeypatch.setenv("EVOLVER_RANDOM_SEED", "7")

        config = EvolverConfig.from_env()

        assert config.evolution.population_size == 120
        assert config.evolution.offspring_fraction == 0.4
        assert config.evolution.maximal_phenotype_age == 15
        assert config.parallelization.num_workers == 3
        assert config.parallelization.enable_parallel is True
        assert config.random_seed == 7

    def test_from_env_without_variables(self, monkeypatch):
        """Test that missing variables keep the defaults."""
        for name in (
            "EVOLVER_POPULATION_SIZE",
            "EVOLVER_OFFSPRING_FRACTION",
            "EVOLVER_MAXIMAL_PHENOTYPE_AGE",
            "EVOLVER_NUM_WORKERS",
            "EVOLVER_RANDOM_SEED",
        ):
            monkeypatch.delenv(name, raising=False)

        assert EvolverConfig.from_env() == EvolverConfig()

    def test_save_and_load(self, tmp_path):
        """Test persisting the configuration as JSON."""
        config = create_test_config()
        path = tmp_path / "config.json"

        config.save(str(path))
        loaded = EvolverConfig.load(str(path))

        assert loaded == config
        assert loaded.to_dict()["evolution"]["population_size"] == 20

    def test_test_config(self):
        """Test the small, seeded test configuration."""
        config = create_test_config()

        assert config.evolution.population_size == 20
        assert config.random_seed == 42
        assert config.parallelization.enable_parallel is False

    def test_parallel_config(self):
        """Test the parallel configuration."""
        config = create_parallel_config(num_workers=4)

        assert config.parallelization.enable_parallel is True
        assert config.parallelization.num_workers == 4
        assert config.logging.metrics_export is True

    def test_invalid_nested_values(self):
        """Test validation of the nested configuration sections."""
        with pytest.raises(ValidationError):
            LoggingConfig(log_interval=0)
        with pytest.raises(ValidationError):
            LoggingConfig(log_level="VERBOSE")
        with pytest.raises(ValidationError):
            ParallelizationConfig(chunk_size=0)


class TestSettings:
    """Test suite for the process settings."""

    def test_env_prefix(self, monkeypatch):
        """Test that settings are read from prefixed environment variables."""
        monkeypatch.setenv("EVOLVER_ENVIRONMENT", "production")
        monkeypatch.setenv("EVOLVER_LOG_LEVEL", "debug")
        monkeypatch.setenv("EVOLVER_LOGFIRE_SERVICE_NAME", "evolver-test")

        settings = Settings(_env_file=None)

        assert settings.environment == "production"
        assert settings.is_production()
        assert settings.log_level == "DEBUG"
        assert settings.logfire_service_name == "evolver-test"

    def test_logfire_settings(self):
        """Test the keyword arguments for Logfire."""
        settings = Settings(
            _env_file=None,
            logfire_token="token-123",
            logfire_environment="testing"
        )

        options = settings.get_logfire_settings()

        assert options["token"] == "token-123"
        assert options["environment"] == "testing"
        assert options["send_to_logfire"] == "if-token-present"
        assert options["console"] is False
