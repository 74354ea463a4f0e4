"""
Core configuration module for the evolver framework.

This module manages process-wide settings using Pydantic Settings,
providing type-safe configuration with environment variable support,
and the one-time Logfire setup built on them.
"""

from typing import Any, Dict, Literal, Optional

import logfire
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via ``EVOLVER_`` prefixed environment
    variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EVOLVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = "Evolver"
    app_version: str = "1.0.0"
    environment: str = Field(default="development")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # Logfire settings
    logfire_token: Optional[str] = Field(default=None)
    logfire_service_name: str = Field(default="evolver")
    logfire_environment: str = Field(default="development")
    logfire_console: bool = Field(default=False)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    def get_logfire_settings(self) -> Dict[str, Any]:
        """Get Logfire configuration."""
        return {
            "token": self.logfire_token or None,
            "service_name": self.logfire_service_name,
            "environment": self.logfire_environment,
            "send_to_logfire": "if-token-present",
            "console": None if self.logfire_console else False,
        }

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


def configure_logfire(config: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Configure Logfire for the running process.

    Library code only opens spans; applications call this once at start-up.

    Returns:
        The keyword arguments passed to ``logfire.configure``
    """
    options = (config or settings).get_logfire_settings()
    logfire.configure(**options)
    return options


# Create global settings instance
settings = Settings()
