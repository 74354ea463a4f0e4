"""
Core functionality for the evolver framework.

This package contains the process-wide settings and the Logfire setup.
"""

from src.core.config import settings, Settings, configure_logfire

__all__ = [
    "settings",
    "Settings",
    "configure_logfire",
]
