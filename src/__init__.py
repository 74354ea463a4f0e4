"""
Evolver - Source Package

This package contains the process-wide configuration and the evolver
genetic algorithm framework.
"""

__version__ = "1.0.0"

# Package-level imports for convenience
from src.core.config import settings

__all__ = [
    "settings",
    "__version__"
]
