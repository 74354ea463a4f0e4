"""
Optimization direction for the evolver engine.
"""

from enum import Enum
from typing import Any, Iterable, List


class Optimize(Enum):
    """Whether higher or lower fitness values are better."""

    MINIMUM = "minimum"
    MAXIMUM = "maximum"

    def compare(self, a: Any, b: Any) -> int:
        """
        Compare two phenotypes (or fitness values) under this direction.

        Returns:
            A positive value if ``a`` is better than ``b``, a negative value
            if it is worse and zero if both are equally good.
        """
        if a < b:
            result = -1
        elif b < a:
            result = 1
        else:
            result = 0

        return result if self is Optimize.MAXIMUM else -result

    def best(self, a: Any, b: Any) -> Any:
        """Return the better of the two values, ``a`` on ties."""
        return b if self.compare(b, a) > 0 else a

    def worst(self, a: Any, b: Any) -> Any:
        """Return the worse of the two values, ``a`` on ties."""
        return b if self.compare(b, a) < 0 else a

    def descending(self, phenotypes: Iterable[Any]) -> List[Any]:
        """Sort phenotypes so that the best one comes first."""
        return sorted(
            phenotypes,
            key=lambda pt: pt.fitness,
            reverse=self is Optimize.MAXIMUM
        )

    def ascending(self, phenotypes: Iterable[Any]) -> List[Any]:
        """Sort phenotypes so that the worst one comes first."""
        return sorted(
            phenotypes,
            key=lambda pt: pt.fitness,
            reverse=self is Optimize.MINIMUM
        )
