"""
Fitness scalers.

A scaler post-processes the raw fitness before it is used for ordering and
selection. Scalers must keep the value comparable.
"""

from typing import Any


class FitnessScaler:
    """Base scaler; subclasses override :meth:`scale`."""

    def scale(self, value: Any) -> Any:
        return value

    def __call__(self, value: Any) -> Any:
        return self.scale(value)

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and vars(other) == vars(self)

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(sorted(vars(self).items()))))


class IdentityScaler(FitnessScaler):
    """Returns the raw fitness unchanged."""

    def __repr__(self) -> str:
        return "IdentityScaler()"


class PowerScaler(FitnessScaler):
    """Scales the fitness with ``value ** exponent``."""

    def __init__(self, exponent: float = 2.0):
        self.exponent = float(exponent)

    def scale(self, value: float) -> float:
        return value ** self.exponent

    def __repr__(self) -> str:
        return f"PowerScaler(exponent={self.exponent})"


class ExponentialScaler(FitnessScaler):
    """Scales the fitness with ``a * (b * value + c) ** d``."""

    def __init__(self, a: float = 1.0, b: float = 1.0, c: float = 0.0, d: float = 2.0):
        self.a = float(a)
        self.b = float(b)
        self.c = float(c)
        self.d = float(d)

    def scale(self, value: float) -> float:
        return self.a * (self.b * value + self.c) ** self.d

    def __repr__(self) -> str:
        return f"ExponentialScaler(a={self.a}, b={self.b}, c={self.c}, d={self.d})"


IDENTITY = IdentityScaler()
