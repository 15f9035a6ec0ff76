"""One-dimensional domains for the bases in :mod:`kernelfun.spaces`.

Each domain knows its length and the affine map to its canonical interval:
``[-1, 1]`` for :class:`Interval` and ``[-pi, pi)`` for
:class:`PeriodicInterval`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


class DomainMismatchError(ValueError, AssertionError):
    """Raised when domains that must agree (or scale by two) do not."""


@dataclass(frozen=True)
class Interval:
    """Closed interval ``[a, b]`` mapped onto ``[-1, 1]``."""

    a: float = -1.0
    b: float = 1.0

    def __post_init__(self):
        if self.a >= self.b:
            raise ValueError(
                f"Interval bounds must satisfy a < b, got [{self.a}, {self.b}]"
            )

    @property
    def length(self) -> float:
        return self.b - self.a

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.a + self.b)

    def to_canonical(self, x):
        return (2.0 * np.asarray(x) - (self.a + self.b)) / (self.b - self.a)

    def from_canonical(self, t):
        return self.midpoint + 0.5 * self.length * np.asarray(t)

    def __str__(self) -> str:
        return f"[{self.a}, {self.b}]"


@dataclass(frozen=True)
class PeriodicInterval:
    """Periodic interval ``[a, b)`` mapped onto ``[-pi, pi)``."""

    a: float = -math.pi
    b: float = math.pi

    def __post_init__(self):
        if self.a >= self.b:
            raise ValueError(
                f"PeriodicInterval bounds must satisfy a < b, got [{self.a}, {self.b})"
            )

    @property
    def length(self) -> float:
        return self.b - self.a

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.a + self.b)

    def to_canonical(self, x):
        return 2.0 * math.pi * (np.asarray(x) - self.a) / self.length - math.pi

    def from_canonical(self, theta):
        return self.a + self.length * (np.asarray(theta) + math.pi) / (2.0 * math.pi)

    def __str__(self) -> str:
        return f"[{self.a}, {self.b})"


def lengths_match(first: float, second: float) -> bool:
    """Compare two domain lengths up to rounding of the endpoints."""
    return math.isclose(first, second, rel_tol=1e-14, abs_tol=0.0)
