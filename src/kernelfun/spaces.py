"""Univariate bases and their tensor (outer) products.

A space pairs a domain with an ordered basis. Coefficient arrays in
:class:`~kernelfun.fun.Fun` and :class:`~kernelfun.product_fun.ProductFun`
are only meaningful together with their space.

Orderings
---------
- :class:`Chebyshev`: ``T_0, T_1, T_2, ...`` of the canonical variable.
- :class:`JacobiWeight`: ``(1+t)^alpha (1-t)^beta`` times the Chebyshev
  ordering.
- :class:`Fourier`: ``1, sin θ, cos θ, sin 2θ, cos 2θ, ...``.
- :class:`CosSpace`: ``1, cos θ, cos 2θ, ...``.
- :class:`SinSpace`: ``sin θ, sin 2θ, ...``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.polynomial.chebyshev import chebvander

from kernelfun.domains import Interval, PeriodicInterval


class BasisFamily(Enum):
    """Tags used to select a builder in :mod:`kernelfun.addition`."""

    CHEBYSHEV = "chebyshev"
    WEIGHTED_CHEBYSHEV = "weighted chebyshev"
    FOURIER = "fourier"
    COSINE = "cosine"
    SINE = "sine"


class Space:
    """Interface shared by all univariate spaces."""

    family: BasisFamily
    domain: Interval | PeriodicInterval

    def evaluate_basis(self, x, n: int) -> np.ndarray:
        """Return the ``(len(x), n)`` matrix of the first *n* basis functions at *x*."""
        raise NotImplementedError

    def points(self, n: int) -> np.ndarray:
        """Sample points used by :meth:`transform`."""
        raise NotImplementedError

    def transform(self, values: np.ndarray, axis: int = 0) -> np.ndarray:
        """Map samples at :meth:`points` to coefficients along *axis*."""
        raise NotImplementedError

    def moments(self, n: int) -> np.ndarray:
        """Definite integrals over the domain of the first *n* basis functions."""
        raise NotImplementedError


@dataclass(frozen=True)
class Chebyshev(Space):
    """Chebyshev polynomials of the first kind on an :class:`Interval`."""

    domain: Interval = field(default_factory=Interval)

    family = BasisFamily.CHEBYSHEV

    def __post_init__(self):
        if not isinstance(self.domain, Interval):
            raise TypeError(
                f"Chebyshev needs an Interval domain, got {type(self.domain).__name__}"
            )

    def evaluate_basis(self, x, n: int) -> np.ndarray:
        t = np.atleast_1d(self.domain.to_canonical(x))
        if n == 0:
            return np.zeros((t.size, 0))
        return chebvander(t, n - 1)

    def points(self, n: int) -> np.ndarray:
        from kernelfun._transforms import _make_chebyshev_nodes

        return self.domain.from_canonical(_make_chebyshev_nodes(n))

    def transform(self, values: np.ndarray, axis: int = 0) -> np.ndarray:
        from kernelfun._transforms import _chebyshev_coefficients

        return _chebyshev_coefficients(values, axis=axis)

    def moments(self, n: int) -> np.ndarray:
        from kernelfun._calculus import _chebyshev_moments

        return 0.5 * self.domain.length * _chebyshev_moments(n)

    def __str__(self) -> str:
        return f"Chebyshev({self.domain})"


@dataclass(frozen=True)
class JacobiWeight(Space):
    """Chebyshev space multiplied by ``(1+t)^alpha (1-t)^beta``.

    Parameters
    ----------
    alpha : float
        Exponent at the left endpoint.
    beta : float
        Exponent at the right endpoint.
    space : Chebyshev
        The weighted space.
    """

    alpha: float
    beta: float
    space: Chebyshev = field(default_factory=Chebyshev)

    family = BasisFamily.WEIGHTED_CHEBYSHEV

    def __post_init__(self):
        if not isinstance(self.space, Chebyshev):
            raise TypeError(
                f"JacobiWeight supports Chebyshev spaces only, "
                f"got {type(self.space).__name__}"
            )

    @property
    def domain(self) -> Interval:
        return self.space.domain

    def weight(self, x) -> np.ndarray:
        t = np.atleast_1d(self.domain.to_canonical(x))
        return (1.0 + t) ** self.alpha * (1.0 - t) ** self.beta

    def evaluate_basis(self, x, n: int) -> np.ndarray:
        return self.weight(x)[:, np.newaxis] * self.space.evaluate_basis(x, n)

    def points(self, n: int) -> np.ndarray:
        return self.space.points(n)

    def transform(self, values: np.ndarray, axis: int = 0) -> np.ndarray:
        values = np.asarray(values)
        shape = [1] * values.ndim
        shape[axis] = values.shape[axis]
        w = self.weight(self.points(values.shape[axis])).reshape(shape)
        return self.space.transform(values / w, axis=axis)

    def moments(self, n: int) -> np.ndarray:
        from kernelfun._calculus import _jacobi_chebyshev_moments

        return 0.5 * self.domain.length * _jacobi_chebyshev_moments(
            n, self.alpha, self.beta
        )

    def __str__(self) -> str:
        return f"(1+x)^{self.alpha}(1-x)^{self.beta}[{self.space}]"


@dataclass(frozen=True)
class _PeriodicSpace(Space):
    domain: PeriodicInterval = field(default_factory=PeriodicInterval)

    def __post_init__(self):
        if not isinstance(self.domain, PeriodicInterval):
            raise TypeError(
                f"{type(self).__name__} needs a PeriodicInterval domain, "
                f"got {type(self.domain).__name__}"
            )

    def points(self, n: int) -> np.ndarray:
        from kernelfun._transforms import _make_periodic_nodes

        return self.domain.from_canonical(_make_periodic_nodes(n))

    def _angles(self, x) -> np.ndarray:
        return np.atleast_1d(self.domain.to_canonical(x))

    def _scale_moments(self, moments: np.ndarray) -> np.ndarray:
        return moments * self.domain.length / (2.0 * np.pi)


@dataclass(frozen=True)
class Fourier(_PeriodicSpace):
    """Real trigonometric basis ``1, sin θ, cos θ, sin 2θ, cos 2θ, ...``."""

    family = BasisFamily.FOURIER

    def evaluate_basis(self, x, n: int) -> np.ndarray:
        theta = self._angles(x)
        out = np.empty((theta.size, n))
        if n > 0:
            out[:, 0] = 1.0
        for col in range(1, n):
            k = (col + 1) // 2
            out[:, col] = np.sin(k * theta) if col % 2 else np.cos(k * theta)
        return out

    def transform(self, values: np.ndarray, axis: int = 0) -> np.ndarray:
        from kernelfun._transforms import _fourier_coefficients

        return _fourier_coefficients(values, axis=axis)

    def moments(self, n: int) -> np.ndarray:
        from kernelfun._calculus import _periodic_moments

        return self._scale_moments(_periodic_moments(n))

    def __str__(self) -> str:
        return f"Fourier({self.domain})"


@dataclass(frozen=True)
class CosSpace(_PeriodicSpace):
    """Cosine series ``1, cos θ, cos 2θ, ...`` (even periodic functions)."""

    family = BasisFamily.COSINE

    def evaluate_basis(self, x, n: int) -> np.ndarray:
        theta = self._angles(x)
        return np.cos(np.outer(theta, np.arange(n)))

    def transform(self, values: np.ndarray, axis: int = 0) -> np.ndarray:
        from kernelfun._transforms import _fourier_coefficients

        full = _fourier_coefficients(values, axis=axis)
        keep = [0] + list(range(2, full.shape[axis], 2))
        return np.take(full, keep, axis=axis)

    def moments(self, n: int) -> np.ndarray:
        from kernelfun._calculus import _periodic_moments

        return self._scale_moments(_periodic_moments(n))

    def __str__(self) -> str:
        return f"CosSpace({self.domain})"


@dataclass(frozen=True)
class SinSpace(_PeriodicSpace):
    """Sine series ``sin θ, sin 2θ, ...`` (odd periodic functions)."""

    family = BasisFamily.SINE

    def evaluate_basis(self, x, n: int) -> np.ndarray:
        theta = self._angles(x)
        return np.sin(np.outer(theta, np.arange(1, n + 1)))

    def transform(self, values: np.ndarray, axis: int = 0) -> np.ndarray:
        from kernelfun._transforms import _fourier_coefficients

        full = _fourier_coefficients(values, axis=axis)
        return np.take(full, list(range(1, full.shape[axis], 2)), axis=axis)

    def moments(self, n: int) -> np.ndarray:
        from kernelfun._calculus import _periodic_moments

        return self._scale_moments(_periodic_moments(n, constant_index=None))

    def __str__(self) -> str:
        return f"SinSpace({self.domain})"


@dataclass(frozen=True)
class TensorSpace:
    """Outer product ``first ⊗ second`` of two univariate spaces.

    Coefficient ``X[i, j]`` of a bivariate function in this space multiplies
    ``first_i(x) * second_j(y)``.
    """

    first: Space
    second: Space

    @property
    def domain(self) -> tuple:
        return (self.first.domain, self.second.domain)

    def __getitem__(self, index: int) -> Space:
        return (self.first, self.second)[index]

    def transpose(self) -> "TensorSpace":
        return TensorSpace(self.second, self.first)

    def __str__(self) -> str:
        return f"{self.first} ⊗ {self.second}"


def tensor(u: Space, v: Space) -> TensorSpace:
    """Outer-product basis of *u* (first variable) and *v* (second variable)."""
    for s in (u, v):
        if not isinstance(s, Space):
            raise TypeError(f"Expected a Space, got {type(s).__name__}")
    return TensorSpace(u, v)
