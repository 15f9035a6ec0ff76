"""Univariate functions stored as coefficients in a space."""

from __future__ import annotations

import warnings
from typing import Callable

import numpy as np

from kernelfun._algebra import _is_scalar
from kernelfun.spaces import BasisFamily, Space

#: Relative chop tolerance is ``CHOP_FACTOR * eps * max|c|``.
CHOP_FACTOR = 100

#: Default number of samples for :meth:`Fun.from_function`.
DEFAULT_N = 33


def chop(coefficients, tol: float) -> np.ndarray:
    """Drop trailing coefficients whose magnitude does not exceed *tol*.

    Parameters
    ----------
    coefficients : array_like
        1-D coefficient sequence.
    tol : float
        Absolute threshold.

    Returns
    -------
    ndarray
        Leading part of *coefficients* up to the last entry with
        ``|c| > tol``; empty if there is none.
    """
    c = np.asarray(coefficients)
    significant = np.nonzero(np.abs(c) > tol)[0]
    if significant.size == 0:
        return c[:0].copy()
    return c[: significant[-1] + 1].copy()


def relative_tolerance(coefficients, factor: float = CHOP_FACTOR) -> float:
    """``factor * eps * max|c|`` in the real precision of *coefficients*."""
    c = np.asarray(coefficients)
    if c.size == 0:
        return 0.0
    eps = np.finfo(np.result_type(c.real.dtype, float)).eps
    return float(factor * eps * np.max(np.abs(c)))


class Fun:
    """A univariate function ``sum_k c[k] * basis_k(x)``.

    Parameters
    ----------
    coefficients : array_like
        1-D coefficient sequence (real or complex).
    space : Space
        Basis and domain the coefficients refer to.

    Examples
    --------
    >>> from kernelfun import Chebyshev, Fun
    >>> f = Fun([1.0, 0.0, 1.0], Chebyshev())  # 1 + T_2(x) = 2x^2
    >>> round(float(f(0.5)), 12)
    0.5
    """

    def __init__(self, coefficients, space: Space):
        coefficients = np.asarray(coefficients)
        if coefficients.ndim != 1:
            raise ValueError(
                f"coefficients must be 1-D, got shape {coefficients.shape}"
            )
        if not isinstance(space, Space):
            raise TypeError(f"Expected a Space, got {type(space).__name__}")
        if not np.issubdtype(coefficients.dtype, np.inexact):
            coefficients = coefficients.astype(float)
        coefficients = coefficients.copy()
        coefficients.flags.writeable = False
        self.coefficients = coefficients
        self.space = space

    @property
    def domain(self):
        return self.space.domain

    @property
    def dtype(self) -> np.dtype:
        return self.coefficients.dtype

    def __len__(self) -> int:
        return len(self.coefficients)

    def __call__(self, x):
        scalar = np.ndim(x) == 0
        x = np.asarray(x, dtype=float)
        basis = self.space.evaluate_basis(x.ravel(), len(self.coefficients))
        values = (basis @ self.coefficients).reshape(x.shape)
        return values[()] if scalar else values

    def chop(self, tol: float | None = None) -> "Fun":
        """Return a copy with trailing negligible coefficients removed."""
        if tol is None:
            tol = relative_tolerance(self.coefficients)
        c = chop(self.coefficients, tol)
        if self.space.family is BasisFamily.FOURIER and len(c) % 2 == 0 and len(c):
            # a trailing sin kθ keeps its cos kθ partner
            c = self.coefficients[: len(c) + 1]
        return Fun(c, self.space)

    @classmethod
    def from_function(
        cls, function: Callable, space: Space, n: int = DEFAULT_N
    ) -> "Fun":
        """Approximate *function* by sampling it at ``space.points(n)``.

        Parameters
        ----------
        function : callable
            ``function(x) -> number`` for a scalar ``x``.
        space : Space
            Target space.
        n : int, optional
            Number of samples. Fourier-type spaces need an odd count.

        Returns
        -------
        Fun
            Chopped approximation.

        Warns
        -----
        UserWarning
            If the trailing coefficients have not decayed, so the
            approximation may be under-resolved.
        """
        if not isinstance(n, (int, np.integer)) or n < 1:
            raise ValueError(f"n must be a positive int, got {n}")
        points = space.points(n)
        values = np.array([function(float(x)) for x in points])
        coefficients = space.transform(values)
        _warn_if_unresolved(coefficients, stacklevel=3)
        return cls(coefficients, space).chop()

    def _check_compatible(self, other: "Fun") -> None:
        if self.space != other.space:
            raise ValueError(f"Space mismatch: {self.space} vs {other.space}")

    def __add__(self, other):
        if not isinstance(other, Fun):
            return NotImplemented
        self._check_compatible(other)
        n = max(len(self), len(other))
        c = np.zeros(n, dtype=np.result_type(self.dtype, other.dtype))
        c[: len(self)] += self.coefficients
        c[: len(other)] += other.coefficients
        return Fun(c, self.space)

    def __sub__(self, other):
        if not isinstance(other, Fun):
            return NotImplemented
        return self + (-other)

    def __neg__(self):
        return Fun(-self.coefficients, self.space)

    def __mul__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return Fun(self.coefficients * scalar, self.space)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return Fun(self.coefficients / scalar, self.space)

    def __repr__(self) -> str:
        return f"Fun(n={len(self)}, space={self.space})"


def _warn_if_unresolved(coefficients: np.ndarray, stacklevel: int = 2) -> None:
    """Warn when the tail of *coefficients* is still significant."""
    magnitudes = np.abs(np.asarray(coefficients))
    if min(magnitudes.shape) < 3:
        return
    # last two slices along every axis, so interleaved zeros do not hide a tail
    tail_max = max(
        float(np.max(np.take(magnitudes, [-2, -1], axis=axis)))
        for axis in range(magnitudes.ndim)
    )
    tol = relative_tolerance(magnitudes, factor=1e4)
    if tail_max > tol:
        warnings.warn(
            f"Trailing coefficients have not decayed (max tail {tail_max:.2e} "
            f"vs tolerance {tol:.2e}); the approximation may be under-resolved. "
            f"Increase the number of samples.",
            UserWarning,
            stacklevel=stacklevel,
        )
