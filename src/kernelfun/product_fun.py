"""Bivariate functions as coefficient matrices in a tensor-product space.

A :class:`ProductFun` stores ``X`` such that

.. math::

    F(x, y) = \\sum_{i, j} X_{ij}\\, u_i(x)\\, v_j(y)

for the bases ``u`` and ``v`` of its :class:`~kernelfun.spaces.TensorSpace`.
"""

from __future__ import annotations

from typing import Callable, Tuple

import numpy as np

from kernelfun.fun import Fun, _warn_if_unresolved
from kernelfun.spaces import Space, TensorSpace


class ProductFun:
    """Bivariate function in an outer-product basis.

    Parameters
    ----------
    coefficients : array_like
        2-D coefficient matrix; row index follows the first variable.
    space : TensorSpace
        Outer-product basis ``u ⊗ v``.

    Examples
    --------
    >>> from kernelfun import Chebyshev, ProductFun, tensor
    >>> F = ProductFun([[0.0, 1.0], [0.0, 0.0]], tensor(Chebyshev(), Chebyshev()))
    >>> float(F(0.3, -0.5))  # T_0(x) T_1(y) = y
    -0.5
    """

    def __init__(self, coefficients, space: TensorSpace):
        coefficients = np.asarray(coefficients)
        if coefficients.ndim != 2:
            raise ValueError(
                f"coefficients must be a 2-D matrix, got shape {coefficients.shape}"
            )
        if not isinstance(space, TensorSpace):
            raise TypeError(
                f"Expected a TensorSpace, got {type(space).__name__}"
            )
        if not np.issubdtype(coefficients.dtype, np.inexact):
            coefficients = coefficients.astype(float)
        self.coefficients = coefficients
        self.space = space
        self.build_time: float = 0.0

    @property
    def shape(self) -> Tuple[int, int]:
        return self.coefficients.shape

    @property
    def domain(self) -> tuple:
        return self.space.domain

    @property
    def dtype(self) -> np.dtype:
        return self.coefficients.dtype

    def __call__(self, x, y):
        """Evaluate at points ``(x, y)``; array arguments broadcast."""
        scalar = np.ndim(x) == 0 and np.ndim(y) == 0
        x, y = np.broadcast_arrays(np.asarray(x, dtype=float), np.asarray(y, dtype=float))
        m, n = self.shape
        U = self.space.first.evaluate_basis(x.ravel(), m)
        V = self.space.second.evaluate_basis(y.ravel(), n)
        values = np.einsum("pi,ij,pj->p", U, self.coefficients, V).reshape(x.shape)
        return values[()] if scalar else values

    evaluate = __call__

    def transpose(self) -> "ProductFun":
        """Swap the variables: ``F.transpose()(x, y) == F(y, x)``."""
        return ProductFun(self.coefficients.T.copy(), self.space.transpose())

    @property
    def T(self) -> "ProductFun":
        return self.transpose()

    # ------------------------------------------------------------------
    # Calculus
    # ------------------------------------------------------------------

    def integrate(self, axis: int = 0) -> Fun:
        """Integrate over one variable.

        Parameters
        ----------
        axis : {0, 1}
            ``0`` integrates over ``x`` and returns a function of ``y``;
            ``1`` integrates over ``y`` and returns a function of ``x``.

        Returns
        -------
        Fun
        """
        if axis not in (0, 1):
            raise ValueError(f"axis must be 0 or 1, got {axis}")
        m, n = self.shape
        if axis == 0:
            return Fun(self.space.first.moments(m) @ self.coefficients, self.space.second)
        return Fun(self.coefficients @ self.space.second.moments(n), self.space.first)

    def sum(self):
        """Integral over the whole rectangle."""
        m, n = self.shape
        return self.space.first.moments(m) @ self.coefficients @ self.space.second.moments(n)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_function(
        cls,
        function: Callable,
        space: TensorSpace,
        shape: Tuple[int, int] = (33, 33),
    ) -> "ProductFun":
        """Approximate ``function(x, y)`` by tensor sampling.

        Parameters
        ----------
        function : callable
            ``function(x, y) -> number`` for scalars ``x`` and ``y``.
        space : TensorSpace
            Target outer-product basis.
        shape : (int, int), optional
            Number of samples per variable.

        Returns
        -------
        ProductFun

        Warns
        -----
        UserWarning
            If the trailing coefficients have not decayed.
        """
        m, n = shape
        xs = space.first.points(m)
        ys = space.second.points(n)
        values = np.array([[function(float(x), float(y)) for y in ys] for x in xs])
        coefficients = space.first.transform(space.second.transform(values, axis=1), axis=0)
        _warn_if_unresolved(coefficients, stacklevel=3)
        return cls(coefficients, space)

    @classmethod
    def from_antidiagonal(cls, f: Fun, u: Space, v: Space, verbose: bool = False) -> "ProductFun":
        """Build ``F(x, y) = f(y - x)`` in ``u ⊗ v``.

        See :func:`kernelfun.addition.product_fun_from_antidiagonal`.
        """
        from kernelfun.addition import product_fun_from_antidiagonal

        return product_fun_from_antidiagonal(f, u, v, verbose=verbose)

    # ------------------------------------------------------------------
    # Arithmetic operators
    # ------------------------------------------------------------------

    def __add__(self, other):
        if not isinstance(other, ProductFun):
            return NotImplemented
        from kernelfun._algebra import _check_same_domain, _pad_to

        _check_same_domain(self, other)
        if self.space != other.space:
            from kernelfun.greens import GreensFun

            return GreensFun([self, other])
        shape = tuple(max(a, b) for a, b in zip(self.shape, other.shape))
        dtype = np.result_type(self.dtype, other.dtype)
        return ProductFun(
            _pad_to(self.coefficients, shape, dtype)
            + _pad_to(other.coefficients, shape, dtype),
            self.space,
        )

    def __sub__(self, other):
        if not isinstance(other, ProductFun):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar):
        from kernelfun._algebra import _is_scalar
        if not _is_scalar(scalar):
            return NotImplemented
        return ProductFun(self.coefficients * scalar, self.space)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        from kernelfun._algebra import _is_scalar
        if not _is_scalar(scalar):
            return NotImplemented
        return ProductFun(self.coefficients / scalar, self.space)

    def __neg__(self):
        return ProductFun(-self.coefficients, self.space)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        m, n = self.shape
        return f"ProductFun(shape=({m}, {n}), space={self.space})"

    def __str__(self) -> str:
        m, n = self.shape
        lines = [
            f"ProductFun ({m} x {n} coefficients)",
            f"  Space:  {self.space}",
        ]
        if self.build_time:
            lines.append(f"  Build:  {self.build_time:.3f}s")
        return "\n".join(lines)
