"""Kernels as sums of bivariate pieces.

A :class:`GreensFun` holds several bivariate pieces on one common domain,
for example a singular part built from an antidiagonal plus a smooth
remainder, and behaves as their sum.
"""

from __future__ import annotations

import functools
import operator
from typing import Callable, Iterable, List

import numpy as np

from kernelfun._algebra import _check_same_domain, _format_domain, _is_scalar
from kernelfun.product_fun import ProductFun
from kernelfun.spaces import TensorSpace


class GreensFun:
    """Sum of bivariate pieces sharing a domain.

    Parameters
    ----------
    kernels : ProductFun, GreensFun, or sequence of them
        Pieces of the sum. Nested ``GreensFun`` instances are flattened
        into a single list of pieces.

    Raises
    ------
    ValueError
        If no pieces are given.
    DomainMismatchError
        If the pieces do not all share one domain.

    Examples
    --------
    >>> from kernelfun import Chebyshev, GreensFun, ProductFun, tensor
    >>> ss = tensor(Chebyshev(), Chebyshev())
    >>> G = GreensFun([ProductFun([[1.0]], ss), ProductFun([[2.0]], ss)])
    >>> len(G), float(G(0.1, 0.2))
    (2, 3.0)
    """

    def __init__(self, kernels):
        if isinstance(kernels, (ProductFun, GreensFun)):
            kernels = [kernels]
        flat: List[ProductFun] = []
        for kernel in kernels:
            if isinstance(kernel, GreensFun):
                flat.extend(kernel.kernels)
            elif hasattr(kernel, "domain") and callable(kernel):
                flat.append(kernel)
            else:
                raise TypeError(
                    f"GreensFun pieces must be bivariate functions, "
                    f"got {type(kernel).__name__}"
                )
        if not flat:
            raise ValueError("GreensFun needs at least one kernel")
        for kernel in flat[1:]:
            _check_same_domain(flat[0], kernel)
        self.kernels = flat

    def __len__(self) -> int:
        return len(self.kernels)

    def __iter__(self):
        return iter(self.kernels)

    def __getitem__(self, index):
        return self.kernels[index]

    @property
    def domain(self) -> tuple:
        return self.kernels[0].domain

    @property
    def dtype(self) -> np.dtype:
        return np.result_type(*(k.dtype for k in self.kernels))

    def __call__(self, x, y):
        return functools.reduce(operator.add, (k(x, y) for k in self.kernels))

    evaluate = __call__

    def transpose(self) -> "GreensFun":
        """Transpose every piece: ``G.transpose()(x, y) == G(y, x)``."""
        return GreensFun([k.transpose() for k in self.kernels])

    @property
    def T(self) -> "GreensFun":
        return self.transpose()

    def apply(self, functional: Callable):
        """Apply a linear functional piece by piece and sum the results.

        Parameters
        ----------
        functional : callable
            Maps one piece to a value supporting ``+``, e.g.
            ``lambda k: k.integrate(0)`` or ``lambda k: k.sum()``.
        """
        return functools.reduce(operator.add, (functional(k) for k in self.kernels))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_function(
        cls,
        function: Callable,
        space: TensorSpace,
        method: str = "standard",
        **kwargs,
    ) -> "GreensFun":
        """Approximate a kernel ``function(x, y)``.

        Parameters
        ----------
        function : callable
            ``function(x, y) -> number``.
        space : TensorSpace
            Target outer-product basis.
        method : {'standard', 'convolution'}
            ``'standard'`` samples on the tensor grid
            (:meth:`ProductFun.from_function`, keyword ``shape``).
            ``'convolution'`` treats *function* as a difference kernel
            ``g(y - x)`` (:func:`kernelfun.addition.convolution_product_fun`,
            keywords ``n`` and ``verbose``).

        Returns
        -------
        GreensFun
        """
        if method == "standard":
            piece = ProductFun.from_function(function, space, **kwargs)
        elif method == "convolution":
            from kernelfun.addition import convolution_product_fun

            piece = convolution_product_fun(function, space, **kwargs)
        else:
            raise ValueError(
                f"method must be 'standard' or 'convolution', got {method!r}"
            )
        return cls(piece)

    # ------------------------------------------------------------------
    # Arithmetic operators
    # ------------------------------------------------------------------

    @staticmethod
    def _pieces(other) -> Iterable:
        if isinstance(other, GreensFun):
            return other.kernels
        if isinstance(other, ProductFun):
            return [other]
        return None

    def __add__(self, other):
        pieces = self._pieces(other)
        if pieces is None:
            return NotImplemented
        return GreensFun(self.kernels + list(pieces))

    def __radd__(self, other):
        pieces = self._pieces(other)
        if pieces is None:
            return NotImplemented
        return GreensFun(list(pieces) + self.kernels)

    def __sub__(self, other):
        pieces = self._pieces(other)
        if pieces is None:
            return NotImplemented
        return GreensFun(self.kernels + [-k for k in pieces])

    def __rsub__(self, other):
        pieces = self._pieces(other)
        if pieces is None:
            return NotImplemented
        return GreensFun(list(pieces) + [-k for k in self.kernels])

    def __neg__(self):
        return GreensFun([-k for k in self.kernels])

    def __mul__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return GreensFun([k * scalar for k in self.kernels])

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"GreensFun(kernels={len(self)}, domain={_format_domain(self.domain)})"

    def __str__(self) -> str:
        lines = ["GreensFun with kernels:", "{"]
        lines.extend(f" {k!r}" for k in self.kernels)
        lines.append("}")
        return "\n".join(lines)
