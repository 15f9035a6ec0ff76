"""kernelfun: bivariate kernels from functions of a difference.

Provides :class:`ProductFun`, a bivariate function stored as a coefficient
matrix in an outer-product basis, builders that turn a univariate
:class:`Fun` ``g`` into the :class:`ProductFun` of ``g(y - x)`` (a
Chebyshev addition-theorem recurrence and closed-form Fourier, cosine and
sine placements), and :class:`GreensFun`, a sum of bivariate pieces on a
common domain.

Example
-------
>>> import math
>>> from kernelfun import Chebyshev, Fun, Interval, ProductFun
>>> g = Fun.from_function(math.exp, Chebyshev(Interval(-2, 2)))
>>> u = v = Chebyshev(Interval(-1, 1))
>>> F = ProductFun.from_antidiagonal(g, u, v)
>>> bool(abs(F(0.25, 0.75) - math.exp(0.5)) < 1e-12)
True
"""

from kernelfun._version import __version__
from kernelfun.addition import (
    convolution_product_fun,
    product_fun_from_antidiagonal,
    register_builder,
)
from kernelfun.domains import DomainMismatchError, Interval, PeriodicInterval
from kernelfun.fun import Fun, chop
from kernelfun.greens import GreensFun
from kernelfun.product_fun import ProductFun
from kernelfun.spaces import (
    BasisFamily,
    Chebyshev,
    CosSpace,
    Fourier,
    JacobiWeight,
    SinSpace,
    TensorSpace,
    tensor,
)

__all__ = [
    "BasisFamily",
    "Chebyshev",
    "CosSpace",
    "DomainMismatchError",
    "Fourier",
    "Fun",
    "GreensFun",
    "Interval",
    "JacobiWeight",
    "PeriodicInterval",
    "ProductFun",
    "SinSpace",
    "TensorSpace",
    "__version__",
    "chop",
    "convolution_product_fun",
    "product_fun_from_antidiagonal",
    "register_builder",
    "tensor",
]
