"""Bivariate functions of a difference, ``F(x, y) = f(y - x)``.

Given a univariate :class:`~kernelfun.fun.Fun` *f* and target spaces *u*
and *v*, the builders here return the coefficient matrix of ``f(y - x)`` in
``u ⊗ v`` without sampling:

- Chebyshev input, Chebyshev (optionally Jacobi-weighted) targets: the
  addition-theorem recurrence of :mod:`kernelfun._recurrence`, O(N^3).
- Fourier, cosine or sine input, Fourier targets: direct placement from
  the product-to-sum identities, O(N).

One builder is registered per ``(source, first, second)`` family triple;
:func:`product_fun_from_antidiagonal` dispatches on that key.

References
----------
- Mason & Handscomb (2003), "Chebyshev Polynomials", Chapman & Hall,
  Section 2.4.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Tuple

import numpy as np

from kernelfun.domains import (
    DomainMismatchError,
    Interval,
    PeriodicInterval,
    lengths_match,
)
from kernelfun.fun import CHOP_FACTOR, DEFAULT_N, Fun, chop, relative_tolerance
from kernelfun.product_fun import ProductFun
from kernelfun.spaces import (
    BasisFamily,
    Chebyshev,
    Fourier,
    Space,
    TensorSpace,
    tensor,
)

Builder = Callable[[Fun, Space, Space], np.ndarray]

_BUILDERS: Dict[Tuple[BasisFamily, BasisFamily, BasisFamily], Builder] = {}


def register_builder(source: BasisFamily, first: BasisFamily, second: BasisFamily):
    """Register a builder for antidiagonals in *source* and targets *first* ⊗ *second*.

    The decorated function takes ``(f, u, v)`` and returns the coefficient
    matrix. Decorators can be stacked to register several combinations.
    """
    def decorator(builder: Builder) -> Builder:
        _BUILDERS[(source, first, second)] = builder
        return builder
    return decorator


def registered_combinations() -> list:
    """Family triples that have a builder, in registration order."""
    return list(_BUILDERS)


def product_fun_from_antidiagonal(
    f: Fun, u: Space, v: Space, verbose: bool = False
) -> ProductFun:
    """Build ``F(x, y) = f(y - x)`` with ``x`` in *u* and ``y`` in *v*.

    Parameters
    ----------
    f : Fun
        The antidiagonal. Chebyshev input needs ``length(f.domain) ==
        2 length(u.domain) == 2 length(v.domain)``; periodic input needs all
        three lengths equal.
    u, v : Space
        Target spaces for the first and second variable.
    verbose : bool, optional
        If True, print build progress. Default is False.

    Returns
    -------
    ProductFun
        Owns the freshly built coefficient matrix.

    Raises
    ------
    TypeError
        If no builder is registered for the family combination.
    DomainMismatchError
        If the domain lengths violate the builder's precondition.
    """
    key = (f.space.family, u.family, v.family)
    try:
        builder = _BUILDERS[key]
    except KeyError:
        raise TypeError(
            f"No antidiagonal builder for a {key[0].value} function onto "
            f"{key[1].value} ⊗ {key[2].value}"
        ) from None

    if verbose:
        print(f"Building {key[0].value} antidiagonal onto "
              f"{key[1].value} ⊗ {key[2].value} ({len(f)} coefficients)...")

    start = time.time()
    X = builder(f, u, v)
    elapsed = time.time() - start

    if verbose:
        m, n = X.shape
        print(f"  Built {m}x{n} coefficient matrix in {elapsed:.3f}s")

    result = ProductFun(X, tensor(u, v))
    result.build_time = elapsed
    return result


def _check_half_length(f: Fun, u: Space, v: Space) -> None:
    lf, lu, lv = f.domain.length, u.domain.length, v.domain.length
    if not (lengths_match(lf, 2 * lu) and lengths_match(lf, 2 * lv)):
        raise DomainMismatchError(
            f"Antidiagonal domain length {lf} must be twice the target "
            f"lengths, got {lu} and {lv}"
        )


def _check_equal_length(f: Fun, u: Space, v: Space) -> None:
    lf, lu, lv = f.domain.length, u.domain.length, v.domain.length
    if not (lengths_match(lf, lu) and lengths_match(lf, lv)):
        raise DomainMismatchError(
            f"Periodic domain lengths must agree, got {lf}, {lu} and {lv}"
        )


def _result_dtype(coefficients: np.ndarray):
    return np.result_type(coefficients.dtype, float)


# ----------------------------------------------------------------------
# Chebyshev addition theorem
# ----------------------------------------------------------------------

_CHEB = BasisFamily.CHEBYSHEV
_WCHEB = BasisFamily.WEIGHTED_CHEBYSHEV


@register_builder(_CHEB, _CHEB, _CHEB)
@register_builder(_CHEB, _CHEB, _WCHEB)
@register_builder(_CHEB, _WCHEB, _CHEB)
@register_builder(_CHEB, _WCHEB, _WCHEB)
def chebyshev_addition_theorem(f: Fun, u: Space, v: Space, tol: float | None = None) -> np.ndarray:
    """Coefficients of ``f(y - x)`` in Chebyshev ⊗ Chebyshev.

    Chops the coefficients of *f* at ``CHOP_FACTOR * eps * max|c|`` (or
    *tol*), pads them to at least three, and accumulates
    ``X += c[d] * C_d`` over the addition-theorem matrices ``C_d`` of
    ``T_d((y - x) / 2)``.

    Parameters
    ----------
    f : Fun
        Chebyshev antidiagonal on a domain of length ``2L``.
    u, v : Space
        Chebyshev or Jacobi-weighted Chebyshev spaces on domains of length ``L``.
    tol : float, optional
        Absolute chop tolerance overriding the relative default.

    Returns
    -------
    ndarray of shape (N, N)
        ``N = max(3, len(chopped coefficients))``.
    """
    from kernelfun._recurrence import active_cells, antidiagonal_orders

    _check_half_length(f, u, v)

    c = f.coefficients
    if tol is None:
        tol = relative_tolerance(c, CHOP_FACTOR)
    c = chop(c, tol)
    N = len(c)
    if N < 3:
        c = np.concatenate([c, np.zeros(3 - N, dtype=c.dtype)])
        N = 3

    dtype = _result_dtype(c)
    X = np.zeros((N, N), dtype=dtype)
    for degree, C in antidiagonal_orders(N, dtype):
        cn = c[degree]
        if cn == 0:
            continue
        for i, j in active_cells(degree, N):
            X[i, j] += cn * C[i, j]
    return X


# ----------------------------------------------------------------------
# Periodic product-to-sum placement
# ----------------------------------------------------------------------

_FOURIER = BasisFamily.FOURIER


def _periodic_coefficients(f: Fun) -> np.ndarray:
    c = f.coefficients
    if len(c) == 0:
        c = np.zeros(1, dtype=c.dtype)
    return c


@register_builder(_FOURIER, _FOURIER, _FOURIER)
def fourier_addition_theorem(f: Fun, u: Space, v: Space) -> np.ndarray:
    """Coefficients of ``f(y - x)`` for a full Fourier series *f*.

    ``cos k(y-x) = cos kx cos ky + sin kx sin ky`` and
    ``sin k(y-x) = cos kx sin ky - sin kx cos ky`` place each pair
    ``(b_k, a_k)`` into the 2x2 block of harmonic k. No chopping is done.
    """
    _check_equal_length(f, u, v)
    c = _periodic_coefficients(f)
    N = len(c)
    X = np.zeros((N, N), dtype=_result_dtype(c))
    X[0, 0] += c[0]
    for i in range(1, N - 1, 2):
        X[i, i] += c[i + 1]
        X[i + 1, i] += c[i]
        X[i, i + 1] -= c[i]
        X[i + 1, i + 1] += c[i + 1]
    if N % 2 == 0:
        # trailing sine without its cosine partner; these cells are still zero
        X[N - 1, N - 2] = c[N - 1]
        X[N - 2, N - 1] = -c[N - 1]
    return X


@register_builder(BasisFamily.COSINE, _FOURIER, _FOURIER)
def cosine_addition_theorem(f: Fun, u: Space, v: Space) -> np.ndarray:
    """Coefficients of ``f(y - x)`` for a cosine series *f* (diagonal only)."""
    _check_equal_length(f, u, v)
    c = _periodic_coefficients(f)
    N = 2 * len(c) - 1
    X = np.zeros((N, N), dtype=_result_dtype(c))
    X[0, 0] += c[0]
    for i in range(1, N, 2):
        k = (i + 1) // 2
        X[i, i] += c[k]
        X[i + 1, i + 1] += c[k]
    return X


@register_builder(BasisFamily.SINE, _FOURIER, _FOURIER)
def sine_addition_theorem(f: Fun, u: Space, v: Space) -> np.ndarray:
    """Coefficients of ``f(y - x)`` for a sine series *f* (antisymmetric only)."""
    _check_equal_length(f, u, v)
    c = _periodic_coefficients(f)
    N = 2 * len(c) + 1
    X = np.zeros((N, N), dtype=_result_dtype(c))
    for i in range(1, N, 2):
        k = (i - 1) // 2
        X[i + 1, i] += c[k]
        X[i, i + 1] -= c[k]
    return X


# ----------------------------------------------------------------------
# Difference kernels from bivariate callables
# ----------------------------------------------------------------------

def convolution_product_fun(
    function: Callable, space: TensorSpace, n: int = DEFAULT_N, verbose: bool = False
) -> ProductFun:
    """Approximate a difference kernel ``function(x, y) = g(y - x)``.

    Samples the antidiagonal ``g(t) = function(c - t/2, c + t/2)`` through
    the common midpoint ``c`` of the two factor domains, fits it with
    :meth:`Fun.from_function`, and builds the matrix with
    :func:`product_fun_from_antidiagonal`.

    Parameters
    ----------
    function : callable
        ``function(x, y) -> number`` depending on ``y - x`` only.
    space : TensorSpace
        Both factors must share one domain; Chebyshev or Fourier.
    n : int, optional
        Number of samples of the antidiagonal.
    verbose : bool, optional
        Forwarded to the builder.

    Returns
    -------
    ProductFun
    """
    u, v = space.first, space.second
    if u.domain != v.domain:
        raise DomainMismatchError(
            f"Difference kernels need equal factor domains, got {u.domain} and {v.domain}"
        )
    domain = u.domain
    centre = domain.midpoint

    def antidiagonal(t):
        return function(centre - 0.5 * t, centre + 0.5 * t)

    if u.family is _CHEB and v.family is _CHEB:
        half = domain.length
        source = Chebyshev(Interval(-half, half))
    elif u.family is _FOURIER and v.family is _FOURIER:
        half = 0.5 * domain.length
        source = Fourier(PeriodicInterval(-half, half))
        if n % 2 == 0:
            n += 1
    else:
        raise TypeError(
            f"No difference-kernel construction for {u.family.value} ⊗ "
            f"{v.family.value}; use unweighted Chebyshev or Fourier spaces"
        )

    g = Fun.from_function(antidiagonal, source, n)
    return product_fun_from_antidiagonal(g, u, v, verbose=verbose)
