"""Shared helpers for definite integrals of basis functions.

References
----------
- Waldvogel (2006), "Fast Construction of the Fejér and Clenshaw–Curtis
  Quadrature Rules", BIT Numerical Mathematics 46(2):195–202.
- Golub & Welsch (1969), "Calculation of Gauss Quadrature Rules",
  Math. Comp. 23:221–230.
"""

from __future__ import annotations

import numpy as np


def _chebyshev_moments(n: int) -> np.ndarray:
    """Integration moments ``I_k = ∫_{-1}^{1} T_k(x) dx`` for k < n.

    ``I_k = 2/(1-k²)`` for k even, 0 for k odd.
    """
    moments = np.zeros(n)
    for k in range(0, n, 2):
        moments[k] = 2.0 / (1.0 - k * k)
    return moments


def _jacobi_chebyshev_moments(n: int, alpha: float, beta: float) -> np.ndarray:
    """Weighted moments ``∫_{-1}^{1} (1+x)^alpha (1-x)^beta T_k(x) dx``.

    Gauss–Jacobi quadrature with ``n // 2 + 1`` nodes is exact for all
    ``k < n``.

    Parameters
    ----------
    n : int
        Number of moments.
    alpha, beta : float
        Exponents at the left and right endpoint; both must exceed -1.

    Returns
    -------
    ndarray of shape (n,)
    """
    from numpy.polynomial.chebyshev import chebvander
    from scipy.special import roots_jacobi

    if alpha <= -1.0 or beta <= -1.0:
        raise ValueError(
            f"Weight exponents must exceed -1 for integrability, "
            f"got alpha={alpha}, beta={beta}"
        )
    if n == 0:
        return np.zeros(0)
    # scipy's weight is (1-x)^a (1+x)^b
    nodes, weights = roots_jacobi(n // 2 + 1, beta, alpha)
    return weights @ chebvander(nodes, n - 1)


def _periodic_moments(n: int, constant_index: int | None = 0) -> np.ndarray:
    """Moments over one period ``[-pi, pi)``: only the constant survives."""
    moments = np.zeros(n)
    if constant_index is not None and n > constant_index:
        moments[constant_index] = 2.0 * np.pi
    return moments
