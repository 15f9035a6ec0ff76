"""Shared test fixtures for kernelfun tests."""

import math

import numpy as np
import pytest

from kernelfun import Chebyshev, Fourier, Fun, Interval, PeriodicInterval, tensor


# ---------------------------------------------------------------------------
# Test points
# ---------------------------------------------------------------------------

TEST_POINTS_2D = [
    (0.5, 0.3),
    (-0.7, 0.8),
    (0.0, 0.0),
    (0.9, -0.9),
    (-0.2, 0.6),
    (1.0, -1.0),
]

PERIODIC_POINTS_2D = [
    (0.1, 2.5),
    (-3.0, 1.2),
    (0.0, 0.0),
    (2.9, -2.9),
    (-1.4, -0.6),
]


def chebyshev_reference(degree, size):
    """Bivariate Chebyshev coefficients of T_degree((y - x) / 2), by direct expansion.

    Expands T_degree(s) in powers of s, then ((y - x) / 2)^k binomially,
    and converts the monomials of x and y back to Chebyshev coefficients.
    """
    from numpy.polynomial import chebyshev as C

    power = C.cheb2poly(np.eye(degree + 1)[degree])
    monomial = np.zeros((size, size))
    for k, pk in enumerate(power):
        for b in range(k + 1):
            a = k - b
            monomial[a, b] += pk * math.comb(k, b) * (-1) ** a / 2 ** k

    to_cheb = np.zeros((size, size))
    for a in range(size):
        to_cheb[: a + 1, a] = C.poly2cheb(np.eye(a + 1)[a])
    return to_cheb @ monomial @ to_cheb.T


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def cheb_unit():
    """Chebyshev space on [-1, 1]."""
    return Chebyshev(Interval(-1, 1))


@pytest.fixture
def cheb_double():
    """Chebyshev space on [-2, 2], the antidiagonal domain for [-1, 1] targets."""
    return Chebyshev(Interval(-2, 2))


@pytest.fixture
def fourier():
    """Fourier space on [-pi, pi)."""
    return Fourier(PeriodicInterval())


@pytest.fixture(scope="module")
def exp_antidiagonal():
    """exp(t) on [-2, 2], 40 samples."""
    return Fun.from_function(math.exp, Chebyshev(Interval(-2, 2)), n=40)


@pytest.fixture(scope="module")
def cheb_product_space():
    """Chebyshev ⊗ Chebyshev on [-1, 1]^2."""
    return tensor(Chebyshev(), Chebyshev())
