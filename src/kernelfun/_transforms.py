"""Value-to-coefficient transforms shared by the spaces.

References
----------
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 3-4.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.polynomial.chebyshev import chebpts1


def _make_chebyshev_nodes(n: int) -> np.ndarray:
    """Chebyshev Type I nodes on [-1, 1] in ascending order."""
    return np.sort(chebpts1(n))


def _chebyshev_coefficients(values: np.ndarray, axis: int = 0) -> np.ndarray:
    """Chebyshev coefficients from values at ascending Type I nodes.

    Uses DCT-II (``scipy.fft.dct``) along *axis*.

    Parameters
    ----------
    values : ndarray
        Samples at :func:`_make_chebyshev_nodes` along *axis*.
    axis : int, optional
        Axis holding the samples.

    Returns
    -------
    ndarray
        Coefficients c_0, ..., c_{n-1} along *axis*.
    """
    from scipy.fft import dct

    values = np.asarray(values)
    n = values.shape[axis]
    # Reverse to decreasing-node order for DCT-II convention
    flipped = np.flip(values, axis=axis)
    if np.iscomplexobj(flipped):
        coeffs = (dct(flipped.real, type=2, axis=axis)
                  + 1j * dct(flipped.imag, type=2, axis=axis)) / n
    else:
        coeffs = dct(flipped, type=2, axis=axis) / n
    first = [slice(None)] * coeffs.ndim
    first[axis] = 0
    coeffs[tuple(first)] /= 2
    return coeffs


def _make_periodic_nodes(n: int) -> np.ndarray:
    """Equispaced angles ``-pi + 2 pi j / n`` for j = 0..n-1."""
    return -math.pi + 2.0 * math.pi * np.arange(n) / n


def _fourier_coefficients(values: np.ndarray, axis: int = 0) -> np.ndarray:
    """Real Fourier coefficients ``[a_0, b_1, a_1, b_2, a_2, ...]``.

    *values* are samples at :func:`_make_periodic_nodes` along *axis*; the
    sample count must be odd so that sines and cosines pair up.
    """
    from scipy.fft import fft

    values = np.asarray(values)
    n = values.shape[axis]
    if n % 2 == 0:
        raise ValueError(f"Fourier sampling needs an odd number of points, got {n}")

    moved = np.moveaxis(values, axis, 0)
    spectrum = fft(moved, axis=0) / n
    out = np.empty(spectrum.shape, dtype=complex)
    out[0] = spectrum[0]
    for k in range(1, n // 2 + 1):
        # samples start at -pi, which multiplies mode k by (-1)^k
        sign = -1.0 if k % 2 else 1.0
        positive = sign * spectrum[k]
        negative = sign * spectrum[n - k]
        out[2 * k - 1] = 1j * (positive - negative)
        out[2 * k] = positive + negative
    if not np.iscomplexobj(values):
        out = out.real.copy()
    return np.moveaxis(out, 0, axis)
