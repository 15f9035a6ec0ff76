"""Chebyshev addition-theorem recurrence for ``T_d((y - x) / 2)``.

With ``s = (y - x) / 2`` the three-term recurrence
``T_d(s) = (y - x) T_{d-1}(s) - T_{d-2}(s)`` turns into a recurrence on the
bivariate Chebyshev coefficient matrices ``C_d``, where ``C_d[i, j]``
multiplies ``T_i(x) T_j(y)``. Multiplication by a variable follows from
``2 t T_k(t) = T_{k+1}(t) + T_{k-1}(t)`` for ``k >= 1`` and
``t T_0(t) = T_1(t)``:

    (t C)[k] = C[k-1] / 2 + C[k+1] / 2     k >= 2
    (t C)[1] = C[0] + C[2] / 2
    (t C)[0] = C[1] / 2

so away from the first two rows and columns the update reads

    C_d[i, j] = (C_{d-1}[i, j+1] + C_{d-1}[i, j-1]
                 - C_{d-1}[i+1, j] - C_{d-1}[i-1, j]) / 2 - C_{d-2}[i, j]

and the boundary rows and columns switch off (index 0) or double (index 1)
the neighbour terms. ``C_d`` is supported on the triangle ``i + j <= d``
and only on cells with ``i + j ≡ d (mod 2)``.

Two buffers are enough: the older one holds ``C_{d-2}`` and is overwritten
in place with ``C_d`` (each cell reads its own old value exactly once), then
the two are swapped by reference.

For testing, every ``C_d`` must equal the bivariate Chebyshev coefficients
of ``cos(d * arccos((y - x) / 2))`` on ``[-1, 1]^2``.
"""

from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np


def active_cells(degree: int, size: int) -> Iterator[Tuple[int, int]]:
    """Yield the cells ``(i, j)`` written at *degree*.

    These are ``i + j <= degree`` with ``i + j ≡ degree (mod 2)``, clipped
    to a ``size x size`` matrix.
    """
    for j in range(min(degree, size - 1), -1, -1):
        start = degree - j
        while start > size - 1:
            start -= 2
        for i in range(start, -1, -2):
            yield i, j


def _entry(buffer: np.ndarray, i: int, j: int):
    """``buffer[i, j]``, or zero outside the matrix."""
    rows, cols = buffer.shape
    if 0 <= i < rows and 0 <= j < cols:
        return buffer[i, j]
    return 0.0


def _times_variable(buffer: np.ndarray, i: int, j: int, axis: int):
    """Coefficient ``(i, j)`` of ``t * C`` where *t* is the variable of *axis*."""
    if axis == 0:
        k, lower, upper = i, _entry(buffer, i - 1, j), _entry(buffer, i + 1, j)
    else:
        k, lower, upper = j, _entry(buffer, i, j - 1), _entry(buffer, i, j + 1)
    if k == 0:
        return upper / 2
    if k == 1:
        return lower + upper / 2
    return (lower + upper) / 2


def antidiagonal_orders(size: int, dtype=float) -> Iterator[Tuple[int, np.ndarray]]:
    """Yield ``(d, C_d)`` for ``d = 0, ..., size - 1``.

    The yielded matrix is a live buffer that is overwritten two steps later;
    copy it if it has to outlive the iteration.

    Parameters
    ----------
    size : int
        Matrix size, at least 3.
    dtype : data-type, optional
        Element type of the buffers.
    """
    if size < 3:
        raise ValueError(f"size must be >= 3 to seed the recurrence, got {size}")

    older = np.zeros((size, size), dtype=dtype)
    latest = np.zeros((size, size), dtype=dtype)

    # T_0 = 1
    older[0, 0] = 1.0
    yield 0, older

    # T_1 = (y - x) / 2
    latest[1, 0] = -0.5
    latest[0, 1] = 0.5
    yield 1, latest

    # T_2 = (x^2 + y^2)/2 - xy - 1, written over T_0
    older[0, 0] = -0.5
    older[2, 0] = 0.25
    older[1, 1] = -1.0
    older[0, 2] = 0.25
    latest, older = older, latest
    yield 2, latest

    for degree in range(3, size):
        for i, j in active_cells(degree, size):
            older[i, j] = (
                _times_variable(latest, i, j, axis=1)
                - _times_variable(latest, i, j, axis=0)
                - older[i, j]
            )
        latest, older = older, latest
        yield degree, latest
