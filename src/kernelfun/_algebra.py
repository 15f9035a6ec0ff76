"""Shared helpers for arithmetic on bivariate functions."""

from __future__ import annotations

import numpy as np

from kernelfun.domains import DomainMismatchError


def _is_scalar(value) -> bool:
    """Return True if *value* is a numeric scalar (int, float, complex, or numpy scalar)."""
    return isinstance(value, (int, float, complex, np.number)) and not isinstance(value, bool)


def _check_same_domain(a, b) -> None:
    """Validate that two bivariate pieces live on the same domain.

    Both operands must expose ``domain``; the domains compare equal
    factor by factor.
    """
    if a.domain != b.domain:
        raise DomainMismatchError(
            f"Domain mismatch: {_format_domain(a.domain)} vs {_format_domain(b.domain)}"
        )


def _format_domain(domain) -> str:
    return " x ".join(str(d) for d in domain)


def _pad_to(matrix: np.ndarray, shape: tuple, dtype) -> np.ndarray:
    """Copy *matrix* into the top-left corner of a zero matrix of *shape*."""
    out = np.zeros(shape, dtype=dtype)
    m, n = matrix.shape
    out[:m, :n] = matrix
    return out
