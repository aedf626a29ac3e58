"""Dense linear-algebra primitives consumed by second-order solvers.

Thin NumPy-backed implementations of the ``invert``/``dot`` contract. Solvers
accept replacements with the same signatures.
"""

from __future__ import annotations

import numpy as np

from .core import Array
from .errors import InvalidParameterError, NumericalError


def invert(mat: Array) -> Array:
    """Return the inverse of a square matrix.

    Raises
    ------
    NumericalError
        If the matrix is singular or the inverse is not finite.
    """
    mat = np.asarray(mat, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise InvalidParameterError(f"Expected a square matrix, got shape {mat.shape}.")
    try:
        inv = np.linalg.inv(mat)
    except np.linalg.LinAlgError as exc:
        raise NumericalError(f"Matrix inversion failed: {exc}") from exc
    if not np.all(np.isfinite(inv)):
        raise NumericalError("Matrix inversion produced non-finite values.")
    return inv


def dot(mat: Array, vec: Array) -> Array:
    """Matrix-vector product."""
    return np.dot(np.asarray(mat, dtype=float), np.asarray(vec, dtype=float))


__all__ = ["dot", "invert"]
