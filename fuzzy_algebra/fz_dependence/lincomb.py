"""
Linear dependence in fuzzy algebra.

Provides:
- is_lincomb(kind, a, b): is b a fuzzy linear combination of the columns of a?
- is_linindep(a, kind, full): are the columns of a linearly independent?

A vector b is a linear combination of the columns of A under a composition
when the system A∘x = b is consistent; the extremal solution then gives the
coefficients. Only compositions with a solver family are supported.

References:
    K. Peeva, Zl. Zahariev, Linear dependence in fuzzy algebra, Proceedings
    of the 31st International Conference AMEE, Sozopol, 2005, pp. 71-83.
"""

from typing import Any, Optional, Tuple, Union

import numpy as np

from fuzzy_algebra.fz_core.types import FuzzyMatrix
from fuzzy_algebra.fz_solvers.families import get_family, solve


def is_lincomb(kind: str, a: Any, b: Any) -> Optional[np.ndarray]:
    """
    Check whether b is a linear combination of the columns of a.

    Args:
        kind: Composition name ("minalpha", "godel", "maxlukasiewicz")
        a: Matrix whose columns are the generating vectors
        b: Either a column index of a (that column is checked against all
            the other columns) or a vector

    Returns:
        Coefficient vector (the extremal solution) if b is a combination,
        None otherwise

    Raises:
        ValueError: If kind has no solver, b is a matrix, or the column index
            is out of range
        DimensionMismatch: If the vector length differs from a.rows

    Example:
        >>> is_lincomb("godel", [[0.9, 0.1], [0.1, 0.8]], [0.4, 0.3]).tolist()
        [0.4, 0.3]
    """
    family = get_family(kind)
    A = np.asarray(FuzzyMatrix(a))

    if np.isscalar(b) or np.ndim(b) == 0:
        col = int(b)
        if not 0 <= col < A.shape[1]:
            raise ValueError(f"Column index {col} out of range for {A.shape[1]} columns")
        target = A[:, col]
        A = np.delete(A, col, axis=1)
    else:
        target = np.asarray(b, dtype=np.float64)
        if target.ndim == 2 and 1 not in target.shape:
            raise ValueError("b cannot be a matrix. Only column indices or vectors are allowed.")
        target = np.asarray(FuzzyMatrix(target.reshape(-1))).reshape(-1)

    result = solve(A, target, family, full=False)
    if isinstance(result, np.ndarray):
        return result
    return None


def is_linindep(a: Any, kind: str, full: bool = False) -> Union[bool, Tuple[int, ...]]:
    """
    Check whether the columns of a are linearly independent.

    Each column is tested against the remaining columns with is_lincomb.

    Args:
        a: Matrix whose columns are tested
        kind: Composition name
        full: If False, return a bool (stops at the first dependent column).
            If True, return the indices of every dependent column.

    Returns:
        True/False, or a tuple of dependent column indices when full is True
        (empty tuple means independent)
    """
    A = np.asarray(FuzzyMatrix(a))
    dependent = []

    for col in range(A.shape[1]):
        if is_lincomb(kind, A, col) is not None:
            if not full:
                return False
            dependent.append(col)

    if full:
        return tuple(dependent)
    return True


__all__ = ["is_lincomb", "is_linindep"]
