"""
Core type definitions for fuzzy algebra.

Provides:
- EPS: the comparison tolerance used everywhere (float64 machine epsilon)
- DimensionMismatch: raised before any computation on incompatible shapes
- clamp_unit: NaN → 0, out-of-range → nearest bound of [0,1]
- FuzzyMatrix: immutable 2-D matrix of bounded values

A fuzzy matrix is a matrix whose elements lie in the [0,1] interval. Values
are clamped on construction, so every FuzzyMatrix is valid by construction.
Equality is tolerance-based: two elements are equal when |a - b| <= EPS.
"""

from typing import Any, Optional, Tuple

import numpy as np

# Comparison tolerance: float64 machine epsilon
EPS = float(np.finfo(np.float64).eps)


class DimensionMismatch(ValueError):
    """Operand shapes are incompatible (inner dimensions must agree)."""


def clamp_unit(values: Any) -> np.ndarray:
    """
    Clamp values into [0,1] as a fresh float64 array.

    NaN collapses to 0; +inf to 1 and -inf to 0 through the regular clip.

    Examples:
        >>> clamp_unit([[0.2, 1.5], [0.3, -0.1]]).tolist()
        [[0.2, 1.0], [0.3, 0.0]]
        >>> clamp_unit([float("nan"), 0.5]).tolist()
        [0.0, 0.5]
    """
    arr = np.array(values, dtype=np.float64)
    arr[np.isnan(arr)] = 0.0
    return np.clip(arr, 0.0, 1.0)


class FuzzyMatrix:
    """
    Immutable 2-D matrix with elements in [0,1].

    Construction:
        FuzzyMatrix()              → empty 0×0 matrix
        FuzzyMatrix(data)          → clamped copy of data (1-D data is a row)
        FuzzyMatrix(rows, cols)    → zero-filled rows×cols matrix

    Arithmetic (+, -) is element-wise and re-clamped; ~a is the fuzzy
    negation 1 - a. `a == b` is True iff every element agrees within EPS;
    `a.isclose(b)` returns the element-wise mask.

    The backing array is read-only, so a FuzzyMatrix can be shared freely.
    """

    __slots__ = ("_data",)

    # Make numpy defer to our reflected operators (ndarray == FuzzyMatrix)
    __array_ufunc__ = None

    def __init__(self, data: Any = None, cols: Optional[int] = None):
        if data is None:
            arr = np.zeros((0, 0), dtype=np.float64)
        elif cols is not None:
            arr = np.zeros((int(data), int(cols)), dtype=np.float64)
        else:
            arr = clamp_unit(data)
            if arr.ndim == 0:
                arr = arr.reshape(1, 1)
            elif arr.ndim == 1:
                arr = arr.reshape(1, -1)
            elif arr.ndim != 2:
                raise ValueError(f"FuzzyMatrix must be 2-D, got {arr.ndim}-D data")

        arr.flags.writeable = False
        self._data = arr

    @classmethod
    def column(cls, values: Any) -> "FuzzyMatrix":
        """Build an n×1 column matrix from a vector."""
        arr = np.asarray(values, dtype=np.float64).reshape(-1, 1)
        return cls(arr)

    # ------------------------------------------------------------------
    # Shape and access
    # ------------------------------------------------------------------

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    def __array__(self, dtype=None, copy=None):
        arr = self._data if dtype is None else self._data.astype(dtype, copy=False)
        if copy:
            return arr.copy()
        return arr

    def to_numpy(self) -> np.ndarray:
        """Writable copy of the values."""
        return self._data.copy()

    def __getitem__(self, key):
        return self._data[key]

    # ------------------------------------------------------------------
    # Tolerance-based equality
    # ------------------------------------------------------------------

    def isclose(self, other: Any, tol: float = EPS) -> np.ndarray:
        """
        Element-wise equality mask: |a - b| <= tol.

        Raises:
            DimensionMismatch: If shapes differ
        """
        other_arr = np.asarray(other, dtype=np.float64)
        if other_arr.shape != self.shape:
            raise DimensionMismatch(
                f"Cannot compare {self.shape} with {other_arr.shape}"
            )
        return np.abs(self._data - other_arr) <= tol

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (FuzzyMatrix, np.ndarray, list, tuple)):
            return NotImplemented
        other_arr = np.asarray(other, dtype=np.float64)
        if other_arr.shape != self.shape:
            return False
        return bool(np.all(np.abs(self._data - other_arr) <= EPS))

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    # ------------------------------------------------------------------
    # Clamped arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Any) -> "FuzzyMatrix":
        return FuzzyMatrix(self._data + np.asarray(other, dtype=np.float64))

    __radd__ = __add__

    def __sub__(self, other: Any) -> "FuzzyMatrix":
        return FuzzyMatrix(self._data - np.asarray(other, dtype=np.float64))

    def __rsub__(self, other: Any) -> "FuzzyMatrix":
        return FuzzyMatrix(np.asarray(other, dtype=np.float64) - self._data)

    def __invert__(self) -> "FuzzyMatrix":
        """Fuzzy negation: 1 - a."""
        return FuzzyMatrix(1.0 - self._data)

    def __repr__(self) -> str:
        return f"FuzzyMatrix({self._data.tolist()!r})"
