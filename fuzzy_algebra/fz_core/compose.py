"""
Composition engine: generalized matrix products over [0,1].

Provides:
- compose(A, B, aggregate, pointwise): result[i,j] = aggregate_t pointwise(A[i,t], B[t,j])
- Named compositions (maxmin, minmax, maxprod, minalpha, godel, maxepsilon,
  mindiamond, goguen, lukasiewicz, maxlukasiewicz, minprobabilistic,
  minbounded, maxdelta, maxgama)
- COMPOSITIONS: name → (aggregator, operator) table

Every named composition is compose() with one fixed (aggregate, pointwise)
pair from the operator library. There are no independent implementations.
"""

from typing import Any, Dict, Tuple, Union

import numpy as np

from .operators import (
    Aggregator,
    BinaryOp,
    Operator,
    Reduction,
    get_aggregator,
    get_operator,
)
from .types import DimensionMismatch, FuzzyMatrix


def _as_matrix(x: Any) -> np.ndarray:
    if isinstance(x, FuzzyMatrix):
        return np.asarray(x)
    return np.asarray(FuzzyMatrix(x))


def compose(
    a: Any,
    b: Any,
    aggregate: Union[Aggregator, str, Reduction],
    pointwise: Union[Operator, str, BinaryOp],
) -> FuzzyMatrix:
    """
    Compose two fuzzy matrices with an aggregator and a pointwise operator.

    Args:
        a: m×k matrix (FuzzyMatrix or array-like, clamped on the way in)
        b: k×n matrix
        aggregate: Reduction over the inner dimension ("max", "min", ...)
        pointwise: Binary operator applied to (A[i,t], B[t,j]) pairs

    Returns:
        m×n FuzzyMatrix

    Raises:
        DimensionMismatch: If a.cols != b.rows (checked before computing)

    Example:
        >>> compose([[0.2, 0.8]], [[0.5], [0.6]], "max", "min")
        FuzzyMatrix([[0.6]])
    """
    A = _as_matrix(a)
    B = _as_matrix(b)

    if A.shape[1] != B.shape[0]:
        raise DimensionMismatch(
            f"Inner matrix dimensions must agree: {A.shape} vs {B.shape}"
        )

    agg = get_aggregator(aggregate)
    op = get_operator(pointwise)

    # pairs[i, t, j] = pointwise(A[i, t], B[t, j])
    pairs = op(A[:, :, np.newaxis], B[np.newaxis, :, :])
    pairs = np.broadcast_to(pairs, (A.shape[0], A.shape[1], B.shape[1]))

    return FuzzyMatrix(agg(pairs, axis=1))


# =============================================================================
# Named Compositions
# =============================================================================


COMPOSITIONS: Dict[str, Tuple[Aggregator, Operator]] = {
    "maxmin": (Aggregator.MAX, Operator.MIN),
    "minmax": (Aggregator.MIN, Operator.MAX),
    "maxprod": (Aggregator.MAX, Operator.PRODUCT),
    "minalpha": (Aggregator.MIN, Operator.ALPHA),
    "godel": (Aggregator.MIN, Operator.ALPHA),
    "maxepsilon": (Aggregator.MAX, Operator.EPSILON),
    "mindiamond": (Aggregator.MIN, Operator.DIAMOND),
    "goguen": (Aggregator.MIN, Operator.DIAMOND),
    "lukasiewicz": (Aggregator.MIN, Operator.LUKASIEWICZ_IMPLICATION),
    "maxlukasiewicz": (Aggregator.MAX, Operator.LUKASIEWICZ_TNORM),
    "minprobabilistic": (Aggregator.MIN, Operator.PROBABILISTIC_SUM),
    "minbounded": (Aggregator.MIN, Operator.BOUNDED_SUM),
    "maxdelta": (Aggregator.MAX, Operator.DELTA),
    "maxgama": (Aggregator.MAX, Operator.GAMMA),
}


def compose_named(name: str, a: Any, b: Any) -> FuzzyMatrix:
    """
    Compose by composition name (e.g. "maxmin").

    Raises:
        ValueError: If the name is not a known composition
    """
    key = name.lower()
    if key not in COMPOSITIONS:
        raise ValueError(
            f"Unknown composition '{name}'. Must be one of {sorted(COMPOSITIONS)}"
        )
    aggregate, pointwise = COMPOSITIONS[key]
    return compose(a, b, aggregate, pointwise)


def maxmin(a: Any, b: Any) -> FuzzyMatrix:
    """max-min composition."""
    return compose_named("maxmin", a, b)


def minmax(a: Any, b: Any) -> FuzzyMatrix:
    """min-max composition."""
    return compose_named("minmax", a, b)


def maxprod(a: Any, b: Any) -> FuzzyMatrix:
    """max-product composition."""
    return compose_named("maxprod", a, b)


def minalpha(a: Any, b: Any) -> FuzzyMatrix:
    """min-α composition (min over the Gödel implication)."""
    return compose_named("minalpha", a, b)


def godel(a: Any, b: Any) -> FuzzyMatrix:
    """Gödel composition; same as minalpha."""
    return compose_named("godel", a, b)


def maxepsilon(a: Any, b: Any) -> FuzzyMatrix:
    return compose_named("maxepsilon", a, b)


def mindiamond(a: Any, b: Any) -> FuzzyMatrix:
    """min-◇ composition (min over the Goguen implication)."""
    return compose_named("mindiamond", a, b)


def goguen(a: Any, b: Any) -> FuzzyMatrix:
    """Goguen composition; same as mindiamond."""
    return compose_named("goguen", a, b)


def lukasiewicz(a: Any, b: Any) -> FuzzyMatrix:
    """min over the Lukasiewicz implication."""
    return compose_named("lukasiewicz", a, b)


def maxlukasiewicz(a: Any, b: Any) -> FuzzyMatrix:
    """max over the Lukasiewicz t-norm."""
    return compose_named("maxlukasiewicz", a, b)


def minprobabilistic(a: Any, b: Any) -> FuzzyMatrix:
    return compose_named("minprobabilistic", a, b)


def minbounded(a: Any, b: Any) -> FuzzyMatrix:
    return compose_named("minbounded", a, b)


def maxdelta(a: Any, b: Any) -> FuzzyMatrix:
    return compose_named("maxdelta", a, b)


def maxgama(a: Any, b: Any) -> FuzzyMatrix:
    return compose_named("maxgama", a, b)


__all__ = [
    "compose",
    "compose_named",
    "COMPOSITIONS",
    "maxmin",
    "minmax",
    "maxprod",
    "minalpha",
    "godel",
    "maxepsilon",
    "mindiamond",
    "goguen",
    "lukasiewicz",
    "maxlukasiewicz",
    "minprobabilistic",
    "minbounded",
    "maxdelta",
    "maxgama",
]
