"""
Operator library: pointwise operators and aggregators on [0,1].

Provides:
- Operator: closed enumeration of binary operators [0,1]×[0,1] → [0,1]
- Aggregator: MAX / MIN reductions (the two lattice operations)
- OPERATORS, AGGREGATORS: shared dispatch tables
- get_operator / get_aggregator: resolve a name or enum member once
- lukasiewicz_residuum: uncapped 1 - x + y

Every operator is a pure, vectorized numpy function of two broadcastable
arrays. The composition engine and the solver preprocessing both resolve
operators through these tables, so forward evaluation and inversion share
identical definitions.

Operator definitions (Peeva & Kyosev, Fuzzy Relational Calculus):
- ALPHA (Gödel implication):    x α y = 1 if x <= y else y
- EPSILON:                      x ε y = y if x < y else 0
- DIAMOND (Goguen implication): x ◇ y = 1 if x <= y else y / x
- DELTA:                        x δ y = (y - x) / (1 - x) if x < y else 0
- GAMMA:                        x γ y = y - x if x < y else 0

EPSILON, DELTA and GAMMA are the residuals of max, probabilistic sum and
bounded sum (least z with x ⊕ z >= y); ALPHA and DIAMOND are the residuals
of min and product (greatest z with x ⊗ z <= y).
"""

from enum import Enum
from typing import Callable, Dict, Union

import numpy as np

BinaryOp = Callable[[np.ndarray, np.ndarray], np.ndarray]
Reduction = Callable[..., np.ndarray]


class Operator(str, Enum):
    """Pointwise operators, keyed by stable lowercase names."""

    MIN = "min"
    MAX = "max"
    PRODUCT = "product"
    ALPHA = "alpha"
    EPSILON = "epsilon"
    DIAMOND = "diamond"
    LUKASIEWICZ_IMPLICATION = "lukasiewicz_implication"
    LUKASIEWICZ_TNORM = "lukasiewicz_tnorm"
    PROBABILISTIC_SUM = "probabilistic_sum"
    BOUNDED_SUM = "bounded_sum"
    BOUNDED_DIFFERENCE = "bounded_difference"
    DELTA = "delta"
    GAMMA = "gamma"


class Aggregator(str, Enum):
    """Reductions over the inner dimension of a composition."""

    MAX = "max"
    MIN = "min"


# =============================================================================
# Pointwise Operators
# =============================================================================


def fmin(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return np.minimum(x, y)


def fmax(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return np.maximum(x, y)


def fproduct(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return np.multiply(x, y)


def falpha(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Gödel implication: 1 if x <= y, y otherwise."""
    x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
    return np.where(x <= y, 1.0, y)


def fepsilon(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """y if x < y, 0 otherwise."""
    x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
    return np.where(x < y, y, 0.0)


def fdiamond(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Goguen implication: 1 if x <= y, y / x otherwise."""
    x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
    # x > y >= 0 on the division branch, so x is never 0 there
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(x <= y, 1.0, y / x)


def lukasiewicz_residuum(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Uncapped Lukasiewicz residuum 1 - x + y.

    Values above 1 are kept: the max-Lukasiewicz solver reads them as rows
    whose right-hand side cannot be reached from that column.
    """
    return 1.0 - np.asarray(x, dtype=np.float64) + np.asarray(y, dtype=np.float64)


def fimpl(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Lukasiewicz implication: min(1, 1 - x + y)."""
    return np.minimum(1.0, lukasiewicz_residuum(x, y))


def ftnorml(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Lukasiewicz t-norm: max(0, x + y - 1)."""
    return np.maximum(0.0, np.asarray(x, dtype=np.float64) + y - 1.0)


def fprobabilisticsum(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return np.asarray(x, dtype=np.float64) + y - np.multiply(x, y)


def fboundedsum(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return np.minimum(1.0, np.asarray(x, dtype=np.float64) + y)


def fboundeddifference(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return np.maximum(0.0, np.asarray(x, dtype=np.float64) - y)


def fdelta(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """(y - x) / (1 - x) if x < y, 0 otherwise."""
    x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
    # x < y <= 1 on the division branch, so 1 - x is never 0 there
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(x < y, (y - x) / (1.0 - x), 0.0)


def fgama(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """y - x if x < y, 0 otherwise."""
    x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
    return np.where(x < y, y - x, 0.0)


# =============================================================================
# Aggregators
# =============================================================================


def agg_max(values: np.ndarray, axis: int = -1) -> np.ndarray:
    """Max over axis; an empty axis aggregates to 0 (identity of max)."""
    return np.max(values, axis=axis, initial=0.0)


def agg_min(values: np.ndarray, axis: int = -1) -> np.ndarray:
    """Min over axis; an empty axis aggregates to 1 (identity of min)."""
    return np.min(values, axis=axis, initial=1.0)


# =============================================================================
# Dispatch Tables
# =============================================================================


OPERATORS: Dict[Operator, BinaryOp] = {
    Operator.MIN: fmin,
    Operator.MAX: fmax,
    Operator.PRODUCT: fproduct,
    Operator.ALPHA: falpha,
    Operator.EPSILON: fepsilon,
    Operator.DIAMOND: fdiamond,
    Operator.LUKASIEWICZ_IMPLICATION: fimpl,
    Operator.LUKASIEWICZ_TNORM: ftnorml,
    Operator.PROBABILISTIC_SUM: fprobabilisticsum,
    Operator.BOUNDED_SUM: fboundedsum,
    Operator.BOUNDED_DIFFERENCE: fboundeddifference,
    Operator.DELTA: fdelta,
    Operator.GAMMA: fgama,
}

AGGREGATORS: Dict[Aggregator, Reduction] = {
    Aggregator.MAX: agg_max,
    Aggregator.MIN: agg_min,
}


def get_operator(op: Union[Operator, str, BinaryOp]) -> BinaryOp:
    """
    Resolve a pointwise operator.

    Args:
        op: Operator member, its name (case-insensitive, e.g. "alpha"),
            or a callable (returned unchanged)

    Returns:
        Vectorized binary function

    Raises:
        ValueError: If the name is not in the operator table

    Examples:
        >>> float(get_operator("alpha")(0.7, 0.4))
        0.4
        >>> float(get_operator(Operator.EPSILON)(0.2, 0.5))
        0.5
    """
    if isinstance(op, Operator):
        return OPERATORS[op]
    if isinstance(op, str):
        try:
            return OPERATORS[Operator(op.lower())]
        except ValueError:
            valid = [o.value for o in Operator]
            raise ValueError(f"Unknown operator '{op}'. Must be one of {valid}") from None
    if callable(op):
        return op
    raise ValueError(f"Cannot resolve operator from {type(op).__name__}")


def get_aggregator(agg: Union[Aggregator, str, Reduction]) -> Reduction:
    """Resolve an aggregator by member, name ("max"/"min"), or callable."""
    if isinstance(agg, Aggregator):
        return AGGREGATORS[agg]
    if isinstance(agg, str):
        try:
            return AGGREGATORS[Aggregator(agg.lower())]
        except ValueError:
            valid = [a.value for a in Aggregator]
            raise ValueError(f"Unknown aggregator '{agg}'. Must be one of {valid}") from None
    if callable(agg):
        return agg
    raise ValueError(f"Cannot resolve aggregator from {type(agg).__name__}")


__all__ = [
    "Operator",
    "Aggregator",
    "OPERATORS",
    "AGGREGATORS",
    "get_operator",
    "get_aggregator",
    "lukasiewicz_residuum",
]
