"""
Solver families: Gödel (min-α) and max-Lukasiewicz.

Provides:
- GODEL: inverse of the min-α (Gödel) composition
- MAX_LUKASIEWICZ: inverse of the max-T_L (max-Lukasiewicz) composition
- FAMILIES / get_family: lookup by family or composition name
- solve, sgodel, smaxlukasiewicz: entry points

Preprocessing formulas come from the operator library:
- Gödel:            H[i,j] = min(A[i,j], b[i])          (every cell binds)
- max-Lukasiewicz:  H[i,j] = 1 - A[i,j] + b[i]          when A[i,j] - 1 <= b[i] + tol

The Gödel formula is applied unconditionally. A stricter variant binding
only cells with A[i,j] > b[i] exists in the literature but is not used here.
The max-Lukasiewicz formula is left uncapped (values above 1 are kept), and
its guard holds for every input in [0,1]. A binding cell with H = 0
(A = 1, b = 0) still constrains x[j] <= 0 and takes part in extraction.
"""

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from fuzzy_algebra.fz_core.operators import (
    Aggregator,
    Operator,
    OPERATORS,
    lukasiewicz_residuum,
)
from fuzzy_algebra.fz_core.types import EPS

from .relational import Mode, RelationalSolver, Solution, SolverFamily


# =============================================================================
# Preprocessing
# =============================================================================


def godel_help(A: np.ndarray, b: np.ndarray, tol: float) -> Tuple[np.ndarray, np.ndarray]:
    """H = min(A, b) row-wise; every cell binds."""
    H = OPERATORS[Operator.MIN](A, b[:, np.newaxis]).astype(np.float64)
    binding = np.ones(H.shape, dtype=bool)
    return H, binding


def max_lukasiewicz_help(A: np.ndarray, b: np.ndarray, tol: float) -> Tuple[np.ndarray, np.ndarray]:
    """H = 1 - A + b row-wise where A - 1 <= b + tol; sentinel 0 elsewhere."""
    B = np.broadcast_to(b[:, np.newaxis], A.shape)
    binding = A - 1.0 <= B + tol
    H = np.where(binding, lukasiewicz_residuum(A, B), 0.0)
    return H, binding


# =============================================================================
# Families
# =============================================================================


GODEL = SolverFamily(
    name="godel",
    preprocess=godel_help,
    sentinel=1.0,
    boundary_upper=True,
    composition=(Aggregator.MIN, Operator.ALPHA),
)

MAX_LUKASIEWICZ = SolverFamily(
    name="maxlukasiewicz",
    preprocess=max_lukasiewicz_help,
    sentinel=0.0,
    boundary_upper=False,
    composition=(Aggregator.MAX, Operator.LUKASIEWICZ_TNORM),
)

FAMILIES: Dict[str, SolverFamily] = {
    "godel": GODEL,
    "minalpha": GODEL,
    "maxlukasiewicz": MAX_LUKASIEWICZ,
}


def get_family(family: Union[SolverFamily, str]) -> SolverFamily:
    """
    Resolve a solver family by instance or name.

    Raises:
        ValueError: If no solver exists for the name
    """
    if isinstance(family, SolverFamily):
        return family
    key = str(family).lower()
    if key not in FAMILIES:
        raise ValueError(
            f"No solver for '{family}'. Must be one of {sorted(FAMILIES)}"
        )
    return FAMILIES[key]


# =============================================================================
# Entry Points
# =============================================================================


def solve(
    a: Any,
    b: Any,
    family: Union[SolverFamily, str] = "godel",
    mode: Union[Mode, str] = Mode.EQUALITY,
    full: bool = True,
    tol: float = EPS,
    time_limit: Optional[float] = None,
) -> Union[Solution, np.ndarray]:
    """
    Solve A∘x {=,<=,>=} b for the given family.

    Args:
        a: m×n matrix with entries in [0,1]
        b: length-m right-hand side
        family: "godel" / "minalpha" / "maxlukasiewicz" or a SolverFamily
        mode: Mode member or "=", "<=", ">="
        full: False returns only the extremal vector of a consistent system
        tol: Comparison tolerance
        time_limit: Optional cap in seconds on boundary enumeration

    Returns:
        Solution, or the extremal vector (see RelationalSolver.solve)

    Raises:
        DimensionMismatch: If A.rows != len(b)
        ValueError: If the family is unknown
        SearchTimeout: If enumeration exceeds time_limit

    Examples:
        >>> [round(v, 6) for v in solve([[0.6]], [0.3], "maxlukasiewicz").extremal]
        [0.7]
        >>> solve([[0.4]], [0.4], "godel", full=False).tolist()
        [0.4]
    """
    solver = RelationalSolver(get_family(family), tol=tol, time_limit=time_limit)
    return solver.solve(a, b, mode=mode, full=full)


def sgodel(
    a: Any,
    b: Any,
    mode: Union[Mode, str] = Mode.EQUALITY,
    full: bool = True,
    **kwargs,
) -> Union[Solution, np.ndarray]:
    """Solve a system with min-α (Gödel) composition."""
    return solve(a, b, GODEL, mode=mode, full=full, **kwargs)


def smaxlukasiewicz(
    a: Any,
    b: Any,
    mode: Union[Mode, str] = Mode.EQUALITY,
    full: bool = True,
    **kwargs,
) -> Union[Solution, np.ndarray]:
    """Solve a system with max-Lukasiewicz composition."""
    return solve(a, b, MAX_LUKASIEWICZ, mode=mode, full=full, **kwargs)


__all__ = [
    "GODEL",
    "MAX_LUKASIEWICZ",
    "FAMILIES",
    "get_family",
    "solve",
    "sgodel",
    "smaxlukasiewicz",
]
