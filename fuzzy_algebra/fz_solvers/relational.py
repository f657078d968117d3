"""
Generic solver for fuzzy relational equations and inequalities A∘x {=,<=,>=} b.

Provides:
- Mode: EQUALITY / LESS_EQUAL / GREATER_EQUAL
- SolverFamily: configuration record for one composition family
- Solution: immutable result record
- RelationalSolver: the shared five-phase engine
- SearchTimeout: raised when boundary enumeration exceeds its time limit

Both supported compositions are monotone increasing in x, so the solution set
of an equation is bounded on one side by a single extremal vector and on the
other side by an antichain of extremal vectors (the boundary):

    family           extracted side     enumerated side (boundary)
    Gödel (min-α)    least solution     maximal solutions
    max-Lukasiewicz  greatest solution  minimal solutions

Phases:
1. PREPROCESS: help matrix H plus binding mask, built by the family
2. EXTRACTION: per-column extremal value; looser cells stop binding; rows
   whose binding cell equals the column extremum are counted as covering it
3. CONSISTENCY: consistent iff every row is covered at least once
4. REDUCTION: drop rows whose constraint is implied by another row
5. ENUMERATION: depth-first cover search building the boundary antichain

H and the binding mask are local to one solve() call and never escape it.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple, Union

import numpy as np

from fuzzy_algebra.fz_core.operators import Aggregator, Operator
from fuzzy_algebra.fz_core.types import EPS, DimensionMismatch

logger = logging.getLogger(__name__)

# preprocess(A, b, tol) -> (H, binding)
Preprocess = Callable[[np.ndarray, np.ndarray, float], Tuple[np.ndarray, np.ndarray]]


class SearchTimeout(RuntimeError):
    """Boundary enumeration exceeded its time limit."""


class Mode(str, Enum):
    """Relation between A∘x and b."""

    EQUALITY = "="
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="

    @classmethod
    def _missing_(cls, value):
        aliases = {
            "eq": cls.EQUALITY,
            "==": cls.EQUALITY,
            "le": cls.LESS_EQUAL,
            "ge": cls.GREATER_EQUAL,
        }
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True)
class SolverFamily:
    """
    One composition family handled by RelationalSolver.

    boundary_upper selects the orientation:
    - True (Gödel): extraction takes column maxima (least solution), the
      boundary holds maximal solutions, the accumulator tightens with min.
    - False (max-Lukasiewicz): extraction takes column minima (greatest
      solution), the boundary holds minimal solutions, tightening uses max.

    sentinel marks non-binding H cells and is also the trivial bound of the
    enumerated side (1 for Gödel, 0 for max-Lukasiewicz). Rows with
    b[i] == sentinel are protected: the extremal vector satisfies them
    unconditionally.
    """

    name: str
    preprocess: Preprocess
    sentinel: float
    boundary_upper: bool
    composition: Tuple[Aggregator, Operator]

    @property
    def extracted_trivial(self) -> float:
        """Trivial bound of the extracted side."""
        return 1.0 - self.sentinel

    @property
    def extracted_mode(self) -> Mode:
        """Inequality direction that constrains only the extracted side."""
        return Mode.GREATER_EQUAL if self.boundary_upper else Mode.LESS_EQUAL

    @property
    def enumerated_mode(self) -> Mode:
        """Inequality direction that constrains only the enumerated side."""
        return Mode.LESS_EQUAL if self.boundary_upper else Mode.GREATER_EQUAL

    def extract(self, values: np.ndarray) -> float:
        return float(values.max() if self.boundary_upper else values.min())

    def looser(self, values: np.ndarray, extremum: float, tol: float) -> np.ndarray:
        """Cells that no longer bind once the column extremum is known."""
        if self.boundary_upper:
            return values < extremum - tol
        return values - extremum > tol

    def tighten(self, current: float, cell: float) -> float:
        return min(current, cell) if self.boundary_upper else max(current, cell)

    def satisfied(self, value: float, cells: np.ndarray, tol: float) -> np.ndarray:
        """Which cells a coordinate value satisfies."""
        if self.boundary_upper:
            return value <= cells + tol
        return value >= cells - tol

    def dominates(self, u: np.ndarray, v: np.ndarray, tol: float) -> bool:
        """u is at least as far out on the boundary side as v, everywhere."""
        if self.boundary_upper:
            return bool(np.all(u >= v - tol))
        return bool(np.all(u <= v + tol))


@dataclass(frozen=True, eq=False)
class Solution:
    """
    Result of solving A∘x {=,<=,>=} b.

    Fields:
        rows, cols: Shape of A
        exist: Whether the system is consistent
        contradict: 0-based indices of rows no column can cover (empty if exist)
        extremal: The single extremal solution (least for Gödel, greatest for
            max-Lukasiewicz)
        boundary: Pairwise incomparable solutions on the other side
        help_rows: Rows of H that survived reduction (None if not reached)
    """

    rows: int
    cols: int
    exist: bool
    extremal: np.ndarray
    contradict: Tuple[int, ...] = ()
    boundary: Tuple[np.ndarray, ...] = ()
    help_rows: Optional[int] = None
    mode: Mode = Mode.EQUALITY
    family: str = ""


# =============================================================================
# Engine
# =============================================================================


@dataclass
class RelationalSolver:
    """
    Five-phase solver shared by every SolverFamily.

    Example:
        >>> from fuzzy_algebra.fz_solvers.families import GODEL
        >>> sol = RelationalSolver(GODEL).solve([[0.4]], [0.4])
        >>> sol.exist, sol.extremal.tolist()
        (True, [0.4])
    """

    family: SolverFamily
    tol: float = EPS
    time_limit: Optional[float] = None  # seconds, enumeration only

    def solve(
        self,
        a: Any,
        b: Any,
        mode: Union[Mode, str] = Mode.EQUALITY,
        full: bool = True,
    ) -> Union[Solution, np.ndarray]:
        """
        Solve A∘x {=,<=,>=} b for this solver's family.

        Args:
            a: m×n matrix with entries in [0,1]
            b: length-m vector (a column or row matrix is flattened)
            mode: Relation between A∘x and b
            full: If False, return only the extremal vector of a consistent
                system; if True, return the full Solution with the boundary

        Returns:
            Solution, or the extremal vector when full is False and the
            system is consistent. An inconsistent system always returns the
            Solution record (exist=False).

        Raises:
            DimensionMismatch: If A has a different number of rows than b has
                entries (raised before any computation)
            SearchTimeout: If enumeration exceeds time_limit
        """
        mode = Mode(mode)
        A = np.asarray(a, dtype=np.float64)
        if A.ndim == 1 and A.size == 0:
            A = A.reshape(0, 0)
        if A.ndim != 2:
            raise ValueError(f"A must be a 2-D matrix, got {A.ndim}-D")
        b = np.asarray(b, dtype=np.float64).reshape(-1)

        rows, cols = A.shape
        if rows != b.size:
            raise DimensionMismatch(
                f"Inner matrix dimensions must agree: A has {rows} rows, b has {b.size} entries"
            )

        fam = self.family
        tol = self.tol

        # Phase 1: PREPROCESS
        H, binding = fam.preprocess(A, b, tol)
        protected = np.abs(b - fam.sentinel) <= tol

        # Phase 2: EXTRACTION (or trivial bound for enumerated-side inequalities)
        if mode == fam.enumerated_mode:
            extremal = np.full(cols, fam.extracted_trivial)
            # Only cells inside [0,1] can be reached by a coordinate of x
            binding &= (H >= -tol) & (H <= 1.0 + tol)
            H[~binding] = fam.sentinel
            coverage = binding.sum(axis=1)
        else:
            extremal, coverage = self._extract(H, binding)
        coverage = coverage + protected.astype(int)

        # Phase 3: CONSISTENCY (bypassed when only the extracted side is constrained)
        if mode != fam.extracted_mode:
            contradict = tuple(int(i) for i in np.flatnonzero(coverage == 0))
            if contradict:
                logger.debug(
                    "%s: inconsistent system, %d contradicting rows",
                    fam.name, len(contradict),
                )
                return self._freeze(Solution(
                    rows=rows, cols=cols, exist=False, extremal=extremal,
                    contradict=contradict, mode=mode, family=fam.name,
                ))

        if not full:
            extremal.flags.writeable = False
            return extremal

        if mode == fam.extracted_mode:
            return self._freeze(Solution(
                rows=rows, cols=cols, exist=True, extremal=extremal,
                boundary=(np.full(cols, fam.sentinel),),
                mode=mode, family=fam.name,
            ))

        # Phase 4: REDUCTION
        keep = np.array(self.reduce_rows(H, binding, protected), dtype=int)
        H, binding, protected = H[keep], binding[keep], protected[keep]
        logger.debug("%s: reduced H from %d to %d rows", fam.name, rows, len(keep))

        # Phase 5: ENUMERATION
        boundary = self.enumerate_boundary(H, binding, protected.copy())
        logger.debug("%s: boundary holds %d vectors", fam.name, len(boundary))

        return self._freeze(Solution(
            rows=rows, cols=cols, exist=True, extremal=extremal,
            boundary=tuple(boundary), help_rows=len(keep),
            mode=mode, family=fam.name,
        ))

    # ------------------------------------------------------------------
    # Phase 2
    # ------------------------------------------------------------------

    def _extract(self, H: np.ndarray, binding: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Column-wise extremal extraction (mutates the local H and binding).

        Returns:
            (extremal, coverage) where coverage[i] counts the columns row i covers
        """
        fam = self.family
        tol = self.tol
        rows, cols = H.shape

        extremal = np.full(cols, fam.sentinel)
        coverage = np.zeros(rows, dtype=int)

        for j in range(cols):
            pool = binding[:, j]
            # An empty pool leaves the column at the sentinel
            if pool.any():
                m = fam.extract(H[pool, j])
                # An uncapped H can put m above 1; no row is reachable there
                extremal[j] = min(max(m, 0.0), 1.0)

                loose = binding[:, j] & fam.looser(H[:, j], m, tol)
                H[loose, j] = fam.sentinel
                binding[loose, j] = False

            covering = binding[:, j] & (np.abs(H[:, j] - extremal[j]) <= tol)
            H[binding[:, j] & ~covering, j] = fam.sentinel
            binding[:, j] = covering
            coverage += covering

        return extremal, coverage

    # ------------------------------------------------------------------
    # Phase 4
    # ------------------------------------------------------------------

    def reduce_rows(
        self,
        H: np.ndarray,
        binding: np.ndarray,
        protected: np.ndarray,
    ) -> List[int]:
        """
        Indices of rows that survive dominance reduction.

        Row i is dominated by row k when every column k binds is also bound
        by i and each of k's values there already satisfies i's cell: any
        column choice covering k covers i too. Protected rows are never
        dropped and never dominate (they constrain nothing).

        The dominated set is computed in full before filtering. A row is
        only compared against rows not yet dropped, so of two identical rows
        exactly one survives.
        """
        fam = self.family
        rows = H.shape[0]
        dominated = set()

        for i in range(rows):
            if protected[i]:
                continue
            for k in range(rows):
                if k == i or k in dominated or protected[k]:
                    continue
                cols_k = binding[k]
                if not cols_k.any():
                    continue
                if not np.all(binding[i, cols_k]):
                    continue
                if np.all(fam.satisfied(H[k, cols_k], H[i, cols_k], self.tol)):
                    dominated.add(i)
                    break

        return [i for i in range(rows) if i not in dominated]

    # ------------------------------------------------------------------
    # Phase 5
    # ------------------------------------------------------------------

    def enumerate_boundary(
        self,
        H: np.ndarray,
        binding: np.ndarray,
        covered: np.ndarray,
    ) -> List[np.ndarray]:
        """
        Depth-first cover search over the reduced H.

        Each stack entry is (covered, accumulator). The lowest uncovered row
        branches over its binding columns; choosing column j tightens the
        accumulator at j to H[i,j] and covers every row whose column-j cell
        that value satisfies. A fully covered state yields a candidate for
        the antichain. Depth is bounded by the row count and every step
        covers at least row i, so the search always terminates.

        Args:
            H: Reduced help matrix
            binding: Binding mask for H
            covered: Rows already covered at the start (protected rows)

        Returns:
            Antichain of boundary vectors, in discovery order
        """
        fam = self.family
        cols = H.shape[1]
        deadline = None if self.time_limit is None else time.monotonic() + self.time_limit

        antichain: List[np.ndarray] = []
        stack = [(covered, np.full(cols, fam.sentinel))]

        while stack:
            if deadline is not None and time.monotonic() > deadline:
                logger.info(
                    "%s: enumeration stopped after %.3fs with %d vectors found",
                    fam.name, self.time_limit, len(antichain),
                )
                raise SearchTimeout(
                    f"Boundary enumeration exceeded {self.time_limit}s"
                )

            marked, acc = stack.pop()
            uncovered = np.flatnonzero(~marked)
            if uncovered.size == 0:
                antichain = self.add_to_antichain(antichain, acc)
                continue

            i = uncovered[0]
            branches = []
            for j in np.flatnonzero(binding[i]):
                nacc = acc.copy()
                nacc[j] = fam.tighten(acc[j], H[i, j])
                nmarked = marked | (binding[:, j] & fam.satisfied(nacc[j], H[:, j], self.tol))
                branches.append((nmarked, nacc))

            # Lowest column explored first
            stack.extend(reversed(branches))

        return antichain

    def add_to_antichain(
        self,
        antichain: List[np.ndarray],
        candidate: np.ndarray,
    ) -> List[np.ndarray]:
        """
        Insert candidate keeping the antichain free of comparable pairs.

        The candidate is discarded if a member already dominates it;
        otherwise members it dominates are dropped and it is appended.
        Returns a new list.
        """
        fam = self.family
        for member in antichain:
            if fam.dominates(member, candidate, self.tol):
                return antichain
        kept = [m for m in antichain if not fam.dominates(candidate, m, self.tol)]
        kept.append(candidate)
        return kept

    @staticmethod
    def _freeze(solution: Solution) -> Solution:
        solution.extremal.flags.writeable = False
        for vec in solution.boundary:
            vec.flags.writeable = False
        return solution


__all__ = [
    "Mode",
    "SolverFamily",
    "Solution",
    "RelationalSolver",
    "SearchTimeout",
]
