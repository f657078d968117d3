"""
Relational equation solvers for A∘x {=,<=,>=} b.

Modules:
- relational.py: shared engine (preprocess → extraction → consistency →
  reduction → boundary enumeration), Solution and Mode
- families.py: Gödel (min-α) and max-Lukasiewicz configurations
"""

from .relational import Mode, RelationalSolver, SearchTimeout, Solution, SolverFamily
from .families import (
    FAMILIES,
    GODEL,
    MAX_LUKASIEWICZ,
    get_family,
    sgodel,
    smaxlukasiewicz,
    solve,
)

__all__ = [
    "Mode",
    "RelationalSolver",
    "SearchTimeout",
    "Solution",
    "SolverFamily",
    "FAMILIES",
    "GODEL",
    "MAX_LUKASIEWICZ",
    "get_family",
    "sgodel",
    "smaxlukasiewicz",
    "solve",
]
