"""
fuzzy_algebra: matrix operations and relational equations over [0,1].

Subpackages:
- fz_core: FuzzyMatrix, operator library, composition engine
- fz_solvers: Gödel and max-Lukasiewicz relational equation solvers
- fz_dependence: linear dependence checks built on the solvers
"""

__version__ = "0.1.0"
