"""
Linear dependence checks in fuzzy algebra, built on fz_solvers.
"""

from .lincomb import is_lincomb, is_linindep

__all__ = ["is_lincomb", "is_linindep"]
