"""
fz_core: Core primitives for fuzzy algebra.

Provides:
- types: FuzzyMatrix, EPS, DimensionMismatch
- operators: pointwise operators and aggregators on [0,1]
- compose: composition engine and named compositions
"""

from .types import EPS, DimensionMismatch, FuzzyMatrix
from .operators import Aggregator, Operator, get_aggregator, get_operator
from .compose import (
    COMPOSITIONS,
    compose,
    compose_named,
    godel,
    goguen,
    lukasiewicz,
    maxdelta,
    maxepsilon,
    maxgama,
    maxlukasiewicz,
    maxmin,
    maxprod,
    minalpha,
    minbounded,
    mindiamond,
    minmax,
    minprobabilistic,
)

__all__ = [
    "EPS",
    "DimensionMismatch",
    "FuzzyMatrix",
    "Aggregator",
    "Operator",
    "get_aggregator",
    "get_operator",
    "COMPOSITIONS",
    "compose",
    "compose_named",
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
