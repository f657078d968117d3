"""
Unit tests for fz_core/compose.py

Covers:
- compose() against hand-computed products
- Empty inner dimension (aggregator identities)
- Dimension checks happen before any operator is called
- Named compositions and their aliases
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from fuzzy_algebra.fz_core.compose import (
    COMPOSITIONS,
    compose,
    compose_named,
    godel,
    goguen,
    maxlukasiewicz,
    maxmin,
    maxprod,
    minalpha,
    mindiamond,
    minmax,
)
from fuzzy_algebra.fz_core.operators import Aggregator, Operator
from fuzzy_algebra.fz_core.types import DimensionMismatch, FuzzyMatrix


@pytest.fixture
def pair():
    A = FuzzyMatrix([[0.2, 0.8], [0.5, 0.3]])
    B = FuzzyMatrix([[0.6, 0.1], [0.4, 0.9]])
    return A, B


# ============================================================================
# Known Products
# ============================================================================

class TestKnownProducts:
    """Hand-computed 2×2 compositions"""

    def test_maxmin(self, pair):
        assert np.allclose(np.asarray(maxmin(*pair)), [[0.4, 0.8], [0.5, 0.3]])

    def test_minmax(self, pair):
        assert np.allclose(np.asarray(minmax(*pair)), [[0.6, 0.2], [0.4, 0.5]])

    def test_maxprod(self, pair):
        assert np.allclose(np.asarray(maxprod(*pair)), [[0.32, 0.72], [0.30, 0.27]])

    def test_minalpha(self, pair):
        assert np.allclose(np.asarray(minalpha(*pair)), [[0.4, 0.1], [1.0, 0.1]])

    def test_maxlukasiewicz(self, pair):
        assert np.allclose(np.asarray(maxlukasiewicz(*pair)), [[0.2, 0.7], [0.1, 0.2]])

    def test_rectangular(self):
        """1×2 ∘ 2×3 gives 1×3"""
        result = maxmin([[0.2, 0.8]], [[0.5, 0.1, 1.0], [0.6, 0.3, 0.0]])
        assert result.shape == (1, 3)
        assert np.allclose(np.asarray(result), [[0.6, 0.3, 0.2]])

    def test_vector_right_operand(self):
        """A column vector on the right gives a column result"""
        result = minalpha([[0.9, 0.2], [0.3, 0.8]], FuzzyMatrix.column([0.4, 0.5]))
        assert result.shape == (2, 1)
        assert np.allclose(np.asarray(result), [[0.4], [0.5]])

    def test_inputs_are_clamped(self):
        result = maxmin([[1.7]], [[0.4]])
        assert result == FuzzyMatrix([[0.4]])

    def test_returns_fuzzy_matrix(self, pair):
        assert isinstance(compose(*pair, "max", "min"), FuzzyMatrix)


# ============================================================================
# Edge Cases
# ============================================================================

class TestEdgeCases:
    """Empty operands and dimension errors"""

    def test_empty_inner_max(self):
        """Max over nothing is 0"""
        result = compose(np.zeros((2, 0)), np.zeros((0, 3)), Aggregator.MAX, Operator.MIN)
        assert result.shape == (2, 3)
        assert np.array_equal(np.asarray(result), np.zeros((2, 3)))

    def test_empty_inner_min(self):
        """Min over nothing is 1"""
        result = compose(np.zeros((2, 0)), np.zeros((0, 3)), Aggregator.MIN, Operator.ALPHA)
        assert np.array_equal(np.asarray(result), np.ones((2, 3)))

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            maxmin(np.zeros((2, 3)), np.zeros((2, 3)))

    def test_dimension_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            compose(np.zeros((1, 2)), np.zeros((3, 1)), "max", "min")

    def test_mismatch_checked_before_computing(self):
        """Neither operator is touched on incompatible shapes"""
        pointwise = MagicMock()
        aggregate = MagicMock()
        with pytest.raises(DimensionMismatch):
            compose(np.zeros((2, 3)), np.zeros((4, 2)), aggregate, pointwise)
        pointwise.assert_not_called()
        aggregate.assert_not_called()


# ============================================================================
# Custom Operators
# ============================================================================

class TestCustomOperators:
    """Callables are accepted in place of enum members"""

    def test_callables_are_used(self, pair):
        pointwise = MagicMock(side_effect=np.minimum)
        aggregate = MagicMock(side_effect=lambda v, axis: np.max(v, axis=axis))

        result = compose(*pair, aggregate, pointwise)

        pointwise.assert_called_once()
        aggregate.assert_called_once()
        assert isinstance(result, FuzzyMatrix)
        assert result == maxmin(*pair)

    def test_operator_returning_constant_is_broadcast(self, pair):
        """A pointwise result that ignores its inputs still yields m×n"""
        result = compose(*pair, "max", lambda x, y: 0.5)
        assert np.allclose(np.asarray(result), np.full((2, 2), 0.5))


# ============================================================================
# Named Compositions
# ============================================================================

class TestNamed:
    """compose_named and aliases"""

    @pytest.mark.parametrize("name", sorted(COMPOSITIONS))
    def test_every_name_composes(self, name, pair):
        result = compose_named(name, *pair)
        assert result.shape == (2, 2)

    def test_aliases(self, pair):
        assert godel(*pair) == minalpha(*pair)
        assert goguen(*pair) == mindiamond(*pair)

    def test_case_insensitive(self, pair):
        assert compose_named("MaxMin", *pair) == maxmin(*pair)

    def test_unknown_name(self, pair):
        with pytest.raises(ValueError, match="Unknown composition"):
            compose_named("maxnand", *pair)
