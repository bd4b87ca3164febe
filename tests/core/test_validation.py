"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_integer: Python/NumPy ints accepted, bool and floats rejected
    - check_shape: negative before empty, both reported
    - check_index / check_element_index: no negative wrap-around
    - check_square / check_same_shape / check_inner_dimensions
    - check_literal: ragged, empty and non-2D literals
"""

from fractions import Fraction

import numpy as np
import pytest

from densematrix.core.exceptions import (
    DimensionError,
    EmptyElementError,
    OutOfBoundsError,
    ValidationError,
)
from densematrix.core.validation import (
    check_element_index,
    check_index,
    check_inner_dimensions,
    check_integer,
    check_literal,
    check_same_shape,
    check_shape,
    check_square,
)


# ═══════════════════════════════════════════════════════════════════════
# check_integer
# ═══════════════════════════════════════════════════════════════════════


class TestCheckInteger:

    def test_python_int(self):
        assert check_integer(3, "n") == 3

    def test_numpy_int(self):
        result = check_integer(np.int32(4), "n")
        assert result == 4
        assert type(result) is int

    def test_rejects_bool(self):
        with pytest.raises(ValidationError, match="n: expected integer, got bool"):
            check_integer(True, "n")

    def test_rejects_float(self):
        with pytest.raises(ValidationError, match="got float"):
            check_integer(2.0, "n")

    def test_rejects_string(self):
        with pytest.raises(ValidationError, match="n"):
            check_integer("2", "n")


# ═══════════════════════════════════════════════════════════════════════
# check_shape
# ═══════════════════════════════════════════════════════════════════════


class TestCheckShape:

    def test_valid(self):
        assert check_shape(2, 3) == (2, 3)

    def test_zero_rows_is_empty(self):
        with pytest.raises(EmptyElementError) as exc_info:
            check_shape(0, 3)
        assert exc_info.value.shape == (0, 3)

    def test_zero_cols_is_empty(self):
        with pytest.raises(EmptyElementError):
            check_shape(3, 0)

    def test_negative_is_dimension_error(self):
        with pytest.raises(DimensionError, match="negative"):
            check_shape(3, -1)

    def test_negative_checked_before_zero(self):
        with pytest.raises(DimensionError):
            check_shape(0, -1)

    def test_non_integer(self):
        with pytest.raises(ValidationError, match="rows"):
            check_shape(2.5, 3)


# ═══════════════════════════════════════════════════════════════════════
# Index checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndex:

    def test_in_range(self):
        assert check_index(0, 3, "row") == 0
        assert check_index(2, 3, "row") == 2

    def test_at_extent(self):
        with pytest.raises(OutOfBoundsError, match="row=3"):
            check_index(3, 3, "row")

    def test_negative_does_not_wrap(self):
        with pytest.raises(OutOfBoundsError):
            check_index(-1, 3, "row")


class TestCheckElementIndex:

    def test_in_range(self):
        assert check_element_index(1, 2, (2, 3)) == (1, 2)

    def test_row_out_of_range(self):
        with pytest.raises(OutOfBoundsError) as exc_info:
            check_element_index(2, 0, (2, 3))
        assert exc_info.value.index == (2, 0)
        assert exc_info.value.shape == (2, 3)

    def test_col_out_of_range(self):
        with pytest.raises(OutOfBoundsError, match=r"\(0, 3\)"):
            check_element_index(0, 3, (2, 3))

    def test_negative_col(self):
        with pytest.raises(OutOfBoundsError):
            check_element_index(0, -1, (2, 3))


# ═══════════════════════════════════════════════════════════════════════
# Shape compatibility
# ═══════════════════════════════════════════════════════════════════════


class TestShapeCompatibility:

    def test_square(self):
        assert check_square((4, 4), "A") == 4

    def test_not_square(self):
        with pytest.raises(DimensionError, match="A: expected square matrix, got 2x3"):
            check_square((2, 3), "A")

    def test_same_shape(self):
        check_same_shape((2, 3), (2, 3), ("a", "b"))

    def test_different_shape(self):
        with pytest.raises(DimensionError, match="a=2x3, b=3x2"):
            check_same_shape((2, 3), (3, 2), ("a", "b"))

    def test_inner_dimensions(self):
        check_inner_dimensions((2, 3), (3, 4))

    def test_inner_dimensions_mismatch(self):
        with pytest.raises(DimensionError, match="2x3 times 2x3"):
            check_inner_dimensions((2, 3), (2, 3))


# ═══════════════════════════════════════════════════════════════════════
# check_literal
# ═══════════════════════════════════════════════════════════════════════


class TestCheckLiteral:

    def test_int_literal(self):
        result = check_literal([[1, 2], [3, 4]], "rows")
        assert result.shape == (2, 2)
        assert np.issubdtype(result.dtype, np.integer)

    def test_mixed_int_float(self):
        result = check_literal([[1, 2.5]], "rows")
        assert result.dtype == np.float64

    def test_fraction_literal_is_object(self):
        result = check_literal([[Fraction(1, 2), 1]], "rows")
        assert result.dtype == object
        assert result[0, 0] == Fraction(1, 2)

    def test_tuples_accepted(self):
        result = check_literal(((1, 2), (3, 4)), "rows")
        assert result.shape == (2, 2)

    def test_ragged(self):
        with pytest.raises(DimensionError, match="inconsistent lengths"):
            check_literal([[1, 2], [3]], "rows")

    def test_no_rows(self):
        with pytest.raises(EmptyElementError, match="no rows"):
            check_literal([], "rows")

    def test_empty_rows(self):
        with pytest.raises(EmptyElementError, match="empty"):
            check_literal([[], []], "rows")

    def test_not_a_sequence(self):
        with pytest.raises(ValidationError, match="sequence of rows"):
            check_literal(5, "rows")

    def test_nested_too_deep(self):
        with pytest.raises(DimensionError, match="2D literal"):
            check_literal([[[1, 2]], [[3, 4]]], "rows")

    def test_1d_array_rejected(self):
        with pytest.raises(DimensionError, match="expected 2D array"):
            check_literal(np.arange(3), "rows")
