"""
Tests for matrix arithmetic and comparison.
"""

from fractions import Fraction

import numpy as np
import pytest

from densematrix import ColVector, Matrix, RowVector, allclose, dot, eye
from densematrix.core.exceptions import DimensionError, ValidationError
from densematrix.core.scalar import COMPLEX128, FLOAT64, FRACTION, INT64
from densematrix.core.tolerances import FP32
from densematrix.linalg.arithmetic import scale


# ═══════════════════════════════════════════════════════════════════════
# Element-wise
# ═══════════════════════════════════════════════════════════════════════


class TestElementWise:

    def test_add(self, two_by_two):
        assert (two_by_two + eye(2)).tolist() == [[3.0, 1.0], [1.0, 2.0]]

    def test_subtract(self, two_by_two):
        assert (two_by_two - two_by_two) == Matrix(2, 2)

    def test_negate(self, two_by_three):
        assert (-two_by_three).tolist() == [[-1.0, -2.0, -3.0], [-4.0, -5.0, -6.0]]

    def test_shape_mismatch(self, two_by_two, two_by_three):
        with pytest.raises(DimensionError, match="Incompatible shapes"):
            two_by_two + two_by_three
        with pytest.raises(DimensionError):
            two_by_two - two_by_three

    def test_views_as_operands(self, two_by_three):
        sym = two_by_three.t() * two_by_three
        assert sym == sym.t()

    def test_fraction_plus_float_promotes(self):
        exact = Matrix.from_rows([[Fraction(1, 2)]])
        result = exact + Matrix.from_rows([[0.25]])
        assert result.scalar is FLOAT64
        assert result.at(0, 0) == 0.75

    def test_fraction_stays_exact(self):
        a = Matrix.from_rows([[Fraction(1, 3)]])
        assert (a + a).at(0, 0) == Fraction(2, 3)

    def test_non_matrix_operand(self, two_by_two):
        with pytest.raises(TypeError):
            two_by_two + 1


# ═══════════════════════════════════════════════════════════════════════
# Products
# ═══════════════════════════════════════════════════════════════════════


class TestProducts:

    def test_matmul(self, two_by_two, two_by_three):
        assert (two_by_two * two_by_three).tolist() == [[6.0, 9.0, 12.0], [5.0, 7.0, 9.0]]

    def test_matmul_operator(self, two_by_two, two_by_three):
        assert two_by_two @ two_by_three == two_by_two * two_by_three

    def test_inner_dimension_mismatch(self, two_by_three):
        with pytest.raises(DimensionError, match="Inner dimensions"):
            two_by_three * two_by_three

    def test_times_inverse(self, invertible):
        assert allclose(invertible * invertible.inv(), eye(5))

    def test_row_times_col(self):
        product = RowVector.from_values([1, 2]) * ColVector.from_values([3, 4])
        assert product.shape == (1, 1)
        assert product.at(0, 0) == 11.0

    def test_scalar_right_and_left(self, two_by_two):
        expected = [[4.0, 2.0], [2.0, 2.0]]
        assert (two_by_two * 2).tolist() == expected
        assert (2 * two_by_two).tolist() == expected
        assert (np.float64(2.0) * two_by_two).tolist() == expected

    def test_scalar_keeps_type(self):
        exact = Matrix.from_rows([[Fraction(1, 2)]])
        assert (exact * 3).scalar is FRACTION
        assert (exact * 3).at(0, 0) == Fraction(3, 2)
        ints = Matrix.from_rows([[1, 2]], dtype='int64')
        assert (ints * 2).scalar is INT64

    def test_scalar_widens_when_needed(self):
        ints = Matrix.from_rows([[1, 2]], dtype='int64')
        assert (ints * 0.5).scalar is FLOAT64
        assert (ints * 0.5).tolist() == [[0.5, 1.0]]
        assert (1j * Matrix.from_rows([[1.0]])).scalar is COMPLEX128

    def test_non_numeric_scalar(self, two_by_two):
        with pytest.raises(TypeError):
            two_by_two * "2"
        with pytest.raises(ValidationError, match="expected a number"):
            scale(two_by_two, "2")

    def test_product_is_fresh(self, two_by_two):
        doubled = two_by_two * 2
        doubled.set(0, 0, 0)
        assert two_by_two.at(0, 0) == 2.0


# ═══════════════════════════════════════════════════════════════════════
# Comparison
# ═══════════════════════════════════════════════════════════════════════


class TestComparison:

    def test_equal(self, two_by_two):
        assert two_by_two == two_by_two.copy()
        assert not (two_by_two != two_by_two.copy())

    def test_different_values(self, two_by_two):
        other = two_by_two.copy()
        other.set(1, 1, 0)
        assert two_by_two != other

    def test_different_shapes(self, two_by_two, two_by_three):
        assert two_by_two != two_by_three

    def test_non_matrix(self, two_by_two):
        assert two_by_two != [[2, 1], [1, 1]]

    def test_across_scalar_types(self):
        assert Matrix.from_rows([[Fraction(1, 2)]]) == Matrix.from_rows([[0.5]])

    def test_allclose(self, two_by_two):
        nudged = two_by_two + Matrix.from_rows([[1e-13, 0], [0, 0]])
        assert nudged != two_by_two
        assert allclose(nudged, two_by_two)

    def test_allclose_outside_tier(self, two_by_two):
        nudged = two_by_two + Matrix.from_rows([[1e-3, 0], [0, 0]])
        assert not allclose(nudged, two_by_two)
        assert allclose(nudged, two_by_two, tier=FP32) is False
        assert allclose(two_by_two + Matrix.from_rows([[1e-5, 0], [0, 0]]), two_by_two, tier=FP32)

    def test_allclose_exact_types(self):
        a = Matrix.from_rows([[Fraction(1, 3)]])
        b = Matrix.from_rows([[Fraction(1, 3) + Fraction(1, 10**20)]])
        assert not allclose(a, b)
        assert allclose(a, a.copy())

    def test_allclose_shape_mismatch(self, two_by_two, two_by_three):
        assert allclose(two_by_two, two_by_three) is False


# ═══════════════════════════════════════════════════════════════════════
# Dot product
# ═══════════════════════════════════════════════════════════════════════


class TestDot:

    def test_any_orientation(self):
        u = RowVector.from_values([1, 2, 3])
        v = ColVector.from_values([4, 5, 6])
        assert dot(u, v) == 32.0
        assert dot(v, u) == 32.0

    def test_projections(self, two_by_three):
        assert dot(two_by_three.get_row(0), two_by_three.get_row(1)) == 32.0
        assert dot(two_by_three.get_col(0), two_by_three.get_col(2)) == 27.0

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="lengths do not match"):
            dot(RowVector(2), RowVector(3))

    def test_not_a_vector(self, two_by_two):
        with pytest.raises(DimensionError, match="expected a vector"):
            dot(two_by_two, RowVector(2))
