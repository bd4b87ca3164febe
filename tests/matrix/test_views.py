"""
Tests for the view layer.

Validates:
    - Transpose: shape swap, involution, aliasing, read-only
    - Sub-range: construction checks, own-extent bounds, materialization
    - Row/column projections: single-index access, write-through
    - Views over views and the lifetime of the parent
"""

import gc
import itertools

import numpy as np
import pytest

from densematrix import ColVector, Matrix, RowVector
from densematrix.core.exceptions import (
    DimensionError,
    OutOfBoundsError,
    ReadOnlyViewError,
    ValidationError,
)
from densematrix.matrix.views import ColView, RowView, SubRangeView, TransposeView


@pytest.fixture
def grid():
    """4x5 matrix with at(r, c) == 10 * r + c."""
    return Matrix.from_array(np.add.outer(10 * np.arange(4), np.arange(5)))


# ═══════════════════════════════════════════════════════════════════════
# Transpose
# ═══════════════════════════════════════════════════════════════════════


class TestTranspose:

    def test_shape_and_element(self, two_by_three):
        t = two_by_three.t()
        assert isinstance(t, TransposeView)
        assert t.rows == 3
        assert t.cols == 2
        assert t.at(2, 1) == 6.0

    def test_involution(self, grid):
        tt = grid.t().t()
        for r, c in itertools.product(range(grid.rows), range(grid.cols)):
            assert tt.at(r, c) == grid.at(r, c)

    def test_aliases_parent(self, two_by_three):
        t = two_by_three.t()
        two_by_three.set(0, 2, -3)
        assert t.at(2, 0) == -3.0

    def test_bounds_are_own_extents(self, two_by_three):
        with pytest.raises(OutOfBoundsError):
            two_by_three.t().at(0, 2)

    def test_read_only(self, two_by_three):
        t = two_by_three.t()
        assert not t.writable
        with pytest.raises(ReadOnlyViewError):
            t.set(0, 0, 1.0)
        with pytest.raises(ReadOnlyViewError):
            t[0, 0] = 1.0

    def test_to_numpy(self, grid):
        np.testing.assert_array_equal(grid.t().to_numpy(), grid.to_numpy().T)

    def test_scalar_follows_parent(self):
        m = Matrix(2, 2, dtype='fraction')
        assert m.t().scalar is m.scalar

    def test_parent_must_be_matrix_like(self):
        with pytest.raises(ValidationError, match="matrix-like"):
            TransposeView([[1, 2]])


# ═══════════════════════════════════════════════════════════════════════
# Sub-range
# ═══════════════════════════════════════════════════════════════════════


class TestSubRange:

    def test_shape_and_mapping(self, grid):
        v = grid.range(1, 2, 2, 4)
        assert isinstance(v, SubRangeView)
        assert v.shape == (2, 3)
        assert v.bounds == (1, 2, 2, 4)
        assert v.at(0, 0) == 12.0
        assert v.at(1, 2) == 24.0

    def test_materialize_reproduces_block(self, grid):
        """Every sub-range materializes to exactly the addressed block."""
        for r1, r2 in itertools.combinations_with_replacement(range(grid.rows), 2):
            for c1, c2 in itertools.combinations_with_replacement(range(grid.cols), 2):
                block = grid.range(r1, r2, c1, c2).materialize()
                assert type(block) is Matrix
                assert block.shape == (r2 - r1 + 1, c2 - c1 + 1)
                for i, j in itertools.product(range(block.rows), range(block.cols)):
                    assert block.at(i, j) == grid.at(i + r1, j + c1)

    def test_single_element(self, grid):
        v = grid.range(2, 2, 3, 3)
        assert v.shape == (1, 1)
        assert v.at(0, 0) == grid.at(2, 3)

    def test_inverted_rows(self, grid):
        with pytest.raises(DimensionError, match="Invalid sub-range"):
            grid.range(2, 1, 0, 0)

    def test_inverted_cols(self, grid):
        with pytest.raises(DimensionError):
            grid.range(0, 0, 3, 2)

    def test_outside_parent(self, grid):
        with pytest.raises(OutOfBoundsError):
            grid.range(0, 4, 0, 0)

    def test_cannot_escape_into_parent(self, grid):
        v = grid.range(1, 1, 1, 2)
        with pytest.raises(OutOfBoundsError):
            v.at(1, 0)
        with pytest.raises(OutOfBoundsError):
            v.at(0, 2)

    def test_read_only(self, grid):
        with pytest.raises(ReadOnlyViewError):
            grid.range(0, 1, 0, 1).set(0, 0, 5.0)

    def test_to_numpy(self, grid):
        np.testing.assert_array_equal(
            grid.range(1, 3, 0, 1).to_numpy(), grid.to_numpy()[1:4, 0:2]
        )

    def test_range_of_transpose(self, grid):
        v = grid.t().range(1, 2, 0, 0)
        assert v.shape == (2, 1)
        assert v.at(1, 0) == grid.at(0, 2)

    def test_range_of_range(self, grid):
        v = grid.range(1, 3, 1, 4).range(1, 2, 2, 3)
        assert v.at(0, 0) == grid.at(2, 3)
        assert v.at(1, 1) == grid.at(3, 4)


# ═══════════════════════════════════════════════════════════════════════
# Row and column projections
# ═══════════════════════════════════════════════════════════════════════


class TestRowView:

    def test_single_index(self, grid):
        row = grid.get_row(2)
        assert isinstance(row, RowView)
        assert row.index == 2
        assert row.shape == (1, 5)
        assert len(row) == 5
        assert row.at(3) == 23.0
        assert row[4] == 24.0
        assert row.at(0, 1) == 21.0

    def test_out_of_range_at_creation(self, grid):
        with pytest.raises(OutOfBoundsError):
            grid.get_row(4)

    def test_out_of_range_index(self, grid):
        with pytest.raises(OutOfBoundsError):
            grid.get_row(0).at(5)

    def test_writes_through(self, grid):
        row = grid.get_row(1)
        assert row.writable
        row.set(0, -1)
        row[1] = -2
        assert grid.at(1, 0) == -1.0
        assert grid.at(1, 1) == -2.0

    def test_read_only_parent(self, grid):
        row = grid.t().get_row(0)
        assert not row.writable
        with pytest.raises(ReadOnlyViewError):
            row.set(0, 1.0)

    def test_materialize(self, grid):
        vec = grid.get_row(3).materialize()
        assert isinstance(vec, RowVector)
        assert vec.values().tolist() == [30.0, 31.0, 32.0, 33.0, 34.0]
        vec.set(0, 0)
        assert grid.at(3, 0) == 30.0

    def test_sum_and_dot(self, grid):
        row = grid.get_row(1)
        assert row.sum() == 60.0
        assert row.dot(grid.get_row(0)) == 0 * 10 + 1 * 11 + 2 * 12 + 3 * 13 + 4 * 14


class TestColView:

    def test_single_index(self, grid):
        col = grid.get_col(3)
        assert isinstance(col, ColView)
        assert col.shape == (4, 1)
        assert col.length == 4
        assert col.at(2) == 23.0
        assert list(col) == [3.0, 13.0, 23.0, 33.0]

    def test_out_of_range_at_creation(self, grid):
        with pytest.raises(OutOfBoundsError):
            grid.get_col(-1)

    def test_writes_through(self, grid):
        grid.get_col(0)[3] = 7
        assert grid.at(3, 0) == 7.0

    def test_materialize(self, grid):
        vec = grid.get_col(4).materialize()
        assert isinstance(vec, ColVector)
        assert vec.shape == (4, 1)

    def test_column_of_row_projection(self, grid):
        """A projection of a writable projection is still writable."""
        cell = grid.get_row(2).get_col(1)
        assert cell.shape == (1, 1)
        assert cell.at(0) == 21.0
        cell.set(0, 0.5)
        assert grid.at(2, 1) == 0.5


# ═══════════════════════════════════════════════════════════════════════
# Shared interface and lifetime
# ═══════════════════════════════════════════════════════════════════════


class TestSharedInterface:

    def test_kernels_on_views(self, two_by_two):
        assert two_by_two.t().det() == pytest.approx(1.0)
        assert two_by_two.range(0, 1, 0, 1).inv() == two_by_two.inv()

    def test_diag_and_trace_on_view(self, grid):
        v = grid.range(0, 2, 1, 3)
        assert v.diag().values().tolist() == [1.0, 12.0, 23.0]
        assert v.trace() == 36.0

    def test_str(self, two_by_three):
        assert str(two_by_three.t()) == "1.0 4.0\n2.0 5.0\n3.0 6.0"

    def test_parent_kept_alive(self):
        view = Matrix.from_rows([[1, 2], [3, 4]]).t()
        gc.collect()
        assert view.at(0, 1) == 3.0
        assert view.parent.shape == (2, 2)
