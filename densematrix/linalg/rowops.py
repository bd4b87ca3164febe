"""
Row-operation primitives.

The three elementary row operations, applied in place to an owning Matrix.
They are the only mutators the elimination kernels use. Each one reads the
rows it needs into owned buffers before writing anything, so the source
and target rows may be the same row, or projections of the same storage,
without observing a half-written row.

Every write goes through Matrix.set_row, which clears the sticky cache.
"""

from typing import Any

from densematrix.core.exceptions import ReadOnlyViewError
from densematrix.core.validation import check_index
from densematrix.matrix.storage import Matrix
from densematrix.matrix.vector import RowVector


def _check_target(m: Any) -> None:
    if not isinstance(m, Matrix):
        raise ReadOnlyViewError(
            f"row operations need an owning Matrix, got {type(m).__name__}"
        )


def row_swap(m: Matrix, r1: int, r2: int) -> None:
    """
    Exchange rows r1 and r2.

    Row r1 is snapshotted into a RowVector before it is overwritten.
    Swapping a row with itself leaves the matrix (and its cache) untouched.

    Raises:
        ReadOnlyViewError: If m is not an owning Matrix
        OutOfBoundsError: If r1 or r2 is out of range
    """
    _check_target(m)
    r1 = check_index(r1, m.rows, "r1")
    r2 = check_index(r2, m.rows, "r2")
    if r1 == r2:
        return

    saved = RowVector._from_buffer(m.row_values(r1), m.scalar)
    m.set_row(r1, m.row_values(r2))
    m.set_row(r2, saved)


def row_scale(m: Matrix, r: int, k: Any) -> None:
    """
    Multiply every element of row r by k.

    Raises:
        ReadOnlyViewError: If m is not an owning Matrix
        OutOfBoundsError: If r is out of range
        ValidationError: If k cannot be represented in m's scalar type
    """
    _check_target(m)
    r = check_index(r, m.rows, "r")
    factor = m.scalar(k)
    m.set_row(r, factor * m.row_values(r))


def row_add(m: Matrix, r1: int, r2: int, multiplier: Any = 1) -> None:
    """
    row[r1] += multiplier * row[r2]

    Row r2 is read in full before row r1 is written, so r1 == r2 doubles
    (for multiplier 1) rather than compounding.

    Raises:
        ReadOnlyViewError: If m is not an owning Matrix
        OutOfBoundsError: If r1 or r2 is out of range
        ValidationError: If multiplier cannot be represented in m's scalar type
    """
    _check_target(m)
    r1 = check_index(r1, m.rows, "r1")
    r2 = check_index(r2, m.rows, "r2")
    factor = m.scalar(multiplier)
    source = m.row_values(r2)
    m.set_row(r1, m.row_values(r1) + factor * source)
