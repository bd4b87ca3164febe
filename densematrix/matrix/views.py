"""
Non-owning views over a matrix or another view.

Views carry no storage of their own, only a reference to their parent and
the index transform:

    TransposeView   at(r, c) = parent.at(c, r)
    SubRangeView    at(r, c) = parent.at(r + r1, c + c1)
    RowView         at(i)    = parent.at(row, i)
    ColView         at(i)    = parent.at(i, col)

Indices are checked against the view's own extents first, so a sub-range
cannot be used to read outside its declared block. Holding the parent by
reference keeps it alive for as long as any view of it exists.

TransposeView and SubRangeView are read-only. RowView and ColView write
through to their parent when the parent is writable; the row-operation
primitives rely on this.
"""

from __future__ import annotations

from typing import Any
from numpy.typing import NDArray

from densematrix.core.exceptions import DimensionError, ValidationError
from densematrix.core.protocols import ismatrix
from densematrix.core.scalar import ScalarType
from densematrix.core.validation import check_index, check_integer
from densematrix.matrix.base import MatrixBase, VectorAccess


class MatrixView(MatrixBase):
    """Common parent bookkeeping for all views."""

    def __init__(self, parent: Any):
        if not ismatrix(parent):
            raise ValidationError(
                f"parent: expected a matrix-like object, got {type(parent).__name__}"
            )
        self._parent = parent

    @property
    def parent(self) -> Any:
        """The object this view reads through."""
        return self._parent

    @property
    def scalar(self) -> ScalarType:
        return self._parent.scalar


class TransposeView(MatrixView):
    """Transpose of the parent."""

    @property
    def rows(self) -> int:
        return self._parent.cols

    @property
    def cols(self) -> int:
        return self._parent.rows

    def _get(self, row: int, col: int) -> Any:
        return self._parent.at(col, row)

    def to_numpy(self) -> NDArray[Any]:
        return self._parent.to_numpy().T.copy()


class SubRangeView(MatrixView):
    """
    Rectangular block of the parent, rows r1..r2 and columns c1..c2 inclusive.

    Raises:
        DimensionError: If r2 < r1 or c2 < c1
        OutOfBoundsError: If the block does not lie inside the parent
    """

    def __init__(self, parent: Any, r1: int, r2: int, c1: int, c2: int):
        super().__init__(parent)
        r1 = check_integer(r1, "r1")
        r2 = check_integer(r2, "r2")
        c1 = check_integer(c1, "c1")
        c2 = check_integer(c2, "c2")
        if r2 < r1 or c2 < c1:
            raise DimensionError(
                f"Invalid sub-range: rows {r1}..{r2}, cols {c1}..{c2}"
            )
        check_index(r1, parent.rows, "r1")
        check_index(r2, parent.rows, "r2")
        check_index(c1, parent.cols, "c1")
        check_index(c2, parent.cols, "c2")
        self._r1, self._r2, self._c1, self._c2 = r1, r2, c1, c2

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """(r1, r2, c1, c2) in parent coordinates."""
        return (self._r1, self._r2, self._c1, self._c2)

    @property
    def rows(self) -> int:
        return self._r2 - self._r1 + 1

    @property
    def cols(self) -> int:
        return self._c2 - self._c1 + 1

    def _get(self, row: int, col: int) -> Any:
        return self._parent.at(row + self._r1, col + self._c1)

    def to_numpy(self) -> NDArray[Any]:
        block = self._parent.to_numpy()[self._r1:self._r2 + 1, self._c1:self._c2 + 1]
        return block.copy()


class RowView(VectorAccess, MatrixView):
    """
    Row `row` of the parent as a 1 x cols vector.

    Raises:
        OutOfBoundsError: If row is outside the parent
    """

    _orientation = 'row'

    def __init__(self, parent: Any, row: int):
        super().__init__(parent)
        self._row = check_index(row, parent.rows, "row")

    @property
    def index(self) -> int:
        """Row number in the parent."""
        return self._row

    @property
    def rows(self) -> int:
        return 1

    @property
    def cols(self) -> int:
        return self._parent.cols

    @property
    def writable(self) -> bool:
        return getattr(self._parent, 'writable', False)

    def _get(self, row: int, col: int) -> Any:
        return self._parent.at(self._row, col)

    def _put(self, row: int, col: int, value: Any) -> None:
        self._parent.set(self._row, col, value)

    def materialize(self, dtype: Any = None):
        """Owned RowVector copy of this row."""
        from densematrix.matrix.vector import RowVector
        return RowVector.from_matrix(self, dtype=dtype)


class ColView(VectorAccess, MatrixView):
    """
    Column `col` of the parent as a rows x 1 vector.

    Raises:
        OutOfBoundsError: If col is outside the parent
    """

    _orientation = 'col'

    def __init__(self, parent: Any, col: int):
        super().__init__(parent)
        self._col = check_index(col, parent.cols, "col")

    @property
    def index(self) -> int:
        """Column number in the parent."""
        return self._col

    @property
    def rows(self) -> int:
        return self._parent.rows

    @property
    def cols(self) -> int:
        return 1

    @property
    def writable(self) -> bool:
        return getattr(self._parent, 'writable', False)

    def _get(self, row: int, col: int) -> Any:
        return self._parent.at(row, self._col)

    def _put(self, row: int, col: int, value: Any) -> None:
        self._parent.set(row, self._col, value)

    def materialize(self, dtype: Any = None):
        """Owned ColVector copy of this column."""
        from densematrix.matrix.vector import ColVector
        return ColVector.from_matrix(self, dtype=dtype)
