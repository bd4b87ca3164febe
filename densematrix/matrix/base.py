"""
Shared read interface for every matrix-like object.

Owning matrices, vectors, and the four view kinds (transpose, sub-range,
row, column) are one family dispatched through a single interface:
rows/cols/scalar plus an element read. Everything else here (projections,
materialization, rendering, kernels, operators) is written once against
that interface.

Subclasses implement:
    rows, cols, scalar   properties
    _get(row, col)       read of an index already checked against the
                         subclass's own extents
and, if they can be written through:
    writable             True
    _put(row, col, v)    write of an already checked index
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from typing import Any, Iterator, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import ReadOnlyViewError
from densematrix.core.scalar import ScalarType
from densematrix.core.validation import check_element_index, check_index

if TYPE_CHECKING:
    from densematrix.matrix.storage import Matrix
    from densematrix.matrix.vector import RowVector
    from densematrix.matrix.views import (
        ColView,
        RowView,
        SubRangeView,
        TransposeView,
    )


class MatrixBase(ABC):
    """
    Abstract base of the matrix family.

    Element access is always bounds-checked against this object's own
    extents. Reads never have side effects.
    """

    # Make NumPy scalars defer to our reflected operators (2.0 * A)
    __array_ufunc__ = None

    __hash__ = None  # mutable, compared element-wise

    @property
    @abstractmethod
    def rows(self) -> int:
        """Number of rows."""

    @property
    @abstractmethod
    def cols(self) -> int:
        """Number of columns."""

    @property
    @abstractmethod
    def scalar(self) -> ScalarType:
        """Scalar type of the elements."""

    @abstractmethod
    def _get(self, row: int, col: int) -> Any:
        """Element read; indices are already validated."""

    @property
    def writable(self) -> bool:
        """Whether set() writes through to owned storage."""
        return False

    def _put(self, row: int, col: int, value: Any) -> None:
        raise ReadOnlyViewError(f"{type(self).__name__} is read-only")

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype of the scalar type."""
        return self.scalar.dtype

    def at(self, row: int, col: int) -> Any:
        """
        Element at (row, col).

        Raises:
            OutOfBoundsError: If (row, col) is outside this object's extents
        """
        row, col = check_element_index(row, col, self.shape)
        return self._get(row, col)

    def set(self, row: int, col: int, value: Any) -> None:
        """
        Write value at (row, col).

        Raises:
            ReadOnlyViewError: If this object cannot be written through
            OutOfBoundsError: If (row, col) is outside this object's extents
        """
        if not self.writable:
            raise ReadOnlyViewError(f"{type(self).__name__} is read-only")
        row, col = check_element_index(row, col, self.shape)
        self._put(row, col, value)

    def __getitem__(self, key: tuple[int, int]) -> Any:
        row, col = self._split_key(key)
        return self.at(row, col)

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        row, col = self._split_key(key)
        self.set(row, col, value)

    @staticmethod
    def _split_key(key: Any) -> tuple[Any, Any]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"matrix index must be a (row, col) pair, got {key!r}")
        return key

    def __iter__(self) -> Iterator[RowView]:
        """Iterate over rows as row projections."""
        for i in range(self.rows):
            yield self.get_row(i)

    # ------------------------------------------------------------------
    # Views and projections
    # ------------------------------------------------------------------

    def t(self) -> TransposeView:
        """Transpose view sharing this object's storage."""
        from densematrix.matrix.views import TransposeView
        return TransposeView(self)

    def range(self, r1: int, r2: int, c1: int, c2: int) -> SubRangeView:
        """View of rows r1..r2 and columns c1..c2 (inclusive)."""
        from densematrix.matrix.views import SubRangeView
        return SubRangeView(self, r1, r2, c1, c2)

    def get_row(self, row: int) -> RowView:
        """Row projection; writable when this object is."""
        from densematrix.matrix.views import RowView
        return RowView(self, row)

    def get_col(self, col: int) -> ColView:
        """Column projection; writable when this object is."""
        from densematrix.matrix.views import ColView
        return ColView(self, col)

    # ------------------------------------------------------------------
    # Materialization
    # ------------------------------------------------------------------

    def to_numpy(self) -> NDArray[Any]:
        """Fresh 2D array with a copy of the elements."""
        out = np.empty(self.shape, dtype=self.scalar.dtype)
        for i in range(self.rows):
            for j in range(self.cols):
                out[i, j] = self._get(i, j)
        return out

    def tolist(self) -> list[list[Any]]:
        """Elements as nested Python lists (row-major)."""
        return self.to_numpy().tolist()

    def materialize(self, dtype: Any = None) -> Matrix:
        """Copy into a new owning Matrix, optionally casting."""
        from densematrix.matrix.storage import Matrix
        return Matrix.from_matrix(self, dtype=dtype)

    # ------------------------------------------------------------------
    # Derived quantities and kernels
    # ------------------------------------------------------------------

    def diag(self) -> RowVector:
        """Leading min(rows, cols) diagonal elements as a fresh RowVector."""
        from densematrix.matrix.vector import RowVector
        values = np.diagonal(self.to_numpy()).copy()
        return RowVector._from_buffer(values.reshape(1, -1), self.scalar)

    def trace(self) -> Any:
        """Sum of the diagonal."""
        return self.diag().sum()

    def rref(self, augmented: MatrixBase | None = None) -> Matrix:
        """
        Row-reduced echelon form.

        With an augmented operand, the same row operations are applied to
        it and the reduced augmented matrix is returned instead.
        """
        from densematrix.linalg.elimination import rref
        return rref(self, augmented)

    def det(self) -> Any:
        """Determinant (square matrices only)."""
        from densematrix.linalg.elimination import determinant
        return determinant(self)

    def inv(self) -> Matrix:
        """Inverse (square, non-singular matrices only)."""
        from densematrix.linalg.elimination import inverse
        return inverse(self)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        """Row-major, space-separated within a row, newline between rows."""
        return "\n".join(
            " ".join(str(value) for value in row) for row in self.tolist()
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rows={self.rows}, cols={self.cols}, "
            f"scalar='{self.scalar.name}')"
        )

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        from densematrix.core.protocols import ismatrix
        from densematrix.linalg.arithmetic import equal
        if not ismatrix(other):
            return NotImplemented
        return equal(self, other)

    def __neg__(self) -> Matrix:
        from densematrix.linalg.arithmetic import negate
        return negate(self)

    def __add__(self, other: Any) -> Matrix:
        from densematrix.core.protocols import ismatrix
        from densematrix.linalg.arithmetic import add
        if not ismatrix(other):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: Any) -> Matrix:
        from densematrix.core.protocols import ismatrix
        from densematrix.linalg.arithmetic import subtract
        if not ismatrix(other):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other: Any) -> Matrix:
        from densematrix.core.protocols import ismatrix
        from densematrix.linalg.arithmetic import matmul, scale
        if ismatrix(other):
            return matmul(self, other)
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return scale(self, other)

    def __rmul__(self, other: Any) -> Matrix:
        from densematrix.linalg.arithmetic import scale
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return scale(self, other, left=True)

    def __matmul__(self, other: Any) -> Matrix:
        from densematrix.core.protocols import ismatrix
        from densematrix.linalg.arithmetic import matmul
        if not ismatrix(other):
            return NotImplemented
        return matmul(self, other)


class VectorAccess:
    """
    Single-index access for 1-D members of the family.

    Mixed in ahead of a MatrixBase subclass. The host provides
    `_orientation` ('row' for 1 x n, 'col' for n x 1) and `length`.
    Two-index access keeps working through the MatrixBase methods.
    """

    _orientation: str

    @property
    def length(self) -> int:
        """The non-unit dimension."""
        return self.cols if self._orientation == 'row' else self.rows

    def _pos(self, index: int) -> tuple[int, int]:
        index = check_index(index, self.length, "index")
        if self._orientation == 'row':
            return 0, index
        return index, 0

    def at(self, index: int, col: int | None = None) -> Any:
        """at(index) for the single-index form, at(row, col) otherwise."""
        if col is not None:
            return super().at(index, col)
        row, col = self._pos(index)
        return self._get(row, col)

    def set(self, index: int, *args: Any) -> None:
        """set(index, value) for the single-index form, set(row, col, value) otherwise."""
        if len(args) == 1:
            row, col = self._pos(index)
            value = args[0]
        elif len(args) == 2:
            row, col, value = index, args[0], args[1]
        else:
            raise TypeError(
                f"set() takes (index, value) or (row, col, value), got {1 + len(args)} arguments"
            )
        super().set(row, col, value)

    def __getitem__(self, key: Any) -> Any:
        if isinstance(key, tuple):
            return super().__getitem__(key)
        return self.at(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        if isinstance(key, tuple):
            super().__setitem__(key, value)
        else:
            self.set(key, value)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Any]:
        for i in range(self.length):
            yield self.at(i)

    def values(self) -> NDArray[Any]:
        """Fresh 1-D array with a copy of the elements."""
        return self.to_numpy().reshape(-1)

    def sum(self) -> Any:
        """Sum of the elements."""
        total = self.at(0)
        for i in range(1, self.length):
            total = total + self.at(i)
        return total

    def prod(self) -> Any:
        """Product of the elements."""
        total = self.at(0)
        for i in range(1, self.length):
            total = total * self.at(i)
        return total

    def dot(self, other: Any) -> Any:
        """Dot product with another 1-D object of the same length."""
        from densematrix.linalg.arithmetic import dot
        return dot(self, other)
