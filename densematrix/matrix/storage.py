"""
Storage core: the owning dense matrix.

A Matrix owns a C-contiguous row-major NumPy buffer of exactly rows*cols
elements and a sticky compute cache for its diagonal, determinant and
inverse. Every successful write clears the whole cache.

Construction:
    Matrix(rows, cols)                      zero-filled
    Matrix(rows, cols, fill.eye)            filled from a specifier
    Matrix.from_rows([[1, 2], [3, 4]])      nested literal
    Matrix.from_array(ndarray)              2D numeric array
    Matrix.from_matrix(other, dtype=...)    element-wise cast copy
    Matrix.from_blocks([[A, B], [C, D]])    block composition
"""

from __future__ import annotations

import copy as _copy
from typing import Any
import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import DimensionError, ValidationError
from densematrix.core.options import get_options
from densematrix.core.protocols import ismatrix
from densematrix.core.scalar import (
    ScalarType,
    infer_scalar_type,
    scalar_type,
    FLOAT64,
)
from densematrix.core.validation import check_index, check_literal, check_shape
from densematrix.matrix.base import MatrixBase
from densematrix.matrix.cache import Cached, StickyCache
from densematrix.matrix.fill import fill_buffer


def _literal_scalar(array: NDArray[Any], dtype: Any) -> ScalarType:
    """Scalar type for literal input: explicit dtype, else inferred with ints promoted."""
    if dtype is not None:
        return scalar_type(dtype)
    inferred = infer_scalar_type(array)
    # Ensure floating point for numerical stability
    if inferred.kind in 'iu':
        return FLOAT64
    return inferred


class Matrix(MatrixBase):
    """
    Owning dense matrix over a parametric scalar type.

    Args:
        rows: Number of rows (> 0)
        cols: Number of columns (> 0)
        fill: Fill specifier (see densematrix.matrix.fill); zeros if None
        dtype: Scalar type specification; float64 if None

    Raises:
        DimensionError: If rows or cols is negative
        EmptyElementError: If rows or cols is zero
        UnknownFillTypeError: If fill is not a known specifier
    """

    def __init__(self, rows: int, cols: int, fill: Any = None, *, dtype: Any = None):
        shape = check_shape(rows, cols)
        scalar = scalar_type(dtype)
        buffer = fill_buffer(shape, 'zeros' if fill is None else fill, scalar)
        self._init_storage(buffer, scalar)

    def _init_storage(self, buffer: NDArray[Any], scalar: ScalarType) -> None:
        self._data = buffer
        self._scalar = scalar
        self._cache = StickyCache()

    @classmethod
    def _from_buffer(cls, buffer: NDArray[Any], scalar: ScalarType) -> Matrix:
        """
        Wrap an already validated, already owned 2D buffer.

        The buffer is adopted, not copied.
        """
        check_shape(*buffer.shape)
        obj = cls.__new__(cls)
        obj._init_storage(np.ascontiguousarray(buffer), scalar)
        return obj

    # ------------------------------------------------------------------
    # Construction variants
    # ------------------------------------------------------------------

    @classmethod
    def from_rows(cls, literal: Any, dtype: Any = None) -> Matrix:
        """
        Build from a nested row literal.

        Integer literals become float64 unless dtype says otherwise;
        Fraction literals become 'fraction'.

        Raises:
            EmptyElementError: If the literal has no rows or empty rows
            DimensionError: If the rows differ in length
            ValidationError: If the literal holds non-numeric data
        """
        array = check_literal(literal, "rows")
        scalar = _literal_scalar(array, dtype)
        return cls._from_buffer(scalar.cast_array(array), scalar)

    @classmethod
    def from_array(cls, array: Any, dtype: Any = None) -> Matrix:
        """
        Build from a 2D NumPy array (copied).

        Raises:
            DimensionError: If the array is not 2D
            EmptyElementError: If either dimension is zero
            ValidationError: If the array is not numeric
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise DimensionError(
                f"array: expected 2D array, got {array.ndim}D with shape {array.shape}"
            )
        check_shape(*array.shape)
        scalar = _literal_scalar(array, dtype)
        return cls._from_buffer(scalar.cast_array(array), scalar)

    @classmethod
    def from_matrix(cls, other: Any, dtype: Any = None) -> Matrix:
        """
        Element-wise cast copy of any matrix-like (owned or view).

        Args:
            other: Source matrix, vector or view
            dtype: Target scalar type; the source's if None
        """
        if not ismatrix(other):
            raise ValidationError(
                f"other: expected a matrix-like object, got {type(other).__name__}"
            )
        scalar = other.scalar if dtype is None else scalar_type(dtype)
        return cls._from_buffer(scalar.cast_array(other.to_numpy()), scalar)

    @classmethod
    def from_blocks(cls, blocks: Any, dtype: Any = None) -> Matrix:
        """
        Compose a block matrix, e.g. [[A, B], [C, D]].

        Raises:
            DimensionError: If blocks in a block-row differ in row count or
                block-rows differ in total column count
        """
        from densematrix.matrix.blocks import compose_blocks
        buffer, scalar = compose_blocks(blocks, dtype)
        return cls._from_buffer(buffer, scalar)

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def scalar(self) -> ScalarType:
        return self._scalar

    @property
    def writable(self) -> bool:
        return True

    def _get(self, row: int, col: int) -> Any:
        return self._data[row, col]

    def _put(self, row: int, col: int, value: Any) -> None:
        self._data[row, col] = self._scalar(value)
        self._invalidate()

    def _invalidate(self) -> None:
        self._cache.clear()

    def _coerce_vector(self, values: Any, length: int, name: str) -> NDArray[Any]:
        """Owned 1-D snapshot of values cast to this scalar type."""
        if ismatrix(values):
            if 1 not in values.shape:
                raise DimensionError(
                    f"{name}: expected a vector, got {values.rows}x{values.cols}"
                )
            source = values.to_numpy().reshape(-1)
        elif isinstance(values, np.ndarray):
            if values.ndim != 1:
                raise DimensionError(
                    f"{name}: expected a 1-D array, got {values.ndim}D with shape {values.shape}"
                )
            source = values
        else:
            source = np.empty(len(values), dtype=object)
            for i, value in enumerate(values):
                source[i] = value
        if source.shape[0] != length:
            raise DimensionError(
                f"{name}: expected {length} elements, got {source.shape[0]}"
            )
        return self._scalar.cast_array(source)

    def set_row(self, row: int, values: Any) -> None:
        """
        Overwrite a whole row.

        values is read completely before the row is written, so it may be
        a projection of this same matrix.

        Raises:
            OutOfBoundsError: If row is out of range
            DimensionError: If values does not have cols elements
        """
        row = check_index(row, self.rows, "row")
        snapshot = self._coerce_vector(values, self.cols, "values")
        self._data[row, :] = snapshot
        self._invalidate()

    def set_col(self, col: int, values: Any) -> None:
        """
        Overwrite a whole column.

        Raises:
            OutOfBoundsError: If col is out of range
            DimensionError: If values does not have rows elements
        """
        col = check_index(col, self.cols, "col")
        snapshot = self._coerce_vector(values, self.rows, "values")
        self._data[:, col] = snapshot
        self._invalidate()

    def row_values(self, row: int) -> NDArray[Any]:
        """Owned 1-D copy of one row."""
        row = check_index(row, self.rows, "row")
        return self._data[row, :].copy()

    def to_numpy(self) -> NDArray[Any]:
        return self._data.copy()

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------

    def copy(self) -> Matrix:
        """Deep clone of the storage; the cache starts empty."""
        return type(self)._from_buffer(self._data.copy(), self._scalar)

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        clone = type(self)._from_buffer(_copy.deepcopy(self._data, memo), self._scalar)
        memo[id(self)] = clone
        return clone

    def astype(self, dtype: Any) -> Matrix:
        """Cast copy into another scalar type."""
        return type(self).from_matrix(self, dtype=dtype)

    # ------------------------------------------------------------------
    # Sticky compute
    # ------------------------------------------------------------------

    @property
    def cached(self) -> Cached:
        """Quantities currently held valid in the sticky cache."""
        return self._cache.mask

    def diag(self):
        """Leading diagonal as a fresh RowVector; cached."""
        sticky = get_options().sticky_compute
        if sticky and self._cache.valid(Cached.DIAG):
            return self._cache.get(Cached.DIAG).copy()
        result = super().diag()
        if sticky:
            self._cache.store(Cached.DIAG, result.copy())
        return result

    def det(self) -> Any:
        """Determinant; cached until the next write."""
        sticky = get_options().sticky_compute
        if sticky and self._cache.valid(Cached.DET):
            return self._cache.get(Cached.DET)
        value = super().det()
        if sticky:
            self._cache.store(Cached.DET, value)
        return value

    def inv(self) -> Matrix:
        """Inverse as a fresh Matrix; cached until the next write."""
        sticky = get_options().sticky_compute
        if sticky and self._cache.valid(Cached.INV):
            return self._cache.get(Cached.INV).copy()
        result = super().inv()
        if sticky:
            self._cache.store(Cached.INV, result.copy())
        return result
