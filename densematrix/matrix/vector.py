"""
Vector specialization of the storage core.

A vector IS a Matrix with one dimension fixed to 1: RowVector is 1 x n,
ColVector is n x 1. Storage, caching and casting are inherited unchanged;
the only additions are single-index access and the reductions used by the
kernels (sum for trace, prod for determinants).
"""

from __future__ import annotations

from typing import Any
from numpy.typing import NDArray

from densematrix.core.exceptions import DimensionError
from densematrix.core.validation import check_integer, check_literal
from densematrix.matrix.base import VectorAccess
from densematrix.matrix.storage import Matrix, _literal_scalar
from densematrix.core.scalar import ScalarType


class Vector(VectorAccess, Matrix):
    """
    Base for RowVector and ColVector.

    Args:
        length: Number of elements (> 0)
        fill: Fill specifier; zeros if None
        dtype: Scalar type specification; float64 if None
    """

    _orientation = 'row'

    def __init__(self, length: int, fill: Any = None, *, dtype: Any = None):
        length = check_integer(length, "length")
        super().__init__(*self._shape_for(length), fill, dtype=dtype)

    @classmethod
    def _shape_for(cls, length: int) -> tuple[int, int]:
        if cls._orientation == 'row':
            return (1, length)
        return (length, 1)

    @classmethod
    def _from_buffer(cls, buffer: NDArray[Any], scalar: ScalarType) -> Vector:
        if buffer.ndim == 1:
            buffer = buffer.reshape(cls._shape_for(buffer.shape[0]))
        expected = cls._shape_for(buffer.size)
        if buffer.shape != expected:
            raise DimensionError(
                f"{cls.__name__}: expected shape {expected[0]}x{expected[1]}, "
                f"got {buffer.shape[0]}x{buffer.shape[1]}"
            )
        return super()._from_buffer(buffer, scalar)

    @classmethod
    def from_values(cls, values: Any, dtype: Any = None) -> Vector:
        """
        Build from a flat sequence of values.

        Raises:
            EmptyElementError: If values is empty
            ValidationError: If values holds non-numeric data
        """
        array = check_literal([list(values)], "values")
        scalar = _literal_scalar(array, dtype)
        return cls._from_buffer(scalar.cast_array(array).reshape(-1), scalar)

    def sum(self) -> Any:
        """Sum of the elements."""
        return self._data.sum()

    def prod(self) -> Any:
        """Product of the elements."""
        return self._data.prod()


class RowVector(Vector):
    """1 x n vector."""
    _orientation = 'row'


class ColVector(Vector):
    """n x 1 vector."""
    _orientation = 'col'

