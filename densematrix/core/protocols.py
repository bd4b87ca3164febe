"""
Core protocols for densematrix.

These define the structural interface every matrix-like object satisfies:
owning matrices, vectors, and the read-only views layered on top of them.
We use Protocol (structural typing) rather than ABC (nominal typing) so
kernels accept anything that can answer rows/cols/at, including objects
from outside this package.

Design Principles:
    - Minimal contract: shape, scalar type, and element reads
    - Writes are not part of the contract; only owners and writable
      projections offer set()
"""

from typing import Protocol, Any, runtime_checkable

from densematrix.core.scalar import ScalarType


@runtime_checkable
class MatrixLike(Protocol):
    """
    Minimal protocol for anything readable as a dense matrix.

    Matrix, RowVector, ColVector, TransposeView, SubRangeView, RowView
    and ColView all implement it; the elimination and arithmetic kernels
    only rely on these four members.
    """

    @property
    def rows(self) -> int:
        """Number of rows."""
        ...

    @property
    def cols(self) -> int:
        """Number of columns."""
        ...

    @property
    def scalar(self) -> ScalarType:
        """Scalar type of the elements."""
        ...

    def at(self, row: int, col: int) -> Any:
        """
        Element at (row, col).

        Raises:
            OutOfBoundsError: If the index is outside this object's own
                extents (never the extents of an underlying parent)
        """
        ...


def ismatrix(obj: Any) -> bool:
    """True if obj satisfies the MatrixLike protocol."""
    return isinstance(obj, MatrixLike)
