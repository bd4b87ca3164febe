"""
densematrix: dense matrices and vectors over a parametric scalar type.

Owning matrices, cheap aliasing views (transpose, sub-range, row, column),
and Gauss-Jordan elimination kernels (rref, determinant, inverse) built on
three elementary row operations.

Submodules:
    core: Scalar types, exceptions, validation, options, result envelope
    matrix: Storage, views, vectors, fill specifiers, block composition
    linalg: Row operations, elimination kernels, arithmetic

Example:
    >>> from densematrix import Matrix
    >>> A = Matrix.from_rows([[2, 1], [1, 1]])
    >>> float(A.det())
    1.0
    >>> print(A.inv())
    1.0 -1.0
    -1.0 2.0
"""

__version__ = "0.1.0"

from densematrix.core.exceptions import (
    DenseMatrixError,
    ValidationError,
    DimensionError,
    EmptyElementError,
    OutOfBoundsError,
    UnknownFillTypeError,
    ReadOnlyViewError,
    NumericalError,
    SingularMatrixError,
)
from densematrix.core.options import (
    EngineOptions,
    get_options,
    set_options,
    option_context,
)
from densematrix.core.scalar import ScalarType, scalar_type, common_type
from densematrix.core.protocols import MatrixLike, ismatrix
from densematrix.matrix import fill
from densematrix.matrix.cache import Cached
from densematrix.matrix.creation import zeros, ones, eye, full, rand
from densematrix.matrix.storage import Matrix
from densematrix.matrix.vector import RowVector, ColVector
from densematrix.matrix.views import TransposeView, SubRangeView, RowView, ColView
from densematrix.linalg.elimination import (
    EliminationParams,
    eliminate,
    rref,
    determinant as det,
    inverse as inv,
)
from densematrix.linalg.arithmetic import dot, allclose

__all__ = [
    "__version__",
    # Storage, vectors, views
    "Matrix",
    "RowVector",
    "ColVector",
    "TransposeView",
    "SubRangeView",
    "RowView",
    "ColView",
    "MatrixLike",
    "ismatrix",
    "Cached",
    # Creation
    "fill",
    "zeros",
    "ones",
    "eye",
    "full",
    "rand",
    # Kernels
    "EliminationParams",
    "eliminate",
    "rref",
    "det",
    "inv",
    "dot",
    "allclose",
    # Scalars
    "ScalarType",
    "scalar_type",
    "common_type",
    # Options
    "EngineOptions",
    "get_options",
    "set_options",
    "option_context",
    # Exceptions
    "DenseMatrixError",
    "ValidationError",
    "DimensionError",
    "EmptyElementError",
    "OutOfBoundsError",
    "UnknownFillTypeError",
    "ReadOnlyViewError",
    "NumericalError",
    "SingularMatrixError",
]
