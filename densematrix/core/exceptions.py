"""
Exception hierarchy for densematrix.

All exceptions inherit from DenseMatrixError to allow catching any
library-specific error. Shape and index problems are ValidationErrors;
failures that only show up while computing are NumericalErrors.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class DenseMatrixError(Exception):
    """Base exception for all densematrix errors."""
    pass


class ValidationError(DenseMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs (dimensions, literals, options)
    fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Operand shapes are incorrect or incompatible.

    Raised for negative dimensions, ragged literals, inconsistent block
    layouts, inverted sub-ranges, non-square det/inv input, and shape
    mismatches in arithmetic.
    """
    pass


class EmptyElementError(ValidationError):
    """
    Attempt to create a matrix with a zero-sized dimension.

    Attributes:
        shape: The requested (rows, cols)
    """

    def __init__(self, message: str, shape: tuple[int, int] | None = None):
        super().__init__(message)
        self.shape = shape


class OutOfBoundsError(ValidationError, IndexError):
    """
    Index outside the declared extents of a matrix or view.

    Views check against their own extents, so this is also raised when
    an index would escape a sub-range into the parent matrix.

    Attributes:
        index: The offending (row, col) index
        shape: The (rows, cols) extents it was checked against
    """

    def __init__(
        self,
        message: str,
        index: tuple[int, ...] | None = None,
        shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape


class UnknownFillTypeError(ValidationError):
    """
    Unrecognized fill specifier.

    Attributes:
        fill: The specifier that could not be resolved
    """

    def __init__(self, message: str, fill: object = None):
        super().__init__(message)
        self.fill = fill


class ReadOnlyViewError(ValidationError):
    """
    Write attempted through a view that does not own writable storage.
    """
    pass


class NumericalError(DenseMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when elimination cannot find a pivot in some column of a square
    matrix whose inverse was requested.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Number of pivots found by elimination
        expected_rank: Rank required for invertibility (n)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
