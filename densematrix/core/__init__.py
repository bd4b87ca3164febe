"""
Core infrastructure for densematrix.

This module provides shared abstractions and utilities used by the matrix
storage, view, and linear algebra layers.

Key components:
    protocols: MatrixLike protocol
    scalar: ScalarType, promotion rules
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Shape and index validators
    options: Engine-wide options
    tolerances: Comparison tolerance tiers
    timing: Section timer
"""

from densematrix.core.protocols import MatrixLike, ismatrix
from densematrix.core.result import Result
from densematrix.core.scalar import (
    ScalarType,
    scalar_type,
    common_type,
    field_type,
)
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

__all__ = [
    # Protocols
    "MatrixLike",
    "ismatrix",
    # Result
    "Result",
    # Scalars
    "ScalarType",
    "scalar_type",
    "common_type",
    "field_type",
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
    # Options
    "EngineOptions",
    "get_options",
    "set_options",
    "option_context",
]
