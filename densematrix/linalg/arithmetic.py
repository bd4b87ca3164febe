"""
Matrix arithmetic.

Element-wise sums and differences, negation, matrix and scalar products,
exact equality, tolerance comparison, and the vector dot product. Every
operation accepts any matrix-like (owned, vector or view) and returns a
fresh owning Matrix.

The result scalar type of a binary operation is common_type() of the two
operand types; operands are cast into it before any arithmetic is done.
"""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import DimensionError, ValidationError
from densematrix.core.protocols import ismatrix
from densematrix.core.scalar import ScalarType, common_type
from densematrix.core.tolerances import ToleranceTier, select_tolerance
from densematrix.core.validation import check_inner_dimensions, check_same_shape
from densematrix.matrix.storage import Matrix


def _check_operand(m: Any, name: str) -> None:
    if not ismatrix(m):
        raise ValidationError(
            f"{name}: expected a matrix-like object, got {type(m).__name__}"
        )


def _operands(a: Any, b: Any) -> tuple[NDArray[Any], NDArray[Any], ScalarType]:
    """Both operands as arrays cast into their common scalar type."""
    _check_operand(a, "a")
    _check_operand(b, "b")
    scalar = common_type(a.scalar, b.scalar)
    return scalar.cast_array(a.to_numpy()), scalar.cast_array(b.to_numpy()), scalar


def _wrap(buffer: NDArray[Any], scalar: ScalarType) -> Matrix:
    return Matrix._from_buffer(scalar.cast_array(buffer), scalar)


def equal(a: Any, b: Any) -> bool:
    """Exact element-wise equality; False when the shapes differ."""
    _check_operand(a, "a")
    _check_operand(b, "b")
    if a.shape != b.shape:
        return False
    x, y, _ = _operands(a, b)
    return bool(np.all(x == y))


def allclose(a: Any, b: Any, tier: ToleranceTier | None = None) -> bool:
    """
    Element-wise comparison within a tolerance tier.

    Args:
        a, b: Matrix-likes
        tier: Tolerance to apply; chosen from the common scalar type if None

    Returns:
        False when the shapes differ, otherwise whether every pair of
        elements satisfies |a - b| <= atol + rtol * |b|
    """
    _check_operand(a, "a")
    _check_operand(b, "b")
    if a.shape != b.shape:
        return False
    x, y, scalar = _operands(a, b)
    if tier is None:
        tier = select_tolerance(scalar)
    if tier.rtol == 0 and tier.atol == 0:
        return bool(np.all(x == y))
    if scalar.is_object:
        x, y = x.astype(np.float64), y.astype(np.float64)
    return bool(np.allclose(x, y, rtol=tier.rtol, atol=tier.atol))


def negate(m: Any) -> Matrix:
    """Element-wise negation."""
    _check_operand(m, "m")
    scalar = m.scalar
    return _wrap(-scalar.cast_array(m.to_numpy()), scalar)


def add(a: Any, b: Any) -> Matrix:
    """
    Element-wise sum.

    Raises:
        DimensionError: If the shapes differ
    """
    _check_operand(a, "a")
    _check_operand(b, "b")
    check_same_shape(a.shape, b.shape, ("a", "b"))
    x, y, scalar = _operands(a, b)
    return _wrap(x + y, scalar)


def subtract(a: Any, b: Any) -> Matrix:
    """
    Element-wise difference.

    Raises:
        DimensionError: If the shapes differ
    """
    _check_operand(a, "a")
    _check_operand(b, "b")
    check_same_shape(a.shape, b.shape, ("a", "b"))
    x, y, scalar = _operands(a, b)
    return _wrap(x - y, scalar)


def matmul(a: Any, b: Any) -> Matrix:
    """
    Matrix product a @ b.

    Raises:
        DimensionError: If a.cols != b.rows
    """
    _check_operand(a, "a")
    _check_operand(b, "b")
    check_inner_dimensions(a.shape, b.shape)
    x, y, scalar = _operands(a, b)
    return _wrap(x @ y, scalar)


def _scale_type(base: ScalarType, k: Any) -> ScalarType:
    """
    Result type of scaling base by k.

    Plain Python numbers do not widen the matrix type unless their kind
    requires it: 2 * A keeps A's type, 0.5 * A makes an integer matrix
    float64, 1j * A makes a real matrix complex.
    """
    if isinstance(k, int):
        return base
    if isinstance(k, float) and base.is_inexact:
        return base
    if isinstance(k, complex) and base.kind == 'c':
        return base
    return common_type(base, type(k))


def scale(m: Any, k: Any, left: bool = False) -> Matrix:
    """
    Scalar product.

    Args:
        m: Matrix-like
        k: Numeric scalar
        left: Compute k * m instead of m * k (matters only for
            non-commutative scalar types)

    Raises:
        ValidationError: If k is not a number
    """
    _check_operand(m, "m")
    if isinstance(k, bool) or not isinstance(k, numbers.Number):
        raise ValidationError(f"k: expected a number, got {type(k).__name__}")
    scalar = _scale_type(m.scalar, k)
    x = scalar.cast_array(m.to_numpy())
    factor = scalar(k)
    return _wrap(factor * x if left else x * factor, scalar)


def dot(u: Any, v: Any) -> Any:
    """
    Dot product of two 1-D matrix-likes (any orientation).

    No complex conjugation is applied.

    Raises:
        DimensionError: If either operand is not 1-D or the lengths differ
    """
    _check_operand(u, "u")
    _check_operand(v, "v")
    for name, operand in (("u", u), ("v", v)):
        if 1 not in operand.shape:
            raise DimensionError(
                f"{name}: expected a vector, got {operand.rows}x{operand.cols}"
            )
    x, y, _ = _operands(u, v)
    x, y = x.reshape(-1), y.reshape(-1)
    if x.shape[0] != y.shape[0]:
        raise DimensionError(
            f"Vector lengths do not match: u has {x.shape[0]}, v has {y.shape[0]}"
        )
    return np.dot(x, y)
