"""
Input validation utilities for densematrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent index wrap-around (negative indices are out of bounds)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import operator
import numpy as np
from numpy.typing import NDArray
from typing import Any

from densematrix.core.exceptions import (
    DimensionError,
    EmptyElementError,
    OutOfBoundsError,
    ValidationError,
)


def check_integer(value: Any, name: str) -> int:
    """
    Verify value is an integer (Python or NumPy, never bool).

    Args:
        value: Value to check
        name: Parameter name for error messages

    Returns:
        value as a Python int

    Raises:
        ValidationError: If value is not an integer
    """
    if isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{name}: expected integer, got bool")
    try:
        return operator.index(value)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected integer, got {type(value).__name__}"
        ) from e


def check_shape(rows: Any, cols: Any) -> tuple[int, int]:
    """
    Verify a requested matrix shape.

    Negative dimensions are checked before empty ones, so (0, -1) is a
    DimensionError.

    Returns:
        (rows, cols) as Python ints

    Raises:
        ValidationError: If either dimension is not an integer
        DimensionError: If either dimension is negative
        EmptyElementError: If either dimension is zero
    """
    rows = check_integer(rows, "rows")
    cols = check_integer(cols, "cols")

    if rows < 0 or cols < 0:
        raise DimensionError(
            f"Cannot allocate a matrix with negative dimensions: rows={rows}, cols={cols}"
        )
    if rows == 0 or cols == 0:
        raise EmptyElementError(
            f"Cannot allocate an empty matrix: rows={rows}, cols={cols}",
            shape=(rows, cols),
        )
    return rows, cols


def check_index(index: Any, extent: int, name: str) -> int:
    """
    Verify a single index lies in [0, extent).

    Args:
        index: Index to check
        extent: Exclusive upper bound
        name: Parameter name for error messages

    Returns:
        index as a Python int

    Raises:
        ValidationError: If index is not an integer
        OutOfBoundsError: If index is outside [0, extent)
    """
    index = check_integer(index, name)
    if index < 0 or index >= extent:
        raise OutOfBoundsError(
            f"{name}={index} is out of bounds for extent {extent}",
            index=(index,),
        )
    return index


def check_element_index(row: Any, col: Any, shape: tuple[int, int]) -> tuple[int, int]:
    """
    Verify (row, col) addresses an element of a matrix with the given shape.

    Returns:
        (row, col) as Python ints

    Raises:
        ValidationError: If either index is not an integer
        OutOfBoundsError: If either index is outside its extent
    """
    row = check_integer(row, "row")
    col = check_integer(col, "col")
    n_rows, n_cols = shape
    if row < 0 or row >= n_rows or col < 0 or col >= n_cols:
        raise OutOfBoundsError(
            f"Index ({row}, {col}) is out of bounds for shape {n_rows}x{n_cols}",
            index=(row, col),
            shape=shape,
        )
    return row, col


def check_square(shape: tuple[int, int], name: str) -> int:
    """
    Verify a matrix shape is square.

    Returns:
        The common dimension n

    Raises:
        DimensionError: If rows != cols
    """
    n_rows, n_cols = shape
    if n_rows != n_cols:
        raise DimensionError(
            f"{name}: expected square matrix, got {n_rows}x{n_cols}"
        )
    return n_rows


def check_same_shape(
    a: tuple[int, int],
    b: tuple[int, int],
    names: tuple[str, str],
) -> None:
    """
    Verify two shapes are identical.

    Raises:
        DimensionError: If the shapes differ
    """
    if a != b:
        raise DimensionError(
            f"Incompatible shapes: {names[0]}={a[0]}x{a[1]}, {names[1]}={b[0]}x{b[1]}"
        )


def check_inner_dimensions(a: tuple[int, int], b: tuple[int, int]) -> None:
    """
    Verify a product a @ b is defined.

    Raises:
        DimensionError: If a.cols != b.rows
    """
    if a[1] != b[0]:
        raise DimensionError(
            f"Inner dimensions do not match: {a[0]}x{a[1]} times {b[0]}x{b[1]}"
        )


def check_literal(literal: Any, name: str) -> NDArray[Any]:
    """
    Validate a nested row literal and convert it to a 2D numpy array.

    Rows are checked for equal length before any conversion, so a ragged
    literal is a DimensionError rather than an object array. The element
    dtype is left for the caller to resolve.

    Args:
        literal: Sequence of row sequences
        name: Parameter name for error messages

    Returns:
        2D numpy.ndarray (rows x cols)

    Raises:
        EmptyElementError: If there are no rows or the rows are empty
        DimensionError: If rows differ in length or the literal is not 2D
        ValidationError: If the literal is not a sequence of sequences
    """
    if isinstance(literal, np.ndarray):
        rows_list = list(literal) if literal.ndim == 2 else None
        if rows_list is None:
            raise DimensionError(
                f"{name}: expected 2D array, got {literal.ndim}D with shape {literal.shape}"
            )
    else:
        try:
            rows_list = [list(row) for row in literal]
        except TypeError as e:
            raise ValidationError(f"{name}: expected a sequence of rows: {e}") from e

    if len(rows_list) == 0:
        raise EmptyElementError(f"{name}: literal has no rows", shape=(0, 0))

    lengths = [len(row) for row in rows_list]
    if len(set(lengths)) > 1:
        raise DimensionError(
            f"{name}: rows have inconsistent lengths {lengths}"
        )
    if lengths[0] == 0:
        raise EmptyElementError(
            f"{name}: literal rows are empty", shape=(len(rows_list), 0)
        )

    array = np.empty((len(rows_list), lengths[0]), dtype=object)
    for i, row in enumerate(rows_list):
        for j, value in enumerate(row):
            array[i, j] = value

    # Let numpy pick a native dtype when the elements allow one
    try:
        native = np.array(array.tolist())
    except (ValueError, TypeError):
        native = array
    if native.shape != array.shape:
        raise DimensionError(
            f"{name}: expected a 2D literal, elements are themselves sequences"
        )
    return native
