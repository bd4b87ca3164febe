"""
Block-matrix composition.

A block literal is a sequence of block-rows, each a sequence of
matrix-likes placed side by side:

    [[A, B],
     [C, D]]

Every block in a block-row must have the same number of rows, and every
block-row must add up to the same number of columns. Blocks may be views
and may have different scalar types; the result type is the common type
of all blocks unless one is given.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import DimensionError, EmptyElementError, ValidationError
from densematrix.core.protocols import ismatrix
from densematrix.core.scalar import ScalarType, common_type, scalar_type


def _block_rows(blocks: Any) -> list[list[Any]]:
    """Validate the nesting and element types of a block literal."""
    try:
        layout = [list(block_row) for block_row in blocks]
    except TypeError as e:
        raise ValidationError(f"blocks: expected a sequence of block-rows: {e}") from e

    if not layout:
        raise EmptyElementError("blocks: literal has no block-rows", shape=(0, 0))
    for i, block_row in enumerate(layout):
        if not block_row:
            raise EmptyElementError(f"blocks: block-row {i} is empty", shape=(i, 0))
        for j, block in enumerate(block_row):
            if not ismatrix(block):
                raise ValidationError(
                    f"blocks[{i}][{j}]: expected a matrix-like object, "
                    f"got {type(block).__name__}"
                )
    return layout


def compose_blocks(blocks: Any, dtype: Any = None) -> tuple[NDArray[Any], ScalarType]:
    """
    Assemble a block literal into one buffer.

    Args:
        blocks: Sequence of block-rows of matrix-likes
        dtype: Result scalar type; common type of the blocks if None

    Returns:
        (buffer, scalar) ready for Matrix._from_buffer

    Raises:
        EmptyElementError: If the literal or one of its block-rows is empty
        DimensionError: If blocks in a block-row differ in row count, or
            block-rows differ in total column count
        ValidationError: If an element is not matrix-like
    """
    layout = _block_rows(blocks)

    total_cols = sum(block.cols for block in layout[0])
    total_rows = 0
    for i, block_row in enumerate(layout):
        height = block_row[0].rows
        for j, block in enumerate(block_row):
            if block.rows != height:
                raise DimensionError(
                    f"blocks[{i}][{j}]: expected {height} rows to match "
                    f"blocks[{i}][0], got {block.rows}"
                )
        width = sum(block.cols for block in block_row)
        if width != total_cols:
            raise DimensionError(
                f"blocks[{i}]: block-row spans {width} columns, expected {total_cols}"
            )
        total_rows += height

    if dtype is not None:
        scalar = scalar_type(dtype)
    else:
        scalar = layout[0][0].scalar
        for block_row in layout:
            for block in block_row:
                scalar = common_type(scalar, block.scalar)

    buffer = scalar.full((total_rows, total_cols), 0)
    row_start = 0
    for block_row in layout:
        col_start = 0
        for block in block_row:
            buffer[row_start:row_start + block.rows, col_start:col_start + block.cols] = (
                scalar.cast_array(block.to_numpy())
            )
            col_start += block.cols
        row_start += block_row[0].rows

    return np.ascontiguousarray(buffer), scalar
