"""
Creation helpers.

Shorthands for the common Matrix(rows, cols, fill) calls. cols defaults to
rows, so eye(3) is the 3 x 3 identity.
"""

from typing import Any

from densematrix.matrix import fill
from densematrix.matrix.storage import Matrix


def zeros(rows: int, cols: int | None = None, *, dtype: Any = None) -> Matrix:
    """Zero matrix."""
    return Matrix(rows, rows if cols is None else cols, fill.zeros, dtype=dtype)


def ones(rows: int, cols: int | None = None, *, dtype: Any = None) -> Matrix:
    """Matrix of ones."""
    return Matrix(rows, rows if cols is None else cols, fill.ones, dtype=dtype)


def eye(rows: int, cols: int | None = None, *, dtype: Any = None) -> Matrix:
    """Identity, or its leading square block for rectangular shapes."""
    return Matrix(rows, rows if cols is None else cols, fill.eye, dtype=dtype)


def full(rows: int, cols: int, value: Any, *, dtype: Any = None) -> Matrix:
    """Matrix with every element equal to value."""
    return Matrix(rows, cols, fill.constant(value), dtype=dtype)


def rand(
    rows: int,
    cols: int | None = None,
    low: float = 0.0,
    high: float = 1.0,
    *,
    seed: int | None = None,
    dtype: Any = None,
) -> Matrix:
    """
    Uniform random matrix on [low, high).

    Args:
        seed: Seed for numpy.random.default_rng; fresh entropy if None

    Raises:
        ValidationError: If high < low
    """
    spec = fill.uniform(low, high, seed=seed)
    return Matrix(rows, rows if cols is None else cols, spec, dtype=dtype)
