"""
Gauss-Jordan elimination kernels.

One elimination loop serves rref, determinant and inverse. It runs on a
deep clone of its input, built only from the row primitives in rowops,
and optionally carries an augmented matrix through the same row
operations:

    lead = 0
    for each row r:
        find a pivot row i >= r with a non-zero entry in column lead,
        moving lead right while the column is exhausted
        swap rows i and r                     (multiplier *= -1)
        scale row r by 1 / pivot              (multiplier *= pivot)
        clear column lead from every other row
        lead += 1

The loop stops when every row has been processed or lead runs off the
last column. The determinant of a square input is multiplier times the
product of the reduced diagonal, or zero when a pivot is missing.

Integer scalar types are reduced in float64; every other scalar type is
reduced in its own arithmetic, so 'fraction' matrices reduce exactly.
"""

from __future__ import annotations

import inspect
import os
import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np

from densematrix.core.exceptions import (
    DimensionError,
    SingularMatrixError,
    ValidationError,
)
from densematrix.core.options import check_pivoting, check_zero_tol, get_options
from densematrix.core.protocols import ismatrix
from densematrix.core.result import Result
from densematrix.core.scalar import ScalarType, common_type, field_type, is_zero
from densematrix.core.timing import timed
from densematrix.core.validation import check_square
from densematrix.linalg.rowops import row_add, row_scale, row_swap
from densematrix.matrix import fill
from densematrix.matrix.storage import Matrix


@dataclass(frozen=True)
class EliminationParams:
    """
    Outcome of one elimination run.

    Attributes:
        reduced: Row-reduced echelon form of the primary matrix
        augmented: The augmented operand after the same row operations,
            or None if none was given
        pivots: (row, col) position of every pivot, in order
        swaps: Number of row exchanges performed
        multiplier: Product of -1 per swap and each pre-normalisation pivot
        rank: Number of pivots found
    """
    reduced: Matrix
    augmented: Matrix | None
    pivots: tuple[tuple[int, int], ...]
    swaps: int
    multiplier: Any
    rank: int

    @property
    def pivot_columns(self) -> tuple[int, ...]:
        """Columns holding a pivot, in increasing order."""
        return tuple(col for _, col in self.pivots)


def _check_operand(m: Any, name: str) -> None:
    if not ismatrix(m):
        raise ValidationError(
            f"{name}: expected a matrix-like object, got {type(m).__name__}"
        )


def _find_pivot(
    work: Matrix, r: int, lead: int, pivoting: str, zero_tol: float
) -> int | None:
    """Pivot row at or below r in column lead, or None if the column is exhausted."""
    if pivoting == 'first':
        for i in range(r, work.rows):
            if not is_zero(work.at(i, lead), zero_tol):
                return i
        return None

    best, best_size = None, None
    for i in range(r, work.rows):
        value = work.at(i, lead)
        if is_zero(value, zero_tol):
            continue
        size = abs(value)
        if best is None or size > best_size:
            best, best_size = i, size
    return best


def _find_stack_level() -> int:
    """
    Stack level of the first frame outside the densematrix package.

    Warnings raised deep inside a kernel then point at the user's call,
    whichever public entry point (eliminate, rref, A.det(), ...) was used.
    """
    import densematrix

    package_dir = os.path.dirname(densematrix.__file__) + os.sep
    frame = inspect.currentframe()
    level = 0
    try:
        while frame is not None and inspect.getfile(frame).startswith(package_dir):
            frame = frame.f_back
            level += 1
    finally:
        del frame
    return level


def _scale_of(work: Matrix) -> float:
    """Largest element magnitude, for the near-zero pivot diagnostic."""
    return float(np.max(np.abs(work.to_numpy())))


def eliminate(
    m: Any,
    augmented: Any = None,
    *,
    pivoting: str | None = None,
    zero_tol: float | None = None,
) -> Result[EliminationParams]:
    """
    Run Gauss-Jordan elimination and report everything it found.

    Neither m nor augmented is modified.

    Args:
        m: Primary matrix (any matrix-like)
        augmented: Optional matrix-like with the same number of rows,
            reduced alongside m
        pivoting: 'first' or 'max'; the engine option if None
        zero_tol: Magnitude at or below which an entry is not a usable
            pivot; the engine option if None

    Returns:
        Result[EliminationParams] with method='gauss_jordan'

    Raises:
        ValidationError: If an operand is not matrix-like or an option is invalid
        DimensionError: If augmented has a different number of rows
    """
    _check_operand(m, "m")
    options = get_options()
    if pivoting is None:
        pivoting = options.pivoting
    check_pivoting(pivoting)
    if zero_tol is None:
        zero_tol = options.zero_tol
    check_zero_tol(zero_tol)

    scalar: ScalarType = field_type(m.scalar)
    if augmented is not None:
        _check_operand(augmented, "augmented")
        if augmented.rows != m.rows:
            raise DimensionError(
                f"augmented: expected {m.rows} rows to match m, got {augmented.rows}"
            )
        scalar = field_type(common_type(m.scalar, augmented.scalar))

    with timed() as timer:
        with timer.section('clone'):
            work = Matrix.from_matrix(m, dtype=scalar)
            aug = Matrix.from_matrix(augmented, dtype=scalar) if augmented is not None else None

        rows, cols = work.shape
        check_small = pivoting == 'first' and zero_tol == 0 and scalar.is_inexact
        small_threshold = 0.0
        if check_small:
            small_threshold = _scale_of(work) * max(rows, cols) * scalar.machine_epsilon()

        multiplier = scalar.one
        swaps = 0
        pivots: list[tuple[int, int]] = []
        small_pivots: list[tuple[int, int]] = []

        with timer.section('reduce'):
            lead = 0
            for r in range(rows):
                if lead >= cols:
                    break

                pivot_row = None
                while lead < cols:
                    pivot_row = _find_pivot(work, r, lead, pivoting, zero_tol)
                    if pivot_row is not None:
                        break
                    lead += 1
                if pivot_row is None:
                    break

                if pivot_row != r:
                    row_swap(work, pivot_row, r)
                    if aug is not None:
                        row_swap(aug, pivot_row, r)
                    multiplier = -multiplier
                    swaps += 1

                pivot = work.at(r, lead)
                if check_small and abs(pivot) <= small_threshold:
                    small_pivots.append((r, lead))
                multiplier = multiplier * pivot

                reciprocal = scalar.one / pivot
                row_scale(work, r, reciprocal)
                if aug is not None:
                    row_scale(aug, r, reciprocal)
                work.set(r, lead, scalar.one)

                for i in range(rows):
                    if i == r:
                        continue
                    value = work.at(i, lead)
                    if is_zero(value):
                        continue
                    if aug is not None:
                        row_add(aug, i, r, -value)
                    row_add(work, i, r, -value)

                pivots.append((r, lead))
                lead += 1

    messages: list[str] = []
    if small_pivots:
        message = (
            f"Near-zero pivot(s) at {small_pivots} selected by first-non-zero "
            f"pivoting (threshold {small_threshold:.3g}); the result may be "
            f"dominated by round-off. Consider pivoting='max' or a zero_tol."
        )
        warnings.warn(message, RuntimeWarning, stacklevel=_find_stack_level())
        messages.append(message)

    params = EliminationParams(
        reduced=work,
        augmented=aug,
        pivots=tuple(pivots),
        swaps=swaps,
        multiplier=multiplier,
        rank=len(pivots),
    )
    return Result(
        params=params,
        info={
            'pivoting': pivoting,
            'zero_tol': zero_tol,
            'scalar': scalar.name,
            'shape': (rows, cols),
            'rank': len(pivots),
            'swaps': swaps,
            'augmented': aug is not None,
        },
        timing=timer.result(),
        method='gauss_jordan',
        warnings=tuple(messages),
    )


def rref(m: Any, augmented: Any = None) -> Matrix:
    """
    Row-reduced echelon form.

    Args:
        m: Matrix to reduce
        augmented: Optional operand carried through the same row operations

    Returns:
        The reduced m, or the reduced augmented operand when one is given
        (rref(A, b) solves A x = b for invertible A; rref(A, eye) inverts A)

    Raises:
        DimensionError: If augmented has a different number of rows
    """
    params = eliminate(m, augmented).params
    if augmented is not None:
        return params.augmented
    return params.reduced


def determinant(m: Any) -> Any:
    """
    Determinant by elimination.

    Returns:
        A scalar of the elimination type; exactly zero if a pivot is missing

    Raises:
        DimensionError: If m is not square
    """
    _check_operand(m, "m")
    n = check_square(m.shape, "m")
    params = eliminate(m).params
    scalar = params.reduced.scalar
    if params.rank < n:
        return scalar.zero
    return params.multiplier * params.reduced.diag().prod()


def inverse(m: Any) -> Matrix:
    """
    Inverse by reducing [m | I].

    Raises:
        DimensionError: If m is not square
        SingularMatrixError: If elimination finds fewer than n pivots
    """
    _check_operand(m, "m")
    n = check_square(m.shape, "m")
    identity = Matrix(n, n, fill.eye, dtype=field_type(m.scalar))
    params = eliminate(m, identity).params
    if params.rank < n:
        raise SingularMatrixError(
            f"Matrix is singular: rank={params.rank}, expected={n}. "
            f"Elimination found no pivot in at least one column.",
            matrix_name=f"{type(m).__name__} {m.rows}x{m.cols}",
            rank=params.rank,
            expected_rank=n,
        )
    return params.augmented
