"""
Engine-wide options.

A single immutable EngineOptions instance holds the defaults consulted by
the storage core and the elimination kernels. Options are replaced, never
mutated: set_options() swaps in a new instance and option_context()
restores the previous one on exit.

Options:
    sticky_compute: Cache diagonal/determinant/inverse on the source matrix
    pivoting: 'first' (first non-zero entry scanning down) or 'max'
              (largest magnitude entry scanning down)
    zero_tol: Entries with abs(x) <= zero_tol are treated as zero during
              pivot search; 0.0 means exact comparison

Not thread-safe: like the matrices themselves, options are process-global
state that callers must not change concurrently.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Any, Iterator, Literal

from densematrix.core.exceptions import ValidationError


PivotStrategy = Literal['first', 'max']

PIVOT_STRATEGIES: frozenset[str] = frozenset({'first', 'max'})


@dataclass(frozen=True)
class EngineOptions:
    """Immutable option set."""
    sticky_compute: bool = True
    pivoting: PivotStrategy = 'first'
    zero_tol: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.sticky_compute, bool):
            raise ValidationError(
                f"sticky_compute: expected bool, got {type(self.sticky_compute).__name__}"
            )
        check_pivoting(self.pivoting)
        check_zero_tol(self.zero_tol)


def check_pivoting(pivoting: str) -> None:
    """
    Verify a pivot strategy name.

    Raises:
        ValidationError: If pivoting is not 'first' or 'max'
    """
    if pivoting not in PIVOT_STRATEGIES:
        raise ValidationError(
            f"pivoting: expected one of {sorted(PIVOT_STRATEGIES)}, got {pivoting!r}"
        )


def check_zero_tol(zero_tol: float) -> None:
    """
    Verify a zero tolerance.

    Raises:
        ValidationError: If zero_tol is negative or not a real number
    """
    if isinstance(zero_tol, bool) or not isinstance(zero_tol, (int, float)):
        raise ValidationError(
            f"zero_tol: expected a real number, got {type(zero_tol).__name__}"
        )
    if zero_tol < 0:
        raise ValidationError(f"zero_tol: must be non-negative, got {zero_tol}")


_OPTIONS = EngineOptions()

_OPTION_NAMES = frozenset(f.name for f in fields(EngineOptions))


def get_options() -> EngineOptions:
    """Current engine options."""
    return _OPTIONS


def set_options(**changes: Any) -> EngineOptions:
    """
    Replace engine options.

    Args:
        **changes: Option names and their new values

    Returns:
        The options that were in effect before the change

    Raises:
        ValidationError: On unknown option names or invalid values
    """
    global _OPTIONS
    unknown = set(changes) - _OPTION_NAMES
    if unknown:
        raise ValidationError(
            f"Unknown option(s) {sorted(unknown)}; valid options are {sorted(_OPTION_NAMES)}"
        )
    previous = _OPTIONS
    _OPTIONS = replace(previous, **changes)
    return previous


@contextmanager
def option_context(**changes: Any) -> Iterator[EngineOptions]:
    """
    Temporarily change engine options.

    Usage:
        with option_context(pivoting='max', zero_tol=1e-12):
            A.inv()

    Yields:
        The options in effect inside the block
    """
    global _OPTIONS
    previous = set_options(**changes)
    try:
        yield _OPTIONS
    finally:
        _OPTIONS = previous
