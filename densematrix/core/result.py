"""
Generic result container for densematrix computations.

The Result class is the envelope an elimination run is reported in. It
keeps the payload (reduced matrices, pivots, determinant multiplier)
separate from run metadata so diagnostics and timing can be inspected
without the kernels growing extra return values.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (pivoting strategy, rank, swaps)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True); the matrices inside are fresh copies
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The kernel-specific payload type

    Attributes:
        params: Kernel-specific payload
        info: Structured metadata (pivoting, rank, swaps, ...)
        timing: Execution timing breakdown, or None if not measured
        method: Identifier of the algorithm that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=EliminationParams(...),
        ...     info={'pivoting': 'first', 'rank': 3},
        ...     timing={'total_seconds': 0.001, 'forward': 0.0008},
        ...     method='gauss_jordan'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    method: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
