"""
Tolerance tiers for numerical comparison.

Defines precision expectations for the scalar types the engine stores:
- EXACT: integer and rational storage, equality must hold exactly
- FP64: double precision (float64, complex128)
- FP32: single precision (float32, complex64)

Used by allclose(), the test suite, and the near-zero pivot diagnostic.
"""

from dataclasses import dataclass
from typing import Any

from densematrix.core.scalar import scalar_type


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Integer or rational storage, exact equality',
)

FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='Double precision after elimination round-off',
)

# Single precision loses roughly half the digits of FP64
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision after elimination round-off',
)


def select_tolerance(scalar: Any = None) -> ToleranceTier:
    """Select the tolerance tier for a scalar type specification."""
    s = scalar_type(scalar)
    if not s.is_inexact:
        return EXACT
    if s.dtype.itemsize <= 4 or s.dtype.name == 'complex64':
        return FP32
    return FP64
