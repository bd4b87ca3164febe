"""
Fill specifiers for populating new matrices.

Specifiers are small frozen values rather than bare integer codes so the
parameterised kinds carry their parameters with them:

    zeros, ones, eye          ready-made specifiers
    constant(value)           every element equal to value
    uniform(low, high, seed)  independent uniform draws in [low, high)

The names 'zeros', 'ones', 'eye' and 'rand' (uniform on [0, 1)) are also
accepted wherever a specifier is expected. Anything else, including a
parameterised kind named without its parameters, is an UnknownFillTypeError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import UnknownFillTypeError, ValidationError
from densematrix.core.scalar import ScalarType


FILL_KINDS: frozenset[str] = frozenset({'zeros', 'ones', 'eye', 'constant', 'uniform'})


@dataclass(frozen=True)
class FillSpec:
    """
    How to populate a freshly allocated buffer.

    Attributes:
        kind: One of FILL_KINDS
        value: Element value for kind='constant'
        low, high: Bounds for kind='uniform'
        seed: Seed for kind='uniform'; None draws fresh OS entropy
    """
    kind: str
    value: Any = None
    low: Any = 0.0
    high: Any = 1.0
    seed: int | None = None


zeros = FillSpec('zeros')
ones = FillSpec('ones')
eye = FillSpec('eye')


def constant(value: Any) -> FillSpec:
    """Specifier filling every element with value."""
    return FillSpec('constant', value=value)


def uniform(low: Any = 0.0, high: Any = 1.0, *, seed: int | None = None) -> FillSpec:
    """
    Specifier filling with uniform random values in [low, high).

    Raises:
        ValidationError: If high < low
    """
    if high < low:
        raise ValidationError(f"uniform: high ({high}) must be >= low ({low})")
    return FillSpec('uniform', low=low, high=high, seed=seed)


_BY_NAME: dict[str, FillSpec] = {
    'zeros': zeros,
    'ones': ones,
    'eye': eye,
    'rand': uniform(),
}


def resolve_fill(fill: Any) -> FillSpec:
    """
    Normalize a fill argument to a FillSpec.

    Raises:
        UnknownFillTypeError: If fill is not a known specifier
    """
    if isinstance(fill, FillSpec):
        if fill.kind not in FILL_KINDS:
            raise UnknownFillTypeError(f"Unknown fill kind {fill.kind!r}", fill=fill)
        if fill.kind == 'constant' and fill.value is None:
            raise UnknownFillTypeError(
                "Fill kind 'constant' needs a value; use constant(value)", fill=fill
            )
        return fill
    if isinstance(fill, str) and fill in _BY_NAME:
        return _BY_NAME[fill]
    raise UnknownFillTypeError(
        f"Unknown fill type {fill!r}; expected one of {sorted(_BY_NAME)} "
        f"or a FillSpec from constant()/uniform()",
        fill=fill,
    )


def fill_buffer(shape: tuple[int, int], fill: Any, scalar: ScalarType) -> NDArray[Any]:
    """
    Build a populated buffer of the given shape and scalar type.

    'eye' fills the largest leading square block with the identity and
    leaves the remainder zero, so it is defined for rectangular shapes.
    """
    spec = resolve_fill(fill)

    if spec.kind == 'zeros':
        return scalar.full(shape, 0)
    if spec.kind == 'ones':
        return scalar.full(shape, 1)
    if spec.kind == 'constant':
        return scalar.full(shape, spec.value)
    if spec.kind == 'eye':
        buffer = scalar.full(shape, 0)
        one = scalar.one
        for i in range(min(shape)):
            buffer[i, i] = one
        return buffer

    # uniform
    rng = np.random.default_rng(spec.seed)
    draws = rng.uniform(float(spec.low), float(spec.high), size=shape)
    return scalar.cast_array(draws)
