"""
Scalar types for densematrix.

A matrix is generic over its scalar type. The engine never looks inside a
scalar: it needs + - * /, ==, unary negation, and a way to build a scalar
from a plain numeric literal (0, 1, a fill value). ScalarType bundles the
NumPy dtype used for storage with that literal factory.

Supported out of the box:
    float64 (default), float32, complex128, complex64, integer dtypes,
    and 'fraction' (exact rationals, fractions.Fraction in object storage).

Mixing two scalar types follows common_type(), an explicit promotion table
rather than whatever the operands happen to produce:
    - two NumPy dtypes promote with np.result_type
    - fraction with an integer dtype stays fraction
    - fraction with a float/complex dtype promotes to that inexact type
      (at least float64, which is what Fraction arithmetic yields)
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import ValidationError


def _unwrap(value: Any) -> Any:
    """Turn NumPy scalars into the equivalent Python scalar."""
    if isinstance(value, np.generic):
        return value.item()
    return value


@dataclass(frozen=True)
class ScalarType:
    """
    Storage dtype plus literal factory for one scalar type.

    Attributes:
        name: Registry name ('float64', 'fraction', ...)
        dtype: NumPy dtype of the backing buffer
        factory: Callable building a scalar from a numeric literal
    """
    name: str
    dtype: np.dtype
    factory: Callable[[Any], Any] = field(compare=False, repr=False)

    def __call__(self, value: Any) -> Any:
        """Construct a scalar of this type from a numeric literal."""
        value = _unwrap(value)
        if not isinstance(value, numbers.Number):
            raise ValidationError(f"cannot convert {value!r} to {self.name}: not a number")
        if isinstance(value, complex) and self.dtype.kind not in 'c':
            if value.imag != 0:
                raise ValidationError(
                    f"cannot convert complex value {value!r} to {self.name}"
                )
            value = value.real
        if (
            self.kind in 'iu'
            and isinstance(value, numbers.Real)
            and not isinstance(value, numbers.Integral)
            and not float(value).is_integer()
        ):
            raise ValidationError(f"cannot convert {value!r} to {self.name} without truncation")
        try:
            return self.factory(value)
        except (TypeError, ValueError, ArithmeticError) as e:
            raise ValidationError(f"cannot convert {value!r} to {self.name}: {e}") from e

    @property
    def kind(self) -> str:
        """NumPy dtype kind character ('f', 'c', 'i', 'u', 'O')."""
        return self.dtype.kind

    @property
    def is_object(self) -> bool:
        return self.dtype.kind == 'O'

    @property
    def is_inexact(self) -> bool:
        """Floating point or complex storage."""
        return self.dtype.kind in 'fc'

    @property
    def zero(self) -> Any:
        return self(0)

    @property
    def one(self) -> Any:
        return self(1)

    def machine_epsilon(self) -> float:
        """Machine epsilon of the storage dtype; 0.0 for exact types."""
        if not self.is_inexact:
            return 0.0
        return float(np.finfo(self.dtype).eps)

    def cast_array(self, array: NDArray[Any]) -> NDArray[Any]:
        """
        Element-wise cast of an array into this scalar type.

        Always returns a fresh C-contiguous array.

        Raises:
            ValidationError: If an element cannot be represented
        """
        array = np.asarray(array)
        if array.dtype.kind == 'c' and self.kind not in 'cO':
            if np.any(array.imag != 0):
                raise ValidationError(
                    f"cannot cast complex data with non-zero imaginary part to {self.name}"
                )
            array = array.real

        if self.is_object or array.dtype == object:
            out = np.empty(array.shape, dtype=self.dtype)
            for idx, value in np.ndenumerate(array):
                out[idx] = self(value)
            return out

        if self.kind in 'iu' and array.dtype.kind == 'f':
            if not np.all(np.isfinite(array)) or np.any(array != np.trunc(array)):
                raise ValidationError(
                    f"cannot cast non-integral float data to {self.name} without truncation"
                )

        return np.ascontiguousarray(array.astype(self.dtype, copy=True))

    def full(self, shape: tuple[int, int], value: Any) -> NDArray[Any]:
        """Buffer of the given shape with every element equal to value."""
        scalar = self(value)
        if self.is_object:
            out = np.empty(shape, dtype=object)
            out.fill(scalar)
            return out
        return np.full(shape, scalar, dtype=self.dtype)


FLOAT64 = ScalarType('float64', np.dtype(np.float64), np.float64)
FLOAT32 = ScalarType('float32', np.dtype(np.float32), np.float32)
COMPLEX128 = ScalarType('complex128', np.dtype(np.complex128), np.complex128)
COMPLEX64 = ScalarType('complex64', np.dtype(np.complex64), np.complex64)
INT64 = ScalarType('int64', np.dtype(np.int64), np.int64)
FRACTION = ScalarType('fraction', np.dtype(object), Fraction)

DEFAULT_SCALAR = FLOAT64

_BY_NAME: dict[str, ScalarType] = {
    'float64': FLOAT64,
    'float': FLOAT64,
    'double': FLOAT64,
    'float32': FLOAT32,
    'complex128': COMPLEX128,
    'complex': COMPLEX128,
    'complex64': COMPLEX64,
    'int64': INT64,
    'int': INT64,
    'fraction': FRACTION,
    'rational': FRACTION,
}

_BY_PYTHON_TYPE: dict[type, ScalarType] = {
    float: FLOAT64,
    complex: COMPLEX128,
    int: INT64,
    Fraction: FRACTION,
}

_BY_DTYPE: dict[np.dtype, ScalarType] = {
    s.dtype: s for s in (FLOAT64, FLOAT32, COMPLEX128, COMPLEX64, INT64)
}


def scalar_type(spec: Any = None) -> ScalarType:
    """
    Resolve a scalar type specification.

    Accepts a ScalarType, a registry name ('float64', 'fraction', ...),
    a Python type (float, int, complex, Fraction), or anything np.dtype
    understands as a numeric dtype. None selects DEFAULT_SCALAR.

    Raises:
        ValidationError: If spec does not name a numeric scalar type
    """
    if spec is None:
        return DEFAULT_SCALAR
    if isinstance(spec, ScalarType):
        return spec
    if isinstance(spec, str) and spec.lower() in _BY_NAME:
        return _BY_NAME[spec.lower()]
    if isinstance(spec, type) and spec in _BY_PYTHON_TYPE:
        return _BY_PYTHON_TYPE[spec]

    try:
        dtype = np.dtype(spec)
    except TypeError as e:
        raise ValidationError(f"dtype: unknown scalar type {spec!r}") from e

    if dtype == object:
        raise ValidationError(
            "dtype: object storage needs a named scalar type such as 'fraction'"
        )
    if not np.issubdtype(dtype, np.number):
        raise ValidationError(
            f"dtype: non-numeric dtype {dtype}, expected numeric scalar type"
        )
    return _BY_DTYPE.get(dtype) or ScalarType(dtype.name, dtype, dtype.type)


def infer_scalar_type(array: NDArray[Any]) -> ScalarType:
    """
    Pick the scalar type for an array built from a user literal.

    Object arrays (what NumPy produces for Fraction literals) resolve to
    'fraction' when every element is rational, to float64/complex128 when
    every element is a plain number, and are rejected otherwise.

    Raises:
        ValidationError: If the array holds non-numeric data
    """
    if array.dtype != object:
        return scalar_type(array.dtype)

    values = [_unwrap(v) for v in array.ravel()]
    if all(isinstance(v, numbers.Number) and not isinstance(v, bool) for v in values):
        if all(isinstance(v, numbers.Rational) for v in values):
            return FRACTION
        if all(isinstance(v, numbers.Real) for v in values):
            return FLOAT64
        return COMPLEX128

    raise ValidationError(
        "literal converted to object dtype, indicating mixed types or non-numeric data"
    )


def common_type(a: Any, b: Any) -> ScalarType:
    """Result scalar type of combining scalar types a and b."""
    a, b = scalar_type(a), scalar_type(b)
    if a == b:
        return a

    if a.is_object or b.is_object:
        other = b if a.is_object else a
        if other.is_object or other.kind in 'iu':
            return FRACTION
        return scalar_type(np.result_type(other.dtype, np.float64))

    return scalar_type(np.result_type(a.dtype, b.dtype))


def field_type(s: Any) -> ScalarType:
    """
    Scalar type closed under division.

    Integer types are promoted to float64; everything else is already a
    field for elimination purposes.
    """
    s = scalar_type(s)
    if s.kind in 'iu':
        return FLOAT64
    return s


def is_zero(value: Any, tol: float = 0.0) -> bool:
    """Exact zero test, or abs(value) <= tol when tol > 0."""
    if tol > 0:
        return bool(abs(value) <= tol)
    return bool(value == 0)
