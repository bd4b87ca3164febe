"""
Linear algebra on dense matrices.

All functions follow these conventions:
    - Inputs are any matrix-like (owned matrix, vector or view)
    - Inputs are never modified; results are fresh owning matrices
    - Errors are raised immediately with clear messages

Submodules:
    rowops: Elementary row operations (in place, owning matrices only)
    elimination: Gauss-Jordan elimination, rref, determinant, inverse
    arithmetic: Sums, products, equality and dot products
"""

from densematrix.linalg.elimination import (
    EliminationParams,
    eliminate,
    rref,
    determinant,
    inverse,
)
from densematrix.linalg.arithmetic import (
    equal,
    allclose,
    negate,
    add,
    subtract,
    matmul,
    scale,
    dot,
)

__all__ = [
    # Elimination
    "EliminationParams",
    "eliminate",
    "rref",
    "determinant",
    "inverse",
    # Arithmetic
    "equal",
    "allclose",
    "negate",
    "add",
    "subtract",
    "matmul",
    "scale",
    "dot",
]
