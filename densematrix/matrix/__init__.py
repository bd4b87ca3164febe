"""
Matrix storage, views and vectors.

Key components:
    storage: Matrix, the owning dense matrix
    views: TransposeView, SubRangeView, RowView, ColView
    vector: RowVector, ColVector
    fill: Fill specifiers (zeros, ones, eye, constant, uniform)
    cache: Cached flags of the sticky compute cache
    creation: zeros, ones, eye, full, rand
"""

from densematrix.matrix import fill
from densematrix.matrix.base import MatrixBase
from densematrix.matrix.cache import Cached
from densematrix.matrix.creation import zeros, ones, eye, full, rand
from densematrix.matrix.fill import FillSpec
from densematrix.matrix.storage import Matrix
from densematrix.matrix.vector import RowVector, ColVector
from densematrix.matrix.views import (
    MatrixView,
    TransposeView,
    SubRangeView,
    RowView,
    ColView,
)

__all__ = [
    "fill",
    "FillSpec",
    "Cached",
    "zeros",
    "ones",
    "eye",
    "full",
    "rand",
    "MatrixBase",
    "Matrix",
    "RowVector",
    "ColVector",
    "MatrixView",
    "TransposeView",
    "SubRangeView",
    "RowView",
    "ColView",
]
