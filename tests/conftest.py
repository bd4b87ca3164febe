"""
pytest configuration and shared fixtures.
"""

from dataclasses import asdict

import pytest
import numpy as np

from densematrix import Matrix, set_options


@pytest.fixture(autouse=True)
def restore_options():
    """Undo any engine option change a test makes."""
    previous = set_options()
    yield
    set_options(**asdict(previous))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def two_by_two():
    """[[2, 1], [1, 1]]: det 1, inverse [[1, -1], [-1, 2]]."""
    return Matrix.from_rows([[2, 1], [1, 1]])


@pytest.fixture
def two_by_three():
    """[[1, 2, 3], [4, 5, 6]]."""
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6]])


@pytest.fixture
def invertible(rng):
    """Well-conditioned 5x5 matrix (diagonally dominant)."""
    n = 5
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    return Matrix.from_array(A)


@pytest.fixture
def singular():
    """Rank-2 3x3 matrix (third row = first + second)."""
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6], [5, 7, 9]])
