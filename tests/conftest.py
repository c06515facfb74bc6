"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


BACKENDS = ['lapack', 'reference']


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=BACKENDS)
def backend(request):
    """Every factorization backend."""
    return request.param


@pytest.fixture
def square_matrix(rng):
    """Well-conditioned 5x5 general matrix."""
    return rng.standard_normal((5, 5)) + 5.0 * np.eye(5)


@pytest.fixture
def spd_matrix(rng):
    """Symmetric positive-definite 4x4 matrix."""
    B = rng.standard_normal((4, 4))
    return B @ B.T + 4.0 * np.eye(4)


@pytest.fixture
def tall_matrix(rng):
    """7x3 matrix of full column rank."""
    return rng.standard_normal((7, 3))


@pytest.fixture
def wide_matrix(rng):
    """3x6 matrix of full row rank."""
    return rng.standard_normal((3, 6))


@pytest.fixture
def singular_matrix():
    """3x3 matrix with rank 2 (third row = first + second)."""
    return np.array([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [5.0, 7.0, 9.0],
    ])
