"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def spd_matrix(rng):
    """Well-conditioned 6x6 symmetric positive definite matrix."""
    n = 6
    M = rng.standard_normal((n, n))
    A = M @ M.T + n * np.eye(n)
    return 0.5 * (A + A.T)


@pytest.fixture
def symmetric_indefinite(rng):
    """Symmetric 5x5 matrix with eigenvalues of both signs and no zero pivot."""
    Q, _ = np.linalg.qr(rng.standard_normal((5, 5)))
    eigenvalues = np.array([4.0, 2.5, 1.0, -1.5, -3.0])
    A = (Q * eigenvalues) @ Q.T
    return 0.5 * (A + A.T)


@pytest.fixture
def tall_matrix(rng):
    """Full column rank 8x4 matrix."""
    return rng.standard_normal((8, 4))
