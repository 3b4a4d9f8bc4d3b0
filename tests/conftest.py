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
def well_conditioned(rng):
    """Diagonally dominant 6x6 system with known solution."""
    n = 6
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    x_true = rng.standard_normal(n)
    b = A @ x_true
    return A, b, x_true


@pytest.fixture
def needs_pivoting():
    """3x3 system whose first pivot must come from the last row."""
    A = np.array([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [7.0, 8.0, 10.0],
    ])
    b = np.array([6.0, 15.0, 25.0])  # x = [1, 1, 1]
    return A, b


@pytest.fixture
def permute_rows():
    """Replays a row-swap history on a copy of A."""
    def _permute(A, permutation):
        P_A = np.array(A, dtype=np.float64, copy=True)
        for j, p in enumerate(permutation):
            P_A[[j, p]] = P_A[[p, j]]
        return P_A
    return _permute
