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
def tall_matrix(rng):
    """Well-conditioned 8 x 5 matrix."""
    return rng.standard_normal((8, 5))


@pytest.fixture
def square_matrix(rng):
    """Well-conditioned 4 x 4 matrix (diagonally shifted to keep it far from singular)."""
    return rng.standard_normal((4, 4)) + 4.0 * np.eye(4)


@pytest.fixture
def scenario_matrix():
    """3 x 2 matrix with columns [1, 2, 3] and [4, 5, 6]."""
    return np.array([[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]])
