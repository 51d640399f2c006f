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
def line_data():
    """Three points on y = x."""
    x = np.array([0.0, 1.0, 2.0])
    y = np.array([0.0, 1.0, 2.0])
    return x, y


@pytest.fixture
def quadratic_data():
    """Four points on y = x² + 1."""
    x = np.array([0.0, 1.0, 2.0, 3.0])
    y = np.array([1.0, 2.0, 5.0, 10.0])
    return x, y


@pytest.fixture
def noisy_cubic_data(rng):
    """Cubic with noise on [-1, 1], well conditioned."""
    n = 60
    x = np.sort(rng.uniform(-1.0, 1.0, n))
    beta_true = np.array([0.5, -1.0, 2.0, 0.75])
    y = beta_true[0] + beta_true[1] * x + beta_true[2] * x**2 + beta_true[3] * x**3
    y = y + rng.standard_normal(n) * 0.05
    return x, y, beta_true
