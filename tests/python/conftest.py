"""
Pytest configuration and shared fixtures for matrices tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from matrices import Matrix
from matrices._config import get_config


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def grid_a():
    """2x2 matrix, columns first.

    Columns:
    [1, 2]
    [3, 4]
    """
    return Matrix.from_grid([[1.0, 2.0], [3.0, 4.0]])


@pytest.fixture
def grid_b():
    """2x2 matrix, columns first.

    Columns:
    [5, 6]
    [7, 8]
    """
    return Matrix.from_grid([[5.0, 6.0], [7.0, 8.0]])


@pytest.fixture
def grid_2x3():
    """2 columns of 3 rows."""
    return Matrix.from_grid([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
    ])


@pytest.fixture
def seeded_rng():
    """Deterministic numpy generator."""
    return np.random.default_rng(42)


@pytest.fixture
def random_matrix(seeded_rng):
    """Factory for randomized matrices of a given shape."""
    def make(columns, rows):
        mat = Matrix(columns, rows)
        mat.randomize(seeded_rng)
        return mat
    return make


@pytest.fixture
def clean_config(monkeypatch):
    """Reset the default random source before and after a test."""
    monkeypatch.delenv("MATRICES_SEED", raising=False)
    config = get_config()
    config.reset()
    yield config
    config.reset()


# =============================================================================
# Helper Functions
# =============================================================================

def assert_matrix_equal(mat, expected, rtol=1e-6, atol=1e-6):
    """Assert a Matrix matches a columns-first grid."""
    expected = np.asarray(expected, dtype=np.float32)
    assert mat.shape == expected.shape
    np.testing.assert_allclose(mat.to_numpy(), expected, rtol=rtol, atol=atol)


def reference_cross(a, b):
    """numpy reference for cross(a, b) in (columns, rows) layout.

    result[j, i] = sum_k a[k, i] * b[j, k], i.e. b @ a on the stored arrays.
    """
    return b.to_numpy().astype(np.float64) @ a.to_numpy().astype(np.float64)
