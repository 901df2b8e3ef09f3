"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix.backends import get_factory, get_default_backend, set_default_backend

try:
    import torch  # noqa: F401
    HAS_TORCH = True
except ImportError:
    HAS_TORCH = False

# Backends every shared test runs against
BACKENDS = ['numpy'] + (['torch'] if HAS_TORCH else [])


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=BACKENDS)
def factory(request):
    """Matrix factory for each available backend."""
    return get_factory(request.param)


@pytest.fixture
def numpy_factory():
    return get_factory('numpy')


@pytest.fixture(autouse=True)
def restore_default_backend():
    """Tests may change the process-wide default; put it back."""
    previous = get_default_backend()
    yield
    set_default_backend(previous)


@pytest.fixture
def random_square(rng):
    """Well-scaled 6x6 matrix, 1-norm around 5."""
    return rng.standard_normal((6, 6))
