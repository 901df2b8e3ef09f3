"""
pymatrix: backend-agnostic float64 matrices for Python.

One matrix API over interchangeable linear-algebra engines (NumPy on the
CPU, PyTorch on CPU or CUDA), with operand reconciliation between
backends and a backend-agnostic matrix exponential.

Submodules:
    matrix: DoubleMatrixBase, the shared base for backends
    backends: NumPy and PyTorch backends, backend selection
    creators: zeros, ones, eye, rand, randn, arange, create
    matfuncs: Matrix exponential (scaling and squaring, Padé)
"""

__version__ = "0.1.0"

from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    BackendMismatchError,
    BackendUnavailableError,
    NumericalError,
    SingularMatrixError,
)
from pymatrix.matrix import DoubleMatrixBase
from pymatrix.backends import (
    get_factory,
    set_default_backend,
    get_default_backend,
    use_backend,
    list_available_backends,
)
from pymatrix.creators import zeros, ones, eye, rand, randn, arange, create
from pymatrix.matfuncs import expm

__all__ = [
    "__version__",
    # Matrices
    "DoubleMatrixBase",
    # Creators
    "zeros",
    "ones",
    "eye",
    "rand",
    "randn",
    "arange",
    "create",
    # Algorithms
    "expm",
    # Backend selection
    "get_factory",
    "set_default_backend",
    "get_default_backend",
    "use_backend",
    "list_available_backends",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "BackendMismatchError",
    "BackendUnavailableError",
    "NumericalError",
    "SingularMatrixError",
]
