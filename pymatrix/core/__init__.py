"""
Core infrastructure for pymatrix.

This module provides shared abstractions and utilities used by the
matrix base layer, the backends and the algorithms built on them.

Key components:
    protocols: Matrix, MatrixFactory, SolveProvider protocols
    capabilities: Backend kind tags
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Hardware detection, timing, tolerances
"""

from pymatrix.core.protocols import Matrix, MatrixFactory, SolveProvider
from pymatrix.core.result import Result
from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    BackendMismatchError,
    BackendUnavailableError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "Matrix",
    "MatrixFactory",
    "SolveProvider",
    # Result
    "Result",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "BackendMismatchError",
    "BackendUnavailableError",
    "NumericalError",
    "SingularMatrixError",
]
