"""
Exception hierarchy for pymatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMatrixError(Exception):
    """Base exception for all pymatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when a matrix is not square where a square matrix is required,
    or when two operands have incompatible shapes.
    """
    pass


class BackendMismatchError(PyMatrixError):
    """
    Operand cannot be reconciled with the driving matrix's backend.

    Raised when an operation combines matrices whose raw representations
    belong to genuinely different backends. No implicit conversion is
    attempted, so this is never retried.

    Attributes:
        expected: Name of the raw representation the backend requires
        actual: Name of the raw representation the operand carries
    """

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        actual: str | None = None
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class BackendUnavailableError(PyMatrixError):
    """
    Requested backend cannot be used on this machine.

    Raised when the backend's library is not installed or the requested
    device does not exist or cannot do float64 arithmetic.
    """
    pass


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a linear solve cannot produce a finite result.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
