"""
Input validation utilities for pymatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pymatrix.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    Objects exposing ``cpu()`` (torch tensors) are moved to host memory first.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with dtype float64

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    if hasattr(array, 'cpu') and hasattr(array, 'numpy'):
        array = array.cpu().numpy()

    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number) or np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected real numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_square(matrix: Any, name: str) -> None:
    """
    Verify a matrix (or 2D array) is square.

    Works on anything with a ``shape`` attribute, so both raw arrays and
    Matrix instances can be checked before any arithmetic is attempted.

    Args:
        matrix: Object with a 2-tuple ``shape``
        name: Parameter name for error messages

    Raises:
        DimensionError: If the matrix is not square
    """
    rows, cols = matrix.shape
    if rows != cols:
        raise DimensionError(
            f"{name}: expected a square matrix, got shape ({rows}, {cols})"
        )


def check_same_shape(a: Any, b: Any, operation: str) -> None:
    """
    Verify two operands have identical shape.

    Raises:
        DimensionError: If shapes differ
    """
    if tuple(a.shape) != tuple(b.shape):
        raise DimensionError(
            f"{operation}: shape mismatch {tuple(a.shape)} vs {tuple(b.shape)}"
        )


def check_matmul_shapes(a: Any, b: Any) -> None:
    """
    Verify inner dimensions agree for a @ b.

    Raises:
        DimensionError: If a.n_cols != b.n_rows
    """
    if a.shape[1] != b.shape[0]:
        raise DimensionError(
            f"matmul: inner dimensions differ, {tuple(a.shape)} @ {tuple(b.shape)}"
        )
