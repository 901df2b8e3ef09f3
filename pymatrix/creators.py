"""
Matrix creation helpers.

Thin dispatchers onto the selected backend's factory. Each accepts
``backend=`` (see pymatrix.backends); without it the process-wide
default is used.

    zeros(rows, cols)            all zeros
    ones(rows, cols)             all ones
    eye(rows, cols=None)         identity (square when cols is None)
    rand(rows, cols, seed=None)  uniform [0, 1)
    randn(rows, cols, seed=None) standard normal
    arange(start, stop, step)    row vector, stop excluded
    create(data)                 copy of a scalar, 1D (row) or 2D array-like
"""

from __future__ import annotations

from typing import Any
from numpy.typing import ArrayLike

from pymatrix.backends import BackendChoice, get_factory
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.protocols import Matrix


def _check_shape(rows: int, cols: int) -> None:
    if rows < 0 or cols < 0:
        raise ValidationError(f"Matrix shape must be non-negative, got ({rows}, {cols})")


def zeros(rows: int, cols: int, *, backend: BackendChoice | None = None) -> Matrix:
    _check_shape(rows, cols)
    return get_factory(backend).zeros(rows, cols)


def ones(rows: int, cols: int, *, backend: BackendChoice | None = None) -> Matrix:
    _check_shape(rows, cols)
    return get_factory(backend).ones(rows, cols)


def eye(rows: int, cols: int | None = None, *, backend: BackendChoice | None = None) -> Matrix:
    cols = rows if cols is None else cols
    _check_shape(rows, cols)
    return get_factory(backend).eye(rows, cols)


def rand(
    rows: int,
    cols: int,
    *,
    seed: Any = None,
    backend: BackendChoice | None = None,
) -> Matrix:
    """Uniform [0, 1) entries. ``seed`` is an int or a backend generator."""
    _check_shape(rows, cols)
    return get_factory(backend).rand(rows, cols, seed=seed)


def randn(
    rows: int,
    cols: int,
    *,
    seed: Any = None,
    backend: BackendChoice | None = None,
) -> Matrix:
    """Standard normal entries. ``seed`` is an int or a backend generator."""
    _check_shape(rows, cols)
    return get_factory(backend).randn(rows, cols, seed=seed)


def arange(
    start: float,
    stop: float | None = None,
    step: float = 1.0,
    *,
    backend: BackendChoice | None = None,
) -> Matrix:
    """
    Evenly spaced row vector, following numpy.arange semantics.

    ``arange(n)`` is 0, 1, ..., n - 1.
    """
    if stop is None:
        start, stop = 0.0, start
    if step == 0:
        raise ValidationError("arange: step must be non-zero")
    return get_factory(backend).arange(start, stop, step)


def create(data: ArrayLike, *, backend: BackendChoice | None = None) -> Matrix:
    """
    Matrix holding a float64 copy of ``data``.

    Scalars become 1x1 matrices and 1D input becomes a single row.
    Tensors are accepted and copied through host memory.
    """
    return get_factory(backend).create(data)
