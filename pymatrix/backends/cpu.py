"""
NumPy reference backend.

Float64 matrices stored as C-ordered numpy arrays, arithmetic through
NumPy/LAPACK. This is the default backend and the reference every other
backend is validated against.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import linalg as sp_linalg

from pymatrix.core.capabilities import BACKEND_NUMPY
from pymatrix.core.exceptions import (
    BackendMismatchError,
    DimensionError,
    SingularMatrixError,
)
from pymatrix.core.validation import (
    check_2d,
    check_array,
    check_matmul_shapes,
    check_same_shape,
)
from pymatrix.matrix.base import DoubleMatrixBase, _is_matrix


def _as_matrix_array(data: NDArray[np.float64], name: str) -> NDArray[np.float64]:
    """Reshape 0D/1D input to a 2D (1 x n) row, reject anything deeper."""
    if data.ndim == 0:
        return data.reshape(1, 1)
    if data.ndim == 1:
        return data.reshape(1, -1)
    if data.ndim != 2:
        raise DimensionError(
            f"{name}: expected at most 2 dimensions, got {data.ndim}D with shape {data.shape}"
        )
    return data


@dataclass(frozen=True)
class NumPyMatrixFactory:
    """Stateless factory for NumPyMatrix instances."""

    @property
    def name(self) -> str:
        return 'numpy_cpu'

    @property
    def backend_kind(self) -> str:
        return BACKEND_NUMPY

    def wrap(self, raw: NDArray[np.float64]) -> NumPyMatrix:
        """
        Adopt an existing float64 2D array without copying.

        Raises:
            BackendMismatchError: If raw is not a float64 ndarray
            DimensionError: If raw is not 2D
        """
        if not isinstance(raw, np.ndarray) or raw.dtype != np.float64:
            raise BackendMismatchError(
                f"NumPy backend adopts float64 ndarrays only, got "
                f"{type(raw).__name__} of dtype {getattr(raw, 'dtype', None)}",
                expected='ndarray[float64]',
                actual=f"{type(raw).__name__}[{getattr(raw, 'dtype', None)}]",
            )
        check_2d(raw, 'raw')
        return NumPyMatrix(raw, self)

    def create(self, data: ArrayLike) -> NumPyMatrix:
        """Float64 copy of a scalar, 1D (as a row) or 2D array-like."""
        arr = _as_matrix_array(check_array(data, 'data'), 'data')
        return NumPyMatrix(np.array(arr, dtype=np.float64, order='C'), self)

    def zeros(self, rows: int, cols: int) -> NumPyMatrix:
        return NumPyMatrix(np.zeros((rows, cols), dtype=np.float64), self)

    def ones(self, rows: int, cols: int) -> NumPyMatrix:
        return NumPyMatrix(np.ones((rows, cols), dtype=np.float64), self)

    def eye(self, rows: int, cols: int | None = None) -> NumPyMatrix:
        return NumPyMatrix(np.eye(rows, cols, dtype=np.float64), self)

    def rand(self, rows: int, cols: int, seed: Any = None) -> NumPyMatrix:
        """Uniform [0, 1) entries."""
        rng = np.random.default_rng(seed)
        return NumPyMatrix(rng.random((rows, cols)), self)

    def randn(self, rows: int, cols: int, seed: Any = None) -> NumPyMatrix:
        """Standard normal entries."""
        rng = np.random.default_rng(seed)
        return NumPyMatrix(rng.standard_normal((rows, cols)), self)

    def arange(self, start: float, stop: float, step: float = 1.0) -> NumPyMatrix:
        """Row vector start, start + step, ... excluding stop."""
        values = np.arange(start, stop, step, dtype=np.float64)
        return NumPyMatrix(values.reshape(1, -1), self)


NUMPY_FACTORY = NumPyMatrixFactory()


class NumPyMatrix(DoubleMatrixBase):
    """Float64 matrix backed by a 2D numpy array."""

    def __init__(
        self,
        data: NDArray[np.float64],
        factory: NumPyMatrixFactory = NUMPY_FACTORY,
    ):
        self._data = data
        self._factory = factory

    def _coerce(self, other: Any) -> NumPyMatrix:
        return self._cast_or_bail(other, NumPyMatrix, np.ndarray, self._factory.wrap)

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    @property
    def factory(self) -> NumPyMatrixFactory:
        return self._factory

    @property
    def base_matrix(self) -> NDArray[np.float64]:
        return self._data

    @property
    def backend_kind(self) -> str:
        return BACKEND_NUMPY

    def __getitem__(self, key: Any) -> float:
        i, j = self._resolve_key(key)
        return float(self._data[i, j])

    def __setitem__(self, key: Any, value: float) -> None:
        i, j = self._resolve_key(key)
        self._data[i, j] = value

    def __add__(self, other: Any) -> NumPyMatrix:
        if not _is_matrix(other):
            return NotImplemented
        other = self._coerce(other)
        check_same_shape(self, other, 'add')
        return NumPyMatrix(self._data + other._data, self._factory)

    def __matmul__(self, other: Any) -> NumPyMatrix:
        if not _is_matrix(other):
            return NotImplemented
        other = self._coerce(other)
        check_matmul_shapes(self, other)
        return NumPyMatrix(self._data @ other._data, self._factory)

    def _scale(self, scalar: float) -> NumPyMatrix:
        return NumPyMatrix(self._data * scalar, self._factory)

    def get_col(self, index: int) -> NumPyMatrix:
        return NumPyMatrix(self._data[:, [index]].copy(), self._factory)

    def set_col(self, index: int, column: Any) -> None:
        if not _is_matrix(column):
            raise TypeError(
                f"set_col: expected a matrix, got {type(column).__name__}; wrap it with create()"
            )
        column = self._coerce(column)
        if 1 not in column.shape or len(column) != self.n_rows:
            raise DimensionError(
                f"set_col: expected a vector of {self.n_rows} elements, "
                f"got shape {column.shape}"
            )
        self._data[:, index] = column._data.ravel()

    def norm_1(self) -> float:
        if self._data.size == 0:
            return 0.0
        return float(np.abs(self._data).sum(axis=0).max())

    def solve(self, b: Any) -> NumPyMatrix:
        """
        Solve self @ X = b via LAPACK gesv (scipy.linalg.solve).

        Ill-conditioned systems emit scipy.linalg.LinAlgWarning.

        Raises:
            TypeError: If b is not a matrix
            DimensionError: If self is not square or b has the wrong row count
            SingularMatrixError: If self is singular or the result is not finite
        """
        if not _is_matrix(b):
            raise TypeError(
                f"solve: expected a matrix right-hand side, got {type(b).__name__}; "
                f"wrap it with create()"
            )
        b = self._coerce(b)
        n, m = self.shape
        if n != m:
            raise DimensionError(f"solve: coefficient matrix must be square, got {self.shape}")
        if b.n_rows != n:
            raise DimensionError(
                f"solve: right-hand side has {b.n_rows} rows, expected {n}"
            )

        try:
            x = sp_linalg.solve(self._data, b._data, check_finite=False)
        except sp_linalg.LinAlgError as e:
            raise SingularMatrixError(
                f"solve: coefficient matrix is singular ({e})",
                matrix_name='A',
                condition_number=float('inf'),
            ) from e

        if not np.all(np.isfinite(x)):
            raise SingularMatrixError(
                "solve: result is not finite; coefficient matrix is numerically singular",
                matrix_name='A',
                condition_number=float(np.linalg.cond(self._data)),
            )
        return NumPyMatrix(x, self._factory)

    def copy(self) -> NumPyMatrix:
        return NumPyMatrix(self._data.copy(), self._factory)

    @property
    def T(self) -> NumPyMatrix:
        return NumPyMatrix(np.ascontiguousarray(self._data.T), self._factory)

    def to_numpy(self) -> NDArray[np.float64]:
        return self._data.copy()
