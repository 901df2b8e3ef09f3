"""
PyTorch backend.

Float64 matrices stored as torch tensors on a single device (CPU or CUDA).
MPS is not supported because it has no float64 kernels, and silently
dropping to float32 is exactly what this library refuses to do.

Validated against the NumPy reference backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
import torch

from pymatrix.core.capabilities import BACKEND_TORCH
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
from pymatrix.backends.cpu import _as_matrix_array


@dataclass(frozen=True)
class TorchMatrixFactory:
    """
    Factory for TorchMatrix instances on one device.

    Parameters
    ----------
    device : str
        Anything torch.device() accepts, e.g. 'cpu', 'cuda', 'cuda:1'.
    """
    device: str = 'cpu'

    def __post_init__(self):
        if torch.device(self.device).type == 'mps':
            raise ValueError("TorchMatrixFactory requires a float64-capable device, got 'mps'")

    @property
    def name(self) -> str:
        return f"torch_{torch.device(self.device).type}"

    @property
    def backend_kind(self) -> str:
        return BACKEND_TORCH

    @property
    def torch_device(self) -> torch.device:
        return torch.device(self.device)

    def _new(self, tensor: torch.Tensor) -> TorchMatrix:
        return TorchMatrix(tensor, self)

    def wrap(self, raw: torch.Tensor) -> TorchMatrix:
        """
        Adopt an existing float64 2D tensor on this device without copying.

        Raises:
            BackendMismatchError: If raw is not float64 or lives elsewhere
            DimensionError: If raw is not 2D
        """
        if not isinstance(raw, torch.Tensor) or raw.dtype != torch.float64:
            raise BackendMismatchError(
                f"Torch backend adopts float64 tensors only, got "
                f"{type(raw).__name__} of dtype {getattr(raw, 'dtype', None)}",
                expected='Tensor[float64]',
                actual=f"{type(raw).__name__}[{getattr(raw, 'dtype', None)}]",
            )
        if not _same_device(raw.device, self.torch_device):
            raise BackendMismatchError(
                f"Tensor lives on {raw.device}, backend computes on {self.torch_device}",
                expected=str(self.torch_device),
                actual=str(raw.device),
            )
        check_2d(raw, 'raw')
        return self._new(raw)

    def create(self, data: ArrayLike) -> TorchMatrix:
        """Float64 copy of a scalar, 1D (as a row) or 2D array-like."""
        arr = _as_matrix_array(check_array(data, 'data'), 'data')
        tensor = torch.tensor(arr, dtype=torch.float64, device=self.torch_device)
        return self._new(tensor)

    def zeros(self, rows: int, cols: int) -> TorchMatrix:
        return self._new(torch.zeros(rows, cols, dtype=torch.float64, device=self.torch_device))

    def ones(self, rows: int, cols: int) -> TorchMatrix:
        return self._new(torch.ones(rows, cols, dtype=torch.float64, device=self.torch_device))

    def eye(self, rows: int, cols: int | None = None) -> TorchMatrix:
        cols = rows if cols is None else cols
        return self._new(torch.eye(rows, cols, dtype=torch.float64, device=self.torch_device))

    def _generator(self, seed: Any) -> torch.Generator | None:
        if seed is None:
            return None
        if isinstance(seed, torch.Generator):
            return seed
        gen = torch.Generator(device=self.torch_device)
        gen.manual_seed(int(seed))
        return gen

    def rand(self, rows: int, cols: int, seed: Any = None) -> TorchMatrix:
        """Uniform [0, 1) entries."""
        return self._new(torch.rand(
            rows, cols, generator=self._generator(seed),
            dtype=torch.float64, device=self.torch_device,
        ))

    def randn(self, rows: int, cols: int, seed: Any = None) -> TorchMatrix:
        """Standard normal entries."""
        return self._new(torch.randn(
            rows, cols, generator=self._generator(seed),
            dtype=torch.float64, device=self.torch_device,
        ))

    def arange(self, start: float, stop: float, step: float = 1.0) -> TorchMatrix:
        """Row vector start, start + step, ... excluding stop."""
        # NumPy's length rule, so both backends agree on float steps
        values = np.arange(start, stop, step, dtype=np.float64)
        return self._new(
            torch.tensor(values, dtype=torch.float64, device=self.torch_device).reshape(1, -1)
        )


def _same_device(a: torch.device, b: torch.device) -> bool:
    """'cuda' and 'cuda:0' name the same device when 0 is current."""
    if a.type != b.type:
        return False
    if a.type != 'cuda':
        return True
    current = torch.cuda.current_device()
    return (a.index if a.index is not None else current) == (
        b.index if b.index is not None else current
    )


class TorchMatrix(DoubleMatrixBase):
    """Float64 matrix backed by a 2D torch tensor."""

    def __init__(self, data: torch.Tensor, factory: TorchMatrixFactory):
        self._data = data
        self._factory = factory

    def _coerce(self, other: Any) -> TorchMatrix:
        other = self._cast_or_bail(other, TorchMatrix, torch.Tensor, self._factory.wrap)
        if not _same_device(other._data.device, self._data.device):
            raise BackendMismatchError(
                f"Operand lives on {other._data.device}, this matrix on {self._data.device}",
                expected=str(self._data.device),
                actual=str(other._data.device),
            )
        return other

    @property
    def shape(self) -> tuple[int, int]:
        return tuple(self._data.shape)

    @property
    def factory(self) -> TorchMatrixFactory:
        return self._factory

    @property
    def base_matrix(self) -> torch.Tensor:
        return self._data

    @property
    def backend_kind(self) -> str:
        return BACKEND_TORCH

    def __getitem__(self, key: Any) -> float:
        i, j = self._resolve_key(key)
        return float(self._data[i, j].item())

    def __setitem__(self, key: Any, value: float) -> None:
        i, j = self._resolve_key(key)
        self._data[i, j] = float(value)

    def __add__(self, other: Any) -> TorchMatrix:
        if not _is_matrix(other):
            return NotImplemented
        other = self._coerce(other)
        check_same_shape(self, other, 'add')
        return TorchMatrix(self._data + other._data, self._factory)

    def __matmul__(self, other: Any) -> TorchMatrix:
        if not _is_matrix(other):
            return NotImplemented
        other = self._coerce(other)
        check_matmul_shapes(self, other)
        return TorchMatrix(self._data @ other._data, self._factory)

    def _scale(self, scalar: float) -> TorchMatrix:
        return TorchMatrix(self._data * scalar, self._factory)

    def get_col(self, index: int) -> TorchMatrix:
        return TorchMatrix(self._data[:, index].reshape(-1, 1).clone(), self._factory)

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
        self._data[:, index] = column._data.reshape(-1)

    def norm_1(self) -> float:
        if self._data.numel() == 0:
            return 0.0
        return float(self._data.abs().sum(dim=0).max().item())

    def solve(self, b: Any) -> TorchMatrix:
        """
        Solve self @ X = b via torch.linalg.solve.

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
            x = torch.linalg.solve(self._data, b._data)
        except torch.linalg.LinAlgError as e:
            raise SingularMatrixError(
                f"solve: coefficient matrix is singular ({e})",
                matrix_name='A',
                condition_number=float('inf'),
            ) from e

        if not bool(torch.isfinite(x).all()):
            raise SingularMatrixError(
                "solve: result is not finite; coefficient matrix is numerically singular",
                matrix_name='A',
                condition_number=float(torch.linalg.cond(self._data).item()),
            )
        return TorchMatrix(x, self._factory)

    def copy(self) -> TorchMatrix:
        return TorchMatrix(self._data.clone(), self._factory)

    @property
    def T(self) -> TorchMatrix:
        return TorchMatrix(self._data.T.contiguous(), self._factory)

    def to_numpy(self) -> NDArray[np.float64]:
        return self._data.detach().cpu().numpy().copy()
