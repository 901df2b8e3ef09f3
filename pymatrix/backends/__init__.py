"""
Backend selection and management.

Provides a unified interface for the NumPy reference backend and the
PyTorch backend (CPU or CUDA).

Selection strings:
    'numpy' / 'cpu' : NumPy, float64 (reference, default)
    'torch'         : PyTorch on CPU, float64
    'gpu'           : PyTorch on a float64-capable GPU (CUDA)
    'auto'          : 'gpu' when such a device exists, else 'numpy'

The process-wide default is used whenever a creator or algorithm is
called without ``backend=``. Change it with set_default_backend() or,
for a limited scope, use_backend().
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Literal
import warnings

from pymatrix.core.compute.device import detect_gpu, select_device
from pymatrix.core.exceptions import BackendUnavailableError, ValidationError
from pymatrix.core.protocols import MatrixFactory
from pymatrix.backends.cpu import NUMPY_FACTORY, NumPyMatrix, NumPyMatrixFactory

try:
    from pymatrix.backends.gpu import TorchMatrix, TorchMatrixFactory
    TORCH_AVAILABLE = True
except ImportError:
    TORCH_AVAILABLE = False


BackendChoice = Literal['auto', 'numpy', 'cpu', 'torch', 'gpu']

VALID_BACKENDS = ('auto', 'numpy', 'cpu', 'torch', 'gpu')

_default_backend: str = 'numpy'


def _check_choice(choice: str) -> None:
    if choice not in VALID_BACKENDS:
        raise ValidationError(
            f"Unknown backend: {choice!r}. "
            f"Valid options: {', '.join(repr(b) for b in VALID_BACKENDS)}"
        )


def _require_torch(choice: str) -> None:
    if not TORCH_AVAILABLE:
        raise BackendUnavailableError(
            f"Backend {choice!r} requires PyTorch.\n"
            "Install: pip install torch"
        )


def get_factory(backend: BackendChoice | None = None) -> MatrixFactory:
    """
    Resolve a backend selection string to a matrix factory.

    Parameters
    ----------
    backend : str or None
        Selection string, see module docstring. None uses the
        process-wide default.

    Returns
    -------
    MatrixFactory

    Raises
    ------
    ValidationError
        Unknown selection string.
    BackendUnavailableError
        PyTorch missing, or 'gpu' requested without a float64-capable GPU.
    """
    choice = _default_backend if backend is None else backend
    _check_choice(choice)

    if choice in ('numpy', 'cpu'):
        return NUMPY_FACTORY

    if choice == 'torch':
        _require_torch(choice)
        return TorchMatrixFactory('cpu')

    if choice == 'gpu':
        _require_torch(choice)
        try:
            device = select_device('gpu')
        except RuntimeError as e:
            raise BackendUnavailableError(str(e)) from e
        return TorchMatrixFactory(device.torch_device)

    # auto
    if not TORCH_AVAILABLE:
        return NUMPY_FACTORY
    device = select_device('auto')
    if device.is_gpu:
        return TorchMatrixFactory(device.torch_device)
    gpu = detect_gpu()
    if gpu is not None and not gpu.supports_fp64:
        warnings.warn(
            f"{gpu} has no float64 support; backend='auto' is using NumPy on the CPU",
            stacklevel=2,
        )
    return NUMPY_FACTORY


def set_default_backend(backend: BackendChoice) -> None:
    """Set the backend used when no ``backend=`` is given."""
    global _default_backend
    _check_choice(backend)
    _default_backend = backend


def get_default_backend() -> str:
    """Current process-wide default selection string."""
    return _default_backend


@contextmanager
def use_backend(backend: BackendChoice) -> Iterator[MatrixFactory]:
    """
    Temporarily switch the default backend.

    Usage:
        with use_backend('torch') as factory:
            A = eye(3)          # TorchMatrix
        B = eye(3)              # back to the previous default
    """
    previous = get_default_backend()
    set_default_backend(backend)
    try:
        yield get_factory(backend)
    finally:
        set_default_backend(previous)


def list_available_backends() -> list[str]:
    """Names of backends that can be selected on this machine."""
    backends = ['numpy']
    if TORCH_AVAILABLE:
        backends.append('torch')
        device = select_device('auto')
        if device.is_gpu:
            backends.append('gpu')
    return backends


__all__ = [
    'BackendChoice',
    'VALID_BACKENDS',
    'get_factory',
    'set_default_backend',
    'get_default_backend',
    'use_backend',
    'list_available_backends',
    'NumPyMatrix',
    'NumPyMatrixFactory',
    'NUMPY_FACTORY',
    'TORCH_AVAILABLE',
]
