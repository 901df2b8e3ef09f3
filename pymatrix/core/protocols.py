"""
Core protocols for pymatrix.

These define structural interfaces that backend implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so that
a backend does not have to inherit from DoubleMatrixBase to take part in
algorithms like the matrix exponential.

Design Principles:
    - Minimal contracts: prescribe only what the algorithms actually call
    - Backend-agnostic: nothing here mentions NumPy or PyTorch
    - Factories are stateless and shared, matrices own their storage
"""

from typing import Protocol, Any, runtime_checkable


@runtime_checkable
class MatrixFactory(Protocol):
    """
    Producer of canonical matrices for one backend.

    Every matrix produced by a given factory is interoperable (same concrete
    representation) with every other matrix from that same factory.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{library}_{device}'
        Examples: 'numpy_cpu', 'torch_cpu', 'torch_cuda'
        """
        ...

    def zeros(self, rows: int, cols: int) -> 'Matrix':
        """Zero-filled matrix of shape (rows, cols)."""
        ...

    def eye(self, rows: int, cols: int) -> 'Matrix':
        """Matrix with ones on the main diagonal and zeros elsewhere."""
        ...

    def create(self, data: Any) -> 'Matrix':
        """Matrix holding a float64 copy of a 2D array-like."""
        ...


@runtime_checkable
class Matrix(Protocol):
    """
    Dense float64 matrix with a fixed shape and mutable contents.

    Elements are addressed by (row, col) or by a linear row-major index.
    Binary operations accept operands from any backend and reconcile them
    against their own representation, raising BackendMismatchError when
    that is impossible.
    """

    @property
    def n_rows(self) -> int:
        ...

    @property
    def n_cols(self) -> int:
        ...

    @property
    def factory(self) -> MatrixFactory:
        """The factory that produces matrices of this matrix's backend."""
        ...

    @property
    def base_matrix(self) -> Any:
        """Raw inner representation (ndarray, Tensor, ...)."""
        ...

    @property
    def backend_kind(self) -> str:
        """Backend tag, one of pymatrix.core.capabilities.ALL_BACKENDS."""
        ...

    def __getitem__(self, key: Any) -> float:
        ...

    def __setitem__(self, key: Any, value: float) -> None:
        ...

    def __add__(self, other: 'Matrix') -> 'Matrix':
        ...

    def __sub__(self, other: 'Matrix') -> 'Matrix':
        ...

    def __neg__(self) -> 'Matrix':
        ...

    def __mul__(self, scalar: float) -> 'Matrix':
        ...

    def __matmul__(self, other: 'Matrix') -> 'Matrix':
        ...

    def get_col(self, index: int) -> 'Matrix':
        """Column ``index`` as a new (n_rows x 1) matrix."""
        ...

    def set_col(self, index: int, column: 'Matrix') -> None:
        """Overwrite column ``index`` in place."""
        ...

    def norm_1(self) -> float:
        """Induced 1-norm: maximum absolute column sum."""
        ...

    def solve(self, b: 'Matrix') -> 'Matrix':
        """X such that self @ X == b."""
        ...


@runtime_checkable
class SolveProvider(Protocol):
    """
    Linear solve capability injected into algorithms that need one.

    Called as ``solve(A, B)`` and must return X with A @ X == B. Raises
    NumericalError (typically SingularMatrixError) when no solution exists.
    """

    def __call__(self, A: Matrix, B: Matrix) -> Matrix:
        ...
