"""
Shared base class for float64 matrix backends.

DoubleMatrixBase gives backend authors two things for free:

1. Operand reconciliation (``_cast_or_bail``). A binary operation receives
   an operand of statically unknown backend. The base class narrows it to
   the backend's own wrapper type if that is possible without converting
   any numbers, and raises BackendMismatchError otherwise. Backends
   therefore never need N x N conversion routines, and no operation can
   silently lose precision by converting between libraries.

2. The derived operations every backend shares: subtraction, negation,
   right-multiplication and division by scalars, and the matrix
   exponential, all expressed through the backend's primitive operations.

Backends override any of these when they have a faster native path.
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, Callable, TypeVar, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.capabilities import ALL_BACKENDS
from pymatrix.core.exceptions import BackendMismatchError

if TYPE_CHECKING:
    from pymatrix.core.protocols import MatrixFactory, SolveProvider

TOuter = TypeVar('TOuter')
TInner = TypeVar('TInner')


def _type_name(obj: Any) -> str:
    t = type(obj)
    return f"{t.__module__}.{t.__qualname__}"


class DoubleMatrixBase(ABC):
    """
    Abstract float64 matrix.

    Subclasses wrap one raw representation (ndarray, Tensor, ...) and
    implement the primitive operations. Everything else is derived here.
    """

    # Stop numpy from broadcasting ndarray.__add__ etc. over our matrices.
    __array_ufunc__ = None

    # === Primitives (backend-specific) ===

    @property
    @abstractmethod
    def shape(self) -> tuple[int, int]:
        ...

    @property
    @abstractmethod
    def factory(self) -> 'MatrixFactory':
        ...

    @property
    @abstractmethod
    def base_matrix(self) -> Any:
        """Raw inner representation owned by this matrix."""
        ...

    @property
    @abstractmethod
    def backend_kind(self) -> str:
        ...

    @abstractmethod
    def __getitem__(self, key: Any) -> float:
        ...

    @abstractmethod
    def __setitem__(self, key: Any, value: float) -> None:
        ...

    @abstractmethod
    def __add__(self, other: Any) -> 'DoubleMatrixBase':
        ...

    @abstractmethod
    def __matmul__(self, other: Any) -> 'DoubleMatrixBase':
        ...

    @abstractmethod
    def _scale(self, scalar: float) -> 'DoubleMatrixBase':
        """New matrix equal to scalar * self."""
        ...

    @abstractmethod
    def get_col(self, index: int) -> 'DoubleMatrixBase':
        ...

    @abstractmethod
    def set_col(self, index: int, column: Any) -> None:
        ...

    @abstractmethod
    def norm_1(self) -> float:
        ...

    @abstractmethod
    def solve(self, b: Any) -> 'DoubleMatrixBase':
        ...

    @abstractmethod
    def copy(self) -> 'DoubleMatrixBase':
        ...

    @property
    @abstractmethod
    def T(self) -> 'DoubleMatrixBase':
        ...

    @abstractmethod
    def to_numpy(self) -> NDArray[np.float64]:
        """Host copy of the contents as a float64 ndarray."""
        ...

    # === Reconciliation ===

    @abstractmethod
    def _coerce(self, other: Any) -> 'DoubleMatrixBase':
        """Operand as this backend's wrapper type, usually via _cast_or_bail."""
        ...

    def _cast_or_bail(
        self,
        mat: Any,
        outer_type: type[TOuter],
        inner_type: type[TInner] | tuple[type, ...],
        make_outer: Callable[[TInner], TOuter],
    ) -> TOuter:
        """
        Narrow an operand to this backend's wrapper type.

        Operands that declare a ``backend_kind`` other than this matrix's are
        refused outright. Otherwise accepts operands that already are
        ``outer_type`` (returned as-is, no copy) and operands of any other
        wrapper whose raw representation is an ``inner_type`` (re-wrapped
        with ``make_outer``, no copy).
        ``make_outer`` is passed in because the wrapper's constructor is not
        generally the right way to adopt a raw representation.

        Args:
            mat: Operand of unknown backend
            outer_type: This backend's wrapper class
            inner_type: Raw representation this backend computes with
            make_outer: Adopts a raw representation into ``outer_type``

        Returns:
            An ``outer_type`` instance referring to the operand's data

        Raises:
            BackendMismatchError: If the operand declares another backend kind,
                or its raw representation is not an ``inner_type``. No numeric
                conversion is attempted.
        """
        kind = getattr(mat, 'backend_kind', None)
        if kind is not None and (kind not in ALL_BACKENDS or kind != self.backend_kind):
            raise BackendMismatchError(
                f"Operations between matrices with different backends are not supported: "
                f"{type(self).__name__} is a {self.backend_kind!r} matrix, operand "
                f"declares backend {kind!r}.",
                expected=self.backend_kind,
                actual=str(kind),
            )

        if isinstance(mat, outer_type):
            return mat

        base = getattr(mat, 'base_matrix', None)
        if base is not None and isinstance(base, inner_type):
            return make_outer(base)

        expected = (
            inner_type.__name__ if isinstance(inner_type, type)
            else " | ".join(t.__name__ for t in inner_type)
        )
        actual = _type_name(mat if base is None else base)
        raise BackendMismatchError(
            f"Operations between matrices with different backends are not supported: "
            f"{type(self).__name__} requires {expected}, got {actual}. "
            f"Convert explicitly, e.g. factory.create(other.to_numpy()).",
            expected=expected,
            actual=actual,
        )

    # === Derived operations ===

    @property
    def n_rows(self) -> int:
        return self.shape[0]

    @property
    def n_cols(self) -> int:
        return self.shape[1]

    def __len__(self) -> int:
        return self.n_rows * self.n_cols

    def _resolve_key(self, key: Any) -> tuple[int, int]:
        """
        Map an element key to (row, col).

        Accepts ``(row, col)`` pairs and linear row-major indices. Negative
        values count from the end, as with Python sequences.
        """
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError(f"expected (row, col), got {len(key)} indices")
            return operator.index(key[0]), operator.index(key[1])

        k = operator.index(key)
        size = self.n_rows * self.n_cols
        if k < 0:
            k += size
        if not 0 <= k < size:
            raise IndexError(
                f"linear index {key} out of range for {self.n_rows}x{self.n_cols} matrix"
            )
        return divmod(k, self.n_cols)

    def __neg__(self) -> 'DoubleMatrixBase':
        return self._scale(-1.0)

    def __pos__(self) -> 'DoubleMatrixBase':
        return self.copy()

    def __sub__(self, other: Any) -> 'DoubleMatrixBase':
        if not _is_matrix(other):
            return NotImplemented
        return self + (-self._coerce(other))

    def __mul__(self, scalar: Any) -> 'DoubleMatrixBase':
        # Element-wise products are out of scope; use @ for matrix products.
        if isinstance(scalar, bool) or not isinstance(scalar, Real):
            return NotImplemented
        return self._scale(float(scalar))

    def __rmul__(self, scalar: Any) -> 'DoubleMatrixBase':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Any) -> 'DoubleMatrixBase':
        if isinstance(scalar, bool) or not isinstance(scalar, Real):
            return NotImplemented
        return self._scale(1.0 / float(scalar))

    def expm(self, solve: 'SolveProvider | None' = None) -> 'DoubleMatrixBase':
        """
        Matrix exponential e^self, computed on this matrix's backend.

        Args:
            solve: Optional solve provider ``(A, B) -> X``. Defaults to
                ``A.solve(B)``.

        See pymatrix.matfuncs.expm for the algorithm and the diagnostics it
        reports.
        """
        from pymatrix.matfuncs.solvers import expm

        return expm(self, solve=solve).matrix

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(shape={self.shape}, "
            f"backend={self.factory.name!r})\n{self.to_numpy()!r}"
        )


def _is_matrix(obj: Any) -> bool:
    """True if obj quacks like a pymatrix Matrix (any backend)."""
    return isinstance(obj, DoubleMatrixBase) or (
        hasattr(obj, 'base_matrix') and hasattr(obj, 'shape')
    )
