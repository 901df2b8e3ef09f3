"""
ExpmDesign: validated input for the matrix exponential.

Holds the matrix together with its induced 1-norm, which every later
stage needs. Construction checks shape before any arithmetic is done.
"""

from __future__ import annotations

from dataclasses import dataclass
import math

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.protocols import Matrix
from pymatrix.core.validation import check_finite, check_square


@dataclass(frozen=True)
class ExpmDesign:
    """
    Square, finite matrix ready for exponentiation. Immutable.

    Construction:
        ExpmDesign.build(A)
    """
    _matrix: Matrix
    _norm_1: float

    @classmethod
    def build(cls, matrix: Matrix) -> ExpmDesign:
        """
        Validate ``matrix`` and compute its 1-norm.

        Raises:
            DimensionError: If the matrix is not square (checked first)
            ValidationError: If the matrix contains NaN or Inf, or its 1-norm
                overflows
        """
        check_square(matrix, 'A')

        norm_1 = matrix.norm_1()
        if not math.isfinite(norm_1):
            # Reports NaN/Inf counts; finite entries can still overflow a column sum
            check_finite(matrix.to_numpy(), 'A')
            raise ValidationError(
                f"A: 1-norm overflows to {norm_1}; entries are finite but too large"
            )
        return cls(_matrix=matrix, _norm_1=norm_1)

    @property
    def matrix(self) -> Matrix:
        """The caller's matrix. Never modified."""
        return self._matrix

    @property
    def norm_1(self) -> float:
        """Induced 1-norm: maximum absolute column sum."""
        return self._norm_1

    @property
    def n(self) -> int:
        return self._matrix.n_rows

    @property
    def backend_name(self) -> str:
        return self._matrix.factory.name

    def __repr__(self) -> str:
        return f"ExpmDesign(n={self.n}, norm_1={self._norm_1:.6g}, backend={self.backend_name!r})"
