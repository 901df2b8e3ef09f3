"""
Matrix exponential solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pymatrix.core.protocols import Matrix
from pymatrix.core.result import Result

if TYPE_CHECKING:
    from pymatrix.matfuncs.design import ExpmDesign


@dataclass(frozen=True)
class ExpmParams:
    """
    Parameter payload for the matrix exponential.

    matrix is exp(A) on A's backend. pade_order is one of 3, 5, 7, 9, 13;
    n_squarings is non-zero only for order 13.
    """
    matrix: Matrix
    pade_order: int
    n_squarings: int
    norm_1: float


@dataclass
class ExpmSolution:
    """
    User-facing matrix exponential result.

    Wraps Result[ExpmParams] and provides convenient accessors.
    """
    _result: Result[ExpmParams]
    _design: 'ExpmDesign'

    @property
    def matrix(self) -> Matrix:
        """exp(A), same backend as A."""
        return self._result.params.matrix

    @property
    def pade_order(self) -> int:
        return self._result.params.pade_order

    @property
    def n_squarings(self) -> int:
        return self._result.params.n_squarings

    @property
    def norm_1(self) -> float:
        """Induced 1-norm of the input, before any scaling."""
        return self._result.params.norm_1

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        lines = [
            "Matrix exponential (scaling and squaring, Padé approximant)",
            f"  size:        {self._design.n} x {self._design.n}",
            f"  ||A||_1:     {self.norm_1:.6g}",
            f"  Padé order:  {self.pade_order}",
            f"  squarings:   {self.n_squarings}",
            f"  backend:     {self.backend_name}",
        ]
        if self.timing is not None:
            lines.append(f"  time:        {self.timing['total_seconds']:.3g}s")
        for w in self.warnings:
            lines.append(f"  warning:     {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ExpmSolution(n={self._design.n}, pade_order={self.pade_order}, "
            f"n_squarings={self.n_squarings}, backend={self.backend_name!r})"
        )
