"""
Matrix base layer.

DoubleMatrixBase is the starting point for float64 backends: it supplies
operand reconciliation across backends and the operations that can be
derived from a backend's primitives (subtraction, negation, scalar
division, expm).
"""

from pymatrix.matrix.base import DoubleMatrixBase

__all__ = [
    "DoubleMatrixBase",
]
