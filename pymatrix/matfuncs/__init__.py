"""
Matrix exponential module.

Backend-agnostic exp(A) by scaling and squaring with diagonal Padé
approximants (Higham 2005). Works on any Matrix implementation through
its factory, arithmetic operators, norm_1, get_col/set_col and an
injectable solve provider.

Public API:
    expm(A)             - ExpmSolution with exp(A) and diagnostics
    select_pade_order() - Order chosen for a given 1-norm
"""

from pymatrix.matfuncs.design import ExpmDesign
from pymatrix.matfuncs.solution import ExpmParams, ExpmSolution
from pymatrix.matfuncs.solvers import expm
from pymatrix.matfuncs._pade import (
    PADE_THRESHOLDS,
    PADE13_MAX_NORM,
    select_pade_order,
    scaling_exponent,
)

__all__ = [
    "expm",
    "select_pade_order",
    "scaling_exponent",
    "PADE_THRESHOLDS",
    "PADE13_MAX_NORM",
    "ExpmDesign",
    "ExpmParams",
    "ExpmSolution",
]
