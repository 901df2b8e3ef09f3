"""
Combine a Padé pair into exp(A) and undo prior scaling.
"""

from __future__ import annotations

from pymatrix.core.exceptions import DimensionError
from pymatrix.core.protocols import Matrix, SolveProvider


def default_solve(A: Matrix, B: Matrix) -> Matrix:
    """Solve provider that delegates to the coefficient matrix's backend."""
    return A.solve(B)


def solve_columns(Q: Matrix, P: Matrix, solve: SolveProvider) -> Matrix:
    """
    R with Q @ R == P, built one column at a time.

    Only a solve capability is required from the backend, never an
    explicit inverse. Columns are independent of one another.
    """
    R = P.factory.zeros(Q.n_cols, P.n_cols)
    for i in range(P.n_cols):
        R.set_col(i, solve(Q, P.get_col(i)))
    return R


def square_repeatedly(R: Matrix, n_squarings: int) -> Matrix:
    """R^(2^n_squarings), i.e. R squared n_squarings times."""
    for _ in range(n_squarings):
        R = R @ R
    return R


def combine_pade(
    U: Matrix,
    V: Matrix,
    n_squarings: int,
    solve: SolveProvider,
) -> Matrix:
    """
    exp(A) from the odd/even Padé parts of A / 2**n_squarings.

    Solves (V - U) R = (V + U), then squares R n_squarings times.

    Raises:
        DimensionError: If U and V are not the same square shape
        NumericalError: If the solve provider cannot solve against V - U
    """
    if tuple(U.shape) != tuple(V.shape) or U.n_rows != U.n_cols:
        raise DimensionError(
            f"Padé parts must be square and equal in shape, got U{tuple(U.shape)} "
            f"and V{tuple(V.shape)}"
        )

    P = U + V
    Q = V - U
    R = solve_columns(Q, P, solve)
    return square_repeatedly(R, n_squarings)
