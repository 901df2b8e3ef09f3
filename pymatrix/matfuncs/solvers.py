"""
Solver dispatch for the matrix exponential.

This module provides the expm() function (public API).
"""

from __future__ import annotations

from typing import Any
import warnings

from pymatrix.backends import BackendChoice, get_factory
from pymatrix.core.compute.timing import Timer
from pymatrix.core.protocols import Matrix, SolveProvider
from pymatrix.core.result import Result
from pymatrix.matrix.base import _is_matrix
from pymatrix.matfuncs.design import ExpmDesign
from pymatrix.matfuncs.solution import ExpmParams, ExpmSolution
from pymatrix.matfuncs._pade import PADE_APPROXIMANTS, select_pade_order, scaling_exponent
from pymatrix.matfuncs._squaring import combine_pade, default_solve


# Beyond this many squarings the result is likely to overflow or have
# lost most of its relative accuracy.
MAX_SAFE_SQUARINGS = 50


def expm(
    A: Matrix | Any,
    *,
    solve: SolveProvider | None = None,
    backend: BackendChoice | None = None,
) -> ExpmSolution:
    """
    Matrix exponential by scaling and squaring with Padé approximants.

    The Padé order is chosen from the induced 1-norm of A:

        ||A||_1 < 1.495585217958292e-2   order 3
        ||A||_1 < 2.539398330063230e-1   order 5
        ||A||_1 < 9.504178996162932e-1   order 7
        ||A||_1 < 2.097847961257068e+0   order 9
        otherwise                        order 13 on A / 2**s, then s squarings

    with s = max(0, ceil(log2(||A||_1 / 5.371920351148152))). The rational
    approximant is applied by solving (V - U) R = (V + U) one column at a
    time, never by forming an inverse.

    Args:
        A: Square matrix. Any backend's Matrix is used as-is; array-likes
            are converted with the ``backend`` factory first.
        solve: Solve provider ``(A, B) -> X`` with A @ X == B. Defaults to
            the backend's own ``A.solve(B)``.
        backend: Backend for array-like input. Ignored for Matrix input,
            which is always exponentiated on its own backend.

    Returns:
        ExpmSolution with the result matrix, the selected order, the number
        of squarings and timing.

    Raises:
        DimensionError: If A is not square (before any norm computation)
        ValidationError: If A contains NaN or Inf
        NumericalError: If the solve step fails (singular V - U)

    Example:
        >>> from pymatrix import create
        >>> from pymatrix.matfuncs import expm
        >>> sol = expm(create([[0.0, 1.0], [0.0, 0.0]]))
        >>> sol.matrix.to_numpy()
        array([[1., 1.],
               [0., 1.]])
    """
    # === Input Validation ===
    if not _is_matrix(A):
        A = get_factory(backend).create(A)

    design = ExpmDesign.build(A)
    solve_provider = default_solve if solve is None else solve

    timer = Timer(sync_cuda='cuda' in design.backend_name)
    timer.start()

    # === Branch Selection ===
    norm_1 = design.norm_1
    pade_order = select_pade_order(norm_1)
    n_squarings = 0
    scaled = design.matrix

    if pade_order == 13:
        n_squarings = scaling_exponent(norm_1)
        # New matrix; the caller's A is left untouched
        scaled = design.matrix / 2.0 ** n_squarings

    # === Padé Evaluation ===
    with timer.section('pade'):
        U, V = PADE_APPROXIMANTS[pade_order](scaled)

    # === Solve and Square ===
    with timer.section('solve_and_square'):
        R = combine_pade(U, V, n_squarings, solve_provider)

    timer.stop()

    warn_list = []
    if n_squarings > MAX_SAFE_SQUARINGS:
        msg = (
            f"expm needed {n_squarings} squarings (||A||_1 = {norm_1:.3g}); "
            f"the result may have overflowed or lost accuracy"
        )
        warnings.warn(msg, RuntimeWarning, stacklevel=2)
        warn_list.append(msg)

    result = Result(
        params=ExpmParams(
            matrix=R,
            pade_order=pade_order,
            n_squarings=n_squarings,
            norm_1=norm_1,
        ),
        info={
            'method': 'pade_scaling_squaring',
            'pade_order': pade_order,
            'n_squarings': n_squarings,
            'scaled_norm_1': norm_1 / 2.0 ** n_squarings,
            'custom_solve': solve is not None,
        },
        timing=timer.result(),
        backend_name=design.backend_name,
        warnings=tuple(warn_list),
    )

    return ExpmSolution(_result=result, _design=design)
