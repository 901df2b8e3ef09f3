"""
Diagonal Padé approximants of the matrix exponential.

For an order m, exp(A) is approximated by q(A)^-1 p(A) where the numerator
and denominator share the coefficients b_k of

    p(x) = sum_k b_k x^k,    q(x) = p(-x).

Splitting p into even and odd parts, p(A) = V + U and q(A) = V - U with

    U = A * sum_{k odd} b_k A^(k-1)      (odd-degree part)
    V =     sum_{k even} b_k A^k         (even-degree part)

so only even powers of A are ever formed. Coefficients and norm bounds
are those of Higham (2005), "The scaling and squaring method for the
matrix exponential revisited", as used by MATLAB and SciPy.
"""

from __future__ import annotations

import math

from pymatrix.core.protocols import Matrix


# Highest 1-norm for which each order is accurate to unit roundoff,
# ascending. Comparison is strict less-than.
PADE_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (1.495585217958292e-2, 3),
    (2.539398330063230e-1, 5),
    (9.504178996162932e-1, 7),
    (2.097847961257068e+0, 9),
)

# Order 13 is applied after scaling A's 1-norm below this ceiling.
PADE13_MAX_NORM = 5.371920351148152

PADE_COEFFICIENTS: dict[int, tuple[int, ...]] = {
    3: (120, 60, 12, 1),
    5: (30240, 15120, 3360, 420, 30, 1),
    7: (17297280, 8648640, 1995840, 277200, 25200, 1512, 56, 1),
    9: (17643225600, 8821612800, 2075673600, 302702400, 30270240,
        2162160, 110880, 3960, 90, 1),
    13: (64764752532480000, 32382376266240000, 7771770303897600,
         1187353796428800, 129060195264000, 10559470521600, 670442572800,
         33522128640, 1323241920, 40840800, 960960, 16380, 182, 1),
}


def select_pade_order(norm_1: float) -> int:
    """
    Padé order for a matrix with the given induced 1-norm.

    A norm exactly equal to a bound selects the next order up.
    """
    for bound, order in PADE_THRESHOLDS:
        if norm_1 < bound:
            return order
    return 13


def scaling_exponent(norm_1: float) -> int:
    """
    Smallest s >= 0 with norm_1 / 2**s <= PADE13_MAX_NORM.
    """
    if norm_1 <= 0.0:
        return 0
    return max(0, math.ceil(math.log2(norm_1 / PADE13_MAX_NORM)))


def _pade_low_order(A: Matrix, order: int) -> tuple[Matrix, Matrix]:
    """
    U, V for orders 3, 5, 7 and 9 by direct summation over even powers.
    """
    b = [float(c) for c in PADE_COEFFICIENTS[order]]
    n = A.n_rows
    ident = A.factory.eye(n, n)

    # I, A^2, A^4, ..., A^(order - 1)
    A2 = A @ A
    powers = [ident, A2]
    while len(powers) < (order + 1) // 2:
        powers.append(powers[-1] @ A2)

    odd = ident * b[1]
    even = ident * b[0]
    for k, P in enumerate(powers[1:], start=1):
        odd = odd + P * b[2 * k + 1]
        even = even + P * b[2 * k]

    U = A @ odd
    V = even
    return U, V


def pade3(A: Matrix) -> tuple[Matrix, Matrix]:
    return _pade_low_order(A, 3)


def pade5(A: Matrix) -> tuple[Matrix, Matrix]:
    return _pade_low_order(A, 5)


def pade7(A: Matrix) -> tuple[Matrix, Matrix]:
    return _pade_low_order(A, 7)


def pade9(A: Matrix) -> tuple[Matrix, Matrix]:
    return _pade_low_order(A, 9)


def pade13(A: Matrix) -> tuple[Matrix, Matrix]:
    """
    U, V for order 13.

    Uses the nested form over A^2, A^4, A^6, which needs six matrix
    products instead of twelve. A is expected to be scaled already.
    """
    b = [float(c) for c in PADE_COEFFICIENTS[13]]
    n = A.n_rows
    ident = A.factory.eye(n, n)

    A2 = A @ A
    A4 = A2 @ A2
    A6 = A4 @ A2

    U = A @ (
        A6 @ (A6 * b[13] + A4 * b[11] + A2 * b[9])
        + A6 * b[7] + A4 * b[5] + A2 * b[3] + ident * b[1]
    )
    V = (
        A6 @ (A6 * b[12] + A4 * b[10] + A2 * b[8])
        + A6 * b[6] + A4 * b[4] + A2 * b[2] + ident * b[0]
    )
    return U, V


PADE_APPROXIMANTS = {
    3: pade3,
    5: pade5,
    7: pade7,
    9: pade9,
    13: pade13,
}
