"""
Tests for Padé order selection, scaling and the approximants themselves.
"""

import math

import pytest
import numpy as np
from scipy import linalg as sp_linalg

from pymatrix.backends.cpu import NUMPY_FACTORY
from pymatrix.core.exceptions import DimensionError
from pymatrix.matfuncs import PADE13_MAX_NORM, PADE_THRESHOLDS, scaling_exponent, select_pade_order
from pymatrix.matfuncs._pade import PADE_APPROXIMANTS, PADE_COEFFICIENTS
from pymatrix.matfuncs._squaring import combine_pade, default_solve


# ═══════════════════════════════════════════════════════════════════════
# Order selection
# ═══════════════════════════════════════════════════════════════════════


class TestSelectPadeOrder:

    @pytest.mark.parametrize("bound,order", PADE_THRESHOLDS)
    def test_just_below_bound(self, bound, order):
        assert select_pade_order(np.nextafter(bound, 0.0)) == order

    @pytest.mark.parametrize("bound,order", PADE_THRESHOLDS)
    def test_just_above_bound(self, bound, order):
        higher = {3: 5, 5: 7, 7: 9, 9: 13}[order]
        assert select_pade_order(np.nextafter(bound, np.inf)) == higher

    @pytest.mark.parametrize("bound,order", PADE_THRESHOLDS)
    def test_bound_itself_selects_next_order(self, bound, order):
        higher = {3: 5, 5: 7, 7: 9, 9: 13}[order]
        assert select_pade_order(bound) == higher

    def test_zero_norm(self):
        assert select_pade_order(0.0) == 3

    def test_large_norm(self):
        assert select_pade_order(1e6) == 13

    def test_thresholds_ascending(self):
        bounds = [b for b, _ in PADE_THRESHOLDS]
        assert bounds == sorted(bounds)
        assert bounds[-1] < PADE13_MAX_NORM


class TestScalingExponent:

    @pytest.mark.parametrize("norm,expected", [
        (0.0, 0),
        (2.5, 0),
        (PADE13_MAX_NORM, 0),
        (PADE13_MAX_NORM * 2, 1),
        (PADE13_MAX_NORM * 2.5, 2),
        (100.0, 5),
        (1e19, 61),
    ])
    def test_values(self, norm, expected):
        assert scaling_exponent(norm) == expected

    def test_scaled_norm_within_bound(self):
        for norm in (6.0, 37.5, 1234.5, 8.8e7):
            s = scaling_exponent(norm)
            assert norm / 2 ** s <= PADE13_MAX_NORM
            assert norm / 2 ** (s - 1) > PADE13_MAX_NORM


# ═══════════════════════════════════════════════════════════════════════
# Approximants
# ═══════════════════════════════════════════════════════════════════════


class TestCoefficients:

    @pytest.mark.parametrize("m", sorted(PADE_COEFFICIENTS))
    def test_match_closed_form(self, m):
        # b_k / b_0 = (2m - k)! m! / ((2m)! k! (m - k)!)
        b = PADE_COEFFICIENTS[m]
        assert len(b) == m + 1
        assert b[-1] == 1
        for k in range(m + 1):
            expected = (
                math.factorial(2 * m - k) * math.factorial(m)
                / (math.factorial(2 * m) * math.factorial(k) * math.factorial(m - k))
            )
            assert b[k] / b[0] == pytest.approx(expected, rel=1e-14)


class TestApproximants:

    @pytest.mark.parametrize("order,scale", [
        (3, 0.01), (5, 0.2), (7, 0.9), (9, 2.0), (13, 5.0),
    ])
    def test_accurate_within_its_range(self, order, scale, rng):
        a = rng.standard_normal((5, 5))
        a *= scale / np.abs(a).sum(axis=0).max()
        U, V = PADE_APPROXIMANTS[order](NUMPY_FACTORY.create(a))
        u, v = U.to_numpy(), V.to_numpy()
        r = np.linalg.solve(v - u, v + u)
        np.testing.assert_allclose(r, sp_linalg.expm(a), rtol=1e-11, atol=1e-12)

    def test_parts_keep_backend(self, factory):
        U, V = PADE_APPROXIMANTS[13](factory.eye(3))
        assert U.factory.name == factory.name
        assert V.factory.name == factory.name


class TestCombinePade:

    def test_shape_mismatch(self):
        with pytest.raises(DimensionError, match="Padé"):
            combine_pade(NUMPY_FACTORY.eye(2), NUMPY_FACTORY.eye(3), 0, default_solve)

    def test_non_square(self):
        with pytest.raises(DimensionError):
            combine_pade(NUMPY_FACTORY.ones(2, 3), NUMPY_FACTORY.ones(2, 3), 0, default_solve)

    def test_identity_parts(self):
        # U = 0, V = I gives R = I, and squaring I changes nothing
        R = combine_pade(NUMPY_FACTORY.zeros(3, 3), NUMPY_FACTORY.eye(3), 4, default_solve)
        np.testing.assert_array_equal(R.to_numpy(), np.eye(3))
