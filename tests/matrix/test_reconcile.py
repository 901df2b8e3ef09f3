"""
Tests for operand reconciliation between matrix backends.

An operand is used directly when it already is this backend's wrapper,
re-wrapped without copying when only its wrapper differs, and refused
otherwise. No numbers are ever converted between libraries.
"""

import pytest
import numpy as np

from pymatrix.backends import TORCH_AVAILABLE, get_factory
from pymatrix.backends.cpu import NumPyMatrix
from pymatrix.core.exceptions import BackendMismatchError, DimensionError


class ForeignArrayMatrix:
    """Third-party wrapper around a float64 ndarray."""

    def __init__(self, data):
        self._data = data

    @property
    def base_matrix(self):
        return self._data

    @property
    def shape(self):
        return self._data.shape


class ForeignListMatrix:
    """Third-party wrapper around nested lists."""

    def __init__(self, rows):
        self._rows = rows

    @property
    def base_matrix(self):
        return self._rows

    @property
    def shape(self):
        return (len(self._rows), len(self._rows[0]))


@pytest.fixture
def A():
    return get_factory('numpy').create([[1.0, 2.0], [3.0, 4.0]])


# ═══════════════════════════════════════════════════════════════════════
# Accepted operands
# ═══════════════════════════════════════════════════════════════════════


class TestSameBackend:

    def test_own_type_returned_as_is(self, A):
        B = A.factory.eye(2)
        assert A._coerce(B) is B

    def test_sum_with_same_backend(self, A):
        result = A + A.factory.ones(2, 2)
        np.testing.assert_array_equal(result.to_numpy(), [[2.0, 3.0], [4.0, 5.0]])


class TestRewrap:

    def test_foreign_wrapper_of_ndarray_adopted(self, A):
        raw = np.eye(2)
        other = ForeignArrayMatrix(raw)
        adopted = A._coerce(other)
        assert isinstance(adopted, NumPyMatrix)
        assert adopted.base_matrix is raw

    def test_rewrap_does_not_copy(self, A):
        raw = np.zeros((2, 2))
        adopted = A._coerce(ForeignArrayMatrix(raw))
        adopted[0, 0] = 7.0
        assert raw[0, 0] == 7.0

    def test_arithmetic_with_foreign_wrapper(self, A):
        result = A @ ForeignArrayMatrix(np.eye(2))
        np.testing.assert_array_equal(result.to_numpy(), A.to_numpy())

    def test_foreign_wrapper_not_float64(self, A):
        with pytest.raises(BackendMismatchError):
            A + ForeignArrayMatrix(np.eye(2, dtype=np.float32))

    def test_foreign_wrapper_wrong_rank(self, A):
        with pytest.raises(DimensionError):
            A._coerce(ForeignArrayMatrix(np.ones(2)))


# ═══════════════════════════════════════════════════════════════════════
# Refused operands
# ═══════════════════════════════════════════════════════════════════════


class TestMismatch:

    def test_list_backed_matrix_refused(self, A):
        with pytest.raises(BackendMismatchError, match="different backends"):
            A + ForeignListMatrix([[1.0, 0.0], [0.0, 1.0]])

    def test_error_names_representations(self, A):
        with pytest.raises(BackendMismatchError) as exc_info:
            A @ ForeignListMatrix([[1.0, 0.0], [0.0, 1.0]])
        assert exc_info.value.expected == 'ndarray'
        assert exc_info.value.actual == 'builtins.list'

    def test_operands_unchanged_after_refusal(self, A):
        before = A.to_numpy()
        with pytest.raises(BackendMismatchError):
            A - ForeignListMatrix([[1.0, 0.0], [0.0, 1.0]])
        np.testing.assert_array_equal(A.to_numpy(), before)

    def test_raw_ndarray_is_not_a_matrix(self, A):
        # Plain arrays must be wrapped explicitly with create()
        with pytest.raises(TypeError):
            A + np.eye(2)

    @pytest.mark.skipif(not TORCH_AVAILABLE, reason="PyTorch not installed")
    def test_numpy_with_torch_refused(self, A):
        T = get_factory('torch').eye(2)
        with pytest.raises(BackendMismatchError):
            A + T
        with pytest.raises(BackendMismatchError):
            T @ A

    @pytest.mark.skipif(not TORCH_AVAILABLE, reason="PyTorch not installed")
    def test_set_col_across_backends_refused(self, A):
        col = get_factory('torch').ones(2, 1)
        with pytest.raises(BackendMismatchError):
            A.set_col(0, col)


# ═══════════════════════════════════════════════════════════════════════
# Declared backend kind
# ═══════════════════════════════════════════════════════════════════════


class TaggedArrayMatrix(ForeignArrayMatrix):
    """ndarray wrapper that declares a backend kind."""

    def __init__(self, data, backend_kind):
        super().__init__(data)
        self.backend_kind = backend_kind


class MislabelledNumPyMatrix(NumPyMatrix):
    """NumPyMatrix that claims to be a torch matrix."""

    @property
    def backend_kind(self):
        return 'torch'


class TestDeclaredKind:

    def test_matching_kind_adopted(self, A):
        raw = np.eye(2)
        adopted = A._coerce(TaggedArrayMatrix(raw, 'numpy'))
        assert adopted.base_matrix is raw

    def test_other_kind_refused_despite_ndarray(self, A):
        with pytest.raises(BackendMismatchError) as exc_info:
            A + TaggedArrayMatrix(np.eye(2), 'torch')
        assert exc_info.value.expected == 'numpy'
        assert exc_info.value.actual == 'torch'

    def test_unknown_kind_refused(self, A):
        with pytest.raises(BackendMismatchError, match="cupy"):
            A @ TaggedArrayMatrix(np.eye(2), 'cupy')

    def test_own_subclass_with_other_kind_refused(self, A):
        with pytest.raises(BackendMismatchError):
            A + MislabelledNumPyMatrix(np.eye(2))

    def test_no_result_on_refusal(self, A):
        before = A.to_numpy()
        with pytest.raises(BackendMismatchError):
            A.set_col(0, TaggedArrayMatrix(np.ones((2, 1)), 'torch'))
        np.testing.assert_array_equal(A.to_numpy(), before)
