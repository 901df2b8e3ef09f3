"""
Backend selection: selection strings, process-wide default, fallbacks.
"""

import warnings

import pytest

import pymatrix.backends as backends
from pymatrix.backends import (
    NUMPY_FACTORY,
    get_default_backend,
    get_factory,
    list_available_backends,
    set_default_backend,
    use_backend,
)
from pymatrix.core.compute import DeviceInfo, get_cpu_info
from pymatrix.core.exceptions import BackendUnavailableError, ValidationError


MPS = DeviceInfo('mps', 0, 'Apple Silicon GPU', None, None)


class TestGetFactory:

    @pytest.mark.parametrize("choice", ['numpy', 'cpu'])
    def test_numpy_aliases(self, choice):
        assert get_factory(choice) is NUMPY_FACTORY

    def test_default_is_numpy(self):
        assert get_default_backend() == 'numpy'
        assert get_factory() is NUMPY_FACTORY

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            get_factory('cupy')

    def test_torch_missing(self, monkeypatch):
        monkeypatch.setattr(backends, 'TORCH_AVAILABLE', False)
        with pytest.raises(BackendUnavailableError, match="PyTorch"):
            get_factory('torch')
        with pytest.raises(BackendUnavailableError):
            get_factory('gpu')

    def test_auto_without_torch_is_numpy(self, monkeypatch):
        monkeypatch.setattr(backends, 'TORCH_AVAILABLE', False)
        assert get_factory('auto') is NUMPY_FACTORY

    @pytest.mark.skipif(not backends.TORCH_AVAILABLE, reason="PyTorch not installed")
    def test_torch_factory(self):
        assert get_factory('torch').name == 'torch_cpu'

    @pytest.mark.skipif(not backends.TORCH_AVAILABLE, reason="PyTorch not installed")
    def test_gpu_unavailable(self, monkeypatch):
        def no_gpu(prefer):
            raise RuntimeError("GPU requested but no GPU available.")
        monkeypatch.setattr(backends, 'select_device', no_gpu)
        with pytest.raises(BackendUnavailableError, match="no GPU"):
            get_factory('gpu')

    @pytest.mark.skipif(not backends.TORCH_AVAILABLE, reason="PyTorch not installed")
    def test_auto_warns_on_mps_only_machine(self, monkeypatch):
        monkeypatch.setattr(backends, 'select_device', lambda prefer: get_cpu_info())
        monkeypatch.setattr(backends, 'detect_gpu', lambda: MPS)
        with pytest.warns(UserWarning, match="float64"):
            assert get_factory('auto') is NUMPY_FACTORY

    @pytest.mark.skipif(not backends.TORCH_AVAILABLE, reason="PyTorch not installed")
    def test_auto_cpu_only_is_silent(self, monkeypatch):
        monkeypatch.setattr(backends, 'select_device', lambda prefer: get_cpu_info())
        monkeypatch.setattr(backends, 'detect_gpu', lambda: None)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert get_factory('auto') is NUMPY_FACTORY


class TestDefaultBackend:

    def test_set_default(self):
        set_default_backend('cpu')
        assert get_default_backend() == 'cpu'

    def test_set_unknown_rejected(self):
        with pytest.raises(ValidationError):
            set_default_backend('fortran')
        assert get_default_backend() == 'numpy'

    def test_use_backend_restores(self):
        with use_backend('cpu') as factory:
            assert factory is NUMPY_FACTORY
            assert get_default_backend() == 'cpu'
        assert get_default_backend() == 'numpy'

    def test_use_backend_restores_on_error(self):
        with pytest.raises(KeyError):
            with use_backend('cpu'):
                raise KeyError('boom')
        assert get_default_backend() == 'numpy'


class TestListAvailable:

    def test_numpy_always_listed(self):
        assert list_available_backends()[0] == 'numpy'

    def test_without_torch(self, monkeypatch):
        monkeypatch.setattr(backends, 'TORCH_AVAILABLE', False)
        assert list_available_backends() == ['numpy']
