"""
Execution timing utilities.

Provides accurate timing for both CPU and GPU matrix work, handling
CUDA synchronization automatically for accurate GPU measurements.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating timer with optional CUDA synchronization.

    When sync_cuda=True, synchronizes CUDA before each measurement so that
    queued GPU kernels are included in the section that launched them.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('pade'):
            U, V = pade13(A)

        with timer.section('solve'):
            R = combine(U, V)

        timer.stop()
        result = timer.result()
        # {'total_seconds': 0.05, 'pade': 0.03, 'solve': 0.02}
    """

    def __init__(self, sync_cuda: bool = False):
        """
        Initialize timer.

        Args:
            sync_cuda: If True, synchronize CUDA before timing measurements.
        """
        self._sync_cuda = sync_cuda
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def _sync(self) -> None:
        """Synchronize CUDA if enabled and available."""
        if self._sync_cuda:
            try:
                import torch
            except ImportError:
                return
            if torch.cuda.is_available():
                torch.cuda.synchronize()

    def start(self) -> None:
        """Start the overall timer."""
        self._sync()
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the overall timer."""
        self._sync()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time a named section.

        Repeated sections with the same name accumulate.
        """
        self._sync()
        start = time.perf_counter()
        try:
            yield
        finally:
            self._sync()
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """
        Get timing results.

        Returns:
            Dictionary with 'total_seconds' and all section timings

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result
