"""
Shared compute infrastructure for pymatrix.

This module provides hardware detection, timing utilities, and tolerance
tiers shared across all backends.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    tolerances: Per-backend numerical tolerances
"""

from pymatrix.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pymatrix.core.compute.timing import Timer

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
]
