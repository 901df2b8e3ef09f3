"""
Backend kind constants for pymatrix.

This module is the SINGLE SOURCE OF TRUTH for backend tags.
Import from here, never use raw strings.

Every Matrix reports one of these through its ``backend_kind`` property.
Reconciliation refuses any operand whose declared tag is unknown or
differs from the driving matrix's. The exponential engine never looks at it.

Usage:
    from pymatrix.core.capabilities import BACKEND_NUMPY, BACKEND_TORCH

    if mat.backend_kind == BACKEND_TORCH:
        tensor = mat.base_matrix
"""

# numpy.ndarray, float64, always on CPU
BACKEND_NUMPY = 'numpy'

# torch.Tensor, float64, on CPU or CUDA
BACKEND_TORCH = 'torch'

# All known backend kinds as a frozenset for validation
ALL_BACKENDS = frozenset({
    BACKEND_NUMPY,
    BACKEND_TORCH,
})

__all__ = [
    'BACKEND_NUMPY',
    'BACKEND_TORCH',
    'ALL_BACKENDS',
]
