"""
Tolerance tiers for numerical validation.

Defines precision expectations for the float64 compute paths:
- NumPy (reference): machine precision match with SciPy
- PyTorch CPU: same as NumPy, different BLAS
- PyTorch CUDA: relaxed slightly for cuBLAS reduction order

Used by the test suite to compare backends against each other and
against scipy.linalg.expm.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# NumPy reference backend
NUMPY_FP64 = ToleranceTier(
    rtol=1e-12,
    atol=1e-12,
    name='numpy_fp64',
    description='NumPy double precision, reference',
)

# PyTorch on CPU
TORCH_CPU_FP64 = ToleranceTier(
    rtol=1e-11,
    atol=1e-12,
    name='torch_cpu_fp64',
    description='PyTorch double precision on CPU, matches reference',
)

# PyTorch on CUDA
TORCH_CUDA_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-11,
    name='torch_cuda_fp64',
    description='PyTorch double precision on CUDA',
)

# Large-norm inputs: repeated squaring amplifies rounding error
SCALED_FP64 = ToleranceTier(
    rtol=1e-8,
    atol=1e-10,
    name='scaled_fp64',
    description='Any float64 backend after many squarings',
)


def select_tolerance(backend_name: str, n_squarings: int = 0) -> ToleranceTier:
    """Select appropriate tolerance tier for a given factory name."""
    if n_squarings > 5:
        return SCALED_FP64
    if 'cuda' in backend_name:
        return TORCH_CUDA_FP64
    if 'torch' in backend_name:
        return TORCH_CPU_FP64
    return NUMPY_FP64
