"""
Generic result container for pymatrix computations.

The Result class provides a standardized envelope for algorithm outputs
that carry more than a single matrix: which branch ran, how long each
stage took, which backend did the work, and any non-fatal issues.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (branch, norm, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The algorithm-specific payload type

    Attributes:
        params: Algorithm-specific payload (result matrix, selected order, ...)
        info: Structured metadata
        timing: Execution timing breakdown, or None if not measured
        backend_name: Name of the factory whose matrices did the work
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=ExpmParams(matrix=R, pade_order=13, n_squarings=3, norm_1=30.2),
        ...     info={'method': 'pade_scaling_squaring'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='numpy_cpu'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
