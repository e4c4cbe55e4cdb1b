"""
Generic result container for PyNumerics computations.

The Result class provides a standardized envelope that iterative routines
use to report their answer. This enables shared tooling for timing,
convergence diagnostics, and reproducibility while allowing each routine
to define its own parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (converged, iterations, evaluations)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for numerical computations.

    Type Parameters:
        P: The routine-specific parameter payload type

    Attributes:
        params: Routine-specific payload (root, function value, ...)
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the algorithm that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=RootParams(root=1.4142135623730951, function_value=0.0),
        ...     info={'method': 'brent', 'converged': True, 'iterations': 7},
        ...     timing={'total_seconds': 0.0001},
        ...     backend_name='brent'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
