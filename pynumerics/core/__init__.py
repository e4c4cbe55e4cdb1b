"""
Core infrastructure for PyNumerics.

This module provides shared abstractions and utilities used by the
linear algebra, root finding and special function submodules.

Key components:
    protocols: UnivariateFunction, DifferentiableUnivariateFunction,
        DecompositionSolver protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and accuracy settings
"""

from pynumerics.core.protocols import (
    UnivariateFunction,
    DifferentiableUnivariateFunction,
    DecompositionSolver,
)
from pynumerics.core.result import Result
from pynumerics.core.exceptions import (
    PyNumericsError,
    ValidationError,
    DimensionError,
    InvalidIntervalError,
    NoBracketingError,
    NumericalError,
    SingularMatrixError,
    RankDeficientError,
    NotPositiveDefiniteError,
    ConvergenceError,
    DecompositionStateError,
    SolverStateError,
)

__all__ = [
    # Protocols
    "UnivariateFunction",
    "DifferentiableUnivariateFunction",
    "DecompositionSolver",
    # Result
    "Result",
    # Exceptions
    "PyNumericsError",
    "ValidationError",
    "DimensionError",
    "InvalidIntervalError",
    "NoBracketingError",
    "NumericalError",
    "SingularMatrixError",
    "RankDeficientError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
    "DecompositionStateError",
    "SolverStateError",
]
