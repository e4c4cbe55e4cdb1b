"""
Accuracy settings and numerical thresholds.

Defines the convergence criteria shared by the root finders and the fixed
thresholds used by the decompositions:
- SolverConfig: per-solver accuracies and iteration cap (frozen, passed
  at construction, derive variants with dataclasses.replace)
- Decomposition thresholds: positive-definite test, QL iteration cap
- Continued fraction defaults

There is no mutable module-level state here; everything is a constant or
an immutable value.
"""

from dataclasses import dataclass

import numpy as np

from pynumerics.core.validation import check_positive


# Relative accuracy on the abscissa
DEFAULT_RELATIVE_ACCURACY = 1e-14

# Accuracy on |f(x)| at which a point is accepted as a root
DEFAULT_FUNCTION_VALUE_ACCURACY = 1e-15

# Absolute accuracy on the abscissa
DEFAULT_ABSOLUTE_ACCURACY = 1e-6

DEFAULT_MAX_ITERATIONS = 100

# Implicit QL sweeps allowed per eigenvalue
EIGEN_MAX_ITERATIONS = 30

# LL' flags a pivot s as not positive when s <= tol * |A[j,j]|
POSITIVE_DEFINITE_TOLERANCE = 1e-14

# Relative tolerance for the symmetry check in EigenDecomposition
SYMMETRY_TOLERANCE = 1e-12

MACHINE_EPSILON = float(np.finfo(np.float64).eps)

CONTINUED_FRACTION_EPSILON = 1e-8


@dataclass(frozen=True)
class SolverConfig:
    """
    Convergence settings for a univariate solver.

    Attributes:
        absolute_accuracy: Stop when the bracket or step is below this
        relative_accuracy: Stop when the step is below this times |x|
        function_value_accuracy: Accept x as a root when |f(x)| is below this
        max_iterations: Iterations allowed before ConvergenceError
    """
    absolute_accuracy: float = DEFAULT_ABSOLUTE_ACCURACY
    relative_accuracy: float = DEFAULT_RELATIVE_ACCURACY
    function_value_accuracy: float = DEFAULT_FUNCTION_VALUE_ACCURACY
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        check_positive(self.absolute_accuracy, 'absolute_accuracy')
        check_positive(self.relative_accuracy, 'relative_accuracy')
        check_positive(self.function_value_accuracy, 'function_value_accuracy')
        check_positive(self.max_iterations, 'max_iterations')

    def tolerance(self, x: float) -> float:
        """Step tolerance at abscissa x: max(relative * |x|, absolute)."""
        return max(self.relative_accuracy * abs(x), self.absolute_accuracy)


DEFAULT_SOLVER_CONFIG = SolverConfig()
