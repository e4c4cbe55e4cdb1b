"""
Exception hierarchy for PyNumerics.

All exceptions inherit from PyNumericsError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyNumericsError(Exception):
    """Base exception for all PyNumerics errors."""
    pass


class ValidationError(PyNumericsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a matrix is not square where it must be, or when the
    right-hand side of a solve does not match the factorized matrix.
    """
    pass


class InvalidIntervalError(ValidationError):
    """
    Search interval is empty or the initial guess lies outside it.

    Attributes:
        lower: Lower end of the rejected interval
        upper: Upper end of the rejected interval
    """

    def __init__(self, message: str, lower: float, upper: float):
        super().__init__(message)
        self.lower = lower
        self.upper = upper


class NoBracketingError(ValidationError):
    """
    Function values at the interval ends do not have opposite signs.

    Raised by bracketing root finders before any iteration is attempted.

    Attributes:
        lower: Lower end of the interval
        upper: Upper end of the interval
        f_lower: Function value at lower
        f_upper: Function value at upper
    """

    def __init__(
        self,
        message: str,
        lower: float,
        upper: float,
        f_lower: float,
        f_upper: float,
    ):
        super().__init__(message)
        self.lower = lower
        self.upper = upper
        self.f_lower = f_lower
        self.f_upper = f_upper


class NumericalError(PyNumericsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class RankDeficientError(SingularMatrixError):
    """
    The triangular factor of a QR decomposition has a zero on its diagonal.

    Least-squares solves and inverses are undefined in that case.
    """
    pass


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when an operation requires a positive definite matrix
    (e.g., solving with a non-robust Cholesky factor) but the matrix
    fails this requirement.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        min_eigenvalue: Minimum eigenvalue, if computed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        min_eigenvalue: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.min_eigenvalue = min_eigenvalue


class ConvergenceError(PyNumericsError):
    """
    Iterative algorithm failed to converge.

    Raised when a root finder, the QL eigenvalue iteration, or a continued
    fraction fails to meet its convergence criterion within the allowed
    number of iterations, or diverges on the way.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final step or relative change, if known
        reason: Why convergence failed ('max_iterations', 'infinite', 'nan')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold


class DecompositionStateError(PyNumericsError):
    """
    A factorization is being used in a state that forbids it.

    Attributes:
        state: 'destroyed' after an in-place destructive operation, or
            'undefined' when an LDL' factorization hit a zero pivot
    """

    def __init__(self, message: str, state: str):
        super().__init__(message)
        self.state = state


class SolverStateError(PyNumericsError):
    """
    A root finder was queried for a result it does not have.

    Attributes:
        state: The solver state at the time of the query
    """

    def __init__(self, message: str, state: str):
        super().__init__(message)
        self.state = state
