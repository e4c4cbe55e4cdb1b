"""
Tests for PyNumerics exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyNumericsError)
    - Diagnostic attributes on SingularMatrixError, NotPositiveDefiniteError,
      ConvergenceError, NoBracketingError, DecompositionStateError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pynumerics.core.exceptions import (
    ConvergenceError,
    DecompositionStateError,
    DimensionError,
    InvalidIntervalError,
    NoBracketingError,
    NotPositiveDefiniteError,
    NumericalError,
    PyNumericsError,
    RankDeficientError,
    SingularMatrixError,
    SolverStateError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyNumericsError."""

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_interval_errors_are_validation_errors(self):
        assert issubclass(InvalidIntervalError, ValidationError)
        assert issubclass(NoBracketingError, ValidationError)

    def test_rank_deficient_is_singular(self):
        with pytest.raises(SingularMatrixError):
            raise RankDeficientError("rank deficient")

    def test_not_positive_definite_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise NotPositiveDefiniteError("not PD")

    def test_convergence_error_is_not_numerical_error(self):
        """ConvergenceError inherits from PyNumericsError, not NumericalError."""
        err = ConvergenceError("did not converge", iterations=100)
        assert isinstance(err, PyNumericsError)
        assert not isinstance(err, NumericalError)

    def test_state_errors_are_pynumerics_errors(self):
        assert issubclass(DecompositionStateError, PyNumericsError)
        assert issubclass(SolverStateError, PyNumericsError)
        assert not issubclass(DecompositionStateError, ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = RankDeficientError(
            "R has a zero diagonal",
            matrix_name="value",
            rank=3,
            expected_rank=4,
        )
        assert str(err) == "R has a zero diagonal"
        assert err.matrix_name == "value"
        assert err.rank == 3
        assert err.expected_rank == 4
        assert err.condition_number is None

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.rank is None


class TestNotPositiveDefiniteError:

    def test_attributes(self):
        err = NotPositiveDefiniteError(
            "square root needs positive eigenvalues",
            matrix_name="matrix",
            min_eigenvalue=-0.5,
        )
        assert err.matrix_name == "matrix"
        assert err.min_eigenvalue == -0.5


class TestConvergenceError:
    """ConvergenceError carries iteration diagnostics."""

    def test_all_attributes(self):
        err = ConvergenceError(
            "brent: no convergence within 100 iterations",
            iterations=100,
            final_change=1e-3,
            reason="max_iterations",
            threshold=1e-6,
        )
        assert err.iterations == 100
        assert err.final_change == 1e-3
        assert err.reason == "max_iterations"
        assert err.threshold == 1e-6

    def test_defaults_are_none(self):
        err = ConvergenceError("failed", iterations=10)
        assert err.final_change is None
        assert err.reason is None
        assert err.threshold is None


class TestIntervalErrors:

    def test_invalid_interval_attributes(self):
        err = InvalidIntervalError("empty", lower=2.0, upper=1.0)
        assert err.lower == 2.0
        assert err.upper == 1.0

    def test_no_bracketing_attributes(self):
        with pytest.raises(NoBracketingError) as exc_info:
            raise NoBracketingError(
                "same sign", lower=0.0, upper=1.0, f_lower=1.0, f_upper=2.0
            )
        err = exc_info.value
        assert (err.lower, err.upper) == (0.0, 1.0)
        assert (err.f_lower, err.f_upper) == (1.0, 2.0)


class TestStateErrors:

    def test_decomposition_state(self):
        err = DecompositionStateError("gone", state="destroyed")
        assert err.state == "destroyed"
        assert str(err) == "gone"

    def test_solver_state(self):
        err = SolverStateError("no result", state="failed")
        assert err.state == "failed"
