"""
Shared machinery for the univariate root finders.

Every solver follows the same lifecycle:

    INITIALIZED --iterate--> BRACKETING --converge--> CONVERGED
                                 |
                                 +--cap exceeded / no bracket--> FAILED

solve() resets the per-call state (bracket, counters, result), runs the
algorithm-specific _do_solve(), and records the outcome. A solver object
can be reused; its fields always describe the most recent call.
"""

from __future__ import annotations

import enum
import math
import numbers
from abc import ABC, abstractmethod
from typing import Any, Callable

from pynumerics.core.compute.tolerances import DEFAULT_SOLVER_CONFIG, SolverConfig
from pynumerics.core.exceptions import (
    ConvergenceError,
    InvalidIntervalError,
    NoBracketingError,
    PyNumericsError,
    SolverStateError,
    ValidationError,
)
from pynumerics.core.validation import check_interval


class SolverState(enum.Enum):
    """Lifecycle of a solve() call."""
    INITIALIZED = 'initialized'
    BRACKETING = 'bracketing'
    CONVERGED = 'converged'
    FAILED = 'failed'


def is_sequence(start: float, mid: float, end: float) -> bool:
    """True if start < mid < end."""
    return start < mid < end


def verify_interval(lower: float, upper: float) -> None:
    """
    Raises:
        InvalidIntervalError: If lower >= upper
    """
    if lower >= upper:
        raise InvalidIntervalError(
            f"Endpoints do not specify an interval: [{lower}, {upper}]",
            lower=lower,
            upper=upper,
        )


def verify_sequence(lower: float, initial: float, upper: float) -> None:
    """
    Raises:
        InvalidIntervalError: Unless lower < initial < upper
    """
    verify_interval(lower, initial)
    verify_interval(initial, upper)


def sign(x: float) -> int:
    return (x > 0) - (x < 0)


class BaseUnivariateSolver(ABC):
    """
    Base class for root finders of a real function of one variable.

    Args:
        config: Accuracies and iteration cap. Defaults to
            DEFAULT_SOLVER_CONFIG (absolute 1e-6, relative 1e-14,
            function value 1e-15, 100 iterations).

    Subclasses implement _do_solve() and may override _prepare_function()
    to require more than a plain callable.
    """

    def __init__(self, config: SolverConfig | None = None):
        self._config = config if config is not None else DEFAULT_SOLVER_CONFIG
        self._function: Callable[[float], float] | None = None
        self._lower = float('nan')
        self._upper = float('nan')
        self._start = float('nan')
        self._iterations = 0
        self._evaluations = 0
        self._result: float | None = None
        self._function_value: float | None = None
        self._state = SolverState.INITIALIZED
        self._warnings: list[str] = []

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def config(self) -> SolverConfig:
        return self._config

    @property
    def absolute_accuracy(self) -> float:
        return self._config.absolute_accuracy

    @property
    def relative_accuracy(self) -> float:
        return self._config.relative_accuracy

    @property
    def function_value_accuracy(self) -> float:
        return self._config.function_value_accuracy

    @property
    def max_iterations(self) -> int:
        return self._config.max_iterations

    # ------------------------------------------------------------------
    # Per-call state
    # ------------------------------------------------------------------

    @property
    def state(self) -> SolverState:
        return self._state

    @property
    def lower(self) -> float:
        return self._lower

    @property
    def upper(self) -> float:
        return self._upper

    @property
    def start(self) -> float:
        return self._start

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def evaluations(self) -> int:
        """Number of function evaluations in the last solve."""
        return self._evaluations

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(self._warnings)

    @property
    def result(self) -> float:
        """
        Root found by the last successful solve().

        Raises:
            SolverStateError: If the last call did not converge
        """
        if self._state is not SolverState.CONVERGED or self._result is None:
            raise SolverStateError(
                f"No result available: solver state is {self._state.value}",
                state=self._state.value,
            )
        return self._result

    @property
    def function_value(self) -> float | None:
        """f(result) when the algorithm evaluated it, else None."""
        if self._state is not SolverState.CONVERGED:
            raise SolverStateError(
                f"No result available: solver state is {self._state.value}",
                state=self._state.value,
            )
        return self._function_value

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def solve(
        self,
        f: Callable[[float], float],
        lower: float,
        upper: float,
        start: float | None = None,
    ) -> float:
        """
        Find a root of f in [lower, upper].

        Args:
            f: Function whose root is sought
            lower: Lower end of the search interval
            upper: Upper end of the search interval
            start: Initial guess; defaults to the midpoint. Only used by
                algorithms that start from a point.

        Returns:
            The root, or NaN (state FAILED) when the algorithm reports that
            no root could be located

        Raises:
            InvalidIntervalError: If lower >= upper (or start is outside)
            NoBracketingError: If a bracketing algorithm gets same-sign ends
            ConvergenceError: If max_iterations is exceeded
        """
        check_interval(lower, upper)
        if start is None:
            start = lower + 0.5 * (upper - lower)
        elif not isinstance(start, numbers.Real) or isinstance(start, bool):
            raise ValidationError(
                f"start: must be a real number, got {type(start).__name__}"
            )

        self._setup(self._prepare_function(f), float(lower), float(upper), float(start))
        try:
            root = self._do_solve()
        except PyNumericsError:
            self._state = SolverState.FAILED
            raise
        if math.isnan(root):
            # no root located; the warning explains why
            self._state = SolverState.FAILED
            return root
        self._result = root
        self._state = SolverState.CONVERGED
        return root

    def _setup(
        self,
        f: Callable[[float], float],
        lower: float,
        upper: float,
        start: float,
    ) -> None:
        self._function = f
        self._lower = lower
        self._upper = upper
        self._start = start
        self._reset_counters()

    def _reset_counters(self) -> None:
        self._iterations = 0
        self._evaluations = 0
        self._result = None
        self._function_value = None
        self._warnings = []
        self._state = SolverState.INITIALIZED

    def _prepare_function(self, f: Any) -> Callable[[float], float]:
        if not callable(f):
            raise ValidationError(
                f"f: must be callable, got {type(f).__name__}"
            )
        return f

    @abstractmethod
    def _do_solve(self) -> float:
        ...

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def compute_objective_value(self, x: float) -> float:
        """Evaluate the function, counting the evaluation."""
        self._evaluations += 1
        return float(self._function(x))

    def _increment_iteration(
        self,
        change: float | None = None,
        steps: int | None = None,
    ) -> None:
        """
        Count one iteration and enforce the cap.

        Args:
            change: Last step size, reported if the cap is exceeded
            steps: Iterations of the current sub-search when the cap
                applies to it rather than to the whole call
        """
        self._iterations += 1
        self._state = SolverState.BRACKETING
        count = self._iterations if steps is None else steps
        if count > self._config.max_iterations:
            raise ConvergenceError(
                f"{self.name}: no convergence within "
                f"{self._config.max_iterations} iterations",
                iterations=self._config.max_iterations,
                final_change=change,
                reason='max_iterations',
                threshold=self._config.absolute_accuracy,
            )

    def _accept(self, x: float, fx: float | None = None) -> float:
        self._function_value = fx
        return x

    def is_bracketing(self, lower: float, upper: float) -> bool:
        """True if f(lower) and f(upper) do not have the same strict sign."""
        f_lo = self.compute_objective_value(lower)
        f_hi = self.compute_objective_value(upper)
        return _opposite_or_zero(f_lo, f_hi)

    def verify_bracketing(self, lower: float, upper: float) -> tuple[float, float]:
        """
        Check the interval and the sign change of f across it.

        Returns:
            (f(lower), f(upper)) so callers need not evaluate them again

        Raises:
            InvalidIntervalError: If lower >= upper
            NoBracketingError: If f(lower) and f(upper) have the same sign
        """
        verify_interval(lower, upper)
        f_lo = self.compute_objective_value(lower)
        f_hi = self.compute_objective_value(upper)
        check_bracketing(lower, upper, f_lo, f_hi)
        return f_lo, f_hi

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._config!r})"


def _opposite_or_zero(f_lo: float, f_hi: float) -> bool:
    return (f_lo >= 0 and f_hi <= 0) or (f_lo <= 0 and f_hi >= 0)


def check_bracketing(lower: float, upper: float, f_lo: float, f_hi: float) -> None:
    """
    Raises:
        NoBracketingError: If f_lo and f_hi have the same strict sign
    """
    if not _opposite_or_zero(f_lo, f_hi):
        raise NoBracketingError(
            f"Function values at endpoints do not have different signs: "
            f"f({lower})={f_lo}, f({upper})={f_hi}",
            lower=lower,
            upper=upper,
            f_lower=f_lo,
            f_upper=f_hi,
        )
