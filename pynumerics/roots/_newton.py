"""Newton-Raphson iteration."""

from typing import Any, Callable

from pynumerics.core.exceptions import ConvergenceError, ValidationError
from pynumerics.core.protocols import DifferentiableUnivariateFunction
from pynumerics.roots._base import BaseUnivariateSolver, verify_sequence


class NewtonSolver(BaseUnivariateSolver):
    """
    Newton's method x <- x - f(x) / f'(x), started from the start value.

    The function must provide derivative() (see DifferentiableFunction and
    PolynomialFunction). There is no bracket safeguard: the interval only
    constrains the start value, and iterates may leave it.
    """

    @property
    def name(self) -> str:
        return 'newton'

    def _prepare_function(self, f: Any) -> Callable[[float], float]:
        if not isinstance(f, DifferentiableUnivariateFunction):
            raise ValidationError(
                "f: Newton's method requires a function with a derivative() "
                "method, e.g. DifferentiableFunction(f, df)"
            )
        self._derivative = f.derivative()
        return f

    def _do_solve(self) -> float:
        verify_sequence(self.lower, self.start, self.upper)

        x0 = self.start
        while True:
            self._increment_iteration()
            fx = self.compute_objective_value(x0)
            dfx = float(self._derivative(x0))
            if dfx == 0.0:
                raise ConvergenceError(
                    f"newton: derivative vanished at x={x0}",
                    iterations=self.iterations,
                    reason='zero_derivative',
                    threshold=self.absolute_accuracy,
                )
            x1 = x0 - fx / dfx
            if abs(x1 - x0) <= self.absolute_accuracy:
                return self._accept(x1)
            x0 = x1
