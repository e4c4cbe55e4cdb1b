"""Secant method with bracket retention."""

from pynumerics.roots._base import BaseUnivariateSolver, check_bracketing, verify_interval


class SecantSolver(BaseUnivariateSolver):
    """
    Secant iteration that keeps a sign-changing bracket around the root.

    The most recent iterate and the last point of opposite sign are kept.
    When the secant step would leave the bracket or the function value
    grows, the step falls back to bisection. Requires bracketing ends.
    """

    @property
    def name(self) -> str:
        return 'secant'

    def _do_solve(self) -> float:
        x0 = self.lower
        x1 = self.upper
        verify_interval(x0, x1)

        y0 = self.compute_objective_value(x0)
        y1 = self.compute_objective_value(x1)

        if y0 == 0.0:
            return self._accept(x0, y0)
        if y1 == 0.0:
            return self._accept(x1, y1)

        check_bracketing(x0, x1, y0, y1)

        x2 = x0
        y2 = y0
        old_delta = x2 - x1

        while True:
            self._increment_iteration(change=abs(old_delta))

            if abs(y2) < abs(y1):
                # keep the better approximation in x1
                x0 = x1
                x1 = x2
                x2 = x0
                y0 = y1
                y1 = y2
                y2 = y0

            if abs(y1) <= self.function_value_accuracy:
                return self._accept(x1, y1)
            if abs(old_delta) < self._config.tolerance(x1):
                return self._accept(x1, y1)

            if abs(y1) > abs(y0) or y0 == y1:
                delta = 0.5 * old_delta
            else:
                delta = (x0 - x1) / (1 - y0 / y1)
                if delta / old_delta > 1:
                    delta = 0.5 * old_delta

            x0 = x1
            y0 = y1
            x1 = x1 + delta
            y1 = self.compute_objective_value(x1)

            if (y1 > 0) == (y2 > 0):
                # new bracket is (x0, x1)
                x2 = x0
                y2 = y0
            old_delta = x2 - x1
