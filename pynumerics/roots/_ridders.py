"""
Ridders' method.

Each iteration evaluates the midpoint of the bracket and applies an
exponential correction that makes the three points collinear, then
shrinks the bracket around the corrected point. Convergence is quadratic
and the root stays bracketed throughout.

Reference:
    Ridders, C. (1979). A new algorithm for computing a single root of a
    real continuous function. IEEE Transactions on Circuits and Systems,
    26(11), 979-980.
"""

import math

from pynumerics.roots._base import (
    BaseUnivariateSolver,
    check_bracketing,
    sign,
    verify_interval,
)


class RiddersSolver(BaseUnivariateSolver):
    """Ridders' method. The ends must bracket a root; start is ignored."""

    @property
    def name(self) -> str:
        return 'ridders'

    def _do_solve(self) -> float:
        x1 = self.lower
        x2 = self.upper
        fva = self.function_value_accuracy

        verify_interval(x1, x2)

        y1 = self.compute_objective_value(x1)
        if y1 == 0.0:
            return self._accept(x1, y1)
        y2 = self.compute_objective_value(x2)
        if y2 == 0.0:
            return self._accept(x2, y2)
        check_bracketing(x1, x2, y1, y2)

        old_x = math.inf
        while True:
            self._increment_iteration(change=x2 - x1)

            x3 = 0.5 * (x1 + x2)
            y3 = self.compute_objective_value(x3)
            if abs(y3) <= fva:
                return self._accept(x3, y3)

            # delta > 1 because of the sign change across [x1, x2]
            delta = 1 - (y1 * y2) / (y3 * y3)
            correction = sign(y2) * sign(y3) * (x3 - x1) / math.sqrt(delta)
            x = x3 - correction
            y = self.compute_objective_value(x)

            if abs(x - old_x) <= self._config.tolerance(x):
                return self._accept(x, y)
            if abs(y) <= fva:
                return self._accept(x, y)

            if correction > 0.0:
                # x1 < x < x3
                if sign(y1) + sign(y) == 0:
                    x2 = x
                    y2 = y
                else:
                    x1 = x
                    x2 = x3
                    y1 = y
                    y2 = y3
            else:
                # x3 < x < x2
                if sign(y2) + sign(y) == 0:
                    x1 = x
                    y1 = y
                else:
                    x1 = x3
                    x2 = x
                    y1 = y3
                    y2 = y
            old_x = x
