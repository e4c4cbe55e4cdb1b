"""
Muller's method restricted to a real bracket.

Fits a parabola through three points and takes the parabola's root that
lies inside the current interval. When the new point lands very close to
an end of the interval, a bisection step is taken instead so that the
bracket keeps shrinking.
"""

import math

from pynumerics.roots._base import (
    BaseUnivariateSolver,
    check_bracketing,
    is_sequence,
    sign,
    verify_sequence,
)


class MullerSolver(BaseUnivariateSolver):
    """
    Muller's method.

    The interval ends and the start value (default: midpoint) are the
    three initial interpolation points. The ends must bracket a root.
    """

    @property
    def name(self) -> str:
        return 'muller'

    def _do_solve(self) -> float:
        x0 = self.lower
        x2 = self.upper
        x1 = self.start
        fva = self.function_value_accuracy

        verify_sequence(x0, x1, x2)

        y0 = self.compute_objective_value(x0)
        if y0 == 0.0:
            return self._accept(x0, y0)
        y2 = self.compute_objective_value(x2)
        if y2 == 0.0:
            return self._accept(x2, y2)
        check_bracketing(x0, x2, y0, y2)

        y1 = self.compute_objective_value(x1)
        if abs(y1) <= fva:
            return self._accept(x1, y1)

        old_x = math.inf
        while True:
            self._increment_iteration(change=x2 - x0)

            # divided differences of the parabola through the three points
            d01 = (y1 - y0) / (x1 - x0)
            d12 = (y2 - y1) / (x2 - x1)
            d012 = (d12 - d01) / (x2 - x0)
            c1 = d01 + (x1 - x0) * d012
            delta = c1 * c1 - 4 * y1 * d012
            root_delta = math.sqrt(max(delta, 0.0))
            x_plus = x1 + (-2.0 * y1) / (c1 + root_delta) if c1 + root_delta != 0.0 else math.nan
            x_minus = x1 + (-2.0 * y1) / (c1 - root_delta) if c1 - root_delta != 0.0 else math.nan
            # the parabola has a root inside (x0, x2); take that one
            x = x_plus if is_sequence(x0, x_plus, x2) else x_minus
            if not is_sequence(x0, x, x2):
                x = x1

            y = self.compute_objective_value(x)

            if abs(x - old_x) <= self._config.tolerance(x) or abs(y) <= fva:
                return self._accept(x, y)

            bisect = (
                (x < x1 and (x1 - x0) > 0.95 * (x2 - x0))
                or (x > x1 and (x2 - x1) > 0.95 * (x2 - x0))
                or x == x1
            )

            if not bisect:
                if x > x1:
                    x0 = x1
                    y0 = y1
                else:
                    x2 = x1
                    y2 = y1
                x1 = x
                y1 = y
                old_x = x
            else:
                xm = 0.5 * (x0 + x2)
                ym = self.compute_objective_value(xm)
                if sign(y0) + sign(ym) == 0:
                    x2 = xm
                    y2 = ym
                else:
                    x0 = xm
                    y0 = ym
                x1 = 0.5 * (x0 + x2)
                y1 = self.compute_objective_value(x1)
                if abs(y1) <= fva:
                    return self._accept(x1, y1)
                old_x = math.inf
