"""Interval bisection."""

from pynumerics.roots._base import BaseUnivariateSolver


class BisectionSolver(BaseUnivariateSolver):
    """
    Halve the bracket until it is narrower than absolute_accuracy.

    Slow (one bit per iteration) but cannot fail once the endpoints
    bracket a root. The start value is ignored.
    """

    @property
    def name(self) -> str:
        return 'bisection'

    def _do_solve(self) -> float:
        lo = self.lower
        hi = self.upper
        f_lo, _ = self.verify_bracketing(lo, hi)
        abs_acc = self.absolute_accuracy

        while True:
            self._increment_iteration(change=hi - lo)
            m = 0.5 * (lo + hi)
            f_m = self.compute_objective_value(m)

            if f_m * f_lo > 0:
                # no sign change between lo and m
                lo = m
                f_lo = f_m
            else:
                hi = m

            if abs(hi - lo) <= abs_acc:
                return self._accept(0.5 * (lo + hi))
