"""
Brent's zero-in algorithm.

Combines inverse quadratic interpolation, the secant rule and bisection.
It keeps the root bracketed at every step and is guaranteed to converge
for any continuous function with a sign change, usually superlinearly.

Reference:
    Brent, R. P. (1973). Algorithms for Minimization Without Derivatives,
    Chapter 4. Prentice-Hall.
"""

from pynumerics.core.exceptions import NoBracketingError
from pynumerics.roots._base import BaseUnivariateSolver, verify_sequence


class BrentSolver(BaseUnivariateSolver):
    """
    Brent's method. The default solver of find_root().

    The start value splits the interval: the sub-interval whose ends
    have opposite signs is searched.
    """

    @property
    def name(self) -> str:
        return 'brent'

    def _do_solve(self) -> float:
        lo = self.lower
        hi = self.upper
        initial = self.start
        fva = self.function_value_accuracy

        verify_sequence(lo, initial, hi)

        # Return the initial guess if it is good enough.
        y_initial = self.compute_objective_value(initial)
        if abs(y_initial) <= fva:
            return self._accept(initial, y_initial)

        y_lo = self.compute_objective_value(lo)
        if abs(y_lo) <= fva:
            return self._accept(lo, y_lo)
        if y_initial * y_lo < 0:
            return self._brent(lo, initial, y_lo, y_initial)

        y_hi = self.compute_objective_value(hi)
        if abs(y_hi) <= fva:
            return self._accept(hi, y_hi)
        if y_initial * y_hi < 0:
            return self._brent(initial, hi, y_initial, y_hi)

        raise NoBracketingError(
            f"Function values at endpoints do not have different signs: "
            f"f({lo})={y_lo}, f({hi})={y_hi}",
            lower=lo,
            upper=hi,
            f_lower=y_lo,
            f_upper=y_hi,
        )

    def _brent(self, lo: float, hi: float, f_lo: float, f_hi: float) -> float:
        a = lo
        fa = f_lo
        b = hi
        fb = f_hi
        c = a
        fc = fa
        d = b - a
        e = d

        t = self.absolute_accuracy
        eps = self.relative_accuracy

        while True:
            if abs(fc) < abs(fb):
                a = b
                b = c
                c = a
                fa = fb
                fb = fc
                fc = fa

            tol = 2 * eps * abs(b) + t
            m = 0.5 * (c - b)

            if abs(m) <= tol or fb == 0:
                return self._accept(b, fb)

            self._increment_iteration(change=abs(m))

            if abs(e) < tol or abs(fa) <= abs(fb):
                # force bisection
                d = m
                e = d
            else:
                s = fb / fa
                if a == c:
                    # linear interpolation
                    p = 2 * m * s
                    q = 1 - s
                else:
                    # inverse quadratic interpolation
                    q = fa / fc
                    r = fb / fc
                    p = s * (2 * m * q * (q - r) - (b - a) * (r - 1))
                    q = (q - 1) * (r - 1) * (s - 1)
                if p > 0:
                    q = -q
                else:
                    p = -p
                s = e
                e = d
                if p >= 1.5 * m * q - abs(tol * q) or p >= abs(0.5 * s * q):
                    # interpolation rejected, fall back to bisection
                    d = m
                    e = d
                else:
                    d = p / q

            a = b
            fa = fb

            if abs(d) > tol:
                b += d
            elif m > 0:
                b += tol
            else:
                b -= tol
            fb = self.compute_objective_value(b)
            if (fb > 0 and fc > 0) or (fb <= 0 and fc <= 0):
                c = a
                fc = fa
                d = b - a
                e = d
