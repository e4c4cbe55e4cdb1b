"""
Laguerre's method for polynomial roots.

Laguerre's iteration converges from almost any starting point, to real or
complex roots, cubically near a simple root. The iteration itself runs in
complex arithmetic; the real-interval solve() then keeps a root only if
it is real and inside the requested bracket, falling back to computing
all roots by successive deflation.

Reference:
    Press, W. H. et al. Numerical Recipes, section 9.5 (Roots of Polynomials).
"""

from __future__ import annotations

import cmath
import math
import warnings
from typing import Any, Callable, Sequence

from pynumerics.core.exceptions import (
    ConvergenceError,
    NoBracketingError,
    PyNumericsError,
    ValidationError,
)
from pynumerics.roots._base import (
    BaseUnivariateSolver,
    SolverState,
    is_sequence,
    verify_sequence,
)
from pynumerics.roots.functions import PolynomialFunction


class LaguerreSolver(BaseUnivariateSolver):
    """
    Laguerre's method.

    solve() accepts a PolynomialFunction or a sequence of real
    coefficients in ascending powers. solve_complex() and
    solve_all_complex() expose the underlying complex iteration.
    """

    @property
    def name(self) -> str:
        return 'laguerre'

    def _prepare_function(self, f: Any) -> Callable[[float], float]:
        if isinstance(f, PolynomialFunction):
            polynomial = f
        elif isinstance(f, (list, tuple)) or hasattr(f, '__array__'):
            polynomial = PolynomialFunction(f)
        else:
            raise ValidationError(
                "f: Laguerre's method requires a PolynomialFunction or a "
                f"sequence of coefficients, got {type(f).__name__}"
            )
        self._coefficients = [complex(c) for c in polynomial.coefficients]
        return polynomial

    def _do_solve(self) -> float:
        lo = self.lower
        hi = self.upper
        initial = self.start
        fva = self.function_value_accuracy

        verify_sequence(lo, initial, hi)

        y_initial = self.compute_objective_value(initial)
        if abs(y_initial) <= fva:
            return self._accept(initial, y_initial)

        y_lo = self.compute_objective_value(lo)
        if abs(y_lo) <= fva:
            return self._accept(lo, y_lo)
        if y_initial * y_lo < 0:
            return self._laguerre(lo, initial)

        y_hi = self.compute_objective_value(hi)
        if abs(y_hi) <= fva:
            return self._accept(hi, y_hi)
        if y_initial * y_hi < 0:
            return self._laguerre(initial, hi)

        raise NoBracketingError(
            f"Function values at endpoints do not have different signs: "
            f"f({lo})={y_lo}, f({hi})={y_hi}",
            lower=lo,
            upper=hi,
            f_lower=y_lo,
            f_upper=y_hi,
        )

    def _laguerre(self, lo: float, hi: float) -> float:
        c = self._coefficients
        initial = complex(0.5 * (lo + hi), 0.0)

        z = self._solve_complex(c, initial)
        if self._is_root(lo, hi, z):
            return self._accept(z.real, self.compute_objective_value(z.real))

        for root in self._solve_all_complex(c, initial):
            if self._is_root(lo, hi, root):
                return self._accept(root.real, self.compute_objective_value(root.real))

        message = (
            f"laguerre: no real root found in [{lo}, {hi}] although the "
            f"interval brackets a sign change"
        )
        self._warnings.append(message)
        warnings.warn(message, RuntimeWarning, stacklevel=4)
        return math.nan

    def _is_root(self, lower: float, upper: float, z: complex) -> bool:
        if is_sequence(lower, z.real, upper):
            tolerance = self._config.tolerance(abs(z))
            return abs(z.imag) <= tolerance or abs(z) <= self.function_value_accuracy
        return False

    # ------------------------------------------------------------------
    # Complex roots
    # ------------------------------------------------------------------

    def solve_complex(
        self,
        coefficients: Sequence[complex] | Any,
        initial: complex,
    ) -> complex:
        """
        Find one complex root of a polynomial.

        Args:
            coefficients: Polynomial coefficients in ascending powers
            initial: Starting point

        Returns:
            A root, not necessarily the one closest to initial

        Raises:
            ValidationError: If the polynomial has degree < 1
            ConvergenceError: If max_iterations is exceeded
        """
        c = _complex_coefficients(coefficients)
        self._reset_counters()
        try:
            root = self._solve_complex(c, complex(initial))
        except PyNumericsError:
            self._state = SolverState.FAILED
            raise
        self._state = SolverState.CONVERGED
        return root

    def solve_all_complex(
        self,
        coefficients: Sequence[complex] | Any,
        initial: complex,
    ) -> list[complex]:
        """
        Find all complex roots of a polynomial by successive deflation.

        Each root found is divided out of the polynomial (synthetic
        division) before searching for the next one.

        Args:
            coefficients: Polynomial coefficients in ascending powers
            initial: Starting point for every search

        Returns:
            The degree-many roots, with multiplicity, in the order found

        Raises:
            ValidationError: If the polynomial has degree < 1
            ConvergenceError: If max_iterations is exceeded
        """
        c = _complex_coefficients(coefficients)
        self._reset_counters()
        try:
            roots = self._solve_all_complex(c, complex(initial))
        except PyNumericsError:
            self._state = SolverState.FAILED
            raise
        self._state = SolverState.CONVERGED
        return roots

    def _solve_all_complex(self, coefficients: list[complex], initial: complex) -> list[complex]:
        n = len(coefficients) - 1
        if n < 1:
            raise ValidationError("coefficients: polynomial must have degree >= 1")

        c = list(coefficients)
        roots: list[complex] = []
        for i in range(n):
            root = self._solve_complex(c[:n - i + 1], initial)
            roots.append(root)

            # deflate: divide out (x - root)
            new_c = c[n - i]
            for j in range(n - i - 1, -1, -1):
                old = c[j]
                c[j] = new_c
                new_c = old + new_c * root
        return roots

    def _solve_complex(self, coefficients: list[complex], initial: complex) -> complex:
        n = len(coefficients) - 1
        if n < 1:
            raise ValidationError("coefficients: polynomial must have degree >= 1")

        rel = self.relative_accuracy
        abs_acc = self.absolute_accuracy
        fva = self.function_value_accuracy

        z = initial
        old_z = complex(math.inf, math.inf)
        steps = 0
        while True:
            # value, first and second derivative in one Horner pass
            pv = coefficients[n]
            dv = 0j
            d2v = 0j
            for j in range(n - 1, -1, -1):
                d2v = dv + z * d2v
                dv = pv + z * dv
                pv = coefficients[j] + z * pv
            d2v = d2v * 2.0

            tolerance = max(rel * abs(z), abs_acc)
            if abs(z - old_z) <= tolerance:
                return z
            if abs(pv) <= fva:
                return z

            # the cap bounds each root; iterations accumulates over all of them
            steps += 1
            self._increment_iteration(change=abs(z - old_z), steps=steps)

            g = dv / pv
            g2 = g * g
            h = g2 - d2v / pv
            delta = (n - 1) * (n * h - g2)
            delta_sqrt = cmath.sqrt(delta)
            d_plus = g + delta_sqrt
            d_minus = g - delta_sqrt
            denominator = d_plus if abs(d_plus) > abs(d_minus) else d_minus

            if denominator == 0:
                # perturb off a stationary point
                z = z + complex(abs_acc, abs_acc)
                old_z = complex(math.inf, math.inf)
            else:
                old_z = z
                z = z - n / denominator

            if not cmath.isfinite(z):
                raise ConvergenceError(
                    f"{self.name}: iterate diverged to {z} after {steps} "
                    f"iterations",
                    iterations=steps,
                    reason='nan',
                    threshold=abs_acc,
                )


def _complex_coefficients(coefficients: Any) -> list[complex]:
    try:
        c = [complex(x) for x in coefficients]
    except (TypeError, ValueError) as e:
        raise ValidationError(f"coefficients: cannot convert to complex: {e}") from e
    if not c:
        raise ValidationError("coefficients: empty polynomial")
    # trailing zeros would make the degree wrong
    while len(c) > 1 and c[-1] == 0:
        c.pop()
    return c
