"""
Univariate function objects understood by the root finders.

Plain callables are enough for the bracketing solvers. Newton's method
needs a derivative and Laguerre's method needs polynomial coefficients;
the classes here carry that extra structure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import ValidationError
from pynumerics.core.validation import check_1d, check_array, check_finite


class PolynomialFunction:
    """
    Real polynomial c[0] + c[1] x + ... + c[n] x^n.

    Trailing zero coefficients are dropped, so the degree is always exact
    (the zero polynomial keeps a single 0 coefficient).

    Args:
        coefficients: Coefficients in ascending powers of x

    Raises:
        ValidationError: If coefficients is empty or not finite

    Example:
        >>> p = PolynomialFunction([-2.0, 0.0, 1.0])   # x^2 - 2
        >>> p(2.0)
        2.0
        >>> p.polynomial_derivative().coefficients
        array([0., 2.])
    """

    def __init__(self, coefficients: ArrayLike):
        c = check_array(coefficients, 'coefficients')
        check_1d(c, 'coefficients')
        check_finite(c, 'coefficients')
        if c.shape[0] == 0:
            raise ValidationError("coefficients: empty polynomial")

        n = c.shape[0]
        while n > 1 and c[n - 1] == 0.0:
            n -= 1
        self._coefficients = np.array(c[:n], dtype=np.float64)
        self._coefficients.flags.writeable = False

    @property
    def coefficients(self) -> NDArray[np.float64]:
        return self._coefficients

    @property
    def degree(self) -> int:
        return self._coefficients.shape[0] - 1

    def __call__(self, x: Any) -> Any:
        # Horner's rule; also accepts complex x
        c = self._coefficients
        result = c[-1].item()
        for coefficient in c[-2::-1]:
            result = result * x + coefficient.item()
        return result

    def polynomial_derivative(self) -> PolynomialFunction:
        """First derivative as a polynomial."""
        c = self._coefficients
        if c.shape[0] == 1:
            return PolynomialFunction([0.0])
        return PolynomialFunction(c[1:] * np.arange(1, c.shape[0]))

    def derivative(self) -> Callable[[float], float]:
        return self.polynomial_derivative()

    def __repr__(self) -> str:
        return f"PolynomialFunction({self._coefficients.tolist()})"


@dataclass(frozen=True)
class DifferentiableFunction:
    """
    Pairs a function with its analytic first derivative.

    Example:
        >>> f = DifferentiableFunction(lambda x: x * x - 2.0, lambda x: 2.0 * x)
        >>> NewtonSolver().solve(f, 0.0, 2.0)
    """
    function: Callable[[float], float]
    derivative_function: Callable[[float], float]

    def __call__(self, x: float) -> float:
        return self.function(x)

    def derivative(self) -> Callable[[float], float]:
        return self.derivative_function
