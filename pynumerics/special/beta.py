"""
Beta function utilities.

The regularized incomplete Beta function is evaluated by its continued
fraction expansion (Numerical Recipes 6.4, ContinuedFraction here) with
log Beta supplied by scipy.special.gammaln.

Reference:
    Regularized Beta Function, Eric W. Weisstein, MathWorld.
    Incomplete Beta Function continued fraction, MathWorld.
"""

from __future__ import annotations

import math

from scipy.special import gammaln

from pynumerics.core.compute.tolerances import CONTINUED_FRACTION_EPSILON
from pynumerics.special.continued_fraction import ContinuedFraction


def log_beta(a: float, b: float) -> float:
    """
    Natural logarithm of the Beta function B(a, b).

    Returns NaN for non-positive or NaN arguments.
    """
    if math.isnan(a) or math.isnan(b) or a <= 0.0 or b <= 0.0:
        return math.nan
    return float(gammaln(a) + gammaln(b) - gammaln(a + b))


class BetaContinuedFraction(ContinuedFraction):
    """Continued fraction for I_x(a, b); all a_n are 1."""

    def __init__(self, a: float, b: float):
        self.a = a
        self.b = b

    def get_a(self, n: int, x: float) -> float:
        return 1.0

    def get_b(self, n: int, x: float) -> float:
        a = self.a
        b = self.b
        if n % 2 == 0:
            m = n / 2.0
            return (m * (b - m) * x) / ((a + (2 * m) - 1) * (a + (2 * m)))
        m = (n - 1.0) / 2.0
        return -((a + m) * (a + b + m) * x) / ((a + (2 * m)) * (a + (2 * m) + 1.0))


def regularized_beta(
    x: float,
    a: float,
    b: float,
    epsilon: float = CONTINUED_FRACTION_EPSILON,
    max_iterations: int | None = None,
) -> float:
    """
    Regularized incomplete Beta function I_x(a, b).

    Args:
        x: Upper limit of integration, in [0, 1]
        a: First shape parameter, > 0
        b: Second shape parameter, > 0
        epsilon: Relative accuracy of the continued fraction
        max_iterations: Continued fraction iteration cap; None for no limit

    Returns:
        I_x(a, b), or NaN if an argument is out of its domain

    Raises:
        ConvergenceError: If the continued fraction fails to converge
    """
    if (
        math.isnan(x) or math.isnan(a) or math.isnan(b)
        or x < 0.0 or x > 1.0 or a <= 0.0 or b <= 0.0
    ):
        return math.nan
    if x == 0.0:
        return 0.0
    if x > (a + 1.0) / (a + b + 2.0):
        # the fraction converges fast only below the mean; use symmetry
        return 1.0 - regularized_beta(1.0 - x, b, a, epsilon, max_iterations)

    fraction = BetaContinuedFraction(a, b)
    prefix = math.exp(
        a * math.log(x) + b * math.log1p(-x) - math.log(a) - log_beta(a, b)
    )
    return prefix / fraction.evaluate(x, epsilon, max_iterations)
