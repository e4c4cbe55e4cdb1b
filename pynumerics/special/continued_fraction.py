"""
Evaluation of generalized continued fractions.

Evaluates

                      b1
    a0 + ------------------------------
                          b2
          a1 + ------------------------
                              b3
                a2 + ------------------
                       a3 + ...

through the fundamental recurrence for convergents p_n / q_n:

    p_n = a_n p_(n-1) + b_n p_(n-2)
    q_n = a_n q_(n-1) + b_n q_(n-2)

When p_n or q_n overflows, both are rescaled by powers of max(a_n, b_n)
(up to the fifth power) before giving up.

Reference:
    Continued Fraction, Eric W. Weisstein, MathWorld.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np

from pynumerics.core.compute.tolerances import CONTINUED_FRACTION_EPSILON
from pynumerics.core.exceptions import ConvergenceError

_MAX_SCALE_POWER = 5


def _divide(numerator: float, denominator: float) -> float:
    # inf or nan on a zero denominator, as in float64 arithmetic
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(numerator) / denominator)


class ContinuedFraction(ABC):
    """
    Base class for continued fractions defined by their coefficients.

    Subclasses provide a_n (get_a) and b_n (get_b) as functions of the
    index n and the evaluation point x.
    """

    @abstractmethod
    def get_a(self, n: int, x: float) -> float:
        """The n-th a coefficient."""
        ...

    @abstractmethod
    def get_b(self, n: int, x: float) -> float:
        """The n-th b coefficient (n >= 1)."""
        ...

    def evaluate(
        self,
        x: float,
        epsilon: float = CONTINUED_FRACTION_EPSILON,
        max_iterations: int | None = None,
    ) -> float:
        """
        Evaluate the continued fraction at x.

        Args:
            x: Evaluation point
            epsilon: Stop when successive convergents differ by less than
                this relative amount
            max_iterations: Maximum number of convergents; None for no limit

        Returns:
            The value of the continued fraction

        Raises:
            ConvergenceError: If the convergents overflow beyond rescue
                (reason 'infinite'), become NaN (reason 'nan'), or
                max_iterations is reached (reason 'max_iterations')
        """
        limit = math.inf if max_iterations is None else max_iterations

        p0 = 1.0
        p1 = float(self.get_a(0, x))
        q0 = 0.0
        q1 = 1.0
        c = p1 / q1
        n = 0
        relative_error = math.inf

        while n < limit and relative_error > epsilon:
            n += 1
            a = float(self.get_a(n, x))
            b = float(self.get_b(n, x))
            p2 = a * p1 + b * p0
            q2 = a * q1 + b * q0

            infinite = False
            if math.isinf(p2) or math.isinf(q2):
                # Need to scale. Try successive powers of the larger of a
                # or b up to the fifth power. Throw if still infinite.
                scale = max(a, b)
                if scale <= 0:
                    raise ConvergenceError(
                        f"Continued fraction convergents diverged to +/- "
                        f"infinity for value {x}",
                        iterations=n,
                        reason='infinite',
                        threshold=epsilon,
                    )
                scale_factor = 1.0
                infinite = True
                for _ in range(_MAX_SCALE_POWER):
                    last_scale_factor = scale_factor
                    scale_factor *= scale
                    if a != 0.0 and a > b:
                        p2 = p1 / last_scale_factor + (b / scale_factor * p0)
                        q2 = q1 / last_scale_factor + (b / scale_factor * q0)
                    elif b != 0.0:
                        p2 = (a / scale_factor * p1) + p0 / last_scale_factor
                        q2 = (a / scale_factor * q1) + q0 / last_scale_factor
                    infinite = math.isinf(p2) or math.isinf(q2)
                    if not infinite:
                        break

            if infinite:
                raise ConvergenceError(
                    f"Continued fraction convergents diverged to +/- "
                    f"infinity for value {x}",
                    iterations=n,
                    reason='infinite',
                    threshold=epsilon,
                )

            r = _divide(p2, q2)
            if math.isnan(r):
                raise ConvergenceError(
                    f"Continued fraction diverged to NaN for value {x}",
                    iterations=n,
                    reason='nan',
                    threshold=epsilon,
                )
            relative_error = abs(_divide(r, c) - 1.0)

            # prepare for next iteration
            c = r
            p0 = p1
            p1 = p2
            q0 = q1
            q1 = q2

        if n >= limit:
            raise ConvergenceError(
                f"Continued fraction convergents failed to converge "
                f"(in less than {max_iterations} iterations) for value {x}",
                iterations=n,
                final_change=relative_error,
                reason='max_iterations',
                threshold=epsilon,
            )

        return c
