"""
Tests for ContinuedFraction evaluation.
"""

import math

import pytest

from pynumerics.core.exceptions import ConvergenceError
from pynumerics.special import ContinuedFraction


class GoldenRatio(ContinuedFraction):
    """1 + 1/(1 + 1/(1 + ...))"""

    def get_a(self, n, x):
        return 1.0

    def get_b(self, n, x):
        return 1.0


class SquareRootOfTwo(ContinuedFraction):
    """1 + 1/(2 + 1/(2 + ...))"""

    def get_a(self, n, x):
        return 1.0 if n == 0 else 2.0

    def get_b(self, n, x):
        return 1.0


class Exponential(ContinuedFraction):
    """Euler's fraction exp(x) = 1 + x/(1 - x/(x + 2 - 2x/(x + 3 - ...)))"""

    def get_a(self, n, x):
        if n == 0 or n == 1:
            return 1.0
        return x + n

    def get_b(self, n, x):
        if n == 1:
            return x
        return -(n - 1) * x


class Diverging(ContinuedFraction):
    """Negative coefficients large enough to overflow with no rescaling."""

    def get_a(self, n, x):
        return -1e200

    def get_b(self, n, x):
        return -1e300


class TestEvaluate:

    def test_golden_ratio(self):
        value = GoldenRatio().evaluate(0.0, epsilon=1e-12)
        assert value == pytest.approx((1.0 + math.sqrt(5.0)) / 2.0, rel=1e-11)

    def test_square_root_of_two(self):
        value = SquareRootOfTwo().evaluate(0.0, epsilon=1e-14)
        assert value == pytest.approx(math.sqrt(2.0), rel=1e-13)

    @pytest.mark.parametrize("x", [0.5, 1.0, 2.0])
    def test_exponential(self, x):
        value = Exponential().evaluate(x, epsilon=1e-13)
        assert value == pytest.approx(math.exp(x), rel=1e-10)

    def test_default_epsilon(self):
        value = GoldenRatio().evaluate(0.0)
        assert value == pytest.approx((1.0 + math.sqrt(5.0)) / 2.0, rel=1e-7)


class TestFailures:

    def test_max_iterations(self):
        with pytest.raises(ConvergenceError) as exc_info:
            GoldenRatio().evaluate(0.0, epsilon=1e-15, max_iterations=5)
        assert exc_info.value.reason == 'max_iterations'
        assert exc_info.value.iterations == 5

    def test_nan(self):
        class ZeroFraction(ContinuedFraction):
            def get_a(self, n, x):
                return 0.0

            def get_b(self, n, x):
                return 0.0

        with pytest.raises(ConvergenceError) as exc_info:
            ZeroFraction().evaluate(1.0)
        assert exc_info.value.reason == 'nan'

    def test_zero_leading_term(self):
        # 0 + 1/(1 + 1/(1 + ...)); the first convergent is 0
        class ReciprocalGolden(ContinuedFraction):
            def get_a(self, n, x):
                return 0.0 if n == 0 else 1.0

            def get_b(self, n, x):
                return 1.0

        phi = (1.0 + math.sqrt(5.0)) / 2.0
        assert ReciprocalGolden().evaluate(0.0, epsilon=1e-12) == pytest.approx(phi - 1.0, rel=1e-10)

    def test_infinite(self):
        with pytest.raises(ConvergenceError) as exc_info:
            Diverging().evaluate(1.0)
        assert exc_info.value.reason == 'infinite'
