"""
Tests for PolynomialFunction and DifferentiableFunction.
"""

import dataclasses

import numpy as np
import pytest

from pynumerics.core.exceptions import ValidationError
from pynumerics.core.protocols import DifferentiableUnivariateFunction, UnivariateFunction
from pynumerics.roots import DifferentiableFunction, PolynomialFunction


class TestPolynomialFunction:

    def test_evaluation(self):
        p = PolynomialFunction([1.0, -3.0, 2.0])   # 2x^2 - 3x + 1
        assert p(0.0) == 1.0
        assert p(1.0) == 0.0
        assert p(2.0) == 3.0

    def test_complex_argument(self):
        p = PolynomialFunction([1.0, 0.0, 1.0])
        assert p(1j) == 0j

    def test_trailing_zeros_trimmed(self):
        p = PolynomialFunction([1.0, 2.0, 0.0, 0.0])
        assert p.degree == 1
        np.testing.assert_array_equal(p.coefficients, [1.0, 2.0])

    def test_zero_polynomial(self):
        p = PolynomialFunction([0.0, 0.0])
        assert p.degree == 0
        assert p(5.0) == 0.0

    def test_derivative(self):
        p = PolynomialFunction([5.0, 1.0, -3.0, 2.0])
        dp = p.polynomial_derivative()
        np.testing.assert_array_equal(dp.coefficients, [1.0, -6.0, 6.0])
        assert p.derivative()(1.0) == dp(1.0)

    def test_constant_derivative(self):
        assert PolynomialFunction([4.0]).polynomial_derivative().degree == 0

    def test_coefficients_read_only(self):
        p = PolynomialFunction([1.0, 2.0])
        with pytest.raises(ValueError):
            p.coefficients[0] = 3.0

    def test_integer_coefficients(self):
        assert PolynomialFunction([1, 2]).coefficients.dtype == np.float64

    def test_invalid(self):
        with pytest.raises(ValidationError, match="empty"):
            PolynomialFunction([])
        with pytest.raises(ValidationError):
            PolynomialFunction([1.0, np.nan])
        with pytest.raises(ValidationError):
            PolynomialFunction([[1.0, 2.0]])

    def test_protocols(self):
        p = PolynomialFunction([1.0, 1.0])
        assert isinstance(p, UnivariateFunction)
        assert isinstance(p, DifferentiableUnivariateFunction)


class TestDifferentiableFunction:

    def test_pairs_function_and_derivative(self):
        f = DifferentiableFunction(np.sin, np.cos)
        assert f(0.0) == 0.0
        assert f.derivative()(0.0) == 1.0
        assert isinstance(f, DifferentiableUnivariateFunction)

    def test_frozen(self):
        f = DifferentiableFunction(np.sin, np.cos)
        with pytest.raises(dataclasses.FrozenInstanceError):
            f.function = np.cos

    def test_plain_callable_is_not_differentiable(self):
        assert not isinstance(lambda x: x, DifferentiableUnivariateFunction)
