"""
Special functions.

Public API:
    ContinuedFraction           - Generic continued fraction evaluator
    regularized_beta(x, a, b)   - Regularized incomplete Beta function
    log_beta(a, b)              - log B(a, b)
"""

from pynumerics.special.beta import BetaContinuedFraction, log_beta, regularized_beta
from pynumerics.special.continued_fraction import ContinuedFraction

__all__ = [
    "ContinuedFraction",
    "BetaContinuedFraction",
    "regularized_beta",
    "log_beta",
]
