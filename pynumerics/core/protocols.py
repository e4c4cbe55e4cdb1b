"""
Core protocols for PyNumerics.

These define structural interfaces that user callables and decompositions
must satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so that plain functions, lambdas and numpy ufunc wrappers are all
accepted without registration.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Capability by shape: a function is differentiable if it has derivative()
"""

from typing import Callable, Protocol, Any, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray


@runtime_checkable
class UnivariateFunction(Protocol):
    """
    A real function of one real variable.

    Any callable with the signature ``f(x: float) -> float`` satisfies
    this protocol. Root finders call it once per evaluation and never
    cache its values.
    """

    def __call__(self, x: float) -> float:
        ...


@runtime_checkable
class DifferentiableUnivariateFunction(Protocol):
    """
    A univariate function that can supply its own first derivative.

    Required by Newton's method. derivative() is called once per solve
    and the returned callable is evaluated at every iterate.
    """

    def __call__(self, x: float) -> float:
        ...

    def derivative(self) -> Callable[[float], float]:
        """Return the first derivative as a univariate callable."""
        ...


@runtime_checkable
class DecompositionSolver(Protocol):
    """
    Anything that can solve A X = B for a matrix it has factorized.

    Implemented by CholeskyDecomposition, QRDecomposition and
    EigenDecomposition.
    """

    def solve(self, value: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Solve against the factorized matrix.

        Args:
            value: Right-hand side, vector or matrix with matching rows

        Returns:
            Solution with the same number of columns as value
        """
        ...

    def inverse(self) -> NDArray[np.floating[Any]]:
        """Inverse (or least-squares pseudo-inverse) of the factorized matrix."""
        ...

    def reverse(self) -> NDArray[np.floating[Any]]:
        """Reassemble the factorized matrix from its factors."""
        ...
