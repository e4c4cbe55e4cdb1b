"""
Solver dispatch for dense linear algebra.

This module provides the decompose() and solve() functions (public API)
and the choice of factorization.
"""

from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.protocols import DecompositionSolver
from pynumerics.core.validation import check_2d, check_array, check_finite
from pynumerics.linalg.cholesky import CholeskyDecomposition
from pynumerics.linalg.eigen import EigenDecomposition
from pynumerics.linalg.qr import QRDecomposition


MethodChoice = Literal['cholesky', 'qr', 'eigen']
SolveChoice = Literal['auto', 'cholesky', 'qr', 'eigen']


def decompose(
    A: ArrayLike,
    method: MethodChoice = 'cholesky',
    **options: Any,
) -> DecompositionSolver:
    """
    Factorize a dense matrix.

    Args:
        A: Matrix to factorize (n x p)
        method: Factorization to use:
            - 'cholesky': LL' (or LDL' with robust=True) of a symmetric matrix
            - 'qr': Householder QR of a tall or square matrix
            - 'eigen': symmetric eigen-decomposition
        **options: Forwarded to the decomposition constructor
            (e.g. robust=True, economy=False)

    Returns:
        The decomposition object

    Raises:
        ValidationError: If A is not a finite numeric matrix or the
            method is unknown
        DimensionError: If A has the wrong shape for the method
    """
    A_arr = check_array(A, 'A')
    check_2d(A_arr, 'A')
    check_finite(A_arr, 'A')

    if method == 'cholesky':
        return CholeskyDecomposition(A_arr, **options)
    if method == 'qr':
        return QRDecomposition(A_arr, **options)
    if method == 'eigen':
        if options:
            raise ValueError(f"'eigen' takes no options, got {sorted(options)}")
        return EigenDecomposition(A_arr)
    raise ValueError(
        f"Unknown method: {method!r}. Use 'cholesky', 'qr' or 'eigen'."
    )


def solve(
    A: ArrayLike,
    B: ArrayLike,
    *,
    method: SolveChoice = 'auto',
) -> NDArray[np.floating[Any]]:
    """
    Solve A X = B (least squares when A is tall).

    Args:
        A: Coefficient matrix (n x p)
        B: Right-hand side, vector (n,) or matrix (n, k)
        method: 'auto' picks Cholesky (LDL') for symmetric positive
            definite A and QR otherwise; or name a factorization explicitly

    Returns:
        X with p rows

    Raises:
        NotPositiveDefiniteError: If method='cholesky' is given a non-PD matrix
        RankDeficientError: If QR is used on a rank-deficient matrix
        SingularMatrixError: If eigen is used on a singular matrix
    """
    A_arr = check_array(A, 'A')
    check_2d(A_arr, 'A')
    check_finite(A_arr, 'A')

    if method == 'auto':
        method = _select_method(A_arr)
        if method == 'cholesky':
            # LDL' reports definiteness without warning; indefinite input goes to QR
            chol = CholeskyDecomposition(A_arr, robust=True)
            if chol.is_positive_definite and not chol.is_undefined:
                return chol.solve(B)
            method = 'qr'

    decomposition = decompose(A_arr, method)
    return decomposition.solve(B)


def _select_method(A: NDArray[np.floating[Any]]) -> MethodChoice:
    rows, cols = A.shape
    if rows == cols and np.array_equal(A, A.T):
        return 'cholesky'
    return 'qr'
