"""
Dense linear algebra.

Public API:
    decompose(A, method)        - Factorize a matrix ('cholesky', 'qr', 'eigen')
    solve(A, B)                 - Solve A X = B with an appropriate factorization
    CholeskyDecomposition       - LL' / LDL' factorization
    QRDecomposition             - Householder QR
    TriDiagonalTransformer      - Symmetric tridiagonal reduction
    EigenDecomposition          - Symmetric eigen-decomposition (implicit QL)
    Triangle                    - Which triangle of a symmetric input to read
"""

from pynumerics.linalg._common import Triangle
from pynumerics.linalg.cholesky import CholeskyDecomposition
from pynumerics.linalg.qr import QRDecomposition
from pynumerics.linalg.tridiagonal import TriDiagonalTransformer
from pynumerics.linalg.eigen import EigenDecomposition, EigenSolver
from pynumerics.linalg.solvers import decompose, solve

__all__ = [
    "decompose",
    "solve",
    "CholeskyDecomposition",
    "QRDecomposition",
    "TriDiagonalTransformer",
    "EigenDecomposition",
    "EigenSolver",
    "Triangle",
]
