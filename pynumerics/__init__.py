"""
PyNumerics: dense linear algebra and univariate root finding for Python.

Factorizations and solvers written for clarity and numerical robustness,
validated against LAPACK (via NumPy/SciPy).

Submodules:
    linalg: Cholesky (LL'/LDL'), Householder QR, symmetric eigen-decomposition
    roots: Bisection, Brent, secant, Muller, Ridders, Newton, Laguerre
    special: Continued fractions, regularized incomplete Beta function
"""

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

from pynumerics import linalg
from pynumerics import roots
from pynumerics import special

__all__ = [
    "__version__",
    "linalg",
    "roots",
    "special",
]
