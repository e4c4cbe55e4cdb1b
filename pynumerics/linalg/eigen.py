"""
Eigen-decomposition of a real symmetric matrix.

A = V D V' with V orthogonal and D diagonal. The matrix is first reduced
to tridiagonal form (TriDiagonalTransformer), then diagonalized by the
implicit QL algorithm with Wilkinson shifts, accumulating the rotations
into V.

Conventions:
    - Eigenvalues are sorted in descending order; eigenvector columns
      follow the same permutation.
    - Eigenvalues smaller than eps * max|lambda| are reported as exactly 0.
    - Symmetric input has only real eigenvalues, so imag_eigenvalues is
      all zeros; the accessor exists for callers written against general
      (non-symmetric) eigen-solvers.
"""

from __future__ import annotations

import math
from functools import cached_property

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.compute.tolerances import (
    EIGEN_MAX_ITERATIONS,
    MACHINE_EPSILON,
    SYMMETRY_TOLERANCE,
)
from pynumerics.core.exceptions import (
    ConvergenceError,
    DimensionError,
    NotPositiveDefiniteError,
    SingularMatrixError,
    ValidationError,
)
from pynumerics.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_rows_match,
    check_symmetric,
)
from pynumerics.linalg._common import as_float_rhs, readonly
from pynumerics.linalg.tridiagonal import TriDiagonalTransformer


class EigenDecomposition:
    """
    Symmetric eigen-decomposition by tridiagonalization and implicit QL.

    Args:
        matrix: Real symmetric n x n matrix

    Raises:
        DimensionError: If matrix is not square
        ValidationError: If matrix is not symmetric or not finite
        ConvergenceError: If an eigenvalue needs more than 30 QL sweeps

    Example:
        >>> eig = EigenDecomposition(np.array([[2.0, 1.0], [1.0, 2.0]]))
        >>> eig.real_eigenvalues
        array([3., 1.])
    """

    def __init__(self, matrix: ArrayLike):
        A = check_array(matrix, 'matrix')
        check_finite(A, 'matrix')
        transformer = TriDiagonalTransformer(A)
        check_symmetric(np.asarray(A, dtype=np.float64), 'matrix', rtol=SYMMETRY_TOLERANCE)

        self._find_eigenvectors(
            transformer.main_diagonal,
            transformer.secondary_diagonal,
            np.array(transformer.get_q()),
        )

    @classmethod
    def from_tridiagonal(
        cls,
        main: ArrayLike,
        secondary: ArrayLike,
    ) -> EigenDecomposition:
        """
        Decompose the symmetric tridiagonal matrix given by its diagonals.

        Args:
            main: Diagonal, length n
            secondary: Off-diagonal, length n - 1
        """
        d = check_array(main, 'main')
        e = check_array(secondary, 'secondary')
        check_1d(d, 'main')
        check_1d(e, 'secondary')
        if e.shape[0] != max(d.shape[0] - 1, 0):
            raise DimensionError(
                f"secondary: expected length {max(d.shape[0] - 1, 0)}, got {e.shape[0]}"
            )
        obj = cls.__new__(cls)
        obj._find_eigenvectors(
            np.asarray(d, dtype=np.float64),
            np.asarray(e, dtype=np.float64),
            np.eye(d.shape[0]),
        )
        return obj

    def _find_eigenvectors(
        self,
        main: NDArray[np.float64],
        secondary: NDArray[np.float64],
        z: NDArray[np.float64],
    ) -> None:
        n = main.shape[0]
        d = [float(x) for x in main]
        e = [float(x) for x in secondary] + [0.0] * (1 if n > 0 else 0)

        max_abs = max([abs(x) for x in d] + [abs(x) for x in e], default=0.0)
        if max_abs != 0.0:
            # negligible entries would otherwise cost extra sweeps
            threshold = MACHINE_EPSILON * max_abs
            d = [0.0 if abs(x) <= threshold else x for x in d]
            e = [0.0 if abs(x) <= threshold else x for x in e]

        for j in range(n):
            its = 0
            while True:
                m = j
                while m < n - 1:
                    delta = abs(d[m]) + abs(d[m + 1])
                    if abs(e[m]) + delta == delta:
                        break
                    m += 1
                if m == j:
                    break

                if its == EIGEN_MAX_ITERATIONS:
                    raise ConvergenceError(
                        f"QL iteration did not converge for eigenvalue {j} "
                        f"within {EIGEN_MAX_ITERATIONS} iterations",
                        iterations=its,
                        final_change=abs(e[j]),
                        reason='max_iterations',
                    )
                its += 1

                # Wilkinson shift
                q = (d[j + 1] - d[j]) / (2.0 * e[j])
                t = math.sqrt(1.0 + q * q)
                if q < 0.0:
                    q = d[m] - d[j] + e[j] / (q - t)
                else:
                    q = d[m] - d[j] + e[j] / (q + t)

                u = 0.0
                s = 1.0
                c = 1.0
                i = m - 1
                while i >= j:
                    p = s * e[i]
                    h = c * e[i]
                    if abs(p) >= abs(q):
                        c = q / p
                        t = math.sqrt(c * c + 1.0)
                        e[i + 1] = p * t
                        s = 1.0 / t
                        c *= s
                    else:
                        s = p / q
                        t = math.sqrt(s * s + 1.0)
                        e[i + 1] = q * t
                        c = 1.0 / t
                        s *= c
                    if e[i + 1] == 0.0:
                        d[i + 1] -= u
                        e[m] = 0.0
                        break
                    q = d[i + 1] - u
                    t = (d[i] - q) * s + 2.0 * c * h
                    u = s * t
                    d[i + 1] = q + u
                    q = c * t - h

                    zi = z[:, i].copy()
                    z[:, i] = c * zi - s * z[:, i + 1]
                    z[:, i + 1] = s * zi + c * z[:, i + 1]
                    i -= 1

                if t == 0.0 and i >= j:
                    continue
                d[j] -= u
                e[j] = q
                e[m] = 0.0

        # Sort descending, carrying eigenvector columns along.
        for i in range(n):
            k = i
            p = d[i]
            for j in range(i + 1, n):
                if d[j] > p:
                    k = j
                    p = d[j]
            if k != i:
                d[k] = d[i]
                d[i] = p
                z[:, [i, k]] = z[:, [k, i]]

        values = np.array(d, dtype=np.float64)
        if n > 0:
            max_abs_value = float(np.max(np.abs(values)))
            values[np.abs(values) < MACHINE_EPSILON * max_abs_value] = 0.0

        self._real = values
        self._imag = np.zeros(n)
        self._z = z

    # ------------------------------------------------------------------
    # Eigenvalues and eigenvectors
    # ------------------------------------------------------------------

    @property
    def n(self) -> int:
        return self._real.shape[0]

    @property
    def real_eigenvalues(self) -> NDArray[np.float64]:
        """Eigenvalues, descending."""
        return readonly(self._real.copy())

    @property
    def imag_eigenvalues(self) -> NDArray[np.float64]:
        """Imaginary parts (all zero for symmetric input)."""
        return readonly(self._imag.copy())

    def get_real_eigenvalue(self, i: int) -> float:
        return float(self._real[i])

    def get_imag_eigenvalue(self, i: int) -> float:
        return float(self._imag[i])

    def has_complex_eigenvalues(self) -> bool:
        return bool(np.any(self._imag != 0.0))

    def get_eigenvector(self, i: int) -> NDArray[np.float64]:
        """Unit eigenvector for the i-th (descending) eigenvalue."""
        return self._z[:, i].copy()

    @cached_property
    def v(self) -> NDArray[np.float64]:
        return readonly(self._z.copy())

    def get_v(self) -> NDArray[np.float64]:
        """Eigenvector matrix V, one eigenvector per column (cached)."""
        return self.v

    @cached_property
    def vt(self) -> NDArray[np.float64]:
        return readonly(self._z.T.copy())

    def get_vt(self) -> NDArray[np.float64]:
        """V' (cached)."""
        return self.vt

    @cached_property
    def d(self) -> NDArray[np.float64]:
        return readonly(np.diag(self._real))

    def get_d(self) -> NDArray[np.float64]:
        """Block diagonal eigenvalue matrix D (cached)."""
        return self.d

    @cached_property
    def determinant(self) -> float:
        """Product of the eigenvalues."""
        return float(np.prod(self._real))

    def get_square_root(self) -> NDArray[np.float64]:
        """
        Symmetric square root V sqrt(D) V'.

        Raises:
            NotPositiveDefiniteError: If any eigenvalue is <= 0
        """
        if np.any(self._real <= 0.0):
            min_eig = float(np.min(self._real)) if self._real.size else None
            raise NotPositiveDefiniteError(
                f"Square root requires positive eigenvalues; smallest is {min_eig}",
                matrix_name='matrix',
                min_eigenvalue=min_eig,
            )
        V = self._z
        return (V * np.sqrt(self._real)) @ V.T

    def reverse(self) -> NDArray[np.float64]:
        """Reassemble A as V D V'."""
        V = self._z
        return (V * self._real) @ V.T

    def copy(self) -> EigenDecomposition:
        """Independent deep copy."""
        obj = self.__class__.__new__(self.__class__)
        obj._real = self._real.copy()
        obj._imag = self._imag.copy()
        obj._z = self._z.copy()
        return obj

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------

    def get_solver(self) -> EigenSolver:
        """Solver for A x = b based on this decomposition."""
        if self.has_complex_eigenvalues():
            raise ValidationError(
                "Cannot build a solver from a decomposition with complex eigenvalues"
            )
        return EigenSolver(self._real, self._z)

    def solve(self, value: ArrayLike) -> NDArray[np.float64]:
        """Solve A X = B; see EigenSolver.solve."""
        return self.get_solver().solve(value)

    def inverse(self) -> NDArray[np.float64]:
        """A^-1; see EigenSolver.get_inverse."""
        return self.get_solver().get_inverse()

    def __repr__(self) -> str:
        return f"EigenDecomposition(n={self.n})"


class EigenSolver:
    """
    Solves A x = b as x = sum_i (v_i . b / lambda_i) v_i.

    Built by EigenDecomposition.get_solver(); shares nothing mutable with it.
    """

    def __init__(self, eigenvalues: NDArray[np.float64], eigenvectors: NDArray[np.float64]):
        self._values = eigenvalues.copy()
        self._vectors = eigenvectors.copy()

    @property
    def is_non_singular(self) -> bool:
        """False if any eigenvalue is negligible relative to the largest."""
        norms = np.abs(self._values)
        largest = float(np.max(norms)) if norms.size else 0.0
        if largest == 0.0:
            return False
        return not bool(np.any(norms / largest <= MACHINE_EPSILON))

    def _check_non_singular(self) -> None:
        if not self.is_non_singular:
            rank = int(np.count_nonzero(self._values))
            raise SingularMatrixError(
                "Matrix is singular: an eigenvalue is zero relative to the largest",
                matrix_name='matrix',
                rank=rank,
                expected_rank=self._values.shape[0],
            )

    def solve(self, value: ArrayLike) -> NDArray[np.float64]:
        """
        Solve A X = B.

        Args:
            value: Right-hand side, vector (n,) or matrix (n, k)

        Raises:
            SingularMatrixError: If A is singular
            DimensionError: If B does not have n rows
        """
        self._check_non_singular()
        B = as_float_rhs(value, 'value')
        check_rows_match(B, self._values.shape[0], 'value')

        V = self._vectors
        coefficients = V.T @ B
        if B.ndim == 1:
            return V @ (coefficients / self._values)
        return V @ (coefficients / self._values[:, None])

    def get_inverse(self) -> NDArray[np.float64]:
        """
        A^-1 = V D^-1 V'.

        Raises:
            SingularMatrixError: If A is singular
        """
        self._check_non_singular()
        V = self._vectors
        return (V / self._values) @ V.T
