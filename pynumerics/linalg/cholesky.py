"""
Cholesky decomposition of a symmetric matrix.

Two variants share one object:
    - LL' (default): A = L L', L lower triangular with positive diagonal.
      Only meaningful for positive definite A. Construction never fails;
      instead is_positive_definite records whether every pivot passed.
    - LDL' (robust=True): A = L D L', L unit lower triangular, D diagonal.
      Works for indefinite symmetric A as long as no pivot is exactly zero;
      a zero pivot marks the factorization undefined.

The factor is computed in the lower triangle of a single n x n buffer.
The strict upper triangle keeps the (symmetric) input entries.

Design principles:
    - Construction is cheap to reason about: one buffer, one diagonal vector
    - Derived quantities are computed once and returned read-only
    - Solving is refused (not silently wrong) for non-PD input in LL' mode
"""

from __future__ import annotations

import warnings
from functools import cached_property

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg import solve_triangular

from pynumerics.core.compute.tolerances import POSITIVE_DEFINITE_TOLERANCE
from pynumerics.core.exceptions import (
    DecompositionStateError,
    NotPositiveDefiniteError,
    ValidationError,
)
from pynumerics.core.validation import check_rows_match, check_square
from pynumerics.linalg._common import MatrixBuffer, Triangle, as_float_rhs, readonly


_CACHED = (
    'left_triangular_factor',
    'upper_triangular_factor',
    'diagonal_matrix',
    'diagonal',
    'determinant',
    'log_determinant',
    'nonsingular',
)


class CholeskyDecomposition:
    """
    LL' or LDL' factorization of a symmetric matrix.

    Args:
        value: Symmetric n x n matrix. Only the triangle selected by
            ``triangle`` is read.
        robust: Compute LDL' instead of LL'.
        in_place: Factorize ``value`` itself. The array then belongs to
            the decomposition and is overwritten with the factor.
        triangle: Which triangle of ``value`` holds the data
            (Triangle.UPPER, Triangle.LOWER or Triangle.DIAGONAL).

    Raises:
        DimensionError: If value is not square
        ValidationError: If in_place is requested on a non-float64 array,
            or triangle is not recognized

    Warns:
        RuntimeWarning: If the LL' factorization meets a non-positive pivot.
            The factor then contains NaN entries; solving is refused.

    Example:
        >>> chol = CholeskyDecomposition(np.array([[4.0, 2.0], [2.0, 3.0]]))
        >>> chol.solve(np.array([1.0, 2.0]))
        array([-0.125,  0.75 ])
    """

    def __init__(
        self,
        value: ArrayLike,
        *,
        robust: bool = False,
        in_place: bool = False,
        triangle: Triangle | str = Triangle.UPPER,
    ):
        try:
            triangle = Triangle(triangle)
        except ValueError as e:
            raise ValidationError(f"triangle: unknown value {triangle!r}") from e

        buffer = MatrixBuffer.take(value, in_place=in_place, name='value')
        check_square(buffer.data, 'value')

        L = buffer.data
        if triangle is Triangle.LOWER:
            # factorization reads the upper triangle
            L[...] = L.T.copy()

        self._buffer_borrowed = buffer.borrowed
        self._L = L
        self._n = L.shape[0]
        self._robust = robust
        self._positive_definite = True
        self._undefined = False
        self._destroyed = False

        if robust:
            self._D = np.zeros(self._n)
            self._ldlt()
        else:
            self._D = np.ones(self._n)
            self._llt()
            if not self._positive_definite:
                warnings.warn(
                    "Matrix is not positive definite; the LL' factor contains "
                    "invalid entries. Use robust=True for an LDL' factorization.",
                    RuntimeWarning,
                    stacklevel=2,
                )

    # ------------------------------------------------------------------
    # Factorization kernels
    # ------------------------------------------------------------------

    def _llt(self) -> None:
        L = self._L
        n = self._n
        pd = True
        with np.errstate(divide='ignore', invalid='ignore'):
            for j in range(n):
                s = 0.0
                for k in range(j):
                    t = (L[k, j] - L[j, :k] @ L[k, :k]) / L[k, k]
                    L[j, k] = t
                    s += t * t
                s = L[j, j] - s
                pd = pd and bool(s > POSITIVE_DEFINITE_TOLERANCE * abs(L[j, j]))
                L[j, j] = np.sqrt(s)
        self._positive_definite = pd

    def _ldlt(self) -> None:
        L = self._L
        D = self._D
        n = self._n
        v = np.zeros(n)
        pd = True
        for i in range(n):
            v[:i] = L[i, :i] * D[:i]
            d = L[i, i] - L[i, :i] @ v[:i]
            D[i] = v[i] = d
            pd = pd and bool(d > POSITIVE_DEFINITE_TOLERANCE * abs(L[i, i]))

            if d == 0.0:
                self._undefined = True
                self._positive_definite = pd
                return

            # Every row below i is independent given v; update them as one block.
            L[i + 1:, i] = (L[i, i + 1:] - L[i + 1:, :i] @ v[:i]) / d

        np.fill_diagonal(L, 1.0)
        self._positive_definite = pd

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_left_triangular(cls, left: ArrayLike) -> CholeskyDecomposition:
        """
        Wrap an already known lower-triangular factor L (A = L L').

        Only the lower triangle of ``left`` is used. The result is an LL'
        decomposition flagged positive definite.
        """
        buffer = MatrixBuffer.take(left, in_place=False, name='left')
        check_square(buffer.data, 'left')
        obj = cls.__new__(cls)
        obj._buffer_borrowed = False
        obj._L = np.tril(buffer.data)
        obj._n = obj._L.shape[0]
        obj._D = np.ones(obj._n)
        obj._robust = False
        obj._positive_definite = True
        obj._undefined = False
        obj._destroyed = False
        return obj

    def copy(self) -> CholeskyDecomposition:
        """Independent deep copy owning its own buffers."""
        obj = self.__class__.__new__(self.__class__)
        obj._buffer_borrowed = False
        obj._L = self._L.copy()
        obj._D = self._D.copy()
        obj._n = self._n
        obj._robust = self._robust
        obj._positive_definite = self._positive_definite
        obj._undefined = self._undefined
        obj._destroyed = self._destroyed
        return obj

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_positive_definite(self) -> bool:
        """Whether every pivot passed the positive-definite test."""
        return self._positive_definite

    @property
    def is_undefined(self) -> bool:
        """LDL' hit an exactly zero pivot and stopped."""
        return self._undefined

    @property
    def is_robust(self) -> bool:
        return self._robust

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def owns_buffer(self) -> bool:
        """False when the factor lives in the caller's array (in_place=True)."""
        return not self._buffer_borrowed

    @property
    def n(self) -> int:
        return self._n

    def _check_not_destroyed(self) -> None:
        if self._destroyed:
            raise DecompositionStateError(
                "The decomposition has been destroyed by an in-place "
                "operation (destroy=True) and can no longer be used.",
                state='destroyed',
            )

    def _check_usable(self) -> None:
        self._check_not_destroyed()
        if self._undefined:
            raise DecompositionStateError(
                "The LDL' factorization is undefined: a zero pivot was met.",
                state='undefined',
            )

    def _check_solvable(self) -> None:
        if not self._robust and not self._positive_definite:
            raise NotPositiveDefiniteError(
                "Matrix is not positive definite; cannot solve with its LL' "
                "factor. Use robust=True for an LDL' factorization.",
                matrix_name='value',
            )
        self._check_usable()

    def _invalidate(self) -> None:
        for name in _CACHED:
            self.__dict__.pop(name, None)

    # ------------------------------------------------------------------
    # Factors and derived quantities
    # ------------------------------------------------------------------

    @cached_property
    def left_triangular_factor(self) -> NDArray[np.float64]:
        """Lower triangular factor L."""
        self._check_usable()
        return readonly(np.tril(self._L))

    @cached_property
    def upper_triangular_factor(self) -> NDArray[np.float64]:
        """Upper triangular factor L'."""
        self._check_usable()
        return readonly(np.tril(self._L).T.copy())

    @cached_property
    def diagonal_matrix(self) -> NDArray[np.float64]:
        """D as an n x n matrix (identity for LL')."""
        self._check_usable()
        return readonly(np.diag(self._D))

    @cached_property
    def diagonal(self) -> NDArray[np.float64]:
        """D as a vector (ones for LL')."""
        self._check_usable()
        return readonly(self._D.copy())

    @cached_property
    def determinant(self) -> float:
        """det(A) = prod(L_ii)^2 * prod(D_i)."""
        self._check_usable()
        prod_l = np.prod(np.diag(self._L))
        return float(prod_l * prod_l * np.prod(self._D))

    @cached_property
    def log_determinant(self) -> float:
        """log det(A), accumulated in log space (NaN if det(A) < 0)."""
        self._check_usable()
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(
                2.0 * np.sum(np.log(np.diag(self._L))) + np.sum(np.log(self._D))
            )

    @cached_property
    def nonsingular(self) -> bool:
        """True if no diagonal entry of L or D is zero."""
        self._check_usable()
        return bool(np.all(np.diag(self._L) != 0.0) and np.all(self._D != 0.0))

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------

    def solve(self, value: ArrayLike, in_place: bool = False) -> NDArray[np.float64]:
        """
        Solve A X = B.

        Args:
            value: Right-hand side B, vector (n,) or matrix (n, k)
            in_place: Write the solution into ``value`` and return it.
                Requires a writeable float64 ndarray.

        Returns:
            Solution X with the shape of B

        Raises:
            DimensionError: If B does not have n rows
            NotPositiveDefiniteError: If this is a non-PD LL' factorization
            DecompositionStateError: If the factorization is destroyed or undefined
        """
        if in_place:
            if not isinstance(value, np.ndarray) or value.dtype != np.float64 \
                    or not value.flags.writeable:
                raise ValidationError(
                    "value: in_place=True requires a writeable float64 ndarray"
                )
            B = value
        else:
            B = as_float_rhs(value, 'value')

        check_rows_match(B, self._n, 'value')
        self._check_solvable()

        Y = solve_triangular(self._L, B, lower=True, check_finite=False)
        if self._robust:
            Y = Y / (self._D if Y.ndim == 1 else self._D[:, None])
        X = solve_triangular(self._L, Y, lower=True, trans='T', check_finite=False)

        if in_place:
            value[...] = X
            return value
        return X

    def inverse(self) -> NDArray[np.float64]:
        """A^-1, computed by solving against the identity."""
        return self.solve(np.eye(self._n))

    def inverse_diagonal(
        self,
        destroy: bool = False,
        out: NDArray[np.float64] | None = None,
    ) -> NDArray[np.float64]:
        """
        Diagonal of A^-1 without forming the full inverse.

        The transposed inverse of L is built column by column, from the
        last column back to the first. The diagonal of A^-1 is then the
        squared row norms of that matrix (each column weighted by 1/D_j
        in LDL' mode).

        Args:
            destroy: Build the inverse factor in the decomposition's own
                buffer instead of scratch memory. The decomposition is
                unusable afterwards.
            out: Optional length-n array to receive the result

        Returns:
            The diagonal of A^-1 (``out`` if given)

        Raises:
            NotPositiveDefiniteError: If this is a non-PD LL' factorization
            DecompositionStateError: If already destroyed or undefined
        """
        self._check_solvable()

        n = self._n
        L = self._L
        S = L if destroy else np.zeros((n, n))

        with np.errstate(divide='ignore', invalid='ignore'):
            for j in range(n - 1, -1, -1):
                S[j, j] = 1.0 / L[j, j]
                for i in range(j - 1, -1, -1):
                    S[i, j] = -(L[i + 1:j + 1, i] @ S[i + 1:j + 1, j]) / L[i, i]

        squares = np.triu(S) ** 2
        if self._robust:
            squares /= self._D[None, :]
        diag = squares.sum(axis=1)

        if destroy:
            self._destroyed = True
            self._invalidate()

        if out is not None:
            out[...] = diag
            return out
        return diag

    def inverse_trace(self, destroy: bool = False) -> float:
        """trace(A^-1); see inverse_diagonal() for the destroy semantics."""
        return float(np.sum(self.inverse_diagonal(destroy=destroy)))

    def reverse(self) -> NDArray[np.float64]:
        """Reassemble A as L L' (or L D L')."""
        self._check_usable()
        L = np.tril(self._L)
        if self._robust:
            return L @ (self._D[:, None] * L.T)
        return L @ L.T

    def get_information_matrix(self) -> NDArray[np.float64]:
        """(X'X)^-1 where X is the reassembled matrix."""
        X = self.reverse()
        return np.linalg.inv(X.T @ X)

    def __repr__(self) -> str:
        kind = "LDL'" if self._robust else "LL'"
        return (
            f"CholeskyDecomposition({kind}, n={self._n}, "
            f"positive_definite={self._positive_definite})"
        )
