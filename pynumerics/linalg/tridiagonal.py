"""
Householder reduction of a symmetric matrix to tridiagonal form.

Computes A = Q T Q' with Q orthogonal and T symmetric tridiagonal. This is
the first stage of the symmetric eigen-decomposition. Only the upper
triangle of the working copy is read and updated; the Householder vectors
are left in the rows of that copy so that Q can be rebuilt on demand.
"""

from __future__ import annotations

import math
from functools import cached_property

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.validation import check_square
from pynumerics.linalg._common import MatrixBuffer, readonly


class TriDiagonalTransformer:
    """
    Symmetric tridiagonalization.

    Args:
        matrix: Symmetric n x n matrix (not modified; only its upper
            triangle is used)

    Raises:
        DimensionError: If matrix is not square
    """

    def __init__(self, matrix: ArrayLike):
        buffer = MatrixBuffer.take(matrix, in_place=False, name='matrix')
        check_square(buffer.data, 'matrix')

        m = buffer.data.shape[0]
        self._householder = buffer.data
        self._main = np.zeros(m)
        self._secondary = np.zeros(max(m - 1, 0))
        self._transform()

    def _transform(self) -> None:
        h = self._householder
        m = h.shape[0]
        z = np.zeros(m)
        for k in range(m - 1):
            # zero out row k to the right of the superdiagonal
            hk = h[k]
            self._main[k] = hk[k]
            x_norm_sqr = float(hk[k + 1:] @ hk[k + 1:])
            a = -math.sqrt(x_norm_sqr) if hk[k + 1] > 0 else math.sqrt(x_norm_sqr)
            self._secondary[k] = a
            if a == 0.0:
                continue

            hk[k + 1] -= a
            beta = -1.0 / (a * hk[k + 1])

            # z = beta * H v, using only the upper triangle of H
            z[k + 1:] = 0.0
            for i in range(k + 1, m):
                hi = h[i]
                h_ki = hk[i]
                z_i = hi[i] * h_ki + hi[i + 1:] @ hk[i + 1:]
                z[i + 1:] += hi[i + 1:] * h_ki
                z[i] = beta * (z[i] + z_i)

            gamma = beta / 2.0 * float(z[k + 1:] @ hk[k + 1:])
            z[k + 1:] -= gamma * hk[k + 1:]

            # H <- H - v z' - z v', upper triangle only
            for i in range(k + 1, m):
                h[i, i:] -= hk[i] * z[i:] + z[i] * hk[i:]

        if m > 0:
            self._main[m - 1] = h[m - 1, m - 1]

    @property
    def main_diagonal(self) -> NDArray[np.float64]:
        """Diagonal of T."""
        return readonly(self._main.copy())

    @property
    def secondary_diagonal(self) -> NDArray[np.float64]:
        """Super/sub-diagonal of T (length n - 1)."""
        return readonly(self._secondary.copy())

    @property
    def householder_vectors(self) -> NDArray[np.float64]:
        """Working matrix whose rows hold the Householder vectors."""
        return readonly(self._householder.copy())

    @cached_property
    def qt(self) -> NDArray[np.float64]:
        m = self._householder.shape[0]
        h = self._householder
        qta = np.zeros((m, m))

        # build from last to first so each reflection touches a shrinking block
        for k in range(m - 1, 0, -1):
            hK = h[k - 1]
            qta[k, k] = 1.0
            if hK[k] != 0.0:
                inv = 1.0 / (self._secondary[k - 1] * hK[k])
                beta = 1.0 / self._secondary[k - 1]
                qta[k, k] = 1.0 + beta * hK[k]
                qta[k, k + 1:] = beta * hK[k + 1:]
                for j in range(k + 1, m):
                    beta = inv * float(qta[j, k + 1:] @ hK[k + 1:])
                    qta[j, k] = beta * hK[k]
                    qta[j, k + 1:] += beta * hK[k + 1:]
        if m > 0:
            qta[0, 0] = 1.0
        return readonly(qta)

    def get_qt(self) -> NDArray[np.float64]:
        """Q' (cached)."""
        return self.qt

    @cached_property
    def q(self) -> NDArray[np.float64]:
        return readonly(self.qt.T.copy())

    def get_q(self) -> NDArray[np.float64]:
        """Q (cached)."""
        return self.q

    @cached_property
    def t(self) -> NDArray[np.float64]:
        m = self._main.shape[0]
        T = np.diag(self._main)
        if m > 1:
            idx = np.arange(m - 1)
            T[idx, idx + 1] = self._secondary
            T[idx + 1, idx] = self._secondary
        return readonly(T)

    def get_t(self) -> NDArray[np.float64]:
        """Tridiagonal matrix T (cached)."""
        return self.t
