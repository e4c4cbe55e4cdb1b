"""
Householder QR decomposition.

Computes A = Q R for an m x n matrix with m >= n. The Householder vectors
are stored packed in the lower trapezoid of a single work array, with the
diagonal of R kept separately (rdiag). Q and R are reconstructed from
this packed form on demand.

Modes:
    - economy (default): Q is m x n, R is n x n
    - full: the work array is padded to m x m; Q is m x m, R is m x n
    - transpose: decompose A' instead of A

Rank deficiency does not stop the factorization; it is reported by
full_rank and enforced only when solving.
"""

from __future__ import annotations

from functools import cached_property

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import DimensionError, RankDeficientError, ValidationError
from pynumerics.core.validation import check_rows_match
from pynumerics.linalg._common import MatrixBuffer, as_float_rhs, hypot_norm, readonly


class QRDecomposition:
    """
    Householder QR factorization.

    Args:
        value: Matrix to decompose, at least as many rows as columns
            (or as many columns as rows when transpose=True)
        transpose: Decompose value' instead of value
        economy: Thin factors (True) or square Q (False)
        in_place: Factorize value itself; only possible in economy mode
            without transpose (or transposing a square matrix)

    Raises:
        DimensionError: If the matrix is wider than tall
        ValidationError: If in_place cannot be honoured

    Attributes (read-only):
        rows, columns: Shape of the decomposed matrix (after transposition)

    Example:
        >>> qr = QRDecomposition(X)
        >>> beta = qr.solve(y)            # least squares
        >>> np.allclose(qr.orthogonal_factor @ qr.upper_triangular_factor, X)
        True
    """

    def __init__(
        self,
        value: ArrayLike,
        *,
        transpose: bool = False,
        economy: bool = True,
        in_place: bool = False,
    ):
        if in_place and not economy:
            raise ValidationError("in_place=True requires economy=True")

        buffer = MatrixBuffer.take(value, in_place=in_place, name='value')
        A = buffer.data
        rows, cols = A.shape
        if transpose:
            rows, cols = cols, rows

        if rows < cols:
            raise DimensionError(
                f"value: matrix has more columns ({cols}) than rows ({rows}); "
                f"{'decompose the transpose instead' if not transpose else 'use transpose=False'}"
            )

        if transpose and in_place and A.shape[0] != A.shape[1]:
            raise ValidationError(
                "in_place=True with transpose=True requires a square matrix"
            )

        if economy:
            if transpose:
                if in_place:
                    A[...] = A.T.copy()
                    qr = A
                else:
                    qr = np.ascontiguousarray(A.T)
            else:
                qr = A
        else:
            qr = np.zeros((rows, rows))
            qr[:, :cols] = A.T if transpose else A

        self._buffer_borrowed = buffer.borrowed
        self._qr = qr
        self._rows = rows
        self._p = cols
        self._economy = economy
        self._m = qr.shape[1]
        self._rdiag = np.zeros(self._m)

        self._factorize()

    def _factorize(self) -> None:
        qr = self._qr
        rdiag = self._rdiag
        for k in range(self._m):
            nrm = hypot_norm(qr[k:, k])
            if nrm != 0.0:
                # Form k-th Householder vector.
                if qr[k, k] < 0:
                    nrm = -nrm
                qr[k:, k] /= nrm
                qr[k, k] += 1.0

                # Apply transformation to remaining columns.
                if k + 1 < self._m:
                    s = -(qr[k:, k] @ qr[k:, k + 1:]) / qr[k, k]
                    qr[k:, k + 1:] += np.outer(qr[k:, k], s)
            rdiag[k] = -nrm

    def copy(self) -> QRDecomposition:
        """Independent deep copy owning its own buffers."""
        obj = self.__class__.__new__(self.__class__)
        obj._buffer_borrowed = False
        obj._qr = self._qr.copy()
        obj._rdiag = self._rdiag.copy()
        obj._rows = self._rows
        obj._p = self._p
        obj._m = self._m
        obj._economy = self._economy
        return obj

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._p

    @property
    def economy(self) -> bool:
        return self._economy

    @property
    def owns_buffer(self) -> bool:
        return not self._buffer_borrowed

    @property
    def data(self) -> NDArray[np.float64]:
        """Packed work array (Householder vectors below, R above the diagonal)."""
        view = self._qr.view()
        view.flags.writeable = False
        return view

    @property
    def diagonal(self) -> NDArray[np.float64]:
        """Diagonal of R."""
        view = self._rdiag.view()
        view.flags.writeable = False
        return view

    @cached_property
    def full_rank(self) -> bool:
        """True if no diagonal entry of R is zero."""
        return bool(np.all(self._rdiag[:self._p] != 0.0))

    def _check_full_rank(self) -> None:
        if not self.full_rank:
            rank = int(np.count_nonzero(self._rdiag[:self._p]))
            raise RankDeficientError(
                f"Matrix is rank deficient: rank={rank}, expected={self._p}.",
                matrix_name='value',
                rank=rank,
                expected_rank=self._p,
            )

    # ------------------------------------------------------------------
    # Factors
    # ------------------------------------------------------------------

    @cached_property
    def upper_triangular_factor(self) -> NDArray[np.float64]:
        """R: (columns x columns) in economy mode, (rows x columns) in full mode."""
        rows = self._m if self._economy else self._rows
        return readonly(self._build_r(rows))

    @cached_property
    def orthogonal_factor(self) -> NDArray[np.float64]:
        """Q: (rows x columns) in economy mode, (rows x rows) in full mode."""
        cols = self._m if self._economy else self._rows
        return readonly(self._build_q(cols))

    def _build_r(self, rows: int) -> NDArray[np.float64]:
        p = self._p
        R = np.zeros((rows, p))
        k = min(rows, p)
        R[:k, :] = np.triu(self._qr[:k, :p], 1)
        R[np.arange(k), np.arange(k)] = self._rdiag[:k]
        return R

    def _build_q(self, cols: int) -> NDArray[np.float64]:
        n = self._rows
        qr = self._qr
        Q = np.zeros((n, cols))
        for k in range(cols - 1, -1, -1):
            Q[k, k] = 1.0
            if k < self._m and qr[k, k] != 0.0:
                s = -(qr[k:, k] @ Q[k:, k:]) / qr[k, k]
                Q[k:, k:] += np.outer(qr[k:, k], s)
        return Q

    def get_q(self) -> NDArray[np.float64]:
        """Full square Q (rows x rows), rebuilt on every call."""
        return self._build_q(self._rows)

    def get_qt(self) -> NDArray[np.float64]:
        """Transpose of the full square Q, rebuilt on every call."""
        return self.get_q().T.copy()

    def get_r(self) -> NDArray[np.float64]:
        """Full upper trapezoidal R (rows x columns), rebuilt on every call."""
        return self._build_r(self._rows)

    def get_h(self) -> NDArray[np.float64]:
        """Householder vectors as the lower trapezoid of the work array."""
        return np.tril(self._qr[:, :self._p])

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------

    def solve(self, value: ArrayLike) -> NDArray[np.float64]:
        """
        Least-squares solution of A X = B.

        Args:
            value: Right-hand side B, vector (rows,) or matrix (rows, k)

        Returns:
            X minimizing ||A X - B||, shape (columns,) or (columns, k)

        Raises:
            DimensionError: If B does not have `rows` rows
            RankDeficientError: If R has a zero diagonal entry
        """
        B = as_float_rhs(value, 'value')
        check_rows_match(B, self._rows, 'value')
        self._check_full_rank()

        qr = self._qr
        p = self._p
        vector = B.ndim == 1
        X = np.array(B[:, None] if vector else B, dtype=np.float64, copy=True)

        # Compute Y = Q' B
        for k in range(p):
            s = -(qr[k:, k] @ X[k:, :]) / qr[k, k]
            X[k:, :] += np.outer(qr[k:, k], s)

        # Solve R X = Y
        for k in range(p - 1, -1, -1):
            X[k, :] /= self._rdiag[k]
            X[:k, :] -= np.outer(qr[:k, k], X[k, :])

        result = X[:p, :].copy()
        return result[:, 0] if vector else result

    def solve_transpose(self, value: ArrayLike) -> NDArray[np.float64]:
        """
        Least-squares solution of X A' = B, using this decomposition of A.

        Useful with transpose=True: decomposing M' lets solve_transpose
        answer X M = B.

        Args:
            value: B with `rows` columns (k x rows)

        Returns:
            X of shape (k, columns)
        """
        B = as_float_rhs(value, 'value')
        if B.ndim != 2:
            raise DimensionError(f"value: expected a 2D array, got {B.ndim}D")
        if B.shape[1] != self._rows:
            raise DimensionError(
                f"value: expected {self._rows} columns, got {B.shape[1]}"
            )
        return self.solve(B.T).T.copy()

    def inverse(self) -> NDArray[np.float64]:
        """(Pseudo-)inverse of A, shape (columns x rows)."""
        self._check_full_rank()
        return self.solve(np.eye(self._rows))

    def reverse(self) -> NDArray[np.float64]:
        """Reassemble A as Q R."""
        return self.orthogonal_factor @ self.upper_triangular_factor

    def get_information_matrix(self) -> NDArray[np.float64]:
        """(X'X)^-1 where X is the reassembled matrix."""
        X = self.reverse()
        return np.linalg.inv(X.T @ X)

    def __repr__(self) -> str:
        mode = 'economy' if self._economy else 'full'
        return (
            f"QRDecomposition(rows={self._rows}, columns={self._p}, "
            f"mode={mode!r}, full_rank={self.full_rank})"
        )
