"""
Tests for QRDecomposition.

Validates:
    - Q orthonormality and Q R reconstruction (economy and full modes)
    - Least-squares solve against numpy.linalg.lstsq
    - Rank deficiency detection, wide matrix rejection
    - transpose mode and solve_transpose
"""

import numpy as np
import pytest

from pynumerics.core.exceptions import DimensionError, RankDeficientError, ValidationError
from pynumerics.linalg import QRDecomposition


# ═══════════════════════════════════════════════════════════════════════
# Factors
# ═══════════════════════════════════════════════════════════════════════


class TestFactors:

    def test_economy_shapes(self, tall_matrix):
        qr = QRDecomposition(tall_matrix)
        assert qr.economy
        assert (qr.rows, qr.columns) == (8, 4)
        assert qr.orthogonal_factor.shape == (8, 4)
        assert qr.upper_triangular_factor.shape == (4, 4)

    def test_orthonormal_columns(self, tall_matrix):
        Q = QRDecomposition(tall_matrix).orthogonal_factor
        np.testing.assert_allclose(Q.T @ Q, np.eye(4), atol=1e-12)

    def test_reconstruction(self, tall_matrix):
        qr = QRDecomposition(tall_matrix)
        R = qr.upper_triangular_factor
        np.testing.assert_array_equal(R, np.triu(R))
        np.testing.assert_allclose(qr.reverse(), tall_matrix, atol=1e-12)

    def test_diagonal_matches_r(self, tall_matrix):
        qr = QRDecomposition(tall_matrix)
        np.testing.assert_array_equal(qr.diagonal, np.diag(qr.upper_triangular_factor))

    def test_matches_numpy_up_to_sign(self, tall_matrix):
        R = QRDecomposition(tall_matrix).upper_triangular_factor
        R_np = np.linalg.qr(tall_matrix, mode='reduced')[1]
        np.testing.assert_allclose(np.abs(R), np.abs(R_np), atol=1e-12)

    def test_full_mode(self, tall_matrix):
        qr = QRDecomposition(tall_matrix, economy=False)
        Q = qr.orthogonal_factor
        R = qr.upper_triangular_factor
        assert Q.shape == (8, 8)
        assert R.shape == (8, 4)
        np.testing.assert_allclose(Q.T @ Q, np.eye(8), atol=1e-12)
        np.testing.assert_allclose(Q @ R, tall_matrix, atol=1e-12)
        np.testing.assert_array_equal(R[4:], 0.0)

    def test_square_q_from_economy(self, tall_matrix):
        qr = QRDecomposition(tall_matrix)
        Q = qr.get_q()
        assert Q.shape == (8, 8)
        np.testing.assert_allclose(Q @ qr.get_r(), tall_matrix, atol=1e-12)
        np.testing.assert_allclose(qr.get_qt(), Q.T)

    def test_householder_vectors_lower_trapezoid(self, tall_matrix):
        H = QRDecomposition(tall_matrix).get_h()
        assert H.shape == (8, 4)
        np.testing.assert_array_equal(H, np.tril(H))

    def test_cached_read_only(self, tall_matrix):
        qr = QRDecomposition(tall_matrix)
        assert qr.orthogonal_factor is qr.orthogonal_factor
        with pytest.raises(ValueError):
            qr.upper_triangular_factor[0, 0] = 0.0
        with pytest.raises(ValueError):
            qr.data[0, 0] = 0.0


# ═══════════════════════════════════════════════════════════════════════
# Solving
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    def test_least_squares_vector(self, tall_matrix, rng):
        b = rng.standard_normal(8)
        x = QRDecomposition(tall_matrix).solve(b)
        expected = np.linalg.lstsq(tall_matrix, b, rcond=None)[0]
        assert x.shape == (4,)
        np.testing.assert_allclose(x, expected, rtol=1e-10, atol=1e-12)

    def test_normal_equations(self, tall_matrix, rng):
        b = rng.standard_normal(8)
        x = QRDecomposition(tall_matrix).solve(b)
        np.testing.assert_allclose(
            tall_matrix.T @ tall_matrix @ x, tall_matrix.T @ b, atol=1e-10
        )

    def test_least_squares_matrix(self, tall_matrix, rng):
        B = rng.standard_normal((8, 3))
        X = QRDecomposition(tall_matrix).solve(B)
        expected = np.linalg.lstsq(tall_matrix, B, rcond=None)[0]
        np.testing.assert_allclose(X, expected, rtol=1e-10, atol=1e-12)

    def test_square_exact(self, rng):
        A = rng.standard_normal((5, 5)) + 5 * np.eye(5)
        b = rng.standard_normal(5)
        np.testing.assert_allclose(
            QRDecomposition(A).solve(b), np.linalg.solve(A, b), rtol=1e-10
        )

    def test_full_mode_solve_matches_economy(self, tall_matrix, rng):
        b = rng.standard_normal(8)
        np.testing.assert_allclose(
            QRDecomposition(tall_matrix, economy=False).solve(b),
            QRDecomposition(tall_matrix).solve(b),
            rtol=1e-12,
        )

    def test_pseudo_inverse(self, tall_matrix):
        inv = QRDecomposition(tall_matrix).inverse()
        assert inv.shape == (4, 8)
        np.testing.assert_allclose(inv, np.linalg.pinv(tall_matrix), atol=1e-10)

    def test_wrong_rows(self, tall_matrix):
        with pytest.raises(DimensionError, match="expected 8 rows"):
            QRDecomposition(tall_matrix).solve(np.ones(4))


# ═══════════════════════════════════════════════════════════════════════
# Rank and shape
# ═══════════════════════════════════════════════════════════════════════


class TestRankAndShape:

    def test_rank_deficient(self):
        A = np.array([[1.0, 1.0], [0.0, 0.0], [0.0, 0.0]])
        qr = QRDecomposition(A)
        assert not qr.full_rank
        with pytest.raises(RankDeficientError) as exc_info:
            qr.solve(np.ones(3))
        assert exc_info.value.rank == 1
        assert exc_info.value.expected_rank == 2

    def test_zero_column_still_factorizes(self):
        A = np.array([[1.0, 0.0], [2.0, 0.0], [3.0, 0.0]])
        qr = QRDecomposition(A)
        assert not qr.full_rank
        np.testing.assert_allclose(qr.reverse(), A, atol=1e-12)

    def test_wide_rejected(self):
        with pytest.raises(DimensionError, match="more columns"):
            QRDecomposition(np.ones((2, 5)))

    def test_full_mode_in_place_rejected(self, tall_matrix):
        with pytest.raises(ValidationError, match="economy"):
            QRDecomposition(tall_matrix, economy=False, in_place=True)


# ═══════════════════════════════════════════════════════════════════════
# Transpose mode
# ═══════════════════════════════════════════════════════════════════════


class TestTranspose:

    def test_transpose_decomposes_transpose(self, tall_matrix):
        wide = tall_matrix.T.copy()
        qr = QRDecomposition(wide, transpose=True)
        assert (qr.rows, qr.columns) == (8, 4)
        np.testing.assert_allclose(qr.reverse(), tall_matrix, atol=1e-12)

    def test_solve_transpose(self, tall_matrix, rng):
        # X A' = B  <=>  A X' = B'
        B = rng.standard_normal((2, 8))
        X = QRDecomposition(tall_matrix).solve_transpose(B)
        expected = np.linalg.lstsq(tall_matrix, B.T, rcond=None)[0].T
        assert X.shape == (2, 4)
        np.testing.assert_allclose(X, expected, rtol=1e-10, atol=1e-12)

    def test_solve_transpose_wrong_columns(self, tall_matrix):
        with pytest.raises(DimensionError, match="columns"):
            QRDecomposition(tall_matrix).solve_transpose(np.ones((2, 4)))

    def test_in_place_square_transpose(self, rng):
        A = rng.standard_normal((4, 4)) + 4 * np.eye(4)
        expected = A.T.copy()
        qr = QRDecomposition(A, transpose=True, in_place=True)
        assert not qr.owns_buffer
        np.testing.assert_allclose(qr.reverse(), expected, atol=1e-12)
