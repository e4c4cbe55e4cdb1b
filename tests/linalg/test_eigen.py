"""
Tests for EigenDecomposition and EigenSolver.

Validates:
    - V D V' reconstruction, orthonormal eigenvectors
    - Descending eigenvalues matching numpy.linalg.eigvalsh
    - Symmetry enforcement, singular solves, square root
    - from_tridiagonal on a known spectrum
"""

import math

import numpy as np
import pytest

from pynumerics.core.exceptions import (
    ConvergenceError,
    DimensionError,
    NotPositiveDefiniteError,
    SingularMatrixError,
    ValidationError,
)
from pynumerics.linalg import EigenDecomposition
from pynumerics.linalg import eigen as eigen_module


# ═══════════════════════════════════════════════════════════════════════
# Decomposition
# ═══════════════════════════════════════════════════════════════════════


class TestDecomposition:

    def test_reconstruction(self, symmetric_indefinite):
        eig = EigenDecomposition(symmetric_indefinite)
        V = eig.get_v()
        np.testing.assert_allclose(V @ eig.get_d() @ V.T, symmetric_indefinite, atol=1e-10)
        np.testing.assert_allclose(eig.reverse(), symmetric_indefinite, atol=1e-10)

    def test_orthonormal_vectors(self, spd_matrix):
        V = EigenDecomposition(spd_matrix).get_v()
        np.testing.assert_allclose(V.T @ V, np.eye(6), atol=1e-12)

    def test_eigenvalues_descending(self, symmetric_indefinite):
        eig = EigenDecomposition(symmetric_indefinite)
        values = eig.real_eigenvalues
        assert np.all(np.diff(values) <= 0)
        np.testing.assert_allclose(values, [4.0, 2.5, 1.0, -1.5, -3.0], atol=1e-10)

    def test_matches_numpy(self, spd_matrix):
        values = EigenDecomposition(spd_matrix).real_eigenvalues
        np.testing.assert_allclose(
            values, np.linalg.eigvalsh(spd_matrix)[::-1], rtol=1e-10
        )

    def test_eigenvector_equation(self, spd_matrix):
        eig = EigenDecomposition(spd_matrix)
        for i in range(eig.n):
            v = eig.get_eigenvector(i)
            lam = eig.get_real_eigenvalue(i)
            np.testing.assert_allclose(spd_matrix @ v, lam * v, atol=1e-10)

    def test_small_example(self):
        eig = EigenDecomposition(np.array([[2.0, 1.0], [1.0, 2.0]]))
        np.testing.assert_allclose(eig.real_eigenvalues, [3.0, 1.0])
        assert eig.determinant == pytest.approx(3.0)

    def test_imaginary_parts_zero(self, spd_matrix):
        eig = EigenDecomposition(spd_matrix)
        assert not eig.has_complex_eigenvalues()
        np.testing.assert_array_equal(eig.imag_eigenvalues, 0.0)
        assert eig.get_imag_eigenvalue(0) == 0.0

    def test_determinant(self, spd_matrix):
        eig = EigenDecomposition(spd_matrix)
        assert eig.determinant == pytest.approx(np.linalg.det(spd_matrix), rel=1e-10)

    def test_cached_views(self, spd_matrix):
        eig = EigenDecomposition(spd_matrix)
        assert eig.get_v() is eig.get_v()
        np.testing.assert_array_equal(eig.get_vt(), eig.get_v().T)
        with pytest.raises(ValueError):
            eig.get_d()[0, 0] = 0.0

    def test_copy(self, spd_matrix):
        eig = EigenDecomposition(spd_matrix)
        clone = eig.copy()
        np.testing.assert_array_equal(clone.real_eigenvalues, eig.real_eigenvalues)
        np.testing.assert_array_equal(clone.get_v(), eig.get_v())

    def test_diagonal_input(self):
        eig = EigenDecomposition(np.diag([1.0, 5.0, 3.0]))
        np.testing.assert_allclose(eig.real_eigenvalues, [5.0, 3.0, 1.0])
        np.testing.assert_allclose(np.abs(eig.get_eigenvector(0)), [0.0, 1.0, 0.0])


# ═══════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════


class TestValidation:

    def test_non_symmetric(self):
        with pytest.raises(ValidationError, match="not symmetric"):
            EigenDecomposition(np.array([[1.0, 2.0], [0.0, 1.0]]))

    def test_non_square(self):
        with pytest.raises(DimensionError):
            EigenDecomposition(np.ones((2, 3)))

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            EigenDecomposition(np.array([[1.0, np.nan], [np.nan, 1.0]]))


# ═══════════════════════════════════════════════════════════════════════
# Tridiagonal input
# ═══════════════════════════════════════════════════════════════════════


class TestFromTridiagonal:

    def test_known_spectrum(self):
        eig = EigenDecomposition.from_tridiagonal([2.0, 2.0, 2.0], [-1.0, -1.0])
        expected = [2.0 + math.sqrt(2.0), 2.0, 2.0 - math.sqrt(2.0)]
        np.testing.assert_allclose(eig.real_eigenvalues, expected, atol=1e-12)

    def test_reconstruction(self):
        main = np.array([4.0, 1.0, -2.0, 3.0])
        secondary = np.array([0.5, 1.5, -0.7])
        T = np.diag(main) + np.diag(secondary, 1) + np.diag(secondary, -1)
        eig = EigenDecomposition.from_tridiagonal(main, secondary)
        np.testing.assert_allclose(eig.reverse(), T, atol=1e-12)

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="secondary"):
            EigenDecomposition.from_tridiagonal([1.0, 2.0, 3.0], [1.0])

    def test_sweep_cap(self, monkeypatch):
        monkeypatch.setattr(eigen_module, 'EIGEN_MAX_ITERATIONS', 0)
        with pytest.raises(ConvergenceError, match="did not converge") as exc_info:
            EigenDecomposition.from_tridiagonal([4.0, 1.0, -2.0], [0.5, 1.5])
        assert exc_info.value.reason == 'max_iterations'
        assert exc_info.value.iterations == 0
        assert exc_info.value.final_change == pytest.approx(0.5)

    def test_default_sweep_cap(self):
        assert eigen_module.EIGEN_MAX_ITERATIONS == 30


# ═══════════════════════════════════════════════════════════════════════
# Solving
# ═══════════════════════════════════════════════════════════════════════


class TestSolver:

    def test_solve(self, spd_matrix, rng):
        b = rng.standard_normal(6)
        x = EigenDecomposition(spd_matrix).solve(b)
        np.testing.assert_allclose(x, np.linalg.solve(spd_matrix, b), rtol=1e-9)

    def test_solve_matrix(self, symmetric_indefinite, rng):
        B = rng.standard_normal((5, 2))
        X = EigenDecomposition(symmetric_indefinite).solve(B)
        np.testing.assert_allclose(
            X, np.linalg.solve(symmetric_indefinite, B), rtol=1e-9, atol=1e-12
        )

    def test_inverse(self, spd_matrix):
        inv = EigenDecomposition(spd_matrix).inverse()
        np.testing.assert_allclose(inv @ spd_matrix, np.eye(6), atol=1e-10)

    def test_singular(self):
        A = np.array([[2.0, 1.0, 0.0], [1.0, 2.0, 0.0], [0.0, 0.0, 0.0]])
        eig = EigenDecomposition(A)
        np.testing.assert_allclose(eig.real_eigenvalues, [3.0, 1.0, 0.0], atol=1e-12)
        assert eig.get_real_eigenvalue(2) == 0.0
        solver = eig.get_solver()
        assert not solver.is_non_singular
        with pytest.raises(SingularMatrixError):
            solver.solve(np.ones(3))
        with pytest.raises(SingularMatrixError):
            eig.inverse()

    def test_wrong_rows(self, spd_matrix):
        with pytest.raises(DimensionError):
            EigenDecomposition(spd_matrix).solve(np.ones(3))


# ═══════════════════════════════════════════════════════════════════════
# Square root
# ═══════════════════════════════════════════════════════════════════════


class TestSquareRoot:

    def test_square_root(self, spd_matrix):
        S = EigenDecomposition(spd_matrix).get_square_root()
        np.testing.assert_allclose(S, S.T, atol=1e-12)
        np.testing.assert_allclose(S @ S, spd_matrix, atol=1e-10)

    def test_indefinite_rejected(self, symmetric_indefinite):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            EigenDecomposition(symmetric_indefinite).get_square_root()
        assert exc_info.value.min_eigenvalue == pytest.approx(-3.0)
