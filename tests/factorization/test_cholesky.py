"""
Tests for cholesky().
"""

import numpy as np
import pytest

from pylinalg import (
    Matrix,
    NotPositiveDefiniteError,
    ShapeError,
    ValidationError,
    cholesky,
    matrix_mul,
    transpose,
    tril,
)


class TestCholesky:

    def test_known_factor(self, backend):
        a = [[4, 12, -16], [12, 37, -43], [-16, -43, 98]]
        L = cholesky(a, backend=backend)
        np.testing.assert_allclose(
            L.values,
            [[2, 0, 0], [6, 1, 0], [-8, 5, 3]],
            atol=1e-12,
        )

    def test_reconstruction(self, spd_matrix, backend):
        L = cholesky(spd_matrix, backend=backend)
        np.testing.assert_allclose(
            matrix_mul(L, transpose(L)).values, spd_matrix, rtol=1e-12,
        )

    def test_lower_triangular(self, spd_matrix, backend):
        L = cholesky(spd_matrix, backend=backend)
        assert L == tril(L)
        assert np.all(np.diag(L.values) > 0)

    def test_matches_numpy(self, spd_matrix, backend):
        np.testing.assert_allclose(
            cholesky(spd_matrix, backend=backend).values,
            np.linalg.cholesky(spd_matrix),
            rtol=1e-10,
        )

    def test_reads_lower_triangle_only(self, spd_matrix, backend):
        scrambled = np.tril(spd_matrix) + np.triu(np.full((4, 4), 99.0), k=1)
        np.testing.assert_allclose(
            cholesky(scrambled, backend=backend).values,
            cholesky(spd_matrix, backend=backend).values,
            rtol=1e-14,
        )

    def test_one_by_one(self, backend):
        assert cholesky([[9.0]], backend=backend) == Matrix(1, 1, [3.0])


class TestNotPositiveDefinite:

    def test_indefinite(self, backend):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            cholesky([[1, 2], [2, 1]], backend=backend)
        assert exc_info.value.leading_minor == 2

    def test_negative_first_pivot(self, backend):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            cholesky([[-1, 0], [0, 1]], backend=backend)
        assert exc_info.value.leading_minor == 1

    def test_semidefinite(self, backend):
        with pytest.raises(NotPositiveDefiniteError):
            cholesky([[0, 0], [0, 0]], backend=backend)


class TestValidation:

    def test_non_square(self):
        with pytest.raises(ShapeError):
            cholesky(Matrix(2, 3, [1, 2, 3, 4, 5, 6]))

    def test_non_finite(self):
        with pytest.raises(ValidationError):
            cholesky([[np.inf, 0], [0, 1]])
