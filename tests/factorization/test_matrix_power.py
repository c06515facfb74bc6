"""
Tests for matrix_power().
"""

import numpy as np
import pytest

from pylinalg import (
    Matrix,
    ShapeError,
    SingularMatrixError,
    ValidationError,
    dot,
    identity,
    inv,
    matrix_power,
)


class TestSpecialExponents:

    def test_zero_is_identity(self, square_matrix):
        assert matrix_power(square_matrix, 0) == identity(5)

    def test_zero_of_singular_is_identity(self):
        assert matrix_power([[1, 1], [1, 1]], 0) == identity(2)

    def test_one_equals_input(self):
        a = Matrix(2, 2, [1, 2, 3, 4])
        assert matrix_power(a, 1) == a

    def test_one_is_independent_copy(self):
        a = Matrix(2, 2, [1, 2, 3, 4])
        out = matrix_power(a, 1)
        assert out is not a
        assert not np.shares_memory(out.data, a.data)


class TestPositiveExponents:

    def test_ones_cubed(self):
        assert matrix_power([[1, 1], [1, 1]], 3).to_list() == [[4.0, 4.0], [4.0, 4.0]]

    def test_square(self):
        a = Matrix(2, 2, [1, 2, 3, 4])
        assert matrix_power(a, 2) == dot(a, a)

    def test_one_by_one_stays_matrix(self):
        out = matrix_power([[2.0]], 3)
        assert isinstance(out, Matrix)
        assert out == Matrix(1, 1, [8.0])

    @pytest.mark.parametrize("n", [2, 3, 5, 8, 13])
    def test_matches_numpy(self, rng, n):
        a = rng.standard_normal((4, 4)) * 0.5
        np.testing.assert_allclose(
            matrix_power(a, n).values,
            np.linalg.matrix_power(a, n),
            rtol=1e-10,
            atol=1e-12,
        )

    def test_square_times_inverse(self, square_matrix, backend):
        out = dot(matrix_power(square_matrix, 2), inv(square_matrix, backend=backend))
        np.testing.assert_allclose(out.values, square_matrix, rtol=1e-9, atol=1e-9)


class TestNegativeExponents:

    def test_minus_one_is_inverse(self, square_matrix, backend):
        np.testing.assert_allclose(
            matrix_power(square_matrix, -1, backend=backend).values,
            inv(square_matrix, backend=backend).values,
            rtol=1e-12,
        )

    def test_rotation_minus_three(self, backend):
        # Quarter turn: R^4 = I, so R^-3 = R
        r = [[0, -1], [1, 0]]
        np.testing.assert_allclose(
            matrix_power(r, -3, backend=backend).values, r, atol=1e-12,
        )

    def test_matches_numpy(self, square_matrix):
        np.testing.assert_allclose(
            matrix_power(square_matrix, -3).values,
            np.linalg.matrix_power(square_matrix, -3),
            rtol=1e-9,
            atol=1e-12,
        )

    def test_singular_raises(self, backend):
        with pytest.raises(SingularMatrixError):
            matrix_power([[1, 1], [1, 1]], -2, backend=backend)


class TestValidation:

    def test_non_square(self):
        with pytest.raises(ShapeError):
            matrix_power(Matrix(2, 3, [1, 2, 3, 4, 5, 6]), 2)

    @pytest.mark.parametrize("n", [1.5, 2.0, "2", None, True])
    def test_non_integer_exponent(self, n):
        with pytest.raises(ValidationError):
            matrix_power(identity(2), n)

    def test_numpy_integer_exponent(self):
        assert matrix_power(identity(2), np.int64(3)) == identity(2)
