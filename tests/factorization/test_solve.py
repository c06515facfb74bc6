"""
Tests for matrix_solve_linear().

Validates the Householder QR solve on square, over- and under-determined
systems, the accepted right-hand side shapes, and the rank handling:
permissive by default (RuntimeWarning), strict with check_rank=True.
"""

import warnings

import numpy as np
import pytest

from pylinalg import (
    Matrix,
    OperandTypeError,
    ShapeError,
    SingularMatrixError,
    ValidationError,
    matrix_solve_linear,
)


# ═══════════════════════════════════════════════════════════════════════
# Well-posed systems
# ═══════════════════════════════════════════════════════════════════════


class TestSquareSystems:

    def test_known_solution(self, backend):
        a = [[2, 1], [1, 3]]
        x = matrix_solve_linear(a, [3, 5], backend=backend)
        np.testing.assert_allclose(x, [0.8, 1.4], rtol=1e-12)

    def test_random_system(self, square_matrix, rng, backend):
        x_true = rng.standard_normal(5)
        x = matrix_solve_linear(square_matrix, square_matrix @ x_true, backend=backend)
        np.testing.assert_allclose(x, x_true, rtol=1e-10, atol=1e-12)

    def test_returns_1d_float_array(self, square_matrix):
        x = matrix_solve_linear(square_matrix, np.ones(5))
        assert isinstance(x, np.ndarray)
        assert x.shape == (5,)
        assert x.dtype == np.float64

    def test_non_symmetric(self, backend):
        a = [[0, 1, 2], [3, 0, 1], [1, 1, 0]]
        b = [5, 6, 3]
        x = matrix_solve_linear(a, b, backend=backend)
        np.testing.assert_allclose(np.array(a, dtype=float) @ x, b, atol=1e-12)

    def test_no_warning_for_full_rank(self, square_matrix):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            matrix_solve_linear(square_matrix, np.ones(5))


class TestRightHandSide:

    @pytest.mark.parametrize("b", [
        [1.0, 2.0],
        np.array([1.0, 2.0]),
        Matrix(2, 1, [1.0, 2.0]),
        Matrix(1, 2, [1.0, 2.0]),
        [[1.0], [2.0]],
    ])
    def test_vector_shapes_accepted(self, b):
        x = matrix_solve_linear([[1, 0], [0, 2]], b)
        np.testing.assert_allclose(x, [1.0, 1.0])

    def test_length_mismatch(self):
        with pytest.raises(ShapeError, match="does not match"):
            matrix_solve_linear([[1, 0], [0, 1]], [1, 2, 3])

    def test_matrix_rhs_rejected(self):
        with pytest.raises(ShapeError, match="expected a vector"):
            matrix_solve_linear([[1, 0], [0, 1]], Matrix(2, 2, [1, 0, 0, 1]))

    def test_scalar_rhs_rejected(self):
        with pytest.raises(OperandTypeError):
            matrix_solve_linear([[2.0]], 4.0)

    def test_non_finite_rhs(self):
        with pytest.raises(ValidationError):
            matrix_solve_linear([[1, 0], [0, 1]], [1, np.nan])

    def test_inputs_untouched(self):
        a = Matrix(2, 2, [2, 1, 1, 3])
        b = np.array([3.0, 5.0])
        matrix_solve_linear(a, b)
        assert a == Matrix(2, 2, [2, 1, 1, 3])
        np.testing.assert_array_equal(b, [3.0, 5.0])


# ═══════════════════════════════════════════════════════════════════════
# Rectangular systems
# ═══════════════════════════════════════════════════════════════════════


class TestRectangular:

    def test_overdetermined_is_least_squares(self, tall_matrix, rng, backend):
        b = rng.standard_normal(7)
        x = matrix_solve_linear(tall_matrix, b, backend=backend)
        expected, *_ = np.linalg.lstsq(tall_matrix, b, rcond=None)
        np.testing.assert_allclose(x, expected, rtol=1e-9, atol=1e-12)

    def test_underdetermined_basic_solution(self, wide_matrix, rng, backend):
        b = rng.standard_normal(3)
        x = matrix_solve_linear(wide_matrix, b, backend=backend)
        assert x.shape == (6,)
        np.testing.assert_array_equal(x[3:], 0.0)
        np.testing.assert_allclose(wide_matrix @ x, b, atol=1e-10)


# ═══════════════════════════════════════════════════════════════════════
# Rank handling
# ═══════════════════════════════════════════════════════════════════════


class TestRankHandling:

    # R diagonal (1, 1, 1e-20): numerical rank 2, but no exact zero pivot
    NEARLY_SINGULAR = [[1, 0, 0], [0, 1, 0], [0, 0, 1e-20]]

    def test_permissive_default_warns(self, backend):
        with pytest.warns(RuntimeWarning, match="rank deficient"):
            x = matrix_solve_linear(self.NEARLY_SINGULAR, [1, 2, 1e-20], backend=backend)
        np.testing.assert_allclose(np.abs(x), [1.0, 2.0, 1.0], rtol=1e-12)

    def test_check_rank_raises(self, backend):
        with pytest.raises(SingularMatrixError) as exc_info:
            matrix_solve_linear(
                self.NEARLY_SINGULAR, [1, 2, 1], check_rank=True, backend=backend,
            )
        assert exc_info.value.rank == 2
        assert exc_info.value.expected_rank == 3

    def test_check_rank_passes_full_rank(self, square_matrix, backend):
        x = matrix_solve_linear(square_matrix, np.ones(5), check_rank=True, backend=backend)
        np.testing.assert_allclose(square_matrix @ x, np.ones(5), atol=1e-12)

    def test_exact_zero_pivot_raises(self, backend):
        with pytest.raises(SingularMatrixError):
            matrix_solve_linear([[1, 1], [0, 0]], [1, 0], backend=backend)

    def test_check_rank_must_be_bool(self):
        with pytest.raises(ValidationError, match="check_rank"):
            matrix_solve_linear([[1.0]], [1.0], check_rank=1)

    def test_non_finite_matrix(self):
        with pytest.raises(ValidationError):
            matrix_solve_linear([[np.inf]], [1.0])
