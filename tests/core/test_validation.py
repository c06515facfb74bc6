"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object/bool/complex rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_dimension: positive integer sizes
    - check_integer, check_tolerance, check_flag: scalar options
    - check_square
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import ShapeError, ValidationError
from pylinalg.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_dimension,
    check_finite,
    check_flag,
    check_integer,
    check_ndim,
    check_square,
    check_tolerance,
)
from pylinalg.matrix import Matrix


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to float64 and rejects non-real data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "a")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_int_array_promoted_to_float(self):
        result = check_array(np.array([1, 2, 3], dtype=np.int32), "a")
        assert result.dtype == np.float64

    def test_nested_list_to_2d(self):
        result = check_array([[1, 2], [3, 4]], "a")
        assert result.shape == (2, 2)

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "a")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "a")

    def test_rejects_bool(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array([True, False], "a")

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j, 3.0], "a")

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValidationError):
            check_array([[1, 2], [3]], "a")

    def test_name_in_message(self):
        with pytest.raises(ValidationError, match="my_param"):
            check_array(["x"], "my_param")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, -2.0, 0.0]), "a")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan]), "a")

    def test_inf_rejected(self):
        with pytest.raises(ValidationError, match="2 Inf"):
            check_finite(np.array([np.inf, -np.inf, 0.0]), "a")


# ═══════════════════════════════════════════════════════════════════════
# Dimensionality
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:

    def test_matching_ndim(self):
        check_ndim(np.zeros((2, 3)), 2, "a")

    def test_wrong_ndim_raises_shape_error(self):
        with pytest.raises(ShapeError, match="expected 2D"):
            check_ndim(np.zeros(3), 2, "a")

    def test_check_1d(self):
        check_1d(np.zeros(3), "a")
        with pytest.raises(ShapeError):
            check_1d(np.zeros((1, 3)), "a")

    def test_check_2d(self):
        check_2d(np.zeros((1, 3)), "a")
        with pytest.raises(ShapeError):
            check_2d(np.zeros(3), "a")


class TestCheckDimension:

    def test_positive_int(self):
        assert check_dimension(3, "rows") == 3

    def test_numpy_integer(self):
        value = check_dimension(np.int64(4), "rows")
        assert value == 4
        assert type(value) is int

    @pytest.mark.parametrize("bad", [0, -1])
    def test_non_positive_rejected(self, bad):
        with pytest.raises(ShapeError, match="positive"):
            check_dimension(bad, "rows")

    @pytest.mark.parametrize("bad", [2.0, "3", None, True])
    def test_non_integer_rejected(self, bad):
        with pytest.raises(ShapeError):
            check_dimension(bad, "rows")


class TestCheckSquare:

    def test_square_passes(self):
        check_square(Matrix(2, 2, [1, 2, 3, 4]), "a")

    def test_rectangular_rejected(self):
        with pytest.raises(ShapeError, match="2x3"):
            check_square(Matrix(2, 3, [1, 2, 3, 4, 5, 6]), "a")


# ═══════════════════════════════════════════════════════════════════════
# Scalar options
# ═══════════════════════════════════════════════════════════════════════


class TestScalarOptions:

    def test_integer(self):
        assert check_integer(-3, "n") == -3

    @pytest.mark.parametrize("bad", [1.5, "2", True])
    def test_integer_rejects(self, bad):
        with pytest.raises(ValidationError):
            check_integer(bad, "n")

    def test_tolerance(self):
        assert check_tolerance(0, "tol") == 0.0
        assert check_tolerance(0.25, "tol") == 0.25

    @pytest.mark.parametrize("bad", [-0.1, np.nan, np.inf, "0.1", False])
    def test_tolerance_rejects(self, bad):
        with pytest.raises(ValidationError):
            check_tolerance(bad, "tol")

    def test_flag(self):
        assert check_flag(True, "compute_uv") is True
        assert check_flag(np.bool_(False), "compute_uv") is False

    @pytest.mark.parametrize("bad", [1, 0, "yes", None])
    def test_flag_rejects(self, bad):
        with pytest.raises(ValidationError, match="compute_uv"):
            check_flag(bad, "compute_uv")
