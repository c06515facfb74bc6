"""
The product family: dot, matrix_mul, inner, outer.

Every operand is first classified as Scalar or Matrix (as_operand), then
the product is dispatched on the pair. A 1x1 result is handed back as a
bare float.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pylinalg.matrix.design import Matrix, as_matrix, as_operand, wrap_result
from pylinalg.products._shape import (
    inner_shape,
    is_vector_pair,
    matmul_shape,
    scalar_broadcast,
)


def _package(value) -> float | Matrix:
    if isinstance(value, float):
        return value
    return wrap_result(value)


def dot(a: Any, b: Any) -> float | Matrix:
    """
    Dot product of two operands.

    scalar x scalar is the ordinary product; scalar x Matrix scales every
    element; Matrix x Matrix is matrix multiplication.

    Parameters
    ----------
    a, b : scalar, Matrix, or 1D/2D array-like

    Returns
    -------
    float or Matrix
        Matrix of shape (a.rows x b.cols) for two matrices; float when the
        result is 1x1.

    Raises
    ------
    OperandTypeError
        If an operand is neither a finite scalar nor a Matrix.
    ShapeError
        If a.cols != b.rows for two matrices.

    Examples
    --------
    >>> dot(7, 3)
    21.0
    >>> dot(Matrix(1, 4, [1, 1, 1, 1]), Matrix(4, 1, [2, 2, 1, 1]))
    6.0
    """
    left = as_operand(a, 'a')
    right = as_operand(b, 'b')

    scaled = scalar_broadcast(left, right)
    if scaled is not None:
        return _package(scaled)

    matmul_shape(left, right)
    return wrap_result(left.values @ right.values)


def matrix_mul(a: Any, b: Any) -> float | Matrix:
    """
    Matrix multiplication of two matrices.

    Same as the Matrix x Matrix branch of dot(), but scalar operands are
    rejected.

    Raises
    ------
    OperandTypeError
        If either operand is a scalar or not matrix-like.
    ShapeError
        If a.cols != b.rows.
    """
    left = as_matrix(a, 'a')
    right = as_matrix(b, 'b')
    matmul_shape(left, right)
    return wrap_result(left.values @ right.values)


def inner(a: Any, b: Any) -> float | Matrix:
    """
    Inner product.

    Two vectors (single row or single column) of equal length give the sum
    of products. Otherwise the last axis of each operand is contracted:
    result[i, j] = sum_k a[i, k] * b[j, k], which needs a.cols == b.cols
    and has shape (a.rows x b.rows). Scalars broadcast as in dot().

    Raises
    ------
    OperandTypeError
        If an operand is neither a finite scalar nor a Matrix.
    ShapeError
        If the last dimensions differ.
    """
    left = as_operand(a, 'a')
    right = as_operand(b, 'b')

    scaled = scalar_broadcast(left, right)
    if scaled is not None:
        return _package(scaled)

    if is_vector_pair(left, right):
        return float(np.dot(left.data, right.data))

    inner_shape(left, right)
    return wrap_result(left.values @ right.values.T)


def outer(a: Any, b: Any) -> float | Matrix:
    """
    Outer product of the flattened operands.

    Both matrices are flattened row-major to a (length m) and b (length n);
    the result is the m x n matrix result[i, j] = a[i] * b[j], whatever the
    original shapes. Scalars broadcast as an ordinary product.

    Raises
    ------
    OperandTypeError
        If an operand is neither a finite scalar nor a Matrix.
    """
    left = as_operand(a, 'a')
    right = as_operand(b, 'b')

    scaled = scalar_broadcast(left, right)
    if scaled is not None:
        return _package(scaled)

    return wrap_result(np.outer(left.data, right.data))
