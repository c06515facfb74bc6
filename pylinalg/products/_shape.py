"""
Shape resolution rules shared by the product family.

Each rule checks the dimensions a Matrix x Matrix product needs and
returns the output shape, raising ShapeError with both shapes in the
message when they do not line up.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ShapeError
from pylinalg.matrix.design import Matrix, Operand, Scalar


def matmul_shape(left: Matrix, right: Matrix) -> tuple[int, int]:
    """A (r x k) times B (k x c) -> (r x c)."""
    if left.cols != right.rows:
        raise ShapeError(
            f"shapes {left.rows}x{left.cols} and {right.rows}x{right.cols} not aligned: "
            f"a.cols ({left.cols}) != b.rows ({right.rows})"
        )
    return (left.rows, right.cols)


def inner_shape(left: Matrix, right: Matrix) -> tuple[int, int]:
    """Contract the last axis: A (r x k), B (s x k) -> (r x s)."""
    if left.cols != right.cols:
        raise ShapeError(
            f"shapes {left.rows}x{left.cols} and {right.rows}x{right.cols} not aligned: "
            f"last dimensions differ ({left.cols} != {right.cols})"
        )
    return (left.rows, right.rows)


def is_vector_pair(left: Matrix, right: Matrix) -> bool:
    """Both operands are vectors (single row or column) of equal length."""
    return left.is_vector and right.is_vector and left.size == right.size


def scalar_broadcast(left: Operand, right: Operand) -> float | NDArray[np.floating[Any]] | None:
    """
    Product when at least one operand is a Scalar.

    Returns:
        float for scalar x scalar, the scaled (rows x cols) array for
        scalar x Matrix in either order, or None when both are matrices.
    """
    if isinstance(left, Scalar) and isinstance(right, Scalar):
        return left.value * right.value
    if isinstance(left, Scalar):
        return left.value * right.values
    if isinstance(right, Scalar):
        return left.values * right.value
    return None
