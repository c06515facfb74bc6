"""
Elementary matrix constructors.

Every constructor validates its dimensions with check_dimension, so a
non-positive or non-integer size raises ShapeError before any allocation.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core.exceptions import ShapeError
from pylinalg.core.validation import check_array, check_dimension
from pylinalg.matrix.design import Matrix


def _resolve_shape(rows: int, cols: int | None) -> tuple[int, int]:
    """Validate (rows, cols); cols defaults to rows."""
    n = check_dimension(rows, 'rows')
    m = n if cols is None else check_dimension(cols, 'cols')
    return n, m


def zeros(rows: int, cols: int | None = None) -> Matrix:
    """rows x cols matrix of zeros; square when cols is omitted."""
    n, m = _resolve_shape(rows, cols)
    return Matrix(n, m, np.zeros(n * m))


def ones(rows: int, cols: int | None = None) -> Matrix:
    """rows x cols matrix of ones; square when cols is omitted."""
    n, m = _resolve_shape(rows, cols)
    return Matrix(n, m, np.ones(n * m))


def empty(rows: int, cols: int | None = None) -> Matrix:
    """
    rows x cols matrix with unspecified contents.

    The values are whatever the allocator returned; callers must not
    rely on them.
    """
    n, m = _resolve_shape(rows, cols)
    return Matrix(n, m, np.empty(n * m))


def eye(rows: int, cols: int | None = None) -> Matrix:
    """rows x cols matrix with ones on the main diagonal."""
    n, m = _resolve_shape(rows, cols)
    return Matrix(n, m, np.eye(n, m).ravel())


def identity(n: int) -> Matrix:
    """n x n identity matrix."""
    return eye(n, n)


def tri(rows: int, cols: int | None = None) -> Matrix:
    """rows x cols matrix with ones at and below the main diagonal."""
    n, m = _resolve_shape(rows, cols)
    return Matrix(n, m, np.tri(n, m).ravel())


def diag(values: ArrayLike) -> Matrix:
    """
    Square matrix with the given values on the diagonal.

    Args:
        values: Non-empty 1D sequence (or vector-shaped Matrix)

    Raises:
        ShapeError: If values is empty or not vector-shaped
    """
    if isinstance(values, Matrix):
        if not values.is_vector:
            raise ShapeError(
                f"values: expected a vector, got {values.rows}x{values.cols} matrix"
            )
        v = values.data
    else:
        v = check_array(values, 'values')
        if v.ndim != 1:
            raise ShapeError(f"values: expected 1D sequence, got {v.ndim}D")
    if v.size == 0:
        raise ShapeError("values: at least one diagonal value is required")
    return Matrix.from_array(np.diag(v))
