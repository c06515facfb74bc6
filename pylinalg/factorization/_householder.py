"""
Householder reflections: QR factorization, Q application, linear solve.

Each reflector is stored as a unit vector v, so H = I - 2 v v'. Step k
of the QR zeroes R[k+1:, k] with the reflector built from R[k:, k].
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.linalg.qr import r_diagonal_rank
from pylinalg.core.exceptions import SingularMatrixError

Reflectors = list[NDArray[np.floating[Any]] | None]


def reflector(x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]] | None:
    """
    Unit vector v such that (I - 2 v v') x = alpha e1.

    alpha = -sign(x[0]) * ||x|| so the subtraction in v[0] never cancels.
    Returns None when x is already zero.
    """
    norm_x = float(np.linalg.norm(x))
    if norm_x == 0.0:
        return None
    alpha = -math.copysign(norm_x, x[0])
    v = np.array(x, dtype=np.float64, copy=True)
    v[0] -= alpha
    return v / np.linalg.norm(v)


def householder_qr(
    a: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], Reflectors]:
    """
    Factor A = Q @ R.

    Args:
        a: Matrix (m x n); not modified

    Returns:
        (R, reflectors): R is m x n upper trapezoidal; reflectors[k] is the
        unit vector acting on rows k: (None where no reflection was needed)
    """
    m, n = a.shape
    R = np.array(a, dtype=np.float64, copy=True)
    reflectors: Reflectors = []

    for k in range(min(m, n)):
        v = reflector(R[k:, k])
        reflectors.append(v)
        if v is None:
            continue
        R[k:, k:] -= 2.0 * np.outer(v, v @ R[k:, k:])
        R[k + 1:, k] = 0.0

    return R, reflectors


def apply_qt(
    reflectors: Reflectors,
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Q' @ b for b of shape (m,) or (m, k); returns a new array."""
    out = np.array(b, dtype=np.float64, copy=True)
    for k, v in enumerate(reflectors):
        if v is None:
            continue
        out[k:] -= 2.0 * np.multiply.outer(v, v @ out[k:])
    return out


def form_q(
    reflectors: Reflectors,
    m: int,
    n_cols: int,
) -> NDArray[np.floating[Any]]:
    """
    Explicit Q restricted to its first n_cols columns.

    n_cols = m gives the complete orthogonal factor, n_cols = min(m, n)
    the reduced one.
    """
    Q = np.eye(m, n_cols)
    for k in range(len(reflectors) - 1, -1, -1):
        v = reflectors[k]
        if v is None:
            continue
        Q[k:, :] -= 2.0 * np.outer(v, v @ Q[k:, :])
    return Q


def back_substitute(
    R: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve the upper-triangular system R @ x = y.

    Raises:
        SingularMatrixError: If a diagonal entry of R is exactly zero
    """
    n = R.shape[0]
    x = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        if R[i, i] == 0.0:
            raise SingularMatrixError(
                f"Coefficient matrix is exactly singular: R[{i}, {i}] == 0",
                matrix_name='A',
            )
        x[i] = (y[i] - R[i, i + 1:] @ x[i + 1:]) / R[i, i]
    return x


def householder_solve(
    a: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], int]:
    """
    Solve A @ x = b via Householder QR.

    Least squares for m > n; basic solution (trailing unknowns zero) for
    m < n.

    Returns:
        (x, rank): solution (n,) and the R-diagonal numerical rank

    Raises:
        SingularMatrixError: If R has an exactly zero pivot
    """
    m, n = a.shape
    k = min(m, n)
    R, reflectors = householder_qr(a)
    rank = r_diagonal_rank(R[:k, :k], a.shape)
    y = apply_qt(reflectors, b)

    x = np.zeros(n, dtype=np.float64)
    try:
        x[:k] = back_substitute(R[:k, :k], y[:k])
    except SingularMatrixError as e:
        e.rank = rank
        e.expected_rank = k
        raise
    return x, rank
