"""
LU factorization with partial pivoting (Doolittle, right-looking).

Reference kernel for the determinant, the inverse, and negative matrix
powers. Produces factors in the same packed layout as LAPACK getrf so
both backends feed the same LUParams.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import SingularMatrixError


def lu_factor(
    a: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.intp], int]:
    """
    Factor P @ A = L @ U.

    At step k the row with the largest |A[i, k]| (i >= k) is swapped into
    the pivot position. A zero pivot column is left in place so singular
    matrices still factor (U then has a zero on its diagonal).

    Args:
        a: Square matrix (n x n); not modified

    Returns:
        (lu, piv, n_swaps): packed factors, LAPACK-style pivot indices
        (row k was interchanged with row piv[k]), number of interchanges
    """
    n = a.shape[0]
    lu = np.array(a, dtype=np.float64, copy=True)
    piv = np.arange(n, dtype=np.intp)
    n_swaps = 0

    for k in range(n):
        p = k + int(np.argmax(np.abs(lu[k:, k])))
        piv[k] = p
        if p != k:
            lu[[k, p], :] = lu[[p, k], :]
            n_swaps += 1

        pivot = lu[k, k]
        if pivot == 0.0:
            # Whole column below is zero too; nothing to eliminate
            continue

        lu[k + 1:, k] /= pivot
        lu[k + 1:, k + 1:] -= np.outer(lu[k + 1:, k], lu[k, k + 1:])

    return lu, piv, n_swaps


def lu_solve(
    lu: NDArray[np.floating[Any]],
    piv: NDArray[np.intp],
    rhs: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve A @ X = rhs from packed LU factors.

    Args:
        lu: Packed factors from lu_factor
        piv: Pivot indices from lu_factor
        rhs: Right-hand side, (n,) or (n, k)

    Returns:
        X with the same shape as rhs

    Raises:
        SingularMatrixError: If U has an exactly zero diagonal entry
    """
    n = lu.shape[0]
    x = np.array(rhs, dtype=np.float64, copy=True)

    for k in range(n):
        if piv[k] != k:
            x[[k, piv[k]]] = x[[piv[k], k]]

    # Forward substitution, unit lower triangle
    for i in range(1, n):
        x[i] -= lu[i, :i] @ x[:i]

    # Back substitution, upper triangle
    for i in range(n - 1, -1, -1):
        if lu[i, i] == 0.0:
            raise SingularMatrixError(
                f"Matrix is exactly singular: U[{i}, {i}] == 0",
                matrix_name='A',
            )
        x[i] = (x[i] - lu[i, i + 1:] @ x[i + 1:]) / lu[i, i]

    return x
