"""
Column-oriented Cholesky factorization.

Reads only the lower triangle of A; symmetry is not checked.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import NotPositiveDefiniteError


def cholesky_lower(a: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Lower-triangular L with A = L @ L.T.

    Column j:
        L[j, j]    = sqrt(A[j, j] - sum_k L[j, k]^2)
        L[i, j]    = (A[i, j] - sum_k L[i, k] L[j, k]) / L[j, j],  i > j

    Args:
        a: Symmetric positive-definite matrix (n x n); not modified

    Raises:
        NotPositiveDefiniteError: If a pivot is not strictly positive
    """
    n = a.shape[0]
    L = np.zeros((n, n), dtype=np.float64)

    for j in range(n):
        d = a[j, j] - L[j, :j] @ L[j, :j]
        if not d > 0.0:
            raise NotPositiveDefiniteError(
                f"Matrix is not positive definite: leading minor of order {j + 1} "
                f"has non-positive pivot {d!r}",
                matrix_name='A',
                leading_minor=j + 1,
            )
        L[j, j] = math.sqrt(d)
        L[j + 1:, j] = (a[j + 1:, j] - L[j + 1:, :j] @ L[j, :j]) / L[j, j]

    return L
