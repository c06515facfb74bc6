"""
Factorization engine.

Public API:
    det(a)                        - determinant via LU
    inv(a)                        - inverse via LU
    matrix_power(a, n)            - integer powers (negative via inv)
    cholesky(a)                   - lower Cholesky factor
    matrix_solve_linear(a, b)     - Householder QR solve
    matrix_eigen_values(a)        - eigenvalues, (real, imag) interleaved
    svd(a, full_matrices, compute_uv)
    matrix_rank(a, tol)           - singular values above tol

Every function takes backend='auto' | 'cpu' | 'lapack' | 'reference'.
"""

from pylinalg.factorization.solvers import (
    BackendChoice,
    det,
    inv,
    matrix_power,
    cholesky,
    matrix_solve_linear,
    matrix_eigen_values,
    svd,
    matrix_rank,
)
from pylinalg.factorization.solution import SVDSolution

__all__ = [
    "BackendChoice",
    "det",
    "inv",
    "matrix_power",
    "cholesky",
    "matrix_solve_linear",
    "matrix_eigen_values",
    "svd",
    "matrix_rank",
    "SVDSolution",
]
