"""
LAPACK Householder QR and the least-squares solve on top of it.

matrix_solve_linear on the LAPACK backend goes through qr_solve_cpu.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import LinAlgError, solve_triangular

from pylinalg.core.compute.precision import EPSILON_64
from pylinalg.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class QRResult:
    """
    Q and R factors with the rank read from the R diagonal.

    Attributes:
        Q: m x k, orthonormal columns, k = min(m, n)
        R: Upper triangular matrix (k x n)
        rank: r_diagonal_rank(R, X.shape)
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


def r_diagonal_rank(R: NDArray[np.floating[Any]], shape: tuple[int, int]) -> int:
    """
    Numerical rank read off the diagonal of a triangular QR factor.

    Counts |R[i, i]| above max(shape) * eps * max|R[i, i]|.
    """
    diag_R = np.abs(np.diag(R))
    if len(diag_R) == 0 or diag_R.max() == 0:
        return 0
    tol = max(shape) * EPSILON_64 * diag_R.max()
    return int(np.sum(diag_R > tol))


def qr_cpu(X: NDArray[np.floating[Any]]) -> QRResult:
    """
    Reduced QR of X with numpy.linalg.qr (LAPACK geqrf + orgqr).

    X == Q @ R with k = min(m, n): Q is m x k with orthonormal columns,
    R is k x n upper triangular.

    Args:
        X: Matrix to decompose (m x n)

    Returns:
        QRResult
    """
    Q, R = np.linalg.qr(X, mode='reduced')
    return QRResult(Q=Q, R=R, rank=r_diagonal_rank(R, X.shape))


def qr_solve_cpu(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    qr_result: QRResult | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Solve A @ x = b via Householder QR decomposition (CPU).

    The solution is computed as:
        A = QR
        x[:k] = R[:k, :k]⁻¹ (Q'b)[:k],  k = min(m, n)
        x[k:] = 0

    For m > n this is the least squares solution; for m < n the basic
    solution with the trailing unknowns set to zero.

    Args:
        A: Coefficient matrix (m x n)
        b: Right-hand side (m,)
        qr_result: Precomputed reduced QR of A, if available

    Returns:
        Solution vector x (n,)

    Raises:
        SingularMatrixError: If a diagonal entry of R is exactly zero
    """
    m, n = A.shape
    k = min(m, n)
    if qr_result is None:
        qr_result = qr_cpu(A)

    # Compute Q'b first, then solve the triangular system
    Qtb = qr_result.Q.T @ b

    x = np.zeros(n, dtype=np.float64)
    try:
        x[:k] = solve_triangular(qr_result.R[:k, :k], Qtb[:k], lower=False)
    except LinAlgError as e:
        raise SingularMatrixError(
            f"Coefficient matrix is exactly singular: {e}",
            matrix_name='A',
            rank=qr_result.rank,
            expected_rank=k,
        ) from e

    return x
