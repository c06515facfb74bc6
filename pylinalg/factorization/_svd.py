"""
One-sided (Hestenes) Jacobi singular value decomposition.

Plane rotations are applied to pairs of columns of A until every pair is
numerically orthogonal. The column norms are then the singular values,
the normalized columns the left singular vectors, and the accumulated
rotations the right singular vectors.

Wide matrices (rows < cols) are handled through their transpose.

References:
    Demmel, J. & Veselic, K. (1992). Jacobi's method is more accurate
    than QR. SIAM J. Matrix Anal. Appl., 13(4), 1204-1245.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.precision import EPSILON_64, TINY_64
from pylinalg.core.exceptions import ConvergenceError
from pylinalg.factorization._householder import form_q, householder_qr

MAX_SWEEPS = 60


def _orthogonalize(
    work: NDArray[np.floating[Any]],
    V: NDArray[np.floating[Any]] | None,
) -> int:
    """
    Rotate columns of work (and V, if given) in place until orthogonal.

    Returns:
        Number of sweeps performed

    Raises:
        ConvergenceError: If MAX_SWEEPS sweeps do not converge
    """
    p, q = work.shape
    # Same pair threshold as LAPACK dgesvj
    threshold = math.sqrt(p) * EPSILON_64
    off = 0.0

    for sweep in range(1, MAX_SWEEPS + 1):
        rotated = False
        off = 0.0

        for i in range(q - 1):
            for j in range(i + 1, q):
                alpha = float(work[:, i] @ work[:, i])
                beta = float(work[:, j] @ work[:, j])
                gamma = float(work[:, i] @ work[:, j])

                scale = math.sqrt(alpha) * math.sqrt(beta)
                if scale == 0.0 or abs(gamma) <= threshold * scale:
                    continue
                off = max(off, abs(gamma) / scale)
                rotated = True

                zeta = (beta - alpha) / (2.0 * gamma)
                t = math.copysign(1.0, zeta) / (abs(zeta) + math.hypot(1.0, zeta))
                c = 1.0 / math.hypot(1.0, t)
                s = c * t

                col_i = work[:, i].copy()
                work[:, i] = c * col_i - s * work[:, j]
                work[:, j] = s * col_i + c * work[:, j]

                if V is not None:
                    v_i = V[:, i].copy()
                    V[:, i] = c * v_i - s * V[:, j]
                    V[:, j] = s * v_i + c * V[:, j]

        if not rotated:
            return sweep

    raise ConvergenceError(
        f"Jacobi SVD did not converge after {MAX_SWEEPS} sweeps",
        iterations=MAX_SWEEPS,
        final_change=off,
        reason='max_iterations',
        threshold=threshold,
    )


def complete_basis(
    columns: NDArray[np.floating[Any]],
    valid: NDArray[np.bool_],
    n_cols: int,
) -> NDArray[np.floating[Any]]:
    """
    Fill an orthonormal set of columns out to n_cols columns.

    Columns flagged valid are kept where they are; every other slot, plus
    any slots beyond columns.shape[1], receives a vector from the
    orthogonal complement of the valid columns.

    Args:
        columns: m x r matrix whose valid columns are orthonormal
        valid: (r,) mask of the columns to keep
        n_cols: Number of columns wanted (r <= n_cols <= m)
    """
    m, r = columns.shape
    kept = columns[:, valid]
    n_kept = kept.shape[1]

    if n_kept == 0:
        complement = np.eye(m)
    else:
        _, reflectors = householder_qr(kept)
        complement = form_q(reflectors, m, m)[:, n_kept:]

    out = np.zeros((m, n_cols), dtype=np.float64)
    out[:, :r][:, valid] = kept
    empty_slots = [i for i in range(r) if not valid[i]] + list(range(r, n_cols))
    for slot, idx in zip(empty_slots, range(complement.shape[1])):
        out[:, slot] = complement[:, idx]
    return out


def jacobi_svd(
    a: NDArray[np.floating[Any]],
    full_matrices: bool = True,
    compute_uv: bool = True,
) -> tuple[
    NDArray[np.floating[Any]] | None,
    NDArray[np.floating[Any]],
    NDArray[np.floating[Any]] | None,
    int,
]:
    """
    A = U @ diag(S) @ V.T.

    With compute_uv=False no rotation is accumulated and no singular
    vector is formed.

    Args:
        a: Matrix (m x n); not modified
        full_matrices: U m x m and V n x n if True, else m x k and n x k
        compute_uv: Whether to form U and V at all

    Returns:
        (U, S, V, sweeps); U and V are None when compute_uv is False
    """
    m, n = a.shape
    transposed = m < n
    work = np.array(a.T if transposed else a, dtype=np.float64, copy=True)
    p, q = work.shape  # p >= q

    # Sweep on A / max|A| (dgesvj scaling); squared column norms stay
    # within normal float64 range
    amax = float(np.max(np.abs(work)))
    if amax > 0.0:
        work /= amax

    V = np.eye(q) if compute_uv else None
    sweeps = _orthogonalize(work, V)

    sigma = np.linalg.norm(work, axis=0)
    order = np.argsort(-sigma, kind='stable')
    sigma = sigma[order]
    S = sigma * amax if amax > 0.0 else sigma

    if not compute_uv:
        return None, S, None, sweeps

    work = work[:, order]
    V = V[:, order]

    valid = sigma > TINY_64
    U = np.zeros((p, q), dtype=np.float64)
    U[:, valid] = work[:, valid] / sigma[valid]
    if full_matrices or not np.all(valid):
        U = complete_basis(U, valid, p if full_matrices else q)

    if transposed:
        # A.T = U S V.T  =>  A = V S U.T
        return V, S, U, sweeps
    return U, S, V, sweeps
