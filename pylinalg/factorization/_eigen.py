"""
Eigenvalues of a real general matrix.

Two stages:
    1. Householder reduction to upper Hessenberg form (similar to A)
    2. Francis double-shift QR on the Hessenberg matrix, deflating one
       real eigenvalue or one 2x2 block (real pair or complex conjugate
       pair) at a time from the bottom

Eigenvalues are reported in matrix position order once the iteration has
split the Hessenberg matrix into 1x1 and 2x2 blocks; they are not sorted.

References:
    Press, W. H., Teukolsky, S. A., Vetterling, W. T. & Flannery, B. P.
    Numerical Recipes, section 11.6 (hqr).
    Golub, G. H. & Van Loan, C. F. Matrix Computations, section 7.5.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.precision import EPSILON_64
from pylinalg.core.exceptions import ConvergenceError
from pylinalg.factorization._householder import reflector

MAX_ITERATIONS_PER_EIGENVALUE = 30


def hessenberg(a: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Upper Hessenberg matrix H = Q' A Q (entries below the first
    subdiagonal are zero). a is not modified.
    """
    n = a.shape[0]
    H = np.array(a, dtype=np.float64, copy=True)

    for k in range(n - 2):
        v = reflector(H[k + 1:, k])
        if v is None:
            continue
        H[k + 1:, k:] -= 2.0 * np.outer(v, v @ H[k + 1:, k:])
        H[:, k + 1:] -= 2.0 * np.outer(H[:, k + 1:] @ v, v)
        H[k + 2:, k] = 0.0

    return H


def _sign(a: float, b: float) -> float:
    return abs(a) if b >= 0.0 else -abs(a)


def hessenberg_eigenvalues(
    H: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.complexfloating[Any, Any]], int]:
    """
    Eigenvalues of an upper Hessenberg matrix by Francis double-shift QR.

    Exceptional shifts are applied after 10 and 20 iterations without
    deflation.

    Returns:
        (eigenvalues, iterations): complex (n,) array in position order
        and the total number of QR iterations

    Raises:
        ConvergenceError: If an eigenvalue needs more than
            MAX_ITERATIONS_PER_EIGENVALUE iterations
    """
    n = H.shape[0]
    # 1-based working copy; row/column 0 are padding
    a = np.zeros((n + 1, n + 1), dtype=np.float64)
    a[1:, 1:] = H
    wr = np.zeros(n + 1, dtype=np.float64)
    wi = np.zeros(n + 1, dtype=np.float64)

    anorm = 0.0
    for i in range(1, n + 1):
        for j in range(max(i - 1, 1), n + 1):
            anorm += abs(a[i, j])

    total = 0
    nn = n
    t = 0.0
    while nn >= 1:
        its = 0
        while True:
            # Look for a single small subdiagonal element
            l = 1
            for ll in range(nn, 1, -1):
                s = abs(a[ll - 1, ll - 1]) + abs(a[ll, ll])
                if s == 0.0:
                    s = anorm
                if abs(a[ll, ll - 1]) <= EPSILON_64 * s:
                    a[ll, ll - 1] = 0.0
                    l = ll
                    break

            x = a[nn, nn]
            if l == nn:
                # One root found
                wr[nn] = x + t
                wi[nn] = 0.0
                nn -= 1
            else:
                y = a[nn - 1, nn - 1]
                w = a[nn, nn - 1] * a[nn - 1, nn]
                if l == nn - 1:
                    # Two roots found
                    p = 0.5 * (y - x)
                    q = p * p + w
                    z = math.sqrt(abs(q))
                    x += t
                    if q >= 0.0:
                        z = p + _sign(z, p)
                        wr[nn - 1] = wr[nn] = x + z
                        if z != 0.0:
                            wr[nn] = x - w / z
                        wi[nn - 1] = wi[nn] = 0.0
                    else:
                        wr[nn - 1] = wr[nn] = x + p
                        wi[nn - 1] = -z
                        wi[nn] = z
                    nn -= 2
                else:
                    if its == MAX_ITERATIONS_PER_EIGENVALUE:
                        raise ConvergenceError(
                            f"Shifted QR did not converge: eigenvalue {nn} needed "
                            f"more than {MAX_ITERATIONS_PER_EIGENVALUE} iterations",
                            iterations=total,
                            final_change=float(abs(a[nn, nn - 1])),
                            reason='max_iterations',
                            threshold=EPSILON_64,
                        )
                    if its == 10 or its == 20:
                        # Exceptional shift
                        t += x
                        for i in range(1, nn + 1):
                            a[i, i] -= x
                        s = abs(a[nn, nn - 1]) + abs(a[nn - 1, nn - 2])
                        x = y = 0.75 * s
                        w = -0.4375 * s * s
                    its += 1
                    total += 1

                    # Look for two consecutive small subdiagonal elements
                    m = nn - 2
                    while m >= l:
                        z = a[m, m]
                        r = x - z
                        s = y - z
                        p = (r * s - w) / a[m + 1, m] + a[m, m + 1]
                        q = a[m + 1, m + 1] - z - r - s
                        r = a[m + 2, m + 1]
                        s = abs(p) + abs(q) + abs(r)
                        p /= s
                        q /= s
                        r /= s
                        if m == l:
                            break
                        u = abs(a[m, m - 1]) * (abs(q) + abs(r))
                        v = abs(p) * (abs(a[m - 1, m - 1]) + abs(z) + abs(a[m + 1, m + 1]))
                        if u <= EPSILON_64 * v:
                            break
                        m -= 1

                    for i in range(m + 2, nn + 1):
                        a[i, i - 2] = 0.0
                        if i != m + 2:
                            a[i, i - 3] = 0.0

                    # Double QR step on rows l..nn and columns m..nn
                    for k in range(m, nn):
                        if k != m:
                            p = a[k, k - 1]
                            q = a[k + 1, k - 1]
                            r = 0.0
                            if k != nn - 1:
                                r = a[k + 2, k - 1]
                            x = abs(p) + abs(q) + abs(r)
                            if x != 0.0:
                                p /= x
                                q /= x
                                r /= x
                        s = _sign(math.sqrt(p * p + q * q + r * r), p)
                        if s == 0.0:
                            continue
                        if k == m:
                            if l != m:
                                a[k, k - 1] = -a[k, k - 1]
                        else:
                            a[k, k - 1] = -s * x
                        p += s
                        x = p / s
                        y = q / s
                        z = r / s
                        q /= p
                        r /= p
                        for j in range(k, nn + 1):
                            p = a[k, j] + q * a[k + 1, j]
                            if k != nn - 1:
                                p += r * a[k + 2, j]
                                a[k + 2, j] -= p * z
                            a[k + 1, j] -= p * y
                            a[k, j] -= p * x
                        mmin = min(nn, k + 3)
                        for i in range(l, mmin + 1):
                            p = x * a[i, k] + y * a[i, k + 1]
                            if k != nn - 1:
                                p += z * a[i, k + 2]
                                a[i, k + 2] -= p * r
                            a[i, k + 1] -= p * q
                            a[i, k] -= p

            if l >= nn - 1:
                break

    return wr[1:] + 1j * wi[1:], total
