"""
CPU LAPACK backend for the factorization engine.

Thin wrappers around the SciPy LAPACK drivers (getrf/getrs, potrf,
geqrf + trtrs, gesdd, geev). This is the default backend and the one
every other backend is validated against.
"""

import re
import warnings
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sla

from pylinalg.core.result import Result
from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.linalg.qr import qr_cpu, qr_solve_cpu
from pylinalg.core.exceptions import (
    ConvergenceError,
    NotPositiveDefiniteError,
    SingularMatrixError,
)
from pylinalg.factorization.solution import (
    CholeskyParams,
    EigenParams,
    LUParams,
    LinearSolveParams,
    SVDParams,
)

_MINOR_PATTERN = re.compile(r"(\d+)-th leading minor")


def rank_warnings(rank: int, shape: tuple[int, int]) -> tuple[str, ...]:
    """Warning text for a rank-deficient coefficient matrix, if any."""
    k = min(shape)
    if rank >= k:
        return ()
    return (
        f"Coefficient matrix is rank deficient (numerical rank {rank} < {k}); "
        f"solution may be numerically unstable",
    )


class CPULapackBackend:
    """
    CPU backend using LAPACK through SciPy.

    Implements the FactorizationBackend protocol. Inputs are validated,
    finite float64 arrays, so SciPy's own finiteness scan is skipped.
    """

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def lu(self, a: NDArray[np.floating[Any]]) -> Result[LUParams]:
        """
        LU factorization with partial pivoting (getrf).

        A zero pivot is not an error here: det needs the factors of
        singular matrices too, so SciPy's LinAlgWarning is silenced.
        """
        timer = Timer()
        timer.start()

        with timer.section('lu_factor'):
            with warnings.catch_warnings():
                warnings.simplefilter('ignore', sla.LinAlgWarning)
                lu, piv = sla.lu_factor(a, check_finite=False)

        timer.stop()

        n_swaps = int(np.count_nonzero(piv != np.arange(piv.size)))
        params = LUParams(lu=lu, piv=piv, n_swaps=n_swaps)

        return Result(
            params=params,
            info={'method': 'getrf', 'n_swaps': n_swaps},
            timing=timer.result(),
            backend_name=self.name,
        )

    def lu_solve(
        self,
        factors: LUParams,
        rhs: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """
        Solve A @ X = rhs from getrf factors (getrs).

        Raises:
            SingularMatrixError: If U has an exactly zero diagonal entry
        """
        zero = np.flatnonzero(factors.u_diagonal == 0.0)
        if zero.size:
            i = int(zero[0])
            raise SingularMatrixError(
                f"Matrix is exactly singular: U[{i}, {i}] == 0",
                matrix_name='A',
            )
        return sla.lu_solve((factors.lu, factors.piv), rhs, check_finite=False)

    def cholesky(self, a: NDArray[np.floating[Any]]) -> Result[CholeskyParams]:
        """
        Lower Cholesky factor (potrf, lower triangle of A only).

        Raises:
            NotPositiveDefiniteError: If potrf reports a non-positive pivot
        """
        timer = Timer()
        timer.start()

        with timer.section('cholesky'):
            try:
                L = sla.cholesky(a, lower=True, check_finite=False)
            except sla.LinAlgError as e:
                match = _MINOR_PATTERN.search(str(e))
                minor = int(match.group(1)) if match else None
                raise NotPositiveDefiniteError(
                    f"Matrix is not positive definite: {e}",
                    matrix_name='A',
                    leading_minor=minor,
                ) from e

        timer.stop()

        return Result(
            params=CholeskyParams(L=L),
            info={'method': 'potrf'},
            timing=timer.result(),
            backend_name=self.name,
        )

    def qr_solve(
        self,
        a: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
    ) -> Result[LinearSolveParams]:
        """
        Solve A @ x = b via Householder QR (geqrf, then trtrs on R).

        Raises:
            SingularMatrixError: If R has an exactly zero pivot
        """
        timer = Timer()
        timer.start()

        with timer.section('qr_decomposition'):
            qr_result = qr_cpu(a)

        with timer.section('solve'):
            x = qr_solve_cpu(a, b, qr_result=qr_result)

        timer.stop()

        return Result(
            params=LinearSolveParams(x=x, rank=qr_result.rank),
            info={'method': 'householder_qr', 'rank': qr_result.rank},
            timing=timer.result(),
            backend_name=self.name,
            warnings=rank_warnings(qr_result.rank, a.shape),
        )

    def svd(
        self,
        a: NDArray[np.floating[Any]],
        full_matrices: bool,
        compute_uv: bool,
    ) -> Result[SVDParams]:
        """
        Singular value decomposition (gesdd, falling back to gesvd).

        Raises:
            ConvergenceError: If neither driver converges
        """
        timer = Timer()
        timer.start()
        run_warnings: list[str] = []
        driver = 'gesdd'

        with timer.section('svd'):
            try:
                out = sla.svd(
                    a,
                    full_matrices=full_matrices,
                    compute_uv=compute_uv,
                    check_finite=False,
                    lapack_driver='gesdd',
                )
            except sla.LinAlgError:
                driver = 'gesvd'
                run_warnings.append("gesdd did not converge; retried with gesvd")
                try:
                    out = sla.svd(
                        a,
                        full_matrices=full_matrices,
                        compute_uv=compute_uv,
                        check_finite=False,
                        lapack_driver='gesvd',
                    )
                except sla.LinAlgError as e:
                    raise ConvergenceError(
                        f"SVD did not converge: {e}",
                        iterations=0,
                        reason='lapack_failure',
                    ) from e

        timer.stop()

        if compute_uv:
            U, S, Vh = out
            params = SVDParams(U=U, S=S, V=Vh.T.copy())
        else:
            params = SVDParams(U=None, S=out, V=None)

        return Result(
            params=params,
            info={'method': driver, 'full_matrices': full_matrices, 'compute_uv': compute_uv},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(run_warnings),
        )

    def eigvals(self, a: NDArray[np.floating[Any]]) -> Result[EigenParams]:
        """
        Eigenvalues of a general square matrix (geev, no eigenvectors).

        Raises:
            ConvergenceError: If the QR iteration fails
        """
        timer = Timer()
        timer.start()

        with timer.section('eigvals'):
            try:
                w = sla.eigvals(a, check_finite=False)
            except sla.LinAlgError as e:
                raise ConvergenceError(
                    f"Eigenvalue iteration did not converge: {e}",
                    iterations=0,
                    reason='lapack_failure',
                ) from e

        timer.stop()

        return Result(
            params=EigenParams(eigenvalues=np.asarray(w, dtype=np.complex128)),
            info={'method': 'geev'},
            timing=timer.result(),
            backend_name=self.name,
        )
