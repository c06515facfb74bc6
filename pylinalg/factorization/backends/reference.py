"""
Reference backend: the factorization algorithms written out in NumPy.

No LAPACK factorization routine is called. Each kernel is the textbook
algorithm (see the private modules in pylinalg.factorization), which
makes this backend the readable statement of what the engine computes
and a cross-check on the LAPACK backend.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.result import Result
from pylinalg.core.compute.timing import Timer
from pylinalg.factorization._cholesky import cholesky_lower
from pylinalg.factorization._eigen import hessenberg, hessenberg_eigenvalues
from pylinalg.factorization._householder import householder_solve
from pylinalg.factorization._lu import lu_factor, lu_solve
from pylinalg.factorization._svd import jacobi_svd
from pylinalg.factorization.backends.cpu import rank_warnings
from pylinalg.factorization.solution import (
    CholeskyParams,
    EigenParams,
    LUParams,
    LinearSolveParams,
    SVDParams,
)


class ReferenceBackend:
    """
    CPU backend built from NumPy reference kernels.

    Implements the FactorizationBackend protocol. Slower than LAPACK and
    held to the looser CPU_REFERENCE tolerance tier.
    """

    @property
    def name(self) -> str:
        return 'cpu_reference'

    def lu(self, a: NDArray[np.floating[Any]]) -> Result[LUParams]:
        timer = Timer()
        timer.start()

        with timer.section('lu_factor'):
            lu, piv, n_swaps = lu_factor(a)

        timer.stop()

        return Result(
            params=LUParams(lu=lu, piv=piv, n_swaps=n_swaps),
            info={'method': 'doolittle_partial_pivoting', 'n_swaps': n_swaps},
            timing=timer.result(),
            backend_name=self.name,
        )

    def lu_solve(
        self,
        factors: LUParams,
        rhs: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        return lu_solve(factors.lu, factors.piv, rhs)

    def cholesky(self, a: NDArray[np.floating[Any]]) -> Result[CholeskyParams]:
        timer = Timer()
        timer.start()

        with timer.section('cholesky'):
            L = cholesky_lower(a)

        timer.stop()

        return Result(
            params=CholeskyParams(L=L),
            info={'method': 'column_cholesky'},
            timing=timer.result(),
            backend_name=self.name,
        )

    def qr_solve(
        self,
        a: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
    ) -> Result[LinearSolveParams]:
        timer = Timer()
        timer.start()

        with timer.section('householder_solve'):
            x, rank = householder_solve(a, b)

        timer.stop()

        return Result(
            params=LinearSolveParams(x=x, rank=rank),
            info={'method': 'householder_qr', 'rank': rank},
            timing=timer.result(),
            backend_name=self.name,
            warnings=rank_warnings(rank, a.shape),
        )

    def svd(
        self,
        a: NDArray[np.floating[Any]],
        full_matrices: bool,
        compute_uv: bool,
    ) -> Result[SVDParams]:
        """
        One-sided Jacobi SVD.

        Raises:
            ConvergenceError: If the sweeps do not converge
        """
        timer = Timer()
        timer.start()

        with timer.section('jacobi_svd'):
            U, S, V, sweeps = jacobi_svd(
                a, full_matrices=full_matrices, compute_uv=compute_uv,
            )

        timer.stop()

        return Result(
            params=SVDParams(U=U, S=S, V=V),
            info={
                'method': 'one_sided_jacobi',
                'sweeps': sweeps,
                'full_matrices': full_matrices,
                'compute_uv': compute_uv,
            },
            timing=timer.result(),
            backend_name=self.name,
        )

    def eigvals(self, a: NDArray[np.floating[Any]]) -> Result[EigenParams]:
        """
        Hessenberg reduction followed by Francis double-shift QR.

        Raises:
            ConvergenceError: If an eigenvalue fails to deflate
        """
        timer = Timer()
        timer.start()

        with timer.section('hessenberg'):
            H = hessenberg(a)

        with timer.section('shifted_qr'):
            w, iterations = hessenberg_eigenvalues(H)

        timer.stop()

        return Result(
            params=EigenParams(eigenvalues=w),
            info={'method': 'francis_double_shift', 'iterations': iterations},
            timing=timer.result(),
            backend_name=self.name,
        )
