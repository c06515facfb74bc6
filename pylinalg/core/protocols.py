"""
Core protocols for pylinalg.

These define structural interfaces that backend implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) to allow
flexibility while maintaining type safety.

Design Principles:
    - Minimal contracts: prescribe only the kernels the solvers need
    - Stateless: backends carry no configuration beyond their identity
    - Type-safe: every kernel returns a Result envelope with a typed payload
"""

from typing import Protocol, Any, runtime_checkable, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pylinalg.core.result import Result
    from pylinalg.factorization.solution import (
        LUParams,
        CholeskyParams,
        LinearSolveParams,
        SVDParams,
        EigenParams,
    )


@runtime_checkable
class Backend(Protocol):
    """
    Protocol for computational backends.

    Backends are stateless: all inputs are passed per call. This makes
    them easy to test and swap.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{implementation}'
        Examples: 'cpu_lapack', 'cpu_reference'
        """
        ...


@runtime_checkable
class FactorizationBackend(Backend, Protocol):
    """
    Protocol for the dense factorization kernels.

    Every kernel takes validated, finite, C-contiguous float64 arrays in
    row-major (rows x cols) layout and must not modify them.

    Raises (any kernel):
        SingularMatrixError: If a solve meets an exactly zero pivot
        NotPositiveDefiniteError: If Cholesky meets a non-positive pivot
        ConvergenceError: If an iterative kernel exceeds its cap
    """

    def lu(self, a: NDArray[np.floating[Any]]) -> 'Result[LUParams]':
        """LU factorization with partial pivoting of a square matrix."""
        ...

    def lu_solve(
        self,
        factors: 'LUParams',
        rhs: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Solve A @ X = rhs given the LU factors of A."""
        ...

    def cholesky(self, a: NDArray[np.floating[Any]]) -> 'Result[CholeskyParams]':
        """Lower Cholesky factor of a symmetric positive-definite matrix."""
        ...

    def qr_solve(
        self,
        a: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
    ) -> 'Result[LinearSolveParams]':
        """Solve A @ x = b via Householder QR."""
        ...

    def svd(
        self,
        a: NDArray[np.floating[Any]],
        full_matrices: bool,
        compute_uv: bool,
    ) -> 'Result[SVDParams]':
        """Singular value decomposition."""
        ...

    def eigvals(self, a: NDArray[np.floating[Any]]) -> 'Result[EigenParams]':
        """Eigenvalues of a square matrix."""
        ...
