"""
Factorization solution types.

Contains the parameter payloads backends put inside Result[P] envelopes
and the user-facing SVD solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Iterator
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.result import Result
from pylinalg.matrix.design import Matrix


@dataclass(frozen=True)
class LUParams:
    """
    LU factorization with partial pivoting, P @ A = L @ U.

    Attributes:
        lu: Combined factors (n x n); strict lower part is L (unit
            diagonal implied), upper part including diagonal is U
        piv: Pivot indices (n,); row i was interchanged with row piv[i]
        n_swaps: Number of actual row interchanges (permutation parity)
    """
    lu: NDArray[np.floating[Any]]
    piv: NDArray[np.integer[Any]]
    n_swaps: int

    @property
    def u_diagonal(self) -> NDArray[np.floating[Any]]:
        return np.diag(self.lu)

    @property
    def determinant(self) -> float:
        """Signed product of the pivots; exactly 0.0 when a pivot is zero."""
        product = float(np.prod(self.u_diagonal))
        if product == 0.0:
            return 0.0
        return -product if self.n_swaps % 2 else product


@dataclass(frozen=True)
class CholeskyParams:
    """Lower-triangular L with A = L @ L.T."""
    L: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class LinearSolveParams:
    """
    Householder QR solution of A @ x = b.

    Attributes:
        x: Solution vector (n,)
        rank: Numerical rank read from the R diagonal
    """
    x: NDArray[np.floating[Any]]
    rank: int


@dataclass(frozen=True)
class SVDParams:
    """
    Singular value decomposition A = U @ diag(S) @ V.T.

    Attributes:
        U: Left singular vectors as columns (m x m full, m x k thin),
           or None when not computed
        S: Singular values (k,), non-negative, non-increasing
        V: Right singular vectors as columns (n x n full, n x k thin),
           or None when not computed
    """
    U: NDArray[np.floating[Any]] | None
    S: NDArray[np.floating[Any]]
    V: NDArray[np.floating[Any]] | None


@dataclass(frozen=True)
class EigenParams:
    """Eigenvalues (n,) as complex numbers, in convergence order."""
    eigenvalues: NDArray[np.complexfloating[Any, Any]]

    def interleaved(self) -> NDArray[np.floating[Any]]:
        """Flat (2n,) array: real, imag, real, imag, ..."""
        out = np.empty(2 * self.eigenvalues.size, dtype=np.float64)
        out[0::2] = self.eigenvalues.real
        out[1::2] = self.eigenvalues.imag
        return out


@dataclass
class SVDSolution:
    """
    User-facing SVD results.

    Wraps Result[SVDParams]. Unpacks as ``U, S, V = svd(A)``; U and V are
    None when the decomposition was run with compute_uv=False.
    """
    _result: Result[SVDParams]
    _shape: tuple[int, int]
    full_matrices: bool

    @cached_property
    def U(self) -> Matrix | None:
        """Left singular vectors as columns."""
        U = self._result.params.U
        return None if U is None else Matrix.from_array(U)

    @property
    def S(self) -> NDArray[np.floating[Any]]:
        """Singular values, length min(rows, cols), descending."""
        return self._result.params.S.copy()

    @cached_property
    def V(self) -> Matrix | None:
        """Right singular vectors as columns."""
        V = self._result.params.V
        return None if V is None else Matrix.from_array(V)

    @cached_property
    def Vh(self) -> Matrix | None:
        """Transpose of V (k x cols thin, cols x cols full)."""
        V = self._result.params.V
        return None if V is None else Matrix.from_array(V.T)

    @property
    def compute_uv(self) -> bool:
        return self._result.params.U is not None

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols) of the decomposed matrix."""
        return self._shape

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    def sigma(self) -> Matrix:
        """
        The diagonal factor as a Matrix.

        rows x cols for full factors, k x k for thin ones, so that
        U @ sigma() @ V.T reproduces the input.
        """
        s = self._result.params.S
        k = s.size
        if self.full_matrices:
            out = np.zeros(self._shape)
        else:
            out = np.zeros((k, k))
        out[np.arange(k), np.arange(k)] = s
        return Matrix.from_array(out)

    def __iter__(self) -> Iterator[Any]:
        yield self.U
        yield self.S
        yield self.V

    def __repr__(self) -> str:
        rows, cols = self._shape
        mode = 'full' if self.full_matrices else 'thin'
        uv = '' if self.compute_uv else ', compute_uv=False'
        return (
            f"SVDSolution(shape={rows}x{cols}, {mode}{uv}, "
            f"backend={self.backend_name!r})"
        )
