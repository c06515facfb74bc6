"""
Solver dispatch for the factorization engine.

Provides det(), inv(), matrix_power(), cholesky(), matrix_solve_linear(),
matrix_eigen_values(), svd() and matrix_rank(). Each validates its
operands, picks a backend and turns the backend's Result into the value
the caller sees.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.precision import default_rank_tolerance, is_numerically_singular
from pylinalg.core.exceptions import (
    OperandTypeError,
    ShapeError,
    SingularMatrixError,
    ValidationError,
)
from pylinalg.core.result import Result
from pylinalg.core.validation import (
    check_finite,
    check_flag,
    check_integer,
    check_square,
    check_tolerance,
)
from pylinalg.factorization.backends.cpu import CPULapackBackend
from pylinalg.factorization.backends.reference import ReferenceBackend
from pylinalg.factorization.solution import SVDSolution
from pylinalg.matrix.constructors import identity
from pylinalg.matrix.design import Matrix, Scalar, as_matrix, as_operand

logger = logging.getLogger(__name__)

BackendChoice = Literal['auto', 'cpu', 'lapack', 'reference']


def _get_backend(backend: BackendChoice):
    """Select backend based on preference."""
    if backend in ('auto', 'cpu', 'lapack'):
        return CPULapackBackend()
    if backend == 'reference':
        return ReferenceBackend()
    raise ValidationError(f"Unknown backend: {backend!r}")


def _log(operation: str, result: Result[Any]) -> None:
    total = result.timing['total_seconds'] if result.timing else float('nan')
    logger.debug("%s: backend=%s total=%.3gs", operation, result.backend_name, total)


def _finite_matrix(a: Any, name: str) -> Matrix:
    m = as_matrix(a, name)
    check_finite(m.data, name)
    return m


def _square_matrix(a: Any, name: str) -> Matrix:
    m = as_matrix(a, name)
    check_square(m, name)
    check_finite(m.data, name)
    return m


def det(a: Any, *, backend: BackendChoice = 'auto') -> float:
    """
    Determinant via LU with partial pivoting.

    Parameters
    ----------
    a : Matrix or 2D array-like
        Square, finite matrix.
    backend : str
        'auto', 'cpu', 'lapack' or 'reference'.

    Returns
    -------
    float
        Product of the U diagonal times (-1)^(row swaps). 0.0 for a
        singular matrix; this is not an error.

    Raises
    ------
    ShapeError
        If a is not square.

    Examples
    --------
    >>> det([[2, -1], [1, 3]])
    7.0
    """
    m = _square_matrix(a, 'a')
    be = _get_backend(backend)
    result = be.lu(m.to_array())
    _log('det', result)
    return result.params.determinant


def inv(a: Any, *, backend: BackendChoice = 'auto') -> Matrix:
    """
    Inverse via LU: solves A @ X = I column by column.

    Parameters
    ----------
    a : Matrix or 2D array-like
        Square, finite matrix.
    backend : str
        'auto', 'cpu', 'lapack' or 'reference'.

    Returns
    -------
    Matrix

    Raises
    ------
    ShapeError
        If a is not square.
    SingularMatrixError
        If a pivot is exactly zero, or the 1-norm condition number
        norm1(A) * norm1(inv(A)) is not below 1 / machine epsilon.
    """
    m = _square_matrix(a, 'a')
    arr = m.to_array()
    n = m.rows
    be = _get_backend(backend)

    result = be.lu(arr)
    _log('inv', result)
    if np.any(result.params.u_diagonal == 0.0):
        raise SingularMatrixError(
            "Matrix is exactly singular: LU factorization has a zero pivot",
            matrix_name='a',
            condition_number=float('inf'),
        )

    X = be.lu_solve(result.params, np.eye(n))

    with np.errstate(over='ignore', invalid='ignore'):
        cond = float(np.linalg.norm(arr, 1) * np.linalg.norm(X, 1))
    if is_numerically_singular(cond):
        raise SingularMatrixError(
            f"Matrix is singular to working precision (condition number {cond:.3g})",
            matrix_name='a',
            condition_number=cond,
        )

    return Matrix.from_array(X)


def _binary_power(base: NDArray[np.floating[Any]], n: int) -> NDArray[np.floating[Any]]:
    """base ** n for n >= 1 by repeated squaring."""
    result = None
    while True:
        if n & 1:
            result = base if result is None else result @ base
        n >>= 1
        if not n:
            return result
        base = base @ base


def matrix_power(a: Any, n: Any, *, backend: BackendChoice = 'auto') -> Matrix:
    """
    Raise a square matrix to an integer power.

    Parameters
    ----------
    a : Matrix or 2D array-like
        Square matrix.
    n : int
        Exponent. 0 gives the identity, 1 an independent copy of a,
        n > 1 repeated squaring, n < 0 the inverse raised to |n|.
    backend : str
        Backend used for the inverse when n < 0.

    Returns
    -------
    Matrix

    Raises
    ------
    ShapeError
        If a is not square.
    ValidationError
        If n is not an integer.
    SingularMatrixError
        If n < 0 and a is singular.

    Examples
    --------
    >>> matrix_power([[1, 1], [1, 1]], 3).to_list()
    [[4.0, 4.0], [4.0, 4.0]]
    """
    m = as_matrix(a, 'a')
    check_square(m, 'a')
    n = check_integer(n, 'n')

    if n == 0:
        return identity(m.rows)
    if n == 1:
        return Matrix.from_array(m.values)

    if n < 0:
        base = inv(m, backend=backend).to_array()
        n = -n
    else:
        base = m.to_array()

    return Matrix.from_array(_binary_power(base, n))


def cholesky(a: Any, *, backend: BackendChoice = 'auto') -> Matrix:
    """
    Lower-triangular Cholesky factor L with L @ L.T == a.

    Only the lower triangle of a is read; symmetry is not checked.

    Raises
    ------
    ShapeError
        If a is not square.
    NotPositiveDefiniteError
        If a is not positive definite. ``leading_minor`` gives the order
        of the first leading minor that fails.
    """
    m = _square_matrix(a, 'a')
    be = _get_backend(backend)
    result = be.cholesky(m.to_array())
    _log('cholesky', result)
    return Matrix.from_array(result.params.L)


def _rhs_vector(b: Any) -> NDArray[np.floating[Any]]:
    """Right-hand side as a 1D array: vector-shaped Matrix or 1D array-like."""
    operand = as_operand(b, 'b')
    if isinstance(operand, Scalar):
        raise OperandTypeError(f"b: expected a vector, got scalar {operand.value!r}")
    if not operand.is_vector:
        raise ShapeError(
            f"b: expected a vector, got {operand.rows}x{operand.cols} matrix"
        )
    return operand.to_array().ravel()


def matrix_solve_linear(
    a: Any,
    b: Any,
    *,
    check_rank: bool = False,
    backend: BackendChoice = 'auto',
) -> NDArray[np.floating[Any]]:
    """
    Solve A @ x = b via Householder QR.

    Parameters
    ----------
    a : Matrix or 2D array-like
        Coefficient matrix (rows x cols), finite.
    b : Matrix or 1D array-like
        Right-hand side vector of length a.rows.
    check_rank : bool
        If True, refuse rank-deficient coefficient matrices. If False
        (default), a near-singular a yields an unstable solution and a
        RuntimeWarning.
    backend : str
        'auto', 'cpu', 'lapack' or 'reference'.

    Returns
    -------
    ndarray
        Solution x of length a.cols. Least squares for rows > cols, the
        basic solution (trailing unknowns zero) for rows < cols.

    Raises
    ------
    ShapeError
        If len(b) != a.rows.
    SingularMatrixError
        If R has an exactly zero pivot, or check_rank is True and the
        numerical rank is below min(rows, cols).
    """
    m = _finite_matrix(a, 'a')
    rhs = _rhs_vector(b)
    check_finite(rhs, 'b')
    check_rank = check_flag(check_rank, 'check_rank')

    if rhs.size != m.rows:
        raise ShapeError(
            f"b: length {rhs.size} does not match a.rows ({m.rows})"
        )

    be = _get_backend(backend)
    result = be.qr_solve(m.to_array(), rhs)
    _log('matrix_solve_linear', result)

    k = min(m.shape)
    if check_rank and result.params.rank < k:
        raise SingularMatrixError(
            f"Coefficient matrix is rank deficient: rank {result.params.rank} < {k}",
            matrix_name='a',
            rank=result.params.rank,
            expected_rank=k,
        )

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    return result.params.x.copy()


def matrix_eigen_values(a: Any, *, backend: BackendChoice = 'auto') -> NDArray[np.floating[Any]]:
    """
    Eigenvalues of a square real matrix.

    Returns
    -------
    ndarray
        Length 2n: real and imaginary part of each eigenvalue,
        interleaved, in the order the algorithm produced them.

    Raises
    ------
    ShapeError
        If a is not square.
    ConvergenceError
        If the shifted QR iteration does not converge.
    """
    m = _square_matrix(a, 'a')
    be = _get_backend(backend)
    result = be.eigvals(m.to_array())
    _log('matrix_eigen_values', result)
    return result.params.interleaved()


def svd(
    a: Any,
    full_matrices: bool = True,
    compute_uv: bool = True,
    *,
    backend: BackendChoice = 'auto',
) -> SVDSolution:
    """
    Singular value decomposition A = U @ diag(S) @ V.T.

    Parameters
    ----------
    a : Matrix or 2D array-like
        Finite matrix (rows x cols).
    full_matrices : bool
        True: U is rows x rows and V cols x cols. False: U is rows x k and
        V cols x k, k = min(rows, cols).
    compute_uv : bool
        False computes the singular values only; U and V are None.
    backend : str
        'auto', 'cpu', 'lapack' or 'reference'.

    Returns
    -------
    SVDSolution
        Unpacks as ``U, S, V``. S is non-negative and non-increasing.

    Raises
    ------
    ConvergenceError
        If the decomposition does not converge.
    """
    m = _finite_matrix(a, 'a')
    full_matrices = check_flag(full_matrices, 'full_matrices')
    compute_uv = check_flag(compute_uv, 'compute_uv')

    be = _get_backend(backend)
    result = be.svd(m.to_array(), full_matrices, compute_uv)
    _log('svd', result)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    return SVDSolution(_result=result, _shape=m.shape, full_matrices=full_matrices)


def matrix_rank(a: Any, tol: Any = None, *, backend: BackendChoice = 'auto') -> int:
    """
    Number of singular values strictly greater than tol.

    Parameters
    ----------
    a : Matrix or 2D array-like
        Finite matrix.
    tol : float, optional
        Threshold. Default max(S) * max(rows, cols) * machine epsilon.
    backend : str
        'auto', 'cpu', 'lapack' or 'reference'.

    Examples
    --------
    >>> matrix_rank(diag([1, 1, 1, 0.3]), 0.2)
    4
    >>> matrix_rank(diag([1, 1, 1, 0.3]), 0.3)
    3
    """
    m = _finite_matrix(a, 'a')
    if tol is not None:
        tol = check_tolerance(tol, 'tol')

    S = svd(m, compute_uv=False, backend=backend).S
    if tol is None:
        tol = default_rank_tolerance(S, m.shape)
    return int(np.count_nonzero(S > tol))
