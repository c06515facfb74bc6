"""
pylinalg: dense numerical linear algebra for Python.

Real-valued matrices in flat row-major storage, with products,
determinants, inverses, rank, eigenvalues, linear solves, Cholesky and
singular value decompositions, and structural transforms.

Submodules:
    matrix: Matrix/Scalar value types, constructors, structural transforms
    products: dot, matrix_mul, inner, outer
    factorization: LU, Cholesky, QR, SVD and eigenvalue based operations
    core: exceptions, validation, result envelope, compute helpers
"""

__version__ = "0.1.0"

from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    ShapeError,
    OperandTypeError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
)
from pylinalg.matrix import (
    Matrix,
    Scalar,
    zeros,
    ones,
    empty,
    identity,
    eye,
    tri,
    diag,
    tril,
    triu,
    transpose,
    trace,
)
from pylinalg.products import dot, matrix_mul, inner, outer
from pylinalg.factorization import (
    SVDSolution,
    det,
    inv,
    matrix_power,
    cholesky,
    matrix_solve_linear,
    matrix_eigen_values,
    svd,
    matrix_rank,
)

__all__ = [
    "__version__",
    # Value types
    "Matrix",
    "Scalar",
    # Constructors
    "zeros",
    "ones",
    "empty",
    "identity",
    "eye",
    "tri",
    "diag",
    # Structural
    "tril",
    "triu",
    "transpose",
    "trace",
    # Products
    "dot",
    "matrix_mul",
    "inner",
    "outer",
    # Factorization
    "det",
    "inv",
    "matrix_power",
    "cholesky",
    "matrix_solve_linear",
    "matrix_eigen_values",
    "svd",
    "matrix_rank",
    "SVDSolution",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "ShapeError",
    "OperandTypeError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
]
