"""
Matrix storage, constructors, and structural transforms.

Public API:
    Matrix, Scalar          - value types (flat row-major storage)
    as_operand, as_matrix   - classify caller input
    zeros, ones, empty      - filled constructors (cols defaults to rows)
    identity, eye, tri      - diagonal / lower-triangular fills
    diag                    - diagonal matrix from a sequence
    tril, triu, transpose   - structural copies
    trace                   - diagonal sum
"""

from pylinalg.matrix.design import (
    Matrix,
    Scalar,
    Operand,
    as_operand,
    as_matrix,
    wrap_result,
)
from pylinalg.matrix.constructors import (
    zeros,
    ones,
    empty,
    identity,
    eye,
    tri,
    diag,
)
from pylinalg.matrix.structural import (
    tril,
    triu,
    transpose,
    trace,
)

__all__ = [
    "Matrix",
    "Scalar",
    "Operand",
    "as_operand",
    "as_matrix",
    "wrap_result",
    "zeros",
    "ones",
    "empty",
    "identity",
    "eye",
    "tri",
    "diag",
    "tril",
    "triu",
    "transpose",
    "trace",
]
