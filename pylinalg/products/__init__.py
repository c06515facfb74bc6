"""
Product family.

Public API:
    dot(a, b)        - scalar/matrix product, matrix multiplication
    matrix_mul(a, b) - matrix multiplication, matrices only
    inner(a, b)      - inner product (contracts the last axis)
    outer(a, b)      - outer product of flattened operands

matrix_power lives with the factorization engine because negative
exponents need the LU inverse.
"""

from pylinalg.products.solvers import (
    dot,
    matrix_mul,
    inner,
    outer,
)

__all__ = [
    "dot",
    "matrix_mul",
    "inner",
    "outer",
]
