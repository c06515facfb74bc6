"""
Core infrastructure for pylinalg.

This module provides shared abstractions, utilities, and compute helpers
used by the matrix, products, and factorization subpackages.

Key components:
    protocols: Backend, FactorizationBackend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision constants, tolerance tiers, QR kernels
"""

from pylinalg.core.protocols import Backend, FactorizationBackend
from pylinalg.core.result import Result
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

__all__ = [
    # Protocols
    "Backend",
    "FactorizationBackend",
    # Result
    "Result",
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
