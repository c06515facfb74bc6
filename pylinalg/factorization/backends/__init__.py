"""
Factorization backends.

Available backends:
    CPULapackBackend: SciPy LAPACK drivers (default)
    ReferenceBackend: NumPy implementations of the same algorithms
"""

from pylinalg.factorization.backends.cpu import CPULapackBackend
from pylinalg.factorization.backends.reference import ReferenceBackend

__all__ = [
    "CPULapackBackend",
    "ReferenceBackend",
]
