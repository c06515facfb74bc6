"""
Linear algebra kernels shared across backends.

All functions follow these conventions:
    - CPU functions use NumPy/SciPy (LAPACK under the hood)
    - Each decomposition returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    qr: QR decomposition and QR-based linear solve
"""

from pylinalg.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
    qr_solve_cpu,
    r_diagonal_rank,
)

__all__ = [
    # QR decomposition
    "QRResult",
    "qr_cpu",
    "qr_solve_cpu",
    "r_diagonal_rank",
]
