"""
Shared compute infrastructure for pylinalg.

Submodules:
    timing: Phase timing for backend kernels
    precision: Machine epsilon and rank/singularity thresholds
    tolerances: Tolerance tiers per backend
    linalg: LAPACK QR decomposition and solve
"""

from pylinalg.core.compute.timing import Timer

__all__ = [
    "Timer",
]
