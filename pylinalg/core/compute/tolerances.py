"""
Tolerance tiers for numerical validation.

Defines precision expectations for the two compute paths:
- CPU LAPACK (reference for all comparisons)
- CPU reference kernels (pure NumPy, slightly looser accumulation error)

Used by the test suite to compare backends and by callers that want a
principled "approximately equal" for pylinalg outputs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """rtol/atol pair for comparing results from one backend."""
    rtol: float
    atol: float
    name: str
    description: str


# LAPACK via SciPy: backward-stable, machine precision
CPU_LAPACK = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_lapack',
    description='CPU double precision via LAPACK',
)

# LAPACK, ill-conditioned problems (cond > 1e4)
CPU_LAPACK_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_lapack_ill_conditioned',
    description='CPU double precision via LAPACK, ill-conditioned (cond > 1e4)',
)

# Pure NumPy kernels: same algorithms, unblocked accumulation
CPU_REFERENCE = ToleranceTier(
    rtol=1e-9,
    atol=1e-10,
    name='cpu_reference',
    description='CPU double precision, NumPy reference kernels',
)

# Reference kernels, ill-conditioned problems
CPU_REFERENCE_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-3,
    atol=1e-5,
    name='cpu_reference_ill_conditioned',
    description='CPU double precision, NumPy reference kernels, ill-conditioned',
)

# Round trips such as A @ inv(A) == I
ROUND_TRIP_ATOL = 1e-6


def select_tolerance(
    backend_name: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given backend."""
    if 'reference' in backend_name:
        if is_ill_conditioned:
            return CPU_REFERENCE_ILL_CONDITIONED
        return CPU_REFERENCE
    if is_ill_conditioned:
        return CPU_LAPACK_ILL_CONDITIONED
    return CPU_LAPACK
