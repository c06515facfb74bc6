"""
The envelope every factorization backend returns.

A backend kernel hands back its payload (LU factors, a Cholesky factor,
singular values, eigenvalues) wrapped in a Result, so the solvers layer
can read timing and warnings the same way whichever backend ran.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Output of one backend kernel call.

    Attributes:
        params: Kernel payload, e.g. LUParams or SVDParams
        info: Kernel metadata; always has 'method', plus 'sweeps' or
            'iterations' for the iterative reference kernels
        timing: Timer.result() of the call, or None when not measured
        backend_name: 'cpu_lapack' or 'cpu_reference'
        warnings: Conditions worth reporting that did not stop the
            computation, such as a rank-deficient R diagonal

    Example:
        >>> Result(
        ...     params=SVDParams(U=None, S=s, V=None),
        ...     info={'method': 'one_sided_jacobi', 'sweeps': 6},
        ...     timing={'total_seconds': 0.5, 'sweeps': 0.4},
        ...     backend_name='cpu_reference',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        return any(substring in message for message in self.warnings)
