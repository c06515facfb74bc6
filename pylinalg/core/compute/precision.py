"""
Machine epsilon and the rank and singularity cutoffs derived from it.

Shared by both backends, so LAPACK and the reference kernels agree on
when a pivot or singular value counts as zero.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# float64 machine epsilon, 2**-52
EPSILON_64: float = float(np.finfo(np.float64).eps)

# Smallest positive normal float64, used to guard scale factors
TINY_64: float = float(np.finfo(np.float64).tiny)


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """Spacing between 1.0 and the next representable value of dtype."""
    return float(np.finfo(dtype).eps)


def default_rank_tolerance(
    singular_values: NDArray[np.floating[Any]],
    shape: tuple[int, int],
) -> float:
    """
    Default threshold below which a singular value counts as zero.

    tol = max(S) * max(rows, cols) * eps

    Args:
        singular_values: Singular values of the matrix
        shape: (rows, cols) of the matrix

    Returns:
        The threshold; 0.0 when there are no singular values
    """
    if singular_values.size == 0:
        return 0.0
    return float(np.max(singular_values)) * max(shape) * EPSILON_64


def is_numerically_singular(condition_number: float) -> bool:
    """
    True if a condition number exceeds what float64 can resolve.

    Args:
        condition_number: Estimated condition number (may be inf or nan)
    """
    if not np.isfinite(condition_number):
        return True
    return condition_number * EPSILON_64 >= 1.0
