"""
Structural transforms that operate directly on matrix storage.

None of these has a shape requirement beyond what the name implies;
all return fresh Matrix objects (trace returns a float).
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pylinalg.matrix.design import Matrix, as_matrix


def tril(a: Any) -> Matrix:
    """Copy of a with every entry strictly above the main diagonal zeroed."""
    m = as_matrix(a, 'a')
    return Matrix.from_array(np.tril(m.values))


def triu(a: Any) -> Matrix:
    """Copy of a with every entry strictly below the main diagonal zeroed."""
    m = as_matrix(a, 'a')
    return Matrix.from_array(np.triu(m.values))


def transpose(a: Any) -> Matrix:
    """cols x rows matrix with entry (j, i) equal to a[i, j]."""
    m = as_matrix(a, 'a')
    return Matrix.from_array(m.values.T)


def trace(a: Any) -> float:
    """
    Sum of the diagonal entries a[i, i] for i < min(rows, cols).

    No squareness requirement.
    """
    m = as_matrix(a, 'a')
    return float(np.trace(m.values))
