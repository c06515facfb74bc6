"""
Argument checks shared by every pylinalg entry point.

Each check tests one property and raises at once, naming the offending
parameter and showing the value it got. Nothing is coerced except by
np.asarray on array-likes and float64 promotion of real numeric data.
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any, TYPE_CHECKING

from pylinalg.core.exceptions import ValidationError, ShapeError

if TYPE_CHECKING:
    from pylinalg.matrix.design import Matrix


def _is_int(value: Any) -> bool:
    # bool is an Integral subclass but never a valid count or exponent
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Convert an array-like to a float64 ndarray of real numbers.

    Object arrays (ragged or mixed input), booleans, strings, datetimes
    and complex data are all rejected rather than cast.

    Args:
        array: Array-like from the caller
        name: Parameter name for error messages

    Returns:
        float64 ndarray; no copy when the input already is one

    Raises:
        ValidationError: If the input is not real numeric data
    """
    try:
        arr = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    kind = arr.dtype
    if kind == object:
        raise ValidationError(
            f"{name}: object dtype after conversion; input is ragged or not numeric"
        )
    if not np.issubdtype(kind, np.number):
        raise ValidationError(f"{name}: non-numeric dtype {kind}")
    if np.issubdtype(kind, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {kind} is not supported")

    return arr.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Raises:
        ValidationError: If any entry is NaN or infinite
    """
    bad = ~np.isfinite(array)
    if bad.any():
        n_nan = int(np.isnan(array).sum())
        raise ValidationError(
            f"{name}: non-finite entries ({n_nan} NaN, {int(bad.sum()) - n_nan} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Raises:
        ShapeError: If array.ndim != ndim
    """
    if array.ndim != ndim:
        raise ShapeError(
            f"{name}: expected {ndim}D, got {array.ndim}D array of shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    check_ndim(array, 2, name)


def check_dimension(value: Any, name: str) -> int:
    """
    Row or column count: a positive integer.

    Raises:
        ShapeError: Otherwise
    """
    if not _is_int(value):
        raise ShapeError(f"{name}: dimension must be a positive integer, got {value!r}")
    if value < 1:
        raise ShapeError(f"{name}: dimension must be positive, got {value}")
    return int(value)


def check_integer(value: Any, name: str) -> int:
    """Integer parameter such as an exponent; bools are refused."""
    if not _is_int(value):
        raise ValidationError(f"{name}: expected an integer, got {value!r}")
    return int(value)


def check_square(matrix: 'Matrix', name: str) -> None:
    if matrix.rows != matrix.cols:
        raise ShapeError(
            f"{name}: square matrix required, got {matrix.rows}x{matrix.cols}"
        )


def check_tolerance(tol: Any, name: str) -> float:
    """
    Threshold such as a rank cutoff.

    Returns:
        tol as a float

    Raises:
        ValidationError: If tol is not a finite real number >= 0
    """
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real):
        raise ValidationError(f"{name}: expected a real number, got {tol!r}")
    value = float(tol)
    if not (np.isfinite(value) and value >= 0):
        raise ValidationError(f"{name}: must be finite and non-negative, got {value}")
    return value


def check_flag(value: Any, name: str) -> bool:
    """Boolean option; numpy bools are accepted, truthy objects are not."""
    if not isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{name}: expected True or False, got {value!r}")
    return bool(value)
