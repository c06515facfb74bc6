"""
Matrix and Scalar: the value types every pylinalg operation consumes.

A Matrix is a rows x cols grid of float64 values stored as one flat,
row-major, read-only buffer: element (i, j) lives at index i*cols + j.
A Scalar is a single finite float. Together they form the Operand
variant that the product family dispatches on.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import (
    OperandTypeError,
    ShapeError,
    ValidationError,
)
from pylinalg.core.validation import check_1d, check_array, check_dimension


@dataclass(frozen=True, eq=False)
class Matrix:
    """
    Dense real matrix in flat row-major storage.

    Immutable after construction: the buffer is copied from the caller's
    data and flagged read-only, so operations never alias or mutate an
    input. Every operation returns a freshly allocated Matrix.

    Construction:
        Matrix(2, 2, [1.0, 2.0, 3.0, 4.0])
        Matrix.from_array(np.array([[1.0, 2.0], [3.0, 4.0]]))
        Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])

    Raises:
        ShapeError: If a dimension is not a positive integer or
            len(data) != rows * cols
        ValidationError: If data is not real numeric
    """
    rows: int
    cols: int
    data: NDArray[np.floating[Any]]

    def __post_init__(self) -> None:
        rows = check_dimension(self.rows, 'rows')
        cols = check_dimension(self.cols, 'cols')

        flat = np.array(check_array(self.data, 'data'), dtype=np.float64, copy=True)
        check_1d(flat, 'data')
        if flat.size != rows * cols:
            raise ShapeError(
                f"data: length {flat.size} does not match rows*cols = {rows}*{cols} = {rows * cols}"
            )
        flat.setflags(write=False)

        object.__setattr__(self, 'rows', rows)
        object.__setattr__(self, 'cols', cols)
        object.__setattr__(self, 'data', flat)

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """
        Build a Matrix from a 1D or 2D array-like.

        1D input becomes a 1 x n row vector.
        """
        arr = check_array(array, 'array')
        if arr.ndim == 1:
            arr = arr.reshape(1, -1)
        if arr.ndim != 2:
            raise ShapeError(
                f"array: expected 1D or 2D array, got {arr.ndim}D with shape {arr.shape}"
            )
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ShapeError(f"array: dimensions must be positive, got shape {arr.shape}")
        return cls(arr.shape[0], arr.shape[1], arr.ravel())

    @classmethod
    def from_rows(cls, rows: list[list[float]]) -> Matrix:
        """Build a Matrix from a list of equal-length rows."""
        return cls.from_array(rows)

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols)."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Number of elements, rows * cols."""
        return self.rows * self.cols

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def is_vector(self) -> bool:
        """True for a single row or a single column."""
        return self.rows == 1 or self.cols == 1

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        """Read-only (rows x cols) view of the buffer."""
        return self.data.reshape(self.rows, self.cols)

    def to_array(self) -> NDArray[np.floating[Any]]:
        """Fresh, writable (rows x cols) copy."""
        return self.values.copy()

    def to_list(self) -> list[list[float]]:
        """Nested Python lists, one per row."""
        return self.values.tolist()

    def __array__(self, dtype=None, copy=None) -> NDArray:
        arr = self.to_array()
        if dtype is not None:
            arr = arr.astype(dtype, copy=False)
        return arr

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexError(
                f"index ({i}, {j}) out of range for {self.rows}x{self.cols} matrix"
            )
        return float(self.data[i * self.cols + j])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols}, data={self.data.tolist()})"


@dataclass(frozen=True)
class Scalar:
    """A single finite real number used as a product operand."""
    value: float

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            raise OperandTypeError(f"Scalar: expected a real number, got {value!r}")
        value = float(value)
        if not np.isfinite(value):
            raise OperandTypeError(f"Scalar: value must be finite, got {value}")
        object.__setattr__(self, 'value', value)


Operand = Union[Scalar, Matrix]


def as_operand(value: Any, name: str) -> Operand:
    """
    Classify a caller value as a Scalar or a Matrix.

    Matrix and Scalar pass through. Real numbers (Python or NumPy) and 0-d
    arrays become Scalar. 1D and 2D array-likes become Matrix.

    Args:
        value: Caller input
        name: Parameter name for error messages

    Raises:
        OperandTypeError: If value is neither a finite real scalar nor
            convertible to a Matrix
        ShapeError: If an array-like has a zero-length dimension
    """
    if isinstance(value, (Matrix, Scalar)):
        return value

    if isinstance(value, (bool, np.bool_)) or value is None or isinstance(value, (str, bytes)):
        raise OperandTypeError(
            f"{name}: expected a scalar or Matrix, got {type(value).__name__}"
        )

    if isinstance(value, numbers.Real):
        if not np.isfinite(float(value)):
            raise OperandTypeError(f"{name}: scalar operand must be finite, got {value}")
        return Scalar(value)

    if isinstance(value, (np.ndarray, list, tuple)):
        try:
            arr = check_array(value, name)
        except ValidationError as e:
            raise OperandTypeError(f"{name}: not a numeric scalar or matrix: {e}") from e
        if arr.ndim == 0:
            return as_operand(float(arr), name)
        if arr.ndim > 2:
            raise OperandTypeError(
                f"{name}: expected a scalar, 1D or 2D operand, got {arr.ndim}D"
            )
        return Matrix.from_array(arr)

    raise OperandTypeError(
        f"{name}: expected a scalar or Matrix, got {type(value).__name__}"
    )


def as_matrix(value: Any, name: str) -> Matrix:
    """
    Like as_operand, but a Matrix is required.

    Raises:
        OperandTypeError: If value is a scalar or not matrix-like
    """
    operand = as_operand(value, name)
    if not isinstance(operand, Matrix):
        raise OperandTypeError(
            f"{name}: expected a Matrix, got scalar {operand.value!r}"
        )
    return operand


def wrap_result(array: NDArray[np.floating[Any]]) -> float | Matrix:
    """
    Package a 2D product result for the caller.

    A 1x1 result is returned as a bare float; anything else as a Matrix.
    """
    if array.shape == (1, 1):
        return float(array[0, 0])
    return Matrix.from_array(array)
