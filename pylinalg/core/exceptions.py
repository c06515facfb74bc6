"""
Errors raised by pylinalg.

Everything derives from PyLinalgError. Bad arguments raise a
ValidationError subclass before any arithmetic happens; failures of the
arithmetic itself raise NumericalError or ConvergenceError and carry the
diagnostics a caller needs to decide what to do next (condition number,
rank, failing minor, iteration count).

LAPACK errors are never surfaced raw: backends translate them into the
classes below and chain the original with ``raise ... from``.
"""


class PyLinalgError(Exception):
    """Root of every pylinalg error."""


class ValidationError(PyLinalgError):
    """An argument was rejected before computation started."""


class ShapeError(ValidationError):
    """
    Dimensions are invalid or do not line up.

    Covers a buffer whose length is not rows*cols, a non-positive
    dimension, operands whose inner dimensions disagree, and a
    rectangular matrix passed where a square one is required.
    """


class OperandTypeError(ValidationError, TypeError):
    """
    An operand is neither a finite scalar nor a Matrix, or is a scalar
    where only a Matrix makes sense.

    Subclasses TypeError as well, so ``except TypeError`` catches it.
    """


class NumericalError(PyLinalgError):
    """
    The input was well formed but the arithmetic cannot produce an answer.

    Attributes:
        matrix_name: Which argument was at fault, when known
    """

    def __init__(self, message: str, matrix_name: str | None = None):
        super().__init__(message)
        self.matrix_name = matrix_name


class SingularMatrixError(NumericalError):
    """
    The matrix has no inverse in floating point.

    Attributes:
        condition_number: 1-norm condition estimate; inf for a zero pivot
        rank: Numerical rank from the R diagonal, when computed
        expected_rank: min(rows, cols) of the matrix that fell short
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
    ):
        super().__init__(message, matrix_name)
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class NotPositiveDefiniteError(NumericalError):
    """
    Cholesky met a pivot that is zero or negative.

    Attributes:
        leading_minor: 1-based order of the first leading minor that is
            not positive, when the kernel reports it
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        leading_minor: int | None = None,
    ):
        super().__init__(message, matrix_name)
        self.leading_minor = leading_minor


class ConvergenceError(PyLinalgError):
    """
    An iterative kernel hit its iteration cap.

    Used by the Jacobi SVD sweeps and the shifted QR eigenvalue
    iteration, and for LAPACK drivers that report non-convergence
    (reason 'lapack_failure', iterations 0).

    Attributes:
        iterations: Sweeps or QR steps performed before giving up
        final_change: Last off-diagonal mass or subdiagonal entry
        reason: Short tag, e.g. 'max_iterations'
        threshold: Target the final change had to fall below
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
