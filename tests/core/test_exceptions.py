"""
Tests for the exception hierarchy and the diagnostics the operations
attach to it.
"""

import numpy as np
import pytest

from pylinalg import cholesky, inv, matrix_mul, matrix_solve_linear
from pylinalg.core.exceptions import (
    ConvergenceError,
    NotPositiveDefiniteError,
    NumericalError,
    OperandTypeError,
    PyLinalgError,
    ShapeError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Hierarchy
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("cls, bases, not_bases", [
    (ValidationError, (PyLinalgError,), (NumericalError, TypeError)),
    (ShapeError, (ValidationError,), (TypeError,)),
    (OperandTypeError, (ValidationError, TypeError), (NumericalError,)),
    (NumericalError, (PyLinalgError,), (ValidationError,)),
    (SingularMatrixError, (NumericalError,), (ValidationError,)),
    (NotPositiveDefiniteError, (NumericalError,), (SingularMatrixError,)),
    (ConvergenceError, (PyLinalgError,), (NumericalError,)),
])
def test_hierarchy(cls, bases, not_bases):
    for base in bases:
        assert issubclass(cls, base)
    for other in not_bases:
        assert not issubclass(cls, other)


def test_operand_type_error_caught_as_type_error():
    with pytest.raises(TypeError):
        matrix_mul(2.0, [[1.0]])


# ═══════════════════════════════════════════════════════════════════════
# Attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_numerical_errors_share_matrix_name(self):
        assert SingularMatrixError("s", matrix_name="A").matrix_name == "A"
        assert NotPositiveDefiniteError("p", matrix_name="L").matrix_name == "L"
        assert NumericalError("n").matrix_name is None

    def test_singular_optional_fields_default_to_none(self):
        err = SingularMatrixError("singular")
        assert (err.condition_number, err.rank, err.expected_rank) == (None, None, None)

    def test_convergence_iterations_positional(self):
        err = ConvergenceError("Jacobi SVD did not converge after 60 sweeps", 60,
                               final_change=3e-9, reason='max_iterations')
        assert err.iterations == 60
        assert err.final_change == 3e-9
        assert err.reason == 'max_iterations'
        assert err.threshold is None
        assert str(err).startswith("Jacobi SVD")


# ═══════════════════════════════════════════════════════════════════════
# Diagnostics from real failures
# ═══════════════════════════════════════════════════════════════════════


class TestRaisedDiagnostics:

    def test_inv_zero_pivot_reports_infinite_condition(self, backend):
        with pytest.raises(SingularMatrixError) as exc_info:
            inv([[1.0, 2.0], [2.0, 4.0]], backend=backend)
        assert exc_info.value.condition_number == np.inf

    def test_cholesky_reports_failing_minor(self, backend):
        a = [[4.0, 2.0, 0.0], [2.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            cholesky(a, backend=backend)
        assert exc_info.value.leading_minor == 2

    def test_checked_solve_reports_rank(self):
        a = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1e-20]]
        with pytest.raises(SingularMatrixError) as exc_info:
            matrix_solve_linear(a, [1.0, 1.0, 1.0], check_rank=True)
        assert exc_info.value.rank == 2
        assert exc_info.value.expected_rank == 3
