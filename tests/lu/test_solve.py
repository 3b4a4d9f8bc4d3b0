"""
Tests for lu.solve() and lu.inverse().

Tests the complete pipeline: design construction, backend selection,
and solution properties, on the Crout and LAPACK backends.
"""

from dataclasses import replace
import warnings

import numpy as np
import pytest

from pylinsys.core.containers import SparseMatrix, ColumnMajorMatrix
from pylinsys.core.compute.tolerances import FP64
from pylinsys.core.exceptions import (
    DimensionError,
    NearSingularPivotWarning,
    SingularMatrixError,
    ValidationError,
)
from pylinsys.lu import LUSolution, inverse, solve
from pylinsys.lu.solvers import AUTO_LAPACK_MIN_DIM


CPU_BACKENDS = ['cpu_crout', 'cpu_lapack']


class TestSolveBasic:
    """Basic solve() functionality."""

    @pytest.mark.parametrize("backend", CPU_BACKENDS)
    def test_recovers_known_solution(self, well_conditioned, backend):
        A, b, x_true = well_conditioned
        result = solve(A, b, backend=backend)
        assert isinstance(result, LUSolution)
        np.testing.assert_allclose(result.solution, x_true, rtol=FP64.rtol, atol=1e-12)

    @pytest.mark.parametrize("backend", CPU_BACKENDS)
    def test_multiple_right_hand_sides(self, rng, backend):
        A = rng.standard_normal((5, 5)) + 5 * np.eye(5)
        B = rng.standard_normal((5, 3))
        result = solve(A, B, backend=backend)
        assert result.solution.shape == (5, 3)
        np.testing.assert_allclose(A @ result.solution, B, atol=1e-12)

    def test_swap_2x2(self):
        result = solve([[0.0, 1.0], [1.0, 0.0]], [1.0, 2.0], backend='cpu')
        np.testing.assert_allclose(result.solution, [2.0, 1.0])
        assert result.permutation == (1, 1)
        assert result.parity == -1

    def test_docstring_example(self):
        result = solve([[4.0, 3.0], [6.0, 3.0]], [10.0, 12.0])
        np.testing.assert_allclose(result.solution, [1.0, 2.0])

    def test_integer_input_promoted(self):
        result = solve([[2, 0], [0, 4]], [2, 4])
        assert result.solution.dtype == np.float64
        np.testing.assert_allclose(result.solution, [1.0, 1.0])

    def test_inputs_not_modified(self, well_conditioned):
        A, b, _ = well_conditioned
        A_copy, b_copy = A.copy(), b.copy()
        solve(A, b, backend='cpu_crout')
        np.testing.assert_array_equal(A, A_copy)
        np.testing.assert_array_equal(b, b_copy)

    @pytest.mark.parametrize("storage", [SparseMatrix, ColumnMajorMatrix])
    def test_matrix_like_input(self, needs_pivoting, storage):
        A, b = needs_pivoting
        result = solve(storage.from_array(A), b)
        np.testing.assert_allclose(result.solution, [1.0, 1.0, 1.0], atol=1e-12)


class TestSolveProperties:
    """Derived properties of LUSolution."""

    @pytest.mark.parametrize("backend", CPU_BACKENDS)
    def test_factors_reproduce_permuted_matrix(self, needs_pivoting, permute_rows, backend):
        A, b = needs_pivoting
        result = solve(A, b, backend=backend)
        np.testing.assert_allclose(
            result.lower @ result.upper,
            permute_rows(A, result.permutation),
            atol=1e-12,
        )

    @pytest.mark.parametrize("backend", CPU_BACKENDS)
    def test_determinant(self, rng, backend):
        A = rng.standard_normal((6, 6))
        result = solve(A, np.ones(6), backend=backend)
        assert result.determinant == pytest.approx(np.linalg.det(A), rel=1e-10)

    def test_residuals_small(self, well_conditioned):
        A, b, _ = well_conditioned
        result = solve(A, b)
        assert result.residuals.shape == b.shape
        assert result.residual_norm < 1e-12
        assert result.is_accurate()

    def test_condition_number(self):
        result = solve(np.diag([1.0, 10.0]), [1.0, 1.0])
        assert result.condition_number == pytest.approx(10.0)

    def test_timing_sections(self, well_conditioned):
        A, b, _ = well_conditioned
        result = solve(A, b, backend='cpu_crout')
        assert 'total_seconds' in result.timing
        assert 'decomposition' in result.timing
        assert 'back_substitution' in result.timing
        assert 'inversion' not in result.timing

    def test_info(self, well_conditioned):
        A, b, _ = well_conditioned
        assert solve(A, b, backend='cpu_crout').info['method'] == 'crout'
        assert solve(A, b, backend='cpu_lapack').info['method'] == 'lapack_getrf'

    def test_inverse_not_available(self, well_conditioned):
        A, b, _ = well_conditioned
        result = solve(A, b)
        with pytest.raises(AttributeError, match="Inverse was not computed"):
            result.inverse

    def test_summary_runs(self, well_conditioned):
        A, b, _ = well_conditioned
        s = solve(A, b, backend='cpu_crout').summary()
        assert "Crout" in s
        assert "Determinant" in s
        assert "Residual" in s
        assert "Backend: cpu_crout" in s

    def test_repr(self, well_conditioned):
        A, b, _ = well_conditioned
        assert "cpu_crout" in repr(solve(A, b, backend='cpu'))


class TestBackendSelection:

    def test_auto_small_uses_crout(self, well_conditioned):
        A, b, _ = well_conditioned
        assert solve(A, b).backend_name == 'cpu_crout'

    def test_auto_large_uses_lapack(self, rng):
        n = AUTO_LAPACK_MIN_DIM
        A = rng.standard_normal((n, n)) + n * np.eye(n)
        result = solve(A, np.ones(n))
        assert result.backend_name == 'cpu_lapack'

    @pytest.mark.parametrize("alias, name", [
        ('cpu', 'cpu_crout'),
        ('cpu_crout', 'cpu_crout'),
        ('lapack', 'cpu_lapack'),
        ('cpu_lapack', 'cpu_lapack'),
    ])
    def test_aliases(self, well_conditioned, alias, name):
        A, b, _ = well_conditioned
        assert solve(A, b, backend=alias).backend_name == name

    def test_unknown_backend(self, well_conditioned):
        A, b, _ = well_conditioned
        with pytest.raises(ValueError, match="Unknown backend"):
            solve(A, b, backend='cpu_qr')

    def test_backends_agree(self, rng):
        A = rng.standard_normal((10, 10))
        b = rng.standard_normal(10)
        crout = solve(A, b, backend='cpu_crout')
        lapack = solve(A, b, backend='cpu_lapack')
        np.testing.assert_allclose(crout.solution, lapack.solution, rtol=1e-9, atol=1e-12)


class TestSingular:

    @pytest.mark.parametrize("backend", CPU_BACKENDS)
    def test_zero_row(self, backend):
        A = np.array([[1.0, 2.0], [0.0, 0.0]])
        with pytest.raises(SingularMatrixError) as exc_info:
            solve(A, [1.0, 1.0], backend=backend)
        assert exc_info.value.row == 1

    @pytest.mark.parametrize("backend", CPU_BACKENDS)
    def test_near_singular_warns_and_flags(self, backend):
        A = np.array([[1.0, 1.0], [1.0, 1.0]])
        with pytest.warns(NearSingularPivotWarning):
            result = solve(A, [1.0, 2.0], backend=backend)
        assert result.is_near_singular
        assert result.clamped_pivots == (1,)
        assert result._result.has_warning("clamped")
        assert "Clamped pivots" in result.summary()

    def test_crout_warns_exactly_once(self):
        A = np.array([[1.0, 1.0], [1.0, 1.0]])
        with warnings.catch_warnings(record=True) as record:
            warnings.simplefilter('always')
            result = solve(A, [1.0, 2.0], backend='cpu_crout')
        clamp_warnings = [w for w in record if issubclass(w.category, NearSingularPivotWarning)]
        assert len(clamp_warnings) == 1
        assert result.warnings == (str(clamp_warnings[0].message),)

    def test_threshold_forwarded(self):
        A = np.array([[1.0, 0.0], [0.0, 1e-3]])
        with pytest.raises(SingularMatrixError):
            solve(A, [1.0, 1.0], threshold=1e-2)


class TestValidation:

    def test_non_square(self):
        with pytest.raises(DimensionError, match="square"):
            solve(np.ones((2, 3)), [1.0, 1.0])

    def test_empty(self):
        with pytest.raises(DimensionError, match="dimension > 0"):
            solve(np.zeros((0, 0)), np.zeros(0))

    def test_one_dimensional_matrix(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            solve([1.0, 2.0], [1.0, 2.0])

    def test_nan_in_matrix(self):
        with pytest.raises(ValidationError, match="non-finite"):
            solve([[1.0, np.nan], [0.0, 1.0]], [1.0, 1.0])

    def test_inf_in_rhs(self):
        with pytest.raises(ValidationError, match="non-finite"):
            solve(np.eye(2), [1.0, np.inf])

    def test_rhs_length_mismatch(self):
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            solve(np.eye(3), [1.0, 2.0])

    def test_rhs_three_dimensional(self):
        with pytest.raises(DimensionError, match="1D or 2D"):
            solve(np.eye(2), np.ones((2, 1, 1)))

    def test_complex_rejected(self):
        with pytest.raises(ValidationError, match="non-real"):
            solve(np.eye(2) * 1j, [1.0, 1.0])

    def test_strings_rejected(self):
        with pytest.raises(ValidationError):
            solve([["a", "b"], ["c", "d"]], [1.0, 1.0])


# ═══════════════════════════════════════════════════════════════════════
# inverse()
# ═══════════════════════════════════════════════════════════════════════


class TestInverse:

    @pytest.mark.parametrize("backend", CPU_BACKENDS)
    def test_matches_numpy(self, rng, backend):
        A = rng.standard_normal((7, 7)) + 7 * np.eye(7)
        result = inverse(A, backend=backend)
        np.testing.assert_allclose(result.inverse, np.linalg.inv(A), rtol=1e-10, atol=1e-12)

    def test_diagonal(self):
        result = inverse(np.diag([2.0, 4.0, 8.0]))
        np.testing.assert_allclose(result.inverse, np.diag([0.5, 0.25, 0.125]), rtol=1e-15)

    def test_one_by_one(self):
        result = inverse([[-3.0]])
        np.testing.assert_allclose(result.inverse, [[-1.0 / 3.0]])

    def test_factors_kept_alongside_inverse(self, needs_pivoting, permute_rows):
        A, _ = needs_pivoting
        result = inverse(A, backend='cpu_crout')
        np.testing.assert_allclose(
            result.lower @ result.upper,
            permute_rows(A, result.permutation),
            atol=1e-12,
        )
        assert 'inversion' in result.timing

    def test_workers(self, rng):
        A = rng.standard_normal((9, 9)) + 9 * np.eye(9)
        serial = inverse(A, backend='cpu_crout')
        threaded = inverse(A, backend='cpu_crout', workers=3)
        np.testing.assert_array_equal(threaded.inverse, serial.inverse)
        assert threaded.info['workers'] == 3

    @pytest.mark.parametrize("backend", CPU_BACKENDS)
    def test_is_accurate(self, rng, backend):
        assert inverse([[2.0, 0.0], [0.0, 4.0]], backend=backend).is_accurate()
        A = rng.standard_normal((8, 8)) + 8 * np.eye(8)
        assert inverse(A, backend=backend).is_accurate()

    def test_is_accurate_rejects_wrong_inverse(self):
        result = inverse([[2.0, 0.0], [0.0, 4.0]])
        params = replace(result._result.params, inverse=2.0 * result.inverse)
        wrong = LUSolution(
            _result=replace(result._result, params=params),
            _design=result._design,
        )
        assert not wrong.is_accurate()

    def test_solution_not_available(self):
        result = inverse(np.eye(2))
        with pytest.raises(AttributeError, match="No right-hand side"):
            result.solution

    def test_summary_mentions_inverse(self):
        assert "Inverse:" in inverse(np.eye(2)).summary()

    def test_singular(self):
        with pytest.raises(SingularMatrixError):
            inverse(np.zeros((3, 3)))
