"""
Tests for LinearSystemDesign construction and validation.
"""

import numpy as np
import pytest

from pylinsys.core.containers import ColumnMajorMatrix, SparseMatrix
from pylinsys.core.exceptions import DimensionError, ValidationError
from pylinsys.lu import LinearSystemDesign


class ElementOnly:
    """MatrixLike with no to_numpy(); read element by element."""

    def __init__(self, rows):
        self._rows = [list(r) for r in rows]

    def dimension(self):
        return len(self._rows)

    def get(self, row, col):
        return self._rows[row][col]

    def set(self, row, col, value):
        self._rows[row][col] = value


class TestBuild:

    def test_vector_rhs(self):
        design = LinearSystemDesign.build(np.eye(3), [1.0, 2.0, 3.0])
        assert design.n == 3
        assert design.n_rhs == 1
        assert design.rhs_columns().shape == (3, 1)
        assert not design.compute_inverse

    def test_matrix_rhs(self):
        design = LinearSystemDesign.build(np.eye(3), np.ones((3, 4)))
        assert design.n_rhs == 4
        assert design.rhs_columns().shape == (3, 4)

    def test_inverse_only(self):
        design = LinearSystemDesign.build(np.eye(2), compute_inverse=True)
        assert design.b is None
        assert design.n_rhs == 0
        assert design.rhs_columns().shape == (2, 0)

    def test_nothing_to_compute(self):
        with pytest.raises(ValueError, match="Nothing to compute"):
            LinearSystemDesign.build(np.eye(2))

    def test_copies_inputs(self):
        A = np.eye(2)
        b = np.array([1.0, 2.0])
        design = LinearSystemDesign.build(A, b)
        A[0, 0] = 99.0
        b[0] = 99.0
        assert design.A[0, 0] == 1.0
        assert design.b[0] == 1.0

    def test_float64(self):
        design = LinearSystemDesign.build(np.eye(2, dtype=np.float32), [1, 2])
        assert design.A.dtype == np.float64
        assert design.b.dtype == np.float64

    def test_immutable(self):
        design = LinearSystemDesign.build(np.eye(2), [1.0, 2.0])
        with pytest.raises(AttributeError):
            design._n = 5

    def test_non_square(self):
        with pytest.raises(DimensionError):
            LinearSystemDesign.build(np.ones((3, 2)), np.ones(3))

    def test_rhs_mismatch(self):
        with pytest.raises(DimensionError, match="A=3, b=2"):
            LinearSystemDesign.build(np.eye(3), np.ones(2))

    def test_nan_rhs(self):
        with pytest.raises(ValidationError, match="b: contains non-finite"):
            LinearSystemDesign.build(np.eye(2), [np.nan, 1.0])


class TestFromMatrix:

    @pytest.mark.parametrize("storage", [ColumnMajorMatrix, SparseMatrix])
    def test_materialized_containers(self, storage):
        A = np.array([[1.0, 0.0, 2.0], [0.0, 3.0, 0.0], [4.0, 0.0, 5.0]])
        design = LinearSystemDesign.from_matrix(storage.from_array(A), np.ones(3))
        np.testing.assert_array_equal(design.A, A)

    def test_element_only_container(self):
        rows = [[2.0, 1.0], [1.0, 3.0]]
        design = LinearSystemDesign.from_matrix(ElementOnly(rows), compute_inverse=True)
        np.testing.assert_array_equal(design.A, np.array(rows))

    def test_container_not_modified(self):
        matrix = ColumnMajorMatrix.from_array([[2.0, 1.0], [1.0, 3.0]])
        design = LinearSystemDesign.from_matrix(matrix, [1.0, 1.0])
        design.A[0, 0] = 99.0
        assert matrix.get(0, 0) == 2.0
