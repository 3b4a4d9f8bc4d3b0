"""
Tests for input validators.

Each validator checks ONE thing and names the parameter in its message.
"""

import numpy as np
import pytest

from pylinsys.core.exceptions import DimensionError, ValidationError
from pylinsys.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_dimension,
    check_finite,
    check_square,
)


class TestCheckArray:

    def test_list_converted(self):
        arr = check_array([[1.0, 2.0], [3.0, 4.0]], 'A')
        assert isinstance(arr, np.ndarray)
        assert arr.shape == (2, 2)

    def test_integers_promoted(self):
        assert check_array([1, 2, 3], 'b').dtype == np.float64

    def test_float32_kept(self):
        assert check_array(np.ones(2, dtype=np.float32), 'b').dtype == np.float32

    def test_object_rejected(self):
        with pytest.raises(ValidationError, match="A: converted to object dtype"):
            check_array(np.array([1.0, None], dtype=object), 'A')

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="non-real"):
            check_array(["a", "b"], 'b')

    def test_complex_rejected(self):
        with pytest.raises(ValidationError, match="non-real"):
            check_array([1 + 2j], 'b')

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError):
            check_array([[1.0, 2.0], [3.0]], 'A')


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.ones(3), 'b')

    def test_counts_reported(self):
        with pytest.raises(ValidationError, match=r"\(2 NaN, 1 Inf\)"):
            check_finite(np.array([np.nan, np.nan, np.inf]), 'b')


class TestShapes:

    def test_1d(self):
        check_1d(np.ones(3), 'b')
        with pytest.raises(DimensionError, match="b: expected 1D"):
            check_1d(np.ones((3, 1)), 'b')

    def test_2d(self):
        check_2d(np.ones((2, 2)), 'A')
        with pytest.raises(DimensionError, match="A: expected 2D"):
            check_2d(np.ones(4), 'A')

    def test_square(self):
        check_square(np.ones((3, 3)), 'A')
        with pytest.raises(DimensionError, match="square"):
            check_square(np.ones((3, 2)), 'A')

    def test_square_empty(self):
        with pytest.raises(DimensionError, match="> 0"):
            check_square(np.ones((0, 0)), 'A')

    def test_consistent_length(self):
        check_consistent_length(np.ones((3, 3)), np.ones(3), names=('A', 'b'))
        with pytest.raises(DimensionError, match="A=3, b=4"):
            check_consistent_length(np.ones((3, 3)), np.ones(4), names=('A', 'b'))

    def test_consistent_length_names_mismatch(self):
        with pytest.raises(ValueError, match="must match number of names"):
            check_consistent_length(np.ones(3), np.ones(3), names=('A',))


class TestCheckDimension:

    def test_matches(self):
        check_dimension(4, 4, 'matrix')

    @pytest.mark.parametrize("n", [0, -1])
    def test_not_positive(self, n):
        with pytest.raises(DimensionError, match="must be > 0"):
            check_dimension(n, 3, 'matrix')

    def test_mismatch(self):
        with pytest.raises(DimensionError, match="does not match"):
            check_dimension(2, 3, 'matrix')
