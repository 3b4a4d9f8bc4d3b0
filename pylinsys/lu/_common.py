"""
Helpers shared by the LU kernel and the array backends.

The LAPACK and GPU backends reject exactly where the Crout kernel does.
They clamp after factoring, so clamp_pivots only approximates the
kernel, which clamps before dividing the sub-column by the pivot.
"""

from __future__ import annotations

from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray

from pylinsys.core.exceptions import NearSingularPivotWarning, SingularMatrixError


def near_singular_warning(
    columns: Sequence[int],
    threshold: float,
) -> NearSingularPivotWarning:
    """Build the warning reported when pivots were clamped."""
    columns = tuple(int(c) for c in columns)
    return NearSingularPivotWarning(
        f"LU pivots in columns {list(columns)} clamped to {threshold:.3e}; "
        f"matrix is near-singular and results may be inaccurate",
        columns=columns,
        threshold=threshold,
    )


def screen_rows(A: NDArray[np.floating[Any]], threshold: float) -> None:
    """
    Reject a matrix with a row that is zero to working precision.

    Array counterpart of the scale-factor pass of the Crout kernel.

    Raises:
        SingularMatrixError: For the first row whose largest absolute
            value is at or below threshold
    """
    row_max = np.max(np.abs(A), axis=1)
    bad = np.flatnonzero(row_max <= threshold)
    if bad.size:
        i = int(bad[0])
        big = float(row_max[i])
        raise SingularMatrixError(
            f"Matrix is singular: row {i} has max |a(i,j)| = {big:.3e} "
            f"<= threshold {threshold:.3e}",
            matrix_name='A',
            row=i,
            max_abs=big,
            threshold=threshold,
        )


def clamp_pivots(lu: NDArray[np.floating[Any]], threshold: float) -> tuple[int, ...]:
    """
    Clamp near-zero diagonal entries of U in place.

    Returns:
        Indices of the clamped columns
    """
    diag = np.diagonal(lu)
    small = np.flatnonzero(np.abs(diag) <= threshold)
    lu[small, small] = threshold
    return tuple(int(j) for j in small)


def parity_of(permutation: Sequence[int]) -> int:
    """+1 for an even number of row interchanges, -1 for odd."""
    swaps = sum(1 for j, p in enumerate(permutation) if p != j)
    return -1 if swaps % 2 else 1
