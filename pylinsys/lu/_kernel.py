"""
LU kernel: Crout decomposition with scaled partial pivoting, forward/back
substitution, and inversion.

Storage-agnostic: every function works on anything satisfying MatrixLike /
VectorLike and touches elements only through get/set. The functions keep no
state between calls; the only side effect is the documented in-place
mutation of the matrix (and of the right-hand side for in-place solves).

Reference: Press et al., Numerical Recipes, 2nd ed., section 2.3.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence
import warnings

from pylinsys.core.compute.precision import resolve_threshold
from pylinsys.core.containers import ArrayVector
from pylinsys.core.exceptions import SingularMatrixError
from pylinsys.core.protocols import MatrixLike, VectorFactory, VectorLike
from pylinsys.core.validation import check_dimension
from pylinsys.lu._common import near_singular_warning


@dataclass(frozen=True)
class Decomposition:
    """
    Pivot bookkeeping produced by decompose().

    The factors themselves live in the caller's matrix; this record holds
    what is needed to use them.

    Attributes:
        permutation: Entry j is the row swapped into position j at step j
        parity: +1 for an even number of row interchanges, -1 for odd
        clamped_pivots: Columns whose pivot was clamped to the threshold
        threshold: Singularity threshold used during the decomposition
    """
    permutation: tuple[int, ...]
    parity: int
    clamped_pivots: tuple[int, ...]
    threshold: float

    @property
    def n(self) -> int:
        return len(self.permutation)

    @property
    def is_near_singular(self) -> bool:
        """True if any pivot was clamped; results may have lost precision."""
        return bool(self.clamped_pivots)

    def determinant(self, matrix: MatrixLike) -> float:
        """
        Determinant of the original matrix.

        Only valid while ``matrix`` still holds the factors from this
        decomposition (not after inversion).
        """
        det = float(self.parity)
        for j in range(self.n):
            det *= matrix.get(j, j)
        return det


def _scale_factors(matrix: MatrixLike, n: int, threshold: float) -> list[float]:
    """Reciprocal of each row's largest absolute element. Read-only."""
    scale = []
    for i in range(n):
        big = 0.0
        for j in range(n):
            big = max(big, abs(matrix.get(i, j)))
        if big <= threshold:
            raise SingularMatrixError(
                f"Matrix is singular: row {i} has max |a(i,j)| = {big:.3e} "
                f"<= threshold {threshold:.3e}",
                matrix_name='a',
                row=i,
                max_abs=big,
                threshold=threshold,
            )
        scale.append(1.0 / big)
    return scale


def decompose(
    matrix: MatrixLike,
    n: int | None = None,
    *,
    threshold: float | None = None,
    warn: bool = True,
) -> Decomposition:
    """
    LU-decompose a square matrix in place (Crout, scaled partial pivoting).

    On return ``matrix`` holds U on and above the diagonal and the
    multipliers of the unit-lower-triangular L below it, for the row
    permutation described by the returned record.

    Near-zero pivots are clamped to ``threshold`` instead of failing; this
    keeps the factorization usable for near-singular input at the cost of
    accuracy, and is reported through Decomposition.clamped_pivots and a
    NearSingularPivotWarning.

    Args:
        matrix: Square matrix, overwritten with its factors
        n: Dimension; defaults to matrix.dimension()
        threshold: Singularity threshold; defaults to float64 epsilon
        warn: Emit NearSingularPivotWarning for clamped pivots. Callers
            that report clamping themselves pass False.

    Returns:
        Decomposition record

    Raises:
        DimensionError: If n is not positive or disagrees with the matrix
        SingularMatrixError: If a row's largest absolute value is at or
            below threshold. Raised before the matrix is modified.
    """
    if n is None:
        n = matrix.dimension()
    check_dimension(n, matrix.dimension(), 'matrix')
    tiny = resolve_threshold(threshold)

    scale = _scale_factors(matrix, n, tiny)

    permutation = [0] * n
    parity = 1
    clamped = []

    for j in range(n):
        # Upper factors above the diagonal.
        for i in range(j):
            total = matrix.get(i, j)
            for k in range(i):
                total -= matrix.get(i, k) * matrix.get(k, j)
            matrix.set(i, j, total)

        # Diagonal and sub-diagonal candidates; the largest scaled one wins,
        # the last of several equal ones.
        best = 0.0
        pivot_row = j
        for i in range(j, n):
            total = matrix.get(i, j)
            for k in range(j):
                total -= matrix.get(i, k) * matrix.get(k, j)
            matrix.set(i, j, total)
            merit = scale[i] * abs(total)
            if merit >= best:
                best = merit
                pivot_row = i

        if pivot_row != j:
            for k in range(n):
                tmp = matrix.get(pivot_row, k)
                matrix.set(pivot_row, k, matrix.get(j, k))
                matrix.set(j, k, tmp)
            scale[pivot_row], scale[j] = scale[j], scale[pivot_row]
            parity = -parity
        permutation[j] = pivot_row

        pivot = matrix.get(j, j)
        if abs(pivot) <= tiny:
            pivot = tiny
            matrix.set(j, j, pivot)
            clamped.append(j)

        if j != n - 1:
            inv = 1.0 / pivot
            for i in range(j + 1, n):
                matrix.set(i, j, matrix.get(i, j) * inv)

    if clamped and warn:
        warnings.warn(near_singular_warning(clamped, tiny), stacklevel=2)

    return Decomposition(
        permutation=tuple(permutation),
        parity=parity,
        clamped_pivots=tuple(clamped),
        threshold=tiny,
    )


def _as_permutation(permutation: Decomposition | Sequence[int]) -> Sequence[int]:
    if isinstance(permutation, Decomposition):
        return permutation.permutation
    return permutation


def back_substitute(
    matrix: MatrixLike,
    permutation: Decomposition | Sequence[int],
    rhs: VectorLike,
    out: VectorLike | None = None,
) -> VectorLike:
    """
    Solve A x = b using the factors left in ``matrix`` by decompose().

    The factorization is trusted, not re-validated: passing factors or a
    permutation record from a different matrix gives meaningless results.

    Args:
        matrix: Factored matrix (read only)
        permutation: Decomposition record or its permutation sequence
        rhs: Right-hand side b
        out: If given, receives the solution and ``rhs`` is left untouched;
            otherwise ``rhs`` is overwritten with the solution

    Returns:
        The vector holding x (``out`` if given, else ``rhs``)
    """
    perm = _as_permutation(permutation)
    n = len(perm)

    if out is None:
        b = rhs
    else:
        b = out
        for i in range(n):
            b.set(i, rhs.get(i))

    # Replay row swaps and forward-substitute against unit-lower L,
    # starting the sums at the first non-zero entry.
    first = -1
    for i in range(n):
        swap = perm[i]
        total = b.get(swap)
        b.set(swap, b.get(i))
        if first >= 0:
            for j in range(first, i):
                total -= matrix.get(i, j) * b.get(j)
        elif total != 0.0:
            first = i
        b.set(i, total)

    # Backward substitution against U.
    for i in range(n - 1, -1, -1):
        total = b.get(i)
        for j in range(i + 1, n):
            total -= matrix.get(i, j) * b.get(j)
        b.set(i, total / matrix.get(i, i))

    return b


def invert_from_decomposition(
    matrix: MatrixLike,
    permutation: Decomposition | Sequence[int],
    *,
    vector_factory: VectorFactory | None = None,
    workers: int | None = None,
) -> MatrixLike:
    """
    Replace an LU-factored matrix with the inverse of the original.

    Solves A x = e_j for every unit vector e_j. All columns are solved
    against the intact factors before the matrix is overwritten.

    Args:
        matrix: Factored matrix; overwritten with the inverse
        permutation: Decomposition record or its permutation sequence
        vector_factory: Builds zero vectors of a given length;
            defaults to ArrayVector.zeros
        workers: Number of threads for the column solves; None or 1 is serial

    Returns:
        ``matrix``, now holding the inverse
    """
    perm = _as_permutation(permutation)
    n = len(perm)
    make_vector = vector_factory if vector_factory is not None else ArrayVector.zeros

    def solve_column(j: int) -> VectorLike:
        col = make_vector(n)
        col.set(j, 1.0)
        return back_substitute(matrix, perm, col)

    if workers is not None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            columns = list(executor.map(solve_column, range(n)))
    else:
        columns = [solve_column(j) for j in range(n)]

    for j, col in enumerate(columns):
        for i in range(n):
            matrix.set(i, j, col.get(i))

    return matrix


def invert(
    matrix: MatrixLike,
    *,
    threshold: float | None = None,
    vector_factory: VectorFactory | None = None,
    workers: int | None = None,
) -> Decomposition:
    """
    Invert a square matrix in place.

    Runs decompose() followed by invert_from_decomposition().

    Returns:
        The Decomposition record (pivot history and near-singular flag).
        Its determinant() is no longer usable because the factors have
        been replaced by the inverse.

    Raises:
        SingularMatrixError: If a row is zero to working precision;
            the matrix is left untouched
    """
    decomposition = decompose(matrix, threshold=threshold)
    invert_from_decomposition(
        matrix,
        decomposition,
        vector_factory=vector_factory,
        workers=workers,
    )
    return decomposition
