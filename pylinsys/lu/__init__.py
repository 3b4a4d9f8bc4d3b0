"""
Dense linear systems by LU decomposition.

Two layers:

Kernel (storage-agnostic, in place, works on any MatrixLike/VectorLike):
    decompose(matrix) -> Decomposition
    back_substitute(matrix, decomposition, rhs, out=None) -> VectorLike
    invert_from_decomposition(matrix, decomposition) -> MatrixLike
    invert(matrix) -> Decomposition

Array API (validates array-likes, never modifies its inputs):
    solve(A, b, ...) -> LUSolution
    inverse(A, ...) -> LUSolution

Example:
    >>> from pylinsys.core.containers import ArrayMatrix, ArrayVector
    >>> from pylinsys.lu import decompose, back_substitute
    >>> a = ArrayMatrix.from_array([[0.0, 1.0], [1.0, 0.0]])
    >>> d = decompose(a)
    >>> d.permutation
    (1, 1)
    >>> back_substitute(a, d, ArrayVector.from_array([1.0, 2.0])).to_numpy()
    array([2., 1.])
"""

from pylinsys.lu._kernel import (
    Decomposition,
    decompose,
    back_substitute,
    invert_from_decomposition,
    invert,
)
from pylinsys.lu.design import LinearSystemDesign
from pylinsys.lu.solution import LUSolution, LUParams
from pylinsys.lu.solvers import solve, inverse

__all__ = [
    # Kernel
    "Decomposition",
    "decompose",
    "back_substitute",
    "invert_from_decomposition",
    "invert",
    # Array API
    "solve",
    "inverse",
    "LinearSystemDesign",
    "LUSolution",
    "LUParams",
]
