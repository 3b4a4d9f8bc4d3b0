"""
Linear system design.

Holds the validated inputs of a solve or an inversion: the square matrix A,
an optional right-hand side b, and whether the inverse is wanted. Built at
the public API boundary; backends trust it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsys.core.capabilities import CAPABILITY_MATERIALIZED
from pylinsys.core.exceptions import DimensionError
from pylinsys.core.protocols import MatrixLike
from pylinsys.core.validation import (
    check_array,
    check_2d,
    check_square,
    check_finite,
    check_consistent_length,
)


@dataclass(frozen=True)
class LinearSystemDesign:
    """
    Validated square system specification. Immutable after construction.

    Construction:
        LinearSystemDesign.build(A, b)                   # solve A x = b
        LinearSystemDesign.build(A, compute_inverse=True)
        LinearSystemDesign.from_matrix(matrix, b)        # any MatrixLike
    """
    _A: NDArray[np.floating[Any]]
    _b: NDArray[np.floating[Any]] | None
    _n: int
    _compute_inverse: bool

    @classmethod
    def build(
        cls,
        A: ArrayLike,
        b: ArrayLike | None = None,
        *,
        compute_inverse: bool = False,
    ) -> LinearSystemDesign:
        """
        Validate array-likes and build the design.

        Args:
            A: Square matrix (n x n)
            b: Right-hand side, (n,) or (n, k) for k systems; None for none
            compute_inverse: Whether backends should also form A^{-1}

        Raises:
            ValidationError: If inputs are non-numeric or non-finite
            DimensionError: If A is not square or b does not match A
        """
        A_arr = check_array(A, 'A')
        check_2d(A_arr, 'A')
        check_square(A_arr, 'A')
        check_finite(A_arr, 'A')
        A_arr = np.array(A_arr, dtype=np.float64, copy=True)

        b_arr = None
        if b is not None:
            b_arr = check_array(b, 'b')
            if b_arr.ndim not in (1, 2):
                raise DimensionError(
                    f"b: expected 1D or 2D array, got {b_arr.ndim}D with shape {b_arr.shape}"
                )
            check_finite(b_arr, 'b')
            check_consistent_length(A_arr, b_arr, names=('A', 'b'))
            b_arr = np.array(b_arr, dtype=np.float64, copy=True)

        if b_arr is None and not compute_inverse:
            raise ValueError("Nothing to compute: pass b, or compute_inverse=True")

        return cls(
            _A=A_arr,
            _b=b_arr,
            _n=A_arr.shape[0],
            _compute_inverse=compute_inverse,
        )

    @classmethod
    def from_matrix(
        cls,
        matrix: MatrixLike,
        b: ArrayLike | None = None,
        *,
        compute_inverse: bool = False,
    ) -> LinearSystemDesign:
        """
        Build from any MatrixLike container.

        Containers that can materialize themselves are converted in one
        call; others are read element by element.
        """
        if hasattr(matrix, 'supports') and matrix.supports(CAPABILITY_MATERIALIZED):
            A = matrix.to_numpy()
        else:
            n = matrix.dimension()
            A = np.array(
                [[matrix.get(i, j) for j in range(n)] for i in range(n)],
                dtype=np.float64,
            )
        return cls.build(A, b, compute_inverse=compute_inverse)

    @property
    def A(self) -> NDArray[np.floating[Any]]:
        """System matrix (n x n)."""
        return self._A

    @property
    def b(self) -> NDArray[np.floating[Any]] | None:
        """Right-hand side, (n,) or (n, k), or None."""
        return self._b

    @property
    def n(self) -> int:
        """Dimension of the system."""
        return self._n

    @property
    def n_rhs(self) -> int:
        """Number of right-hand sides."""
        if self._b is None:
            return 0
        return 1 if self._b.ndim == 1 else self._b.shape[1]

    @property
    def compute_inverse(self) -> bool:
        return self._compute_inverse

    def rhs_columns(self) -> NDArray[np.floating[Any]]:
        """Right-hand sides as an (n, k) array (k = 0 if there is no b)."""
        if self._b is None:
            return np.zeros((self._n, 0), dtype=np.float64)
        if self._b.ndim == 1:
            return self._b[:, np.newaxis]
        return self._b
