"""
Concrete matrix and vector storages for PyLinSys.

Each container satisfies MatrixLike or VectorLike structurally and can be
handed to the kernel directly. They differ only in how elements are laid out:

    ArrayMatrix:        numpy float64, row-major
    ColumnMajorMatrix:  flat Python list, column-major
    SparseMatrix:       dict of non-zero entries keyed by (row, col)
    ArrayVector:        numpy float64, 1D

Construct via factory classmethods, not directly.

Usage:
    from pylinsys.core.containers import ArrayMatrix, ArrayVector

    a = ArrayMatrix.from_array([[4.0, 3.0], [6.0, 3.0]])
    b = ArrayVector.from_array([10.0, 12.0])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsys.core.capabilities import (
    CAPABILITY_MATERIALIZED,
    CAPABILITY_ROW_MAJOR,
    CAPABILITY_COLUMN_MAJOR,
    CAPABILITY_SPARSE_STORAGE,
)
from pylinsys.core.exceptions import DimensionError
from pylinsys.core.validation import check_array, check_1d, check_2d, check_square


def _square_from(array: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Convert an array-like to a validated square float64 array (copied)."""
    arr = check_array(array, name)
    check_2d(arr, name)
    check_square(arr, name)
    return np.array(arr, dtype=np.float64, order='C', copy=True)


def _check_dimension(n: int) -> None:
    if n <= 0:
        raise DimensionError(f"dimension must be > 0, got {n}")


@dataclass(eq=False)
class ArrayMatrix:
    """
    Dense row-major matrix backed by a numpy float64 array.

    The array is owned by the container; from_array() always copies.
    """
    _data: NDArray[np.floating[Any]]

    @classmethod
    def from_array(cls, array: ArrayLike) -> ArrayMatrix:
        """Build from any square array-like (copied)."""
        return cls(_data=_square_from(array, 'array'))

    @classmethod
    def zeros(cls, n: int) -> ArrayMatrix:
        """n x n matrix of zeros."""
        _check_dimension(n)
        return cls(_data=np.zeros((n, n), dtype=np.float64))

    @classmethod
    def identity(cls, n: int) -> ArrayMatrix:
        """n x n identity matrix."""
        _check_dimension(n)
        return cls(_data=np.eye(n, dtype=np.float64))

    def dimension(self) -> int:
        return self._data.shape[0]

    def get(self, row: int, col: int) -> float:
        return float(self._data[row, col])

    def set(self, row: int, col: int, value: float) -> None:
        self._data[row, col] = value

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Return a copy of the content as an (n, n) array."""
        return self._data.copy()

    def supports(self, capability: str) -> bool:
        return capability in (CAPABILITY_MATERIALIZED, CAPABILITY_ROW_MAJOR)

    def __repr__(self) -> str:
        return f"ArrayMatrix(n={self.dimension()})"


@dataclass
class ColumnMajorMatrix:
    """
    Dense matrix stored as a flat list in column-major order.

    Element (row, col) lives at position col * n + row.
    """
    _n: int
    _data: list[float]

    @classmethod
    def from_array(cls, array: ArrayLike) -> ColumnMajorMatrix:
        """Build from any square array-like (copied)."""
        arr = _square_from(array, 'array')
        n = arr.shape[0]
        return cls(_n=n, _data=[float(v) for v in arr.ravel(order='F')])

    @classmethod
    def zeros(cls, n: int) -> ColumnMajorMatrix:
        """n x n matrix of zeros."""
        _check_dimension(n)
        return cls(_n=n, _data=[0.0] * (n * n))

    def _offset(self, row: int, col: int) -> int:
        if not (0 <= row < self._n and 0 <= col < self._n):
            raise IndexError(
                f"index ({row}, {col}) out of range for dimension {self._n}"
            )
        return col * self._n + row

    def dimension(self) -> int:
        return self._n

    def get(self, row: int, col: int) -> float:
        return self._data[self._offset(row, col)]

    def set(self, row: int, col: int, value: float) -> None:
        self._data[self._offset(row, col)] = float(value)

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Return a copy of the content as an (n, n) row-indexed array."""
        return np.array(self._data, dtype=np.float64).reshape((self._n, self._n), order='F')

    def supports(self, capability: str) -> bool:
        return capability in (CAPABILITY_MATERIALIZED, CAPABILITY_COLUMN_MAJOR)

    def __repr__(self) -> str:
        return f"ColumnMajorMatrix(n={self._n})"


@dataclass
class SparseMatrix:
    """
    Matrix storing only its non-zero elements.

    Writing an exact zero removes the entry. LU fill-in is stored as it
    appears, so a factored matrix is usually much denser than the input.
    """
    _n: int
    _entries: dict[tuple[int, int], float] = field(default_factory=dict)

    @classmethod
    def from_array(cls, array: ArrayLike) -> SparseMatrix:
        """Build from any square array-like, keeping only non-zeros."""
        arr = _square_from(array, 'array')
        rows, cols = np.nonzero(arr)
        entries = {
            (int(i), int(j)): float(arr[i, j]) for i, j in zip(rows, cols)
        }
        return cls(_n=arr.shape[0], _entries=entries)

    @classmethod
    def zeros(cls, n: int) -> SparseMatrix:
        """n x n matrix with no stored entries."""
        _check_dimension(n)
        return cls(_n=n)

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self._n and 0 <= col < self._n):
            raise IndexError(
                f"index ({row}, {col}) out of range for dimension {self._n}"
            )

    @property
    def nnz(self) -> int:
        """Number of stored (non-zero) entries."""
        return len(self._entries)

    def dimension(self) -> int:
        return self._n

    def get(self, row: int, col: int) -> float:
        self._check_index(row, col)
        return self._entries.get((row, col), 0.0)

    def set(self, row: int, col: int, value: float) -> None:
        self._check_index(row, col)
        if value == 0.0:
            self._entries.pop((row, col), None)
        else:
            self._entries[(row, col)] = float(value)

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Return a dense copy of the content as an (n, n) array."""
        dense = np.zeros((self._n, self._n), dtype=np.float64)
        for (i, j), value in self._entries.items():
            dense[i, j] = value
        return dense

    def supports(self, capability: str) -> bool:
        return capability in (CAPABILITY_MATERIALIZED, CAPABILITY_SPARSE_STORAGE)

    def __repr__(self) -> str:
        return f"SparseMatrix(n={self._n}, nnz={self.nnz})"


@dataclass(eq=False)
class ArrayVector:
    """
    Vector backed by a numpy float64 array.

    ArrayVector.zeros is the default VectorFactory of the kernel.
    """
    _data: NDArray[np.floating[Any]]

    @classmethod
    def from_array(cls, array: ArrayLike) -> ArrayVector:
        """Build from any 1D array-like (copied)."""
        arr = check_array(array, 'array')
        check_1d(arr, 'array')
        return cls(_data=np.array(arr, dtype=np.float64, copy=True))

    @classmethod
    def zeros(cls, n: int) -> ArrayVector:
        """Zero vector of length n."""
        _check_dimension(n)
        return cls(_data=np.zeros(n, dtype=np.float64))

    def length(self) -> int:
        return self._data.shape[0]

    def get(self, index: int) -> float:
        return float(self._data[index])

    def set(self, index: int, value: float) -> None:
        self._data[index] = value

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Return a copy of the content."""
        return self._data.copy()

    def supports(self, capability: str) -> bool:
        return capability == CAPABILITY_MATERIALIZED

    def __repr__(self) -> str:
        return f"ArrayVector(length={self.length()})"
