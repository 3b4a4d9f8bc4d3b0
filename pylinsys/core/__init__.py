"""
Core infrastructure for PyLinSys.

Shared abstractions used by the LU kernel and its backends.

Key components:
    protocols: MatrixLike, VectorLike, VectorFactory, Backend protocols
    containers: Row-major, column-major, sparse and vector storages
    result: Generic Result[P] envelope
    exceptions: Exception and warning hierarchy
    validation: Input validators
    compute: Device detection, timing, precision, tolerances
"""

from pylinsys.core.protocols import MatrixLike, VectorLike, VectorFactory, Backend
from pylinsys.core.containers import ArrayMatrix, ColumnMajorMatrix, SparseMatrix, ArrayVector
from pylinsys.core.result import Result
from pylinsys.core.exceptions import (
    PyLinSysError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    NearSingularPivotWarning,
)

__all__ = [
    # Protocols
    "MatrixLike",
    "VectorLike",
    "VectorFactory",
    "Backend",
    # Containers
    "ArrayMatrix",
    "ColumnMajorMatrix",
    "SparseMatrix",
    "ArrayVector",
    # Result
    "Result",
    # Exceptions
    "PyLinSysError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "NearSingularPivotWarning",
]
