"""
Exception hierarchy for PyLinSys.

All exceptions inherit from PyLinSysError to allow catching any
library-specific error. Non-fatal numerical conditions are reported
as warnings (see NearSingularPivotWarning), never as exceptions.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinSysError(Exception):
    """Base exception for all PyLinSys errors."""
    pass


class ValidationError(PyLinSysError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array or container dimensions are incorrect or inconsistent.

    Raised when a matrix is not square, when a vector length does not
    match the matrix dimension, or when a stated dimension disagrees
    with the container.
    """
    pass


class NumericalError(PyLinSysError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular to working precision.

    Raised by LU decomposition when a row's largest absolute element is
    at or below the singularity threshold. Raised before the matrix is
    modified, so the caller's data is left untouched.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        row: Index of the first offending row, if known
        max_abs: Largest absolute value found in that row
        threshold: Singularity threshold that was applied
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        row: int | None = None,
        max_abs: float | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.row = row
        self.max_abs = max_abs
        self.threshold = threshold


class NearSingularPivotWarning(UserWarning):
    """
    One or more pivots were clamped to the singularity threshold.

    The factorization is still usable, but results computed from it may
    have lost precision. Callers relying on high accuracy should treat
    such results with suspicion.

    Attributes:
        columns: Column indices whose pivot was clamped
        threshold: Value the pivots were clamped to
    """

    def __init__(
        self,
        message: str,
        columns: tuple[int, ...] = (),
        threshold: float | None = None
    ):
        super().__init__(message)
        self.columns = columns
        self.threshold = threshold
