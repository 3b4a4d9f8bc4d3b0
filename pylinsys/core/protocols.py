"""
Core protocols for PyLinSys.

These define the structural interfaces the linear system kernel consumes.
We use Protocol (structural typing) rather than ABC (nominal typing) so that
any storage (row-major, column-major, sparse, a wrapper around someone
else's matrix class) can be plugged in without inheriting from us.

Design Principles:
    - Minimal contracts: get/set by index plus the size, nothing else
    - Capability-driven: concrete containers use supports() for extras
    - The kernel never depends on a concrete representation
"""

from typing import Callable, Protocol, TypeVar, runtime_checkable

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class MatrixLike(Protocol):
    """
    Square, mutable, two-dimensional numeric container.

    Indices are zero-based: get(i, j) is the element in row i, column j.
    """

    def dimension(self) -> int:
        """Number of rows (equal to the number of columns)."""
        ...

    def get(self, row: int, col: int) -> float:
        """Return the element at (row, col)."""
        ...

    def set(self, row: int, col: int, value: float) -> None:
        """Overwrite the element at (row, col)."""
        ...


@runtime_checkable
class VectorLike(Protocol):
    """
    Mutable one-dimensional numeric container.
    """

    def length(self) -> int:
        """Number of elements."""
        ...

    def get(self, index: int) -> float:
        """Return the element at index."""
        ...

    def set(self, index: int, value: float) -> None:
        """Overwrite the element at index."""
        ...


# Builds a zero-initialized vector of the given length.
VectorFactory = Callable[[int], VectorLike]


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a validated design and produces a parameter payload
    wrapped in a Result. Backends are stateless; all configuration is passed
    at construction time.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_crout', 'cpu_lapack', 'gpu_lu'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            SingularMatrixError: If the matrix is singular to working precision
            ValidationError: If design is invalid for this backend
        """
        ...
