"""
Generic result container for PyLinSys computations.

Every backend returns its parameter payload inside a Result, so timing,
diagnostics and non-fatal warnings travel the same way regardless of
which backend produced them.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The parameter payload type

    Attributes:
        params: Backend payload (factors, solution, inverse, ...)
        info: Structured metadata (method, dimension, pivots clamped, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LUParams(...),
        ...     info={'method': 'crout', 'n': 3},
        ...     timing={'total_seconds': 0.01, 'decomposition': 0.008},
        ...     backend_name='cpu_crout'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
