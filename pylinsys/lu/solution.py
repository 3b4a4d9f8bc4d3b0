"""
LU solution types.

Contains the parameter payload produced by backends and the user-facing
solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinsys.core.compute.tolerances import (
    ILL_CONDITIONED_THRESHOLD,
    select_tolerance,
)
from pylinsys.core.result import Result

if TYPE_CHECKING:
    from pylinsys.lu.design import LinearSystemDesign


@dataclass(frozen=True)
class LUParams:
    """
    Parameter payload for an LU solve / inversion.

    This is the immutable data computed by backends.

    Attributes:
        lu: Combined factors (U on/above diagonal, L multipliers below)
        permutation: Row swap history, entry j = row swapped into j
        parity: +1 / -1 for an even / odd number of row interchanges
        clamped_pivots: Columns whose pivot was clamped
        solution: x with the shape of b, or None if no b was given
        inverse: A^{-1}, or None if not requested
    """
    lu: NDArray[np.floating[Any]]
    permutation: tuple[int, ...]
    parity: int
    clamped_pivots: tuple[int, ...]
    solution: NDArray[np.floating[Any]] | None
    inverse: NDArray[np.floating[Any]] | None


@dataclass
class LUSolution:
    """
    User-facing LU results.

    Wraps the backend Result and provides accessors for the factors, the
    solution, the inverse and derived diagnostics.
    """
    _result: Result[LUParams]
    _design: 'LinearSystemDesign'

    # Cached computations
    _condition_number: float | None = None

    @property
    def lu(self) -> NDArray[np.floating[Any]]:
        return self._result.params.lu

    @property
    def permutation(self) -> tuple[int, ...]:
        return self._result.params.permutation

    @property
    def parity(self) -> int:
        return self._result.params.parity

    @property
    def clamped_pivots(self) -> tuple[int, ...]:
        return self._result.params.clamped_pivots

    @property
    def is_near_singular(self) -> bool:
        """True if any pivot was clamped during decomposition."""
        return bool(self.clamped_pivots)

    @property
    def determinant(self) -> float:
        """det(A) = parity * prod(diag(U))."""
        return float(self.parity * np.prod(np.diag(self.lu)))

    @property
    def lower(self) -> NDArray[np.floating[Any]]:
        """Unit-lower-triangular factor L."""
        return np.tril(self.lu, k=-1) + np.eye(self._design.n)

    @property
    def upper(self) -> NDArray[np.floating[Any]]:
        """Upper-triangular factor U."""
        return np.triu(self.lu)

    @property
    def solution(self) -> NDArray[np.floating[Any]]:
        """
        Solution x of A x = b.

        Raises:
            AttributeError: If no right-hand side was given
        """
        x = self._result.params.solution
        if x is None:
            raise AttributeError("No right-hand side was given; nothing was solved")
        return x

    @property
    def inverse(self) -> NDArray[np.floating[Any]]:
        """
        A^{-1}.

        Raises:
            AttributeError: If the inverse was not requested
        """
        inv = self._result.params.inverse
        if inv is None:
            raise AttributeError("Inverse was not computed; use inverse() instead of solve()")
        return inv

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        """A x - b, with the shape of b."""
        return self._design.A @ self.solution - self._design.b

    @property
    def residual_norm(self) -> float:
        """Infinity norm of the residuals."""
        return float(np.max(np.abs(self.residuals)))

    @property
    def condition_number(self) -> float:
        """2-norm condition number of A (via SVD, cached)."""
        if self._condition_number is None:
            s = np.linalg.svd(self._design.A, compute_uv=False)
            self._condition_number = float(s[0] / s[-1]) if s[-1] > 0 else float(np.inf)
        return self._condition_number

    def is_accurate(self) -> bool:
        """
        True if the residual is within the tolerance tier of the backend.

        Checks A x - b for a solve and A A^{-1} - I for an inversion, both
        when both were computed. The tier is relaxed automatically for
        ill-conditioned A.
        """
        tier = select_tolerance(
            self.backend_name,
            is_ill_conditioned=self.condition_number > ILL_CONDITIONED_THRESHOLD,
        )
        A = self._design.A
        params = self._result.params

        if params.solution is not None:
            if self.residual_norm > tier.residual_bound(A, params.solution):
                return False

        if params.inverse is not None:
            identity_residual = A @ params.inverse - np.eye(self._design.n)
            if np.max(np.abs(identity_residual)) > tier.residual_bound(A, params.inverse):
                return False

        return True

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text report of the decomposition and what was computed."""
        lines = [
            "LU Decomposition (Crout, scaled partial pivoting)"
            if self._result.info.get('method') == 'crout'
            else f"LU Decomposition ({self._result.info.get('method', 'unknown')})",
            "",
            f"Dimension:           {self._design.n}",
            f"Row interchanges:    {sum(1 for j, p in enumerate(self.permutation) if p != j)}",
            f"Determinant:         {self.determinant:.6g}",
            f"Condition number:    {self.condition_number:.3e}",
        ]

        if self.is_near_singular:
            lines.append(f"Clamped pivots:      {list(self.clamped_pivots)}")

        if self._result.params.solution is not None:
            lines.append(f"Right-hand sides:    {self._design.n_rhs}")
            lines.append(f"Residual (inf-norm): {self.residual_norm:.3e}")

        if self._result.params.inverse is not None:
            lines.append("Inverse:             computed")

        lines.append("")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing is not None:
            lines.append(f"Time: {self.timing['total_seconds']:.4f}s")

        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LUSolution(n={self._design.n}, backend={self.backend_name!r}, "
            f"near_singular={self.is_near_singular})"
        )
