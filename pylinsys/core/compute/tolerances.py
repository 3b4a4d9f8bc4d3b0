"""
Tolerance tiers for checking LU results.

A solve is accepted when the residual of A x = b is small relative to the
sizes involved:

    ||A x - b||_inf <= atol + rtol * n * ||A||_inf * ||x||_inf

Tiers differ by backend arithmetic:
- Crout / LAPACK in float64: near machine precision
- GPU float32: relaxed for single-precision arithmetic
- ill-conditioned variants: for cond(A) > ILL_CONDITIONED_THRESHOLD

Used by LUSolution.is_accurate() and by the test suite.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


# Above this condition number a system counts as ill-conditioned.
ILL_CONDITIONED_THRESHOLD = 1e4


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for residual checks."""
    rtol: float
    atol: float
    name: str
    description: str

    def residual_bound(self, A: NDArray, x: NDArray) -> float:
        """Largest acceptable ||A x - b||_inf for this tier."""
        n = A.shape[0]
        a_norm = float(np.max(np.sum(np.abs(A), axis=1)))
        x_norm = float(np.max(np.abs(x))) if x.size else 0.0
        return self.atol + self.rtol * n * a_norm * x_norm


FP64 = ToleranceTier(
    rtol=1e-12,
    atol=1e-12,
    name='fp64',
    description='double precision (Crout reference, LAPACK, GPU fp64)',
)

FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-8,
    atol=1e-8,
    name='fp64_ill_conditioned',
    description='double precision, ill-conditioned',
)

FP32 = ToleranceTier(
    rtol=1e-5,
    atol=1e-5,
    name='fp32',
    description='GPU single precision',
)

FP32_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-3,
    atol=1e-3,
    name='fp32_ill_conditioned',
    description='GPU single precision, ill-conditioned',
)


def select_tolerance(
    backend_name: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """
    Select the tolerance tier for a backend.

    GPU backends run in float32 unless their name carries 'fp64'.
    """
    single = 'gpu' in backend_name and 'fp64' not in backend_name
    if single:
        return FP32_ILL_CONDITIONED if is_ill_conditioned else FP32
    return FP64_ILL_CONDITIONED if is_ill_conditioned else FP64
