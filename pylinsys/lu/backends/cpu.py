"""
LAPACK CPU backend for LU solves.

Uses scipy.linalg.lu_factor / lu_solve (LAPACK getrf / getrs). getrf pivots
on the unscaled column maximum, so the permutation can differ from the
Crout reference. The row screen is the same; the pivot clamp is only an
approximation of the kernel's, because getrf has already divided by the
unclamped pivot when the diagonal of U is clamped afterwards.
"""

from typing import Any
import warnings

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from pylinsys.core.compute.precision import resolve_threshold
from pylinsys.core.compute.timing import Timer
from pylinsys.core.result import Result
from pylinsys.lu._common import clamp_pivots, near_singular_warning, parity_of, screen_rows
from pylinsys.lu.design import LinearSystemDesign
from pylinsys.lu.solution import LUParams


class CPULapackBackend:
    """
    CPU backend using LAPACK LU with partial pivoting.

    Implements the Backend protocol for LinearSystemDesign -> LUParams.
    """

    def __init__(self, threshold: float | None = None):
        self._threshold = resolve_threshold(threshold)

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def solve(self, design: LinearSystemDesign) -> Result[LUParams]:
        """
        Factor A with getrf, then solve and/or invert with getrs.

        Raises:
            SingularMatrixError: If A has a row that is zero to working precision
        """
        timer = Timer()
        timer.start()

        A = design.A
        n = design.n
        screen_rows(A, self._threshold)

        with timer.section('decomposition'):
            with warnings.catch_warnings():
                # Exactly-zero pivots are clamped below instead.
                warnings.simplefilter('ignore', LinAlgWarning)
                lu, piv = lu_factor(A, check_finite=False)
            clamped = clamp_pivots(lu, self._threshold)

        permutation = tuple(int(p) for p in piv)

        solution = None
        if design.b is not None:
            with timer.section('back_substitution'):
                solution = lu_solve((lu, piv), design.b, check_finite=False)

        inverse = None
        if design.compute_inverse:
            with timer.section('inversion'):
                inverse = lu_solve((lu, piv), np.eye(n), check_finite=False)

        timer.stop()

        warning_msgs: tuple[str, ...] = ()
        if clamped:
            w = near_singular_warning(clamped, self._threshold)
            warnings.warn(w, stacklevel=3)
            warning_msgs = (str(w),)

        params = LUParams(
            lu=lu,
            permutation=permutation,
            parity=parity_of(permutation),
            clamped_pivots=clamped,
            solution=solution,
            inverse=inverse,
        )

        info: dict[str, Any] = {
            'method': 'lapack_getrf',
            'n': n,
            'threshold': self._threshold,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warning_msgs,
        )
