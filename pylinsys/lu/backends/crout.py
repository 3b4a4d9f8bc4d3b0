"""
Reference CPU backend: the Crout kernel over an ArrayMatrix.

Element-by-element Python, so it is meant for small-to-moderate systems
and as the reference the other backends are checked against.
"""

from typing import Any
import warnings

import numpy as np

from pylinsys.core.compute.timing import Timer
from pylinsys.core.containers import ArrayMatrix, ArrayVector
from pylinsys.core.result import Result
from pylinsys.lu._common import near_singular_warning
from pylinsys.lu._kernel import back_substitute, decompose, invert_from_decomposition
from pylinsys.lu.design import LinearSystemDesign
from pylinsys.lu.solution import LUParams


class CroutBackend:
    """
    CPU backend using the storage-agnostic Crout kernel.

    Implements the Backend protocol for LinearSystemDesign -> LUParams.
    """

    def __init__(self, threshold: float | None = None, workers: int | None = None):
        """
        Args:
            threshold: Singularity threshold (None for the default)
            workers: Threads for the inversion column solves
        """
        self._threshold = threshold
        self._workers = workers

    @property
    def name(self) -> str:
        return 'cpu_crout'

    def solve(self, design: LinearSystemDesign) -> Result[LUParams]:
        """
        Factor A, then solve for every right-hand side and/or invert.

        Raises:
            SingularMatrixError: If A has a row that is zero to working precision
        """
        timer = Timer()
        timer.start()

        matrix = ArrayMatrix.from_array(design.A)

        with timer.section('decomposition'):
            # Clamping is reported below, through Result.warnings and one warning.
            decomposition = decompose(matrix, threshold=self._threshold, warn=False)

        lu = matrix.to_numpy()

        solution = None
        if design.b is not None:
            with timer.section('back_substitution'):
                rhs = design.rhs_columns()
                x = np.empty_like(rhs)
                for k in range(rhs.shape[1]):
                    col = back_substitute(matrix, decomposition, ArrayVector.from_array(rhs[:, k]))
                    x[:, k] = col.to_numpy()
                solution = x[:, 0] if design.b.ndim == 1 else x

        inverse = None
        if design.compute_inverse:
            with timer.section('inversion'):
                invert_from_decomposition(matrix, decomposition, workers=self._workers)
                inverse = matrix.to_numpy()

        timer.stop()

        warning_msgs: tuple[str, ...] = ()
        if decomposition.is_near_singular:
            w = near_singular_warning(decomposition.clamped_pivots, decomposition.threshold)
            warnings.warn(w, stacklevel=3)
            warning_msgs = (str(w),)

        params = LUParams(
            lu=lu,
            permutation=decomposition.permutation,
            parity=decomposition.parity,
            clamped_pivots=decomposition.clamped_pivots,
            solution=solution,
            inverse=inverse,
        )

        info: dict[str, Any] = {
            'method': 'crout',
            'n': design.n,
            'threshold': decomposition.threshold,
            'workers': self._workers,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warning_msgs,
        )
