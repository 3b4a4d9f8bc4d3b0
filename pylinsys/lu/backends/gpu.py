"""
GPU backend for LU solves using PyTorch.

Default is FP32 for throughput on consumer GPUs; pass use_fp64=True for
double precision (not available on Apple MPS). Factors and results are
returned to the CPU as float64 NumPy arrays.
"""

from typing import Any
import warnings

import numpy as np

from pylinsys.core.compute.device import select_device
from pylinsys.core.compute.precision import machine_epsilon, resolve_threshold
from pylinsys.core.compute.timing import Timer
from pylinsys.core.result import Result
from pylinsys.lu._common import near_singular_warning, parity_of, screen_rows
from pylinsys.lu.design import LinearSystemDesign
from pylinsys.lu.solution import LUParams


class GPULUBackend:
    """
    GPU backend using torch.linalg.lu_factor / lu_solve.

    Implements the Backend protocol for LinearSystemDesign -> LUParams.
    """

    def __init__(self, threshold: float | None = None, use_fp64: bool = False):
        """
        Args:
            threshold: Singularity threshold for the row screen
            use_fp64: Factor in float64 instead of float32

        Raises:
            RuntimeError: If no GPU is available, or fp64 requested on MPS
        """
        import torch

        self._device = select_device('gpu')
        if use_fp64 and not self._device.supports_fp64:
            raise RuntimeError(f"{self._device} does not support float64")
        self._use_fp64 = use_fp64
        self._dtype = torch.float64 if use_fp64 else torch.float32
        self._threshold = resolve_threshold(threshold)
        # Pivots are clamped at the working precision of the device.
        self._pivot_floor = max(
            self._threshold,
            machine_epsilon(np.float64 if use_fp64 else np.float32),
        )

    @property
    def name(self) -> str:
        return 'gpu_lu_fp64' if self._use_fp64 else 'gpu_lu'

    def solve(self, design: LinearSystemDesign) -> Result[LUParams]:
        """
        Factor A on the device, then solve and/or invert there.

        Raises:
            SingularMatrixError: If A has a row that is zero to working precision
        """
        import torch

        timer = Timer(sync=self._device.synchronizer())
        timer.start()

        screen_rows(design.A, self._threshold)
        n = design.n

        with timer.section('transfer'):
            A_t = torch.from_numpy(design.A).to(device=self._device.torch_device, dtype=self._dtype)

        with timer.section('decomposition'):
            LU, pivots = torch.linalg.lu_factor(A_t)
            diag = torch.diagonal(LU)
            small = diag.abs() <= self._pivot_floor
            clamped = tuple(int(j) for j in torch.nonzero(small).flatten().cpu())
            if clamped:
                diag[small] = self._pivot_floor

        # torch pivots are 1-based
        permutation = tuple(int(p) - 1 for p in pivots.cpu())

        solution = None
        if design.b is not None:
            with timer.section('back_substitution'):
                B = torch.from_numpy(design.rhs_columns()).to(
                    device=self._device.torch_device, dtype=self._dtype
                )
                X = torch.linalg.lu_solve(LU, pivots, B).cpu().numpy().astype(np.float64)
                solution = X[:, 0] if design.b.ndim == 1 else X

        inverse = None
        if design.compute_inverse:
            with timer.section('inversion'):
                eye = torch.eye(n, device=self._device.torch_device, dtype=self._dtype)
                inverse = torch.linalg.lu_solve(LU, pivots, eye).cpu().numpy().astype(np.float64)

        lu = LU.cpu().numpy().astype(np.float64)
        timer.stop()

        warning_msgs: tuple[str, ...] = ()
        if clamped:
            w = near_singular_warning(clamped, self._pivot_floor)
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
            'method': 'torch_lu',
            'n': n,
            'threshold': self._threshold,
            'device': str(self._device),
            'dtype': str(self._dtype),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warning_msgs,
        )
