"""
Solver dispatch for LU.

This module provides the solve() and inverse() functions (public API) and
backend selection.
"""

from typing import Literal
from numpy.typing import ArrayLike

from pylinsys.core.protocols import MatrixLike
from pylinsys.lu.design import LinearSystemDesign
from pylinsys.lu.solution import LUSolution
from pylinsys.lu.backends.crout import CroutBackend
from pylinsys.lu.backends.cpu import CPULapackBackend


BackendChoice = Literal[
    'auto', 'cpu', 'cpu_crout', 'lapack', 'cpu_lapack', 'gpu', 'gpu_lu', 'gpu_lu_fp64',
]

# 'auto' hands systems of at least this dimension to LAPACK.
AUTO_LAPACK_MIN_DIM = 64


def solve(
    A: ArrayLike | MatrixLike,
    b: ArrayLike,
    *,
    backend: BackendChoice = 'auto',
    threshold: float | None = None,
) -> LUSolution:
    """
    Solve the linear system A x = b by LU decomposition.

    Args:
        A: Square matrix (n x n). Any array-like or MatrixLike container;
            it is copied, never modified.
        b: Right-hand side, (n,) or (n, k) for k systems sharing A.
        backend: Computational backend to use:
            - 'auto': Crout for n < AUTO_LAPACK_MIN_DIM, LAPACK above
            - 'cpu' / 'cpu_crout': Crout reference kernel
            - 'lapack' / 'cpu_lapack': SciPy LAPACK getrf/getrs
            - 'gpu' / 'gpu_lu': PyTorch on CUDA/MPS, float32
            - 'gpu_lu_fp64': PyTorch on CUDA, float64
        threshold: Singularity threshold (default: float64 machine epsilon)

    Returns:
        LUSolution with the solution, factors and diagnostics

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If A is not square or b does not match A
        SingularMatrixError: If A has a row that is zero to working precision

    Example:
        >>> from pylinsys.lu import solve
        >>> result = solve([[4.0, 3.0], [6.0, 3.0]], [10.0, 12.0])
        >>> result.solution
        array([1., 2.])
    """
    design = _build_design(A, b, compute_inverse=False)
    backend_impl = _get_backend(backend, design, threshold=threshold, workers=None)
    result = backend_impl.solve(design)
    return LUSolution(_result=result, _design=design)


def inverse(
    A: ArrayLike | MatrixLike,
    *,
    backend: BackendChoice = 'auto',
    threshold: float | None = None,
    workers: int | None = None,
) -> LUSolution:
    """
    Invert a square matrix by LU decomposition.

    Args:
        A: Square matrix (n x n), copied, never modified
        backend: See solve()
        threshold: Singularity threshold (default: float64 machine epsilon)
        workers: Threads for the column solves (Crout backend only)

    Returns:
        LUSolution whose .inverse holds A^{-1}

    Raises:
        SingularMatrixError: If A has a row that is zero to working precision
    """
    design = _build_design(A, None, compute_inverse=True)
    backend_impl = _get_backend(backend, design, threshold=threshold, workers=workers)
    result = backend_impl.solve(design)
    return LUSolution(_result=result, _design=design)


def _build_design(
    A: ArrayLike | MatrixLike,
    b: ArrayLike | None,
    *,
    compute_inverse: bool,
) -> LinearSystemDesign:
    if isinstance(A, MatrixLike):
        return LinearSystemDesign.from_matrix(A, b, compute_inverse=compute_inverse)
    return LinearSystemDesign.build(A, b, compute_inverse=compute_inverse)


def _get_backend(
    choice: BackendChoice,
    design: LinearSystemDesign,
    *,
    threshold: float | None,
    workers: int | None,
):
    """
    Select and instantiate the appropriate backend.

    GPU backends are used only when asked for by name.

    Raises:
        ValueError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if choice == 'auto':
        if design.n >= AUTO_LAPACK_MIN_DIM:
            return CPULapackBackend(threshold=threshold)
        return CroutBackend(threshold=threshold, workers=workers)

    elif choice in ('cpu', 'cpu_crout'):
        return CroutBackend(threshold=threshold, workers=workers)

    elif choice in ('lapack', 'cpu_lapack'):
        return CPULapackBackend(threshold=threshold)

    elif choice in ('gpu', 'gpu_lu'):
        from pylinsys.lu.backends.gpu import GPULUBackend
        return GPULUBackend(threshold=threshold)

    elif choice == 'gpu_lu_fp64':
        from pylinsys.lu.backends.gpu import GPULUBackend
        return GPULUBackend(threshold=threshold, use_fp64=True)

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
