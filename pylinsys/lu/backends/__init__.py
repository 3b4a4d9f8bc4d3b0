"""
LU backends.

    cpu_crout:  Crout reference kernel (pure Python over MatrixLike)
    cpu_lapack: SciPy LAPACK getrf/getrs
    gpu_lu:     PyTorch torch.linalg.lu_factor/lu_solve (import lazily)
"""

from pylinsys.lu.backends.crout import CroutBackend
from pylinsys.lu.backends.cpu import CPULapackBackend

__all__ = [
    "CroutBackend",
    "CPULapackBackend",
]
