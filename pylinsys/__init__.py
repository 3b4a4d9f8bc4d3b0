"""
PyLinSys: storage-agnostic dense linear systems for Python.

LU decomposition with scaled partial pivoting, forward/back substitution
and matrix inversion, usable on any matrix storage that offers indexed
get/set, with LAPACK and GPU backends for plain arrays.

Submodules:
    core: Protocols, containers, exceptions, shared compute utilities
    lu: The LU kernel and the solve()/inverse() API
"""

__version__ = "0.1.0"

from pylinsys import core
from pylinsys import lu

__all__ = [
    "__version__",
    "core",
    "lu",
]
