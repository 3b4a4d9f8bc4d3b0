"""
Shared compute infrastructure for PyLinSys.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    precision: Machine epsilon and the singularity threshold
    tolerances: Tolerance tiers for residual checks
"""

from pylinsys.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pylinsys.core.compute.precision import (
    DEFAULT_SINGULARITY_THRESHOLD,
    machine_epsilon,
)
from pylinsys.core.compute.timing import Timer, timed

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Precision
    "DEFAULT_SINGULARITY_THRESHOLD",
    "machine_epsilon",
    # Timing
    "Timer",
    "timed",
]
