"""
Numerical precision constants and utilities.

Provides machine epsilon and the singularity threshold used by the LU
kernel and all LU backends.
"""

import numpy as np


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = float(np.finfo(np.float32).eps)  # ~1.19e-7

# A row whose largest absolute value is at or below this is singular to
# working precision; a pivot at or below it is clamped to it.
DEFAULT_SINGULARITY_THRESHOLD: float = EPSILON_64


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def resolve_threshold(threshold: float | None) -> float:
    """
    Return the singularity threshold to use.

    Args:
        threshold: Caller-supplied threshold, or None for the default

    Returns:
        DEFAULT_SINGULARITY_THRESHOLD if threshold is None, else threshold

    Raises:
        ValueError: If threshold is not a positive finite number
    """
    if threshold is None:
        return DEFAULT_SINGULARITY_THRESHOLD
    threshold = float(threshold)
    if not np.isfinite(threshold) or threshold <= 0.0:
        raise ValueError(f"threshold must be positive and finite, got {threshold}")
    return threshold
