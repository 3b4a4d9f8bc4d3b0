"""
Capability string constants for PyLinSys containers.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pylinsys.core.capabilities import CAPABILITY_MATERIALIZED

    if matrix.supports(CAPABILITY_MATERIALIZED):
        A = matrix.to_numpy()
"""

# Container can return its full content as a numpy array
CAPABILITY_MATERIALIZED = 'materialized'

# Elements of a row are contiguous in memory
CAPABILITY_ROW_MAJOR = 'row_major'

# Elements of a column are contiguous in memory
CAPABILITY_COLUMN_MAJOR = 'column_major'

# Only non-zero elements are stored
CAPABILITY_SPARSE_STORAGE = 'sparse_storage'

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = frozenset({
    CAPABILITY_MATERIALIZED,
    CAPABILITY_ROW_MAJOR,
    CAPABILITY_COLUMN_MAJOR,
    CAPABILITY_SPARSE_STORAGE,
})

__all__ = [
    'CAPABILITY_MATERIALIZED',
    'CAPABILITY_ROW_MAJOR',
    'CAPABILITY_COLUMN_MAJOR',
    'CAPABILITY_SPARSE_STORAGE',
    'ALL_CAPABILITIES',
]
