"""
Probability Object Box — Revision Constants

One revision number and one capacity ceiling per update policy.
Runtime capacity may be lowered per pool, never raised above these.
"""

from .domain_types import UpdatePolicy

# --- Weight ceilings ---
# Signed 32-bit max: relative deltas may be negative.
INT32_MAX: int = 2**31 - 1

# Unsigned 32-bit max: absolute weights are never negative.
UINT32_MAX: int = 2**32 - 1

# --- Revisions ---
RELATIVE_REVISION: int = 1
ABSOLUTE_REVISION: int = 2

POLICY_CAPACITY = {
    UpdatePolicy.RELATIVE: INT32_MAX,
    UpdatePolicy.ABSOLUTE: UINT32_MAX,
}

POLICY_REVISION = {
    UpdatePolicy.RELATIVE: RELATIVE_REVISION,
    UpdatePolicy.ABSOLUTE: ABSOLUTE_REVISION,
}

# --- Diagnostics ---
# Percent of capacity above which compute_diagnostics() warns.
CAPACITY_WARNING_PERCENT: int = 90
