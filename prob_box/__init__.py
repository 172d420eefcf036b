"""
Probability Object Box v1.1
Weighted-random selection container: distinct items, integer ticket counts,
draw by key with probability weight / total_weight.
"""

from .domain_types import (
    Entry, ModifyResult, UpdatePolicy, UNSPECIFIED, NONE, checked_add,
)
from .constants import (
    INT32_MAX,
    UINT32_MAX,
    RELATIVE_REVISION,
    ABSOLUTE_REVISION,
)
from .random_source import KeySource
from .changes import ChangeBatch, ChangeEntry
from .pool import WeightedPool
from .invariants import InvariantViolationError, validate_invariants
from .diagnostics import compute_diagnostics, format_dump
from .config import PoolSettings, load_settings, create_pool

__all__ = [
    "Entry",
    "ModifyResult",
    "UpdatePolicy",
    "UNSPECIFIED",
    "NONE",
    "checked_add",
    "INT32_MAX",
    "UINT32_MAX",
    "RELATIVE_REVISION",
    "ABSOLUTE_REVISION",
    "KeySource",
    "ChangeBatch",
    "ChangeEntry",
    "WeightedPool",
    "InvariantViolationError",
    "validate_invariants",
    "compute_diagnostics",
    "format_dump",
    "PoolSettings",
    "load_settings",
    "create_pool",
]
