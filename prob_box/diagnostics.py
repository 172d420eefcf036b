"""
Probability Object Box — Diagnostics v1.1

Diagnostic snapshot and dump lines for a pool. Item values are never
included, only positions and weights.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .constants import CAPACITY_WARNING_PERCENT

if TYPE_CHECKING:
    from .pool import WeightedPool


def compute_diagnostics(pool: "WeightedPool") -> dict:
    """Return a diagnostic dict summarising the current pool health."""
    total = pool.total_weight
    capacity = pool.capacity

    warnings: list[str] = []

    if total == 0:
        warnings.append("Empty pool — every draw will fail")
    if total * 100 > capacity * CAPACITY_WARNING_PERCENT:
        warnings.append(
            f"Total weight {total} above {CAPACITY_WARNING_PERCENT}% "
            f"of capacity {capacity} — large increments will be rejected"
        )

    return {
        "policy": pool.policy.value,
        "version": pool.version(),
        "total_weight": total,
        "capacity": capacity,
        "headroom": capacity - total,
        "entry_count": len(pool),
        "warnings": warnings,
    }


def format_dump(pool: "WeightedPool") -> List[str]:
    """Human-readable dump: totals first, then one line per entry (1-based)."""
    lines = [
        f"Current total probability object count {pool.total_weight}.",
        f"Probability object box capacity {pool.capacity}.",
    ]
    for index, entry in enumerate(pool.get_pool(), start=1):
        lines.append(
            f"Probability object index {index}, count {entry.weight}."
        )
    return lines
