"""
Probability Object Box — Invariant Checks v1.1

Hard-fail validation. Every check raises InvariantViolationError on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pool import WeightedPool


class InvariantViolationError(Exception):
    """Raised when a pool invariant is violated."""

    def __init__(self, rule: str, detail: str) -> None:
        self.rule = rule
        self.detail = detail
        super().__init__(f"[INVARIANT:{rule}] {detail}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_invariants(pool: "WeightedPool") -> None:
    """
    Run all 4 invariant checks. Raises InvariantViolationError on the
    first failure.
    """
    entries = pool.get_pool()
    _check_positive_weights(entries)
    _check_total_matches(entries, pool.total_weight)
    _check_capacity(pool.total_weight, pool.capacity)
    _check_unique_items(entries)


# ---------------------------------------------------------------------------
# Individual checks (private)
# ---------------------------------------------------------------------------

def _check_positive_weights(entries) -> None:
    """INV-1: Every stored weight is a positive int."""
    for index, entry in enumerate(entries, start=1):
        if isinstance(entry.weight, bool) or not isinstance(entry.weight, int):
            raise InvariantViolationError(
                "weight_type",
                f"Entry {index} has non-int weight {entry.weight!r}"
            )
        if entry.weight <= 0:
            raise InvariantViolationError(
                "positive_weight",
                f"Entry {index} has weight {entry.weight}; "
                f"zero-weight entries must be removed"
            )


def _check_total_matches(entries, total: int) -> None:
    """INV-2: Running total equals the sum of stored weights."""
    actual = sum(e.weight for e in entries)
    if actual != total:
        raise InvariantViolationError(
            "total_weight",
            f"Running total {total} != sum of weights {actual}"
        )


def _check_capacity(total: int, capacity: int) -> None:
    """INV-3: 0 <= total <= capacity."""
    if total < 0 or total > capacity:
        raise InvariantViolationError(
            "capacity",
            f"Total weight {total} outside [0, {capacity}]"
        )


def _check_unique_items(entries) -> None:
    """INV-4: No two entries hold equal items."""
    for i, first in enumerate(entries):
        for second in entries[i + 1:]:
            if first.item == second.item:
                raise InvariantViolationError(
                    "duplicate_item",
                    f"Item {first.item!r} is stored more than once"
                )
