"""
Probability Object Box — Core Domain Types v1.1

Pure data. No selection logic, no mutation logic.
All weights: plain Python int, checked against an explicit ceiling.
No float. No implicit casting.

────────────────────────────────────────────────
DOMAIN GLOSSARY
────────────────────────────────────────────────

Weight (ticket count):
    Integer share of an item in the box. Selection probability is
    weight / total_weight.

Total weight:
    Running sum of all entry weights; size of the key range [0, total).

Cumulative-interval partitioning:
    Each entry owns the half-open range [lo, lo + weight) of the key range,
    in insertion order.

────────────────────────────────────────────────
"""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


# ── Sentinels ─────────────────────────────────────────────────

class _Sentinel:
    """Named singleton marker, distinct from None and from every item."""

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False


# draw(): "generate the key internally"
UNSPECIFIED = _Sentinel("UNSPECIFIED")

# get_count(): "no particular item, return the total"
NONE = _Sentinel("NONE")


# ── Update Policy ─────────────────────────────────────────────

class UpdatePolicy(str, enum.Enum):
    """How modify() interprets a (item, delta) pair."""

    RELATIVE = "relative"   # signed increment / decrement
    ABSOLUTE = "absolute"   # new unsigned weight, 0 deletes


# ── Checked Arithmetic ────────────────────────────────────────

def checked_add(a: int, b: int, ceiling: int) -> int:
    """Integer addition bounded to [0, ceiling]. Hard fail outside."""
    result = a + b
    if result < 0 or result > ceiling:
        raise OverflowError(
            f"Weight out of range: {a} + {b} = {result} (ceiling {ceiling})"
        )
    return result


def fits(total: int, delta: int, ceiling: int) -> bool:
    """True when total + delta does not exceed ceiling."""
    return total + delta <= ceiling


def require_int(value: object, name: str) -> int:
    """Reject bools and non-ints. Hard fail."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    return value


# ── Core Domain Types ─────────────────────────────────────────

@dataclass(frozen=True)
class Entry(Generic[T]):
    """One item in the box together with its ticket count."""

    item: T
    weight: int


@dataclass(frozen=True)
class ModifyResult:
    """
    Aggregate outcome of one modify() call.

    Individual pair failures never abort a batch; they are only counted
    here. Callers needing per-item confirmation re-query get_count().
    """

    applied: int = 0
    skipped: int = 0
    capacity_rejected: int = 0
    underflow_rejected: int = 0
    missing_rejected: int = 0
    invalid_rejected: int = 0
    storage_failures: int = 0

    @property
    def failed(self) -> int:
        return (
            self.capacity_rejected
            + self.underflow_rejected
            + self.missing_rejected
            + self.invalid_rejected
            + self.storage_failures
        )

    @property
    def total(self) -> int:
        return self.applied + self.skipped + self.failed

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict:
        """Serialise to a plain dict (for diagnostics / logging)."""
        return {**dataclasses.asdict(self), "failed": self.failed}
