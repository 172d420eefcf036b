"""
Probability Object Box — Weighted Pool v1.1

Stateful container of (item, weight) entries. Draws one item with
probability weight / total_weight and applies batches of weight changes.

Update semantics are chosen once per pool via UpdatePolicy:
  - RELATIVE: delta is added to the current weight
  - ABSOLUTE: delta replaces the current weight
version() reports which one is active.
"""

from __future__ import annotations

import copy
import sys
from typing import Any, Generic, Iterator, List, Optional, Sequence, TextIO, Tuple

from .changes import iter_pairs, parse_payload, zip_arrays
from .constants import POLICY_CAPACITY, POLICY_REVISION
from .diagnostics import compute_diagnostics, format_dump
from .domain_types import (
    NONE,
    UNSPECIFIED,
    Entry,
    ModifyResult,
    T,
    UpdatePolicy,
    checked_add,
    fits,
    require_int,
)
from .invariants import validate_invariants
from .random_source import KeySource

# Outcome tags for a single pair.
_APPLIED = "applied"
_SKIPPED = "skipped"
_CAPACITY = "capacity_rejected"
_UNDERFLOW = "underflow_rejected"
_MISSING = "missing_rejected"
_INVALID = "invalid_rejected"
_STORAGE = "storage_failures"


class WeightedPool(Generic[T]):
    """
    Weighted multiset with draw-by-key selection.

    Constraints:
      - At most one entry per item (compared with ==, not hashed)
      - Every stored weight is > 0
      - total_weight == sum of stored weights, never above capacity
    """

    def __init__(
        self,
        policy: UpdatePolicy = UpdatePolicy.RELATIVE,
        capacity: Optional[int] = None,
        key_source: Optional[KeySource] = None,
        strict: bool = False,
    ) -> None:
        self._policy = UpdatePolicy(policy)
        ceiling = POLICY_CAPACITY[self._policy]
        if capacity is None:
            capacity = ceiling
        capacity = require_int(capacity, "capacity")
        if capacity <= 0 or capacity > ceiling:
            raise ValueError(
                f"capacity must be in [1, {ceiling}] for "
                f"{self._policy.value} policy, got {capacity}"
            )
        self._capacity = capacity
        self._keys = key_source or KeySource()
        self._strict = strict
        self._entries: List[Entry[T]] = []
        self._total: int = 0

    # -- State access -------------------------------------------------------

    @property
    def policy(self) -> UpdatePolicy:
        return self._policy

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def total_weight(self) -> int:
        return self._total

    @property
    def key_source(self) -> KeySource:
        return self._keys

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry[T]]:
        return iter(tuple(self._entries))

    def __contains__(self, item: object) -> bool:
        return self._find(item) is not None

    def __repr__(self) -> str:
        return (
            f"WeightedPool(policy={self._policy.value}, "
            f"entries={len(self._entries)}, total={self._total})"
        )

    # -- Public API ---------------------------------------------------------

    def draw(self, random_key: Any = UNSPECIFIED) -> Tuple[bool, Optional[T]]:
        """
        Draw one item without removing it.

        random_key: non-negative int, or UNSPECIFIED to let the pool's
        KeySource pick one. Returns (True, item) on success and
        (False, None) when the pool is empty or the key is negative.
        A key that is not an int raises TypeError, empty pool or not.
        """
        if random_key is not UNSPECIFIED:
            random_key = require_int(random_key, "random_key")
            if random_key < 0:
                return False, None
        if self._total <= 0:
            return False, None
        if random_key is UNSPECIFIED:
            key = self._keys.rand_key(self._total)
        else:
            key = random_key % self._total

        entry = self._find_by_key(key)
        if entry is None:
            return False, None
        return True, copy.deepcopy(entry.item)

    def modify(self, changes: Any) -> ModifyResult:
        """
        Apply a batch given as a mapping item -> delta or an iterable of
        (item, delta) pairs. Pairs are applied in iteration order; a
        failing pair never stops the batch.
        """
        return self._apply_batch(list(iter_pairs(changes)))

    def modify_arrays(
        self,
        items: Optional[Sequence[T]],
        deltas: Optional[Sequence[int]],
        length: Optional[int] = None,
    ) -> ModifyResult:
        """Apply a batch given as two parallel sequences."""
        return self._apply_batch(zip_arrays(items, deltas, length))

    def modify_payload(self, payload: Any) -> ModifyResult:
        """Validate an external {"changes": [...]} payload, then apply it."""
        return self._apply_batch(parse_payload(payload))

    def clear(self) -> None:
        """Empty the box."""
        self._entries = []
        self._total = 0

    def get_count(self, item: Any = NONE) -> int:
        """Total weight when called bare, else the weight of one item (0 if absent)."""
        if item is NONE:
            return self._total
        index = self._find(item)
        return 0 if index is None else self._entries[index].weight

    def get_pool(self) -> Tuple[Entry[T], ...]:
        """Read-only snapshot of the entries, in insertion order."""
        return tuple(self._entries)

    def dump(self, file: Optional[TextIO] = None) -> None:
        """Print total, capacity and each entry's index and weight."""
        out = file if file is not None else sys.stdout
        for line in format_dump(self):
            print(line, file=out)

    def version(self) -> int:
        """Revision number of the active update policy."""
        return POLICY_REVISION[self._policy]

    def get_diagnostics(self) -> dict:
        """Return diagnostic snapshot of the current pool."""
        return compute_diagnostics(self)

    # -- Batch application --------------------------------------------------

    def _apply_batch(self, pairs) -> ModifyResult:
        counts = {
            _APPLIED: 0, _SKIPPED: 0, _CAPACITY: 0, _UNDERFLOW: 0,
            _MISSING: 0, _INVALID: 0, _STORAGE: 0,
        }
        for item, delta in pairs:
            if self._policy is UpdatePolicy.RELATIVE:
                outcome = self._apply_relative(item, delta)
            else:
                outcome = self._apply_absolute(item, delta)
            counts[outcome] += 1

        if self._strict:
            validate_invariants(self)
        return ModifyResult(**counts)

    def _apply_relative(self, item: T, delta: int) -> str:
        if delta == 0:
            return _SKIPPED
        if not fits(self._total, delta, self._capacity):
            return _CAPACITY

        index = self._find(item)
        if index is None:
            if delta < 0:
                return _MISSING
            return _APPLIED if self._insert(item, delta) else _STORAGE

        new_weight = self._entries[index].weight + delta
        if new_weight < 0:
            return _UNDERFLOW
        self._set_weight(index, new_weight)
        return _APPLIED

    def _apply_absolute(self, item: T, weight: int) -> str:
        if weight < 0:
            return _INVALID

        index = self._find(item)
        if index is None:
            if weight == 0:
                return _SKIPPED
            if not fits(self._total, weight, self._capacity):
                return _CAPACITY
            return _APPLIED if self._insert(item, weight) else _STORAGE

        current = self._entries[index].weight
        if weight == current:
            return _SKIPPED
        if not fits(self._total, weight - current, self._capacity):
            return _CAPACITY
        self._set_weight(index, weight)
        return _APPLIED

    # -- Storage primitives ---------------------------------------------------

    def _insert(self, item: T, weight: int) -> bool:
        """
        Append a new entry. Either the entry is stored and the total
        updated, or nothing changes and False is returned.
        """
        new_total = checked_add(self._total, weight, self._capacity)
        try:
            stored = copy.deepcopy(item)
            self._entries.append(Entry(item=stored, weight=weight))
        except (MemoryError, TypeError, copy.Error) as e:
            print(
                f"WARN: insert of weight {weight} abandoned, "
                f"storage failure: {e!r}",
                file=sys.stderr,
            )
            return False
        self._total = new_total
        return True

    def _set_weight(self, index: int, weight: int) -> None:
        """Replace a stored weight; 0 removes the entry."""
        old = self._entries[index]
        self._total = checked_add(self._total, weight - old.weight, self._capacity)
        if weight == 0:
            del self._entries[index]
        else:
            self._entries[index] = Entry(item=old.item, weight=weight)

    # -- Lookup ---------------------------------------------------------------

    def _find(self, item: object) -> Optional[int]:
        for index, entry in enumerate(self._entries):
            if item == entry.item:
                return index
        return None

    def _find_by_key(self, key: int) -> Optional[Entry[T]]:
        """Map key in [0, total) onto the entry whose [lo, hi) contains it."""
        lo = 0
        for entry in self._entries:
            hi = lo + entry.weight
            if lo <= key < hi:
                return entry
            lo = hi
        return None
