"""
Probability Object Box — Change Batches

A change batch is an ordered sequence of (item, delta) pairs. It reaches
the box in one of three shapes:

  - a mapping item -> delta (iterated in the mapping's own order)
  - an iterable of (item, delta) pairs
  - two parallel sequences plus a length

External payloads (dicts decoded from JSON, request bodies, fixtures) are
validated through the ChangeBatch model before they touch a pool.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

from pydantic import BaseModel, StrictInt

from .domain_types import require_int

Pair = Tuple[Any, int]


# ---------------------------------------------------------------------------
# Payload models
# ---------------------------------------------------------------------------

class ChangeEntry(BaseModel):
    item: Any
    delta: StrictInt


class ChangeBatch(BaseModel):
    """Validated external change batch: {"changes": [{"item", "delta"}]}."""

    changes: List[ChangeEntry] = []

    def pairs(self) -> List[Pair]:
        return [(c.item, c.delta) for c in self.changes]


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def iter_pairs(changes: Any) -> Iterator[Pair]:
    """Yield (item, delta) pairs from a mapping or an iterable of pairs."""
    if changes is None:
        return
    if isinstance(changes, Mapping):
        source: Iterable = changes.items()
    else:
        source = changes
    for pair in source:
        try:
            item, delta = pair
        except (TypeError, ValueError):
            raise ValueError(
                f"Change batch element {pair!r} is not an (item, delta) pair"
            ) from None
        yield item, require_int(delta, "delta")


def zip_arrays(
    items: Optional[Sequence[Any]],
    deltas: Optional[Sequence[int]],
    length: Optional[int] = None,
) -> List[Pair]:
    """
    Pair up two parallel sequences.

    Missing sequences or a non-positive length give an empty batch.
    A length longer than either sequence is a hard fail.
    """
    if items is None or deltas is None:
        return []
    if length is None:
        length = len(items)
    length = require_int(length, "length")
    if length <= 0:
        return []
    if length > len(items) or length > len(deltas):
        raise ValueError(
            f"length={length} exceeds items ({len(items)}) "
            f"or deltas ({len(deltas)})"
        )
    return [
        (items[i], require_int(deltas[i], "delta")) for i in range(length)
    ]


def parse_payload(payload: Any) -> List[Pair]:
    """Validate an external payload and return its pairs in order."""
    return ChangeBatch.model_validate(payload).pairs()
