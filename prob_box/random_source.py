"""
Key Source — Seeded random key wrapper.

Keys for draw() come from a single KeySource per pool.
Identical (seed) → identical key sequence → identical draws.
"""

from __future__ import annotations

import random
from typing import Optional


class KeySource:
    """Local seeded RNG. No global random state touched."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def rand_key(self, upper: int) -> int:
        """Return a random non-negative key in [0, upper)."""
        if upper <= 0:
            raise ValueError(f"upper must be positive, got {upper}")
        return self._rng.randrange(upper)
