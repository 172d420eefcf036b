"""
Property tests for the Probability Object Box.

Covers:
  - Running total == sum of weights after random modify / clear sequences
    (both policies, seeded, replayable)
  - Every key in [0, total) maps to exactly the entry owning it
  - Key wrap-around: key and key + total draw the same item
  - Seeded draw frequencies track weights
  - Same seed → identical operation log → identical pool

Run:  py -3 test_properties.py
"""

from __future__ import annotations

import os
import random
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from prob_box import (
    KeySource,
    UpdatePolicy,
    WeightedPool,
    validate_invariants,
)


_ITEMS = ["a", "b", "c", "d", "e", (1, 2), None, 7]
_SEEDS = range(25)


def _random_batch(rng: random.Random, policy: UpdatePolicy) -> list:
    batch = []
    for _ in range(rng.randint(0, 6)):
        item = rng.choice(_ITEMS)
        if policy is UpdatePolicy.RELATIVE:
            delta = rng.randint(-8, 12)
        else:
            delta = rng.randint(-2, 12)
        batch.append((item, delta))
    return batch


def _run_random_ops(seed: int, policy: UpdatePolicy) -> WeightedPool:
    rng = random.Random(seed)
    pool = WeightedPool(policy, capacity=60)
    for _ in range(200):
        if rng.random() < 0.03:
            pool.clear()
        else:
            pool.modify(_random_batch(rng, policy))
        validate_invariants(pool)
    return pool


def _expected_owner(pool: WeightedPool, key: int):
    lo = 0
    for entry in pool.get_pool():
        if lo <= key < lo + entry.weight:
            return entry.item
        lo += entry.weight
    raise AssertionError(f"key {key} owned by nobody")


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def test_invariants_hold_relative() -> None:
    for seed in _SEEDS:
        _run_random_ops(seed, UpdatePolicy.RELATIVE)


def test_invariants_hold_absolute() -> None:
    for seed in _SEEDS:
        _run_random_ops(seed, UpdatePolicy.ABSOLUTE)


def test_every_key_maps_to_owner() -> None:
    for seed in _SEEDS:
        pool = _run_random_ops(seed, UpdatePolicy.RELATIVE)
        total = pool.get_count()
        for key in range(total):
            ok, item = pool.draw(key)
            assert ok
            assert item == _expected_owner(pool, key)
            assert pool.draw(key + total) == (ok, item)


def test_draw_fails_only_when_empty() -> None:
    for seed in _SEEDS:
        pool = _run_random_ops(seed, UpdatePolicy.ABSOLUTE)
        ok, _ = pool.draw()
        assert ok == (pool.get_count() > 0)


def test_relative_net_effect() -> None:
    rng = random.Random(1234)
    for _ in range(100):
        pool = WeightedPool(UpdatePolicy.RELATIVE)
        up, down = rng.randint(1, 50), rng.randint(0, 60)
        pool.modify([("x", up), ("x", -down)])
        if down < up:
            assert pool.get_count("x") == up - down
        elif down == up:
            assert "x" not in pool
        else:
            assert pool.get_count("x") == up


def test_frequencies_track_weights() -> None:
    pool = WeightedPool(key_source=KeySource(seed=2026))
    pool.modify({"heavy": 6, "light": 2, "rare": 1})
    n = 9000
    hits = {"heavy": 0, "light": 0, "rare": 0}
    for _ in range(n):
        _, item = pool.draw()
        hits[item] += 1
    for item, weight in (("heavy", 6), ("light", 2), ("rare", 1)):
        expected = n * weight / 9
        assert abs(hits[item] - expected) < expected * 0.15, hits


def test_same_seed_same_pool() -> None:
    for seed in (3, 17, 256):
        a = _run_random_ops(seed, UpdatePolicy.RELATIVE)
        b = _run_random_ops(seed, UpdatePolicy.RELATIVE)
        assert a.get_pool() == b.get_pool()
        assert a.get_count() == b.get_count()


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

_pass = 0
_fail = 0


def _test(name, fn):
    global _pass, _fail
    try:
        fn()
        print(f"  [PASS] {name}")
        _pass += 1
    except Exception as exc:
        print(f"  [FAIL] {name}: {exc}")
        _fail += 1


def main() -> None:
    _test("invariants hold (relative)", test_invariants_hold_relative)
    _test("invariants hold (absolute)", test_invariants_hold_absolute)
    _test("every key maps to owner", test_every_key_maps_to_owner)
    _test("draw fails only when empty", test_draw_fails_only_when_empty)
    _test("relative net effect", test_relative_net_effect)
    _test("frequencies track weights", test_frequencies_track_weights)
    _test("same seed same pool", test_same_seed_same_pool)

    print(f"\n  {_pass} passed, {_fail} failed")
    sys.exit(1 if _fail else 0)


if __name__ == "__main__":
    main()
