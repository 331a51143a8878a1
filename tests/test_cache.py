# ==============================================================================
# File: tests/test_cache.py
# Single-flight memoization for worlds and interiors.
# ==============================================================================
import sys
import threading
import time
import unittest
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from isle_engine.core.errors import UnknownArchetypeError
from isle_engine.world_structure.cache import InteriorCache, SingleFlightCache, WorldCache


class TestSingleFlightCache(unittest.TestCase):
    def test_concurrent_requests_share_one_computation(self):
        print("\n[TEST] Running test_concurrent_requests_share_one_computation...")
        calls = []
        gate = threading.Event()

        def compute(key):
            calls.append(key)
            gate.wait(timeout=5)
            return key * 2

        cache = SingleFlightCache(compute)
        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(cache.get, 21) for _ in range(8)]
            time.sleep(0.05)
            gate.set()
            results = [f.result(timeout=10) for f in futures]

        self.assertEqual(results, [42] * 8)
        self.assertEqual(calls, [21])
        self.assertEqual(cache.computations, 1)
        self.assertIn(21, cache)
        print("[TEST] test_concurrent_requests_share_one_computation: OK")

    def test_failures_are_not_cached(self):
        attempts = []

        def compute(key):
            attempts.append(key)
            if len(attempts) == 1:
                raise RuntimeError("boom")
            return "ok"

        cache = SingleFlightCache(compute)
        with self.assertRaises(RuntimeError):
            cache.get("k")
        self.assertNotIn("k", cache)
        self.assertEqual(cache.get("k"), "ok")
        self.assertEqual(len(attempts), 2)

    def test_clear(self):
        cache = SingleFlightCache(lambda k: object())
        first = cache.get("a")
        self.assertIs(cache.get("a"), first)
        cache.clear()
        self.assertEqual(len(cache), 0)
        self.assertIsNot(cache.get("a"), first)


class TestWorldCache(unittest.TestCase):
    def test_same_key_same_snapshot(self):
        cache = WorldCache()
        a = cache.get("cached", 64)
        b = cache.get("cached", 10)  # clamps to the same key
        self.assertIs(a, b)
        self.assertEqual(cache.computations, 1)


class TestInteriorCache(unittest.TestCase):
    def test_keyed_by_poi_seed_rarity(self):
        cache = InteriorCache()
        a = cache.get("ancient_circle", "poi-9", "seed", "rare")
        self.assertIs(cache.get("ancient_circle", "poi-9", "seed", "rare"), a)
        c = cache.get("ancient_circle", "poi-9", "seed", "epic")
        self.assertIsNot(c, a)
        self.assertEqual(cache.computations, 2)

    def test_bad_type_does_not_pin_the_id(self):
        cache = InteriorCache()
        with self.assertRaises(UnknownArchetypeError):
            cache.get("haunted_mill", "poi-3", "seed")
        village = cache.get("village", "poi-3", "seed")
        self.assertEqual(village.type, "village")

    def test_type_is_part_of_the_key(self):
        cache = InteriorCache()
        circle = cache.get("ancient_circle", "poi-4", "seed", "rare")
        cave = cache.get("dark_cave", "poi-4", "seed", "rare")
        self.assertEqual(circle.type, "ancient_circle")
        self.assertEqual(cave.type, "dark_cave")
        self.assertIs(cache.get("dark_cave", "poi-4", "seed", "rare"), cave)


if __name__ == "__main__":
    unittest.main()
