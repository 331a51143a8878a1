# ==============================================================================
# File: tests/test_rng.py
# Determinism and ranges of the seeded random stream.
# ==============================================================================
import re
import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from isle_engine.core.utils.rng import DeterministicRNG, rng_for, seed_from_any

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


class TestDeterministicRNG(unittest.TestCase):
    def test_same_seed_same_stream(self):
        print("\n[TEST] Running test_same_seed_same_stream...")
        a = DeterministicRNG("alpha")
        b = DeterministicRNG("alpha")
        self.assertEqual([a.random() for _ in range(50)], [b.random() for _ in range(50)])
        self.assertNotEqual(
            [DeterministicRNG("alpha").random() for _ in range(5)],
            [DeterministicRNG("beta").random() for _ in range(5)],
        )
        print("[TEST] test_same_seed_same_stream: OK")

    def test_random_range(self):
        rng = DeterministicRNG("range")
        for _ in range(2000):
            v = rng.random()
            self.assertGreaterEqual(v, 0.0)
            self.assertLess(v, 1.0)

    def test_random_int_inclusive(self):
        print("\n[TEST] Running test_random_int_inclusive...")
        rng = DeterministicRNG("ints")
        seen = {rng.random_int(1, 3) for _ in range(500)}
        self.assertEqual(seen, {1, 2, 3})
        # reversed bounds are swapped
        for _ in range(100):
            self.assertIn(rng.random_int(5, 2), (2, 3, 4, 5))
        self.assertEqual(rng.random_int(7, 7), 7)
        print("[TEST] test_random_int_inclusive: OK")

    def test_random_element_and_shuffle(self):
        rng = DeterministicRNG("elements")
        self.assertIsNone(rng.random_element([]))
        items = ["a", "b", "c", "d", "e"]
        self.assertIn(rng.random_element(items), items)

        shuffled = rng.shuffle(items)
        self.assertEqual(sorted(shuffled), items)
        self.assertEqual(items, ["a", "b", "c", "d", "e"], "shuffle must not mutate its input")

    def test_weighted_choice(self):
        rng = DeterministicRNG("weights")
        self.assertIsNone(rng.weighted_choice([]))
        picks = [rng.weighted_choice([("x", 1.0), ("y", 0.0)]) for _ in range(200)]
        self.assertEqual(set(picks), {"x"})

        counts = {"common": 0, "legendary": 0}
        for _ in range(2000):
            counts[rng.weighted_choice([("common", 95.0), ("legendary", 5.0)])] += 1
        self.assertGreater(counts["common"], counts["legendary"])

    def test_random_bool(self):
        rng = DeterministicRNG("coin")
        self.assertFalse(any(rng.random_bool(0.0) for _ in range(200)))
        self.assertTrue(all(rng.random_bool(1.0) for _ in range(200)))

        a = DeterministicRNG("coin")
        b = DeterministicRNG("coin")
        flips = [a.random_bool() for _ in range(4000)]
        self.assertEqual(flips, [b.random_bool() for _ in range(4000)])
        self.assertEqual(a.draws, 4000)
        self.assertAlmostEqual(sum(flips) / len(flips), 0.5, delta=0.05)

    def test_deterministic_id(self):
        print("\n[TEST] Running test_deterministic_id...")
        a = DeterministicRNG("ids")
        b = DeterministicRNG("ids")
        ids_a = [a.deterministic_id("poi") for _ in range(20)]
        ids_b = [b.deterministic_id("poi") for _ in range(20)]
        self.assertEqual(ids_a, ids_b)
        self.assertEqual(len(set(ids_a)), 20)
        for i in ids_a:
            self.assertRegex(i, UUID_RE)
        print("[TEST] test_deterministic_id: OK")

    def test_sub_stream_does_not_advance_parent(self):
        parent = DeterministicRNG("root")
        child = parent.sub("rivers")
        self.assertEqual(child.seed, "root:rivers")
        self.assertEqual(parent.draws, 0)
        self.assertEqual(rng_for("root", "rivers").random(), child.random())

    def test_gaussian_is_finite(self):
        rng = DeterministicRNG("gauss")
        values = [rng.gaussian(10.0, 2.0) for _ in range(500)]
        mean = sum(values) / len(values)
        self.assertTrue(8.0 < mean < 12.0)

    def test_seed_hash_is_stable(self):
        self.assertEqual(seed_from_any("abc"), seed_from_any(b"abc"))
        self.assertEqual(seed_from_any(5), 5)
        with self.assertRaises(TypeError):
            seed_from_any(1.5)


if __name__ == "__main__":
    unittest.main()
