# ==============================================================================
# File: tests/test_rivers.py
# River tracing on synthetic height fields.
# ==============================================================================
import sys
import unittest
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).parent.parent))

from isle_engine.algorithms.hydrology.rivers import (
    _strahler_orders,
    generate_rivers,
    river_widths,
    trace_river,
)
from isle_engine.core.constants import SEA_LEVEL
from isle_engine.core.types import Point
from isle_engine.core.utils.rng import DeterministicRNG


def ramp(size: int = 64) -> np.ndarray:
    """Slopes down from west (100) to east; the sea starts at x = 57."""
    xs = np.arange(size, dtype=np.float32)
    return np.tile(100.0 - 1.5 * xs, (size, 1)).astype(np.float32)


class TestTraceRiver(unittest.TestCase):
    def test_runs_downhill_to_the_sea(self):
        print("\n[TEST] Running test_runs_downhill_to_the_sea...")
        heights = ramp().tolist()
        path, joined = trace_river(heights, Point(10, 5), {}, max_steps=256)
        self.assertEqual(joined, -1)
        self.assertEqual(path[0], Point(10, 5))
        self.assertEqual(path[-1], Point(57, 5))
        self.assertTrue(all(p.y == 5 for p in path))
        self.assertLess(heights[5][57], SEA_LEVEL)
        print("[TEST] test_runs_downhill_to_the_sea: OK")

    def test_stops_on_claimed_cell(self):
        heights = ramp().tolist()
        path, joined = trace_river(heights, Point(10, 5), {Point(20, 5): 3}, max_steps=256)
        self.assertEqual(joined, 3)
        self.assertEqual(path[-1], Point(20, 5))
        self.assertEqual(len(path), 11)

    def test_stops_at_local_minimum(self):
        heights = np.full((9, 9), 50.0)
        heights[4, 4] = 20.0
        path, joined = trace_river(heights.tolist(), Point(4, 4), {}, max_steps=50)
        self.assertEqual(path, [Point(4, 4)])
        self.assertEqual(joined, -1)

    def test_max_steps(self):
        path, _ = trace_river(ramp().tolist(), Point(10, 5), {}, max_steps=5)
        self.assertEqual(len(path), 5)


class TestStreamOrder(unittest.TestCase):
    def test_strahler(self):
        self.assertEqual(_strahler_orders(2, {0: [1]}), [2, 1])
        self.assertEqual(_strahler_orders(3, {}), [1, 1, 1])
        # two order-2 tributaries raise the trunk to 3
        self.assertEqual(_strahler_orders(5, {0: [1, 2], 1: [3], 2: [4]}), [3, 2, 2, 1, 1])


class TestRiverWidths(unittest.TestCase):
    def test_widths_within_bounds(self):
        heights = ramp().tolist()
        points = [Point(x, 5) for x in range(10, 58)]
        for order in (1, 2, 3):
            widths = river_widths(points, heights, order, flow=40.0)
            self.assertEqual(len(widths), len(points))
            for w in widths:
                self.assertGreaterEqual(w, 0.5 + order * 0.3)
                self.assertLessEqual(w, 8.0 + order * 2.0)


class TestGenerateRivers(unittest.TestCase):
    def test_ramp_system(self):
        print("\n[TEST] Running test_ramp_system...")
        height = ramp()
        system = generate_rivers(height, DeterministicRNG("rivers"), min_count=4, max_count=8, min_spacing=8)
        self.assertGreaterEqual(len(system.rivers), 1)
        self.assertLessEqual(len(system.rivers), 8)
        self.assertEqual(system.confluences, ())

        expected_mask = np.zeros_like(system.mask)
        for river in system.rivers:
            self.assertGreaterEqual(len(river.points), 6)
            self.assertEqual(len(river.widths), len(river.points))
            self.assertEqual(river.stream_order, 1)
            self.assertGreaterEqual(height[river.points[0].y, river.points[0].x], 50.0)
            for a, b in zip(river.points, river.points[1:]):
                self.assertLess(height[b.y, b.x], height[a.y, a.x])
            for p in river.points:
                expected_mask[p.y, p.x] = True
        np.testing.assert_array_equal(system.mask, expected_mask)
        print("[TEST] test_ramp_system: OK")

    def test_deterministic(self):
        a = generate_rivers(ramp(), DeterministicRNG("same"))
        b = generate_rivers(ramp(), DeterministicRNG("same"))
        self.assertEqual(a.rivers, b.rivers)

    def test_flat_sea_has_no_rivers(self):
        system = generate_rivers(np.zeros((64, 64), dtype=np.float32), DeterministicRNG("sea"))
        self.assertEqual(system.rivers, ())
        self.assertFalse(system.mask.any())


if __name__ == "__main__":
    unittest.main()
