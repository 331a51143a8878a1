# ==============================================================================
# File: tests/test_pathfinding.py
# A* search, cost policies and the settlement graph helpers.
# ==============================================================================
import math
import sys
import unittest
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).parent.parent))

from isle_engine.algorithms.pathfinding.a_star import find_path
from isle_engine.algorithms.pathfinding.network import (
    build_mst,
    edge_weight,
    extra_edges,
    label_landmasses,
    river_crossing_fraction,
)
from isle_engine.algorithms.pathfinding.policies import ROAD_POLICY, make_road_policy
from isle_engine.core.constants import BIOME_TO_ID
from isle_engine.core.utils.rng import DeterministicRNG


def _flat(w, h, value=1.0):
    return [[value] * w for _ in range(h)]


def _empty_mask(w, h):
    return [[False] * w for _ in range(h)]


class TestAStar(unittest.TestCase):
    def test_equal_costs_pop_in_insertion_order(self):
        print("\n[TEST] Running test_equal_costs_pop_in_insertion_order...")
        grid = _flat(5, 5)
        path = find_path(grid, _empty_mask(5, 5), _empty_mask(5, 5), (0, 0), (2, 2))
        self.assertEqual(path, [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)])
        again = find_path(grid, _empty_mask(5, 5), _empty_mask(5, 5), (0, 0), (2, 2))
        self.assertEqual(path, again)
        print("[TEST] test_equal_costs_pop_in_insertion_order: OK")

    def test_river_penalty_forces_detour(self):
        w, h = 9, 5
        grid = _flat(w, h)
        rivers = _empty_mask(w, h)
        for x in range(2, 7):
            rivers[2][x] = True
        path = find_path(grid, rivers, _empty_mask(w, h), (0, 2), (8, 2))
        self.assertEqual(path[0], (0, 2))
        self.assertEqual(path[-1], (8, 2))
        self.assertFalse(any(rivers[y][x] for x, y in path))
        self.assertEqual(len(path) - 1, 10)

    def test_unreachable_and_out_of_bounds(self):
        grid = _flat(5, 5)
        for x, y in ((3, 4), (4, 3), (3, 3)):
            grid[y][x] = math.inf
        mask = _empty_mask(5, 5)
        self.assertIsNone(find_path(grid, mask, mask, (0, 0), (4, 4)))
        self.assertIsNone(find_path(grid, mask, mask, (0, 0), (9, 9)))
        self.assertIsNone(find_path(grid, mask, mask, (0, 0), (3, 3)))
        self.assertEqual(find_path(grid, mask, mask, (1, 1), (1, 1)), [(1, 1)])

    def test_expansion_cap(self):
        grid = _flat(20, 20)
        mask = _empty_mask(20, 20)
        self.assertIsNone(find_path(grid, mask, mask, (0, 0), (19, 19), max_expansions=5))


class TestRoadPolicy(unittest.TestCase):
    def test_cost_grid(self):
        biome_map = np.array(
            [[BIOME_TO_ID["ocean"], BIOME_TO_ID["grassland"]],
             [BIOME_TO_ID["mountain"], BIOME_TO_ID["forest"]]],
            dtype=np.uint8,
        )
        costs = ROAD_POLICY.cost_grid(biome_map)
        self.assertTrue(math.isinf(costs[0, 0]))
        self.assertEqual(costs[0, 1], 1.5)
        self.assertEqual(costs[1, 0], 50.0)
        self.assertEqual(costs[1, 1], 3.0)

    def test_overrides(self):
        policy = make_road_policy(river_penalty=3, road_bonus=0.5, terrain_cost={"forest": 9.0})
        self.assertEqual(policy.river_penalty, 3.0)
        self.assertEqual(policy.cost_of("forest"), 9.0)
        self.assertEqual(policy.cost_of("grassland"), 1.5)
        self.assertEqual(ROAD_POLICY.cost_of("forest"), 3.0)
        self.assertEqual(policy.with_overrides(road_bonus=0.0).road_bonus, 0.0)


class TestNetworkHelpers(unittest.TestCase):
    def test_landmass_labels(self):
        costs = np.ones((4, 5))
        costs[:, 2] = np.inf
        labels = label_landmasses(costs)
        self.assertTrue(np.all(labels[:, 2] == -1))
        self.assertTrue(np.all(labels[:, :2] == 0))
        self.assertTrue(np.all(labels[:, 3:] == 1))

    def test_river_crossing_weight(self):
        river = np.zeros((3, 5), dtype=bool)
        river[0, 2] = True
        self.assertAlmostEqual(river_crossing_fraction((0, 0), (4, 0), river), 0.2)
        self.assertAlmostEqual(edge_weight((0, 0), (4, 0), river), 4.0 * 1.6)
        self.assertAlmostEqual(edge_weight((0, 2), (4, 2), river), 4.0)

    def test_mst_discovery_order(self):
        print("\n[TEST] Running test_mst_discovery_order...")
        pts = [(0, 0), (10, 0), (1, 0)]
        euclid = lambda a, b: math.hypot(a[0] - b[0], a[1] - b[1])
        self.assertEqual(build_mst(pts, euclid), [(0, 2), (2, 1)])
        self.assertEqual(build_mst(pts[:1], euclid), [])
        print("[TEST] test_mst_discovery_order: OK")

    def test_extra_edges(self):
        rng = DeterministicRNG("extras")
        self.assertEqual(extra_edges(2, rng), [])
        pairs = extra_edges(9, rng)
        self.assertLessEqual(len(pairs), 2)
        for i, j in pairs:
            self.assertNotEqual(i, j)
            self.assertTrue(0 <= i < 9 and 0 <= j < 9)


if __name__ == "__main__":
    unittest.main()
