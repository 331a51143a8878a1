# ==============================================================================
# File: tests/test_roads.py
# Settlement road network over small hand-built snapshots.
# ==============================================================================
import sys
import unittest
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).parent.parent))

from isle_engine.core.constants import BIOME_TO_ID
from isle_engine.core.preset import load_preset
from isle_engine.core.types import POI, Point, River, WorldSnapshot
from isle_engine.world_structure.planners.road_planner import (
    RoadMask,
    generate_roads,
    plan_road_network,
    policy_from_preset,
    river_mask_of,
)


def make_world(size, settlements, rivers=(), ocean_cols=(), others=()):
    biome_map = np.full((size, size), BIOME_TO_ID["grassland"], dtype=np.uint8)
    for col in ocean_cols:
        biome_map[:, col] = BIOME_TO_ID["ocean"]
    pois = [
        POI(f"s{i}", "village" if i % 2 == 0 else "town", Point(x, y), "common", True, False, f"S{i}", f"seed-{i}")
        for i, (x, y) in enumerate(settlements)
    ]
    for k, (poi_type, x, y) in enumerate(others):
        pois.append(POI(f"o{k}", poi_type, Point(x, y), "common", False, False, f"O{k}", f"oseed-{k}"))
    river_objs = tuple(
        River(tuple(Point(x, y) for x, y in pts), (1.0,) * len(pts), 1, 1.0) for pts in rivers
    )
    return WorldSnapshot(
        seed="synthetic",
        size=size,
        height_map=np.full((size, size), 40.0, dtype=np.float32),
        moisture_map=np.full((size, size), 0.5, dtype=np.float32),
        temperature_map=np.full((size, size), 0.5, dtype=np.float32),
        biome_map=biome_map,
        rivers=river_objs,
        pois=tuple(pois),
        spawn_point=Point(size // 2, size // 2),
    )


def _connected(n, edges):
    parent = list(range(n))

    def find(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for e in edges:
        parent[find(e.a)] = find(e.b)
    return len({find(i) for i in range(n)}) == 1


class TestRoadNetwork(unittest.TestCase):
    def test_river_detour(self):
        print("\n[TEST] Running test_river_detour...")
        river = [(x, 10) for x in range(7, 24)]
        world = make_world(32, [(5, 10), (25, 10)], rivers=[river])
        paths = generate_roads(world, "detour")
        self.assertEqual(len(paths), 1)
        path = paths[0]
        self.assertEqual(path[0], Point(5, 10))
        self.assertEqual(path[-1], Point(25, 10))
        self.assertGreater(len(path) - 1, 20)
        self.assertFalse(any((p.x, p.y) in set(river) for p in path))
        print("[TEST] test_river_detour: OK")

    def test_mst_connects_every_settlement(self):
        print("\n[TEST] Running test_mst_connects_every_settlement...")
        spots = [(4, 4), (27, 5), (15, 15), (5, 27), (26, 26)]
        world = make_world(32, spots)
        net = plan_road_network(world, "connect")
        tree = [e for e in net.edges if not e.extra]
        self.assertEqual(len(tree), len(spots) - 1)
        self.assertTrue(_connected(len(spots), tree))
        self.assertLessEqual(len([e for e in net.edges if e.extra]), 1)
        for e in net.edges:
            self.assertEqual(e.path[0], Point(*spots[e.a]))
            self.assertEqual(e.path[-1], Point(*spots[e.b]))
            for p in e.path:
                self.assertTrue(net.mask[p.y, p.x])
        print("[TEST] test_mst_connects_every_settlement: OK")

    def test_roads_stay_on_their_landmass(self):
        spots = [(4, 4), (10, 20), (22, 5), (28, 25)]
        world = make_world(32, spots, ocean_cols=(15, 16))
        net = plan_road_network(world, "islands")
        self.assertEqual(sorted(net.components), [(0, 1), (2, 3)])
        self.assertEqual(len([e for e in net.edges if not e.extra]), 2)
        ocean = BIOME_TO_ID["ocean"]
        for e in net.edges:
            self.assertEqual(spots[e.a][0] < 15, spots[e.b][0] < 15)
            for p in e.path:
                self.assertNotEqual(int(world.biome_map[p.y, p.x]), ocean)

    def test_only_settlements_are_linked(self):
        world = make_world(32, [(4, 4)], others=[("dark_cave", 20, 20), ("lighthouse", 25, 5)])
        net = plan_road_network(world, "lonely")
        self.assertEqual(len(net.settlements), 1)
        self.assertEqual(net.edges, ())
        self.assertFalse(net.mask.any())

    def test_same_seed_same_roads(self):
        spots = [(4, 4), (27, 5), (15, 15), (5, 27), (26, 26), (10, 12)]
        world = make_world(32, spots, rivers=[[(x, 16) for x in range(0, 32)]])
        a = plan_road_network(world, "repeat")
        b = plan_road_network(world, "repeat")
        self.assertEqual(a.paths, b.paths)
        self.assertEqual(a.to_dict(), b.to_dict())
        np.testing.assert_array_equal(a.mask, b.mask)

    def test_policy_from_preset(self):
        preset = load_preset(overrides={"roads": {"river_penalty": 2.0, "road_bonus": 0.25}})
        policy = policy_from_preset(preset)
        self.assertEqual(policy.river_penalty, 2.0)
        self.assertEqual(policy.road_bonus, 0.25)


class TestRoadMask(unittest.TestCase):
    def test_snap_moves_interior_points_only(self):
        mask = RoadMask(8)
        mask.stamp([Point(x, 3) for x in range(8)])
        snapped = mask.snap([Point(1, 4), Point(2, 4), Point(3, 4), Point(3, 5)])
        self.assertEqual(snapped[0], Point(1, 4))
        self.assertEqual(snapped[1], Point(2, 3))
        self.assertEqual(snapped[2], Point(3, 3))
        self.assertEqual(snapped[3], Point(3, 5))
        self.assertTrue(mask.is_road(0, 3))
        self.assertFalse(mask.is_road(-1, 3))

    def test_river_mask(self):
        world = make_world(16, [(2, 2)], rivers=[[(1, 1), (2, 1), (3, 2)]])
        mask = river_mask_of(world)
        self.assertEqual(int(mask.sum()), 3)
        self.assertTrue(mask[2, 3])


if __name__ == "__main__":
    unittest.main()
