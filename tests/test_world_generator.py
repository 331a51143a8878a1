# ==============================================================================
# File: tests/test_world_generator.py
# End-to-end snapshot checks on a small (64x64) island.
# ==============================================================================
import math
import sys
import unittest
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).parent.parent))

from isle_engine.core.biomes import WALKABLE_BY_ID
from isle_engine.core.constants import (
    BIOME_TO_ID,
    MAX_ELEVATION,
    POI_ALLOWED_BIOMES,
    RARITIES,
    SEA_LEVEL,
    UNIQUE_POI_TYPES,
)
from isle_engine.core.preset import load_preset
from isle_engine.generators.world.world_generator import WorldGenerator, clamp_size, generate_world

SEED = "test-seed"
SIZE = 64


class TestWorldGenerator(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.world = generate_world(SEED, SIZE)

    def test_same_seed_same_snapshot(self):
        print("\n[TEST] Running test_same_seed_same_snapshot...")
        again = generate_world(SEED, SIZE)
        self.assertEqual(self.world.digest(), again.digest())
        self.assertEqual([p.id for p in self.world.pois], [p.id for p in again.pois])
        np.testing.assert_array_equal(self.world.height_map, again.height_map)
        self.assertEqual(self.world.rivers, again.rivers)

        other = generate_world("another-seed", SIZE)
        self.assertNotEqual(self.world.digest(), other.digest())
        print("[TEST] test_same_seed_same_snapshot: OK")

    def test_grids(self):
        w = self.world
        for arr in (w.height_map, w.moisture_map, w.temperature_map, w.biome_map):
            self.assertEqual(arr.shape, (SIZE, SIZE))
            self.assertFalse(arr.flags.writeable)
        self.assertEqual(w.biome_map.dtype, np.uint8)
        self.assertTrue(np.all((w.height_map >= 0) & (w.height_map <= MAX_ELEVATION)))
        self.assertTrue(np.all((w.moisture_map >= 0) & (w.moisture_map <= 1)))
        self.assertTrue(np.all((w.temperature_map >= 0) & (w.temperature_map <= 1)))

        ocean = w.biome_map == BIOME_TO_ID["ocean"]
        np.testing.assert_array_equal(ocean, w.height_map < SEA_LEVEL)
        self.assertTrue((~ocean).any())
        self.assertEqual(w.biome_grid()[5][7], w.biome_at(7, 5))

    def test_spawn_point(self):
        w = self.world
        sp = w.spawn_point
        self.assertTrue(0 <= sp.x < SIZE and 0 <= sp.y < SIZE)
        self.assertTrue(WALKABLE_BY_ID[w.biome_map[sp.y, sp.x]])
        self.assertNotEqual(w.biome_at(sp.x, sp.y), "ocean")

    def test_poi_constraints(self):
        print("\n[TEST] Running test_poi_constraints...")
        pois = self.world.pois
        self.assertGreater(len(pois), 0)
        self.assertEqual(len({p.id for p in pois}), len(pois))

        spacing = min(30.0, SIZE / 8.0)
        for i, a in enumerate(pois):
            self.assertIn(a.rarity, RARITIES)
            self.assertIn(self.world.biome_at(a.position.x, a.position.y), POI_ALLOWED_BIOMES[a.type])
            self.assertEqual(a.unique, a.type in UNIQUE_POI_TYPES)
            self.assertEqual(a.discovered, a.type == "village")
            for b in pois[i + 1:]:
                d = math.hypot(a.position.x - b.position.x, a.position.y - b.position.y)
                self.assertGreaterEqual(d, spacing, f"{a.type} and {b.type} too close")

        for t in UNIQUE_POI_TYPES:
            self.assertLessEqual(sum(1 for p in pois if p.type == t), 1)
        print("[TEST] test_poi_constraints: OK")

    def test_spawn_village_comes_first(self):
        first = self.world.pois[0]
        if first.name != "Haven Village":
            self.skipTest("no room for a spawn village on this island")
        self.assertEqual(first.type, "village")
        self.assertEqual(first.rarity, "common")
        sp = self.world.spawn_point
        self.assertLessEqual(math.hypot(first.position.x - sp.x, first.position.y - sp.y), 10.0)

    def test_rivers(self):
        w = self.world
        heights = w.height_map
        for river in w.rivers:
            self.assertGreaterEqual(len(river.points), 6)
            self.assertEqual(len(river.widths), len(river.points))
            self.assertGreaterEqual(river.stream_order, 1)
            for a, b in zip(river.points, river.points[1:]):
                self.assertLessEqual(max(abs(a.x - b.x), abs(a.y - b.y)), 1)
                self.assertLess(heights[b.y, b.x], heights[a.y, a.x])
            self.assertGreaterEqual(heights[river.points[0].y, river.points[0].x], MAX_ELEVATION * 0.5)
        cells = {p for r in w.rivers for p in r.points}
        for c in w.confluences:
            self.assertIn(c, cells)


class TestWorldGeneratorConfig(unittest.TestCase):
    def test_size_clamped(self):
        self.assertEqual(clamp_size(10), 64)
        self.assertEqual(clamp_size(1000), 256)
        self.assertEqual(clamp_size(100), 100)
        world = generate_world("tiny", 8)
        self.assertEqual(world.size, 64)
        self.assertEqual(world.height_map.shape, (64, 64))

    def test_preset_controls_poi_counts(self):
        preset = load_preset(
            overrides={
                "size": 64,
                "pois": {"spawn_village": False, "counts": {k: 0 for k in POI_ALLOWED_BIOMES}},
            }
        )
        world = WorldGenerator(preset).generate("empty-world")
        self.assertEqual(world.size, 64)
        self.assertEqual(world.pois, ())


if __name__ == "__main__":
    unittest.main()
