# ==============================================================================
# File: tests/test_placement.py
# Footprint placement and building drawing on a tag grid.
# ==============================================================================
import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from isle_engine.core.utils.rng import DeterministicRNG
from isle_engine.generators.interiors.common import TileGrid
from isle_engine.generators.interiors.placement import (
    Footprint,
    draw_building,
    place_footprint,
    touches_tags,
)


class TestFootprint(unittest.TestCase):
    def test_cells_and_ring(self):
        fp = Footprint(2, 3, 3, 2)
        self.assertEqual(len(list(fp.cells())), 6)
        ring = list(fp.ring(1))
        self.assertEqual(len(ring), 5 * 4 - 6)
        self.assertNotIn((2, 3), ring)
        self.assertIn((1, 2), ring)
        self.assertEqual(fp.center, (3, 4))


class TestPlaceFootprint(unittest.TestCase):
    def test_stays_inside_region_on_open_cells(self):
        print("\n[TEST] Running test_stays_inside_region_on_open_cells...")
        grid = TileGrid(20, 20, "grass")
        grid.fill_rect(0, 10, 20, 1, "road")
        rng = DeterministicRNG("placement")
        near_road = touches_tags(("road",))
        for _ in range(10):
            fp = place_footprint(grid, rng, 4, 4, adjacency=near_road)
            if fp is None:
                continue
            for x, y in fp.cells():
                self.assertTrue(2 <= x < 18 and 2 <= y < 18)
                self.assertEqual(grid.get(x, y), "grass")
            self.assertTrue(near_road(grid, fp))
            draw_building(grid, fp)
        print("[TEST] test_stays_inside_region_on_open_cells: OK")

    def test_no_room_returns_none(self):
        grid = TileGrid(10, 10, "wall")
        rng = DeterministicRNG("full")
        self.assertIsNone(place_footprint(grid, rng, 3, 3, required=True))
        # larger than the region
        self.assertIsNone(place_footprint(TileGrid(6, 6, "grass"), rng, 5, 5))

    def test_required_scan_finds_the_only_slot(self):
        grid = TileGrid(12, 12, "wall")
        grid.fill_rect(7, 7, 3, 3, "grass")
        fp = place_footprint(
            grid, DeterministicRNG("scan"), 3, 3, margin_tags=None, attempts=1, required=True
        )
        self.assertEqual(fp, Footprint(7, 7, 3, 3))

    def test_clearance(self):
        grid = TileGrid(12, 12, "grass")
        grid.set(6, 6, "wall")
        rng = DeterministicRNG("clearance")
        for _ in range(20):
            fp = place_footprint(grid, rng, 3, 3, attempts=5)
            if fp is not None:
                self.assertNotIn((6, 6), list(fp.ring(1)))
                self.assertNotIn((6, 6), list(fp.cells()))


class TestDrawBuilding(unittest.TestCase):
    def test_walls_door_overlay(self):
        grid = TileGrid(10, 10, "grass")
        fp = Footprint(2, 2, 5, 4)
        door = draw_building(grid, fp, overlay="tavern")
        self.assertEqual(door, (4, 5))
        self.assertEqual(grid.get(4, 5), "door")
        self.assertEqual(grid.get(2, 2), "wall")
        self.assertEqual(grid.get(3, 3), "tavern")
        self.assertEqual(grid.get(4, 4), "floor")
        self.assertTrue(grid.walkable(4, 5))
        self.assertFalse(grid.walkable(2, 2))


if __name__ == "__main__":
    unittest.main()
