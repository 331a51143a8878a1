# ==============================================================================
# File: tests/test_export.py
# JSON manifests and the command line entry point.
# ==============================================================================
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

import run_worldgen
from isle_engine.core.constants import BIOMES
from isle_engine.core.export import (
    MANIFEST_VERSION,
    build_world_manifest,
    export_bundle,
    roads_to_overlay,
    write_json,
)
from isle_engine.generators.interiors import generate_interior
from isle_engine.generators.world.world_generator import generate_world
from isle_engine.world_structure.planners.road_planner import plan_road_network

SEED = "export-seed"


class TestExport(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.world = generate_world(SEED, 64)
        cls.roads = plan_road_network(cls.world, SEED)

    def test_write_json_is_atomic(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "nested", "doc.json")
            self.assertEqual(write_json(path, {"a": 1}), path)
            self.assertFalse(os.path.exists(path + ".tmp"))
            with open(path, encoding="utf-8") as f:
                self.assertEqual(json.load(f), {"a": 1})

    def test_manifest(self):
        print("\n[TEST] Running test_manifest...")
        m = build_world_manifest(self.world, self.roads)
        self.assertEqual(m["version"], MANIFEST_VERSION)
        self.assertEqual(m["seed"], SEED)
        self.assertEqual(m["size"], 64)
        self.assertEqual(m["digest"], self.world.digest())
        self.assertEqual(m["biomes"], list(BIOMES))
        self.assertEqual(len(m["height"]), 64)
        self.assertEqual(len(m["biome"][0]), 64)
        self.assertEqual(len(m["pois"]), len(self.world.pois))
        self.assertIn("roads", m)
        # must survive a json round trip
        json.dumps(m)
        print("[TEST] test_manifest: OK")

    def test_roads_overlay(self):
        overlay = roads_to_overlay(self.roads)
        self.assertEqual(len(overlay["paths"]), len(self.roads.edges))
        self.assertEqual(overlay["cells"], int(self.roads.mask.sum()))
        self.assertEqual(overlay["settlements"], [p.id for p in self.roads.settlements])

    def test_export_bundle(self):
        poi = self.world.pois[0] if self.world.pois else None
        interior = generate_interior(poi.type, poi.id, SEED, poi.rarity) if poi else None
        with tempfile.TemporaryDirectory() as tmp:
            written = export_bundle(tmp, self.world, self.roads, interior)
            names = sorted(os.path.basename(p) for p in written)
            expected = ["roads.json", "world.json"]
            if interior is not None:
                expected.append(f"interior_{interior.id}.json")
            self.assertEqual(names, sorted(expected))
            if interior is not None:
                with open(os.path.join(tmp, f"interior_{interior.id}.json"), encoding="utf-8") as f:
                    doc = json.load(f)
                self.assertEqual(doc["type"], poi.type)
                self.assertEqual(doc["width"], interior.width)


class TestCommandLine(unittest.TestCase):
    def test_main_writes_manifests(self):
        print("\n[TEST] Running test_main_writes_manifests...")
        with tempfile.TemporaryDirectory() as tmp:
            code = run_worldgen.main(["--seed", "cli-seed", "--size", "64", "--out", tmp])
            self.assertEqual(code, 0)
            self.assertTrue(os.path.isfile(os.path.join(tmp, "world.json")))
            self.assertTrue(os.path.isfile(os.path.join(tmp, "roads.json")))
        print("[TEST] test_main_writes_manifests: OK")

    def test_unknown_poi_fails(self):
        with tempfile.TemporaryDirectory() as tmp:
            code = run_worldgen.main(
                ["--seed", "cli-seed", "--size", "64", "--out", tmp, "--interior", "missing"]
            )
        self.assertEqual(code, 1)

    def test_missing_preset_fails(self):
        code = run_worldgen.main(["--seed", "s", "--preset", "/nonexistent.json"])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
