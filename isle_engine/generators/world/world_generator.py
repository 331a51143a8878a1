# isle_engine/generators/world/world_generator.py
from __future__ import annotations
import logging
import time
from typing import Dict, Optional

from ...algorithms.hydrology.rivers import generate_rivers
from ...algorithms.terrain.biomes import classify_biomes
from ...algorithms.terrain.noise import NoiseField
from ...algorithms.terrain.terrain import (
    IslandShape,
    LatitudeBand,
    generate_height,
    generate_moisture,
    generate_temperature,
)
from ...core.constants import MAX_WORLD_SIZE, MIN_WORLD_SIZE
from ...core.preset import DEFAULT_BASE_PRESET, Preset
from ...core.types import WorldSnapshot
from ...core.utils.rng import DeterministicRNG
from ...world_structure.planners.poi_planner import plan_pois
from ...world_structure.planners.spawn_planner import find_spawn_point

logger = logging.getLogger(__name__)


def clamp_size(size: int) -> int:
    return max(MIN_WORLD_SIZE, min(MAX_WORLD_SIZE, int(size)))


class WorldGenerator:
    VERSION = "isle_v1"

    def __init__(self, preset: Preset = DEFAULT_BASE_PRESET):
        self.preset = preset

    def generate(self, seed: str, size: Optional[int] = None) -> WorldSnapshot:
        seed = str(seed)
        requested = self.preset.size if size is None else size
        size = clamp_size(requested)
        if size != requested:
            logger.warning(f"World size {requested} clamped to {size}.")

        rng = DeterministicRNG(seed)
        noise = NoiseField(f"{seed}:noise")
        timings: Dict[str, float] = {}
        t_total = time.perf_counter()

        # 1) Height
        t0 = time.perf_counter()
        shape = IslandShape.draw(rng.sub("island-shape"))
        height = generate_height(noise, shape, size, self.preset.terrain)
        timings["height"] = (time.perf_counter() - t0) * 1000.0

        # 2) Rivers (before climate, they feed moisture)
        t0 = time.perf_counter()
        river_cfg = self.preset.rivers
        river_system = generate_rivers(
            height,
            rng.sub("rivers"),
            min_count=river_cfg["min_count"],
            max_count=river_cfg["max_count"],
            min_spacing=river_cfg["min_spacing"],
            min_points=river_cfg["min_points"],
            source_elevation_ratio=river_cfg["source_elevation_ratio"],
        )
        timings["rivers"] = (time.perf_counter() - t0) * 1000.0

        # 3) Climate
        t0 = time.perf_counter()
        moisture = generate_moisture(noise, height, river_system.mask, self.preset.climate)
        band = LatitudeBand.draw(rng.sub("latitude"))
        temperature = generate_temperature(noise, height, band, self.preset.climate)
        timings["climate"] = (time.perf_counter() - t0) * 1000.0

        # 4) Biomes
        t0 = time.perf_counter()
        biome_map = classify_biomes(height, moisture, temperature)
        timings["biomes"] = (time.perf_counter() - t0) * 1000.0

        # 5) Spawn + POIs
        t0 = time.perf_counter()
        spawn = find_spawn_point(biome_map)
        pois = plan_pois(height, biome_map, spawn, rng.sub("pois"), self.preset.pois)
        timings["pois"] = (time.perf_counter() - t0) * 1000.0

        world = WorldSnapshot(
            seed=seed,
            size=size,
            height_map=height,
            moisture_map=moisture,
            temperature_map=temperature,
            biome_map=biome_map,
            rivers=river_system.rivers,
            pois=pois,
            spawn_point=spawn,
            confluences=river_system.confluences,
        )
        timings["total"] = (time.perf_counter() - t_total) * 1000.0
        logger.info(
            f"World '{seed}' ({size}x{size}): {len(world.rivers)} rivers, "
            f"{len(world.pois)} POIs in {timings['total']:.1f} ms."
        )
        logger.debug(
            "Stage timings: " + ", ".join(f"{k}={v:.1f}ms" for k, v in timings.items())
        )
        return world


def generate_world(
    seed: str, size: Optional[int] = None, preset: Optional[Preset] = None
) -> WorldSnapshot:
    """Builds the immutable snapshot for `seed`; same inputs give an identical snapshot."""
    return WorldGenerator(preset or DEFAULT_BASE_PRESET).generate(seed, size)
