# isle_engine/world_structure/planners/poi_planner.py
from __future__ import annotations
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ...core.constants import (
    BIOME_TO_ID,
    ID_TO_BIOME,
    POI_ALLOWED_BIOMES,
    POI_TYPES,
    POI_VILLAGE,
    RARITY_COMMON,
    RARITY_WEIGHTS,
    SEA_LEVEL,
    UNIQUE_POI_TYPES,
)
from ...core.types import POI, Point
from ...core.utils.rng import DeterministicRNG

logger = logging.getLogger(__name__)

SPAWN_VILLAGE_NAME = "Haven Village"

POI_NAMES: Dict[str, Tuple[str, ...]] = {
    "village": ("Willowbrook", "Meadowvale", "Riverholm", "Greenshire"),
    "town": ("Stonebridge", "Highmarket", "Port Alder", "Kingsford"),
    "ruined_castle": ("Castle Dreadmoor", "Fallen Keep", "Shadowhold Ruins", "Grimfort"),
    "wizards_tower": ("Arcane Spire", "Mystic Tower", "Sage's Pinnacle", "Crystal Tower"),
    "dark_cave": ("Shadow Cavern", "Gloom Hollow", "Whispering Cave", "Echo Depths"),
    "dragon_grounds": ("Dragon's Roost", "Wyrm Nest", "Scaled Sanctuary", "Drake Haven"),
    "lighthouse": ("Beacon Point", "Guardian Light", "Seafarer's Hope", "Coastal Watch"),
    "ancient_circle": ("Stone Circle", "Elder Ring", "Mystic Stones", "Ancient Grounds"),
}


def place_spawn_village(
    biome_map: np.ndarray, spawn: Point, rng: DeterministicRNG
) -> Optional[POI]:
    """Starter village on a ring 3-8 cells around the spawn point (16 bearings per ring)."""
    size = biome_map.shape[0]
    allowed = POI_ALLOWED_BIOMES[POI_VILLAGE]
    for radius in range(3, 9):
        candidates: List[Point] = []
        for k in range(16):
            angle = k * math.pi / 8.0
            x = int(math.floor(spawn.x + math.cos(angle) * radius))
            y = int(math.floor(spawn.y + math.sin(angle) * radius))
            if 5 <= x < size - 5 and 5 <= y < size - 5:
                if ID_TO_BIOME[int(biome_map[y, x])] in allowed:
                    candidates.append(Point(x, y))
        if candidates:
            position = rng.random_element(candidates)
            return POI(
                id=rng.deterministic_id("spawn-village"),
                type=POI_VILLAGE,
                position=position,
                rarity=RARITY_COMMON,
                discovered=True,
                unique=False,
                name=SPAWN_VILLAGE_NAME,
                seed=rng.deterministic_id("spawn-village-seed"),
            )
    return None


def _candidate_cells(
    height: np.ndarray, biome_map: np.ndarray, poi_type: str, margin: int
) -> List[Point]:
    size = biome_map.shape[0]
    ids = [BIOME_TO_ID[b] for b in POI_ALLOWED_BIOMES[poi_type]]
    mask = np.isin(biome_map, ids) & (height > SEA_LEVEL)
    inner = np.zeros_like(mask)
    inner[margin:size - margin, margin:size - margin] = True
    return [Point(int(x), int(y)) for y, x in np.argwhere(mask & inner)]


def _far_enough(p: Point, placed: List[POI], spacing: float) -> bool:
    return all(math.hypot(p.x - q.position.x, p.y - q.position.y) >= spacing for q in placed)


def plan_pois(
    height: np.ndarray,
    biome_map: np.ndarray,
    spawn: Point,
    rng: DeterministicRNG,
    cfg: Dict[str, Any],
) -> Tuple[POI, ...]:
    """
    Spawn village first, then every archetype in POI_TYPES order. Each POI
    tries up to `attempts` random candidate cells; a type that finds no room
    is skipped.
    """
    size = biome_map.shape[0]
    spacing = min(float(cfg["min_spacing"]), size / 8.0)
    margin = max(4, size // 12)
    attempts = int(cfg["attempts"])
    counts = cfg.get("counts", {})

    pois: List[POI] = []
    if cfg.get("spawn_village", True):
        village = place_spawn_village(biome_map, spawn, rng)
        if village is not None:
            pois.append(village)
        else:
            logger.warning(f"No room for the spawn village near ({spawn.x}, {spawn.y}).")

    for poi_type in POI_TYPES:
        count = int(counts.get(poi_type, 0))
        if poi_type in UNIQUE_POI_TYPES:
            count = min(count, 1)
        if count <= 0:
            continue
        candidates = _candidate_cells(height, biome_map, poi_type, margin)
        for i in range(count):
            for _ in range(attempts):
                position = rng.random_element(candidates)
                if position is None:
                    break
                if not _far_enough(position, pois, spacing):
                    continue
                pois.append(
                    POI(
                        id=rng.deterministic_id(f"poi-{poi_type}-{i}"),
                        type=poi_type,
                        position=position,
                        rarity=rng.weighted_choice(RARITY_WEIGHTS),
                        discovered=poi_type == POI_VILLAGE,
                        unique=poi_type in UNIQUE_POI_TYPES,
                        name=rng.random_element(POI_NAMES.get(poi_type, ())) or "Unknown Place",
                        seed=rng.deterministic_id(f"seed-{poi_type}-{i}"),
                    )
                )
                break

    logger.debug(f"Placed {len(pois)} POIs.")
    return tuple(pois)
