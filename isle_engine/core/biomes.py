# isle_engine/core/biomes.py
# Biome metadata shared by the generator and any external renderer.
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from . import constants as const


@dataclass(frozen=True)
class BiomeMetadata:
    name: str
    description: str
    base_color: str
    color_variance: float
    elevation: Tuple[float, float]
    moisture: Tuple[float, float]
    temperature: Tuple[float, float]
    walkable: bool
    tags: Tuple[str, ...]

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "baseColor": self.base_color,
            "colorVariance": self.color_variance,
            "elevation": {"min": self.elevation[0], "max": self.elevation[1]},
            "moisture": {"min": self.moisture[0], "max": self.moisture[1]},
            "temperature": {"min": self.temperature[0], "max": self.temperature[1]},
            "walkable": self.walkable,
            "tags": list(self.tags),
        }


BIOME_METADATA: Dict[str, BiomeMetadata] = {
    const.BIOME_OCEAN: BiomeMetadata(
        "Ocean", "Deep water bodies and seas", "#1e40af", 0.15,
        (0.0, 15.0), (0.8, 1.0), (0.0, 1.0), False, ("water", "deep"),
    ),
    const.BIOME_BEACH: BiomeMetadata(
        "Beach", "Sandy coastal areas and shorelines", "#fbbf24", 0.25,
        (15.0, 30.0), (0.3, 0.7), (0.2, 0.9), True, ("coastal", "sandy"),
    ),
    const.BIOME_COAST: BiomeMetadata(
        "Coastal Plains", "Low-lying fertile land near the sea", "#84cc16", 0.3,
        (30.0, 35.0), (0.5, 0.8), (0.3, 0.8), True, ("coastal", "fertile", "lowland"),
    ),
    const.BIOME_GRASSLAND: BiomeMetadata(
        "Grassland", "Rolling plains covered with grass", "#65a30d", 0.4,
        (35.0, 60.0), (0.4, 0.7), (0.3, 0.8), True, ("temperate", "open"),
    ),
    const.BIOME_FOREST: BiomeMetadata(
        "Forest", "Dense woodlands and temperate forests", "#166534", 0.35,
        (35.0, 70.0), (0.7, 1.0), (0.2, 0.8), True, ("wooded", "humid"),
    ),
    const.BIOME_SAVANNA: BiomeMetadata(
        "Savanna", "Grasslands with scattered trees", "#d97706", 0.4,
        (35.0, 60.0), (0.2, 0.4), (0.6, 1.0), True, ("warm", "dry", "sparse"),
    ),
    const.BIOME_SHRUBLAND: BiomeMetadata(
        "Shrubland", "Semi-arid areas with low vegetation", "#a3a65a", 0.3,
        (35.0, 65.0), (0.2, 0.5), (0.4, 0.9), True, ("dry", "scrub"),
    ),
    const.BIOME_HILLS: BiomeMetadata(
        "Hills", "Rolling hills and elevated terrain", "#a16207", 0.25,
        (60.0, 80.0), (0.2, 0.8), (0.1, 0.7), True, ("elevated", "rolling"),
    ),
    const.BIOME_MOUNTAIN: BiomeMetadata(
        "Mountain", "High peaks and steep slopes", "#6b7280", 0.2,
        (80.0, 95.0), (0.1, 0.6), (0.0, 0.4), False, ("high", "rocky", "steep"),
    ),
    const.BIOME_ALPINE: BiomeMetadata(
        "Alpine", "High altitude areas above treeline", "#e5e7eb", 0.15,
        (80.0, 100.0), (0.3, 0.7), (0.0, 0.3), True, ("high", "cold", "treeline"),
    ),
    const.BIOME_TAIGA: BiomeMetadata(
        "Taiga", "Northern coniferous forests", "#14532d", 0.3,
        (35.0, 70.0), (0.5, 0.8), (0.0, 0.3), True, ("cold", "coniferous", "northern"),
    ),
    const.BIOME_TUNDRA: BiomeMetadata(
        "Tundra", "Cold, treeless plains", "#d1d5db", 0.2,
        (35.0, 80.0), (0.3, 0.6), (0.0, 0.2), True, ("cold", "treeless", "barren"),
    ),
    const.BIOME_DESERT: BiomeMetadata(
        "Desert", "Hot, dry wastelands", "#f59e0b", 0.35,
        (35.0, 70.0), (0.0, 0.3), (0.7, 1.0), True, ("hot", "arid", "sandy"),
    ),
}

# Indexed by biome id.
WALKABLE_BY_ID = np.array(
    [BIOME_METADATA[name].walkable for name in const.BIOMES], dtype=bool
)


def is_walkable(biome: str) -> bool:
    return BIOME_METADATA[biome].walkable
