# isle_engine/core/constants.py
from __future__ import annotations
from typing import Dict, Tuple

# =======================================================================
# WORLD
# =======================================================================

WORLD_SIZE = 256
MIN_WORLD_SIZE = 64
MAX_WORLD_SIZE = 256

MAX_ELEVATION = 100.0
# Cells strictly below this height are ocean.
SEA_LEVEL = 15.0

# =======================================================================
# BIOMES
# =======================================================================

BIOME_OCEAN = "ocean"
BIOME_BEACH = "beach"
BIOME_COAST = "coast"
BIOME_GRASSLAND = "grassland"
BIOME_FOREST = "forest"
BIOME_SAVANNA = "savanna"
BIOME_SHRUBLAND = "shrubland"
BIOME_HILLS = "hills"
BIOME_MOUNTAIN = "mountain"
BIOME_ALPINE = "alpine"
BIOME_TAIGA = "taiga"
BIOME_TUNDRA = "tundra"
BIOME_DESERT = "desert"

BIOMES = (
    BIOME_OCEAN,
    BIOME_BEACH,
    BIOME_COAST,
    BIOME_GRASSLAND,
    BIOME_FOREST,
    BIOME_SAVANNA,
    BIOME_SHRUBLAND,
    BIOME_HILLS,
    BIOME_MOUNTAIN,
    BIOME_ALPINE,
    BIOME_TAIGA,
    BIOME_TUNDRA,
    BIOME_DESERT,
)

# IDs stored in WorldSnapshot.biome_map (uint8). Strictly sequential from 0.
BIOME_TO_ID: Dict[str, int] = {name: i for i, name in enumerate(BIOMES)}
ID_TO_BIOME: Dict[int, str] = {v: k for k, v in BIOME_TO_ID.items()}

# Classification scan order: the first biome whose three ranges all
# contain the cell wins. Specific highland/cold/dry biomes come before
# the broad temperate ones they overlap with.
BIOME_PRIORITY: Tuple[str, ...] = (
    BIOME_OCEAN,
    BIOME_BEACH,
    BIOME_COAST,
    BIOME_ALPINE,
    BIOME_MOUNTAIN,
    BIOME_HILLS,
    BIOME_TUNDRA,
    BIOME_TAIGA,
    BIOME_DESERT,
    BIOME_SAVANNA,
    BIOME_FOREST,
    BIOME_GRASSLAND,
    BIOME_SHRUBLAND,
)

# =======================================================================
# POINTS OF INTEREST
# =======================================================================

POI_VILLAGE = "village"
POI_TOWN = "town"
POI_RUINED_CASTLE = "ruined_castle"
POI_WIZARDS_TOWER = "wizards_tower"
POI_DARK_CAVE = "dark_cave"
POI_DRAGON_GROUNDS = "dragon_grounds"
POI_LIGHTHOUSE = "lighthouse"
POI_ANCIENT_CIRCLE = "ancient_circle"

# Placement order in the world generator.
POI_TYPES = (
    POI_VILLAGE,
    POI_TOWN,
    POI_RUINED_CASTLE,
    POI_WIZARDS_TOWER,
    POI_DARK_CAVE,
    POI_DRAGON_GROUNDS,
    POI_LIGHTHOUSE,
    POI_ANCIENT_CIRCLE,
)

UNIQUE_POI_TYPES = frozenset(
    {POI_WIZARDS_TOWER, POI_DRAGON_GROUNDS, POI_LIGHTHOUSE, POI_ANCIENT_CIRCLE}
)
SETTLEMENT_POI_TYPES = frozenset({POI_VILLAGE, POI_TOWN})

# Walkable biomes each archetype may be placed on.
POI_ALLOWED_BIOMES: Dict[str, Tuple[str, ...]] = {
    POI_VILLAGE: (BIOME_GRASSLAND, BIOME_SAVANNA, BIOME_SHRUBLAND, BIOME_FOREST),
    POI_TOWN: (BIOME_GRASSLAND, BIOME_COAST, BIOME_SAVANNA, BIOME_SHRUBLAND),
    POI_RUINED_CASTLE: (BIOME_HILLS, BIOME_ALPINE, BIOME_TUNDRA),
    POI_WIZARDS_TOWER: (BIOME_FOREST, BIOME_HILLS, BIOME_TUNDRA),
    POI_DARK_CAVE: (BIOME_HILLS, BIOME_TAIGA, BIOME_TUNDRA),
    POI_DRAGON_GROUNDS: (BIOME_ALPINE, BIOME_HILLS, BIOME_DESERT),
    POI_LIGHTHOUSE: (BIOME_BEACH, BIOME_COAST),
    POI_ANCIENT_CIRCLE: (BIOME_FOREST, BIOME_GRASSLAND, BIOME_SHRUBLAND),
}

# =======================================================================
# RARITY
# =======================================================================

RARITY_COMMON = "common"
RARITY_RARE = "rare"
RARITY_EPIC = "epic"
RARITY_LEGENDARY = "legendary"

RARITIES = (RARITY_COMMON, RARITY_RARE, RARITY_EPIC, RARITY_LEGENDARY)

# Placement weights, strictly decreasing common -> legendary.
RARITY_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    (RARITY_COMMON, 60.0),
    (RARITY_RARE, 25.0),
    (RARITY_EPIC, 11.0),
    (RARITY_LEGENDARY, 4.0),
)

# =======================================================================
# ROADS
# =======================================================================

# Cost of entering a cell, by biome.
DEFAULT_ROAD_TERRAIN_COST: Dict[str, float] = {
    BIOME_OCEAN: float("inf"),
    BIOME_MOUNTAIN: 50.0,
    BIOME_ALPINE: 30.0,
    BIOME_HILLS: 4.0,
    BIOME_FOREST: 3.0,
    BIOME_TAIGA: 3.0,
    BIOME_BEACH: 2.0,
    BIOME_COAST: 2.0,
    BIOME_GRASSLAND: 1.5,
    BIOME_SHRUBLAND: 1.5,
    BIOME_SAVANNA: 1.5,
    BIOME_TUNDRA: 1.5,
    BIOME_DESERT: 1.5,
}
ROAD_RIVER_PENALTY = 10.0
ROAD_REUSE_BONUS = 1.0
