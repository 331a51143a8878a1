# ==============================================================================
# File: isle_engine/generators/interiors/__init__.py
# One generator per POI archetype, all (poi_id, seed, rarity) -> POIInterior.
# ==============================================================================
from __future__ import annotations
from typing import Callable, Dict

from ...core.errors import UnknownArchetypeError
from ...core.types import POIInterior
from .ancient_circle import generate_ancient_circle
from .buildings import BUILDING_TYPES, generate_building_interior
from .dark_cave import generate_dark_cave
from .dragon_grounds import generate_dragon_grounds
from .lighthouse import generate_lighthouse
from .ruined_castle import generate_ruined_castle
from .town import generate_town
from .village import generate_village
from .wizards_tower import generate_wizards_tower

InteriorGenerator = Callable[[str, str, str], POIInterior]

INTERIOR_GENERATORS: Dict[str, InteriorGenerator] = {
    "village": generate_village,
    "town": generate_town,
    "ruined_castle": generate_ruined_castle,
    "wizards_tower": generate_wizards_tower,
    "dark_cave": generate_dark_cave,
    "dragon_grounds": generate_dragon_grounds,
    "lighthouse": generate_lighthouse,
    "ancient_circle": generate_ancient_circle,
}


def generate_interior(poi_type: str, poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
    try:
        generator = INTERIOR_GENERATORS[poi_type]
    except KeyError:
        raise UnknownArchetypeError(
            f"No interior generator for '{poi_type}', expected one of {', '.join(INTERIOR_GENERATORS)}"
        ) from None
    return generator(poi_id, seed, rarity)


__all__ = [
    "BUILDING_TYPES",
    "INTERIOR_GENERATORS",
    "generate_interior",
    "generate_building_interior",
    "generate_village",
    "generate_town",
    "generate_ruined_castle",
    "generate_wizards_tower",
    "generate_dark_cave",
    "generate_dragon_grounds",
    "generate_lighthouse",
    "generate_ancient_circle",
]
