# isle_engine/generators/interiors/wizards_tower.py
from __future__ import annotations
import logging
from typing import List

from ...core.types import Floor, POIInterior
from ...core.utils.rng import rng_for
from .common import DEFAULT_SCALE, Population, check_rarity, scaled, tier
from .entities import Adept, Archmage
from .towers import TowerShape, circular_floor, make_floor, reserved_cells, scatter_decor, stacked_interior

logger = logging.getLogger(__name__)

BASE_SIZE = 26
MIN_SIZE = 20
WALL_BAND = 0.8


def generate_wizards_tower(poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
    """
    3-6 circular floors (by rarity). The archmage holds the top floor,
    adepts study on the floors in between, every floor keeps a chest.
    """
    check_rarity(rarity)
    rng = rng_for(seed, poi_id)
    size = scaled(BASE_SIZE, DEFAULT_SCALE[rarity], MIN_SIZE)
    floor_count = tier(rarity, (3, 4, 5, 6))
    shape = TowerShape(size=size, radius=size // 2 - 2, wall_band=WALL_BAND, floors=floor_count)
    extra_adepts = tier(rarity, (0, 0, 1, 2))
    cx, cy = shape.cx, shape.cy
    top = floor_count - 1

    floors: List[Floor] = []
    for level in range(floor_count):
        grid = circular_floor(shape, level)
        chest_spots = [(cx - 3, cy + 3)]
        if rarity == "legendary" and level == top:
            chest_spots.append((cx + 3, cy - 3))
        occupied = [(cx, cy - 1), (cx - 1, cy + 1), (cx + 1, cy), (cx + 1, cy + 1)] + chest_spots
        scatter_decor(grid, rng, shape, reserved_cells(shape, level, occupied))

        pop = Population(rng)
        if level == top:
            pop.add(Archmage, f"archmage-{level}", cx, cy - 1, name="Archmage", floor=level)
            for i in range(extra_adepts):
                pop.add(Adept, f"adept-top-{i}", cx + i - 1, cy + 1, name="Adept", floor=level)
        elif level > 0:
            pop.add(Adept, f"adept-{level}", cx - 1, cy + 1, name="Adept", floor=level)
            if extra_adepts > 0 and rng.random_bool():
                pop.add(Adept, f"adept2-{level}", cx + 1, cy, name="Adept", floor=level)

        pop.chest(*chest_spots[0], label=f"chest-{level}")
        if len(chest_spots) > 1:
            pop.chest(*chest_spots[1], label=f"vault-{level}")

        floors.append(make_floor(shape, level, grid, pop))

    logger.debug(f"Wizard's tower {poi_id}: {size}x{size}, {floor_count} floors.")
    return stacked_interior(poi_id, "wizards_tower", seed, rarity, floors)
