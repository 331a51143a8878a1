# isle_engine/generators/interiors/lighthouse.py
from __future__ import annotations
import logging
from typing import List

from ...core.types import Floor, POIInterior
from ...core.utils.rng import rng_for
from .common import DEFAULT_SCALE, Population, check_rarity, scaled, tier
from .entities import Boat, Keeper
from .placement import Footprint
from .towers import TowerShape, circular_floor, make_floor, stacked_interior

logger = logging.getLogger(__name__)

BASE_SIZE = 28
MIN_SIZE = 24
WALL_BAND = 0.9
BOAT_CHANCE = (0.1, 0.25, 0.4, 0.6)


def _outbuilding(grid, fp: Footprint, door_x: int, door_y: int) -> None:
    grid.outline_rect(fp.x, fp.y, fp.width, fp.height)
    grid.set(door_x, door_y, "door")


def generate_lighthouse(poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
    check_rarity(rarity)
    rng = rng_for(seed, poi_id)
    size = scaled(BASE_SIZE, DEFAULT_SCALE[rarity], MIN_SIZE)
    floor_count = tier(rarity, (3, 4, 5, 6))
    shape = TowerShape(size=size, radius=size // 2 - 3, wall_band=WALL_BAND, floors=floor_count)
    cx, cy = shape.cx, shape.cy

    floors: List[Floor] = []
    for level in range(floor_count):
        grid = circular_floor(shape, level)
        pop = Population(rng)

        if level == 0:
            # Boathouse south-west of the stairs, shed to the north-east.
            boathouse = Footprint(cx - 7, cy + 2, 6, 4)
            _outbuilding(grid, boathouse, boathouse.x + 3, boathouse.y + 3)
            shed = Footprint(cx + 3, cy - 6, 4, 4)
            _outbuilding(grid, shed, shed.x, shed.y + 2)

            pop.chest(boathouse.x + 1, boathouse.y + 2, label="boat-chest")
            pop.chest(shed.x + 2, shed.y + 2, label="shed-chest")
            if rng.random_bool(tier(rarity, BOAT_CHANCE)):
                pop.add(Boat, "boat-1", boathouse.x + 3, boathouse.y + 2, name="Boat", collectible=True)

        if level == floor_count - 1:
            pop.add(Keeper, "keeper", cx, cy - 1, name="Lighthouse Keeper", floor=level)

        floors.append(make_floor(shape, level, grid, pop))

    logger.debug(f"Lighthouse {poi_id}: {size}x{size}, {floor_count} floors.")
    return stacked_interior(poi_id, "lighthouse", seed, rarity, floors)
