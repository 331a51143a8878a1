# isle_engine/generators/interiors/buildings.py
from __future__ import annotations
import logging
from typing import Dict, Tuple

from ...core.errors import UnknownArchetypeError
from ...core.types import POIInterior, Point
from ...core.utils.rng import rng_for
from .common import Population, TileGrid
from .entities import Guard, Merchant, Tradesperson, Villager

logger = logging.getLogger(__name__)

# building type -> (occupant label, display name, spot) where spot is
# "door" (centre column) / "left" / "right", always on row 2.
OCCUPANTS: Dict[str, Tuple[str, str, str]] = {
    "tavern": ("innkeeper", "Innkeeper", "door"),
    "shop": ("shopkeeper", "Shopkeeper", "door"),
    "blacksmith": ("smith", "Blacksmith", "left"),
    "alchemist": ("alchemist", "Alchemist", "right"),
    "bank": ("banker", "Banker", "door"),
    "library": ("librarian", "Librarian", "left"),
    "market": ("trader", "Trader", "door"),
    "guardhouse": ("captain", "Captain", "left"),
    "temple": ("priest", "Priest", "door"),
    "house": ("resident", "Resident", "left"),
}
BUILDING_TYPES = tuple(OCCUPANTS)


def _furnish(grid: TileGrid, rng, building_type: str, keep_clear) -> None:
    w, h = grid.width, grid.height
    if building_type == "tavern":
        for _ in range(3):
            x = rng.random_int(2, w - 3)
            y = rng.random_int(3, h - 3)
            if (x, y) not in keep_clear:
                grid.set(x, y, "table")
    elif building_type == "library":
        for x in range(3, w - 1):
            grid.set(x, 1, "bookshelf")
    elif building_type == "market":
        for x in range(2, w - 2, 2):
            if rng.random_bool(0.7) and (x, 5) not in keep_clear:
                grid.set(x, 5, "stall")


def generate_building_interior(poi_id: str, building_id: str, seed: str, building_type: str) -> POIInterior:
    """Single walled room behind a town building's door, with its occupant."""
    if building_type not in OCCUPANTS:
        raise UnknownArchetypeError(
            f"Unknown building type '{building_type}', expected one of {', '.join(BUILDING_TYPES)}"
        )
    rng = rng_for(seed, poi_id, building_id)
    size = 10 if building_type == "market" else 8

    grid = TileGrid(size, size, "floor")
    grid.outline_rect(0, 0, size, size)
    door_x = size // 2
    entrance = Point(door_x, size - 1)
    grid.set(entrance.x, entrance.y, "entrance")
    grid.set(door_x, size - 2, "floor")

    label, name, spot = OCCUPANTS[building_type]
    ox = {"door": door_x, "left": 2, "right": size - 3}[spot]
    oy = 3 if building_type == "market" else 2
    # occupant cell and the walk in from the door
    keep_clear = {(ox, oy), (door_x, size - 2)} | {(door_x, y) for y in range(oy, size - 1)}
    _furnish(grid, rng, building_type, keep_clear)

    pop = Population(rng)
    if building_type in ("tavern", "shop", "market"):
        role = {"tavern": "tavern_keeper", "shop": "shopkeeper", "market": "merchant"}[building_type]
        pop.add(Merchant, label, ox, oy, name=name, role=role)
    elif building_type == "guardhouse":
        pop.add(Guard, label, ox, oy, name=name, post="guardhouse")
    elif building_type == "house":
        pop.add(Villager, label, ox, oy, name=name)
        pop.chest(size - 3, 2, label=f"{building_id}-chest")
    else:
        pop.add(Tradesperson, label, ox, oy, name=name, profession=name.lower())

    logger.debug(f"Building {building_id} ({building_type}) in {poi_id}: {size}x{size}.")
    return POIInterior(
        id=building_id,
        type=building_type,
        seed=seed,
        rarity="common",
        layout=grid.to_layout(),
        entrance=entrance,
        entities=tuple(pop.entities),
        containers=tuple(pop.containers),
    )
