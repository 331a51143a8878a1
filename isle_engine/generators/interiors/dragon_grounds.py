# isle_engine/generators/interiors/dragon_grounds.py
from __future__ import annotations
import logging
from typing import List

from ...core.types import POIInterior, Point
from ...core.utils.rng import DeterministicRNG, rng_for
from .common import DEFAULT_SCALE, Population, TileGrid, check_rarity, scaled, tier
from .entities import Dragon, GoldPile, JuniorDragon, Prisoner, Thrall
from .placement import Footprint, place_footprint

logger = logging.getLogger(__name__)

BASE_SIZE = (56, 42)
MIN_SIZE = (48, 36)
ENTRY_CHAMBER = (10, 8)
DUNGEON_SIZE = (8, 6)
CORRIDOR_WIDTH = 3
CHEST_ATTEMPTS = 20

GOLD_WEIGHT = (0.03, 0.08, 0.15, 0.25)
RED_WEIGHT = 0.35
GREEN_WEIGHT = 0.3


def pick_dragon_type(rng: DeterministicRNG, rarity: str) -> str:
    """Gold gets likelier with rarity; red and green are fixed, brown takes the rest."""
    roll = rng.random()
    gold = tier(rarity, GOLD_WEIGHT)
    if roll < gold:
        return "gold"
    if roll < gold + RED_WEIGHT:
        return "red"
    if roll < gold + RED_WEIGHT + GREEN_WEIGHT:
        return "green"
    return "brown"


def _carve_rect(grid: TileGrid, x: int, y: int, w: int, h: int) -> None:
    for yy in range(max(1, y), min(grid.height - 1, y + h)):
        for xx in range(max(1, x), min(grid.width - 1, x + w)):
            grid.set(xx, yy, "floor")


def _carve_corridor(grid: TileGrid, a: Point, b: Point, w: int = CORRIDOR_WIDTH) -> None:
    """L-shaped: along a.y to b.x, then along b.x to b.y."""
    half = w // 2
    for x in range(min(a.x, b.x), max(a.x, b.x) + 1):
        _carve_rect(grid, x, a.y - half, 1, w)
    for y in range(min(a.y, b.y), max(a.y, b.y) + 1):
        _carve_rect(grid, b.x - half, y, w, 1)


def generate_dragon_grounds(poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
    check_rarity(rarity)
    rng = rng_for(seed, poi_id)
    dragon_type = pick_dragon_type(rng, rarity)
    scale = DEFAULT_SCALE[rarity]
    width = scaled(BASE_SIZE[0], scale, MIN_SIZE[0])
    height = scaled(BASE_SIZE[1], scale, MIN_SIZE[1])

    grid = TileGrid(width, height, "wall")

    ew, eh = ENTRY_CHAMBER
    entry = Footprint(width // 2 - ew // 2, height - eh - 2, ew, eh)
    _carve_rect(grid, entry.x, entry.y, ew, eh)
    entrance = Point(entry.x + ew // 2, entry.y + eh - 1)

    rooms: List[Footprint] = [entry]
    lo, hi = tier(rarity, ((1, 3), (2, 4), (3, 5), (4, 6)))
    wanted = rng.random_int(lo, hi)
    for _ in range(wanted):
        rw = rng.random_int(10, 16)
        rh = rng.random_int(8, 12)
        room = place_footprint(
            grid, rng, rw, rh,
            open_tags=("wall",),
            margin_tags=("wall",),
            region=(4, 4, width - 4, height // 2 + rh),
        )
        if room is None:
            continue
        _carve_rect(grid, room.x, room.y, rw, rh)
        _carve_corridor(grid, rooms[-1].center, room.center)
        rooms.append(room)

    pop = Population(rng)

    dungeon = None
    if rarity in ("epic", "legendary"):
        base = rooms[len(rooms) // 2]
        dw, dh = DUNGEON_SIZE
        dx = max(3, base.x - rng.random_int(12, 18))
        dy = base.y + rng.random_int(0, max(0, base.height - dh))
        _carve_corridor(grid, Point(base.x + 2, base.y + base.height // 2), Point(dx + 4, dy + 3))
        _carve_rect(grid, dx, dy, dw, dh)
        dungeon = Footprint(dx, dy, dw, dh)

    grid.set(entrance.x, entrance.y, "entrance")

    lair = rooms[-1]
    dragon_cell = (lair.center.x, lair.center.y - 1)
    pop.reserve(*dragon_cell)

    if rng.random_bool(tier(rarity, (0.3, 0.5, 0.7, 0.9))):
        for i in range(tier(rarity, (1, 1, 2, 3))):
            x, y = entrance.x - 2 + i * 2, entrance.y - 2
            if not pop.is_free(x, y):
                continue
            if rarity != "common" and rng.random_bool():
                pop.add(JuniorDragon, f"jdragon-{i}", x, y, name="Young Dragon", dragon_type=dragon_type)
            else:
                pop.add(Thrall, f"thrall-{i}", x, y, name="Thrall")

    if dungeon is not None:
        for i in range(rng.random_int(1, 4 if rarity == "legendary" else 2)):
            if not pop.is_free(dungeon.x + 2 + i, dungeon.y + 2):
                continue
            pop.add(Prisoner, f"prisoner-{i}", dungeon.x + 2 + i, dungeon.y + 2, name="Prisoner")

    pop.add(
        Dragon,
        "dragon",
        dragon_cell[0],
        dragon_cell[1],
        name=f"{dragon_type.capitalize()} Dragon",
        dragon_type=dragon_type,
    )

    if dragon_type == "gold":
        gold_piles = tier(rarity, (6, 10, 18, 30))
    else:
        gold_piles = tier(rarity, (3, 3, 6, 10))
    for i in range(gold_piles):
        gx = rng.random_int(lair.x + 1, lair.x + lair.width - 2)
        gy = rng.random_int(lair.y + 1, lair.y + lair.height - 2)
        if grid.walkable(gx, gy) and pop.is_free(gx, gy):
            pop.add(GoldPile, f"gold-{i}", gx, gy, name="Gold", amount=rng.random_int(10, 50))

    for i in range(tier(rarity, (3, 4, 6, 8))):
        for _ in range(CHEST_ATTEMPTS):
            room = rooms[rng.random_int(0, len(rooms) - 1)]
            cx = rng.random_int(room.x + 1, room.x + room.width - 2)
            cy = rng.random_int(room.y + 1, room.y + room.height - 2)
            if pop.is_free(cx, cy):
                pop.chest(cx, cy, label=f"chest-{i}")
                break

    logger.debug(
        f"Dragon grounds {poi_id}: {width}x{height}, {len(rooms) - 1}/{wanted} chambers, {dragon_type} dragon."
    )
    return POIInterior(
        id=poi_id,
        type="dragon_grounds",
        seed=seed,
        rarity=rarity,
        layout=grid.to_layout(),
        entrance=entrance,
        entities=tuple(pop.entities),
        containers=tuple(pop.containers),
    )
