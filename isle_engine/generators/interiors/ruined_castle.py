# isle_engine/generators/interiors/ruined_castle.py
from __future__ import annotations
import logging

from ...core.types import POIInterior, Point
from ...core.utils.rng import rng_for
from .common import DEFAULT_SCALE, Population, TileGrid, check_rarity, round_half_up, scaled, tier
from .entities import Guard

logger = logging.getLogger(__name__)

BASE_SIZE = (44, 32)
MIN_SIZE = (30, 22)
ROOM_SIZE = (6, 5)
INNER_MARGIN = 6

OUTER_GAP_CHANCE = 0.05
INNER_GAP_CHANCE = 0.15
ROOM_GAP_CHANCE = 0.2
DEBRIS_WALL_CHANCE = 0.25


def _crumbling_wall(grid: TileGrid, rng, x: int, y: int, gap_chance: float) -> None:
    """Wall stone unless the roll leaves a hole; the outer rim is never touched."""
    if x <= 0 or y <= 0 or x >= grid.width - 1 or y >= grid.height - 1:
        return
    if rng.random_bool(gap_chance):
        return
    grid.set(x, y, "wall")


def _ring(grid: TileGrid, rng, x0: int, y0: int, x1: int, y1: int, gap_chance: float) -> None:
    for x in range(x0, x1 + 1):
        _crumbling_wall(grid, rng, x, y0, gap_chance)
        _crumbling_wall(grid, rng, x, y1, gap_chance)
    for y in range(y0, y1 + 1):
        _crumbling_wall(grid, rng, x0, y, gap_chance)
        _crumbling_wall(grid, rng, x1, y, gap_chance)


def _side_room(grid: TileGrid, rng, rx: int, ry: int) -> None:
    rw, rh = ROOM_SIZE
    for y in range(ry, ry + rh):
        for x in range(rx, rx + rw):
            rim = y in (ry, ry + rh - 1) or x in (rx, rx + rw - 1)
            if not rim:
                grid.set(x, y, "floor")
            elif rng.random() >= ROOM_GAP_CHANCE:
                grid.set(x, y, "wall")
    grid.set(rx + rw // 2, ry + rh - 1, "door")


def generate_ruined_castle(poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
    """
    Crumbling curtain wall with a south gate, an inner ring around the
    courtyard, four broken side rooms, fallen masonry, chests and guards.
    """
    check_rarity(rarity)
    rng = rng_for(seed, poi_id)
    scale = DEFAULT_SCALE[rarity]
    width = scaled(BASE_SIZE[0], scale, MIN_SIZE[0])
    height = scaled(BASE_SIZE[1], scale, MIN_SIZE[1])
    m = INNER_MARGIN

    grid = TileGrid(width, height, "floor")
    _ring(grid, rng, 1, 1, width - 2, height - 2, OUTER_GAP_CHANCE)

    cx = width // 2
    entrance = Point(cx, height - 2)
    grid.set(cx - 1, entrance.y, "door")
    grid.set(cx + 1, entrance.y, "door")
    grid.set(entrance.x, entrance.y, "entrance")

    _ring(grid, rng, m, m, width - m - 1, height - m - 1, INNER_GAP_CHANCE)
    door_y = height - m - 1
    for x in range(cx - 1, cx + 2):
        grid.set(x, door_y, "door")

    rw, rh = ROOM_SIZE
    for rx, ry in (
        (m + 1, m + 1),
        (width - m - 1 - rw, m + 1),
        (m + 1, height - m - 1 - rh),
        (width - m - 1 - rw, height - m - 1 - rh),
    ):
        _side_room(grid, rng, rx, ry)

    # Rubble only lands on plain floor so doors and the gate stay open.
    for _ in range(round_half_up(60 * scale)):
        x = rng.random_int(m + 1, width - m - 2)
        y = rng.random_int(m + 1, height - m - 2)
        if rng.random_bool(DEBRIS_WALL_CHANCE) and grid.get(x, y) == "floor":
            grid.set(x, y, "wall")

    pop = Population(rng)
    chest_spots = [
        (m + 2, m + 2),
        (width - m - 3, m + 2),
        (m + 2, height - m - 3),
        (width - m - 3, height - m - 3),
    ]
    for _ in range(tier(rarity, (0, 1, 2, 3))):
        chest_spots.append(
            (rng.random_int(m + 2, width - m - 3), rng.random_int(m + 2, height - m - 3))
        )
    for i, (x, y) in enumerate(chest_spots):
        if not pop.is_free(x, y):
            continue
        if grid.get(x, y) == "wall":
            grid.set(x, y, "floor")
        pop.chest(x, y, f"castle-chest-{i}")

    posts = [
        (cx - 3, door_y + 1, "gate"),
        (cx + 3, door_y + 1, "gate"),
        (m + 3, m + 3, "courtyard"),
        (width - m - 4, m + 3, "courtyard"),
    ]
    for _ in range(tier(rarity, (0, 2, 3, 4))):
        posts.append(
            (rng.random_int(m + 2, width - m - 3), rng.random_int(m + 2, height - m - 3), "patrol")
        )
    for i, (x, y, post) in enumerate(posts):
        if 1 < x < width - 1 and 1 < y < height - 1 and grid.walkable(x, y) and pop.is_free(x, y):
            pop.add(Guard, f"castle-guard-{i}", x, y, name="Castle Guard", post=post)

    logger.debug(
        f"Ruined castle {poi_id}: {width}x{height}, "
        f"{len(pop.containers)} chests, {len(pop.entities)} guards."
    )
    return POIInterior(
        id=poi_id,
        type="ruined_castle",
        seed=seed,
        rarity=rarity,
        layout=grid.to_layout(),
        entrance=entrance,
        entities=tuple(pop.entities),
        containers=tuple(pop.containers),
    )
