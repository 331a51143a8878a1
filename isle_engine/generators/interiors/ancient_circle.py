# isle_engine/generators/interiors/ancient_circle.py
from __future__ import annotations
import logging
import math

from ...core.types import POIInterior, Point
from ...core.utils.rng import rng_for
from .common import DEFAULT_SCALE, Population, TileGrid, check_rarity, round_half_up, scaled, tier
from .entities import Altar, Druid, Megalith, Portal

logger = logging.getLogger(__name__)

BASE_SIZE = (40, 32)
MIN_SIZE = (36, 28)
DRUID_RADIUS = 3
PLACEMENT_ATTEMPTS = 20


def generate_ancient_circle(poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
    """
    Open clearing with one to three rings of standing stones around an altar,
    a path from the south edge to the centre, druids, chests and, for the
    rarest circles, a portal.
    """
    check_rarity(rarity)
    rng = rng_for(seed, poi_id)
    scale = DEFAULT_SCALE[rarity]
    width = scaled(BASE_SIZE[0], scale, MIN_SIZE[0])
    height = scaled(BASE_SIZE[1], scale, MIN_SIZE[1])
    cx, cy = width // 2, height // 2

    grid = TileGrid(width, height, "floor")
    entrance = Point(cx, height - 2)
    grid.set(entrance.x, entrance.y, "entrance")

    def on_path(x: int, y: int) -> bool:
        return abs(x - cx) <= 1 and y >= cy

    def near_altar(x: int, y: int) -> bool:
        return abs(x - cx) <= 1 and abs(y - cy) <= 1

    pop = Population(rng)

    for ring in range(tier(rarity, (1, 2, 2, 3))):
        radius = math.floor(min(width, height) / 2.8) - ring * 3
        stones = max(8, round_half_up(12 * scale) - ring * 2)
        for i in range(stones):
            angle = i / stones * math.pi * 2
            x = cx + round_half_up(math.cos(angle) * radius)
            y = cy + round_half_up(math.sin(angle) * radius)
            if not (0 < x < width - 1 and 0 < y < height - 1):
                continue
            if on_path(x, y) or near_altar(x, y) or grid.get(x, y) == "wall":
                continue
            grid.set(x, y, "wall")
            pop.add(Megalith, f"stone-{ring}-{i}", x, y, name="Standing Stone", ring=ring)

    pop.add(Altar, "altar", cx, cy, name="Altar")

    druids = tier(rarity, (2, 3, 4, 5))
    for i in range(druids):
        angle = i / druids * math.pi * 2
        pop.add(
            Druid,
            f"druid-{i}",
            cx + round_half_up(math.cos(angle) * DRUID_RADIUS),
            cy + round_half_up(math.sin(angle) * DRUID_RADIUS),
            name="Druid",
            circle_slot=i,
        )

    if rarity == "legendary" or (rarity == "epic" and rng.random_bool()):
        for _ in range(PLACEMENT_ATTEMPTS):
            px = cx + rng.random_int(-2, 2)
            py = cy + rng.random_int(-2, 2)
            if pop.is_free(px, py):
                pop.add(Portal, "portal", px, py, name="Ancient Portal", active=rarity == "legendary")
                break

    for i in range(tier(rarity, (1, 2, 3, 4))):
        x = rng.random_int(2, width - 3)
        y = rng.random_int(2, height - 3)
        if grid.walkable(x, y) and pop.is_free(x, y):
            pop.chest(x, y, label=f"chest-{i}")

    logger.debug(f"Ancient circle {poi_id}: {width}x{height}, {len(pop.entities)} entities.")
    return POIInterior(
        id=poi_id,
        type="ancient_circle",
        seed=seed,
        rarity=rarity,
        layout=grid.to_layout(),
        entrance=entrance,
        entities=tuple(pop.entities),
        containers=tuple(pop.containers),
    )
