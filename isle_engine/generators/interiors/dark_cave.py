# ==============================================================================
# File: isle_engine/generators/interiors/dark_cave.py
# Cellular-automata cavern. Noise fill, smoothing passes, an entrance corridor
# in the north, culling of everything not reachable from the entrance, then
# chests in dead ends, creatures and an optional dragon egg at the farthest
# reachable cell.
# ==============================================================================
from __future__ import annotations
import logging
from collections import deque
from typing import Optional, Tuple

import numpy as np
from scipy import ndimage

from ...algorithms.pathfinding.helpers import NEI4
from ...core.types import POIInterior, Point
from ...core.utils.rng import DeterministicRNG, rng_for
from .common import DEFAULT_SCALE, Population, TileGrid, check_rarity, scaled, tier
from .entities import Creature, DragonEgg

logger = logging.getLogger(__name__)

BASE_SIZE = (48, 36)
MIN_SIZE = (40, 30)
FLOOR_THRESHOLD = 0.45
SMOOTHING_PASSES = 4
CORRIDOR_LENGTH = 6
CORRIDOR_SIDE_CHANCE = 0.6
DEAD_END_CHEST_CHANCE = 0.25
CREATURE_SPECIES = ("bat", "slime")
EGG_CHANCE = (0.0, 0.05, 0.15, 1.0)

_NEIGHBOR_KERNEL = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.int32)


def _noise_fill(rng: DeterministicRNG, width: int, height: int) -> np.ndarray:
    walls = np.ones((height, width), dtype=bool)
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            walls[y, x] = not (rng.random() > FLOOR_THRESHOLD)
    return walls


def _smooth(walls: np.ndarray, passes: int = SMOOTHING_PASSES) -> np.ndarray:
    """Wall when more than 4 of 8 neighbours are wall, floor when fewer; out of bounds counts as wall."""
    for _ in range(passes):
        count = ndimage.convolve(walls.astype(np.int32), _NEIGHBOR_KERNEL, mode="constant", cval=1)
        nxt = walls.copy()
        inner = (slice(1, -1), slice(1, -1))
        nxt[inner] = np.where(count[inner] > 4, True, np.where(count[inner] < 4, False, walls[inner]))
        walls = nxt
    return walls


def _carve(walls: np.ndarray, x: int, y: int) -> None:
    h, w = walls.shape
    if 0 < x < w - 1 and 0 < y < h - 1:
        walls[y, x] = False


def _cull_unreachable(walls: np.ndarray, entrance: Point) -> np.ndarray:
    labels, _ = ndimage.label(~walls)
    keep = labels[entrance.y, entrance.x]
    return walls | (labels != keep)


def bfs_distances(walls: np.ndarray, start: Point) -> np.ndarray:
    """4-connected step distance from `start` over open cells, -1 where unreachable."""
    h, w = walls.shape
    dist = np.full((h, w), -1, dtype=np.int32)
    dist[start.y, start.x] = 0
    queue = deque([(start.x, start.y)])
    while queue:
        x, y = queue.popleft()
        for dx, dy in NEI4:
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and not walls[ny, nx] and dist[ny, nx] < 0:
                dist[ny, nx] = dist[y, x] + 1
                queue.append((nx, ny))
    return dist


def farthest_cell(dist: np.ndarray) -> Tuple[int, int]:
    """First cell in row-major order holding the largest distance."""
    flat = int(np.argmax(dist))
    y, x = divmod(flat, dist.shape[1])
    return x, y


def generate_dark_cave(
    poi_id: str,
    seed: str,
    rarity: str = "common",
    guaranteed_egg: Optional[bool] = None,
) -> POIInterior:
    check_rarity(rarity)
    rng = rng_for(seed, poi_id)
    scale = DEFAULT_SCALE[rarity]
    width = scaled(BASE_SIZE[0], scale, MIN_SIZE[0])
    height = scaled(BASE_SIZE[1], scale, MIN_SIZE[1])

    walls = _smooth(_noise_fill(rng, width, height))

    ex = width // 2
    ey = next((y for y in range(1, min(6, height - 1)) if not walls[y, ex]), 1)
    entrance = Point(ex, ey)
    walls[ey, ex] = False

    for i in range(1, CORRIDOR_LENGTH + 1):
        y = ey + i
        _carve(walls, ex, y)
        if rng.random_bool(CORRIDOR_SIDE_CHANCE):
            _carve(walls, ex - 1, y)
        if rng.random_bool(CORRIDOR_SIDE_CHANCE):
            _carve(walls, ex + 1, y)

    walls = _cull_unreachable(walls, entrance)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            _carve(walls, ex + dx, ey + dy)

    grid = TileGrid(width, height, "floor")
    for y, x in zip(*np.nonzero(walls)):
        grid.set(int(x), int(y), "wall")
    grid.set(ex, ey, "entrance")

    pop = Population(rng)
    # The egg, when there is one, sits on the cell farthest from the entrance.
    egg_cell = farthest_cell(bfs_distances(walls, entrance))
    pop.reserve(*egg_cell)
    chest_cap = scaled(5, scale)
    for y in range(2, height - 2):
        for x in range(2, width - 2):
            if walls[y, x] or len(pop.containers) >= chest_cap:
                continue
            open_sides = sum(1 for dx, dy in NEI4 if not walls[y + dy, x + dx])
            if open_sides == 1 and pop.is_free(x, y) and rng.random_bool(DEAD_END_CHEST_CHANCE):
                pop.chest(x, y)

    creature_count = rng.random_int(scaled(3, scale), scaled(7, scale))
    for i in range(creature_count):
        for _ in range(50):
            x = rng.random_int(2, width - 3)
            y = rng.random_int(2, height - 3)
            if walls[y, x] or (x, y) == (ex, ey) or not pop.is_free(x, y):
                continue
            species = rng.random_element(CREATURE_SPECIES)
            pop.add(Creature, f"mob-{i}", x, y, name=species.capitalize(), species=species)
            break

    if guaranteed_egg is None:
        egg_chance = tier(rarity, EGG_CHANCE)
        guaranteed_egg = egg_chance >= 1.0 or rng.random_bool(egg_chance)
    if guaranteed_egg:
        pop.add(DragonEgg, "egg-1", egg_cell[0], egg_cell[1], name="Dragon Egg", special=True)

    logger.debug(
        f"Dark cave {poi_id}: {width}x{height}, {int((~walls).sum())} open cells, "
        f"{len(pop.containers)} chests, egg={bool(guaranteed_egg)}."
    )
    return POIInterior(
        id=poi_id,
        type="dark_cave",
        seed=seed,
        rarity=rarity,
        layout=grid.to_layout(),
        entrance=entrance,
        entities=tuple(pop.entities),
        containers=tuple(pop.containers),
    )
