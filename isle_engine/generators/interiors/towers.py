# ==============================================================================
# File: isle_engine/generators/interiors/towers.py
# Circular multi-floor structures shared by the wizard's tower and the
# lighthouse. Every floor uses the same footprint; stairs-up sits east of the
# centre, stairs-down west of it, and only level 0 opens to the outside.
# ==============================================================================
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from ...core.types import Floor, POIInterior, Point
from ...core.utils.rng import DeterministicRNG
from .common import Population, TileGrid


@dataclass(frozen=True)
class TowerShape:
    size: int
    radius: int
    wall_band: float
    floors: int

    @property
    def cx(self) -> int:
        return self.size // 2

    @property
    def cy(self) -> int:
        return self.size // 2

    def entrance(self, level: int) -> Optional[Point]:
        return Point(self.cx, self.cy + self.radius) if level == 0 else None

    def stairs_up(self, level: int) -> Optional[Point]:
        return Point(self.cx + 2, self.cy) if level < self.floors - 1 else None

    def stairs_down(self, level: int) -> Optional[Point]:
        return Point(self.cx - 2, self.cy) if level > 0 else None


def circular_floor(shape: TowerShape, level: int) -> TileGrid:
    """Wall everywhere outside the ring and on it, floor inside, plus entrance/stairs."""
    grid = TileGrid(shape.size, shape.size, "floor")
    r = shape.radius
    for y in range(shape.size):
        for x in range(shape.size):
            d = math.hypot(x - shape.cx, y - shape.cy)
            if d > r + 0.6 or abs(d - r) < shape.wall_band:
                grid.set(x, y, "wall")

    entrance = shape.entrance(level)
    if entrance is not None:
        grid.set(entrance.x, entrance.y, "entrance")
        # keep the doorway open into the room
        grid.set(entrance.x, entrance.y - 1, "floor")
    up = shape.stairs_up(level)
    if up is not None:
        grid.set(up.x, up.y, "stairs_up")
    down = shape.stairs_down(level)
    if down is not None:
        grid.set(down.x, down.y, "stairs_down")
    return grid


def scatter_decor(
    grid: TileGrid,
    rng: DeterministicRNG,
    shape: TowerShape,
    reserved: Iterable[Tuple[int, int]],
    tag: str = "bookshelf",
    draws: int = 20,
    chance: float = 0.2,
) -> int:
    """Turns a few inner floor cells into blocking furniture, away from reserved cells."""
    blocked: Set[Tuple[int, int]] = set()
    for x, y in reserved:
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                blocked.add((x + dx, y + dy))

    r = shape.radius
    placed = 0
    for _ in range(draws):
        x = rng.random_int(shape.cx - r + 2, shape.cx + r - 2)
        y = rng.random_int(shape.cy - r + 2, shape.cy + r - 2)
        roll = rng.random()
        if roll < chance and grid.get(x, y) == "floor" and (x, y) not in blocked:
            grid.set(x, y, tag)
            placed += 1
    return placed


def reserved_cells(shape: TowerShape, level: int, extra: Iterable[Tuple[int, int]] = ()) -> List[Tuple[int, int]]:
    cells = [tuple(p) for p in (shape.entrance(level), shape.stairs_up(level), shape.stairs_down(level)) if p]
    cells.extend(extra)
    return cells


def make_floor(shape: TowerShape, level: int, grid: TileGrid, pop: Population) -> Floor:
    return Floor(
        level=level,
        layout=grid.to_layout(),
        entities=tuple(pop.entities),
        containers=tuple(pop.containers),
        entrance=shape.entrance(level),
        stairs_up=shape.stairs_up(level),
        stairs_down=shape.stairs_down(level),
    )


def stacked_interior(poi_id: str, poi_type: str, seed: str, rarity: str, floors: List[Floor]) -> POIInterior:
    """Ground floor mirrored at the top level."""
    ground = floors[0]
    return POIInterior(
        id=poi_id,
        type=poi_type,
        seed=seed,
        rarity=rarity,
        layout=ground.layout,
        entrance=ground.entrance,
        entities=ground.entities,
        containers=ground.containers,
        floors=tuple(floors),
    )
