# isle_engine/generators/interiors/placement.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence, Tuple

from ...core.types import Point
from ...core.utils.rng import DeterministicRNG
from .common import TileGrid


@dataclass(frozen=True)
class Footprint:
    x: int
    y: int
    width: int
    height: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        for yy in range(self.y, self.y + self.height):
            for xx in range(self.x, self.x + self.width):
                yield xx, yy

    def ring(self, margin: int = 1) -> Iterator[Tuple[int, int]]:
        """Cells within `margin` of the footprint, footprint excluded."""
        for yy in range(self.y - margin, self.y + self.height + margin):
            for xx in range(self.x - margin, self.x + self.width + margin):
                if self.x <= xx < self.x + self.width and self.y <= yy < self.y + self.height:
                    continue
                yield xx, yy

    @property
    def center(self) -> Point:
        return Point(self.x + self.width // 2, self.y + self.height // 2)


Adjacency = Callable[[TileGrid, Footprint], bool]


def touches_tags(tags: Sequence[str]) -> Adjacency:
    """Predicate: some cell right next to the footprint carries one of `tags`."""
    wanted = frozenset(tags)

    def _check(grid: TileGrid, fp: Footprint) -> bool:
        return any(
            grid.in_bounds(x, y) and grid.get(x, y) in wanted for x, y in fp.ring(1)
        )

    return _check


def _fits(
    grid: TileGrid,
    fp: Footprint,
    open_tags: frozenset,
    margin_tags: Optional[frozenset],
    clearance: int,
    adjacency: Optional[Adjacency],
) -> bool:
    for x, y in fp.cells():
        if not grid.in_bounds(x, y) or grid.get(x, y) not in open_tags:
            return False
    if margin_tags is not None and clearance > 0:
        for x, y in fp.ring(clearance):
            if grid.in_bounds(x, y) and grid.get(x, y) not in margin_tags:
                return False
    return adjacency is None or adjacency(grid, fp)


def place_footprint(
    grid: TileGrid,
    rng: DeterministicRNG,
    width: int,
    height: int,
    adjacency: Optional[Adjacency] = None,
    clearance: int = 1,
    open_tags: Sequence[str] = ("grass",),
    margin_tags: Optional[Sequence[str]] = ("grass", "road"),
    attempts: int = 50,
    edge: int = 2,
    region: Optional[Tuple[int, int, int, int]] = None,
    required: bool = False,
) -> Optional[Footprint]:
    """
    Bounded rejection sampling for a width x height structure.

    A candidate is accepted when every footprint cell is in `open_tags`, every
    in-bounds cell within `clearance` of it is in `margin_tags`, and the
    `adjacency` predicate (if any) holds. The footprint must lie inside
    `region` = (x0, y0, x1, y1), half-open, which defaults to the grid minus
    `edge` cells on each side.

    Returns None once `attempts` anchors have been rejected; with
    `required=True` the anchors are then scanned row by row before giving up.
    Nothing is drawn on the grid.
    """
    x0, y0, x1, y1 = region or (edge, edge, grid.width - edge, grid.height - edge)
    max_x = x1 - width
    max_y = y1 - height
    if max_x < x0 or max_y < y0:
        return None

    open_set = frozenset(open_tags)
    margin_set = frozenset(margin_tags) if margin_tags is not None else None

    for _ in range(attempts):
        fp = Footprint(rng.random_int(x0, max_x), rng.random_int(y0, max_y), width, height)
        if _fits(grid, fp, open_set, margin_set, clearance, adjacency):
            return fp

    if required:
        for y in range(y0, max_y + 1):
            for x in range(x0, max_x + 1):
                fp = Footprint(x, y, width, height)
                if _fits(grid, fp, open_set, margin_set, clearance, adjacency):
                    return fp
    return None


def draw_building(grid: TileGrid, fp: Footprint, overlay: Optional[str] = None) -> Point:
    """Walls on the rim, floor inside, a door mid-bottom. Returns the door."""
    grid.outline_rect(fp.x, fp.y, fp.width, fp.height)
    door = Point(fp.x + fp.width // 2, fp.y + fp.height - 1)
    grid.set(door.x, door.y, "door")
    if overlay is not None:
        # type marker for renderers
        grid.set(fp.x + 1, fp.y + 1, overlay)
    return door
