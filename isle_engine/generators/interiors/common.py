# ==============================================================================
# File: isle_engine/generators/interiors/common.py
# Shared pieces of the interior generators: rarity scaling, the tag grid and
# the entity/container collector.
# ==============================================================================
from __future__ import annotations
import math
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, Type

from ...core.constants import RARITIES
from ...core.errors import UnknownRarityError
from ...core.types import Cell, Container, Layout, Point
from ...core.utils.rng import DeterministicRNG
from .entities import Entity

# Footprint multipliers per rarity tier.
DEFAULT_SCALE: Dict[str, float] = {"common": 1.0, "rare": 1.15, "epic": 1.35, "legendary": 1.6}
TOWN_SCALE: Dict[str, float] = {"common": 1.0, "rare": 1.25, "epic": 1.5, "legendary": 1.8}

# Tags that block movement. Everything else (floor, grass, road, door,
# entrance, stairs, building overlays) is walkable.
BLOCKING_TAGS = frozenset({"wall", "table", "bookshelf", "stall"})


def check_rarity(rarity: str) -> str:
    if rarity not in RARITIES:
        raise UnknownRarityError(f"Unknown rarity '{rarity}', expected one of {', '.join(RARITIES)}")
    return rarity


def tier(rarity: str, values: Sequence[Any]) -> Any:
    """Picks the value for `rarity` from (common, rare, epic, legendary)."""
    return values[RARITIES.index(rarity)]


def round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def scaled(base: float, scale: float, minimum: int = 1) -> int:
    return max(minimum, round_half_up(base * scale))


def is_walkable_tag(tag: str) -> bool:
    return tag not in BLOCKING_TAGS


class TileGrid:
    """Mutable tag grid used while an interior is being built; frozen by to_layout()."""

    def __init__(self, width: int, height: int, fill: str):
        self.width = width
        self.height = height
        self.tags: List[List[str]] = [[fill] * width for _ in range(height)]
        self.sprites: Dict[Tuple[int, int], str] = {}

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> str:
        return self.tags[y][x]

    def set(self, x: int, y: int, tag: str, sprite: Optional[str] = None) -> None:
        if not self.in_bounds(x, y):
            return
        self.tags[y][x] = tag
        if sprite is None:
            self.sprites.pop((x, y), None)
        else:
            self.sprites[(x, y)] = sprite

    def walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and is_walkable_tag(self.tags[y][x])

    def fill_rect(self, x: int, y: int, w: int, h: int, tag: str) -> None:
        for yy in range(y, y + h):
            for xx in range(x, x + w):
                self.set(xx, yy, tag)

    def outline_rect(self, x: int, y: int, w: int, h: int, wall: str = "wall", inner: str = "floor") -> None:
        """Walled box: `wall` on the rim, `inner` inside."""
        for yy in range(y, y + h):
            for xx in range(x, x + w):
                edge = yy == y or yy == y + h - 1 or xx == x or xx == x + w - 1
                self.set(xx, yy, wall if edge else inner)

    def count(self, tag: str) -> int:
        return sum(row.count(tag) for row in self.tags)

    def to_layout(self) -> Layout:
        cache: Dict[Tuple[str, Optional[str]], Cell] = {}
        rows = []
        for y, row in enumerate(self.tags):
            out = []
            for x, tag in enumerate(row):
                key = (tag, self.sprites.get((x, y)))
                cell = cache.get(key)
                if cell is None:
                    cell = cache[key] = Cell(tag, is_walkable_tag(tag), key[1])
                out.append(cell)
            rows.append(tuple(out))
        return tuple(rows)


class Population:
    """
    Collects entities and containers in creation order with deterministic ids.
    Tracks the cells they occupy; callers placing at random positions check
    `is_free` first, so no two of them share a cell.
    """

    def __init__(self, rng: DeterministicRNG):
        self.rng = rng
        self.entities: List[Entity] = []
        self.containers: List[Container] = []
        self.occupied: Set[Tuple[int, int]] = set()

    def is_free(self, x: int, y: int) -> bool:
        return (x, y) not in self.occupied

    def reserve(self, x: int, y: int) -> None:
        self.occupied.add((x, y))

    def add(self, cls: Type[Entity], label: str, x: int, y: int, **state: Any) -> Entity:
        entity = cls(id=self.rng.deterministic_id(label), position=Point(x, y), **state)
        self.entities.append(entity)
        self.occupied.add((x, y))
        return entity

    def chest(self, x: int, y: int, label: Optional[str] = None) -> Container:
        container = Container(
            id=self.rng.deterministic_id(label or f"chest-{x}-{y}"),
            position=Point(x, y),
        )
        self.containers.append(container)
        self.occupied.add((x, y))
        return container
