# isle_engine/core/types.py
from __future__ import annotations
import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from .constants import ID_TO_BIOME

if TYPE_CHECKING:
    from ..generators.interiors.entities import Entity


class Point(NamedTuple):
    """Grid coordinate (x = column, y = row)."""

    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": int(self.x), "y": int(self.y)}


def point_dict(p: Optional[Point]) -> Optional[Dict[str, int]]:
    return p.to_dict() if p is not None else None


# ==============================================================================
# WORLD
# ==============================================================================


@dataclass(frozen=True)
class River:
    """Ordered polyline from source to mouth, one width per point."""

    points: Tuple[Point, ...]
    widths: Tuple[float, ...]
    stream_order: int
    flow_accumulation: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [
                {"x": int(p.x), "y": int(p.y), "width": round(float(w), 3)}
                for p, w in zip(self.points, self.widths)
            ],
            "streamOrder": self.stream_order,
            "flowAccumulation": float(self.flow_accumulation),
        }


@dataclass(frozen=True)
class POI:
    """Placement record only; the interior is generated separately."""

    id: str
    type: str
    position: Point
    rarity: str
    discovered: bool
    unique: bool
    name: str
    seed: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "position": self.position.to_dict(),
            "rarity": self.rarity,
            "discovered": self.discovered,
            "unique": self.unique,
            "name": self.name,
            "seed": self.seed,
        }


@dataclass(frozen=True, eq=False)
class WorldSnapshot:
    seed: str
    size: int
    height_map: np.ndarray
    moisture_map: np.ndarray
    temperature_map: np.ndarray
    biome_map: np.ndarray
    rivers: Tuple[River, ...]
    pois: Tuple[POI, ...]
    spawn_point: Point
    confluences: Tuple[Point, ...] = ()

    def __post_init__(self):
        shape = (self.size, self.size)
        for name in ("height_map", "moisture_map", "temperature_map", "biome_map"):
            arr = getattr(self, name)
            if arr.shape != shape:
                raise ValueError(f"{name} has shape {arr.shape}, expected {shape}")
            arr.flags.writeable = False

    def biome_at(self, x: int, y: int) -> str:
        return ID_TO_BIOME[int(self.biome_map[y, x])]

    def biome_grid(self) -> List[List[str]]:
        return [[ID_TO_BIOME[int(v)] for v in row] for row in self.biome_map]

    def digest(self) -> str:
        """Stable content hash over every field, for equality checks across runs."""
        h = hashlib.sha256()
        h.update(self.seed.encode("utf-8"))
        h.update(str(self.size).encode("ascii"))
        for arr in (self.height_map, self.moisture_map, self.temperature_map, self.biome_map):
            h.update(np.ascontiguousarray(arr).tobytes())
        h.update(repr(self.rivers).encode("utf-8"))
        h.update(repr(self.confluences).encode("utf-8"))
        h.update(repr(self.pois).encode("utf-8"))
        h.update(repr(self.spawn_point).encode("utf-8"))
        return h.hexdigest()


# ==============================================================================
# INTERIORS
# ==============================================================================


@dataclass(frozen=True)
class Cell:
    type: str
    walkable: bool
    sprite: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type, "walkable": self.walkable}
        if self.sprite is not None:
            out["sprite"] = self.sprite
        return out


Layout = Tuple[Tuple[Cell, ...], ...]


@dataclass(frozen=True)
class Container:
    id: str
    position: Point
    opened: bool = False
    items: Tuple[Any, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "position": self.position.to_dict(),
            "opened": self.opened,
            "items": list(self.items),
        }


@dataclass(frozen=True)
class Floor:
    level: int
    layout: Layout
    entities: Tuple["Entity", ...]
    containers: Tuple[Container, ...]
    entrance: Optional[Point] = None
    stairs_up: Optional[Point] = None
    stairs_down: Optional[Point] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "layout": [[c.to_dict() for c in row] for row in self.layout],
            "entities": [e.to_dict() for e in self.entities],
            "containers": [c.to_dict() for c in self.containers],
            "entrance": point_dict(self.entrance),
            "stairsUp": point_dict(self.stairs_up),
            "stairsDown": point_dict(self.stairs_down),
        }


@dataclass(frozen=True)
class TownBuilding:
    id: str
    type: str
    x: int
    y: int
    size: int
    door: Point

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "door": self.door.to_dict(),
        }


@dataclass(frozen=True)
class POIInterior:
    id: str
    type: str
    seed: str
    rarity: str
    layout: Layout
    entrance: Optional[Point]
    entities: Tuple["Entity", ...]
    containers: Tuple[Container, ...]
    cleared: bool = False
    floors: Tuple[Floor, ...] = ()
    buildings: Tuple[TownBuilding, ...] = field(default=())

    @property
    def width(self) -> int:
        return len(self.layout[0]) if self.layout else 0

    @property
    def height(self) -> int:
        return len(self.layout)

    def cell(self, x: int, y: int) -> Cell:
        return self.layout[y][x]

    def all_layouts(self) -> List[Layout]:
        return [f.layout for f in self.floors] if self.floors else [self.layout]

    def to_document(self) -> Dict[str, Any]:
        """JSON-compatible document handed to the dynamic-state store."""
        doc: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "seed": self.seed,
            "rarity": self.rarity,
            "width": self.width,
            "height": self.height,
            "layout": [[c.to_dict() for c in row] for row in self.layout],
            "entrance": point_dict(self.entrance),
            "entities": [e.to_dict() for e in self.entities],
            "containers": [c.to_dict() for c in self.containers],
            "cleared": self.cleared,
        }
        if self.floors:
            doc["floors"] = [f.to_dict() for f in self.floors]
            doc["currentFloor"] = 0
        if self.buildings:
            doc["buildings"] = [b.to_dict() for b in self.buildings]
        return doc
