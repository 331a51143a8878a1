# isle_engine/generators/interiors/entities.py
"""
Interior entities. Each archetype is its own frozen dataclass with typed
state fields; KIND is the tag written to documents. ENTITY_VARIANTS is the
closed set of known kinds.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Tuple, Type

from ...core.types import Point

_COMMON_FIELDS = ("id", "position", "name")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class Entity:
    KIND: ClassVar[str] = "entity"

    id: str
    position: Point
    name: str = ""

    @property
    def kind(self) -> str:
        return self.KIND

    def state(self) -> Dict[str, Any]:
        """Variant-specific fields, camelCased for documents."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            if f.name in _COMMON_FIELDS:
                continue
            value = getattr(self, f.name)
            out[_camel(f.name)] = list(value) if isinstance(value, tuple) else value
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.KIND,
            "name": self.name,
            "position": self.position.to_dict(),
            "state": self.state(),
        }


# --- Settlements -------------------------------------------------------------


@dataclass(frozen=True)
class Villager(Entity):
    KIND: ClassVar[str] = "villager"
    dialogue: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Merchant(Entity):
    KIND: ClassVar[str] = "merchant"
    role: str = "merchant"  # merchant | tavern_keeper | shopkeeper
    dialogue: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Guard(Entity):
    KIND: ClassVar[str] = "guard"
    post: str = "patrol"
    dialogue: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Tradesperson(Entity):
    KIND: ClassVar[str] = "tradesperson"
    profession: str = ""
    dialogue: Tuple[str, ...] = ()


# --- Towers ------------------------------------------------------------------


@dataclass(frozen=True)
class Adept(Entity):
    KIND: ClassVar[str] = "adept"
    floor: int = 0


@dataclass(frozen=True)
class Archmage(Entity):
    KIND: ClassVar[str] = "archmage"
    floor: int = 0
    title: str = "Archmage"


@dataclass(frozen=True)
class Keeper(Entity):
    KIND: ClassVar[str] = "keeper"
    floor: int = 0


@dataclass(frozen=True)
class Boat(Entity):
    KIND: ClassVar[str] = "boat"
    collectible: bool = True


# --- Ritual sites ------------------------------------------------------------


@dataclass(frozen=True)
class Druid(Entity):
    KIND: ClassVar[str] = "druid"
    circle_slot: int = 0


@dataclass(frozen=True)
class Altar(Entity):
    KIND: ClassVar[str] = "altar"
    active: bool = True


@dataclass(frozen=True)
class Megalith(Entity):
    KIND: ClassVar[str] = "megalith"
    ring: int = 0


@dataclass(frozen=True)
class Portal(Entity):
    KIND: ClassVar[str] = "portal"
    active: bool = False


# --- Lairs -------------------------------------------------------------------


@dataclass(frozen=True)
class Creature(Entity):
    KIND: ClassVar[str] = "creature"
    species: str = "bat"
    hostile: bool = True


@dataclass(frozen=True)
class DragonEgg(Entity):
    KIND: ClassVar[str] = "dragon_egg"
    special: bool = True


@dataclass(frozen=True)
class Dragon(Entity):
    KIND: ClassVar[str] = "dragon"
    dragon_type: str = "red"


@dataclass(frozen=True)
class JuniorDragon(Entity):
    KIND: ClassVar[str] = "junior_dragon"
    dragon_type: str = "red"


@dataclass(frozen=True)
class Thrall(Entity):
    KIND: ClassVar[str] = "thrall"


@dataclass(frozen=True)
class Prisoner(Entity):
    KIND: ClassVar[str] = "prisoner"
    rescued: bool = False


@dataclass(frozen=True)
class GoldPile(Entity):
    KIND: ClassVar[str] = "gold_pile"
    amount: int = 0


ENTITY_VARIANTS: Dict[str, Type[Entity]] = {
    cls.KIND: cls
    for cls in (
        Villager,
        Merchant,
        Guard,
        Tradesperson,
        Adept,
        Archmage,
        Druid,
        Altar,
        Megalith,
        Portal,
        Creature,
        DragonEgg,
        Dragon,
        JuniorDragon,
        Thrall,
        Prisoner,
        GoldPile,
        Boat,
        Keeper,
    )
}
