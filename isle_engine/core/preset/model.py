from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Preset:
    id: str
    size: int
    terrain: Dict[str, Any]
    climate: Dict[str, Any]
    rivers: Dict[str, Any]
    pois: Dict[str, Any]
    roads: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "size": self.size,
            "terrain": dict(self.terrain),
            "climate": dict(self.climate),
            "rivers": dict(self.rivers),
            "pois": dict(self.pois),
            "roads": dict(self.roads),
        }
