from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np

from ..core.types import POI, Point


@dataclass(frozen=True)
class RoadEdge:
    """One routed settlement link."""

    a: int  # index into RoadNetwork.settlements
    b: int
    weight: float
    extra: bool = False  # redundant link added on top of the MST
    path: Tuple[Point, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.a,
            "to": self.b,
            "weight": round(float(self.weight), 4),
            "extra": self.extra,
            "path": [p.to_dict() for p in self.path],
        }


@dataclass(frozen=True, eq=False)
class RoadNetwork:
    settlements: Tuple[POI, ...]
    edges: Tuple[RoadEdge, ...]
    components: Tuple[Tuple[int, ...], ...]  # settlement indices per landmass
    mask: np.ndarray = field(repr=False)  # bool grid, True on road cells

    @property
    def paths(self) -> List[List[Point]]:
        """Routed polylines in discovery order."""
        return [list(e.path) for e in self.edges]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "settlements": [p.id for p in self.settlements],
            "components": [list(c) for c in self.components],
            "edges": [e.to_dict() for e in self.edges],
        }
