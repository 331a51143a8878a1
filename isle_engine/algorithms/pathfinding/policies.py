# isle_engine/algorithms/pathfinding/policies.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .helpers import Coord, NEI4, heuristic_l1
from ...core.constants import (
    BIOMES,
    DEFAULT_ROAD_TERRAIN_COST,
    ROAD_REUSE_BONUS,
    ROAD_RIVER_PENALTY,
)


@dataclass(frozen=True)
class RoadCostPolicy:
    """
    Road search profile: cost of entering a cell is
    terrain_cost[biome] + river_penalty (on river cells) - road_bonus (on road cells).
    """
    terrain_cost: Dict[str, float]
    river_penalty: float
    road_bonus: float
    neighbors: Tuple[Coord, ...]
    heuristic: Callable[[Coord, Coord], float]
    default_cost: float = 1.5

    def with_overrides(self, **kwargs) -> "RoadCostPolicy":
        return replace(self, **kwargs)

    def cost_of(self, biome: str) -> float:
        return self.terrain_cost.get(biome, self.default_cost)

    def cost_grid(self, biome_map: np.ndarray) -> np.ndarray:
        """Per-cell terrain cost for a biome-id grid (inf where impassable)."""
        lut = np.array([self.cost_of(name) for name in BIOMES], dtype=np.float64)
        return lut[biome_map]


def make_road_policy(
    river_penalty: float = ROAD_RIVER_PENALTY,
    road_bonus: float = ROAD_REUSE_BONUS,
    terrain_cost: Optional[Dict[str, float]] = None,
) -> RoadCostPolicy:
    """Policy for settlement roads."""
    costs = DEFAULT_ROAD_TERRAIN_COST.copy()
    if terrain_cost:
        costs.update(terrain_cost)
    return RoadCostPolicy(
        terrain_cost=costs,
        river_penalty=float(river_penalty),
        road_bonus=float(road_bonus),
        neighbors=NEI4,
        heuristic=heuristic_l1,
    )


# Default profile
ROAD_POLICY: RoadCostPolicy = make_road_policy()
