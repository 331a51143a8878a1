# isle_engine/world_structure/planners/spawn_planner.py
from __future__ import annotations

import numpy as np

from ...core.biomes import WALKABLE_BY_ID
from ...core.constants import BIOME_OCEAN, BIOME_TO_ID
from ...core.types import Point


def find_spawn_point(biome_map: np.ndarray) -> Point:
    """
    Walkable, non-ocean cell nearest the grid centre (squared distance,
    ties by row then column). Falls back to the centre itself.
    """
    size = biome_map.shape[0]
    center = size // 2
    ok = WALKABLE_BY_ID[biome_map] & (biome_map != BIOME_TO_ID[BIOME_OCEAN])
    if not ok.any():
        return Point(center, center)

    ys, xs = np.nonzero(ok)  # row-major, so argmin keeps the first row/column on ties
    d2 = (xs - center) ** 2 + (ys - center) ** 2
    k = int(np.argmin(d2))
    return Point(int(xs[k]), int(ys[k]))
