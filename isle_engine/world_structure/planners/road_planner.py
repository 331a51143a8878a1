# isle_engine/world_structure/planners/road_planner.py
from __future__ import annotations
import logging
import time
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ...algorithms.pathfinding.a_star import find_path as astar_find
from ...algorithms.pathfinding.helpers import NEI4, in_bounds
from ...algorithms.pathfinding.network import (
    build_mst,
    edge_weight,
    extra_edges,
    label_landmasses,
)
from ...algorithms.pathfinding.policies import ROAD_POLICY, RoadCostPolicy, make_road_policy
from ...core.constants import SETTLEMENT_POI_TYPES
from ...core.preset import Preset
from ...core.types import POI, Point, WorldSnapshot
from ...core.utils.rng import DeterministicRNG
from ..road_types import RoadEdge, RoadNetwork

logger = logging.getLogger(__name__)


class RoadMask:
    """
    Road cells stamped so far in one planning pass. Indexable as mask[y][x],
    which is what the A* search reads for the reuse bonus.
    """

    def __init__(self, size: int):
        self.size = size
        self.rows: List[List[bool]] = [[False] * size for _ in range(size)]

    def __getitem__(self, y: int) -> List[bool]:
        return self.rows[y]

    def is_road(self, x: int, y: int) -> bool:
        return in_bounds(self.size, self.size, x, y) and self.rows[y][x]

    def snap(self, path: Sequence[Point]) -> List[Point]:
        """Moves interior points that sit next to an existing road onto it."""
        out = list(path)
        for k in range(1, len(out) - 1):
            x, y = out[k]
            if self.rows[y][x]:
                continue
            for dx, dy in NEI4:
                if self.is_road(x + dx, y + dy):
                    out[k] = Point(x + dx, y + dy)
                    break
        return out

    def stamp(self, path: Sequence[Point]) -> None:
        for x, y in path:
            if in_bounds(self.size, self.size, x, y):
                self.rows[y][x] = True

    def to_array(self) -> np.ndarray:
        return np.array(self.rows, dtype=bool)


def river_mask_of(world: WorldSnapshot) -> np.ndarray:
    mask = np.zeros((world.size, world.size), dtype=bool)
    last = world.size - 1
    for river in world.rivers:
        for p in river.points:
            mask[min(max(p.y, 0), last), min(max(p.x, 0), last)] = True
    return mask


def policy_from_preset(preset: Preset) -> RoadCostPolicy:
    return make_road_policy(
        river_penalty=preset.roads["river_penalty"],
        road_bonus=preset.roads["road_bonus"],
    )


def _group_by_component(
    settlements: Sequence[POI], labels: np.ndarray
) -> List[Tuple[int, ...]]:
    """Settlement indices per landmass, ordered by each landmass's first settlement."""
    groups: Dict[int, List[int]] = {}
    for i, poi in enumerate(settlements):
        comp = int(labels[poi.position.y, poi.position.x])
        if comp < 0:
            continue
        groups.setdefault(comp, []).append(i)
    return [tuple(idxs) for idxs in groups.values()]


def plan_road_network(
    world: WorldSnapshot, seed: str, policy: RoadCostPolicy = ROAD_POLICY
) -> RoadNetwork:
    """
    Links villages and towns per landmass: greedy MST with river-aware edge
    weights plus a few random redundant links, each routed by A*. Edges
    without a route are dropped.
    """
    t0 = time.perf_counter()
    rng = DeterministicRNG(f"{seed}:roads")
    settlements = tuple(p for p in world.pois if p.type in SETTLEMENT_POI_TYPES)
    road_mask = RoadMask(world.size)

    if len(settlements) < 2:
        return RoadNetwork(settlements, (), (), road_mask.to_array())

    costs = policy.cost_grid(world.biome_map)
    river_mask = river_mask_of(world)
    components = _group_by_component(settlements, label_landmasses(costs))
    positions = [Point(p.position.x, p.position.y) for p in settlements]

    # Candidate links in discovery order: each component's MST, then its extras.
    links: List[Tuple[int, int, bool]] = []
    for idxs in components:
        if len(idxs) < 2:
            continue
        local = [positions[i] for i in idxs]
        for a, b in build_mst(local, lambda p, q: edge_weight(p, q, river_mask)):
            links.append((idxs[a], idxs[b], False))
        for a, b in extra_edges(len(idxs), rng):
            links.append((idxs[a], idxs[b], True))

    cost_rows = costs.tolist()
    river_rows = river_mask.tolist()
    edges: List[RoadEdge] = []
    for a, b, extra in links:
        path = astar_find(
            cost_rows, river_rows, road_mask, positions[a], positions[b], policy=policy
        )
        if not path or len(path) < 2:
            logger.debug(f"No route between settlements {a} and {b}; link dropped.")
            continue
        snapped = road_mask.snap([Point(x, y) for x, y in path])
        road_mask.stamp(snapped)
        edges.append(
            RoadEdge(
                a=a,
                b=b,
                weight=edge_weight(positions[a], positions[b], river_mask),
                extra=extra,
                path=tuple(snapped),
            )
        )

    logger.info(
        f"Roads: {len(edges)}/{len(links)} links routed for {len(settlements)} settlements "
        f"in {(time.perf_counter() - t0) * 1000:.1f} ms."
    )
    return RoadNetwork(settlements, tuple(edges), tuple(components), road_mask.to_array())


def generate_roads(
    world: WorldSnapshot, seed: str, policy: Optional[RoadCostPolicy] = None
) -> List[List[Point]]:
    """Ordered road polylines for `world`."""
    return plan_road_network(world, seed, policy or ROAD_POLICY).paths
