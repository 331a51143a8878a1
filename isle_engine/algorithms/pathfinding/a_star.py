# isle_engine/algorithms/pathfinding/a_star.py
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple
import heapq
import math

from .policies import RoadCostPolicy, ROAD_POLICY
from .helpers import Coord, in_bounds, reconstruct

Grid = Sequence[Sequence[float]]
Mask = Sequence[Sequence[bool]]


def find_path(
    cost_grid: Grid,
    river_mask: Mask,
    road_mask: Mask,
    start_pos: Tuple[int, int],
    end_pos: Tuple[int, int],
    policy: RoadCostPolicy = ROAD_POLICY,
    max_expansions: Optional[int] = None,
) -> List[Coord] | None:
    """
    A* over row-major grids indexed [y][x]. Entering a cell costs its terrain
    cost, plus the river penalty on river cells, minus the road bonus on cells
    already carrying a road. Equal f-scores pop in insertion order.
    Returns None when the goal is unreachable or the expansion cap is hit.
    """
    if not cost_grid or not cost_grid[0]:
        return None

    w, h = len(cost_grid[0]), len(cost_grid)
    sx, sy = start_pos
    gx, gy = end_pos

    if not (in_bounds(w, h, sx, sy) and in_bounds(w, h, gx, gy)):
        return None
    if cost_grid[sy][sx] == math.inf or cost_grid[gy][gx] == math.inf:
        return None

    start: Coord = (sx, sy)
    goal: Coord = (gx, gy)
    limit = max_expansions if max_expansions is not None else w * h

    open_heap: List[Tuple[float, int, Coord]] = []
    heapq.heappush(open_heap, (policy.heuristic(start, goal), 0, start))
    came_from: Dict[Coord, Coord] = {}
    g_score: Dict[Coord, float] = {start: 0.0}
    closed: set[Coord] = set()
    tie_breaker = 0
    expansions = 0

    while open_heap and expansions < limit:
        _, _, current = heapq.heappop(open_heap)
        if current in closed:
            continue
        if current == goal:
            return reconstruct(came_from, current)

        closed.add(current)
        expansions += 1
        cx, cy = current

        for dx, dy in policy.neighbors:
            nx, ny = cx + dx, cy + dy
            if not in_bounds(w, h, nx, ny):
                continue
            terr = cost_grid[ny][nx]
            if terr == math.inf:
                continue

            step_cost = terr
            if river_mask[ny][nx]:
                step_cost += policy.river_penalty
            if road_mask[ny][nx]:
                step_cost -= policy.road_bonus

            tentative_g = g_score[current] + step_cost
            nbr: Coord = (nx, ny)

            if tentative_g < g_score.get(nbr, math.inf):
                came_from[nbr] = current
                g_score[nbr] = tentative_g
                tie_breaker += 1
                f_score = tentative_g + policy.heuristic(nbr, goal)
                heapq.heappush(open_heap, (f_score, tie_breaker, nbr))
    return None
