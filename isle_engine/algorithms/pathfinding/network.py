# isle_engine/algorithms/pathfinding/network.py
from __future__ import annotations
from typing import Callable, List, Tuple
import math

import numpy as np
from scipy import ndimage

from .helpers import Coord
from ...core.utils.rng import DeterministicRNG

# 4-connectivity
_STRUCTURE_4 = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=bool)


def label_landmasses(cost_grid: np.ndarray) -> np.ndarray:
    """
    Component id per cell over finite-cost cells (4-connected), -1 elsewhere.
    Ids are numbered in row-major order of each component's first cell.
    """
    passable = np.isfinite(cost_grid)
    labels, _ = ndimage.label(passable, structure=_STRUCTURE_4)
    return labels.astype(np.int64) - 1


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def river_crossing_fraction(a: Coord, b: Coord, river_mask: np.ndarray) -> float:
    """Share of points sampled along the straight segment a-b that land on a river cell."""
    h, w = river_mask.shape
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    steps = max(1, int(math.floor(math.hypot(dx, dy))))
    samples = 0
    crosses = 0
    for t in range(steps + 1):
        x = _round_half_up(a[0] - dx * t / steps)
        y = _round_half_up(a[1] - dy * t / steps)
        samples += 1
        if 0 <= x < w and 0 <= y < h and river_mask[y, x]:
            crosses += 1
    return crosses / max(1, samples)


def edge_weight(a: Coord, b: Coord, river_mask: np.ndarray) -> float:
    """Euclidean distance, inflated by up to 4x for lines running over rivers."""
    dist = math.hypot(a[0] - b[0], a[1] - b[1])
    return dist * (1.0 + 3.0 * river_crossing_fraction(a, b, river_mask))


def build_mst(points: List[Coord], weight: Callable[[Coord, Coord], float]) -> List[Tuple[int, int]]:
    """
    Greedy Prim from points[0]: each round links the cheapest (tree, outside)
    pair. Strict '<' keeps the first pair found, scanning tree nodes and then
    candidates by index. Edges come back in discovery order.
    """
    n = len(points)
    if n <= 1:
        return []
    in_tree = [False] * n
    in_tree[0] = True
    edges: List[Tuple[int, int]] = []
    for _ in range(n - 1):
        best_i = best_j = -1
        best_w = math.inf
        for i in range(n):
            if not in_tree[i]:
                continue
            for j in range(n):
                if in_tree[j]:
                    continue
                wgt = weight(points[i], points[j])
                if wgt < best_w:
                    best_w, best_i, best_j = wgt, i, j
        if best_j < 0:
            break
        in_tree[best_j] = True
        edges.append((best_i, best_j))
    return edges


def extra_edges(n: int, rng: DeterministicRNG) -> List[Tuple[int, int]]:
    """Up to min(2, n // 3) random redundant links; self-pairs are skipped."""
    out: List[Tuple[int, int]] = []
    for _ in range(min(2, n // 3)):
        i = rng.random_int(0, n - 1)
        j = rng.random_int(0, n - 1)
        if i != j:
            out.append((i, j))
    return out
