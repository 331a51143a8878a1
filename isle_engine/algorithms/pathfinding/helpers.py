# isle_engine/algorithms/pathfinding/helpers.py
from __future__ import annotations
from typing import Dict, List, Tuple

# Cell coordinate (x, y)
Coord = Tuple[int, int]

# Neighbour sets
NEI4: Tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
NEI8: Tuple[Coord, ...] = NEI4 + ((1, 1), (-1, 1), (1, -1), (-1, -1))

# ------------------------- CELLS / NEIGHBOURS -------------------------


def in_bounds(w: int, h: int, x: int, y: int) -> bool:
    """True when (x, y) lies inside [0..w-1]x[0..h-1]."""
    return 0 <= x < w and 0 <= y < h


# ------------------------------ HEURISTICS ------------------------------


def heuristic_l1(a: Coord, b: Coord) -> float:
    """Manhattan (for 4-neighbours)."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# ------------------------------ PATHS ------------------------------


def reconstruct(came_from: Dict[Coord, Coord], current: Coord) -> List[Coord]:
    """Rebuilds the path from the predecessor map."""
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path
