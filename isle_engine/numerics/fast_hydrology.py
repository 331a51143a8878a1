# File: isle_engine/numerics/fast_hydrology.py
from __future__ import annotations

import numpy as np
from numba import njit

# D8 neighbour order (dy, dx): N, NE, E, SE, S, SW, W, NW
D8_NEIGHBORS = np.array([
    [-1, 0], [-1, 1], [0, 1], [1, 1],
    [1, 0], [1, -1], [0, -1], [-1, -1]
], dtype=np.int64)


@njit(cache=True)
def build_d8_flow_directions(heights: np.ndarray) -> np.ndarray:
    """
    For every cell, the index (0-7) of its lowest strictly-lower neighbour,
    or -1 when the cell is a local minimum. Ties keep the first neighbour
    in D8 order.
    """
    h, w = heights.shape
    dirs = np.full((h, w), -1, dtype=np.int64)
    for y in range(h):
        for x in range(w):
            min_h = heights[y, x]
            best_dir = -1
            for i in range(8):
                ny = y + D8_NEIGHBORS[i, 0]
                nx = x + D8_NEIGHBORS[i, 1]
                if 0 <= ny < h and 0 <= nx < w:
                    if heights[ny, nx] < min_h:
                        min_h = heights[ny, nx]
                        best_dir = i
            dirs[y, x] = best_dir
    return dirs


@njit(cache=True)
def flow_accumulation_from_dirs(heights: np.ndarray, flow_dirs: np.ndarray) -> np.ndarray:
    """
    Number of upstream cells draining through each cell (itself included).
    Cells are visited from highest to lowest so every donor is final before
    it passes its water on.
    """
    h, w = heights.shape
    flow = np.ones((h, w), dtype=np.float64)
    order = np.argsort(heights.ravel(), kind="mergesort")[::-1]
    for idx in order:
        y = idx // w
        x = idx % w
        d = flow_dirs[y, x]
        if d != -1:
            ny = y + D8_NEIGHBORS[d, 0]
            nx = x + D8_NEIGHBORS[d, 1]
            flow[ny, nx] += flow[y, x]
    return flow
