# ==============================================================================
# File: isle_engine/algorithms/hydrology/rivers.py
# Purpose: river sources, steepest-descent tracing, stream order and widths.
# ==============================================================================
from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from ...core.constants import MAX_ELEVATION, SEA_LEVEL
from ...core.types import Point, River
from ...core.utils.rng import DeterministicRNG
from ...numerics.fast_hydrology import build_d8_flow_directions, flow_accumulation_from_dirs
from ..pathfinding.helpers import NEI8, in_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiverSystem:
    rivers: Tuple[River, ...]
    confluences: Tuple[Point, ...]
    mask: np.ndarray  # bool, True on river cells


def flow_accumulation(height: np.ndarray) -> np.ndarray:
    dirs = build_d8_flow_directions(height)
    return flow_accumulation_from_dirs(height, dirs)


def select_sources(
    height: np.ndarray,
    flow: np.ndarray,
    count: int,
    spacing: float,
    elevation_ratio: float = 0.5,
) -> List[Point]:
    """
    Highland cells ranked by height / log(flow) (ridge lines first), taken
    greedily while keeping `spacing` between sources.
    """
    size = height.shape[0]
    margin = max(2, min(10, size // 16))
    inner = np.zeros_like(height, dtype=bool)
    inner[margin:size - margin, margin:size - margin] = True
    mask = inner & (height >= MAX_ELEVATION * elevation_ratio) & (height >= SEA_LEVEL)

    ys, xs = np.nonzero(mask)
    if ys.size == 0:
        return []
    h = height[ys, xs]
    f = flow[ys, xs]
    scores = (h / MAX_ELEVATION) / np.maximum(1.0, np.log(f + 1.0))
    order = np.lexsort((xs, ys, -scores))

    sources: List[Point] = []
    spacing2 = spacing * spacing
    for k in order:
        if len(sources) >= count:
            break
        p = Point(int(xs[k]), int(ys[k]))
        if all((p.x - s.x) ** 2 + (p.y - s.y) ** 2 >= spacing2 for s in sources):
            sources.append(p)
    return sources


def trace_river(
    heights: List[List[float]],
    source: Point,
    claimed: Dict[Point, int],
    max_steps: int,
) -> Tuple[List[Point], int]:
    """
    Steepest descent over the 8-neighbourhood. Stops at ocean, at a local
    minimum, on reaching a cell owned by another river or after `max_steps`.
    Returns the path and the index of the joined river (-1 if none).
    """
    size = len(heights)
    path = [source]
    visited = {source}
    while len(path) < max_steps:
        cx, cy = path[-1]
        current_h = heights[cy][cx]
        if current_h < SEA_LEVEL:
            break
        best = None
        best_h = math.inf
        for dx, dy in NEI8:
            nx, ny = cx + dx, cy + dy
            if not in_bounds(size, size, nx, ny):
                continue
            nxt = Point(nx, ny)
            if nxt in visited:
                continue
            if heights[ny][nx] < best_h:
                best_h = heights[ny][nx]
                best = nxt
        if best is None or best_h >= current_h:
            break
        path.append(best)
        visited.add(best)
        if best in claimed:
            return path, claimed[best]
    return path, -1


def _strahler_orders(count: int, tributaries: Dict[int, List[int]]) -> List[int]:
    # Tributaries always join rivers traced before them, so walking backwards
    # resolves every tributary before its receiving river.
    orders = [1] * count
    for i in range(count - 1, -1, -1):
        incoming = [orders[t] for t in tributaries.get(i, [])]
        if not incoming:
            continue
        incoming.append(1)
        top = max(incoming)
        orders[i] = top + 1 if incoming.count(top) >= 2 else top
    return orders


def river_widths(
    points: List[Point], heights: List[List[float]], stream_order: int, flow: float
) -> Tuple[float, ...]:
    """Narrow at the source, wider downstream and near the coast."""
    total = len(points)
    widths = []
    flow_factor = math.log(flow + 1.0) / 12.0
    min_w = 0.5 + stream_order * 0.3
    max_w = 8.0 + stream_order * 2.0
    for i, p in enumerate(points):
        h = heights[p.y][p.x]
        progress = i / max(1, total - 1)
        height_ratio = max(0.0, (h - SEA_LEVEL) / (MAX_ELEVATION - SEA_LEVEL))
        width = stream_order * 0.8 + flow_factor + progress * 2.5
        if height_ratio < 0.3:
            width += (1.0 - height_ratio / 0.3) ** 2 * 4.0
        width *= math.sin(i * 0.15 + stream_order) * 0.2 + 1.0
        widths.append(round(min(max(width, min_w), max_w), 4))
    return tuple(widths)


def generate_rivers(
    height: np.ndarray,
    rng: DeterministicRNG,
    min_count: int = 4,
    max_count: int = 8,
    min_spacing: float = 30,
    min_points: int = 6,
    source_elevation_ratio: float = 0.5,
) -> RiverSystem:
    t0 = time.perf_counter()
    size = height.shape[0]
    flow = flow_accumulation(height)

    count = rng.random_int(int(min_count), int(max_count))
    spacing = min(float(min_spacing), size / 8.0)
    sources = select_sources(height, flow, count, spacing, source_elevation_ratio)

    heights = height.tolist()
    max_steps = size * 4
    claimed: Dict[Point, int] = {}
    paths: List[List[Point]] = []
    confluences: List[Point] = []
    tributaries: Dict[int, List[int]] = {}

    for source in sources:
        if source in claimed:
            continue
        path, joined = trace_river(heights, source, claimed, max_steps)
        if len(path) < min_points:
            continue
        idx = len(paths)
        paths.append(path)
        # the junction cell stays owned by the receiving river
        for p in path[:-1] if joined >= 0 else path:
            claimed.setdefault(p, idx)
        if joined >= 0:
            confluences.append(path[-1])
            tributaries.setdefault(joined, []).append(idx)

    orders = _strahler_orders(len(paths), tributaries)
    rivers = []
    mask = np.zeros((size, size), dtype=bool)
    for path, order in zip(paths, orders):
        river_flow = max(float(flow[p.y, p.x]) for p in path)
        rivers.append(
            River(
                points=tuple(path),
                widths=river_widths(path, heights, order, river_flow),
                stream_order=order,
                flow_accumulation=river_flow,
            )
        )
        for p in path:
            mask[p.y, p.x] = True

    logger.debug(
        f"Traced {len(rivers)}/{len(sources)} rivers, {len(confluences)} confluences "
        f"in {(time.perf_counter() - t0) * 1000:.1f} ms."
    )
    return RiverSystem(tuple(rivers), tuple(confluences), mask)
