# isle_engine/algorithms/terrain/biomes.py
from __future__ import annotations
from typing import Tuple

import numpy as np

from ...core.biomes import BIOME_METADATA
from ...core.constants import (
    BIOME_OCEAN,
    BIOME_PRIORITY,
    BIOME_TO_ID,
    ID_TO_BIOME,
    MAX_ELEVATION,
    SEA_LEVEL,
)


def _in_range(values: np.ndarray, bounds: Tuple[float, float], top: float) -> np.ndarray:
    """[lo, hi), closed at hi when hi is the top of the scale."""
    lo, hi = bounds
    upper = values <= hi if hi >= top else values < hi
    return (values >= lo) & upper


def _out_of_range(values: np.ndarray, bounds: Tuple[float, float]) -> np.ndarray:
    lo, hi = bounds
    return np.maximum(np.maximum(lo - values, values - hi), 0.0)


def classify_biomes(
    height: np.ndarray, moisture: np.ndarray, temperature: np.ndarray
) -> np.ndarray:
    """
    Biome id per cell (uint8). Below SEA_LEVEL is always ocean. Otherwise the
    first biome in BIOME_PRIORITY whose three ranges contain the cell wins;
    cells matching nothing take the biome with the smallest summed distance
    to its ranges (elevation measured in units of MAX_ELEVATION), earliest in
    priority on ties.
    """
    h = np.asarray(height, dtype=np.float64)
    m = np.asarray(moisture, dtype=np.float64)
    t = np.asarray(temperature, dtype=np.float64)

    out = np.zeros(h.shape, dtype=np.uint8)
    ocean = h < SEA_LEVEL
    out[ocean] = BIOME_TO_ID[BIOME_OCEAN]
    assigned = ocean.copy()

    land_biomes = [name for name in BIOME_PRIORITY if name != BIOME_OCEAN]
    for name in land_biomes:
        meta = BIOME_METADATA[name]
        hit = (
            ~assigned
            & _in_range(h, meta.elevation, MAX_ELEVATION)
            & _in_range(m, meta.moisture, 1.0)
            & _in_range(t, meta.temperature, 1.0)
        )
        out[hit] = BIOME_TO_ID[name]
        assigned |= hit

    rest = ~assigned
    if rest.any():
        hr, mr, tr = h[rest], m[rest], t[rest]
        distances = np.stack(
            [
                _out_of_range(hr, BIOME_METADATA[name].elevation) / MAX_ELEVATION
                + _out_of_range(mr, BIOME_METADATA[name].moisture)
                + _out_of_range(tr, BIOME_METADATA[name].temperature)
                for name in land_biomes
            ]
        )
        ids = np.array([BIOME_TO_ID[name] for name in land_biomes], dtype=np.uint8)
        out[rest] = ids[np.argmin(distances, axis=0)]
    return out


def classify_biome(height: float, moisture: float, temperature: float) -> str:
    """Single-cell form of classify_biomes."""
    bid = classify_biomes(
        np.array([height]), np.array([moisture]), np.array([temperature])
    )[0]
    return ID_TO_BIOME[int(bid)]
