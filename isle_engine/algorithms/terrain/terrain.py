# ==============================================================================
# File: isle_engine/algorithms/terrain/terrain.py
# Height, moisture and temperature fields for one island.
# All channels sample one NoiseField at distinct coordinate offsets.
# ==============================================================================
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np
from scipy.ndimage import distance_transform_edt

from ...core.constants import MAX_ELEVATION, SEA_LEVEL
from ...core.utils.rng import DeterministicRNG
from .noise import NoiseField

# Coordinate offsets per channel
RIDGE_MASK_OFFSET = (1733.0, -911.0)
COAST_OFFSET = (-4211.0, 2693.0)
MOISTURE_OFFSET = (5113.0, 2971.0)
TEMPERATURE_OFFSET = (-3389.0, 7817.0)


def smoothstep(edge0: float, edge1: float, x: np.ndarray) -> np.ndarray:
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


@dataclass(frozen=True)
class IslandShape:
    """Non-circular island outline: rotated, stretched falloff plus a warped coast."""
    angle: float
    scale_x: float
    scale_y: float
    coast_amp: float
    coast_freq: float

    @classmethod
    def draw(cls, rng: DeterministicRNG) -> "IslandShape":
        return cls(
            angle=rng.random_float(0.0, math.pi * 2.0),
            scale_x=rng.random_float(0.75, 1.35),
            scale_y=rng.random_float(0.75, 1.35),
            coast_amp=rng.random_float(0.08, 0.22),
            coast_freq=rng.random_float(0.0035, 0.01),
        )


@dataclass(frozen=True)
class LatitudeBand:
    shift: float
    amp: float

    @classmethod
    def draw(cls, rng: DeterministicRNG) -> "LatitudeBand":
        return cls(shift=rng.random_float(-0.25, 0.25), amp=rng.random_float(0.28, 0.42))


def _grid(size: int) -> Tuple[np.ndarray, np.ndarray]:
    coords = np.arange(size, dtype=np.float64)
    xs, ys = np.meshgrid(coords, coords)  # xs varies along columns, ys along rows
    return xs, ys


def island_falloff(
    noise: NoiseField, shape: IslandShape, size: int, inner: float, outer: float
) -> np.ndarray:
    """1 at the island core, 0 in open sea."""
    xs, ys = _grid(size)
    half = size / 2.0
    dx = xs - half
    dy = ys - half
    ca, sa = math.cos(shape.angle), math.sin(shape.angle)
    rx = (dx * ca + dy * sa) / shape.scale_x
    ry = (-dx * sa + dy * ca) / shape.scale_y
    dist = np.sqrt(rx * rx + ry * ry) / half

    coast = noise.warp(
        xs + COAST_OFFSET[0],
        ys + COAST_OFFSET[1],
        warp_scale=shape.coast_freq,
        noise_scale=shape.coast_freq * 2.0,
        strength=20.0,
    )
    return 1.0 - smoothstep(inner, outer, dist + coast * shape.coast_amp)


def generate_height(
    noise: NoiseField, shape: IslandShape, size: int, cfg: Dict[str, Any]
) -> np.ndarray:
    xs, ys = _grid(size)

    base = (noise.fbm(xs, ys, cfg["base_scale"], cfg["base_octaves"]) + 1.0) * 0.5
    ridge = noise.ridge(xs, ys, cfg["ridge_scale"], cfg["ridge_octaves"])
    mask = (
        noise.fbm(
            xs + RIDGE_MASK_OFFSET[0],
            ys + RIDGE_MASK_OFFSET[1],
            cfg["mask_scale"],
            cfg["mask_octaves"],
        )
        + 1.0
    ) * 0.5
    gate = smoothstep(0.45, 0.7, mask)

    land = base * cfg["base_weight"] + ridge * gate * cfg["ridge_weight"]
    falloff = island_falloff(noise, shape, size, cfg["falloff_inner"], cfg["falloff_outer"])

    height = land * falloff * cfg["height_gain"] * MAX_ELEVATION
    return np.clip(height, 0.0, MAX_ELEVATION).astype(np.float32)


def generate_moisture(
    noise: NoiseField, height: np.ndarray, river_mask: np.ndarray, cfg: Dict[str, Any]
) -> np.ndarray:
    """Noise + ocean bonus - elevation drying + river proximity."""
    size = height.shape[0]
    xs, ys = _grid(size)
    h = height.astype(np.float64)

    moisture = (
        noise.fbm(
            xs + MOISTURE_OFFSET[0],
            ys + MOISTURE_OFFSET[1],
            cfg["moisture_scale"],
            cfg["moisture_octaves"],
        )
        + 1.0
    ) * 0.5
    moisture = moisture + np.where(h < SEA_LEVEL, cfg["ocean_moisture_bonus"], 0.0)
    moisture -= (h / MAX_ELEVATION) * cfg["elevation_drying"]

    if river_mask.any():
        radius = float(cfg["river_moisture_radius"])
        dist = distance_transform_edt(~river_mask)
        moisture += np.clip(1.0 - dist / radius, 0.0, 1.0) * cfg["river_moisture_boost"]

    return np.clip(moisture, 0.0, 1.0).astype(np.float32)


def generate_temperature(
    noise: NoiseField, height: np.ndarray, band: LatitudeBand, cfg: Dict[str, Any]
) -> np.ndarray:
    """Latitude band (warm equator across the middle row) - elevation cooling + noise."""
    size = height.shape[0]
    xs, ys = _grid(size)
    h = height.astype(np.float64)
    half = size / 2.0

    lat = np.abs(ys - half) / half
    temperature = 1.0 - (lat * band.amp + band.shift)
    temperature -= (h / MAX_ELEVATION) * cfg["elevation_cooling"]
    temperature += (
        noise.fbm(
            xs + TEMPERATURE_OFFSET[0],
            ys + TEMPERATURE_OFFSET[1],
            cfg["temperature_scale"],
            cfg["temperature_octaves"],
        )
        * cfg["temperature_noise"]
    )
    return np.clip(temperature, 0.0, 1.0).astype(np.float32)
