# isle_engine/algorithms/terrain/noise.py
from __future__ import annotations
from typing import Union

import numpy as np

from ...core.utils.rng import DeterministicRNG
from ...numerics.fast_noise import (
    MODE_PLAIN,
    MODE_RIDGE,
    MODE_TURBULENCE,
    build_permutation,
    fractal_noise_2d,
)

ArrayLike = Union[float, np.ndarray]

# Offset of the secondary field used by warp().
_WARP_OFFSET = 100.0


class NoiseField:
    """
    Coherent 2D noise seeded through DeterministicRNG. Every operation is a
    pure function of (x, y, parameters); x and y may be scalars or arrays of
    any (broadcastable) shape.
    """

    def __init__(self, seed: str):
        self.seed = str(seed)
        self._perm = build_permutation(DeterministicRNG(self.seed))

    def _accumulate(
        self,
        x: ArrayLike,
        y: ArrayLike,
        scale: float,
        octaves: int,
        persistence: float,
        lacunarity: float,
        mode: int,
    ) -> ArrayLike:
        bx, by = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
        )
        flat = fractal_noise_2d(
            self._perm,
            np.ascontiguousarray(bx).ravel(),
            np.ascontiguousarray(by).ravel(),
            float(scale),
            max(1, int(octaves)),
            float(persistence),
            float(lacunarity),
            mode,
        )
        if bx.ndim == 0:
            return float(flat[0])
        return flat.reshape(bx.shape)

    def sample2d(
        self,
        x: ArrayLike,
        y: ArrayLike,
        scale: float = 1.0,
        octaves: int = 1,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
    ) -> ArrayLike:
        return self._accumulate(x, y, scale, octaves, persistence, lacunarity, MODE_PLAIN)

    def fbm(self, x: ArrayLike, y: ArrayLike, scale: float = 0.01, octaves: int = 4) -> ArrayLike:
        """Fractal Brownian motion in [-1, 1]."""
        return self._accumulate(x, y, scale, octaves, 0.5, 2.0, MODE_PLAIN)

    def ridge(self, x: ArrayLike, y: ArrayLike, scale: float = 0.01, octaves: int = 4) -> ArrayLike:
        """Ridged noise in [0, 1]; peaks where the base noise crosses zero."""
        return self._accumulate(x, y, scale, octaves, 0.5, 2.0, MODE_RIDGE)

    def turbulence(self, x: ArrayLike, y: ArrayLike, scale: float = 0.01, octaves: int = 4) -> ArrayLike:
        """Absolute-value noise in [0, 1]."""
        return self._accumulate(x, y, scale, octaves, 0.5, 2.0, MODE_TURBULENCE)

    def warp(
        self,
        x: ArrayLike,
        y: ArrayLike,
        warp_scale: float = 0.1,
        noise_scale: float = 0.01,
        strength: float = 10.0,
    ) -> ArrayLike:
        """Samples the primary field at a coordinate displaced by an offset copy of itself."""
        dx = self.sample2d(x, y, warp_scale) * strength
        dy = self.sample2d(np.add(x, _WARP_OFFSET), np.add(y, _WARP_OFFSET), warp_scale) * strength
        return self.sample2d(np.add(x, dx), np.add(y, dy), noise_scale)
