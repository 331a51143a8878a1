# ==============================================================================
# File: isle_engine/numerics/fast_noise.py
# 2D simplex noise over a seeded permutation table, plus octave accumulation.
# Kernels run without fastmath so results are reproducible bit for bit.
# ==============================================================================
from __future__ import annotations
import math

import numpy as np
from numba import njit

F64 = np.float64

MODE_PLAIN = 0
MODE_RIDGE = 1
MODE_TURBULENCE = 2

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

# 12 gradient directions (the 2D projection of the classic grad3 set).
GRAD2 = np.array(
    [
        [1.0, 1.0], [-1.0, 1.0], [1.0, -1.0], [-1.0, -1.0],
        [1.0, 0.0], [-1.0, 0.0], [1.0, 0.0], [-1.0, 0.0],
        [0.0, 1.0], [0.0, -1.0], [0.0, 1.0], [0.0, -1.0],
    ],
    dtype=F64,
)


def build_permutation(rng) -> np.ndarray:
    """512-entry permutation table (256 shuffled values, repeated) drawn from `rng`."""
    p = np.array(rng.shuffle(list(range(256))), dtype=np.int64)
    return np.concatenate((p, p))


@njit(inline="always", cache=True)
def _corner(gi: int, x: float, y: float) -> float:
    t = 0.5 - x * x - y * y
    if t < 0.0:
        return 0.0
    g = gi % 12
    t *= t
    return t * t * (GRAD2[g, 0] * x + GRAD2[g, 1] * y)


@njit(cache=True)
def simplex2(perm: np.ndarray, x: float, y: float) -> float:
    """Single simplex sample in roughly [-1, 1]."""
    s = (x + y) * _F2
    i = int(math.floor(x + s))
    j = int(math.floor(y + s))
    t = (i + j) * _G2
    x0 = x - (i - t)
    y0 = y - (j - t)

    if x0 > y0:
        i1, j1 = 1, 0
    else:
        i1, j1 = 0, 1

    x1 = x0 - i1 + _G2
    y1 = y0 - j1 + _G2
    x2 = x0 - 1.0 + 2.0 * _G2
    y2 = y0 - 1.0 + 2.0 * _G2

    ii = i & 255
    jj = j & 255
    n0 = _corner(perm[ii + perm[jj]], x0, y0)
    n1 = _corner(perm[ii + i1 + perm[jj + j1]], x1, y1)
    n2 = _corner(perm[ii + 1 + perm[jj + 1]], x2, y2)
    return 70.0 * (n0 + n1 + n2)


@njit(cache=True)
def fractal_noise_2d(
    perm: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    scale: float,
    octaves: int,
    persistence: float,
    lacunarity: float,
    mode: int,
) -> np.ndarray:
    """
    Octave sum over flat coordinate arrays, normalized by the total amplitude.
    mode: 0 = plain, 1 = ridge (1-|n|)^2, 2 = turbulence |n|.
    """
    n = xs.shape[0]
    out = np.empty(n, dtype=np.float64)
    for k in range(n):
        amp = 1.0
        freq = scale
        total = 0.0
        norm = 0.0
        for _ in range(octaves):
            v = simplex2(perm, xs[k] * freq, ys[k] * freq)
            if mode == 1:
                v = 1.0 - abs(v)
                v = v * v
            elif mode == 2:
                v = abs(v)
            total += v * amp
            norm += amp
            amp *= persistence
            freq *= lacunarity
        out[k] = total / norm if norm > 0.0 else 0.0
    return out
