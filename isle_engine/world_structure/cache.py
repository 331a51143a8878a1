# ==============================================================================
# File: isle_engine/world_structure/cache.py
# Memoization of world snapshots and POI interiors. Concurrent first requests
# for one key share a single in-flight computation; failures are not cached.
# ==============================================================================
from __future__ import annotations
import concurrent.futures
import logging
import threading
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

from ..core.preset import DEFAULT_BASE_PRESET, Preset
from ..core.types import POIInterior, WorldSnapshot
from ..generators.interiors import generate_interior
from ..generators.world.world_generator import WorldGenerator, clamp_size

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SingleFlightCache(Generic[K, V]):
    def __init__(self, compute: Callable[[K], V]):
        self._compute = compute
        self._lock = threading.Lock()
        self._futures: Dict[K, concurrent.futures.Future] = {}
        self.computations = 0

    def get(self, key: K) -> V:
        with self._lock:
            future = self._futures.get(key)
            owner = future is None
            if owner:
                future = concurrent.futures.Future()
                self._futures[key] = future
                self.computations += 1

        if not owner:
            return future.result()

        try:
            value = self._compute(key)
        except BaseException as exc:
            with self._lock:
                self._futures.pop(key, None)
            future.set_exception(exc)
            raise
        future.set_result(value)
        return value

    def __contains__(self, key: K) -> bool:
        with self._lock:
            future = self._futures.get(key)
        return future is not None and future.done() and future.exception() is None

    def __len__(self) -> int:
        with self._lock:
            return len(self._futures)

    def clear(self) -> None:
        with self._lock:
            self._futures.clear()


class WorldCache:
    """Snapshots keyed by (seed, size)."""

    def __init__(self, preset: Preset = DEFAULT_BASE_PRESET):
        self._generator = WorldGenerator(preset)
        self._cache: SingleFlightCache = SingleFlightCache(self._build)

    def _build(self, key) -> WorldSnapshot:
        seed, size = key
        logger.info(f"World cache miss for seed '{seed}' ({size}x{size}).")
        return self._generator.generate(seed, size)

    @property
    def computations(self) -> int:
        return self._cache.computations

    def get(self, seed: str, size: Optional[int] = None) -> WorldSnapshot:
        size = clamp_size(self._generator.preset.size if size is None else size)
        return self._cache.get((str(seed), size))

    def clear(self) -> None:
        self._cache.clear()


class InteriorCache:
    """Interiors keyed by (poi_type, poi_id, seed, rarity)."""

    def __init__(self):
        self._cache: SingleFlightCache = SingleFlightCache(self._build)

    def _build(self, key) -> POIInterior:
        poi_type, poi_id, seed, rarity = key
        return generate_interior(poi_type, poi_id, seed, rarity)

    @property
    def computations(self) -> int:
        return self._cache.computations

    def get(self, poi_type: str, poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
        return self._cache.get((poi_type, poi_id, str(seed), rarity))

    def clear(self) -> None:
        self._cache.clear()
