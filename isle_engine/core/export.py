# ==============================================================================
# File: isle_engine/core/export.py
# JSON documents for the world manifest, road overlays and interiors.
# ==============================================================================
from __future__ import annotations
import dataclasses
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .constants import BIOMES
from .types import POIInterior, WorldSnapshot, point_dict

logger = logging.getLogger(__name__)

MANIFEST_VERSION = "isle_manifest_v1"


def _ensure_path_exists(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _default_serializer(o):
    if hasattr(o, "to_dict"):
        return o.to_dict()
    if dataclasses.is_dataclass(o):
        return dataclasses.asdict(o)
    if isinstance(o, np.ndarray):
        return o.tolist()
    if isinstance(o, np.integer):
        return int(o)
    if isinstance(o, np.floating):
        return float(o)
    if isinstance(o, np.bool_):
        return bool(o)
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


def write_json(path: str, data: Any) -> str:
    """Atomic write: dump to `<path>.tmp`, then replace."""
    path = str(path)
    _ensure_path_exists(path)
    tmp_path = path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2, default=_default_serializer)
    os.replace(tmp_path, path)
    logger.debug(f"JSON file saved: {path}")
    return path


def build_world_manifest(world: WorldSnapshot, roads=None) -> Dict[str, Any]:
    """
    Compact description of a snapshot: POI summaries, spawn, rivers and the
    height / biome grids. Height is rounded to 2 decimals; biomes are ids into
    the `biomes` legend.
    """
    manifest: Dict[str, Any] = {
        "version": MANIFEST_VERSION,
        "seed": world.seed,
        "size": world.size,
        "digest": world.digest(),
        "spawn": point_dict(world.spawn_point),
        "biomes": list(BIOMES),
        "pois": [
            {
                "id": p.id,
                "type": p.type,
                "name": p.name,
                "rarity": p.rarity,
                "position": p.position.to_dict(),
                "unique": p.unique,
            }
            for p in world.pois
        ],
        "rivers": [r.to_dict() for r in world.rivers],
        "confluences": [c.to_dict() for c in world.confluences],
        "height": np.round(world.height_map.astype(np.float64), 2).tolist(),
        "biome": world.biome_map.astype(int).tolist(),
    }
    if roads is not None:
        manifest["roads"] = roads_to_overlay(roads)
    return manifest


def roads_to_overlay(roads) -> Dict[str, Any]:
    """Road polylines as point lists, plus the settlement graph they came from."""
    paths: List[List[Dict[str, int]]] = [[p.to_dict() for p in path] for path in roads.paths]
    return {
        "paths": paths,
        "cells": int(np.count_nonzero(roads.mask)),
        **roads.to_dict(),
    }


def write_world_manifest(path: str, world: WorldSnapshot, roads=None) -> str:
    return write_json(path, build_world_manifest(world, roads))


def write_interior(path: str, interior: POIInterior) -> str:
    return write_json(path, interior.to_document())


def export_bundle(out_dir: str, world: WorldSnapshot, roads=None, interior: Optional[POIInterior] = None) -> List[str]:
    """Writes world.json, roads.json and interior_<id>.json into `out_dir`."""
    out = Path(out_dir)
    written = [write_world_manifest(str(out / "world.json"), world)]
    if roads is not None:
        written.append(write_json(str(out / "roads.json"), roads_to_overlay(roads)))
    if interior is not None:
        written.append(write_interior(str(out / f"interior_{interior.id}.json"), interior))
    logger.info(f"Exported {len(written)} file(s) to {out}.")
    return written
