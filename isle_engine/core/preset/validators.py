# ========================
# file: isle_engine/core/preset/validators.py
# ========================
from __future__ import annotations
from typing import Any, Dict
from ..errors import ValidationError
from ..constants import POI_TYPES


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ValidationError(msg)


def _number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_dict(cfg: Dict[str, Any]) -> None:
    """Conservative validation of a fully merged preset dict.

    Raises ValidationError on the first failing check.
    """
    _require(
        isinstance(cfg.get("id"), str) and cfg["id"],
        "Preset.id must be non-empty string",
    )
    _require(_number(cfg.get("size")) and int(cfg["size"]) >= 1, "Preset.size must be >= 1")

    terrain = dict(cfg.get("terrain", {}))
    for key in ("base_scale", "ridge_scale", "mask_scale"):
        _require(_number(terrain.get(key)) and terrain[key] > 0, f"terrain.{key} must be > 0")
    for key in ("base_octaves", "ridge_octaves", "mask_octaves"):
        _require(_number(terrain.get(key)) and int(terrain[key]) >= 1, f"terrain.{key} must be >= 1")
    for key in ("base_weight", "ridge_weight", "height_gain"):
        _require(_number(terrain.get(key)) and terrain[key] >= 0, f"terrain.{key} must be >= 0")
    _require(
        _number(terrain.get("falloff_inner"))
        and _number(terrain.get("falloff_outer"))
        and 0 <= terrain["falloff_inner"] < terrain["falloff_outer"],
        "terrain.falloff_inner must be >= 0 and below terrain.falloff_outer",
    )

    climate = dict(cfg.get("climate", {}))
    for key in ("moisture_scale", "temperature_scale"):
        _require(_number(climate.get(key)) and climate[key] > 0, f"climate.{key} must be > 0")
    for key in ("moisture_octaves", "temperature_octaves"):
        _require(_number(climate.get(key)) and int(climate[key]) >= 1, f"climate.{key} must be >= 1")
    for key in (
        "ocean_moisture_bonus",
        "elevation_drying",
        "elevation_cooling",
        "temperature_noise",
        "river_moisture_radius",
        "river_moisture_boost",
    ):
        _require(_number(climate.get(key)) and climate[key] >= 0, f"climate.{key} must be >= 0")

    rivers = dict(cfg.get("rivers", {}))
    _require(
        _number(rivers.get("min_count"))
        and _number(rivers.get("max_count"))
        and 0 <= int(rivers["min_count"]) <= int(rivers["max_count"]),
        "rivers.min_count must be >= 0 and <= rivers.max_count",
    )
    _require(_number(rivers.get("min_spacing")) and rivers["min_spacing"] >= 0, "rivers.min_spacing must be >= 0")
    _require(_number(rivers.get("min_points")) and int(rivers["min_points"]) >= 2, "rivers.min_points must be >= 2")
    _require(
        _number(rivers.get("source_elevation_ratio")) and 0 <= rivers["source_elevation_ratio"] <= 1,
        "rivers.source_elevation_ratio must be in [0, 1]",
    )

    pois = dict(cfg.get("pois", {}))
    _require(_number(pois.get("min_spacing")) and pois["min_spacing"] >= 0, "pois.min_spacing must be >= 0")
    _require(_number(pois.get("attempts")) and int(pois["attempts"]) >= 1, "pois.attempts must be >= 1")
    counts = pois.get("counts", {})
    _require(isinstance(counts, dict), "pois.counts must be a mapping")
    for poi_type, count in counts.items():
        _require(poi_type in POI_TYPES, f"pois.counts: unknown POI type '{poi_type}'")
        _require(_number(count) and int(count) >= 0, f"pois.counts.{poi_type} must be >= 0")

    roads = dict(cfg.get("roads", {}))
    _require(_number(roads.get("river_penalty")) and roads["river_penalty"] >= 0, "roads.river_penalty must be >= 0")
    _require(_number(roads.get("road_bonus")) and roads["road_bonus"] >= 0, "roads.road_bonus must be >= 0")
