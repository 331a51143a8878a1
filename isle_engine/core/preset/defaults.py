# isle_engine/core/preset/defaults.py
from __future__ import annotations
from typing import Any, Dict

DEFAULT_PRESET: Dict[str, Any] = {
    "id": "isle/default",
    "size": 256,
    "terrain": {
        "base_scale": 0.005,
        "base_octaves": 6,
        "ridge_scale": 0.01,
        "ridge_octaves": 4,
        "mask_scale": 0.004,
        "mask_octaves": 2,
        "base_weight": 0.75,
        "ridge_weight": 0.5,
        "height_gain": 1.15,
        "falloff_inner": 0.45,
        "falloff_outer": 0.95,
    },
    "climate": {
        "moisture_scale": 0.008,
        "moisture_octaves": 4,
        "temperature_scale": 0.01,
        "temperature_octaves": 3,
        "ocean_moisture_bonus": 0.5,
        "elevation_drying": 0.3,
        "elevation_cooling": 0.4,
        "temperature_noise": 0.2,
        "river_moisture_radius": 4.0,
        "river_moisture_boost": 0.3,
    },
    "rivers": {
        "min_count": 4,
        "max_count": 8,
        "min_spacing": 30,
        "min_points": 6,
        "source_elevation_ratio": 0.5,
    },
    "pois": {
        "min_spacing": 30,
        "attempts": 100,
        "spawn_village": True,
        "counts": {
            "village": 2,
            "town": 1,
            "ruined_castle": 1,
            "wizards_tower": 1,
            "dark_cave": 2,
            "dragon_grounds": 1,
            "lighthouse": 1,
            "ancient_circle": 1,
        },
    },
    "roads": {
        "river_penalty": 10.0,
        "road_bonus": 1.0,
    },
}
