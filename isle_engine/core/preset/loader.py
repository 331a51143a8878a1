# ========================
# file: isle_engine/core/preset/loader.py
# ========================
from __future__ import annotations
import copy
import json
import os
from typing import Any, Dict, Mapping, Optional, Union

from ..errors import NotFoundError
from .defaults import DEFAULT_PRESET
from .model import Preset
from .validators import validate_dict


def deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge. Lists/tuples are replaced, not merged element-wise."""
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def _load_json_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_preset(
    source: Union[str, Dict[str, Any], None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Preset:
    """Load a preset from a JSON path or a raw dict, merge it over the defaults and apply overrides.

    Args:
        source: path to a JSON file, a raw dict, or None for the defaults
        overrides: mapping of ad-hoc overrides (last layer)
    Returns:
        Preset (immutable dataclass) ready for use
    """
    if source is None:
        data: Dict[str, Any] = {}
    elif isinstance(source, str):
        if not os.path.isfile(source):
            raise NotFoundError(f"Preset file not found: {source}")
        data = _load_json_file(source)
    elif isinstance(source, dict):
        data = source
    else:
        raise TypeError("source must be a str path, a dict or None")

    merged = deep_merge(DEFAULT_PRESET, data)
    if overrides:
        merged = deep_merge(merged, overrides)

    validate_dict(merged)

    return Preset(
        id=merged["id"],
        size=int(merged["size"]),
        terrain=dict(merged["terrain"]),
        climate=dict(merged["climate"]),
        rivers=dict(merged["rivers"]),
        pois=dict(merged["pois"]),
        roads=dict(merged["roads"]),
    )


DEFAULT_BASE_PRESET: Preset = load_preset()
