from .model import Preset
from .defaults import DEFAULT_PRESET
from .loader import DEFAULT_BASE_PRESET, deep_merge, load_preset
from .validators import validate_dict

__all__ = [
    "Preset",
    "DEFAULT_PRESET",
    "DEFAULT_BASE_PRESET",
    "deep_merge",
    "load_preset",
    "validate_dict",
]
