# ========================
# file: isle_engine/core/errors.py
# ========================
class ProcgenError(Exception):
    """Base error for the generation engine."""


class UnknownRarityError(ProcgenError, ValueError):
    """Raised when an interior is requested with a rarity tag outside the known tiers."""


class UnknownArchetypeError(ProcgenError, ValueError):
    """Raised when no interior generator exists for the requested POI type."""


class PresetError(ProcgenError):
    """Base error for preset system."""


class ValidationError(PresetError):
    """Raised when a preset fails validation."""


class NotFoundError(PresetError):
    """Raised when a preset path or a requested POI cannot be resolved."""
