from .core.preset import Preset, load_preset
from .core.types import POI, POIInterior, River, WorldSnapshot
from .core.utils.rng import DeterministicRNG
from .algorithms.terrain.noise import NoiseField
from .generators.world.world_generator import WorldGenerator, generate_world
from .generators.interiors import generate_building_interior, generate_interior
from .world_structure.planners.road_planner import generate_roads, plan_road_network
from .world_structure.cache import InteriorCache, WorldCache

__all__ = [
    "Preset",
    "load_preset",
    "POI",
    "POIInterior",
    "River",
    "WorldSnapshot",
    "DeterministicRNG",
    "NoiseField",
    "WorldGenerator",
    "generate_world",
    "generate_interior",
    "generate_building_interior",
    "generate_roads",
    "plan_road_network",
    "WorldCache",
    "InteriorCache",
]
