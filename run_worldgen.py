# run_worldgen.py
import argparse
import logging
import sys
import time
from pathlib import Path

from isle_engine.core.errors import NotFoundError, ProcgenError
from isle_engine.core.export import export_bundle
from isle_engine.core.logging_setup import setup_logging
from isle_engine.core.preset import load_preset
from isle_engine.generators.interiors import generate_interior
from isle_engine.generators.world.world_generator import WorldGenerator
from isle_engine.world_structure.planners.road_planner import plan_road_network, policy_from_preset

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate an island world, its roads and POI interiors.")
    parser.add_argument("--seed", required=True, help="World seed (any string)")
    parser.add_argument("--size", type=int, default=None, help="Grid side length, clamped to [64, 256]")
    parser.add_argument("--preset", default=None, help="Path to a preset JSON file")
    parser.add_argument("--out", default="artifacts/world", help="Output directory for JSON manifests")
    parser.add_argument("--interior", default=None, metavar="POI_ID", help="Also generate this POI's interior")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def run(args: argparse.Namespace) -> int:
    preset = load_preset(args.preset)
    t0 = time.perf_counter()

    world = WorldGenerator(preset).generate(args.seed, args.size)
    roads = plan_road_network(world, args.seed, policy_from_preset(preset))
    logger.info(
        f"World '{world.seed}' {world.size}x{world.size}: {len(world.rivers)} rivers, "
        f"{len(world.pois)} POIs, {len(roads.edges)} roads."
    )

    interior = None
    if args.interior:
        poi = next((p for p in world.pois if p.id == args.interior), None)
        if poi is None:
            raise NotFoundError(f"POI '{args.interior}' not found in world '{world.seed}'")
        interior = generate_interior(poi.type, poi.id, world.seed, poi.rarity)
        logger.info(f"Interior {poi.id} ({poi.type}, {poi.rarity}): {interior.width}x{interior.height}.")

    export_bundle(str(Path(args.out)), world, roads, interior)
    logger.info(f"Done in {(time.perf_counter() - t0) * 1000:.1f} ms.")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        return run(args)
    except ProcgenError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
