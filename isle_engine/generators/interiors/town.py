# isle_engine/generators/interiors/town.py
from __future__ import annotations
import logging
from typing import List, Optional

from ...core.types import POIInterior, Point, TownBuilding
from ...core.utils.rng import rng_for
from .common import TOWN_SCALE, Population, TileGrid, check_rarity, scaled, tier
from .entities import Guard, Merchant, Tradesperson, Villager
from .placement import Footprint, draw_building, place_footprint, touches_tags

logger = logging.getLogger(__name__)

BASE_SIZE = (56, 48)
MIN_SIZE = (48, 40)

# (building type, footprint side, base chance, entity label, profession or role)
SPECIALTY_BUILDINGS = (
    ("blacksmith", 6, 0.7, "blacksmith", "blacksmith"),
    ("alchemist", 6, 0.6, "alchemist", "alchemist"),
    ("bank", 6, 0.5, "banker", "banker"),
    ("library", 6, 0.5, "librarian", "librarian"),
    ("market", 8, 0.6, "merchant", "merchant"),
    ("guardhouse", 6, 0.5, "guard", "guard"),
    ("temple", 6, 0.5, "priest", "priest"),
)

DIALOGUE = {
    "blacksmith": ("I can sharpen your steel.", "Best blades in town."),
    "alchemist": ("Potions for all ailments.", "Mind the fumes."),
    "banker": ("Your deposits are safe.", "We offer fair rates."),
    "librarian": ("Keep your voice down.", "Knowledge awaits."),
    "merchant": ("Fresh goods from afar.",),
    "guard": ("Keep the peace.", "On patrol."),
    "priest": ("Blessings upon you.",),
}


def generate_town(poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
    """
    Road cross plus rarity-scaled branch roads, a guaranteed tavern,
    chance-based specialty buildings and a rarity-scaled quota of houses.
    """
    check_rarity(rarity)
    rng = rng_for(seed, poi_id)
    scale = TOWN_SCALE[rarity]
    width = scaled(BASE_SIZE[0], scale, MIN_SIZE[0])
    height = scaled(BASE_SIZE[1], scale, MIN_SIZE[1])

    grid = TileGrid(width, height, "grass")
    road_x = width // 2
    road_y = height // 2

    def carve_row(y: int, x1: int, x2: int):
        grid.fill_rect(x1, y, x2 - x1 + 1, 1, "road")

    def carve_col(x: int, y1: int, y2: int):
        grid.fill_rect(x, y1, 1, y2 - y1 + 1, "road")

    for d in (-1, 0, 1):
        carve_row(road_y + d, 1, width - 2)
        carve_col(road_x + d, 1, height - 2)

    for _ in range(tier(rarity, (1, 2, 4, 6))):
        if rng.random_bool():
            carve_row(
                rng.random_int(2, height - 3),
                rng.random_int(2, road_x - 2),
                rng.random_int(road_x + 2, width - 3),
            )
        else:
            carve_col(
                rng.random_int(2, width - 3),
                rng.random_int(2, road_y - 2),
                rng.random_int(road_y + 2, height - 3),
            )

    entrance = Point(road_x, height - 2)
    grid.set(entrance.x, entrance.y, "entrance")

    pop = Population(rng)
    buildings: List[TownBuilding] = []
    near_road = touches_tags(("road",))

    def place(kind: str, size: int, attempts: int = 80, required: bool = False) -> Optional[Footprint]:
        fp = place_footprint(
            grid, rng, size, size, adjacency=near_road, attempts=attempts, required=required
        )
        if fp is None:
            return None
        door = draw_building(grid, fp, overlay=kind)
        buildings.append(TownBuilding(f"{kind}-{fp.x}-{fp.y}", kind, fp.x, fp.y, size, door))
        return fp

    tavern = place("tavern", 6, required=True)
    if tavern is not None:
        pop.add(
            Merchant,
            "innkeeper",
            tavern.x + 2,
            tavern.y + 2,
            name="Innkeeper",
            role="tavern_keeper",
            dialogue=("Welcome to the tavern!", "Rooms available upstairs."),
        )

    chance_scale = tier(rarity, (1.0, 1.2, 1.5, 1.8))
    for kind, size, base_chance, label, role in SPECIALTY_BUILDINGS:
        if rng.random() >= base_chance * chance_scale:
            continue
        fp = place(kind, size)
        if fp is None:
            continue
        offset = size // 2 - 1
        x, y = fp.x + offset, fp.y + offset
        if kind == "market":
            pop.add(Merchant, label, x, y, name="Trader", role=role, dialogue=DIALOGUE[role])
        elif kind == "guardhouse":
            pop.add(Guard, label, x, y, name="Guard", post=kind, dialogue=DIALOGUE[role])
        else:
            pop.add(
                Tradesperson, label, x, y,
                name=role.capitalize(), profession=role, dialogue=DIALOGUE[role],
            )

    house_target = tier(rarity, (10, 16, 22, 30))
    houses = 0
    for _ in range(house_target * 3):
        if houses >= house_target:
            break
        house = place("house", 5)
        if house is None:
            continue
        houses += 1
        for v in range(rng.random_int(0, 2)):
            pop.add(
                Villager,
                f"villager-{houses}-{v}",
                house.x + 2 + (v % 2),
                house.y + 2,
                name="Villager",
                dialogue=("Lovely day.", "Welcome."),
            )

    logger.debug(
        f"Town {poi_id}: {width}x{height}, {len(buildings)} buildings ({houses}/{house_target} houses)."
    )
    return POIInterior(
        id=poi_id,
        type="town",
        seed=seed,
        rarity=rarity,
        layout=grid.to_layout(),
        entrance=entrance,
        entities=tuple(pop.entities),
        containers=tuple(pop.containers),
        buildings=tuple(buildings),
    )
