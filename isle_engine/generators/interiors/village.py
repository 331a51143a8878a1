# isle_engine/generators/interiors/village.py
from __future__ import annotations
import logging

from ...core.types import POIInterior, Point
from ...core.utils.rng import rng_for
from .common import DEFAULT_SCALE, Population, TileGrid, check_rarity, scaled, tier
from .entities import Guard, Merchant, Villager
from .placement import draw_building, place_footprint, touches_tags

logger = logging.getLogger(__name__)

BASE_SIZE = (40, 30)
MIN_SIZE = (28, 20)
BUILDING_SIZE = 4

FIRST_NAMES = (
    "Aldric", "Brina", "Cedric", "Daria", "Edwin", "Fiora", "Garrick", "Helena", "Ilia",
    "Joran", "Kael", "Lina", "Marek", "Nadia", "Orin", "Petra", "Quinn", "Rhea", "Soren",
    "Tess", "Ulric", "Vera", "Willem", "Yara", "Zane",
)
LAST_NAMES = (
    "Oakheart", "Stonebrook", "Rivers", "Greenfield", "Ashdown", "Hawthorne", "Brightwood",
    "Ironford", "Ravenhill", "Stormwatch", "Fairbairn", "Meadows", "Hillcrest", "Longfellow",
)
TAVERN_TITLES = ("Innkeeper", "Host", "Barkeep", "Tavernmaster")
MERCHANT_TITLES = ("Trader", "Merchant", "Shopkeeper", "Peddler")

TAVERN_LINES = (
    "Welcome, traveler! Warm fire and good ale await.",
    "Rooms upstairs if you need rest.",
    "Watch the roads at night, wolves have been seen.",
)
SHOP_LINES = (
    "Fresh supplies and fair prices!",
    "Looking for something special?",
    "Coin on the counter, friend.",
)
VILLAGER_LINES = (
    "Lovely day, isn't it?",
    "Have you visited the market?",
    "Mind the well, it's deep.",
)


def full_name(rng) -> str:
    return f"{rng.random_element(FIRST_NAMES)} {rng.random_element(LAST_NAMES)}"


def generate_village(poi_id: str, seed: str, rarity: str = "common") -> POIInterior:
    """
    Crossroads village: 3-wide roads, entrance at the south end of the north-south
    road, a tavern and a shop that are always placed, then rarity-scaled houses.
    """
    check_rarity(rarity)
    rng = rng_for(seed, poi_id)
    scale = DEFAULT_SCALE[rarity]
    width = scaled(BASE_SIZE[0], scale, MIN_SIZE[0])
    height = scaled(BASE_SIZE[1], scale, MIN_SIZE[1])

    grid = TileGrid(width, height, "grass")
    road_x = width // 2
    road_y = height // 2
    grid.fill_rect(0, road_y - 1, width, 3, "road")
    grid.fill_rect(road_x - 1, 0, 3, height, "road")

    entrance = Point(road_x, height - 1)
    grid.set(entrance.x, entrance.y, "entrance")

    pop = Population(rng)
    near_road = touches_tags(("road",))

    def place(kind: str, required: bool = False):
        fp = place_footprint(
            grid, rng, BUILDING_SIZE, BUILDING_SIZE, adjacency=near_road, required=required
        )
        if fp is not None:
            draw_building(grid, fp, overlay=kind)
        return fp

    tavern = place("tavern", required=True)
    if tavern is not None:
        pop.add(
            Merchant,
            "tavern-keeper",
            tavern.x + 1,
            tavern.y + 1,
            name=f"{rng.random_element(TAVERN_TITLES)} {full_name(rng)}",
            role="tavern_keeper",
            dialogue=tuple(rng.shuffle(TAVERN_LINES)[:3]),
        )

    shop = place("shop", required=True)
    if shop is not None:
        pop.add(
            Merchant,
            "shopkeeper",
            shop.x + 1,
            shop.y + 1,
            name=f"{rng.random_element(MERCHANT_TITLES)} {full_name(rng)}",
            role="shopkeeper",
            dialogue=tuple(rng.shuffle(SHOP_LINES)[:3]),
        )

    house_target = 4 + tier(rarity, (0, 2, 4, 6))
    houses = 0
    for i in range(house_target):
        house = place("house")
        if house is None:
            continue
        houses += 1
        for v in range(rng.random_int(0, 2)):
            pop.add(
                Villager,
                f"villager-{i}-{v}",
                house.x + 1 + (v % 2),
                house.y + 1,
                name=full_name(rng),
                dialogue=tuple(rng.shuffle(VILLAGER_LINES)[:2]),
            )

    for g in range(rng.random_int(0, 2)):
        pop.add(
            Guard,
            f"guard-{g}",
            road_x + (-1 if g == 0 else 1),
            road_y,
            name=full_name(rng),
            post="crossroads",
            dialogue=("Stay safe, citizen.",),
        )

    logger.debug(f"Village {poi_id}: {width}x{height}, {houses}/{house_target} houses.")
    return POIInterior(
        id=poi_id,
        type="village",
        seed=seed,
        rarity=rarity,
        layout=grid.to_layout(),
        entrance=entrance,
        entities=tuple(pop.entities),
        containers=tuple(pop.containers),
    )
