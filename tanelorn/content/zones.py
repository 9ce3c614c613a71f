"""Explorable zones and the legacy single-event explorer."""

import math
from types import MappingProxyType
from typing import Optional

from tanelorn.content.enemies import get_enemy_by_name
from tanelorn.engine.dice import DiceRoller
from tanelorn.engine.formulas import CombatFormulas
from tanelorn.models.delve import (
    CombatEvent,
    HealerEvent,
    NothingEvent,
    TrapEvent,
    TreasureEvent,
    ZoneEvent,
)
from tanelorn.models.enemy import Enemy
from tanelorn.models.world import EventWeights, Zone, ZoneDifficulty

ZONES: tuple[Zone, ...] = (
    Zone(
        id="whispering-forest",
        name="Whispering Forest",
        difficulty=ZoneDifficulty.EASY,
        min_level=1,
        max_level=3,
        enemy_pool=["Sewer Rat", "Goblin Runt"],
        event_weights=EventWeights(combat=40, treasure=20, trap=10, healer=20, nothing=10),
        ascii="\n  /\\  /\\  /\\\n /  \\/  \\/  \\\n/    ||  ||   \\\n     ||  ||",
    ),
    Zone(
        id="sunken-dungeon",
        name="Sunken Dungeon",
        difficulty=ZoneDifficulty.MEDIUM,
        min_level=3,
        max_level=5,
        enemy_pool=["Orc Grunt", "Skeleton Warrior", "Dark Elf Scout"],
        event_weights=EventWeights(combat=50, treasure=15, trap=15, healer=10, nothing=10),
        ascii="\n   _______\n  |  ___  |\n  | |   | |\n  | |___| |\n  |_______|",
    ),
    Zone(
        id="crystal-caves",
        name="Crystal Caves",
        difficulty=ZoneDifficulty.MEDIUM,
        min_level=4,
        max_level=7,
        enemy_pool=["Skeleton Warrior", "Dark Elf Scout", "Troll Berserker"],
        event_weights=EventWeights(combat=50, treasure=20, trap=10, healer=10, nothing=10),
        ascii="\n  /\\    /\\\n /  \\  /  \\\n/  * \\/  * \\\n\\  * /\\  * /\n \\  /  \\  /\n  \\/    \\/",
    ),
    Zone(
        id="darkwood-swamp",
        name="Darkwood Swamp",
        difficulty=ZoneDifficulty.HARD,
        min_level=6,
        max_level=8,
        enemy_pool=["Troll Berserker", "Wraith", "Dragon Whelp"],
        event_weights=EventWeights(combat=55, treasure=10, trap=20, healer=5, nothing=10),
        ascii="\n ~  ~  ~  ~\n |\\  |  /|\n | \\ | / |\n~~~~~~~~~~ ",
    ),
    Zone(
        id="abyssal-depths",
        name="Abyssal Depths",
        difficulty=ZoneDifficulty.DEADLY,
        min_level=8,
        max_level=10,
        enemy_pool=["Dragon Whelp", "Lich Apprentice", "Shadow Knight"],
        event_weights=EventWeights(combat=65, treasure=10, trap=15, healer=0, nothing=10),
        ascii="\n  \\/\\/\\/\\/\n  /\\/\\/\\/\\\n  \\/\\/\\/\\/\n  ABANDON HOPE",
    ),
)

ZONES_BY_ID = MappingProxyType({zone.id: zone for zone in ZONES})

TREASURE_MESSAGES = (
    "You find a hidden chest!",
    "Gold coins glitter in the darkness!",
    "A forgotten treasure pouch!",
)

_EXPLORE_TRAP_MESSAGES = (
    "You trigger a hidden trap!",
    "Poison darts fly from the wall!",
    "The floor gives way beneath you!",
)

_NOTHING_MESSAGES = (
    "The path is eerily quiet...",
    "Nothing of interest here.",
    "You hear distant echoes but find nothing.",
)


def get_zone(zone_id: str) -> Zone:
    zone = ZONES_BY_ID.get(zone_id)
    if zone is None:
        raise ValueError(f"Unknown zone: {zone_id}")
    return zone


def get_available_zones(player_level: int) -> list[Zone]:
    """Zones the player is high enough level to enter."""
    return [zone for zone in ZONES if zone.min_level <= player_level]


def get_zone_enemy(zone: Zone, player_level: int, rng: Optional[DiceRoller] = None) -> Enemy:
    """Random enemy from the zone's pool. The level is not used yet."""
    return get_enemy_by_name((rng or DiceRoller()).choice(zone.enemy_pool))


def generate_zone_event(
    zone: Zone, player_level: int, rng: Optional[DiceRoller] = None
) -> ZoneEvent:
    """
    Single exploration event driven by the zone's legacy event weights.

    Args:
        zone: Zone being explored
        player_level: Scales the healer's price and heal
        rng: Optional roller

    Returns:
        Combat, treasure, trap (never with a DOT), healer or nothing event
    """
    rng = rng or DiceRoller()
    weights = zone.event_weights
    event_type = CombatFormulas.weighted_select(
        [
            (weights.combat, "combat"),
            (weights.treasure, "treasure"),
            (weights.trap, "trap"),
            (weights.healer, "healer"),
            (weights.nothing, "nothing"),
        ],
        # Weights are authored out of 100; a roll past them falls through to "nothing"
        roll=math.floor(rng.random() * 100),
    )

    if event_type == "combat":
        return CombatEvent(enemy=get_zone_enemy(zone, player_level, rng))
    if event_type == "treasure":
        gold = rng.uniform_int(10 * zone.min_level, 25 * zone.max_level)
        return TreasureEvent(gold=gold, message=rng.choice(TREASURE_MESSAGES))
    if event_type == "trap":
        damage = rng.uniform_int(5 * zone.min_level, 10 * zone.max_level)
        return TrapEvent(damage=damage, message=rng.choice(_EXPLORE_TRAP_MESSAGES))
    if event_type == "healer":
        return HealerEvent(cost=math.ceil(player_level * 5), heal_amount=math.floor(player_level * 15))
    return NothingEvent(message=rng.choice(_NOTHING_MESSAGES))
