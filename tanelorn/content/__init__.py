"""Static game content: bestiary, zones, castles, delve bosses and market catalogs."""

from tanelorn.content.castles import NPC_CASTLES, get_available_castles, get_castle
from tanelorn.content.delve import ZONE_BOSSES, get_zone_boss, get_zone_merchant_items
from tanelorn.content.enemies import (
    ENEMIES,
    get_enemies_in_level_range,
    get_enemy_by_name,
    get_nearest_level_enemy,
    get_random_encounter,
)
from tanelorn.content.market import (
    ARMORS,
    CASTLE_DEFENSES,
    WEAPONS,
    get_armor,
    get_castle_defense,
    get_weapon,
)
from tanelorn.content.zones import (
    ZONES,
    generate_zone_event,
    get_available_zones,
    get_zone,
    get_zone_enemy,
)

__all__ = [
    # Enemies
    "ENEMIES",
    "get_enemy_by_name",
    "get_enemies_in_level_range",
    "get_nearest_level_enemy",
    "get_random_encounter",
    # Zones
    "ZONES",
    "get_zone",
    "get_available_zones",
    "get_zone_enemy",
    "generate_zone_event",
    # Delve
    "ZONE_BOSSES",
    "get_zone_boss",
    "get_zone_merchant_items",
    # Castles
    "NPC_CASTLES",
    "get_castle",
    "get_available_castles",
    # Market
    "WEAPONS",
    "ARMORS",
    "CASTLE_DEFENSES",
    "get_weapon",
    "get_armor",
    "get_castle_defense",
]
