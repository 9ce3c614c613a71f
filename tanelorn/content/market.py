"""Market catalogs: weapons, armor and castle upgrades."""

from types import MappingProxyType

from tanelorn.models.items import Armor, CastleDefense, Weapon

WEAPONS: tuple[Weapon, ...] = (
    Weapon(id="rusty-sword", name="Rusty Sword", strength_bonus=2, cost=30, required_level=1),
    Weapon(id="iron-blade", name="Iron Blade", strength_bonus=5, cost=80, required_level=3),
    Weapon(id="steel-claymore", name="Steel Claymore", strength_bonus=9, cost=180, required_level=5),
    Weapon(id="mithril-saber", name="Mithril Saber", strength_bonus=14, cost=400, required_level=7),
    Weapon(id="dragon-fang", name="Dragon Fang", strength_bonus=18, cost=600, required_level=9),
)

ARMORS: tuple[Armor, ...] = (
    Armor(id="leather-vest", name="Leather Vest", defense_bonus=2, cost=25, required_level=1),
    Armor(id="chain-mail", name="Chain Mail", defense_bonus=5, cost=70, required_level=3),
    Armor(id="plate-armor", name="Plate Armor", defense_bonus=8, cost=160, required_level=5),
    Armor(id="dragon-scale", name="Dragon Scale", defense_bonus=12, cost=350, required_level=7),
    Armor(id="shadow-plate", name="Shadow Plate", defense_bonus=16, cost=550, required_level=9),
)

CASTLE_DEFENSES: tuple[CastleDefense, ...] = (
    CastleDefense(
        id="wooden-barricade", name="Wooden Barricade",
        description="Basic fortification for your castle", cost=50, required_level=2,
    ),
    CastleDefense(
        id="spike-trap", name="Spike Trap",
        description="Damages attackers who breach the gate", cost=120, required_level=4,
    ),
    CastleDefense(
        id="arrow-slits", name="Arrow Slits",
        description="Allows ranged defense from walls", cost=250, required_level=6,
    ),
    CastleDefense(
        id="iron-gate", name="Iron Gate",
        description="Reinforced gate that resists siege", cost=500, required_level=8,
    ),
)

WEAPONS_BY_ID = MappingProxyType({weapon.id: weapon for weapon in WEAPONS})
ARMORS_BY_ID = MappingProxyType({armor.id: armor for armor in ARMORS})
CASTLE_DEFENSES_BY_ID = MappingProxyType({defense.id: defense for defense in CASTLE_DEFENSES})


def _lookup(table, item_id: str, kind: str):
    item = table.get(item_id)
    if item is None:
        raise ValueError(f"Unknown {kind}: {item_id}")
    return item


def get_weapon(weapon_id: str) -> Weapon:
    return _lookup(WEAPONS_BY_ID, weapon_id, "weapon")


def get_armor(armor_id: str) -> Armor:
    return _lookup(ARMORS_BY_ID, armor_id, "armor")


def get_castle_defense(defense_id: str) -> CastleDefense:
    return _lookup(CASTLE_DEFENSES_BY_ID, defense_id, "castle defense")
