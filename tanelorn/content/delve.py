"""Zone bosses, their relics, and the merchant stock met while delving."""

from types import MappingProxyType
from typing import Iterable, Optional

from tanelorn.models.enemy import Enemy
from tanelorn.models.items import DelveBuff, DelveItem, HealEffect, Relic
from tanelorn.models.stats import StatName
from tanelorn.models.world import ZoneBoss

TRAP_MESSAGES = (
    "A hidden spike trap!",
    "Poison darts fly from the wall!",
    "The floor erupts in flames!",
    "A net of thorns ensnares you!",
)

BUFFER_MESSAGES = (
    "A wandering warrior shares combat techniques!",
    "A hermit sage bestows ancient wisdom!",
    "A forest spirit grants its blessing!",
)


def _boss(zone_id: str, enemy: Enemy, relic: Relic) -> ZoneBoss:
    return ZoneBoss(zone_id=zone_id, enemy=enemy, relic=relic)


ZONE_BOSSES = MappingProxyType({
    boss.zone_id: boss
    for boss in (
        _boss(
            "whispering-forest",
            Enemy(
                name="Ancient Treant", level=3, hp=80, strength=12, defense=8, agility=3,
                xp_reward=60, gold_reward=30,
                ascii="\n   \\|/|/\n  --(oo)--\n   /|  |\\\n    |  |\n   /____\\",
            ),
            Relic(
                id="heartwood-charm", name="Heartwood Charm",
                description="A warm wooden amulet pulsing with ancient life.",
                stat_bonuses={StatName.DEFENSE: 2},
            ),
        ),
        _boss(
            "sunken-dungeon",
            Enemy(
                name="Drowned King", level=5, hp=120, strength=18, defense=12, agility=7,
                xp_reward=100, gold_reward=50,
                ascii="\n   _vVv_\n  (~o o~)\n  /|~~~|\\\n ~ |___| ~\n  ~~   ~~",
            ),
            Relic(
                id="tidal-amulet", name="Tidal Amulet",
                description="A coral pendant swirling with captured tidewater.",
                stat_bonuses={StatName.STRENGTH: 3},
            ),
        ),
        _boss(
            "crystal-caves",
            Enemy(
                name="Crystal Golem", level=7, hp=160, strength=22, defense=16, agility=5,
                xp_reward=150, gold_reward=70,
                ascii="\n   /\\  /\\\n  <*>  <*>\n  |\\ /\\ /|\n  | \\/  \\|\n  /_\\  /_\\",
            ),
            Relic(
                id="prismatic-shard", name="Prismatic Shard",
                description="A fractured crystal refracting inner power.",
                stat_bonuses={StatName.STRENGTH: 2, StatName.DEFENSE: 2},
            ),
        ),
        _boss(
            "darkwood-swamp",
            Enemy(
                name="Swamp Hydra", level=8, hp=180, strength=25, defense=14, agility=10,
                xp_reward=180, gold_reward=85,
                ascii="\n  S  S  S\n  |  |  |\n   \\ | /\n   (===)\n  ~~~~~~~",
            ),
            Relic(
                id="hydra-fang", name="Hydra Fang",
                description="A venomous fang thrumming with primal speed.",
                stat_bonuses={StatName.AGILITY: 4},
            ),
        ),
        _boss(
            "abyssal-depths",
            Enemy(
                name="Abyssal Horror", level=10, hp=250, strength=32, defense=22, agility=18,
                xp_reward=280, gold_reward=120,
                ascii="\n  \\\\(@)//\n  -(@@@)-\n  //(@)\\\\\n  /|||||\\\n ~~~~~~~~~",
            ),
            Relic(
                id="void-crystal", name="Void Crystal",
                description="A shard of the abyss that warps reality around it.",
                stat_bonuses={StatName.STRENGTH: 3, StatName.DEFENSE: 3, StatName.AGILITY: 2},
            ),
        ),
    )
})


def _buff_item(item_id: str, name: str, description: str, cost: int, stat: StatName, amount: int) -> DelveItem:
    return DelveItem(
        id=item_id, name=name, description=description, cost=cost,
        effect=DelveBuff(name=name, stat=stat, amount=amount),
    )


def _heal_item(item_id: str, name: str, description: str, cost: int, amount: int) -> DelveItem:
    return DelveItem(
        id=item_id, name=name, description=description, cost=cost,
        effect=HealEffect(amount=amount),
    )


ZONE_MERCHANT_ITEMS = MappingProxyType({
    "whispering-forest": (
        _buff_item("bark-tea", "Bark Tea", "A bitter brew that toughens the skin.", 15, StatName.DEFENSE, 2),
        _heal_item("forest-salve", "Forest Salve", "A soothing paste made from forest herbs.", 20, 15),
        _buff_item(
            "elven-arrow", "Elven Arrow", "An enchanted arrow that sharpens your strikes.", 25, StatName.STRENGTH, 3
        ),
    ),
    "sunken-dungeon": (
        _buff_item("coral-shield", "Coral Shield", "A shield grown from living coral.", 30, StatName.DEFENSE, 3),
        _buff_item(
            "deep-breath-potion", "Deep Breath Potion",
            "A potion that quickens reflexes underwater.", 25, StatName.AGILITY, 2,
        ),
        _buff_item(
            "rusted-trident", "Rusted Trident",
            "A barnacle-crusted weapon still deadly sharp.", 40, StatName.STRENGTH, 4,
        ),
    ),
    "crystal-caves": (
        _buff_item(
            "crystal-lens", "Crystal Lens", "A polished crystal that sharpens perception.", 45, StatName.AGILITY, 3
        ),
        _heal_item("geode-tonic", "Geode Tonic", "A mineral-rich tonic with restorative properties.", 35, 25),
        _buff_item(
            "shard-blade", "Shard Blade", "A razor-sharp blade hewn from raw crystal.", 60, StatName.STRENGTH, 5
        ),
    ),
    "darkwood-swamp": (
        _buff_item("swamp-root", "Swamp Root", "A gnarled root that hardens resolve.", 50, StatName.DEFENSE, 3),
        _buff_item(
            "poison-ward", "Poison Ward", "A protective charm woven from swamp reeds.", 55, StatName.DEFENSE, 2
        ),
        _buff_item(
            "bog-iron-mace", "Bog Iron Mace",
            "A crude but devastating mace forged in bog iron.", 50, StatName.STRENGTH, 4,
        ),
    ),
    "abyssal-depths": (
        _buff_item(
            "void-shard", "Void Shard", "A fragment of nothingness that amplifies fury.", 70, StatName.STRENGTH, 4
        ),
        _buff_item("dark-ward", "Dark Ward", "A ward of shadow that deflects blows.", 65, StatName.DEFENSE, 4),
        _buff_item(
            "shadow-step", "Shadow Step",
            "A vial of liquid shadow granting blinding speed.", 75, StatName.AGILITY, 5,
        ),
    ),
})


def get_zone_boss(zone_id: str, cleared_bosses: Iterable[str] = ()) -> Optional[ZoneBoss]:
    """
    Boss guarding the final step of a zone.

    Args:
        zone_id: Zone being delved
        cleared_bosses: Zone ids whose boss the player already beat

    Returns:
        The boss with a fresh enemy, or None if the zone has none or it is cleared
    """
    if zone_id in set(cleared_bosses):
        return None
    boss = ZONE_BOSSES.get(zone_id)
    if boss is None:
        return None
    return boss.model_copy(update={"enemy": boss.enemy.fresh_copy()})


def get_zone_merchant_items(zone_id: str) -> list[DelveItem]:
    return list(ZONE_MERCHANT_ITEMS.get(zone_id, ()))
