"""NPC castles available for raids."""

from types import MappingProxyType

from tanelorn.config import RAID_TURN_COST
from tanelorn.models.enemy import Enemy
from tanelorn.models.world import Castle

NPC_CASTLES: tuple[Castle, ...] = (
    Castle(
        id="goblin-stockade",
        name="Goblin Stockade",
        owner_name="Chieftain Grix",
        required_level=2,
        turn_cost=RAID_TURN_COST,
        bonus_xp_multiplier=2,
        bonus_gold_multiplier=2,
        ascii="\n   |  |\n  /|  |\\\n / |__| \\\n |______|",
        boss=Enemy(
            name="Chieftain Grix", level=4, hp=105, strength=14, defense=7, agility=10,
            xp_reward=80, gold_reward=40,
            ascii="\n    _/\\_\n   (o  o)\n  /| ++ |\\\n   |_/\\_|\n    || ||",
        ),
    ),
    Castle(
        id="bone-citadel",
        name="Bone Citadel",
        owner_name="Lord Skullcap",
        required_level=4,
        turn_cost=RAID_TURN_COST,
        bonus_xp_multiplier=2,
        bonus_gold_multiplier=2.5,
        ascii="\n   T  T\n  /|  |\\\n | |  | |\n |_|__|_|",
        boss=Enemy(
            name="Lord Skullcap", level=6, hp=165, strength=22, defense=12, agility=7,
            xp_reward=120, gold_reward=55,
            ascii="\n   _===_\n  |x  x|\n  | \\/ |\n  |_||_|\n  /||||\\",
        ),
    ),
    Castle(
        id="dark-fortress",
        name="Dark Fortress",
        owner_name="Baron Ironhelm",
        required_level=6,
        turn_cost=RAID_TURN_COST,
        bonus_xp_multiplier=2.5,
        bonus_gold_multiplier=3,
        ascii="\n  T    T\n  |    |\n /|    |\\\n ||    ||\n ||____||",
        boss=Enemy(
            name="Baron Ironhelm", level=8, hp=210, strength=29, defense=18, agility=14,
            xp_reward=195, gold_reward=90,
            ascii="\n   [====]\n   |O  O|\n   | <> |\n  /|____|\\\n  ||    ||",
        ),
    ),
    Castle(
        id="shadow-keep",
        name="Shadow Keep",
        owner_name="The Dark Lord",
        required_level=8,
        turn_cost=RAID_TURN_COST,
        bonus_xp_multiplier=3,
        bonus_gold_multiplier=3.5,
        ascii="\n  T~  ~T\n  |\\  /|\n  | \\/ |\n /| /\\ |\\\n || || ||",
        boss=Enemy(
            name="The Dark Lord", level=10, hp=300, strength=34, defense=22, agility=19,
            xp_reward=300, gold_reward=120,
            ascii="\n   /\\  /\\\n  |  \\/  |\n  | \\oo/ |\n  |  \\/  |\n  /|____|\\",
        ),
    ),
)

CASTLES_BY_ID = MappingProxyType({castle.id: castle for castle in NPC_CASTLES})


def get_castle(castle_id: str) -> Castle:
    castle = CASTLES_BY_ID.get(castle_id)
    if castle is None:
        raise ValueError(f"Unknown castle: {castle_id}")
    return castle


def get_available_castles(player_level: int) -> list[Castle]:
    """Castles the player is high enough level to raid."""
    return [castle for castle in NPC_CASTLES if castle.required_level <= player_level]
