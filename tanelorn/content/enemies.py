"""Enemy bestiary: templates for random encounters spanning levels 1-10."""

import logging
from types import MappingProxyType
from typing import Optional

from tanelorn.engine.dice import DiceRoller
from tanelorn.models.enemy import Enemy

logger = logging.getLogger(__name__)

ENEMIES: tuple[Enemy, ...] = (
    Enemy(
        name="Sewer Rat", level=1, hp=30, strength=5, defense=2, agility=4,
        xp_reward=15, gold_reward=5,
        ascii="\n   /\\_/\\\n  ( o.o )\n   > ^ <",
    ),
    Enemy(
        name="Goblin Runt", level=2, hp=45, strength=7, defense=3, agility=6,
        xp_reward=25, gold_reward=10,
        ascii="\n    ___\n   /o o\\\n  (  >  )\n   \\___/",
    ),
    Enemy(
        name="Orc Grunt", level=3, hp=60, strength=10, defense=5, agility=5,
        xp_reward=40, gold_reward=15,
        ascii="\n   _____\n  /[] []\\\n  | o_o |\n  |  ~  |\n   \\___/",
    ),
    Enemy(
        name="Skeleton Warrior", level=4, hp=70, strength=12, defense=6, agility=8,
        xp_reward=55, gold_reward=20,
        ascii="\n   _____\n  | o o |\n  |  ^  |\n  |[___]|\n   || ||",
    ),
    Enemy(
        name="Dark Elf Scout", level=5, hp=80, strength=14, defense=8, agility=10,
        xp_reward=60, gold_reward=25,
        ascii="\n    /\\\n   /**\\\n  /\\o/\\\n  | ^ |\n  /| |\\",
    ),
    Enemy(
        name="Troll Berserker", level=6, hp=110, strength=18, defense=10, agility=6,
        xp_reward=80, gold_reward=35,
        ascii="\n   #####\n  ## O ##\n  # \\_/ #\n  ##M##\n   ## ##",
    ),
    Enemy(
        name="Wraith", level=7, hp=95, strength=20, defense=12, agility=14,
        xp_reward=100, gold_reward=45,
        ascii="\n    ___\n   (o.o)\n   {~~~}\n    \\ /\n     V",
    ),
    Enemy(
        name="Dragon Whelp", level=8, hp=140, strength=24, defense=15, agility=12,
        xp_reward=130, gold_reward=60,
        ascii="\n   /\\_/\\\n  (>O<)>\n  /|  |\\\n   \\===/\n    ^^^",
    ),
    Enemy(
        name="Lich Apprentice", level=9, hp=120, strength=26, defense=16, agility=15,
        xp_reward=160, gold_reward=70,
        ascii="\n    ___\n   |o_o|\n   | = |\n   |___|\n   ~~~~~",
    ),
    Enemy(
        name="Shadow Knight", level=10, hp=200, strength=28, defense=18, agility=16,
        xp_reward=200, gold_reward=80,
        ascii="\n    /^\\\n   |[O]|\n   | H |\n   /| |\\\n   || ||",
    ),
)

ENEMIES_BY_NAME = MappingProxyType({enemy.name: enemy for enemy in ENEMIES})


def get_enemy_by_name(name: str) -> Enemy:
    """Fresh copy of a bestiary template."""
    template = ENEMIES_BY_NAME.get(name)
    if template is None:
        raise ValueError(f"Unknown enemy: {name}")
    return template.fresh_copy()


def get_enemies_in_level_range(min_level: int, max_level: int) -> list[Enemy]:
    """Templates whose level is within [min_level, max_level]."""
    return [enemy for enemy in ENEMIES if min_level <= enemy.level <= max_level]


def get_nearest_level_enemy(level: int) -> Enemy:
    """Template closest in level; the earliest one wins a tie."""
    return min(ENEMIES, key=lambda enemy: abs(enemy.level - level))


def get_random_encounter(player_level: int, rng: Optional[DiceRoller] = None) -> Enemy:
    """
    Random enemy for an adventure fight.

    Args:
        player_level: Current player level
        rng: Optional roller

    Returns:
        Fresh copy of an enemy with level in [player_level - 1, player_level + 3],
        or the nearest-level enemy if none fits
    """
    rng = rng or DiceRoller()
    eligible = get_enemies_in_level_range(max(1, player_level - 1), player_level + 3)

    if eligible:
        template = rng.choice(eligible)
    else:
        template = get_nearest_level_enemy(player_level)
        logger.debug(f"No enemy near level {player_level}, falling back to {template.name}")

    return template.fresh_copy()
