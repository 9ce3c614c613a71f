"""Bounty board generation."""

import logging
import math
import re
from typing import Optional

from tanelorn.config import DEFAULT_BOUNTY_COUNT
from tanelorn.content.enemies import get_enemies_in_level_range, get_enemy_by_name, get_nearest_level_enemy
from tanelorn.engine.dice import DiceRoller
from tanelorn.models.actions import Bounty
from tanelorn.models.enemy import Enemy

logger = logging.getLogger(__name__)

BOUNTY_DESCRIPTIONS = (
    "A {name} has been terrorizing the countryside",
    "Wanted dead: {name}",
    "The guild needs a {name} eliminated",
    "Reports of a dangerous {name} nearby",
)

BONUS_XP_RATE = 0.5
BONUS_GOLD_RATE = 0.75


def _slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def generate_bounties(
    player_level: int, count: int = DEFAULT_BOUNTY_COUNT, rng: Optional[DiceRoller] = None
) -> list[Bounty]:
    """
    Post a fresh bounty board.

    Args:
        player_level: Targets range from one level below to two above
        count: Maximum number of bounties
        rng: Optional roller used to shuffle the candidates

    Returns:
        Up to count bounties, one per distinct target. Past the top of the
        bestiary the board holds only the nearest-level template.
    """
    rng = rng or DiceRoller()
    candidates = get_enemies_in_level_range(max(1, player_level - 1), player_level + 2)
    if not candidates:
        candidates = [get_nearest_level_enemy(player_level)]
    rng.shuffle(candidates)

    bounties = []
    for index, enemy in enumerate(candidates[:count]):
        bounties.append(
            Bounty(
                id=f"bounty-{_slugify(enemy.name)}",
                target_enemy_name=enemy.name,
                description=BOUNTY_DESCRIPTIONS[index % len(BOUNTY_DESCRIPTIONS)].format(name=enemy.name),
                bonus_xp=math.floor(enemy.xp_reward * BONUS_XP_RATE),
                bonus_gold=math.floor(enemy.gold_reward * BONUS_GOLD_RATE),
                required_level=max(1, enemy.level - 1),
            )
        )

    logger.debug(f"Posted {len(bounties)} bounties for level {player_level}")
    return bounties


def get_target_enemy(bounty: Bounty) -> Enemy:
    """Fresh copy of the bounty's target."""
    return get_enemy_by_name(bounty.target_enemy_name)
