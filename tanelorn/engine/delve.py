"""Delve step generation."""

import logging
import math
from typing import Iterable, Optional

from tanelorn.config import DEFAULT_DELVE_STEPS
from tanelorn.content.delve import (
    BUFFER_MESSAGES,
    TRAP_MESSAGES,
    get_zone_boss,
    get_zone_merchant_items,
)
from tanelorn.content.enemies import get_enemy_by_name
from tanelorn.content.zones import TREASURE_MESSAGES, get_zone_enemy
from tanelorn.engine.dice import DiceRoller
from tanelorn.engine.formulas import CombatFormulas
from tanelorn.engine.status_effects import StatusEffectEngine
from tanelorn.models.delve import (
    BossEvent,
    BufferEvent,
    CombatEvent,
    DelveStepEvent,
    HealerEvent,
    MerchantEvent,
    TrapEvent,
    TreasureEvent,
)
from tanelorn.models.items import DelveBuff
from tanelorn.models.stats import StatName
from tanelorn.models.world import Zone

logger = logging.getLogger(__name__)

# Early steps mix help and danger
EARLY_STEP_WEIGHTS: tuple[tuple[int, str], ...] = (
    (30, "combat"),
    (15, "trap"),
    (20, "merchant"),
    (15, "buffer"),
    (15, "healer"),
    (5, "treasure"),
)

# Deeper steps are hostile only
DEEP_STEP_WEIGHTS: tuple[tuple[int, str], ...] = (
    (60, "combat"),
    (25, "trap"),
    (15, "treasure"),
)

EARLY_STEP_LIMIT = 3
TRAP_DOT_CHANCE = 0.4


class DelveGenerator:
    """Builds the event met at each step of a delve."""

    @staticmethod
    def generate_delve_step(
        zone: Zone,
        step: int,
        player_level: int,
        cleared_bosses: Iterable[str] = (),
        rng: Optional[DiceRoller] = None,
        total_steps: int = DEFAULT_DELVE_STEPS,
    ) -> DelveStepEvent:
        """
        Generate the event for one delve step.

        Args:
            zone: Zone being delved
            step: Step number, 1-based
            player_level: Accepted for future scaling, currently unused
            cleared_bosses: Zone ids whose boss is already defeated
            rng: Optional roller
            total_steps: Length of the delve; the last step holds the boss

        Returns:
            One of the delve step events
        """
        rng = rng or DiceRoller()

        if step >= total_steps:
            return DelveGenerator._final_step(zone, cleared_bosses)

        table = EARLY_STEP_WEIGHTS if step <= EARLY_STEP_LIMIT else DEEP_STEP_WEIGHTS
        event_type = CombatFormulas.weighted_select(table, rng=rng)
        logger.debug(f"{zone.id} step {step}: {event_type}")

        if event_type == "combat":
            return CombatEvent(enemy=get_zone_enemy(zone, player_level, rng))
        if event_type == "trap":
            return DelveGenerator._trap(zone, rng)
        if event_type == "treasure":
            gold = rng.uniform_int(10 * zone.min_level, 25 * zone.max_level)
            return TreasureEvent(gold=gold, message=rng.choice(TREASURE_MESSAGES))
        if event_type == "buffer":
            return DelveGenerator._buffer(rng)
        if event_type == "healer":
            heal_amount = math.floor((100 + zone.min_level * 10) * (rng.random() * 0.2 + 0.2))
            cost = 3 * (zone.min_level + zone.max_level)
            return HealerEvent(cost=cost, heal_amount=heal_amount)
        if event_type == "merchant":
            return MerchantEvent(items=get_zone_merchant_items(zone.id))

        raise AssertionError(f"Unhandled delve event type: {event_type!r}")

    @staticmethod
    def _final_step(zone: Zone, cleared_bosses: Iterable[str]) -> DelveStepEvent:
        boss = get_zone_boss(zone.id, cleared_bosses)
        if boss is not None:
            logger.debug(f"{zone.id} boss: {boss.enemy.name}")
            return BossEvent(enemy=boss.enemy, relic=boss.relic)
        # Boss already beaten, the strongest regular enemy guards the exit
        return CombatEvent(enemy=get_enemy_by_name(zone.enemy_pool[-1]))

    @staticmethod
    def _trap(zone: Zone, rng: DiceRoller) -> TrapEvent:
        damage = rng.uniform_int(5 * zone.min_level, 10 * zone.max_level)
        message = rng.choice(TRAP_MESSAGES)
        dot = StatusEffectEngine.generate_dot(rng) if rng.chance(TRAP_DOT_CHANCE) else None
        return TrapEvent(damage=damage, message=message, dot=dot)

    @staticmethod
    def _buffer(rng: DiceRoller) -> BufferEvent:
        stat = rng.choice(list(StatName))
        amount = rng.uniform_int(2, 4)
        return BufferEvent(
            buff=DelveBuff(name=f"{stat.value} boost", stat=stat, amount=amount),
            message=rng.choice(BUFFER_MESSAGES),
        )
