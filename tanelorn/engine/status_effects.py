"""Damage-over-time ticks and delve buff totals."""

import logging
from typing import Iterable, NamedTuple

from tanelorn.engine.dice import DiceRoller
from tanelorn.models.delve import DOTEffect, DOTType
from tanelorn.models.items import DelveBuff
from tanelorn.models.stats import StatName

logger = logging.getLogger(__name__)


class DotTick(NamedTuple):
    """Result of ticking every active DOT once."""

    total_damage: int
    remaining: list[DOTEffect]
    messages: list[str]


class StatusEffectEngine:
    """Applies DOT ticks between delve steps and totals delve buffs."""

    @staticmethod
    def generate_dot(rng: DiceRoller) -> DOTEffect:
        """Random DOT: poison or fire, 3-8 damage for 2-4 steps."""
        dot_type = DOTType.POISON if rng.chance(0.5) else DOTType.FIRE
        return DOTEffect(
            type=dot_type,
            damage_per_step=rng.uniform_int(3, 8),
            remaining_steps=rng.uniform_int(2, 4),
        )

    @staticmethod
    def tick_dots(dots: Iterable[DOTEffect]) -> DotTick:
        """
        Tick all DOTs once.

        Args:
            dots: Active effects

        Returns:
            DotTick with summed damage, effects still running, and one
            message per effect
        """
        total_damage = 0
        remaining: list[DOTEffect] = []
        messages: list[str] = []

        for dot in dots:
            total_damage += dot.damage_per_step
            if dot.type == DOTType.POISON:
                messages.append(f"Poison deals {dot.damage_per_step} damage!")
            else:
                messages.append(f"Fire burns for {dot.damage_per_step} damage!")

            updated = dot.model_copy(update={"remaining_steps": dot.remaining_steps - 1})
            if updated.remaining_steps > 0:
                remaining.append(updated)

        if messages:
            logger.debug(f"DOT tick: {total_damage} damage, {len(remaining)} effects still active")
        return DotTick(total_damage=total_damage, remaining=remaining, messages=messages)

    @staticmethod
    def sum_buffs(buffs: Iterable[DelveBuff]) -> dict[str, int]:
        """Total buff amount per stat. Duplicates stack additively."""
        totals = {stat.value: 0 for stat in StatName}
        for buff in buffs:
            totals[buff.stat.value] += buff.amount
        return totals
