"""Stat calculation system."""

from typing import Iterable

from tanelorn.engine.status_effects import StatusEffectEngine
from tanelorn.models.items import DelveBuff
from tanelorn.models.player import PlayerState
from tanelorn.models.stats import PlayerStats, StatName


class StatCalculator:
    """Computes effective stats (base + equipment + relic + delve buffs)."""

    @staticmethod
    def calculate_effective_stats(
        player: PlayerState, buffs: Iterable[DelveBuff] = ()
    ) -> PlayerStats:
        """
        Calculate effective combat stats for a player.

        Nothing is stored back on the player, so bonuses can never be
        counted twice.

        Args:
            player: Player to calculate stats for
            buffs: Active delve buffs, empty outside a delve

        Returns:
            New PlayerStats with effective values
        """
        bonuses = StatCalculator.equipment_bonuses(player)

        # Add delve buffs on top of gear
        for stat, amount in StatusEffectEngine.sum_buffs(buffs).items():
            bonuses[stat] += amount

        return player.stats.with_bonuses(bonuses)

    @staticmethod
    def equipment_bonuses(player: PlayerState) -> dict[str, int]:
        """Flat bonuses from weapon, armor and relic."""
        bonuses = {stat.value: 0 for stat in StatName}
        if player.weapon:
            bonuses[StatName.STRENGTH.value] += player.weapon.strength_bonus
        if player.armor:
            bonuses[StatName.DEFENSE.value] += player.armor.defense_bonus
        if player.relic:
            for stat in StatName:
                bonuses[stat.value] += player.relic.bonus_for(stat)
        return bonuses
