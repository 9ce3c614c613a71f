"""Combat system for turn-based combat."""

import logging
from typing import Optional

from tanelorn.engine.dice import DiceRoller
from tanelorn.engine.formulas import CombatFormulas
from tanelorn.models.actions import CombatAction, CombatOutcome, TurnResult
from tanelorn.models.enemy import Enemy
from tanelorn.models.stats import PlayerStats

logger = logging.getLogger(__name__)


class CombatSystem:
    """Handles turn-based combat resolution."""

    @staticmethod
    def execute_turn(
        action: CombatAction,
        player_stats: PlayerStats,
        enemy: Enemy,
        player_hp: int,
        enemy_hp: int,
        roll: Optional[float] = None,
        rng: Optional[DiceRoller] = None,
    ) -> TurnResult:
        """
        Resolve one turn. Never mutates its inputs.

        Args:
            action: Attack or run
            player_stats: Player's effective stats
            enemy: Enemy being fought
            player_hp: Player HP before the turn
            enemy_hp: Enemy HP before the turn
            roll: Optional fixed draw for the player; the enemy then uses 1 - roll
            rng: Roller used when no roll is given

        Returns:
            TurnResult with log lines, new HP values and the outcome (None if ongoing)
        """
        rng = rng or DiceRoller()
        player_roll = roll if roll is not None else rng.random()

        def enemy_roll() -> float:
            return 1 - roll if roll is not None else rng.random()

        messages: list[str] = []
        new_player_hp = player_hp
        new_enemy_hp = enemy_hp
        outcome: Optional[CombatOutcome] = None

        if action == CombatAction.ATTACK:
            player_damage = CombatFormulas.calculate_damage(
                player_stats.strength, enemy.defense, player_roll
            )
            new_enemy_hp = max(0, new_enemy_hp - player_damage)
            messages.append(f"You strike the {enemy.name} for {player_damage} damage!")

            if new_enemy_hp <= 0:
                outcome = CombatOutcome.VICTORY
                messages.append(f"The {enemy.name} has been defeated!")
            else:
                # Enemy counterattacks
                enemy_damage = CombatFormulas.calculate_damage(
                    enemy.strength, player_stats.defense, enemy_roll()
                )
                new_player_hp = max(0, new_player_hp - enemy_damage)
                messages.append(f"The {enemy.name} strikes back for {enemy_damage} damage!")

                if new_player_hp <= 0:
                    outcome = CombatOutcome.DEFEAT
                    messages.append("You have been defeated...")

        elif action == CombatAction.RUN:
            escaped = CombatFormulas.check_run_success(
                player_stats.agility, enemy.agility, player_roll
            )
            if escaped:
                outcome = CombatOutcome.FLED
                messages.append("You successfully flee from battle!")
            else:
                messages.append("You failed to escape!")
                # Enemy gets a free hit
                enemy_damage = CombatFormulas.calculate_damage(
                    enemy.strength, player_stats.defense, enemy_roll()
                )
                new_player_hp = max(0, new_player_hp - enemy_damage)
                messages.append(
                    f"The {enemy.name} strikes you as you try to flee for {enemy_damage} damage!"
                )

                if new_player_hp <= 0:
                    outcome = CombatOutcome.DEFEAT
                    messages.append("You have been defeated...")
        else:
            raise AssertionError(f"Unhandled combat action: {action!r}")

        logger.debug(
            f"{action.value} vs {enemy.name}: player {player_hp}->{new_player_hp}, "
            f"enemy {enemy_hp}->{new_enemy_hp}, outcome={outcome}"
        )
        return TurnResult(
            messages=messages,
            player_hp=new_player_hp,
            enemy_hp=new_enemy_hp,
            outcome=outcome,
        )

    @staticmethod
    def encounter_intro(enemy: Enemy) -> str:
        """Opening log line for a fight."""
        return f"A wild Level {enemy.level} {enemy.name} appears!"
