"""Progression accounting: folds combat and delve results into the player."""

import logging
import math
from typing import Optional

from tanelorn.config import (
    DEFAULT_ENCOUNTER_TURN_COST,
    DEFEAT_HP_FRACTION,
    DELVE_DEFEAT_GOLD_FRACTION,
    LEVEL_UP_MAX_HP_GAIN,
    LEVEL_UP_STAT_GAINS,
    LEVEL_UP_XP_MULTIPLIER,
)
from tanelorn.models.actions import CombatContext, CombatOutcome, RaidContext
from tanelorn.models.delve import (
    DelveOutcome,
    DelveResult,
    HealerEvent,
    NothingEvent,
    TrapEvent,
    TreasureEvent,
    ZoneEvent,
)
from tanelorn.models.enemy import Enemy
from tanelorn.models.metadata import GameSettings
from tanelorn.models.player import PlayerState
from tanelorn.models.stats import PlayerStats
from tanelorn.models.world import Zone

logger = logging.getLogger(__name__)


class ProgressionAccountant:
    """Applies rewards, penalties, turn costs and level-ups to PlayerState."""

    @staticmethod
    def create_initial_player(settings: Optional[GameSettings] = None) -> PlayerState:
        """
        Build a new level 1 player.

        Args:
            settings: Optional settings, defaults come from config

        Returns:
            Fresh PlayerState at full health with no equipment
        """
        settings = settings or GameSettings()
        return PlayerState(
            name=settings.player_name,
            level=1,
            hp=settings.starting_hp,
            max_hp=settings.starting_hp,
            xp=0,
            xp_to_next=settings.xp_to_next,
            gold=settings.starting_gold,
            turns_remaining=settings.starting_turns,
            stats=PlayerStats(
                strength=settings.starting_strength,
                defense=settings.starting_defense,
                agility=settings.starting_agility,
            ),
        )

    @staticmethod
    def spend_turns(player: PlayerState, turns: int) -> PlayerState:
        """Deduct turns, never going below zero."""
        return player.model_copy(update={"turns_remaining": max(0, player.turns_remaining - turns)})

    @staticmethod
    def turn_cost(context: CombatContext) -> int:
        if isinstance(context, RaidContext):
            return context.castle.turn_cost
        return DEFAULT_ENCOUNTER_TURN_COST

    @staticmethod
    def apply_combat_outcome(
        player: PlayerState,
        outcome: CombatOutcome,
        enemy: Enemy,
        context: CombatContext,
        final_hp: Optional[int] = None,
    ) -> PlayerState:
        """
        Fold a finished fight into the player.

        Args:
            player: Player before the fight
            outcome: Terminal outcome of the fight
            enemy: Enemy that was fought
            context: Why the fight happened; decides turn cost and bonuses
            final_hp: Player HP when the fight ended, defaults to the current HP

        Returns:
            Updated player
        """
        hp = player.hp if final_hp is None else min(final_hp, player.max_hp)
        player = ProgressionAccountant.spend_turns(player, ProgressionAccountant.turn_cost(context))

        if outcome == CombatOutcome.DEFEAT:
            recovered = max(1, math.floor(player.max_hp * DEFEAT_HP_FRACTION))
            logger.info(f"{player.name} was defeated by {enemy.name}, recovering at {recovered} HP")
            return player.model_copy(update={"hp": recovered})

        if outcome == CombatOutcome.FLED:
            return player.model_copy(update={"hp": hp})

        if outcome != CombatOutcome.VICTORY:
            raise AssertionError(f"Unhandled combat outcome: {outcome!r}")

        xp_gain, gold_gain = ProgressionAccountant.victory_rewards(enemy, context)
        logger.info(f"{player.name} defeated {enemy.name}: +{xp_gain} XP, +{gold_gain} gold")
        player = player.model_copy(
            update={"hp": hp, "xp": player.xp + xp_gain, "gold": player.gold + gold_gain}
        )
        return ProgressionAccountant._apply_level_up(player)

    @staticmethod
    def victory_rewards(enemy: Enemy, context: CombatContext) -> tuple[int, int]:
        """XP and gold for beating an enemy in the given context."""
        xp_gain = enemy.xp_reward
        gold_gain = enemy.gold_reward

        if context.type == "bounty":
            xp_gain += context.bounty.bonus_xp
            gold_gain += context.bounty.bonus_gold
        elif context.type == "raid":
            xp_gain = math.floor(xp_gain * context.castle.bonus_xp_multiplier)
            gold_gain = math.floor(gold_gain * context.castle.bonus_gold_multiplier)

        return xp_gain, gold_gain

    @staticmethod
    def apply_delve_outcome(player: PlayerState, result: DelveResult, zone: Zone) -> PlayerState:
        """
        Merge a finished delve into the player.

        A delve costs one turn no matter how it ended.

        Args:
            player: Player before the delve
            result: Summary produced by the delve session
            zone: Zone that was delved

        Returns:
            Updated player
        """
        updates = {}
        gold = result.gold_earned

        if result.outcome == DelveOutcome.DEFEATED:
            gold = math.floor(gold * DELVE_DEFEAT_GOLD_FRACTION)
            updates["hp"] = 0
        elif result.outcome == DelveOutcome.CLEARED:
            updates["hp"] = min(result.final_hp, player.max_hp)
            if result.relic is not None:
                updates["relic"] = result.relic
            if not player.has_cleared(zone.id):
                updates["cleared_bosses"] = [*player.cleared_bosses, zone.id]
        elif result.outcome == DelveOutcome.RETREATED:
            updates["hp"] = min(result.final_hp, player.max_hp)
        else:
            raise AssertionError(f"Unhandled delve outcome: {result.outcome!r}")

        logger.info(
            f"{player.name} finished {zone.name} ({result.outcome.value}) after "
            f"{result.steps_completed} steps: +{result.xp_earned} XP, +{gold} gold"
        )
        updates["gold"] = player.gold + gold
        updates["xp"] = player.xp + result.xp_earned

        player = ProgressionAccountant.spend_turns(player.model_copy(update=updates), 1)
        return ProgressionAccountant._apply_level_up(player)

    @staticmethod
    def apply_zone_event(player: PlayerState, event: ZoneEvent) -> PlayerState:
        """
        Resolve a non-combat exploration event. Each one costs an encounter turn.

        The wandering healer is used automatically when the player is hurt
        and can pay; combat events go through apply_combat_outcome instead.

        Args:
            player: Player exploring
            event: Treasure, trap, healer or nothing event

        Returns:
            Updated player
        """
        player = ProgressionAccountant.spend_turns(player, DEFAULT_ENCOUNTER_TURN_COST)

        if isinstance(event, TreasureEvent):
            return player.model_copy(update={"gold": player.gold + event.gold})
        if isinstance(event, TrapEvent):
            return player.model_copy(update={"hp": max(0, player.hp - event.damage)})
        if isinstance(event, HealerEvent):
            if player.hp >= player.max_hp or player.gold < event.cost:
                return player
            hp = min(player.max_hp, player.hp + event.heal_amount)
            return player.model_copy(update={"hp": hp, "gold": player.gold - event.cost})
        if isinstance(event, NothingEvent):
            return player
        raise AssertionError(f"Unhandled zone event: {event!r}")

    @staticmethod
    def _apply_level_up(player: PlayerState) -> PlayerState:
        """Single level-up check. Surplus XP beyond one level waits for the next reward."""
        if player.xp < player.xp_to_next:
            return player

        max_hp = player.max_hp + LEVEL_UP_MAX_HP_GAIN
        stats = player.stats.with_bonuses(LEVEL_UP_STAT_GAINS)
        level = player.level + 1
        logger.info(f"{player.name} reached level {level}")
        return player.model_copy(
            update={
                "level": level,
                "xp": player.xp - player.xp_to_next,
                "xp_to_next": math.floor(player.xp_to_next * LEVEL_UP_XP_MULTIPLIER),
                "max_hp": max_hp,
                "hp": max_hp,
                "stats": stats,
            }
        )
