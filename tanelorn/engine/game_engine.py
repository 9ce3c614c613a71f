"""Main game engine for state management and action processing."""

import logging
from typing import Optional

from tanelorn.content.castles import get_castle
from tanelorn.content.enemies import get_random_encounter
from tanelorn.content.market import get_armor, get_castle_defense, get_weapon
from tanelorn.content.zones import generate_zone_event, get_zone
from tanelorn.engine.action_validator import ActionValidator
from tanelorn.engine.bounties import generate_bounties, get_target_enemy
from tanelorn.engine.combat import CombatSystem
from tanelorn.engine.delve_session import DelveSessionMachine
from tanelorn.engine.dice import DiceRoller
from tanelorn.engine.market import MarketManager
from tanelorn.engine.progression import ProgressionAccountant
from tanelorn.engine.stat_calculator import StatCalculator
from tanelorn.helpers.debug import log_call
from tanelorn.models.actions import (
    AdventureContext,
    Bounty,
    BountyContext,
    CombatAction,
    CombatContext,
    CombatEncounter,
    CombatOutcome,
    RaidContext,
    ZoneContext,
)
from tanelorn.models.delve import (
    CombatEvent,
    DelveCommand,
    DelveSession,
    HealerEvent,
    TrapEvent,
    TreasureEvent,
)
from tanelorn.models.enemy import Enemy
from tanelorn.models.metadata import GameSettings
from tanelorn.models.player import PlayerState

logger = logging.getLogger(__name__)


class GameEngine:
    """Holds the player and routes every action through the core systems."""

    def __init__(
        self,
        player: Optional[PlayerState] = None,
        settings: Optional[GameSettings] = None,
        rng: Optional[DiceRoller] = None,
    ) -> None:
        """
        Initialize game engine.

        Args:
            player: Optional existing player, a new one is created otherwise
            settings: Optional settings, defaults come from config
            rng: Optional roller, seeded from settings when omitted
        """
        self._settings = settings or GameSettings()
        self._rng = rng or DiceRoller(self._settings.rng_seed)
        self._player = player or ProgressionAccountant.create_initial_player(self._settings)
        self._encounter: Optional[CombatEncounter] = None
        self._delve: Optional[DelveSession] = None
        self._bounties: list[Bounty] = []
        self.refresh_bounties()

    @property
    def player(self) -> PlayerState:
        """Get current player."""
        return self._player

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def encounter(self) -> Optional[CombatEncounter]:
        """Get the latest fight, finished or not."""
        return self._encounter

    @property
    def delve(self) -> Optional[DelveSession]:
        """Get the latest delve session, finished or not."""
        return self._delve

    @property
    def bounties(self) -> list[Bounty]:
        """Get the current bounty board."""
        return list(self._bounties)

    @property
    def is_busy(self) -> bool:
        """True while a fight or delve is in progress."""
        in_fight = self._encounter is not None and self._encounter.is_active
        in_delve = self._delve is not None and not self._delve.is_complete
        return in_fight or in_delve

    # Fights

    @log_call
    def start_adventure(self) -> tuple[bool, str]:
        """
        Start a fight against a random enemy near the player's level.

        Returns:
            Tuple of (success, message)
        """
        if self.is_busy:
            return False, "Finish the current encounter first"
        is_valid, error_msg = ActionValidator.validate_adventure(self._player)
        if not is_valid:
            return False, error_msg

        enemy = get_random_encounter(self._player.level, self._rng)
        return True, self._begin_fight(enemy, AdventureContext())

    @log_call
    def refresh_bounties(self) -> list[Bounty]:
        """Post a new bounty board for the player's level."""
        self._bounties = generate_bounties(self._player.level, self._settings.bounty_count, self._rng)
        return self.bounties

    @log_call
    def accept_bounty(self, index: int) -> tuple[bool, str]:
        """
        Fight the target of a bounty on the board.

        Args:
            index: Position on the board

        Returns:
            Tuple of (success, message)
        """
        if self.is_busy:
            return False, "Finish the current encounter first"
        if not 0 <= index < len(self._bounties):
            return False, f"No bounty at position {index}"

        bounty = self._bounties[index]
        is_valid, error_msg = ActionValidator.validate_bounty(self._player, bounty)
        if not is_valid:
            return False, error_msg

        return True, self._begin_fight(get_target_enemy(bounty), BountyContext(bounty=bounty))

    @log_call
    def start_raid(self, castle_id: str) -> tuple[bool, str]:
        """
        Lay siege to an NPC castle and face its lord.

        Args:
            castle_id: Castle identifier

        Returns:
            Tuple of (success, message)
        """
        if self.is_busy:
            return False, "Finish the current encounter first"
        castle = get_castle(castle_id)
        is_valid, error_msg = ActionValidator.validate_raid(self._player, castle)
        if not is_valid:
            return False, error_msg

        logger.info(f"{self._player.name} raids {castle.name}")
        return True, self._begin_fight(castle.boss.fresh_copy(), RaidContext(castle=castle))

    @log_call
    def combat_action(self, action: CombatAction, roll: Optional[float] = None) -> tuple[bool, str]:
        """
        Play one turn of the current fight.

        The outcome is folded into the player once the fight ends.

        Args:
            action: Attack or run
            roll: Optional fixed draw

        Returns:
            Tuple of (success, turn log)
        """
        encounter = self._encounter
        if encounter is None or not encounter.is_active:
            return False, "You are not in combat"

        stats = StatCalculator.calculate_effective_stats(self._player)
        turn = CombatSystem.execute_turn(
            action, stats, encounter.enemy, encounter.player_hp, encounter.enemy_hp, roll=roll, rng=self._rng
        )
        self._encounter = encounter.model_copy(
            update={
                "player_hp": turn.player_hp,
                "enemy_hp": turn.enemy_hp,
                "combat_log": [*encounter.combat_log, *turn.messages],
                "outcome": turn.outcome,
            }
        )

        if turn.outcome is not None:
            self._player = ProgressionAccountant.apply_combat_outcome(
                self._player, turn.outcome, encounter.enemy, encounter.context, final_hp=turn.player_hp
            )
            if turn.outcome == CombatOutcome.VICTORY and isinstance(encounter.context, BountyContext):
                self._bounties = [b for b in self._bounties if b.id != encounter.context.bounty.id]

        return True, "\n".join(turn.messages)

    def _begin_fight(self, enemy: Enemy, context: CombatContext) -> str:
        intro = CombatSystem.encounter_intro(enemy)
        self._encounter = CombatEncounter(
            enemy=enemy,
            context=context,
            player_hp=self._player.hp,
            enemy_hp=enemy.hp,
            combat_log=[intro],
        )
        return intro

    # Exploration

    @log_call
    def explore_zone(self, zone_id: str) -> tuple[bool, str]:
        """
        Explore a zone for one event.

        A combat event starts a fight; anything else is resolved at once.

        Args:
            zone_id: Zone identifier

        Returns:
            Tuple of (success, message)
        """
        if self.is_busy:
            return False, "Finish the current encounter first"
        zone = get_zone(zone_id)
        is_valid, error_msg = ActionValidator.validate_explore(self._player, zone)
        if not is_valid:
            return False, error_msg

        event = generate_zone_event(zone, self._player.level, self._rng)
        if isinstance(event, CombatEvent):
            return True, self._begin_fight(event.enemy, ZoneContext(zone_name=zone.name))

        before = self._player
        self._player = ProgressionAccountant.apply_zone_event(before, event)
        if isinstance(event, TreasureEvent):
            return True, f"{event.message} You gain {event.gold} gold."
        if isinstance(event, TrapEvent):
            return True, f"{event.message} You take {event.damage} damage."
        if isinstance(event, HealerEvent):
            if self._player.hp > before.hp:
                return True, (
                    f"A wandering healer restores {self._player.hp - before.hp} HP for {event.cost} gold."
                )
            return True, f"A wandering healer offers aid for {event.cost} gold, but you pass."
        return True, event.message

    # Delves

    @log_call
    def start_delve(self, zone_id: str) -> tuple[bool, str]:
        """
        Enter a zone for a multi-step delve.

        Args:
            zone_id: Zone identifier

        Returns:
            Tuple of (success, opening screen)
        """
        if self.is_busy:
            return False, "Finish the current encounter first"
        zone = get_zone(zone_id)
        is_valid, error_msg = ActionValidator.validate_delve(self._player, zone)
        if not is_valid:
            return False, error_msg

        self._delve = DelveSessionMachine.start_delve(
            self._player, zone, self._rng, total_steps=self._settings.delve_steps
        )
        return True, "\n".join(self._delve.messages)

    @log_call
    def delve_command(self, command: DelveCommand) -> tuple[bool, str]:
        """
        Send one command to the active delve.

        Args:
            command: Player input for the current screen

        Returns:
            Tuple of (success, screen text)
        """
        session = self._delve
        if session is None or session.is_complete:
            return False, "You are not delving"

        zone = get_zone(session.zone_id)
        new_session = DelveSessionMachine.transition(session, command, self._player, zone, self._rng)
        if new_session is session:
            return False, f"Cannot {command.command_type.value} right now"

        self._delve = new_session
        if new_session.is_complete:
            self._player = ProgressionAccountant.apply_delve_outcome(self._player, new_session.result, zone)
        return True, "\n".join(new_session.messages)

    # Market

    @log_call
    def buy_weapon(self, weapon_id: str) -> tuple[bool, str]:
        if self.is_busy:
            return False, "Finish the current encounter first"
        weapon = get_weapon(weapon_id)
        return self._trade(MarketManager.purchase_weapon(self._player, weapon), f"Equipped {weapon.name}")

    @log_call
    def buy_armor(self, armor_id: str) -> tuple[bool, str]:
        if self.is_busy:
            return False, "Finish the current encounter first"
        armor = get_armor(armor_id)
        return self._trade(MarketManager.purchase_armor(self._player, armor), f"Equipped {armor.name}")

    @log_call
    def buy_castle_defense(self, defense_id: str) -> tuple[bool, str]:
        if self.is_busy:
            return False, "Finish the current encounter first"
        defense = get_castle_defense(defense_id)
        if self._player.owns_defense(defense.id):
            return False, f"{defense.name} is already built"
        return self._trade(
            MarketManager.purchase_castle_defense(self._player, defense), f"Built {defense.name}"
        )

    @log_call
    def heal(self) -> tuple[bool, str]:
        """Pay the town healer for a full heal."""
        if self.is_busy:
            return False, "Finish the current encounter first"
        cost = MarketManager.get_healing_cost(self._player)
        if cost == 0:
            return False, "You are already at full health"
        return self._trade(MarketManager.heal(self._player), f"Healed to full for {cost} gold")

    def _trade(self, updated: PlayerState, message: str) -> tuple[bool, str]:
        if updated is self._player:
            return False, "Not enough gold"
        self._player = updated
        return True, message
