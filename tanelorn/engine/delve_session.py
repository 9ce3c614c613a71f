"""Delve session state machine.

A delve is played as a sequence of screens (phases). Each player command
moves the session from one phase to the next; the session is replaced,
never mutated, and only reaches the player through
ProgressionAccountant.apply_delve_outcome once it is complete.
"""

import logging
from typing import Callable, Optional

from tanelorn.config import DEFAULT_DELVE_STEPS
from tanelorn.engine.combat import CombatSystem
from tanelorn.engine.delve import DelveGenerator
from tanelorn.engine.dice import DiceRoller
from tanelorn.engine.stat_calculator import StatCalculator
from tanelorn.engine.status_effects import StatusEffectEngine
from tanelorn.models.actions import CombatOutcome
from tanelorn.models.delve import (
    BossEvent,
    BufferEvent,
    CombatEvent,
    DelveCommand,
    DelveCommandType,
    DelveOutcome,
    DelvePhase,
    DelveResult,
    DelveSession,
    DelveStepEvent,
    HealerEvent,
    MerchantEvent,
    TrapEvent,
    TreasureEvent,
)
from tanelorn.models.items import DelveBuff, HealEffect
from tanelorn.models.player import PlayerState
from tanelorn.models.world import Zone

logger = logging.getLogger(__name__)

NOT_ENOUGH_GOLD = "Not enough gold"


class DelveSessionMachine:
    """Drives a DelveSession through its phases."""

    @staticmethod
    def start_delve(
        player: PlayerState,
        zone: Zone,
        rng: Optional[DiceRoller] = None,
        total_steps: int = DEFAULT_DELVE_STEPS,
    ) -> DelveSession:
        """
        Open a delve with the first event already generated.

        Args:
            player: Player entering the zone
            zone: Zone to delve
            rng: Optional roller
            total_steps: Length of the delve

        Returns:
            Session at step 1 in the EVENT phase
        """
        session = DelveSession(
            zone_id=zone.id,
            step=1,
            total_steps=total_steps,
            player_hp=player.hp,
            max_hp=player.max_hp,
        )
        logger.info(f"{player.name} enters {zone.name} for a {total_steps}-step delve")
        return DelveSessionMachine._enter_step(session, zone, player, rng or DiceRoller())

    @staticmethod
    def transition(
        session: DelveSession,
        command: DelveCommand,
        player: PlayerState,
        zone: Zone,
        rng: Optional[DiceRoller] = None,
    ) -> DelveSession:
        """
        Apply one player command.

        Args:
            session: Current session
            command: Player input
            player: Player on the delve; supplies base stats and gear
            zone: Zone being delved
            rng: Optional roller, consumed only when an event is generated
                or a combat turn is rolled

        Returns:
            Next session, or the same session if the command does not
            apply to the current phase
        """
        handler = _PHASE_HANDLERS.get((session.phase, command.command_type))
        if handler is None:
            logger.warning(f"Ignoring {command.command_type.value} during {session.phase.value}")
            return session
        return handler(session, command, player, zone, rng or DiceRoller())

    # Step flow

    @staticmethod
    def _enter_step(
        session: DelveSession, zone: Zone, player: PlayerState, rng: DiceRoller
    ) -> DelveSession:
        event = DelveGenerator.generate_delve_step(
            zone,
            session.step,
            player.level,
            player.cleared_bosses,
            rng=rng,
            total_steps=session.total_steps,
        )
        return session.model_copy(
            update={
                "phase": DelvePhase.EVENT,
                "current_event": event,
                "enemy_hp": None,
                "healer_decided": False,
                "messages": [f"Step {session.step} of {session.total_steps}", *describe_event(event)],
            }
        )

    @staticmethod
    def _advance(
        session: DelveSession,
        zone: Zone,
        player: PlayerState,
        rng: DiceRoller,
        messages: Optional[list[str]] = None,
    ) -> DelveSession:
        """Move to the next step, ticking DOTs on the way."""
        messages = list(messages or [])
        session = session.model_copy(update={"step": session.step + 1, "current_event": None})

        if not session.active_dots:
            entered = DelveSessionMachine._enter_step(session, zone, player, rng)
            return entered.model_copy(update={"messages": messages + entered.messages})

        tick = StatusEffectEngine.tick_dots(session.active_dots)
        player_hp = max(0, session.player_hp - tick.total_damage)
        session = session.model_copy(update={"player_hp": player_hp, "active_dots": tick.remaining})
        messages.extend(tick.messages)

        if player_hp <= 0:
            return DelveSessionMachine._defeat(session, messages)
        return session.model_copy(update={"phase": DelvePhase.DOT_TICK, "messages": messages})

    @staticmethod
    def _step_done(
        session: DelveSession,
        zone: Zone,
        player: PlayerState,
        rng: DiceRoller,
        messages: list[str],
    ) -> DelveSession:
        """Offer the retreat choice on early steps, push on automatically near the end."""
        if session.step >= session.total_steps - 1:
            return DelveSessionMachine._advance(session, zone, player, rng, messages)
        return session.model_copy(
            update={
                "phase": DelvePhase.CHOICE,
                "messages": messages + ["Delve deeper or retreat with your spoils?"],
            }
        )

    @staticmethod
    def _defeat(session: DelveSession, messages: list[str]) -> DelveSession:
        logger.info(f"Defeated in {session.zone_id} at step {session.step}")
        return session.model_copy(
            update={
                "phase": DelvePhase.DEFEAT,
                "player_hp": 0,
                "messages": messages + ["You have fallen in the depths..."],
            }
        )

    @staticmethod
    def _complete(session: DelveSession, outcome: DelveOutcome, steps_completed: int) -> DelveSession:
        result = DelveResult(
            outcome=outcome,
            gold_earned=session.gold,
            xp_earned=session.xp,
            final_hp=session.player_hp,
            steps_completed=max(0, steps_completed),
            relic=session.acquired_relic if outcome == DelveOutcome.CLEARED else None,
        )
        logger.debug(f"Delve in {session.zone_id} complete: {result}")
        return session.model_copy(
            update={"phase": DelvePhase.COMPLETE, "active_buffs": [], "active_dots": [], "result": result}
        )

    # Phase handlers

    @staticmethod
    def _proceed(session, command, player, zone, rng) -> DelveSession:
        event = session.current_event

        if isinstance(event, (CombatEvent, BossEvent)):
            return session.model_copy(
                update={
                    "phase": DelvePhase.COMBAT,
                    "enemy_hp": event.enemy.hp,
                    "messages": [CombatSystem.encounter_intro(event.enemy)],
                }
            )

        if isinstance(event, TrapEvent):
            player_hp = max(0, session.player_hp - event.damage)
            messages = [event.message, f"You take {event.damage} damage!"]
            active_dots = session.active_dots
            if event.dot is not None:
                active_dots = [*active_dots, event.dot]
                messages.append(
                    f"You are afflicted with {event.dot.type.value} for {event.dot.remaining_steps} steps!"
                )
            session = session.model_copy(update={"player_hp": player_hp, "active_dots": active_dots})
            if player_hp <= 0:
                return DelveSessionMachine._defeat(session, messages)
            return session.model_copy(update={"phase": DelvePhase.EVENT_RESULT, "messages": messages})

        if isinstance(event, TreasureEvent):
            return session.model_copy(
                update={
                    "phase": DelvePhase.EVENT_RESULT,
                    "gold": session.gold + event.gold,
                    "messages": [event.message, f"You found {event.gold} gold!"],
                }
            )

        if isinstance(event, BufferEvent):
            return session.model_copy(
                update={
                    "phase": DelvePhase.EVENT_RESULT,
                    "active_buffs": [*session.active_buffs, event.buff],
                    "messages": [event.message, f"+{event.buff.amount} {event.buff.stat.value}!"],
                }
            )

        if isinstance(event, MerchantEvent):
            return session.model_copy(
                update={
                    "phase": DelvePhase.EVENT_RESULT,
                    "messages": [
                        f"[{i}] {item.name} - {item.cost} gold: {item.description}"
                        for i, item in enumerate(event.items)
                    ],
                }
            )

        if isinstance(event, HealerEvent):
            return session.model_copy(
                update={
                    "phase": DelvePhase.EVENT_RESULT,
                    "messages": [f"Restore {event.heal_amount} HP for {event.cost} gold?"],
                }
            )

        raise AssertionError(f"Unhandled delve event: {event!r}")

    @staticmethod
    def _combat_turn(session, command, player, zone, rng) -> DelveSession:
        event = session.current_event
        enemy = event.enemy
        stats = StatCalculator.calculate_effective_stats(player, session.active_buffs)
        turn = CombatSystem.execute_turn(
            command.combat_action,
            stats,
            enemy,
            session.player_hp,
            session.enemy_hp,
            roll=command.roll,
            rng=rng,
        )
        session = session.model_copy(update={"player_hp": turn.player_hp, "enemy_hp": turn.enemy_hp})
        messages = list(turn.messages)

        if turn.outcome is None:
            return session.model_copy(update={"messages": messages})

        if turn.outcome == CombatOutcome.DEFEAT:
            return DelveSessionMachine._defeat(session, messages)

        if turn.outcome == CombatOutcome.FLED:
            logger.info(f"Fled from {enemy.name}, leaving {session.zone_id}")
            fled = session.model_copy(update={"messages": messages})
            return DelveSessionMachine._complete(fled, DelveOutcome.RETREATED, session.step - 1)

        # Victory
        messages.append(f"You gain {enemy.xp_reward} XP and {enemy.gold_reward} gold!")
        session = session.model_copy(
            update={"xp": session.xp + enemy.xp_reward, "gold": session.gold + enemy.gold_reward}
        )
        if session.step >= session.total_steps:
            relic = event.relic if isinstance(event, BossEvent) else None
            if relic is not None:
                messages.append(f"You claim the {relic.name}!")
            return session.model_copy(
                update={"phase": DelvePhase.BOSS_VICTORY, "acquired_relic": relic, "messages": messages}
            )
        return DelveSessionMachine._step_done(session, zone, player, rng, messages)

    @staticmethod
    def _buy_item(session, command, player, zone, rng) -> DelveSession:
        event = session.current_event
        if not isinstance(event, MerchantEvent):
            return session
        if command.item_index is None or command.item_index >= len(event.items):
            logger.warning(f"No merchant item at index {command.item_index}")
            return session

        item = event.items[command.item_index]
        if session.gold < item.cost:
            return session.model_copy(update={"messages": [*session.messages, NOT_ENOUGH_GOLD]})

        updates = {"gold": session.gold - item.cost}
        if isinstance(item.effect, DelveBuff):
            updates["active_buffs"] = [*session.active_buffs, item.effect]
            message = f"You bought {item.name}: +{item.effect.amount} {item.effect.stat.value}!"
        elif isinstance(item.effect, HealEffect):
            updates["player_hp"] = min(session.max_hp, session.player_hp + item.effect.amount)
            message = f"You bought {item.name} and recover {updates['player_hp'] - session.player_hp} HP!"
        else:
            raise AssertionError(f"Unhandled item effect: {item.effect!r}")

        updates["messages"] = [*session.messages, message]
        return session.model_copy(update=updates)

    @staticmethod
    def _accept_healer(session, command, player, zone, rng) -> DelveSession:
        event = session.current_event
        if not isinstance(event, HealerEvent) or session.healer_decided:
            return session
        if session.gold < event.cost:
            return session.model_copy(update={"messages": [*session.messages, NOT_ENOUGH_GOLD]})

        player_hp = min(session.max_hp, session.player_hp + event.heal_amount)
        return session.model_copy(
            update={
                "gold": session.gold - event.cost,
                "player_hp": player_hp,
                "healer_decided": True,
                "messages": [f"The healer restores {player_hp - session.player_hp} HP."],
            }
        )

    @staticmethod
    def _decline_healer(session, command, player, zone, rng) -> DelveSession:
        if not isinstance(session.current_event, HealerEvent) or session.healer_decided:
            return session
        return session.model_copy(
            update={"healer_decided": True, "messages": ["You decline the healer's offer."]}
        )

    @staticmethod
    def _continue_result(session, command, player, zone, rng) -> DelveSession:
        if isinstance(session.current_event, HealerEvent) and not session.healer_decided:
            logger.warning("Healer offer must be accepted or declined first")
            return session
        return DelveSessionMachine._step_done(session, zone, player, rng, [])

    @staticmethod
    def _continue_dot_tick(session, command, player, zone, rng) -> DelveSession:
        return DelveSessionMachine._enter_step(session, zone, player, rng)

    @staticmethod
    def _delve_deeper(session, command, player, zone, rng) -> DelveSession:
        return DelveSessionMachine._advance(session, zone, player, rng)

    @staticmethod
    def _retreat(session, command, player, zone, rng) -> DelveSession:
        logger.info(f"Retreating from {session.zone_id} after step {session.step}")
        return session.model_copy(
            update={
                "phase": DelvePhase.RETREAT_SUMMARY,
                "messages": [
                    f"You retreat after {session.step} steps with {session.gold} gold and {session.xp} XP."
                ],
            }
        )

    @staticmethod
    def _finish_boss_victory(session, command, player, zone, rng) -> DelveSession:
        return DelveSessionMachine._complete(session, DelveOutcome.CLEARED, session.step)

    @staticmethod
    def _finish_defeat(session, command, player, zone, rng) -> DelveSession:
        return DelveSessionMachine._complete(session, DelveOutcome.DEFEATED, session.step - 1)

    @staticmethod
    def _finish_retreat(session, command, player, zone, rng) -> DelveSession:
        return DelveSessionMachine._complete(session, DelveOutcome.RETREATED, session.step)


def describe_event(event: DelveStepEvent) -> list[str]:
    """Lines announcing an event before the player acts on it."""
    if isinstance(event, BossEvent):
        return [f"The {event.enemy.name} guards the depths!"]
    if isinstance(event, CombatEvent):
        return [f"A Level {event.enemy.level} {event.enemy.name} blocks the path!"]
    if isinstance(event, TrapEvent):
        return ["Something feels wrong about this passage..."]
    if isinstance(event, TreasureEvent):
        return ["Something glints in the shadows."]
    if isinstance(event, BufferEvent):
        return ["A stranger approaches."]
    if isinstance(event, HealerEvent):
        return ["A wandering healer offers their services."]
    if isinstance(event, MerchantEvent):
        return ["A travelling merchant spreads out their wares."]
    raise AssertionError(f"Unhandled delve event: {event!r}")


_Handler = Callable[[DelveSession, DelveCommand, PlayerState, Zone, DiceRoller], DelveSession]

_PHASE_HANDLERS: dict[tuple[DelvePhase, DelveCommandType], _Handler] = {
    (DelvePhase.EVENT, DelveCommandType.PROCEED): DelveSessionMachine._proceed,
    (DelvePhase.COMBAT, DelveCommandType.ATTACK): DelveSessionMachine._combat_turn,
    (DelvePhase.COMBAT, DelveCommandType.RUN): DelveSessionMachine._combat_turn,
    (DelvePhase.EVENT_RESULT, DelveCommandType.BUY_ITEM): DelveSessionMachine._buy_item,
    (DelvePhase.EVENT_RESULT, DelveCommandType.ACCEPT_HEALER): DelveSessionMachine._accept_healer,
    (DelvePhase.EVENT_RESULT, DelveCommandType.DECLINE_HEALER): DelveSessionMachine._decline_healer,
    (DelvePhase.EVENT_RESULT, DelveCommandType.CONTINUE): DelveSessionMachine._continue_result,
    (DelvePhase.DOT_TICK, DelveCommandType.CONTINUE): DelveSessionMachine._continue_dot_tick,
    (DelvePhase.CHOICE, DelveCommandType.DELVE_DEEPER): DelveSessionMachine._delve_deeper,
    (DelvePhase.CHOICE, DelveCommandType.RETREAT): DelveSessionMachine._retreat,
    (DelvePhase.BOSS_VICTORY, DelveCommandType.CONTINUE): DelveSessionMachine._finish_boss_victory,
    (DelvePhase.DEFEAT, DelveCommandType.CONTINUE): DelveSessionMachine._finish_defeat,
    (DelvePhase.RETREAT_SUMMARY, DelveCommandType.CONTINUE): DelveSessionMachine._finish_retreat,
}
