"""Tests for DelveSessionMachine."""

import pytest

from tanelorn.content.delve import ZONE_BOSSES, get_zone_merchant_items
from tanelorn.content.enemies import get_enemy_by_name
from tanelorn.engine.delve_session import NOT_ENOUGH_GOLD, DelveSessionMachine
from tanelorn.models.delve import (
    BossEvent,
    CombatEvent,
    DelveCommand,
    DelveCommandType,
    DelveOutcome,
    DelvePhase,
    DelveSession,
    DOTEffect,
    DOTType,
    HealerEvent,
    MerchantEvent,
    TrapEvent,
    TreasureEvent,
)
from tanelorn.models.items import DelveBuff
from tanelorn.models.stats import StatName

PROCEED = DelveCommand(command_type=DelveCommandType.PROCEED)
CONTINUE = DelveCommand(command_type=DelveCommandType.CONTINUE)
DEEPER = DelveCommand(command_type=DelveCommandType.DELVE_DEEPER)
RETREAT = DelveCommand(command_type=DelveCommandType.RETREAT)
ACCEPT = DelveCommand(command_type=DelveCommandType.ACCEPT_HEALER)
DECLINE = DelveCommand(command_type=DelveCommandType.DECLINE_HEALER)
ATTACK = DelveCommand(command_type=DelveCommandType.ATTACK, roll=0.5)
RUN = DelveCommand(command_type=DelveCommandType.RUN, roll=0.0)


def buy(index):
    return DelveCommand(command_type=DelveCommandType.BUY_ITEM, item_index=index)


def make_session(**kwargs):
    values = {"zone_id": "whispering-forest", "player_hp": 100, "max_hp": 100}
    values.update(kwargs)
    return DelveSession(**values)


@pytest.fixture
def step(player, forest, rng):
    """Apply one command with the shared player, zone and roller."""

    def _step(session, command):
        return DelveSessionMachine.transition(session, command, player, forest, rng)

    return _step


class TestStartDelve:
    """Test suite for opening a delve."""

    def test_opens_at_step_one(self, player, forest, rng):
        """Test the opening screen."""
        session = DelveSessionMachine.start_delve(player, forest, rng)
        assert session.step == 1
        assert session.total_steps == 6
        assert session.phase == DelvePhase.EVENT
        assert session.current_event is not None
        assert session.player_hp == player.hp
        assert session.gold == 0
        assert session.messages[0] == "Step 1 of 6"


class TestEventResolution:
    """Test suite for proceeding into an event."""

    def test_treasure_then_choice(self, step):
        """Test that treasure pays out and early steps offer a choice."""
        session = make_session(current_event=TreasureEvent(gold=20, message="Gold!"))
        session = step(session, PROCEED)
        assert session.phase == DelvePhase.EVENT_RESULT
        assert session.gold == 20
        session = step(session, CONTINUE)
        assert session.phase == DelvePhase.CHOICE

    def test_delve_deeper_generates_next_event(self, step):
        """Test advancing without DOTs goes straight to the next event."""
        session = make_session(phase=DelvePhase.CHOICE)
        session = step(session, DEEPER)
        assert session.step == 2
        assert session.phase == DelvePhase.EVENT
        assert session.current_event is not None

    def test_trap_applies_damage_and_dot(self, step):
        """Test that a trap hurts and may poison."""
        dot = DOTEffect(type=DOTType.POISON, damage_per_step=5, remaining_steps=2)
        session = make_session(current_event=TrapEvent(damage=10, message="Spikes!", dot=dot))
        session = step(session, PROCEED)
        assert session.player_hp == 90
        assert session.active_dots == [dot]
        assert session.messages == [
            "Spikes!",
            "You take 10 damage!",
            "You are afflicted with poison for 2 steps!",
        ]

    def test_lethal_trap_defeats(self, step):
        """Test that a trap can end the delve."""
        session = make_session(
            player_hp=5, gold=40, xp=30, step=2, current_event=TrapEvent(damage=10, message="Spikes!")
        )
        session = step(session, PROCEED)
        assert session.phase == DelvePhase.DEFEAT
        assert session.player_hp == 0

        session = step(session, CONTINUE)
        assert session.is_complete
        assert session.result.outcome == DelveOutcome.DEFEATED
        assert session.result.gold_earned == 40
        assert session.result.xp_earned == 30
        assert session.result.final_hp == 0
        assert session.result.steps_completed == 1

    def test_deep_step_advances_automatically(self, step):
        """Test that step 5 pushes on without offering a retreat."""
        session = make_session(step=5, current_event=TreasureEvent(gold=5, message="Coins"))
        session = step(step(session, PROCEED), CONTINUE)
        assert session.step == 6
        assert session.phase == DelvePhase.EVENT
        assert isinstance(session.current_event, BossEvent)


class TestDots:
    """Test suite for DOT ticks between steps."""

    def test_tick_before_next_event(self, step):
        """Test that DOTs tick when advancing and the event follows on continue."""
        dot = DOTEffect(type=DOTType.POISON, damage_per_step=5, remaining_steps=2)
        session = make_session(phase=DelvePhase.CHOICE, active_dots=[dot])
        session = step(session, DEEPER)
        assert session.phase == DelvePhase.DOT_TICK
        assert session.step == 2
        assert session.player_hp == 95
        assert session.active_dots[0].remaining_steps == 1
        assert session.messages == ["Poison deals 5 damage!"]

        session = step(session, CONTINUE)
        assert session.phase == DelvePhase.EVENT
        assert session.current_event is not None

    def test_lethal_tick_defeats(self, step):
        """Test that a DOT can finish the player between steps."""
        dot = DOTEffect(type=DOTType.FIRE, damage_per_step=8, remaining_steps=3)
        session = make_session(phase=DelvePhase.CHOICE, step=2, player_hp=3, active_dots=[dot])
        session = step(session, DEEPER)
        assert session.phase == DelvePhase.DEFEAT
        session = step(session, CONTINUE)
        assert session.result.outcome == DelveOutcome.DEFEATED
        assert session.result.steps_completed == 2


class TestDelveCombat:
    """Test suite for fights inside a delve."""

    def test_proceed_starts_combat(self, step):
        """Test that a combat event opens the fight."""
        rat = get_enemy_by_name("Sewer Rat")
        session = step(make_session(current_event=CombatEvent(enemy=rat)), PROCEED)
        assert session.phase == DelvePhase.COMBAT
        assert session.enemy_hp == 30
        assert session.messages == ["A wild Level 1 Sewer Rat appears!"]

    def test_turn_in_progress(self, step):
        """Test that an ongoing fight stays in combat."""
        rat = get_enemy_by_name("Sewer Rat")
        session = make_session(phase=DelvePhase.COMBAT, current_event=CombatEvent(enemy=rat), enemy_hp=30)
        session = step(session, ATTACK)
        assert session.phase == DelvePhase.COMBAT
        assert session.enemy_hp == 21
        assert session.player_hp == 98

    def test_buffs_apply_in_combat(self, step):
        """Test that delve buffs raise effective strength."""
        rat = get_enemy_by_name("Sewer Rat")
        session = make_session(
            phase=DelvePhase.COMBAT,
            current_event=CombatEvent(enemy=rat),
            enemy_hp=30,
            active_buffs=[DelveBuff(name="strength boost", stat=StatName.STRENGTH, amount=10)],
        )
        session = step(session, ATTACK)
        # floor(20 * 1.0 - 1) = 19
        assert session.enemy_hp == 11

    def test_victory_adds_rewards(self, step):
        """Test that a win feeds the accumulators and offers a choice."""
        rat = get_enemy_by_name("Sewer Rat")
        session = make_session(phase=DelvePhase.COMBAT, current_event=CombatEvent(enemy=rat), enemy_hp=5)
        session = step(session, ATTACK)
        assert session.phase == DelvePhase.CHOICE
        assert session.xp == 15
        assert session.gold == 5

    def test_step_five_victory_advances(self, step):
        """Test that winning at step 5 heads straight for the boss."""
        rat = get_enemy_by_name("Sewer Rat")
        session = make_session(
            step=5, phase=DelvePhase.COMBAT, current_event=CombatEvent(enemy=rat), enemy_hp=5
        )
        session = step(session, ATTACK)
        assert session.step == 6
        assert isinstance(session.current_event, BossEvent)
        assert session.xp == 15

    def test_boss_victory_clears_with_relic(self, step):
        """Test beating the boss awards the relic."""
        boss = ZONE_BOSSES["whispering-forest"]
        session = make_session(
            step=6,
            phase=DelvePhase.COMBAT,
            current_event=BossEvent(enemy=boss.enemy, relic=boss.relic),
            enemy_hp=5,
        )
        session = step(session, ATTACK)
        assert session.phase == DelvePhase.BOSS_VICTORY
        assert session.acquired_relic == boss.relic

        session = step(session, CONTINUE)
        assert session.result.outcome == DelveOutcome.CLEARED
        assert session.result.relic == boss.relic
        assert session.result.steps_completed == 6
        assert session.active_buffs == []

    def test_cleared_zone_final_fight(self, step):
        """Test that the substitute fight at step 6 still clears the delve."""
        runt = get_enemy_by_name("Goblin Runt")
        session = make_session(step=6, phase=DelvePhase.COMBAT, current_event=CombatEvent(enemy=runt), enemy_hp=5)
        session = step(session, ATTACK)
        assert session.phase == DelvePhase.BOSS_VICTORY
        session = step(session, CONTINUE)
        assert session.result.outcome == DelveOutcome.CLEARED
        assert session.result.relic is None

    def test_fleeing_ends_delve(self, step):
        """Test that running away retreats immediately."""
        rat = get_enemy_by_name("Sewer Rat")
        session = make_session(
            step=3, gold=25, phase=DelvePhase.COMBAT, current_event=CombatEvent(enemy=rat), enemy_hp=30
        )
        session = step(session, RUN)
        assert session.is_complete
        assert session.result.outcome == DelveOutcome.RETREATED
        assert session.result.steps_completed == 2
        assert session.result.gold_earned == 25

    def test_defeat_in_combat(self, step):
        """Test that losing a fight defeats the player."""
        rat = get_enemy_by_name("Sewer Rat")
        session = make_session(
            player_hp=1, phase=DelvePhase.COMBAT, current_event=CombatEvent(enemy=rat), enemy_hp=30
        )
        session = step(session, ATTACK)
        assert session.phase == DelvePhase.DEFEAT


class TestMerchant:
    """Test suite for merchant purchases."""

    @pytest.fixture
    def merchant(self):
        return make_session(
            phase=DelvePhase.EVENT_RESULT,
            current_event=MerchantEvent(items=get_zone_merchant_items("whispering-forest")),
        )

    def test_buy_buff(self, step, merchant):
        """Test that a buff item is paid from delve gold."""
        session = step(merchant.model_copy(update={"gold": 30}), buy(0))
        assert session.gold == 15
        assert session.active_buffs[0].stat == StatName.DEFENSE
        assert session.active_buffs[0].amount == 2

    def test_not_enough_gold(self, step, merchant):
        """Test that a short purse is reported."""
        session = step(merchant.model_copy(update={"gold": 10}), buy(1))
        assert session.gold == 10
        assert session.messages[-1] == NOT_ENOUGH_GOLD

    def test_heal_is_capped(self, step, merchant):
        """Test that healing items never exceed max HP."""
        session = step(merchant.model_copy(update={"gold": 50, "player_hp": 95}), buy(1))
        assert session.player_hp == 100
        assert session.gold == 30

    def test_bad_index_is_ignored(self, step, merchant):
        """Test that an out-of-range item leaves the session alone."""
        assert step(merchant, buy(9)) is merchant


class TestHealer:
    """Test suite for the wandering healer."""

    @pytest.fixture
    def healer(self):
        return make_session(
            phase=DelvePhase.EVENT_RESULT, player_hp=50, current_event=HealerEvent(cost=12, heal_amount=22)
        )

    def test_accept(self, step, healer):
        """Test paying the healer."""
        session = step(healer.model_copy(update={"gold": 20}), ACCEPT)
        assert session.player_hp == 72
        assert session.gold == 8
        assert session.healer_decided

    def test_accept_without_gold(self, step, healer):
        """Test that an unaffordable heal leaves the offer open."""
        session = step(healer, ACCEPT)
        assert session.messages[-1] == NOT_ENOUGH_GOLD
        assert not session.healer_decided
        assert step(session, CONTINUE) is session

    def test_decline_then_continue(self, step, healer):
        """Test that declining lets the delve go on."""
        session = step(step(healer, DECLINE), CONTINUE)
        assert session.phase == DelvePhase.CHOICE
        assert session.player_hp == 50


class TestRetreat:
    """Test suite for leaving with the spoils."""

    def test_retreat_summary(self, step):
        """Test that retreating keeps everything found."""
        session = make_session(phase=DelvePhase.CHOICE, step=2, gold=60, xp=40, player_hp=70)
        session = step(session, RETREAT)
        assert session.phase == DelvePhase.RETREAT_SUMMARY
        session = step(session, CONTINUE)
        assert session.result.outcome == DelveOutcome.RETREATED
        assert session.result.gold_earned == 60
        assert session.result.xp_earned == 40
        assert session.result.final_hp == 70
        assert session.result.steps_completed == 2


class TestInvalidCommands:
    """Test suite for commands that do not fit the phase."""

    @pytest.mark.parametrize(
        "phase,command",
        [
            (DelvePhase.EVENT, ATTACK),
            (DelvePhase.CHOICE, PROCEED),
            (DelvePhase.COMBAT, RETREAT),
            (DelvePhase.COMPLETE, CONTINUE),
        ],
    )
    def test_session_unchanged(self, step, phase, command):
        """Test that an out-of-place command returns the same session."""
        session = make_session(phase=phase, current_event=TreasureEvent(gold=1, message="x"))
        assert step(session, command) is session
