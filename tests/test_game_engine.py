"""Tests for GameEngine."""

import pytest

from tanelorn.engine.dice import DiceRoller
from tanelorn.engine.game_engine import GameEngine
from tanelorn.engine.progression import ProgressionAccountant
from tanelorn.models.actions import CombatAction, CombatOutcome
from tanelorn.models.delve import (
    DelveCommand,
    DelveCommandType,
    DelveOutcome,
    DelvePhase,
    DelveResult,
    HealerEvent,
)
from tanelorn.models.stats import PlayerStats


def command(command_type):
    return DelveCommand(command_type=command_type)


@pytest.fixture
def champion(player):
    """Player strong enough to win every fight in one blow."""
    return player.model_copy(
        update={"stats": PlayerStats(strength=500, defense=100, agility=7), "hp": 1000, "max_hp": 1000}
    )


@pytest.fixture
def engine(settings):
    return GameEngine(settings=settings, rng=DiceRoller(seed=42))


def play_delve(engine, deeper):
    """Drive the active delve to the end, returns the last screen."""
    text = ""
    for _ in range(100):
        session = engine.delve
        if session.is_complete:
            return text
        if session.phase == DelvePhase.EVENT:
            ok, text = engine.delve_command(command(DelveCommandType.PROCEED))
        elif session.phase == DelvePhase.COMBAT:
            ok, text = engine.delve_command(command(DelveCommandType.ATTACK))
        elif session.phase == DelvePhase.EVENT_RESULT:
            if isinstance(session.current_event, HealerEvent) and not session.healer_decided:
                engine.delve_command(command(DelveCommandType.DECLINE_HEALER))
            ok, text = engine.delve_command(command(DelveCommandType.CONTINUE))
        elif session.phase == DelvePhase.CHOICE:
            choice = DelveCommandType.DELVE_DEEPER if deeper else DelveCommandType.RETREAT
            ok, text = engine.delve_command(command(choice))
        else:
            ok, text = engine.delve_command(command(DelveCommandType.CONTINUE))
        assert ok
    pytest.fail("Delve did not finish")


class TestSetup:
    """Test suite for engine construction."""

    def test_new_game(self, engine):
        """Test that a new game creates a player and a board."""
        assert engine.player.name == "Tester"
        assert engine.player.turns_remaining == 20
        # Only three enemies fit level 1
        assert len(engine.bounties) == 3
        assert engine.encounter is None
        assert engine.delve is None
        assert not engine.is_busy

    def test_existing_player(self, champion, settings):
        """Test resuming with a given player."""
        assert GameEngine(player=champion, settings=settings).player is champion


class TestFights:
    """Test suite for adventures, bounties and raids."""

    def test_adventure_victory(self, champion, settings):
        """Test a full adventure fight."""
        engine = GameEngine(player=champion, settings=settings, rng=DiceRoller(seed=3))
        ok, intro = engine.start_adventure()
        assert ok
        assert intro.startswith("A wild Level")
        assert engine.is_busy

        ok, _ = engine.combat_action(CombatAction.ATTACK)
        assert ok
        assert engine.encounter.outcome == CombatOutcome.VICTORY
        assert engine.player.turns_remaining == 19
        assert engine.player.xp == engine.encounter.enemy.xp_reward
        assert not engine.is_busy

    def test_adventure_defeat(self, player, settings):
        """Test that losing leaves the player at half health."""
        weakling = player.model_copy(update={"hp": 1, "stats": PlayerStats(strength=0, defense=0, agility=0)})
        engine = GameEngine(player=weakling, settings=settings, rng=DiceRoller(seed=3))
        engine.start_adventure()
        engine.combat_action(CombatAction.ATTACK, roll=0.5)
        assert engine.encounter.outcome == CombatOutcome.DEFEAT
        assert engine.player.hp == 50
        assert engine.player.xp == 0

    def test_one_fight_at_a_time(self, engine):
        """Test that a second fight cannot start mid-combat."""
        assert engine.start_adventure()[0]
        assert engine.start_adventure() == (False, "Finish the current encounter first")
        assert engine.start_delve("whispering-forest")[0] is False

    def test_broke_player_after_delve_defeat_can_fight(self, player, settings, forest):
        """Test that falling in a delve with no gold never ends the game."""
        result = DelveResult(
            outcome=DelveOutcome.DEFEATED, gold_earned=0, xp_earned=0, final_hp=0, steps_completed=0
        )
        fallen = ProgressionAccountant.apply_delve_outcome(player, result, forest)
        assert fallen.hp == 0
        assert fallen.gold == 50

        engine = GameEngine(player=fallen, settings=settings, rng=DiceRoller(seed=3))
        assert engine.heal() == (False, "Not enough gold")
        assert engine.start_adventure()[0]
        board = GameEngine(player=fallen, settings=settings)
        index = next(i for i, b in enumerate(board.bounties) if b.required_level <= fallen.level)
        assert board.accept_bounty(index)[0]
        assert GameEngine(player=fallen, settings=settings).start_delve("whispering-forest")[0]
        assert GameEngine(player=fallen, settings=settings).explore_zone("whispering-forest")[0]

    def test_combat_action_needs_a_fight(self, engine):
        """Test attacking with nobody around."""
        assert engine.combat_action(CombatAction.ATTACK) == (False, "You are not in combat")

    def test_no_turns_left(self, player, settings):
        """Test that an exhausted player cannot fight."""
        engine = GameEngine(player=player.model_copy(update={"turns_remaining": 0}), settings=settings)
        ok, message = engine.start_adventure()
        assert not ok
        assert "Not enough turns" in message

    def test_bounty_victory(self, champion, settings):
        """Test that a won bounty pays its bonus and leaves the board."""
        engine = GameEngine(player=champion, settings=settings, rng=DiceRoller(seed=5))
        bounty = engine.bounties[0]
        assert engine.accept_bounty(0)[0]
        assert engine.encounter.enemy.name == bounty.target_enemy_name

        engine.combat_action(CombatAction.ATTACK)
        assert engine.player.xp == engine.encounter.enemy.xp_reward + bounty.bonus_xp
        assert bounty.id not in [b.id for b in engine.bounties]

    def test_bad_bounty_index(self, engine):
        """Test accepting a bounty that is not on the board."""
        assert engine.accept_bounty(99) == (False, "No bounty at position 99")

    def test_raid_requires_level(self, engine):
        """Test that castles are gated by level."""
        ok, message = engine.start_raid("goblin-stockade")
        assert not ok
        assert "requires level 2" in message

    def test_raid_requires_two_turns(self, champion, settings):
        """Test that a raid needs its full turn cost."""
        tired = champion.model_copy(update={"level": 2, "turns_remaining": 1})
        assert not GameEngine(player=tired, settings=settings).start_raid("goblin-stockade")[0]

    def test_raid_victory(self, champion, settings):
        """Test that a raid costs two turns and multiplies gold."""
        engine = GameEngine(player=champion.model_copy(update={"level": 2}), settings=settings)
        assert engine.start_raid("goblin-stockade")[0]
        engine.combat_action(CombatAction.ATTACK)
        assert engine.player.turns_remaining == 18
        assert engine.player.gold == 50 + 80

    def test_unknown_castle(self, engine):
        """Test that an unknown castle id is an error."""
        with pytest.raises(ValueError):
            engine.start_raid("sand-castle")


class TestDelves:
    """Test suite for delving through the engine."""

    def test_zone_gated_by_level(self, engine):
        """Test that deep zones are locked to new players."""
        ok, message = engine.start_delve("abyssal-depths")
        assert not ok
        assert "requires level 8" in message

    def test_retreat_after_first_step(self, champion, settings):
        """Test a short delve."""
        engine = GameEngine(player=champion, settings=settings, rng=DiceRoller(seed=11))
        ok, text = engine.start_delve("whispering-forest")
        assert ok
        assert text.startswith("Step 1 of 6")
        play_delve(engine, deeper=False)
        assert engine.delve.result.outcome == DelveOutcome.RETREATED
        assert engine.player.turns_remaining == 19
        assert engine.player.relic is None

    def test_full_clear(self, champion, settings):
        """Test clearing a zone all the way to the boss."""
        engine = GameEngine(player=champion, settings=settings, rng=DiceRoller(seed=11))
        engine.start_delve("whispering-forest")
        play_delve(engine, deeper=True)
        assert engine.delve.result.outcome == DelveOutcome.CLEARED
        assert engine.delve.result.steps_completed == 6
        assert engine.player.relic.id == "heartwood-charm"
        assert engine.player.cleared_bosses == ["whispering-forest"]
        assert engine.player.turns_remaining == 19

    def test_invalid_command(self, champion, settings):
        """Test that commands out of place are refused."""
        engine = GameEngine(player=champion, settings=settings)
        engine.start_delve("whispering-forest")
        ok, message = engine.delve_command(command(DelveCommandType.RETREAT))
        assert not ok
        assert message == "Cannot retreat right now"

    def test_command_without_delve(self, engine):
        """Test commands with no delve running."""
        assert engine.delve_command(command(DelveCommandType.PROCEED)) == (False, "You are not delving")


class TestMarket:
    """Test suite for market passthroughs."""

    def test_buy_weapon(self, engine):
        """Test buying a weapon."""
        assert engine.buy_weapon("rusty-sword") == (True, "Equipped Rusty Sword")
        assert engine.player.gold == 20

    def test_buy_too_expensive(self, engine):
        """Test that an unaffordable purchase fails cleanly."""
        before = engine.player
        assert engine.buy_armor("shadow-plate") == (False, "Not enough gold")
        assert engine.player is before

    def test_castle_defense_once(self, engine):
        """Test that a fortification is built only once."""
        assert engine.buy_castle_defense("wooden-barricade")[0]
        assert engine.buy_castle_defense("wooden-barricade") == (False, "Wooden Barricade is already built")

    def test_heal(self, player, settings):
        """Test the town healer."""
        engine = GameEngine(player=player.model_copy(update={"hp": 90}), settings=settings)
        assert engine.heal() == (True, "Healed to full for 6 gold")
        assert engine.player.hp == 100
        assert engine.heal() == (False, "You are already at full health")

    def test_no_shopping_mid_fight(self, engine):
        """Test that gear cannot change while a fight is running."""
        assert engine.start_adventure()[0]
        before = engine.player
        assert engine.buy_weapon("rusty-sword") == (False, "Finish the current encounter first")
        assert engine.buy_armor("leather-vest") == (False, "Finish the current encounter first")
        assert engine.buy_castle_defense("wooden-barricade") == (False, "Finish the current encounter first")
        assert engine.heal() == (False, "Finish the current encounter first")
        assert engine.player is before


class TestExploration:
    """Test suite for single-event zone exploration."""

    def test_combat_event_starts_zone_fight(self, champion, settings, scripted):
        """Test that a combat roll starts a fight billed as zone combat."""
        engine = GameEngine(player=champion, settings=settings, rng=scripted([0.0, 0.0]))
        ok, intro = engine.explore_zone("whispering-forest")
        assert ok
        assert "Sewer Rat" in intro
        assert engine.encounter.context.type == "zone"
        assert engine.explore_zone("whispering-forest") == (False, "Finish the current encounter first")

        engine.combat_action(CombatAction.ATTACK)
        assert engine.encounter.outcome == CombatOutcome.VICTORY
        assert engine.player.turns_remaining == 19

    def test_treasure(self, settings, scripted):
        """Test that treasure pays out at once for one turn."""
        engine = GameEngine(settings=settings, rng=scripted([0.45, 0.0, 0.0]))
        assert engine.explore_zone("whispering-forest") == (True, "You find a hidden chest! You gain 10 gold.")
        assert engine.player.gold == 60
        assert engine.player.turns_remaining == 19
        assert not engine.is_busy

    def test_trap(self, settings, scripted):
        """Test that a trap hurts without a lingering effect."""
        engine = GameEngine(settings=settings, rng=scripted([0.65, 0.0, 0.0]))
        assert engine.explore_zone("whispering-forest")[0]
        assert engine.player.hp == 95

    def test_wandering_healer(self, player, settings, scripted):
        """Test that a hurt player pays the healer when they can."""
        hurt = player.model_copy(update={"hp": 90})
        engine = GameEngine(player=hurt, settings=settings, rng=scripted([0.75]))
        ok, message = engine.explore_zone("whispering-forest")
        assert ok
        assert message == "A wandering healer restores 10 HP for 5 gold."
        assert engine.player.hp == 100
        assert engine.player.gold == 45

    def test_zone_level_gate(self, engine):
        """Test that exploring a locked zone fails."""
        assert engine.explore_zone("crystal-caves") == (False, "Crystal Caves requires level 4")
