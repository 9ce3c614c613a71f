"""Tests for static content tables and lookups."""

import pytest

from tanelorn.content.castles import NPC_CASTLES, get_available_castles, get_castle
from tanelorn.content.delve import ZONE_BOSSES, get_zone_boss, get_zone_merchant_items
from tanelorn.content.enemies import (
    ENEMIES,
    get_enemies_in_level_range,
    get_enemy_by_name,
    get_nearest_level_enemy,
    get_random_encounter,
)
from tanelorn.content.market import ARMORS, CASTLE_DEFENSES, WEAPONS, get_weapon
from tanelorn.content.zones import (
    TREASURE_MESSAGES,
    ZONES,
    generate_zone_event,
    get_available_zones,
    get_zone,
)
from tanelorn.models.delve import CombatEvent, HealerEvent, NothingEvent, TrapEvent, TreasureEvent
from tanelorn.models.items import HealEffect


class TestEnemies:
    """Test suite for the bestiary."""

    def test_ten_enemies_by_level(self):
        """Test the bestiary covers levels 1 to 10."""
        assert [e.level for e in ENEMIES] == list(range(1, 11))

    def test_lookup_returns_fresh_copy(self):
        """Test that lookups hand out full-health copies."""
        rat = get_enemy_by_name("Sewer Rat")
        assert rat.hp == rat.max_hp == 30
        assert (rat.strength, rat.defense, rat.agility) == (5, 2, 4)

    def test_unknown_enemy_raises(self):
        """Test that a missing name is an error."""
        with pytest.raises(ValueError, match="Dragon King"):
            get_enemy_by_name("Dragon King")

    def test_level_range(self):
        """Test the inclusive level filter."""
        names = [e.name for e in get_enemies_in_level_range(2, 3)]
        assert names == ["Goblin Runt", "Orc Grunt"]

    def test_random_encounter_range(self, rng):
        """Test that encounters sit near the player's level."""
        for _ in range(50):
            assert 2 <= get_random_encounter(3, rng).level <= 6

    def test_random_encounter_nearest_fallback(self, rng):
        """Test the fallback beyond the bestiary."""
        assert get_random_encounter(20, rng).name == "Shadow Knight"
        assert get_nearest_level_enemy(0).name == "Sewer Rat"


class TestZones:
    """Test suite for zones and the single-event explorer."""

    def test_five_zones(self):
        """Test the zone table."""
        assert [z.id for z in ZONES] == [
            "whispering-forest",
            "sunken-dungeon",
            "crystal-caves",
            "darkwood-swamp",
            "abyssal-depths",
        ]

    def test_available_zones(self):
        """Test gating on min level."""
        assert [z.id for z in get_available_zones(3)] == ["whispering-forest", "sunken-dungeon"]

    def test_unknown_zone_raises(self):
        """Test that a missing id is an error."""
        with pytest.raises(ValueError):
            get_zone("moon")

    def test_explore_combat(self, forest, scripted):
        """Test a combat roll."""
        event = generate_zone_event(forest, 2, scripted([0.0, 0.0]))
        assert isinstance(event, CombatEvent)
        assert event.enemy.name == "Sewer Rat"

    def test_explore_treasure(self, forest, scripted):
        """Test a treasure roll."""
        event = generate_zone_event(forest, 2, scripted([0.45, 0.0, 0.0]))
        assert event == TreasureEvent(gold=10, message=TREASURE_MESSAGES[0])

    def test_explore_trap_has_no_dot(self, forest, scripted):
        """Test that exploring traps never poison."""
        event = generate_zone_event(forest, 2, scripted([0.65, 0.0, 0.0]))
        assert isinstance(event, TrapEvent)
        assert event.damage == 5
        assert event.dot is None

    def test_explore_healer_scales_with_level(self, forest, scripted):
        """Test the healer's level-based price."""
        event = generate_zone_event(forest, 2, scripted([0.75]))
        assert event == HealerEvent(cost=10, heal_amount=30)

    def test_explore_nothing(self, forest, scripted):
        """Test a quiet roll."""
        assert isinstance(generate_zone_event(forest, 2, scripted([0.95, 0.0])), NothingEvent)

    def test_zero_weight_healer_never_appears(self, rng):
        """Test that the abyss never offers a healer."""
        abyss = get_zone("abyssal-depths")
        for _ in range(200):
            assert not isinstance(generate_zone_event(abyss, 9, rng), HealerEvent)


class TestDelveContent:
    """Test suite for zone bosses and merchants."""

    def test_every_zone_has_a_boss_and_merchant(self):
        """Test that bosses and stock cover every zone."""
        for zone in ZONES:
            assert zone.id in ZONE_BOSSES
            assert len(get_zone_merchant_items(zone.id)) == 3

    def test_cleared_boss_is_gone(self):
        """Test that beaten bosses are not offered again."""
        assert get_zone_boss("sunken-dungeon", ["sunken-dungeon"]) is None
        boss = get_zone_boss("sunken-dungeon", [])
        assert boss.enemy.name == "Drowned King"
        assert boss.relic.id == "tidal-amulet"

    def test_unknown_zone_has_nothing(self):
        """Test lookups for zones without content."""
        assert get_zone_boss("moon") is None
        assert get_zone_merchant_items("moon") == []

    def test_merchant_heals(self):
        """Test that the forest salve heals."""
        salve = get_zone_merchant_items("whispering-forest")[1]
        assert salve.effect == HealEffect(amount=15)


class TestCastles:
    """Test suite for NPC castles."""

    def test_four_castles_cost_two_turns(self):
        """Test the castle table."""
        assert len(NPC_CASTLES) == 4
        assert all(castle.turn_cost == 2 for castle in NPC_CASTLES)

    def test_available_castles(self):
        """Test gating on required level."""
        assert [c.id for c in get_available_castles(4)] == ["goblin-stockade", "bone-citadel"]
        assert get_available_castles(1) == []

    def test_lookup(self):
        """Test lookup by id."""
        assert get_castle("shadow-keep").boss.name == "The Dark Lord"
        with pytest.raises(ValueError):
            get_castle("sand-castle")


class TestMarketCatalogs:
    """Test suite for the market tables."""

    def test_catalog_sizes(self):
        """Test the number of goods."""
        assert (len(WEAPONS), len(ARMORS), len(CASTLE_DEFENSES)) == (5, 5, 4)

    def test_lookup(self):
        """Test lookup by id."""
        assert get_weapon("dragon-fang").strength_bonus == 18
        with pytest.raises(ValueError):
            get_weapon("spoon")
