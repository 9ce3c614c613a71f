"""Pytest configuration and fixtures."""

import pytest

from tanelorn.content.zones import get_zone
from tanelorn.engine.dice import DiceRoller
from tanelorn.engine.progression import ProgressionAccountant
from tanelorn.models.metadata import GameSettings


class ScriptedRoller(DiceRoller):
    """Roller replaying fixed draws, then repeating the last one."""

    def __init__(self, draws):
        super().__init__(seed=0)
        self._draws = list(draws)
        self._last = self._draws[-1] if self._draws else 0.0

    def random(self) -> float:
        if self._draws:
            self._last = self._draws.pop(0)
        return self._last


@pytest.fixture
def rng():
    """Seeded roller for reproducible tests."""
    return DiceRoller(seed=1234)


@pytest.fixture
def scripted():
    """Factory for rollers that replay the given draws."""
    return ScriptedRoller


@pytest.fixture
def settings():
    """Settings pinned to the stock new-player values."""
    return GameSettings(
        player_name="Tester",
        starting_hp=100,
        starting_gold=50,
        starting_turns=20,
        xp_to_next=100,
        starting_strength=10,
        starting_defense=5,
        starting_agility=7,
        delve_steps=6,
        bounty_count=4,
        rng_seed=1234,
    )


@pytest.fixture
def player(settings):
    """Fresh level 1 player."""
    return ProgressionAccountant.create_initial_player(settings)


@pytest.fixture
def forest():
    """Easiest zone."""
    return get_zone("whispering-forest")
