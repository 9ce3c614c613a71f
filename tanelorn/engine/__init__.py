"""Game engine package."""

from tanelorn.engine.combat import CombatSystem
from tanelorn.engine.dice import DiceRoller
from tanelorn.engine.formulas import CombatFormulas
from tanelorn.engine.stat_calculator import StatCalculator
from tanelorn.engine.status_effects import StatusEffectEngine

# Modules below read static content, which itself imports the dice roller,
# so they are imported lazily
_LAZY_EXPORTS = {
    "ActionValidator": "tanelorn.engine.action_validator",
    "DelveGenerator": "tanelorn.engine.delve",
    "DelveSessionMachine": "tanelorn.engine.delve_session",
    "GameEngine": "tanelorn.engine.game_engine",
    "MarketManager": "tanelorn.engine.market",
    "ProgressionAccountant": "tanelorn.engine.progression",
    "generate_bounties": "tanelorn.engine.bounties",
    "get_target_enemy": "tanelorn.engine.bounties",
}

__all__ = [
    "ActionValidator",
    "CombatFormulas",
    "CombatSystem",
    "DelveGenerator",
    "DelveSessionMachine",
    "DiceRoller",
    "GameEngine",
    "MarketManager",
    "ProgressionAccountant",
    "StatCalculator",
    "StatusEffectEngine",
    "generate_bounties",
    "get_target_enemy",
]


def __getattr__(name: str):
    """Lazy import for content-backed systems to avoid circular imports."""
    if name in _LAZY_EXPORTS:
        import importlib

        return getattr(importlib.import_module(_LAZY_EXPORTS[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
