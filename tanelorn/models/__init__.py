"""Data models module for Tanelorn."""

# Stats
from tanelorn.models.stats import PlayerStats, StatName

# Items and Equipment
from tanelorn.models.items import (
    Armor,
    CastleDefense,
    DelveBuff,
    DelveItem,
    HealEffect,
    Relic,
    Weapon,
)

# Player
from tanelorn.models.player import PlayerState

# Enemies and World
from tanelorn.models.enemy import Enemy
from tanelorn.models.world import Castle, EventWeights, Zone, ZoneBoss, ZoneDifficulty

# Actions and Combat
from tanelorn.models.actions import (
    AdventureContext,
    Bounty,
    BountyContext,
    CombatAction,
    CombatContext,
    CombatEncounter,
    CombatOutcome,
    RaidContext,
    TurnResult,
    ZoneContext,
)

# Delve
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
    DOTEffect,
    DOTType,
    HealerEvent,
    MerchantEvent,
    NothingEvent,
    TrapEvent,
    TreasureEvent,
    ZoneEvent,
)

# Settings
from tanelorn.models.metadata import GameSettings

__all__ = [
    # Stats
    "PlayerStats",
    "StatName",
    # Items and Equipment
    "Weapon",
    "Armor",
    "CastleDefense",
    "Relic",
    "DelveBuff",
    "HealEffect",
    "DelveItem",
    # Player
    "PlayerState",
    # Enemies and World
    "Enemy",
    "Zone",
    "ZoneDifficulty",
    "EventWeights",
    "ZoneBoss",
    "Castle",
    # Actions and Combat
    "CombatAction",
    "CombatOutcome",
    "TurnResult",
    "Bounty",
    "CombatContext",
    "AdventureContext",
    "BountyContext",
    "ZoneContext",
    "RaidContext",
    "CombatEncounter",
    # Delve
    "DOTType",
    "DOTEffect",
    "CombatEvent",
    "BossEvent",
    "TrapEvent",
    "TreasureEvent",
    "BufferEvent",
    "HealerEvent",
    "MerchantEvent",
    "DelveStepEvent",
    "NothingEvent",
    "ZoneEvent",
    "DelveOutcome",
    "DelveResult",
    "DelvePhase",
    "DelveCommandType",
    "DelveCommand",
    "DelveSession",
    # Settings
    "GameSettings",
]
