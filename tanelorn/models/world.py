"""Zone, zone boss and castle models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from tanelorn.models.enemy import Enemy
from tanelorn.models.items import Relic


class ZoneDifficulty(str, Enum):
    """Difficulty tiers shown on the adventure board."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    DEADLY = "deadly"


class EventWeights(BaseModel):
    """Legacy single-event exploration weights (out of 100)."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    combat: int = Field(ge=0)
    treasure: int = Field(ge=0)
    trap: int = Field(ge=0)
    healer: int = Field(ge=0)
    nothing: int = Field(ge=0)


class Zone(BaseModel):
    """Explorable area. Static, never mutated."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Unique zone identifier")
    name: str = Field(description="Zone name")
    difficulty: ZoneDifficulty = Field(description="Difficulty tier")
    min_level: int = Field(ge=1, description="Minimum player level to enter")
    max_level: int = Field(ge=1, description="Upper end of the zone's level range")
    enemy_pool: list[str] = Field(
        min_length=1, description="Enemy names, ordered weakest to strongest"
    )
    event_weights: EventWeights = Field(description="Legacy exploration event weights")
    ascii: str = Field(default="", description="Display art")


class ZoneBoss(BaseModel):
    """Boss guarding the last step of a zone's delve."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    zone_id: str = Field(description="Zone this boss guards")
    enemy: Enemy = Field(description="Boss enemy template")
    relic: Relic = Field(description="Relic awarded on first clear")


class Castle(BaseModel):
    """NPC-owned castle that can be raided."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Unique castle identifier")
    name: str = Field(description="Castle name")
    owner_name: str = Field(description="NPC owner")
    boss: Enemy = Field(description="Castle lord")
    required_level: int = Field(ge=1, description="Minimum level to raid")
    turn_cost: int = Field(ge=1, default=2, description="Turns spent on a raid")
    bonus_xp_multiplier: float = Field(gt=0, description="XP reward multiplier")
    bonus_gold_multiplier: float = Field(gt=0, description="Gold reward multiplier")
    ascii: str = Field(default="", description="Display art")
