"""Action and combat models."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from tanelorn.models.enemy import Enemy
from tanelorn.models.world import Castle


class CombatAction(str, Enum):
    """Actions available on each combat turn."""

    ATTACK = "attack"
    RUN = "run"


class CombatOutcome(str, Enum):
    """Terminal states of a fight."""

    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"


class TurnResult(BaseModel):
    """Outcome of a single combat turn."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    messages: list[str] = Field(default_factory=list, description="Log lines, in order")
    player_hp: int = Field(ge=0, description="Player HP after the turn")
    enemy_hp: int = Field(ge=0, description="Enemy HP after the turn")
    outcome: Optional[CombatOutcome] = Field(
        default=None, description="Terminal outcome, None while the fight continues"
    )


class Bounty(BaseModel):
    """Bounty board quest. Regenerated on every board refresh."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Bounty identifier derived from the target name")
    target_enemy_name: str = Field(description="Enemy to defeat")
    description: str = Field(description="Flavor text")
    bonus_xp: int = Field(ge=0, description="XP added on top of the enemy reward")
    bonus_gold: int = Field(ge=0, description="Gold added on top of the enemy reward")
    required_level: int = Field(ge=1, description="Minimum level to accept")


class AdventureContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["adventure"] = "adventure"


class BountyContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["bounty"] = "bounty"
    bounty: Bounty


class ZoneContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["zone"] = "zone"
    zone_name: str


class RaidContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["raid"] = "raid"
    castle: Castle


CombatContext = Annotated[
    Union[AdventureContext, BountyContext, ZoneContext, RaidContext],
    Field(discriminator="type"),
]


class CombatEncounter(BaseModel):
    """Current fight outside a delve (if active)."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    enemy: Enemy = Field(description="Fresh enemy copy for this fight")
    context: CombatContext = Field(description="Why the fight is happening")
    player_hp: int = Field(ge=0, description="Player HP during the fight")
    enemy_hp: int = Field(ge=0, description="Enemy HP during the fight")
    combat_log: list[str] = Field(default_factory=list, description="Combat action log")
    outcome: Optional[CombatOutcome] = Field(default=None, description="Set once the fight ends")

    @property
    def is_active(self) -> bool:
        return self.outcome is None
