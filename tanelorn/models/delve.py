"""Delve event, status effect and session models."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from tanelorn.models.actions import CombatAction
from tanelorn.models.enemy import Enemy
from tanelorn.models.items import DelveBuff, DelveItem, Relic


class DOTType(str, Enum):
    """Damage-over-time flavours."""

    POISON = "poison"
    FIRE = "fire"


class DOTEffect(BaseModel):
    """Active damage-over-time effect."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    type: DOTType = Field(description="Poison or fire")
    damage_per_step: int = Field(ge=0, description="Damage dealt on each step transition")
    remaining_steps: int = Field(ge=0, description="Ticks left before the effect expires")


# Step events


class CombatEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["combat"] = "combat"
    enemy: Enemy


class BossEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["boss"] = "boss"
    enemy: Enemy
    relic: Optional[Relic] = None


class TrapEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["trap"] = "trap"
    damage: int = Field(ge=0)
    message: str
    dot: Optional[DOTEffect] = None


class TreasureEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["treasure"] = "treasure"
    gold: int = Field(ge=0)
    message: str


class BufferEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["buffer"] = "buffer"
    buff: DelveBuff
    message: str


class HealerEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["healer"] = "healer"
    cost: int = Field(ge=0)
    heal_amount: int = Field(ge=0)


class MerchantEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["merchant"] = "merchant"
    items: list[DelveItem] = Field(default_factory=list)


DelveStepEvent = Annotated[
    Union[CombatEvent, BossEvent, TrapEvent, TreasureEvent, BufferEvent, HealerEvent, MerchantEvent],
    Field(discriminator="type"),
]


class NothingEvent(BaseModel):
    """Quiet path, only produced by single-event zone exploration."""

    model_config = ConfigDict(frozen=True)

    type: Literal["nothing"] = "nothing"
    message: str


ZoneEvent = Annotated[
    Union[CombatEvent, TreasureEvent, TrapEvent, HealerEvent, NothingEvent],
    Field(discriminator="type"),
]


# Results


class DelveOutcome(str, Enum):
    """How a delve ended."""

    CLEARED = "cleared"
    DEFEATED = "defeated"
    RETREATED = "retreated"


class DelveResult(BaseModel):
    """Summary of a finished delve, folded into the player by the accountant."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    outcome: DelveOutcome = Field(description="How the delve ended")
    gold_earned: int = Field(
        ge=0, description="Gold accumulated during the delve, before any defeat penalty"
    )
    xp_earned: int = Field(ge=0, description="XP accumulated during the delve")
    final_hp: int = Field(ge=0, description="Player HP when the delve ended")
    steps_completed: int = Field(ge=0, description="Steps fully resolved")
    relic: Optional[Relic] = Field(default=None, description="Relic won from the boss")


# Session state machine


class DelvePhase(str, Enum):
    """Screens of the delve flow."""

    DOT_TICK = "dot_tick"
    EVENT = "event"
    EVENT_RESULT = "event_result"
    COMBAT = "combat"
    CHOICE = "choice"
    BOSS_VICTORY = "boss_victory"
    DEFEAT = "defeat"
    RETREAT_SUMMARY = "retreat_summary"
    COMPLETE = "complete"


class DelveCommandType(str, Enum):
    """Player inputs accepted by the delve state machine."""

    PROCEED = "proceed"
    ATTACK = "attack"
    RUN = "run"
    BUY_ITEM = "buy_item"
    ACCEPT_HEALER = "accept_healer"
    DECLINE_HEALER = "decline_healer"
    CONTINUE = "continue"
    DELVE_DEEPER = "delve_deeper"
    RETREAT = "retreat"


class DelveCommand(BaseModel):
    """Player input for one delve transition."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    command_type: DelveCommandType = Field(description="Type of command")
    item_index: Optional[int] = Field(
        default=None, ge=0, description="Merchant item index for BUY_ITEM"
    )
    roll: Optional[float] = Field(
        default=None, ge=0, lt=1, description="Injected combat roll for ATTACK/RUN"
    )

    @property
    def combat_action(self) -> Optional[CombatAction]:
        if self.command_type == DelveCommandType.ATTACK:
            return CombatAction.ATTACK
        if self.command_type == DelveCommandType.RUN:
            return CombatAction.RUN
        return None


class DelveSession(BaseModel):
    """Ephemeral state of one delve. Never merged into the player until it completes."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    zone_id: str = Field(description="Zone being delved")
    step: int = Field(ge=1, default=1, description="Current step (1-based)")
    total_steps: int = Field(ge=1, default=6, description="Steps in the delve, the last is the boss")
    phase: DelvePhase = Field(default=DelvePhase.EVENT, description="Current screen")

    player_hp: int = Field(ge=0, description="Player HP inside the delve")
    max_hp: int = Field(ge=1, description="Player max HP, for heal caps")
    gold: int = Field(ge=0, default=0, description="Gold found so far")
    xp: int = Field(ge=0, default=0, description="XP earned so far")

    active_dots: list[DOTEffect] = Field(default_factory=list, description="Running DOT effects")
    active_buffs: list[DelveBuff] = Field(default_factory=list, description="Delve-scoped buffs")

    current_event: Optional[DelveStepEvent] = Field(default=None, description="Event at this step")
    enemy_hp: Optional[int] = Field(default=None, ge=0, description="Enemy HP during combat")
    healer_decided: bool = Field(default=False, description="Healer offer answered this step")
    acquired_relic: Optional[Relic] = Field(default=None, description="Relic taken from the boss")

    messages: list[str] = Field(default_factory=list, description="Log lines for the current screen")
    result: Optional[DelveResult] = Field(default=None, description="Set when phase is COMPLETE")

    @property
    def is_complete(self) -> bool:
        return self.phase == DelvePhase.COMPLETE
