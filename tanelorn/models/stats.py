"""Player statistics models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class StatName(str, Enum):
    """Combat stats that equipment, relics and buffs can modify."""

    STRENGTH = "strength"
    DEFENSE = "defense"
    AGILITY = "agility"


class PlayerStats(BaseModel):
    """Core combat statistics."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    strength: int = Field(ge=0, description="Strength stat (damage dealt)")
    defense: int = Field(ge=0, description="Defense stat (damage mitigated)")
    agility: int = Field(ge=0, description="Agility stat (escape chance)")

    def with_bonuses(self, bonuses: dict[str, int]) -> "PlayerStats":
        """Return new stats with flat per-stat bonuses added."""
        return self.model_copy(
            update={
                stat.value: getattr(self, stat.value) + bonuses.get(stat.value, 0)
                for stat in StatName
            }
        )
