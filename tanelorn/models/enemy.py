"""Enemy model."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Enemy(BaseModel):
    """Enemy template. Every encounter works on a fresh copy."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    name: str = Field(description="Enemy name, unique within the bestiary")
    level: int = Field(ge=1, description="Enemy level")
    hp: int = Field(ge=0, description="Starting health points")
    max_hp: int = Field(ge=1, description="Maximum health points")
    strength: int = Field(ge=0, description="Strength stat")
    defense: int = Field(ge=0, description="Defense stat")
    agility: int = Field(ge=0, description="Agility stat")
    xp_reward: int = Field(ge=0, description="Experience granted on defeat")
    gold_reward: int = Field(ge=0, description="Gold granted on defeat")
    ascii: str = Field(default="", description="Display art")

    @model_validator(mode="before")
    @classmethod
    def default_max_hp(cls, data):
        """Templates are authored with hp only; max_hp starts equal to it."""
        if isinstance(data, dict) and "max_hp" not in data and "hp" in data:
            return {**data, "max_hp": data["hp"]}
        return data

    def fresh_copy(self) -> "Enemy":
        """Copy for a new encounter, at full health."""
        return self.model_copy(update={"hp": self.max_hp})
