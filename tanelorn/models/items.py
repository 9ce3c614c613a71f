"""Equipment, relic and delve item models."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from tanelorn.models.stats import StatName


class Weapon(BaseModel):
    """Market weapon adding flat strength while equipped."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Unique weapon identifier")
    name: str = Field(description="Weapon name")
    strength_bonus: int = Field(ge=0, description="Strength added while equipped")
    cost: int = Field(ge=0, description="Price in gold")
    required_level: int = Field(ge=1, description="Minimum level to buy")


class Armor(BaseModel):
    """Market armor adding flat defense while equipped."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Unique armor identifier")
    name: str = Field(description="Armor name")
    defense_bonus: int = Field(ge=0, description="Defense added while equipped")
    cost: int = Field(ge=0, description="Price in gold")
    required_level: int = Field(ge=1, description="Minimum level to buy")


class CastleDefense(BaseModel):
    """Fortification the player can add to their castle."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Unique defense identifier")
    name: str = Field(description="Defense name")
    description: str = Field(description="Flavor text")
    cost: int = Field(ge=0, description="Price in gold")
    required_level: int = Field(ge=1, description="Minimum level to buy")


class Relic(BaseModel):
    """Permanent boss reward. Only one can be equipped at a time."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Unique relic identifier")
    name: str = Field(description="Relic name")
    description: str = Field(description="Flavor text")
    stat_bonuses: dict[StatName, int] = Field(
        default_factory=dict, description="Flat bonuses (stat: amount), missing stats are 0"
    )

    def bonus_for(self, stat: StatName) -> int:
        return self.stat_bonuses.get(stat, 0)


class DelveBuff(BaseModel):
    """Transient stat bonus that lasts until the delve ends."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    type: Literal["buff"] = "buff"
    name: str = Field(description="Buff name shown in the status bar")
    stat: StatName = Field(description="Stat being boosted")
    amount: int = Field(ge=0, description="Flat amount added to the stat")


class HealEffect(BaseModel):
    """Instant heal bought from a delve merchant."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    type: Literal["heal"] = "heal"
    amount: int = Field(ge=0, description="HP restored, capped at max HP")


DelveItemEffect = Annotated[Union[DelveBuff, HealEffect], Field(discriminator="type")]


class DelveItem(BaseModel):
    """Item sold by a merchant met during a delve."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Unique item identifier")
    name: str = Field(description="Item name")
    description: str = Field(description="Flavor text")
    cost: int = Field(ge=0, description="Price, paid from gold found during the delve")
    effect: DelveItemEffect = Field(description="Buff or heal granted on purchase")
