"""Player model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tanelorn.models.items import Armor, CastleDefense, Relic, Weapon
from tanelorn.models.stats import PlayerStats


class PlayerState(BaseModel):
    """Complete persistent player information.

    Base stats only: equipment, relic and delve buffs are folded in by
    StatCalculator whenever effective stats are needed.
    """

    model_config = ConfigDict(frozen=True)  # Immutable model

    name: str = Field(description="Player name")
    level: int = Field(ge=1, default=1, description="Player level")

    hp: int = Field(ge=0, description="Current health points")
    max_hp: int = Field(ge=1, description="Maximum health points")
    xp: int = Field(ge=0, default=0, description="Experience towards the next level")
    xp_to_next: int = Field(ge=1, description="Experience needed for the next level")

    gold: int = Field(ge=0, default=0, description="Gold carried")
    turns_remaining: int = Field(ge=0, description="Actions left this session")

    stats: PlayerStats = Field(description="Base stats (Strength, Defense, Agility)")

    # Equipment
    weapon: Optional[Weapon] = Field(default=None, description="Equipped weapon")
    armor: Optional[Armor] = Field(default=None, description="Equipped armor")
    relic: Optional[Relic] = Field(default=None, description="Equipped relic (single slot)")
    castle_defenses: list[CastleDefense] = Field(
        default_factory=list, description="Owned castle fortifications"
    )

    # Progression
    cleared_bosses: list[str] = Field(
        default_factory=list, description="Zone ids whose boss has been defeated"
    )

    @model_validator(mode="after")
    def check_hp_bounds(self) -> "PlayerState":
        """HP may never exceed max HP."""
        if self.hp > self.max_hp:
            raise ValueError(f"hp {self.hp} exceeds max_hp {self.max_hp}")
        return self

    def has_cleared(self, zone_id: str) -> bool:
        return zone_id in self.cleared_bosses

    def owns_defense(self, defense_id: str) -> bool:
        return any(d.id == defense_id for d in self.castle_defenses)
