"""Game settings model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tanelorn.config import (
    DEFAULT_BOUNTY_COUNT,
    DEFAULT_DELVE_STEPS,
    DEFAULT_PLAYER_NAME,
    DEFAULT_RNG_SEED,
    DEFAULT_STARTING_AGILITY,
    DEFAULT_STARTING_DEFENSE,
    DEFAULT_STARTING_GOLD,
    DEFAULT_STARTING_HP,
    DEFAULT_STARTING_STRENGTH,
    DEFAULT_STARTING_TURNS,
    DEFAULT_XP_TO_NEXT,
)


class GameSettings(BaseModel):
    """Game settings, defaulting to the environment-driven config."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    player_name: str = Field(default=DEFAULT_PLAYER_NAME, description="New player name")
    starting_hp: int = Field(default=DEFAULT_STARTING_HP, ge=1, description="New player max HP")
    starting_gold: int = Field(default=DEFAULT_STARTING_GOLD, ge=0, description="New player gold")
    starting_turns: int = Field(default=DEFAULT_STARTING_TURNS, ge=0, description="Turns per session")
    xp_to_next: int = Field(default=DEFAULT_XP_TO_NEXT, ge=1, description="XP for level 2")
    starting_strength: int = Field(default=DEFAULT_STARTING_STRENGTH, ge=0)
    starting_defense: int = Field(default=DEFAULT_STARTING_DEFENSE, ge=0)
    starting_agility: int = Field(default=DEFAULT_STARTING_AGILITY, ge=0)

    delve_steps: int = Field(default=DEFAULT_DELVE_STEPS, ge=1, description="Steps per delve")
    bounty_count: int = Field(default=DEFAULT_BOUNTY_COUNT, ge=0, description="Bounties on the board")

    rng_seed: Optional[int] = Field(
        default=DEFAULT_RNG_SEED, description="Seed for deterministic replay, None for entropy"
    )
