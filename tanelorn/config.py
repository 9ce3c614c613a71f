"""Central configuration defaults and constants for Tanelorn."""

import os

# New Player Defaults
DEFAULT_PLAYER_NAME = os.getenv("TANELORN_PLAYER_NAME", "Adventurer")
DEFAULT_STARTING_HP = int(os.getenv("TANELORN_STARTING_HP", "100"))
DEFAULT_STARTING_GOLD = int(os.getenv("TANELORN_STARTING_GOLD", "50"))
DEFAULT_STARTING_TURNS = int(os.getenv("TANELORN_STARTING_TURNS", "20"))
DEFAULT_XP_TO_NEXT = int(os.getenv("TANELORN_XP_TO_NEXT", "100"))
DEFAULT_STARTING_STRENGTH = int(os.getenv("TANELORN_STARTING_STRENGTH", "10"))
DEFAULT_STARTING_DEFENSE = int(os.getenv("TANELORN_STARTING_DEFENSE", "5"))
DEFAULT_STARTING_AGILITY = int(os.getenv("TANELORN_STARTING_AGILITY", "7"))

# Encounter Defaults
DEFAULT_DELVE_STEPS = int(os.getenv("TANELORN_DELVE_STEPS", "6"))
DEFAULT_ENCOUNTER_TURN_COST = int(os.getenv("TANELORN_ENCOUNTER_TURN_COST", "1"))
DEFAULT_BOUNTY_COUNT = int(os.getenv("TANELORN_BOUNTY_COUNT", "4"))

# Raids
RAID_TURN_COST = 2

# Leveling
# Applied once per level-up, never in a loop
LEVEL_UP_XP_MULTIPLIER = 1.5
LEVEL_UP_MAX_HP_GAIN = 10
LEVEL_UP_STAT_GAINS = {"strength": 2, "defense": 1, "agility": 1}

# Penalties
DEFEAT_HP_FRACTION = 0.5  # Ordinary combat defeat leaves the player at half health
DELVE_DEFEAT_GOLD_FRACTION = 0.5

# RNG seed - unset means entropy from the OS
_rng_seed_env = os.getenv("TANELORN_RNG_SEED")
DEFAULT_RNG_SEED = int(_rng_seed_env) if _rng_seed_env else None

# Logging
DEFAULT_LOG_LEVEL = os.getenv("TANELORN_LOG_LEVEL", "INFO").upper()
DEFAULT_LOG_FORMAT = os.getenv("TANELORN_LOG_FORMAT", "[%(name)-26s - %(levelname)5s] %(message)s")
