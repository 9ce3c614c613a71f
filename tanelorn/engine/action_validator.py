"""Action validation system."""

from tanelorn.config import DEFAULT_ENCOUNTER_TURN_COST
from tanelorn.models.actions import Bounty
from tanelorn.models.player import PlayerState
from tanelorn.models.world import Castle, Zone


class ActionValidator:
    """Validates player actions against game rules before any state changes."""

    @staticmethod
    def validate_adventure(player: PlayerState) -> tuple[bool, str]:
        """
        Validate starting a random adventure fight.

        Args:
            player: Current player

        Returns:
            Tuple of (is_valid, error_message)
        """
        return ActionValidator._check_turns(player, DEFAULT_ENCOUNTER_TURN_COST)

    @staticmethod
    def validate_bounty(player: PlayerState, bounty: Bounty) -> tuple[bool, str]:
        """Validate accepting a bounty."""
        if player.level < bounty.required_level:
            return False, f"Bounty requires level {bounty.required_level}"
        return ActionValidator._check_turns(player, DEFAULT_ENCOUNTER_TURN_COST)

    @staticmethod
    def validate_raid(player: PlayerState, castle: Castle) -> tuple[bool, str]:
        """Validate raiding a castle."""
        if player.level < castle.required_level:
            return False, f"{castle.name} requires level {castle.required_level}"
        return ActionValidator._check_turns(player, castle.turn_cost)

    @staticmethod
    def validate_delve(player: PlayerState, zone: Zone) -> tuple[bool, str]:
        """Validate entering a zone for a delve."""
        if player.level < zone.min_level:
            return False, f"{zone.name} requires level {zone.min_level}"
        return ActionValidator._check_turns(player, 1)

    @staticmethod
    def validate_explore(player: PlayerState, zone: Zone) -> tuple[bool, str]:
        """Validate a single exploration of a zone."""
        if player.level < zone.min_level:
            return False, f"{zone.name} requires level {zone.min_level}"
        return ActionValidator._check_turns(player, DEFAULT_ENCOUNTER_TURN_COST)

    @staticmethod
    def _check_turns(player: PlayerState, cost: int) -> tuple[bool, str]:
        if player.turns_remaining < cost:
            return False, f"Not enough turns (need {cost}, have {player.turns_remaining})"
        return True, ""
