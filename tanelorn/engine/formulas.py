"""Damage, escape and weighted-selection formulas."""

import math
from typing import Optional, Sequence, TypeVar

from tanelorn.engine.dice import DiceRoller

T = TypeVar("T")

RUN_CHANCE_FLOOR = 0.1
RUN_CHANCE_SPAN = 0.8  # chance always lands in (0.1, 0.9)


class CombatFormulas:
    """Pure formulas shared by combat and delve generation."""

    @staticmethod
    def calculate_damage(strength: int, defense: int, roll: float) -> int:
        """
        Damage dealt by one blow.

        Args:
            strength: Attacker strength
            defense: Defender defense
            roll: Uniform draw in [0, 1)

        Returns:
            floor(strength * (0.5 + roll) - defense * 0.5), never below 1
        """
        raw = math.floor(strength * (0.5 + roll) - defense * 0.5)
        return max(1, raw)

    @staticmethod
    def run_chance(self_agility: int, opponent_agility: int) -> float:
        """Probability of escaping a fight."""
        total = self_agility + opponent_agility
        if total <= 0:
            # Neither side can move, even odds
            return RUN_CHANCE_FLOOR + RUN_CHANCE_SPAN * 0.5
        return RUN_CHANCE_FLOOR + RUN_CHANCE_SPAN * (self_agility / total)

    @staticmethod
    def check_run_success(self_agility: int, opponent_agility: int, roll: float) -> bool:
        """True if the roll beats the escape chance."""
        return roll < CombatFormulas.run_chance(self_agility, opponent_agility)

    @staticmethod
    def weighted_select(
        entries: Sequence[tuple[int, T]],
        roll: Optional[int] = None,
        rng: Optional[DiceRoller] = None,
    ) -> T:
        """
        Pick a value with probability proportional to its weight.

        Args:
            entries: (weight, value) pairs; ties resolve in list order
            roll: Optional integer roll in [0, total weight)
            rng: Roller used when no roll is given

        Returns:
            Value of the first entry whose cumulative weight exceeds the roll
        """
        if not entries:
            raise ValueError("Cannot select from an empty weight table")

        if roll is None:
            total_weight = sum(weight for weight, _ in entries)
            roll = math.floor((rng or DiceRoller()).random() * total_weight)

        remaining = roll
        for weight, value in entries:
            remaining -= weight
            if remaining < 0:
                return value

        # Unreachable with integer weights and a floored roll
        return entries[-1][1]
