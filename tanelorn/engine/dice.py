"""Seedable dice roller, the single source of randomness for the engine."""

import random
from typing import MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


class DiceRoller:
    """Handles every random draw so games can be replayed from a seed."""

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Initialize the roller.

        Args:
            seed: Optional seed; None draws entropy from the OS
        """
        self.seed = seed
        self._random = random.Random(seed)

    def random(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        return self._random.random()

    def uniform_int(self, low: int, high: int) -> int:
        """
        Integer in [low, high] using floor(random * span) + low.

        Built on random() so a scripted roller only has to provide floats.
        """
        return int(self.random() * (high - low + 1)) + low

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]

    def shuffle(self, seq: MutableSequence[T]) -> None:
        """Shuffle the sequence in place."""
        self._random.shuffle(seq)
