"""Dice rolling for battle resolution.

Every random number in an encounter comes from a DiceRoller: damage rolls
go through the d20 library as ``1dN`` expressions, and candidate draws or
random actor picks use the same seeded source.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

import d20

from jobquest.core.exceptions import DiceRollError
from jobquest.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class DiceRoller:
    """Random source for the engine.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> 1 <= roller.roll_die(20) <= 20
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            # d20 draws from the module-level generator
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll_die(self, sides: int) -> int:
        """Roll a single die, uniform over [1, sides].

        Args:
            sides: Number of faces (>= 1).

        Returns:
            The rolled value.

        Raises:
            DiceRollError: If ``sides`` is below 1.
        """
        if sides < 1:
            raise DiceRollError(
                f"A die needs at least one side, got {sides}",
                expression=f"1d{sides}",
            )

        expression = f"1d{sides}"
        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(f"Invalid dice expression: {exc}", expression=expression) from exc

        logger.debug("Dice rolled", expression=expression, total=result.total)
        return result.total

    def choice(self, options: Sequence[T]) -> T:
        """Pick one element uniformly.

        Raises:
            DiceRollError: If ``options`` is empty.
        """
        if not options:
            raise DiceRollError("Cannot choose from an empty sequence")
        return random.choice(options)

    def sample(self, options: Sequence[T], count: int) -> list[T]:
        """Draw up to ``count`` distinct elements in random order."""
        return random.sample(list(options), min(count, len(options)))


__all__ = [
    "DiceRoller",
]
