"""Level progression rules.

The threshold to leave a level is ``level * EXPERIENCE_PER_LEVEL``.
Experience overflow carries into the next level, so a single large
reward may raise several levels at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from jobquest.core.constants import EXPERIENCE_PER_LEVEL, STARTING_LEVEL


def experience_to_next_level(level: int) -> int:
    """Get the experience needed to leave ``level``."""
    return max(STARTING_LEVEL, level) * EXPERIENCE_PER_LEVEL


@dataclass(frozen=True)
class ProgressionResult:
    """Outcome of crediting experience.

    Attributes:
        level: Level after resolution.
        experience: Experience remaining toward the next level.
        levels_gained: Each new level reached, in order.
    """

    level: int
    experience: int
    levels_gained: list[int] = field(default_factory=list)


def apply_experience(level: int, experience: int, gained: int) -> ProgressionResult:
    """Credit experience and resolve any level-ups.

    Args:
        level: Current level (>= 1).
        experience: Current experience toward the next level.
        gained: Non-negative experience to add.

    Returns:
        ProgressionResult with the remainder strictly below the new threshold.

    Raises:
        ValueError: If ``gained`` is negative.
    """
    if gained < 0:
        raise ValueError(f"Experience gained must be non-negative, got {gained}")

    new_level = level
    new_experience = experience + gained
    levels_gained: list[int] = []

    # Each pass subtracts a positive threshold, so the loop terminates
    threshold = experience_to_next_level(new_level)
    while new_experience >= threshold:
        new_experience -= threshold
        new_level += 1
        levels_gained.append(new_level)
        threshold = experience_to_next_level(new_level)

    return ProgressionResult(
        level=new_level,
        experience=new_experience,
        levels_gained=levels_gained,
    )


def split_reward(reward: int, party_size: int) -> int:
    """Get each member's share of a reward; the remainder is dropped."""
    if party_size <= 0:
        return 0
    return reward // party_size


__all__ = [
    "ProgressionResult",
    "apply_experience",
    "experience_to_next_level",
    "split_reward",
]
