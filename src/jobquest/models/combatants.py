"""Pydantic V2 schemas for live battle participants.

Combatant and EnemyInstance are the only mutable records the engine
touches during an encounter. All hit point changes go through methods
that clamp to [0, max].
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from jobquest.core.constants import STARTING_LEVEL
from jobquest.models.definitions import EnemyDefinition, JobDefinition
from jobquest.models.progression import (
    ProgressionResult,
    apply_experience,
    experience_to_next_level,
)


class Combatant(BaseModel):
    """Player-controlled party member derived from a job.

    Attributes:
        job: The originating job definition.
        current_hp: Current hit points (0..max_hp).
        max_hp: Maximum hit points.
        attack: Physical attack power.
        defense: Defense.
        magic: Magic power.
        level: Current level (>= 1).
        experience: Experience toward the next level.
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
    )

    job: JobDefinition = Field(description="Originating job")
    current_hp: Annotated[int, Field(ge=0, description="Current HP")]
    max_hp: Annotated[int, Field(ge=1, description="Maximum HP")]
    attack: Annotated[int, Field(ge=0, description="Attack power")]
    defense: Annotated[int, Field(ge=0, description="Defense")]
    magic: Annotated[int, Field(ge=0, description="Magic power")]
    level: Annotated[int, Field(ge=1, description="Level")] = STARTING_LEVEL
    experience: Annotated[int, Field(ge=0, description="Experience")] = 0

    @model_validator(mode="after")
    def validate_hp_bounds(self) -> "Combatant":
        """Reject current HP above max HP."""
        if self.current_hp > self.max_hp:
            raise ValueError(
                f"current_hp ({self.current_hp}) cannot exceed max_hp ({self.max_hp})"
            )
        return self

    @classmethod
    def from_job(cls, job: JobDefinition) -> "Combatant":
        """Create a fresh level 1 combatant at full HP."""
        return cls(
            job=job,
            current_hp=job.hp,
            max_hp=job.hp,
            attack=job.attack,
            defense=job.defense,
            magic=job.magic,
        )

    @property
    def id(self) -> str:
        """Party member id (the job id)."""
        return self.job.id

    @property
    def name(self) -> str:
        """Display name (the job name)."""
        return self.job.name

    @computed_field  # type: ignore[prop-decorator]
    @property
    def experience_to_next_level(self) -> int:
        """Experience needed to leave the current level."""
        return experience_to_next_level(self.level)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_alive(self) -> bool:
        """Whether the combatant can still act."""
        return self.current_hp > 0

    @property
    def is_full_hp(self) -> bool:
        """Whether the combatant is at maximum HP."""
        return self.current_hp >= self.max_hp

    def take_damage(self, amount: int) -> int:
        """Reduce HP, clamped at 0.

        Returns:
            HP actually lost.
        """
        new_hp = max(0, self.current_hp - max(0, amount))
        lost = self.current_hp - new_hp
        self.current_hp = new_hp
        return lost

    def restore_hp(self, amount: int) -> int:
        """Increase HP, clamped at max_hp.

        Returns:
            HP actually restored.
        """
        new_hp = min(self.max_hp, self.current_hp + max(0, amount))
        restored = new_hp - self.current_hp
        self.current_hp = new_hp
        return restored

    def restore_full(self) -> None:
        """Restore HP to maximum."""
        self.current_hp = self.max_hp

    def gain_experience(self, amount: int) -> ProgressionResult:
        """Credit experience and apply any level-ups."""
        result = apply_experience(self.level, self.experience, amount)
        self.experience = result.experience
        self.level = result.level
        return result


class EnemyInstance(BaseModel):
    """Live copy of an enemy bound to one encounter.

    Attributes:
        definition: The enemy definition.
        current_hp: Current hit points (0..definition.hp).
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
    )

    definition: EnemyDefinition = Field(description="Enemy definition")
    current_hp: Annotated[int, Field(ge=0, description="Current HP")]

    @model_validator(mode="after")
    def validate_hp_bounds(self) -> "EnemyInstance":
        """Reject current HP above the definition's HP."""
        if self.current_hp > self.definition.hp:
            raise ValueError(
                f"current_hp ({self.current_hp}) cannot exceed max hp ({self.definition.hp})"
            )
        return self

    @classmethod
    def spawn(cls, definition: EnemyDefinition) -> "EnemyInstance":
        """Create a live instance at full HP."""
        return cls(definition=definition, current_hp=definition.hp)

    @property
    def name(self) -> str:
        """Display name."""
        return self.definition.name

    @property
    def max_hp(self) -> int:
        """Maximum HP."""
        return self.definition.hp

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_alive(self) -> bool:
        """Whether the enemy is still standing."""
        return self.current_hp > 0

    def take_damage(self, amount: int) -> int:
        """Reduce HP, clamped at 0.

        Returns:
            HP actually lost.
        """
        new_hp = max(0, self.current_hp - max(0, amount))
        lost = self.current_hp - new_hp
        self.current_hp = new_hp
        return lost


__all__ = [
    "Combatant",
    "EnemyInstance",
]
